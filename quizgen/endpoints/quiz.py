# Endpoint that generates a validated multiple-choice quiz for a certification
# quizgen/endpoints/quiz.py
from fastapi import APIRouter, Depends

from quizgen.models.quiz import ErrorResponse, QuizRequest, QuizResponse
from quizgen.services.quiz_generator import QuizGenerator, quiz_generator
from quizgen.utils.exceptions import QUIZ_PATH
from quizgen.utils.logger import logger

router = APIRouter()

def get_quiz_generator() -> QuizGenerator:
    return quiz_generator

@router.post(
    QUIZ_PATH,
    response_model=QuizResponse,
    responses={400: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
)
async def generate_quiz(request: QuizRequest, generator: QuizGenerator = Depends(get_quiz_generator)):
    logger.info(f"Quiz requested for certification '{request.certification}'")
    # InsufficientResults propagates to the registered exception handler
    questions = await generator.generate(request.certification)
    return QuizResponse(questions=questions)
