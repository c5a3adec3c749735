# Data models for quiz requests, validated questions and responses
# quizgen/models/quiz.py
from pydantic import BaseModel, Field, StrictStr
from typing import List, Literal, Optional

class QuizRequest(BaseModel):
    certification: StrictStr = Field(min_length=1)

class ValidatedQuestion(BaseModel):
    text: str = Field(max_length=200)
    options: List[str]
    correct: Literal["A", "B", "C", "D"]
    explanation: str = Field(default="", max_length=200)

class QuizResponse(BaseModel):
    questions: List[ValidatedQuestion]

class ErrorResponse(BaseModel):
    error: str
    diagnostic: Optional[str] = None
    stack: Optional[str] = None
