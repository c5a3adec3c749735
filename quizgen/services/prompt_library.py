# quizgen/services/prompt_library.py
import time
import uuid

from langchain_core.prompts import PromptTemplate

QUIZ_PROMPT = PromptTemplate.from_template(
    """
Generate {question_count} NEW multiple-choice questions for the {certification} exam.
Request ID: {nonce} (do not repeat questions from earlier requests).

STRICTLY FOLLOW:
1. Valid JSON with double quotes
2. No markdown or extra text
3. Exactly 4 options per question
4. Correct answer as A/B/C/D
5. Escape special characters with \\
6. Every question text ends with a question mark

{{
  "questions": [
    {{
      "text": "Question text?",
      "options": ["A) ...", "B) ...", "C) ...", "D) ..."],
      "correct": "A",
      "explanation": "Brief explanation"
    }}
  ]
}}
"""
)


def make_nonce() -> str:
    """Per-attempt token: epoch milliseconds plus a random suffix."""
    return f"{int(time.time() * 1000)}-{uuid.uuid4().hex[:8]}"


def build_quiz_prompt(certification: str, nonce: str, question_count: int = 5) -> str:
    return QUIZ_PROMPT.format(
        certification=certification,
        nonce=nonce,
        question_count=question_count,
    )
