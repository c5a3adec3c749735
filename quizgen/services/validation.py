# Pure sanitizers and validators turning raw model questions into ValidatedQuestion objects
# quizgen/services/validation.py
from typing import Any, List, Optional

from quizgen.models.quiz import ValidatedQuestion
from quizgen.services.certification_policy import CertificationPolicy, DEFAULT_POLICY

MAX_TEXT_LENGTH = 200
MIN_TEXT_LENGTH = 10
MAX_OPTIONS = 4
MAX_OPTION_LENGTH = 150
MIN_OPTION_LENGTH = 4
INVALID_OPTION = "Invalid option"
VALID_ANSWERS = ("A", "B", "C", "D")
DEFAULT_ANSWER = "A"


def sanitize_text(text: Any, fallback: str) -> str:
    """
    Trims and truncates free text to 200 characters.
    Non-strings and strings under 10 characters (after trimming) yield the fallback.
    """
    if not isinstance(text, str):
        return fallback
    stripped = text.strip()
    if len(stripped) < MIN_TEXT_LENGTH:
        return fallback
    return stripped[:MAX_TEXT_LENGTH].strip()


def validate_options(options: Any) -> List[str]:
    """Keeps the first four options, coerced to strings of 4-150 characters."""
    if not isinstance(options, list):
        return []
    cleaned = []
    for option in options[:MAX_OPTIONS]:
        value = option if isinstance(option, str) else INVALID_OPTION
        value = value[:MAX_OPTION_LENGTH]
        if len(value) >= MIN_OPTION_LENGTH:
            cleaned.append(value)
    return cleaned


def validate_correct_answer(correct: Any) -> str:
    # "b) answer" -> "B"; anything unrecognised -> "A"
    first_char = str(correct).upper()[:1]
    return first_char if first_char in VALID_ANSWERS else DEFAULT_ANSWER


def validate_question(raw: Any, index: int, policy: CertificationPolicy = DEFAULT_POLICY) -> Optional[ValidatedQuestion]:
    """
    Sanitizes one raw question from the model.
    Returns None when it has too few options for the policy or its text is not a question.
    """
    if not isinstance(raw, dict):
        raw = {}

    text = sanitize_text(raw.get("text"), f"Question {index + 1}")
    options = validate_options(raw.get("options"))

    if len(options) < policy.min_options or "?" not in text:
        return None

    if policy.placeholder_option and len(options) == policy.min_options < MAX_OPTIONS:
        options.append(policy.placeholder_option)

    return ValidatedQuestion(
        text=text,
        options=options,
        correct=validate_correct_answer(raw.get("correct")),
        explanation=sanitize_text(raw.get("explanation"), ""),
    )


def validate_questions(raw_questions: List[Any], policy: CertificationPolicy = DEFAULT_POLICY) -> List[ValidatedQuestion]:
    """Validates raw questions in order, dropping the ones that fail."""
    validated = []
    for index, raw in enumerate(raw_questions):
        question = validate_question(raw, index, policy)
        if question is not None:
            validated.append(question)
    return validated
