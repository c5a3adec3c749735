# Retry loop that prompts the model, repairs its JSON and keeps the last attempt's valid questions
# quizgen/services/quiz_generator.py
import asyncio
from typing import Any, Callable, List, Optional

from quizgen.models.generation import GenerationRequest
from quizgen.models.quiz import ValidatedQuestion
from quizgen.services.certification_policy import get_certification_policy
from quizgen.services.llm_client import ModelClient, generate_text
from quizgen.services.output_parser import excerpt, repair_and_parse
from quizgen.services.prompt_library import build_quiz_prompt, make_nonce
from quizgen.services.validation import validate_questions
from quizgen.utils.config import Settings, settings as default_settings
from quizgen.utils.exceptions import (
    ConfigurationError,
    InsufficientResults,
    MalformedOutput,
    ModelUnavailable,
)
from quizgen.utils.logger import logger

RepairFunction = Callable[[str], Any]


class QuizGenerator:
    """
    Collects validated questions for a certification from an unreliable model.

    Attempts run one after another. Each attempt that parses replaces the held
    question set instead of adding to it, so the last parsed attempt wins.
    """

    def __init__(
        self,
        model_client: ModelClient = generate_text,
        repair: RepairFunction = repair_and_parse,
        nonce_factory: Callable[[], str] = make_nonce,
        settings: Settings = default_settings,
    ):
        self.model_client = model_client
        self.repair = repair
        self.nonce_factory = nonce_factory
        self.settings = settings

    async def generate(self, certification: str) -> List[ValidatedQuestion]:
        target = self.settings.quiz_target_questions
        policy = get_certification_policy(certification)
        questions: List[ValidatedQuestion] = []
        last_raw_text: Optional[str] = None

        for attempt in range(1, self.settings.quiz_max_attempts + 1):
            logger.info(f"Quiz generation attempt {attempt}/{self.settings.quiz_max_attempts} for '{certification}'")
            try:
                raw_text = await self._request_text(certification)
                last_raw_text = raw_text
                raw_questions = self._parse_questions(raw_text)
            except (ModelUnavailable, MalformedOutput) as e:
                logger.warning(f"Attempt {attempt} discarded: {e.message}")
                if e.diagnostic:
                    logger.debug(f"Attempt {attempt} raw output: {e.diagnostic}")
                continue

            questions = validate_questions(raw_questions, policy)[:target]
            logger.info(f"Attempt {attempt} produced {len(questions)} valid questions")
            if len(questions) >= target:
                break

        if len(questions) < self.settings.quiz_min_questions:
            raise InsufficientResults(
                f"Only {len(questions)} valid questions generated",
                diagnostic=excerpt(last_raw_text, self.settings.diagnostic_excerpt_chars),
            )
        return questions

    async def _request_text(self, certification: str) -> str:
        request = GenerationRequest(
            prompt=build_quiz_prompt(certification, self.nonce_factory(), self.settings.quiz_target_questions),
            max_output_tokens=self.settings.max_output_tokens,
            temperature=self.settings.temperature,
            top_p=self.settings.top_p,
        )
        try:
            result = await asyncio.wait_for(
                self.model_client(request),
                timeout=self.settings.model_timeout_seconds,
            )
        except asyncio.TimeoutError:
            raise ModelUnavailable(f"Model call timed out after {self.settings.model_timeout_seconds}s")
        except ConfigurationError:
            raise
        except Exception as e:
            raise ModelUnavailable(f"Model call failed: {e}") from e

        if result is None or not result.text or not result.text.strip():
            raise ModelUnavailable("AI model returned no text")
        return result.text

    def _parse_questions(self, raw_text: str) -> List[Any]:
        diagnostic = excerpt(raw_text, self.settings.diagnostic_excerpt_chars)
        try:
            data = self.repair(raw_text)
        except Exception as e:
            raise MalformedOutput(f"JSON Parse Error: {e}", diagnostic=diagnostic) from e

        if not isinstance(data, dict) or not isinstance(data.get("questions"), list):
            raise MalformedOutput("Invalid question format from AI", diagnostic=diagnostic)
        return data["questions"]


# Instantiate the service globally; the endpoint resolves it through a dependency
quiz_generator = QuizGenerator()
