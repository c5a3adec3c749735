# tests/conftest.py
import json
import logging
import os
import sys

import pytest
from fastapi.testclient import TestClient

# Configure logging for tests
logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)

sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from quizgen.models.generation import GenerationRequest, GenerationResult
from quizgen.services.quiz_generator import QuizGenerator
from quizgen.utils.config import settings


class ScriptedModel:
    """
    Stand-in ModelClient that replays canned responses, one per call.
    Entries may be strings, None (no text) or exceptions to raise.
    """

    def __init__(self, responses):
        self.responses = list(responses)
        self.requests: list[GenerationRequest] = []

    async def __call__(self, request: GenerationRequest) -> GenerationResult:
        self.requests.append(request)
        response = self.responses[len(self.requests) - 1]
        if isinstance(response, Exception):
            raise response
        return GenerationResult(text=response)

    @property
    def calls(self) -> int:
        return len(self.requests)


def make_question(index: int = 1, **overrides) -> dict:
    question = {
        "text": f"Which AWS service is best suited for scenario number {index}?",
        "options": ["A) Amazon S3", "B) Amazon EC2", "C) AWS Lambda", "D) Amazon RDS"],
        "correct": "B",
        "explanation": "EC2 provides resizable compute capacity in the cloud.",
    }
    question.update(overrides)
    return question


def quiz_payload(questions) -> str:
    return json.dumps({"questions": questions})


@pytest.fixture
def scripted_model():
    """Factory fixture building a ScriptedModel from a list of responses."""
    return ScriptedModel


@pytest.fixture
def question_factory():
    return make_question


@pytest.fixture
def payload_factory():
    return quiz_payload


@pytest.fixture
def make_generator():
    """Builds a QuizGenerator around a fake model with a fixed nonce."""
    def _make(model, **kwargs):
        kwargs.setdefault("nonce_factory", lambda: "1700000000000-deadbeef")
        return QuizGenerator(model_client=model, **kwargs)
    return _make


@pytest.fixture
def development_mode(monkeypatch):
    monkeypatch.setattr(settings, "environment", "development")


@pytest.fixture
def production_mode(monkeypatch):
    monkeypatch.setattr(settings, "environment", "production")


# --- TestClient Fixture ---
@pytest.fixture(scope="session")
def client():
    from quizgen.main import app
    logger.info("Creating TestClient instance for the session.")
    with TestClient(app) as c:
        yield c


@pytest.fixture
def override_generator():
    """
    Routes /generate-quiz through the given QuizGenerator for one test.
    """
    from quizgen.main import app
    from quizgen.endpoints.quiz import get_quiz_generator

    def _override(generator: QuizGenerator):
        app.dependency_overrides[get_quiz_generator] = lambda: generator
        return generator

    yield _override
    app.dependency_overrides.pop(get_quiz_generator, None)
