# quizgen/utils/exceptions.py
import traceback

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.status import HTTP_400_BAD_REQUEST, HTTP_500_INTERNAL_SERVER_ERROR

from quizgen.utils.config import settings
from quizgen.utils.logger import logger

QUIZ_PATH = "/generate-quiz"
INVALID_REQUEST_MESSAGE ="Invalid request: certification parameter required"
GENERATION_FAILED_MESSAGE = "Quiz generation failed. Please try again."
INTERNAL_ERROR_MESSAGE = "Internal server error"


class QuizGenerationError(Exception):
    """Base exception for failures of the quiz generation pipeline.

    ``diagnostic`` holds an excerpt of the raw model output, shown to callers
    only in development mode.
    """

    status_code: int = HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, message: str, *, diagnostic: str | None = None) -> None:
        self.message = message
        self.diagnostic = diagnostic
        super().__init__(message)


class ModelUnavailable(QuizGenerationError):
    """The model call returned no usable text, timed out or failed."""


class MalformedOutput(QuizGenerationError):
    """The model text could not be repaired, parsed or matched to the schema."""


class InsufficientResults(QuizGenerationError):
    """Too few valid questions survived every attempt."""


class ConfigurationError(Exception):
    """Raised when the selected LLM provider is not configured."""


def _error_payload(error: str, **extra: str | None) -> dict[str, str]:
    payload = {"error": error}
    payload.update({key: value for key, value in extra.items() if value is not None})
    return payload


def register_exception_handlers(app: FastAPI) -> None:
    """Register the service's error-to-response mapping on a FastAPI app."""

    @app.exception_handler(QuizGenerationError)
    async def _quiz_generation_error_handler(_request: Request, exc: QuizGenerationError) -> JSONResponse:
        logger.error(f"Server Error: {exc.message}")
        if settings.is_development:
            content = _error_payload(exc.message, diagnostic=exc.diagnostic)
        else:
            content = _error_payload(GENERATION_FAILED_MESSAGE)
        return JSONResponse(status_code=exc.status_code, content=content)

    @app.exception_handler(RequestValidationError)
    async def _validation_exception_handler(_request: Request, exc: RequestValidationError) -> JSONResponse:
        logger.warning(f"Rejected request body: {exc.errors()}")
        return JSONResponse(
            status_code=HTTP_400_BAD_REQUEST,
            content=_error_payload(INVALID_REQUEST_MESSAGE),
        )

    @app.exception_handler(StarletteHTTPException)
    async def _http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
        detail = exc.detail if isinstance(exc.detail, str) else "Request failed"
        # Undecodable bodies surface as a 400 HTTPException rather than a validation error
        if exc.status_code == HTTP_400_BAD_REQUEST and request.url.path == QUIZ_PATH:
            logger.warning(f"Rejected request body: {detail}")
            detail = INVALID_REQUEST_MESSAGE
        return JSONResponse(
            status_code=exc.status_code,
            content=_error_payload(detail),
            headers=getattr(exc, "headers", None),
        )

    @app.exception_handler(Exception)
    async def _unhandled_exception_handler(_request: Request, exc: Exception) -> JSONResponse:
        logger.exception(f"Unhandled Error: {exc}")
        stack = None
        if settings.is_development:
            stack = "".join(traceback.format_exception(type(exc), exc, exc.__traceback__))
        return JSONResponse(
            status_code=HTTP_500_INTERNAL_SERVER_ERROR,
            content=_error_payload(INTERNAL_ERROR_MESSAGE, stack=stack),
        )
