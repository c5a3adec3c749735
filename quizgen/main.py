# FastAPI entry point; wires CORS, request logging, error handlers and the quiz router
# quizgen/main.py
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from contextlib import asynccontextmanager

from quizgen.endpoints import quiz as quiz_router
from quizgen.utils.config import settings
from quizgen.utils.exceptions import register_exception_handlers
from quizgen.utils.logger import logger

@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Manages application startup and shutdown events.
    """
    logger.info(f"Server running on port {settings.port} in {settings.environment or 'default'} mode")
    logger.info(f"LLM provider: {settings.llm_provider}; allowed origins: {settings.allowed_origins}")
    yield
    logger.info("Quiz Generation API shutting down...")

# --- FastAPI App Initialization ---
app = FastAPI(
    title="Quiz Generation API",
    description="Generates validated multiple-choice certification exam questions with an LLM.",
    version="1.0.0",
    lifespan=lifespan
)

# --- CORS Middleware ---
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.allowed_origins,
    allow_methods=["POST", "OPTIONS"],
    allow_headers=["Content-Type"],
)

# --- Request Logging ---
@app.middleware("http")
async def log_requests(request: Request, call_next):
    logger.info(f"{request.method} {request.url.path}")
    return await call_next(request)

register_exception_handlers(app)

# --- API Routers ---
app.include_router(quiz_router.router, tags=["Quiz"])

# --- Root Endpoint ---
@app.get("/")
async def root():
    return {"message": "Welcome to the Quiz Generation API"}
