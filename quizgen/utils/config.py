# quizgen/utils/config.py
import os
from pydantic_settings import BaseSettings
from dotenv import load_dotenv

# Load .env file before defining settings
load_dotenv()

class Settings(BaseSettings):
    # --- Server Settings ---
    # Unset means neither production nor development: local CORS origins, no error details
    environment: str | None = None
    host: str = os.getenv("HOST", "0.0.0.0")
    port: int = int(os.getenv("PORT", "5000"))
    log_level: str = os.getenv("LOG_LEVEL", "INFO").upper()

    # Single allowed origin in production; local dev origins are fixed
    client_url: str | None = os.getenv("CLIENT_URL")
    dev_origins: list[str] = ["http://localhost:3000", "http://127.0.0.1:3000"]

    # --- LLM Provider Configuration ---
    llm_provider: str = os.getenv("LLM_PROVIDER", "perplexity").lower()

    # Perplexity specific (OpenAI-compatible API)
    perplexity_api_key: str | None = os.getenv("PERPLEXITY_API_KEY")
    perplexity_model_name: str = os.getenv("PERPLEXITY_MODEL_NAME", "sonar")
    perplexity_base_url: str = os.getenv("PERPLEXITY_BASE_URL", "https://api.perplexity.ai")

    # OpenAI specific
    openai_api_key: str | None = os.getenv("OPENAI_API_KEY")
    openai_model_name: str = os.getenv("OPENAI_MODEL_NAME", "gpt-4o-mini")

    # Google Gemini specific
    google_api_key: str | None = os.getenv("GOOGLE_API_KEY")
    google_model_name: str = os.getenv("GOOGLE_MODEL_NAME", "gemini-1.5-flash-latest")

    # Ollama specific
    ollama_base_url: str = os.getenv("OLLAMA_BASE_URL", "http://localhost:11434")
    ollama_model: str = os.getenv("OLLAMA_MODEL", "mistral")

    # --- Generation Parameters ---
    max_output_tokens: int = 1200
    temperature: float = 0.7
    top_p: float = 0.9
    model_timeout_seconds: float = float(os.getenv("MODEL_TIMEOUT_SECONDS", "30"))

    # --- Quiz Retry Loop ---
    quiz_max_attempts: int = 3
    quiz_target_questions: int = 5
    quiz_min_questions: int = 3
    diagnostic_excerpt_chars: int = 200

    @property
    def is_production(self) -> bool:
        return (self.environment or "").lower() == "production"

    @property
    def is_development(self) -> bool:
        return (self.environment or "").lower() == "development"

    @property
    def allowed_origins(self) -> list[str]:
        if self.is_production:
            return [self.client_url] if self.client_url else []
        return self.dev_origins

settings = Settings()
