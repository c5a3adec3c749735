# External text-generation client; wraps LangChain chat models behind a plain async callable
# quizgen/services/llm_client.py
import threading
from typing import Awaitable, Callable, Dict, Optional, Tuple

from langchain_community.llms import Ollama
from langchain_core.output_parsers import StrOutputParser
from langchain_core.runnables import Runnable
from langchain_google_genai import ChatGoogleGenerativeAI
from langchain_openai import ChatOpenAI

from quizgen.models.generation import GenerationRequest, GenerationResult
from quizgen.utils.config import settings
from quizgen.utils.exceptions import ConfigurationError
from quizgen.utils.logger import logger

# Anything with this signature can stand in for the real model (tests inject fixtures)
ModelClient = Callable[[GenerationRequest], Awaitable[GenerationResult]]

# --- Lazily initialized chains, one per distinct set of generation parameters ---
_ParamsKey = Tuple[int, float, Optional[float]]
_chains: Dict[_ParamsKey, Runnable] = {}
_init_lock = threading.Lock()


def _build_llm(max_output_tokens: int, temperature: float, top_p: Optional[float]):
    provider = settings.llm_provider.lower()
    logger.info(f"Initializing LLM client for provider: {provider}")

    if provider == "perplexity":
        if not settings.perplexity_api_key:
            raise ConfigurationError("LLM_PROVIDER is 'perplexity' but PERPLEXITY_API_KEY is not set in .env")
        return ChatOpenAI(
            api_key=settings.perplexity_api_key,
            base_url=settings.perplexity_base_url,
            model=settings.perplexity_model_name,
            max_tokens=max_output_tokens,
            temperature=temperature,
            top_p=top_p,
        )
    if provider == "openai":
        if not settings.openai_api_key:
            raise ConfigurationError("LLM_PROVIDER is 'openai' but OPENAI_API_KEY is not set in .env")
        return ChatOpenAI(
            api_key=settings.openai_api_key,
            model=settings.openai_model_name,
            max_tokens=max_output_tokens,
            temperature=temperature,
            top_p=top_p,
        )
    if provider == "google":
        if not settings.google_api_key:
            raise ConfigurationError("LLM_PROVIDER is 'google' but GOOGLE_API_KEY is not set in .env")
        return ChatGoogleGenerativeAI(
            google_api_key=settings.google_api_key,
            model=settings.google_model_name,
            max_output_tokens=max_output_tokens,
            temperature=temperature,
            top_p=top_p,
        )
    if provider == "ollama":
        return Ollama(
            base_url=settings.ollama_base_url,
            model=settings.ollama_model,
            num_predict=max_output_tokens,
            temperature=temperature,
            top_p=top_p,
        )
    raise ConfigurationError(f"Unsupported LLM_PROVIDER: {provider}")


def get_generation_chain(max_output_tokens: int, temperature: float, top_p: Optional[float] = None) -> Runnable:
    """Returns the cached `llm | StrOutputParser()` chain for these parameters."""
    key = (max_output_tokens, temperature, top_p)
    with _init_lock:
        chain = _chains.get(key)
        if chain is None:
            # Chat models return messages and Ollama returns strings; the parser yields str for both
            chain = _build_llm(max_output_tokens, temperature, top_p) | StrOutputParser()
            _chains[key] = chain
            logger.info(f"Initialized LLM with provider {settings.llm_provider}")
        return chain


def reset_clients() -> None:
    """Drops cached chains, e.g. after settings change."""
    with _init_lock:
        _chains.clear()


async def generate_text(request: GenerationRequest) -> GenerationResult:
    """Default ModelClient: sends the prompt to the configured provider."""
    chain = get_generation_chain(request.max_output_tokens, request.temperature, request.top_p)
    text = await chain.ainvoke(request.prompt)
    return GenerationResult(text=text or None)
