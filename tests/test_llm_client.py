# tests/test_llm_client.py
import asyncio
import os
from unittest.mock import AsyncMock, MagicMock, patch

import pytest
from langchain_community.llms import Ollama
from langchain_openai import ChatOpenAI

from quizgen.models.generation import GenerationRequest
from quizgen.services import llm_client
from quizgen.services.quiz_generator import QuizGenerator
from quizgen.utils.config import settings
from quizgen.utils.exceptions import ConfigurationError


@pytest.fixture(autouse=True)
def fresh_clients():
    llm_client.reset_clients()
    yield
    llm_client.reset_clients()


class TestProviderSelection:
    def test_perplexity_uses_openai_compatible_endpoint(self, monkeypatch):
        monkeypatch.setattr(settings, "llm_provider", "perplexity")
        monkeypatch.setattr(settings, "perplexity_api_key", "pplx-test")
        llm = llm_client._build_llm(1200, 0.7, 0.9)
        assert isinstance(llm, ChatOpenAI)
        assert llm.openai_api_base == settings.perplexity_base_url
        assert llm.model_name == settings.perplexity_model_name
        assert llm.max_tokens == 1200
        assert llm.top_p == 0.9

    def test_openai_client(self, monkeypatch):
        monkeypatch.setattr(settings, "llm_provider", "openai")
        monkeypatch.setattr(settings, "openai_api_key", "sk-test")
        llm = llm_client._build_llm(800, 0.2, None)
        assert isinstance(llm, ChatOpenAI)
        assert llm.temperature == 0.2

    def test_ollama_client_needs_no_key(self, monkeypatch):
        monkeypatch.setattr(settings, "llm_provider", "ollama")
        llm = llm_client._build_llm(1200, 0.7, 0.9)
        assert isinstance(llm, Ollama)
        assert llm.num_predict == 1200

    @pytest.mark.parametrize("provider, key_field", [
        ("perplexity", "perplexity_api_key"),
        ("openai", "openai_api_key"),
        ("google", "google_api_key"),
    ])
    def test_missing_api_key_is_a_configuration_error(self, monkeypatch, provider, key_field):
        monkeypatch.setattr(settings, "llm_provider", provider)
        monkeypatch.setattr(settings, key_field, None)
        with pytest.raises(ConfigurationError):
            llm_client._build_llm(1200, 0.7, 0.9)

    def test_unsupported_provider(self, monkeypatch):
        monkeypatch.setattr(settings, "llm_provider", "bedrock")
        with pytest.raises(ConfigurationError, match="Unsupported LLM_PROVIDER"):
            llm_client._build_llm(1200, 0.7, 0.9)


class TestGenerationChain:
    def test_chain_is_cached_per_parameters(self, monkeypatch):
        monkeypatch.setattr(settings, "llm_provider", "ollama")
        first = llm_client.get_generation_chain(1200, 0.7, 0.9)
        assert llm_client.get_generation_chain(1200, 0.7, 0.9) is first
        assert llm_client.get_generation_chain(600, 0.7, 0.9) is not first

    def test_generate_text_returns_model_output(self):
        chain = MagicMock()
        chain.ainvoke = AsyncMock(return_value='{"questions": []}')
        request = GenerationRequest(prompt="Generate 5 questions", max_output_tokens=1200, temperature=0.7, top_p=0.9)

        with patch("quizgen.services.llm_client.get_generation_chain", return_value=chain) as get_chain:
            result = asyncio.run(llm_client.generate_text(request))

        get_chain.assert_called_once_with(1200, 0.7, 0.9)
        chain.ainvoke.assert_awaited_once_with("Generate 5 questions")
        assert result.text == '{"questions": []}'

    def test_generate_text_maps_empty_output_to_none(self):
        chain = MagicMock()
        chain.ainvoke = AsyncMock(return_value="")
        request = GenerationRequest(prompt="p", max_output_tokens=10, temperature=0.0)

        with patch("quizgen.services.llm_client.get_generation_chain", return_value=chain):
            result = asyncio.run(llm_client.generate_text(request))

        assert result.text is None


@pytest.mark.llm_integration
@pytest.mark.skipif(
    (settings.llm_provider == "perplexity" and not os.getenv("PERPLEXITY_API_KEY")) or
    (settings.llm_provider == "openai" and not os.getenv("OPENAI_API_KEY")) or
    (settings.llm_provider == "google" and not os.getenv("GOOGLE_API_KEY")) or
    settings.llm_provider == "ollama",
    reason="Requires an API key for the configured cloud provider in .env",
)
def test_real_provider_generates_a_quiz():
    questions = asyncio.run(QuizGenerator().generate("AWS Certified Cloud Practitioner"))
    assert 3 <= len(questions) <= 5
    assert all("?" in q.text and len(q.options) == 4 for q in questions)
