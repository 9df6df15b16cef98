"""Unit tests for the LLM provider registry and model factory."""

from unittest.mock import MagicMock, patch

import pytest

from complyflow.config.app_settings import AppSettings
from complyflow.exception.api_exceptions import MissingCredentialError
from complyflow.infrastructure.llm import LLMModelFactory, LLMProvider, get_provider
from complyflow.infrastructure.llm import providers


class TestGetProvider:
    """Tests for get_provider."""

    def test_lookup_is_case_insensitive(self) -> None:
        assert get_provider("Google").name == "google"

    def test_unknown_provider_lists_choices(self) -> None:
        with pytest.raises(ValueError, match="Expected one of: google, openai, anthropic"):
            get_provider("mistral")

    def test_anthropic_has_no_embeddings(self) -> None:
        with pytest.raises(ValueError, match="does not offer embedding models"):
            get_provider("anthropic").create_embeddings("any", "key")


class TestLLMModelFactory:
    """Tests for LLMModelFactory."""

    @pytest.fixture
    def fake_provider(self) -> LLMProvider:
        return LLMProvider("google", chat=MagicMock(), embeddings=MagicMock())

    def test_chat_model_uses_configured_default(self, fake_provider: LLMProvider) -> None:
        settings = AppSettings(ai_api_key="ai-key", ai_default_model="gemini-2.0-flash")

        with patch.dict(providers.PROVIDERS, {"google": fake_provider}):
            model = LLMModelFactory(settings).create_chat_model(temperature=0.2, max_tokens=512)

        fake_provider.chat.assert_called_once_with("gemini-2.0-flash", "ai-key", 0.2, 512)
        assert model is fake_provider.chat.return_value

    def test_missing_ai_key_raises(self) -> None:
        with pytest.raises(MissingCredentialError):
            LLMModelFactory(AppSettings(ai_api_key=None)).create_chat_model()

    def test_embeddings_fall_back_to_ai_key(self, fake_provider: LLMProvider) -> None:
        settings = AppSettings(
            ai_api_key="ai-key",
            embedding_api_key=None,
            embedding_model="models/embedding-001",
        )

        with patch.dict(providers.PROVIDERS, {"google": fake_provider}):
            LLMModelFactory(settings).create_embeddings()

        fake_provider.embeddings.assert_called_once_with("models/embedding-001", "ai-key")
