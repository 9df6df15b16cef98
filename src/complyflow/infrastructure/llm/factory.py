"""LLM model factory backed by application settings.

The platform holds one API key per provider in configuration. The factory
refuses to build a model when that key is missing so the handlers fail with
a clear configuration error instead of an opaque provider rejection.
"""

from typing import Optional

from langchain_core.embeddings import Embeddings
from langchain_core.language_models import BaseChatModel

from complyflow.config.app_settings import AppSettings
from complyflow.constants import DEFAULT_MAX_TOKENS, DEFAULT_TEMPERATURE
from complyflow.exception.api_exceptions import MissingCredentialError

from .providers import get_provider


class LLMModelFactory:
    """Factory for chat and embedding models.

    Attributes:
        settings: Application settings holding provider names, keys and models
    """

    def __init__(self, settings: AppSettings):
        self.settings = settings

    def create_chat_model(
        self,
        model_name: Optional[str] = None,
        temperature: float = DEFAULT_TEMPERATURE,
        max_tokens: int = DEFAULT_MAX_TOKENS,
    ) -> BaseChatModel:
        """Create a chat model for the configured provider.

        Args:
            model_name: Model identifier (defaults to the configured default model)
            temperature: Sampling temperature
            max_tokens: Maximum tokens in response

        Raises:
            MissingCredentialError: If no AI key is configured
            ValueError: If the configured provider is unknown
        """
        api_key = self.settings.ai_api_key
        if not api_key:
            raise MissingCredentialError(
                "ai_api_key",
                message="Missing COMPLYFLOW_AI_API_KEY environment variable",
            )

        provider = get_provider(self.settings.ai_provider)
        return provider.create_model(
            model_name=model_name or self.settings.ai_default_model,
            api_key=api_key,
            temperature=temperature,
            max_tokens=max_tokens,
        )

    def create_embeddings(self) -> Embeddings:
        """Create the embeddings model used for every stored vector.

        Raises:
            MissingCredentialError: If neither an embedding nor an AI key is set
        """
        api_key = self.settings.resolved_embedding_api_key()
        if not api_key:
            raise MissingCredentialError(
                "embedding_api_key",
                message="Missing COMPLYFLOW_EMBEDDING_API_KEY environment variable",
            )

        provider = get_provider(self.settings.embedding_provider)
        return provider.create_embeddings(
            model_name=self.settings.embedding_model,
            api_key=api_key,
        )
