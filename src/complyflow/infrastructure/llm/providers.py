"""Vendor builders for LangChain chat and embedding models.

Vendor packages are imported inside each builder so only the configured
provider has to be importable at runtime.
"""

from dataclasses import dataclass
from typing import Callable, Dict, Optional

from langchain_core.embeddings import Embeddings
from langchain_core.language_models import BaseChatModel
from pydantic import SecretStr

ChatBuilder = Callable[[str, str, float, int], BaseChatModel]
EmbeddingsBuilder = Callable[[str, str], Embeddings]


@dataclass(frozen=True)
class LLMProvider:
    """Chat and, where offered, embedding builders for one vendor."""

    name: str
    chat: ChatBuilder
    embeddings: Optional[EmbeddingsBuilder] = None

    def create_model(
        self, model_name: str, api_key: str, temperature: float, max_tokens: int
    ) -> BaseChatModel:
        return self.chat(model_name, api_key, temperature, max_tokens)

    def create_embeddings(self, model_name: str, api_key: str) -> Embeddings:
        if self.embeddings is None:
            raise ValueError(f"Provider {self.name} does not offer embedding models")
        return self.embeddings(model_name, api_key)


def _gemini_chat(model: str, api_key: str, temperature: float, max_tokens: int) -> BaseChatModel:
    from langchain_google_genai import ChatGoogleGenerativeAI

    return ChatGoogleGenerativeAI(
        model=model,
        google_api_key=api_key,
        temperature=temperature,
        max_output_tokens=max_tokens,
    )


def _gemini_embeddings(model: str, api_key: str) -> Embeddings:
    from langchain_google_genai import GoogleGenerativeAIEmbeddings

    return GoogleGenerativeAIEmbeddings(model=model, google_api_key=api_key)


def _openai_chat(model: str, api_key: str, temperature: float, max_tokens: int) -> BaseChatModel:
    from langchain_openai import ChatOpenAI

    return ChatOpenAI(
        model=model,
        api_key=SecretStr(api_key),
        temperature=temperature,
        max_tokens=max_tokens,
    )


def _openai_embeddings(model: str, api_key: str) -> Embeddings:
    from langchain_openai import OpenAIEmbeddings

    return OpenAIEmbeddings(model=model, api_key=SecretStr(api_key))


def _claude_chat(model: str, api_key: str, temperature: float, max_tokens: int) -> BaseChatModel:
    from langchain_anthropic import ChatAnthropic

    return ChatAnthropic(
        model=model,
        api_key=SecretStr(api_key),
        temperature=temperature,
        max_tokens=max_tokens,
    )


PROVIDERS: Dict[str, LLMProvider] = {
    "google": LLMProvider("google", _gemini_chat, _gemini_embeddings),
    "openai": LLMProvider("openai", _openai_chat, _openai_embeddings),
    # Anthropic has no embedding endpoint.
    "anthropic": LLMProvider("anthropic", _claude_chat),
}


def get_provider(name: str) -> LLMProvider:
    """Look up a provider by its configured name (case-insensitive).

    Raises:
        ValueError: If the name is not registered
    """
    try:
        return PROVIDERS[name.lower()]
    except KeyError:
        raise ValueError(
            f"Unknown AI provider '{name}'. Expected one of: {', '.join(PROVIDERS)}"
        ) from None
