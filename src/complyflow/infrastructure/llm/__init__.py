"""LLM infrastructure for ComplyFlow.

Provides chat and embedding model creation for Google, OpenAI and Anthropic.
"""

from .factory import LLMModelFactory
from .providers import LLMProvider, get_provider

__all__ = [
    "LLMModelFactory",
    "LLMProvider",
    "get_provider",
]
