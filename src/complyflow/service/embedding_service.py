"""Text embedding generation shared by ingestion and retrieval."""

import logging
from typing import List

from complyflow.constants import EMBEDDING_MAX_CHARS
from complyflow.exception.api_exceptions import ComplyFlowException, EmbeddingError
from complyflow.infrastructure.llm import LLMModelFactory

logger = logging.getLogger(__name__)


class EmbeddingService:
    """Embeds text with the configured embedding model.

    Attributes:
        llm_factory: Factory for the embeddings model
    """

    def __init__(self, llm_factory: LLMModelFactory):
        self.llm_factory = llm_factory

    async def embed(self, text: str) -> List[float]:
        """Embed text, truncated to the model's input limit.

        Raises:
            MissingCredentialError: If no embedding key is configured
            EmbeddingError: If the provider call fails
        """
        embeddings = self.llm_factory.create_embeddings()
        try:
            return await embeddings.aembed_query(text[:EMBEDDING_MAX_CHARS])
        except ComplyFlowException:
            raise
        except Exception as e:
            logger.error(f"Error generating embedding: {e}", exc_info=True)
            raise EmbeddingError(
                str(e), provider=self.llm_factory.settings.embedding_provider
            ) from e
