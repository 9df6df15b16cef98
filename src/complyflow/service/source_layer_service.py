"""Source layer: shared regulations knowledge base and live CQC data.

Dispatches the ``source-layer`` actions: ingesting text and CQC provider
reports into the vector store, reading live ratings for the dashboard and
answering questions grounded in the knowledge base.
"""

import logging
from typing import Any, Dict, List, Optional

from complyflow.constants import (
    CQC_DOMAINS,
    DEFAULT_CITATION_SOURCE,
    KNOWLEDGE_MATCH_COUNT,
    KNOWLEDGE_MATCH_THRESHOLD,
    NO_CONTEXT_FOUND,
    NOT_RATED,
)
from complyflow.exception.api_exceptions import (
    ComplyFlowException,
    LLMError,
    MissingRequiredFieldError,
    UnknownActionError,
)
from complyflow.infrastructure.cqc import CQCClient
from complyflow.infrastructure.llm import LLMModelFactory
from complyflow.repository.knowledge_base_repository import KnowledgeBaseRepository
from complyflow.service.ai_service import message_text
from complyflow.service.embedding_service import EmbeddingService

logger = logging.getLogger(__name__)

CQC_SOURCE_LABEL = "CQC API (Live)"

REASONING_PROMPT = """You are ComplyFlow's compliance expert.
Answer the user question based primarily on the context provided below.

CONTEXT FROM KNOWLEDGE BASE:
{context}

USER QUESTION:
{query}

Provide a concise, regulatory-focused answer."""


def domain_ratings(provider: Dict[str, Any]) -> List[Dict[str, str]]:
    """Extract the five key-question ratings from a CQC provider record."""
    ratings = (provider.get("inspectionArea") or {}).get("ratings") or []
    by_question = {r.get("keyQuestion"): r.get("rating") for r in ratings}
    return [
        {"name": label, "score": by_question.get(label) or NOT_RATED}
        for label, _ in CQC_DOMAINS
    ]


def provider_summary(provider: Dict[str, Any]) -> str:
    """Render a CQC provider record as a plain-text report for embedding."""
    inspection_date = (provider.get("inspectionArea") or {}).get("date") or "N/A"
    lines = [
        f"CQC Provider Report for {provider.get('name')} "
        f"(ID: {provider.get('providerId')}).",
        f"Overall Status: {provider.get('registrationStatus')}.",
        f"Last Inspection Date: {inspection_date}.",
        "Key Ratings:",
    ]
    lines.extend(f"- {d['name']}: {d['score']}" for d in domain_ratings(provider))
    return "\n".join(lines)


class SourceLayerService:
    """Knowledge base ingestion and retrieval-augmented answers.

    Attributes:
        knowledge_repo: Shared knowledge base vector store
        embedding_service: Text embedder
        cqc_client: CQC public API client
        llm_factory: Factory for the reasoning model
    """

    def __init__(
        self,
        knowledge_repo: KnowledgeBaseRepository,
        embedding_service: EmbeddingService,
        cqc_client: CQCClient,
        llm_factory: LLMModelFactory,
    ):
        self.knowledge_repo = knowledge_repo
        self.embedding_service = embedding_service
        self.cqc_client = cqc_client
        self.llm_factory = llm_factory

    async def handle(self, action: Optional[str], payload: Dict[str, Any]) -> Dict[str, Any]:
        """Dispatch one source-layer action.

        Raises:
            UnknownActionError: If the action is not recognised
        """
        handlers = {
            "ingest-text": self.ingest_text,
            "ingest-cqc": self.ingest_cqc,
            "get-live-ratings": self.get_live_ratings,
            "reasoning-query": self.reasoning_query,
        }
        handler = handlers.get(action or "")
        if handler is None:
            raise UnknownActionError(action=action)
        return await handler(payload or {})

    async def ingest_text(self, payload: Dict[str, Any]) -> Dict[str, Any]:
        text = payload.get("text")
        if not text:
            raise MissingRequiredFieldError("Missing text", field="payload.text")

        embedding = await self.embedding_service.embed(text)
        await self.knowledge_repo.insert(
            content=text, embedding=embedding, metadata=payload.get("metadata")
        )
        return {"status": "success", "message": "Text chunk embedded and stored."}

    async def ingest_cqc(self, payload: Dict[str, Any]) -> Dict[str, Any]:
        provider_id = self._provider_id(payload)
        logger.info(f"[Crawler] Starting harvest for CQC Provider: {provider_id}")

        provider = await self.cqc_client.get_provider(provider_id)
        summary = provider_summary(provider)
        embedding = await self.embedding_service.embed(summary)
        await self.knowledge_repo.insert(
            content=summary,
            embedding=embedding,
            metadata={
                "source": CQC_SOURCE_LABEL,
                "providerId": provider_id,
                "type": "inspection_report",
                "raw_data": provider,
            },
        )

        return {
            "status": "success",
            "message": f"Successfully harvested live CQC data for {provider.get('name')}",
            "data": provider,
        }

    async def get_live_ratings(self, payload: Dict[str, Any]) -> Dict[str, Any]:
        provider_id = self._provider_id(payload)
        logger.info(f"[Dashboard] Fetching live ratings for: {provider_id}")

        provider = await self.cqc_client.get_provider(provider_id)
        return {
            "provider_name": provider.get("name"),
            "last_update": (provider.get("inspectionArea") or {}).get("date"),
            "domains": domain_ratings(provider),
        }

    async def reasoning_query(self, payload: Dict[str, Any]) -> Dict[str, Any]:
        """Answer a question from the closest knowledge base entries."""
        query = payload.get("query")
        if not query:
            raise MissingRequiredFieldError("Missing query", field="payload.query")

        query_embedding = await self.embedding_service.embed(query)
        documents = await self.knowledge_repo.match(
            query_embedding,
            threshold=KNOWLEDGE_MATCH_THRESHOLD,
            count=KNOWLEDGE_MATCH_COUNT,
        )
        context = "\n---\n".join(d["content"] for d in documents) or NO_CONTEXT_FOUND

        model = self.llm_factory.create_chat_model(
            model_name=self.llm_factory.settings.ai_reasoning_model
        )
        try:
            result = await model.ainvoke(
                REASONING_PROMPT.format(context=context, query=query)
            )
        except ComplyFlowException:
            raise
        except Exception as e:
            logger.error(f"Reasoning query failed: {e}", exc_info=True)
            raise LLMError(str(e), provider=self.llm_factory.settings.ai_provider) from e

        return {
            "response": message_text(result.content),
            "citations": [
                {
                    "source": d["metadata"].get("source") or DEFAULT_CITATION_SOURCE,
                    "confidence": d["similarity"],
                }
                for d in documents
            ],
        }

    @staticmethod
    def _provider_id(payload: Dict[str, Any]) -> str:
        provider_id = payload.get("providerId")
        if not provider_id:
            raise MissingRequiredFieldError(
                "Missing providerId", field="payload.providerId"
            )
        return str(provider_id)
