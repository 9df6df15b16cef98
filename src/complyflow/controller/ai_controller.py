"""Generative AI proxy and embedding endpoints.

The web client never holds provider keys; chat completions and embeddings
go through these handlers instead.
"""

import logging
from typing import Any, Dict, List, Optional

from fastapi import APIRouter, Request
from fastapi.responses import StreamingResponse
from pydantic import BaseModel, Field

from complyflow.exception.api_exceptions import InvalidInputError
from complyflow.service.ai_service import AIProxyService
from complyflow.service.embedding_service import EmbeddingService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/functions/v1", tags=["ai"])


class ChatTurnPart(BaseModel):
    text: str = Field("", description="Turn text")


class ChatTurn(BaseModel):
    """One prior conversation turn.

    Attributes:
        role: ``user`` or ``model``
        parts: Text parts of the turn
    """

    role: str = Field(..., description="Speaker: user or model")
    parts: List[ChatTurnPart] = Field(default_factory=list, description="Text parts")


class AIProxyRequest(BaseModel):
    """Chat completion request payload.

    Attributes:
        history: Prior turns, oldest first
        message: New user message
        model_name: Provider model (defaults to the configured chat model)
        system_instruction: Optional system prompt
        stream: Stream raw text instead of returning JSON
    """

    history: List[ChatTurn] = Field(default_factory=list, description="Prior turns")
    message: str = Field(..., description="User message")
    model_name: Optional[str] = Field(None, alias="modelName", description="Model name")
    system_instruction: Optional[str] = Field(
        None, alias="systemInstruction", description="System prompt"
    )
    stream: bool = Field(False, description="Stream the reply as plain text")

    class Config:
        populate_by_name = True
        json_schema_extra = {
            "example": {
                "history": [
                    {"role": "user", "parts": [{"text": "What is Regulation 17?"}]},
                    {"role": "model", "parts": [{"text": "Good governance."}]},
                ],
                "message": "What evidence do inspectors expect for it?",
                "modelName": "gemini-pro",
                "systemInstruction": "You are a CQC compliance adviser.",
                "stream": False,
            }
        }


class EmbeddingRequest(BaseModel):
    """Embedding request payload."""

    text: Any = Field(None, description="Text to embed (truncated to 10000 characters)")

    class Config:
        json_schema_extra = {"example": {"text": "Medicines must be stored securely."}}


class EmbeddingResponse(BaseModel):
    success: bool = Field(True, description="Always true on success")
    embedding: List[float] = Field(..., description="Embedding vector")
    dimensions: int = Field(..., description="Vector length")


@router.post(
    "/cqc-ai-proxy",
    summary="Chat Completion Proxy",
    description="""
Forward a conversation to the generative AI provider.

With `stream=false` the reply is returned as `{"text": ...}`. With
`stream=true` the reply is streamed as chunked `text/plain`; a provider error
mid-stream ends the stream.
""",
    responses={
        200: {
            "description": "Model reply",
            "content": {
                "application/json": {"example": {"text": "Regulation 17 covers..."}},
                "text/plain": {"example": "Regulation 17 covers..."},
            },
        },
        400: {"description": "Invalid request"},
        500: {"description": "Provider or configuration error"},
    },
)
async def cqc_ai_proxy(proxy_request: AIProxyRequest, request: Request):
    """Proxy a chat completion, optionally streamed."""
    ai_service: AIProxyService = request.app.state.ai_service
    history: List[Dict[str, Any]] = [
        turn.model_dump() for turn in proxy_request.history
    ]

    if proxy_request.stream:
        chunks = ai_service.stream(
            proxy_request.message,
            history=history,
            model_name=proxy_request.model_name,
            system_instruction=proxy_request.system_instruction,
        )
        return StreamingResponse(
            chunks,
            media_type="text/plain; charset=utf-8",
            headers={"Cache-Control": "no-cache", "X-Accel-Buffering": "no"},
        )

    text = await ai_service.complete(
        proxy_request.message,
        history=history,
        model_name=proxy_request.model_name,
        system_instruction=proxy_request.system_instruction,
    )
    return {"text": text}


@router.post(
    "/generate-embedding",
    response_model=EmbeddingResponse,
    summary="Generate Embedding",
    description="Embed a text with the configured embedding model.",
    responses={
        400: {"description": "Missing or invalid text"},
        500: {"description": "Embedding provider error"},
    },
)
async def generate_embedding(
    embedding_request: EmbeddingRequest, request: Request
) -> EmbeddingResponse:
    """Return the embedding vector for a text."""
    text = embedding_request.text
    if not isinstance(text, str) or not text:
        raise InvalidInputError('Missing or invalid "text" parameter', field="text")

    embedding_service: EmbeddingService = request.app.state.embedding_service
    embedding = await embedding_service.embed(text)
    logger.info(f"Generated embedding with {len(embedding)} dimensions")
    return EmbeddingResponse(embedding=embedding, dimensions=len(embedding))
