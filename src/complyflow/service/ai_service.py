"""AI regulatory assistant proxy.

Converts the web client's chat transcript into LangChain messages and relays
the configured chat model's reply, either whole or as a text stream.
"""

import logging
from typing import Any, AsyncIterator, Dict, List, Optional

from langchain_core.language_models import BaseChatModel
from langchain_core.messages import AIMessage, BaseMessage, HumanMessage

from complyflow.constants import SYSTEM_INSTRUCTION_ACK, SYSTEM_INSTRUCTION_PREFIX
from complyflow.exception.api_exceptions import ComplyFlowException, LLMError
from complyflow.infrastructure.llm import LLMModelFactory

logger = logging.getLogger(__name__)


def message_text(content: Any) -> str:
    """Flatten LangChain message content into plain text.

    Providers return either a string or a list of content parts.
    """
    if isinstance(content, str):
        return content
    if isinstance(content, list):
        parts = []
        for part in content:
            if isinstance(part, str):
                parts.append(part)
            elif isinstance(part, dict) and part.get("type", "text") == "text":
                parts.append(part.get("text", ""))
        return "".join(parts)
    return str(content or "")


def _turn_to_message(turn: Dict[str, Any]) -> BaseMessage:
    text = "".join(part.get("text", "") for part in turn.get("parts") or [])
    if turn.get("role") == "model":
        return AIMessage(content=text)
    return HumanMessage(content=text)


def build_messages(
    history: Optional[List[Dict[str, Any]]],
    message: str,
    system_instruction: Optional[str] = None,
) -> List[BaseMessage]:
    """Build the model conversation.

    A system instruction becomes a user turn followed by a model
    acknowledgement, ahead of the transcript. The new message is the final
    user turn.
    """
    messages: List[BaseMessage] = []
    if system_instruction:
        messages.append(HumanMessage(content=SYSTEM_INSTRUCTION_PREFIX + system_instruction))
        messages.append(AIMessage(content=SYSTEM_INSTRUCTION_ACK))

    messages.extend(_turn_to_message(turn) for turn in history or [])
    messages.append(HumanMessage(content=message))
    return messages


class AIProxyService:
    """Relays chat requests to the configured generative model.

    Attributes:
        llm_factory: Factory for chat models
    """

    def __init__(self, llm_factory: LLMModelFactory):
        self.llm_factory = llm_factory

    async def complete(
        self,
        message: str,
        history: Optional[List[Dict[str, Any]]] = None,
        model_name: Optional[str] = None,
        system_instruction: Optional[str] = None,
    ) -> str:
        """Return the model's full reply.

        Raises:
            MissingCredentialError: If no AI key is configured
            LLMError: If the provider call fails
        """
        model = self.llm_factory.create_chat_model(model_name=model_name)
        messages = build_messages(history, message, system_instruction)

        try:
            response = await model.ainvoke(messages)
        except ComplyFlowException:
            raise
        except Exception as e:
            logger.error(f"Chat completion failed: {e}", exc_info=True)
            raise LLMError(str(e), provider=self.llm_factory.settings.ai_provider) from e

        return message_text(response.content)

    def stream(
        self,
        message: str,
        history: Optional[List[Dict[str, Any]]] = None,
        model_name: Optional[str] = None,
        system_instruction: Optional[str] = None,
    ) -> AsyncIterator[str]:
        """Start a streamed reply.

        The model is created eagerly so configuration errors surface before
        any bytes are sent. Provider errors during the stream are logged and
        end the stream.
        """
        model = self.llm_factory.create_chat_model(model_name=model_name)
        messages = build_messages(history, message, system_instruction)
        return self._relay(model, messages)

    @staticmethod
    async def _relay(
        model: BaseChatModel, messages: List[BaseMessage]
    ) -> AsyncIterator[str]:
        try:
            async for chunk in model.astream(messages):
                text = message_text(chunk.content)
                if text:
                    yield text
        except Exception as e:
            logger.error(f"Stream error: {e}", exc_info=True)
