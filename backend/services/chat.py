"""Single-turn chat, optionally grounded in the session's document."""

import logging

from llm.base import BaseLLMService
from llm.prompts.chat import (
    CHAT_SYSTEM_PROMPT,
    GENERAL_CHAT_PROMPT,
    GROUNDED_CHAT_PROMPT,
    TRUNCATION_MARKER,
)
from services.types import DocumentContext
from utils import truncate_text

logger = logging.getLogger(__name__)

DEFAULT_CONTEXT_CHARS = 50_000


class MissingInputError(ValueError):
    """Raised when the chat message is empty."""


class ChatGenerationError(Exception):
    """Raised when the model was blocked or returned no text."""

    def __init__(self, message: str, finish_reason: str | None = None) -> None:
        super().__init__(message)
        self.finish_reason = finish_reason


class ChatResponder:
    """Answers one message per call; no conversation state is kept."""

    def __init__(self, llm: BaseLLMService, context_max_chars: int = DEFAULT_CONTEXT_CHARS) -> None:
        self.llm = llm
        self.context_max_chars = context_max_chars

    def build_prompt(self, message: str, context: DocumentContext | None) -> str:
        """Build the grounded prompt if a document is present, else the general one."""
        if context is None:
            return GENERAL_CHAT_PROMPT.format(message=message)

        document_text, truncated = truncate_text(
            context.text, self.context_max_chars, marker=TRUNCATION_MARKER
        )
        if truncated:
            logger.info(
                "Chat context for %s truncated to %d characters",
                context.filename,
                self.context_max_chars,
            )
        return GROUNDED_CHAT_PROMPT.format(
            filename=context.filename,
            document_text=document_text,
            message=message,
        )

    async def respond(self, message: str | None, context: DocumentContext | None) -> str:
        """Answer a user message.

        Raises:
            MissingInputError: If message is missing or blank.
            ChatGenerationError: If the model produced no usable text.
            LLMError: If the LLM call failed.
        """
        if not message or not message.strip():
            raise MissingInputError("Message is required")

        prompt = self.build_prompt(message.strip(), context)
        completion = await self.llm.generate(prompt, CHAT_SYSTEM_PROMPT)

        if completion.text and completion.text.strip():
            return completion.text.strip()

        if completion.finish_reason != "stop":
            logger.warning("Chat generation blocked: finish_reason=%s", completion.finish_reason)
            raise ChatGenerationError(
                f"AI response was blocked (finish reason: {completion.finish_reason})",
                finish_reason=completion.finish_reason,
            )
        raise ChatGenerationError("AI returned an empty response", finish_reason="stop")
