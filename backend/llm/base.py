"""Base LLM service interface.

Defines the contract that all LLM providers must implement.
"""

from abc import ABC, abstractmethod

from services.types import Completion, ImageInput


class LLMError(Exception):
    """Raised when the LLM call itself fails (network, API, auth)."""


class LLMTimeoutError(LLMError):
    """Raised when the LLM call exceeds the configured timeout."""


class LLMRateLimitError(LLMError):
    """Raised when the provider rejects the call for rate limiting."""


class BaseLLMService(ABC):
    """Abstract base class for LLM services.

    All LLM providers (Anthropic, OpenAI, etc.) must implement these methods.
    """

    @abstractmethod
    async def generate(
        self,
        prompt: str,
        system: str,
        *,
        images: list[ImageInput] | None = None,
        temperature: float | None = None,
        max_tokens: int | None = None,
    ) -> Completion:
        """Run a single-turn completion.

        Args:
            prompt: User message.
            system: System instructions.
            images: Optional images sent before the prompt text.
            temperature: Sampling temperature (0-1).
            max_tokens: Maximum tokens to generate.

        Returns:
            Completion with the text payload (None if the model produced none)
            and the normalized finish reason.

        Raises:
            LLMError: On transport or API failure.
        """
