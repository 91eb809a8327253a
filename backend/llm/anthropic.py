"""Anthropic Claude LLM implementation."""

import base64
import logging

import httpx
from anthropic import APIError, APITimeoutError, AsyncAnthropic, RateLimitError

from config import Settings, get_settings
from services.types import Completion, ImageInput

from .base import BaseLLMService, LLMError, LLMRateLimitError, LLMTimeoutError

logger = logging.getLogger(__name__)

# Claude stop reasons that mean generation ended normally
_NORMAL_STOP_REASONS = frozenset({"end_turn", "stop_sequence"})


class AnthropicService(BaseLLMService):
    """Claude LLM service via Anthropic API."""

    def __init__(self, settings: Settings | None = None, model: str | None = None) -> None:
        settings = settings or get_settings()
        self.model = model or settings.llm_model
        self.settings = settings

        self._client = AsyncAnthropic(
            api_key=settings.anthropic_api_key,
            timeout=httpx.Timeout(
                timeout=settings.llm_timeout_seconds,
                connect=settings.llm_connect_timeout_seconds,
            ),
            max_retries=0,
        )

    async def generate(
        self,
        prompt: str,
        system: str,
        *,
        images: list[ImageInput] | None = None,
        temperature: float | None = None,
        max_tokens: int | None = None,
    ) -> Completion:
        """Generate a response using Claude."""
        content: list[dict] = [
            {
                "type": "image",
                "source": {
                    "type": "base64",
                    "media_type": image.media_type,
                    "data": base64.b64encode(image.data).decode("ascii"),
                },
            }
            for image in images or []
        ]
        content.append({"type": "text", "text": prompt})

        try:
            response = await self._client.messages.create(
                model=self.model,
                max_tokens=max_tokens or self.settings.llm_max_tokens,
                temperature=temperature
                if temperature is not None
                else self.settings.llm_temperature,
                system=system,
                messages=[{"role": "user", "content": content}],
            )
        except APITimeoutError as e:
            logger.warning("Claude request timed out: %s", e)
            raise LLMTimeoutError(
                "AI service timed out. Please try again in a moment."
            ) from e
        except RateLimitError as e:
            logger.warning("Claude rate limit hit: %s", e)
            raise LLMRateLimitError("Rate limit exceeded. Please try again in a moment.") from e
        except APIError as e:
            logger.error("Claude API error: %s", e)
            raise LLMError(f"AI service error: {e}") from e

        return self._to_completion(response)

    @staticmethod
    def _to_completion(response) -> Completion:
        """Flatten a Messages API response into a Completion."""
        parts = [
            block.text
            for block in response.content or []
            if getattr(block, "type", None) == "text" and block.text and block.text.strip()
        ]
        stop_reason = response.stop_reason
        finish_reason = "stop" if stop_reason in _NORMAL_STOP_REASONS else stop_reason

        return Completion(
            text="\n".join(parts) if parts else None,
            finish_reason=finish_reason,
            safety_ratings={
                "stop_reason": stop_reason,
                "stop_sequence": getattr(response, "stop_sequence", None),
            },
        )
