"""Tests for the Anthropic LLM adapter."""

from types import SimpleNamespace
from unittest.mock import AsyncMock

import httpx
import pytest
from anthropic import APITimeoutError

from llm.anthropic import AnthropicService
from llm.base import LLMTimeoutError
from services.types import ImageInput


def make_response(blocks, stop_reason="end_turn", stop_sequence=None):
    return SimpleNamespace(
        content=[SimpleNamespace(type="text", text=text) for text in blocks],
        stop_reason=stop_reason,
        stop_sequence=stop_sequence,
    )


class TestAnthropicService:
    """Tests for AnthropicService."""

    @pytest.fixture(autouse=True)
    def setup(self, mock_settings):
        """Set up test fixtures."""
        mock_settings.llm_timeout_seconds = 60.0
        mock_settings.llm_connect_timeout_seconds = 10.0
        self.service = AnthropicService(settings=mock_settings)
        self.create = AsyncMock(return_value=make_response(['{"summary": "ok"}']))
        self.service._client.messages.create = self.create

    def test_normal_stop_maps_to_stop(self):
        """Test end_turn is reported as a normal finish."""
        completion = AnthropicService._to_completion(make_response(["a", "  ", "b"]))
        assert completion.text == "a\nb"
        assert completion.finish_reason == "stop"

    def test_refusal_has_no_text(self):
        """Test a refusal keeps its stop reason and no text."""
        completion = AnthropicService._to_completion(make_response([], stop_reason="refusal"))
        assert completion.text is None
        assert completion.finish_reason == "refusal"
        assert completion.safety_ratings["stop_reason"] == "refusal"

    @pytest.mark.asyncio
    async def test_generate_sends_images_before_text(self):
        """Test image blocks precede the prompt text."""
        await self.service.generate(
            "Describe", "system", images=[ImageInput(data=b"\xff\xd8jpeg")], temperature=0
        )

        kwargs = self.create.call_args.kwargs
        content = kwargs["messages"][0]["content"]
        assert [block["type"] for block in content] == ["image", "text"]
        assert content[0]["source"]["media_type"] == "image/jpeg"
        assert kwargs["temperature"] == 0
        assert kwargs["system"] == "system"

    @pytest.mark.asyncio
    async def test_generate_uses_default_temperature(self):
        """Test settings temperature is used when none is given."""
        await self.service.generate("hi", "system")
        assert self.create.call_args.kwargs["temperature"] == 0.2

    @pytest.mark.asyncio
    async def test_timeout_is_translated(self):
        """Test SDK timeouts become LLMTimeoutError."""
        request = httpx.Request("POST", "https://api.anthropic.com/v1/messages")
        self.create.side_effect = APITimeoutError(request=request)

        with pytest.raises(LLMTimeoutError):
            await self.service.generate("hi", "system")
