"""Structured analysis of document text and images via the LLM.

Both entry points return either a dict shaped by services.analysis_schema
(TextAnalysis or ImageAnalysis) or an error record built with
services.types.failure(). A malformed or blocked model reply never raises.
"""

import io
import logging
from typing import Any

from PIL import Image
from pydantic import ValidationError

from llm.base import BaseLLMService, LLMError, LLMRateLimitError, LLMTimeoutError
from llm.prompts.analysis import (
    ANALYSIS_SYSTEM_PROMPT,
    build_image_analysis_prompt,
    build_text_analysis_prompt,
)
from services.analysis_schema import (
    AnalysisResult,
    ImageAnalysis,
    TextAnalysis,
    normalize_analysis,
)
from services.json_recovery import recover_json
from services.types import Completion, FailureKind, ImageInput, failure
from utils import truncate_text

logger = logging.getLogger(__name__)

DEFAULT_MAX_CHARS = 100_000
JPEG_QUALITY = 85


class StructuredAnalyzer:
    """Turns document text or image bytes into a fixed-schema summary."""

    def __init__(self, llm: BaseLLMService, max_chars: int = DEFAULT_MAX_CHARS) -> None:
        self.llm = llm
        self.max_chars = max_chars

    async def analyze_text(self, text: str) -> dict[str, Any]:
        """Analyze extracted document text."""
        document_text, truncated = truncate_text(text, self.max_chars)
        if truncated:
            logger.info(
                "Analysis input truncated from %d to %d characters",
                len(text),
                self.max_chars,
            )

        return await self._run(build_text_analysis_prompt(document_text), TextAnalysis)

    async def analyze_image(self, image_bytes: bytes) -> dict[str, Any]:
        """Analyze a raw image (any Pillow-readable format)."""
        try:
            encoded = self.prepare_image(image_bytes)
        except Exception as e:
            logger.warning("Rejected unreadable image data: %s", e)
            return failure(FailureKind.INVALID_INPUT, f"Failed to process image data: {e}")

        return await self._run(
            build_image_analysis_prompt(),
            ImageAnalysis,
            images=[ImageInput(data=encoded, media_type="image/jpeg")],
        )

    @staticmethod
    def prepare_image(image_bytes: bytes) -> bytes:
        """Decode, normalize to RGB and re-encode as JPEG."""
        with Image.open(io.BytesIO(image_bytes)) as image:
            image.load()
            rgb = image.convert("RGB") if image.mode != "RGB" else image
            buffer = io.BytesIO()
            rgb.save(buffer, format="JPEG", quality=JPEG_QUALITY)
        return buffer.getvalue()

    async def _run(
        self,
        prompt: str,
        schema: type[AnalysisResult],
        images: list[ImageInput] | None = None,
    ) -> dict[str, Any]:
        try:
            completion = await self.llm.generate(
                prompt,
                ANALYSIS_SYSTEM_PROMPT,
                images=images,
                temperature=0,
            )
        except LLMRateLimitError as e:
            return failure(FailureKind.AI_RATE_LIMITED, str(e))
        except LLMTimeoutError as e:
            return failure(FailureKind.AI_UNAVAILABLE, str(e))
        except LLMError as e:
            logger.exception("AI request failed during analysis")
            return failure(FailureKind.AI_UNAVAILABLE, f"AI request failed: {e}")

        return parse_completion(completion, schema)


def parse_completion(
    completion: Completion,
    schema: type[AnalysisResult] = TextAnalysis,
) -> dict[str, Any]:
    """Apply the reply-handling chain to a completion.

    1. No text: report the finish reason (blocked) or an empty reply.
    2. Fenced/embedded JSON object, then the whole text as JSON.
    3. Otherwise an error record that keeps the raw text.
    4. Shape the recovered object into schema.
    """
    text = completion.text
    if not text or not text.strip():
        if completion.finish_reason != "stop":
            logger.warning("AI generation blocked: finish_reason=%s", completion.finish_reason)
            return failure(
                FailureKind.AI_BLOCKED,
                f"AI generation was blocked (finish reason: {completion.finish_reason})",
                safety_ratings=completion.safety_ratings,
            )
        return failure(FailureKind.AI_MALFORMED, "AI returned an empty response")

    result = recover_json(text)
    if result is None:
        logger.warning("No valid JSON in AI reply (%d chars)", len(text))
        return failure(
            FailureKind.AI_MALFORMED,
            "No valid JSON found in AI response",
            raw_text=text,
        )

    try:
        return normalize_analysis(result, schema)
    except ValidationError as e:
        logger.warning("AI reply did not fit %s: %s", schema.__name__, e)
        return failure(
            FailureKind.AI_MALFORMED,
            "AI response did not match the expected schema",
            raw_text=text,
        )
