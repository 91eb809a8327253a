"""Shared types and dataclasses for services.

Provides typed alternatives to dict[str, Any] for better type safety.
"""

from dataclasses import dataclass, field
from datetime import UTC, datetime
from enum import Enum
from typing import Any

IMAGE_EXTENSIONS = frozenset({"png", "jpg", "jpeg", "bmp", "tiff", "tif"})


@dataclass
class UploadedDocument:
    """A file saved by the upload endpoint."""

    file_path: str
    original_filename: str
    file_extension: str

    @property
    def is_image(self) -> bool:
        return self.file_extension in IMAGE_EXTENSIONS


@dataclass
class DocumentContext:
    """The single document a session's chat is grounded in."""

    text: str
    filename: str
    stored_at: datetime = field(default_factory=lambda: datetime.now(UTC))


@dataclass
class ImageInput:
    """Encoded image bytes sent alongside a prompt."""

    data: bytes
    media_type: str = "image/jpeg"


@dataclass
class Completion:
    """Provider-neutral result of a single LLM call.

    finish_reason is "stop" for a normal end of generation; anything else
    (max_tokens, refusal, ...) is passed through from the provider.
    """

    text: str | None
    finish_reason: str | None
    safety_ratings: Any = None


class FailureKind(str, Enum):
    """Why an analysis produced an error record instead of a result."""

    INVALID_INPUT = "invalid_input"
    AI_BLOCKED = "ai_blocked"
    AI_MALFORMED = "ai_malformed"
    AI_UNAVAILABLE = "ai_unavailable"
    AI_RATE_LIMITED = "ai_rate_limited"


def failure(kind: FailureKind, message: str, **extra: Any) -> dict[str, Any]:
    """Build an analysis error record: {error, kind, ...extra}."""
    record: dict[str, Any] = {"error": message, "kind": kind.value}
    record.update({k: v for k, v in extra.items() if v is not None})
    return record


def is_failure(result: dict[str, Any]) -> bool:
    """True if an analysis result is an error record."""
    return "error" in result and "kind" in result
