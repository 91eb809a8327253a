"""Fixed result shapes for text and image analysis.

Model replies are validated into these models so every successful analysis
has exactly the documented keys: unknown keys are dropped, missing strings
become None, missing lists become [] and a bare string where a list is
expected becomes a one-item list.
"""

from typing import Any, get_args, get_origin

from pydantic import BaseModel, ConfigDict, field_validator


def _as_text(value: Any) -> str | None:
    if value is None:
        return None
    if isinstance(value, (list, tuple)):
        value = "; ".join(str(v).strip() for v in value if v is not None and str(v).strip())
    text = str(value).strip()
    return text or None


def _as_list(value: Any) -> list[str] | None:
    if value is None:
        return None
    items = value if isinstance(value, (list, tuple)) else [value]
    return [str(item).strip() for item in items if item is not None and str(item).strip()]


class AnalysisResult(BaseModel):
    """Shared coercion rules; subclasses declare the fields."""

    model_config = ConfigDict(extra="ignore")

    @field_validator("*", mode="before")
    @classmethod
    def coerce_field(cls, value: Any, info) -> Any:
        annotation = cls.model_fields[info.field_name].annotation
        members = (annotation,) if get_origin(annotation) is list else get_args(annotation)
        if not any(get_origin(member) is list for member in members):
            return _as_text(value)
        coerced = _as_list(value)
        if coerced is None and type(None) not in members:
            return []
        return coerced


class TextAnalysis(AnalysisResult):
    summary: str | None = None
    diagnosis: str | None = None
    key_findings: list[str] = []
    causes: list[str] | None = []
    recommendations: str | None = None
    precautions: list[str] = []
    remedies: list[str] = []
    important_notes: str | None = None
    treatment_plan: str | None = None
    lifestyle_changes: list[str] = []
    urgent_concerns: str | None = None


class ImageAnalysis(AnalysisResult):
    summary: str | None = None
    diagnosis: str | None = None
    key_findings: list[str] = []
    precautions: list[str] | None = []
    remedies: list[str] | None = []
    urgent_concerns: str | None = None
    anatomical_structures: list[str] = []


def normalize_analysis(data: dict[str, Any], schema: type[AnalysisResult]) -> dict[str, Any]:
    """Validate a recovered JSON object into schema and dump it back to a dict.

    Raises:
        ValidationError: If a value cannot be coerced.
    """
    return schema.model_validate(data).model_dump()


__all__ = [
    "AnalysisResult",
    "ImageAnalysis",
    "TextAnalysis",
    "normalize_analysis",
]
