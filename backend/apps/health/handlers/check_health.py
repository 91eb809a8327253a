"""GET /api/health - Check health of external capabilities."""

import asyncio
from datetime import UTC, datetime

from fastapi import Depends
from pydantic import BaseModel, Field

from config import get_settings
from dependencies import get_ocr_engine
from services import OcrEngine

# --- Response Schemas ---


class ServiceStatus(BaseModel):
    """Status of an individual service."""

    name: str
    status: str = Field(..., description="healthy, degraded, or unhealthy")
    error: str | None = Field(None, description="Error message if not healthy")


class HealthResponse(BaseModel):
    """Health check response."""

    status: str = Field(..., description="Overall status: healthy, degraded, unhealthy")
    version: str = Field(..., description="Application version")
    environment: str = Field(..., description="Environment name")
    services: list[ServiceStatus] = Field(
        ..., description="Individual service statuses"
    )
    timestamp: datetime


# --- Handler ---


def llm_status(api_key: str | None) -> ServiceStatus:
    """The LLM is usable only with a configured API key; it is not called."""
    if api_key and api_key.strip():
        return ServiceStatus(name="llm", status="healthy")
    return ServiceStatus(name="llm", status="unhealthy", error="ANTHROPIC_API_KEY is not set")


async def check_health(ocr: OcrEngine = Depends(get_ocr_engine)) -> HealthResponse:
    """Check LLM configuration and OCR availability.

    OCR is optional for the pipeline (only image extraction needs it), so a
    missing tesseract binary degrades rather than fails the service.
    """
    settings = get_settings()
    ocr_available = await asyncio.to_thread(ocr.is_available)

    services = [
        llm_status(settings.anthropic_api_key),
        ServiceStatus(
            name="ocr",
            status="healthy" if ocr_available else "degraded",
            error=None if ocr_available else "tesseract binary not found",
        ),
    ]

    statuses = [s.status for s in services]
    if all(s == "healthy" for s in statuses):
        overall = "healthy"
    elif any(s == "unhealthy" for s in statuses):
        overall = "unhealthy"
    else:
        overall = "degraded"

    return HealthResponse(
        status=overall,
        version="0.1.0",
        environment=settings.environment,
        services=services,
        timestamp=datetime.now(UTC),
    )
