"""Health routes - registers all health endpoints."""

from fastapi import APIRouter

from apps.health.handlers import HealthResponse, check_health

router = APIRouter(prefix="/health", tags=["Health"])

# GET /health - LLM configuration and OCR availability
router.get("", response_model=HealthResponse, summary="Service health")(check_health)
