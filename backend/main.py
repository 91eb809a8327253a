"""Main FastAPI application for MedLens.

Entry point for the application. Configures:
- FastAPI app with settings
- CORS and rate limiting middleware
- Exception handlers
- Route registration
"""

import logging
import uuid
from contextlib import asynccontextmanager
from pathlib import Path

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from config import get_app_config, get_cors_config, get_settings, setup_logging
from dependencies import get_ocr_engine
from middleware import RateLimitConfig, RateLimitMiddleware
from responses import ResponseCode, error_dict
from router import documents_router
from router import router as api_router

settings = get_settings()

# Setup logging
setup_logging(settings.log_level)
logger = logging.getLogger(__name__)


# =============================================================================
# Lifespan Management
# =============================================================================


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Manage application lifespan - startup and shutdown."""
    # Startup
    logger.info("Starting MedLens...")
    logger.info("Environment: %s", settings.environment)
    logger.info("LLM Model: %s", settings.llm_model)

    upload_dir = Path(settings.upload_dir).resolve()
    upload_dir.mkdir(parents=True, exist_ok=True)
    logger.info("Upload directory: %s", upload_dir)

    # OCR is optional: only image extraction needs it
    if get_ocr_engine().is_available():
        logger.info("✓ Tesseract OCR available")
    else:
        logger.warning("Tesseract OCR not found; image text extraction will return empty text")

    logger.info("MedLens started successfully")

    yield

    # Shutdown
    logger.info("Shutting down MedLens...")


# Create FastAPI app with lifespan
app_config = get_app_config()
app = FastAPI(lifespan=lifespan, **app_config)

# Add CORS middleware
cors_config = get_cors_config()
app.add_middleware(CORSMiddleware, **cors_config)

# Add rate limiting middleware (protects upload and LLM endpoints)
if settings.rate_limit_enabled:
    app.add_middleware(RateLimitMiddleware, config=RateLimitConfig.from_settings(settings))


# =============================================================================
# Middleware
# =============================================================================


@app.middleware("http")
async def add_request_id(request: Request, call_next):
    """Add request ID to all requests for tracing."""
    request_id = str(uuid.uuid4())[:8]
    request.state.request_id = request_id

    response = await call_next(request)
    response.headers["X-Request-ID"] = request_id

    return response


# =============================================================================
# Exception Handlers
# =============================================================================

# Framework-raised HTTP errors mapped onto response codes
HTTP_ERROR_CODES = {
    404: ResponseCode.ROUTE_NOT_FOUND,
    405: ResponseCode.VALIDATION_ERROR,
    413: ResponseCode.FILE_TOO_LARGE,
    429: ResponseCode.LLM_RATE_LIMIT,
}


def _json_error(
    request: Request,
    status_code: int,
    code: ResponseCode,
    message: str,
    details: dict | None = None,
) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content=error_dict(
            code=code,
            custom_message=message,
            error_details=details,
            request_id=getattr(request.state, "request_id", None),
        ),
    )


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(
    request: Request,
    exc: RequestValidationError,
) -> JSONResponse:
    """Malformed request bodies are client input errors (400, not 422)."""
    errors = exc.errors()
    field_name = errors[0].get("loc", ["unknown"])[-1] if errors else "unknown"

    return _json_error(
        request,
        400,
        ResponseCode.VALIDATION_ERROR,
        f"Validation failed for field '{field_name}'",
        {"validation_errors": [str(e.get("msg")) for e in errors]},
    )


@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(
    request: Request,
    exc: StarletteHTTPException,
) -> JSONResponse:
    """Handle HTTP exceptions."""
    code = HTTP_ERROR_CODES.get(exc.status_code, ResponseCode.INTERNAL_ERROR)
    return _json_error(request, exc.status_code, code, str(exc.detail))


@app.exception_handler(Exception)
async def general_exception_handler(
    request: Request,
    exc: Exception,
) -> JSONResponse:
    """Last resort: log with traceback and return a generic 500."""
    logger.exception("Unhandled exception: %s", exc)
    return _json_error(
        request,
        500,
        ResponseCode.INTERNAL_ERROR,
        "An unexpected error occurred",
        {"exception_type": type(exc).__name__},
    )


# =============================================================================
# Routes
# =============================================================================

# Document routes live at the root (/upload, /analyze, /extract)
app.include_router(documents_router)

# Include API routes
app.include_router(api_router, prefix="/api")


@app.get("/", include_in_schema=False)
async def root():
    """Root endpoint - shows API info."""
    return {
        "name": "MedLens",
        "description": "Medical document analysis and chat",
        "docs": "/api/docs",
        "health": "/api/health",
    }


# =============================================================================
# Development Server
# =============================================================================

if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "main:app",
        host="0.0.0.0",
        port=8000,
        reload=True,
    )
