"""Configuration and settings for MedLens application.

Uses Pydantic Settings for fail-fast validation on startup.
All required environment variables are validated at import time.
"""

import logging
import sys
from functools import lru_cache
from typing import Any

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


def setup_logging(level: str = "INFO") -> None:
    """Configure application logging.

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR)
    """
    logging.basicConfig(
        level=getattr(logging, level.upper()),
        format="%(asctime)s | %(levelname)-8s | %(name)s | %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
        handlers=[logging.StreamHandler(sys.stdout)],
    )

    # Reduce noise from third-party libraries
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)
    logging.getLogger("anthropic").setLevel(logging.WARNING)
    logging.getLogger("pdfminer").setLevel(logging.WARNING)
    logging.getLogger("PIL").setLevel(logging.WARNING)


class Settings(BaseSettings):
    """Application settings loaded from environment variables.

    Raises ValidationError on startup if required variables are missing.
    """

    model_config = SettingsConfigDict(
        env_file=("../.env", ".env"),
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # API Keys (required)
    anthropic_api_key: str = Field(..., description="Anthropic API key for Claude")

    # Application Settings
    environment: str = Field(default="development", description="Environment name")
    debug: bool = Field(default=False, description="Debug mode")
    log_level: str = Field(default="INFO", description="Root log level")

    # LLM Settings
    llm_model: str = Field(
        default="claude-sonnet-4-20250514",
        description="Claude model for analysis and chat (must support images)",
    )
    llm_temperature: float = Field(
        default=0.2, description="LLM temperature for factual responses"
    )
    llm_max_tokens: int = Field(default=4096, description="Max tokens for generation")
    llm_timeout_seconds: float = Field(
        default=60.0, description="Total timeout for a single LLM call in seconds"
    )
    llm_connect_timeout_seconds: float = Field(
        default=10.0, description="Connection timeout for LLM calls in seconds"
    )

    # Upload Settings
    upload_dir: str = Field(default="uploads", description="Directory for uploaded files")
    max_file_size_mb: int = Field(default=16, description="Max upload size in MB")

    # Pipeline Limits
    analysis_max_chars: int = Field(
        default=100_000, description="Max document characters sent for analysis"
    )
    chat_context_max_chars: int = Field(
        default=50_000, description="Max document characters used to ground chat"
    )
    pdf_min_text_chars: int = Field(
        default=50, description="Below this, a PDF is flagged as likely image-based"
    )

    # OCR Settings
    tesseract_cmd: str | None = Field(
        default=None, description="Path to the tesseract binary (None = use PATH)"
    )

    # Session Settings
    session_ttl_hours: int = Field(
        default=24, description="Session cookie and document context TTL in hours"
    )

    # Rate Limiting
    rate_limit_enabled: bool = Field(default=True, description="Enable rate limiting")
    rate_limit_burst: int = Field(default=5, description="Max requests in 10 seconds")
    rate_limit_per_minute: int = Field(default=20, description="Max requests per minute")
    rate_limit_per_hour: int = Field(default=200, description="Max requests per hour")

    @field_validator("anthropic_api_key")
    @classmethod
    def validate_api_key_not_empty(cls, v: str, info) -> str:
        """Ensure API keys are not empty strings."""
        if not v or not v.strip():
            raise ValueError(f"{info.field_name} cannot be empty")
        return v.strip()

    @property
    def max_file_size_bytes(self) -> int:
        """Get max file size in bytes."""
        return self.max_file_size_mb * 1024 * 1024


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance.

    Uses lru_cache to ensure settings are only loaded once.
    """
    return Settings()


# CORS Configuration
CORS_CONFIG: dict[str, Any] = {
    "allow_origins": [
        "http://localhost:3000",
        "http://localhost:5173",
        "http://127.0.0.1:3000",
        "http://127.0.0.1:5173",
    ],
    "allow_credentials": True,
    "allow_methods": ["GET", "POST", "DELETE", "OPTIONS"],
    "allow_headers": ["*"],
    "expose_headers": ["*"],
    "max_age": 600,
}

# FastAPI App Configuration
APP_CONFIG: dict[str, Any] = {
    "title": "MedLens",
    "description": (
        "Medical document analysis backend. Upload reports or scans, get a "
        "structured AI summary, then chat about the analyzed document."
    ),
    "version": "0.1.0",
    "docs_url": "/api/docs",
    "redoc_url": "/api/redoc",
    "openapi_url": "/api/openapi.json",
    "openapi_tags": [
        {
            "name": "Health",
            "description": "Health check and service status",
        },
        {
            "name": "Documents",
            "description": "Document upload, extraction and analysis",
        },
        {
            "name": "Chat",
            "description": "Document-grounded chat",
        },
        {
            "name": "Session",
            "description": "Session document context",
        },
    ],
}


def get_app_config() -> dict[str, Any]:
    """Get FastAPI application configuration."""
    return APP_CONFIG.copy()


def get_cors_config() -> dict[str, Any]:
    """Get CORS middleware configuration."""
    return CORS_CONFIG.copy()
