"""Pytest configuration and fixtures for MedLens tests."""

import os
import sys
import tempfile

# Set required env vars BEFORE any imports that might trigger Settings
os.environ.setdefault("ANTHROPIC_API_KEY", "test-anthropic-key")
os.environ.setdefault("UPLOAD_DIR", tempfile.mkdtemp(prefix="medlens-uploads-"))
os.environ.setdefault("RATE_LIMIT_ENABLED", "false")

from unittest.mock import AsyncMock, MagicMock

import pytest

# Add backend to path
sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

from services.types import Completion  # noqa: E402

ANALYSIS_JSON = (
    '{"summary": "Routine blood panel.", "diagnosis": null, '
    '"key_findings": ["Hemoglobin 13.5 g/dL"], "recommendations": "Repeat in a year."}'
)


@pytest.fixture
def mock_settings():
    """Mock application settings."""
    settings = MagicMock()
    settings.anthropic_api_key = "test-anthropic-key"
    settings.environment = "test"
    settings.debug = True
    settings.llm_model = "claude-sonnet-4-20250514"
    settings.llm_temperature = 0.2
    settings.llm_max_tokens = 4096
    settings.max_file_size_mb = 16
    settings.max_file_size_bytes = 16 * 1024 * 1024
    settings.analysis_max_chars = 100_000
    settings.chat_context_max_chars = 50_000
    settings.pdf_min_text_chars = 50
    settings.session_ttl_hours = 24
    return settings


@pytest.fixture
def mock_llm():
    """Mock LLM service returning a well-formed JSON analysis."""
    service = AsyncMock()
    service.generate.return_value = Completion(
        text=ANALYSIS_JSON,
        finish_reason="stop",
        safety_ratings={"stop_reason": "end_turn", "stop_sequence": None},
    )
    return service


@pytest.fixture
def mock_ocr():
    """Mock OCR engine."""
    engine = MagicMock()
    engine.extract.return_value = "OCR TEXT"
    engine.is_available.return_value = True
    return engine


@pytest.fixture
def sample_report_text():
    """Sample medical report text for testing."""
    return (
        "PATIENT: Jane Doe\n"
        "TEST: Complete Blood Count\n"
        "Hemoglobin: 13.5 g/dL (reference 12.0-15.5)\n"
        "White blood cells: 11.2 x10^9/L (reference 4.5-11.0) HIGH\n"
        "Platelets: 250 x10^9/L (reference 150-400)\n"
    )


@pytest.fixture
def sample_pdf(tmp_path, sample_report_text):
    """A small text PDF generated with PyMuPDF."""
    import fitz

    path = tmp_path / "report.pdf"
    doc = fitz.open()
    page = doc.new_page()
    page.insert_text((72, 72), sample_report_text, fontsize=11)
    doc.save(str(path))
    doc.close()
    return path


@pytest.fixture
def sample_docx(tmp_path):
    """A DOCX with one blank paragraph between two real ones."""
    from docx import Document

    path = tmp_path / "notes.docx"
    doc = Document()
    doc.add_paragraph("Discharge summary")
    doc.add_paragraph("   ")
    doc.add_paragraph("Follow up in two weeks")
    doc.save(str(path))
    return path


@pytest.fixture
def sample_png_bytes():
    """A tiny valid PNG image."""
    import io

    from PIL import Image

    buffer = io.BytesIO()
    Image.new("RGBA", (8, 8), (255, 0, 0, 128)).save(buffer, format="PNG")
    return buffer.getvalue()
