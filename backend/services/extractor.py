"""Text extraction for uploaded documents.

Handles:
- PDF via PyMuPDF, falling back to pdfplumber
- DOCX via python-docx (non-empty paragraphs, document order)
- XLSX via pandas/openpyxl (one rendered table per sheet)
- Images via OCR (see services.ocr)

extract() never raises: any failure is logged and becomes an empty string.
Callers decide what an empty result means.
"""

import logging

import fitz  # PyMuPDF
import pandas as pd
import pdfplumber
from docx import Document as DocxDocument

from services.ocr import OcrEngine
from services.types import IMAGE_EXTENSIONS

logger = logging.getLogger(__name__)

SUPPORTED_EXTENSIONS = frozenset({"pdf", "docx", "xlsx"}) | IMAGE_EXTENSIONS


class TextExtractor:
    """Dispatches a file to a type-specific extraction strategy."""

    def __init__(self, ocr: OcrEngine, pdf_min_text_chars: int = 50) -> None:
        self.ocr = ocr
        self.pdf_min_text_chars = pdf_min_text_chars

    def extract(self, file_path: str, file_extension: str) -> str:
        """Extract plain text from a file.

        Args:
            file_path: Path to the file on disk.
            file_extension: Extension with or without the leading dot.

        Returns:
            Extracted text, or "" if the type is unsupported or every
            strategy failed.
        """
        ext = file_extension.lower().lstrip(".")
        if ext not in SUPPORTED_EXTENSIONS:
            logger.warning("Unsupported file type for extraction: %r", ext)
            return ""

        try:
            if ext == "pdf":
                return self._extract_pdf(file_path)
            if ext == "docx":
                return self._extract_docx(file_path)
            if ext == "xlsx":
                return self._extract_xlsx(file_path)
            return self.ocr.extract(file_path)

        except Exception as e:
            logger.exception("Extraction failed for %s: %s", file_path, e)
            return ""

    def _extract_pdf(self, file_path: str) -> str:
        """PyMuPDF first, pdfplumber if that fails or finds nothing."""
        text = ""
        try:
            text = self._extract_pdf_pymupdf(file_path)
        except Exception as e:
            logger.warning("PyMuPDF failed on %s, trying pdfplumber: %s", file_path, e)

        if not text.strip():
            try:
                text = self._extract_pdf_pdfplumber(file_path)
            except Exception as e:
                logger.error("pdfplumber failed on %s: %s", file_path, e)
                text = ""

        text = text.strip()
        if len(text) < self.pdf_min_text_chars:
            logger.warning(
                "PDF %s yielded only %d characters; it may be image-based",
                file_path,
                len(text),
            )
        return text

    def _extract_pdf_pymupdf(self, file_path: str) -> str:
        with fitz.open(file_path) as doc:
            text_parts = []
            for page_num, page in enumerate(doc, start=1):
                try:
                    page_text = page.get_text()
                except Exception as e:
                    logger.warning("Failed to extract text from page %d: %s", page_num, e)
                    continue
                if page_text and page_text.strip():
                    text_parts.append(page_text)
        return "\n".join(text_parts)

    def _extract_pdf_pdfplumber(self, file_path: str) -> str:
        with pdfplumber.open(file_path) as pdf:
            text_parts = [page.extract_text() or "" for page in pdf.pages]
        return "\n".join(part for part in text_parts if part.strip())

    def _extract_docx(self, file_path: str) -> str:
        doc = DocxDocument(file_path)
        return "\n".join(p.text for p in doc.paragraphs if p.text.strip())

    def _extract_xlsx(self, file_path: str) -> str:
        # sheet_name=None returns every sheet, in workbook order
        sheets = pd.read_excel(file_path, sheet_name=None, engine="openpyxl")
        rendered = []
        for name, frame in sheets.items():
            # to_string() of an empty frame is pandas' "Empty DataFrame" banner
            body = "  ".join(map(str, frame.columns)) if frame.empty else frame.to_string(index=False)
            rendered.append(f"--- Sheet: {name} ---\n{body}")
        return "\n\n".join(rendered)
