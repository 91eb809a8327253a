"""Tests for the OCR engine."""

import cv2
import pytesseract
from PIL import Image

from services.ocr import PSM_FULLY_AUTOMATIC, PSM_SINGLE_BLOCK, OcrEngine


class TestOcrEngine:
    """Tests for OcrEngine."""

    def setup_method(self):
        """Set up test fixtures."""
        self.engine = OcrEngine()
        self.image = Image.new("RGB", (40, 20), "white")

    def test_preprocess_returns_binary_image(self):
        """Test OpenCV preprocessing produces a single-channel image."""
        processed = self.engine.preprocess(self.image)
        assert processed is not None
        assert processed.mode == "L"
        assert processed.size == self.image.size

    def test_preprocess_falls_back_to_grayscale(self, monkeypatch):
        """Test plain grayscale is used when OpenCV fails."""

        def broken(*args, **kwargs):
            raise RuntimeError("blur failed")

        monkeypatch.setattr(cv2, "medianBlur", broken)

        processed = self.engine.preprocess(self.image)
        assert processed is not None
        assert processed.mode == "L"

    def test_retries_with_second_psm_when_first_is_empty(self, monkeypatch):
        """Test PSM 3 is tried when PSM 6 finds nothing."""
        configs = []

        def fake_ocr(image, config=""):
            configs.append(config)
            return "" if config == PSM_SINGLE_BLOCK else "  Glucose 95 mg/dL \n"

        monkeypatch.setattr(pytesseract, "image_to_string", fake_ocr)

        assert self.engine.image_to_text(self.image) == "Glucose 95 mg/dL"
        assert configs == [PSM_SINGLE_BLOCK, PSM_FULLY_AUTOMATIC]

    def test_first_psm_result_wins(self, monkeypatch):
        """Test no retry when PSM 6 finds text."""
        configs = []

        def fake_ocr(image, config=""):
            configs.append(config)
            return "Hemoglobin"

        monkeypatch.setattr(pytesseract, "image_to_string", fake_ocr)

        assert self.engine.image_to_text(self.image) == "Hemoglobin"
        assert configs == [PSM_SINGLE_BLOCK]

    def test_tesseract_failure_returns_empty(self, monkeypatch):
        """Test tesseract errors never propagate."""

        def broken(image, config=""):
            raise pytesseract.TesseractNotFoundError()

        monkeypatch.setattr(pytesseract, "image_to_string", broken)

        assert self.engine.image_to_text(self.image) == ""

    def test_extract_unreadable_file(self, tmp_path):
        """Test a non-image file yields empty text."""
        path = tmp_path / "scan.png"
        path.write_bytes(b"not an image")

        assert self.engine.extract(str(path)) == ""

    def test_extract_reads_file(self, tmp_path, monkeypatch):
        """Test extract opens the file and runs OCR."""
        path = tmp_path / "scan.png"
        self.image.save(path)
        monkeypatch.setattr(pytesseract, "image_to_string", lambda image, config="": "ok")

        assert self.engine.extract(str(path)) == "ok"
