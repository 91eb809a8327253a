"""OCR for image documents (Tesseract via pytesseract, OpenCV preprocessing).

Best-effort: every failure ends in an empty string, never an exception.
"""

import logging

import cv2
import numpy as np
import pytesseract
from PIL import Image

logger = logging.getLogger(__name__)

# Page segmentation modes, tried in order
PSM_SINGLE_BLOCK = "--psm 6"
PSM_FULLY_AUTOMATIC = "--psm 3"


class OcrEngine:
    """Image-to-text with a preprocessing fallback chain and a PSM retry."""

    def __init__(self, tesseract_cmd: str | None = None) -> None:
        if tesseract_cmd:
            pytesseract.pytesseract.tesseract_cmd = tesseract_cmd

    def is_available(self) -> bool:
        """Check whether the tesseract binary can be executed."""
        try:
            pytesseract.get_tesseract_version()
            return True
        except Exception:
            return False

    def preprocess(self, image: Image.Image) -> Image.Image | None:
        """Grayscale, median blur, Otsu binarization, then dilate + erode.

        Falls back to plain grayscale if OpenCV processing fails, and returns
        None if even that fails.
        """
        try:
            arr = np.array(image.convert("RGB"))
            gray = cv2.cvtColor(arr, cv2.COLOR_RGB2GRAY)
            denoised = cv2.medianBlur(gray, 3)
            _, binary = cv2.threshold(
                denoised, 0, 255, cv2.THRESH_BINARY + cv2.THRESH_OTSU
            )
            kernel = np.ones((2, 2), np.uint8)
            cleaned = cv2.dilate(binary, kernel, iterations=1)
            cleaned = cv2.erode(cleaned, kernel, iterations=1)
            return Image.fromarray(cleaned)
        except Exception as e:
            logger.warning("OCR preprocessing failed, using grayscale: %s", e)

        try:
            return image.convert("L")
        except Exception as e:
            logger.error("Grayscale conversion failed, skipping OCR: %s", e)
            return None

    def image_to_text(self, image: Image.Image) -> str:
        """Run OCR on an already-opened image."""
        processed = self.preprocess(image)
        if processed is None:
            return ""

        for config in (PSM_SINGLE_BLOCK, PSM_FULLY_AUTOMATIC):
            try:
                text = pytesseract.image_to_string(processed, config=config).strip()
            except Exception as e:
                logger.warning("Tesseract failed with %s: %s", config, e)
                continue
            if text:
                return text
            logger.info("OCR with %s returned no text", config)

        return ""

    def extract(self, file_path: str) -> str:
        """Open an image file and OCR it."""
        try:
            with Image.open(file_path) as image:
                image.load()
                return self.image_to_text(image)
        except Exception as e:
            logger.error("Failed to open image %s for OCR: %s", file_path, e)
            return ""
