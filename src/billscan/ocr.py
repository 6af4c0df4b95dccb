"""Tesseract OCR backend."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Protocol, runtime_checkable

import pytesseract
from PIL import Image

from billscan.config import OcrConfig, get_ocr_config

if TYPE_CHECKING:
    from pathlib import Path

logger = logging.getLogger(__name__)

CHAR_WHITELIST = (
    "0123456789abcdefghijklmnopqrstuvwxyzABCDEFGHIJKLMNOPQRSTUVWXYZ$€£.,- "
)


class ExtractionFailure(Exception):
    """Raised when text cannot be recognized from a receipt image."""


@runtime_checkable
class Recognizer(Protocol):
    """Protocol for OCR backends."""

    def recognize(self, image_path: str | Path) -> str: ...


class TesseractRecognizer:
    """Recognize receipt text with Tesseract.

    Tuned for receipts: a single block of text, interword spacing kept
    and recognition limited to alphanumerics, currency symbols and
    basic punctuation.
    """

    def __init__(self, config: OcrConfig | None = None) -> None:
        self.config = config if config is not None else get_ocr_config()
        if self.config.tesseract_cmd:
            pytesseract.pytesseract.tesseract_cmd = self.config.tesseract_cmd

    def recognize(self, image_path: str | Path) -> str:
        """Return the raw text recognized in the image at image_path."""
        logger.info("Running OCR on %s", image_path)
        try:
            with Image.open(image_path) as image:
                text: str = pytesseract.image_to_string(
                    image,
                    lang=self.config.language,
                    config=self.tesseract_options(),
                )
        except (OSError, pytesseract.TesseractError) as exc:
            logger.error("OCR failed for %s: %s", image_path, exc)
            msg = f"Failed to extract text from image {image_path}"
            raise ExtractionFailure(msg) from exc

        logger.debug("Recognized %d characters from %s", len(text), image_path)
        return text

    def tesseract_options(self) -> str:
        """Build the Tesseract command-line options string."""
        return (
            f"--psm {self.config.page_segmentation_mode}"
            " -c preserve_interword_spaces=1"
            f' -c "tessedit_char_whitelist={CHAR_WHITELIST}"'
        )
