"""Configuration via environment variables."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass

from dotenv import load_dotenv

load_dotenv()

_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


@dataclass(frozen=True)
class OcrConfig:
    """Tesseract OCR configuration."""

    language: str = "eng"
    page_segmentation_mode: int = 6
    tesseract_cmd: str | None = None


def get_ocr_language() -> str:
    """Return the Tesseract language code, defaulting to eng."""
    return os.environ.get("OCR_LANGUAGE", "eng")


def get_ocr_psm() -> int:
    """Return the Tesseract page segmentation mode.

    Defaults to 6, a single uniform block of text.
    """
    raw = os.environ.get("OCR_PSM", "6")
    try:
        return int(raw)
    except ValueError:
        msg = f"OCR_PSM must be an integer, got {raw!r}"
        raise ValueError(msg) from None


def get_tesseract_cmd() -> str | None:
    """Return the TESSERACT_CMD override, or None to use PATH."""
    return os.environ.get("TESSERACT_CMD") or None


def get_ocr_config() -> OcrConfig:
    """Build OCR configuration from environment variables.

    Optional: OCR_LANGUAGE (default eng), OCR_PSM (default 6),
    TESSERACT_CMD (default: tesseract on PATH)
    """
    return OcrConfig(
        language=get_ocr_language(),
        page_segmentation_mode=get_ocr_psm(),
        tesseract_cmd=get_tesseract_cmd(),
    )


def get_log_level() -> int:
    """Return the numeric LOG_LEVEL, defaulting to WARNING."""
    name = os.environ.get("LOG_LEVEL", "WARNING").upper()
    if name not in _LOG_LEVELS:
        msg = f"LOG_LEVEL must be one of {', '.join(_LOG_LEVELS)}, got {name!r}"
        raise ValueError(msg)
    return int(getattr(logging, name))
