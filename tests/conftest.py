"""Shared test fixtures."""

from __future__ import annotations

from typing import TYPE_CHECKING

import pytest
from PIL import Image

from billscan.config import OcrConfig

if TYPE_CHECKING:
    from pathlib import Path

SAMPLE_RECEIPT_TEXT = """\
BEST BUY #1234
123 Main Street

Date: 03/15/2024
USB Cable 2 9.99 19.98
Laptop Stand 34.50
Tax 4.76
Total: $59.24
Thank you for shopping
"""


@pytest.fixture
def sample_receipt_text() -> str:
    """Provide OCR output of a typical electronics store receipt."""
    return SAMPLE_RECEIPT_TEXT


@pytest.fixture
def ocr_config() -> OcrConfig:
    """Provide a test OCR configuration."""
    return OcrConfig(language="eng", page_segmentation_mode=6)


@pytest.fixture
def receipt_image(tmp_path: Path) -> Path:
    """Provide a small blank PNG standing in for a receipt photo."""
    path = tmp_path / "receipt.png"
    Image.new("RGB", (40, 20), color="white").save(path)
    return path
