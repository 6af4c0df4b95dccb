"""Receipt scanning pipeline: OCR, field extraction, categorization."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from billscan.categorization import categorize
from billscan.extraction import extract_bill
from billscan.models import ScanResult
from billscan.ocr import TesseractRecognizer

if TYPE_CHECKING:
    from pathlib import Path

    from billscan.ocr import Recognizer

logger = logging.getLogger(__name__)


def scan_receipt(
    image_path: str | Path,
    product_name: str | None = None,
    *,
    recognizer: Recognizer | None = None,
) -> ScanResult:
    """Recognize a receipt image and return its fields and category.

    Accepts an optional recognizer for dependency injection in tests.
    ExtractionFailure from the recognizer propagates unchanged.
    """
    if recognizer is None:
        recognizer = TesseractRecognizer()

    raw_text = recognizer.recognize(image_path)
    return parse_text(raw_text, product_name)


def parse_text(raw_text: str, product_name: str | None = None) -> ScanResult:
    """Extract and categorize text that has already been recognized."""
    bill = extract_bill(raw_text)
    category = categorize(bill.raw_text, bill.vendor_name, product_name)
    logger.debug(
        "Parsed bill from %s: %d items, category %s",
        bill.vendor_name or "unknown vendor",
        len(bill.items),
        category.category,
    )
    return ScanResult(bill=bill, category=category)
