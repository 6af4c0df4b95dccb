"""Rule-based field extraction from raw OCR receipt text."""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from typing import TYPE_CHECKING

from billscan.models import ExtractedBill, LineItem

if TYPE_CHECKING:
    from collections.abc import Callable, Iterable

logger = logging.getLogger(__name__)

VENDOR_SCAN_LINES = 5
VENDOR_MIN_LENGTH = 3
VENDOR_MAX_LENGTH = 80
VENDOR_EXCLUDED_WORDS = ("RECEIPT", "INVOICE", "BILL", "DATE", "TIME")

_NUMBER = r"([0-9]+[.,]?[0-9]*)"
_PRICE = r"([0-9.,]+)"
# Item descriptions never span a line break of any kind.
_LINE_CHAR = r"[^\r\n\u2028\u2029]"
_NUMERIC_DATE = r"[0-9]{1,2}[/.-][0-9]{1,2}[/.-][0-9]{2,4}"
_MONTHS = "jan|feb|mar|apr|may|jun|jul|aug|sep|oct|nov|dec"

_VENDOR_REJECT_START = re.compile(r"[0-9$]")
_VENDOR_STRIP = re.compile(r"[^a-zA-Z0-9\s&.-]")
_WHITESPACE = re.compile(r"\s+")


@dataclass(frozen=True)
class FieldPattern:
    """A pattern whose first capture group is the field value."""

    regex: re.Pattern[str]
    normalize: Callable[[str], str] | None = None

    def find(self, line: str) -> str | None:
        match = self.regex.search(line)
        if match is None or not match.group(1):
            return None
        value = match.group(1)
        return self.normalize(value) if self.normalize else value


@dataclass(frozen=True)
class RowPattern:
    """A whole-line pattern that turns a receipt row into a LineItem."""

    regex: re.Pattern[str]
    build: Callable[[re.Match[str]], LineItem]

    def find(self, line: str) -> LineItem | None:
        match = self.regex.fullmatch(line)
        if match is None:
            return None
        return self.build(match)


def normalize_decimal(value: str) -> str:
    """Replace the first comma with a dot.

    Only the first occurrence is replaced, so "1,234,56" becomes
    "1.234,56". Stored bills depend on this exact form.
    """
    return value.replace(",", ".", 1)


def _full_row(match: re.Match[str]) -> LineItem:
    return LineItem(
        description=match.group(1).strip(),
        quantity=match.group(2),
        unit_price=normalize_decimal(match.group(3)),
        amount=normalize_decimal(match.group(4)),
    )


def _simple_row(match: re.Match[str]) -> LineItem:
    return LineItem(
        description=match.group(1).strip(),
        amount=normalize_decimal(match.group(2)),
    )


def _multiplier_row(match: re.Match[str]) -> LineItem:
    return LineItem(
        description=match.group(2).strip(),
        quantity=match.group(1),
        amount=normalize_decimal(match.group(3)),
    )


TOTAL_PATTERNS: tuple[FieldPattern, ...] = (
    # "Total: $42.50", "GRAND TOTAL 10,00 EUR"
    FieldPattern(
        re.compile(
            r"(?:total|balance|amount|grand\s*total|net\s*total|subtotal)"
            rf"\s*:?\s*\$?{_NUMBER}\s*(?:USD|INR|EUR|\$)?",
            re.IGNORECASE,
        ),
        normalize_decimal,
    ),
    # "$42.50 total"
    FieldPattern(
        re.compile(rf"\$\s*{_NUMBER}\s*(?:total|balance)", re.IGNORECASE),
        normalize_decimal,
    ),
    # "42.50 balance"
    FieldPattern(
        re.compile(rf"{_NUMBER}\s*(?:total|balance)", re.IGNORECASE),
        normalize_decimal,
    ),
)

DATE_PATTERNS: tuple[FieldPattern, ...] = (
    FieldPattern(re.compile(rf"({_NUMERIC_DATE})")),
    FieldPattern(re.compile(r"([0-9]{4}[/.-][0-9]{1,2}[/.-][0-9]{1,2})")),
    FieldPattern(
        re.compile(rf"([0-9]{{1,2}}\s+(?:{_MONTHS})\s+[0-9]{{2,4}})", re.IGNORECASE)
    ),
    FieldPattern(
        re.compile(rf"(?:date|dated?)\s*:?\s*({_NUMERIC_DATE})", re.IGNORECASE)
    ),
)

# Order matters: a full row also satisfies the simple row pattern.
ITEM_PATTERNS: tuple[RowPattern, ...] = (
    RowPattern(
        re.compile(rf"({_LINE_CHAR}{{3,30}})\s+([0-9]+)\s+{_PRICE}\s+{_PRICE}"),
        _full_row,
    ),
    RowPattern(
        re.compile(rf"({_LINE_CHAR}{{3,40}})\s+\$?{_PRICE}"),
        _simple_row,
    ),
    RowPattern(
        re.compile(
            rf"([0-9]+)\s*x\s*({_LINE_CHAR}{{3,30}})\s*=?\s*\$?{_PRICE}",
            re.IGNORECASE,
        ),
        _multiplier_row,
    ),
)


def extract_bill(raw_text: str) -> ExtractedBill:
    """Extract vendor, date, total and line items from raw OCR text.

    Every field is resolved at most once, on the first line that yields a
    value; line items are collected from every line. Fields that cannot be
    found are left unset, nothing is raised for noisy or empty input.
    """
    lines = split_lines(raw_text)
    bill = ExtractedBill(raw_text=raw_text)

    for index, line in enumerate(lines):
        if bill.total_amount is None:
            bill.total_amount = _first_value(TOTAL_PATTERNS, line)

        if bill.date is None:
            bill.date = _first_value(DATE_PATTERNS, line)

        if bill.vendor_name is None and index < VENDOR_SCAN_LINES:
            bill.vendor_name = _vendor_candidate(line)

        item = _first_item(ITEM_PATTERNS, line)
        if item is not None:
            bill.items.append(item)

    if bill.vendor_name is not None:
        bill.vendor_name = bill.vendor_name.strip()
        if len(bill.vendor_name) < VENDOR_MIN_LENGTH:
            bill.vendor_name = None

    logger.debug(
        "Scanned %d lines: total=%s date=%s vendor=%s items=%d",
        len(lines),
        bill.total_amount is not None,
        bill.date is not None,
        bill.vendor_name is not None,
        len(bill.items),
    )
    return bill


def split_lines(raw_text: str) -> list[str]:
    """Split OCR output into stripped, non-blank lines."""
    stripped = (line.strip() for line in raw_text.split("\n"))
    return [line for line in stripped if line]


def clean_vendor_name(line: str) -> str:
    """Replace disallowed characters with spaces and collapse whitespace."""
    return _WHITESPACE.sub(" ", _VENDOR_STRIP.sub(" ", line)).strip()


def _vendor_candidate(line: str) -> str | None:
    """Return the cleaned vendor name if the line looks like one."""
    if not VENDOR_MIN_LENGTH < len(line) < VENDOR_MAX_LENGTH:
        return None
    upper = line.upper()
    if any(word in upper for word in VENDOR_EXCLUDED_WORDS):
        return None
    if _VENDOR_REJECT_START.match(line):
        return None

    cleaned = clean_vendor_name(line)
    if len(cleaned) < VENDOR_MIN_LENGTH:
        return None
    return cleaned


def _first_value(patterns: Iterable[FieldPattern], line: str) -> str | None:
    for pattern in patterns:
        value = pattern.find(line)
        if value is not None:
            return value
    return None


def _first_item(patterns: Iterable[RowPattern], line: str) -> LineItem | None:
    for pattern in patterns:
        item = pattern.find(line)
        if item is not None:
            return item
    return None
