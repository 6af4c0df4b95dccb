"""Domain and result models for bill scanning."""

from __future__ import annotations

from dataclasses import dataclass

from pydantic import BaseModel, ConfigDict, Field


@dataclass(frozen=True)
class CategoryRule:
    """Keyword and vendor matching rule for one spending category."""

    name: str
    keywords: tuple[str, ...] = ()
    vendors: tuple[str, ...] = ()
    subcategories: tuple[str, ...] = ()


class LineItem(BaseModel):
    """A single row recovered from the receipt body."""

    model_config = ConfigDict(populate_by_name=True)

    description: str
    quantity: str | None = None
    unit_price: str | None = Field(default=None, alias="unitPrice")
    amount: str | None = None


class ExtractedBill(BaseModel):
    """Structured fields extracted from raw OCR text.

    Numeric values are kept as the strings found in the text (with the
    first comma turned into a dot); nothing is parsed or validated.
    """

    model_config = ConfigDict(populate_by_name=True)

    raw_text: str = Field(alias="rawText")
    total_amount: str | None = Field(default=None, alias="totalAmount")
    date: str | None = None
    vendor_name: str | None = Field(default=None, alias="vendorName")
    items: list[LineItem] = Field(default_factory=list)


class CategoryMatch(BaseModel):
    """Category assigned to a purchase by the rule-based categorizer."""

    category: str
    confidence: int = Field(ge=0, le=100)
    subcategory: str | None = None


class ScanResult(BaseModel):
    """Extracted bill together with its category."""

    bill: ExtractedBill
    category: CategoryMatch
