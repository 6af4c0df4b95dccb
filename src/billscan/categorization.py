"""Keyword and vendor based purchase categorization."""

from __future__ import annotations

import logging
import math
from typing import TYPE_CHECKING

from billscan.models import CategoryMatch, CategoryRule

if TYPE_CHECKING:
    from collections.abc import Sequence

logger = logging.getLogger(__name__)

FALLBACK_CATEGORY = "Other"
MIN_CONFIDENCE = 30
VENDOR_WEIGHT = 10
KEYWORD_WEIGHT = 5

# Declaration order decides ties between equally scored categories.
# fmt: off
CATEGORY_RULES: tuple[CategoryRule, ...] = (
    CategoryRule(
        name="Electronics",
        keywords=(
            "phone", "laptop", "computer", "tablet", "headphones", "speaker",
            "camera", "tv", "monitor", "keyboard", "mouse", "charger", "cable",
            "electronics", "gadget", "smartphone", "iphone", "android",
            "macbook", "ipad",
        ),
        vendors=(
            "apple", "samsung", "sony", "lg", "dell", "hp", "lenovo", "asus",
            "microsoft", "google", "amazon", "best buy", "circuit city",
            "fry's",
        ),
        subcategories=("Mobile Phones", "Computers", "Audio/Video", "Accessories"),
    ),
    CategoryRule(
        name="Home & Garden",
        keywords=(
            "furniture", "sofa", "chair", "table", "bed", "mattress", "lamp",
            "garden", "plant", "tools", "drill", "hammer", "paint", "brush",
            "home improvement", "decor", "curtain", "rug", "kitchen",
            "appliance",
        ),
        vendors=(
            "ikea", "home depot", "lowes", "wayfair", "bed bath beyond",
            "target", "walmart",
        ),
        subcategories=("Furniture", "Tools", "Decor", "Kitchen", "Garden"),
    ),
    CategoryRule(
        name="Clothing & Accessories",
        keywords=(
            "shirt", "pants", "dress", "shoes", "jacket", "coat", "hat", "bag",
            "wallet", "watch", "jewelry", "clothing", "apparel", "fashion",
            "sneakers", "boots", "jeans", "sweater",
        ),
        vendors=(
            "nike", "adidas", "zara", "h&m", "uniqlo", "gap", "old navy",
            "macy's", "nordstrom", "amazon fashion",
        ),
        subcategories=("Clothing", "Shoes", "Accessories", "Jewelry"),
    ),
    CategoryRule(
        name="Food & Beverages",
        keywords=(
            "grocery", "food", "restaurant", "coffee", "tea", "juice", "water",
            "snack", "meal", "dining", "lunch", "dinner", "breakfast", "pizza",
            "burger", "sandwich",
        ),
        vendors=(
            "starbucks", "mcdonalds", "subway", "walmart", "target",
            "whole foods", "kroger", "safeway", "costco", "trader joe's",
        ),
        subcategories=("Groceries", "Restaurants", "Beverages", "Snacks"),
    ),
    CategoryRule(
        name="Health & Beauty",
        keywords=(
            "pharmacy", "medicine", "prescription", "vitamin", "supplement",
            "cosmetics", "skincare", "shampoo", "toothpaste", "soap", "perfume",
            "makeup", "health", "beauty", "personal care",
        ),
        vendors=("cvs", "walgreens", "rite aid", "sephora", "ulta", "pharmacy"),
        subcategories=(
            "Pharmacy", "Cosmetics", "Personal Care", "Health Supplements",
        ),
    ),
    CategoryRule(
        name="Automotive",
        keywords=(
            "car", "auto", "vehicle", "gas", "fuel", "oil", "tire", "battery",
            "repair", "maintenance", "service", "parts", "automotive",
        ),
        vendors=(
            "shell", "exxon", "chevron", "bp", "mobil", "jiffy lube",
            "valvoline", "autozone", "advance auto",
        ),
        subcategories=("Fuel", "Maintenance", "Parts", "Repairs"),
    ),
    CategoryRule(
        name="Books & Media",
        keywords=(
            "book", "magazine", "newspaper", "movie", "dvd", "cd", "music",
            "game", "software", "subscription", "streaming",
        ),
        vendors=(
            "amazon", "barnes noble", "netflix", "spotify", "steam",
            "apple music", "google play",
        ),
        subcategories=("Books", "Movies", "Music", "Games", "Subscriptions"),
    ),
    CategoryRule(
        name="Services",
        keywords=(
            "service", "repair", "maintenance", "cleaning", "consultation",
            "professional", "labor", "installation", "support",
        ),
        subcategories=(
            "Professional Services", "Repairs", "Maintenance", "Consultation",
        ),
    ),
    CategoryRule(name=FALLBACK_CATEGORY),
)
# fmt: on

# Shared by every category listing the subcategory.
SUBCATEGORY_KEYWORDS: dict[str, tuple[str, ...]] = {
    "Mobile Phones": ("phone", "smartphone", "iphone", "android", "cell"),
    "Computers": ("laptop", "computer", "desktop", "pc", "mac"),
    "Audio/Video": ("headphones", "speaker", "tv", "monitor", "camera"),
    "Accessories": ("charger", "cable", "case", "screen protector"),
    "Furniture": ("sofa", "chair", "table", "bed", "mattress"),
    "Tools": ("drill", "hammer", "screwdriver", "saw"),
    "Kitchen": ("kitchen", "cooking", "utensil", "pot", "pan"),
    "Clothing": ("shirt", "pants", "dress", "jacket"),
    "Shoes": ("shoes", "sneakers", "boots", "sandals"),
    "Groceries": ("grocery", "food", "produce", "dairy"),
    "Restaurants": ("restaurant", "dining", "takeout", "delivery"),
    "Fuel": ("gas", "fuel", "gasoline", "diesel"),
    "Maintenance": ("oil change", "service", "maintenance", "inspection"),
}


def categorize(
    text: str,
    vendor_name: str | None = None,
    product_name: str | None = None,
    *,
    rules: Sequence[CategoryRule] = CATEGORY_RULES,
) -> CategoryMatch:
    """Assign a spending category to a purchase.

    Vendor hits weigh 10, keyword hits 5; the score is scaled by the size
    of the category's rule lists. Rules are scanned in order and a later
    rule must score strictly higher to win. Anything under
    MIN_CONFIDENCE falls back to "Other" with full confidence.
    """
    vendor = (vendor_name or "").lower()
    corpus = f"{text.lower()} {vendor} {(product_name or '').lower()}"

    best = CategoryMatch(category=FALLBACK_CATEGORY, confidence=0)
    for rule in rules:
        score, matches = _score(rule, corpus, vendor)
        confidence = min(100, _round_half_up(100 * score / max(1, _rule_size(rule))))

        if confidence > best.confidence and matches > 0:
            best = CategoryMatch(
                category=rule.name,
                confidence=confidence,
                subcategory=resolve_subcategory(corpus, rule.subcategories),
            )

    if best.confidence < MIN_CONFIDENCE:
        best = CategoryMatch(category=FALLBACK_CATEGORY, confidence=100)

    logger.info(
        "Categorized %r (vendor=%r) as %s",
        text[:100],
        vendor_name,
        best.model_dump(),
    )
    return best


def resolve_subcategory(corpus: str, subcategories: Sequence[str]) -> str | None:
    """Pick the first subcategory with a keyword in the corpus.

    Defaults to the first listed subcategory when none match.
    """
    for subcategory in subcategories:
        keywords = SUBCATEGORY_KEYWORDS.get(subcategory, ())
        if any(keyword in corpus for keyword in keywords):
            return subcategory
    return subcategories[0] if subcategories else None


def list_categories(rules: Sequence[CategoryRule] = CATEGORY_RULES) -> list[str]:
    """Return all category names in table order."""
    return [rule.name for rule in rules]


def subcategories_for(
    category: str, rules: Sequence[CategoryRule] = CATEGORY_RULES
) -> list[str]:
    """Return the subcategories of a category, empty if unknown."""
    for rule in rules:
        if rule.name == category:
            return list(rule.subcategories)
    return []


def _score(rule: CategoryRule, corpus: str, vendor: str) -> tuple[int, int]:
    """Return (score, number of matched vendor/keyword strings)."""
    score = 0
    matches = 0
    for name in rule.vendors:
        if name in vendor or name in corpus:
            score += VENDOR_WEIGHT
            matches += 1
    for keyword in rule.keywords:
        if keyword in corpus:
            score += KEYWORD_WEIGHT
            matches += 1
    return score, matches


def _rule_size(rule: CategoryRule) -> int:
    return len(rule.keywords) + len(rule.vendors)


def _round_half_up(value: float) -> int:
    # round() rounds halves to even; stored confidences round them up.
    return math.floor(value + 0.5)
