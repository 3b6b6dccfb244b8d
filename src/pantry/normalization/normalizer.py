"""
Product name normalization.

Turns raw shopping-list input into the canonical form the matchers
compare: lower-case, with descriptive modifiers, size/quantity tokens
and store-brand prefixes removed, whitespace collapsed.
"""

import re
from typing import Optional

MODIFIERS = (
    "organic",
    "fresh",
    "premium",
    "select",
    "choice",
    "natural",
    r"free[\-\s]range",
    r"cage[\-\s]free",
)

SIZE_UNITS = (
    "oz", "lb", "g", "kg", "ml", "l", "count", "ct", "pk", "pack", "gallon", "quart", "pint",
)

STORE_BRANDS = (
    "great value",
    "market pantry",
    "good & gather",
    "kroger brand",
    "simple truth",
)

_MODIFIER_RE = re.compile(r"\b(?:" + "|".join(MODIFIERS) + r")\b", re.IGNORECASE)
_SIZE_RE = re.compile(
    r"\b\d+(?:\.\d+)?\s*(?:" + "|".join(SIZE_UNITS) + r")\b", re.IGNORECASE
)
# Fat/strength percentages ("2% milk") carry no identity either.
_PERCENT_RE = re.compile(r"\b\d+(?:\.\d+)?\s*%")
_STORE_BRAND_RE = re.compile(
    r"\b(?:" + "|".join(re.escape(b) for b in STORE_BRANDS) + r")\b", re.IGNORECASE
)
_WHITESPACE_RE = re.compile(r"\s+")


def _normalize_once(name: str) -> str:
    name = name.lower().strip()
    name = _MODIFIER_RE.sub("", name)
    name = _SIZE_RE.sub("", name)
    name = _PERCENT_RE.sub("", name)
    name = _STORE_BRAND_RE.sub("", name)
    return _WHITESPACE_RE.sub(" ", name).strip()


def normalize_product_name(raw: Optional[str]) -> str:
    """Normalize a product name for comparison.

    Removals can expose new matches (``"great organic value"`` only reads
    as a store brand once ``organic`` is gone), so the pipeline is applied
    until the result stops changing. That keeps the function idempotent.

    Args:
        raw: Product name as entered by the user

    Returns:
        Canonical name; empty string for empty or missing input

    Example:
        >>> normalize_product_name("Great Value 2% Milk 1 Gallon")
        'milk'
    """
    if not raw:
        return ""

    current = _normalize_once(str(raw))
    while True:
        following = _normalize_once(current)
        if following == current:
            return current
        current = following


def fold_plural(word: str) -> str:
    """Reduce a simple English plural to its singular form.

    Handles only the two regular endings: "ies" becomes "y", and a
    trailing "s" is dropped unless it follows another "s".
    """
    if word.endswith("ies"):
        return word[:-3] + "y"
    if word.endswith("s") and not word.endswith("ss"):
        return word[:-1]
    return word
