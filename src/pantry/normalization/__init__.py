"""
Normalization module for Pantry.

This module provides tools for canonicalizing product names before they
are compared.
"""

from pantry.normalization.normalizer import (
    MODIFIERS,
    SIZE_UNITS,
    STORE_BRANDS,
    fold_plural,
    normalize_product_name,
)

__all__ = [
    "normalize_product_name",
    "fold_plural",
    "MODIFIERS",
    "SIZE_UNITS",
    "STORE_BRANDS",
]
