"""
Duplicate detection module for Pantry.

This module decides whether a new shopping-list item is the same product
as one already on the list, a brand/generic variant of it, a related item
from the same category, or something different.

Main classes:
    - DuplicateDetector: Runs the matcher cascade and builds decisions
    - StaticBrandMatcher: Brand relationships from the taxonomy tables
    - ClassifierBrandMatcher: Brand relationships from an external
      classifier with a pattern-based fallback
    - Taxonomy: Read-only generic/brand and category tables

Example:
    >>> from pantry.core.config import DetectionConfig
    >>> from pantry.dedup import DuplicateDetector
    >>>
    >>> detector = DuplicateDetector(DetectionConfig(brand_strategy="static"))
    >>> decision = detector.check_for_duplicate("apples", [{"productName": "Apple"}])
    >>> detector.get_suggestions(decision)
"""

from pantry.dedup.detector import DuplicateDetector, get_suggestions, item_name
from pantry.dedup.matchers import (
    category_match,
    exact_match,
    levenshtein_similarity,
    similarity_match,
)
from pantry.dedup.strategies import (
    BrandMatcher,
    ClassifierBrandMatcher,
    PatternBrandDetector,
    StaticBrandMatcher,
)
from pantry.dedup.taxonomy import Taxonomy, load_taxonomy, validate_tables

__all__ = [
    "DuplicateDetector",
    "get_suggestions",
    "item_name",
    "exact_match",
    "category_match",
    "similarity_match",
    "levenshtein_similarity",
    "BrandMatcher",
    "StaticBrandMatcher",
    "ClassifierBrandMatcher",
    "PatternBrandDetector",
    "Taxonomy",
    "load_taxonomy",
    "validate_tables",
]
