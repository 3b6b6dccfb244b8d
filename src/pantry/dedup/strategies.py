"""
Brand-relationship strategies for Pantry.

Two interchangeable strategies decide whether two normalized names are
a generic product and one of its brands, or two competing brands of the
same product:

    - StaticBrandMatcher: substring lookups against the taxonomy tables
    - ClassifierBrandMatcher: asks an external brand classifier about
      each name and falls back to PatternBrandDetector when it fails

Both expose ``match(a, b) -> MatchOutcome`` so the detector does not
care which one is active.
"""

import logging
import re
import time
from abc import ABC, abstractmethod
from concurrent.futures import Future, ThreadPoolExecutor
from concurrent.futures import TimeoutError as FutureTimeoutError
from typing import List, Optional, Tuple

from pantry.classifiers.base import BrandClassifier
from pantry.core.config import ClassifierConfig
from pantry.core.models import BrandDetectionResult, MatchOutcome, MatchStage, SuggestedAction
from pantry.dedup.taxonomy import Taxonomy

logger = logging.getLogger(__name__)

GENERIC_BRAND_CONFIDENCE = 0.85
SAME_CATEGORY_BRANDS_CONFIDENCE = 0.75
DEADLINE_SLACK = 1.0


def _generic_brand_outcome(generic: str, brand: str, brand_first: bool) -> MatchOutcome:
    if brand_first:
        reason = f'Brand "{brand}" matches generic term "{generic}"'
    else:
        reason = f'Generic term "{generic}" matches brand "{brand}"'
    return MatchOutcome(
        is_match=True,
        confidence=GENERIC_BRAND_CONFIDENCE,
        reason=reason,
        stage=MatchStage.BRAND,
        suggested_action=SuggestedAction.MERGE,
    )


def _competing_brands_outcome(brand_a: str, brand_b: str, category: str) -> MatchOutcome:
    return MatchOutcome(
        is_match=True,
        confidence=SAME_CATEGORY_BRANDS_CONFIDENCE,
        reason=f'Both "{brand_a}" and "{brand_b}" are {category} brands',
        stage=MatchStage.BRAND,
        suggested_action=SuggestedAction.MERGE,
    )


class BrandMatcher(ABC):
    """Base class for brand-relationship strategies."""

    name = "brand"

    @abstractmethod
    def match(self, a: str, b: str) -> MatchOutcome:
        """Compare two normalized names for a brand relationship.

        Args:
            a: Normalized name of the new item
            b: Normalized name of an existing item

        Returns:
            MatchOutcome; never raises
        """
        pass


class StaticBrandMatcher(BrandMatcher):
    """Brand detection from the taxonomy's generic -> brands table."""

    name = "static"

    def __init__(self, taxonomy: Taxonomy):
        self.taxonomy = taxonomy

    @staticmethod
    def _first_brand(name: str, brands: Tuple[str, ...]) -> Optional[str]:
        for brand in brands:
            if brand in name:
                return brand
        return None

    def match(self, a: str, b: str) -> MatchOutcome:
        for generic, brands in self.taxonomy.brand_entries():
            a_generic = generic in a
            b_generic = generic in b
            a_brand = self._first_brand(a, brands)
            b_brand = self._first_brand(b, brands)

            if a_generic and b_brand:
                return _generic_brand_outcome(generic, b_brand, brand_first=False)
            if b_generic and a_brand:
                return _generic_brand_outcome(generic, a_brand, brand_first=True)
            if a_brand and b_brand and a_brand != b_brand:
                return _competing_brands_outcome(a_brand, b_brand, generic)

        return MatchOutcome.no_match(MatchStage.BRAND)


# Local fallback tables: (pattern, category) for brands and
# (pattern, generic term) for generic words.
BRAND_PATTERNS: List[Tuple[re.Pattern[str], str]] = [
    (re.compile(r"\b(oreo|chips ahoy|nutter butter|keebler|pepperidge farm)\b", re.I), "cookies"),
    (re.compile(r"\b(cheerios|frosted flakes|lucky charms|froot loops|special k)\b", re.I), "cereal"),
    (re.compile(r"\b(coca cola|pepsi|sprite|dr pepper|mountain dew)\b", re.I), "soda"),
    (re.compile(r"\b(lay's|doritos|cheetos|pringles|ruffles)\b", re.I), "chips"),
    (re.compile(r"\b(kraft|sargento|tillamook|philadelphia)\b", re.I), "cheese"),
    (re.compile(r"\b(tide|persil|gain|arm & hammer)\b", re.I), "detergent"),
    (re.compile(r"\b(dawn|joy|palmolive)\b", re.I), "dish soap"),
    (re.compile(r"\b(dove|ivory|dial|olay)\b", re.I), "soap"),
]

GENERIC_PATTERNS: List[Tuple[re.Pattern[str], str]] = [
    (re.compile(r"\bcookies?\b", re.I), "cookies"),
    (re.compile(r"\bcereal\b", re.I), "cereal"),
    (re.compile(r"\b(?:soda|soft drinks?)\b", re.I), "soda"),
    (re.compile(r"\bchips?\b", re.I), "chips"),
    (re.compile(r"\bcheese\b", re.I), "cheese"),
    (re.compile(r"\bdetergent\b", re.I), "detergent"),
    (re.compile(r"\bdish soap\b", re.I), "dish soap"),
    (re.compile(r"\bsoap\b", re.I), "soap"),
]


class PatternBrandDetector:
    """Keyword-pattern brand detection used when the classifier is unavailable."""

    def __init__(
        self,
        brand_patterns: Optional[List[Tuple[re.Pattern[str], str]]] = None,
        generic_patterns: Optional[List[Tuple[re.Pattern[str], str]]] = None,
    ):
        self.brand_patterns = tuple(brand_patterns or BRAND_PATTERNS)
        self.generic_patterns = tuple(generic_patterns or GENERIC_PATTERNS)

    def detect(self, product_name: str) -> BrandDetectionResult:
        name = (product_name or "").lower()
        detected_brands: List[str] = []
        generic_terms: List[str] = []
        category = "generic"

        for pattern, brand_category in self.brand_patterns:
            found = pattern.search(name)
            if found:
                detected_brands.append(found.group(1))
                category = brand_category

        for pattern, term in self.generic_patterns:
            if pattern.search(name):
                generic_terms.append(term)
                if category == "generic":
                    category = term

        return BrandDetectionResult(
            detected_brands=detected_brands, generic_terms=generic_terms, category=category
        )


class ClassifierBrandMatcher(BrandMatcher):
    """Brand detection through an external classifier with a local fallback.

    Classifier failures of any kind are logged and answered by the
    fallback detector; they never reach the caller.
    """

    name = "classifier"

    def __init__(
        self,
        classifier: Optional[BrandClassifier],
        fallback: Optional[PatternBrandDetector] = None,
        deadline: Optional[float] = None,
    ):
        self.classifier = classifier
        self.fallback = fallback or PatternBrandDetector()
        self.deadline = deadline if deadline is not None else self._default_deadline(classifier)

    @staticmethod
    def _default_deadline(classifier: Optional[BrandClassifier]) -> float:
        """Seconds to wait for both detections: every attempt's timeout plus backoff slack."""
        config = getattr(classifier, "config", None)
        if not isinstance(config, ClassifierConfig):
            config = ClassifierConfig()
        return config.timeout * max(1, config.max_retries) + DEADLINE_SLACK

    def detect(self, product_name: str) -> BrandDetectionResult:
        if self.classifier is None:
            return self.fallback.detect(product_name)

        try:
            return self.classifier.detect(product_name)
        except Exception as e:
            logger.warning(
                f"Brand classifier failed for {product_name!r}, falling back to pattern matching: {e}"
            )
            return self.fallback.detect(product_name)

    def _detect_pair(self, a: str, b: str) -> Tuple[BrandDetectionResult, BrandDetectionResult]:
        if self.classifier is None:
            return self.fallback.detect(a), self.fallback.detect(b)

        executor = ThreadPoolExecutor(max_workers=2, thread_name_prefix="brand-detect")
        try:
            ends_at = time.monotonic() + self.deadline
            future_a = executor.submit(self.detect, a)
            future_b = executor.submit(self.detect, b)
            return self._collect(a, future_a, ends_at), self._collect(b, future_b, ends_at)
        finally:
            # A classifier still running past the deadline is abandoned, not joined.
            executor.shutdown(wait=False, cancel_futures=True)

    def _collect(self, name: str, future: Future, ends_at: float) -> BrandDetectionResult:
        try:
            return future.result(timeout=max(0.0, ends_at - time.monotonic()))
        except FutureTimeoutError:
            logger.warning(
                f"Brand classifier timed out for {name!r} after {self.deadline:.1f}s, "
                f"falling back to pattern matching"
            )
            return self.fallback.detect(name)

    def match(self, a: str, b: str) -> MatchOutcome:
        detection_a, detection_b = self._detect_pair(a, b)
        return self.compare(detection_a, detection_b)

    @staticmethod
    def compare(
        detection_a: BrandDetectionResult, detection_b: BrandDetectionResult
    ) -> MatchOutcome:
        """Apply the brand rules to two detection results."""
        if detection_a.generic_terms and detection_b.has_brand:
            if any(
                term == detection_b.category or term in detection_b.generic_terms
                for term in detection_a.generic_terms
            ):
                return _generic_brand_outcome(
                    detection_a.generic_terms[0], detection_b.detected_brands[0], brand_first=False
                )

        if detection_a.has_brand and detection_b.generic_terms:
            if any(
                term == detection_a.category or term in detection_a.generic_terms
                for term in detection_b.generic_terms
            ):
                return _generic_brand_outcome(
                    detection_b.generic_terms[0], detection_a.detected_brands[0], brand_first=True
                )

        if detection_a.has_brand and detection_b.has_brand:
            if detection_a.category == detection_b.category and detection_a.category != "generic":
                brand_a = detection_a.detected_brands[0]
                brand_b = detection_b.detected_brands[0]
                if brand_a != brand_b:
                    return _competing_brands_outcome(brand_a, brand_b, detection_a.category)

        return MatchOutcome.no_match(MatchStage.BRAND)
