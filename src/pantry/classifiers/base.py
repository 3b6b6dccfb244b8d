"""
Base brand classifier module for Pantry.

A brand classifier is an external capability that, given a normalized
product name, reports the brands and generic terms it contains and a
best-guess category. Implementations may raise ClassifierError; the
classifier-assisted brand strategy is responsible for falling back.
"""

from abc import ABC, abstractmethod
from typing import Any, Dict, Iterable, Optional

from pydantic import ValidationError as PydanticValidationError

from pantry.core.config import ClassifierConfig
from pantry.core.models import BrandDetectionResult
from pantry.utils.exceptions import ClassifierResponseError


def clean_detection(
    detected_brands: Iterable[str], generic_terms: Iterable[str], category: Optional[str]
) -> BrandDetectionResult:
    """Lower-case and strip classifier output so it compares with local detection."""
    return BrandDetectionResult(
        detected_brands=[b.strip().lower() for b in detected_brands if b.strip()],
        generic_terms=[t.strip().lower() for t in generic_terms if t.strip()],
        category=(category or "").strip().lower() or "generic",
    )


class BrandClassifier(ABC):
    """Abstract base class for brand classifiers.

    Example:
        >>> class KeywordClassifier(BrandClassifier):
        ...     name = "keyword"
        ...     def detect(self, product_name):
        ...         return BrandDetectionResult(category="generic")
    """

    name = "classifier"

    def __init__(self, config: ClassifierConfig):
        if not isinstance(config, ClassifierConfig):
            raise ValueError("config must be a ClassifierConfig instance")

        self.config = config

    @abstractmethod
    def detect(self, product_name: str) -> BrandDetectionResult:
        """Detect brands and generic terms in a product name.

        Args:
            product_name: Normalized product name

        Returns:
            BrandDetectionResult for the name

        Raises:
            ClassifierError: On transport, response or parsing failures
        """
        pass

    def _parse_result(self, payload: Any) -> BrandDetectionResult:
        """Validate a wire payload against the brand-detection contract."""
        if not isinstance(payload, dict):
            raise ClassifierResponseError(
                self.name, f"Expected a JSON object, got {type(payload).__name__}"
            )
        try:
            result = BrandDetectionResult.model_validate(payload)
        except PydanticValidationError as e:
            raise ClassifierResponseError(self.name, f"Payload does not match contract: {e}")
        return clean_detection(result.detected_brands, result.generic_terms, result.category)

    @staticmethod
    def build_request(product_name: str) -> Dict[str, str]:
        return {"productName": product_name}
