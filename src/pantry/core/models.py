"""Core data models for the Pantry duplicate detection engine."""

from enum import Enum
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field


class SuggestedAction(str, Enum):
    """What the caller should do with a new list item."""

    REJECT = "reject"
    MERGE = "merge"
    ALLOW = "allow"


class MatchStage(str, Enum):
    """Cascade stage that produced a match."""

    EXACT = "exact"
    BRAND = "brand"
    CATEGORY = "category"
    SIMILARITY = "similarity"


class ProductItem(BaseModel):
    """A shopping-list item as seen by the engine.

    Only ``product_name`` is inspected; any other fields are kept as
    extras and handed back untouched.

    Attributes:
        product_name: Name the user entered for the item
    """

    product_name: str = Field(default="", alias="productName")

    model_config = ConfigDict(extra="allow", populate_by_name=True)


class BrandDetectionResult(BaseModel):
    """Brands and generic terms found in a single product name.

    Field aliases follow the brand-detection wire format
    (``detectedBrands``, ``genericTerms``, ``category``).

    Attributes:
        detected_brands: Brand names found in the product name
        generic_terms: Category-level words found in the product name
        category: Best-guess category, "generic" when nothing matched
    """

    detected_brands: List[str] = Field(default_factory=list, alias="detectedBrands")
    generic_terms: List[str] = Field(default_factory=list, alias="genericTerms")
    category: str = "generic"

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    @property
    def has_brand(self) -> bool:
        return bool(self.detected_brands)


class MatchOutcome(BaseModel):
    """Result of a single matcher stage.

    Attributes:
        is_match: Whether the stage found a relationship
        confidence: Strength of the signal in [0, 1]
        reason: Human-readable explanation
        stage: Stage that produced the outcome
        suggested_action: Action the stage itself would recommend
    """

    is_match: bool
    confidence: float = Field(default=0.0, ge=0.0, le=1.0)
    reason: str = ""
    stage: Optional[MatchStage] = None
    suggested_action: SuggestedAction = SuggestedAction.ALLOW

    model_config = ConfigDict(frozen=True)

    @classmethod
    def no_match(cls, stage: Optional[MatchStage] = None) -> "MatchOutcome":
        return cls(is_match=False, confidence=0.0, reason="", stage=stage)


class DuplicateDecision(BaseModel):
    """Final answer for one duplicate check.

    Attributes:
        is_duplicate: Whether the new item relates to an existing one
        confidence: Confidence of the winning signal (0 when none)
        reason: Human-readable explanation
        existing_item: The caller's record that matched, unchanged
        suggested_action: reject, merge or allow
        stage: Cascade stage that fired, None when nothing matched
    """

    is_duplicate: bool
    confidence: float = Field(default=0.0, ge=0.0, le=1.0)
    reason: str = ""
    existing_item: Optional[Any] = None
    suggested_action: SuggestedAction = SuggestedAction.ALLOW
    stage: Optional[MatchStage] = None

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    @classmethod
    def not_duplicate(cls) -> "DuplicateDecision":
        return cls(
            is_duplicate=False,
            confidence=0.0,
            reason="No duplicates found",
            suggested_action=SuggestedAction.ALLOW,
        )

    def to_dict(self) -> Dict[str, Any]:
        """Serialize with the camelCase keys list handlers expect."""
        existing = self.existing_item
        if isinstance(existing, BaseModel):
            existing = existing.model_dump(by_alias=True)
        return {
            "isDuplicate": self.is_duplicate,
            "confidence": self.confidence,
            "reason": self.reason,
            "existingItem": existing,
            "suggestedAction": self.suggested_action.value,
            "stage": self.stage.value if self.stage else None,
        }
