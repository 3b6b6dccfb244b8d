"""
Main duplicate detector for Pantry.

The DuplicateDetector runs the matcher cascade (exact, brand, category,
similarity) for a new shopping-list item against each existing item and
turns the first positive signal into a DuplicateDecision.
"""

import logging
from collections.abc import Mapping
from typing import Any, Iterable, List, Optional, Sequence, Tuple

from pantry.classifiers import BrandClassifier, create_classifier
from pantry.core.config import BrandStrategy, DetectionConfig, SelectionPolicy
from pantry.core.models import DuplicateDecision, MatchOutcome, MatchStage, SuggestedAction
from pantry.dedup.matchers import category_match, exact_match, similarity_match
from pantry.dedup.strategies import BrandMatcher, ClassifierBrandMatcher, StaticBrandMatcher
from pantry.dedup.taxonomy import Taxonomy
from pantry.normalization import normalize_product_name
from pantry.utils.logging import PerformanceLogger

logger = logging.getLogger(__name__)


def item_name(item: Any) -> str:
    """Read the product name from a caller's item record.

    Accepts mappings with a ``productName`` or ``product_name`` key and
    objects with either attribute. Anything else reads as an empty name.
    """
    if item is None:
        return ""
    if isinstance(item, str):
        return item
    if isinstance(item, Mapping):
        name = item.get("productName", item.get("product_name"))
    else:
        name = getattr(item, "product_name", None)
        if name is None:
            name = getattr(item, "productName", None)
    return name if isinstance(name, str) else ""


def get_suggestions(decision: DuplicateDecision) -> List[str]:
    """Human-readable guidance for a decision."""
    suggestions: List[str] = []

    if decision.suggested_action == SuggestedAction.REJECT:
        suggestions.append("This item appears to be a duplicate")
        suggestions.append("Consider updating the quantity of the existing item instead")
    elif decision.suggested_action == SuggestedAction.MERGE:
        suggestions.append("These items might be related")
        suggestions.append("Consider consolidating into one item")
        suggestions.append("You can specify the exact brand if needed")
    else:
        suggestions.append("These items seem different enough to keep separate")
        if decision.confidence > 0.5:
            suggestions.append("Double-check if you really need both items")

    return suggestions


class DuplicateDetector:
    """Main duplicate detector class.

    Holds the taxonomy and the brand strategy chosen at construction.
    Neither changes afterwards, so one detector can serve concurrent
    ``check_for_duplicate`` calls.

    Example:
        >>> detector = DuplicateDetector()
        >>> decision = detector.check_for_duplicate("cheerios", [{"productName": "cereal"}])
        >>> decision.suggested_action
        <SuggestedAction.REJECT: 'reject'>
    """

    def __init__(
        self,
        config: Optional[DetectionConfig] = None,
        taxonomy: Optional[Taxonomy] = None,
        classifier: Optional[BrandClassifier] = None,
    ):
        """Initialize detector with configuration.

        Args:
            config: Detection configuration (defaults apply when None)
            taxonomy: Tables to use instead of ``config.taxonomy``
            classifier: Classifier for the classifier strategy; built from
                ``config.classifier`` when None
        """
        self.config = config or DetectionConfig()
        self.taxonomy = taxonomy or Taxonomy.from_config(self.config.taxonomy)
        self._brand_matcher = self._create_brand_matcher(classifier)

    def _create_brand_matcher(self, classifier: Optional[BrandClassifier]) -> BrandMatcher:
        """Create brand strategy based on configuration."""
        if self.config.brand_strategy == BrandStrategy.STATIC:
            return StaticBrandMatcher(self.taxonomy)
        elif self.config.brand_strategy == BrandStrategy.CLASSIFIER:
            if classifier is None:
                classifier = create_classifier(self.config.classifier)
            return ClassifierBrandMatcher(classifier)
        else:
            raise ValueError(f"Unknown brand strategy: {self.config.brand_strategy}")

    @property
    def brand_matcher(self) -> BrandMatcher:
        return self._brand_matcher

    def check_for_duplicate(
        self, new_item_name: str, existing_items: Iterable[Any]
    ) -> DuplicateDecision:
        """Check whether a new item duplicates one already on the list.

        Existing items are visited in the order given. With the default
        ``first_match`` selection the first item that produces any positive
        signal decides the result, even if a later item would match more
        strongly.

        Args:
            new_item_name: Name the user wants to add
            existing_items: Items already on the list; each needs a
                product name (see ``item_name``) and is returned unchanged
                as ``existing_item`` when it matches

        Returns:
            DuplicateDecision; "No duplicates found" with action allow when
            nothing matches
        """
        with PerformanceLogger(f"Duplicate check for {new_item_name!r}", logger, level="DEBUG"):
            decision = self._check(new_item_name, existing_items)

        logger.debug(
            f"Decision for {new_item_name!r}: duplicate={decision.is_duplicate} "
            f"stage={decision.stage.value if decision.stage else None} "
            f"confidence={decision.confidence:.2f} action={decision.suggested_action.value}"
        )
        return decision

    def _check(self, new_item_name: str, existing_items: Iterable[Any]) -> DuplicateDecision:
        normalized_new = normalize_product_name(new_item_name)
        best: Optional[DuplicateDecision] = None

        for existing_item in existing_items:
            decision = self._compare(normalized_new, existing_item)
            if decision is None:
                continue
            if self.config.selection == SelectionPolicy.FIRST_MATCH:
                return decision
            if best is None or decision.confidence > best.confidence:
                best = decision

        return best or DuplicateDecision.not_duplicate()

    def _compare(self, normalized_new: str, existing_item: Any) -> Optional[DuplicateDecision]:
        """Run the cascade against one existing item; None when nothing fires."""
        normalized_existing = normalize_product_name(item_name(existing_item))

        outcome = exact_match(normalized_new, normalized_existing)
        if outcome.is_match:
            return self._decide(outcome, existing_item, SuggestedAction.REJECT)

        outcome = self._brand_matcher.match(normalized_new, normalized_existing)
        if outcome.is_match:
            action = (
                SuggestedAction.REJECT
                if outcome.confidence > self.config.brand_reject_threshold
                else SuggestedAction.MERGE
            )
            return self._decide(outcome, existing_item, action)

        outcome = category_match(normalized_new, normalized_existing, self.taxonomy)
        if outcome.is_match:
            return self._decide(outcome, existing_item, SuggestedAction.MERGE)

        outcome = similarity_match(
            normalized_new,
            normalized_existing,
            high_threshold=self.config.high_similarity,
            moderate_threshold=self.config.moderate_similarity,
        )
        if outcome.is_match:
            return self._decide(outcome, existing_item, outcome.suggested_action)

        return None

    @staticmethod
    def _decide(
        outcome: MatchOutcome, existing_item: Any, action: SuggestedAction
    ) -> DuplicateDecision:
        return DuplicateDecision(
            is_duplicate=True,
            confidence=outcome.confidence,
            reason=outcome.reason,
            existing_item=existing_item,
            suggested_action=action,
            stage=outcome.stage,
        )

    def check_many(
        self, new_item_names: Sequence[str], existing_items: Iterable[Any]
    ) -> List[Tuple[str, DuplicateDecision]]:
        """Check several new items against the list and against each other.

        Candidates are checked in order. Every candidate not rejected is
        appended to the working list, so a later candidate that repeats an
        earlier one is caught as well.

        Returns:
            (name, decision) pairs in input order
        """
        working: List[Any] = list(existing_items)
        results: List[Tuple[str, DuplicateDecision]] = []

        for name in new_item_names:
            decision = self.check_for_duplicate(name, working)
            results.append((name, decision))
            if decision.suggested_action != SuggestedAction.REJECT:
                working.append({"productName": name})

        return results

    def get_suggestions(self, decision: DuplicateDecision) -> List[str]:
        """Human-readable guidance for a decision."""
        return get_suggestions(decision)

    def get_statistics(self, results: Sequence[Tuple[str, DuplicateDecision]]) -> dict:
        """Summarize a batch of decisions from ``check_many``.

        Example:
            >>> stats = detector.get_statistics(detector.check_many(names, items))
            >>> print(f"Rejected: {stats['by_action']['reject']}")
        """
        by_action = {action.value: 0 for action in SuggestedAction}
        by_stage = {stage.value: 0 for stage in MatchStage}

        for _, decision in results:
            by_action[decision.suggested_action.value] += 1
            if decision.stage is not None:
                by_stage[decision.stage.value] += 1

        total = len(results)
        duplicates = sum(1 for _, d in results if d.is_duplicate)
        return {
            "total_items": total,
            "duplicates": duplicates,
            "duplicate_rate": duplicates / total if total > 0 else 0.0,
            "by_action": by_action,
            "by_stage": by_stage,
            "brand_strategy": self.config.brand_strategy.value,
            "selection": self.config.selection.value,
        }
