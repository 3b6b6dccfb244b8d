"""
Matcher stages for duplicate detection.

Each matcher compares two normalized product names and returns a fresh
MatchOutcome. Matchers are total: any pair of strings, including empty
ones, yields an outcome and never raises.
"""

from typing import Optional

from rapidfuzz.distance import Levenshtein

from pantry.core.models import MatchOutcome, MatchStage, SuggestedAction
from pantry.dedup.taxonomy import Taxonomy
from pantry.normalization import fold_plural

HIGH_SIMILARITY = 0.9
MODERATE_SIMILARITY = 0.7


def exact_match(a: str, b: str) -> MatchOutcome:
    """Compare two names verbatim, then with simple plurals folded."""
    if a == b:
        return MatchOutcome(
            is_match=True,
            confidence=1.0,
            reason="Exact match found",
            stage=MatchStage.EXACT,
            suggested_action=SuggestedAction.REJECT,
        )

    if fold_plural(a) == fold_plural(b):
        return MatchOutcome(
            is_match=True,
            confidence=0.95,
            reason="Exact match found (accounting for plurals)",
            stage=MatchStage.EXACT,
            suggested_action=SuggestedAction.REJECT,
        )

    return MatchOutcome.no_match(MatchStage.EXACT)


def _first_member(name: str, members) -> Optional[str]:
    for member in members:
        if member in name:
            return member
    return None


def category_match(a: str, b: str, taxonomy: Taxonomy) -> MatchOutcome:
    """Detect two different products from the same broad category.

    Within each category the first member (in table order) contained in
    each name is used, so "ground beef" resolves to "beef" when "beef" is
    listed first.
    """
    for category, members in taxonomy.category_entries():
        a_member = _first_member(a, members)
        if a_member is None:
            continue
        b_member = _first_member(b, members)
        if b_member is None:
            continue

        if a_member != b_member:
            return MatchOutcome(
                is_match=True,
                confidence=0.6,
                reason=f'Both items are in {category} category: "{a_member}" and "{b_member}"',
                stage=MatchStage.CATEGORY,
                # Low confidence; left to the user
                suggested_action=SuggestedAction.ALLOW,
            )

    return MatchOutcome.no_match(MatchStage.CATEGORY)


def levenshtein_similarity(a: str, b: str) -> float:
    """Edit-distance similarity in [0, 1]; 1.0 when both strings are empty."""
    max_length = max(len(a), len(b))
    if max_length == 0:
        return 1.0
    distance = Levenshtein.distance(a, b)
    return (max_length - distance) / max_length


def similarity_match(
    a: str,
    b: str,
    high_threshold: float = HIGH_SIMILARITY,
    moderate_threshold: float = MODERATE_SIMILARITY,
) -> MatchOutcome:
    """Last-resort fuzzy comparison on edit distance."""
    similarity = levenshtein_similarity(a, b)

    if similarity > high_threshold:
        return MatchOutcome(
            is_match=True,
            confidence=similarity,
            reason=f"High similarity: {round(similarity * 100)}% match",
            stage=MatchStage.SIMILARITY,
            suggested_action=SuggestedAction.REJECT,
        )
    if similarity > moderate_threshold:
        return MatchOutcome(
            is_match=True,
            confidence=similarity,
            reason=f"Moderate similarity: {round(similarity * 100)}% match",
            stage=MatchStage.SIMILARITY,
            suggested_action=SuggestedAction.ALLOW,
        )

    return MatchOutcome.no_match(MatchStage.SIMILARITY)
