"""
Pantry - duplicate product detection for shopping lists.

Given a new item name and the items already on a list, Pantry decides
whether the new item is the same product, a brand/generic variant, a
related item from the same category, or genuinely different, and
recommends rejecting, merging or allowing it.
"""

from pantry.core.config import DetectionConfig, PantryConfig, load_config
from pantry.core.models import DuplicateDecision, SuggestedAction
from pantry.dedup import DuplicateDetector, get_suggestions
from pantry.normalization import normalize_product_name

__version__ = "0.3.0"

__all__ = [
    "DuplicateDetector",
    "DuplicateDecision",
    "SuggestedAction",
    "DetectionConfig",
    "PantryConfig",
    "load_config",
    "get_suggestions",
    "normalize_product_name",
    "__version__",
]
