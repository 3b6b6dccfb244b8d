"""
Core functionality for Pantry.

This package contains the data models and configuration shared by the
detection engine, the brand classifiers and the CLI.
"""

from .config import (
    BrandStrategy,
    ClassifierBackend,
    ClassifierConfig,
    DetectionConfig,
    PantryConfig,
    SelectionPolicy,
    TaxonomyConfig,
    load_config,
    load_config_from_dict,
    merge_configs,
    save_config,
)
from .models import (
    BrandDetectionResult,
    DuplicateDecision,
    MatchOutcome,
    MatchStage,
    ProductItem,
    SuggestedAction,
)

__all__ = [
    # Configuration
    "PantryConfig",
    "DetectionConfig",
    "ClassifierConfig",
    "TaxonomyConfig",
    "BrandStrategy",
    "ClassifierBackend",
    "SelectionPolicy",
    # Config utilities
    "load_config",
    "load_config_from_dict",
    "save_config",
    "merge_configs",
    # Models
    "ProductItem",
    "BrandDetectionResult",
    "MatchOutcome",
    "MatchStage",
    "DuplicateDecision",
    "SuggestedAction",
]
