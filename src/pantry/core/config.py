"""
Configuration management for Pantry.

This module provides configuration models and utilities for loading
and validating detection settings from YAML files, environment variables,
and programmatic sources.
"""

import os
import re
from enum import Enum
from pathlib import Path
from typing import Any, Dict, List, Optional

import yaml
from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from pantry.core.tables import DEFAULT_CATEGORY_MEMBERS, DEFAULT_GENERIC_TO_BRANDS
from pantry.utils.exceptions import ConfigurationError


class BrandStrategy(str, Enum):
    """Brand-relationship detection strategy options."""

    STATIC = "static"
    CLASSIFIER = "classifier"


class ClassifierBackend(str, Enum):
    """External brand classifier backends."""

    HTTP = "http"
    OPENAI = "openai"


class SelectionPolicy(str, Enum):
    """How the orchestrator picks a decision across existing items."""

    FIRST_MATCH = "first_match"
    BEST_MATCH = "best_match"


class ClassifierConfig(BaseModel):
    """Configuration for the external brand classifier."""

    backend: ClassifierBackend = Field(
        default=ClassifierBackend.HTTP, description="Classifier backend"
    )
    endpoint: str = Field(
        default="http://localhost:5000/api/ai/brand-detection",
        description="Brand-detection endpoint for the http backend",
    )
    timeout: float = Field(default=3.0, gt=0, le=60, description="Request timeout in seconds")
    max_retries: int = Field(default=1, ge=1, le=5, description="Attempts per detection")
    api_key: Optional[str] = Field(default=None, description="API key if required")
    model: str = Field(default="gpt-4o-mini", description="Model for the openai backend")

    model_config = ConfigDict(extra="forbid", str_strip_whitespace=True)


def _clean_table(table: Dict[str, List[str]], table_name: str) -> Dict[str, List[str]]:
    cleaned: Dict[str, List[str]] = {}
    for key, entries in table.items():
        norm_key = str(key).strip().lower()
        if not norm_key:
            raise ValueError(f"{table_name} contains an empty key")
        seen: List[str] = []
        for entry in entries or []:
            norm_entry = str(entry).strip().lower()
            if norm_entry and norm_entry not in seen:
                seen.append(norm_entry)
        cleaned[norm_key] = seen
    return cleaned


class TaxonomyConfig(BaseModel):
    """Product tables used by the brand and category matchers."""

    generic_to_brands: Dict[str, List[str]] = Field(
        default_factory=lambda: {k: list(v) for k, v in DEFAULT_GENERIC_TO_BRANDS.items()},
        description="Generic term -> brand names",
    )
    category_members: Dict[str, List[str]] = Field(
        default_factory=lambda: {k: list(v) for k, v in DEFAULT_CATEGORY_MEMBERS.items()},
        description="Broad category -> generic terms",
    )

    model_config = ConfigDict(extra="forbid")

    @field_validator("generic_to_brands")
    @classmethod
    def validate_generic_to_brands(cls, v: Dict[str, List[str]]) -> Dict[str, List[str]]:
        return _clean_table(v, "generic_to_brands")

    @field_validator("category_members")
    @classmethod
    def validate_category_members(cls, v: Dict[str, List[str]]) -> Dict[str, List[str]]:
        return _clean_table(v, "category_members")


class DetectionConfig(BaseModel):
    """Configuration for duplicate detection."""

    brand_strategy: BrandStrategy = Field(
        default=BrandStrategy.STATIC, description="Brand-relationship strategy"
    )
    selection: SelectionPolicy = Field(
        default=SelectionPolicy.FIRST_MATCH,
        description="first_match stops at the first positive item; best_match scans all",
    )
    high_similarity: float = Field(
        default=0.9, gt=0.0, le=1.0, description="Similarity above which items are rejected"
    )
    moderate_similarity: float = Field(
        default=0.7, ge=0.0, lt=1.0, description="Similarity above which items are flagged"
    )
    brand_reject_threshold: float = Field(
        default=0.8, ge=0.0, le=1.0, description="Brand confidence above which items are rejected"
    )
    classifier: ClassifierConfig = Field(default_factory=ClassifierConfig)
    taxonomy: TaxonomyConfig = Field(default_factory=TaxonomyConfig)

    model_config = ConfigDict(extra="forbid")

    @model_validator(mode="after")
    def validate_thresholds(self) -> "DetectionConfig":
        if self.moderate_similarity >= self.high_similarity:
            raise ValueError("moderate_similarity must be lower than high_similarity")
        return self


class PantryConfig(BaseModel):
    """Main configuration for Pantry."""

    log_level: str = Field(default="WARNING", description="Logging level")
    detection: DetectionConfig = Field(
        default_factory=DetectionConfig, description="Duplicate detection settings"
    )

    model_config = ConfigDict(extra="allow", validate_assignment=True)

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        valid_levels = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        if v.upper() not in valid_levels:
            raise ValueError(f"log_level must be one of {valid_levels}")
        return v.upper()


def load_config(config_path: Path) -> PantryConfig:
    """Load configuration from a YAML file.

    Args:
        config_path: Path to YAML configuration file

    Returns:
        Validated PantryConfig instance

    Raises:
        FileNotFoundError: If config file doesn't exist
        ConfigurationError: If config is invalid

    Example:
        >>> config = load_config(Path("pantry.yml"))
        >>> print(config.detection.brand_strategy)
    """
    config_path = Path(config_path)

    if not config_path.exists():
        raise FileNotFoundError(f"Configuration file not found: {config_path}")

    try:
        with open(config_path, "r", encoding="utf-8") as f:
            raw_config = yaml.safe_load(f) or {}
    except yaml.YAMLError as e:
        raise ConfigurationError(f"Invalid YAML: {e}", path=str(config_path)) from e

    if not isinstance(raw_config, dict):
        raise ConfigurationError("Configuration root must be a mapping", path=str(config_path))

    return load_config_from_dict(raw_config)


def load_config_from_dict(config_dict: Dict[str, Any]) -> PantryConfig:
    """Load configuration from a dictionary.

    Raises:
        ConfigurationError: If config is invalid
    """
    expanded_config = _expand_env_vars(config_dict)

    try:
        return PantryConfig(**expanded_config)
    except Exception as e:
        raise ConfigurationError(f"Invalid configuration: {e}") from e


def save_config(config: PantryConfig, output_path: Path) -> None:
    """Save configuration to a YAML file.

    Example:
        >>> save_config(PantryConfig(), Path("pantry.yml"))
    """
    output_path = Path(output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)

    config_dict = config.model_dump(mode="json", exclude_none=True)

    with open(output_path, "w", encoding="utf-8") as f:
        yaml.dump(
            config_dict,
            f,
            default_flow_style=False,
            sort_keys=False,
            allow_unicode=True,
        )


def _expand_env_vars(config: Any) -> Any:
    """Recursively expand environment variables in config.

    Supports ${VAR_NAME} and ${VAR_NAME:-default} syntax. Unknown
    variables without a default are left as written.
    """
    if isinstance(config, dict):
        return {k: _expand_env_vars(v) for k, v in config.items()}
    elif isinstance(config, list):
        return [_expand_env_vars(item) for item in config]
    elif isinstance(config, str):

        def replace_env_var(match: Any) -> str:
            var_expr = match.group(1)

            if ":-" in var_expr:
                var_name, default = var_expr.split(":-", 1)
                return str(os.getenv(var_name.strip(), default.strip()))

            value = os.getenv(var_expr.strip())
            if value is None:
                return str(match.group(0))
            return str(value)

        return re.sub(r"\$\{([^}]+)\}", replace_env_var, config)
    else:
        return config


def merge_configs(base: PantryConfig, override: Dict[str, Any]) -> PantryConfig:
    """Merge override values into a base configuration.

    Example:
        >>> merged = merge_configs(PantryConfig(), {"detection": {"brand_strategy": "classifier"}})
    """
    merged = _deep_merge(base.model_dump(), override)
    return PantryConfig(**merged)


def _deep_merge(base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
    result = base.copy()

    for key, value in override.items():
        if key in result and isinstance(result[key], dict) and isinstance(value, dict):
            result[key] = _deep_merge(result[key], value)
        else:
            result[key] = value

    return result
