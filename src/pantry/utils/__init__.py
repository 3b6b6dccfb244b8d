"""
Utility modules for Pantry.

This package contains utility functions and classes for:
- Exception handling
- Retry logic with backoff
- Logging configuration
"""

from .exceptions import (
    ClassifierError,
    ClassifierResponseError,
    ConfigurationError,
    NetworkError,
    PantryException,
    TaxonomyError,
)
from .logging import (
    ColoredFormatter,
    PerformanceLogger,
    configure_library_logging,
    resolve_level,
    setup_logging,
)
from .retry import retry_with_backoff

__all__ = [
    # Exceptions
    "PantryException",
    "ClassifierError",
    "NetworkError",
    "ClassifierResponseError",
    "ConfigurationError",
    "TaxonomyError",
    # Retry utilities
    "retry_with_backoff",
    # Logging
    "setup_logging",
    "resolve_level",
    "configure_library_logging",
    "PerformanceLogger",
    "ColoredFormatter",
]
