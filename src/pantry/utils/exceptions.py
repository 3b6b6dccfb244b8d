"""
Exception hierarchy for Pantry.

This module defines the exceptions raised by the brand classifiers,
the configuration layer and the taxonomy helpers. The detection engine
itself never raises: classifier failures are caught and degraded to the
local fallback detector.
"""

from datetime import datetime, timezone
from typing import Any, Dict, Optional


class PantryException(Exception):
    """Base exception for all Pantry errors.

    Provides common functionality for error details and timestamps.
    """

    def __init__(self, message: str, details: Optional[Dict] = None):
        """Initialize the exception.

        Args:
            message: Human-readable error message
            details: Optional dictionary with additional error context
        """
        super().__init__(message)
        self.message = message
        self.details = details or {}
        self.timestamp = datetime.now(timezone.utc)

    def __str__(self) -> str:
        """String representation of the exception."""
        if self.details:
            details_str = ", ".join(f"{k}={v}" for k, v in self.details.items())
            return f"{self.message} ({details_str})"
        return self.message

    def to_dict(self) -> Dict:
        """Convert exception to dictionary for logging/serialization."""
        return {
            "type": self.__class__.__name__,
            "message": self.message,
            "details": self.details,
            "timestamp": self.timestamp.isoformat(),
        }


class ClassifierError(PantryException):
    """Brand classifier errors.

    Base class for all errors that occur when asking an external
    brand-detection service about a product name.
    """

    def __init__(self, classifier: str, message: str, **kwargs: Any) -> None:
        """Initialize the classifier error.

        Args:
            classifier: Name of the classifier (e.g., 'http', 'openai')
            message: Human-readable error message
            **kwargs: Additional details to store
        """
        super().__init__(f"[{classifier}] {message}", kwargs)
        self.classifier = classifier


class NetworkError(ClassifierError):
    """Network/timeout issues.

    Raised on transport failures and server errors. Retryable.
    """

    def __init__(
        self,
        classifier: str,
        message: str = "Network error",
        status_code: Optional[int] = None,
        **kwargs: Any,
    ) -> None:
        super().__init__(classifier, message, status_code=status_code, **kwargs)
        self.status_code = status_code


class ClassifierResponseError(ClassifierError):
    """Non-success or malformed classifier response.

    Raised for client errors (4xx) and payloads that do not match the
    brand-detection contract. Not retried.
    """

    def __init__(
        self,
        classifier: str,
        message: str = "Invalid response",
        status_code: Optional[int] = None,
        **kwargs: Any,
    ) -> None:
        super().__init__(classifier, message, status_code=status_code, **kwargs)
        self.status_code = status_code


class ConfigurationError(PantryException):
    """Configuration error.

    Raised when the application configuration is invalid or incomplete.
    """

    def __init__(
        self,
        message: str = "Configuration error",
        config_key: Optional[str] = None,
        **kwargs: Any,
    ) -> None:
        """Initialize the configuration error.

        Args:
            message: Human-readable error message
            config_key: Optional configuration key that caused the error
            **kwargs: Additional details
        """
        details = kwargs
        if config_key:
            details["config_key"] = config_key
        super().__init__(message, details)
        self.config_key = config_key


class TaxonomyError(PantryException):
    """Malformed taxonomy table.

    Raised by taxonomy validation helpers so the surrounding application
    can reject bad tables before an engine is constructed.
    """

    def __init__(
        self, message: str = "Invalid taxonomy", table: Optional[str] = None, **kwargs: Any
    ) -> None:
        details = kwargs
        if table:
            details["table"] = table
        super().__init__(message, details)
        self.table = table
