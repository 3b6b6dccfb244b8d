"""
HTTP brand classifier.

Posts ``{"productName": ...}`` to a brand-detection endpoint and expects
``{"detectedBrands": [...], "genericTerms": [...], "category": ...}`` back.
"""

import logging
from typing import Any, Dict, Optional

import requests

from pantry.classifiers.base import BrandClassifier
from pantry.core.config import ClassifierConfig
from pantry.core.models import BrandDetectionResult
from pantry.utils.exceptions import ClassifierError, ClassifierResponseError, NetworkError
from pantry.utils.retry import retry_with_backoff

logger = logging.getLogger(__name__)


class HttpBrandClassifier(BrandClassifier):
    """Brand classifier backed by a JSON-over-HTTP endpoint."""

    name = "http"

    def __init__(self, config: ClassifierConfig, session: Optional[requests.Session] = None):
        super().__init__(config)
        self.session = session

    def detect(self, product_name: str) -> BrandDetectionResult:
        response = self._execute_request(self.build_request(product_name))

        try:
            payload = response.json()
        except ValueError as e:
            raise ClassifierResponseError(self.name, f"Invalid JSON response: {e}")

        result = self._parse_result(payload)
        logger.debug(
            f"Classifier detected brands={result.detected_brands} "
            f"generics={result.generic_terms} category={result.category!r} for {product_name!r}"
        )
        return result

    def _headers(self) -> Dict[str, str]:
        headers = {"Content-Type": "application/json", "User-Agent": "Pantry/1.0"}
        if self.config.api_key:
            headers["Authorization"] = f"Bearer {self.config.api_key}"
        return headers

    @retry_with_backoff(max_retries=lambda self: self.config.max_retries, base_delay=0.2)
    def _execute_request(self, body: Dict[str, Any]) -> Any:
        """POST the detection request.

        Raises:
            NetworkError: On timeouts, connection failures and 5xx responses
            ClassifierResponseError: On other non-success responses
        """
        post = self.session.post if self.session is not None else requests.post

        try:
            response = post(
                self.config.endpoint,
                json=body,
                headers=self._headers(),
                timeout=self.config.timeout,
            )
        except requests.exceptions.Timeout:
            raise NetworkError(self.name, f"Request timeout after {self.config.timeout}s")
        except requests.exceptions.ConnectionError as e:
            raise NetworkError(self.name, f"Connection error: {e}")
        except requests.exceptions.RequestException as e:
            raise ClassifierError(self.name, f"Request failed: {e}")

        if response.status_code >= 500:
            raise NetworkError(
                self.name,
                f"Server error: {response.status_code}",
                status_code=response.status_code,
            )
        if not response.ok:
            raise ClassifierResponseError(
                self.name,
                f"Unexpected status: {response.status_code}",
                status_code=response.status_code,
            )

        return response
