"""LLM-backed brand classifier using the OpenAI SDK structured outputs."""

import logging
import os
from typing import Any, List, Optional

from openai import OpenAI
from pydantic import BaseModel

from pantry.classifiers.base import BrandClassifier, clean_detection
from pantry.core.config import ClassifierConfig
from pantry.core.models import BrandDetectionResult
from pantry.utils.exceptions import ClassifierError, ClassifierResponseError

logger = logging.getLogger(__name__)

SYSTEM_PROMPT = (
    "You classify grocery shopping-list entries. For the product name given, "
    "list any brand names it contains (lower-case, as written), any generic "
    "product words it contains (e.g. cereal, cookies, soda, chips, cheese, "
    "detergent, dish soap, soap), and a single lower-case category for the "
    'product. Use the category "generic" when you cannot tell.'
)


class BrandDetectionSchema(BaseModel):
    """Response schema sent to the model; every field is required."""

    detected_brands: List[str]
    generic_terms: List[str]
    category: str


class OpenAIBrandClassifier(BrandClassifier):
    """Brand classifier that asks an OpenAI chat model."""

    name = "openai"

    def __init__(self, config: ClassifierConfig, client: Optional[Any] = None):
        super().__init__(config)
        self.api_key = config.api_key or os.getenv("OPENAI_API_KEY")
        self.base_url = os.getenv("LLM_BASE_URL")
        self.model = config.model or os.getenv("LLM_MODEL", "gpt-4o-mini")
        self._client = client

    @property
    def client(self) -> Any:
        if self._client is None:
            if not self.api_key:
                raise ClassifierError(self.name, "OpenAI API key not found. Set OPENAI_API_KEY.")
            self._client = OpenAI(
                api_key=self.api_key,
                base_url=self.base_url,
                timeout=self.config.timeout,
                max_retries=self.config.max_retries - 1,
            )
        return self._client

    def detect(self, product_name: str) -> BrandDetectionResult:
        client = self.client

        try:
            completion = client.chat.completions.parse(
                model=self.model,
                messages=[
                    {"role": "system", "content": SYSTEM_PROMPT},
                    {"role": "user", "content": product_name},
                ],
                response_format=BrandDetectionSchema,
            )
        except Exception as e:
            raise ClassifierError(self.name, f"Completion failed: {e}") from e

        parsed = completion.choices[0].message.parsed
        if parsed is None:
            raise ClassifierResponseError(self.name, "Model returned no parsable result")

        return clean_detection(parsed.detected_brands, parsed.generic_terms, parsed.category)
