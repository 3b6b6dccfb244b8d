"""
Brand classifiers for Pantry.

Classifiers answer "which brands and generic terms does this product
name contain?" using an external service:

    - HttpBrandClassifier: JSON brand-detection endpoint
    - OpenAIBrandClassifier: OpenAI chat model with structured output
"""

from pantry.classifiers.base import BrandClassifier
from pantry.classifiers.http import HttpBrandClassifier
from pantry.classifiers.llm import OpenAIBrandClassifier
from pantry.core.config import ClassifierBackend, ClassifierConfig

_CLASSIFIERS = {
    ClassifierBackend.HTTP: HttpBrandClassifier,
    ClassifierBackend.OPENAI: OpenAIBrandClassifier,
}


def create_classifier(config: ClassifierConfig) -> BrandClassifier:
    """Create the classifier selected by ``config.backend``."""
    try:
        classifier_cls = _CLASSIFIERS[config.backend]
    except KeyError:
        raise ValueError(f"Unknown classifier backend: {config.backend}")
    return classifier_cls(config)


__all__ = [
    "BrandClassifier",
    "HttpBrandClassifier",
    "OpenAIBrandClassifier",
    "create_classifier",
]
