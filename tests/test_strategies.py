"""
Tests for the brand-relationship strategies.
"""

import threading
import time
import unittest
from unittest.mock import MagicMock

from pantry.core.config import ClassifierConfig
from pantry.core.models import BrandDetectionResult, MatchStage
from pantry.dedup.strategies import (
    ClassifierBrandMatcher,
    PatternBrandDetector,
    StaticBrandMatcher,
)
from pantry.dedup.taxonomy import Taxonomy
from pantry.utils.exceptions import NetworkError

SEEDED_PAIRS = [
    ("oreo", "cookies"),
    ("cheerios", "cereal"),
    ("pepsi", "soda"),
    ("doritos", "chips"),
    ("kraft", "cheese"),
    ("tide", "detergent"),
    ("dawn", "dish soap"),
    ("dove", "soap"),
]

# Singular and synonym generic spellings for the same categories.
SEEDED_VARIANT_PAIRS = [
    ("cookie", "oreo"),
    ("oreo", "cookie"),
    ("chip", "doritos"),
    ("pringles", "chip"),
    ("soft drink", "pepsi"),
    ("soft drinks", "sprite"),
]


class FakeClassifier:
    """Classifier answering from a fixed table."""

    name = "fake"

    def __init__(self, answers):
        self.answers = answers
        self.calls = []

    def detect(self, product_name):
        self.calls.append(product_name)
        return self.answers[product_name]


class StalledClassifier:
    """Classifier that blocks until released."""

    name = "stalled"

    def __init__(self):
        self.release = threading.Event()

    def detect(self, product_name):
        self.release.wait(5)
        return BrandDetectionResult(category="generic")


class TestStaticBrandMatcher(unittest.TestCase):
    def setUp(self):
        self.matcher = StaticBrandMatcher(Taxonomy.default())

    def test_brand_matches_generic(self):
        outcome = self.matcher.match("cheerios", "cereal")
        self.assertTrue(outcome.is_match)
        self.assertEqual(outcome.confidence, 0.85)
        self.assertEqual(outcome.reason, 'Brand "cheerios" matches generic term "cereal"')
        self.assertEqual(outcome.stage, MatchStage.BRAND)

    def test_generic_matches_brand(self):
        outcome = self.matcher.match("cereal", "honey nut cheerios")
        self.assertTrue(outcome.is_match)
        self.assertEqual(outcome.confidence, 0.85)
        self.assertEqual(outcome.reason, 'Generic term "cereal" matches brand "cheerios"')

    def test_singular_and_synonym_generics(self):
        for generic, brand in [("cookie", "oreo"), ("chip", "doritos"), ("soft drink", "pepsi")]:
            outcome = self.matcher.match(generic, brand)
            self.assertTrue(outcome.is_match, generic)
            self.assertEqual(outcome.confidence, 0.85)
            self.assertEqual(
                outcome.reason, f'Generic term "{generic}" matches brand "{brand}"'
            )

    def test_plural_generic_keeps_its_own_entry(self):
        outcome = self.matcher.match("cookies", "oreo")
        self.assertEqual(outcome.reason, 'Generic term "cookies" matches brand "oreo"')

    def test_competing_brands(self):
        outcome = self.matcher.match("frosted flakes", "cheerios")
        self.assertTrue(outcome.is_match)
        self.assertEqual(outcome.confidence, 0.75)
        self.assertEqual(outcome.reason, 'Both "frosted flakes" and "cheerios" are cereal brands')

    def test_same_brand_is_not_a_brand_relationship(self):
        self.assertFalse(self.matcher.match("honey cheerios", "cheerios").is_match)

    def test_brands_from_different_generics(self):
        self.assertFalse(self.matcher.match("oreo", "tide").is_match)

    def test_no_signal(self):
        outcome = self.matcher.match("bananas", "paper plates")
        self.assertFalse(outcome.is_match)
        self.assertEqual(outcome.confidence, 0.0)

    def test_custom_taxonomy(self):
        matcher = StaticBrandMatcher(Taxonomy({"pasta": ["barilla", "de cecco"]}, {}))
        self.assertEqual(matcher.match("barilla", "pasta").confidence, 0.85)
        self.assertEqual(matcher.match("barilla", "de cecco").confidence, 0.75)
        self.assertFalse(matcher.match("cheerios", "cereal").is_match)


class TestPatternBrandDetector(unittest.TestCase):
    def setUp(self):
        self.detector = PatternBrandDetector()

    def test_brand_and_generic(self):
        result = self.detector.detect("oreo cookies")
        self.assertEqual(result.detected_brands, ["oreo"])
        self.assertEqual(result.generic_terms, ["cookies"])
        self.assertEqual(result.category, "cookies")

    def test_brand_sets_category(self):
        result = self.detector.detect("Frosted Flakes")
        self.assertEqual(result.detected_brands, ["frosted flakes"])
        self.assertEqual(result.generic_terms, [])
        self.assertEqual(result.category, "cereal")

    def test_first_generic_sets_category(self):
        result = self.detector.detect("dish soap")
        self.assertEqual(result.detected_brands, [])
        self.assertEqual(result.generic_terms, ["dish soap", "soap"])
        self.assertEqual(result.category, "dish soap")

    def test_soft_drink_is_soda(self):
        self.assertEqual(self.detector.detect("soft drinks").generic_terms, ["soda"])

    def test_nothing_detected(self):
        result = self.detector.detect("bananas")
        self.assertEqual(result.detected_brands, [])
        self.assertEqual(result.generic_terms, [])
        self.assertEqual(result.category, "generic")


class TestClassifierBrandMatcher(unittest.TestCase):
    def test_uses_classifier_results(self):
        classifier = FakeClassifier({
            "zesty o's": BrandDetectionResult(detected_brands=["zesty o's"], category="cereal"),
            "cereal": BrandDetectionResult(generic_terms=["cereal"], category="cereal"),
        })
        matcher = ClassifierBrandMatcher(classifier)

        outcome = matcher.match("zesty o's", "cereal")

        self.assertTrue(outcome.is_match)
        self.assertEqual(outcome.confidence, 0.85)
        self.assertEqual(outcome.reason, 'Brand "zesty o\'s" matches generic term "cereal"')
        self.assertCountEqual(classifier.calls, ["zesty o's", "cereal"])

    def test_generic_category_brands_do_not_compete(self):
        outcome = ClassifierBrandMatcher.compare(
            BrandDetectionResult(detected_brands=["acme"]),
            BrandDetectionResult(detected_brands=["globex"]),
        )
        self.assertFalse(outcome.is_match)

    def test_competing_brands(self):
        outcome = ClassifierBrandMatcher.compare(
            BrandDetectionResult(detected_brands=["frosted flakes"], category="cereal"),
            BrandDetectionResult(detected_brands=["cheerios"], category="cereal"),
        )
        self.assertTrue(outcome.is_match)
        self.assertEqual(outcome.confidence, 0.75)
        self.assertEqual(outcome.reason, 'Both "frosted flakes" and "cheerios" are cereal brands')

    def test_falls_back_on_classifier_error(self):
        classifier = MagicMock()
        classifier.detect.side_effect = NetworkError("http", "Connection error")
        matcher = ClassifierBrandMatcher(classifier)

        with self.assertLogs("pantry.dedup.strategies", level="WARNING") as logs:
            outcome = matcher.match("cheerios", "cereal")

        self.assertTrue(outcome.is_match)
        self.assertEqual(outcome.confidence, 0.85)
        self.assertTrue(any("falling back" in line for line in logs.output))

    def test_falls_back_on_unexpected_error(self):
        classifier = MagicMock()
        classifier.detect.side_effect = RuntimeError("boom")
        matcher = ClassifierBrandMatcher(classifier)

        with self.assertLogs("pantry.dedup.strategies", level="WARNING"):
            outcome = matcher.match("frosted flakes", "cheerios")

        self.assertEqual(outcome.confidence, 0.75)

    def test_without_classifier_uses_fallback(self):
        matcher = ClassifierBrandMatcher(None)
        self.assertEqual(matcher.match("pepsi", "soda").confidence, 0.85)

    def test_failed_classifier_agrees_with_static_tables(self):
        classifier = MagicMock()
        classifier.detect.side_effect = NetworkError("http", "down")
        fallback_matcher = ClassifierBrandMatcher(classifier)
        static_matcher = StaticBrandMatcher(Taxonomy.default())

        unrelated = [("oreo", "tide"), ("pepsi", "dove"), ("bananas", "cereal")]
        with self.assertLogs("pantry.dedup.strategies", level="WARNING"):
            for a, b in SEEDED_PAIRS + SEEDED_VARIANT_PAIRS + unrelated:
                self.assertEqual(
                    fallback_matcher.match(a, b).is_match,
                    static_matcher.match(a, b).is_match,
                    (a, b),
                )
                self.assertTrue(fallback_matcher.match(a, b).is_match or (a, b) in unrelated)

    def test_stalled_classifier_falls_back_at_deadline(self):
        classifier = StalledClassifier()
        matcher = ClassifierBrandMatcher(classifier, deadline=0.1)
        self.addCleanup(classifier.release.set)

        started = time.monotonic()
        with self.assertLogs("pantry.dedup.strategies", level="WARNING") as logs:
            outcome = matcher.match("cheerios", "cereal")
        elapsed = time.monotonic() - started

        self.assertLess(elapsed, 2.0)
        self.assertTrue(outcome.is_match)
        self.assertEqual(outcome.confidence, 0.85)
        self.assertTrue(any("timed out" in line for line in logs.output))

    def test_default_deadline_covers_every_attempt(self):
        classifier = MagicMock()
        classifier.config = ClassifierConfig(timeout=2.0, max_retries=3)
        self.assertEqual(ClassifierBrandMatcher(classifier).deadline, 7.0)
        self.assertEqual(ClassifierBrandMatcher(MagicMock()).deadline, 4.0)


if __name__ == '__main__':
    unittest.main()
