"""
Tests for the external brand classifiers.
"""

import os
import unittest
from unittest.mock import MagicMock, patch

import requests

from pantry.classifiers import (
    HttpBrandClassifier,
    OpenAIBrandClassifier,
    create_classifier,
)
from pantry.classifiers.llm import BrandDetectionSchema
from pantry.core.config import ClassifierConfig
from pantry.dedup.strategies import ClassifierBrandMatcher
from pantry.utils.exceptions import ClassifierError, ClassifierResponseError, NetworkError


def _response(status_code=200, payload=None):
    response = MagicMock()
    response.status_code = status_code
    response.ok = 200 <= status_code < 400
    response.json.return_value = payload
    return response


class TestHttpBrandClassifier(unittest.TestCase):
    def setUp(self):
        self.config = ClassifierConfig(endpoint="http://classifier.test/brand-detection", timeout=2.0)
        self.classifier = HttpBrandClassifier(self.config)

    @patch("pantry.classifiers.http.requests.post")
    def test_detect(self, mock_post):
        mock_post.return_value = _response(payload={
            "detectedBrands": ["cheerios"],
            "genericTerms": [],
            "category": "cereal",
        })

        result = self.classifier.detect("cheerios")

        self.assertEqual(result.detected_brands, ["cheerios"])
        self.assertEqual(result.generic_terms, [])
        self.assertEqual(result.category, "cereal")
        args, kwargs = mock_post.call_args
        self.assertEqual(args[0], "http://classifier.test/brand-detection")
        self.assertEqual(kwargs["json"], {"productName": "cheerios"})
        self.assertEqual(kwargs["timeout"], 2.0)

    @patch("pantry.classifiers.http.requests.post")
    def test_detect_lowercases_and_strips(self, mock_post):
        mock_post.return_value = _response(payload={
            "detectedBrands": [" Cheerios ", ""],
            "genericTerms": ["CEREAL"],
            "category": " Cereal",
        })

        result = self.classifier.detect("cheerios")

        self.assertEqual(result.detected_brands, ["cheerios"])
        self.assertEqual(result.generic_terms, ["cereal"])
        self.assertEqual(result.category, "cereal")

    @patch("pantry.classifiers.http.requests.post")
    def test_mixed_case_answer_matches_fallback_detection(self, mock_post):
        def answer(url, json=None, headers=None, timeout=None):
            if json["productName"] == "cereal":
                raise requests.exceptions.ConnectionError("refused")
            return _response(payload={
                "detectedBrands": ["Cheerios"],
                "genericTerms": [],
                "category": "Cereal",
            })

        mock_post.side_effect = answer
        matcher = ClassifierBrandMatcher(self.classifier)

        with self.assertLogs("pantry.dedup.strategies", level="WARNING"):
            outcome = matcher.match("cheerios", "cereal")

        self.assertTrue(outcome.is_match)
        self.assertEqual(outcome.confidence, 0.85)
        self.assertEqual(outcome.reason, 'Brand "cheerios" matches generic term "cereal"')

    @patch("pantry.classifiers.http.requests.post")
    def test_missing_fields_default(self, mock_post):
        mock_post.return_value = _response(payload={"genericTerms": ["cereal"]})
        result = self.classifier.detect("cereal")
        self.assertEqual(result.detected_brands, [])
        self.assertEqual(result.category, "generic")

    @patch("pantry.classifiers.http.requests.post")
    def test_server_error(self, mock_post):
        mock_post.return_value = _response(status_code=503)
        with self.assertRaises(NetworkError) as ctx:
            self.classifier.detect("cheerios")
        self.assertEqual(ctx.exception.status_code, 503)

    @patch("pantry.classifiers.http.requests.post")
    def test_client_error(self, mock_post):
        mock_post.return_value = _response(status_code=404)
        with self.assertRaises(ClassifierResponseError):
            self.classifier.detect("cheerios")

    @patch("pantry.classifiers.http.requests.post")
    def test_timeout(self, mock_post):
        mock_post.side_effect = requests.exceptions.Timeout()
        with self.assertRaises(NetworkError):
            self.classifier.detect("cheerios")

    @patch("pantry.classifiers.http.requests.post")
    def test_invalid_json(self, mock_post):
        response = _response()
        response.json.side_effect = ValueError("Expecting value")
        mock_post.return_value = response
        with self.assertRaises(ClassifierResponseError):
            self.classifier.detect("cheerios")

    @patch("pantry.classifiers.http.requests.post")
    def test_payload_not_matching_contract(self, mock_post):
        mock_post.return_value = _response(payload=["cheerios"])
        with self.assertRaises(ClassifierResponseError):
            self.classifier.detect("cheerios")

        mock_post.return_value = _response(payload={"detectedBrands": "cheerios"})
        with self.assertRaises(ClassifierResponseError):
            self.classifier.detect("cheerios")

    @patch("pantry.utils.retry.time.sleep")
    @patch("pantry.classifiers.http.requests.post")
    def test_retries_transient_failures(self, mock_post, mock_sleep):
        classifier = HttpBrandClassifier(ClassifierConfig(max_retries=2))
        mock_post.side_effect = [
            requests.exceptions.ConnectionError("refused"),
            _response(payload={"detectedBrands": ["tide"], "category": "detergent"}),
        ]

        result = classifier.detect("tide")

        self.assertEqual(result.detected_brands, ["tide"])
        self.assertEqual(mock_post.call_count, 2)
        mock_sleep.assert_called_once()

    @patch("pantry.classifiers.http.requests.post")
    def test_client_errors_not_retried(self, mock_post):
        classifier = HttpBrandClassifier(ClassifierConfig(max_retries=3))
        mock_post.return_value = _response(status_code=400)
        with self.assertRaises(ClassifierResponseError):
            classifier.detect("tide")
        self.assertEqual(mock_post.call_count, 1)

    def test_api_key_header(self):
        classifier = HttpBrandClassifier(ClassifierConfig(api_key="secret"))
        self.assertEqual(classifier._headers()["Authorization"], "Bearer secret")

    def test_uses_session_when_given(self):
        session = MagicMock()
        session.post.return_value = _response(payload={"category": "generic"})
        classifier = HttpBrandClassifier(self.config, session=session)

        classifier.detect("bananas")

        session.post.assert_called_once()


class TestOpenAIBrandClassifier(unittest.TestCase):
    def setUp(self):
        self.config = ClassifierConfig(backend="openai", api_key="test-key")

    def _client_returning(self, parsed):
        client = MagicMock()
        completion = MagicMock()
        completion.choices = [MagicMock(message=MagicMock(parsed=parsed))]
        client.chat.completions.parse.return_value = completion
        return client

    def test_detect(self):
        client = self._client_returning(BrandDetectionSchema(
            detected_brands=["Cheerios"], generic_terms=[" Cereal "], category="Cereal",
        ))
        classifier = OpenAIBrandClassifier(self.config, client=client)

        result = classifier.detect("cheerios")

        self.assertEqual(result.detected_brands, ["cheerios"])
        self.assertEqual(result.generic_terms, ["cereal"])
        self.assertEqual(result.category, "cereal")
        kwargs = client.chat.completions.parse.call_args.kwargs
        self.assertEqual(kwargs["model"], "gpt-4o-mini")
        self.assertIs(kwargs["response_format"], BrandDetectionSchema)
        self.assertEqual(kwargs["messages"][-1], {"role": "user", "content": "cheerios"})

    def test_empty_category_defaults_to_generic(self):
        client = self._client_returning(BrandDetectionSchema(
            detected_brands=[], generic_terms=[], category="",
        ))
        result = OpenAIBrandClassifier(self.config, client=client).detect("bananas")
        self.assertEqual(result.category, "generic")

    def test_sdk_error_wrapped(self):
        client = MagicMock()
        client.chat.completions.parse.side_effect = RuntimeError("rate limited")
        classifier = OpenAIBrandClassifier(self.config, client=client)
        with self.assertRaises(ClassifierError):
            classifier.detect("cheerios")

    def test_unparsable_result(self):
        classifier = OpenAIBrandClassifier(self.config, client=self._client_returning(None))
        with self.assertRaises(ClassifierResponseError):
            classifier.detect("cheerios")

    def test_missing_api_key(self):
        with patch.dict(os.environ, {}, clear=True):
            classifier = OpenAIBrandClassifier(ClassifierConfig(backend="openai"))
            with self.assertRaises(ClassifierError):
                classifier.detect("cheerios")


class TestCreateClassifier(unittest.TestCase):
    def test_backends(self):
        self.assertIsInstance(create_classifier(ClassifierConfig(backend="http")), HttpBrandClassifier)
        self.assertIsInstance(
            create_classifier(ClassifierConfig(backend="openai")), OpenAIBrandClassifier
        )

    def test_rejects_non_config(self):
        with self.assertRaises(ValueError):
            HttpBrandClassifier({"endpoint": "http://x"})


if __name__ == '__main__':
    unittest.main()
