"""Tests for Gemini error classification and retry-after extraction."""

import json

import pytest
from google.genai import errors as genai_errors

from services.provider_errors import classify_provider_error, extract_retry_after_seconds
from utils.retry import ProviderErrorKind


def _quota_error(message="Quota exceeded for metric generate_content_free_tier_requests", details=None):
    return genai_errors.ClientError(
        429,
        {
            "error": {
                "code": 429,
                "message": message,
                "status": "RESOURCE_EXHAUSTED",
                "details": details or [],
            }
        },
    )


def _overload_error():
    return genai_errors.ServerError(
        503,
        {"error": {"code": 503, "message": "The model is overloaded.", "status": "UNAVAILABLE"}},
    )


class TestClassifyProviderError:
    """Tests for classify_provider_error()."""

    def test_api_quota_error(self):
        assert classify_provider_error(_quota_error()) == ProviderErrorKind.QUOTA_EXCEEDED

    def test_api_overload_error(self):
        assert classify_provider_error(_overload_error()) == ProviderErrorKind.OVERLOADED

    def test_other_api_error(self):
        exc = genai_errors.ClientError(
            400, {"error": {"code": 400, "message": "Invalid argument", "status": "INVALID_ARGUMENT"}}
        )
        assert classify_provider_error(exc) == ProviderErrorKind.OTHER

    @pytest.mark.parametrize(
        "message, kind",
        [
            ("got status 503 from upstream", ProviderErrorKind.OVERLOADED),
            ("UNAVAILABLE: try later", ProviderErrorKind.OVERLOADED),
            ("Model is Overloaded", ProviderErrorKind.OVERLOADED),
            ("HTTP 429 Too Many Requests", ProviderErrorKind.QUOTA_EXCEEDED),
            ("RESOURCE_EXHAUSTED", ProviderErrorKind.QUOTA_EXCEEDED),
            ("You exceeded your current Quota", ProviderErrorKind.QUOTA_EXCEEDED),
            ("connection reset by peer", ProviderErrorKind.OTHER),
        ],
    )
    def test_message_heuristics(self, message, kind):
        assert classify_provider_error(RuntimeError(message)) == kind

    def test_json_message_body(self):
        exc = RuntimeError(json.dumps({"error": {"code": 429}}))
        assert classify_provider_error(exc) == ProviderErrorKind.QUOTA_EXCEEDED

    def test_quota_checked_before_overload(self):
        exc = RuntimeError("429 quota hit while service UNAVAILABLE")
        assert classify_provider_error(exc) == ProviderErrorKind.QUOTA_EXCEEDED


class TestExtractRetryAfterSeconds:
    """Tests for extract_retry_after_seconds()."""

    def test_retry_in_phrase_rounds_up(self):
        assert extract_retry_after_seconds(RuntimeError("Please retry in 12.3s.")) == 13

    def test_retry_in_phrase_on_api_error(self):
        assert extract_retry_after_seconds(_quota_error("Please retry in 40.7s.")) == 41

    def test_retry_info_detail(self):
        exc = _quota_error(
            details=[
                {"@type": "type.googleapis.com/google.rpc.QuotaFailure", "violations": []},
                {"@type": "type.googleapis.com/google.rpc.RetryInfo", "retryDelay": "40s"},
            ]
        )
        assert extract_retry_after_seconds(exc) == 40

    def test_phrase_takes_priority_over_retry_info(self):
        exc = _quota_error(
            "Please retry in 5s.",
            details=[{"@type": "type.googleapis.com/google.rpc.RetryInfo", "retryDelay": "40s"}],
        )
        assert extract_retry_after_seconds(exc) == 5

    def test_message_attribute_used_when_str_lacks_hint(self):
        class WrappedError(Exception):
            def __init__(self, message):
                super().__init__("upstream call failed")
                self.message = message

        assert extract_retry_after_seconds(WrappedError("Please retry in 7.1s.")) == 8

    def test_minimum_one_second(self):
        assert extract_retry_after_seconds(RuntimeError("retry in 0.2s")) == 1

    def test_no_hint(self):
        assert extract_retry_after_seconds(_quota_error()) is None
        assert extract_retry_after_seconds(None) is None
