"""Classify Gemini API failures at the provider boundary.

The retry/fallback loop only ever sees a ProviderErrorKind; all message
sniffing for status codes happens here.
"""

import json
import math
import re
from typing import Any, Optional

from google.genai import errors as genai_errors

from utils.retry import ProviderErrorKind

RETRY_IN_PATTERN = re.compile(r"retry in\s+([0-9.]+)s", re.IGNORECASE)
RETRY_DELAY_PATTERN = re.compile(r"([0-9.]+)s", re.IGNORECASE)


def _message(exc: BaseException) -> str:
    return str(getattr(exc, "message", None) or exc or "")


def _error_body(exc: BaseException) -> dict:
    """Best-effort decode of the provider's JSON error body.

    ``APIError.details`` carries the decoded response; other exceptions may
    have the JSON payload as their message.
    """
    details = getattr(exc, "details", None)
    if isinstance(details, dict):
        return details

    try:
        body = json.loads(str(exc))
    except (TypeError, ValueError):
        return {}
    return body if isinstance(body, dict) else {}


def _error_section(exc: BaseException) -> dict:
    """The ``{"code", "status", "details"}`` part of the error body."""
    body = _error_body(exc)
    error = body.get("error")
    if isinstance(error, dict):
        return error
    # Some SDK versions hand over the inner error object directly
    return body if "status" in body or "details" in body else {}


def is_quota_exceeded(exc: BaseException) -> bool:
    """Whether ``exc`` signals a 429 / RESOURCE_EXHAUSTED condition."""
    if isinstance(exc, genai_errors.APIError):
        if exc.code == 429 or exc.status == "RESOURCE_EXHAUSTED":
            return True

    msg = str(exc)
    if "429" in msg or "RESOURCE_EXHAUSTED" in msg or "quota" in msg.lower():
        return True

    error = _error_section(exc)
    return error.get("code") == 429 or error.get("status") == "RESOURCE_EXHAUSTED"


def is_overloaded(exc: BaseException) -> bool:
    """Whether ``exc`` signals a transient 503 / UNAVAILABLE condition."""
    if isinstance(exc, genai_errors.APIError):
        if exc.code == 503 or exc.status == "UNAVAILABLE":
            return True

    msg = str(exc)
    if "503" in msg or "UNAVAILABLE" in msg or "overloaded" in msg.lower():
        return True

    error = _error_section(exc)
    return error.get("code") == 503 or error.get("status") == "UNAVAILABLE"


def classify_provider_error(exc: BaseException) -> ProviderErrorKind:
    """Map a provider exception onto the closed error-kind enum.

    Quota is checked first: a quota error must never be retried on the
    same model even if its text also mentions unavailability.
    """
    if is_quota_exceeded(exc):
        return ProviderErrorKind.QUOTA_EXCEEDED
    if is_overloaded(exc):
        return ProviderErrorKind.OVERLOADED
    return ProviderErrorKind.OTHER


def _ceil_seconds(value: str) -> Optional[int]:
    try:
        seconds = float(value)
    except ValueError:
        return None
    return max(1, math.ceil(seconds))


def extract_retry_after_seconds(exc: Any) -> Optional[int]:
    """Read a retry-after hint from a quota error.

    Looks for a "retry in 40.7s" phrase in the message first, then a
    google.rpc.RetryInfo ``retryDelay`` in the error details. Values are
    rounded up to whole seconds (minimum 1).

    Returns:
        Seconds to wait, or None when the error carries no hint
    """
    if exc is None:
        return None

    texts = [str(exc)]
    message = _message(exc)
    # APIError's str() already embeds its message
    if message not in texts[0]:
        texts.append(message)

    for text in texts:
        match = RETRY_IN_PATTERN.search(text)
        if match:
            seconds = _ceil_seconds(match.group(1))
            if seconds is not None:
                return seconds

    details = _error_section(exc).get("details")
    if isinstance(details, list):
        for detail in details:
            if not isinstance(detail, dict):
                continue
            if "RetryInfo" not in str(detail.get("@type", "")):
                continue
            delay = detail.get("retryDelay")
            if isinstance(delay, str):
                match = RETRY_DELAY_PATTERN.search(delay)
                if match:
                    return _ceil_seconds(match.group(1))
            break

    return None
