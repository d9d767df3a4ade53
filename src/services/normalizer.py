"""Normalize untrusted model output into an EnhanceResult.

Every step here is total: malformed input degrades to defaults and
``normalize_output`` never raises.
"""

import re
from typing import Any, Optional

from models.enhance import (
    EnhanceParams,
    EnhanceResult,
    Opaque,
    RawModelOutput,
    ValidShape,
    wrap_raw_output,
)
from services.prompts import BASELINE_NEGATIVE, FALLBACK_PROMPT_TEXT, style_negative

# Midjourney style flag, e.g. "--ar 16:9"
AR_FLAG_PATTERN = re.compile(r"--ar\s*([0-9]+\s*:\s*[0-9]+)", re.IGNORECASE)
AR_FLAG_STRIP_PATTERN = re.compile(r"\s*--ar\s*[0-9]+\s*:\s*[0-9]+\s*", re.IGNORECASE)
# Bare ratio, e.g. "1:1" or "16:9"
AR_PLAIN_PATTERN = re.compile(r"\b([0-9]{1,2}\s*:\s*[0-9]{1,2})\b")
WHITESPACE_PATTERN = re.compile(r"\s+")


def _as_text(value: Any) -> str:
    return value if isinstance(value, str) else ""


def _first_text(fields: dict, *keys: str) -> Optional[str]:
    """First non-empty string found under any of ``keys``."""
    for key in keys:
        value = fields.get(key)
        if isinstance(value, str) and value:
            return value
    return None


def _collapse(text: str) -> str:
    return WHITESPACE_PATTERN.sub(" ", text).strip()


def coerce_params(value: Any) -> EnhanceParams:
    """Coerce the ``params`` field.

    A string is treated as free-form notes; an object contributes
    ``aspectRatio``/``aspect_ratio`` and ``notes``/``note``; anything else
    is discarded.
    """
    if isinstance(value, str):
        return EnhanceParams(notes=value or None)
    if isinstance(value, dict):
        return EnhanceParams(
            aspect_ratio=_first_text(value, "aspectRatio", "aspect_ratio"),
            notes=_first_text(value, "notes", "note"),
        )
    return EnhanceParams()


def extract_aspect_ratio(text: str) -> Optional[str]:
    """Find an aspect ratio hint in prompt text.

    A ``--ar N:N`` flag wins over a bare ``N:N`` token. Whitespace around
    the colon is removed.
    """
    if not text:
        return None

    match = AR_FLAG_PATTERN.search(text) or AR_PLAIN_PATTERN.search(text)
    if match:
        return WHITESPACE_PATTERN.sub("", match.group(1))
    return None


def strip_aspect_ratio_flags(text: str) -> str:
    """Remove ``--ar N:N`` flags and collapse whitespace."""
    if not text:
        return text
    return _collapse(AR_FLAG_STRIP_PATTERN.sub(" ", text))


def _split_terms(text: str) -> list[str]:
    return [term.strip() for term in text.split(",") if term.strip()]


def dedupe_terms(text: str) -> str:
    """Drop repeated comma-separated terms (case-insensitive), keeping order."""
    seen = set()
    kept = []
    for term in _split_terms(text):
        key = _collapse(term).lower()
        if key not in seen:
            seen.add(key)
            kept.append(term)
    return ", ".join(kept)


def merge_negative(base: str, extra: str) -> str:
    """Append phrases from ``extra`` that ``base`` does not already mention.

    Presence is a case-insensitive substring check against ``base``.
    """
    base = (base or "").strip()
    extra = (extra or "").strip()
    if not base and not extra:
        return ""
    if not base:
        return extra
    if not extra:
        return base

    lower = base.lower()
    to_add = [term for term in _split_terms(extra) if term.lower() not in lower]
    if not to_add:
        return _collapse(base)
    return _collapse(f"{base}, {', '.join(to_add)}")


def _fields_of(raw: RawModelOutput) -> dict:
    if isinstance(raw, ValidShape):
        return raw.fields
    return {}


def normalize_output(
    raw: Any,
    art_style: str,
    fallback_prompt: str = FALLBACK_PROMPT_TEXT,
) -> EnhanceResult:
    """Coerce a decoded model response into a well-formed EnhanceResult.

    Args:
        raw: Decoded JSON (or a RawModelOutput already tagged)
        art_style: Art style key whose negative phrases get merged in
        fallback_prompt: Prompt text used when the model produced none

    Returns:
        EnhanceResult with non-empty prompt fields
    """
    if not isinstance(raw, (ValidShape, Opaque)):
        raw = wrap_raw_output(raw)
    fields = _fields_of(raw)

    clean = _as_text(fields.get("clean"))
    detailed = _as_text(fields.get("detailed")) or clean
    extreme = _as_text(fields.get("extreme")) or detailed
    negative = dedupe_terms(_as_text(fields.get("negative")))

    params = coerce_params(fields.get("params"))

    if not params.aspect_ratio:
        params.aspect_ratio = (
            extract_aspect_ratio(extreme)
            or extract_aspect_ratio(detailed)
            or extract_aspect_ratio(clean)
        )

    clean = strip_aspect_ratio_flags(clean)
    detailed = strip_aspect_ratio_flags(detailed)
    extreme = strip_aspect_ratio_flags(extreme)

    negative = merge_negative(negative, style_negative(art_style))
    negative = merge_negative(negative, BASELINE_NEGATIVE)

    if not clean:
        clean = fallback_prompt
    if not detailed:
        detailed = clean
    if not extreme:
        extreme = detailed

    return EnhanceResult(
        clean=clean,
        detailed=detailed,
        extreme=extreme,
        negative=negative,
        params=params,
    )
