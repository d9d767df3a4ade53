"""Prompts module - centralized prompt templates and lookup tables.

Re-exports all prompt constants and utilities for easy importing:
    from services.prompts import PROMPT_VERSIONS, strip_markdown_code_blocks
    from services.prompts import PROMPT_ENHANCER_TEXT, STYLE_NEGATIVE
"""

from services.prompts._base import strip_markdown_code_blocks
from services.prompts.enhance import (
    ENHANCE_RESPONSE_SCHEMA,
    FALLBACK_PROMPT_IMAGE,
    FALLBACK_PROMPT_TEXT,
    MODE_RULES,
    PROMPT_ENHANCER_IMAGE,
    PROMPT_ENHANCER_TEXT,
)
from services.prompts.styles import (
    BASELINE_NEGATIVE,
    STYLE_MAP,
    STYLE_NEGATIVE,
    TARGET_GUIDE,
    style_line,
    style_negative,
    target_guide,
)

# Prompt version identifiers for cache invalidation
# IMPORTANT: Increment these when prompts change to invalidate stale cached responses
PROMPT_VERSIONS = {
    "enhance": "v1",
    "analyze": "v2",
}

__all__ = [
    # Utilities
    "strip_markdown_code_blocks",
    # Version tracking
    "PROMPT_VERSIONS",
    # Templates
    "PROMPT_ENHANCER_TEXT",
    "PROMPT_ENHANCER_IMAGE",
    "MODE_RULES",
    "FALLBACK_PROMPT_TEXT",
    "FALLBACK_PROMPT_IMAGE",
    "ENHANCE_RESPONSE_SCHEMA",
    # Lookup tables
    "STYLE_MAP",
    "STYLE_NEGATIVE",
    "TARGET_GUIDE",
    "BASELINE_NEGATIVE",
    "style_line",
    "style_negative",
    "target_guide",
]
