"""Configuration loading and validation for the prompt enhancer."""

import os
from pathlib import Path
from typing import Callable

from dotenv import load_dotenv

# Get the project root directory (parent of src)
PROJECT_ROOT = Path(__file__).parent.parent.parent

# Load environment variables from .env file in project root
load_dotenv(PROJECT_ROOT / ".env")

DEFAULT_GEMINI_MODELS = "gemini-2.5-flash-lite,gemini-2.5-flash,gemini-2.0-flash"
DEFAULT_CORS_ORIGINS = "http://localhost:3000,http://localhost:5173"


def _split_list(value: str) -> list[str]:
    return [item.strip() for item in value.split(",") if item.strip()]


def _env_number(name: str, default: str, cast: Callable, problems: list[str]):
    """Parse a numeric env var, keeping the default and noting the problem if malformed."""
    raw = os.getenv(name, default)
    try:
        return cast(raw)
    except ValueError:
        problems.append(f"{name} must be a number (got {raw!r}); using {default}")
        return cast(default)


def load_config() -> dict:
    """Load configuration from environment variables.

    Malformed numeric values fall back to their defaults and are listed
    under ``parse_errors`` for validate_config() to report.
    """
    parse_errors: list[str] = []

    config = {
        # Required API key (checked per request, not at startup)
        "gemini_api_key": os.getenv("GEMINI_API_KEY"),
        # Model fallback order, cheapest first
        "gemini_models": _split_list(os.getenv("GEMINI_MODELS", DEFAULT_GEMINI_MODELS)),
        # Reference-image response cache
        "cache_max_entries": _env_number("CACHE_MAX_ENTRIES", "200", int, parse_errors),
        "cache_ttl_seconds": _env_number("CACHE_TTL_SECONDS", "600", float, parse_errors),
        # Logging
        "log_level": os.getenv("LOG_LEVEL", "INFO"),
        "log_json": os.getenv("LOG_JSON", "false").lower() == "true",
        # HTTP server
        "cors_origins": _split_list(os.getenv("CORS_ORIGINS", DEFAULT_CORS_ORIGINS)),
        "host": os.getenv("HOST", "0.0.0.0"),
        "port": _env_number("PORT", "8000", int, parse_errors),
        "parse_errors": parse_errors,
    }

    return config


def validate_config(config: dict) -> list[str]:
    """Validate configuration and return list of errors."""
    errors = list(config.get("parse_errors", []))

    # Missing key only fails requests, but it is worth shouting about
    if not config.get("gemini_api_key"):
        errors.append("GEMINI_API_KEY is not set; enhancement requests will fail")

    if not config.get("gemini_models"):
        errors.append("GEMINI_MODELS must list at least one model")

    if config.get("cache_max_entries", 0) < 1:
        errors.append("CACHE_MAX_ENTRIES must be at least 1")

    if config.get("cache_ttl_seconds", 0) <= 0:
        errors.append("CACHE_TTL_SECONDS must be positive")

    return errors
