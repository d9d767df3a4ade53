"""In-memory response caching to avoid redundant API calls.

Reference-image analyses are cached by a fingerprint of the request
parameters and a SHA-256 hash of the image bytes:
- TTL-based invalidation, checked lazily on read
- Fixed entry capacity with naive eviction on insert
"""

import hashlib
import logging
import time
from dataclasses import dataclass
from typing import Any, Callable, Optional

from models.enhance import AnalyzeRequest
from services.prompts import PROMPT_VERSIONS

logger = logging.getLogger(__name__)

DEFAULT_MAX_ENTRIES = 200
DEFAULT_TTL_SECONDS = 10 * 60


@dataclass
class CacheEntry:
    """Cached value and the clock reading after which it is stale."""

    value: Any
    expires_at: float


class ResponseCache:
    """Size- and time-bounded map from request fingerprint to result.

    Not an LRU: once full, expired entries are dropped first and then the
    earliest inserted entry goes, whether or not it is still being read.

    Example usage:
        cache = ResponseCache(max_entries=200, ttl_seconds=600)

        cached = cache.get(fingerprint)
        if cached is not None:
            return cached

        result = compute(...)
        cache.put(fingerprint, result)
    """

    def __init__(
        self,
        max_entries: int = DEFAULT_MAX_ENTRIES,
        ttl_seconds: float = DEFAULT_TTL_SECONDS,
        clock: Callable[[], float] = time.monotonic,
    ):
        """Initialize the response cache.

        Args:
            max_entries: Maximum number of stored entries (default: 200)
            ttl_seconds: Time-to-live for each entry in seconds (default: 600)
            clock: Monotonic time source, injectable for tests
        """
        self.max_entries = max_entries
        self.ttl_seconds = ttl_seconds
        self.clock = clock
        self._entries: dict[str, CacheEntry] = {}

        # Statistics tracking
        self.hits = 0
        self.misses = 0

        logger.info(
            f"Initialized response cache (TTL: {ttl_seconds}s, Max entries: {max_entries})"
        )

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, key: str) -> bool:
        return key in self._entries

    def get(self, key: str) -> Optional[Any]:
        """Get a cached value if present and not expired.

        Expired entries are deleted on the way out.

        Args:
            key: Request fingerprint

        Returns:
            Cached value or None if not found
        """
        entry = self._entries.get(key)
        if entry is None:
            self.misses += 1
            return None

        if self.clock() > entry.expires_at:
            del self._entries[key]
            self.misses += 1
            logger.debug(f"Cache entry expired (hit rate: {self.hit_rate:.1%})")
            return None

        self.hits += 1
        logger.debug(f"Cache HIT (hit rate: {self.hit_rate:.1%})")
        return entry.value

    def put(self, key: str, value: Any) -> None:
        """Store a value, evicting first if the cache is full.

        Args:
            key: Request fingerprint
            value: Value to cache
        """
        if len(self._entries) >= self.max_entries:
            self._evict()

        self._entries[key] = CacheEntry(value=value, expires_at=self.clock() + self.ttl_seconds)

    def _evict(self) -> None:
        now = self.clock()
        for key in list(self._entries):
            if now > self._entries[key].expires_at:
                del self._entries[key]
            if len(self._entries) < self.max_entries:
                return

        if len(self._entries) >= self.max_entries:
            oldest = next(iter(self._entries))
            del self._entries[oldest]
            logger.debug("Cache full, evicted earliest entry")

    def clear(self) -> int:
        """Clear all cached entries.

        Returns:
            Number of entries that were cleared
        """
        entry_count = len(self._entries)
        self._entries.clear()
        self.hits = 0
        self.misses = 0
        logger.info(f"Cache cleared ({entry_count} entries removed)")
        return entry_count

    def get_stats(self) -> dict:
        """Get cache statistics.

        Returns:
            Dictionary with cache statistics
        """
        return {
            "total_requests": self.hits + self.misses,
            "hits": self.hits,
            "misses": self.misses,
            "hit_rate": self.hit_rate,
            "entry_count": len(self._entries),
            "max_entries": self.max_entries,
            "ttl_seconds": self.ttl_seconds,
        }

    def log_stats(self) -> None:
        """Log cache statistics."""
        stats = self.get_stats()
        logger.info(
            f"Cache Stats - Requests: {stats['total_requests']}, "
            f"Hit Rate: {stats['hit_rate']:.1%}, "
            f"Entries: {stats['entry_count']}/{stats['max_entries']}"
        )

    @property
    def hit_rate(self) -> float:
        """Calculate cache hit rate.

        Returns:
            Hit rate as a float between 0.0 and 1.0
        """
        total = self.hits + self.misses
        return self.hits / total if total > 0 else 0.0


def load_cache_from_config(config: dict) -> ResponseCache:
    """Build the response cache from configuration.

    Args:
        config: Configuration dictionary

    Returns:
        ResponseCache instance
    """
    return ResponseCache(
        max_entries=config.get("cache_max_entries", DEFAULT_MAX_ENTRIES),
        ttl_seconds=config.get("cache_ttl_seconds", DEFAULT_TTL_SECONDS),
    )


def compute_bytes_hash(content: bytes) -> str:
    """Compute SHA-256 hash of raw bytes for cache keying.

    Args:
        content: Bytes to hash (e.g. uploaded image data)

    Returns:
        SHA-256 hash as hex string
    """
    return hashlib.sha256(content).hexdigest()


def build_analyze_fingerprint(request: AnalyzeRequest) -> str:
    """Deterministic cache key for a reference-image request."""
    return "|".join(
        [
            f"analyze:{PROMPT_VERSIONS['analyze']}",
            request.mode,
            request.target,
            request.art_style,
            request.idea,
            request.mime_type,
            compute_bytes_hash(request.image),
        ]
    )
