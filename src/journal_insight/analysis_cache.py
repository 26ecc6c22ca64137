"""
Content-addressable caches for journal analysis and practice scenarios.

TTLCache is a FIFO queue plus lookup table (one OrderedDict) with lazy TTL
expiry. Eviction is by insertion order, not by access: a frequently read
entry is still the first to go once it is the oldest.

AnalysisCache adds near-duplicate lookup over token sets stored alongside
each entry. ScenarioCache is the same pattern keyed over practice inputs.
"""

import hashlib
import json
import logging
import re
import string
import threading
import time
from collections import OrderedDict
from dataclasses import dataclass, field
from typing import Any, Callable, Generic, Iterable, TypeVar

from .config import (
    ANALYSIS_CACHE_MAX_ENTRIES,
    ANALYSIS_CACHE_TTL_SECONDS,
    SCENARIO_CACHE_TTL_SECONDS,
)
from .models import AnalysisResult, PracticeSession

logger = logging.getLogger(__name__)

V = TypeVar("V")

SIMILARITY_MAX_CONTENT_LENGTH = 1000
DEFAULT_SIMILARITY_THRESHOLD = 0.8

_KEY_SEPARATOR = "\x1f"
_WHITESPACE_RE = re.compile(r"\s+")
_PUNCTUATION_TABLE = str.maketrans("", "", string.punctuation)


@dataclass
class CacheEntry(Generic[V]):
    key: str
    value: V
    inserted_at: float
    tokens: frozenset[str] = field(default_factory=frozenset)


class TTLCache(Generic[V]):
    """FIFO-evicting cache with time-to-live expiry checked on access."""

    def __init__(
        self,
        ttl_seconds: float,
        max_entries: int | None = None,
        clock: Callable[[], float] = time.time,
        name: str = "cache",
    ):
        self.ttl_seconds = ttl_seconds
        self.max_entries = max_entries
        self.name = name
        self._clock = clock
        self._entries: OrderedDict[str, CacheEntry[V]] = OrderedDict()
        self._lock = threading.Lock()
        self._hits = 0
        self._misses = 0
        self._similar_hits = 0
        self._expirations = 0
        self._evictions = 0

    def _is_fresh(self, entry: CacheEntry[V], now: float) -> bool:
        return now - entry.inserted_at < self.ttl_seconds

    def get(self, key: str) -> V | None:
        """Return the stored value, or None if absent or expired (expired entries are removed)."""
        with self._lock:
            entry = self._entries.get(key)
            if entry is None:
                self._misses += 1
                return None

            if not self._is_fresh(entry, self._clock()):
                del self._entries[key]
                self._expirations += 1
                self._misses += 1
                logger.debug(f"[CACHE] {self.name}: expired {key[:12]}")
                return None

            self._hits += 1
            logger.debug(f"[CACHE] {self.name}: hit {key[:12]}")
            return entry.value

    def set(self, key: str, value: V, tokens: Iterable[str] = frozenset()) -> None:
        """Insert or fully replace an entry; the new insertion goes to the back of the queue."""
        with self._lock:
            self._entries.pop(key, None)

            if self.max_entries is not None:
                while self._entries and len(self._entries) >= self.max_entries:
                    evicted, _ = self._entries.popitem(last=False)
                    self._evictions += 1
                    logger.debug(f"[CACHE] {self.name}: evicted {evicted[:12]}")

            self._entries[key] = CacheEntry(
                key=key,
                value=value,
                inserted_at=self._clock(),
                tokens=frozenset(tokens),
            )

    def evict(self, key: str) -> bool:
        with self._lock:
            return self._entries.pop(key, None) is not None

    def clear(self) -> None:
        """Clear the cache."""
        with self._lock:
            self._entries.clear()

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)

    def __contains__(self, key: object) -> bool:
        with self._lock:
            entry = self._entries.get(key)  # type: ignore[arg-type]
            return entry is not None and self._is_fresh(entry, self._clock())

    def keys(self) -> list[str]:
        """Keys in insertion order, oldest first."""
        with self._lock:
            return list(self._entries)

    def get_stats(self) -> dict[str, Any]:
        """Get cache statistics."""
        with self._lock:
            total = self._hits + self._misses
            return {
                "hits": self._hits,
                "misses": self._misses,
                "similar_hits": self._similar_hits,
                "expirations": self._expirations,
                "evictions": self._evictions,
                "size": len(self._entries),
                "max_size": self.max_entries,
                "hit_rate": self._hits / total if total > 0 else 0,
            }


def _normalize_text(text: str) -> str:
    return _WHITESPACE_RE.sub(" ", text).strip().lower()


class AnalysisCache(TTLCache[AnalysisResult]):
    """Journal analysis results keyed by a hash of (title, content)."""

    def __init__(
        self,
        ttl_seconds: float = ANALYSIS_CACHE_TTL_SECONDS,
        max_entries: int | None = ANALYSIS_CACHE_MAX_ENTRIES,
        clock: Callable[[], float] = time.time,
        max_similarity_content_length: int = SIMILARITY_MAX_CONTENT_LENGTH,
    ):
        super().__init__(ttl_seconds, max_entries, clock, name="analysis")
        self.max_similarity_content_length = max_similarity_content_length

    @staticmethod
    def make_key(title: str, content: str) -> str:
        payload = f"{_normalize_text(title)}{_KEY_SEPARATOR}{_normalize_text(content)}"
        return hashlib.sha256(payload.encode("utf-8")).hexdigest()

    @staticmethod
    def tokenize(title: str, content: str) -> frozenset[str]:
        """Lowercased words longer than 3 characters, punctuation stripped."""
        text = f"{title} {content}".lower().translate(_PUNCTUATION_TABLE)
        return frozenset(word for word in text.split() if len(word) > 3)

    def get_for(self, title: str, content: str) -> AnalysisResult | None:
        return self.get(self.make_key(title, content))

    def set_for(self, title: str, content: str, result: AnalysisResult) -> str:
        """Cache a result together with its token set; returns the key."""
        key = self.make_key(title, content)
        self.set(key, result, tokens=self.tokenize(title, content))
        return key

    def find_similar(
        self,
        title: str,
        content: str,
        threshold: float = DEFAULT_SIMILARITY_THRESHOLD,
    ) -> AnalysisResult | None:
        """
        Near-duplicate lookup by Jaccard similarity of token sets.

        Skipped entirely for content longer than the configured bound. Expired
        entries are ignored (not removed); a hit neither refreshes the entry's
        TTL nor changes its eviction order. Ties go to the earliest insertion.
        """
        if len(content) > self.max_similarity_content_length:
            return None

        query = self.tokenize(title, content)
        best: CacheEntry[AnalysisResult] | None = None
        best_score = 0.0

        with self._lock:
            now = self._clock()
            for entry in self._entries.values():
                if not self._is_fresh(entry, now):
                    continue
                union = query | entry.tokens
                if not union:
                    continue
                score = len(query & entry.tokens) / len(union)
                if score >= threshold and score > best_score:
                    best, best_score = entry, score

            if best is None:
                return None
            self._similar_hits += 1

        logger.debug(f"[CACHE] analysis: similar hit {best.key[:12]} ({best_score:.2f})")
        return best.value


class ScenarioCache(TTLCache[PracticeSession]):
    """Generated practice sessions keyed by (thought, distortions, emotion, instructions)."""

    def __init__(
        self,
        ttl_seconds: float = SCENARIO_CACHE_TTL_SECONDS,
        max_entries: int | None = None,
        clock: Callable[[], float] = time.time,
    ):
        super().__init__(ttl_seconds, max_entries, clock, name="scenario")

    @staticmethod
    def make_key(
        thought: str,
        distortions: Iterable[str],
        emotion: str,
        custom_instructions: str | None = None,
    ) -> str:
        payload = json.dumps(
            [thought, sorted(set(distortions)), emotion, custom_instructions or ""],
            ensure_ascii=False,
        )
        return hashlib.sha256(payload.encode("utf-8")).hexdigest()

    def get_for(
        self,
        thought: str,
        distortions: Iterable[str],
        emotion: str,
        custom_instructions: str | None = None,
    ) -> PracticeSession | None:
        return self.get(self.make_key(thought, distortions, emotion, custom_instructions))

    def set_for(
        self,
        thought: str,
        distortions: Iterable[str],
        emotion: str,
        custom_instructions: str | None,
        session: PracticeSession,
    ) -> str:
        key = self.make_key(thought, distortions, emotion, custom_instructions)
        self.set(key, session)
        return key
