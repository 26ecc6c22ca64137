"""
Analysis orchestration: cache, then external service, then fallback.

- Exact and near-duplicate cache lookups come first
- Concurrent callers for the same key share one in-flight external call
- Any external failure degrades to the offline analyzer (never cached)
- Quota exhaustion opens a breaker that skips the external call for a cooldown
"""

import asyncio
import concurrent.futures
import functools
import logging
import threading
import time
from typing import Any, Awaitable, Callable, Protocol, TypeVar

from .analysis_cache import AnalysisCache, ScenarioCache
from .config import AnalysisConfig, get_config
from .errors import InternalAnalysisError, QuotaExceededError
from .fallback_analyzer import FallbackAnalyzer
from .llm_client import create_llm_client
from .models import AnalysisResult, PracticeSession
from .practice import build_fallback_session, normalize_distortions

logger = logging.getLogger(__name__)

T = TypeVar("T")


class AnalysisService(Protocol):
    """The external text-analysis collaborator (LLMClient in production)."""

    async def analyze_journal_entry(self, title: str, content: str) -> AnalysisResult: ...

    async def generate_practice_scenarios(
        self,
        thought: str,
        distortions: list[str],
        emotion: str,
        custom_instructions: str | None = None,
    ) -> PracticeSession: ...


class QuotaBreaker:
    """
    Pauses external calls after quota exhaustion.

    A single quota failure opens the breaker; it closes again once
    reset_time seconds have passed since the latest failure.
    """

    def __init__(self, reset_time: float, clock: Callable[[], float] = time.time):
        self.reset_time = reset_time
        self._clock = clock
        self.opened_at: float | None = None
        self.trips = 0

    @property
    def is_open(self) -> bool:
        return self.opened_at is not None

    def record_failure(self) -> None:
        self.opened_at = self._clock()
        self.trips += 1

    def record_success(self) -> None:
        self.opened_at = None

    def can_proceed(self) -> bool:
        """Check if the external call may be attempted, closing an expired breaker."""
        if self.opened_at is None:
            return True
        if self._clock() - self.opened_at >= self.reset_time:
            self.opened_at = None
            return True
        return False

    def remaining(self) -> float:
        if self.opened_at is None:
            return 0.0
        return max(0.0, self.reset_time - (self._clock() - self.opened_at))

    def get_status(self) -> dict[str, Any]:
        return {
            "is_open": self.is_open,
            "trips": self.trips,
            "cooldown_seconds": self.reset_time,
            "remaining_seconds": self.remaining(),
        }


def _require_str(**values: Any) -> None:
    for name, value in values.items():
        if not isinstance(value, str):
            raise InternalAnalysisError(f"{name} must be a string, got {type(value).__name__}")


class AnalysisOrchestrator:
    """
    Integration point for journal analysis and practice generation.

    analyze() never raises for external failures; only invalid input or an
    unexpected internal error surfaces, as InternalAnalysisError.
    """

    def __init__(
        self,
        service: AnalysisService | None = None,
        config: AnalysisConfig | None = None,
        analysis_cache: AnalysisCache | None = None,
        scenario_cache: ScenarioCache | None = None,
        clock: Callable[[], float] = time.time,
    ):
        self.config = config or get_config()
        self.service = service
        self.analysis_cache = analysis_cache if analysis_cache is not None else AnalysisCache(
            ttl_seconds=self.config.analysis_cache_ttl_seconds,
            max_entries=self.config.analysis_cache_max_entries,
            clock=clock,
            max_similarity_content_length=self.config.similarity_max_content_length,
        )
        self.scenario_cache = scenario_cache if scenario_cache is not None else ScenarioCache(
            ttl_seconds=self.config.scenario_cache_ttl_seconds,
            clock=clock,
        )
        self.fallback = FallbackAnalyzer()
        self.quota_breaker = QuotaBreaker(reset_time=self.config.quota_cooldown_seconds, clock=clock)

        self._analysis_inflight: dict[str, concurrent.futures.Future] = {}
        self._scenario_inflight: dict[str, concurrent.futures.Future] = {}
        self._inflight_lock = threading.Lock()
        self._tasks: set[asyncio.Task] = set()
        self._external_calls = 0
        self._external_failures = 0
        self._fallbacks = 0

    async def _deduplicated(
        self,
        inflight: dict[str, concurrent.futures.Future],
        key: str,
        factory: Callable[[], Awaitable[T]],
    ) -> T:
        """
        Await the shared result for key, starting the work if none is running.

        The table holds thread-safe futures, so callers on other threads'
        event loops join the same call instead of starting their own.
        """
        with self._inflight_lock:
            shared = inflight.get(key)
            owner = shared is None
            if owner:
                shared = concurrent.futures.Future()
                # Running futures cannot be cancelled by a departing waiter
                shared.set_running_or_notify_cancel()
                inflight[key] = shared

        if owner:
            task = asyncio.ensure_future(factory())
            with self._inflight_lock:
                self._tasks.add(task)
            task.add_done_callback(functools.partial(self._settle, inflight, key, shared))
        else:
            logger.debug(f"[CACHE] Joining in-flight request {key[:12]}")

        # Shielded: a cancelled caller leaves the shared call running
        return await asyncio.shield(asyncio.wrap_future(shared))

    def _settle(
        self,
        inflight: dict[str, concurrent.futures.Future],
        key: str,
        shared: concurrent.futures.Future,
        task: asyncio.Task,
    ) -> None:
        with self._inflight_lock:
            self._tasks.discard(task)
            if inflight.get(key) is shared:
                del inflight[key]

        if task.cancelled():
            # Only happens when the owning event loop shuts down mid-call
            shared.set_exception(InternalAnalysisError(f"In-flight request {key[:12]} was cancelled"))
        elif task.exception() is not None:
            shared.set_exception(task.exception())
        else:
            shared.set_result(task.result())

    def _external_available(self) -> bool:
        if self.service is None:
            return False
        if not self.quota_breaker.can_proceed():
            logger.info("[QUOTA] Cooldown active, skipping external call")
            return False
        return True

    def _record_external_failure(self, error: Exception) -> None:
        self._external_failures += 1
        if isinstance(error, QuotaExceededError):
            self.quota_breaker.record_failure()
            logger.warning(
                f"[QUOTA] Quota exhausted, external calls paused for {self.quota_breaker.reset_time:.0f}s"
            )
        else:
            logger.warning(f"[LLM] External call failed: {type(error).__name__}: {error}")

    def _run_fallback(self, title: str, content: str, reason: str) -> AnalysisResult:
        self._fallbacks += 1
        try:
            return self.fallback.analyze(title, content, fallback_reason=reason)
        except Exception as e:
            raise InternalAnalysisError(f"Offline analysis failed: {e}") from e

    async def analyze(self, title: str, content: str) -> AnalysisResult:
        """
        Analyze a journal entry.

        Lookup order: exact cache hit, near-duplicate hit (short content only),
        external service, offline fallback.

        Raises:
            InternalAnalysisError: if title or content is not a string
        """
        _require_str(title=title, content=content)

        cached = self.analysis_cache.get_for(title, content)
        if cached is not None:
            return cached

        if len(content) <= self.config.similarity_max_content_length:
            similar = self.analysis_cache.find_similar(
                title, content, threshold=self.config.similarity_threshold
            )
            if similar is not None:
                return similar

        key = AnalysisCache.make_key(title, content)
        return await self._deduplicated(
            self._analysis_inflight, key, lambda: self._analyze_uncached(title, content)
        )

    async def _analyze_uncached(self, title: str, content: str) -> AnalysisResult:
        if not self._external_available():
            reason = "no analysis service configured" if self.service is None else "quota cooldown"
            return self._run_fallback(title, content, reason)

        self._external_calls += 1
        try:
            result = await self.service.analyze_journal_entry(title, content)
            if not isinstance(result, AnalysisResult):
                raise TypeError(f"service returned {type(result).__name__}")
        except Exception as e:
            self._record_external_failure(e)
            return self._run_fallback(title, content, f"{type(e).__name__}")

        self.quota_breaker.record_success()
        self.analysis_cache.set_for(title, content, result)
        return result

    def analyze_offline(self, title: str, content: str) -> AnalysisResult:
        """Force the deterministic fallback path."""
        _require_str(title=title, content=content)
        return self._run_fallback(title, content, "offline analysis requested")

    async def generate_practice_scenarios(
        self,
        thought: str,
        distortions: Any,
        emotion: str,
        custom_instructions: str | None = None,
    ) -> PracticeSession:
        """
        Reframe practice session for an automatic thought, cached for 24 hours.

        Falls back to a deterministic session on any external failure.
        """
        _require_str(thought=thought, emotion=emotion)
        if custom_instructions is not None:
            _require_str(custom_instructions=custom_instructions)
        distortions = normalize_distortions(distortions)

        cached = self.scenario_cache.get_for(thought, distortions, emotion, custom_instructions)
        if cached is not None:
            return cached

        key = ScenarioCache.make_key(thought, distortions, emotion, custom_instructions)
        return await self._deduplicated(
            self._scenario_inflight,
            key,
            lambda: self._generate_uncached(thought, distortions, emotion, custom_instructions),
        )

    async def _generate_uncached(
        self,
        thought: str,
        distortions: list[str],
        emotion: str,
        custom_instructions: str | None,
    ) -> PracticeSession:
        if self._external_available():
            self._external_calls += 1
            try:
                session = await self.service.generate_practice_scenarios(
                    thought, distortions, emotion, custom_instructions
                )
                if not isinstance(session, PracticeSession):
                    raise TypeError(f"service returned {type(session).__name__}")
            except Exception as e:
                self._record_external_failure(e)
            else:
                self.quota_breaker.record_success()
                self.scenario_cache.set_for(thought, distortions, emotion, custom_instructions, session)
                return session

        self._fallbacks += 1
        logger.info("[FALLBACK] Using built-in practice session")
        try:
            return build_fallback_session(thought, distortions, emotion)
        except Exception as e:
            raise InternalAnalysisError(f"Fallback practice session failed: {e}") from e

    def _in_flight_count(self) -> int:
        with self._inflight_lock:
            return len(self._analysis_inflight) + len(self._scenario_inflight)

    def get_stats(self) -> dict[str, Any]:
        """Get orchestrator statistics."""
        return {
            "analysis_cache": self.analysis_cache.get_stats(),
            "scenario_cache": self.scenario_cache.get_stats(),
            "external_calls": self._external_calls,
            "external_failures": self._external_failures,
            "fallbacks": self._fallbacks,
            "in_flight": self._in_flight_count(),
            "quota_breaker": self.quota_breaker.get_status(),
            "external_enabled": self.service is not None,
        }

    async def aclose(self) -> None:
        """Close the external service client, if it holds one."""
        close = getattr(self.service, "aclose", None)
        if close is not None:
            await close()


# Global orchestrator instance (singleton pattern for request handlers)
_global_orchestrator: AnalysisOrchestrator | None = None


def get_orchestrator(reset: bool = False) -> AnalysisOrchestrator:
    """
    Get the global orchestrator instance.

    Args:
        reset: If True, create a new orchestrator instance

    Returns:
        The global AnalysisOrchestrator, with an LLMClient attached only when
        an API key is configured
    """
    global _global_orchestrator

    if _global_orchestrator is None or reset:
        config = get_config()
        for problem in config.validate():
            logger.warning(f"Configuration: {problem}")
        _global_orchestrator = AnalysisOrchestrator(service=create_llm_client(config), config=config)

    return _global_orchestrator
