"""
Tests for AnalysisOrchestrator.

Tests cover:
- Cache-first lookups (exact and near-duplicate)
- Fallback on any external failure, never cached
- Quota breaker cooldown
- In-flight de-duplication within one event loop and across threads
- Practice scenario generation
- Global instance wiring
"""

import asyncio
import dataclasses
import threading

import pytest

from journal_insight.errors import AnalysisServiceError, InternalAnalysisError, QuotaExceededError
from journal_insight.fallback_analyzer import analyze_offline
from journal_insight.llm_client import LLMClient
from journal_insight.models import OPTIONS_PER_SCENARIO, SCENARIOS_PER_SESSION
from journal_insight.orchestrator import AnalysisOrchestrator, QuotaBreaker, get_orchestrator

SHORT_CONTENT = "Another stressful meeting about the quarterly deadline with my manager today"


class SlowService:
    """Analysis service that takes a while to answer, callable from any event loop."""

    def __init__(self, result, delay: float = 0.2):
        self.result = result
        self.delay = delay
        self.calls = 0
        self._lock = threading.Lock()

    async def analyze_journal_entry(self, title, content):
        with self._lock:
            self.calls += 1
        await asyncio.sleep(self.delay)
        return self.result

    async def generate_practice_scenarios(self, thought, distortions, emotion, custom_instructions=None):
        raise AnalysisServiceError("not used")


class TestAnalyze:
    """Tests for the analyze() lookup chain."""

    @pytest.mark.asyncio
    async def test_external_result_is_cached(self, orchestrator, mock_service, sample_result):
        """A successful external result is served from cache afterwards."""
        first = await orchestrator.analyze("Work", SHORT_CONTENT)
        second = await orchestrator.analyze("Work", SHORT_CONTENT)

        assert first is sample_result
        assert second is sample_result
        assert mock_service.analyze_journal_entry.await_count == 1

    @pytest.mark.asyncio
    async def test_near_duplicate_hit(self, orchestrator, mock_service, sample_result):
        """A near-duplicate entry reuses the cached result."""
        await orchestrator.analyze("Work", SHORT_CONTENT)
        result = await orchestrator.analyze("Work", SHORT_CONTENT + " again")

        assert result is sample_result
        assert mock_service.analyze_journal_entry.await_count == 1

    @pytest.mark.asyncio
    async def test_long_content_skips_similarity(self, orchestrator, mock_service):
        """Content over the similarity bound always goes to the service on an exact miss."""
        content = SHORT_CONTENT * 20

        await orchestrator.analyze("Work", content)
        await orchestrator.analyze("Work", content + " again")

        assert len(content) > 1000
        assert mock_service.analyze_journal_entry.await_count == 2

    @pytest.mark.asyncio
    async def test_cached_result_cannot_be_modified_by_caller(self, orchestrator):
        """Results are immutable, so one caller cannot rewrite what the next one reads."""
        first = await orchestrator.analyze("Work", SHORT_CONTENT)

        with pytest.raises(AttributeError):
            first.emotions.append("edited")
        with pytest.raises(dataclasses.FrozenInstanceError):
            first.emotions = ("edited",)

        second = await orchestrator.analyze("Work", SHORT_CONTENT)
        assert second.emotions == ("stressed", "worried")

    @pytest.mark.asyncio
    async def test_failure_falls_back_and_is_not_cached(self, orchestrator, mock_service):
        """An external failure returns the offline result and leaves the cache empty."""
        mock_service.analyze_journal_entry.side_effect = AnalysisServiceError("connection reset")

        result = await orchestrator.analyze("Bad day", "I failed the exam")
        again = await orchestrator.analyze("Bad day", "I failed the exam")

        assert result == analyze_offline("Bad day", "I failed the exam")
        assert again == result
        assert len(orchestrator.analysis_cache) == 0
        assert mock_service.analyze_journal_entry.await_count == 2

    @pytest.mark.asyncio
    async def test_unexpected_service_error_falls_back(self, orchestrator, mock_service):
        """Errors outside the service hierarchy also fall back."""
        mock_service.analyze_journal_entry.side_effect = RuntimeError("unexpected")

        result = await orchestrator.analyze("Status", "I am not anxious about this")

        assert "anxious" not in result.emotions
        assert orchestrator.get_stats()["fallbacks"] == 1

    @pytest.mark.asyncio
    async def test_wrong_result_type_falls_back(self, orchestrator, mock_service):
        """A service returning something other than an AnalysisResult counts as a failure."""
        mock_service.analyze_journal_entry.return_value = {"analysis": "not a result"}

        result = await orchestrator.analyze("Status", "Fine")

        assert result == analyze_offline("Status", "Fine")
        assert len(orchestrator.analysis_cache) == 0

    @pytest.mark.asyncio
    async def test_quota_breaker_skips_external_call(self, orchestrator, mock_service, clock, sample_result):
        """Quota exhaustion pauses external calls until the cooldown passes."""
        mock_service.analyze_journal_entry.side_effect = QuotaExceededError("insufficient_quota")

        await orchestrator.analyze("One", "first entry")
        await orchestrator.analyze("Two", "second entry")
        assert mock_service.analyze_journal_entry.await_count == 1
        assert orchestrator.get_stats()["quota_breaker"]["is_open"] is True

        clock.advance(300)
        mock_service.analyze_journal_entry.side_effect = None
        result = await orchestrator.analyze("Three", "third entry")

        assert result is sample_result
        assert mock_service.analyze_journal_entry.await_count == 2
        assert orchestrator.get_stats()["quota_breaker"]["is_open"] is False

    @pytest.mark.asyncio
    async def test_no_service_uses_fallback(self, analysis_config, clock):
        """Without a service every miss is answered offline."""
        orchestrator = AnalysisOrchestrator(service=None, config=analysis_config, clock=clock)

        result = await orchestrator.analyze("Bad day", "I failed the exam")

        assert result == analyze_offline("Bad day", "I failed the exam")
        assert orchestrator.get_stats()["external_calls"] == 0

    @pytest.mark.asyncio
    async def test_invalid_input_raises(self, orchestrator):
        """Non-string input is an internal error, not a fallback."""
        with pytest.raises(InternalAnalysisError):
            await orchestrator.analyze(None, "content")  # type: ignore[arg-type]
        with pytest.raises(InternalAnalysisError):
            await orchestrator.analyze("title", 42)  # type: ignore[arg-type]

    @pytest.mark.asyncio
    async def test_injected_empty_cache_is_used(self, mock_service, analysis_config, analysis_cache):
        """An injected cache is used even while it is still empty."""
        orchestrator = AnalysisOrchestrator(
            service=mock_service, config=analysis_config, analysis_cache=analysis_cache
        )

        await orchestrator.analyze("Work", SHORT_CONTENT)

        assert orchestrator.analysis_cache is analysis_cache
        assert len(analysis_cache) == 1

    def test_analyze_offline_never_calls_service(self, orchestrator, mock_service):
        """The forced offline path bypasses the service entirely."""
        result = orchestrator.analyze_offline("Bad day", "I failed the exam")

        assert result == analyze_offline("Bad day", "I failed the exam")
        mock_service.analyze_journal_entry.assert_not_called()


class TestConcurrency:
    """Tests for in-flight de-duplication."""

    @pytest.mark.asyncio
    async def test_concurrent_identical_requests_share_one_call(self, orchestrator, mock_service, sample_result):
        """Identical concurrent requests in one loop make a single external call."""
        async def slow_analysis(title, content):
            await asyncio.sleep(0.01)
            return sample_result

        mock_service.analyze_journal_entry.side_effect = slow_analysis

        results = await asyncio.gather(*(orchestrator.analyze("Work", SHORT_CONTENT) for _ in range(5)))

        assert all(r is sample_result for r in results)
        assert mock_service.analyze_journal_entry.await_count == 1
        assert orchestrator.get_stats()["in_flight"] == 0

    @pytest.mark.asyncio
    async def test_different_keys_are_not_merged(self, orchestrator, mock_service):
        """Requests for different entries each reach the service."""
        await asyncio.gather(
            orchestrator.analyze("Work", "Deadline"),
            orchestrator.analyze("Home", "Quiet weekend with family and a long walk"),
        )

        assert mock_service.analyze_journal_entry.await_count == 2

    @pytest.mark.asyncio
    async def test_cancelled_caller_does_not_cancel_shared_call(self, orchestrator, mock_service, sample_result):
        """Cancelling the first caller leaves the shared call running for the others."""
        release = asyncio.Event()

        async def gated_analysis(title, content):
            await release.wait()
            return sample_result

        mock_service.analyze_journal_entry.side_effect = gated_analysis

        caller = asyncio.ensure_future(orchestrator.analyze("Work", SHORT_CONTENT))
        await asyncio.sleep(0)
        caller.cancel()
        with pytest.raises(asyncio.CancelledError):
            await caller

        release.set()
        result = await orchestrator.analyze("Work", SHORT_CONTENT)

        assert result is sample_result
        assert mock_service.analyze_journal_entry.await_count == 1

    def test_threads_with_separate_event_loops_share_one_call(self, analysis_config, clock, sample_result):
        """Callers on different threads' event loops join the same external call."""
        service = SlowService(sample_result)
        orchestrator = AnalysisOrchestrator(service=service, config=analysis_config, clock=clock)
        barrier = threading.Barrier(2)
        results, errors = [], []

        def worker():
            barrier.wait()
            try:
                results.append(asyncio.run(orchestrator.analyze("Title", "same content")))
            except Exception as e:
                errors.append(e)

        threads = [threading.Thread(target=worker) for _ in range(2)]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join(timeout=5)

        assert errors == []
        assert results == [sample_result, sample_result]
        assert service.calls == 1
        assert orchestrator.get_stats()["in_flight"] == 0


class TestPracticeScenarios:
    """Tests for generate_practice_scenarios()."""

    @pytest.mark.asyncio
    async def test_generated_session_is_cached(self, orchestrator, mock_service, sample_session):
        """A generated session is reused for the same inputs."""
        first = await orchestrator.generate_practice_scenarios("I always fail", ["overgeneralization"], "Sadness")
        second = await orchestrator.generate_practice_scenarios("I always fail", ["overgeneralization"], "Sadness")

        assert first is sample_session
        assert second is sample_session
        assert mock_service.generate_practice_scenarios.await_count == 1

    @pytest.mark.asyncio
    async def test_string_distortion_is_normalised(self, orchestrator, mock_service):
        """A single distortion string reaches the service as a one-item list."""
        await orchestrator.generate_practice_scenarios("I always fail", "labeling", "Sadness")

        args = mock_service.generate_practice_scenarios.await_args.args
        assert args[1] == ["labeling"]

    @pytest.mark.asyncio
    async def test_failure_returns_valid_fallback_session(self, orchestrator, mock_service):
        """A failed generation returns a well-formed built-in session, uncached."""
        mock_service.generate_practice_scenarios.side_effect = QuotaExceededError("quota")

        session = await orchestrator.generate_practice_scenarios("I always fail", None, "Sadness")

        assert len(session.scenarios) == SCENARIOS_PER_SESSION
        for scenario in session.scenarios:
            assert len(scenario.options) == OPTIONS_PER_SCENARIO
            assert sum(o.is_correct for o in scenario.options) == 1
        assert len(orchestrator.scenario_cache) == 0
        assert orchestrator.quota_breaker.is_open

    @pytest.mark.asyncio
    async def test_invalid_input_raises(self, orchestrator):
        """A non-string thought is rejected."""
        with pytest.raises(InternalAnalysisError):
            await orchestrator.generate_practice_scenarios(123, [], "Sadness")  # type: ignore[arg-type]


class TestQuotaBreaker:
    """Tests for QuotaBreaker."""

    def test_opens_on_first_failure_and_resets(self, clock):
        """One quota failure opens the breaker until the cooldown has passed."""
        breaker = QuotaBreaker(reset_time=60, clock=clock)

        assert breaker.can_proceed()
        breaker.record_failure()
        assert not breaker.can_proceed()
        assert breaker.remaining() == 60

        clock.advance(60)
        assert breaker.can_proceed()
        assert not breaker.is_open
        assert breaker.get_status()["trips"] == 1

    def test_new_failure_restarts_cooldown(self, clock):
        """The cooldown counts from the latest quota failure."""
        breaker = QuotaBreaker(reset_time=60, clock=clock)
        breaker.record_failure()
        clock.advance(50)
        breaker.record_failure()
        clock.advance(50)

        assert not breaker.can_proceed()
        assert breaker.remaining() == 10


class TestGlobalOrchestrator:
    """Tests for get_orchestrator()."""

    @pytest.mark.asyncio
    async def test_without_api_key(self, monkeypatch):
        """Without an API key the global instance runs fallback-only."""
        monkeypatch.delenv("OPENAI_API_KEY", raising=False)

        orchestrator = get_orchestrator(reset=True)

        assert orchestrator.service is None
        assert get_orchestrator() is orchestrator

    @pytest.mark.asyncio
    async def test_with_api_key(self, monkeypatch):
        """With an API key the global instance gets an LLM client."""
        monkeypatch.setenv("OPENAI_API_KEY", "sk-test")

        orchestrator = get_orchestrator(reset=True)
        try:
            assert isinstance(orchestrator.service, LLMClient)
            assert orchestrator.get_stats()["external_enabled"] is True
        finally:
            await orchestrator.aclose()
            get_orchestrator(reset=True)
