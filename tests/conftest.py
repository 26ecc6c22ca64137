"""
Pytest configuration and fixtures for journal-insight tests.
"""

from unittest.mock import AsyncMock

import pytest

from journal_insight.analysis_cache import AnalysisCache, ScenarioCache
from journal_insight.config import AnalysisConfig
from journal_insight.models import AnalysisResult, Sentiment
from journal_insight.orchestrator import AnalysisOrchestrator
from journal_insight.practice import build_fallback_session


class FakeClock:
    """Manually advanced clock for TTL tests."""

    def __init__(self, start: float = 1_000_000.0):
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def analysis_config() -> AnalysisConfig:
    """Create a test configuration independent of the environment."""
    return AnalysisConfig(
        api_key="test-api-key",
        api_base_url="https://api.example.test/v1",
        model="gpt-4o",
        temperature=0.7,
        max_input_tokens=6000,
        request_timeout_seconds=None,
        analysis_cache_ttl_seconds=7 * 24 * 60 * 60,
        analysis_cache_max_entries=100,
        scenario_cache_ttl_seconds=24 * 60 * 60,
        similarity_threshold=0.8,
        similarity_max_content_length=1000,
        quota_cooldown_seconds=300,
    )


@pytest.fixture
def analysis_cache(clock: FakeClock) -> AnalysisCache:
    return AnalysisCache(clock=clock)


@pytest.fixture
def scenario_cache(clock: FakeClock) -> ScenarioCache:
    return ScenarioCache(clock=clock)


@pytest.fixture
def sample_result() -> AnalysisResult:
    """An analysis result as the external service would return it."""
    return AnalysisResult(
        suggested_tags=["work", "stress", "deadline"],
        analysis="The entry describes pressure at work ahead of a deadline.",
        emotions=["stressed", "worried"],
        topics=["work"],
        sentiment=Sentiment(positive=10, negative=70, neutral=20),
        cognitive_distortions=["Catastrophizing"],
    )


@pytest.fixture
def sample_session():
    return build_fallback_session("I always mess things up", ["overgeneralization"], "Sadness")


@pytest.fixture
def mock_service(sample_result: AnalysisResult, sample_session) -> AsyncMock:
    """External analysis service that succeeds."""
    service = AsyncMock()
    service.analyze_journal_entry.return_value = sample_result
    service.generate_practice_scenarios.return_value = sample_session
    return service


@pytest.fixture
def orchestrator(
    mock_service: AsyncMock,
    analysis_config: AnalysisConfig,
    clock: FakeClock,
) -> AnalysisOrchestrator:
    return AnalysisOrchestrator(service=mock_service, config=analysis_config, clock=clock)
