"""
Configuration for the journal analysis engine

Environment Variables:
- OPENAI_API_KEY: Enables the external analysis path (fallback-only when unset)
- OPENAI_BASE_URL: API base URL (default: https://api.openai.com/v1)
- JOURNAL_ANALYSIS_MODEL: Chat model used for analysis (default: gpt-4o)
- JOURNAL_ANALYSIS_TEMPERATURE: Sampling temperature (default: 0.7)
- JOURNAL_MAX_INPUT_TOKENS: Token budget for journal content in prompts (default: 6000)
- JOURNAL_REQUEST_TIMEOUT: Per-request timeout in seconds (default: unset, no timeout)
- ANALYSIS_CACHE_TTL / ANALYSIS_CACHE_MAX_ENTRIES: Analysis cache bounds (7 days / 100)
- SCENARIO_CACHE_TTL: Practice scenario cache TTL (24 hours)
- SIMILARITY_THRESHOLD / SIMILARITY_MAX_CONTENT_LENGTH: Near-duplicate lookup (0.8 / 1000)
- QUOTA_COOLDOWN_SECONDS: How long to skip the external call after quota exhaustion (300)
"""

import logging
import os
from dataclasses import dataclass, field

from dotenv import load_dotenv

load_dotenv()


DEFAULT_MODEL = "gpt-4o"
DEFAULT_BASE_URL = "https://api.openai.com/v1"

ANALYSIS_CACHE_TTL_SECONDS = 7 * 24 * 60 * 60
ANALYSIS_CACHE_MAX_ENTRIES = 100
SCENARIO_CACHE_TTL_SECONDS = 24 * 60 * 60

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def _optional_float(name: str) -> float | None:
    raw = os.getenv(name, "").strip()
    return float(raw) if raw else None


@dataclass
class AnalysisConfig:
    """Configuration for journal analysis, caching and the external LLM call."""

    # API Configuration
    api_key: str = field(default_factory=lambda: os.getenv("OPENAI_API_KEY", ""))
    api_base_url: str = field(default_factory=lambda: os.getenv("OPENAI_BASE_URL", DEFAULT_BASE_URL))
    model: str = field(default_factory=lambda: os.getenv("JOURNAL_ANALYSIS_MODEL", DEFAULT_MODEL))
    temperature: float = field(
        default_factory=lambda: float(os.getenv("JOURNAL_ANALYSIS_TEMPERATURE", "0.7"))
    )
    max_input_tokens: int = field(
        default_factory=lambda: int(os.getenv("JOURNAL_MAX_INPUT_TOKENS", "6000"))
    )
    # None leaves the timeout to the surrounding service
    request_timeout_seconds: float | None = field(
        default_factory=lambda: _optional_float("JOURNAL_REQUEST_TIMEOUT")
    )

    # Cache Configuration
    analysis_cache_ttl_seconds: float = field(
        default_factory=lambda: float(os.getenv("ANALYSIS_CACHE_TTL", str(ANALYSIS_CACHE_TTL_SECONDS)))
    )
    analysis_cache_max_entries: int = field(
        default_factory=lambda: int(os.getenv("ANALYSIS_CACHE_MAX_ENTRIES", str(ANALYSIS_CACHE_MAX_ENTRIES)))
    )
    scenario_cache_ttl_seconds: float = field(
        default_factory=lambda: float(os.getenv("SCENARIO_CACHE_TTL", str(SCENARIO_CACHE_TTL_SECONDS)))
    )

    # Near-duplicate lookup
    similarity_threshold: float = field(
        default_factory=lambda: float(os.getenv("SIMILARITY_THRESHOLD", "0.8"))
    )
    similarity_max_content_length: int = field(
        default_factory=lambda: int(os.getenv("SIMILARITY_MAX_CONTENT_LENGTH", "1000"))
    )

    # Skip the external call for a while once quota is exhausted
    quota_cooldown_seconds: float = field(
        default_factory=lambda: float(os.getenv("QUOTA_COOLDOWN_SECONDS", "300"))
    )

    @property
    def external_enabled(self) -> bool:
        return bool(self.api_key)

    def validate(self) -> list[str]:
        """Validate configuration and return list of errors."""
        errors = []

        if not self.api_key:
            errors.append("OPENAI_API_KEY environment variable not set (fallback analysis only)")

        if not 0.0 < self.similarity_threshold <= 1.0:
            errors.append("similarity_threshold must be in (0, 1]")

        if self.analysis_cache_max_entries < 1:
            errors.append("analysis_cache_max_entries must be at least 1")

        if self.analysis_cache_ttl_seconds <= 0 or self.scenario_cache_ttl_seconds <= 0:
            errors.append("cache TTLs must be positive")

        if self.max_input_tokens < 100:
            errors.append("max_input_tokens must be at least 100")

        return errors


def get_config() -> AnalysisConfig:
    """Get a configuration instance."""
    return AnalysisConfig()


def configure_logging(log_level: int = logging.INFO) -> None:
    """Enable log output for the engine."""
    logging.basicConfig(level=log_level, format=LOG_FORMAT)
