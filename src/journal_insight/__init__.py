"""
Journal Insight

Analysis engine for CBT journal entries:
- Three-level emotion taxonomy with an ordered resolution chain
- Content-addressable analysis cache with near-duplicate lookup
- Deterministic rule-based fallback analyzer, same output shape as the LLM
- Orchestrator tying cache, external LLM call and fallback together
- Reframe practice session generation
- Insights connecting emotion records, journals and thought records
"""

__version__ = "1.0.0"

from .analysis_cache import AnalysisCache, ScenarioCache, TTLCache
from .config import AnalysisConfig, configure_logging, get_config
from .errors import (
    AnalysisServiceError,
    InternalAnalysisError,
    JournalInsightError,
    MalformedResponseError,
    QuotaExceededError,
)
from .fallback_analyzer import FallbackAnalyzer, analyze_offline
from .insights import EmotionConnection, enhance_component_connections, generate_data_insights
from .llm_client import LLMClient, create_llm_client
from .models import AnalysisResult, EmotionCategory, PracticeSession, Sentiment
from .orchestrator import AnalysisOrchestrator, get_orchestrator
from .taxonomy import (
    CoreEmotion,
    categorize_emotion,
    get_emotion_color,
    get_related_emotions,
    resolve,
)

__all__ = [
    "AnalysisCache",
    "ScenarioCache",
    "TTLCache",
    "AnalysisConfig",
    "configure_logging",
    "get_config",
    "AnalysisServiceError",
    "InternalAnalysisError",
    "JournalInsightError",
    "MalformedResponseError",
    "QuotaExceededError",
    "FallbackAnalyzer",
    "analyze_offline",
    "EmotionConnection",
    "enhance_component_connections",
    "generate_data_insights",
    "LLMClient",
    "create_llm_client",
    "AnalysisResult",
    "EmotionCategory",
    "PracticeSession",
    "Sentiment",
    "AnalysisOrchestrator",
    "get_orchestrator",
    "CoreEmotion",
    "categorize_emotion",
    "get_emotion_color",
    "get_related_emotions",
    "resolve",
]
