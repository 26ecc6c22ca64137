"""
Exception hierarchy for the journal analysis engine.

External-service failures are raised by the LLM client and always absorbed
by the orchestrator. InternalAnalysisError is the only error that reaches
callers of AnalysisOrchestrator.analyze().
"""


class JournalInsightError(Exception):
    """Base class for all journal-insight errors."""


class AnalysisServiceError(JournalInsightError):
    """The external text-analysis service failed (network, API or parse error)."""


class QuotaExceededError(AnalysisServiceError):
    """The external service reported quota exhaustion or rate limiting."""


class MalformedResponseError(AnalysisServiceError):
    """The external service answered, but not with the expected JSON shape."""


class InternalAnalysisError(JournalInsightError):
    """Unexpected internal failure, e.g. invalid input types reaching the engine."""
