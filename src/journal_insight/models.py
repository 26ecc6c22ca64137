"""
Data model for journal analysis.

Contains:
- Sentiment split and the percentage normalisation shared by the LLM and
  fallback paths
- AnalysisResult (the structured output of both paths)
- EmotionCategory (three-level taxonomy placement)
- PracticeOption / PracticeScenario / PracticeSession for reframe practice
"""

import math
from dataclasses import dataclass
from typing import Any

from .errors import MalformedResponseError

MAX_SUGGESTED_TAGS = 8

SCENARIOS_PER_SESSION = 3
OPTIONS_PER_SCENARIO = 4


def round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def split_percentages(positive: float, negative: float, neutral: float) -> tuple[int, int, int]:
    """
    Turn three non-negative weights into integer percentages summing to 100.

    Each share is rounded half-up; the rounding remainder goes to the bucket
    with the largest share (ties resolved positive, negative, neutral).
    All-zero weights yield a fully neutral split.
    """
    weights = [max(0.0, float(positive)), max(0.0, float(negative)), max(0.0, float(neutral))]
    total = sum(weights)
    if total <= 0:
        return 0, 0, 100

    shares = [w / total * 100 for w in weights]
    rounded = [round_half_up(s) for s in shares]
    remainder = 100 - sum(rounded)
    if remainder:
        largest = max(range(3), key=lambda i: (rounded[i], -i))
        rounded[largest] += remainder
    return rounded[0], rounded[1], rounded[2]


@dataclass(frozen=True)
class Sentiment:
    """Sentiment split in whole percentages; always sums to 100."""
    positive: int
    negative: int
    neutral: int

    def __post_init__(self) -> None:
        values = (self.positive, self.negative, self.neutral)
        if any(v < 0 for v in values) or sum(values) != 100:
            raise ValueError(f"Sentiment must be non-negative and sum to 100, got {values}")

    @classmethod
    def from_weights(cls, positive: float, negative: float, neutral: float) -> "Sentiment":
        return cls(*split_percentages(positive, negative, neutral))

    def to_dict(self) -> dict[str, int]:
        return {"positive": self.positive, "negative": self.negative, "neutral": self.neutral}


def _string_list(data: dict[str, Any], key: str, required: bool = True) -> list[str]:
    value = data.get(key)
    if value is None:
        if required:
            raise MalformedResponseError(f"Missing field: {key}")
        return []
    if isinstance(value, str):
        value = [value]
    if not isinstance(value, list):
        raise MalformedResponseError(f"Field {key} must be a list, got {type(value).__name__}")
    return [str(item).strip() for item in value if str(item).strip()]


@dataclass(frozen=True)
class AnalysisResult:
    """
    Structured journal analysis, identical in shape for LLM and fallback output.

    Immutable: cached results are shared between callers, so sequence fields
    are stored as tuples.
    """
    suggested_tags: tuple[str, ...]
    analysis: str
    emotions: tuple[str, ...]
    topics: tuple[str, ...]
    sentiment: Sentiment
    cognitive_distortions: tuple[str, ...] = ()

    def __post_init__(self) -> None:
        object.__setattr__(self, "suggested_tags", tuple(self.suggested_tags)[:MAX_SUGGESTED_TAGS])
        object.__setattr__(self, "emotions", tuple(self.emotions))
        object.__setattr__(self, "topics", tuple(self.topics))
        object.__setattr__(self, "cognitive_distortions", tuple(self.cognitive_distortions))

    def to_dict(self) -> dict[str, Any]:
        return {
            "suggestedTags": list(self.suggested_tags),
            "analysis": self.analysis,
            "emotions": list(self.emotions),
            "topics": list(self.topics),
            "cognitiveDistortions": list(self.cognitive_distortions),
            "sentiment": self.sentiment.to_dict(),
        }

    @classmethod
    def from_dict(cls, data: Any) -> "AnalysisResult":
        """
        Build a result from the camelCase wire format.

        Sentiment values are re-normalised so they sum to exactly 100 even when
        the source rounded differently.

        Raises:
            MalformedResponseError: if a required field is missing or mistyped
        """
        if not isinstance(data, dict):
            raise MalformedResponseError(f"Expected a JSON object, got {type(data).__name__}")

        analysis = data.get("analysis")
        if not isinstance(analysis, str):
            raise MalformedResponseError("Missing field: analysis")

        raw_sentiment = data.get("sentiment")
        if not isinstance(raw_sentiment, dict):
            raise MalformedResponseError("Missing field: sentiment")
        try:
            sentiment = Sentiment.from_weights(
                raw_sentiment.get("positive", 0),
                raw_sentiment.get("negative", 0),
                raw_sentiment.get("neutral", 0),
            )
        except (TypeError, ValueError) as e:
            raise MalformedResponseError(f"Invalid sentiment values: {e}") from e

        return cls(
            suggested_tags=_string_list(data, "suggestedTags"),
            analysis=analysis.strip(),
            emotions=_string_list(data, "emotions"),
            topics=_string_list(data, "topics"),
            sentiment=sentiment,
            cognitive_distortions=_string_list(data, "cognitiveDistortions", required=False),
        )


@dataclass(frozen=True)
class EmotionCategory:
    """Placement of a label in the three-level taxonomy; any level may be unknown."""
    core: str | None = None
    secondary: str | None = None
    tertiary: str | None = None

    def to_dict(self) -> dict[str, str | None]:
        return {
            "coreEmotion": self.core,
            "secondaryEmotion": self.secondary,
            "tertiaryEmotion": self.tertiary,
        }


@dataclass(frozen=True)
class PracticeOption:
    text: str
    is_correct: bool
    explanation: str

    def to_dict(self) -> dict[str, Any]:
        return {"text": self.text, "isCorrect": self.is_correct, "explanation": self.explanation}


@dataclass(frozen=True)
class PracticeScenario:
    scenario: str
    options: tuple[PracticeOption, ...]
    cognitive_distortion: str
    emotion_category: str

    def __post_init__(self) -> None:
        object.__setattr__(self, "options", tuple(self.options))

    def to_dict(self) -> dict[str, Any]:
        return {
            "scenario": self.scenario,
            "options": [o.to_dict() for o in self.options],
            "cognitiveDistortion": self.cognitive_distortion,
            "emotionCategory": self.emotion_category,
        }


@dataclass(frozen=True)
class PracticeSession:
    """
    A reframe practice session.

    Invariant: exactly 3 scenarios, each with exactly 4 options of which
    exactly one is correct.
    """
    scenarios: tuple[PracticeScenario, ...]
    thought_content: str
    general_feedback: str

    def __post_init__(self) -> None:
        object.__setattr__(self, "scenarios", tuple(self.scenarios))
        self.validate()

    def validate(self) -> None:
        if len(self.scenarios) != SCENARIOS_PER_SESSION:
            raise MalformedResponseError(
                f"Expected {SCENARIOS_PER_SESSION} scenarios, got {len(self.scenarios)}"
            )
        for i, scenario in enumerate(self.scenarios):
            if len(scenario.options) != OPTIONS_PER_SCENARIO:
                raise MalformedResponseError(
                    f"Scenario {i} has {len(scenario.options)} options, expected {OPTIONS_PER_SCENARIO}"
                )
            correct = sum(1 for o in scenario.options if o.is_correct)
            if correct != 1:
                raise MalformedResponseError(f"Scenario {i} has {correct} correct options, expected 1")

    def to_dict(self) -> dict[str, Any]:
        return {
            "scenarios": [s.to_dict() for s in self.scenarios],
            "thoughtContent": self.thought_content,
            "generalFeedback": self.general_feedback,
        }

    @classmethod
    def from_dict(cls, data: Any) -> "PracticeSession":
        if not isinstance(data, dict) or not isinstance(data.get("scenarios"), list):
            raise MalformedResponseError("Missing field: scenarios")

        scenarios = []
        for raw in data["scenarios"]:
            if not isinstance(raw, dict) or not isinstance(raw.get("options"), list):
                raise MalformedResponseError("Scenario without options")
            options = [
                PracticeOption(
                    text=str(o.get("text", "")),
                    is_correct=bool(o.get("isCorrect", False)),
                    explanation=str(o.get("explanation", "")),
                )
                for o in raw["options"]
                if isinstance(o, dict)
            ]
            scenarios.append(PracticeScenario(
                scenario=str(raw.get("scenario", "")),
                options=options,
                cognitive_distortion=str(raw.get("cognitiveDistortion", "")),
                emotion_category=str(raw.get("emotionCategory", "")),
            ))

        return cls(
            scenarios=scenarios,
            thought_content=str(data.get("thoughtContent", "")),
            general_feedback=str(data.get("generalFeedback", "")),
        )
