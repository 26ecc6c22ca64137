"""
Reframe practice sessions.

Builds generation inputs from thought-record fields and provides a
deterministic session when the external generator is unavailable.
"""

from typing import Any

from .models import (
    OPTIONS_PER_SCENARIO,
    SCENARIOS_PER_SESSION,
    PracticeOption,
    PracticeScenario,
    PracticeSession,
)
from .taxonomy import format_distortion_name

NOT_SPECIFIED = "Not specified"
UNKNOWN_DISTORTION = "unknown"
DEFAULT_THOUGHT = "No thought content available"

SCENARIO_SITUATIONS = (
    "You share an idea in a meeting and nobody responds right away.",
    "A friend cancels plans with you at the last minute.",
    "You make a small mistake on a task you had prepared carefully.",
)

BALANCED_REFRAMES = (
    "There could be several explanations; I don't have enough evidence to conclude the worst.",
    "One moment doesn't define the whole situation or who I am.",
    "I can notice this feeling and still look at what actually happened.",
)

DISTORTED_RESPONSES = (
    ("This proves {thought_lower}", "This repeats the original thought instead of testing it against evidence."),
    ("Everyone must think badly of me now.", "This assumes you know what others think without asking them."),
    ("I should just stop trying.", "This turns a single setback into a rule about the future."),
)


def build_scenario_instructions(
    evidence_for: str | None,
    evidence_against: str | None,
    alternative_perspective: str | None,
) -> str:
    """Custom generation instructions from a thought record's evidence fields."""
    def _field(value: str | None) -> str:
        return value.strip() if value and value.strip() else NOT_SPECIFIED

    return (
        "Make the scenarios closely related to the following situation and evidence:\n"
        f"Evidence for the thought: {_field(evidence_for)}\n"
        f"Evidence against the thought: {_field(evidence_against)}\n"
        f"Alternative perspective: {_field(alternative_perspective)}"
    )


def normalize_distortions(value: Any) -> list[str]:
    """Distortions as a list of strings: lists pass through, a string is wrapped, anything else is unknown."""
    if isinstance(value, (list, tuple)):
        return [str(v) for v in value if str(v).strip()] or [UNKNOWN_DISTORTION]
    if isinstance(value, str) and value.strip():
        return [value]
    return [UNKNOWN_DISTORTION]


def _options_for(index: int, thought: str) -> list[PracticeOption]:
    thought_lower = thought.rstrip(".").lower()
    distorted = [
        PracticeOption(
            text=template.format(thought_lower=thought_lower),
            is_correct=False,
            explanation=explanation,
        )
        for template, explanation in DISTORTED_RESPONSES
    ]
    correct = PracticeOption(
        text=BALANCED_REFRAMES[index % len(BALANCED_REFRAMES)],
        is_correct=True,
        explanation="This response weighs the evidence and leaves room for other explanations.",
    )
    position = index % OPTIONS_PER_SCENARIO
    return distorted[:position] + [correct] + distorted[position:]


def build_fallback_session(thought: str, distortions: list[str], emotion: str) -> PracticeSession:
    """
    Deterministic practice session used when generation is unavailable.

    The correct option sits at index 0, 1 and 2 in the three scenarios.
    """
    thought = thought.strip() or DEFAULT_THOUGHT
    distortions = normalize_distortions(distortions)

    scenarios = []
    for i in range(SCENARIOS_PER_SESSION):
        distortion = format_distortion_name(distortions[i % len(distortions)])
        scenarios.append(PracticeScenario(
            scenario=SCENARIO_SITUATIONS[i],
            options=_options_for(i, thought),
            cognitive_distortion=distortion,
            emotion_category=emotion or "unknown",
        ))

    return PracticeSession(
        scenarios=scenarios,
        thought_content=thought,
        general_feedback=(
            "Reframing takes practice. Look for the option that tests the thought "
            "against evidence rather than repeating it."
        ),
    )
