"""
Fallback Analyzer for journal entries

When the external analysis service is unavailable, fails, or reports quota
exhaustion, this produces an AnalysisResult of the same shape from regex and
keyword rules alone.

The pipeline is a sequence of independent classifier functions, each
returning its own findings, merged by analyze_offline(). Nothing here holds
state between calls: identical input always yields an identical result.
"""

import logging
import re
from dataclasses import dataclass
from typing import Iterable, Sequence

from .fallback_patterns import (
    CALM_ASPIRATION_MARKERS,
    CONTEXTUAL_EMOTION_GROUPS,
    DEFAULT_EMOTION,
    DEFAULT_TOPIC,
    DETAILED_CONTENT_LENGTH,
    DISTORTION_PATTERNS,
    DISTORTION_SUGGESTIONS,
    DISTORTION_TEMPLATES,
    EMOTION_FAMILIES,
    EMOTION_KEYWORDS,
    EMOTION_TEMPLATES,
    EMPTINESS_EMOTIONS,
    FUTURE_CONDITIONAL_MARKERS,
    GENERIC_DISTORTION_SUGGESTION,
    GENERIC_DISTORTION_TEMPLATE,
    GENERIC_TAGS,
    GENERIC_TEMPLATE,
    MIN_EMOTIONS_BEFORE_PHRASES,
    MIN_TAGS,
    NEGATION_MARKERS,
    NEGATED_POSITIVE_DEFAULT,
    NEGATED_POSITIVE_OPPOSITES,
    NEGATED_POSITIVE_SENTIMENT,
    NEGATION_WINDOW_TOKENS,
    NEGATIVE_CONTENT_PATTERNS,
    NEGATIVE_EMOTIONS,
    NEUTRAL_EMOTIONS,
    POSITIVE_EMOTIONS,
    SUPPLEMENTARY_PHRASES,
    TOPIC_KEYWORDS,
    TOPIC_ONLY_TEMPLATE,
    TOPICS_CLAUSE,
)
from .models import AnalysisResult, Sentiment

logger = logging.getLogger(__name__)


def _marker_prefix(markers: Iterable[str]) -> str:
    """A marker followed by up to NEGATION_WINDOW_TOKENS - 1 other tokens."""
    alternation = "|".join(re.escape(m) for m in sorted(set(markers), key=len, reverse=True))
    gap = NEGATION_WINDOW_TOKENS - 1
    return rf"\b(?:{alternation})\b(?:[^\w']+[\w']+){{0,{gap}}}[^\w']+"


def _marker_window(markers: Iterable[str]) -> str:
    """Optional prefix capturing a marker up to NEGATION_WINDOW_TOKENS tokens before the match."""
    return f"(?P<neg>{_marker_prefix(markers)})?"


_NEGATION_WINDOW = _marker_window(NEGATION_MARKERS + FUTURE_CONDITIONAL_MARKERS)
_CALM_WINDOW = _marker_window(NEGATION_MARKERS + FUTURE_CONDITIONAL_MARKERS + CALM_ASPIRATION_MARKERS)
_CALM_DOWN = r"(?P<down>\s+down\b)?"


@dataclass(frozen=True)
class EmotionRule:
    """A compiled emotion matcher; a match counts only if no marker precedes it."""
    emotion: str
    pattern: re.Pattern

    def matches(self, text: str) -> bool:
        for match in self.pattern.finditer(text):
            if match.group("neg"):
                continue
            if "down" in match.groupdict() and match.group("down"):
                continue
            return True
        return False


def _emotion_rule(body: str, emotion: str) -> EmotionRule:
    if emotion == "calm":
        return EmotionRule(emotion, re.compile(f"{_CALM_WINDOW}(?:{body}){_CALM_DOWN}"))
    return EmotionRule(emotion, re.compile(f"{_NEGATION_WINDOW}(?:{body})"))


# Compiled once at import; one regex per keyword
KEYWORD_RULES = tuple(
    _emotion_rule(rf"\b{re.escape(keyword)}\b", emotion)
    for keyword, emotion in EMOTION_KEYWORDS.items()
)

PHRASE_RULES = tuple(_emotion_rule(pattern, emotion) for pattern, emotion in SUPPLEMENTARY_PHRASES)

# Negation markers only: "will be happy" is not evidence of the opposite
NEGATED_POSITIVE_RULES = tuple(
    (emotion, re.compile(rf"{_marker_prefix(NEGATION_MARKERS)}{re.escape(keyword)}\b"))
    for keyword, emotion in EMOTION_KEYWORDS.items()
    if emotion in POSITIVE_EMOTIONS
)

CONTEXTUAL_RULES = {
    group: tuple((re.compile(pattern), emotion) for pattern, emotion in patterns)
    for group, patterns in CONTEXTUAL_EMOTION_GROUPS.items()
}

TOPIC_RULES = tuple(
    (topic, re.compile(rf"\b{re.escape(topic)}\b")) for topic in TOPIC_KEYWORDS
)

DISTORTION_RULES = {
    name: tuple(re.compile(p) for p in patterns)
    for name, patterns in DISTORTION_PATTERNS.items()
}

NEGATIVE_CONTENT_RULES = tuple(re.compile(p) for p in NEGATIVE_CONTENT_PATTERNS)


def _unique(items: Iterable[str]) -> list[str]:
    return list(dict.fromkeys(items))


def prepare_text(title: str, content: str) -> str:
    return f"{title} {content}".lower().replace("’", "'").replace("‘", "'")


def detect_contextual_emotions(text: str) -> list[str]:
    """First matching pattern of each contextual group, in group order."""
    found = []
    for rules in CONTEXTUAL_RULES.values():
        for pattern, emotion in rules:
            if pattern.search(text):
                found.append(emotion)
                break
    return _unique(found)


def detect_keyword_emotions(text: str) -> list[str]:
    """Keyword sweep; occurrences preceded by a negation or future/conditional marker are ignored."""
    return _unique(rule.emotion for rule in KEYWORD_RULES if rule.matches(text))


def detect_negated_positives(text: str) -> list[str]:
    """Opposing emotions for negated positive words: "not happy" -> sad, "not excited" -> bored."""
    return _unique(
        NEGATED_POSITIVE_OPPOSITES.get(emotion, NEGATED_POSITIVE_DEFAULT)
        for emotion, pattern in NEGATED_POSITIVE_RULES
        if pattern.search(text)
    )


def detect_topics(text: str) -> list[str]:
    return [topic for topic, pattern in TOPIC_RULES if pattern.search(text)]


def detect_phrase_emotions(text: str) -> list[str]:
    return _unique(rule.emotion for rule in PHRASE_RULES if rule.matches(text))


def detect_distortions(text: str) -> list[str]:
    """Every distortion with at least one matching rule; several may apply at once."""
    return [
        name for name, patterns in DISTORTION_RULES.items()
        if any(p.search(text) for p in patterns)
    ]


def has_negative_content(text: str) -> bool:
    return any(p.search(text) for p in NEGATIVE_CONTENT_RULES)


def backfill_tags(
    tags: list[str],
    emotions: list[str],
    topics: list[str],
    content: str,
) -> tuple[list[str], list[str], list[str]]:
    """
    Pad sparse results so every entry gets at least a few tags.

    Returns new (tags, emotions, topics) lists; the inputs are not modified.
    """
    tags, emotions, topics = list(tags), list(emotions), list(topics)
    if len(tags) >= MIN_TAGS:
        return tags, emotions, topics

    tags.extend(GENERIC_TAGS)
    tags.append("detailed" if len(content) > DETAILED_CONTENT_LENGTH else "brief")

    if not emotions:
        emotions.append(DEFAULT_EMOTION)
        tags.append(DEFAULT_EMOTION)
    if not topics:
        topics.append(DEFAULT_TOPIC)
        tags.append(DEFAULT_TOPIC)

    return _unique(tags), emotions, topics


def dominant_emotion_family(emotions: list[str]) -> str:
    """Family with the most member emotions; ties go to the earlier family."""
    best, best_count = "other", 0
    for family, members in EMOTION_FAMILIES.items():
        count = sum(1 for e in emotions if e in members)
        if count > best_count:
            best, best_count = family, count
    return best


def compose_analysis(emotions: list[str], topics: list[str], distortions: list[str]) -> str:
    """Narrative text: distortion template, then emotion family, then topics, then generic."""
    topic_clause = TOPICS_CLAUSE.format(topics=", ".join(topics)) if topics else ""

    for name, template in DISTORTION_TEMPLATES.items():
        if name in distortions:
            return f"{template}{topic_clause} {DISTORTION_SUGGESTIONS[name]}"

    if distortions:
        head = GENERIC_DISTORTION_TEMPLATE.format(distortions=", ".join(distortions))
        return f"{head}{topic_clause} {GENERIC_DISTORTION_SUGGESTION}"

    if emotions:
        head, suggestion = EMOTION_TEMPLATES[dominant_emotion_family(emotions)]
        return f"{head.format(emotions=', '.join(emotions))}{topic_clause} {suggestion}"

    if topics:
        return TOPIC_ONLY_TEMPLATE.format(topics=", ".join(topics))

    return GENERIC_TEMPLATE


def score_sentiment(
    emotions: Sequence[str],
    negative_content: bool,
    negated_positive: bool = False,
) -> Sentiment:
    """
    Percentage split from the lexicon class of each emotion.

    Negative content weights the negative count by 1.5. Two fixed splits
    override the proportional one when negative content is present: any
    emptiness emotion gives 0/85/15, and only-neutral emotions give 0/70/30.
    When a positive word was negated but positive still outweighs negative,
    the split is forced to 20/60/20.
    """
    positive = sum(1 for e in emotions if e in POSITIVE_EMOTIONS)
    negative = sum(1 for e in emotions if e in NEGATIVE_EMOTIONS)
    neutral = sum(1 for e in emotions if e in NEUTRAL_EMOTIONS)

    if negative_content:
        if any(e in EMPTINESS_EMOTIONS for e in emotions):
            return Sentiment(positive=0, negative=85, neutral=15)
        if neutral and not positive and not negative:
            return Sentiment(positive=0, negative=70, neutral=30)
        sentiment = Sentiment.from_weights(positive, negative * 1.5, neutral)
    else:
        sentiment = Sentiment.from_weights(positive, negative, neutral)

    if negated_positive and sentiment.positive > sentiment.negative:
        return Sentiment(*NEGATED_POSITIVE_SENTIMENT)
    return sentiment


def analyze_offline(title: str, content: str) -> AnalysisResult:
    """
    Rule-based analysis of a journal entry.

    Args:
        title: Entry title
        content: Entry body

    Returns:
        AnalysisResult with at most 8 suggested tags and a sentiment split
        summing to 100
    """
    text = prepare_text(title, content)

    negated = detect_negated_positives(text)
    emotions = _unique(detect_contextual_emotions(text) + detect_keyword_emotions(text) + negated)
    topics = detect_topics(text)
    if len(emotions) < MIN_EMOTIONS_BEFORE_PHRASES:
        emotions = _unique(emotions + detect_phrase_emotions(text))
    distortions = detect_distortions(text)

    analysis = compose_analysis(emotions, topics, distortions)
    tags, emotions, topics = backfill_tags(_unique(emotions + topics), emotions, topics, content)
    sentiment = score_sentiment(emotions, has_negative_content(text), negated_positive=bool(negated))

    return AnalysisResult(
        suggested_tags=tags,
        analysis=analysis,
        emotions=emotions,
        topics=topics,
        sentiment=sentiment,
        cognitive_distortions=distortions,
    )


class FallbackAnalyzer:
    """
    Pattern-based analyzer for when the external analysis call is unavailable.

    Always produces a result, even if less nuanced than the LLM's.
    """

    def analyze(self, title: str, content: str, fallback_reason: str = "external analysis unavailable") -> AnalysisResult:
        logger.info(f"[FALLBACK] Using offline analysis: {fallback_reason}")
        result = analyze_offline(title, content)
        logger.debug(
            f"[FALLBACK] {len(result.emotions)} emotions, {len(result.topics)} topics, "
            f"{len(result.cognitive_distortions)} distortions"
        )
        return result
