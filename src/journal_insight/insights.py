"""
Cross-component emotion insights.

Connects emotion records, journal entries and thought records through their
core emotion, then summarises the connections as short insight sentences.
Records are plain mappings in the camelCase wire format:

- emotion record: id, coreEmotion, intensity
- journal entry: userSelectedTags, selectedTags, tags, aiSuggestedTags, content
- thought record: emotionRecordId, reflectionRating, cognitiveDistortions
"""

import re
from collections import Counter
from dataclasses import dataclass, field
from typing import Any, Iterable, Mapping

from .taxonomy import CORE_EMOTION_FAMILIES, find_matching_emotions, format_distortion_name

JOURNAL_TAG_FIELDS = ("userSelectedTags", "selectedTags", "tags")
AI_TAG_FIELD = "aiSuggestedTags"

# Journal text that always links the entry to Fear, tagged or not
FEAR_CONTENT_KEYWORDS = ("fear", "afraid", "anxiety", "worry")

_FEAR = "Fear"


@dataclass
class EmotionConnection:
    """Records linked to one core emotion, with intensity and improvement averages."""
    total_entries: int = 0
    journal_entries: list[Mapping[str, Any]] = field(default_factory=list)
    thought_records: list[Mapping[str, Any]] = field(default_factory=list)
    average_intensity: float = 0.0
    average_improvement: float = 0.0

    def to_dict(self) -> dict[str, Any]:
        return {
            "totalEntries": self.total_entries,
            "journalEntries": list(self.journal_entries),
            "thoughtRecords": list(self.thought_records),
            "averageIntensity": self.average_intensity,
            "averageImprovement": self.average_improvement,
        }


def _number(value: Any) -> float:
    return float(value) if isinstance(value, (int, float)) and not isinstance(value, bool) else 0.0


def _contains_word(text: str, word: str) -> bool:
    return re.search(rf"\b{re.escape(word)}\b", text) is not None


def journal_emotion_tags(journal: Mapping[str, Any]) -> list[str]:
    """
    Tags to classify a journal entry by.

    User tags from every tag field come first; AI-suggested tags are used only
    when there are none; with no tags at all, core emotion names and their
    variants found as words in the content stand in.
    """
    tags: list[str] = []
    for name in JOURNAL_TAG_FIELDS:
        value = journal.get(name)
        if isinstance(value, list):
            tags.extend(t for t in value if isinstance(t, str))

    if not tags and isinstance(journal.get(AI_TAG_FIELD), list):
        tags.extend(t for t in journal[AI_TAG_FIELD] if isinstance(t, str))

    content = journal.get("content")
    if not tags and isinstance(content, str):
        text = content.lower()
        for core, variants in CORE_EMOTION_FAMILIES.items():
            if _contains_word(text, core.value.lower()):
                tags.append(core.value)
            tags.extend(v for v in variants if _contains_word(text, v))

    return tags


def enhance_component_connections(
    emotion_data: Iterable[Mapping[str, Any]],
    journal_data: Iterable[Mapping[str, Any]],
    thought_record_data: Iterable[Mapping[str, Any]],
) -> dict[str, EmotionConnection]:
    """
    Group emotion records, journals and thought records by core emotion.

    Every core emotion gets an entry, empty or not. Improvement for a thought
    record is the linked emotion record's intensity minus the record's
    reflection rating, averaged over the thought records of that core.
    """
    emotion_data = list(emotion_data)
    connections = {core.value: EmotionConnection() for core in CORE_EMOTION_FAMILIES}
    intensity_totals: Counter[str] = Counter()
    improvement_totals: Counter[str] = Counter()

    for emotion in emotion_data:
        core = emotion.get("coreEmotion")
        if core in connections:
            connections[core].total_entries += 1
            intensity_totals[core] += _number(emotion.get("intensity"))

    for journal in journal_data:
        linked = find_matching_emotions(journal_emotion_tags(journal))

        content = journal.get("content")
        if isinstance(content, str) and any(k in content.lower() for k in FEAR_CONTENT_KEYWORDS):
            linked.append(_FEAR)

        for core in dict.fromkeys(linked):
            if core in connections:
                connections[core].journal_entries.append(journal)

    records_by_id = {}
    for emotion in emotion_data:
        records_by_id.setdefault(emotion.get("id"), emotion)

    for record in thought_record_data:
        emotion = records_by_id.get(record.get("emotionRecordId"))
        if emotion is None:
            continue
        core = emotion.get("coreEmotion")
        if core not in connections:
            continue

        connections[core].thought_records.append(record)
        rating = _number(record.get("reflectionRating"))
        if rating:
            improvement_totals[core] += _number(emotion.get("intensity")) - rating

    for core, data in connections.items():
        if data.total_entries:
            data.average_intensity = intensity_totals[core] / data.total_entries
        if data.thought_records:
            data.average_improvement = improvement_totals[core] / len(data.thought_records)

    return connections


def generate_data_insights(connections: Mapping[str, EmotionConnection]) -> list[str]:
    """Insight sentences: frequency, improvement, gaps in coping work, and the top distortion."""
    insights = []

    by_frequency = sorted(
        (item for item in connections.items() if item[1].total_entries > 0),
        key=lambda item: item[1].total_entries,
        reverse=True,
    )
    if by_frequency:
        top_emotion, top = by_frequency[0]
        insights.append(
            f"Your most frequently recorded emotion is {top_emotion}, "
            f"which appears in {top.total_entries} entries."
        )
        if top.journal_entries:
            insights.append(
                f"You've written about {top_emotion} in {len(top.journal_entries)} journal entries."
            )

    by_improvement = sorted(
        (item for item in connections.items() if item[1].thought_records),
        key=lambda item: item[1].average_improvement,
        reverse=True,
    )
    if by_improvement:
        best_emotion, best = by_improvement[0]
        if best.average_improvement > 0:
            insights.append(
                f"You've shown the most improvement with {best_emotion}, with an average "
                f"reduction of {best.average_improvement:.1f} points after using coping strategies."
            )

    for emotion, data in connections.items():
        if data.total_entries > 0 and not data.thought_records and data.journal_entries:
            insights.append(
                f"Consider creating thought records for {emotion} to develop coping "
                f"strategies for this emotion."
            )
            break

    distortion_counts: Counter[str] = Counter()
    for data in connections.values():
        for record in data.thought_records:
            distortions = record.get("cognitiveDistortions") or []
            distortion_counts.update(d for d in distortions if isinstance(d, str))

    if distortion_counts:
        distortion, count = distortion_counts.most_common(1)[0]
        insights.append(
            f'Your most common cognitive distortion is "{format_distortion_name(distortion)}", '
            f"which appears in {count} thought records."
        )

    return insights
