"""
Emotion Taxonomy for journal analysis

Three-level emotion wheel:
- Core emotions (ring 1): the 8 CoreEmotion members
- Secondary emotions (ring 2): each maps to exactly one core emotion
- Tertiary emotions (ring 3): each maps to exactly one secondary emotion

All tables are read-only mappings built at import time. Resolution never
raises; unresolved labels yield None (or an all-None EmotionCategory).
"""

import re
from enum import Enum
from types import MappingProxyType
from typing import Iterable, Mapping

from .models import EmotionCategory


class CoreEmotion(str, Enum):
    JOY = "Joy"
    SADNESS = "Sadness"
    FEAR = "Fear"
    SURPRISE = "Surprise"
    ANGER = "Anger"
    LOVE = "Love"
    DISGUST = "Disgust"
    TRUST = "Trust"


# Variant words an analysis service may emit for each core emotion.
# Order matters: resolution walks cores and variants in declaration order.
CORE_EMOTION_FAMILIES: Mapping[CoreEmotion, tuple[str, ...]] = MappingProxyType({
    CoreEmotion.JOY: (
        "joy", "happiness", "joyful", "happy", "pleased", "delight", "content",
        "satisfaction", "gladness", "merry", "jolly", "cheerful", "jubilant",
        "thrilled", "elated", "ecstatic", "upbeat", "gleeful", "positive", "lighthearted",
    ),
    CoreEmotion.SADNESS: (
        "sad", "sadness", "sorrow", "unhappy", "melancholy", "gloomy", "misery",
        "despair", "grief", "heartbroken", "depressed", "downhearted", "downcast",
        "dejected", "glum", "blue", "wistful", "pensive", "forlorn", "morose",
        "disappointed", "despondent",
    ),
    CoreEmotion.FEAR: (
        "fear", "afraid", "scared", "frightened", "terrified", "anxious", "worried",
        "nervous", "uneasy", "apprehensive", "dread", "panic", "horror", "terror",
        "phobia", "alarmed", "intimidated", "trepidation", "distressed", "agitated",
    ),
    CoreEmotion.SURPRISE: (
        "surprise", "surprised", "astonished", "amazed", "astounded", "shocked",
        "startled", "stunned", "bewildered", "dumbfounded", "flabbergasted",
        "staggered", "awestruck", "wonder", "disbelief", "taken aback", "unexpected",
    ),
    CoreEmotion.ANGER: (
        "anger", "angry", "mad", "fury", "rage", "annoyed", "irritated", "frustrated",
        "exasperated", "outraged", "indignant", "incensed", "furious", "fuming",
        "livid", "enraged", "hostile", "bitter", "resentful", "irked", "vexed", "aggravated",
    ),
    CoreEmotion.LOVE: (
        "love", "loving", "affection", "adoration", "fondness", "tenderness",
        "compassion", "attachment", "devotion", "passion", "desire", "attraction",
        "infatuation", "admiration", "caring", "cherish", "enamored", "smitten",
        "empathy", "warmth",
    ),
    CoreEmotion.DISGUST: (
        "disgust", "disgusted", "repulsed", "revulsion", "aversion", "distaste",
        "contempt", "abhorrence", "loathing", "sickened", "revolted", "grossed out",
        "nauseated", "offended", "appalled", "repelled", "horrified", "abomination",
    ),
    CoreEmotion.TRUST: (
        "trust", "trusting", "reliance", "confidence", "faith", "belief", "assurance",
        "conviction", "dependence", "reliability", "security", "certainty", "hope",
        "optimism", "acceptance", "calm", "peaceful", "serene", "tranquil", "relaxed",
        "at ease", "comfortable",
    ),
})

SECONDARY_EMOTIONS: Mapping[str, CoreEmotion] = MappingProxyType({
    # Joy
    "Content": CoreEmotion.JOY,
    "Happy": CoreEmotion.JOY,
    "Cheerful": CoreEmotion.JOY,
    "Joyful": CoreEmotion.JOY,
    "Proud": CoreEmotion.JOY,
    "Optimistic": CoreEmotion.JOY,
    "Enthusiastic": CoreEmotion.JOY,
    "Elated": CoreEmotion.JOY,
    "Triumphant": CoreEmotion.JOY,
    "Excited": CoreEmotion.JOY,
    # Sadness
    "Suffering": CoreEmotion.SADNESS,
    "Disappointed": CoreEmotion.SADNESS,
    "Shameful": CoreEmotion.SADNESS,
    "Neglected": CoreEmotion.SADNESS,
    "Despair": CoreEmotion.SADNESS,
    "Depression": CoreEmotion.SADNESS,
    "Lonely": CoreEmotion.SADNESS,
    "Grieving": CoreEmotion.SADNESS,
    # Fear, including the anxiety family
    "Scared": CoreEmotion.FEAR,
    "Terrified": CoreEmotion.FEAR,
    "Insecure": CoreEmotion.FEAR,
    "Nervous": CoreEmotion.FEAR,
    "Worried": CoreEmotion.FEAR,
    "Inadequate": CoreEmotion.FEAR,
    "Rejected": CoreEmotion.FEAR,
    "Threatened": CoreEmotion.FEAR,
    "Anxious": CoreEmotion.FEAR,
    "Stressed": CoreEmotion.FEAR,
    "Overwhelmed": CoreEmotion.FEAR,
    "Worry": CoreEmotion.FEAR,
    "Tense": CoreEmotion.FEAR,
    "Panicky": CoreEmotion.FEAR,
    "Unsettled": CoreEmotion.FEAR,
    "Apprehensive": CoreEmotion.FEAR,
    # Anger
    "Rage": CoreEmotion.ANGER,
    "Exasperated": CoreEmotion.ANGER,
    "Irritable": CoreEmotion.ANGER,
    "Envy": CoreEmotion.ANGER,
    "Frustration": CoreEmotion.ANGER,
    "Irritation": CoreEmotion.ANGER,
    "Resentful": CoreEmotion.ANGER,
    "Jealous": CoreEmotion.ANGER,
    # Disgust
    "Disapproval": CoreEmotion.DISGUST,
    "Distaste": CoreEmotion.DISGUST,
    "Avoidance": CoreEmotion.DISGUST,
    "Revulsion": CoreEmotion.DISGUST,
    "Contempt": CoreEmotion.DISGUST,
    "Loathing": CoreEmotion.DISGUST,
    "Aversion": CoreEmotion.DISGUST,
    # Love
    "Affection": CoreEmotion.LOVE,
    "Longing": CoreEmotion.LOVE,
    "Compassion": CoreEmotion.LOVE,
    "Tenderness": CoreEmotion.LOVE,
    "Caring": CoreEmotion.LOVE,
    "Desire": CoreEmotion.LOVE,
    "Fondness": CoreEmotion.LOVE,
    "Passion": CoreEmotion.LOVE,
    "Adoration": CoreEmotion.LOVE,
    # Surprise
    "Stunned": CoreEmotion.SURPRISE,
    "Confused": CoreEmotion.SURPRISE,
    "Amazed": CoreEmotion.SURPRISE,
    "Overcome": CoreEmotion.SURPRISE,
    "Moved": CoreEmotion.SURPRISE,
    "Astonished": CoreEmotion.SURPRISE,
    "Wonder": CoreEmotion.SURPRISE,
    "Awe": CoreEmotion.SURPRISE,
    "Startled": CoreEmotion.SURPRISE,
    # Trust
    "Secure": CoreEmotion.TRUST,
    "Confident": CoreEmotion.TRUST,
    "Faithful": CoreEmotion.TRUST,
    "Respected": CoreEmotion.TRUST,
    "Safe": CoreEmotion.TRUST,
    "Reliable": CoreEmotion.TRUST,
    "Honored": CoreEmotion.TRUST,
    # Gratitude folds into Joy
    "Thankful": CoreEmotion.JOY,
    "Appreciative": CoreEmotion.JOY,
    "Recognized": CoreEmotion.JOY,
    "Blessed": CoreEmotion.JOY,
    "Gratitude": CoreEmotion.JOY,
    # Interest folds into Trust
    "Curious": CoreEmotion.TRUST,
    "Engaged": CoreEmotion.TRUST,
    "Fascinated": CoreEmotion.TRUST,
    "Intrigued": CoreEmotion.TRUST,
    "Interest": CoreEmotion.TRUST,
    # Calm folds into Trust
    "Peaceful": CoreEmotion.TRUST,
    "Relaxed": CoreEmotion.TRUST,
    "Tranquil": CoreEmotion.TRUST,
    "Serene": CoreEmotion.TRUST,
    "Composed": CoreEmotion.TRUST,
    "Balanced": CoreEmotion.TRUST,
    "Calm": CoreEmotion.TRUST,
    # Shame folds into Sadness
    "Embarrassed": CoreEmotion.SADNESS,
    "Humiliated": CoreEmotion.SADNESS,
    "Regretful": CoreEmotion.SADNESS,
    "Guilty": CoreEmotion.SADNESS,
    "Shame": CoreEmotion.SADNESS,
})

TERTIARY_EMOTIONS: Mapping[str, str] = MappingProxyType({
    # Joy
    "Pleased": "Content",
    "Satisfied": "Content",
    "Amused": "Happy",
    "Delighted": "Happy",
    "Jovial": "Cheerful",
    "Blissful": "Cheerful",
    "Illustrious": "Proud",
    "Triumphant": "Proud",
    "Hopeful": "Optimistic",
    "Eager": "Optimistic",
    "Zealous": "Enthusiastic",
    "Energetic": "Enthusiastic",
    "Jubilant": "Elated",
    "Ecstatic": "Elated",
    # Sadness
    "Agony": "Suffering",
    "Hurt": "Suffering",
    "Sorrow": "Suffering",
    "Depressed": "Depression",
    "Dismayed": "Disappointed",
    "Displeased": "Disappointed",
    "Regretful": "Shameful",
    "Guilty": "Shameful",
    "Isolated": "Neglected",
    "Lonely": "Neglected",
    "Grief": "Despair",
    "Powerless": "Despair",
    # Fear
    "Frightened": "Scared",
    "Helpless": "Scared",
    "Horrified": "Terrified",
    "Panic": "Terrified",
    "Doubtful": "Insecure",
    "Inadequate": "Insecure",
    "Worried": "Nervous",
    "Anxious": "Nervous",
    "Overwhelmed": "Anxious",
    "Frantic": "Stressed",
    "Jittery": "Tense",
    "Restless": "Tense",
    "Uneasy": "Worried",
    "Distressed": "Panicky",
    "Concerned": "Worried",
    "Troubled": "Apprehensive",
    # Anger
    "Hate": "Rage",
    "Hostile": "Rage",
    "Agitated": "Exasperated",
    "Frustrated": "Exasperated",
    "Annoyed": "Irritable",
    "Aggravated": "Irritable",
    "Resentful": "Envy",
    "Jealous": "Envy",
    # Disgust
    "Judgmental": "Disapproval",
    "Critical": "Disapproval",
    "Repulsed": "Revulsion",
    "Appalled": "Revulsion",
    "Revolted": "Revulsion",
    "Disdain": "Contempt",
    "Scornful": "Contempt",
    # Love
    "Warm": "Affection",
    "Yearning": "Longing",
    "Missing": "Longing",
    "Empathetic": "Compassion",
    "Sympathetic": "Compassion",
    "Gentle": "Tenderness",
    "Soft": "Tenderness",
    # Surprise
    "Shocked": "Stunned",
    "Bewildered": "Stunned",
    "Disillusioned": "Confused",
    "Perplexed": "Confused",
    "Awe-struck": "Amazed",
    "Speechless": "Overcome",
    "Astounded": "Overcome",
    "Stimulated": "Moved",
    "Touched": "Moved",
    # Trust
    "Protected": "Secure",
    "Sheltered": "Secure",
    "Reassured": "Confident",
    "Empowered": "Confident",
    "Loyal": "Faithful",
    "Devoted": "Faithful",
    # Gratitude
    "Indebted": "Thankful",
    "Obliged": "Thankful",
    "Acknowledged": "Appreciative",
    "Valued": "Appreciative",
    # Interest
    "Inquisitive": "Curious",
    "Inquiring": "Curious",
    "Attentive": "Engaged",
    "Absorbed": "Engaged",
    "Captivated": "Fascinated",
    "Enthralled": "Fascinated",
    # Calm
    "Quiet": "Peaceful",
    "Still": "Peaceful",
    "Rested": "Relaxed",
    "At ease": "Relaxed",
    "Centered": "Composed",
    "Collected": "Composed",
    # Shame
    "Mortified": "Embarrassed",
    "Self-conscious": "Embarrassed",
    "Disgraced": "Humiliated",
    "Dishonored": "Humiliated",
    "Apologetic": "Regretful",
    "Remorseful": "Regretful",
})

EMOTION_COLORS: Mapping[str, str] = MappingProxyType({
    # Core emotions
    "Joy": "#F9D71C",
    "Sadness": "#6D87C4",
    "Fear": "#8A65AA",
    "Anger": "#E43D40",
    "Disgust": "#7DB954",
    "Love": "#E91E63",
    "Surprise": "#F47B20",
    "Trust": "#8DC4BD",
    # Secondary emotions with their own shade
    "Worry": "#9932CC",
    "Anxious": "#9C27B0",
    "Frustrated": "#B22222",
    "Happy": "#FFA07A",
    "Depressed": "#4682B4",
    "Shame": "#FF6B81",
    "Gratitude": "#FFB74D",
    "Calm": "#81C784",
    "Interest": "#4DB6AC",
})

DEFAULT_EMOTION_COLOR = "#999999"

SIMILARITY_THRESHOLD = 0.6

# Vocabulary an LLM tends to emit that the wheel does not carry verbatim
COMMON_AI_EMOTION_MAPPINGS: Mapping[str, CoreEmotion] = MappingProxyType({
    "pleased": CoreEmotion.JOY,
    "grateful": CoreEmotion.JOY,
    "thankful": CoreEmotion.JOY,
    "satisfied": CoreEmotion.JOY,
    "relief": CoreEmotion.JOY,
    "relieved": CoreEmotion.JOY,
    "hopeful": CoreEmotion.JOY,
    "proud": CoreEmotion.JOY,
    "nostalgic": CoreEmotion.SADNESS,
    "confident": CoreEmotion.TRUST,
    "secure": CoreEmotion.TRUST,
    "interested": CoreEmotion.TRUST,
    "curious": CoreEmotion.TRUST,
    "upset": CoreEmotion.SADNESS,
    "melancholic": CoreEmotion.SADNESS,
    "regret": CoreEmotion.SADNESS,
    "remorse": CoreEmotion.SADNESS,
    "alone": CoreEmotion.SADNESS,
    "abandoned": CoreEmotion.SADNESS,
    "disheartened": CoreEmotion.SADNESS,
    "miserable": CoreEmotion.SADNESS,
    "misunderstood": CoreEmotion.SADNESS,
    "isolated": CoreEmotion.SADNESS,
    "lonely": CoreEmotion.SADNESS,
    "helpless": CoreEmotion.SADNESS,
    "empty": CoreEmotion.SADNESS,
    "void": CoreEmotion.SADNESS,
    "hollow": CoreEmotion.SADNESS,
    "numb": CoreEmotion.SADNESS,
    "disconnected": CoreEmotion.SADNESS,
    "tense": CoreEmotion.FEAR,
    "stressed": CoreEmotion.FEAR,
    "panicked": CoreEmotion.FEAR,
    "threatened": CoreEmotion.FEAR,
    "overwhelmed": CoreEmotion.FEAR,
    "envious": CoreEmotion.ANGER,
    "jealous": CoreEmotion.ANGER,
    "uncomfortable": CoreEmotion.DISGUST,
    "confused": CoreEmotion.SURPRISE,
    "uncertain": CoreEmotion.SURPRISE,
    "intrigued": CoreEmotion.SURPRISE,
    "awe": CoreEmotion.SURPRISE,
    "perplexed": CoreEmotion.SURPRISE,
    "affectionate": CoreEmotion.LOVE,
    "attached": CoreEmotion.LOVE,
    "compassionate": CoreEmotion.LOVE,
    "longing": CoreEmotion.LOVE,
    "yearning": CoreEmotion.LOVE,
    "tender": CoreEmotion.LOVE,
    "warm": CoreEmotion.LOVE,
    "passionate": CoreEmotion.LOVE,
    "adoring": CoreEmotion.LOVE,
    "devoted": CoreEmotion.LOVE,
    "cherished": CoreEmotion.LOVE,
})

POSITIVE_WORDS = ("good", "great", "wonderful", "fantastic", "excellent", "amazing", "positive", "nice", "pleasant")
NEGATIVE_WORDS = ("bad", "terrible", "awful", "horrible", "negative", "poor", "unpleasant", "uncomfortable")

# Known-ambiguous inputs, checked before the general chain in categorize_emotion()
DIRECT_CATEGORY_OVERRIDES: Mapping[str, CoreEmotion] = MappingProxyType({
    "nostalgic": CoreEmotion.SADNESS,
    "empty": CoreEmotion.SADNESS,
    "misunderstood": CoreEmotion.SADNESS,
    "conflicted": CoreEmotion.SURPRISE,
    "ambivalent": CoreEmotion.SURPRISE,
})


def _normalize(label: str | None) -> str:
    if not label or not isinstance(label, str):
        return ""
    return label.strip().lower()


def _contains_either(a: str, b: str) -> bool:
    return a in b or b in a


def string_similarity(a: str, b: str) -> float:
    """
    Cheap similarity score in [0, 1].

    Containment scores shorter/longer length; otherwise the share of a's
    characters that occur anywhere in b, over the longer length.
    """
    if not a or not b:
        return 0.0
    if a == b:
        return 1.0
    if _contains_either(a, b):
        return min(len(a), len(b)) / max(len(a), len(b))
    matches = sum(1 for ch in a if ch in b)
    return matches / max(len(a), len(b))


def _match_variant_exact(text: str) -> CoreEmotion | None:
    for core, variants in CORE_EMOTION_FAMILIES.items():
        if core.value.lower() == text or text in variants:
            return core
    return None


def _match_variant_substring(text: str) -> CoreEmotion | None:
    for core, variants in CORE_EMOTION_FAMILIES.items():
        for variant in variants:
            if _contains_either(variant, text):
                return core
    return None


def _match_secondary(text: str, exact: bool) -> str | None:
    for secondary in SECONDARY_EMOTIONS:
        name = secondary.lower()
        if name == text if exact else _contains_either(name, text):
            return secondary
    return None


def _match_tertiary(text: str, exact: bool) -> str | None:
    for tertiary in TERTIARY_EMOTIONS:
        name = tertiary.lower()
        if name == text if exact else _contains_either(name, text):
            return tertiary
    return None


def _core_of_tertiary(tertiary: str) -> CoreEmotion | None:
    return SECONDARY_EMOTIONS.get(TERTIARY_EMOTIONS[tertiary])


def _fuzzy_match(text: str) -> CoreEmotion | None:
    best: CoreEmotion | None = None
    best_score = 0.0
    for core, variants in CORE_EMOTION_FAMILIES.items():
        for candidate in (core.value.lower(), *variants):
            score = string_similarity(text, candidate)
            if score > best_score and score > SIMILARITY_THRESHOLD:
                best_score = score
                best = core
    return best


def _match_ai_vocabulary(text: str) -> CoreEmotion | None:
    if text in COMMON_AI_EMOTION_MAPPINGS:
        return COMMON_AI_EMOTION_MAPPINGS[text]
    for term, core in COMMON_AI_EMOTION_MAPPINGS.items():
        if _contains_either(term, text):
            return core
    return None


def _match_lexicon(text: str) -> CoreEmotion | None:
    if any(word in text for word in POSITIVE_WORDS):
        return CoreEmotion.JOY
    if any(word in text for word in NEGATIVE_WORDS):
        return CoreEmotion.SADNESS
    return None


def _match_root(text: str) -> CoreEmotion | None:
    for suffix in ("ed", "ing"):
        if text.endswith(suffix) and len(text) > len(suffix):
            return _match_variant_exact(text[:-len(suffix)])
    return None


def resolve(label: str | None) -> CoreEmotion | None:
    """
    Map a free-text emotion label to its core emotion.

    Tiers are tried in order and the first hit wins: variant exact, variant
    substring, secondary exact, secondary substring, tertiary, fuzzy
    variant similarity, common LLM vocabulary, positive/negative lexicon,
    and finally a single "-ed"/"-ing" suffix strip.

    Returns:
        The CoreEmotion, or None if nothing matched
    """
    text = _normalize(label)
    if not text:
        return None

    core = _match_variant_exact(text) or _match_variant_substring(text)
    if core:
        return core

    secondary = _match_secondary(text, exact=True) or _match_secondary(text, exact=False)
    if secondary:
        return SECONDARY_EMOTIONS[secondary]

    tertiary = _match_tertiary(text, exact=True) or _match_tertiary(text, exact=False)
    if tertiary:
        core = _core_of_tertiary(tertiary)
        if core:
            return core

    return (
        _fuzzy_match(text)
        or _match_ai_vocabulary(text)
        or _match_lexicon(text)
        or _match_root(text)
    )


def _first_tertiary_of(secondary: str) -> str | None:
    for tertiary, parent in TERTIARY_EMOTIONS.items():
        if parent == secondary:
            return tertiary
    return None


def categorize_emotion(label: str | None) -> EmotionCategory:
    """Place a label in the three-level taxonomy, as deep as it can be resolved."""
    text = _normalize(label)
    if not text:
        return EmotionCategory()

    if text in DIRECT_CATEGORY_OVERRIDES:
        return EmotionCategory(core=DIRECT_CATEGORY_OVERRIDES[text].value)

    tertiary = _match_tertiary(text, exact=True) or _match_tertiary(text, exact=False)
    if tertiary:
        secondary = TERTIARY_EMOTIONS[tertiary]
        core = SECONDARY_EMOTIONS.get(secondary)
        if core:
            return EmotionCategory(core=core.value, secondary=secondary, tertiary=tertiary)

    secondary = _match_secondary(text, exact=True) or _match_secondary(text, exact=False)
    if secondary:
        return EmotionCategory(
            core=SECONDARY_EMOTIONS[secondary].value,
            secondary=secondary,
            tertiary=_first_tertiary_of(secondary),
        )

    core = resolve(text)
    return EmotionCategory(core=core.value if core else None)


def find_secondary_emotion(label: str | None) -> str | None:
    """Secondary emotion for a label: direct, via its tertiary parent, or the first under its core."""
    text = _normalize(label)
    if not text:
        return None

    secondary = _match_secondary(text, exact=True)
    if secondary:
        return secondary

    tertiary = _match_tertiary(text, exact=True)
    if tertiary:
        return TERTIARY_EMOTIONS[tertiary]

    core = resolve(text)
    if core:
        for secondary, parent in SECONDARY_EMOTIONS.items():
            if parent is core:
                return secondary
    return None


def _as_core(core_or_label: CoreEmotion | str | None) -> CoreEmotion | None:
    if isinstance(core_or_label, CoreEmotion):
        return core_or_label
    text = _normalize(core_or_label)
    for core in CoreEmotion:
        if core.value.lower() == text:
            return core
    return resolve(text)


def get_related_emotions(core_or_label: CoreEmotion | str | None) -> list[str]:
    """
    All labels in a core emotion's family.

    Order: the core name, its variants (capitalised), then every secondary of
    that core followed by the tertiaries registered under it. No duplicates.
    """
    core = _as_core(core_or_label)
    if core is None:
        return []

    results = [core.value]
    results.extend(v[:1].upper() + v[1:] for v in CORE_EMOTION_FAMILIES[core])
    for secondary, parent in SECONDARY_EMOTIONS.items():
        if parent is not core:
            continue
        results.append(secondary)
        results.extend(t for t, s in TERTIARY_EMOTIONS.items() if s == secondary)

    return list(dict.fromkeys(results))


def get_emotion_color(label: str | None) -> str:
    """Display colour for an emotion label, falling back to its core's colour, then grey."""
    if label and label in EMOTION_COLORS:
        return EMOTION_COLORS[label]

    core = resolve(label)
    if core and core.value in EMOTION_COLORS:
        return EMOTION_COLORS[core.value]

    return DEFAULT_EMOTION_COLOR


def are_emotions_related(first: str, second: str) -> bool:
    """True when both labels resolve to the same core emotion."""
    core = resolve(first)
    return core is not None and core is resolve(second)


def standardize_emotion_tags(tags: Iterable[str]) -> dict[str, int]:
    """Count tags per resolved core emotion; unresolved tags are skipped."""
    counts: dict[str, int] = {}
    for tag in tags:
        core = resolve(tag)
        if core:
            counts[core.value] = counts.get(core.value, 0) + 1
    return counts


def find_matching_emotions(tags: Iterable[str]) -> list[str]:
    """Unique core emotions for a set of tags, in first-seen order."""
    matches: dict[str, None] = {}
    for tag in tags:
        core = resolve(tag)
        if core:
            matches.setdefault(core.value)
    return list(matches)


DISTORTION_DISPLAY_NAMES: Mapping[str, str] = MappingProxyType({
    "emotional-reasoning": "Emotional Reasoning",
    "mind-reading": "Mind Reading",
    "fortune-telling": "Fortune Telling",
})


def format_distortion_name(name: str | None) -> str:
    """Display name for a distortion id: "allOrNothing" / "all-or-nothing" -> "All Or Nothing"."""
    if not name:
        return "Unknown"
    if name in DISTORTION_DISPLAY_NAMES:
        return DISTORTION_DISPLAY_NAMES[name]

    spaced = re.sub(r"([A-Z])", r" \1", name).strip()
    words = re.split(r"[-_\s]+", spaced)
    return " ".join(w[:1].upper() + w[1:].lower() for w in words if w)
