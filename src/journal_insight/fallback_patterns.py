"""
Pattern tables for the offline journal analyzer.

Plain data only: regex strings, keyword vocabularies and text templates.
Compilation and matching live in fallback_analyzer.py.

Every emotion label the analyzer can emit appears in exactly one of
POSITIVE_EMOTIONS, NEGATIVE_EMOTIONS or NEUTRAL_EMOTIONS.
"""

# Multi-word context patterns. Within a group the first matching pattern
# contributes its emotion and the rest of the group is skipped.
CONTEXTUAL_EMOTION_GROUPS = {
    "sadness": [
        (r"\b(?:cry|crying|cried|tears|sobbing|weeping)\b", "sad"),
        (r"\bheavy\s+heart\b|\bheart\s+(?:aches|hurts|is\s+breaking)\b|\bhollow\s+ache\b", "sad"),
        (r"\b(?:failed|failing|failure)\b|\blet\s+(?:\w+\s+)?down\b", "disappointed"),
        (r"\b(?:bad|rough|awful|terrible|horrible)\s+day\b", "sad"),
    ],
    "anxiety": [
        (r"\bracing\s+(?:heart|mind|thoughts)\b|\bheart\s+(?:pounds|pounding|racing)\b", "anxious"),
        (r"\bcan'?t\s+(?:stop\s+)?(?:sleep|relax|breathe)\b|\bawake\s+at\s+night\b|\btossing\s+and\s+turning\b", "anxious"),
        (r"\bwhat\s+if\b|\boverthinking\b|\bruminating\b", "anxious"),
        (r"\bstomach\s+(?:in|into)\s+knots\b|\bknot\s+in\s+my\s+stomach\b|\bbutterflies\b", "anxious"),
    ],
    "emptiness": [
        (r"\bempty\s+inside\b|\bfloating\s+in\s+a\s+void\b", "empty"),
        (r"\bcan'?t\s+feel\s+(?:anything|a\s+thing)\b|\bemotionless\b|\bfeel(?:ing|s)?\s+(?:so\s+)?numb\b", "numb"),
        (r"\bgo(?:ing)?\s+through\s+(?:the\s+)?motions\b|\bwhat'?s\s+the\s+point\b|\bmeaningless\b|\bpointless\b", "empty"),
    ],
    "isolation": [
        (r"\bno\s*one\s+(?:understands|cares|listens)\b|\bnobody\s+(?:understands|cares|listens)\b", "lonely"),
        (r"\bby\s+myself\b|\ball\s+alone\b|\bcut\s+off\b", "lonely"),
        (r"\bleft\s+out\b|\bleft\s+behind\b|\bfeel(?:ing|s)?\s+forgotten\b", "isolated"),
    ],
    "exhaustion": [
        (r"\bno\s+energy\b|\bburn(?:ed|t)\s+out\b|\bworn\s+out\b|\brunning\s+on\s+empty\b", "exhausted"),
        (r"\bcan'?t\s+focus\b|\bbrain\s+fog\b|\bhard\s+to\s+concentrate\b", "drained"),
    ],
    "fear": [
        (r"\btrembling\b|\bshaking\b|\bfroze\b|\bfrozen\s+with\b", "afraid"),
        (r"\bpanic\s+attack\b|\bterrified\s+of\b|\bscared\s+(?:of|that)\b", "scared"),
    ],
}

NEGATION_MARKERS = (
    "not", "no", "never", "nor", "neither", "without", "hardly", "barely",
    "don't", "dont", "doesn't", "didn't", "can't", "cannot", "isn't", "aren't",
    "wasn't", "weren't", "won't", "wouldn't", "couldn't", "shouldn't",
    "haven't", "hasn't", "hadn't", "ain't",
)

FUTURE_CONDITIONAL_MARKERS = (
    "will", "would", "wish", "hope", "hoping", "if", "might", "may", "could",
    "someday", "maybe", "unless",
)

# "want to be calm", "trying to stay calm"
CALM_ASPIRATION_MARKERS = (
    "want", "wanted", "wants", "need", "needed", "needs", "try", "trying", "tried",
)

# Markers are matched up to this many tokens before an emotion word
NEGATION_WINDOW_TOKENS = 3

# A negated positive word contributes its opposite instead ("not happy" -> sad)
NEGATED_POSITIVE_OPPOSITES = {"happy": "sad", "excited": "bored", "love": "dislike"}
NEGATED_POSITIVE_DEFAULT = "unhappy"

# Split used when a negated positive still leaves the entry looking positive
NEGATED_POSITIVE_SENTIMENT = (20, 60, 20)

# keyword -> emitted emotion label
EMOTION_KEYWORDS = {
    # positive
    "happy": "happy", "joyful": "joyful", "joy": "joy", "excited": "excited",
    "cheerful": "cheerful", "content": "content", "satisfied": "satisfied",
    "pleased": "pleased", "delighted": "delighted", "elated": "elated",
    "ecstatic": "ecstatic", "thrilled": "thrilled", "glad": "glad",
    "grateful": "grateful", "thankful": "thankful", "blessed": "blessed",
    "proud": "proud", "pride": "pride", "confident": "confident",
    "hopeful": "hopeful", "optimistic": "optimistic", "motivated": "motivated",
    "enthusiastic": "enthusiastic", "determined": "determined",
    "inspired": "inspired", "energized": "energized", "relieved": "relieved",
    "relief": "relieved", "loved": "loved", "love": "love", "trust": "trust",
    "peaceful": "peaceful", "serene": "serene", "relaxed": "relaxed",
    "comfortable": "comfortable", "safe": "safe", "secure": "secure",
    "appreciated": "appreciated", "accomplished": "accomplished",
    "fulfilled": "fulfilled", "compassionate": "compassionate",
    "amused": "amused", "encouraged": "encouraged", "empowered": "empowered",
    "supported": "supported", "connected": "connected", "brave": "brave",
    "affectionate": "affectionate", "playful": "playful",
    # negative
    "sad": "sad", "unhappy": "unhappy", "depressed": "depressed",
    "miserable": "miserable", "heartbroken": "heartbroken",
    "disappointed": "disappointed", "discouraged": "discouraged",
    "hopeless": "despair", "despair": "despair", "grief": "grief",
    "grieving": "grieving", "lonely": "lonely", "alone": "alone",
    "isolated": "isolated", "abandoned": "abandoned", "rejected": "rejected",
    "disconnected": "disconnected", "detached": "detached", "distant": "distant",
    "anxious": "anxious", "anxiety": "anxious", "nervous": "nervous",
    "worried": "worried", "stressed": "stressed", "overwhelmed": "overwhelmed",
    "tense": "tense", "uneasy": "uneasy", "restless": "restless",
    "unsettled": "unsettled", "apprehensive": "apprehensive",
    "panicked": "panicked", "panicky": "panicked", "scared": "scared",
    "afraid": "afraid", "fearful": "fearful", "frightened": "frightened",
    "terrified": "terrified", "fear": "fear", "dread": "dread",
    "insecure": "insecure", "vulnerable": "vulnerable", "angry": "angry",
    "furious": "furious", "frustrated": "frustrated", "irritated": "irritated",
    "annoyed": "annoyed", "resentful": "resentful", "bitter": "bitter",
    "jealous": "jealous", "envious": "envious", "guilty": "guilty",
    "ashamed": "ashamed", "embarrassed": "embarrassed",
    "humiliated": "humiliated", "regretful": "regretful", "hurt": "hurt",
    "betrayed": "betrayed", "helpless": "helpless", "powerless": "powerless",
    "worthless": "worthless", "inadequate": "inadequate",
    "exhausted": "exhausted", "tired": "tired", "drained": "drained",
    "struggling": "struggling", "numb": "numb", "empty": "empty",
    "hollow": "hollow", "void": "void", "lost": "lost",
    "suffocating": "suffocating", "distressed": "distressed",
    "desperate": "desperate", "upset": "upset", "pessimistic": "pessimistic",
    "confused": "confused", "devastated": "devastated", "defeated": "defeated",
    "trapped": "trapped", "doubtful": "doubtful",
    # neutral
    "calm": "calm", "reflective": "reflective", "surprised": "surprised",
    "curious": "curious", "interested": "interested",
    "thoughtful": "thoughtful", "contemplative": "contemplative",
    "nostalgic": "nostalgic", "indifferent": "indifferent",
    "pensive": "pensive", "bored": "bored", "apathetic": "apathetic",
    "uncertain": "uncertain", "ambivalent": "ambivalent",
    "conflicted": "conflicted", "wondering": "wondering",
}

TOPIC_KEYWORDS = (
    "work", "job", "career", "family", "parents", "partner", "relationship",
    "friends", "health", "mental health", "physical health", "sleep",
    "exercise", "school", "exam", "education", "learning", "finances", "money",
    "challenge", "success", "failure", "conflict", "achievement", "goal",
    "progress", "therapy", "recovery", "hobby", "self-care", "mindfulness",
    "meditation", "spirituality", "communication", "boundaries", "leisure",
    "trauma", "coping", "personal growth", "responsibility", "self-esteem",
    "identity", "productivity", "relaxation", "habits", "time management",
    "social life", "home",
)

# Only consulted when fewer than two emotions were found so far
SUPPLEMENTARY_PHRASES = [
    (r"\bsinking\s+feeling\b|\bpit\s+of\s+my\s+stomach\b|\blump\s+in\s+(?:my|the)\s+throat\b", "sad"),
    (r"\bcan'?t\s+stop\s+thinking\s+about\b|\bkeep\s+remembering\b", "sad"),
    (r"\bdark\s+thoughts\b|\bpacing\b|\bfidgeting\b|\bnail\s+biting\b", "anxious"),
    (r"\bhid(?:e|ing)\s+(?:my\s+)?(?:struggle|pain|feelings)\b|\bfake\s+smile\b|\bputting\s+on\s+a\s+(?:brave\s+)?face\b", "struggling"),
    (r"\btoo\s+much\b|\bcan'?t\s+handle\b|\bdrowning\b|\bweight\s+on\s+my\s+shoulders\b", "overwhelmed"),
    (r"\bunfair\b|\bstuck\b|\bno\s+way\s+out\b", "frustrated"),
    (r"\bsmil(?:e|ed|ing)\b|\blaugh(?:ed|ing)?\b|\bgreat\s+day\b|\bfeeling\s+good\b", "happy"),
    (r"\bappreciate\b|\bcounting\s+my\s+blessings\b", "grateful"),
    (r"\blooking\s+forward\b|\bbetter\s+days\b", "hopeful"),
    (r"\bquiet\b|\bsilence\b|\bstillness\b|\btranquil\b", "calm"),
]

DISTORTION_PATTERNS = {
    "All-or-Nothing Thinking": [
        r"\ball\s+or\s+nothing\b",
        r"\b(?:completely|totally|entirely|utterly|absolutely)\s+(?:failed|ruined|useless|worthless|hopeless|wrong|perfect)\b",
        r"\beither\b.{1,60}\bor\b.{0,30}\b(?:failure|nothing|worthless|useless)\b",
        r"\b(?:if\s+it'?s\s+not|unless\s+it'?s)\s+perfect\b",
    ],
    "Overgeneralization": [
        r"\b(?:always|never|every\s*time|everyone|everybody|no\s*one|nobody|nothing\s+ever|everything\s+always)\b",
    ],
    "Mental Filtering": [
        r"\b(?:all|only)\s+i\s+(?:can\s+)?(?:think|focus|remember)\s+(?:about|on|is)\b",
        r"\bonly\s+(?:thing|part)\s+(?:that\s+)?(?:matters|i\s+remember)\b",
        r"\bone\s+(?:mistake|comment|thing)\s+ruined\b",
    ],
    "Disqualifying the Positive": [
        r"\b(?:doesn'?t|didn'?t|does\s+not|did\s+not)\s+(?:really\s+)?(?:count|matter)\b",
        r"\b(?:just|only)\s+(?:got\s+)?lucky\b",
        r"\banyone\s+could\s+(?:have\s+)?(?:do|done)\b",
        r"\b(?:they\s+were|he\s+was|she\s+was)\s+just\s+being\s+nice\b",
    ],
    "Jumping to Conclusions": [
        r"\b(?:they|he|she|everyone|people)\s+(?:must|probably)\s+(?:think|thinks|hate|hates|be\s+judging)\b",
        r"\bi\s+just\s+know\s+(?:it|they|he|she)\b",
        r"\bit'?s\s+going\s+to\s+(?:go\s+)?(?:wrong|badly|fail)\b",
    ],
    "Catastrophizing": [
        r"\b(?:disaster|catastroph\w*|end\s+of\s+the\s+world)\b",
        r"\bworst\s+(?:thing|case|possible)\b",
        r"\beverything\s+(?:is|will\s+be)\s+(?:ruined|over)\b",
        r"\bcan'?t\s+survive\b",
    ],
    "Emotional Reasoning": [
        r"\bi\s+feel\s+(?:like\s+)?(?:an?\s+)?(?:failure|fraud|idiot|stupid|worthless|useless)\b",
        r"\bbecause\s+i\s+feel\b",
        r"\bi\s+feel\s+\w+,?\s+so\s+(?:it|i|that|this)\s+must\b",
    ],
    "Should Statements": [
        r"\b(?:should|shouldn'?t|ought\s+to|must|mustn'?t|supposed\s+to)\b",
    ],
    "Labeling": [
        r"\bi(?:'m|\s+am)\s+(?:such\s+)?(?:an?\s+)?(?:idiot|loser|failure|stupid|worthless|useless|pathetic|fraud|disappointment)\b",
    ],
    "Personalization": [
        r"\b(?:it'?s|it\s+is|it\s+was)\s+(?:all\s+)?my\s+fault\b",
        r"\bbecause\s+of\s+me\b",
        r"\bi'?m\s+to\s+blame\b",
        r"\bblame\s+myself\b",
    ],
}

# Text that is negative regardless of which emotion words it uses
NEGATIVE_CONTENT_PATTERNS = (
    r"\bnot\s+(?:happy|okay|ok|fine|satisfied|comfortable|pleased|glad|excited|confident)\b",
    r"\b(?:unhappy|dissatisfied|displeased|distrust|mistrust)\b",
    r"\bfar\s+from\s+fine\b|\bnot\s+present\b|\bfloating\s+in\s+a\s+void\b",
    r"\bgo(?:ing)?\s+through\s+(?:the\s+)?motions\b|\bknot\s+tightens\b",
    r"\b(?:hollow|void|empty|numb|emotionless)\b|\bempty\s+inside\b|\bcan'?t\s+feel\b",
)

EMPTINESS_EMOTIONS = frozenset({"numb", "empty", "hollow", "void", "absent"})

POSITIVE_EMOTIONS = frozenset({
    "happy", "joyful", "joy", "excited", "cheerful", "content", "satisfied",
    "pleased", "delighted", "elated", "ecstatic", "thrilled", "glad",
    "grateful", "thankful", "blessed", "proud", "pride", "confident",
    "hopeful", "optimistic", "motivated", "enthusiastic", "determined",
    "inspired", "energized", "relieved", "loved", "love", "trust", "peaceful",
    "serene", "relaxed", "comfortable", "safe", "secure", "appreciated",
    "accomplished", "fulfilled", "compassionate", "amused", "encouraged",
    "empowered", "supported", "connected", "brave", "affectionate", "playful",
})

NEGATIVE_EMOTIONS = frozenset({
    "sad", "unhappy", "depressed", "miserable", "heartbroken", "disappointed",
    "discouraged", "despair", "grief", "grieving", "lonely", "alone",
    "isolated", "abandoned", "rejected", "disconnected", "detached", "distant",
    "anxious", "nervous", "worried", "stressed", "overwhelmed", "tense",
    "uneasy", "restless", "unsettled", "apprehensive", "panicked", "scared",
    "afraid", "fearful", "frightened", "terrified", "fear", "dread",
    "insecure", "vulnerable", "angry", "furious", "frustrated", "irritated",
    "annoyed", "resentful", "bitter", "jealous", "envious", "guilty",
    "ashamed", "embarrassed", "humiliated", "regretful", "hurt", "betrayed",
    "helpless", "powerless", "worthless", "inadequate", "exhausted", "tired",
    "drained", "struggling", "numb", "empty", "hollow", "void", "absent",
    "lost", "suffocating", "distressed", "desperate", "upset", "pessimistic",
    "confused", "devastated", "defeated", "trapped", "doubtful", "dislike",
})

NEUTRAL_EMOTIONS = frozenset({
    "calm", "reflective", "surprised", "curious", "interested", "thoughtful",
    "contemplative", "nostalgic", "indifferent", "pensive", "bored",
    "apathetic", "uncertain", "ambivalent", "conflicted", "wondering",
})

# Emotion families used to pick the narrative template, in priority order
EMOTION_FAMILIES = {
    "sadness": frozenset({
        "sad", "unhappy", "depressed", "miserable", "heartbroken", "disappointed",
        "discouraged", "despair", "grief", "grieving", "hurt", "devastated",
        "defeated", "upset", "regretful", "guilty", "ashamed", "embarrassed",
        "humiliated", "worthless", "pessimistic",
    }),
    "anxiety": frozenset({
        "anxious", "nervous", "worried", "stressed", "overwhelmed", "tense",
        "uneasy", "restless", "unsettled", "apprehensive", "insecure",
        "vulnerable", "doubtful", "confused",
    }),
    "emptiness": frozenset({"numb", "empty", "hollow", "void", "absent", "lost", "apathetic"}),
    "isolation": frozenset({
        "lonely", "alone", "isolated", "abandoned", "rejected", "disconnected",
        "detached", "distant", "betrayed",
    }),
    "exhaustion": frozenset({"exhausted", "tired", "drained", "struggling", "suffocating", "trapped"}),
    "fear": frozenset({
        "scared", "afraid", "fearful", "frightened", "terrified", "fear",
        "dread", "panicked", "helpless", "powerless", "desperate", "distressed",
    }),
    "positive": POSITIVE_EMOTIONS,
}

DISTORTION_TEMPLATES = {
    "All-or-Nothing Thinking": (
        "This entry shows signs of all-or-nothing thinking, where experiences are "
        "seen as total success or complete failure with nothing in between."
    ),
    "Overgeneralization": (
        "This entry shows signs of overgeneralization: a single event is being "
        "treated as proof of a never-ending pattern."
    ),
    "Catastrophizing": (
        "This entry shows signs of catastrophizing, where the worst possible "
        "outcome is assumed to be the likely one."
    ),
    "Emotional Reasoning": (
        "This entry shows signs of emotional reasoning: feelings are being taken "
        "as evidence of how things really are."
    ),
}

GENERIC_DISTORTION_TEMPLATE = "This entry contains thinking patterns worth examining: {distortions}."

DISTORTION_SUGGESTIONS = {
    "All-or-Nothing Thinking": "Try describing the situation on a scale from 0 to 100 instead of as pass or fail.",
    "Overgeneralization": "Look for one recent exception to the 'always' or 'never' in this thought.",
    "Catastrophizing": "Write down the worst, best and most likely outcomes, then compare them.",
    "Emotional Reasoning": "Ask what evidence you would accept if a friend described this feeling to you.",
}

GENERIC_DISTORTION_SUGGESTION = (
    "Pick one of these thoughts and list the evidence for and against it."
)

EMOTION_TEMPLATES = {
    "sadness": (
        "This entry expresses sadness ({emotions}).",
        "Be gentle with yourself, and consider reaching out to someone you trust.",
    ),
    "anxiety": (
        "This entry reflects anxiety and worry ({emotions}).",
        "A few minutes of slow breathing or writing down what is within your control may help.",
    ),
    "emptiness": (
        "This entry describes a sense of emptiness or numbness ({emotions}).",
        "Small, concrete activities you used to enjoy can help reconnect with your feelings.",
    ),
    "isolation": (
        "This entry reflects feelings of isolation ({emotions}).",
        "Consider one small step toward connection, such as a message to a friend.",
    ),
    "exhaustion": (
        "This entry reflects exhaustion ({emotions}).",
        "Rest is productive; consider what you could take off your plate this week.",
    ),
    "fear": (
        "This entry expresses fear ({emotions}).",
        "Naming what exactly feels threatening can make it easier to face.",
    ),
    "positive": (
        "This entry reflects positive emotions ({emotions}).",
        "Notice what contributed to these feelings so you can return to it.",
    ),
    "other": (
        "This entry primarily expresses {emotions}.",
        "Reflecting on the sources of these feelings may provide additional insights.",
    ),
}

TOPICS_CLAUSE = " It centres on {topics}."

TOPIC_ONLY_TEMPLATE = (
    "This entry focuses on {topics}. "
    "Consider exploring your emotional responses to these topics in future reflections."
)

GENERIC_TEMPLATE = (
    "This entry contains general reflections. Consider exploring specific "
    "emotions and situations in future entries for deeper insights."
)

GENERIC_TAGS = ("journal", "reflection")
DETAILED_CONTENT_LENGTH = 500
DEFAULT_EMOTION = "reflective"
DEFAULT_TOPIC = "personal development"
MIN_TAGS = 3
MIN_EMOTIONS_BEFORE_PHRASES = 2
