"""Fixed texts and limits for topic synthesis."""

DOMAIN = "AI"

# Output shape limits
TITLE_MAX = 60
INTEL_LINE_MAX = 140
CONTEXT_FIELD_MAX = 80
TIMELINE_EVENT_MAX = 90
TIMELINE_MIN = 3
TIMELINE_MAX = 6
ENTITY_MAX_LEN = 40
ENTITIES_MIN = 1
ENTITIES_MAX = 8
KEYWORDS_MAX = 8
SECOND_ORDER_EFFECTS_COUNT = 2
SECOND_ORDER_EFFECT_MAX = 110
CONTRADICTIONS_MAX = 3
CONTRADICTION_MAX = 120
SOURCES_MIN = 1
SOURCES_MAX = 5
SOURCE_TITLE_MAX = 90
CONFIDENCE_RATIONALE_MIN = 1
CONFIDENCE_RATIONALE_MAX = 3

# Timeline length emitted for every topic
TIMELINE_LENGTH = 3
FALLBACK_TITLE = "AI briefing updates"
FALLBACK_TITLE_TOKENS = 6
UNKNOWN_SOURCE_ID = "unknown"
MEMBER_TEXT_SEPARATOR = " | "

WHAT_CHANGED = "New reporting surfaced this development and its implications."
WHOS_IMPACTED = "Enterprise teams planning AI rollout, cost, governance, or security."
WHAT_TO_WATCH_NEXT = "Primary docs, vendor statements, and measurable follow-up signals."

SECOND_ORDER_EFFECTS: tuple[str, str] = (
    "If this continues, expect accelerated enterprise evaluation and toolchain changes.",
    "If this continues, expect tighter governance and clearer ROI requirements.",
)

RATIONALE_SINGLE_SOURCE = "Single source: confidence is Low unless Primary"
RATIONALE_PRIMARY = "Primary source present: confidence capped at Medium unless corroborated"
RATIONALE_MULTI_PUBLISHER = "At least 2 independent publishers in cluster"
RATIONALE_NO_CONTRADICTIONS = "No contradictions detected in sources"

TIMELINE_FIRST = "First surfaced via: {publisher}"
TIMELINE_ADDITIONAL = "Additional coverage: {publisher}"
TIMELINE_PLACEHOLDER = "Additional coverage: (single source)"

INTEL_SINGLE_PRIMARY = (
    "{title}. Primary source posted an update; assess enterprise impact on cost, "
    "risk, or adoption."
)
INTEL_SINGLE = (
    "{title}. One {kind} surfaced this; treat as preliminary and watch for "
    "confirmation."
)
INTEL_MULTIPLE = (
    "{title}. Multiple {mix} surfaced it; assess enterprise impact on cost, "
    "risk, or adoption."
)
