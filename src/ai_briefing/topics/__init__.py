"""Topic synthesis and output validation."""

from ai_briefing.topics.builder import (
    TopicBuilder,
    format_topic_id,
    freshness_hours,
    intel_line_for,
    member_text,
    reason_label_for,
)
from ai_briefing.topics.models import (
    BriefingReason,
    ReasonLabel,
    TimelineEntry,
    TopicCandidate,
    TopicContext,
    TopicSource,
    TopicTags,
    TopicTimestamps,
)
from ai_briefing.topics.text import short
from ai_briefing.topics.validator import validate_topic


__all__ = [
    "BriefingReason",
    "ReasonLabel",
    "TimelineEntry",
    "TopicBuilder",
    "TopicCandidate",
    "TopicContext",
    "TopicSource",
    "TopicTags",
    "TopicTimestamps",
    "format_topic_id",
    "freshness_hours",
    "intel_line_for",
    "member_text",
    "reason_label_for",
    "short",
    "validate_topic",
]
