"""Output shape validation for topic candidates."""

import re

from ai_briefing.errors import TopicValidationError
from ai_briefing.scoring.scorer import clamp_score
from ai_briefing.topics.constants import (
    CONFIDENCE_RATIONALE_MAX,
    CONFIDENCE_RATIONALE_MIN,
    CONTEXT_FIELD_MAX,
    CONTRADICTION_MAX,
    CONTRADICTIONS_MAX,
    DOMAIN,
    ENTITIES_MAX,
    ENTITIES_MIN,
    ENTITY_MAX_LEN,
    INTEL_LINE_MAX,
    KEYWORDS_MAX,
    SECOND_ORDER_EFFECT_MAX,
    SECOND_ORDER_EFFECTS_COUNT,
    SOURCE_TITLE_MAX,
    SOURCES_MAX,
    SOURCES_MIN,
    TIMELINE_EVENT_MAX,
    TIMELINE_MAX,
    TIMELINE_MIN,
    TITLE_MAX,
)
from ai_briefing.topics.models import TopicCandidate


_DATE_RE = re.compile(r"^\d{4}-\d{2}-\d{2}$")


def _check_topic(topic: TopicCandidate) -> str | None:
    """Return the first violated constraint, or None."""
    if topic.domain != DOMAIN:
        return f"domain must be {DOMAIN}"
    if len(topic.title) > TITLE_MAX:
        return "title too long"
    if len(topic.intel_line) > INTEL_LINE_MAX:
        return "intel_line too long"
    rationale_count = len(topic.confidence_rationale)
    if not CONFIDENCE_RATIONALE_MIN <= rationale_count <= CONFIDENCE_RATIONALE_MAX:
        return "confidence_rationale must be 1-3"
    if len(topic.keywords) > KEYWORDS_MAX:
        return "keywords max 8"

    for name in ("what_changed", "whos_impacted", "what_to_watch_next"):
        if len(getattr(topic.context, name)) > CONTEXT_FIELD_MAX:
            return f"context.{name} too long"

    if not TIMELINE_MIN <= len(topic.timeline) <= TIMELINE_MAX:
        return "timeline must be 3-6 items"
    for entry in topic.timeline:
        if not _DATE_RE.match(entry.date):
            return "timeline.date invalid"
        if len(entry.event) > TIMELINE_EVENT_MAX:
            return "timeline.event too long"
        if not entry.source_ids:
            return "timeline.source_ids missing"

    if not ENTITIES_MIN <= len(topic.entities) <= ENTITIES_MAX:
        return "entities must be 1-8"
    for entity in topic.entities:
        if not 1 <= len(entity) <= ENTITY_MAX_LEN:
            return "entity invalid/too long"

    if len(topic.second_order_effects) != SECOND_ORDER_EFFECTS_COUNT:
        return "second_order_effects must be exactly 2"
    for effect in topic.second_order_effects:
        if not 1 <= len(effect) <= SECOND_ORDER_EFFECT_MAX:
            return "second_order_effect invalid/too long"

    if len(topic.contradictions) > CONTRADICTIONS_MAX:
        return "contradictions must be 0-3"
    for contradiction in topic.contradictions:
        if not 1 <= len(contradiction) <= CONTRADICTION_MAX:
            return "contradiction invalid/too long"

    if not SOURCES_MIN <= len(topic.sources) <= SOURCES_MAX:
        return "sources must be 1-5"
    for source in topic.sources:
        if len(source.title) > SOURCE_TITLE_MAX:
            return "source.title too long"

    # Type and subdomain enums are enforced by the model itself.
    return None


def validate_topic(topic: TopicCandidate) -> TopicCandidate:
    """Check the output shape of a topic.

    Args:
        topic: Topic to validate.

    Returns:
        The topic with every score value clamped into range.

    Raises:
        TopicValidationError: On the first violated constraint.
    """
    violation = _check_topic(topic)
    if violation is not None:
        raise TopicValidationError(topic.topic_id, violation)

    score = topic.score
    clamped = clamp_score(
        relevance=score.relevance,
        impact=score.impact,
        novelty=score.novelty,
        credibility=score.credibility,
        time_sensitivity=score.time_sensitivity,
        total=score.total,
    )
    if clamped == score:
        return topic
    return topic.model_copy(update={"score": clamped})
