"""Data models for synthesized topics.

Shape limits (lengths, list sizes) are checked by ``validate_topic``
rather than by field constraints, so a violation always surfaces as a
TopicValidationError naming the topic and the constraint.
"""

from datetime import datetime
from enum import Enum
from pydantic import Field

from ai_briefing.config.schemas.base import Confidence, SourceType, Subdomain
from ai_briefing.data_model import StrictBaseModel
from ai_briefing.scoring.models import ScoreRecord
from ai_briefing.topics.constants import DOMAIN


class ReasonLabel(str, Enum):
    """Editorial reason a topic matters."""

    REGULATORY = "Regulatory"
    RISK = "Risk"
    OPERATIONAL = "Operational"
    STRATEGIC = "Strategic"
    IMPACT = "Impact"


class BriefingReason(str, Enum):
    """Why a topic was surfaced."""

    SOURCE_OVERRIDE = "Included by source override"
    PRIMARY_IN_WINDOW = "Primary in window"
    SOURCES_AGREE = "2 sources agree"
    SINGLE_SOURCE = "Single source"
    IN_QUEUE = "In queue"


class TopicContext(StrictBaseModel):
    """Three short context lines."""

    what_changed: str
    whos_impacted: str
    what_to_watch_next: str


class TopicTimestamps(StrictBaseModel):
    """Timestamps derived from member publish times."""

    first_seen_at: datetime
    last_updated_at: datetime
    first_credible_at: datetime


class TopicTags(StrictBaseModel):
    """Classification tags."""

    subdomain: Subdomain


class TimelineEntry(StrictBaseModel):
    """One dated timeline event backed by source ids."""

    date: str
    event: str
    source_ids: list[str] = Field(default_factory=list)


class TopicSource(StrictBaseModel):
    """A member source as emitted in the run output."""

    source_id: str
    publisher: str
    title: str
    url: str
    type: SourceType
    published_at: datetime
    retrieved_at: datetime
    is_primary: bool


class TopicCandidate(StrictBaseModel):
    """Editorial unit derived from one cluster.

    Attributes:
        topic_id: ``ai-<date>-<NN>``.
        domain: Always ``AI``.
        included_by_source_override: Some member publisher is always_show.
        briefing_reason: Why the topic was surfaced.
        confidence_rationale: 1-3 notes explaining the confidence.
        title: Editorial title.
        intel_line: One-line summary.
        context: Context triple.
        reason_label: Editorial reason label.
        confidence: Low, Med or High.
        freshness_hours: Hours since first credible report.
        timestamps: First seen, last updated and first credible times.
        tags: Subdomain tag.
        score: Score record.
        timeline: Dated events.
        entities: Display entities.
        keywords: User-facing keywords.
        second_order_effects: Two forward-looking notes.
        contradictions: Conflicts between sources.
        sources: Member sources, most recent first.
    """

    topic_id: str
    domain: str = DOMAIN
    included_by_source_override: bool = False
    briefing_reason: BriefingReason
    confidence_rationale: list[str]
    title: str
    intel_line: str
    context: TopicContext
    reason_label: ReasonLabel
    confidence: Confidence
    freshness_hours: int
    timestamps: TopicTimestamps
    tags: TopicTags
    score: ScoreRecord
    timeline: list[TimelineEntry]
    entities: list[str]
    keywords: list[str]
    second_order_effects: list[str]
    contradictions: list[str] = Field(default_factory=list)
    sources: list[TopicSource]

    @property
    def subdomain(self) -> Subdomain:
        """Shortcut for the subdomain tag."""
        return self.tags.subdomain
