"""Synthesis of topic candidates from clusters."""

import math
from collections.abc import Mapping, Sequence
from datetime import datetime

from ai_briefing.config.schemas.base import SourceType, Subdomain
from ai_briefing.eligibility.gates import compute_confidence
from ai_briefing.normalizer.normalizer import Normalizer
from ai_briefing.scoring.constants import OPERATIONAL_PATTERN
from ai_briefing.scoring.scorer import (
    build_score_record,
    compute_credibility,
    compute_subscores,
)
from ai_briefing.sources.mix import SourceMix
from ai_briefing.sources.models import SourceItem
from ai_briefing.topics.constants import (
    CONFIDENCE_RATIONALE_MAX,
    CONTEXT_FIELD_MAX,
    DOMAIN,
    ENTITIES_MAX,
    ENTITY_MAX_LEN,
    FALLBACK_TITLE,
    FALLBACK_TITLE_TOKENS,
    INTEL_LINE_MAX,
    INTEL_MULTIPLE,
    INTEL_SINGLE,
    INTEL_SINGLE_PRIMARY,
    MEMBER_TEXT_SEPARATOR,
    RATIONALE_MULTI_PUBLISHER,
    RATIONALE_NO_CONTRADICTIONS,
    RATIONALE_PRIMARY,
    RATIONALE_SINGLE_SOURCE,
    SECOND_ORDER_EFFECT_MAX,
    SECOND_ORDER_EFFECTS,
    SOURCE_TITLE_MAX,
    TIMELINE_ADDITIONAL,
    TIMELINE_EVENT_MAX,
    TIMELINE_FIRST,
    TIMELINE_LENGTH,
    TIMELINE_PLACEHOLDER,
    TITLE_MAX,
    UNKNOWN_SOURCE_ID,
    WHAT_CHANGED,
    WHAT_TO_WATCH_NEXT,
    WHOS_IMPACTED,
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
from ai_briefing.topics.text import capitalize_first, short


_STRATEGIC_SUBDOMAINS = frozenset(
    {Subdomain.AI_INFRA, Subdomain.MODEL_RELEASES, Subdomain.AI_BUSINESS_MARKET}
)


def format_topic_id(briefing_date: str, position: int) -> str:
    """Format a topic identifier.

    Args:
        briefing_date: Date label (YYYY-MM-DD).
        position: 1-based cluster position.

    Returns:
        ``ai-<date>-<NN>``.
    """
    return f"ai-{briefing_date}-{position:02d}"


def member_text(members: Sequence[SourceItem]) -> str:
    """Join member titles and summaries into one text."""
    return MEMBER_TEXT_SEPARATOR.join(f"{s.title} {s.summary}" for s in members)


def reason_label_for(subdomain: Subdomain, text: str) -> ReasonLabel:
    """Pick the editorial reason label.

    Args:
        subdomain: Topic subdomain.
        text: Combined member text.

    Returns:
        Regulatory, Risk, Operational, Strategic or Impact.
    """
    if subdomain == Subdomain.AI_REGULATION:
        return ReasonLabel.REGULATORY
    if subdomain == Subdomain.AI_SECURITY:
        return ReasonLabel.RISK
    if OPERATIONAL_PATTERN.search((text or "").lower()):
        return ReasonLabel.OPERATIONAL
    if subdomain == Subdomain.AI_APPS_TOOLS:
        return ReasonLabel.OPERATIONAL
    if subdomain in _STRATEGIC_SUBDOMAINS:
        return ReasonLabel.STRATEGIC
    return ReasonLabel.IMPACT


def freshness_hours(first_credible_at: datetime, now: datetime) -> int:
    """Whole hours from first credible report to now, rounded half up.

    Args:
        first_credible_at: Earliest member publish time.
        now: Reference time.

    Returns:
        Non-negative hour count.
    """
    hours = (now - first_credible_at).total_seconds() / 3600
    return max(0, math.floor(hours + 0.5))


def intel_line_for(title: str, mix: SourceMix) -> str:
    """Write the one-line summary.

    Args:
        title: Topic title.
        mix: Source mix of the members.

    Returns:
        Intel line of at most 140 characters.
    """
    has_influencer = SourceType.INFLUENCER in mix.types
    if mix.is_single:
        if mix.has_primary:
            line = INTEL_SINGLE_PRIMARY.format(title=title)
        else:
            kind = "creator source" if has_influencer else "single source"
            line = INTEL_SINGLE.format(title=title, kind=kind)
    else:
        if mix.has_primary:
            sources_mix = "primary sources and coverage"
        elif has_influencer:
            sources_mix = "creator coverage"
        else:
            sources_mix = "coverage"
        line = INTEL_MULTIPLE.format(title=title, mix=sources_mix)
    return short(line, INTEL_LINE_MAX)


class TopicBuilder:
    """Turns cluster members into validated-shape topic candidates.

    Text-derived fields (title, entities, keywords, subdomain) use the
    builder's normalizer so they follow the same rule tables as clustering.
    """

    def __init__(
        self,
        normalizer: Normalizer,
        briefing_date: str,
        now: datetime,
        always_show: Mapping[str, bool] | None = None,
    ) -> None:
        """Initialize the builder.

        Args:
            normalizer: Normalizer holding the rule tables.
            briefing_date: Date label for ids and timeline entries.
            now: Reference time for freshness.
            always_show: Publisher name -> always_show override flag.
        """
        self._normalizer = normalizer
        self._briefing_date = briefing_date
        self._now = now
        self._always_show = dict(always_show or {})

    def infer_title(self, members: Sequence[SourceItem]) -> str:
        """Editorial title for a group of members.

        Args:
            members: Cluster members.

        Returns:
            The first matching title rule, else the first clustering tokens
            capitalised, else a generic title; at most 60 characters.
        """
        text = member_text(members)
        title = self._normalizer.match_title_rule(text)
        if title is None:
            folded_lower = self._normalizer.fold_aliases(text).lower()
            tokens = self._normalizer.clustering_tokens(folded_lower)
            tokens = tokens[:FALLBACK_TITLE_TOKENS]
            title = " ".join(capitalize_first(t) for t in tokens) or FALLBACK_TITLE
        return short(title, TITLE_MAX)

    def is_override(self, members: Sequence[SourceItem]) -> bool:
        """Whether any member's publisher is flagged always_show."""
        return any(self._always_show.get(s.publisher, False) for s in members)

    def build(self, members: Sequence[SourceItem], position: int) -> TopicCandidate:
        """Build a topic candidate.

        Args:
            members: Cluster members, most recent first (1-5 items).
            position: 1-based cluster position used in the topic id.

        Returns:
            TopicCandidate (not yet validated).
        """
        combined = member_text(members)
        subdomain = self._normalizer.classify_subdomain(combined)
        mix = SourceMix.from_sources(members)

        title = self.infer_title(members)

        published = [s.published_at for s in members]
        first_credible = min(published)
        last_updated = max(published)

        entities = self._normalizer.extract_entities(combined)

        credibility = compute_credibility(members)
        score = build_score_record(compute_subscores(subdomain, combined), credibility)

        contradictions: list[str] = []
        override = self.is_override(members)

        return TopicCandidate(
            topic_id=format_topic_id(self._briefing_date, position),
            domain=DOMAIN,
            included_by_source_override=override,
            briefing_reason=self._briefing_reason(mix, override),
            confidence_rationale=self._confidence_rationale(mix, contradictions),
            title=title,
            intel_line=intel_line_for(title, mix),
            context=TopicContext(
                what_changed=short(WHAT_CHANGED, CONTEXT_FIELD_MAX),
                whos_impacted=short(WHOS_IMPACTED, CONTEXT_FIELD_MAX),
                what_to_watch_next=short(WHAT_TO_WATCH_NEXT, CONTEXT_FIELD_MAX),
            ),
            reason_label=reason_label_for(subdomain, combined),
            confidence=compute_confidence(credibility, members, contradictions),
            freshness_hours=freshness_hours(first_credible, self._now),
            timestamps=TopicTimestamps(
                first_seen_at=first_credible,
                last_updated_at=last_updated,
                first_credible_at=first_credible,
            ),
            tags=TopicTags(subdomain=subdomain),
            score=score,
            timeline=self._timeline(members),
            entities=[short(e, ENTITY_MAX_LEN) for e in entities][:ENTITIES_MAX],
            keywords=self._normalizer.extract_keywords(combined),
            second_order_effects=[
                short(effect, SECOND_ORDER_EFFECT_MAX) for effect in SECOND_ORDER_EFFECTS
            ],
            contradictions=contradictions,
            sources=[
                TopicSource(
                    source_id=s.source_id,
                    publisher=s.publisher,
                    title=short(s.title, SOURCE_TITLE_MAX),
                    url=s.url,
                    type=s.type,
                    published_at=s.published_at,
                    retrieved_at=s.retrieved_at,
                    is_primary=s.is_primary,
                )
                for s in members
            ],
        )

    @staticmethod
    def _briefing_reason(mix: SourceMix, override: bool) -> BriefingReason:
        if override:
            return BriefingReason.SOURCE_OVERRIDE
        if mix.is_single and mix.has_primary:
            return BriefingReason.PRIMARY_IN_WINDOW
        if mix.publisher_count >= 2:
            return BriefingReason.SOURCES_AGREE
        if mix.is_single:
            return BriefingReason.SINGLE_SOURCE
        return BriefingReason.IN_QUEUE

    @staticmethod
    def _confidence_rationale(mix: SourceMix, contradictions: Sequence[str]) -> list[str]:
        notes: list[str] = []
        if mix.is_single:
            notes.append(RATIONALE_SINGLE_SOURCE)
        if mix.has_primary:
            notes.append(RATIONALE_PRIMARY)
        if mix.publisher_count >= 2:
            notes.append(RATIONALE_MULTI_PUBLISHER)
        if not contradictions:
            notes.append(RATIONALE_NO_CONTRADICTIONS)
        return notes[:CONFIDENCE_RATIONALE_MAX]

    def _timeline(self, members: Sequence[SourceItem]) -> list[TimelineEntry]:
        """Fixed-length timeline from the first three members.

        Fewer than three members are padded with a single-source placeholder
        backed by the first member's id.
        """
        entries: list[TimelineEntry] = []
        for index, source in enumerate(members[:TIMELINE_LENGTH]):
            template = TIMELINE_FIRST if index == 0 else TIMELINE_ADDITIONAL
            entries.append(
                TimelineEntry(
                    date=self._briefing_date,
                    event=short(
                        template.format(publisher=source.publisher), TIMELINE_EVENT_MAX
                    ),
                    source_ids=[source.source_id],
                )
            )

        fallback_id = members[0].source_id if members else UNKNOWN_SOURCE_ID
        while len(entries) < TIMELINE_LENGTH:
            entries.append(
                TimelineEntry(
                    date=self._briefing_date,
                    event=short(TIMELINE_PLACEHOLDER, TIMELINE_EVENT_MAX),
                    source_ids=[fallback_id],
                )
            )
        return entries
