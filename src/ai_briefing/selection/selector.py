"""Ranking, briefing selection and queue filling.

Selection runs in three explicit steps:

1. ``rank_candidates``: a pure sort by total, then time sensitivity, then
   last update, all descending. Ties keep input order.
2. ``TopicSelector.select``: gates each ranked candidate, fills the
   briefing under the per-subdomain cap and fills the queue.
3. ``TopicSelector.reinject_overrides``: adds trust-gate-failed topics from
   always_show publishers to the queue.
"""

from collections.abc import Sequence

import structlog

from ai_briefing.config.schemas.base import Subdomain
from ai_briefing.config.schemas.engine import SelectionConfig
from ai_briefing.eligibility.gates import (
    MULTI_SOURCE_MIN_CREDIBILITY,
    MULTI_SOURCE_MIN_RELEVANCE,
    passes_eligibility_gates,
    passes_source_count_gate,
)
from ai_briefing.selection.models import ExcludedReasons, SelectionResult
from ai_briefing.sources.mix import SourceMix
from ai_briefing.topics.models import TopicCandidate


logger = structlog.get_logger()


def rank_key(topic: TopicCandidate) -> tuple[int, int, float]:
    """Sort key placing the strongest topic first.

    Args:
        topic: Topic candidate.

    Returns:
        Key for an ascending sort.
    """
    return (
        -topic.score.total,
        -topic.score.time_sensitivity,
        -topic.timestamps.last_updated_at.timestamp(),
    )


def rank_candidates(candidates: Sequence[TopicCandidate]) -> list[TopicCandidate]:
    """Rank candidates deterministically.

    Args:
        candidates: Topic candidates in cluster order.

    Returns:
        New list sorted by total, time sensitivity and last update
        (descending); ties keep input order.
    """
    return sorted(candidates, key=rank_key)


class TopicSelector:
    """Selects the briefing and queue from ranked candidates."""

    def __init__(self, run_id: str, config: SelectionConfig | None = None) -> None:
        """Initialize the selector.

        Args:
            run_id: Run identifier for logging.
            config: Briefing and queue quotas.
        """
        self._run_id = run_id
        self._config = config or SelectionConfig()
        self._log = logger.bind(component="selection", run_id=run_id)

    def select(
        self,
        candidates: Sequence[TopicCandidate],
        excluded: ExcludedReasons | None = None,
    ) -> SelectionResult:
        """Rank candidates and fill the briefing and queue.

        Args:
            candidates: Validated topic candidates.
            excluded: Counters to increment; a new set if None.

        Returns:
            SelectionResult without override reinjection.
        """
        excluded = excluded if excluded is not None else ExcludedReasons()
        ranked = rank_candidates(candidates)

        eligible: list[TopicCandidate] = []
        queue_pool: list[TopicCandidate] = []
        override_candidates: list[TopicCandidate] = []

        for topic in ranked:
            mix = SourceMix.from_sources(topic.sources)

            if mix.is_social_only:
                excluded.social_only += 1
                continue

            queue_pool.append(topic)

            if not passes_source_count_gate(topic.sources):
                excluded.source_count += 1
                continue

            if not passes_eligibility_gates(
                topic.score.credibility, topic.score.relevance, topic.sources
            ):
                if topic.score.credibility < MULTI_SOURCE_MIN_CREDIBILITY:
                    excluded.credibility += 1
                if topic.score.relevance < MULTI_SOURCE_MIN_RELEVANCE:
                    excluded.relevance += 1
                if topic.included_by_source_override:
                    override_candidates.append(topic)
                continue

            if mix.is_influencer_only:
                continue

            eligible.append(topic)

        briefing = self._fill_briefing(eligible, excluded)
        briefing_ids = {t.topic_id for t in briefing}
        queue = [t for t in queue_pool if t.topic_id not in briefing_ids]
        queue = queue[: self._config.queue_max]

        self._log.info(
            "selection_complete",
            candidates=len(candidates),
            eligible=len(eligible),
            briefing=len(briefing),
            queue=len(queue),
            override_candidates=len(override_candidates),
            excluded=excluded.to_dict(),
            excluded_total=excluded.total,
        )

        return SelectionResult(
            briefing=briefing,
            queue=queue,
            eligible=eligible,
            override_candidates=override_candidates,
            excluded=excluded,
        )

    def _fill_briefing(
        self,
        eligible: Sequence[TopicCandidate],
        excluded: ExcludedReasons,
    ) -> list[TopicCandidate]:
        """Walk eligible topics in rank order under the subdomain cap.

        Args:
            eligible: Briefing-eligible topics in rank order.
            excluded: Counters; ``diversity`` is incremented per skip.

        Returns:
            Briefing topics.
        """
        briefing: list[TopicCandidate] = []
        per_subdomain: dict[Subdomain, int] = {}

        if self._config.briefing_max == 0:
            return briefing

        for topic in eligible:
            count = per_subdomain.get(topic.subdomain, 0)
            if count >= self._config.per_subdomain_max:
                excluded.diversity += 1
                continue
            briefing.append(topic)
            per_subdomain[topic.subdomain] = count + 1
            if len(briefing) >= self._config.briefing_max:
                break

        return briefing

    def reinject_overrides(self, result: SelectionResult) -> SelectionResult:
        """Add trust-gate-failed override topics to the queue.

        At most ``override_inject_max`` topics are added, the queue never
        exceeds ``queue_max``, and a topic whose title already appears in
        the briefing or queue is skipped.

        Args:
            result: Output of ``select``.

        Returns:
            The same result with ``queue`` and ``injected`` updated.
        """
        for topic in result.override_candidates:
            if len(result.injected) >= self._config.override_inject_max:
                break
            if len(result.queue) >= self._config.queue_max:
                break
            titles = {t.title for t in result.briefing} | {t.title for t in result.queue}
            if topic.title in titles:
                continue
            result.queue.append(topic)
            result.injected.append(topic)

        if result.injected:
            self._log.info(
                "overrides_reinjected",
                injected=len(result.injected),
                topic_ids=[t.topic_id for t in result.injected],
            )
        return result


def select_topics_pure(
    candidates: Sequence[TopicCandidate],
    config: SelectionConfig | None = None,
    run_id: str = "pure",
) -> SelectionResult:
    """Pure function API for selection, including override reinjection.

    Args:
        candidates: Validated topic candidates.
        config: Briefing and queue quotas.
        run_id: Run identifier for logging.

    Returns:
        SelectionResult with fresh exclusion counters.
    """
    selector = TopicSelector(run_id=run_id, config=config)
    return selector.reinject_overrides(selector.select(candidates))
