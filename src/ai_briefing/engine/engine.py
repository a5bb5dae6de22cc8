"""Briefing engine orchestrating one run end to end.

Flow: normalize -> cluster -> build and validate topics -> select ->
reinject overrides -> re-validate output. The engine is synchronous and
deterministic: the same RunInput always yields the same RunResult.
"""

import time

import structlog

from ai_briefing.clustering.clusterer import ClusteringEngine
from ai_briefing.clustering.metrics import ClusteringMetrics
from ai_briefing.clustering.models import Cluster
from ai_briefing.config.schemas.engine import EngineConfig
from ai_briefing.config.schemas.rules import RulesConfig
from ai_briefing.engine.metrics import EngineMetrics
from ai_briefing.engine.models import (
    ExcludedReasonsOut,
    RunInput,
    RunResult,
    RunWindowOut,
    TOPIC_CAP,
    format_run_id,
)
from ai_briefing.engine.state_machine import EngineState, EngineStateMachine
from ai_briefing.errors import TopicValidationError
from ai_briefing.normalizer.normalizer import Normalizer
from ai_briefing.selection.models import ExcludedReasons
from ai_briefing.selection.selector import TopicSelector
from ai_briefing.topics.builder import TopicBuilder
from ai_briefing.topics.models import TopicCandidate
from ai_briefing.topics.validator import validate_topic


logger = structlog.get_logger()


class BriefingEngine:
    """Turns a batch of source items into a ranked briefing and queue.

    Each instance owns its normalizer, rule tables and state machine, and
    runs exactly once.
    """

    def __init__(
        self,
        run_id: str,
        rules: RulesConfig | None = None,
        config: EngineConfig | None = None,
        metrics: EngineMetrics | None = None,
        clustering_metrics: ClusteringMetrics | None = None,
    ) -> None:
        """Initialize the engine.

        Args:
            run_id: Run identifier for logging.
            rules: Rule tables. Uses the built-in tables if None.
            config: Engine limits and thresholds.
            metrics: Optional metrics instance for dependency injection.
            clustering_metrics: Optional clustering metrics instance.
        """
        self._run_id = run_id
        self._config = config or EngineConfig()
        self._normalizer = Normalizer(rules)
        self._metrics = metrics or EngineMetrics.get_instance()
        self._clusterer = ClusteringEngine(
            run_id=run_id,
            normalizer=self._normalizer,
            config=self._config.clustering,
            metrics=clustering_metrics,
        )
        self._selector = TopicSelector(run_id=run_id, config=self._config.selection)
        self._state_machine = EngineStateMachine(run_id)
        self._log = logger.bind(component="engine", run_id=run_id)

    @property
    def state(self) -> EngineState:
        """Get current engine state."""
        return self._state_machine.state

    @property
    def normalizer(self) -> Normalizer:
        """Normalizer used by this engine."""
        return self._normalizer

    def run(self, run_input: RunInput) -> RunResult:
        """Run the engine on one batch.

        Args:
            run_input: Source items, override flags and window.

        Returns:
            RunResult with briefing, queue and exclusion counters.

        Raises:
            TopicValidationError: If any topic violates the output shape.
            EngineStateTransitionError: If the engine was already used.
        """
        start_time = time.perf_counter()
        now = run_input.reference_time
        self._metrics.record_items_in(len(run_input.sources))
        self._log.info(
            "engine_started",
            items_in=len(run_input.sources),
            briefing_date=run_input.briefing_date,
            window_start=run_input.window_start.isoformat(),
            window_end=run_input.window_end.isoformat(),
        )

        try:
            items = [self._normalizer.normalize_item(i) for i in run_input.sources]
            clustering = self._clusterer.cluster(items)
            self._metrics.record_clusters(clustering.clusters_out)
            self._state_machine.to_clustered()

            excluded = ExcludedReasons()
            builder = TopicBuilder(
                normalizer=self._normalizer,
                briefing_date=run_input.briefing_date,
                now=now,
                always_show=run_input.always_show,
            )
            candidates = self._build_candidates(
                clustering.clusters, builder, run_input, excluded
            )
            self._metrics.record_candidates(len(candidates))
            self._state_machine.to_scored()

            selection = self._selector.select(candidates, excluded)
            self._state_machine.to_selected()

            selection = self._selector.reinject_overrides(selection)
            briefing = self._revalidate(
                selection.briefing[: self._config.selection.briefing_max]
            )
            queue = self._revalidate(selection.queue[: self._config.selection.queue_max])
            self._state_machine.to_final()

        except TopicValidationError:
            self._state_machine.to_failed()
            raise
        except Exception:
            # A finished engine stays FINAL; its rejection is the transition error.
            if not self._state_machine.is_terminal:
                self._log.error("engine_run_failed", exc_info=True)
                self._state_machine.to_failed()
            raise

        self._metrics.record_selection(
            eligible=selection.eligible_count,
            briefing=len(briefing),
            queue=len(queue),
            injected_overrides=len(selection.injected),
        )
        self._metrics.record_excluded(excluded.to_dict())
        duration_ms = (time.perf_counter() - start_time) * 1000
        self._metrics.record_duration(duration_ms)

        self._log.info(
            "engine_complete",
            candidate_count=len(candidates),
            eligible_count=selection.eligible_count,
            briefing_count=len(briefing),
            queue_count=len(queue),
            excluded_reasons=excluded.to_dict(),
            duration_ms=duration_ms,
        )

        return RunResult(
            run_id=format_run_id(run_input.briefing_date),
            briefing_date=run_input.briefing_date,
            topic_cap=TOPIC_CAP,
            started_at=now,
            completed_at=now,
            window=RunWindowOut(
                window_start=run_input.window_start,
                window_end=run_input.window_end,
            ),
            candidate_count=len(candidates),
            eligible_count=selection.eligible_count,
            briefing_count=len(briefing),
            queue_count=len(queue),
            excluded_reasons=ExcludedReasonsOut(**excluded.to_dict()),
            briefing_topics=briefing,
            queued_topics=queue,
        )

    def _build_candidates(
        self,
        clusters: list[Cluster],
        builder: TopicBuilder,
        run_input: RunInput,
        excluded: ExcludedReasons,
    ) -> list[TopicCandidate]:
        """Build and validate one candidate per in-window cluster.

        Topic numbers follow cluster position, so a cluster excluded for
        the window leaves a gap in the ids.

        Args:
            clusters: Clusters ordered by recency.
            builder: Topic builder for this run.
            run_input: Run input holding the window start.
            excluded: Counters; ``outside_window`` is incremented here.

        Returns:
            Validated topic candidates in cluster order.
        """
        candidates: list[TopicCandidate] = []
        for position, cluster in enumerate(clusters, start=1):
            members = cluster.members
            first_credible = min(m.published_at for m in members)
            if first_credible < run_input.window_start:
                excluded.outside_window += 1
                self._log.debug(
                    "cluster_outside_window",
                    position=position,
                    first_credible_at=first_credible.isoformat(),
                )
                continue

            topic = builder.build(members, position)
            candidates.append(self._validate(topic))
        return candidates

    def _validate(self, topic: TopicCandidate) -> TopicCandidate:
        try:
            return validate_topic(topic)
        except TopicValidationError as e:
            self._log.error(
                "topic_validation_failed",
                topic_id=e.topic_id,
                constraint=e.constraint,
            )
            e.run_id = self._run_id
            raise

    def _revalidate(self, topics: list[TopicCandidate]) -> list[TopicCandidate]:
        return [self._validate(t) for t in topics]


def run_briefing_pure(
    run_input: RunInput,
    rules: RulesConfig | None = None,
    config: EngineConfig | None = None,
) -> RunResult:
    """Pure function API for a briefing run.

    Uses private metrics instances so repeated calls never share state.

    Args:
        run_input: Source items, override flags and window.
        rules: Rule tables. Uses the built-in tables if None.
        config: Engine limits and thresholds.

    Returns:
        RunResult for the batch.
    """
    engine = BriefingEngine(
        run_id=format_run_id(run_input.briefing_date),
        rules=rules,
        config=config,
        metrics=EngineMetrics(),
        clustering_metrics=ClusteringMetrics(),
    )
    return engine.run(run_input)
