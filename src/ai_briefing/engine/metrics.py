"""Metrics for briefing engine runs."""

from dataclasses import dataclass, field
from typing import ClassVar


@dataclass
class EngineMetrics:
    """Metrics for one engine run.

    Attributes:
        items_in: Number of input items.
        clusters: Clusters formed.
        candidates: Topic candidates built (inside the window).
        eligible: Briefing-eligible candidates.
        briefing: Topics in the briefing.
        queue: Topics in the queue.
        injected_overrides: Override topics reinjected into the queue.
        excluded_reasons: Exclusion counters.
        duration_ms: Wall time of the run.
    """

    items_in: int = 0
    clusters: int = 0
    candidates: int = 0
    eligible: int = 0
    briefing: int = 0
    queue: int = 0
    injected_overrides: int = 0
    excluded_reasons: dict[str, int] = field(default_factory=dict)
    duration_ms: float = 0.0

    _instance: ClassVar["EngineMetrics | None"] = None

    @classmethod
    def get_instance(cls) -> "EngineMetrics":
        """Get singleton metrics instance."""
        if cls._instance is None:
            cls._instance = cls()
        return cls._instance

    @classmethod
    def reset(cls) -> None:
        """Reset metrics (primarily for testing)."""
        cls._instance = None

    def record_items_in(self, count: int) -> None:
        """Record input item count.

        Args:
            count: Number of input items.
        """
        self.items_in = count

    def record_clusters(self, count: int) -> None:
        """Record cluster count.

        Args:
            count: Number of clusters.
        """
        self.clusters = count

    def record_candidates(self, count: int) -> None:
        """Record candidate count.

        Args:
            count: Number of topic candidates.
        """
        self.candidates = count

    def record_selection(
        self,
        eligible: int,
        briefing: int,
        queue: int,
        injected_overrides: int,
    ) -> None:
        """Record selection outcome.

        Args:
            eligible: Briefing-eligible candidates.
            briefing: Briefing size.
            queue: Queue size.
            injected_overrides: Reinjected override topics.
        """
        self.eligible = eligible
        self.briefing = briefing
        self.queue = queue
        self.injected_overrides = injected_overrides

    def record_excluded(self, excluded_reasons: dict[str, int]) -> None:
        """Record exclusion counters.

        Args:
            excluded_reasons: Counter name -> value.
        """
        self.excluded_reasons = dict(excluded_reasons)

    def record_duration(self, duration_ms: float) -> None:
        """Record run duration.

        Args:
            duration_ms: Duration in milliseconds.
        """
        self.duration_ms = duration_ms

    def to_dict(self) -> dict[str, object]:
        """Convert metrics to dictionary.

        Returns:
            Dictionary of metric name to value.
        """
        return {
            "items_in": self.items_in,
            "clusters": self.clusters,
            "candidates": self.candidates,
            "eligible": self.eligible,
            "briefing": self.briefing,
            "queue": self.queue,
            "injected_overrides": self.injected_overrides,
            "excluded_reasons": self.excluded_reasons,
            "duration_ms": self.duration_ms,
        }
