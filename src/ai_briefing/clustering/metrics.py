"""Metrics for clustering operations."""

from dataclasses import dataclass
from typing import ClassVar


@dataclass
class ClusteringMetrics:
    """Metrics for clustering operations.

    Attributes:
        items_in: Number of input items.
        clusters_out: Number of clusters produced.
        merges_total: Items merged into an existing cluster.
        singletons: Clusters with exactly one item.
    """

    items_in: int = 0
    clusters_out: int = 0
    merges_total: int = 0
    singletons: int = 0

    _instance: ClassVar["ClusteringMetrics | None"] = None

    @classmethod
    def get_instance(cls) -> "ClusteringMetrics":
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

    def record_merge(self) -> None:
        """Record an item joining an existing cluster."""
        self.merges_total += 1

    def record_clusters(self, clusters_out: int, singletons: int) -> None:
        """Record the shape of the clustering output.

        Args:
            clusters_out: Number of clusters.
            singletons: Clusters with a single item.
        """
        self.clusters_out = clusters_out
        self.singletons = singletons

    @property
    def merge_ratio(self) -> float:
        """Share of input items that joined an existing cluster."""
        if self.items_in == 0:
            return 0.0
        return self.merges_total / self.items_in

    def to_dict(self) -> dict[str, object]:
        """Convert metrics to dictionary.

        Returns:
            Dictionary of metric name to value.
        """
        return {
            "items_in": self.items_in,
            "clusters_out": self.clusters_out,
            "merges_total": self.merges_total,
            "singletons": self.singletons,
            "merge_ratio": round(self.merge_ratio, 4),
        }
