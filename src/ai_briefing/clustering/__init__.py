"""Story clustering over normalized source items."""

from ai_briefing.clustering.clusterer import (
    ClusteringEngine,
    cluster_items_pure,
    jaccard,
)
from ai_briefing.clustering.metrics import ClusteringMetrics
from ai_briefing.clustering.models import Cluster, ClusteringResult


__all__ = [
    "Cluster",
    "ClusteringEngine",
    "ClusteringMetrics",
    "ClusteringResult",
    "cluster_items_pure",
    "jaccard",
]
