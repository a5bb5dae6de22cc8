"""Unit tests for clustering metrics."""

from ai_briefing.clustering.metrics import ClusteringMetrics


class TestClusteringMetrics:
    """Tests for ClusteringMetrics."""

    def test_singleton(self) -> None:
        """Test get_instance returns the same object until reset."""
        ClusteringMetrics.reset()
        first = ClusteringMetrics.get_instance()
        assert ClusteringMetrics.get_instance() is first

        ClusteringMetrics.reset()
        assert ClusteringMetrics.get_instance() is not first

    def test_merge_ratio(self) -> None:
        """Test merge ratio over input items."""
        metrics = ClusteringMetrics()
        metrics.record_items_in(4)
        metrics.record_merge()
        assert metrics.merge_ratio == 0.25

    def test_merge_ratio_without_items(self) -> None:
        """Test merge ratio is zero for an empty run."""
        assert ClusteringMetrics().merge_ratio == 0.0

    def test_to_dict(self) -> None:
        """Test dictionary export."""
        metrics = ClusteringMetrics()
        metrics.record_items_in(3)
        metrics.record_merge()
        metrics.record_clusters(2, 1)

        assert metrics.to_dict() == {
            "items_in": 3,
            "clusters_out": 2,
            "merges_total": 1,
            "singletons": 1,
            "merge_ratio": 0.3333,
        }
