"""Greedy keyword-overlap clustering of source items.

Items are bucketed by (primary entity, subdomain). Inside a bucket each
item, in arrival order, joins the most similar existing cluster if the
Jaccard overlap of clustering keywords reaches the bucket threshold, and
otherwise starts a new cluster. Assignment is single-pass: clusters are
never revisited, so results depend on arrival order.
"""

from collections.abc import Iterable, Sequence

import structlog

from ai_briefing.clustering.metrics import ClusteringMetrics
from ai_briefing.clustering.models import Cluster, ClusteringResult
from ai_briefing.config.schemas.base import Subdomain
from ai_briefing.config.schemas.engine import ClusteringConfig
from ai_briefing.normalizer.constants import OTHER_ENTITY
from ai_briefing.normalizer.models import Fingerprint
from ai_briefing.normalizer.normalizer import Normalizer
from ai_briefing.sources.models import SourceItem


logger = structlog.get_logger()


def jaccard(a: Iterable[str], b: Iterable[str]) -> float:
    """Jaccard similarity of two token collections.

    Args:
        a: First tokens (duplicates ignored).
        b: Second tokens (duplicates ignored).

    Returns:
        |A ∩ B| / |A ∪ B|, or 0.0 when both are empty.
    """
    set_a = set(a)
    set_b = set(b)
    union = set_a | set_b
    if not union:
        return 0.0
    return len(set_a & set_b) / len(union)


def _ordered_union(first: Sequence[str], second: Sequence[str], cap: int) -> list[str]:
    merged = list(dict.fromkeys([*first, *second]))
    return merged[:cap]


class ClusteringEngine:
    """Groups source items into story clusters."""

    def __init__(
        self,
        run_id: str,
        normalizer: Normalizer | None = None,
        config: ClusteringConfig | None = None,
        metrics: ClusteringMetrics | None = None,
    ) -> None:
        """Initialize the clustering engine.

        Args:
            run_id: Run identifier for logging.
            normalizer: Normalizer computing fingerprints.
            config: Thresholds and caps.
            metrics: Optional metrics instance for dependency injection.
        """
        self._run_id = run_id
        self._normalizer = normalizer or Normalizer()
        self._config = config or ClusteringConfig()
        self._metrics = metrics or ClusteringMetrics.get_instance()
        self._log = logger.bind(component="clustering", run_id=run_id)

    def threshold_for(self, entity: str) -> float:
        """Merge threshold for a bucket.

        Args:
            entity: Bucket entity.

        Returns:
            The known-entity threshold, or the stricter one for ``Other``.
        """
        if entity == OTHER_ENTITY:
            return self._config.unknown_entity_threshold
        return self._config.known_entity_threshold

    def cluster(self, items: Sequence[SourceItem]) -> ClusteringResult:
        """Cluster items into stories.

        Args:
            items: Alias-folded source items in arrival order.

        Returns:
            ClusteringResult with clusters ordered by most recent member.
        """
        self._metrics.record_items_in(len(items))
        self._log.info("clustering_started", items_in=len(items))

        buckets: dict[tuple[str, Subdomain], list[tuple[SourceItem, Fingerprint]]] = {}
        for item in items:
            fp = self._normalizer.fingerprint(
                item, max_keywords=self._config.fingerprint_keywords_max
            )
            buckets.setdefault(fp.bucket_key, []).append((item, fp))

        clusters: list[Cluster] = []
        merges_total = 0
        for (entity, subdomain), bucket_items in buckets.items():
            bucket_clusters, merges = self._cluster_bucket(
                entity, subdomain, bucket_items
            )
            clusters.extend(bucket_clusters)
            merges_total += merges

        # Stable: equal recency keeps bucket order.
        clusters.sort(key=lambda c: c.latest_published_at, reverse=True)

        singletons = sum(1 for c in clusters if c.size == 1)
        self._metrics.record_clusters(len(clusters), singletons)
        self._log.info(
            "clustering_complete",
            items_in=len(items),
            buckets=len(buckets),
            clusters_out=len(clusters),
            merges_total=merges_total,
            singletons=singletons,
        )

        return ClusteringResult(
            clusters=clusters,
            items_in=len(items),
            merges_total=merges_total,
        )

    def _cluster_bucket(
        self,
        entity: str,
        subdomain: Subdomain,
        bucket_items: list[tuple[SourceItem, Fingerprint]],
    ) -> tuple[list[Cluster], int]:
        """Greedily assign one bucket's items to clusters.

        Args:
            entity: Bucket entity.
            subdomain: Bucket subdomain.
            bucket_items: Items and fingerprints in arrival order.

        Returns:
            Tuple of (clusters in creation order, merge count).
        """
        threshold = self.threshold_for(entity)
        clusters: list[Cluster] = []
        merges = 0

        for item, fp in bucket_items:
            best: Cluster | None = None
            best_score = 0.0
            for candidate in clusters:
                score = jaccard(fp.keywords, candidate.keywords)
                # Strict comparison: the first cluster reaching the max wins.
                if score > best_score:
                    best_score = score
                    best = candidate

            if best is not None and best_score >= threshold:
                best.items.append(item)
                best.keywords = _ordered_union(
                    best.keywords, fp.keywords, self._config.cluster_keywords_max
                )
                merges += 1
                self._metrics.record_merge()
            else:
                clusters.append(
                    Cluster(
                        entity=entity,
                        subdomain=subdomain,
                        keywords=list(fp.keywords[: self._config.fingerprint_keywords_max]),
                        items=[item],
                        members_max=self._config.members_max,
                    )
                )

        return clusters, merges


def cluster_items_pure(
    items: Sequence[SourceItem],
    normalizer: Normalizer | None = None,
    config: ClusteringConfig | None = None,
    run_id: str = "pure",
) -> ClusteringResult:
    """Pure function API for clustering.

    Uses a private metrics instance so repeated calls never share state.

    Args:
        items: Alias-folded source items in arrival order.
        normalizer: Normalizer computing fingerprints.
        config: Thresholds and caps.
        run_id: Run identifier for logging.

    Returns:
        ClusteringResult with clusters ordered by most recent member.
    """
    engine = ClusteringEngine(
        run_id=run_id,
        normalizer=normalizer,
        config=config,
        metrics=ClusteringMetrics(),
    )
    return engine.cluster(items)
