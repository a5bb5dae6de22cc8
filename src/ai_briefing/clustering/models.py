"""Data models for story clustering."""

from dataclasses import dataclass, field
from datetime import datetime

from ai_briefing.config.schemas.base import Subdomain
from ai_briefing.sources.models import SourceItem


@dataclass
class Cluster:
    """A group of source items judged to describe the same story.

    Attributes:
        entity: Primary entity shared by every member.
        subdomain: Subdomain shared by every member.
        keywords: Accumulated clustering keywords (insertion-ordered union).
        items: Every assigned item, in arrival order.
        members_max: Most recent members kept by ``members``.
    """

    entity: str
    subdomain: Subdomain
    keywords: list[str] = field(default_factory=list)
    items: list[SourceItem] = field(default_factory=list)
    members_max: int = 5

    @property
    def members(self) -> list[SourceItem]:
        """Items sorted by published_at descending, truncated."""
        ordered = sorted(self.items, key=lambda i: i.published_at, reverse=True)
        return ordered[: self.members_max]

    @property
    def latest_published_at(self) -> datetime:
        """Publish time of the most recent member."""
        return max(i.published_at for i in self.items)

    @property
    def size(self) -> int:
        """Number of assigned items, before truncation."""
        return len(self.items)


@dataclass
class ClusteringResult:
    """Output of a clustering pass.

    Attributes:
        clusters: Clusters sorted by most recent member, descending.
        items_in: Number of input items.
        merges_total: Number of items that joined an existing cluster.
    """

    clusters: list[Cluster] = field(default_factory=list)
    items_in: int = 0
    merges_total: int = 0

    @property
    def clusters_out(self) -> int:
        """Number of clusters produced."""
        return len(self.clusters)
