"""Data models for text normalization."""

from dataclasses import dataclass

from ai_briefing.config.schemas.base import Subdomain


@dataclass(frozen=True)
class Fingerprint:
    """Clustering signature of one source item.

    Attributes:
        entity: Primary entity name, or ``Other``.
        subdomain: Classified subdomain.
        keywords: Ordered clustering tokens (not deduplicated).
    """

    entity: str
    subdomain: Subdomain
    keywords: tuple[str, ...]

    @property
    def bucket_key(self) -> tuple[str, Subdomain]:
        """Key of the clustering bucket this item falls into."""
        return (self.entity, self.subdomain)
