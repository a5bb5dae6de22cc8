"""Source-type composition of a group of items."""

from collections.abc import Iterable
from dataclasses import dataclass
from typing import Protocol

from ai_briefing.config.schemas.base import SourceType


class TypedSource(Protocol):
    """Anything carrying a publisher and a source type."""

    @property
    def publisher(self) -> str: ...

    @property
    def type(self) -> SourceType: ...


@dataclass(frozen=True)
class SourceMix:
    """Summary of who reported a story.

    Attributes:
        count: Number of sources.
        types: Distinct source types.
        publisher_count: Distinct publishers.
        non_social_count: Sources whose type is not Social.
    """

    count: int
    types: frozenset[SourceType]
    publisher_count: int
    non_social_count: int

    @classmethod
    def from_sources(cls, sources: Iterable[TypedSource]) -> "SourceMix":
        """Build the mix of a group of sources.

        Args:
            sources: Source items or topic sources.

        Returns:
            SourceMix for the group.
        """
        items = list(sources)
        return cls(
            count=len(items),
            types=frozenset(s.type for s in items),
            publisher_count=len({s.publisher for s in items}),
            non_social_count=sum(1 for s in items if s.type != SourceType.SOCIAL),
        )

    @property
    def has_primary(self) -> bool:
        """At least one Primary source."""
        return SourceType.PRIMARY in self.types

    @property
    def is_single(self) -> bool:
        """Exactly one source."""
        return self.count == 1

    def is_only(self, source_type: SourceType) -> bool:
        """Whether every source has the given type."""
        return self.types == frozenset({source_type})

    @property
    def is_social_only(self) -> bool:
        """Every source is Social."""
        return self.is_only(SourceType.SOCIAL)

    @property
    def is_influencer_only(self) -> bool:
        """Every source is an Influencer."""
        return self.is_only(SourceType.INFLUENCER)
