"""Data models for briefing selection."""

from dataclasses import dataclass, field, fields

from ai_briefing.topics.models import TopicCandidate


@dataclass
class ExcludedReasons:
    """Named counters explaining why candidates were not selected.

    Attributes:
        credibility: Trust-gate failures with credibility below 3.
        relevance: Trust-gate failures with relevance below 2.
        source_count: Single non-Primary candidates kept out of the briefing.
        outside_window: Clusters first reported before the window start.
        diversity: Briefing-eligible topics skipped by the subdomain cap.
        social_only: Candidates reported only by Social sources.
    """

    credibility: int = 0
    relevance: int = 0
    source_count: int = 0
    outside_window: int = 0
    diversity: int = 0
    social_only: int = 0

    def to_dict(self) -> dict[str, int]:
        """Convert counters to a dictionary in declaration order."""
        return {f.name: getattr(self, f.name) for f in fields(self)}

    @property
    def total(self) -> int:
        """Sum of all counters."""
        return sum(self.to_dict().values())


@dataclass
class SelectionResult:
    """Result of ranking and selection.

    Attributes:
        briefing: Briefing topics in rank order.
        queue: Queued topics in rank order, then reinjected overrides.
        eligible: Briefing-eligible topics in rank order (before the cap).
        override_candidates: Override topics that failed trust gates.
        injected: Override topics reinjected into the queue.
        excluded: Exclusion counters.
    """

    briefing: list[TopicCandidate] = field(default_factory=list)
    queue: list[TopicCandidate] = field(default_factory=list)
    eligible: list[TopicCandidate] = field(default_factory=list)
    override_candidates: list[TopicCandidate] = field(default_factory=list)
    injected: list[TopicCandidate] = field(default_factory=list)
    excluded: ExcludedReasons = field(default_factory=ExcludedReasons)

    @property
    def eligible_count(self) -> int:
        """Number of briefing-eligible topics."""
        return len(self.eligible)
