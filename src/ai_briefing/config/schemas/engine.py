"""Engine limits and thresholds configuration."""

from typing import Annotated

from pydantic import Field

from ai_briefing.data_model import StrictBaseModel


class ClusteringConfig(StrictBaseModel):
    """Clustering thresholds and caps.

    Attributes:
        known_entity_threshold: Minimum Jaccard similarity to merge when the
            bucket entity is known.
        unknown_entity_threshold: Minimum Jaccard similarity to merge when the
            bucket entity is ``Other``.
        fingerprint_keywords_max: Clustering tokens kept per item.
        cluster_keywords_max: Keywords kept per cluster after merges.
        members_max: Most recent members kept per topic.
    """

    known_entity_threshold: Annotated[float, Field(ge=0.0, le=1.0)] = 0.10
    unknown_entity_threshold: Annotated[float, Field(ge=0.0, le=1.0)] = 0.25
    fingerprint_keywords_max: Annotated[int, Field(ge=1, le=50)] = 8
    cluster_keywords_max: Annotated[int, Field(ge=1, le=100)] = 12
    members_max: Annotated[int, Field(ge=1, le=5)] = 5


class SelectionConfig(StrictBaseModel):
    """Briefing and queue quotas.

    Attributes:
        briefing_max: Maximum topics in the briefing.
        per_subdomain_max: Maximum briefing topics per subdomain.
        queue_max: Maximum topics in the queue.
        override_inject_max: Maximum override topics reinjected into the queue.
    """

    briefing_max: Annotated[int, Field(ge=0, le=5)] = 5
    per_subdomain_max: Annotated[int, Field(ge=1)] = 2
    queue_max: Annotated[int, Field(ge=0, le=20)] = 20
    override_inject_max: Annotated[int, Field(ge=0)] = 5


class EngineConfig(StrictBaseModel):
    """Root engine configuration.

    Attributes:
        clustering: Clustering thresholds and caps.
        selection: Briefing and queue quotas.
    """

    clustering: ClusteringConfig = Field(default_factory=ClusteringConfig)
    selection: SelectionConfig = Field(default_factory=SelectionConfig)
