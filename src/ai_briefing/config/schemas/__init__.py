"""Configuration schema definitions."""

from ai_briefing.config.schemas.base import Confidence, SourceType, Subdomain
from ai_briefing.config.schemas.engine import (
    ClusteringConfig,
    EngineConfig,
    SelectionConfig,
)
from ai_briefing.config.schemas.registry import PublisherEntry, PublisherRegistry
from ai_briefing.config.schemas.rules import (
    AliasRule,
    EntityRule,
    RulesConfig,
    SubdomainRule,
    TitleRule,
)


__all__ = [
    "AliasRule",
    "ClusteringConfig",
    "Confidence",
    "EngineConfig",
    "EntityRule",
    "PublisherEntry",
    "PublisherRegistry",
    "RulesConfig",
    "SelectionConfig",
    "SourceType",
    "Subdomain",
    "SubdomainRule",
    "TitleRule",
]
