"""Deterministic ranking and briefing selection."""

from ai_briefing.selection.models import ExcludedReasons, SelectionResult
from ai_briefing.selection.selector import (
    TopicSelector,
    rank_candidates,
    rank_key,
    select_topics_pure,
)


__all__ = [
    "ExcludedReasons",
    "SelectionResult",
    "TopicSelector",
    "rank_candidates",
    "rank_key",
    "select_topics_pure",
]
