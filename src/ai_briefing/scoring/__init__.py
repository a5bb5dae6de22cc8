"""Credibility and rubric scoring."""

from ai_briefing.scoring.models import ScoreRecord, Subscores
from ai_briefing.scoring.scorer import (
    build_score_record,
    clamp_int,
    clamp_score,
    compute_credibility,
    compute_subscores,
)


__all__ = [
    "ScoreRecord",
    "Subscores",
    "build_score_record",
    "clamp_int",
    "clamp_score",
    "compute_credibility",
    "compute_subscores",
]
