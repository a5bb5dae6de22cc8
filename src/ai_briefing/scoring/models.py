"""Data models for topic scoring."""

from dataclasses import dataclass
from typing import Annotated

from pydantic import Field

from ai_briefing.data_model import StrictBaseModel


@dataclass(frozen=True)
class Subscores:
    """Rubric subscores derived from subdomain and text.

    Attributes:
        relevance: 0-5.
        impact: 0-5.
        novelty: 0-3.
        time_sensitivity: 0-4.
    """

    relevance: int
    impact: int
    novelty: int
    time_sensitivity: int


class ScoreRecord(StrictBaseModel):
    """Score attached to a topic.

    Attributes:
        relevance: Relevance to the briefing audience (0-5).
        impact: Expected enterprise impact (0-5).
        novelty: Novelty (0-3).
        credibility: Credibility C (0-5).
        time_sensitivity: Urgency (0-4).
        total: Clamped sum of the five subscores (0-22).
    """

    relevance: Annotated[int, Field(ge=0, le=5)]
    impact: Annotated[int, Field(ge=0, le=5)]
    novelty: Annotated[int, Field(ge=0, le=3)]
    credibility: Annotated[int, Field(ge=0, le=5)]
    time_sensitivity: Annotated[int, Field(ge=0, le=4)]
    total: Annotated[int, Field(ge=0, le=22)]
