"""Input and output models of a briefing run."""

from datetime import UTC, datetime
from typing import Annotated, Any

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from ai_briefing.sources.models import SourceItem
from ai_briefing.topics.models import TopicCandidate


CADENCE_MORNING = "morning"
TOPIC_CAP = 5


def _as_utc(v: datetime) -> datetime:
    if v.tzinfo is None:
        return v.replace(tzinfo=UTC)
    return v.astimezone(UTC)


class RunInput(BaseModel):
    """Everything the engine needs for one run.

    Attributes:
        sources: Source items in arrival order.
        always_show: Publisher name -> override flag.
        window_start: Clusters first reported earlier are excluded.
        window_end: End of the run window.
        briefing_date: Date label (YYYY-MM-DD) for ids and timelines.
        now: Reference time for freshness; defaults to ``window_end``.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    sources: list[SourceItem] = Field(default_factory=list)
    always_show: dict[str, bool] = Field(default_factory=dict)
    window_start: datetime
    window_end: datetime
    briefing_date: Annotated[str, Field(pattern=r"^\d{4}-\d{2}-\d{2}$")]
    now: datetime | None = None

    @field_validator("window_start", "window_end", "now")
    @classmethod
    def ensure_utc(cls, v: datetime | None) -> datetime | None:
        """Read naive timestamps as UTC."""
        return None if v is None else _as_utc(v)

    @model_validator(mode="after")
    def validate_window(self) -> "RunInput":
        """Ensure the window is not inverted."""
        if self.window_start > self.window_end:
            msg = "window_start must not be after window_end"
            raise ValueError(msg)
        return self

    @property
    def reference_time(self) -> datetime:
        """Time freshness is measured against."""
        return self.now if self.now is not None else self.window_end


class RunWindowOut(BaseModel):
    """Window bounds as emitted in the run output."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    window_start: datetime
    window_end: datetime


class ExcludedReasonsOut(BaseModel):
    """Exclusion counters as emitted in the run output."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    credibility: int = 0
    relevance: int = 0
    source_count: int = 0
    outside_window: int = 0
    diversity: int = 0
    social_only: int = 0


class RunResult(BaseModel):
    """Output of one briefing run.

    Attributes:
        run_id: ``ai-<date>-morning``.
        domain: Always ``AI``.
        briefing_date: Date label.
        cadence: Always ``morning``.
        topic_cap: Briefing size cap.
        started_at: Run reference time.
        completed_at: Run reference time.
        window: Window bounds.
        candidate_count: Topic candidates built inside the window.
        eligible_count: Briefing-eligible candidates.
        briefing_count: Topics in the briefing.
        queue_count: Topics in the queue.
        excluded_reasons: Exclusion counters.
        briefing_topics: Briefing topics, best first.
        queued_topics: Queued topics, best first.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    run_id: str
    domain: str = "AI"
    briefing_date: str
    cadence: str = CADENCE_MORNING
    topic_cap: int = TOPIC_CAP
    started_at: datetime
    completed_at: datetime
    window: RunWindowOut
    candidate_count: int
    eligible_count: int
    briefing_count: int
    queue_count: int
    excluded_reasons: ExcludedReasonsOut
    briefing_topics: list[TopicCandidate] = Field(default_factory=list)
    queued_topics: list[TopicCandidate] = Field(default_factory=list)

    def to_json_dict(self) -> dict[str, Any]:
        """Serialize to JSON-compatible primitives."""
        return self.model_dump(mode="json")


def format_run_id(briefing_date: str) -> str:
    """Format the run identifier for a briefing date."""
    return f"ai-{briefing_date}-{CADENCE_MORNING}"
