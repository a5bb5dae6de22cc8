"""Source item model handed to the briefing engine."""

from datetime import UTC, datetime
from typing import Annotated, Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

from ai_briefing.config.schemas.base import SourceType


class SourceItem(BaseModel):
    """One already-fetched feed entry.

    Upstream bookkeeping fields (e.g. a stored ``is_primary`` flag) are
    ignored; the primary flag is always derived from ``type``.
    """

    model_config = ConfigDict(frozen=True, extra="ignore")

    source_id: Annotated[str, Field(min_length=1, description="Source identifier")]
    publisher: Annotated[str, Field(min_length=1, description="Publisher name")]
    title: Annotated[str, Field(description="Item title")]
    url: Annotated[str, Field(description="Item URL")]
    summary: str = Field(default="", description="Short summary or description")
    type: SourceType = Field(description="Editorial type of the publisher")
    published_at: datetime = Field(description="Publication timestamp")
    retrieved_at: datetime = Field(description="When the item was fetched")

    @field_validator("summary", mode="before")
    @classmethod
    def coerce_summary(cls, v: Any) -> str:
        """Treat a missing summary as empty text."""
        return "" if v is None else v

    @field_validator("published_at", "retrieved_at")
    @classmethod
    def ensure_utc(cls, v: datetime) -> datetime:
        """Read naive timestamps as UTC."""
        if v.tzinfo is None:
            return v.replace(tzinfo=UTC)
        return v.astimezone(UTC)

    @property
    def is_primary(self) -> bool:
        """Whether the item comes from a Primary source."""
        return self.type == SourceType.PRIMARY
