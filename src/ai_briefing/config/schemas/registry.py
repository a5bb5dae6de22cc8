"""Publisher registry schema."""

from typing import Annotated

from pydantic import BaseModel, ConfigDict, Field, model_validator

from ai_briefing.config.schemas.base import SourceType


class PublisherEntry(BaseModel):
    """One publisher in the source registry.

    Fetch bookkeeping written by the ingestion stage (status, last_error,
    rss_url, ...) is ignored.

    Attributes:
        name: Publisher name, matched against ``SourceItem.publisher``.
        source_type: Editorial type of the publisher.
        enabled: Whether the publisher is fetched.
        always_show: Reinject this publisher's topics into the queue even
            when they fail trust gates.
    """

    model_config = ConfigDict(frozen=True, extra="ignore")

    name: Annotated[str, Field(min_length=1, max_length=200)]
    source_type: SourceType | None = None
    enabled: bool = True
    always_show: bool = False


class PublisherRegistry(BaseModel):
    """Root configuration for the publisher registry.

    Attributes:
        publishers: Registered publishers.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    publishers: list[PublisherEntry] = Field(default_factory=list)

    @model_validator(mode="before")
    @classmethod
    def accept_bare_list(cls, data: object) -> object:
        """Accept a top-level list of publishers as written by ingestion."""
        if isinstance(data, list):
            return {"publishers": data}
        return data

    @model_validator(mode="after")
    def validate_unique_names(self) -> "PublisherRegistry":
        """Ensure publisher names are unique."""
        names = [p.name for p in self.publishers]
        duplicates = {n for n in names if names.count(n) > 1}
        if duplicates:
            msg = f"Duplicate publisher names found: {duplicates}"
            raise ValueError(msg)
        return self

    def always_show_map(self) -> dict[str, bool]:
        """Map publisher name to its always_show flag.

        Returns:
            Dictionary of publisher name -> always_show.
        """
        return {p.name: p.always_show for p in self.publishers}
