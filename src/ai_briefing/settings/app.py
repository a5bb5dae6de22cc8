"""Application settings powered by Pydantic BaseSettings."""

from typing import Annotated

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class AppSettings(BaseSettings):
    """Run-scoped defaults read from the environment.

    Every value can be overridden with a ``BRIEFING_``-prefixed variable,
    e.g. ``BRIEFING_LOOKBACK_HOURS=48``.
    """

    model_config = SettingsConfigDict(
        env_prefix="BRIEFING_",
        case_sensitive=False,
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    lookback_hours: Annotated[int, Field(ge=1, le=24 * 14)] = 72
    anchor_hour_utc: Annotated[int, Field(ge=0, le=23)] = 9
    json_logs: bool = True
    verbose: bool = False


def get_settings() -> AppSettings:
    """Get a settings instance."""
    return AppSettings()
