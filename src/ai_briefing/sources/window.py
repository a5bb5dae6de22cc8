"""Morning run window computation."""

from dataclasses import dataclass
from datetime import UTC, datetime, timedelta


DEFAULT_LOOKBACK_HOURS = 72
DEFAULT_ANCHOR_HOUR_UTC = 9


@dataclass(frozen=True)
class RunWindow:
    """Time window covered by one briefing run.

    Attributes:
        window_start: Inclusive lower bound on cluster first-credible time.
        window_end: Upper bound (the morning anchor, or ``now`` if earlier).
    """

    window_start: datetime
    window_end: datetime

    @property
    def briefing_date(self) -> str:
        """Date label (YYYY-MM-DD) of the window end."""
        return self.window_end.strftime("%Y-%m-%d")


def compute_run_window(
    now: datetime,
    lookback_hours: int = DEFAULT_LOOKBACK_HOURS,
    anchor_hour: int = DEFAULT_ANCHOR_HOUR_UTC,
) -> RunWindow:
    """Anchor the window end to today's morning hour in UTC.

    A run started before the anchor hour ends its window at ``now``.

    Args:
        now: Current time (naive values are read as UTC).
        lookback_hours: Window length in hours.
        anchor_hour: Hour of day (UTC) the morning briefing closes at.

    Returns:
        RunWindow covering ``lookback_hours`` before the effective end.
    """
    now = now.replace(tzinfo=UTC) if now.tzinfo is None else now.astimezone(UTC)
    anchor = now.replace(hour=anchor_hour, minute=0, second=0, microsecond=0)
    window_end = min(now, anchor)
    return RunWindow(
        window_start=window_end - timedelta(hours=lookback_hours),
        window_end=window_end,
    )
