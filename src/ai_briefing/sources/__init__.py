"""Source items and helpers applied before the engine runs."""

from ai_briefing.sources.mix import SourceMix
from ai_briefing.sources.models import SourceItem
from ai_briefing.sources.url import canonicalize_url, dedupe_sources
from ai_briefing.sources.window import RunWindow, compute_run_window


__all__ = [
    "RunWindow",
    "SourceItem",
    "SourceMix",
    "canonicalize_url",
    "compute_run_window",
    "dedupe_sources",
]
