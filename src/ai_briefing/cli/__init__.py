"""Command-line interface."""

from ai_briefing.cli.briefing import cli


__all__ = ["cli"]
