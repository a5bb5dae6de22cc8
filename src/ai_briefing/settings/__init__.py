"""Application settings."""

from ai_briefing.settings.app import AppSettings, get_settings


__all__ = ["AppSettings", "get_settings"]
