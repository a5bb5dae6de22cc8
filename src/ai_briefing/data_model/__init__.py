"""Shared data model primitives."""

from ai_briefing.data_model.base import StrictBaseModel


__all__ = ["StrictBaseModel"]
