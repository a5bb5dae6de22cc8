"""Configuration: rule tables, publisher registry and engine limits."""

from ai_briefing.config.defaults import default_rules
from ai_briefing.config.loader import ConfigLoader, ConfigValidationError, LoadedConfig
from ai_briefing.config.state_machine import (
    ConfigState,
    ConfigStateError,
    ConfigStateMachine,
)


__all__ = [
    "ConfigLoader",
    "ConfigState",
    "ConfigStateError",
    "ConfigStateMachine",
    "ConfigValidationError",
    "LoadedConfig",
    "default_rules",
]
