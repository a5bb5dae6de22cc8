"""Run orchestration for the briefing engine."""

from ai_briefing.engine.engine import BriefingEngine, run_briefing_pure
from ai_briefing.engine.metrics import EngineMetrics
from ai_briefing.engine.models import RunInput, RunResult, format_run_id
from ai_briefing.engine.state_machine import EngineState, EngineStateMachine


__all__ = [
    "BriefingEngine",
    "EngineMetrics",
    "EngineState",
    "EngineStateMachine",
    "RunInput",
    "RunResult",
    "format_run_id",
    "run_briefing_pure",
]
