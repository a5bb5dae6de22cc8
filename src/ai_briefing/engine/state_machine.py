"""State machine for a briefing engine run."""

from enum import Enum

import structlog

from ai_briefing.errors import EngineStateTransitionError


logger = structlog.get_logger()


class EngineState(str, Enum):
    """State of the engine during a run.

    - ITEMS_READY: Input items are normalized and ready
    - CLUSTERED: Items have been grouped into clusters
    - SCORED: Topic candidates are built, scored and validated
    - SELECTED: Briefing and queue are filled
    - FINAL: Overrides reinjected and output re-validated
    - FAILED: The run aborted
    """

    ITEMS_READY = "ITEMS_READY"
    CLUSTERED = "CLUSTERED"
    SCORED = "SCORED"
    SELECTED = "SELECTED"
    FINAL = "FINAL"
    FAILED = "FAILED"


_VALID_TRANSITIONS: dict[EngineState, set[EngineState]] = {
    EngineState.ITEMS_READY: {EngineState.CLUSTERED, EngineState.FAILED},
    EngineState.CLUSTERED: {EngineState.SCORED, EngineState.FAILED},
    EngineState.SCORED: {EngineState.SELECTED, EngineState.FAILED},
    EngineState.SELECTED: {EngineState.FINAL, EngineState.FAILED},
    EngineState.FINAL: set(),
    EngineState.FAILED: set(),
}


class EngineStateMachine:
    """Manages state transitions for one engine run.

    Enforces valid transitions and logs all state changes.
    """

    def __init__(
        self,
        run_id: str,
        initial_state: EngineState = EngineState.ITEMS_READY,
    ) -> None:
        """Initialize the state machine.

        Args:
            run_id: Identifier for the current run.
            initial_state: Starting state.
        """
        self._run_id = run_id
        self._state = initial_state
        self._log = logger.bind(component="engine", run_id=run_id)

    @property
    def run_id(self) -> str:
        """Get the run identifier."""
        return self._run_id

    @property
    def state(self) -> EngineState:
        """Get the current state."""
        return self._state

    @property
    def is_terminal(self) -> bool:
        """Check if current state is terminal."""
        return not _VALID_TRANSITIONS[self._state]

    def can_transition_to(self, target: EngineState) -> bool:
        """Check if a transition to the target state is valid.

        Args:
            target: The target state.

        Returns:
            True if the transition is valid.
        """
        return target in _VALID_TRANSITIONS[self._state]

    def transition_to(self, target: EngineState) -> None:
        """Transition to a new state.

        Args:
            target: The target state.

        Raises:
            EngineStateTransitionError: If the transition is invalid.
        """
        if not self.can_transition_to(target):
            self._log.error(
                "illegal_engine_state_transition",
                from_state=self._state.value,
                to_state=target.value,
            )
            raise EngineStateTransitionError(
                run_id=self._run_id,
                from_state=self._state.value,
                to_state=target.value,
            )

        old_state = self._state
        self._state = target
        self._log.info(
            "engine_state_transition",
            from_state=old_state.value,
            to_state=target.value,
        )

    def to_clustered(self) -> None:
        """Transition to CLUSTERED state."""
        self.transition_to(EngineState.CLUSTERED)

    def to_scored(self) -> None:
        """Transition to SCORED state."""
        self.transition_to(EngineState.SCORED)

    def to_selected(self) -> None:
        """Transition to SELECTED state."""
        self.transition_to(EngineState.SELECTED)

    def to_final(self) -> None:
        """Transition to FINAL state."""
        self.transition_to(EngineState.FINAL)

    def to_failed(self) -> None:
        """Transition to FAILED state."""
        self.transition_to(EngineState.FAILED)
