"""Exception types raised by the briefing engine.

Every engine failure aborts the run; there is no partial-output mode.
"""


class BriefingEngineError(Exception):
    """Base exception for all briefing engine errors."""

    def __init__(self, message: str, run_id: str | None = None) -> None:
        """Initialize the error.

        Args:
            message: Error message.
            run_id: Optional run ID for context.
        """
        self.run_id = run_id
        super().__init__(message)


class TopicValidationError(BriefingEngineError):
    """A synthesized topic violates the output shape.

    Raised for the first violated constraint of a topic.
    """

    def __init__(
        self,
        topic_id: str,
        constraint: str,
        run_id: str | None = None,
    ) -> None:
        """Initialize the validation error.

        Args:
            topic_id: Identifier of the offending topic.
            constraint: Description of the violated constraint.
            run_id: Optional run ID for context.
        """
        self.topic_id = topic_id
        self.constraint = constraint
        super().__init__(
            f"Topic validation failed ({topic_id}): {constraint}",
            run_id,
        )


class EngineStateTransitionError(BriefingEngineError):
    """Invalid state transition in the engine state machine."""

    def __init__(self, run_id: str, from_state: str, to_state: str) -> None:
        """Initialize the transition error.

        Args:
            run_id: Identifier of the run.
            from_state: Current state.
            to_state: Attempted target state.
        """
        self.from_state = from_state
        self.to_state = to_state
        super().__init__(
            f"Illegal engine state transition for run '{run_id}': "
            f"{from_state} -> {to_state}",
            run_id,
        )
