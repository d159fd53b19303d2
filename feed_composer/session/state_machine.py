"""Feed session lifecycle state machine."""

from enum import Enum
from typing import ClassVar

import structlog


logger = structlog.get_logger()


class FeedState(str, Enum):
    """Feed session lifecycle states.

    State transitions:
        INITIAL -> LOADING: First load requested
        LOADING -> SUCCESS: Cards generated from fetched content
        LOADING -> FAILURE: Sources or content could not be fetched
        FAILURE -> LOADING: Load retried

    SUCCESS is final for the session; loading again is a no-op.
    """

    INITIAL = "INITIAL"
    LOADING = "LOADING"
    SUCCESS = "SUCCESS"
    FAILURE = "FAILURE"


class FeedStateError(Exception):
    """Raised when an invalid feed state transition is attempted."""

    def __init__(self, from_state: FeedState, to_state: FeedState) -> None:
        """Initialize the error.

        Args:
            from_state: The current state.
            to_state: The attempted target state.
        """
        self.from_state = from_state
        self.to_state = to_state
        super().__init__(
            f"Invalid feed state transition: {from_state.name} -> {to_state.name}"
        )


class FeedSessionStateMachine:
    """State machine for the feed session lifecycle.

    Enforces valid state transitions. Logs invariant violations when invalid
    transitions are attempted.
    """

    VALID_TRANSITIONS: ClassVar[dict[FeedState, set[FeedState]]] = {
        FeedState.INITIAL: {FeedState.LOADING},
        FeedState.LOADING: {FeedState.SUCCESS, FeedState.FAILURE},
        FeedState.SUCCESS: set(),
        FeedState.FAILURE: {FeedState.LOADING},
    }

    def __init__(self, session_id: str) -> None:
        """Initialize the state machine in INITIAL state.

        Args:
            session_id: Session identifier for logging.
        """
        self._session_id = session_id
        self._state = FeedState.INITIAL
        self._log = logger.bind(session_id=session_id, component="session")

    @property
    def state(self) -> FeedState:
        """Get the current state."""
        return self._state

    @property
    def session_id(self) -> str:
        """Get the session ID."""
        return self._session_id

    def can_transition(self, to_state: FeedState) -> bool:
        """Check if a transition to the given state is valid.

        Args:
            to_state: The target state.

        Returns:
            True if the transition is valid, False otherwise.
        """
        return to_state in self.VALID_TRANSITIONS.get(self._state, set())

    def transition(self, to_state: FeedState) -> None:
        """Transition to a new state.

        Args:
            to_state: The target state.

        Raises:
            FeedStateError: If the transition is invalid.
        """
        if not self.can_transition(to_state):
            self._log.error(
                "invariant_violation",
                error_type="illegal_state_transition",
                from_state=self._state.name,
                to_state=to_state.name,
            )
            raise FeedStateError(self._state, to_state)

        old_state = self._state
        self._state = to_state
        self._log.info(
            "feed_state_transition",
            from_state=old_state.name,
            to_state=to_state.name,
        )

    def to_loading(self) -> None:
        """Transition to LOADING state."""
        self.transition(FeedState.LOADING)

    def to_success(self) -> None:
        """Transition to SUCCESS state."""
        self.transition(FeedState.SUCCESS)

    def to_failure(self) -> None:
        """Transition to FAILURE state."""
        self.transition(FeedState.FAILURE)

    def is_loading(self) -> bool:
        """Check if a load is in flight."""
        return self._state == FeedState.LOADING

    def is_success(self) -> bool:
        """Check if cards have been generated."""
        return self._state == FeedState.SUCCESS
