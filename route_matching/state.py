"""
Route Matching State Module.

Defines the MatchingState enum and the state machine that records how a
request moved through the fallback cascade.
"""

from enum import Enum
from typing import Any

from date_utils import get_current_utc_time


class MatchingState(Enum):
    """Enumeration of cascade states, in the order they may be visited."""

    PENDING = "pending"
    MAP_MATCHING = "map_matching"
    DIRECTIONS_FALLBACK = "directions_fallback"
    SIMPLE_FALLBACK = "simple_fallback"
    DONE = "done"


_ORDER = list(MatchingState)


class MatchingStateMachine:
    """
    Tracks the cascade for a single matching request.

    States only move forward; a strategy list may skip states but never
    revisit an earlier one. DONE is terminal and records an error when no
    strategy produced geometry.
    """

    def __init__(self) -> None:
        """Initialize the state machine in PENDING state."""
        self.state = MatchingState.PENDING
        self.state_history: list[dict[str, Any]] = []
        self.error: str | None = None

    def can_proceed_to(self, target_state: MatchingState) -> bool:
        """Check if transitioning to the target state keeps the order."""
        if self.state == MatchingState.DONE:
            return False
        return _ORDER.index(target_state) >= _ORDER.index(self.state)

    def set_state(
        self,
        new_state: MatchingState,
        error: str | None = None,
    ) -> None:
        """
        Update the state and record it in history.

        Args:
            new_state: The new state to set
            error: Optional failure reason when entering DONE without a result

        Raises:
            ValueError: If the transition would move backwards or leave DONE
        """
        if not self.can_proceed_to(new_state):
            msg = f"Invalid transition {self.state.value} -> {new_state.value}"
            raise ValueError(msg)

        state_change: dict[str, Any] = {
            "from": self.state.value,
            "to": new_state.value,
            "timestamp": get_current_utc_time(),
        }
        if error and new_state == MatchingState.DONE:
            state_change["error"] = error
            self.error = error

        self.state = new_state
        self.state_history.append(state_change)

    def is_done(self) -> bool:
        return self.state == MatchingState.DONE

    def get_status(self) -> dict[str, Any]:
        return {
            "state": self.state.value,
            "history": self.state_history,
            "error": self.error,
        }
