# ============================================================================
# BASE CONTRACTS & ENUMS
# ============================================================================
# EPOCH: 1 - ACI JOB RUNNER
# STATUS: Foundation - Container state enum
# PURPOSE: Provider-reported container states and terminal classification
# CREATED: 14 SEP 2026
# ============================================================================
"""
Base contracts for the container job runner.

Container states are reported by Azure Container Instances as free-form
strings on the container instance view. Only the values listed here are
interpreted; anything else is treated as a non-terminal state and polling
continues.
"""

from enum import Enum
from typing import FrozenSet, Optional


class ContainerState(str, Enum):
    """
    Container lifecycle states as reported by the compute provider.

    State transitions:
        WAITING -> RUNNING -> SUCCEEDED
                           -> FAILED
                           -> TERMINATED
        (UNKNOWN may appear at any point when the state cannot be read)
    """
    WAITING = "Waiting"
    PENDING = "Pending"
    RUNNING = "Running"
    SUCCEEDED = "Succeeded"
    FAILED = "Failed"
    TERMINATED = "Terminated"
    UNKNOWN = "Unknown"

    def is_terminal(self) -> bool:
        """Check if this is a terminal state (no further transitions)."""
        return self in TERMINAL_STATES


TERMINAL_STATES: FrozenSet[ContainerState] = frozenset({
    ContainerState.SUCCEEDED,
    ContainerState.FAILED,
    ContainerState.TERMINATED,
})


def is_terminal_state(state: Optional[str]) -> bool:
    """Check a raw provider state string against the terminal set."""
    return state in {s.value for s in TERMINAL_STATES}


__all__ = ["ContainerState", "TERMINAL_STATES", "is_terminal_state"]
