# ============================================================================
# JOB MODEL
# ============================================================================
# EPOCH: 1 - ACI JOB RUNNER
# STATUS: Core model - One container run
# PURPOSE: Job spec submitted to the provider, status snapshots, run result
# CREATED: 14 SEP 2026
# ============================================================================
"""
Job Model

A Job is one short-lived container group created for a single HTTP
invocation. It is created at request time, polled to a terminal state,
and deleted before the request completes.

Models:
- ContainerJobSpec: everything the provider needs to create the group
- JobStatusSnapshot: one poll observation (state + optional exit code)
- JobResult: outcome of a full run
"""

import time
import uuid
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field

from core.contracts import ContainerState, is_terminal_state
from core.errors import PollingTimeout

NO_LOGS_SENTINEL = "[NO LOGS]"
LOG_FETCH_FAILED_PREFIX = "[LOG FETCH FAILED]"


def generate_job_name(prefix: str = "job") -> str:
    """
    Generate a unique container group name.

    Format: {prefix}-{epoch_ms}-{8 hex chars}
    Lowercase alphanumerics and dashes only (valid ACI resource name).
    """
    return f"{prefix}-{int(time.time() * 1000)}-{uuid.uuid4().hex[:8]}"


class ContainerEnvVar(BaseModel):
    """Environment variable injected into the job container."""

    name: str
    value: Optional[str] = None
    secure_value: Optional[str] = Field(default=None, repr=False)

    @property
    def is_secure(self) -> bool:
        return self.secure_value is not None


class ContainerJobSpec(BaseModel):
    """Container group definition for one run."""

    model_config = ConfigDict(frozen=True)

    job_name: str = Field(..., description="Container group name (unique per run)")
    container_name: str = Field(default="job-container")
    image: str = Field(..., description="Fully qualified image reference")
    location: str = Field(default="eastus")
    cpu: float = Field(default=0.25, gt=0)
    memory_gb: float = Field(default=0.5, gt=0)
    os_type: str = Field(default="Linux")
    restart_policy: str = Field(default="Never")
    registry_server: str = Field(..., description="Container registry login server")
    identity_id: str = Field(..., description="User-assigned identity resource ID")
    environment: List[ContainerEnvVar] = Field(default_factory=list)


class JobStatusSnapshot(BaseModel):
    """One status observation of a running job."""

    state: str = Field(default=ContainerState.UNKNOWN.value)
    exit_code: Optional[int] = None

    @property
    def is_terminal(self) -> bool:
        return is_terminal_state(self.state)

    def describe(self) -> str:
        if self.exit_code is None:
            return f"State: {self.state}"
        return f"State: {self.state} | Exit: {self.exit_code}"


class JobResult(BaseModel):
    """
    Outcome of a run.

    Two shapes:
    - Completed: the job reached a terminal state. state/exit_code/logs set.
    - Errored: configuration, submission or polling failed. message and
      error_type set; state is "Unknown" after a polling timeout.

    success is True only for a terminal state with exit code 0.
    """

    job_name: str
    success: bool = False
    state: Optional[str] = None
    exit_code: Optional[int] = None
    logs: Optional[str] = None
    message: Optional[str] = None
    error_type: Optional[str] = None
    cleanup_attempted: bool = False
    cleanup_succeeded: Optional[bool] = None
    duration_seconds: Optional[float] = None

    @property
    def completed(self) -> bool:
        """True when a terminal state was observed."""
        return self.error_type is None and is_terminal_state(self.state)

    @classmethod
    def from_terminal(
        cls,
        job_name: str,
        status: JobStatusSnapshot,
        logs: str,
    ) -> "JobResult":
        """Build a result for a job that reached a terminal state."""
        return cls(
            job_name=job_name,
            success=status.is_terminal and status.exit_code == 0,
            state=status.state,
            exit_code=status.exit_code,
            logs=logs,
        )

    @classmethod
    def from_error(cls, job_name: str, error: Exception) -> "JobResult":
        """Build a failed result from a fatal run error."""
        state = ContainerState.UNKNOWN.value if isinstance(error, PollingTimeout) else None
        return cls(
            job_name=job_name,
            success=False,
            state=state,
            message=str(error),
            error_type=type(error).__name__,
        )


__all__ = [
    "ContainerEnvVar",
    "ContainerJobSpec",
    "JobStatusSnapshot",
    "JobResult",
    "generate_job_name",
    "NO_LOGS_SENTINEL",
    "LOG_FETCH_FAILED_PREFIX",
]
