# ============================================================================
# CORE MODULE
# ============================================================================
# EPOCH: 1 - ACI JOB RUNNER
# STATUS: Core module initialization
# PURPOSE: Export core contracts, models, and errors
# CREATED: 14 SEP 2026
# ============================================================================

from core.contracts import ContainerState, TERMINAL_STATES
from core.errors import (
    JobRunnerError,
    ConfigurationError,
    InvalidSettingError,
    SubmissionError,
    PollingTimeout,
    TransientQueryError,
    CleanupError,
    BlobUploadError,
)
from core.models import (
    ContainerEnvVar,
    ContainerJobSpec,
    JobStatusSnapshot,
    JobResult,
    generate_job_name,
)

__all__ = [
    # Enums
    "ContainerState",
    "TERMINAL_STATES",
    # Errors
    "JobRunnerError",
    "ConfigurationError",
    "InvalidSettingError",
    "SubmissionError",
    "PollingTimeout",
    "TransientQueryError",
    "CleanupError",
    "BlobUploadError",
    # Models
    "ContainerEnvVar",
    "ContainerJobSpec",
    "JobStatusSnapshot",
    "JobResult",
    "generate_job_name",
]
