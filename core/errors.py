# ============================================================================
# JOB RUNNER EXCEPTIONS
# ============================================================================
# EPOCH: 1 - ACI JOB RUNNER
# STATUS: Core - Error taxonomy
# PURPOSE: Exceptions raised across configuration, provider and storage layers
# CREATED: 14 SEP 2026
# ============================================================================
"""
Job Runner Exceptions

Only ConfigurationError, SubmissionError and PollingTimeout decide the
outcome of a run. TransientQueryError and CleanupError are caught inside
the runner and logged. BlobUploadError belongs to the container uploader.
"""

from typing import List, Optional


class JobRunnerError(Exception):
    """Base exception for job runner errors."""

    def __init__(self, message: str, job_name: Optional[str] = None):
        self.job_name = job_name
        super().__init__(message)


class ConfigurationError(JobRunnerError):
    """Raised when required settings are absent. No remote calls are made."""

    def __init__(self, missing: List[str]):
        self.missing = list(missing)
        super().__init__(f"Missing env vars: {', '.join(self.missing)}")


class InvalidSettingError(JobRunnerError):
    """Raised when a setting is present but outside its allowed range. No remote calls are made."""

    def __init__(self, invalid: List[str]):
        self.invalid = list(invalid)
        super().__init__(f"Invalid env vars: {', '.join(self.invalid)}")


class SubmissionError(JobRunnerError):
    """Raised when the container group create request fails."""
    pass


class PollingTimeout(JobRunnerError):
    """Raised when no terminal state is observed within the attempt budget."""

    def __init__(self, job_name: str, attempts: int):
        self.attempts = attempts
        super().__init__("Container did not reach terminal state in time", job_name=job_name)


class TransientQueryError(JobRunnerError):
    """Raised when a single status or log query fails."""
    pass


class CleanupError(JobRunnerError):
    """Raised when deleting a container group fails or times out."""
    pass


class BlobUploadError(Exception):
    """Raised by the blob uploader for missing credentials or storage failures."""
    pass


__all__ = [
    "JobRunnerError",
    "ConfigurationError",
    "InvalidSettingError",
    "SubmissionError",
    "PollingTimeout",
    "TransientQueryError",
    "CleanupError",
    "BlobUploadError",
]
