# ============================================================================
# MODELS MODULE
# ============================================================================
# EPOCH: 1 - ACI JOB RUNNER
# STATUS: Model exports
# PURPOSE: Central export point for all Pydantic models
# CREATED: 14 SEP 2026
# ============================================================================
"""
Models Module - Central Export Point

Pydantic models shared by the runner, the provider client and the
HTTP layer.
"""

from core.models.job import (
    ContainerEnvVar,
    ContainerJobSpec,
    JobStatusSnapshot,
    JobResult,
    generate_job_name,
    NO_LOGS_SENTINEL,
    LOG_FETCH_FAILED_PREFIX,
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
