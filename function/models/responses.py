# ============================================================================
# API RESPONSE MODELS
# ============================================================================
# EPOCH: 1 - ACI JOB RUNNER
# STATUS: Function App - Response schemas
# PURPOSE: Pydantic V2 models for API responses
# CREATED: 15 SEP 2026
# ============================================================================
"""
API Response Models

Pydantic V2 models for API responses.
Dump with by_alias=True so exit_code serialises as exitCode.
"""

from datetime import datetime, timezone
from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict, Field


class RunCompletedResponse(BaseModel):
    """Response for a run that reached a terminal state."""

    model_config = ConfigDict(
        populate_by_name=True,
        json_schema_extra={
            "example": {
                "success": True,
                "state": "Succeeded",
                "exitCode": 0,
                "logs": "hello from the job container",
            }
        },
    )

    success: bool = Field(..., description="Terminal state reached with exit code 0")
    state: str = Field(..., description="Terminal container state")
    exit_code: Optional[int] = Field(
        default=None,
        alias="exitCode",
        description="Container exit code (null if the provider did not report one)",
    )
    logs: str = Field(..., description="Tail of the container log, or a sentinel")


class RunFailedResponse(BaseModel):
    """Response for configuration, submission or polling failures."""

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "success": False,
                "message": "Missing env vars: RESOURCE_GROUP, CONTAINER_IMAGE",
            }
        }
    )

    success: bool = Field(default=False)
    message: str = Field(..., description="What went wrong")


class HealthResponse(BaseModel):
    """Health check response."""

    model_config = ConfigDict()

    status: str = Field(default="healthy", description="Overall health status")
    service: str = Field(default="aci-job-runner", description="Service name")
    timestamp: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc),
        description="Check timestamp",
    )
    version: str = Field(default="1.0.0", description="Service version")
    checks: Dict[str, bool] = Field(
        default_factory=dict,
        description="Individual health check results",
    )
    settings: Dict[str, Any] = Field(
        default_factory=dict,
        description="Non-secret runtime settings",
    )


__all__ = [
    "RunCompletedResponse",
    "RunFailedResponse",
    "HealthResponse",
]
