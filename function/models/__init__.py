# ============================================================================
# FUNCTION APP MODELS
# ============================================================================
# EPOCH: 1 - ACI JOB RUNNER
# STATUS: Function App - Pydantic models for API
# PURPOSE: Request and response models for function app endpoints
# CREATED: 15 SEP 2026
# ============================================================================
"""
Function App Models

Pydantic V2 models for API requests and responses.
"""

from function.models.requests import RunContainerRequest
from function.models.responses import (
    RunCompletedResponse,
    RunFailedResponse,
    HealthResponse,
)

__all__ = [
    # Requests
    "RunContainerRequest",
    # Responses
    "RunCompletedResponse",
    "RunFailedResponse",
    "HealthResponse",
]
