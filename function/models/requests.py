# ============================================================================
# API REQUEST MODELS
# ============================================================================
# EPOCH: 1 - ACI JOB RUNNER
# STATUS: Function App - Request schemas
# PURPOSE: Pydantic V2 models for incoming API requests
# CREATED: 15 SEP 2026
# ============================================================================
"""
API Request Models

Pydantic V2 models for incoming API requests.
All models use V2 patterns: ConfigDict, model_validate, model_dump.
"""

import json
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class RunContainerRequest(BaseModel):
    """
    Request to run the configured container image once.

    Both fields are optional free-form values. They are logged with the
    run and do not change what is executed.
    """

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "name": "nightly-export",
                "text": "triggered by scheduler",
            }
        }
    )

    name: Optional[str] = Field(
        default=None,
        max_length=256,
        description="Optional caller-supplied label (query param or JSON body)",
    )
    text: Optional[str] = Field(
        default=None,
        description="Optional raw text body",
    )

    @classmethod
    def from_http(cls, params: dict, body: bytes) -> "RunContainerRequest":
        """
        Build from query params and raw body.

        A JSON object body may carry "name"; any other body is kept as text.
        The query param wins over the body.
        """
        name = params.get("name")
        text = None

        raw = body.decode("utf-8", errors="replace").strip() if body else ""
        if raw:
            try:
                parsed = json.loads(raw)
            except ValueError:
                parsed = None

            if isinstance(parsed, dict):
                name = name or parsed.get("name")
                text = parsed.get("text")
            else:
                text = raw

        return cls(name=name, text=text)


__all__ = ["RunContainerRequest"]
