# ============================================================================
# RUN CONTAINER BLUEPRINT
# ============================================================================
# EPOCH: 1 - ACI JOB RUNNER
# STATUS: Function App - Container run endpoint
# PURPOSE: HTTP endpoint that runs one container job and returns its result
# CREATED: 15 SEP 2026
# ============================================================================
"""
Run Container Blueprint

Endpoints:
- POST /api/RunContainer - Run the configured image once (GET also accepted)
- GET /api/runner/health - Configuration summary

Status mapping:
- Terminal state, exit code 0        -> 200 {success, state, exitCode, logs}
- Terminal state, other exit code    -> 500 {success, state, exitCode, logs}
- Config / submission / poll timeout -> 500 {success: false, message}
- Anything unexpected                -> 500 {success: false, message}
"""

import json
from datetime import datetime, timezone

import azure.functions as func

from core.logging import get_logger, ComponentType
from core.models import JobResult
from function.models.requests import RunContainerRequest
from function.models.responses import (
    RunCompletedResponse,
    RunFailedResponse,
    HealthResponse,
)

logger = get_logger(__name__, ComponentType.FUNCTION)
run_container_bp = func.Blueprint()


def _json_response(data: dict, status_code: int = 200) -> func.HttpResponse:
    """Create JSON HTTP response."""
    return func.HttpResponse(
        json.dumps(data, default=str),
        status_code=status_code,
        headers={"Content-Type": "application/json"},
    )


def result_to_response(result: JobResult) -> func.HttpResponse:
    """Translate a JobResult into status code + JSON body."""
    if not result.completed:
        body = RunFailedResponse(message=result.message or "Container run failed")
        return _json_response(body.model_dump(), status_code=500)

    body = RunCompletedResponse(
        success=result.success,
        state=result.state,
        exit_code=result.exit_code,
        logs=result.logs or "",
    )
    return _json_response(
        body.model_dump(by_alias=True),
        status_code=200 if result.success else 500,
    )


def handle_run_container(req: func.HttpRequest, runner=None) -> func.HttpResponse:
    """
    Run one container job for this request.

    Args:
        req: Incoming request (optional `name` param or text/JSON body)
        runner: Optional JobRunner (tests inject one with a fake provider)
    """
    try:
        request = RunContainerRequest.from_http(dict(req.params), req.get_body())
    except Exception as e:
        # Free-form input only; an unparseable body is not fatal
        logger.warning(f"Ignoring unparseable request input: {e}")
        request = RunContainerRequest()

    logger.info(
        f"RunContainer invoked: method={req.method}, name={request.name!r}, "
        f"text_length={len(request.text or '')}"
    )

    try:
        if runner is None:
            from function.services.job_runner import JobRunner
            runner = JobRunner()

        result = runner.run()

    except Exception as e:
        logger.exception(f"Unexpected error running container: {e}")
        return _json_response(
            RunFailedResponse(message=str(e)).model_dump(),
            status_code=500,
        )

    logger.info(
        f"RunContainer result: job={result.job_name}, success={result.success}, "
        f"state={result.state}, exit_code={result.exit_code}, "
        f"cleanup_succeeded={result.cleanup_succeeded}"
    )
    return result_to_response(result)


@run_container_bp.route(
    route="RunContainer",
    methods=["POST", "GET"],
    auth_level=func.AuthLevel.FUNCTION,
)
def run_container(req: func.HttpRequest) -> func.HttpResponse:
    """
    Run the configured container image once and return its result.

    POST /api/RunContainer
    Returns: RunCompletedResponse (200/500) or RunFailedResponse (500)
    """
    return handle_run_container(req)


def build_health_response(config=None) -> HealthResponse:
    """Describe which settings are present (never their values)."""
    from function.config import get_config

    config = config or get_config()

    return HealthResponse(
        status="healthy" if config.has_required_config else "degraded",
        service=config.service_name,
        timestamp=datetime.now(timezone.utc),
        version=config.version,
        checks={
            "required_config": config.has_required_config,
            "storage_configured": config.has_storage_config,
        },
        settings={
            "missing": config.missing_required(),
            "location": config.location,
            "poll_interval_seconds": config.poll_interval_seconds,
            "max_poll_attempts": config.max_poll_attempts,
            "cleanup_timeout_seconds": config.cleanup_timeout_seconds,
        },
    )


@run_container_bp.route(route="runner/health", methods=["GET"])
def runner_health(req: func.HttpRequest) -> func.HttpResponse:
    """
    Runner health check.

    GET /api/runner/health
    Returns: HealthResponse
    """
    return _json_response(build_health_response().model_dump())


__all__ = [
    "run_container_bp",
    "handle_run_container",
    "result_to_response",
    "build_health_response",
]
