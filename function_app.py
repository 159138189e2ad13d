# ============================================================================
# ACI JOB RUNNER - Azure Function App
# ============================================================================
# EPOCH: 1 - ACI JOB RUNNER
# STATUS: Function App - Entry point
# PURPOSE: HTTP-triggered runner for short-lived container jobs
# CREATED: 14 SEP 2026
# ============================================================================
"""
ACI Job Runner Function App

Each RunContainer request creates one Azure Container Instances container
group, waits for it to finish, returns its logs and deletes it.

The Function App identity needs Contributor on RESOURCE_GROUP and AcrPull
through ACI_IDENTITY_ID for the image registry.

Endpoints:
- /api/livez           - process is up
- /api/readyz          - startup validation result (503 with failed checks)
- /api/RunContainer    - create, poll, collect logs, delete
- /api/runner/health   - configuration summary
"""

import azure.functions as func
import json
import logging

SERVICE_NAME = "aci-job-runner"

# App and probes are created before anything that could fail to import
app = func.FunctionApp(http_auth_level=func.AuthLevel.ANONYMOUS)

logger = logging.getLogger(__name__)
logger.info("=" * 60)
logger.info("ACI Job Runner Function App Starting")
logger.info("=" * 60)


def _probe_response(payload: dict, status_code: int) -> func.HttpResponse:
    return func.HttpResponse(
        json.dumps({**payload, "service": SERVICE_NAME}),
        status_code=status_code,
        headers={"Content-Type": "application/json"},
    )


# ============================================================================
# PROBES
# ============================================================================

@app.route(route="livez", methods=["GET"])
def liveness_probe(req: func.HttpRequest) -> func.HttpResponse:
    """GET /api/livez - 200 whenever the worker is running."""
    return _probe_response({"alive": True}, 200)


@app.route(route="readyz", methods=["GET"])
def readiness_probe(req: func.HttpRequest) -> func.HttpResponse:
    """GET /api/readyz - 200 once startup validation passed, 503 otherwise."""
    from function.startup import STARTUP_STATE

    if STARTUP_STATE.all_passed:
        return _probe_response({"ready": True}, 200)

    return _probe_response(
        {
            "ready": False,
            "failed_checks": STARTUP_STATE.failed_check_names(),
            "details": STARTUP_STATE.to_dict(),
        },
        503,
    )


# ============================================================================
# STARTUP VALIDATION
# ============================================================================

from function.startup import validate_startup, STARTUP_STATE

if validate_startup():
    logger.info("Startup validation PASSED")
else:
    logger.error("=" * 60)
    logger.error("STARTUP VALIDATION FAILED - RunContainer will answer 500")
    for failed in STARTUP_STATE.failed_checks():
        logger.error(f"  {failed.name}: {failed.error_message}")
    logger.error("=" * 60)


# ============================================================================
# BLUEPRINTS
# ============================================================================
# Registered unconditionally: RunContainer validates config per request and
# reports missing settings in its 500 body.

from function.blueprints.run_container_bp import run_container_bp

app.register_functions(run_container_bp)
logger.info("Registered: run_container_bp (RunContainer, runner/health)")


__all__ = ["app"]
