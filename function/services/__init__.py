# ============================================================================
# FUNCTION APP SERVICES
# ============================================================================
# EPOCH: 1 - ACI JOB RUNNER
# STATUS: Function App - Service layer
# PURPOSE: Container job lifecycle orchestration
# CREATED: 14 SEP 2026
# ============================================================================

from function.services.job_runner import JobRunner, build_job_spec

__all__ = ["JobRunner", "build_job_spec"]
