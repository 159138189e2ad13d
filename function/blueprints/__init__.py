# ============================================================================
# FUNCTION APP BLUEPRINTS
# ============================================================================
# EPOCH: 1 - ACI JOB RUNNER
# STATUS: Function App - HTTP endpoint blueprints
# PURPOSE: Azure Functions V2 blueprints for HTTP routes
# CREATED: 15 SEP 2026
# ============================================================================
"""
Function App Blueprints

Azure Functions V2 blueprints organizing HTTP endpoints.
"""

from function.blueprints.run_container_bp import run_container_bp

__all__ = [
    "run_container_bp",
]
