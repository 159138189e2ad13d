# ============================================================================
# FUNCTION APP MODULE
# ============================================================================
# EPOCH: 1 - ACI JOB RUNNER
# STATUS: Function App - Azure Function App components
# PURPOSE: HTTP-triggered container job runner
# CREATED: 14 SEP 2026
# ============================================================================
"""
Function App Module

Contains all components specific to the Azure Function App deployment:
- Blueprints (HTTP endpoints)
- Models (request/response schemas)
- Services (container job runner)
- Startup validation
"""

__all__ = []
