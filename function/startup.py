# ============================================================================
# STARTUP VALIDATION
# ============================================================================
# EPOCH: 1 - ACI JOB RUNNER
# STATUS: Function App - Startup validation
# PURPOSE: Check settings and SDK availability once, at cold start
# CREATED: 15 SEP 2026
# ============================================================================
"""
Startup Validation

Runs once when function_app.py is imported. Results back /api/readyz.

RunContainer stays registered whatever the outcome and re-validates on every
request, so a missing setting reaches callers as a 500 naming the missing
variables rather than a 404.
"""

import importlib
import logging
from dataclasses import dataclass, field
from typing import Callable, Dict, List, Optional, Tuple

from function.config import get_config

logger = logging.getLogger(__name__)

REQUIRED_SDK_MODULES = (
    "azure.identity",
    "azure.mgmt.containerinstance",
)


@dataclass
class ValidationResult:
    """Outcome of one named check."""

    name: str
    passed: bool
    error_type: Optional[str] = None
    error_message: Optional[str] = None

    @classmethod
    def not_run(cls, name: str) -> "ValidationResult":
        return cls(name, False, "NotRun", "Validation not yet run")

    @classmethod
    def failed(cls, name: str, error_type: str, message: str) -> "ValidationResult":
        return cls(name, False, error_type, message)


def _validate_env_vars() -> ValidationResult:
    """Required settings present and numeric overrides parseable."""
    try:
        config = get_config()
    except ValueError as e:
        # Non-numeric ACI_* override
        return ValidationResult.failed("env_vars", "InvalidEnvVar", str(e))

    missing = config.missing_required()
    if missing:
        return ValidationResult.failed(
            "env_vars", "MissingEnvVar", f"Missing env vars: {', '.join(missing)}"
        )
    return ValidationResult("env_vars", True)


def _validate_azure_sdk() -> ValidationResult:
    """
    Azure SDK packages import.

    Credentials and connectivity are not checked; a token request is too
    slow for cold start.
    """
    for module_name in REQUIRED_SDK_MODULES:
        try:
            importlib.import_module(module_name)
        except ImportError as e:
            return ValidationResult.failed("azure_sdk", type(e).__name__, f"{module_name}: {e}")
    return ValidationResult("azure_sdk", True)


# (name, label for logs, check)
CHECKS: Tuple[Tuple[str, str, Callable[[], ValidationResult]], ...] = (
    ("env_vars", "Environment variables", _validate_env_vars),
    ("azure_sdk", "Azure SDK packages", _validate_azure_sdk),
)


@dataclass
class StartupState:
    """Latest result per check, in CHECKS order."""

    results: Dict[str, ValidationResult] = field(
        default_factory=lambda: {name: ValidationResult.not_run(name) for name, _, _ in CHECKS}
    )

    @property
    def env_vars(self) -> ValidationResult:
        return self.results["env_vars"]

    @property
    def azure_sdk(self) -> ValidationResult:
        return self.results["azure_sdk"]

    def checks(self) -> List[ValidationResult]:
        return list(self.results.values())

    @property
    def all_passed(self) -> bool:
        return all(c.passed for c in self.checks())

    def failed_checks(self) -> List[ValidationResult]:
        return [c for c in self.checks() if not c.passed]

    def failed_check_names(self) -> List[str]:
        return [c.name for c in self.failed_checks()]

    def to_dict(self) -> dict:
        """Readiness payload for /api/readyz."""
        return {
            "all_passed": self.all_passed,
            "checks": {
                c.name: {"passed": c.passed, "error": None if c.passed else c.error_message}
                for c in self.checks()
            },
        }


STARTUP_STATE = StartupState()


def validate_startup() -> bool:
    """
    Run every check and record the results on STARTUP_STATE.

    Returns True if all checks pass.
    """
    logger.info("Starting validation checks...")

    for name, label, check in CHECKS:
        result = check()
        STARTUP_STATE.results[name] = result
        if result.passed:
            logger.info(f"  [PASS] {label}")
        else:
            logger.error(f"  [FAIL] {label}: {result.error_message}")

    if STARTUP_STATE.all_passed:
        logger.info("All validation checks PASSED")
    else:
        logger.error(f"Validation FAILED: {STARTUP_STATE.failed_check_names()}")

    return STARTUP_STATE.all_passed


__all__ = ["CHECKS", "STARTUP_STATE", "StartupState", "ValidationResult", "validate_startup"]
