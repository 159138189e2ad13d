# ============================================================================
# CONFIGURATION & STARTUP TESTS
# ============================================================================
# EPOCH: 1 - ACI JOB RUNNER
# STATUS: Tests - Environment configuration and startup validation
# PURPOSE: Verify env loading, required-setting checks, readiness state
# CREATED: 16 SEP 2026
# ============================================================================
"""
Configuration & Startup Tests

Environment is manipulated with monkeypatch; the config singleton is
reset around every test.

Run with:
    pytest tests/test_config.py -v
"""

import pytest

from core.errors import ConfigurationError
from function import startup
from function.config import FunctionConfig, REQUIRED_SETTINGS, get_config, reset_config

REQUIRED_ENV = {
    "AZURE_SUBSCRIPTION_ID": "00000000-0000-0000-0000-000000000000",
    "RESOURCE_GROUP": "rg-jobs",
    "ACI_IDENTITY_ID": "/subscriptions/s/resourceGroups/rg/providers/x/aci",
    "CONTAINER_REGISTRY_SERVER": "myacr.azurecr.io",
    "CONTAINER_IMAGE": "myacr.azurecr.io/job:latest",
}

OPTIONAL_ENV = [
    "AZURE_STORAGE_CONNECTION_STRING",
    "AZURE_STORAGE_CONTAINER",
    "ACI_LOCATION",
    "ACI_CONTAINER_NAME",
    "ACI_CPU",
    "ACI_MEMORY_GB",
    "ACI_POLL_INTERVAL_SECONDS",
    "ACI_MAX_POLL_ATTEMPTS",
    "ACI_CLEANUP_TIMEOUT_SECONDS",
    "ACI_LOG_TAIL_LINES",
    "APP_VERSION",
    "SERVICE_NAME",
]


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for name in list(REQUIRED_ENV) + OPTIONAL_ENV:
        monkeypatch.delenv(name, raising=False)
    reset_config()
    yield
    reset_config()


def _set_required(monkeypatch, skip=()):
    for name, value in REQUIRED_ENV.items():
        if name not in skip:
            monkeypatch.setenv(name, value)


# ============================================================================
# FUNCTION CONFIG
# ============================================================================

class TestFunctionConfig:
    """Environment loading and validation."""

    def test_defaults(self, monkeypatch):
        _set_required(monkeypatch)
        config = FunctionConfig.from_env()

        assert config.location == "eastus"
        assert config.container_name == "job-container"
        assert config.cpu == 0.25
        assert config.memory_gb == 0.5
        assert config.poll_interval_seconds == 5
        assert config.max_poll_attempts == 120
        assert config.cleanup_timeout_seconds == 30
        assert config.log_tail_lines == 1000
        assert config.polling_ceiling_seconds == 600
        assert config.storage_container == ""
        assert config.has_storage_config is False

    def test_overrides(self, monkeypatch):
        _set_required(monkeypatch)
        monkeypatch.setenv("ACI_POLL_INTERVAL_SECONDS", "2")
        monkeypatch.setenv("ACI_MAX_POLL_ATTEMPTS", "10")
        monkeypatch.setenv("ACI_CPU", "1")
        monkeypatch.setenv("AZURE_STORAGE_CONNECTION_STRING", "AccountKey=k")

        config = FunctionConfig.from_env()

        assert config.poll_interval_seconds == 2.0
        assert config.max_poll_attempts == 10
        assert config.cpu == 1.0
        assert config.has_storage_config is True

    def test_all_present_validates(self, monkeypatch):
        _set_required(monkeypatch)
        config = FunctionConfig.from_env()

        config.validate()
        assert config.missing_required() == []
        assert config.has_required_config is True

    @pytest.mark.parametrize("env_name", [env for env, _ in REQUIRED_SETTINGS])
    def test_each_missing_required(self, monkeypatch, env_name):
        _set_required(monkeypatch, skip=(env_name,))
        config = FunctionConfig.from_env()

        with pytest.raises(ConfigurationError) as exc:
            config.validate()

        assert exc.value.missing == [env_name]
        assert str(exc.value) == f"Missing env vars: {env_name}"

    def test_all_missing_in_declared_order(self):
        config = FunctionConfig.from_env()

        assert config.missing_required() == [env for env, _ in REQUIRED_SETTINGS]

    def test_invalid_number_raises(self, monkeypatch):
        monkeypatch.setenv("ACI_MAX_POLL_ATTEMPTS", "lots")

        with pytest.raises(ValueError):
            FunctionConfig.from_env()

    def test_singleton_and_reset(self, monkeypatch):
        _set_required(monkeypatch)
        first = get_config()

        assert get_config() is first
        reset_config()
        assert get_config() is not first


# ============================================================================
# STARTUP VALIDATION
# ============================================================================

class TestStartupValidation:
    """Readiness state from startup checks."""

    def test_passes_with_required_env(self, monkeypatch):
        _set_required(monkeypatch)
        monkeypatch.setattr(startup, "STARTUP_STATE", startup.StartupState())

        assert startup.validate_startup() is True
        assert startup.STARTUP_STATE.failed_check_names() == []

    def test_missing_env_fails_env_check(self, monkeypatch):
        _set_required(monkeypatch, skip=("CONTAINER_IMAGE",))
        monkeypatch.setattr(startup, "STARTUP_STATE", startup.StartupState())

        assert startup.validate_startup() is False
        assert startup.STARTUP_STATE.failed_check_names() == ["env_vars"]
        assert "CONTAINER_IMAGE" in startup.STARTUP_STATE.env_vars.error_message

    def test_invalid_number_fails_env_check(self, monkeypatch):
        _set_required(monkeypatch)
        monkeypatch.setenv("ACI_CPU", "quarter")
        monkeypatch.setattr(startup, "STARTUP_STATE", startup.StartupState())

        assert startup.validate_startup() is False
        assert startup.STARTUP_STATE.env_vars.error_type == "InvalidEnvVar"

    def test_missing_sdk_fails_sdk_check(self, monkeypatch):
        _set_required(monkeypatch)
        monkeypatch.setattr(startup, "STARTUP_STATE", startup.StartupState())
        monkeypatch.setattr(startup, "REQUIRED_SDK_MODULES", ("azure.not_a_real_package",))

        assert startup.validate_startup() is False
        assert startup.STARTUP_STATE.failed_check_names() == ["azure_sdk"]

    def test_initial_state_not_ready(self):
        state = startup.StartupState()

        assert state.all_passed is False
        assert state.to_dict()["checks"]["env_vars"]["error"] == "Validation not yet run"
