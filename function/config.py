# ============================================================================
# FUNCTION APP CONFIGURATION
# ============================================================================
# EPOCH: 1 - ACI JOB RUNNER
# STATUS: Function App - Configuration management
# PURPOSE: Environment-based configuration for the RunContainer function
# CREATED: 14 SEP 2026
# ============================================================================
"""
Function App Configuration

Loads configuration from environment variables with sensible defaults.

Required (validated before any Azure call):
- AZURE_SUBSCRIPTION_ID, RESOURCE_GROUP, ACI_IDENTITY_ID,
  CONTAINER_REGISTRY_SERVER, CONTAINER_IMAGE

Optional:
- AZURE_STORAGE_CONNECTION_STRING / AZURE_STORAGE_CONTAINER are forwarded
  to the job container
- ACI_* tune the container group and the polling loop
"""

import os
import logging
from dataclasses import dataclass
from typing import List, Optional, Tuple

from core.errors import ConfigurationError

logger = logging.getLogger(__name__)

# (env var, attribute) in the order they are reported when missing
REQUIRED_SETTINGS: Tuple[Tuple[str, str], ...] = (
    ("AZURE_SUBSCRIPTION_ID", "subscription_id"),
    ("RESOURCE_GROUP", "resource_group"),
    ("ACI_IDENTITY_ID", "identity_id"),
    ("CONTAINER_REGISTRY_SERVER", "registry_server"),
    ("CONTAINER_IMAGE", "container_image"),
)


@dataclass
class FunctionConfig:
    """Configuration for the function app."""

    # Azure resources (required)
    subscription_id: Optional[str] = None
    resource_group: Optional[str] = None
    identity_id: Optional[str] = None
    registry_server: Optional[str] = None
    container_image: Optional[str] = None

    # Forwarded to the job container
    storage_connection_string: Optional[str] = None
    storage_container: str = ""

    # Container group shape
    location: str = "eastus"
    container_name: str = "job-container"
    cpu: float = 0.25
    memory_gb: float = 0.5

    # Lifecycle timing
    poll_interval_seconds: float = 5.0
    max_poll_attempts: int = 120  # 10 minutes at 5s
    cleanup_timeout_seconds: float = 30.0
    log_tail_lines: int = 1000

    # App Info
    version: str = "1.0.0"
    service_name: str = "aci-job-runner"

    @classmethod
    def from_env(cls) -> "FunctionConfig":
        """Load configuration from environment variables."""
        from __version__ import __version__

        return cls(
            subscription_id=os.environ.get("AZURE_SUBSCRIPTION_ID"),
            resource_group=os.environ.get("RESOURCE_GROUP"),
            identity_id=os.environ.get("ACI_IDENTITY_ID"),
            registry_server=os.environ.get("CONTAINER_REGISTRY_SERVER"),
            container_image=os.environ.get("CONTAINER_IMAGE"),
            storage_connection_string=os.environ.get("AZURE_STORAGE_CONNECTION_STRING"),
            storage_container=os.environ.get("AZURE_STORAGE_CONTAINER", ""),
            location=os.environ.get("ACI_LOCATION", "eastus"),
            container_name=os.environ.get("ACI_CONTAINER_NAME", "job-container"),
            cpu=float(os.environ.get("ACI_CPU", "0.25")),
            memory_gb=float(os.environ.get("ACI_MEMORY_GB", "0.5")),
            poll_interval_seconds=float(os.environ.get("ACI_POLL_INTERVAL_SECONDS", "5")),
            max_poll_attempts=int(os.environ.get("ACI_MAX_POLL_ATTEMPTS", "120")),
            cleanup_timeout_seconds=float(os.environ.get("ACI_CLEANUP_TIMEOUT_SECONDS", "30")),
            log_tail_lines=int(os.environ.get("ACI_LOG_TAIL_LINES", "1000")),
            version=os.environ.get("APP_VERSION", __version__),
            service_name=os.environ.get("SERVICE_NAME", "aci-job-runner"),
        )

    def missing_required(self) -> List[str]:
        """Names of required env vars with no (or empty) value."""
        return [env for env, attr in REQUIRED_SETTINGS if not getattr(self, attr)]

    def validate(self) -> None:
        """
        Raise ConfigurationError listing every missing required setting.

        Called before the provider client is constructed.
        """
        missing = self.missing_required()
        if missing:
            raise ConfigurationError(missing)

    @property
    def has_required_config(self) -> bool:
        return not self.missing_required()

    @property
    def has_storage_config(self) -> bool:
        """Check if a storage connection string will be forwarded to the job."""
        return bool(self.storage_connection_string)

    @property
    def polling_ceiling_seconds(self) -> float:
        return self.poll_interval_seconds * self.max_poll_attempts


# Global config singleton
_config: Optional[FunctionConfig] = None


def get_config() -> FunctionConfig:
    """Get the global configuration singleton."""
    global _config
    if _config is None:
        _config = FunctionConfig.from_env()
    return _config


def reset_config() -> None:
    """Drop the cached singleton so the next get_config() re-reads the environment."""
    global _config
    _config = None


__all__ = ["FunctionConfig", "REQUIRED_SETTINGS", "get_config", "reset_config"]
