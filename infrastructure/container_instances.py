# ============================================================================
# CONTAINER INSTANCES INFRASTRUCTURE
# ============================================================================
# EPOCH: 1 - ACI JOB RUNNER
# STATUS: Infrastructure - Azure Container Instances operations
# PURPOSE: Create, query, read logs from and delete job container groups
# CREATED: 14 SEP 2026
# ============================================================================
"""
Container Instances Infrastructure

Defines the ComputeProvider interface the job runner depends on, and the
production implementation on top of azure-mgmt-containerinstance:

- create_job: begin_create_or_update + wait for the LRO to finish
- get_job_status: read state/exit code from the first container's instance view
- list_logs: tail the container log
- delete_job: begin_delete with a bounded wait

Uses DefaultAzureCredential for authentication (works with Managed Identity).
SDK errors are re-raised as SubmissionError / TransientQueryError /
CleanupError so the runner never depends on azure.core exception types.
"""

import os
from abc import ABC, abstractmethod
from typing import Any, Optional

from core.contracts import ContainerState
from core.errors import CleanupError, SubmissionError, TransientQueryError
from core.logging import get_logger, ComponentType
from core.models import ContainerJobSpec, JobStatusSnapshot

logger = get_logger(__name__, ComponentType.PROVIDER)


# ============================================================================
# PROVIDER INTERFACE
# ============================================================================

class ComputeProvider(ABC):
    """Compute provider capability used by the job runner."""

    @abstractmethod
    def create_job(self, spec: ContainerJobSpec) -> None:
        """Create the job and return once the provider has accepted it."""

    @abstractmethod
    def get_job_status(self, job_name: str) -> JobStatusSnapshot:
        """Return the current state and exit code of the job's container."""

    @abstractmethod
    def list_logs(self, job_name: str, container_name: str, tail: int) -> Optional[str]:
        """Return the last `tail` log lines, or None if the provider has none."""

    @abstractmethod
    def delete_job(self, job_name: str, timeout_seconds: float) -> None:
        """Delete the job, raising CleanupError if it fails or exceeds the timeout."""


# ============================================================================
# AZURE CONTAINER INSTANCES CLIENT
# ============================================================================

class AzureContainerInstanceClient(ComputeProvider):
    """
    ComputeProvider backed by Azure Container Instances.

    Usage:
        client = AzureContainerInstanceClient(
            subscription_id="...",
            resource_group="rg-jobs",
        )
        client.create_job(spec)
        status = client.get_job_status(spec.job_name)
    """

    def __init__(
        self,
        subscription_id: str,
        resource_group: str,
        credential: Any = None,
        management_client: Any = None,
    ):
        """
        Initialize the client.

        Args:
            subscription_id: Azure subscription hosting the resource group
            resource_group: Resource group the container groups are created in
            credential: Optional azure-identity credential (lazy default)
            management_client: Optional pre-built ContainerInstanceManagementClient
        """
        self.subscription_id = subscription_id
        self.resource_group = resource_group
        self._credential = credential
        self._client = management_client

    @classmethod
    def from_config(cls, config) -> "AzureContainerInstanceClient":
        """Build from a FunctionConfig (must already be validated)."""
        return cls(
            subscription_id=config.subscription_id,
            resource_group=config.resource_group,
        )

    # ========================================================================
    # AZURE CLIENT INITIALIZATION
    # ========================================================================

    def _get_credential(self):
        """Get Azure credential (lazy initialization)."""
        if self._credential is None:
            # User-assigned identity on the Function App takes precedence
            client_id = os.environ.get("AZURE_CLIENT_ID")

            if client_id:
                from azure.identity import ManagedIdentityCredential
                self._credential = ManagedIdentityCredential(client_id=client_id)
                logger.debug("ManagedIdentityCredential initialized with client_id")
            else:
                from azure.identity import DefaultAzureCredential
                self._credential = DefaultAzureCredential()
                logger.debug("DefaultAzureCredential initialized")
        return self._credential

    def _get_client(self):
        """Get ContainerInstanceManagementClient (lazy initialization)."""
        if self._client is None:
            from azure.mgmt.containerinstance import ContainerInstanceManagementClient

            self._client = ContainerInstanceManagementClient(
                self._get_credential(),
                self.subscription_id,
            )
            logger.debug(f"ContainerInstanceManagementClient initialized for {self.resource_group}")
        return self._client

    # ========================================================================
    # MODEL MAPPING
    # ========================================================================

    @staticmethod
    def build_container_group(spec: ContainerJobSpec):
        """Translate a ContainerJobSpec into the SDK ContainerGroup model."""
        from azure.mgmt.containerinstance.models import (
            Container,
            ContainerGroup,
            ContainerGroupIdentity,
            EnvironmentVariable,
            ImageRegistryCredential,
            ResourceRequests,
            ResourceRequirements,
            UserAssignedIdentities,
        )

        env_vars = [
            EnvironmentVariable(name=var.name, value=var.value, secure_value=var.secure_value)
            for var in spec.environment
        ]

        container = Container(
            name=spec.container_name,
            image=spec.image,
            resources=ResourceRequirements(
                requests=ResourceRequests(cpu=spec.cpu, memory_in_gb=spec.memory_gb),
            ),
            environment_variables=env_vars,
        )

        return ContainerGroup(
            location=spec.location,
            os_type=spec.os_type,
            restart_policy=spec.restart_policy,
            identity=ContainerGroupIdentity(
                type="UserAssigned",
                user_assigned_identities={spec.identity_id: UserAssignedIdentities()},
            ),
            containers=[container],
            image_registry_credentials=[
                ImageRegistryCredential(server=spec.registry_server, identity=spec.identity_id),
            ],
        )

    @staticmethod
    def snapshot_from_group(group) -> JobStatusSnapshot:
        """Read state/exit code from the first container, defaulting to Unknown."""
        containers = getattr(group, "containers", None) or []
        container = containers[0] if containers else None
        instance_view = getattr(container, "instance_view", None)
        current_state = getattr(instance_view, "current_state", None)

        state = getattr(current_state, "state", None) or ContainerState.UNKNOWN.value
        exit_code = getattr(current_state, "exit_code", None)
        return JobStatusSnapshot(state=state, exit_code=exit_code)

    # ========================================================================
    # OPERATIONS
    # ========================================================================

    def create_job(self, spec: ContainerJobSpec) -> None:
        logger.info(f"Creating container group: {spec.job_name}")
        try:
            poller = self._get_client().container_groups.begin_create_or_update(
                self.resource_group,
                spec.job_name,
                self.build_container_group(spec),
            )
            poller.result()
        except Exception as e:
            logger.error(f"Error creating container group {spec.job_name}: {e}")
            raise SubmissionError(str(e), job_name=spec.job_name) from e
        logger.info(f"Container group {spec.job_name} created")

    def get_job_status(self, job_name: str) -> JobStatusSnapshot:
        try:
            group = self._get_client().container_groups.get(self.resource_group, job_name)
        except Exception as e:
            raise TransientQueryError(str(e), job_name=job_name) from e
        return self.snapshot_from_group(group)

    def list_logs(self, job_name: str, container_name: str, tail: int) -> Optional[str]:
        try:
            logs = self._get_client().containers.list_logs(
                self.resource_group,
                job_name,
                container_name,
                tail=tail,
            )
        except Exception as e:
            raise TransientQueryError(str(e), job_name=job_name) from e
        return getattr(logs, "content", None)

    def delete_job(self, job_name: str, timeout_seconds: float) -> None:
        try:
            poller = self._get_client().container_groups.begin_delete(self.resource_group, job_name)
            poller.wait(timeout=timeout_seconds)
        except Exception as e:
            raise CleanupError(str(e), job_name=job_name) from e

        if not poller.done():
            raise CleanupError("Cleanup timeout", job_name=job_name)


__all__ = [
    "ComputeProvider",
    "AzureContainerInstanceClient",
]
