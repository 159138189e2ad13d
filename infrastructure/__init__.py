# ============================================================================
# INFRASTRUCTURE MODULE
# ============================================================================
# EPOCH: 1 - ACI JOB RUNNER
# STATUS: Infrastructure - Azure compute and storage operations
# PURPOSE: Thin adapters over the Azure SDKs
# CREATED: 14 SEP 2026
# ============================================================================
"""
Infrastructure module for the job runner.

Provides:
- ComputeProvider: interface the job runner depends on
- AzureContainerInstanceClient: ComputeProvider backed by Azure Container Instances
- BlobRepository: Azure Blob Storage operations for the job container

Usage:
    from infrastructure import AzureContainerInstanceClient, BlobRepository

    client = AzureContainerInstanceClient(subscription_id, resource_group)
    client.create_job(spec)

    repo = BlobRepository.from_connection_string(conn_str)
    repo.ensure_container("streakjs-internal")
"""

from infrastructure.container_instances import (
    ComputeProvider,
    AzureContainerInstanceClient,
)
from infrastructure.storage import (
    BlobRepository,
)

__all__ = [
    # Compute
    'ComputeProvider',
    'AzureContainerInstanceClient',
    # Blob Storage
    'BlobRepository',
]
