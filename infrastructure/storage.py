# ============================================================================
# BLOB STORAGE INFRASTRUCTURE
# ============================================================================
# EPOCH: 1 - ACI JOB RUNNER
# STATUS: Infrastructure - Azure Blob Storage operations
# PURPOSE: Container bootstrap and small text uploads for the job container
# CREATED: 15 SEP 2026
# ============================================================================
"""
Blob Storage Infrastructure

Provides BlobRepository for Azure Blob Storage operations:
- ensure_container: Create the container if absent (private access)
- upload_bytes / upload_text: Upload one blob with a content type

Authenticates with a storage connection string (account key or SAS),
which is what the job container receives as a secure environment variable.
Container clients are cached with thread-safe access.
"""

import threading
from typing import Any, Dict, Optional

from core.errors import BlobUploadError
from core.logging import get_logger, ComponentType

logger = get_logger(__name__, ComponentType.STORAGE)


# ============================================================================
# BLOB REPOSITORY
# ============================================================================

class BlobRepository:
    """
    Azure Blob Storage repository.

    Usage:
        repo = BlobRepository.from_connection_string(conn_str)
        repo.ensure_container("streakjs-internal")
        url = repo.upload_text("streakjs-internal", "test.txt", "hello")
    """

    def __init__(self, blob_service: Any):
        """
        Initialize blob repository.

        Args:
            blob_service: azure.storage.blob.BlobServiceClient (or compatible)
        """
        self._blob_service = blob_service

        # Container client cache with thread-safe access
        self._container_clients: Dict[str, Any] = {}
        self._container_clients_lock = threading.Lock()

    @classmethod
    def from_connection_string(cls, connection_string: Optional[str]) -> "BlobRepository":
        """
        Build a repository from a storage connection string.

        Raises:
            BlobUploadError: If the connection string is empty.
        """
        if not connection_string:
            raise BlobUploadError("AZURE_STORAGE_CONNECTION_STRING is not set")

        try:
            from azure.storage.blob import BlobServiceClient
        except ImportError:
            raise ImportError(
                "azure-storage-blob package required. "
                "Install with: pip install azure-storage-blob"
            )

        logger.info("Using provided connection string")
        return cls(BlobServiceClient.from_connection_string(connection_string))

    def _get_container_client(self, container: str):
        """
        Get or create cached container client.

        Thread-safe with double-checked locking pattern.
        """
        if container in self._container_clients:
            return self._container_clients[container]

        with self._container_clients_lock:
            if container in self._container_clients:
                return self._container_clients[container]

            container_client = self._blob_service.get_container_client(container)
            self._container_clients[container] = container_client
            logger.debug(f"Created container client for: {container}")
            return container_client

    # ========================================================================
    # CONTAINER OPERATIONS
    # ========================================================================

    def ensure_container(self, container: str) -> bool:
        """
        Create the container if it does not exist.

        No public access level is passed, so the container is private.

        Returns:
            True if the container was created, False if it already existed.
        """
        container_client = self._get_container_client(container)

        logger.info(f"Checking container: {container}")
        if container_client.exists():
            logger.info("Container exists")
            return False

        logger.info("Creating container")
        container_client.create_container()
        logger.info("Container created")
        return True

    # ========================================================================
    # UPLOAD OPERATIONS
    # ========================================================================

    def upload_bytes(
        self,
        container: str,
        blob_path: str,
        data: bytes,
        content_type: str = "application/octet-stream",
    ) -> str:
        """
        Upload bytes to a blob.

        Returns:
            The blob URL.
        """
        from azure.storage.blob import ContentSettings

        logger.info(f"Uploading: {blob_path}")

        blob_client = self._get_container_client(container).get_blob_client(blob_path)
        blob_client.upload_blob(
            data,
            content_settings=ContentSettings(content_type=content_type),
        )

        logger.info("Upload complete")
        logger.info(f"   {blob_client.url}")
        return blob_client.url

    def upload_text(
        self,
        container: str,
        blob_path: str,
        content: str,
        content_type: str = "text/plain",
    ) -> str:
        """Upload UTF-8 text. Returns the blob URL."""
        return self.upload_bytes(
            container,
            blob_path,
            content.encode("utf-8"),
            content_type=content_type,
        )


__all__ = [
    "BlobRepository",
]
