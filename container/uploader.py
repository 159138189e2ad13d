# ============================================================================
# BLOB UPLOADER
# ============================================================================
# EPOCH: 1 - ACI JOB RUNNER
# STATUS: Container - Blob storage smoke test
# PURPOSE: Ensure the target container exists and upload one generated file
# CREATED: 15 SEP 2026
# ============================================================================
"""
Blob Uploader

Steps:
1. Build a BlobRepository from AZURE_STORAGE_CONNECTION_STRING
2. Ensure AZURE_STORAGE_CONTAINER exists (created private if absent)
3. Upload test-<epoch_ms>-<suffix>.txt with a fixed template body

No retries and no partial-success handling. Any failure propagates to
the entry point, which exits non-zero.
"""

import logging
import os
import platform
import sys
import time
import uuid
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Callable, Optional

from infrastructure.storage import BlobRepository

logger = logging.getLogger(__name__)

DEFAULT_CONTAINER_NAME = "streakjs-internal"


@dataclass
class UploaderConfig:
    """Storage settings injected into the job container."""

    connection_string: Optional[str] = None
    container_name: str = DEFAULT_CONTAINER_NAME

    @classmethod
    def from_env(cls) -> "UploaderConfig":
        """Load configuration from environment variables."""
        return cls(
            connection_string=os.environ.get("AZURE_STORAGE_CONNECTION_STRING"),
            # Empty string (runner default) falls back to the default container
            container_name=os.environ.get("AZURE_STORAGE_CONTAINER") or DEFAULT_CONTAINER_NAME,
        )


@dataclass
class UploadResult:
    """Outcome of one upload."""

    container_name: str
    blob_name: str
    url: str
    container_created: bool


def generate_file_name() -> str:
    """test-{epoch_ms}-{6 hex chars}.txt"""
    return f"test-{int(time.time() * 1000)}-{uuid.uuid4().hex[:6]}.txt"


def generate_file_content(now: Optional[datetime] = None) -> str:
    now = now or datetime.now(timezone.utc)
    lines = [
        "AZURE BLOB STORAGE TEST",
        "======================",
        f"Time        : {now.isoformat(timespec='milliseconds').replace('+00:00', 'Z')}",
        f"Platform    : {sys.platform}",
        f"Python      : {platform.python_version()}",
        f"PID         : {os.getpid()}",
    ]
    return "\n".join(lines)


class BlobUploader:
    """
    Uploads one generated text file.

    Usage:
        result = BlobUploader(UploaderConfig.from_env()).run()
    """

    def __init__(
        self,
        config: UploaderConfig,
        repository_factory: Callable[[Optional[str]], Any] = BlobRepository.from_connection_string,
    ):
        self.config = config
        self._repository_factory = repository_factory

    def run(self) -> UploadResult:
        """
        Ensure the container exists and upload the file.

        Raises:
            BlobUploadError: Connection string missing.
            Exception: Any storage SDK error, unchanged.
        """
        repo = self._repository_factory(self.config.connection_string)
        created = repo.ensure_container(self.config.container_name)

        blob_name = generate_file_name()
        url = repo.upload_text(
            self.config.container_name,
            blob_name,
            generate_file_content(),
            content_type="text/plain",
        )

        return UploadResult(
            container_name=self.config.container_name,
            blob_name=blob_name,
            url=url,
            container_created=created,
        )


__all__ = [
    "BlobUploader",
    "UploaderConfig",
    "UploadResult",
    "generate_file_name",
    "generate_file_content",
    "DEFAULT_CONTAINER_NAME",
]
