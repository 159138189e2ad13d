# ============================================================================
# JOB CONTAINER ENTRY POINT
# ============================================================================
# EPOCH: 1 - ACI JOB RUNNER
# STATUS: Container - Process entry point
# PURPOSE: Run the blob uploader and map the outcome to an exit code
# CREATED: 15 SEP 2026
# ============================================================================
"""
Job Container Entry Point

Usage:
    python -m container.main

Environment Variables:
    AZURE_STORAGE_CONNECTION_STRING: Storage connection string (required)
    AZURE_STORAGE_CONTAINER: Target container (default: streakjs-internal)
    LOG_LEVEL: Log level (default: INFO)
    LOG_FORMAT: "json" for structured output

Exit codes:
    0 - upload succeeded
    1 - any failure
"""

import os
import sys

from core.logging import configure_logging, get_logger, ComponentType
from container.uploader import BlobUploader, UploaderConfig

logger = get_logger(__name__, ComponentType.UPLOADER)


def main() -> int:
    """Run the uploader. Returns the process exit code."""
    configure_logging(
        level=os.environ.get("LOG_LEVEL", "INFO"),
        json_output=os.environ.get("LOG_FORMAT", "").lower() == "json",
    )

    logger.info("Blob Storage Test Started")

    try:
        result = BlobUploader(UploaderConfig.from_env()).run()
    except Exception as e:
        logger.error("TEST FAILED")
        logger.exception(f"{type(e).__name__}: {e}")
        return 1

    logger.info(f"Uploaded {result.container_name}/{result.blob_name}")
    logger.info("TEST SUCCESS")
    return 0


if __name__ == "__main__":
    sys.exit(main())
