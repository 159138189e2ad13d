# ============================================================================
# JOB CONTAINER MODULE
# ============================================================================
# EPOCH: 1 - ACI JOB RUNNER
# STATUS: Container - Program baked into the job image
# PURPOSE: Blob storage smoke test run inside the ACI container
# CREATED: 15 SEP 2026
# ============================================================================
"""
Job Container Module

The program the job image runs. Independent of the function app: it only
reads the storage settings the runner injects and uploads one file.

Usage:
    python -m container.main
"""

from container.uploader import BlobUploader, UploaderConfig, UploadResult

__all__ = ["BlobUploader", "UploaderConfig", "UploadResult"]
