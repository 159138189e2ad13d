# ============================================================================
# BLOB UPLOADER TESTS
# ============================================================================
# EPOCH: 1 - ACI JOB RUNNER
# STATUS: Tests - Job container blob uploader
# PURPOSE: Verify container bootstrap, upload, and process exit codes
# CREATED: 17 SEP 2026
# ============================================================================
"""
Blob Uploader Tests

BlobRepository is exercised with a MagicMock BlobServiceClient; the
uploader and entry point with a mocked repository. No storage traffic.

Run with:
    pytest tests/test_blob_uploader.py -v
"""

import re
from datetime import datetime, timezone
from unittest.mock import MagicMock, patch

import pytest

from core.errors import BlobUploadError
from infrastructure.storage import BlobRepository
from container.uploader import (
    BlobUploader,
    UploaderConfig,
    DEFAULT_CONTAINER_NAME,
    generate_file_content,
    generate_file_name,
)
from container import main as container_main


# ============================================================================
# HELPERS
# ============================================================================

def _repo(container_exists=True):
    service = MagicMock()
    container_client = MagicMock()
    container_client.exists.return_value = container_exists
    blob_client = MagicMock()
    blob_client.url = "https://acct.blob.core.windows.net/c/test.txt"
    container_client.get_blob_client.return_value = blob_client
    service.get_container_client.return_value = container_client
    return BlobRepository(service), service, container_client, blob_client


# ============================================================================
# BLOB REPOSITORY
# ============================================================================

class TestBlobRepository:
    """Container bootstrap and upload."""

    def test_missing_connection_string(self):
        with pytest.raises(BlobUploadError, match="AZURE_STORAGE_CONNECTION_STRING is not set"):
            BlobRepository.from_connection_string(None)

    def test_empty_connection_string(self):
        with pytest.raises(BlobUploadError):
            BlobRepository.from_connection_string("")

    def test_from_connection_string(self):
        with patch("azure.storage.blob.BlobServiceClient.from_connection_string") as factory:
            BlobRepository.from_connection_string("UseDevelopmentStorage=true")

        factory.assert_called_once_with("UseDevelopmentStorage=true")

    def test_ensure_container_creates_when_absent(self):
        repo, _, container_client, _ = _repo(container_exists=False)

        assert repo.ensure_container("out") is True
        container_client.create_container.assert_called_once_with()

    def test_ensure_container_noop_when_present(self):
        repo, _, container_client, _ = _repo(container_exists=True)

        assert repo.ensure_container("out") is False
        container_client.create_container.assert_not_called()

    def test_container_client_cached(self):
        repo, service, _, _ = _repo()

        repo.ensure_container("out")
        repo.upload_text("out", "a.txt", "x")

        service.get_container_client.assert_called_once_with("out")

    def test_upload_text_sets_content_type(self):
        repo, _, container_client, blob_client = _repo()

        url = repo.upload_text("out", "a.txt", "héllo")

        container_client.get_blob_client.assert_called_once_with("a.txt")
        args, kwargs = blob_client.upload_blob.call_args
        assert args[0] == "héllo".encode("utf-8")
        assert kwargs["content_settings"].content_type == "text/plain"
        assert url == blob_client.url

    def test_upload_never_overwrites(self):
        repo, _, _, blob_client = _repo()

        repo.upload_bytes("out", "a.bin", b"\x00")

        assert blob_client.upload_blob.call_args[1].get("overwrite", False) is False

    def test_logs_as_storage_component(self, caplog):
        repo, _, _, _ = _repo(container_exists=False)

        with caplog.at_level("INFO", logger="infrastructure.storage"):
            repo.ensure_container("out")

        assert caplog.records
        assert all(r.extra["component"] == "storage" for r in caplog.records)


# ============================================================================
# UPLOADER
# ============================================================================

class TestUploader:
    """Generated artifact and the run sequence."""

    def test_file_name_format(self):
        assert re.fullmatch(r"test-\d{13}-[0-9a-f]{6}\.txt", generate_file_name())

    def test_file_content_template(self):
        now = datetime(2026, 9, 17, 12, 0, 0, 123456, tzinfo=timezone.utc)
        lines = generate_file_content(now).splitlines()

        assert lines[0] == "AZURE BLOB STORAGE TEST"
        assert lines[1] == "======================"
        assert lines[2] == "Time        : 2026-09-17T12:00:00.123Z"
        assert lines[3].startswith("Platform    : ")
        assert lines[4].startswith("Python      : ")
        assert lines[5].startswith("PID         : ")

    def test_config_defaults(self, monkeypatch):
        monkeypatch.delenv("AZURE_STORAGE_CONNECTION_STRING", raising=False)
        monkeypatch.setenv("AZURE_STORAGE_CONTAINER", "")

        config = UploaderConfig.from_env()

        assert config.connection_string is None
        assert config.container_name == DEFAULT_CONTAINER_NAME == "streakjs-internal"

    def test_run_ensures_then_uploads(self):
        repo = MagicMock()
        repo.ensure_container.return_value = True
        repo.upload_text.return_value = "https://acct/out/x.txt"
        factory = MagicMock(return_value=repo)

        result = BlobUploader(UploaderConfig("conn", "out"), repository_factory=factory).run()

        factory.assert_called_once_with("conn")
        repo.ensure_container.assert_called_once_with("out")
        container, blob_name, content = repo.upload_text.call_args[0]
        assert container == "out"
        assert blob_name == result.blob_name
        assert content.startswith("AZURE BLOB STORAGE TEST")
        assert repo.upload_text.call_args[1]["content_type"] == "text/plain"
        assert result.container_created is True
        assert result.url == "https://acct/out/x.txt"

    def test_run_propagates_storage_errors(self):
        repo = MagicMock()
        repo.ensure_container.side_effect = RuntimeError("AuthorizationFailure")

        with pytest.raises(RuntimeError):
            BlobUploader(UploaderConfig("conn"), repository_factory=lambda c: repo).run()

        repo.upload_text.assert_not_called()


# ============================================================================
# ENTRY POINT
# ============================================================================

class TestMain:
    """Process exit codes."""

    @patch("container.main.configure_logging")
    def test_missing_connection_string_exits_1(self, _logging, monkeypatch):
        monkeypatch.delenv("AZURE_STORAGE_CONNECTION_STRING", raising=False)

        assert container_main.main() == 1

    @patch("container.main.configure_logging")
    @patch("container.main.BlobUploader")
    def test_success_exits_0(self, uploader_cls, _logging, monkeypatch):
        monkeypatch.setenv("AZURE_STORAGE_CONNECTION_STRING", "conn")
        uploader_cls.return_value.run.return_value = MagicMock(
            container_name="out", blob_name="test-1.txt"
        )

        assert container_main.main() == 0

    @patch("container.main.configure_logging")
    @patch("container.main.BlobUploader")
    def test_storage_error_exits_1(self, uploader_cls, _logging, monkeypatch):
        monkeypatch.setenv("AZURE_STORAGE_CONNECTION_STRING", "conn")
        uploader_cls.return_value.run.side_effect = RuntimeError("ContainerBeingDeleted")

        assert container_main.main() == 1

    @pytest.mark.parametrize("log_format,expected", [("json", True), ("JSON", True), ("", False)])
    @patch("container.main.configure_logging")
    @patch("container.main.BlobUploader")
    def test_log_format_selects_json(self, uploader_cls, configure, monkeypatch, log_format, expected):
        monkeypatch.setenv("LOG_LEVEL", "DEBUG")
        monkeypatch.setenv("LOG_FORMAT", log_format)

        container_main.main()

        configure.assert_called_once_with(level="DEBUG", json_output=expected)
