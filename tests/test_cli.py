"""Tests for CLI commands - upload, download, check, rename, delete, config."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from unittest.mock import MagicMock, patch

import pytest
from click.testing import CliRunner

from sftpbatch.client.cli import cli, setup_logging
from sftpbatch.client.cli.transfer import EXIT_TIMEOUT, FilePairType
from sftpbatch.client.types import UploadTimeoutError
from sftpbatch.core.types import FilePair


@pytest.fixture
def runner() -> CliRunner:
    """Create a CLI test runner."""
    return CliRunner()


@pytest.fixture
def config_dir(tmp_path: Path):
    """Point the config directory at a temporary location."""
    with patch("sftpbatch.client.cli.config.get_config_dir", return_value=tmp_path):
        yield tmp_path


@pytest.fixture
def mock_client(config_dir: Path):
    """Replace the Client used by commands with a mock."""
    with patch("sftpbatch.client.cli.transfer.Client") as client_cls:
        client = client_cls.return_value
        client.config.batch_size = 50
        yield client_cls


class TestFilePairType:
    """Tests for SOURCE:TARGET parsing."""

    def test_parses_pair(self) -> None:
        """Should split on the colon."""
        assert FilePairType().convert("a.txt:/in/a.txt", None, None) == FilePair("a.txt", "/in/a.txt")

    def test_keeps_drive_letter(self) -> None:
        """Should split on the last colon."""
        pair = FilePairType().convert(r"C:\data\a.txt:/in/a.txt", None, None)
        assert pair == FilePair(r"C:\data\a.txt", "/in/a.txt")

    def test_rejects_missing_target(self, runner: CliRunner, mock_client: MagicMock) -> None:
        """Should fail as a usage error without a colon."""
        result = runner.invoke(cli, ["--host", "h", "upload", "a.txt"])
        assert result.exit_code == 2
        assert "SOURCE:TARGET" in result.output


class TestUploadCommand:
    """Tests for 'sftpbatch upload'."""

    def test_simple_upload(self, runner: CliRunner, mock_client: MagicMock) -> None:
        """Should upload all pairs in one call without batching."""
        mock_client.return_value.upload_files.return_value = True
        result = runner.invoke(cli, ["--host", "h", "--user", "u", "upload", "a:/a", "b:/b"])

        assert result.exit_code == 0
        assert "Upload of 2 files succeeded." in result.output
        mock_client.return_value.upload_files.assert_called_once_with(
            [FilePair("a", "/a"), FilePair("b", "/b")], batch_size=None, timeout=None
        )
        params = mock_client.call_args.args[0]
        assert params.host == "h"
        assert params.username == "u"
        assert params.port == 22

    def test_batched_upload(self, runner: CliRunner, mock_client: MagicMock) -> None:
        """Should pass batch size, timeout and worker count through."""
        mock_client.return_value.upload_files.return_value = True
        result = runner.invoke(
            cli,
            ["--host", "h", "upload", "a:/a", "--batch-size", "5", "--timeout", "30", "--workers", "2"],
        )

        assert result.exit_code == 0
        mock_client.return_value.upload_files.assert_called_once_with(
            [FilePair("a", "/a")], batch_size=5, timeout=30.0
        )
        assert mock_client.call_args.kwargs["config"].max_workers == 2

    def test_timeout_alone_enables_batching(self, runner: CliRunner, mock_client: MagicMock) -> None:
        """A timeout without batch size should use the configured batch size."""
        mock_client.return_value.upload_files.return_value = True
        result = runner.invoke(cli, ["--host", "h", "upload", "a:/a", "--timeout", "10"])
        assert result.exit_code == 0
        mock_client.return_value.upload_files.assert_called_once_with(
            [FilePair("a", "/a")], batch_size=50, timeout=10.0
        )

    def test_failure_exit_code(self, runner: CliRunner, mock_client: MagicMock) -> None:
        """A False verdict should exit with 1."""
        mock_client.return_value.upload_files.return_value = False
        result = runner.invoke(cli, ["--host", "h", "upload", "a:/a"])
        assert result.exit_code == 1
        assert "failed for one or more files" in result.output

    def test_timeout_exit_code(self, runner: CliRunner, mock_client: MagicMock) -> None:
        """A timeout should exit with EXIT_TIMEOUT and print the error."""
        mock_client.return_value.upload_files.side_effect = UploadTimeoutError(3, 10)
        result = runner.invoke(cli, ["--host", "h", "upload", "a:/a", "--batch-size", "1"])
        assert result.exit_code == EXIT_TIMEOUT
        assert "timed out after 10 seconds" in result.output

    def test_connection_error_exit_code(self, runner: CliRunner, mock_client: MagicMock) -> None:
        """Connection errors should be reported, not dumped as tracebacks."""
        mock_client.return_value.upload_files.side_effect = ConnectionRefusedError("refused")
        result = runner.invoke(cli, ["--host", "h", "upload", "a:/a"])
        assert result.exit_code == 1
        assert "refused" in result.output

    def test_missing_host(self, runner: CliRunner, mock_client: MagicMock) -> None:
        """Should fail with a usage error if no host is known."""
        result = runner.invoke(cli, ["upload", "a:/a"])
        assert result.exit_code == 2
        assert "No host given" in result.output

    def test_port_zero_rejected(self, runner: CliRunner, mock_client: MagicMock) -> None:
        """An explicit --port 0 should reach validation instead of falling back to 22."""
        result = runner.invoke(cli, ["--host", "h", "--port", "0", "upload", "a:/a"])
        assert result.exit_code == 2
        assert "port" in result.output
        mock_client.assert_not_called()

    def test_password_from_env(self, runner: CliRunner, mock_client: MagicMock) -> None:
        """Should read the password from SFTPBATCH_PASSWORD."""
        mock_client.return_value.upload_files.return_value = True
        result = runner.invoke(
            cli, ["--host", "h", "upload", "a:/a"], env={"SFTPBATCH_PASSWORD": "s3cret"}
        )
        assert result.exit_code == 0
        assert mock_client.call_args.args[0].password == "s3cret"


class TestOtherCommands:
    """Tests for download, check, rename and delete."""

    def test_download(self, runner: CliRunner, mock_client: MagicMock) -> None:
        """Should download pairs."""
        mock_client.return_value.download_files.return_value = True
        result = runner.invoke(cli, ["--host", "h", "download", "out/a:/a"])
        assert result.exit_code == 0
        mock_client.return_value.download_files.assert_called_once_with(
            [FilePair("out/a", "/a")], batch_size=None, timeout=None
        )

    def test_check(self, runner: CliRunner, mock_client: MagicMock) -> None:
        """Should check every path."""
        mock_client.return_value.check_files.return_value = False
        result = runner.invoke(cli, ["--host", "h", "check", "/a", "/b"])
        assert result.exit_code == 1
        mock_client.return_value.check_files.assert_called_once_with(["/a", "/b"])

    def test_rename(self, runner: CliRunner, mock_client: MagicMock) -> None:
        """Should rename SOURCE:TARGET pairs."""
        mock_client.return_value.rename_files.return_value = True
        result = runner.invoke(cli, ["--host", "h", "rename", "/old:/new"])
        assert result.exit_code == 0
        mock_client.return_value.rename_files.assert_called_once_with([FilePair("/old", "/new")])

    def test_delete(self, runner: CliRunner, mock_client: MagicMock) -> None:
        """Should delete every path."""
        mock_client.return_value.delete_files.return_value = True
        result = runner.invoke(cli, ["--host", "h", "delete", "/a"])
        assert result.exit_code == 0
        assert "Delete of 1 files succeeded." in result.output


class TestConfigCommand:
    """Tests for 'sftpbatch config'."""

    def test_show_empty(self, runner: CliRunner, config_dir: Path) -> None:
        """Should say nothing is saved."""
        result = runner.invoke(cli, ["config", "show"])
        assert result.exit_code == 0
        assert "No configuration saved" in result.output

    def test_set_and_show(self, runner: CliRunner, config_dir: Path) -> None:
        """Should persist typed values and show them."""
        assert runner.invoke(cli, ["config", "set", "host", "sftp.example.com"]).exit_code == 0
        assert runner.invoke(cli, ["config", "set", "port", "2222"]).exit_code == 0

        saved = json.loads((config_dir / "config.json").read_text())
        assert saved == {"host": "sftp.example.com", "port": 2222}

        result = runner.invoke(cli, ["config", "show"])
        assert "host = sftp.example.com" in result.output
        assert "port = 2222" in result.output

    def test_set_invalid_value(self, runner: CliRunner, config_dir: Path) -> None:
        """Should reject values of the wrong type."""
        result = runner.invoke(cli, ["config", "set", "batch_size", "many"])
        assert result.exit_code == 1
        assert not (config_dir / "config.json").exists()

    def test_saved_config_used(
        self, runner: CliRunner, config_dir: Path, mock_client: MagicMock
    ) -> None:
        """Saved host, port and batch settings should be used as defaults."""
        (config_dir / "config.json").write_text(
            json.dumps({"host": "saved-host", "port": 2022, "username": "bob", "timeout": 15})
        )
        mock_client.return_value.check_files.return_value = True

        result = runner.invoke(cli, ["check", "/a"])

        assert result.exit_code == 0
        params = mock_client.call_args.args[0]
        assert (params.host, params.port, params.username) == ("saved-host", 2022, "bob")
        assert mock_client.call_args.kwargs["config"].timeout == 15


class TestSetupLogging:
    """Tests for setup_logging()."""

    def test_does_not_duplicate_handlers(self) -> None:
        """Repeated setup should leave exactly one handler."""
        setup_logging()
        setup_logging(verbose=True)
        logger = logging.getLogger("sftpbatch")
        assert len(logger.handlers) == 1
        assert logger.level == logging.DEBUG
