"""Tests for the command line front-end."""

from __future__ import annotations

from pathlib import Path
from unittest.mock import MagicMock, patch

import pytest

from s3_object_store import cli
from s3_object_store.errors import NotFoundError
from s3_object_store.services.aws.client import ObjectStoreClient
from s3_object_store.services.aws.models import ObjectEntry

CONNECTION = ["--endpoint", "http://localhost:9000", "--access-key", "key", "--secret-key", "secret"]


@pytest.fixture
def store() -> MagicMock:
    """Patch client construction and return the mocked store."""
    with patch.object(cli.ObjectStoreClient, "from_config") as from_config:
        yield from_config.return_value


class TestCli:
    """Test CLI sub-commands."""

    def test_mb(self, store: MagicMock, capsys: pytest.CaptureFixture[str]) -> None:
        """Test creating a bucket."""
        assert cli.main([*CONNECTION, "mb", "t1"]) == 0

        store.create_bucket.assert_called_once_with("t1")
        assert "t1" in capsys.readouterr().out

    def test_rb(self, store: MagicMock, capsys: pytest.CaptureFixture[str]) -> None:
        """Test removing a bucket."""
        store.delete_bucket.return_value = 3

        assert cli.main([*CONNECTION, "rb", "t1"]) == 0

        assert "3 objects deleted" in capsys.readouterr().out

    def test_ls(self, store: MagicMock, capsys: pytest.CaptureFixture[str]) -> None:
        """Test listing objects and prefixes."""
        store.iter_objects.return_value = iter(
            [ObjectEntry(key="hello.txt", size=2), ObjectEntry(key="photos/", is_prefix=True)]
        )

        assert cli.main([*CONNECTION, "ls", "t1", "--recursive"]) == 0

        store.iter_objects.assert_called_once_with("t1", recursive=True, prefix="")
        out = capsys.readouterr().out.splitlines()
        assert out[0].split() == ["2", "hello.txt"]
        assert out[1].split() == ["PRE", "photos/"]

    def test_put_and_get(self, store: MagicMock) -> None:
        """Test upload and download commands."""
        store.upload_file.return_value = 2

        assert cli.main([*CONNECTION, "put", "t1", "hello.txt", "/tmp/hello.txt"]) == 0
        assert cli.main([*CONNECTION, "get", "t1", "hello.txt", "/tmp/out.txt"]) == 0

        store.upload_file.assert_called_once_with("t1", "hello.txt", "/tmp/hello.txt", content_type=None)
        store.download_file.assert_called_once_with("t1", "hello.txt", "/tmp/out.txt")

    def test_mv_and_rm(self, store: MagicMock) -> None:
        """Test rename and delete commands."""
        assert cli.main([*CONNECTION, "mv", "t1", "old.txt", "new.txt"]) == 0
        assert cli.main([*CONNECTION, "rm", "t1", "new.txt"]) == 0

        store.rename_object.assert_called_once_with("t1", "old.txt", "new.txt")
        store.delete_object.assert_called_once_with("t1", "new.txt")

    def test_share(self, store: MagicMock, capsys: pytest.CaptureFixture[str]) -> None:
        """Test printing a presigned URL."""
        store.generate_presigned_url.return_value = "http://localhost:9000/t1/hello.txt?X-Amz-Expires=60"

        assert cli.main([*CONNECTION, "share", "t1", "hello.txt", "--expire", "60"]) == 0

        store.generate_presigned_url.assert_called_once_with("t1", "hello.txt", 60)
        assert "X-Amz-Expires=60" in capsys.readouterr().out

    def test_error_exit_status(self, store: MagicMock, capsys: pytest.CaptureFixture[str]) -> None:
        """Test that store errors print to stderr and exit with 1."""
        store.delete_object.side_effect = NotFoundError("delete_object failed: NoSuchBucket")

        assert cli.main([*CONNECTION, "rm", "missing", "k"]) == 1

        assert "error:" in capsys.readouterr().err


class TestConnectionSettings:
    """Test connection settings resolution."""

    def test_missing_settings(self, monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]) -> None:
        """Test that missing credentials are reported."""
        for name in ("S3_ENDPOINT", "S3_ACCESS_KEY", "S3_SECRET_KEY"):
            monkeypatch.delenv(name, raising=False)

        assert cli.main(["buckets"]) == 1

        assert "--endpoint" in capsys.readouterr().err

    def test_config_from_args(self) -> None:
        """Test building a ConnectionConfig from flags."""
        args = cli.build_parser().parse_args([*CONNECTION, "--virtual-host", "--secure", "buckets"])

        config = cli.config_from_args(args)

        assert config.endpoint_url == "http://localhost:9000"
        assert config.path_style is False
        assert config.secure is True

    def test_environment_settings(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """Test that session token, addressing and TLS come from the environment."""
        monkeypatch.setenv("S3_SESSION_TOKEN", "tok")
        monkeypatch.setenv("S3_PATH_STYLE", "false")
        monkeypatch.setenv("S3_SECURE", "yes")
        args = cli.build_parser().parse_args([*CONNECTION, "buckets"])

        config = cli.config_from_args(args)

        assert config.session_token == "tok"
        assert config.path_style is False
        assert config.secure is True

    def test_environment_defaults(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """Test path-style addressing and no session token when unset."""
        for name in ("S3_SESSION_TOKEN", "S3_PATH_STYLE", "S3_SECURE"):
            monkeypatch.delenv(name, raising=False)
        args = cli.build_parser().parse_args([*CONNECTION, "buckets"])

        config = cli.config_from_args(args)

        assert config.session_token is None
        assert config.path_style is True
        assert config.secure is False

    def test_session_token_flag(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """Test passing a session token on the command line."""
        monkeypatch.delenv("S3_SESSION_TOKEN", raising=False)
        args = cli.build_parser().parse_args([*CONNECTION, "--session-token", "flag-tok", "buckets"])

        assert cli.config_from_args(args).session_token == "flag-tok"


class TestLocalFileErrors:
    """Test that local filesystem failures end with an error message."""

    def test_get_into_missing_directory(self, tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
        """Test downloading into a directory that does not exist."""
        dest = tmp_path / "nodir" / "x"
        real = ObjectStoreClient("http://localhost:9000", "key", "secret")
        real.client = MagicMock()
        real.client.download_file.side_effect = FileNotFoundError(2, "No such file or directory", f"{dest}.a1b2")

        with patch.object(cli.ObjectStoreClient, "from_config", return_value=real):
            assert cli.main([*CONNECTION, "get", "t1", "k", str(dest)]) == 1

        assert "error:" in capsys.readouterr().err


class TestTracingSetup:
    """Test tracing initialization from the command line."""

    def test_tracing_initialized_with_collector(self, store: MagicMock, monkeypatch: pytest.MonkeyPatch) -> None:
        """Test that an OTLP endpoint turns tracing on."""
        monkeypatch.setenv("OTEL_EXPORTER_OTLP_ENDPOINT", "http://collector:4317")

        with patch.object(cli, "initialize_tracing") as initialize_tracing:
            assert cli.main([*CONNECTION, "buckets"]) == 0

        initialize_tracing.assert_called_once_with()

    def test_tracing_skipped_without_collector(self, store: MagicMock, monkeypatch: pytest.MonkeyPatch) -> None:
        """Test that tracing stays off without an OTLP endpoint."""
        monkeypatch.delenv("OTEL_EXPORTER_OTLP_ENDPOINT", raising=False)

        with patch.object(cli, "initialize_tracing") as initialize_tracing:
            assert cli.main([*CONNECTION, "buckets"]) == 0

        initialize_tracing.assert_not_called()
