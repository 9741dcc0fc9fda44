"""Tests for the datafile CLI."""

from pathlib import Path

import pytest
from typer.testing import CliRunner

from datafile_manager.cli import app
from datafile_manager.config import StoreConfig
from datafile_manager.store import DataFileManager


runner = CliRunner()


@pytest.fixture
def invoke(base_dir):
    """Run the CLI against the test store."""
    def _invoke(*args, **kwargs):
        return runner.invoke(app, ["--base-dir", str(base_dir), *args], **kwargs)
    return _invoke


@pytest.fixture
def cli_store(base_dir):
    """Store seen by the CLI, for setup and verification."""
    return DataFileManager(StoreConfig(base_dir=base_dir))


class TestWhere:
    def test_prints_root(self, invoke, base_dir):
        result = invoke("where")

        assert result.exit_code == 0
        assert result.stdout.strip() == str(base_dir / "DataFileManager")

    def test_namespace_option(self, invoke, base_dir):
        result = invoke("--namespace", "Albums", "where")
        assert result.stdout.strip() == str(base_dir / "Albums")

    def test_invalid_namespace(self, invoke):
        """Bad configuration exits with an error."""
        result = invoke("--namespace", "..", "where")

        assert result.exit_code == 1
        assert "Invalid namespace" in result.output


class TestPut:
    def test_put_copies_file(self, invoke, cli_store, write_file):
        """put stores a file and keeps the source by default."""
        source = write_file("report.json", b'{"name": "TestB"}')

        result = invoke("put", "report", str(source), "--folder", "2024")

        assert result.exit_code == 0
        assert "Stored 2024/report" in result.output
        assert cli_store.read("report", folder="2024") == b'{"name": "TestB"}'
        assert source.exists()

    def test_put_move(self, invoke, cli_store, write_file):
        """--move deletes the source after storing."""
        source = write_file("tmp.bin", b"moved")

        result = invoke("put", "blob", str(source), "--move")

        assert result.exit_code == 0
        assert cli_store.read("blob") == b"moved"
        assert not source.exists()

    def test_put_stdin(self, invoke, cli_store):
        """- reads the payload from stdin."""
        result = invoke("put", "blob", "-", input=b"\x00\x01binary")

        assert result.exit_code == 0
        assert cli_store.read("blob") == b"\x00\x01binary"

    def test_put_missing_source(self, invoke, cli_store, tmp_path):
        """Unreadable source is an error."""
        result = invoke("put", "blob", str(tmp_path / "missing.bin"))

        assert result.exit_code == 1
        assert "Couldn't store blob" in result.output
        assert cli_store.read("blob") is None


class TestReadCommands:
    def test_cat(self, invoke, cli_store):
        """cat writes the raw bytes."""
        cli_store.write(b"\xffraw bytes\n", "Test", folder="FolderA")

        result = invoke("cat", "Test", "-f", "FolderA")

        assert result.exit_code == 0
        assert result.stdout_bytes == b"\xffraw bytes\n"

    def test_cat_missing(self, invoke):
        result = invoke("cat", "Missing")

        assert result.exit_code == 1
        assert "No entry Missing" in result.output

    def test_locate(self, invoke, cli_store):
        path = cli_store.write(b"x", "Test")

        result = invoke("locate", "Test")

        assert result.exit_code == 0
        assert result.stdout.strip() == str(path)

    def test_locate_missing(self, invoke):
        result = invoke("locate", "Test", "--folder", "FolderA")

        assert result.exit_code == 1
        assert "No entry FolderA/Test" in result.output


class TestList:
    def test_ls_folder(self, invoke, cli_store):
        cli_store.write(b"x", "Test", folder="FolderA")
        cli_store.write(b"yy", "BTes", folder="FolderA")

        result = invoke("ls", "FolderA")

        assert result.exit_code == 0
        assert "Test" in result.output
        assert "BTes" in result.output
        assert result.output.index("BTes") < result.output.index("Test")

    def test_ls_root(self, invoke, cli_store):
        cli_store.write(b"x", "Test")
        cli_store.write(b"x", "Test", folder="FolderA")

        result = invoke("ls")

        assert result.exit_code == 0
        assert "FolderA" in result.output
        assert "folder" in result.output
        assert "entry" in result.output

    def test_ls_empty_store(self, invoke):
        result = invoke("ls")

        assert result.exit_code == 0
        assert "Store is empty" in result.output

    def test_ls_missing_folder(self, invoke):
        result = invoke("ls", "Nowhere")

        assert result.exit_code == 1
        assert "No folder Nowhere" in result.output


class TestDeleteCommands:
    def test_rm(self, invoke, cli_store):
        cli_store.write(b"x", "Test")

        result = invoke("rm", "Test")

        assert result.exit_code == 0
        assert cli_store.read("Test") is None

    def test_rm_missing_is_ok(self, invoke):
        result = invoke("rm", "Missing")
        assert result.exit_code == 0

    def test_rmdir(self, invoke, cli_store):
        cli_store.write(b"x", "Test", folder="FolderA")

        result = invoke("rmdir", "FolderA")

        assert result.exit_code == 0
        assert cli_store.list_folder_contents("FolderA") is None

    def test_purge_yes(self, invoke, cli_store):
        cli_store.write(b"x", "Test")
        cli_store.write(b"x", "Test", folder="FolderA")

        result = invoke("purge", "--yes")

        assert result.exit_code == 0
        assert not cli_store.root.exists()

    def test_purge_confirm(self, invoke, cli_store):
        cli_store.write(b"x", "Test")

        result = invoke("purge", input="y\n")

        assert result.exit_code == 0
        assert not cli_store.root.exists()

    def test_purge_declined(self, invoke, cli_store):
        cli_store.write(b"x", "Test")

        result = invoke("purge", input="n\n")

        assert result.exit_code == 1
        assert cli_store.read("Test") == b"x"
