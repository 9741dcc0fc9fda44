"""Shared test fixtures and utilities."""

import json
from pathlib import Path
import pytest

from datafile_manager.config import StoreConfig
from datafile_manager.constants import ENV_BASE_DIR, ENV_NAMESPACE
from datafile_manager.store import DataFileManager


@pytest.fixture(autouse=True)
def isolated_config(tmp_path, monkeypatch):
    """Keep tests away from the real documents and config directories."""
    monkeypatch.delenv(ENV_BASE_DIR, raising=False)
    monkeypatch.delenv(ENV_NAMESPACE, raising=False)
    monkeypatch.delenv("DEBUG", raising=False)
    monkeypatch.setattr(
        "datafile_manager.config.default_config_path",
        lambda: tmp_path / "user-config" / "config.yaml",
    )


@pytest.fixture
def base_dir(tmp_path):
    """Base directory standing in for the user documents directory."""
    path = tmp_path / "documents"
    path.mkdir()
    return path


@pytest.fixture
def failures():
    """Collect failure reasons handed to a store's sink."""
    return []


@pytest.fixture
def store(base_dir, failures):
    """Store rooted under base_dir that records its failures."""
    return DataFileManager(StoreConfig(base_dir=base_dir), on_failure=failures.append)


@pytest.fixture
def encode():
    """Encode a record the way callers serialize payloads before storing."""
    def _encode(name: str, value: int = 0) -> bytes:
        return json.dumps({"name": name, "value": value}).encode()
    return _encode


@pytest.fixture
def write_file(tmp_path):
    """Factory fixture to write source files relative to tmp_path."""
    def _write(path: str, content: bytes = b"test content") -> Path:
        file_path = tmp_path / "sources" / path
        file_path.parent.mkdir(parents=True, exist_ok=True)
        file_path.write_bytes(content)
        return file_path
    return _write
