"""Failure reasons for datafile-manager.

Store operations never raise these to their callers. They describe why an
operation degraded to "absent" and are handed to the store's diagnostic sink.
The only exception that escapes the package is ConfigError, raised while a
configuration is being built.
"""

from pathlib import Path
from typing import Optional


class DataFileError(RuntimeError):
    """Base class for all datafile-manager failure reasons."""
    pass


# Input Errors
class InvalidInputError(DataFileError):
    """Base class for arguments rejected before any filesystem access."""
    pass


class InvalidIdentifierError(InvalidInputError):
    """Entry identifier missing or empty."""

    def __init__(self, operation: str):
        self.operation = operation
        super().__init__(f"{operation}: identifier must be a non-empty string")


class InvalidPayloadError(InvalidInputError):
    """Payload missing or not bytes-like."""

    def __init__(self, operation: str, payload_type: str):
        self.operation = operation
        super().__init__(f"{operation}: payload must be bytes-like, got {payload_type}")


class InvalidSourceError(InvalidInputError):
    """External source path missing."""

    def __init__(self, operation: str):
        self.operation = operation
        super().__init__(f"{operation}: source path must be given")


class InvalidFolderError(InvalidInputError):
    """Folder name missing, or not a single directory name."""

    def __init__(self, operation: str, folder: Optional[str] = None):
        self.operation = operation
        self.folder = folder
        super().__init__(f"{operation}: folder must be a single directory name, got {folder!r}")


# Filesystem Errors
class DirectoryProvisioningError(DataFileError):
    """A directory needed by a write could not be created."""

    def __init__(self, path: Path, cause: OSError):
        self.path = path
        self.cause = cause
        super().__init__(f"Couldn't create directory {path}: {cause}")


class EntryNotFoundError(DataFileError):
    """Nothing stored at the resolved path."""

    def __init__(self, path: Path):
        self.path = path
        super().__init__(f"No entry at {path}")


class EntryIOError(DataFileError):
    """Read, write, delete or listing failed on an existing location."""

    def __init__(self, path: Path, operation: str, cause: OSError):
        self.path = path
        self.operation = operation
        self.cause = cause
        super().__init__(f"Failed to {operation} {path}: {cause}")


class SourceReadError(DataFileError):
    """External source file could not be read."""

    def __init__(self, path: Path, cause: OSError):
        self.path = path
        self.cause = cause
        super().__init__(f"Couldn't read source file {path}: {cause}")


# Configuration Errors
class ConfigError(DataFileError):
    """Invalid store configuration."""

    def __init__(self, message: str, source: Optional[str] = None):
        self.source = source
        if source:
            message = f"{message} (from {source})"
        super().__init__(message)
