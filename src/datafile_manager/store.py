"""On-disk blob store keyed by (folder, id).

Entries are raw byte payloads stored as plain files:

    <root>/<id>
    <root>/<folder>/<id>

Directories are created on first write. Every operation is synchronous and
never raises: failures degrade to None (or a no-op for deletes) and the
reason is handed to the store's failure sink, which logs by default.

No locking is done. Two writers to the same key race and the last one wins;
a crash during a write can leave a partial file.
"""

from __future__ import annotations
import logging
import os
import shutil
from pathlib import Path
from typing import Callable, List, Optional, Union

from .config import StoreConfig, load_store_config
from .errors import (
    DataFileError,
    EntryIOError,
    EntryNotFoundError,
    InvalidIdentifierError,
    InvalidInputError,
    InvalidPayloadError,
    InvalidSourceError,
    SourceReadError,
)
from .outcome import Outcome, T
from .paths import resolve_entry, resolve_folder, resolve_root

logger = logging.getLogger(__name__)

FailureSink = Callable[[DataFileError], None]
BytesLike = Union[bytes, bytearray, memoryview]
PathLike = Union[str, "os.PathLike[str]"]


def log_failure(error: DataFileError) -> None:
    """Default failure sink.

    Missing entries and rejected arguments are routine and go to DEBUG;
    filesystem failures go to WARNING.
    """
    if isinstance(error, (EntryNotFoundError, InvalidInputError)):
        logger.debug("%s", error)
    else:
        logger.warning("%s", error)


class DataFileManager:
    """
    Blob store rooted at ``config.root``.

    Attributes:
        config: Store configuration (base directory and namespace)
        root: Root directory of the store

    Example:
        store = DataFileManager(StoreConfig(base_dir=Path("/tmp/data")))
        store.write(b"payload", "report", folder="2024")
        store.read("report", folder="2024")   # b"payload"
    """

    def __init__(
        self,
        config: Optional[StoreConfig] = None,
        on_failure: Optional[FailureSink] = None,
    ):
        """
        Initialize the store. Nothing is created on disk until the first write.

        Args:
            config: Store configuration. If None, loaded from the config file
                and environment via load_store_config().
            on_failure: Callable receiving the reason whenever an operation
                degrades to None or a no-op. Defaults to logging.
        """
        self.config = config if config is not None else load_store_config()
        self._on_failure = on_failure or log_failure

    @property
    def root(self) -> Path:
        return self.config.root

    def __repr__(self) -> str:
        return f"DataFileManager(root={str(self.root)!r})"

    # ---- Internal helpers -----------------------------------------------

    def _report(self, outcome: Outcome[T]) -> Optional[T]:
        """Hand a failure to the sink and unwrap the outcome."""
        if outcome.error is not None:
            self._on_failure(outcome.error)
        return outcome.value

    def _write_bytes(
        self,
        data: Optional[BytesLike],
        entry_id: Optional[str],
        folder: Optional[str],
        operation: str,
    ) -> Outcome[Path]:
        if not isinstance(data, (bytes, bytearray, memoryview)):
            return Outcome.absent(InvalidPayloadError(operation, type(data).__name__))

        resolved = resolve_entry(self.root, entry_id, folder, create_if_needed=True, operation=operation)
        if not resolved.ok:
            return resolved

        path = resolved.value
        payload = bytes(data)
        try:
            path.write_bytes(payload)
        except OSError as e:
            return Outcome.absent(EntryIOError(path, "write", e))

        logger.debug("Wrote %d bytes to %s", len(payload), path)
        return Outcome.success(path)

    def _read_bytes(self, entry_id: Optional[str], folder: Optional[str], operation: str) -> Outcome[bytes]:
        resolved = resolve_entry(self.root, entry_id, folder, operation=operation)
        if not resolved.ok:
            return resolved

        path = resolved.value
        try:
            return Outcome.success(path.read_bytes())
        except FileNotFoundError:
            return Outcome.absent(EntryNotFoundError(path))
        except OSError as e:
            return Outcome.absent(EntryIOError(path, "read", e))

    def _list_dir(self, directory: Outcome[Path]) -> Outcome[List[str]]:
        if not directory.ok:
            return directory

        path = directory.value
        try:
            # Sorted so listings don't depend on filesystem enumeration order
            return Outcome.success(sorted(child.name for child in path.iterdir()))
        except FileNotFoundError:
            return Outcome.absent(EntryNotFoundError(path))
        except OSError as e:
            return Outcome.absent(EntryIOError(path, "list", e))

    def _remove_tree(self, directory: Outcome[Path], operation: str) -> None:
        if not directory.ok:
            self._on_failure(directory.error)
            return

        path = directory.value
        if not path.exists():
            return

        try:
            shutil.rmtree(path)
        except OSError as e:
            self._on_failure(EntryIOError(path, operation, e))
            return
        logger.debug("Removed %s", path)

    # ---- Writing ----------------------------------------------------------

    def write(
        self,
        data: Optional[BytesLike],
        entry_id: Optional[str],
        folder: Optional[str] = None,
    ) -> Optional[Path]:
        """
        Store a payload, replacing anything already stored under the key.

        Args:
            data: Payload to store (bytes-like; may be empty)
            entry_id: Entry identifier, used verbatim as the file name
            folder: Optional folder to store the entry in

        Returns:
            Path of the stored entry, or None if the payload or identifier is
            missing, a directory couldn't be created, or the write failed
        """
        return self._report(self._write_bytes(data, entry_id, folder, "write"))

    def write_from_external_location(
        self,
        source_path: Optional[PathLike],
        entry_id: Optional[str],
        folder: Optional[str] = None,
        remove_source: bool = True,
    ) -> Optional[Path]:
        """
        Store the contents of an existing file.

        The source is read completely before anything is written. Removing
        the source afterwards is best-effort: a failure is reported but the
        stored path is still returned.

        Args:
            source_path: File to read the payload from
            entry_id: Entry identifier
            folder: Optional folder to store the entry in
            remove_source: Delete the source file after a successful store

        Returns:
            Path of the stored entry, or None if inputs are missing, the source
            couldn't be read, or the write failed
        """
        operation = "write from external location"
        if not entry_id or not isinstance(entry_id, str):
            self._on_failure(InvalidIdentifierError(operation))
            return None
        if source_path is None or source_path == "":
            self._on_failure(InvalidSourceError(operation))
            return None

        source = Path(source_path)
        try:
            data = source.read_bytes()
        except OSError as e:
            self._on_failure(SourceReadError(source, e))
            return None

        dest = self._report(self._write_bytes(data, entry_id, folder, operation))
        if dest is None or not remove_source:
            return dest

        if _same_file(source, dest):
            logger.debug("Source %s is the stored entry; not removing it", source)
            return dest

        try:
            source.unlink()
        except OSError as e:
            self._on_failure(EntryIOError(source, "remove source", e))
        return dest

    # ---- Reading ----------------------------------------------------------

    def read(self, entry_id: Optional[str], folder: Optional[str] = None) -> Optional[bytes]:
        """
        Load a stored payload.

        Returns:
            The payload, or None if the entry doesn't exist or can't be read
        """
        return self._report(self._read_bytes(entry_id, folder, "read"))

    def locate(self, entry_id: Optional[str], folder: Optional[str] = None) -> Optional[Path]:
        """
        Find the path of a stored entry.

        The entry is opened for reading to confirm it is accessible; its
        contents are not loaded.

        Returns:
            Path of the entry, or None if it doesn't exist or can't be read
        """
        resolved = resolve_entry(self.root, entry_id, folder, operation="locate")
        if not resolved.ok:
            return self._report(resolved)

        path = resolved.value
        try:
            with path.open("rb"):
                pass
        except FileNotFoundError:
            return self._report(Outcome.absent(EntryNotFoundError(path)))
        except OSError as e:
            return self._report(Outcome.absent(EntryIOError(path, "read", e)))
        return path

    def exists(self, entry_id: Optional[str], folder: Optional[str] = None) -> bool:
        """Check whether an entry is stored and readable."""
        return self.locate(entry_id, folder) is not None

    def path_for(self, entry_id: Optional[str], folder: Optional[str] = None) -> Optional[Path]:
        """Path an entry would be stored at, without touching the filesystem."""
        return self._report(resolve_entry(self.root, entry_id, folder, operation="path for"))

    # ---- Listing ----------------------------------------------------------

    def list_folder_contents(self, folder: Optional[str]) -> Optional[List[str]]:
        """
        List the immediate children of a folder.

        Returns:
            Names sorted in code-point order (an empty folder gives []), or
            None if the folder doesn't exist or can't be listed
        """
        directory = resolve_folder(self.root, folder, create_if_needed=False, operation="list folder")
        return self._report(self._list_dir(directory))

    def list_root_contents(self) -> Optional[List[str]]:
        """
        List folders and folder-less entries directly under the root.

        Returns:
            Sorted names, or None if the root doesn't exist
        """
        return self._report(self._list_dir(resolve_root(self.root, create_if_needed=False)))

    # ---- Deleting ---------------------------------------------------------

    def delete_entry(self, entry_id: Optional[str], folder: Optional[str] = None) -> None:
        """
        Delete a stored entry.

        A missing entry is a no-op. Failures are reported, never raised.
        Folders are never removed by this method.
        """
        resolved = resolve_entry(self.root, entry_id, folder, operation="delete entry")
        if not resolved.ok:
            self._on_failure(resolved.error)
            return

        path = resolved.value
        if not path.exists() and not path.is_symlink():
            return

        try:
            path.unlink()
        except OSError as e:
            self._on_failure(EntryIOError(path, "delete", e))
            return
        logger.debug("Deleted %s", path)

    def delete_folder(self, folder: Optional[str]) -> None:
        """
        Delete a folder and every entry in it.

        A missing folder is a no-op. Names that aren't a single directory
        name ("", ".", "..", anything with a separator) are rejected so this
        can never remove the root or anything above it.
        """
        directory = resolve_folder(self.root, folder, create_if_needed=False, operation="delete folder")
        self._remove_tree(directory, "delete folder")

    def delete_all(self) -> None:
        """Delete the root directory and everything the store has written."""
        self._remove_tree(resolve_root(self.root, create_if_needed=False), "delete root")


def _same_file(a: Path, b: Path) -> bool:
    try:
        return os.path.samefile(a, b)
    except OSError:
        return False
