"""Path resolution for store entries.

Layout:
    <root>/<id>              entry without a folder
    <root>/<folder>/<id>     entry inside a folder

Resolution is a pure function of its inputs. With create_if_needed=False it
never touches the filesystem; with create_if_needed=True it provisions the
root and folder directories and reports the first directory that couldn't be
created.
"""

from pathlib import Path
from typing import Optional

from .errors import DirectoryProvisioningError, InvalidFolderError, InvalidIdentifierError
from .outcome import Outcome


def is_single_segment(name: Optional[str]) -> bool:
    """True for a name that stays directly under the directory it is joined to."""
    if not name or not isinstance(name, str):
        return False
    return name not in (".", "..") and "/" not in name and "\\" not in name


def _provision(path: Path) -> Optional[DirectoryProvisioningError]:
    """Create a directory and its parents; existing directories are fine."""
    try:
        path.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        return DirectoryProvisioningError(path, e)
    return None


def resolve_root(root: Path, create_if_needed: bool) -> Outcome[Path]:
    """
    Resolve the store root directory.

    Args:
        root: Store root directory
        create_if_needed: Create the directory if it doesn't exist

    Returns:
        Outcome holding the root path, or absent if it couldn't be created
    """
    if create_if_needed:
        error = _provision(root)
        if error:
            return Outcome.absent(error)
    return Outcome.success(root)


def resolve_folder(
    root: Path,
    folder: Optional[str],
    create_if_needed: bool,
    operation: str = "resolve folder",
) -> Outcome[Path]:
    """
    Resolve a folder directory directly under the root.

    Args:
        root: Store root directory
        folder: Folder name (a single path segment)
        create_if_needed: Create root and folder if they don't exist
        operation: Operation name used in failure reasons

    Returns:
        Outcome holding the folder path, or absent for a folder name that
        isn't a single directory name (empty, ".", "..", or containing a
        separator) or a directory that couldn't be created
    """
    if not is_single_segment(folder):
        return Outcome.absent(InvalidFolderError(operation, folder))

    base = resolve_root(root, create_if_needed)
    if not base.ok:
        return base

    folder_path = base.value / folder
    if create_if_needed:
        error = _provision(folder_path)
        if error:
            return Outcome.absent(error)
    return Outcome.success(folder_path)


def resolve_entry(
    root: Path,
    entry_id: Optional[str],
    folder: Optional[str] = None,
    create_if_needed: bool = False,
    operation: str = "resolve entry",
) -> Outcome[Path]:
    """
    Resolve the path of an entry.

    Args:
        root: Store root directory
        entry_id: Entry identifier, used verbatim as the file name
        folder: Optional folder; None or "" place the entry directly under root,
            any other name must be a single directory name
        create_if_needed: Create the containing directories if they don't exist
        operation: Operation name used in failure reasons

    Returns:
        Outcome holding the entry path. Absent for an empty identifier or an
        invalid folder name (no filesystem access attempted) or when a
        directory couldn't be created.
    """
    if not entry_id or not isinstance(entry_id, str):
        return Outcome.absent(InvalidIdentifierError(operation))

    if folder:
        base = resolve_folder(root, folder, create_if_needed, operation)
    else:
        base = resolve_root(root, create_if_needed)

    if not base.ok:
        return base
    return Outcome.success(base.value / entry_id)
