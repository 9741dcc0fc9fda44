"""Utility functions for datafile-manager."""

_UNITS = ("KB", "MB", "GB", "TB")


def humanize_size(num_bytes: int) -> str:
    """Format a stored entry's size for listings.

    Byte counts below 1 KB are shown exactly; larger sizes use binary
    units with one decimal, topping out at TB.
    """
    if num_bytes < 1024:
        return f"{num_bytes} B"
    size = float(num_bytes)
    for unit in _UNITS:
        size /= 1024
        if size < 1024 or unit == _UNITS[-1]:
            return f"{size:.1f} {unit}"
