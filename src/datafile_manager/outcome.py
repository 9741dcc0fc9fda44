"""Result type for fallible store steps."""

from dataclasses import dataclass
from typing import Generic, Optional, TypeVar

from .errors import DataFileError

T = TypeVar("T")


@dataclass(frozen=True)
class Outcome(Generic[T]):
    """Either a value or the reason there is none.

    Internal helpers return an Outcome so the failure reason survives long
    enough to be reported; public store methods unwrap it to Optional.
    """
    value: Optional[T] = None
    error: Optional[DataFileError] = None

    @classmethod
    def success(cls, value: T) -> "Outcome[T]":
        return cls(value=value)

    @classmethod
    def absent(cls, error: DataFileError) -> "Outcome[T]":
        return cls(error=error)

    @property
    def ok(self) -> bool:
        return self.error is None
