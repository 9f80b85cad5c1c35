"""Core ports (interfaces) for autosave.

These protocols define the boundaries between the observable settings,
the persistence trigger and the storage adapters.
"""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from .fields import FieldChanged


@runtime_checkable
class ChangeHandler(Protocol):
    """Subscriber informed of which field changed."""

    def __call__(self, event: "FieldChanged") -> object:
        """Handle a change notification; the return value is ignored."""


@runtime_checkable
class SnapshotWriter(Protocol):
    """Durable storage for an encoded snapshot."""

    async def write(self, path: Path, data: bytes) -> None:
        """Overwrite the file at path with data."""
