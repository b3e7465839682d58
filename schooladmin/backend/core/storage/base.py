"""
Record store interface.

Both the on-disk local store and the REST client implement the same five
operations, so services and tables never care which one they talk to.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any

RESOURCES: tuple[str, ...] = (
    "users",
    "organisations",
    "persons",
    "batches",
    "courses",
    "payments",
    "receipts",
)


class RecordStore(ABC):
    """CRUD access to record collections keyed by resource name."""

    @abstractmethod
    def list(self, resource: str) -> list[dict[str, Any]]:
        """Return every record of ``resource`` in insertion order."""

    @abstractmethod
    def get_by_id(self, resource: str, record_id: int) -> dict[str, Any]:
        """Return one record; raise ``RecordNotFoundError`` if absent."""

    @abstractmethod
    def create(self, resource: str, record: dict[str, Any]) -> dict[str, Any]:
        """Insert ``record`` with a newly assigned id and return it."""

    @abstractmethod
    def update(self, resource: str, record_id: int, changes: dict[str, Any]) -> dict[str, Any]:
        """Merge ``changes`` into an existing record and return the result."""

    @abstractmethod
    def replace(self, resource: str, record_id: int, record: dict[str, Any]) -> dict[str, Any]:
        """Overwrite an existing record with ``record``, keeping only its id."""

    @abstractmethod
    def delete(self, resource: str, record_id: int) -> None:
        """Remove a record; raise ``RecordNotFoundError`` if absent."""

    def close(self) -> None:
        """Release any held resources."""
