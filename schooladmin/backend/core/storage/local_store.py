"""
Local JSON Record Store.

Keeps every resource in a single JSON document on disk, the way the
dashboard kept its data in browser local storage. The file is seeded with
a default admin user and one organisation on first use.
"""

from __future__ import annotations

import copy
import json
import logging
import threading
from datetime import date
from pathlib import Path
from typing import Any

from schooladmin.backend.core.storage.base import RESOURCES, RecordStore
from schooladmin.backend.core.storage.errors import (
    RecordNotFoundError,
    StoreError,
    UnknownResourceError,
)

logger = logging.getLogger(__name__)


def default_data() -> dict[str, list[dict[str, Any]]]:
    """Seed document written when the store file does not exist yet."""
    data: dict[str, list[dict[str, Any]]] = {name: [] for name in RESOURCES}
    data["users"] = [
        {
            "id": 1,
            "username": "admin",
            "password": "admin123",
            "userId": "USR0001",
            "tutorId": None,
            "canLogin": True,
            "role": "admin",
            "createdAt": "2024-01-01T00:00:00.000Z",
        }
    ]
    data["organisations"] = [
        {
            "id": 1,
            "organisationName": "ABC School",
            "address": "123 Main Street, New York",
            "phoneNumber": "9123456789",
            "email": "contact@abcschool.edu",
            "website": "https://www.abcschool.edu",
            "location": "New York, State, Country",
            "latitude": 40.7128,
            "longitude": -74.0060,
            "logo": None,
            "header": None,
            "footer": None,
            "seal": None,
            "remarks": "Premium institution",
            "createdAt": "2024-01-15",
            "updatedAt": "2024-01-15",
        }
    ]
    return data


def _next_id(items: list[dict[str, Any]]) -> int:
    if not items:
        return 1
    return max(int(item.get("id") or 0) for item in items) + 1


class LocalStore(RecordStore):
    """
    JSON-file backed record store.

    Attributes:
        path: Location of the JSON document
    """

    def __init__(self, path: str | Path):
        """
        Open (and seed if needed) the store file.

        Args:
            path: JSON document path; parent directories are created
        """
        self.path = Path(path)
        self._lock = threading.Lock()
        if not self.path.exists():
            self.path.parent.mkdir(parents=True, exist_ok=True)
            self._write(default_data())
            logger.info("Seeded local store at %s", self.path)

    # ── File I/O ────────────────────────────────────────────────────────────

    def _read(self) -> dict[str, list[dict[str, Any]]]:
        try:
            with open(self.path, encoding="utf-8") as f:
                return json.load(f)
        except (OSError, json.JSONDecodeError) as exc:
            raise StoreError(f"Cannot read local store {self.path}: {exc}") from exc

    def _write(self, data: dict[str, list[dict[str, Any]]]) -> None:
        tmp = self.path.with_suffix(self.path.suffix + ".tmp")
        try:
            with open(tmp, "w", encoding="utf-8") as f:
                json.dump(data, f, indent=2)
            tmp.replace(self.path)
        except OSError as exc:
            raise StoreError(f"Cannot write local store {self.path}: {exc}") from exc

    @staticmethod
    def _check(resource: str) -> None:
        if resource not in RESOURCES:
            raise UnknownResourceError(resource)

    @staticmethod
    def _index_of(items: list[dict[str, Any]], resource: str, record_id: int) -> int:
        for i, item in enumerate(items):
            if item.get("id") == record_id:
                return i
        raise RecordNotFoundError(resource, record_id)

    # ── RecordStore ─────────────────────────────────────────────────────────

    def list(self, resource: str) -> list[dict[str, Any]]:
        self._check(resource)
        items = self._read().get(resource, [])
        logger.debug("Loaded %d %s", len(items), resource)
        return copy.deepcopy(items)

    def get_by_id(self, resource: str, record_id: int) -> dict[str, Any]:
        self._check(resource)
        items = self._read().get(resource, [])
        return copy.deepcopy(items[self._index_of(items, resource, record_id)])

    def create(self, resource: str, record: dict[str, Any]) -> dict[str, Any]:
        self._check(resource)
        with self._lock:
            data = self._read()
            items = data.setdefault(resource, [])
            new_item = {**record, "id": _next_id(items)}
            items.append(new_item)
            self._write(data)
        logger.info("Created %s #%d", resource, new_item["id"])
        return copy.deepcopy(new_item)

    def update(self, resource: str, record_id: int, changes: dict[str, Any]) -> dict[str, Any]:
        self._check(resource)
        with self._lock:
            data = self._read()
            items = data.get(resource, [])
            index = self._index_of(items, resource, record_id)
            updated = {
                **items[index],
                **changes,
                "id": record_id,
                "updatedAt": date.today().isoformat(),
            }
            items[index] = updated
            self._write(data)
        logger.info("Updated %s #%d", resource, record_id)
        return copy.deepcopy(updated)

    def replace(self, resource: str, record_id: int, record: dict[str, Any]) -> dict[str, Any]:
        self._check(resource)
        with self._lock:
            data = self._read()
            items = data.get(resource, [])
            index = self._index_of(items, resource, record_id)
            replaced = {**record, "id": record_id, "updatedAt": date.today().isoformat()}
            items[index] = replaced
            self._write(data)
        logger.info("Replaced %s #%d", resource, record_id)
        return copy.deepcopy(replaced)

    def delete(self, resource: str, record_id: int) -> None:
        self._check(resource)
        with self._lock:
            data = self._read()
            items = data.get(resource, [])
            del items[self._index_of(items, resource, record_id)]
            self._write(data)
        logger.info("Deleted %s #%d", resource, record_id)
