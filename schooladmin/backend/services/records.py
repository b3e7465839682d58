"""Record services – per-entity CRUD on top of a :class:`RecordStore`.

The services add the bookkeeping timestamps each entity carries and the
person-specific lookups; everything else is passed straight to the store.
"""

from __future__ import annotations

import logging
from datetime import date, datetime, timezone
from typing import Any

from schooladmin.backend.core.storage import RESOURCES, RecordStore, UnknownResourceError

logger = logging.getLogger(__name__)

# Resources stamped with createdAt/updatedAt dates on create, updatedAt on update
_DATED = {"organisations", "batches", "courses"}
# Resources stamped with a createdAt timestamp on create only
_TIMESTAMPED = {"users", "payments", "receipts"}

STUDENT_PREFIX = "STU"
TUTOR_PREFIX = "TUT"


def _today() -> str:
    return date.today().isoformat()


def _now() -> str:
    return datetime.now(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


class RecordService:
    """CRUD access to one resource."""

    def __init__(self, store: RecordStore, resource: str):
        if resource not in RESOURCES:
            raise UnknownResourceError(resource)
        self.store = store
        self.resource = resource

    def get_all(self) -> list[dict[str, Any]]:
        return self.store.list(self.resource)

    def get_by_id(self, record_id: int) -> dict[str, Any]:
        return self.store.get_by_id(self.resource, record_id)

    def create(self, record: dict[str, Any]) -> dict[str, Any]:
        payload = {k: v for k, v in record.items() if k != "id"}
        if self.resource in _DATED:
            payload["createdAt"] = payload["updatedAt"] = _today()
        elif self.resource in _TIMESTAMPED:
            payload["createdAt"] = _now()
        return self.store.create(self.resource, payload)

    def update(self, record_id: int, changes: dict[str, Any]) -> dict[str, Any]:
        payload = {k: v for k, v in changes.items() if k != "id"}
        if self.resource in _DATED:
            payload["updatedAt"] = _today()
        return self.store.update(self.resource, record_id, payload)

    def replace(self, record_id: int, record: dict[str, Any]) -> dict[str, Any]:
        """Overwrite a record wholesale; keys missing from ``record`` are dropped."""
        payload = {k: v for k, v in record.items() if k != "id"}
        if self.resource in _DATED:
            payload["updatedAt"] = _today()
        return self.store.replace(self.resource, record_id, payload)

    def delete(self, record_id: int) -> None:
        self.store.delete(self.resource, record_id)


class PersonService(RecordService):
    """Staff and students share one resource, told apart by reg-no prefix."""

    def __init__(self, store: RecordStore):
        super().__init__(store, "persons")

    def get_by_reg_no(self, reg_no: str) -> list[dict[str, Any]]:
        return [p for p in self.get_all() if p.get("regNo") == reg_no]

    def get_students(self) -> list[dict[str, Any]]:
        return [p for p in self.get_all() if str(p.get("regNo", "")).startswith(STUDENT_PREFIX)]

    def get_tutors(self) -> list[dict[str, Any]]:
        return [p for p in self.get_all() if str(p.get("regNo", "")).startswith(TUTOR_PREFIX)]


def service_for(store: RecordStore, resource: str) -> RecordService:
    """Return the service class appropriate for ``resource``."""
    if resource == "persons":
        return PersonService(store)
    return RecordService(store, resource)
