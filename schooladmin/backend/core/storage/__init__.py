"""Data-access layer: one interface, a local and a REST implementation."""

from __future__ import annotations

from typing import Any

from schooladmin.backend.core.storage.base import RESOURCES, RecordStore
from schooladmin.backend.core.storage.errors import (
    RecordNotFoundError,
    StoreError,
    UnknownResourceError,
)
from schooladmin.backend.core.storage.local_store import LocalStore
from schooladmin.backend.core.storage.rest_store import RestStore


def build_store(config: dict[str, Any]) -> RecordStore:
    """
    Create the record store selected by ``config["storage"]["backend"]``.

    Raises:
        ValueError: If the backend name is not ``local`` or ``rest``
    """
    storage = config.get("storage", {})
    backend = storage.get("backend", "local")
    if backend == "local":
        return LocalStore(storage.get("path", "data/school_data.json"))
    if backend == "rest":
        return RestStore(
            storage.get("base_url", "http://localhost:8000/api"),
            timeout=float(storage.get("timeout", 10.0)),
        )
    raise ValueError(f"Unknown storage backend: {backend!r}")


__all__ = [
    "LocalStore",
    "RESOURCES",
    "RecordNotFoundError",
    "RecordStore",
    "RestStore",
    "StoreError",
    "UnknownResourceError",
    "build_store",
]
