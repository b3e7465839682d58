"""
REST Record Store.

Talks to the mock REST server (``GET/POST /{resource}``,
``GET/PATCH/DELETE /{resource}/{id}``) over httpx.
"""

from __future__ import annotations

import logging
from typing import Any

import httpx

from schooladmin.backend.core.storage.base import RecordStore
from schooladmin.backend.core.storage.errors import RecordNotFoundError, StoreError

logger = logging.getLogger(__name__)


class RestStore(RecordStore):
    """
    Record store backed by an HTTP API.

    Attributes:
        base_url: API root, e.g. ``http://localhost:8000/api``
    """

    def __init__(
        self,
        base_url: str,
        timeout: float = 10.0,
        client: httpx.Client | None = None,
    ):
        self.base_url = base_url.rstrip("/")
        self._client = client or httpx.Client(base_url=self.base_url, timeout=timeout)

    def _request(
        self,
        method: str,
        path: str,
        resource: str,
        record_id: int | None = None,
        json: dict[str, Any] | None = None,
    ) -> httpx.Response:
        logger.debug("%s %s", method, path)
        try:
            response = self._client.request(method, path, json=json)
        except httpx.HTTPError as exc:
            raise StoreError(f"{method} {path} failed: {exc}") from exc

        if response.status_code == 404 and record_id is not None:
            raise RecordNotFoundError(resource, record_id)
        if response.is_error:
            raise StoreError(f"{method} {path} returned {response.status_code}: {response.text}")
        return response

    def list(self, resource: str) -> list[dict[str, Any]]:
        return self._request("GET", f"/{resource}", resource).json()

    def get_by_id(self, resource: str, record_id: int) -> dict[str, Any]:
        return self._request("GET", f"/{resource}/{record_id}", resource, record_id).json()

    def create(self, resource: str, record: dict[str, Any]) -> dict[str, Any]:
        return self._request("POST", f"/{resource}", resource, json=record).json()

    def update(self, resource: str, record_id: int, changes: dict[str, Any]) -> dict[str, Any]:
        return self._request(
            "PATCH", f"/{resource}/{record_id}", resource, record_id, json=changes
        ).json()

    def replace(self, resource: str, record_id: int, record: dict[str, Any]) -> dict[str, Any]:
        return self._request(
            "PUT", f"/{resource}/{record_id}", resource, record_id, json=record
        ).json()

    def delete(self, resource: str, record_id: int) -> None:
        self._request("DELETE", f"/{resource}/{record_id}", resource, record_id)

    def login(self, username: str, password: str) -> dict[str, Any]:
        """POST credentials to ``/auth/login`` and return the JSON body."""
        try:
            response = self._client.post(
                "/auth/login", json={"username": username, "password": password}
            )
        except httpx.HTTPError as exc:
            raise StoreError(f"POST /auth/login failed: {exc}") from exc
        if response.status_code not in (200, 401):
            raise StoreError(f"POST /auth/login returned {response.status_code}")
        return response.json()

    def close(self) -> None:
        self._client.close()
