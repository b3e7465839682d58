"""Exceptions raised by the data-access layer."""

from __future__ import annotations


class StoreError(Exception):
    """A record store could not complete an operation."""


class UnknownResourceError(StoreError, KeyError):
    """The requested resource (entity collection) does not exist."""

    def __init__(self, resource: str):
        self.resource = resource
        super().__init__(f"Unknown resource: {resource}")

    def __str__(self) -> str:
        return self.args[0]


class RecordNotFoundError(StoreError, LookupError):
    """No record with the given id exists in the resource."""

    def __init__(self, resource: str, record_id: int):
        self.resource = resource
        self.record_id = record_id
        super().__init__(f"{resource} with id {record_id} not found")
