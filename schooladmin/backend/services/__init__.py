"""Services package – re-exports all public service objects."""

from __future__ import annotations

from schooladmin.backend.services.auth import LoginResult, login
from schooladmin.backend.services.records import PersonService, RecordService, service_for
from schooladmin.backend.services.tables import TableSession

__all__ = [
    "LoginResult",
    "PersonService",
    "RecordService",
    "TableSession",
    "login",
    "service_for",
]
