"""Schema package – re-exports all public symbols for convenient imports."""

from __future__ import annotations

from schooladmin.backend.schemas.api import (
    HealthOut,
    LoginIn,
    LoginOut,
    LoginUserOut,
    TablePageOut,
)
from schooladmin.backend.schemas.records import (
    RECORD_MODELS,
    BatchIn,
    CourseIn,
    OrganisationIn,
    PaymentIn,
    PersonIn,
    ReceiptIn,
    RecordIn,
    UserIn,
)

__all__ = [
    "RECORD_MODELS",
    "BatchIn",
    "CourseIn",
    "HealthOut",
    "LoginIn",
    "LoginOut",
    "LoginUserOut",
    "OrganisationIn",
    "PaymentIn",
    "PersonIn",
    "ReceiptIn",
    "RecordIn",
    "TablePageOut",
    "UserIn",
]
