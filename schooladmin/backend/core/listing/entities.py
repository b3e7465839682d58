"""
Per-entity list configuration.

Each REST resource gets one :class:`EntityListConfig` describing which
fields the search box looks at and which columns the CSV export writes.
The tables themselves all share :class:`ListController`.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass

from schooladmin.backend.core.listing.controller import (
    ExportColumn,
    ListController,
    Record,
)
from schooladmin.backend.core.storage.errors import UnknownResourceError


@dataclass(frozen=True)
class EntityListConfig:
    """Search and export settings for one entity table."""

    resource: str
    label: str
    searchable_fields: tuple[str, ...]
    export_columns: tuple[ExportColumn, ...]
    page_size: int = 10


# ── Cell formatters ─────────────────────────────────────────────────────────


def _yes_no(field: str):
    def _fmt(record: Record) -> str:
        return "Yes" if record.get(field) else "No"

    return _fmt


def _or_na(field: str, fallback: str = "N/A"):
    def _fmt(record: Record):
        return record.get(field) or fallback

    return _fmt


def _party(prefix: str):
    """'REG - Name' for the student/tutor attached to a transaction."""

    def _fmt(record: Record) -> str:
        name = record.get(f"{prefix}Name")
        if not name:
            return ""
        return f"{record.get(f'{prefix}RegNo') or ''} - {name}"

    return _fmt


def _upper(field: str):
    def _fmt(record: Record) -> str:
        return str(record.get(field) or "").upper()

    return _fmt


# ── Registry ────────────────────────────────────────────────────────────────

_TRANSACTION_SEARCH = (
    "referenceNumber",
    "date",
    "studentName",
    "tutorName",
    "studentRegNo",
    "tutorRegNo",
    "amount",
)

ENTITIES: dict[str, EntityListConfig] = {
    "organisations": EntityListConfig(
        resource="organisations",
        label="Organisations",
        searchable_fields=("organisationName", "email", "location", "phoneNumber", "address"),
        export_columns=(
            ("Organisation Name", "organisationName"),
            ("Address", "address"),
            ("Phone Number", "phoneNumber"),
            ("Email", "email"),
            ("Website", _or_na("website")),
            ("Location", "location"),
            ("Created At", "createdAt"),
        ),
    ),
    "users": EntityListConfig(
        resource="users",
        label="Users",
        searchable_fields=("userId", "username", "tutorName", "tutorRegNo"),
        export_columns=(
            ("User ID", "userId"),
            ("Username", "username"),
            ("Tutor Name", "tutorName"),
            ("Tutor Reg No", "tutorRegNo"),
            ("Can Login", _yes_no("canLogin")),
            ("Created At", "createdAt"),
        ),
    ),
    "batches": EntityListConfig(
        resource="batches",
        label="Batches",
        searchable_fields=("batchName", "batchCode", "remarks"),
        export_columns=(
            ("Batch Name", "batchName"),
            ("Batch Code", "batchCode"),
            ("Remarks", _or_na("remarks")),
            ("Created At", "createdAt"),
        ),
    ),
    "courses": EntityListConfig(
        resource="courses",
        label="Courses",
        searchable_fields=("courseName", "courseCode", "description", "batchName"),
        export_columns=(
            ("Course Code", "courseCode"),
            ("Course Name", "courseName"),
            ("Description", "description"),
            ("Duration (Months)", "duration"),
            ("Total Fee", "totalFee"),
            ("Batch", "batchName"),
            ("Is Active", _yes_no("isActive")),
            ("Created At", "createdAt"),
        ),
    ),
    "persons": EntityListConfig(
        resource="persons",
        label="Staff & Students",
        searchable_fields=(
            "regNo",
            "nameOfApplicant",
            "nameOfCourse",
            "email",
            "mobileNumber",
            "applicationNumber",
            "nameOfGuardian",
        ),
        export_columns=(
            ("Reg No", "regNo"),
            ("Date", "date"),
            ("Name", "nameOfApplicant"),
            ("Course", "nameOfCourse"),
            ("Guardian Name", "nameOfGuardian"),
            ("Relationship", "relationshipWithGuardian"),
            ("Occupation", "occupationOfGuardian"),
            ("Mobile", "mobileNumber"),
            ("Email", "email"),
            ("DOB", "dateOfBirth"),
            ("Sex", "sex"),
            ("Marital Status", "maritalStatus"),
            ("Religion", "religion"),
            ("Category", "religionCategory"),
            ("Qualification", "educationalQualification"),
            ("Application No", "applicationNumber"),
            ("Class Time", "classTime"),
            ("Total Fee", "totalCourseFee"),
            ("Admitted By", "admittedBy"),
        ),
    ),
    "payments": EntityListConfig(
        resource="payments",
        label="Payments",
        searchable_fields=_TRANSACTION_SEARCH,
        export_columns=(
            ("Date", "date"),
            ("Reference Number", "referenceNumber"),
            ("Transaction Type", "transactionType"),
            ("Amount", "amount"),
            ("Student", _party("student")),
            ("Tutor", _party("tutor")),
            ("Remarks", _or_na("remarks", "")),
        ),
    ),
    "receipts": EntityListConfig(
        resource="receipts",
        label="Receipts",
        searchable_fields=_TRANSACTION_SEARCH,
        export_columns=(
            ("Date", "date"),
            ("Reference Number", "referenceNumber"),
            ("Transaction Type", _upper("transactionType")),
            ("Amount", "amount"),
            ("Student", _party("student")),
            ("Tutor", _party("tutor")),
            ("Remarks", _or_na("remarks", "")),
        ),
    ),
}


def get_entity(resource: str) -> EntityListConfig:
    """Look up the list configuration for ``resource``."""
    try:
        return ENTITIES[resource]
    except KeyError:
        raise UnknownResourceError(resource) from None


def make_controller(
    resource: str,
    records: Iterable[Record] = (),
    page_size: int | None = None,
) -> ListController:
    """Build a :class:`ListController` configured for ``resource``."""
    entity = get_entity(resource)
    return ListController(
        records,
        searchable_fields=entity.searchable_fields,
        page_size=page_size or entity.page_size,
    )
