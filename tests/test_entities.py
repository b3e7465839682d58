"""
Unit tests for the per-entity list configuration.
"""

from __future__ import annotations

import pytest

from schooladmin.backend.core.listing import ENTITIES, get_entity, make_controller
from schooladmin.backend.core.storage import RESOURCES, UnknownResourceError


class TestRegistry:
    def test_every_resource_configured(self) -> None:
        assert set(ENTITIES) == set(RESOURCES)

    def test_unknown_resource(self) -> None:
        with pytest.raises(UnknownResourceError):
            get_entity("teachers")

    def test_make_controller_uses_entity_fields(self) -> None:
        ctrl = make_controller("batches", [{"id": 1, "batchCode": "B-07", "batchName": "Morning"}])
        assert ctrl.searchable_fields == ENTITIES["batches"].searchable_fields
        assert ctrl.page_size == 10
        ctrl.set_search_text("b-07")
        assert ctrl.filtered_count == 1

    def test_page_size_override(self) -> None:
        assert make_controller("courses", page_size=25).page_size == 25


class TestExportColumns:
    def test_user_can_login_yes_no(self) -> None:
        ctrl = make_controller(
            "users",
            [
                {"id": 1, "userId": "USR0001", "username": "admin", "canLogin": True},
                {"id": 2, "userId": "USR0002", "username": "guest", "canLogin": False},
            ],
        )
        lines = ctrl.export_delimited_text(ENTITIES["users"].export_columns).split("\n")
        assert lines[0] == '"User ID","Username","Tutor Name","Tutor Reg No","Can Login","Created At"'
        assert lines[1].endswith('"Yes",""')
        assert lines[2].endswith('"No",""')

    def test_organisation_website_fallback(self) -> None:
        ctrl = make_controller("organisations", [{"id": 1, "organisationName": "XYZ", "website": ""}])
        row = ctrl.export_delimited_text(ENTITIES["organisations"].export_columns).split("\n")[1]
        assert '"N/A"' in row

    def test_receipt_party_and_type(self) -> None:
        receipt = {
            "id": 1,
            "date": "2024-03-01",
            "referenceNumber": "RC-1",
            "transactionType": "cash",
            "amount": 250,
            "studentName": "Asha Rao",
            "studentRegNo": "STU001",
        }
        ctrl = make_controller("receipts", [receipt])
        row = ctrl.export_delimited_text(ENTITIES["receipts"].export_columns).split("\n")[1]
        assert row == '"2024-03-01","RC-1","CASH","250","STU001 - Asha Rao","",""'

    def test_payment_search_by_amount(self) -> None:
        ctrl = make_controller(
            "payments",
            [
                {"id": 1, "referenceNumber": "P-1", "date": "2024-01-02", "amount": 1200},
                {"id": 2, "referenceNumber": "P-2", "date": "2024-01-03", "amount": 80},
            ],
        )
        ctrl.set_search_text("120")
        assert [r["id"] for r in ctrl.filtered] == [1]

    def test_person_export_has_all_columns(self) -> None:
        assert len(ENTITIES["persons"].export_columns) == 19
