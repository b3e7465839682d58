"""Shared pytest fixtures for the test suite.

Fixture overview
----------------
people          — five person-like records with a duplicated course value
numbered        — 25 minimal records (ids 1..25) for pagination tests
app_config      — default config pointing the local store at a temp file
local_store     — a seeded :class:`LocalStore` in the temp directory
"""

from __future__ import annotations

from pathlib import Path

import pytest

from schooladmin.backend.core.storage import LocalStore
from schooladmin.backend.core.utils.config import get_default_config

# ── Collections ──────────────────────────────────────────────────────────────


@pytest.fixture
def people() -> list[dict]:
    return [
        {"id": 1, "regNo": "STU001", "nameOfApplicant": "Asha Rao", "nameOfCourse": "Python", "totalCourseFee": 1500},
        {"id": 2, "regNo": "TUT001", "nameOfApplicant": "Ben Ortiz", "nameOfCourse": "Java", "totalCourseFee": 900},
        {"id": 3, "regNo": "STU002", "nameOfApplicant": "carla diaz", "nameOfCourse": "Python", "totalCourseFee": 1500},
        {"id": 4, "regNo": "STU003", "nameOfApplicant": "Dev Patel", "nameOfCourse": None, "totalCourseFee": 1200},
        {"id": 5, "regNo": "TUT002", "nameOfApplicant": "Eve Stone", "nameOfCourse": "Go", "totalCourseFee": 2000},
    ]


@pytest.fixture
def numbered() -> list[dict]:
    return [{"id": i, "name": f"Record {i:02d}"} for i in range(1, 26)]


# ── Storage / configuration ──────────────────────────────────────────────────


@pytest.fixture
def app_config(tmp_path: Path) -> dict:
    cfg = get_default_config()
    cfg["storage"]["path"] = str(tmp_path / "school_data.json")
    return cfg


@pytest.fixture
def local_store(app_config: dict) -> LocalStore:
    return LocalStore(app_config["storage"]["path"])
