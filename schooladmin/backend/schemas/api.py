"""Pydantic schemas for API request / response validation."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

# ── Request models ──────────────────────────────────────────────────────────


class LoginIn(BaseModel):
    username: str
    password: str


# ── Response models ─────────────────────────────────────────────────────────


class HealthOut(BaseModel):
    status: str = "ok"
    version: str = "0.1.0"


class LoginUserOut(BaseModel):
    id: str
    username: str
    role: str = "user"


class LoginOut(BaseModel):
    success: bool
    message: str
    token: str | None = None
    user: LoginUserOut | None = None


class TablePageOut(BaseModel):
    """One page of an entity table plus its pagination metadata."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    items: list[dict[str, Any]] = Field(default_factory=list)
    page: int = 1
    page_size: int = 10
    total_pages: int = 0
    filtered_count: int = 0
    total_count: int = 0
    first_row: int = 0
    last_row: int = 0
    page_numbers: list[int] = Field(default_factory=list)
    search: str = ""
    sort: str | None = None
    direction: str = "asc"
