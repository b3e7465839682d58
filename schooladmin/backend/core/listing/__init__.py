"""List controller and per-entity table configuration."""

from __future__ import annotations

from schooladmin.backend.core.listing.controller import (
    ExportColumn,
    ListController,
    PageInfo,
    SortDirection,
)
from schooladmin.backend.core.listing.entities import (
    ENTITIES,
    EntityListConfig,
    get_entity,
    make_controller,
)

__all__ = [
    "ENTITIES",
    "EntityListConfig",
    "ExportColumn",
    "ListController",
    "PageInfo",
    "SortDirection",
    "get_entity",
    "make_controller",
]
