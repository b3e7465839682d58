"""Table sessions – a loaded collection plus its list controller.

A session loads the full collection when it is created and reloads it
wholesale after every create, update or delete, so the controller always
works on what the store holds.
"""

from __future__ import annotations

import logging
from datetime import date
from typing import Any

from schooladmin.backend.core.listing import EntityListConfig, ListController, get_entity
from schooladmin.backend.services.records import RecordService

logger = logging.getLogger(__name__)


class TableSession:
    """
    One entity table: service, list configuration and controller.

    Attributes:
        service: Record service for the table's resource
        entity: Search/export configuration
        controller: List controller over the loaded collection
    """

    def __init__(self, service: RecordService, page_size: int | None = None):
        self.service = service
        self.entity: EntityListConfig = get_entity(service.resource)
        self.controller = ListController(
            service.get_all(),
            searchable_fields=self.entity.searchable_fields,
            page_size=page_size or self.entity.page_size,
        )
        logger.debug(
            "Opened %s table with %d records",
            self.entity.resource,
            len(self.controller.records),
        )

    @property
    def resource(self) -> str:
        return self.entity.resource

    def refresh(self) -> None:
        """Reload the collection from the store."""
        self.controller.replace_records(self.service.get_all())

    # ── Mutations (each followed by a full reload) ─────────────────────────

    def create(self, record: dict[str, Any]) -> dict[str, Any]:
        created = self.service.create(record)
        self.refresh()
        return created

    def update(self, record_id: int, changes: dict[str, Any]) -> dict[str, Any]:
        updated = self.service.update(record_id, changes)
        self.refresh()
        return updated

    def delete(self, record_id: int) -> None:
        self.service.delete(record_id)
        self.refresh()

    # ── Export ──────────────────────────────────────────────────────────────

    def export_filename(self) -> str:
        return f"{self.resource}_{date.today().isoformat()}.csv"

    def export_csv(self) -> tuple[str, str]:
        """Return ``(filename, csv_text)`` for the currently filtered rows."""
        text = self.controller.export_delimited_text(self.entity.export_columns)
        return self.export_filename(), text
