"""
Generic Tabular List Controller.

Turns a collection of records plus a query state (search text, sort
column, page) into the rows a table should display:
- Case-insensitive substring search over a fixed set of fields
- Stable single-column sort with asc/desc toggling
- Page slicing with a centred window of page numbers
- Quoted CSV export of the whole filtered view

The controller never mutates the collection it was given. Every derived
view is a pure function of (collection, query state) and is recomputed
after any state change.
"""

from __future__ import annotations

import csv
import logging
import math
from collections.abc import Callable, Iterable, Iterator, Mapping, Sequence
from dataclasses import dataclass
from enum import Enum
from typing import Any, Union

import pandas as pd

logger = logging.getLogger(__name__)

Record = Mapping[str, Any]
FieldAccessor = Union[str, Callable[[Record], Any]]
ExportColumn = tuple[str, FieldAccessor]


class SortDirection(str, Enum):
    ASC = "asc"
    DESC = "desc"


@dataclass(frozen=True)
class PageInfo:
    """Pagination metadata for the current view."""

    page: int
    page_size: int
    total_pages: int
    filtered_count: int
    total_count: int
    first_row: int
    last_row: int


def _sort_key(value: Any) -> tuple[int, Any]:
    # Numbers (bools included) before strings; anything else by its text
    if isinstance(value, (int, float)):
        return (0, value)
    if isinstance(value, str):
        return (1, value)
    return (2, str(value))


def resolve_field(record: Record, accessor: FieldAccessor) -> Any:
    """Read one value from a record through a field name or a callable."""
    if callable(accessor):
        return accessor(record)
    return record.get(accessor)


class ListController:
    """
    Search / sort / paginate / export controller for one entity table.

    Attributes:
        searchable_fields: Fields matched by the free-text search
        page_size: Rows per page
        search_text: Current free-text filter
        sort_field: Current sort column, or None for collection order
        sort_direction: Direction applied to ``sort_field``
    """

    def __init__(
        self,
        records: Iterable[Record] = (),
        searchable_fields: Sequence[str] = (),
        page_size: int = 10,
    ):
        """
        Initialize the controller.

        Args:
            records: Initial collection, copied on entry
            searchable_fields: Fields consulted by the search filter
            page_size: Rows per page (must be positive)

        Raises:
            ValueError: If ``page_size`` is not positive
        """
        if page_size <= 0:
            raise ValueError(f"page_size must be positive, got {page_size}")

        self.searchable_fields = tuple(searchable_fields)
        self.page_size = page_size
        self.search_text = ""
        self.sort_field: str | None = None
        self.sort_direction = SortDirection.ASC

        self._records: list[Record] = list(records)
        self._page = 1
        self._view: list[Record] | None = None

    # ── Collection lifecycle ────────────────────────────────────────────────

    @property
    def records(self) -> list[Record]:
        """The full collection in insertion order (a copy)."""
        return list(self._records)

    def replace_records(self, records: Iterable[Record]) -> None:
        """Swap in a freshly loaded collection, keeping the query state."""
        self._records = list(records)
        self._invalidate()
        self._clamp_page()
        logger.debug("Collection replaced: %d records", len(self._records))

    # ── Query state ─────────────────────────────────────────────────────────

    def set_search_text(self, text: str | None) -> None:
        """Filter by ``text`` and go back to the first page."""
        self.search_text = text or ""
        self._page = 1
        self._invalidate()

    def set_sort(self, field: str) -> None:
        """Sort by ``field``; sorting by the current field flips direction."""
        if field == self.sort_field:
            self.sort_direction = (
                SortDirection.DESC
                if self.sort_direction is SortDirection.ASC
                else SortDirection.ASC
            )
        else:
            self.sort_field = field
            self.sort_direction = SortDirection.ASC
        self._invalidate()

    def clear_sort(self) -> None:
        self.sort_field = None
        self.sort_direction = SortDirection.ASC
        self._invalidate()

    def set_page_size(self, page_size: int) -> None:
        """Change rows per page; non-positive sizes are ignored."""
        if page_size <= 0:
            return
        self.page_size = page_size
        self._clamp_page()

    def go_to_page(self, page: int) -> None:
        """Jump to ``page`` if it exists, otherwise do nothing."""
        if 1 <= page <= self.total_pages:
            self._page = page

    # ── Derived views ───────────────────────────────────────────────────────

    @property
    def page(self) -> int:
        return self._page

    @property
    def filtered(self) -> list[Record]:
        """Filtered and sorted records across all pages."""
        return list(self._filtered_view())

    @property
    def filtered_count(self) -> int:
        return len(self._filtered_view())

    @property
    def total_pages(self) -> int:
        return math.ceil(self.filtered_count / self.page_size)

    def visible_rows(self) -> list[Record]:
        """Records on the current page."""
        return list(self.iter_visible_rows())

    def iter_visible_rows(self) -> Iterator[Record]:
        """Iterate lazily over the current page; each call starts afresh."""
        view = self._filtered_view()
        start = (self._page - 1) * self.page_size
        stop = min(start + self.page_size, len(view))
        for index in range(start, stop):
            yield view[index]

    def page_numbers(self, window_size: int = 5) -> list[int]:
        """
        Centred window of page numbers around the current page.

        The window is shifted near either end so it stays ``window_size``
        long whenever there are at least that many pages.
        """
        total = self.total_pages
        if total == 0 or window_size <= 0:
            return []

        start = max(1, self._page - window_size // 2)
        end = min(total, start + window_size - 1)
        if end - start < window_size - 1:
            start = max(1, end - window_size + 1)
        return list(range(start, end + 1))

    def page_info(self) -> PageInfo:
        filtered = self.filtered_count
        first = (self._page - 1) * self.page_size + 1 if filtered else 0
        last = min(self._page * self.page_size, filtered)
        return PageInfo(
            page=self._page,
            page_size=self.page_size,
            total_pages=self.total_pages,
            filtered_count=filtered,
            total_count=len(self._records),
            first_row=first,
            last_row=last,
        )

    # ── Export ──────────────────────────────────────────────────────────────

    def export_delimited_text(self, columns: Sequence[ExportColumn]) -> str:
        """
        Render the filtered view (all pages) as quoted CSV text.

        Args:
            columns: Ordered ``(header, accessor)`` pairs; an accessor is a
                field name or a callable taking the record

        Returns:
            Header row followed by one row per filtered record, every
            field double-quoted, rows separated by ``\\n``
        """
        headers = [header for header, _ in columns]
        rows = [
            [_format_cell(resolve_field(record, accessor)) for _, accessor in columns]
            for record in self._filtered_view()
        ]
        df = pd.DataFrame(rows, columns=headers, dtype=object)
        text = df.to_csv(index=False, quoting=csv.QUOTE_ALL, lineterminator="\n")
        return text.rstrip("\n")

    # ── Internals ───────────────────────────────────────────────────────────

    def _invalidate(self) -> None:
        self._view = None

    def _clamp_page(self) -> None:
        self._page = min(max(1, self._page), max(1, self.total_pages))

    def _matches(self, record: Record, needle: str) -> bool:
        for field in self.searchable_fields:
            value = record.get(field)
            if value is not None and needle in str(value).lower():
                return True
        return False

    def _filtered_view(self) -> list[Record]:
        if self._view is not None:
            return self._view

        # Whitespace-only text means no filter; otherwise match the text as typed
        if self.search_text.strip():
            needle = self.search_text.lower()
            view = [r for r in self._records if self._matches(r, needle)]
        else:
            view = list(self._records)

        if self.sort_field is not None:
            view = self._sorted(view, self.sort_field)

        self._view = view
        return view

    def _sorted(self, records: list[Record], field: str) -> list[Record]:
        # sorted() is stable and keeps tie order under reverse=True too
        present = [r for r in records if r.get(field) is not None]
        missing = [r for r in records if r.get(field) is None]
        ordered = sorted(
            present,
            key=lambda r: _sort_key(r.get(field)),
            reverse=self.sort_direction is SortDirection.DESC,
        )
        return ordered + missing


def _format_cell(value: Any) -> str:
    if value is None:
        return ""
    return str(value)
