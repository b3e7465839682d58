"""
Unit tests for the generic list controller.
"""

from __future__ import annotations

import pytest

from schooladmin.backend.core.listing import ListController, SortDirection

SEARCH_FIELDS = ("regNo", "nameOfApplicant", "nameOfCourse")


@pytest.fixture
def ctrl(people: list[dict]) -> ListController:
    return ListController(people, searchable_fields=SEARCH_FIELDS, page_size=2)


def _ids(rows) -> list[int]:
    return [r["id"] for r in rows]


class TestSearch:
    def test_case_insensitive_substring(self, ctrl: ListController) -> None:
        ctrl.set_search_text("CARLA")
        assert _ids(ctrl.filtered) == [3]

    def test_matches_any_searchable_field(self, ctrl: ListController) -> None:
        ctrl.set_search_text("python")
        assert _ids(ctrl.filtered) == [1, 3]

    def test_every_visible_row_matches(self, ctrl: ListController) -> None:
        ctrl.set_search_text("tu")
        for row in ctrl.visible_rows():
            assert any("tu" in str(row.get(f) or "").lower() for f in SEARCH_FIELDS)

    def test_surrounding_spaces_are_part_of_the_query(self) -> None:
        """' rao' matches the surname in 'Asha Rao' but not the start of 'Raoul'."""
        ctrl = ListController(
            [{"id": 1, "name": "Asha Rao"}, {"id": 2, "name": "Raoul"}], ["name"]
        )
        ctrl.set_search_text(" rao")
        assert _ids(ctrl.filtered) == [1]
        assert all(" rao" in r["name"].lower() for r in ctrl.visible_rows())

    def test_non_searchable_field_ignored(self, ctrl: ListController) -> None:
        ctrl.set_search_text("1500")
        assert ctrl.filtered == []

    def test_missing_field_does_not_match(self, ctrl: ListController) -> None:
        """Dev Patel has no course; searching 'none' must not match the null."""
        ctrl.set_search_text("none")
        assert ctrl.filtered == []

    @pytest.mark.parametrize("text", ["", "   ", None])
    def test_blank_search_means_no_filter(self, ctrl: ListController, text) -> None:
        ctrl.set_search_text("zzz")
        assert ctrl.filtered_count == 0
        ctrl.set_search_text(text)
        assert ctrl.filtered_count == 5

    def test_search_resets_page(self, ctrl: ListController) -> None:
        ctrl.go_to_page(3)
        assert ctrl.page == 3
        ctrl.set_search_text("stu")
        assert ctrl.page == 1

    def test_repeated_search_is_idempotent(self, ctrl: ListController) -> None:
        ctrl.set_search_text("stu")
        once = _ids(ctrl.visible_rows())
        ctrl.set_search_text("stu")
        ctrl.set_search_text("stu")
        assert _ids(ctrl.visible_rows()) == once

    def test_numeric_values_are_searchable(self) -> None:
        ctrl = ListController([{"id": 1, "amount": 2500}, {"id": 2, "amount": 75}], ["amount"])
        ctrl.set_search_text("50")
        assert _ids(ctrl.filtered) == [1]

    def test_source_collection_not_mutated(self, people: list[dict]) -> None:
        original = [dict(p) for p in people]
        ctrl = ListController(people, SEARCH_FIELDS)
        ctrl.set_search_text("stu")
        ctrl.set_sort("nameOfApplicant")
        ctrl.set_sort("nameOfApplicant")
        assert people == original


class TestSort:
    def test_new_field_sorts_ascending(self, ctrl: ListController) -> None:
        ctrl.set_sort("totalCourseFee")
        assert ctrl.sort_field == "totalCourseFee"
        assert ctrl.sort_direction is SortDirection.ASC
        assert _ids(ctrl.filtered) == [2, 4, 1, 3, 5]

    def test_same_field_flips_direction(self, ctrl: ListController) -> None:
        ctrl.set_sort("regNo")
        ctrl.set_sort("regNo")
        assert ctrl.sort_direction is SortDirection.DESC
        ctrl.set_sort("regNo")
        assert ctrl.sort_direction is SortDirection.ASC

    def test_desc_reverses_distinct_keys_exactly(self, ctrl: ListController) -> None:
        ctrl.set_sort("regNo")
        ascending = _ids(ctrl.filtered)
        ctrl.set_sort("regNo")
        assert _ids(ctrl.filtered) == list(reversed(ascending))

    def test_stable_for_equal_keys(self, ctrl: ListController) -> None:
        """Ids 1 and 3 share a fee; they keep collection order both ways."""
        ctrl.set_sort("totalCourseFee")
        asc = _ids(ctrl.filtered)
        assert asc.index(1) < asc.index(3)
        ctrl.set_sort("totalCourseFee")
        desc = _ids(ctrl.filtered)
        assert desc == [5, 1, 3, 4, 2]

    def test_switching_field_resets_to_ascending(self, ctrl: ListController) -> None:
        ctrl.set_sort("regNo")
        ctrl.set_sort("regNo")
        ctrl.set_sort("nameOfApplicant")
        assert ctrl.sort_direction is SortDirection.ASC

    def test_none_values_sort_last(self, ctrl: ListController) -> None:
        ctrl.set_sort("nameOfCourse")
        assert _ids(ctrl.filtered)[-1] == 4
        ctrl.set_sort("nameOfCourse")
        assert _ids(ctrl.filtered)[-1] == 4

    def test_mixed_types_do_not_raise(self) -> None:
        ctrl = ListController([{"id": 1, "v": "b"}, {"id": 2, "v": 3}, {"id": 3, "v": "a"}])
        ctrl.set_sort("v")
        assert _ids(ctrl.filtered) == [2, 3, 1]

    def test_sort_survives_new_search(self, ctrl: ListController) -> None:
        """Native string order: 'carla diaz' sorts after the capitalised names."""
        ctrl.set_sort("nameOfApplicant")
        ctrl.set_sort("nameOfApplicant")
        ctrl.set_search_text("stu")
        assert _ids(ctrl.filtered) == [3, 4, 1]

    def test_clear_sort_restores_collection_order(self, ctrl: ListController) -> None:
        ctrl.set_sort("regNo")
        ctrl.clear_sort()
        assert _ids(ctrl.filtered) == [1, 2, 3, 4, 5]


class TestPagination:
    def test_twenty_five_records(self, numbered: list[dict]) -> None:
        ctrl = ListController(numbered, ["name"], page_size=10)
        assert ctrl.total_pages == 3
        ctrl.go_to_page(3)
        assert len(ctrl.visible_rows()) == 5
        ctrl.go_to_page(4)
        assert ctrl.page == 3

    @pytest.mark.parametrize("page", [0, -1, 4, 100])
    def test_out_of_range_is_noop(self, numbered: list[dict], page: int) -> None:
        ctrl = ListController(numbered, ["name"], page_size=10)
        ctrl.go_to_page(2)
        ctrl.go_to_page(page)
        assert ctrl.page == 2

    def test_visible_row_count_formula(self, numbered: list[dict]) -> None:
        ctrl = ListController(numbered, ["name"], page_size=7)
        for page in range(1, ctrl.total_pages + 1):
            ctrl.go_to_page(page)
            expected = min(7, ctrl.filtered_count - (page - 1) * 7)
            assert len(ctrl.visible_rows()) == expected <= 7

    def test_visible_rows_slice(self, numbered: list[dict]) -> None:
        ctrl = ListController(numbered, ["name"], page_size=10)
        ctrl.go_to_page(2)
        assert _ids(ctrl.visible_rows()) == list(range(11, 21))

    def test_iter_visible_rows_is_restartable(self, numbered: list[dict]) -> None:
        ctrl = ListController(numbered, ["name"], page_size=10)
        assert list(ctrl.iter_visible_rows()) == list(ctrl.iter_visible_rows())

    def test_empty_collection(self) -> None:
        ctrl = ListController([], ["name"])
        assert ctrl.total_pages == 0
        assert ctrl.visible_rows() == []
        assert ctrl.page_numbers() == []
        info = ctrl.page_info()
        assert (info.first_row, info.last_row, info.filtered_count) == (0, 0, 0)

    def test_page_info(self, numbered: list[dict]) -> None:
        ctrl = ListController(numbered, ["name"], page_size=10)
        ctrl.go_to_page(3)
        info = ctrl.page_info()
        assert info.page == 3
        assert info.first_row == 21
        assert info.last_row == 25
        assert info.total_count == 25

    def test_invalid_page_size_rejected_at_construction(self) -> None:
        with pytest.raises(ValueError):
            ListController([], page_size=0)

    def test_set_page_size_clamps_page(self, numbered: list[dict]) -> None:
        ctrl = ListController(numbered, ["name"], page_size=5)
        ctrl.go_to_page(5)
        ctrl.set_page_size(10)
        assert ctrl.page == 3
        ctrl.set_page_size(0)
        assert ctrl.page_size == 10


class TestPageNumbers:
    @pytest.mark.parametrize(
        ("page", "expected"),
        [
            (1, [1, 2, 3, 4, 5]),
            (2, [1, 2, 3, 4, 5]),
            (5, [3, 4, 5, 6, 7]),
            (9, [6, 7, 8, 9, 10]),
            (10, [6, 7, 8, 9, 10]),
        ],
    )
    def test_centred_window(self, page: int, expected: list[int]) -> None:
        ctrl = ListController([{"id": i} for i in range(100)], page_size=10)
        ctrl.go_to_page(page)
        assert ctrl.page_numbers() == expected

    def test_fewer_pages_than_window(self, numbered: list[dict]) -> None:
        ctrl = ListController(numbered, ["name"], page_size=10)
        ctrl.go_to_page(2)
        assert ctrl.page_numbers(window_size=5) == [1, 2, 3]

    def test_custom_window(self) -> None:
        ctrl = ListController([{"id": i} for i in range(100)], page_size=10)
        ctrl.go_to_page(6)
        assert ctrl.page_numbers(window_size=3) == [5, 6, 7]


class TestReplaceRecords:
    def test_keeps_query_state(self, ctrl: ListController, people: list[dict]) -> None:
        ctrl.set_search_text("stu")
        ctrl.set_sort("regNo")
        ctrl.replace_records(people + [{"id": 6, "regNo": "STU000", "nameOfApplicant": "Zed"}])
        assert _ids(ctrl.filtered) == [6, 1, 3, 4]

    def test_clamps_page_after_shrink(self, numbered: list[dict]) -> None:
        ctrl = ListController(numbered, ["name"], page_size=10)
        ctrl.go_to_page(3)
        ctrl.replace_records(numbered[:12])
        assert ctrl.page == 2
        assert _ids(ctrl.visible_rows()) == [11, 12]

    def test_view_recomputed(self, numbered: list[dict]) -> None:
        ctrl = ListController(numbered[:3], ["name"])
        assert ctrl.filtered_count == 3
        ctrl.replace_records(numbered)
        assert ctrl.filtered_count == 25


class TestExport:
    COLUMNS = (
        ("Reg No", "regNo"),
        ("Name", "nameOfApplicant"),
        ("Course", "nameOfCourse"),
        ("Upper", lambda r: r["nameOfApplicant"].upper()),
    )

    def test_header_and_quoted_rows(self, ctrl: ListController) -> None:
        ctrl.set_search_text("carla")
        text = ctrl.export_delimited_text(self.COLUMNS)
        lines = text.split("\n")
        assert lines[0] == '"Reg No","Name","Course","Upper"'
        assert lines[1] == '"STU002","carla diaz","Python","CARLA DIAZ"'

    def test_exports_filtered_not_paginated(self, ctrl: ListController) -> None:
        ctrl.set_search_text("stu")
        text = ctrl.export_delimited_text(self.COLUMNS)
        assert len(ctrl.visible_rows()) == 2
        assert len(text.split("\n")) - 1 == ctrl.filtered_count == 3

    def test_follows_sort_order(self, ctrl: ListController) -> None:
        ctrl.set_sort("regNo")
        ctrl.set_sort("regNo")
        rows = ctrl.export_delimited_text([("Reg No", "regNo")]).split("\n")[1:]
        assert rows == ['"TUT002"', '"TUT001"', '"STU003"', '"STU002"', '"STU001"']

    def test_none_is_empty_and_quotes_are_doubled(self) -> None:
        ctrl = ListController([{"id": 1, "a": None, "b": 'say "hi"'}])
        text = ctrl.export_delimited_text([("A", "a"), ("B", "b")])
        assert text.split("\n")[1] == '"","say ""hi"""'

    def test_empty_view_has_header_only(self, ctrl: ListController) -> None:
        ctrl.set_search_text("nobody")
        assert ctrl.export_delimited_text([("Name", "nameOfApplicant")]) == '"Name"'
