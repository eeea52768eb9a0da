"""Tests for row lifecycle operations."""

from sparks_layout.layout import Layout, add_row, find_violations, remove_report_from_row, remove_row


def _layout(*rows, next_row_number=0):
    return Layout.from_rows(rows, next_row_number=next_row_number)


def _rows(layout):
    return [(row.id, list(row.report_ids)) for row in layout.rows]


class TestAddRow:
    def test_appends_empty_row(self):
        layout = _layout(("row-1", ["A"]))
        result = add_row(layout)
        assert _rows(result) == [("row-1", ["A"]), ("row-2", [])]
        assert _rows(layout) == [("row-1", ["A"])]

    def test_ids_never_reused_after_removal(self):
        layout = _layout(("row-1", ["A"]))
        layout = add_row(layout)          # row-2
        layout = add_row(layout)          # row-3
        layout = remove_row(layout, "row-3")
        layout = add_row(layout)
        assert layout.row_ids == ["row-1", "row-2", "row-4"]

    def test_skips_ids_already_taken(self):
        layout = _layout(("row-1", []), ("custom", ["A"]), ("row-5", []))
        result = add_row(layout)
        assert result.row_ids[-1] == "row-6"
        assert len(set(result.row_ids)) == 3


class TestRemoveRow:
    def test_only_row_is_kept(self):
        layout = _layout(("r1", ["A"]))
        assert remove_row(layout, "r1") is layout

    def test_unknown_row(self, two_row_layout):
        assert remove_row(two_row_layout, "nope") is two_row_layout

    def test_empty_row_removed(self):
        layout = _layout(("r1", ["A"]), ("r2", []))
        assert _rows(remove_row(layout, "r2")) == [("r1", ["A"])]

    def test_reports_migrate_to_first_row_in_order(self):
        layout = _layout(("r1", ["A"]), ("r2", ["B", "C"]), ("r3", ["D"]))
        assert _rows(remove_row(layout, "r2")) == [("r1", ["A", "B", "C"]), ("r3", ["D"])]

    def test_removing_first_row_migrates_to_next(self):
        layout = _layout(("r1", ["A", "B"]), ("r2", ["C"]))
        assert _rows(remove_row(layout, "r1")) == [("r2", ["C", "A", "B"])]

    def test_report_count_preserved(self):
        layout = _layout(("r1", ["A"]), ("r2", ["B", "C"]), ("r3", ["D"]))
        result = remove_row(layout, "r3")
        assert sorted(result.report_ids()) == ["A", "B", "C", "D"]
        assert find_violations(result) == []


class TestRemoveReport:
    def test_returns_removed_id(self, two_row_layout):
        result, removed = remove_report_from_row(two_row_layout, "r1", "A")
        assert removed == "A"
        assert _rows(result) == [("r1", ["B"]), ("r2", ["C"])]

    def test_emptied_row_deleted(self, two_row_layout):
        result, removed = remove_report_from_row(two_row_layout, "r2", "C")
        assert removed == "C"
        assert _rows(result) == [("r1", ["A", "B"])]

    def test_emptied_only_row_kept(self):
        layout = _layout(("r1", ["A"]))
        result, removed = remove_report_from_row(layout, "r1", "A")
        assert removed == "A"
        assert _rows(result) == [("r1", [])]

    def test_report_not_in_row(self, two_row_layout):
        result, removed = remove_report_from_row(two_row_layout, "r1", "C")
        assert result is two_row_layout
        assert removed is None

    def test_unknown_row(self, two_row_layout):
        result, removed = remove_report_from_row(two_row_layout, "r9", "A")
        assert result is two_row_layout
        assert removed is None
