"""Tests for layout validation and repair."""

from sparks_layout.layout import Layout, find_violations, is_valid, normalize


def _layout(*rows):
    return Layout.from_rows(rows)


def _rows(layout):
    return [(row.id, list(row.report_ids)) for row in layout.rows]


class TestFindViolations:
    def test_valid_layout(self, two_row_layout):
        assert find_violations(two_row_layout) == []
        assert is_valid(two_row_layout)

    def test_no_rows(self):
        assert find_violations(Layout()) == ["layout has no rows"]

    def test_duplicate_report(self):
        problems = find_violations(_layout(("r1", ["A"]), ("r2", ["A"])))
        assert len(problems) == 1
        assert "'A'" in problems[0]

    def test_duplicate_row_id(self):
        problems = find_violations(_layout(("r1", ["A"]), ("r1", ["B"])))
        assert problems == ["duplicate row id 'r1'"]


class TestNormalize:
    def test_clean_layout_is_returned_as_is(self, two_row_layout, catalog):
        assert normalize(two_row_layout, catalog) is two_row_layout

    def test_unknown_reports_dropped_silently(self, catalog):
        layout = _layout(("r1", ["A", "ghost"]), ("r2", ["C"]))
        assert _rows(normalize(layout, catalog)) == [("r1", ["A"]), ("r2", ["C"])]

    def test_unknown_reports_kept_without_catalog(self):
        layout = _layout(("r1", ["A", "ghost"]))
        assert normalize(layout) is layout

    def test_duplicates_keep_first_placement(self):
        layout = _layout(("r1", ["A", "B", "A"]), ("r2", ["B", "C"]))
        assert _rows(normalize(layout)) == [("r1", ["A", "B"]), ("r2", ["C"])]

    def test_duplicate_row_ids_dropped(self):
        layout = _layout(("r1", ["A"]), ("r1", ["B"]))
        assert _rows(normalize(layout)) == [("r1", ["A"])]

    def test_empty_layout_gets_fallback_row(self):
        result = normalize(Layout())
        assert result.row_count == 1
        assert result.rows[0].is_empty

    def test_rows_emptied_by_catalog_are_kept(self, catalog):
        layout = _layout(("r1", ["A"]), ("r2", ["ghost"]))
        assert _rows(normalize(layout, catalog)) == [("r1", ["A"]), ("r2", [])]

    def test_result_is_valid(self, catalog):
        layout = _layout(("r1", ["A", "A", "ghost"]), ("r1", ["B"]), ("r2", ["B", "A"]))
        assert is_valid(normalize(layout, catalog))
