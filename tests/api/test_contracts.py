"""Tests for the API contract models."""

import pytest
from pydantic import ValidationError

from sparks_layout.bridge.contracts import DragResultSchema, LayoutSchema, RemoveReportResponse
from sparks_layout.layout import DragResult, DropTarget, Layout


class TestLayoutSchema:
    def test_parses_camel_case(self):
        schema = LayoutSchema.model_validate({
            "rows": [{"id": "row-1", "reportIds": ["A", "B"]}],
            "nextRowNumber": 5,
        })
        layout = schema.to_layout()
        assert layout.rows[0].report_ids == ("A", "B")
        assert layout.next_row_number == 5

    def test_counter_optional(self):
        layout = LayoutSchema.model_validate({"rows": [{"id": "row-3"}]}).to_layout()
        assert layout.next_row_number == 4

    def test_dumps_by_alias(self):
        layout = Layout.from_rows([("row-1", ["A"])])
        dumped = LayoutSchema.from_layout(layout).model_dump(by_alias=True)
        assert dumped == {"rows": [{"id": "row-1", "reportIds": ["A"]}], "nextRowNumber": 2}

    def test_row_requires_id(self):
        with pytest.raises(ValidationError):
            LayoutSchema.model_validate({"rows": [{"reportIds": ["A"]}]})


class TestDragResultSchema:
    def test_card_target(self):
        schema = DragResultSchema.model_validate({
            "reportId": "A", "sourceRowId": "r1", "target": {"rowId": "r1", "reportId": "B"},
        })
        assert schema.to_result() == DragResult("A", "r1", DropTarget(row_id="r1", report_id="B"))

    def test_missing_target(self):
        schema = DragResultSchema.model_validate({"reportId": "A", "sourceRowId": "r1"})
        assert schema.to_result().target is None


class TestRemoveReportResponse:
    def test_removed_id_alias(self):
        response = RemoveReportResponse(
            layout=LayoutSchema.from_layout(Layout.from_rows([("r1", [])])),
            removed_report_id="A",
        )
        assert response.model_dump(by_alias=True)["removedReportId"] == "A"
