"""Bridge contracts — Pydantic models defining API request and response shapes."""
from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from ..layout import DragResult, DropTarget, Layout, Row


class _CamelModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True)


# ── Layout ──
class RowSchema(_CamelModel):
    id: str
    report_ids: list[str] = Field(default_factory=list, alias="reportIds")


class LayoutSchema(_CamelModel):
    rows: list[RowSchema] = []
    next_row_number: Optional[int] = Field(default=None, alias="nextRowNumber")

    def to_layout(self) -> Layout:
        return Layout(
            rows=tuple(Row(id=row.id, report_ids=tuple(row.report_ids)) for row in self.rows),
            next_row_number=self.next_row_number or 0,
        )

    @classmethod
    def from_layout(cls, layout: Layout) -> "LayoutSchema":
        return cls(
            rows=[RowSchema(id=row.id, report_ids=list(row.report_ids)) for row in layout.rows],
            next_row_number=layout.next_row_number,
        )


# ── Drag and drop ──
class DropTargetSchema(_CamelModel):
    row_id: str = Field(alias="rowId")
    report_id: Optional[str] = Field(default=None, alias="reportId")


class DragResultSchema(_CamelModel):
    report_id: str = Field(alias="reportId")
    source_row_id: str = Field(alias="sourceRowId")
    target: Optional[DropTargetSchema] = None

    def to_result(self) -> DragResult:
        target = None
        if self.target is not None:
            target = DropTarget(row_id=self.target.row_id, report_id=self.target.report_id)
        return DragResult(report_id=self.report_id, source_row_id=self.source_row_id, target=target)


class DropRequest(BaseModel):
    layout: LayoutSchema
    drop: DragResultSchema


class RemoveRowRequest(_CamelModel):
    layout: LayoutSchema
    row_id: str = Field(alias="rowId")


class RemoveReportRequest(_CamelModel):
    layout: LayoutSchema
    row_id: str = Field(alias="rowId")
    report_id: str = Field(alias="reportId")


class SelectionRequest(_CamelModel):
    layout: LayoutSchema
    report_ids: list[str] = Field(alias="reportIds")


class LayoutRequest(BaseModel):
    layout: LayoutSchema


class LayoutResponse(_CamelModel):
    layout: LayoutSchema
    changed: bool


class RemoveReportResponse(_CamelModel):
    layout: LayoutSchema
    removed_report_id: Optional[str] = Field(default=None, alias="removedReportId")


class ValidationResponse(BaseModel):
    valid: bool
    problems: list[str] = []
    normalized: LayoutSchema


# ── Report catalog ──
class ReportResponse(BaseModel):
    report_id: str
    report_name: str
    chart_type: str
    description: Optional[str] = None
    data_source: Optional[str] = None
    allowed_views: list[str] = []
    default_filters: dict = {}


class ReportUpsertRequest(BaseModel):
    report_name: str
    chart_type: str = "bar"
    description: Optional[str] = None
    data_source: Optional[str] = None
    allowed_views: list[str] = []
    default_filters: dict = {}


# ── Dashboard views ──
class DashboardViewResponse(_CamelModel):
    view: str
    report_ids: list[str] = Field(alias="reportIds")
    layout: LayoutSchema
    stored: bool = True
    updated_at: Optional[str] = Field(default=None, alias="updatedAt")


class SaveViewRequest(_CamelModel):
    layout: LayoutSchema
    report_ids: Optional[list[str]] = Field(default=None, alias="reportIds")
