"""Layout editing routes — stateless operations over a layout sent by the client.

Nothing here is persisted: the client applies the returned layout and
saves it through the dashboard view routes when the user applies it.
"""

from fastapi import APIRouter, Depends

from ...bridge.contracts import (
    DropRequest,
    LayoutRequest,
    LayoutResponse,
    LayoutSchema,
    RemoveReportRequest,
    RemoveReportResponse,
    RemoveRowRequest,
    SelectionRequest,
    ValidationResponse,
)
from ...dependencies import get_layout_manager
from ...engine.layout_manager import LayoutManager
from ...layout import (
    add_row,
    apply_drop,
    apply_selection,
    find_violations,
    normalize,
    remove_report_from_row,
    remove_row,
)

router = APIRouter(prefix="/layout", tags=["layout"])


def _incoming(schema: LayoutSchema):
    """The layout as sent, and the same layout with duplicates and missing rows repaired."""
    layout = schema.to_layout()
    return layout, normalize(layout)


def _response(before, after) -> LayoutResponse:
    return LayoutResponse(layout=LayoutSchema.from_layout(after), changed=after is not before)


@router.post("/drop", response_model=LayoutResponse)
async def drop_report(body: DropRequest):
    """Apply a completed drag-and-drop gesture."""
    before, layout = _incoming(body.layout)
    return _response(before, apply_drop(layout, body.drop.to_result()))


@router.post("/rows", response_model=LayoutResponse)
async def append_row(body: LayoutRequest):
    """Append an empty row."""
    before, layout = _incoming(body.layout)
    return _response(before, add_row(layout))


@router.post("/rows/remove", response_model=LayoutResponse)
async def delete_row(body: RemoveRowRequest):
    """Remove a row, moving its reports into the first remaining row."""
    before, layout = _incoming(body.layout)
    return _response(before, remove_row(layout, body.row_id))


@router.post("/reports/remove", response_model=RemoveReportResponse)
async def delete_report_from_row(body: RemoveReportRequest):
    """Take a report off the dashboard; the removed id lets the client deselect it."""
    _, layout = _incoming(body.layout)
    layout, removed = remove_report_from_row(layout, body.row_id, body.report_id)
    return RemoveReportResponse(layout=LayoutSchema.from_layout(layout), removed_report_id=removed)


@router.post("/selection", response_model=LayoutResponse)
async def update_selection(
    body: SelectionRequest,
    manager: LayoutManager = Depends(get_layout_manager),
):
    """Add newly selected reports and drop deselected ones."""
    before, layout = _incoming(body.layout)
    return _response(before, apply_selection(layout, body.report_ids, per_row=manager.reports_per_row))


@router.post("/validate", response_model=ValidationResponse)
async def validate_layout(
    body: LayoutRequest,
    manager: LayoutManager = Depends(get_layout_manager),
):
    """Report invariant violations and the repaired layout."""
    layout = body.layout.to_layout()
    problems = find_violations(layout)
    catalog = await manager.load_catalog()
    return ValidationResponse(
        valid=not problems,
        problems=problems,
        normalized=LayoutSchema.from_layout(normalize(layout, catalog)),
    )
