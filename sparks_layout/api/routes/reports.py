"""Report catalog routes."""

from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query

from ...bridge.contracts import ReportResponse, ReportUpsertRequest
from ...dependencies import get_layout_manager
from ...engine.layout_manager import LayoutManager

router = APIRouter(prefix="/reports", tags=["reports"])


@router.get("/", response_model=list[ReportResponse])
async def list_reports(
    view: Optional[str] = Query(None, description="Only reports allowed on this dashboard view"),
    manager: LayoutManager = Depends(get_layout_manager),
):
    """List report definitions."""
    return await manager.list_reports(view=view)


@router.get("/{report_id}", response_model=ReportResponse)
async def get_report(report_id: str, manager: LayoutManager = Depends(get_layout_manager)):
    report = await manager.get_report(report_id)
    if not report:
        raise HTTPException(status_code=404, detail="Report not found")
    return report


@router.put("/{report_id}", response_model=ReportResponse)
async def put_report(
    report_id: str,
    body: ReportUpsertRequest,
    manager: LayoutManager = Depends(get_layout_manager),
):
    """Create or replace a report definition."""
    return await manager.upsert_report(report_id=report_id, **body.model_dump())


@router.delete("/{report_id}")
async def delete_report(report_id: str, manager: LayoutManager = Depends(get_layout_manager)):
    if not await manager.delete_report(report_id):
        raise HTTPException(status_code=404, detail="Report not found")
    return {"deleted": report_id}
