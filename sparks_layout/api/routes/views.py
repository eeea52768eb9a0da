"""Dashboard view routes — per-view report selection and layout."""

from fastapi import APIRouter, Depends, HTTPException

from ...bridge.contracts import DashboardViewResponse, LayoutSchema, SaveViewRequest
from ...dependencies import get_layout_manager
from ...engine.layout_manager import LayoutManager
from ...layout import Layout

router = APIRouter(prefix="/dashboard-views", tags=["dashboard-views"])


def _stored_response(data: dict) -> DashboardViewResponse:
    return DashboardViewResponse(
        view=data["view"],
        report_ids=data["report_ids"],
        layout=LayoutSchema.from_layout(Layout.from_dict(data["layout"] or {})),
        stored=True,
        updated_at=data["updated_at"],
    )


@router.get("/", response_model=list[DashboardViewResponse])
async def list_views(manager: LayoutManager = Depends(get_layout_manager)):
    """List every stored dashboard view configuration."""
    return [_stored_response(v) for v in await manager.list_views()]


@router.get("/{view}", response_model=DashboardViewResponse)
async def get_view(view: str, manager: LayoutManager = Depends(get_layout_manager)):
    """The layout to display for a view, falling back to its defaults."""
    resolved = await manager.resolve_view(view)
    return DashboardViewResponse(
        view=view,
        report_ids=resolved["report_ids"],
        layout=LayoutSchema.from_layout(resolved["layout"]),
        stored=resolved["stored"],
        updated_at=resolved["updated_at"],
    )


@router.put("/{view}", response_model=DashboardViewResponse)
async def save_view(
    view: str,
    body: SaveViewRequest,
    manager: LayoutManager = Depends(get_layout_manager),
):
    """Persist the layout for a view."""
    saved = await manager.save_view(view, body.layout.to_layout(), report_ids=body.report_ids)
    return _stored_response(saved)


@router.delete("/{view}")
async def delete_view(view: str, manager: LayoutManager = Depends(get_layout_manager)):
    if not await manager.delete_view(view):
        raise HTTPException(status_code=404, detail="Dashboard view not found")
    return {"deleted": view}
