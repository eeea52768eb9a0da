"""Master API router — includes all sub-routers."""

from fastapi import APIRouter

from .routes.layout import router as layout_router
from .routes.reports import router as reports_router
from .routes.views import router as views_router

api_router = APIRouter(prefix="/api/v1")

api_router.include_router(reports_router)
api_router.include_router(views_router)
api_router.include_router(layout_router)
