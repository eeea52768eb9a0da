"""SparksAI Dashboard Layout — FastAPI entry point.

Serves the report catalog, per-view dashboard layouts, and the stateless
layout editing operations used by the dashboard arranger.
"""

from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from .api.router import api_router
from .config import get_config
from .database import close_engine, create_tables
from .dependencies import get_layout_manager
from .middleware.error_handler import register_error_handlers
from .middleware.request_id import RequestIDMiddleware
from .utils.logging import get_logger, setup_logging

__version__ = "0.1.0"

config = get_config()
setup_logging(
    debug=config.debug,
    log_dir=config.log_dir,
    log_max_bytes=config.log_max_bytes,
    log_backup_count=config.log_backup_count,
)
logger = get_logger("sparks_layout.main")

DEFAULT_REPORTS = [
    {"report_id": "team-sprint-burndown", "report_name": "Sprint Burndown", "chart_type": "burn_down",
     "description": "Remaining work across the active sprint", "allowed_views": ["team-dashboard"]},
    {"report_id": "team-current-sprint-progress", "report_name": "Current Sprint Progress", "chart_type": "summary",
     "allowed_views": ["team-dashboard"]},
    {"report_id": "team-issues-trend", "report_name": "Issues Trend", "chart_type": "line",
     "allowed_views": ["team-dashboard"]},
    {"report_id": "team-closed-sprints", "report_name": "Closed Sprints", "chart_type": "table",
     "allowed_views": ["team-dashboard"]},
    {"report_id": "pi-burndown", "report_name": "PI Burndown", "chart_type": "burn_down",
     "description": "Remaining scope across the program increment", "allowed_views": ["pi-dashboard"]},
    {"report_id": "pi-predictability", "report_name": "PI Predictability", "chart_type": "table",
     "allowed_views": ["pi-dashboard"]},
    {"report_id": "pi-metrics-summary", "report_name": "PI Metrics Summary", "chart_type": "summary",
     "allowed_views": ["pi-dashboard"]},
    {"report_id": "epic-scope-changes", "report_name": "Epic Scope Changes", "chart_type": "stacked_bar",
     "allowed_views": ["pi-dashboard"]},
    {"report_id": "sprint-predictability", "report_name": "Sprint Predictability", "chart_type": "bar"},
    {"report_id": "issues-bugs-by-priority", "report_name": "Bugs by Priority", "chart_type": "bar"},
    {"report_id": "issues-bugs-by-team", "report_name": "Bugs by Team", "chart_type": "bar"},
    {"report_id": "issues-flow-status-duration", "report_name": "Flow Status Duration", "chart_type": "composite"},
    {"report_id": "issues-epics-hierarchy", "report_name": "Epics Hierarchy", "chart_type": "tree"},
    {"report_id": "issues-epic-dependencies", "report_name": "Epic Dependencies", "chart_type": "table"},
    {"report_id": "issues-release-predictability", "report_name": "Release Predictability", "chart_type": "bar"},
]


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan: startup and shutdown."""
    logger.info("sparks_layout_starting", host=config.host, port=config.port)

    await create_tables(config)

    manager = get_layout_manager()
    if config.seed_report_catalog:
        added = await manager.seed_reports(DEFAULT_REPORTS)
        logger.info("report_catalog_seeded", added=added)

    yield

    await close_engine()
    logger.info("sparks_layout_stopped")


app = FastAPI(
    title="SparksAI Dashboard Layout",
    description="Dashboard layout arrangement and report catalog service",
    version=__version__,
    lifespan=lifespan,
)

register_error_handlers(app)

app.add_middleware(
    CORSMiddleware,
    allow_origins=[o.strip() for o in config.cors_origins.split(",") if o.strip()],
    allow_credentials=True,
    allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
    allow_headers=["Content-Type", "X-Request-ID"],
)

# Added last so it runs first
app.add_middleware(RequestIDMiddleware)

app.include_router(api_router)


@app.get("/")
async def root():
    return {
        "name": config.app_name,
        "version": __version__,
        "status": "operational",
    }


@app.get("/health")
async def health():
    """Health check including database reachability."""
    manager = get_layout_manager()
    try:
        reports = len(await manager.list_reports())
        database = "ok"
    except Exception as e:
        logger.error("health_database_failed", error=str(e))
        reports = None
        database = "error"
    return {
        "status": "healthy" if database == "ok" else "degraded",
        "database": database,
        "reports": reports,
    }


def main():
    """Run the layout service."""
    uvicorn.run(
        "sparks_layout.main:app",
        host=config.host,
        port=config.port,
        reload=config.debug,
        log_level="debug" if config.debug else "info",
    )


if __name__ == "__main__":
    main()
