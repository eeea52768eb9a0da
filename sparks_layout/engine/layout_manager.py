"""Layout Manager — persistence of dashboard views and the report catalog."""

import json
from typing import Iterable, Optional

from sqlalchemy import select

from ..layout import (
    Layout,
    Report,
    ReportCatalog,
    apply_selection,
    default_layout,
    filter_reports_for_view,
    find_violations,
    normalize,
)
from ..utils.logging import get_logger

logger = get_logger("engine.layout_manager")


class LayoutManager:
    """Loads and stores per-view layouts; the layout core itself holds no storage."""

    def __init__(
        self,
        db_session_factory=None,
        reports_per_row: int = 2,
        default_view_reports: Optional[dict[str, list[str]]] = None,
    ):
        self._db_session_factory = db_session_factory
        self._reports_per_row = reports_per_row
        self._default_view_reports = default_view_reports or {}

    def set_db_session_factory(self, factory) -> None:
        self._db_session_factory = factory

    @property
    def reports_per_row(self) -> int:
        return self._reports_per_row

    # --- Report catalog ---

    async def list_reports(self, view: str | None = None) -> list[dict]:
        """List report definitions, optionally only those allowed on ``view``."""
        from ..models.report_definition import ReportDefinition

        async with self._db_session_factory() as session:
            rows = (await session.execute(
                select(ReportDefinition).order_by(ReportDefinition.report_id)
            )).scalars().all()
            reports = [self._report_to_dict(r) for r in rows]

        if view is not None:
            catalog = ReportCatalog(self._report_from_dict(r) for r in reports)
            reports = [r for r in reports if catalog.allows(r["report_id"], view)]
        return reports

    async def get_report(self, report_id: str) -> dict | None:
        from ..models.report_definition import ReportDefinition

        async with self._db_session_factory() as session:
            row = (await session.execute(
                select(ReportDefinition).where(ReportDefinition.report_id == report_id)
            )).scalar_one_or_none()
            return self._report_to_dict(row) if row else None

    async def upsert_report(
        self,
        report_id: str,
        report_name: str,
        chart_type: str = "bar",
        description: str | None = None,
        data_source: str | None = None,
        allowed_views: list[str] | None = None,
        default_filters: dict | None = None,
    ) -> dict:
        """Create or replace a report definition."""
        from ..models.report_definition import ReportDefinition

        async with self._db_session_factory() as session:
            row = (await session.execute(
                select(ReportDefinition).where(ReportDefinition.report_id == report_id)
            )).scalar_one_or_none()
            created = row is None
            if created:
                row = ReportDefinition(report_id=report_id)
                session.add(row)
            row.report_name = report_name
            row.chart_type = chart_type
            row.description = description
            row.data_source = data_source
            row.allowed_views_json = json.dumps(allowed_views) if allowed_views else None
            row.default_filters_json = json.dumps(default_filters) if default_filters else None
            await session.commit()
            result = self._report_to_dict(row)

        logger.info("report_saved", report_id=report_id, created=created)
        return result

    async def delete_report(self, report_id: str) -> bool:
        from ..models.report_definition import ReportDefinition

        async with self._db_session_factory() as session:
            row = (await session.execute(
                select(ReportDefinition).where(ReportDefinition.report_id == report_id)
            )).scalar_one_or_none()
            if not row:
                return False
            await session.delete(row)
            await session.commit()

        logger.info("report_deleted", report_id=report_id)
        return True

    async def seed_reports(self, reports: Iterable[dict]) -> int:
        """Insert report definitions that do not exist yet (idempotent by id)."""
        from ..models.report_definition import ReportDefinition

        added = 0
        async with self._db_session_factory() as session:
            for data in reports:
                existing = (await session.execute(
                    select(ReportDefinition).where(ReportDefinition.report_id == data["report_id"])
                )).scalar_one_or_none()
                if existing is not None:
                    continue
                session.add(ReportDefinition(
                    report_id=data["report_id"],
                    report_name=data["report_name"],
                    chart_type=data.get("chart_type", "bar"),
                    description=data.get("description"),
                    data_source=data.get("data_source"),
                    allowed_views_json=json.dumps(data["allowed_views"]) if data.get("allowed_views") else None,
                ))
                added += 1
            await session.commit()
        return added

    async def load_catalog(self) -> ReportCatalog:
        reports = await self.list_reports()
        return ReportCatalog(self._report_from_dict(r) for r in reports)

    # --- Dashboard views ---

    async def list_views(self) -> list[dict]:
        from ..models.dashboard_view import DashboardView

        async with self._db_session_factory() as session:
            rows = (await session.execute(
                select(DashboardView).order_by(DashboardView.view)
            )).scalars().all()
            return [self._view_to_dict(r) for r in rows]

    async def get_view(self, view: str) -> dict | None:
        """The stored configuration for ``view``, exactly as saved."""
        from ..models.dashboard_view import DashboardView

        async with self._db_session_factory() as session:
            row = (await session.execute(
                select(DashboardView).where(DashboardView.view == view)
            )).scalar_one_or_none()
            return self._view_to_dict(row) if row else None

    async def resolve_view(self, view: str) -> dict:
        """The layout to display for ``view``.

        Uses the stored report selection when any of it is still in the
        catalog and allowed on the view, otherwise the configured defaults
        for the view. A stored layout is repaired against the current
        catalog and trimmed to the selection; without one, a default layout
        is built from the selection. Only catalog reports are ever placed.
        """
        catalog = await self.load_catalog()
        stored = await self.get_view(view)
        defaults = self._default_view_reports.get(view, [])

        configured = []
        if stored:
            configured = filter_reports_for_view(
                [r for r in stored["report_ids"] if r in catalog], view, catalog
            )

        layout: Optional[Layout] = None
        if configured:
            report_ids = configured
            if stored["layout"] is not None:
                layout = apply_selection(
                    normalize(Layout.from_dict(stored["layout"]), catalog),
                    report_ids,
                    per_row=self._reports_per_row,
                )
        else:
            report_ids = filter_reports_for_view(
                [r for r in defaults if r in catalog], view, catalog
            )

        if layout is None:
            layout = default_layout(report_ids, per_row=self._reports_per_row)

        return {
            "view": view,
            "report_ids": report_ids,
            "layout": layout,
            "stored": stored is not None,
            "updated_at": stored["updated_at"] if stored else None,
        }

    async def save_view(self, view: str, layout: Layout, report_ids: list[str] | None = None) -> dict:
        """Persist a layout for ``view`` after repairing it against the catalog.

        Without an explicit ``report_ids`` the selection is the set of
        reports placed in the layout. The stored layout places exactly the
        selected reports that the view allows.
        """
        from ..models.dashboard_view import DashboardView

        catalog = await self.load_catalog()
        layout = normalize(layout, catalog)
        problems = find_violations(layout)
        if problems:
            # normalize() leaves no violations behind
            logger.error("layout_invalid_after_normalize", view=view, problems=problems)
            raise ValueError("; ".join(problems))

        if report_ids is None:
            report_ids = layout.report_ids()
        report_ids = filter_reports_for_view(
            [r for r in report_ids if r in catalog], view, catalog
        )
        layout = apply_selection(layout, report_ids, per_row=self._reports_per_row)

        async with self._db_session_factory() as session:
            row = (await session.execute(
                select(DashboardView).where(DashboardView.view == view)
            )).scalar_one_or_none()
            if row is None:
                row = DashboardView(view=view)
                session.add(row)
            row.report_ids_json = json.dumps(report_ids)
            row.layout_json = json.dumps(layout.to_dict())
            await session.commit()
            await session.refresh(row)
            result = self._view_to_dict(row)

        logger.info("view_saved", view=view, rows=layout.row_count, reports=len(report_ids))
        return result

    async def delete_view(self, view: str) -> bool:
        from ..models.dashboard_view import DashboardView

        async with self._db_session_factory() as session:
            row = (await session.execute(
                select(DashboardView).where(DashboardView.view == view)
            )).scalar_one_or_none()
            if not row:
                return False
            await session.delete(row)
            await session.commit()

        logger.info("view_deleted", view=view)
        return True

    # --- Conversions ---

    @staticmethod
    def _report_to_dict(row) -> dict:
        return {
            "report_id": row.report_id,
            "report_name": row.report_name,
            "chart_type": row.chart_type,
            "description": row.description,
            "data_source": row.data_source,
            "allowed_views": json.loads(row.allowed_views_json) if row.allowed_views_json else [],
            "default_filters": json.loads(row.default_filters_json) if row.default_filters_json else {},
        }

    @staticmethod
    def _report_from_dict(data: dict) -> Report:
        return Report(
            report_id=data["report_id"],
            report_name=data["report_name"],
            chart_type=data.get("chart_type") or "bar",
            description=data.get("description"),
            allowed_views=tuple(data.get("allowed_views") or ()),
            data_source=data.get("data_source"),
            default_filters=data.get("default_filters") or {},
        )

    @staticmethod
    def _view_to_dict(row) -> dict:
        return {
            "view": row.view,
            "report_ids": json.loads(row.report_ids_json) if row.report_ids_json else [],
            "layout": json.loads(row.layout_json) if row.layout_json else None,
            "updated_at": row.updated_at.isoformat() if row.updated_at else None,
        }
