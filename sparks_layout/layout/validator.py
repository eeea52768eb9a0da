"""Layout validator — invariant checks and repair."""

from __future__ import annotations

from typing import Optional

from ..utils.logging import get_logger
from .catalog import ReportCatalog
from .model import Layout, fallback_layout

logger = get_logger("layout.validator")


def find_violations(layout: Layout) -> list[str]:
    """Describe every broken invariant; an empty list means the layout is valid."""
    problems: list[str] = []
    if layout.row_count == 0:
        problems.append("layout has no rows")

    seen_rows: set[str] = set()
    for row in layout.rows:
        if row.id in seen_rows:
            problems.append(f"duplicate row id {row.id!r}")
        seen_rows.add(row.id)

    placed: dict[str, str] = {}
    for row in layout.rows:
        for report_id in row.report_ids:
            if report_id in placed:
                problems.append(
                    f"report {report_id!r} placed in both {placed[report_id]!r} and {row.id!r}"
                )
            else:
                placed[report_id] = row.id
    return problems


def is_valid(layout: Layout) -> bool:
    return not find_violations(layout)


def normalize(layout: Layout, catalog: Optional[ReportCatalog] = None) -> Layout:
    """Repair a layout loaded from storage.

    Unknown report ids (when a catalog is given) are dropped silently, as
    the catalog may have changed since the layout was saved. Later
    placements of an already-placed report and later rows reusing an id
    are dropped. A layout with no rows gets a single empty row. Returns
    ``layout`` itself when nothing needed fixing.
    """
    if layout.row_count == 0:
        return fallback_layout(layout.next_row_number)

    changed = False
    seen_rows: set[str] = set()
    placed: set[str] = set()
    rows = []
    for row in layout.rows:
        if row.id in seen_rows:
            changed = True
            continue
        seen_rows.add(row.id)

        kept = []
        for report_id in row.report_ids:
            if report_id in placed:
                continue
            if catalog is not None and report_id not in catalog:
                continue
            placed.add(report_id)
            kept.append(report_id)
        if len(kept) != len(row.report_ids):
            changed = True
            rows.append(row.with_reports(kept))
        else:
            rows.append(row)

    if not changed:
        return layout
    logger.info("layout_normalized", rows=len(rows), reports=len(placed))
    return layout.with_rows(rows)
