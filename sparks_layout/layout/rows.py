"""Row lifecycle — explicit structural edits outside of drag and drop."""

from __future__ import annotations

from typing import Optional

from ..utils.logging import get_logger
from .model import Layout, Row

logger = get_logger("layout.rows")


def add_row(layout: Layout) -> Layout:
    """Append an empty row with a never-before-used id."""
    row_id, next_number = layout.mint_row_id()
    logger.debug("row_added", row_id=row_id)
    return layout.with_rows(layout.rows + (Row(id=row_id),), next_row_number=next_number)


def remove_row(layout: Layout, row_id: str) -> Layout:
    """Delete a row, moving its reports to the end of the first remaining row.

    The last remaining row cannot be removed; nor can a row that does not
    exist. Both return ``layout`` unchanged.
    """
    if layout.row_count <= 1:
        return layout
    removed = layout.get_row(row_id)
    if removed is None:
        return layout

    remaining = [row for row in layout.rows if row.id != row_id]
    first = remaining[0]
    remaining[0] = first.with_reports(first.report_ids + removed.report_ids)
    logger.debug("row_removed", row_id=row_id, migrated=len(removed.report_ids), into=first.id)
    return layout.with_rows(remaining)


def remove_report_from_row(layout: Layout, row_id: str, report_id: str) -> tuple[Layout, Optional[str]]:
    """Take one report off the dashboard.

    Returns the new layout and the removed report id, so the caller can
    deselect it in the report picker. When nothing was removed the
    original layout is returned together with None.
    """
    row = layout.get_row(row_id)
    if row is None or not row.contains(report_id):
        return layout, None

    rows = list(layout.rows)
    idx = layout.row_index(row_id)
    updated = row.with_reports(r for r in row.report_ids if r != report_id)
    if updated.is_empty and len(rows) > 1:
        del rows[idx]
    else:
        rows[idx] = updated
    logger.debug("report_removed", row_id=row_id, report_id=report_id)
    return layout.with_rows(rows), report_id
