"""Default layouts and keeping a layout in step with the selected reports."""

from __future__ import annotations

from typing import Iterable, Sequence

from ..utils.logging import get_logger
from .catalog import ReportCatalog
from .model import Layout, Row, fallback_layout, row_id_for

logger = get_logger("layout.selection")

DEFAULT_REPORTS_PER_ROW = 2


def _chunks(items: Sequence[str], size: int) -> list[tuple[str, ...]]:
    return [tuple(items[i:i + size]) for i in range(0, len(items), size)]


def _unique(report_ids: Iterable[str]) -> list[str]:
    seen: set[str] = set()
    ordered = []
    for report_id in report_ids:
        if report_id not in seen:
            seen.add(report_id)
            ordered.append(report_id)
    return ordered


def default_layout(report_ids: Iterable[str], per_row: int = DEFAULT_REPORTS_PER_ROW) -> Layout:
    """Lay reports out ``per_row`` to a row: ``row-1``, ``row-2``, ..."""
    if per_row < 1:
        raise ValueError("per_row must be at least 1")
    chunks = _chunks(_unique(report_ids), per_row)
    if not chunks:
        return fallback_layout()
    return Layout(rows=tuple(Row(id=row_id_for(i + 1), report_ids=chunk) for i, chunk in enumerate(chunks)))


def filter_reports_for_view(report_ids: Iterable[str], view: str, catalog: ReportCatalog) -> list[str]:
    """First occurrence of each report id allowed on ``view``."""
    return [report_id for report_id in _unique(report_ids) if catalog.allows(report_id, view)]


def flatten(layout: Layout) -> list[str]:
    """Report ids in reading order, for single-column rendering."""
    return layout.report_ids()


def _append_rows(layout: Layout, rows: list[Row], report_ids: list[str], per_row: int) -> Layout:
    next_number = layout.next_row_number
    draft = layout.with_rows(rows, next_row_number=next_number)
    for chunk in _chunks(report_ids, per_row):
        row_id, next_number = draft.mint_row_id()
        rows = rows + [Row(id=row_id, report_ids=chunk)]
        draft = draft.with_rows(rows, next_row_number=next_number)
    return draft


def apply_selection(layout: Layout, selected_ids: Iterable[str], per_row: int = DEFAULT_REPORTS_PER_ROW) -> Layout:
    """Bring ``layout`` in line with the set of reports picked for display.

    Deselected reports are taken off (rows they leave empty go too) and
    newly selected ones are added in fresh rows of ``per_row``.
    """
    if per_row < 1:
        raise ValueError("per_row must be at least 1")
    selected = _unique(selected_ids)
    current = layout.report_ids()
    selected_set = set(selected)
    current_set = set(current)
    to_remove = {r for r in current if r not in selected_set}
    to_add = [r for r in selected if r not in current_set]
    if not to_remove and not to_add:
        return layout

    rows: list[Row] = []
    for row in layout.rows:
        if any(r in to_remove for r in row.report_ids):
            kept = row.with_reports(r for r in row.report_ids if r not in to_remove)
            if not kept.is_empty:
                rows.append(kept)
        else:
            rows.append(row)

    if to_add:
        if all(row.is_empty for row in rows):
            rows = []
        result = _append_rows(layout, rows, to_add, per_row)
    elif rows:
        result = layout.with_rows(rows)
    else:
        result = fallback_layout(layout.next_row_number)

    logger.debug("selection_applied", added=len(to_add), removed=len(to_remove))
    return result
