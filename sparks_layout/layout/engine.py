"""Reorder/move engine — computes the next layout for a completed drop."""

from __future__ import annotations

from typing import Optional

from ..utils.logging import get_logger
from .drag import DragResult
from .model import Layout, Row, fallback_layout

logger = get_logger("layout.engine")


def move_item(items: tuple[str, ...], old_index: int, new_index: int) -> tuple[str, ...]:
    """Move one element, keeping the relative order of all others."""
    moved = list(items)
    moved.insert(new_index, moved.pop(old_index))
    return tuple(moved)


def _resolve_target(layout: Layout, result: DragResult) -> Optional[tuple[Row, int]]:
    """Target row and position for a drop, or None when unresolvable.

    A card target is looked up by report id so a card that moved since the
    hover event still resolves to its current row.
    """
    target = result.target
    if target is None:
        return None
    if target.is_card:
        return layout.find_report(target.report_id)
    row = layout.get_row(target.row_id)
    if row is None:
        return None
    return row, len(row.report_ids)


def apply_drop(layout: Layout, result: Optional[DragResult]) -> Layout:
    """Apply a drop to ``layout``.

    Every gesture that cannot be applied (no target, dropped on itself,
    a row that no longer exists, a duplicate placement) returns the
    very same ``layout`` object.
    """
    if result is None or result.target is None:
        return layout
    if result.target.report_id == result.report_id:
        return layout

    source = layout.get_row(result.source_row_id)
    if source is None or not source.contains(result.report_id):
        logger.debug(
            "drop_ignored",
            reason="stale_source",
            report_id=result.report_id,
            source_row_id=result.source_row_id,
        )
        return layout

    resolved = _resolve_target(layout, result)
    if resolved is None:
        logger.debug("drop_ignored", reason="unresolved_target", report_id=result.report_id)
        return layout
    target_row, target_index = resolved

    if target_row.id == source.id:
        return _reorder_within_row(layout, source, result.report_id, target_index)
    return _move_across_rows(layout, source, target_row, result.report_id)


def _reorder_within_row(layout: Layout, row: Row, report_id: str, target_index: int) -> Layout:
    old_index = row.index_of(report_id)
    new_index = min(target_index, len(row.report_ids) - 1)
    if old_index == new_index:
        return layout

    rows = list(layout.rows)
    rows[layout.row_index(row.id)] = row.with_reports(move_item(row.report_ids, old_index, new_index))
    logger.debug("report_reordered", report_id=report_id, row_id=row.id, old=old_index, new=new_index)
    return layout.with_rows(rows)


def _move_across_rows(layout: Layout, source: Row, target: Row, report_id: str) -> Layout:
    if target.contains(report_id):
        return layout

    rows = list(layout.rows)
    rows[layout.row_index(source.id)] = source.with_reports(r for r in source.report_ids if r != report_id)
    rows[layout.row_index(target.id)] = target.with_reports(target.report_ids + (report_id,))

    emptied = rows[layout.row_index(source.id)]
    if emptied.is_empty and len(rows) > 1:
        rows = [r for r in rows if r.id != source.id]

    logger.debug("report_moved", report_id=report_id, source_row_id=source.id, target_row_id=target.id)
    if not rows:
        return fallback_layout(layout.next_row_number)
    return layout.with_rows(rows)
