"""Layout model — immutable rows of report placements."""

from __future__ import annotations

import re
from dataclasses import dataclass, field, replace
from typing import Iterable, Optional

ROW_ID_PREFIX = "row-"

_ROW_NUMBER_RE = re.compile(r"^row-(\d+)$")


class LayoutError(Exception):
    """Base class for layout errors."""


class InvalidStateError(LayoutError):
    """Raised when a caller violates the drag session contract."""


def row_id_for(number: int) -> str:
    return f"{ROW_ID_PREFIX}{number}"


def _row_number(row_id: str) -> Optional[int]:
    match = _ROW_NUMBER_RE.match(row_id)
    return int(match.group(1)) if match else None


@dataclass(frozen=True)
class Row:
    """A horizontal grouping of report ids, rendered side by side."""

    id: str
    report_ids: tuple[str, ...] = ()

    def __post_init__(self) -> None:
        if not isinstance(self.report_ids, tuple):
            object.__setattr__(self, "report_ids", tuple(self.report_ids))

    @property
    def is_empty(self) -> bool:
        return not self.report_ids

    def contains(self, report_id: str) -> bool:
        return report_id in self.report_ids

    def index_of(self, report_id: str) -> int:
        return self.report_ids.index(report_id)

    def with_reports(self, report_ids: Iterable[str]) -> "Row":
        return replace(self, report_ids=tuple(report_ids))


@dataclass(frozen=True)
class Layout:
    """Ordered rows of report placements.

    Layouts are values: every operation in this package returns a new
    Layout and never mutates its input. ``next_row_number`` only grows, so
    row ids minted from it are never reused while the layout lives.
    """

    rows: tuple[Row, ...] = ()
    next_row_number: int = field(default=0)

    def __post_init__(self) -> None:
        if not isinstance(self.rows, tuple):
            object.__setattr__(self, "rows", tuple(self.rows))
        floor = self._min_next_row_number(self.rows)
        if self.next_row_number < floor:
            object.__setattr__(self, "next_row_number", floor)

    @staticmethod
    def _min_next_row_number(rows: tuple[Row, ...]) -> int:
        highest = 0
        for row in rows:
            number = _row_number(row.id)
            if number is not None and number > highest:
                highest = number
        return max(highest, len(rows)) + 1

    @classmethod
    def from_rows(cls, rows: Iterable[tuple[str, Iterable[str]]], next_row_number: int = 0) -> "Layout":
        """Build a layout from ``(row_id, report_ids)`` pairs."""
        return cls(
            rows=tuple(Row(id=row_id, report_ids=tuple(ids)) for row_id, ids in rows),
            next_row_number=next_row_number,
        )

    @property
    def row_count(self) -> int:
        return len(self.rows)

    @property
    def row_ids(self) -> list[str]:
        return [row.id for row in self.rows]

    def report_ids(self) -> list[str]:
        """All placed report ids in display order."""
        return [report_id for row in self.rows for report_id in row.report_ids]

    def row_index(self, row_id: str) -> int:
        """Index of the row with ``row_id``, or -1."""
        for idx, row in enumerate(self.rows):
            if row.id == row_id:
                return idx
        return -1

    def get_row(self, row_id: str) -> Optional[Row]:
        idx = self.row_index(row_id)
        return self.rows[idx] if idx != -1 else None

    def find_report(self, report_id: str) -> Optional[tuple[Row, int]]:
        """Locate a report: ``(row, position)`` or None."""
        for row in self.rows:
            if report_id in row.report_ids:
                return row, row.report_ids.index(report_id)
        return None

    def with_rows(self, rows: Iterable[Row], next_row_number: Optional[int] = None) -> "Layout":
        return Layout(
            rows=tuple(rows),
            next_row_number=self.next_row_number if next_row_number is None else next_row_number,
        )

    def mint_row_id(self) -> tuple[str, int]:
        """Return a fresh row id and the counter value to store after it."""
        number = self.next_row_number
        taken = set(self.row_ids)
        while row_id_for(number) in taken:
            number += 1
        return row_id_for(number), number + 1

    def to_dict(self) -> dict:
        return {
            "rows": [{"id": row.id, "reportIds": list(row.report_ids)} for row in self.rows],
            "nextRowNumber": self.next_row_number,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "Layout":
        rows = data.get("rows") or []
        return cls(
            rows=tuple(
                Row(id=str(row["id"]), report_ids=tuple(str(r) for r in row.get("reportIds") or []))
                for row in rows
            ),
            next_row_number=int(data.get("nextRowNumber") or 0),
        )


def fallback_layout(next_row_number: int = 0) -> Layout:
    """A layout holding a single empty row."""
    number = max(next_row_number, 1)
    return Layout(rows=(Row(id=row_id_for(number)),), next_row_number=number + 1)
