"""Drag session — the lifecycle of a single drag-and-drop gesture.

The UI layer owns one :class:`DragSession` per dashboard editor and feeds
it the gesture events in the order they arrive. Nothing here touches a
Layout; the captured :class:`DragResult` is handed to
:func:`sparks_layout.layout.engine.apply_drop` once the gesture completes.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from ..utils.logging import get_logger
from .model import InvalidStateError

logger = get_logger("layout.drag")

STATE_IDLE = "idle"
STATE_DRAGGING = "dragging"


@dataclass(frozen=True)
class DropTarget:
    """Where a dragged card is hovering.

    ``report_id`` is set when the pointer is over another report card,
    and left as None for a row's drop zone.
    """

    row_id: str
    report_id: Optional[str] = None

    @property
    def is_card(self) -> bool:
        return self.report_id is not None


@dataclass(frozen=True)
class DragResult:
    report_id: str
    source_row_id: str
    target: Optional[DropTarget] = None


class DragSession:
    """Explicit idle/dragging state machine."""

    def __init__(self):
        self._report_id: Optional[str] = None
        self._source_row_id: Optional[str] = None
        self._hover: Optional[DropTarget] = None

    @property
    def state(self) -> str:
        return STATE_DRAGGING if self._report_id is not None else STATE_IDLE

    @property
    def is_dragging(self) -> bool:
        return self._report_id is not None

    @property
    def dragged_report_id(self) -> Optional[str]:
        return self._report_id

    @property
    def source_row_id(self) -> Optional[str]:
        return self._source_row_id

    @property
    def hover_target(self) -> Optional[DropTarget]:
        return self._hover

    def start_drag(self, report_id: str, source_row_id: str) -> None:
        if self.is_dragging:
            raise InvalidStateError(
                f"Cannot start dragging {report_id!r}: {self._report_id!r} is already being dragged"
            )
        self._report_id = report_id
        self._source_row_id = source_row_id
        self._hover = None
        logger.debug("drag_started", report_id=report_id, source_row_id=source_row_id)

    def update_hover_target(self, target: Optional[DropTarget]) -> None:
        if not self.is_dragging:
            return
        self._hover = target

    def end_drag(self) -> Optional[DragResult]:
        """Finish the gesture.

        Returns None when nothing was being dragged or the pointer was
        released outside any row or card.
        """
        if not self.is_dragging:
            return None
        result = None
        if self._hover is not None:
            result = DragResult(
                report_id=self._report_id,
                source_row_id=self._source_row_id,
                target=self._hover,
            )
        logger.debug(
            "drag_ended",
            report_id=self._report_id,
            target_row_id=self._hover.row_id if self._hover else None,
        )
        self._reset()
        return result

    def cancel_drag(self) -> None:
        if self.is_dragging:
            logger.debug("drag_cancelled", report_id=self._report_id)
        self._reset()

    def _reset(self) -> None:
        self._report_id = None
        self._source_row_id = None
        self._hover = None
