"""Dashboard layout core — rows of reports, drag sessions, and the move engine."""

from .catalog import EVERY_DASHBOARD, Report, ReportCatalog, normalize_allowed_views
from .drag import DragResult, DragSession, DropTarget
from .engine import apply_drop
from .model import InvalidStateError, Layout, LayoutError, Row, fallback_layout
from .rows import add_row, remove_report_from_row, remove_row
from .selection import apply_selection, default_layout, filter_reports_for_view, flatten
from .validator import find_violations, is_valid, normalize
