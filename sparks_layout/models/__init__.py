"""SQLAlchemy models package."""

from .base import Base
from .dashboard_view import DashboardView
from .report_definition import ReportDefinition
