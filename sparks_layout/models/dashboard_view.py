"""Dashboard view configuration — selected reports and row layout per view."""

from datetime import datetime
from typing import Optional

from sqlalchemy import DateTime, Integer, String, Text, func
from sqlalchemy.orm import Mapped, mapped_column

from .base import Base


class DashboardView(Base):
    __tablename__ = "dashboard_views"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    view: Mapped[str] = mapped_column(String(100), unique=True, nullable=False, index=True)
    report_ids_json: Mapped[str] = mapped_column(Text, nullable=False, default="[]")
    layout_json: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    updated_at: Mapped[datetime] = mapped_column(
        DateTime, server_default=func.now(), onupdate=func.now(), nullable=False
    )
