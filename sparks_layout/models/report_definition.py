"""Report definition model — the report catalog."""

from typing import Optional

from sqlalchemy import String, Text
from sqlalchemy.orm import Mapped, mapped_column

from .base import Base


class ReportDefinition(Base):
    __tablename__ = "report_definitions"

    report_id: Mapped[str] = mapped_column(String(100), primary_key=True)
    report_name: Mapped[str] = mapped_column(String(255), nullable=False)
    chart_type: Mapped[str] = mapped_column(String(50), nullable=False, default="bar")
    description: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    data_source: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    allowed_views_json: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    default_filters_json: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
