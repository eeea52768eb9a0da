"""Report catalog — report id to report metadata lookup."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable, Iterator, Mapping, Optional

EVERY_DASHBOARD = "every-dashboard"


@dataclass(frozen=True)
class Report:
    report_id: str
    report_name: str
    chart_type: str = "bar"
    description: Optional[str] = None
    allowed_views: tuple[str, ...] = ()
    data_source: Optional[str] = None
    default_filters: Mapping = field(default_factory=dict)


def normalize_allowed_views(report: Optional[Report]) -> list[str]:
    """Trimmed, lower-cased, de-duplicated view names.

    A missing report, or one with no usable view names, is allowed on
    every dashboard.
    """
    if report is None:
        return [EVERY_DASHBOARD]
    normalized: list[str] = []
    for view in report.allowed_views:
        if not isinstance(view, str):
            continue
        name = view.strip().lower()
        if name and name not in normalized:
            normalized.append(name)
    return normalized or [EVERY_DASHBOARD]


class ReportCatalog:
    """Read-only mapping of report id to :class:`Report`."""

    def __init__(self, reports: Iterable[Report] = ()):
        self._reports: dict[str, Report] = {}
        for report in reports:
            self._reports[report.report_id] = report

    def __contains__(self, report_id: object) -> bool:
        return report_id in self._reports

    def __iter__(self) -> Iterator[Report]:
        return iter(self._reports.values())

    def __len__(self) -> int:
        return len(self._reports)

    def get(self, report_id: str) -> Optional[Report]:
        return self._reports.get(report_id)

    def ids(self) -> list[str]:
        return list(self._reports)

    def allows(self, report_id: str, view: str) -> bool:
        allowed = normalize_allowed_views(self._reports.get(report_id))
        return EVERY_DASHBOARD in allowed or view.strip().lower() in allowed

    def for_view(self, view: str) -> list[Report]:
        """Reports that may be shown on ``view``."""
        return [report for report in self._reports.values() if self.allows(report.report_id, view)]
