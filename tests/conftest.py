"""Shared test fixtures."""

import pytest

from sparks_layout.layout import Layout, Report, ReportCatalog


@pytest.fixture
def two_row_layout():
    """r1: A, B  /  r2: C"""
    return Layout.from_rows([("r1", ["A", "B"]), ("r2", ["C"])])


@pytest.fixture
def catalog():
    return ReportCatalog([
        Report(report_id="A", report_name="Sprint Burndown", chart_type="burn_down"),
        Report(report_id="B", report_name="Issues Trend", chart_type="line"),
        Report(report_id="C", report_name="Closed Sprints", chart_type="table"),
        Report(report_id="D", report_name="PI Burndown", chart_type="burn_down", allowed_views=("pi-dashboard",)),
        Report(report_id="E", report_name="Team Progress", chart_type="summary", allowed_views=(" Team-Dashboard ",)),
    ])
