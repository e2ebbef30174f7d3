from __future__ import annotations

from datetime import date, datetime, timedelta, timezone

import pytest

from levant.core.exceptions import NotFoundError, ValidationError
from levant.reports.pdf import render_monthly_report
from levant.reports.service import HoursReportService


@pytest.fixture
def worked_month(state, employee, fixed_now):
    start = datetime(2024, 3, 1, 9, 0, tzinfo=timezone.utc)
    state.add_log(employee.id, date(2024, 3, 1), start, start + timedelta(hours=8))
    second = datetime(2024, 3, 2, 16, 0, tzinfo=timezone.utc)
    state.clock_in(employee.id, now=second)
    state.clock_out(employee.id, now=second + timedelta(hours=7, minutes=30))
    return employee


def test_monthly_report(state, worked_month):
    report = HoursReportService(state).build_monthly_report(employee_id=worked_month.id, year_month="2024-03")

    assert report.total_display == "15.50"
    assert [row["date"] for row in report.rows] == ["2024-03-01", "2024-03-02"]
    assert [row["edited_label"] for row in report.rows] == ["Ja (1)", "Nee"]
    assert [row["hours"] for row in report.rows] == ["8.00", "7.50"]
    assert report.filename == "Levant_Uren_Sara_de Vries_2024-03.pdf"
    assert report.to_dict()["total_hours"] == 15.5


def test_month_defaults_to_current(state, worked_month):
    report = HoursReportService(state).build_monthly_report(employee_id=worked_month.id)

    assert report.year_month == "2024-03"


def test_report_validation(state, employee):
    service = HoursReportService(state)

    with pytest.raises(NotFoundError):
        service.build_monthly_report(employee_id="nobody", year_month="2024-03")
    with pytest.raises(ValidationError):
        service.build_monthly_report(employee_id=employee.id, year_month="2024-13")
    with pytest.raises(ValidationError):
        service.build_monthly_report(employee_id=employee.id, year_month="maart")


def test_pdf_export(state, worked_month):
    report = HoursReportService(state).build_monthly_report(employee_id=worked_month.id, year_month="2024-03")

    pdf = render_monthly_report(report)

    assert pdf.startswith(b"%PDF")
