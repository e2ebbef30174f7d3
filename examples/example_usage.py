"""Example: drive the time clock through the state controller, without Flask.

Runs against the in-memory record store, so no database is needed.
"""

from datetime import timedelta

from levant.container import build_container
from levant.core.enums import Role
from levant.reports import aggregation


def main():
    container = build_container(store_backend="memory")
    container.admin_service.setup(email="owner@levant.nl", password="geheim", pin="1234")

    state = container.state
    employee = state.add_employee("Sara de Vries", Role.KITCHEN)

    start = state.now() - timedelta(hours=6)
    state.clock_in(employee.id, now=start)
    state.clock_out(employee.id, now=start + timedelta(hours=5, minutes=30))

    report = container.hours_service.build_monthly_report(employee_id=employee.id, year_month=start.strftime("%Y-%m"))
    print(report.filename, report.total_display)

    now = state.now()
    for row in aggregation.employee_board(state.employees, state.logs, now.date(), now):
        print(row.employee.name, row.status.value)


if __name__ == "__main__":
    main()
