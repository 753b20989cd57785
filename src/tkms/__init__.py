"""Time-keeping management system (TKMS).

The package is organized by feature modules (attendance, schedules,
time entries, adjustments, reports) with a thin Flask controller layer on top
of service and repository layers. The attendance calculator in
``tkms.attendance.calculator`` is the single place where worked time,
lunch deduction, lateness, early-out and overtime are derived.
"""
