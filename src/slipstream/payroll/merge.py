"""Record merge engine: employee master ⊕ one month of attendance."""

from __future__ import annotations

import logging
from typing import Iterable, Sequence

from slipstream.core.exceptions import EmployeeNotFoundError, NoAttendanceDataError
from slipstream.models.employee import AttendanceRecord, EmployeeRecord
from slipstream.models.payslip import MergedPayrollRecord
from slipstream.payroll.computation import amount_to_words, working_days_in_month
from slipstream.payroll.months import display_label, normalize_period, parse_period, to_period

logger = logging.getLogger(__name__)


def target_period(period: str) -> str:
    """``2025-07``, ``07/2025`` or ``7/2025`` -> ``7/2025``; anything else raises ValidationError."""
    text = (period or "").strip()
    if "-" in text:
        return to_period(text)
    year, month = parse_period(text)
    return f"{month}/{year}"


def attendance_for_period(
    attendance: Iterable[AttendanceRecord], period: str
) -> list[AttendanceRecord]:
    """Rows whose normalized month equals the normalized ``period``."""
    target = normalize_period(period)
    return [a for a in attendance if normalize_period(a.period) == target]


def _build(
    employee: EmployeeRecord,
    att: AttendanceRecord | None,
    period: str,
    label: str,
    working_days: int,
) -> MergedPayrollRecord:
    leaves = att.leaves_taken if att is not None else 0
    return MergedPayrollRecord(
        employee=employee,
        period=period,
        month=label,
        leaves=leaves,
        working_days=working_days - leaves,
        net_pay_words=amount_to_words(employee.net_pay),
        payslip_link=att.payslip_link if att is not None else "",
        generated_date=att.generated_date if att is not None else "",
        email_sent=att.email_sent if att is not None else False,
    )


def merge(
    employees: Sequence[EmployeeRecord],
    attendance: Iterable[AttendanceRecord],
    period: str,
) -> list[MergedPayrollRecord]:
    """Join every employee with their attendance row for ``period``.

    ``period`` may be ``YYYY-MM`` or ``M/YYYY``; malformed values raise
    :class:`ValidationError`. Employees without an attendance row get zero
    leave and the full month of working days. An empty attendance set for the
    month raises :class:`NoAttendanceDataError`: that means "nothing to
    process", not "process everyone with zero leave".
    """
    period = target_period(period)
    month_rows = attendance_for_period(attendance, period)
    if not month_rows:
        raise NoAttendanceDataError(period)

    by_code: dict[str, AttendanceRecord] = {}
    for row in month_rows:
        if row.employee_code in by_code:
            logger.warning("Duplicate attendance row for %s in %s; using the last one",
                           row.employee_code, period)
        by_code[row.employee_code] = row

    working_days = working_days_in_month(period)
    label = display_label(period)
    merged = [
        _build(emp, by_code.get(emp.employee_code), period, label, working_days)
        for emp in employees
    ]
    logger.info("Merged %d employees with %d attendance rows for %s",
                len(merged), len(month_rows), period)
    return merged


def merge_one(
    employee_code: str,
    employees: Sequence[EmployeeRecord],
    attendance: Iterable[AttendanceRecord],
    period: str,
) -> MergedPayrollRecord:
    """Merged record for a single employee; raises when the code is unknown."""
    matches = [e for e in employees if e.employee_code == employee_code]
    if not matches:
        raise EmployeeNotFoundError(employee_code)
    return merge(matches, attendance, period)[0]
