"""Typed read access to the employee and attendance ranges.

This is the only place sheet rows are turned into records, so the column
mapping is validated once here and nowhere else.
"""

from __future__ import annotations

import logging

from pydantic import ValidationError as ModelValidationError

from slipstream.core.exceptions import SchemaError
from slipstream.core.protocols import ITabularStore
from slipstream.core.types import Row
from slipstream.models.employee import (
    ATTENDANCE_KEY_COLUMNS,
    COL_EMP_ID,
    COL_EMPLOYEE_CODE,
    COL_MONTH,
    EMPLOYEE_KEY_COLUMNS,
    AttendanceRecord,
    EmployeeRecord,
)
from slipstream.payroll.months import normalize_period

logger = logging.getLogger(__name__)


def rows_to_dicts(values: list[Row]) -> tuple[list[str], list[dict[str, str]]]:
    """Split a header row off ``values`` and key the remaining rows by header."""
    if not values:
        return [], []
    headers = [h.strip() for h in values[0]]
    rows = []
    for raw in values[1:]:
        row = {}
        for idx, header in enumerate(headers):
            cell = raw[idx] if idx < len(raw) else ""
            row[header] = cell.strip() if isinstance(cell, str) else str(cell)
        rows.append(row)
    return headers, rows


def require_columns(headers: list[str], columns: tuple[str, ...], range_name: str) -> None:
    for column in columns:
        if column not in headers:
            raise SchemaError(column, range_name)


class PayrollRepository:
    """Reads fresh employee and attendance records on every call."""

    def __init__(self, store: ITabularStore, employee_range: str = "Employee_Details",
                 attendance_range: str = "Monthly_Attendance") -> None:
        self._store = store
        self.employee_range = employee_range
        self.attendance_range = attendance_range

    def employees(self) -> list[EmployeeRecord]:
        headers, rows = rows_to_dicts(self._store.read_range(self.employee_range))
        if not headers:
            return []
        require_columns(headers, EMPLOYEE_KEY_COLUMNS, self.employee_range)
        records = []
        for row in rows:
            if not row.get(COL_EMPLOYEE_CODE):
                continue
            try:
                records.append(EmployeeRecord.from_row(row))
            except ModelValidationError as exc:
                logger.warning("Skipping malformed employee row %s: %s",
                               row.get(COL_EMPLOYEE_CODE), exc)
        return records

    def employee(self, employee_code: str) -> EmployeeRecord | None:
        for emp in self.employees():
            if emp.employee_code == employee_code:
                return emp
        return None

    def attendance(self, period: str | None = None) -> list[AttendanceRecord]:
        """All attendance rows, or only those for ``period`` (``M/YYYY``)."""
        headers, rows = rows_to_dicts(self._store.read_range(self.attendance_range))
        if not headers:
            return []
        require_columns(headers, ATTENDANCE_KEY_COLUMNS, self.attendance_range)
        if COL_EMPLOYEE_CODE not in headers and COL_EMP_ID not in headers:
            raise SchemaError(COL_EMPLOYEE_CODE, self.attendance_range)

        target = normalize_period(period) if period else None
        records = []
        for row in rows:
            row_period = normalize_period(row.get(COL_MONTH, ""))
            if target is not None and row_period != target:
                continue
            if not (row.get(COL_EMPLOYEE_CODE) or row.get(COL_EMP_ID)):
                continue
            try:
                records.append(AttendanceRecord.from_row({**row, COL_MONTH: row_period}))
            except ModelValidationError as exc:
                logger.warning("Skipping malformed attendance row %s: %s", row, exc)
        return records

    def employee_attendance(self, employee_code: str) -> list[AttendanceRecord]:
        return [a for a in self.attendance() if a.employee_code == employee_code]

    def payslip_link(self, employee_code: str, period: str) -> str | None:
        for row in self.attendance(period):
            if row.employee_code == employee_code and row.payslip_link:
                return row.payslip_link
        return None

    def payslip_links(self, period: str) -> list[dict[str, str]]:
        return [
            {"employeeCode": row.employee_code, "link": row.payslip_link}
            for row in self.attendance(period)
            if row.payslip_link
        ]
