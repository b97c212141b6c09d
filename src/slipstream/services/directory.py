"""Read-side views over the employee master and attendance history."""

from __future__ import annotations

import logging
import math
from datetime import date
from decimal import Decimal
from typing import Sequence, TypeVar

from slipstream.core.exceptions import EmployeeNotFoundError, NotFoundError, ValidationError
from slipstream.core.types import JsonDict
from slipstream.models.employee import AttendanceRecord, EmployeeRecord
from slipstream.payroll.computation import salary_stats
from slipstream.payroll.months import (
    end_of_month,
    history_label,
    parse_period,
    parse_sheet_date,
    to_period,
    validate_employee_code,
)
from slipstream.persistence.repository import PayrollRepository

logger = logging.getLogger(__name__)

T = TypeVar("T")

ALL = "All"


def paginate(items: Sequence[T], page: int, page_size: int) -> JsonDict:
    """Slice ``items``; the page number is clamped into range."""
    page_size = max(page_size, 1)
    total_pages = math.ceil(len(items) / page_size) or 1
    current = min(max(page, 1), total_pages)
    start = (current - 1) * page_size
    return {
        "items": list(items[start:start + page_size]),
        "totalRecords": len(items),
        "totalPages": total_pages,
        "currentPage": current,
        "pageSize": page_size,
        "hasPrevPage": current > 1,
        "hasNextPage": current < total_pages,
    }


def employee_summary(emp: EmployeeRecord) -> JsonDict:
    return {
        "employeeCode": emp.employee_code,
        "name": emp.name,
        "email": emp.email,
        "department": emp.department,
        "designation": emp.designation,
        "status": emp.status,
        "netPay": emp.net_pay or Decimal("0"),
    }


def matches(emp: EmployeeRecord, search: str = "", department: str = ALL,
            status: str = ALL) -> bool:
    needle = search.strip().lower()
    if needle and not (
        needle in emp.name.lower()
        or needle in emp.employee_code.lower()
        or needle in emp.email.lower()
    ):
        return False
    if department and department != ALL and emp.department.lower() != department.lower():
        return False
    if status and status != ALL and emp.status.lower() != status.lower():
        return False
    return True


def active_as_of(employees: Sequence[EmployeeRecord], cutoff: date) -> list[EmployeeRecord]:
    """Employees whose joining date parses and falls on or before ``cutoff``."""
    out = []
    for emp in employees:
        joined = parse_sheet_date(emp.date_of_joining)
        if joined is not None and joined <= cutoff:
            out.append(emp)
    return out


def payslip_history(rows: Sequence[AttendanceRecord]) -> list[JsonDict]:
    """Generated payslips, newest first, versioned in sheet order.

    Rows whose Month cell does not parse are skipped with a warning.
    """
    history = []
    for row in rows:
        if not row.payslip_link:
            continue
        try:
            label = history_label(row.period)
        except ValidationError:
            logger.warning("Skipping payslip history row for %s with unreadable month %r",
                           row.employee_code, row.period)
            continue
        history.append({
            "version": f"v{len(history) + 1}",
            "period": row.period,
            "month": label,
            "generatedDate": row.generated_date or None,
            "status": "Sent" if row.email_sent else "Not Sent",
            "link": row.payslip_link,
        })
    history.reverse()
    return history


def _period_start(period: str) -> date | None:
    try:
        year, month = parse_period(period)
    except ValidationError:
        return None
    return date(year, month, 1)


def employee_detail(emp: EmployeeRecord, history: list[JsonDict]) -> JsonDict:
    starts = [_period_start(h["period"]) for h in history]
    last_generated = max((s for s in starts if s is not None), default=None)
    sent_dates = [
        parse_sheet_date(h["generatedDate"] or "") or _period_start(h["period"])
        for h in history if h["status"] == "Sent"
    ]
    last_sent = max((d for d in sent_dates if d is not None), default=None)
    return {
        "name": emp.name,
        "employeeType": emp.employee_type,
        "employeeCode": emp.employee_code,
        "email": emp.email,
        "designation": emp.designation,
        "department": emp.department,
        "dateOfJoining": emp.date_of_joining,
        "providentFund": emp.provident_fund,
        "esicNo": emp.esic_no,
        "bankName": emp.bank_name,
        "accountNo": emp.account_no,
        "ifscCode": emp.ifsc_code,
        "branchName": emp.branch_name,
        "uanNo": emp.uan_no,
        "panNo": emp.pan_no,
        "totalArrearDays": emp.total_arrear_days,
        "lop": emp.lop,
        "basicSalary": emp.basic_salary,
        "hra": emp.hra,
        "lta": emp.lta,
        "specialAllowance": emp.special_allowance,
        "grossEarning": emp.gross_earning,
        "professionalTax": emp.professional_tax,
        "tds": emp.tds,
        "totalDeductions": emp.total_deductions,
        "netPay": emp.net_pay,
        "isSlipGenerated": bool(history),
        "isEmailSent": any(h["status"] == "Sent" for h in history),
        "payslipHistory": history,
        "lastGenerated": last_generated.strftime("%B %Y") if last_generated else None,
        "lastSent": f"{last_sent:%B} {last_sent.day}, {last_sent.year}" if last_sent else None,
    }


class EmployeeDirectory:
    """Listing, detail and monthly statistics. Every call reads the datastore afresh."""

    def __init__(self, repository: PayrollRepository) -> None:
        self._repo = repository

    def list_employees(self, page: int = 1, limit: int = 10, search: str = "",
                       department: str = ALL, status: str = ALL) -> JsonDict:
        employees = self._repo.employees()
        filtered = [e for e in employees if matches(e, search, department, status)]
        paged = paginate(filtered, page, limit)
        return {
            "employees": [employee_summary(e) for e in paged.pop("items")],
            **paged,
            "summary": {
                "totalEmployees": len(employees),
                "filteredEmployees": len(filtered),
                "activeEmployees": sum(1 for e in filtered if e.is_active),
                "totalPayroll": sum((e.net_pay or Decimal("0") for e in filtered), Decimal("0")),
            },
        }

    def employee_detail(self, employee_code: str) -> JsonDict:
        code = validate_employee_code(employee_code)
        emp = self._repo.employee(code)
        if emp is None:
            raise EmployeeNotFoundError(code)
        history = payslip_history(self._repo.employee_attendance(code))
        return employee_detail(emp, history)

    def departments(self) -> list[str]:
        names = sorted({e.department for e in self._repo.employees() if e.department})
        if not names:
            raise NotFoundError("No departments found")
        return names

    def monthly_stats(self, month: str) -> JsonDict:
        period = to_period(month)
        cutoff = end_of_month(month)
        active = active_as_of(self._repo.employees(), cutoff)
        attendance = self._repo.attendance(period)
        return {
            "month": history_label(period),
            "stats": {
                "totalEmployees": len(active),
                "totalSalaries": salary_stats(active)["totalSalaries"],
                "slipsGenerated": sum(1 for a in attendance if a.payslip_link),
                "emailsSent": sum(1 for a in attendance if a.email_sent),
            },
        }

    def monthly_status(self, month: str, page: int = 1, limit: int = 10, search: str = "",
                       department: str = ALL) -> JsonDict:
        period = to_period(month)
        by_code = {a.employee_code: a for a in self._repo.attendance(period)}
        rows = []
        for emp in self._repo.employees():
            if not matches(emp, search, department):
                continue
            att = by_code.get(emp.employee_code)
            rows.append({
                **employee_summary(emp),
                "month": history_label(period),
                "hasAttendance": att is not None,
                "isSlipGenerated": bool(att and att.payslip_link),
                "isEmailSent": bool(att and att.email_sent),
                "payslipLink": att.payslip_link if att else None,
                "generatedDate": (att.generated_date or None) if att else None,
            })
        paged = paginate(rows, page, limit)
        return {"employees": paged.pop("items"), **paged}

    def report(self, month: str, department: str = ALL) -> JsonDict:
        """Salary totals for employees who joined by month end and have attendance that month."""
        period = to_period(month)
        cutoff = end_of_month(month)
        attendance = self._repo.attendance(period)
        label = history_label(period)
        if not attendance:
            logger.info("No attendance for %s; reporting zero totals", period)
            return {"month": label, "stats": salary_stats([])}
        attended = {a.employee_code for a in attendance}
        included = [
            e for e in active_as_of(self._repo.employees(), cutoff)
            if matches(e, department=department) and e.employee_code in attended
        ]
        return {"month": label, "stats": salary_stats(included)}
