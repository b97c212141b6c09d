"""Merged payroll record: one employee joined with one month of attendance."""

from __future__ import annotations

from pydantic import BaseModel

from slipstream.models.employee import EmployeeRecord


class MergedPayrollRecord(BaseModel):
    """Everything a payslip needs, built per request and discarded after use."""

    model_config = {"frozen": True}

    employee: EmployeeRecord
    period: str  # "M/YYYY"
    month: str  # display label, e.g. "July - 2025"
    leaves: int = 0
    working_days: int = 0  # effective; may be negative when leaves exceed working days
    net_pay_words: str = ""

    # prior delivery status carried over from the attendance row
    payslip_link: str = ""
    generated_date: str = ""
    email_sent: bool = False

    @property
    def employee_code(self) -> str:
        return self.employee.employee_code

    @property
    def email(self) -> str:
        return self.employee.email

    @property
    def file_name(self) -> str:
        return f"{self.employee_code}_Payslip.pdf"

    @property
    def folder_label(self) -> str:
        """Month label with whitespace collapsed to underscores ("July_-_2025")."""
        return "_".join(self.month.split())
