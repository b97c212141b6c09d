"""Employee master and monthly attendance records.

Rows arrive from the datastore as header-keyed string dicts. Each field below
declares the spreadsheet column it is read from as its alias, so the mapping
from sheet columns to typed fields lives in exactly one place.
"""

from __future__ import annotations

import logging
import re
from decimal import Decimal, InvalidOperation
from typing import Any, Optional

from pydantic import BaseModel, Field, field_validator

logger = logging.getLogger(__name__)

# --- Employee_Details columns ---
COL_EMPLOYEE_CODE = "Employee Code"
COL_EMPLOYEE_NAME = "Employee Name"
COL_DEPARTMENT = "Department"
COL_NET_PAY = "Net Pay"

# --- Monthly_Attendance columns ---
COL_EMP_ID = "Emp ID"  # legacy key column on older attendance sheets
COL_MONTH = "Month"
COL_LEAVES_TAKEN = "Leaves Taken"
COL_PAYSLIP_LINK = "Payslip Link"
COL_GENERATED_DATE = "Generated Date"
COL_EMAIL_SENT = "Email Sent"

EMPLOYEE_KEY_COLUMNS = (COL_EMPLOYEE_CODE,)
ATTENDANCE_KEY_COLUMNS = (COL_MONTH,)

_INT_PREFIX = re.compile(r"^\s*[-+]?\d+")
_MONEY_NOISE = re.compile(r"[,\s₹]|^Rs\.?", re.IGNORECASE)


def parse_amount(value: Any) -> Optional[Decimal]:
    """Parse a money cell. Blank is zero; garbage is None."""
    if value is None:
        return Decimal("0")
    if isinstance(value, Decimal):
        return value
    if isinstance(value, (int, float)):
        return Decimal(str(value))
    text = _MONEY_NOISE.sub("", str(value).strip())
    if text == "":
        return Decimal("0")
    try:
        amount = Decimal(text)
    except InvalidOperation:
        logger.warning("Unparseable amount %r treated as missing", value)
        return None
    if not amount.is_finite():
        logger.warning("Non-finite amount %r treated as missing", value)
        return None
    return amount


def parse_count(value: Any) -> int:
    """Parse a day-count cell the way the sheet was always read: leading integer, else 0."""
    if value is None:
        return 0
    if isinstance(value, int):
        return value
    match = _INT_PREFIX.match(str(value))
    if match is None:
        if str(value).strip():
            logger.warning("Unparseable count %r treated as 0", value)
        return 0
    return int(match.group())


def parse_yes(value: Any) -> bool:
    if isinstance(value, bool):
        return value
    return str(value or "").strip().lower() == "yes"


class EmployeeRecord(BaseModel):
    """One row of the employee master."""

    model_config = {"frozen": True, "populate_by_name": True, "str_strip_whitespace": True}

    # --- Identity ---
    employee_code: str = Field(alias=COL_EMPLOYEE_CODE)
    name: str = Field("", alias=COL_EMPLOYEE_NAME)
    employee_type: str = Field("", alias="Employee Type")
    email: str = Field("", alias="Email")
    designation: str = Field("", alias="Designation")
    department: str = Field("", alias=COL_DEPARTMENT)
    date_of_joining: str = Field("", alias="Date of Joining")
    status: str = Field("", alias="Status")

    # --- Statutory / bank identifiers (opaque) ---
    provident_fund: str = Field("", alias="Provident Fund")
    esic_no: str = Field("", alias="ESIC No.")
    bank_name: str = Field("", alias="Bank Name")
    account_no: str = Field("", alias="Account No")
    ifsc_code: str = Field("", alias="IFSC Code")
    branch_name: str = Field("", alias="Branch Name")
    uan_no: str = Field("", alias="UAN No")
    pan_no: str = Field("", alias="PAN No")

    # --- Day counts ---
    total_arrear_days: int = Field(0, alias="Total Arrear Days")
    lop: int = Field(0, alias="LOP")

    # --- Compensation (None when the cell could not be parsed) ---
    basic_salary: Optional[Decimal] = Field(Decimal("0"), alias="Basic Salary")
    hra: Optional[Decimal] = Field(Decimal("0"), alias="HRA")
    lta: Optional[Decimal] = Field(Decimal("0"), alias="LTA")
    special_allowance: Optional[Decimal] = Field(Decimal("0"), alias="Special Allowance")
    gross_earning: Optional[Decimal] = Field(Decimal("0"), alias="Gross Earning")
    professional_tax: Optional[Decimal] = Field(Decimal("0"), alias="Professional Tax")
    tds: Optional[Decimal] = Field(Decimal("0"), alias="TDS")
    total_deductions: Optional[Decimal] = Field(Decimal("0"), alias="Total Deductions")
    net_pay: Optional[Decimal] = Field(Decimal("0"), alias=COL_NET_PAY)

    @field_validator(
        "basic_salary", "hra", "lta", "special_allowance", "gross_earning",
        "professional_tax", "tds", "total_deductions", "net_pay",
        mode="before",
    )
    @classmethod
    def _amount(cls, value: Any) -> Optional[Decimal]:
        return parse_amount(value)

    @field_validator("total_arrear_days", "lop", mode="before")
    @classmethod
    def _count(cls, value: Any) -> int:
        return parse_count(value)

    @classmethod
    def from_row(cls, row: dict[str, str]) -> "EmployeeRecord":
        return cls.model_validate(row)

    @property
    def is_active(self) -> bool:
        return self.status.lower() == "active"


class AttendanceRecord(BaseModel):
    """One employee's attendance row for one month."""

    model_config = {"frozen": True, "populate_by_name": True, "str_strip_whitespace": True}

    employee_code: str = Field(alias=COL_EMPLOYEE_CODE)
    period: str = Field(alias=COL_MONTH)  # "M/YYYY" once normalized
    leaves_taken: int = Field(0, alias=COL_LEAVES_TAKEN)
    payslip_link: str = Field("", alias=COL_PAYSLIP_LINK)
    generated_date: str = Field("", alias=COL_GENERATED_DATE)
    email_sent: bool = Field(False, alias=COL_EMAIL_SENT)

    @field_validator("leaves_taken", mode="before")
    @classmethod
    def _count(cls, value: Any) -> int:
        count = parse_count(value)
        if count < 0:
            logger.warning("Negative leave count %r treated as 0", value)
            return 0
        return count

    @field_validator("email_sent", mode="before")
    @classmethod
    def _yes(cls, value: Any) -> bool:
        return parse_yes(value)

    @classmethod
    def from_row(cls, row: dict[str, str]) -> "AttendanceRecord":
        if not row.get(COL_EMPLOYEE_CODE) and row.get(COL_EMP_ID):
            row = {**row, COL_EMPLOYEE_CODE: row[COL_EMP_ID]}
        return cls.model_validate(row)
