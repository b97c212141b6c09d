"""Pure payroll arithmetic: working days, leave adjustment and amounts in words."""

from __future__ import annotations

import calendar
from decimal import ROUND_FLOOR, ROUND_HALF_UP, Decimal, InvalidOperation
from typing import Any, Iterable

from slipstream.models.employee import EmployeeRecord
from slipstream.payroll.months import parse_period

ZERO_WORDS = "Zero Rupees Only."
INVALID_AMOUNT = "Invalid amount"
NEGATIVE_AMOUNT = "Negative amounts not supported"
WORDS_SUFFIX = " Rupees Only."

_UNITS = [
    "", "One", "Two", "Three", "Four", "Five", "Six", "Seven", "Eight", "Nine",
    "Ten", "Eleven", "Twelve", "Thirteen", "Fourteen", "Fifteen", "Sixteen",
    "Seventeen", "Eighteen", "Nineteen",
]
_TENS = ["", "", "Twenty", "Thirty", "Forty", "Fifty", "Sixty", "Seventy", "Eighty", "Ninety"]

# Indian grouping, largest first
_GROUPS = [
    (10_000_000, "Crore"),
    (100_000, "Lakh"),
    (1_000, "Thousand"),
    (100, "Hundred"),
]


def working_days_in_month(period: str) -> int:
    """Count Monday-Friday days in a ``M/YYYY`` month."""
    year, month = parse_period(period)
    weeks = calendar.monthcalendar(year, month)
    return sum(1 for week in weeks for day in week[:5] if day)


def effective_working_days(period: str, leaves_taken: int) -> int:
    """Working days minus leave. Not floored at zero."""
    return working_days_in_month(period) - leaves_taken


def prorated_salary(base_salary: Decimal, working_days: int, leaves: int) -> Decimal:
    """Base salary scaled to the days actually worked, rounded to paise."""
    if working_days <= 0:
        return Decimal("0.00")
    worked = working_days - leaves
    amount = Decimal(base_salary) / working_days * worked
    return amount.quantize(Decimal("0.01"), rounding=ROUND_HALF_UP)


def salary_stats(employees: Iterable[EmployeeRecord]) -> dict[str, Decimal]:
    totals = {"totalSalaries": Decimal("0"), "professionalTax": Decimal("0"), "tds": Decimal("0")}
    for emp in employees:
        totals["totalSalaries"] += emp.net_pay or 0
        totals["professionalTax"] += emp.professional_tax or 0
        totals["tds"] += emp.tds or 0
    return totals


def _below_thousand(n: int) -> str:
    if n == 0:
        return ""
    if n < 20:
        return _UNITS[n]
    if n < 100:
        return _TENS[n // 10] + (" " + _UNITS[n % 10] if n % 10 else "")
    rest = n % 100
    return _UNITS[n // 100] + " Hundred" + (" And " + _below_thousand(rest) if rest else "")


def _group_words(n: int) -> str:
    # crore counts of a thousand or more recurse through the full grouping
    return _below_thousand(n) if n < 1000 else _indian_words(n)


def _indian_words(n: int) -> str:
    words: list[str] = []
    for value, name in _GROUPS:
        quotient, n = divmod(n, value)
        if quotient:
            words.append(f"{_group_words(quotient)} {name}")
    if n:
        if words:
            words.append("And")
        words.append(_below_thousand(n))
    return " ".join(words)


def _to_decimal(amount: Any) -> Decimal | None:
    if amount is None or isinstance(amount, bool):
        return None
    if isinstance(amount, str):
        amount = amount.strip()
        if amount == "":
            return None
    try:
        value = Decimal(str(amount))
    except (InvalidOperation, ValueError):
        return None
    return value if value.is_finite() else None


def amount_to_words(amount: Any) -> str:
    """Render the rupee part of ``amount`` in Indian-grouped words.

    Never raises: anything non-numeric yields ``INVALID_AMOUNT`` and negatives
    yield ``NEGATIVE_AMOUNT``, so one bad cell cannot abort a batch.

    >>> amount_to_words(123456)
    'One Lakh Twenty Three Thousand Four Hundred And Fifty Six Rupees Only.'
    """
    value = _to_decimal(amount)
    if value is None:
        return INVALID_AMOUNT
    rupees = int(value.to_integral_value(rounding=ROUND_FLOOR))
    if rupees < 0:
        return NEGATIVE_AMOUNT
    if rupees == 0:
        return ZERO_WORDS
    return " ".join(_indian_words(rupees).split()) + WORDS_SUFFIX
