"""Month handling.

Callers speak ``YYYY-MM``; the datastore stores ``M/YYYY`` with no leading zero.
Both the read path (attendance lookups) and the write path (status patches)
must go through :func:`normalize_period` or joins silently miss rows.
"""

from __future__ import annotations

import calendar
import re
from datetime import date, datetime

from slipstream.core.exceptions import ValidationError

_EXTERNAL = re.compile(r"^(\d{4})-(\d{2})$")
_PERIOD = re.compile(r"^\s*(\d{1,2})\s*/\s*(\d{4})\s*$")


def validate_month(value: str | None) -> str:
    """Validate an external ``YYYY-MM`` month and return it stripped."""
    text = (value or "").strip()
    match = _EXTERNAL.match(text)
    if match is None or not 1 <= int(match.group(2)) <= 12:
        raise ValidationError("Month must be in YYYY-MM format (e.g., 2025-07)")
    return text


def validate_employee_code(value: str | None) -> str:
    """Any non-blank code is accepted; it is only ever compared against sheet values."""
    text = (value or "").strip()
    if not text:
        raise ValidationError("empId is required")
    return text


def to_period(month: str) -> str:
    """``2025-07`` -> ``7/2025``."""
    year, month_num = validate_month(month).split("-")
    return f"{int(month_num)}/{year}"


def parse_period(period: str) -> tuple[int, int]:
    """Return ``(year, month)`` for ``M/YYYY`` or ``MM/YYYY``."""
    match = _PERIOD.match(period or "")
    if match is None or not 1 <= int(match.group(1)) <= 12:
        raise ValidationError(f'Invalid month {period!r}; expected "MM/YYYY" or "M/YYYY"')
    return int(match.group(2)), int(match.group(1))


def normalize_period(period: str) -> str:
    """``07/2025`` -> ``7/2025``. Unparseable values come back stripped, unchanged."""
    try:
        year, month = parse_period(period)
    except ValidationError:
        return (period or "").strip()
    return f"{month}/{year}"


def display_label(period: str) -> str:
    """``7/2025`` -> ``July - 2025`` (the label printed on the payslip)."""
    year, month = parse_period(period)
    return f"{calendar.month_name[month]} - {year}"


def history_label(period: str) -> str:
    """``7/2025`` -> ``July 2025``."""
    year, month = parse_period(period)
    return f"{calendar.month_name[month]} {year}"


def end_of_month(month: str) -> date:
    """Last calendar day of an external ``YYYY-MM`` month."""
    year, month_num = (int(p) for p in validate_month(month).split("-"))
    return date(year, month_num, calendar.monthrange(year, month_num)[1])


def days_in_label_month(label: str) -> int | None:
    """Calendar days for a display label such as ``July - 2025``; None when unparseable."""
    for fmt in ("%B - %Y", "%B %Y", "%b - %Y", "%b %Y"):
        try:
            parsed = datetime.strptime(label.strip(), fmt)
        except (ValueError, AttributeError):
            continue
        return calendar.monthrange(parsed.year, parsed.month)[1]
    return None


_DATE_FORMATS = ("%d-%b-%Y", "%Y-%m-%d", "%d/%m/%Y", "%d-%m-%Y")


def parse_sheet_date(value: str) -> date | None:
    """Parse the date formats seen in the sheet (``15-Jan-2024``, ``2024-01-15``, ``15/01/2024``)."""
    text = (value or "").strip()
    for fmt in _DATE_FORMATS:
        try:
            return datetime.strptime(text, fmt).date()
        except ValueError:
            continue
    return None


def format_generated_date(day: date) -> str:
    """en-GB ``DD/MM/YYYY``, the format stored in the Generated Date column."""
    return day.strftime("%d/%m/%Y")
