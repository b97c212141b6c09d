"""Status writer: patches delivery status back onto the attendance range.

Known limitation: the read-then-write below takes no lock and checks no row
version. Two batches running against the same month can interleave and the
last writer wins cell by cell.
"""

from __future__ import annotations

import logging
from typing import Mapping

from slipstream.core.exceptions import SchemaError
from slipstream.core.protocols import ITabularStore
from slipstream.core.types import EmployeeCode, Period
from slipstream.models.delivery import CellUpdate, StatusUpdate
from slipstream.models.employee import (
    COL_EMAIL_SENT,
    COL_EMP_ID,
    COL_EMPLOYEE_CODE,
    COL_GENERATED_DATE,
    COL_MONTH,
    COL_PAYSLIP_LINK,
)
from slipstream.persistence.a1 import cell_range, column_letter
from slipstream.payroll.months import normalize_period

logger = logging.getLogger(__name__)

# StatusUpdate field -> destination column
STATUS_COLUMNS: dict[str, str] = {
    "link": COL_PAYSLIP_LINK,
    "generated_date": COL_GENERATED_DATE,
    "email_sent": COL_EMAIL_SENT,
}


def _cell_value(field: str, value: object) -> str:
    if field == "email_sent":
        return "Yes" if value else "No"
    return str(value)


class StatusWriter:
    """Idempotent, field-level status patches keyed by (employee code, month)."""

    def __init__(self, store: ITabularStore, range_name: str = "Monthly_Attendance") -> None:
        self._store = store
        self._range = range_name

    def _ensure_columns(self, headers: list[str], needed: list[str]) -> dict[str, int]:
        """Append any missing status headers and return column positions.

        Only the new header cells are written; existing header text is left as it is.
        """
        missing = [col for col in needed if col not in headers]
        if missing:
            self._store.update_range(cell_range(self._range, len(headers), 1), [missing])
            headers.extend(missing)
            logger.info("Added column(s) %s to %s", ", ".join(missing), self._range)
        return {col: headers.index(col) for col in needed}

    def write_status(self, period: Period, updates: Mapping[EmployeeCode, StatusUpdate]) -> int:
        """Apply ``updates`` to the rows of ``period``. Returns the number of cells written."""
        updates = {code: u for code, u in updates.items() if not u.is_empty()}
        if not updates:
            logger.info("No status updates to write for %s", period)
            return 0

        values = self._store.read_range(self._range)
        if not values:
            raise SchemaError(COL_MONTH, self._range)
        headers = [h.strip() for h in values[0]]
        if COL_MONTH not in headers:
            raise SchemaError(COL_MONTH, self._range)
        if COL_EMPLOYEE_CODE in headers:
            code_idx = headers.index(COL_EMPLOYEE_CODE)
        elif COL_EMP_ID in headers:
            code_idx = headers.index(COL_EMP_ID)
        else:
            raise SchemaError(COL_EMPLOYEE_CODE, self._range)
        month_idx = headers.index(COL_MONTH)

        target = normalize_period(period)
        matched: list[tuple[int, StatusUpdate]] = []
        for row_no, row in enumerate(values[1:], start=2):
            month = row[month_idx] if month_idx < len(row) else ""
            code = (row[code_idx] if code_idx < len(row) else "").strip()
            if normalize_period(month) == target and code in updates:
                matched.append((row_no, updates[code]))

        if not matched:
            logger.warning("No matching rows found for %s in %s", period, self._range)
            return 0

        needed = [
            column for field, column in STATUS_COLUMNS.items()
            if any(getattr(u, field) is not None for _, u in matched)
        ]
        positions = self._ensure_columns(headers, needed)

        cells: list[CellUpdate] = []
        for row_no, update in matched:
            for field, column in STATUS_COLUMNS.items():
                value = getattr(update, field)
                if value is None:
                    continue
                cells.append(CellUpdate(
                    range=cell_range(self._range, positions[column], row_no),
                    value=_cell_value(field, value),
                ))
        self._store.batch_update(cells)
        logger.info("Patched %d cells across %d rows for %s (columns %s)",
                    len(cells), len(matched), period,
                    ", ".join(column_letter(positions[c]) for c in needed))
        return len(cells)
