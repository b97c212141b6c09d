"""Payslip renderer: positional text placed over a fixed PDF template.

reportlab draws a transparent overlay the size of the template's first page;
pypdf stamps it onto a fresh copy of that page. Coordinates below are measured
from the top-left of the template, as they were taken off the printed form.
"""

from __future__ import annotations

import logging
import threading
from datetime import date
from decimal import Decimal
from io import BytesIO
from pathlib import Path
from typing import Any, Callable, NamedTuple

from pypdf import PdfReader, PdfWriter
from pypdf.errors import PyPdfError
from reportlab.pdfgen import canvas

from slipstream.core.exceptions import RenderError
from slipstream.models.payslip import MergedPayrollRecord
from slipstream.payroll.months import days_in_label_month

logger = logging.getLogger(__name__)

FONT = "Helvetica"
BOLD = "Helvetica-Bold"
FONT_SIZE = 9
EARNINGS_X = 305
DEDUCTIONS_X = 575
STAMP_X, STAMP_Y = 525, 606


class TemplateCache:
    """Load-once holder for the template bytes; read-only after first load."""

    def __init__(self, path: str | Path | None = None, data: bytes | None = None) -> None:
        self._path = Path(path) if path is not None else None
        self._bytes = data
        self._lock = threading.Lock()
        self.loads = 0

    def get(self) -> bytes:
        if self._bytes is None:
            with self._lock:
                if self._bytes is None:
                    if self._path is None:
                        raise RenderError("No payslip template configured")
                    try:
                        self._bytes = self._path.read_bytes()
                    except OSError as exc:
                        raise RenderError(f"Cannot read payslip template {self._path}: {exc}") from exc
                    self.loads += 1
                    logger.info("Loaded payslip template %s (%d bytes)", self._path, len(self._bytes))
        return self._bytes

    def clear(self) -> None:
        with self._lock:
            self._bytes = None


def _text(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, Decimal):
        return format(value.normalize(), "f") if value == value.to_integral() else format(value, "f")
    return str(value)


def _amount(getter: Callable[[MergedPayrollRecord], Any]) -> Callable[[MergedPayrollRecord], str]:
    # blank amounts print as 0; unparseable ones (None) stay blank
    def get(record: MergedPayrollRecord) -> str:
        value = getter(record)
        return "" if value is None else (_text(value) or "0")
    return get


def _days_in_month(record: MergedPayrollRecord) -> str:
    days = days_in_label_month(record.month)
    if days is None:
        logger.warning("Cannot work out days in month from label %r for %s",
                       record.month, record.employee_code)
        return ""
    return str(days)


class Placement(NamedTuple):
    value: Callable[[MergedPayrollRecord], Any]
    x: float
    y: float
    font: str = BOLD
    align: str = "left"


LAYOUT: list[Placement] = [
    Placement(lambda r: r.month, 313, 172, FONT),
    # employee details
    Placement(lambda r: r.employee.name, 130, 206),
    Placement(lambda r: r.employee.employee_type, 382, 206),
    Placement(lambda r: r.employee.employee_code, 526, 206),
    Placement(lambda r: r.employee.designation, 108, 227),
    Placement(lambda r: r.employee.department, 108, 248),
    Placement(_days_in_month, 405, 248),
    Placement(lambda r: r.employee.date_of_joining, 124, 272),
    Placement(lambda r: r.working_days, 377, 271),
    Placement(lambda r: r.employee.provident_fund, 123, 293),
    Placement(lambda r: r.employee.esic_no, 360, 293),
    Placement(lambda r: r.employee.total_arrear_days or "", 392, 315),
    Placement(lambda r: r.employee.lop or "", 481, 315),
    # bank details
    Placement(lambda r: r.employee.bank_name, 106, 336),
    Placement(lambda r: r.employee.account_no, 240, 336),
    Placement(lambda r: r.employee.ifsc_code, 368, 336),
    Placement(lambda r: r.employee.branch_name, 518, 336),
    Placement(lambda r: r.employee.uan_no or "NA", 96, 357),
    Placement(lambda r: r.employee.pan_no, 354, 357),
    # earnings
    Placement(_amount(lambda r: r.employee.basic_salary), EARNINGS_X, 423, FONT, "right"),
    Placement(_amount(lambda r: r.employee.hra), EARNINGS_X, 446, FONT, "right"),
    Placement(_amount(lambda r: r.employee.lta), EARNINGS_X, 469, FONT, "right"),
    Placement(_amount(lambda r: r.employee.special_allowance), EARNINGS_X, 492, FONT, "right"),
    Placement(_amount(lambda r: r.employee.gross_earning), EARNINGS_X, 516, BOLD, "right"),
    # deductions
    Placement(_amount(lambda r: r.employee.professional_tax), DEDUCTIONS_X, 423, FONT, "right"),
    Placement(_amount(lambda r: r.employee.tds), DEDUCTIONS_X, 446, FONT, "right"),
    Placement(_amount(lambda r: r.employee.total_deductions), DEDUCTIONS_X, 516, BOLD, "right"),
    # net pay
    Placement(_amount(lambda r: r.employee.net_pay), EARNINGS_X, 562, BOLD, "right"),
    Placement(_amount(lambda r: r.employee.net_pay), EARNINGS_X, 585, BOLD, "right"),
    Placement(lambda r: r.net_pay_words, 130, 608, FONT),
]


class PayslipRenderer:
    """IDocumentRenderer over a cached template. Deterministic for a given record and day."""

    def __init__(self, templates: TemplateCache, today: Callable[[], date] = date.today) -> None:
        self._templates = templates
        self._today = today

    def _overlay(self, record: MergedPayrollRecord, width: float, height: float) -> bytes:
        buf = BytesIO()
        pdf = canvas.Canvas(buf, pagesize=(width, height), invariant=1)
        for spot in LAYOUT:
            try:
                text = _text(spot.value(record))
            except (ValueError, TypeError, AttributeError) as exc:
                logger.warning("Skipping field at (%s, %s) for %s: %s",
                               spot.x, spot.y, record.employee_code, exc)
                continue
            if not text:
                continue
            pdf.setFont(spot.font, FONT_SIZE)
            if spot.align == "right":
                pdf.drawRightString(spot.x, height - spot.y, text)
            else:
                pdf.drawString(spot.x, height - spot.y, text)
        # generation date, "1 Jul 2025"
        stamped = self._today()
        pdf.setFont(FONT, FONT_SIZE)
        pdf.drawString(STAMP_X, height - STAMP_Y, f"{stamped.day} {stamped:%b %Y}")
        pdf.showPage()
        pdf.save()
        return buf.getvalue()

    def render(self, record: MergedPayrollRecord) -> bytes:
        try:
            page = PdfReader(BytesIO(self._templates.get())).pages[0]
            width = float(page.mediabox.width)
            height = float(page.mediabox.height)
            overlay = PdfReader(BytesIO(self._overlay(record, width, height))).pages[0]
            page.merge_page(overlay)

            writer = PdfWriter()
            writer.add_page(page)
            out = BytesIO()
            writer.write(out)
        except (PyPdfError, ValueError, KeyError) as exc:
            raise RenderError(f"Rendering payslip for {record.employee_code} failed: {exc}") from exc
        return out.getvalue()
