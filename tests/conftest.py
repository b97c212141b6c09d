"""Shared fixtures: a small payroll spreadsheet, a real template and a wired context."""

from __future__ import annotations

import logging
import sys
from datetime import date
from pathlib import Path

import pytest

from slipstream.context import AppContext
from slipstream.core.config import AppSettings
from slipstream.rendering.pdf_renderer import TemplateCache
from tests.fakes import MemoryBlobStore, MemoryNotifier, MemoryTabularStore

# Make scripts/ importable
sys.path.insert(0, str(Path(__file__).resolve().parent.parent / "scripts"))

from build_template import build_template  # noqa: E402

EMPLOYEE_SHEET = "Employee_Details"
ATTENDANCE_SHEET = "Monthly_Attendance"

EMPLOYEE_HEADERS = [
    "Employee Code", "Employee Name", "Employee Type", "Email", "Designation",
    "Department", "Date of Joining", "Status", "Bank Name", "Account No",
    "Basic Salary", "HRA", "Gross Earning", "Total Deductions", "Net Pay",
]


def employee_rows() -> list[list[str]]:
    return [
        EMPLOYEE_HEADERS,
        ["FINZ001", "Asha Rao", "Permanent", "asha@example.com", "Engineer",
         "Engineering", "15-Jan-2024", "Active", "HDFC", "001122",
         "30000", "12000", "50,000", "5,000", "45,000"],
        ["FINZ002", "Vikram Shah", "Permanent", "vikram@example.com", "Analyst",
         "Finance", "2024-03-01", "Active", "ICICI", "334455",
         "25000", "10000", "40000", "2000", "38000"],
        ["FINZ003", "Meera Iyer", "Contract", "", "Designer",
         "Engineering", "01/08/2025", "Inactive", "", "",
         "30000", "15000", "55000", "3000", "52000"],
    ]


def attendance_rows() -> list[list[str]]:
    # June 2025 has 21 working days
    return [
        ["Employee Code", "Month", "Leaves Taken"],
        ["FINZ001", "6/2025", "3"],
        ["FINZ002", "06/2025", "0"],
        ["FINZ001", "5/2025", "1"],
    ]


@pytest.fixture(autouse=True)
def _reset_logging():
    yield
    logger = logging.getLogger("slipstream")
    for handler in list(logger.handlers):
        if getattr(handler, "_slipstream", False):
            logger.removeHandler(handler)
    logger.setLevel(logging.NOTSET)


@pytest.fixture(scope="session")
def template_bytes() -> bytes:
    return build_template()


@pytest.fixture
def store() -> MemoryTabularStore:
    return MemoryTabularStore({
        EMPLOYEE_SHEET: employee_rows(),
        ATTENDANCE_SHEET: attendance_rows(),
    })


@pytest.fixture
def blob_store() -> MemoryBlobStore:
    return MemoryBlobStore()


@pytest.fixture
def notifier() -> MemoryNotifier:
    return MemoryNotifier()


@pytest.fixture
def context(store, blob_store, notifier, template_bytes) -> AppContext:
    return AppContext(
        AppSettings(),
        store=store,
        blob_store=blob_store,
        notifier=notifier,
        templates=TemplateCache(data=template_bytes),
        today=lambda: date(2025, 7, 1),
    )
