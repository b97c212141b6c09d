"""Request-scoped dependencies resolved from the application context."""

from __future__ import annotations

from fastapi import Request

from slipstream.context import AppContext
from slipstream.services.directory import EmployeeDirectory
from slipstream.services.payslip_service import PayslipService


def get_context(request: Request) -> AppContext:
    return request.app.state.context


def get_payslip_service(request: Request) -> PayslipService:
    return get_context(request).payslips()


def get_directory(request: Request) -> EmployeeDirectory:
    return get_context(request).directory()
