"""Payslip workflows: batch generation, single regeneration and email resends."""

from __future__ import annotations

import asyncio
import logging

from slipstream.core.exceptions import NotFoundError, PayslipNotFoundError
from slipstream.delivery.fanout import PayslipDispatcher
from slipstream.models.delivery import BatchResult, DeliveryOutcome
from slipstream.models.payslip import MergedPayrollRecord
from slipstream.payroll.merge import merge, merge_one
from slipstream.payroll.months import to_period, validate_employee_code
from slipstream.persistence.repository import PayrollRepository

logger = logging.getLogger(__name__)


class PayslipService:
    """Entry point for every payslip write flow.

    Inputs are validated before any I/O. Employee and attendance data are read
    fresh from the datastore on every call.
    """

    def __init__(self, *, repository: PayrollRepository, dispatcher: PayslipDispatcher) -> None:
        self._repo = repository
        self._dispatcher = dispatcher

    async def _sources(self, period: str):
        return await asyncio.gather(
            asyncio.to_thread(self._repo.employees),
            asyncio.to_thread(self._repo.attendance, period),
        )

    async def merged_records(self, period: str) -> list[MergedPayrollRecord]:
        employees, attendance = await self._sources(period)
        return merge(employees, attendance, period)

    async def merged_record(self, employee_code: str, period: str) -> MergedPayrollRecord:
        employees, attendance = await self._sources(period)
        return merge_one(employee_code, employees, attendance, period)

    async def generate_all(self, month: str, concurrency_limit: int | None = None) -> BatchResult:
        """Generate, upload and email payslips for everyone in ``month`` (``YYYY-MM``)."""
        period = to_period(month)
        records = await self.merged_records(period)
        logger.info("Generating %d payslips for %s", len(records), period)
        return await self._dispatcher.deliver_batch(records, concurrency_limit)

    async def generate_for_employee(self, employee_code: str, month: str) -> DeliveryOutcome:
        code = validate_employee_code(employee_code)
        period = to_period(month)
        record = await self.merged_record(code, period)
        return await self._dispatcher.deliver_one(record)

    async def resend_email(self, employee_code: str, month: str) -> DeliveryOutcome:
        code = validate_employee_code(employee_code)
        period = to_period(month)
        record = await self.merged_record(code, period)
        if not record.payslip_link:
            raise PayslipNotFoundError(code, period)
        return await self._dispatcher.resend_one(record)

    async def send_all_emails(self, month: str, concurrency_limit: int | None = None) -> BatchResult:
        period = to_period(month)
        records = [r for r in await self.merged_records(period) if r.payslip_link]
        if not records:
            raise NotFoundError(f"No payslip links found for {period}")
        return await self._dispatcher.resend_batch(records, concurrency_limit)

    async def payslip_links(self, month: str) -> list[dict[str, str]]:
        period = to_period(month)
        links = await asyncio.to_thread(self._repo.payslip_links, period)
        if not links:
            raise NotFoundError(f"No payslips found for {period}")
        return links
