"""Delivery fan-out: render → upload → notify → persist, per employee.

Every record becomes one task. A semaphore caps how many render/upload/notify
chains are in flight at once; blocking adapter calls run on worker threads via
``asyncio.to_thread`` while rendering stays on the event loop. A failure in one
task is turned into a failed :class:`DeliveryOutcome` at the task boundary and
never reaches its siblings. Status is written once per month after every task
has settled.
"""

from __future__ import annotations

import asyncio
import logging
from collections import defaultdict
from datetime import date
from typing import Awaitable, Callable, Optional, Sequence

from slipstream.core.exceptions import PayslipNotFoundError, ValidationError
from slipstream.core.protocols import IBlobStore, IDocumentRenderer, INotifier
from slipstream.delivery.status_writer import StatusWriter
from slipstream.models.delivery import (
    BatchResult,
    DeliveryOutcome,
    NotificationStatus,
    StatusUpdate,
)
from slipstream.models.payslip import MergedPayrollRecord
from slipstream.notifications import payslip_email
from slipstream.payroll.months import format_generated_date

logger = logging.getLogger(__name__)

DEFAULT_CONCURRENCY = 5

TaskResult = tuple[DeliveryOutcome, Optional[StatusUpdate]]


class PayslipDispatcher:
    """Runs per-record delivery under a concurrency cap and persists status in one write."""

    def __init__(
        self,
        *,
        renderer: IDocumentRenderer,
        blob_store: IBlobStore,
        notifier: INotifier,
        status_writer: StatusWriter,
        concurrency_limit: int = DEFAULT_CONCURRENCY,
        folder_prefix: str = "Payslips",
        today: Callable[[], date] = date.today,
    ) -> None:
        self._renderer = renderer
        self._blob_store = blob_store
        self._notifier = notifier
        self._status_writer = status_writer
        self._concurrency_limit = self._check_limit(concurrency_limit)
        self._folder_prefix = folder_prefix.strip("/")
        self._today = today

    @staticmethod
    def _check_limit(limit: int) -> int:
        if limit < 1:
            raise ValidationError(f"Concurrency limit must be at least 1, got {limit}")
        return limit

    def _folder(self, record: MergedPayrollRecord) -> str:
        return f"{self._folder_prefix}/{record.folder_label}"

    # ---- per-record steps ----

    async def _notify(self, record: MergedPayrollRecord,
                      document: bytes) -> tuple[NotificationStatus, str | None]:
        if not record.email:
            logger.warning("No email for %s (%s); notification skipped",
                           record.employee.name, record.employee_code)
            return NotificationStatus.SKIPPED, None
        try:
            message_id = await asyncio.to_thread(
                self._notifier.send, payslip_email(record, document),
            )
        except Exception as exc:
            logger.error("Failed to email payslip to %s: %s", record.employee_code, exc)
            return NotificationStatus.FAILED, str(exc)
        logger.info("Payslip emailed to %s (message id %s)", record.email, message_id)
        return NotificationStatus.SENT, None

    async def _generate(self, record: MergedPayrollRecord, generated_date: str,
                        notify: bool) -> TaskResult:
        code = record.employee_code
        try:
            document = self._renderer.render(record)
            upload = await asyncio.to_thread(
                self._blob_store.upload, document, record.file_name, self._folder(record),
            )
        except Exception as exc:
            logger.error("Payslip generation failed for %s: %s", code, exc)
            return DeliveryOutcome(employee_code=code, success=False, error=str(exc)), None
        logger.info("Uploaded payslip for %s: %s", code, upload.public_url)

        update = StatusUpdate(link=upload.public_url, generated_date=generated_date)
        notification, notification_error = NotificationStatus.NOT_ATTEMPTED, None
        if notify:
            notification, notification_error = await self._notify(record, document)
            update.email_sent = notification == NotificationStatus.SENT

        outcome = DeliveryOutcome(
            employee_code=code,
            success=True,
            url=upload.public_url,
            slip_generated=True,
            notification=notification,
            notification_error=notification_error,
        )
        return outcome, update

    async def _resend(self, record: MergedPayrollRecord) -> TaskResult:
        code = record.employee_code
        try:
            document = await asyncio.to_thread(self._blob_store.download, record.payslip_link)
        except Exception as exc:
            logger.error("Could not fetch existing payslip for %s: %s", code, exc)
            return DeliveryOutcome(employee_code=code, success=False, url=record.payslip_link,
                                   slip_generated=True, error=str(exc)), None

        notification, notification_error = await self._notify(record, document)
        sent = notification == NotificationStatus.SENT
        outcome = DeliveryOutcome(
            employee_code=code,
            success=sent,
            url=record.payslip_link,
            slip_generated=True,
            notification=notification,
            notification_error=notification_error,
            error=None if sent else (notification_error or "No email address on record"),
        )
        return outcome, StatusUpdate(email_sent=sent)

    # ---- persistence ----

    async def _persist(self, records: Sequence[MergedPayrollRecord],
                       results: Sequence[TaskResult]) -> None:
        by_period: dict[str, dict[str, StatusUpdate]] = defaultdict(dict)
        for record, (_, update) in zip(records, results):
            bucket = by_period[record.period]
            if update is not None:
                bucket[record.employee_code] = update
        for period, updates in by_period.items():
            await asyncio.to_thread(self._status_writer.write_status, period, updates)

    async def _fan_out(self, records: Sequence[MergedPayrollRecord], limit: int,
                       task: Callable[[MergedPayrollRecord], Awaitable[TaskResult]]) -> BatchResult:
        semaphore = asyncio.Semaphore(limit)

        async def bounded(record: MergedPayrollRecord) -> TaskResult:
            async with semaphore:
                return await task(record)

        results = await asyncio.gather(*(bounded(r) for r in records))
        await self._persist(records, results)
        batch = BatchResult(outcomes=[outcome for outcome, _ in results])
        logger.info("Batch finished: %d total, %d succeeded, %d failed",
                    batch.total, batch.succeeded, batch.failed)
        return batch

    # ---- public operations ----

    async def deliver_batch(self, records: Sequence[MergedPayrollRecord],
                            concurrency_limit: int | None = None) -> BatchResult:
        """Generate, upload and email every record; one status write per month."""
        limit = self._check_limit(
            self._concurrency_limit if concurrency_limit is None else concurrency_limit
        )
        generated_date = format_generated_date(self._today())
        logger.info("Delivering %d payslips with concurrency %d", len(records), limit)
        return await self._fan_out(
            records, limit, lambda r: self._generate(r, generated_date, notify=True),
        )

    async def deliver_one(self, record: MergedPayrollRecord,
                          notify: bool = False) -> DeliveryOutcome:
        """On-demand regeneration for one employee, outside the limiter."""
        result = await self._generate(record, format_generated_date(self._today()), notify)
        await self._persist([record], [result])
        return result[0]

    async def resend_one(self, record: MergedPayrollRecord) -> DeliveryOutcome:
        """Email the already generated payslip again and record whether it went out."""
        if not record.payslip_link:
            raise PayslipNotFoundError(record.employee_code, record.period)
        result = await self._resend(record)
        await self._persist([record], [result])
        return result[0]

    async def resend_batch(self, records: Sequence[MergedPayrollRecord],
                           concurrency_limit: int | None = None) -> BatchResult:
        """Resend every record that already has a payslip link."""
        limit = self._check_limit(
            self._concurrency_limit if concurrency_limit is None else concurrency_limit
        )
        with_link = [r for r in records if r.payslip_link]
        logger.info("Resending %d of %d payslips", len(with_link), len(records))
        return await self._fan_out(with_link, limit, self._resend)
