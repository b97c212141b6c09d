"""Process-wide application context.

Owns the long-lived clients (datastore, blob storage, mail transport) and the
payslip template cache. Each is created on first use and released by
:meth:`AppContext.close`. Tests build a context with in-memory backends passed
in explicitly.
"""

from __future__ import annotations

import logging
import threading
from datetime import date
from typing import Callable

from slipstream.core.config import AppSettings
from slipstream.core.protocols import IBlobStore, INotifier, ITabularStore
from slipstream.delivery.fanout import PayslipDispatcher
from slipstream.delivery.status_writer import StatusWriter
from slipstream.notifications import create_notifier
from slipstream.persistence import create_blob_store, create_tabular_store
from slipstream.persistence.repository import PayrollRepository
from slipstream.rendering.pdf_renderer import PayslipRenderer, TemplateCache
from slipstream.services.directory import EmployeeDirectory
from slipstream.services.payslip_service import PayslipService

logger = logging.getLogger(__name__)


class AppContext:
    """Lazily wired collaborators for one process."""

    def __init__(
        self,
        settings: AppSettings | None = None,
        *,
        store: ITabularStore | None = None,
        blob_store: IBlobStore | None = None,
        notifier: INotifier | None = None,
        templates: TemplateCache | None = None,
        today: Callable[[], date] = date.today,
    ) -> None:
        self.settings = settings or AppSettings()
        self._store = store
        self._blob_store = blob_store
        self._notifier = notifier
        self._templates = templates
        self._today = today
        self._lock = threading.Lock()

    @property
    def store(self) -> ITabularStore:
        with self._lock:
            if self._store is None:
                self._store = create_tabular_store(self.settings)
            return self._store

    @property
    def blob_store(self) -> IBlobStore:
        with self._lock:
            if self._blob_store is None:
                self._blob_store = create_blob_store(self.settings)
            return self._blob_store

    @property
    def notifier(self) -> INotifier:
        with self._lock:
            if self._notifier is None:
                self._notifier = create_notifier(self.settings)
            return self._notifier

    @property
    def templates(self) -> TemplateCache:
        with self._lock:
            if self._templates is None:
                self._templates = TemplateCache(self.settings.pipeline.template_path)
            return self._templates

    @property
    def repository(self) -> PayrollRepository:
        return PayrollRepository(
            self.store,
            employee_range=self.settings.sheets.employee_range,
            attendance_range=self.settings.sheets.attendance_range,
        )

    def dispatcher(self) -> PayslipDispatcher:
        return PayslipDispatcher(
            renderer=PayslipRenderer(self.templates, today=self._today),
            blob_store=self.blob_store,
            notifier=self.notifier,
            status_writer=StatusWriter(self.store, self.settings.sheets.attendance_range),
            concurrency_limit=self.settings.pipeline.concurrency_limit,
            folder_prefix=self.settings.s3.folder_prefix,
            today=self._today,
        )

    def payslips(self) -> PayslipService:
        return PayslipService(repository=self.repository, dispatcher=self.dispatcher())

    def directory(self) -> EmployeeDirectory:
        return EmployeeDirectory(self.repository)

    def close(self) -> None:
        """Drop cached clients and template bytes; the next access rebuilds them."""
        with self._lock:
            if self._templates is not None:
                self._templates.clear()
            self._store = None
            self._blob_store = None
            self._notifier = None
            self._templates = None
        logger.info("Application context closed")
