"""Shared test doubles: the memory backends plus instrumented variants."""

from __future__ import annotations

import threading
import time

from slipstream.core.exceptions import BlobStoreError, RenderError
from slipstream.delivery.status_writer import StatusWriter
from slipstream.models.delivery import StatusUpdate, UploadResult
from slipstream.models.payslip import MergedPayrollRecord
from slipstream.persistence.memory_backend import (
    MemoryBlobStore,
    MemoryNotifier,
    MemoryTabularStore,
)

__all__ = [
    "CountingStatusWriter",
    "InstrumentedBlobStore",
    "MemoryBlobStore",
    "MemoryNotifier",
    "MemoryTabularStore",
    "StubRenderer",
]


class StubRenderer:
    """IDocumentRenderer returning a tiny fake PDF; can be told to fail for some codes."""

    def __init__(self, fail_for: set[str] | None = None) -> None:
        self.fail_for = fail_for or set()
        self.rendered: list[str] = []

    def render(self, record: MergedPayrollRecord) -> bytes:
        if record.employee_code in self.fail_for:
            raise RenderError(f"template broke for {record.employee_code}")
        self.rendered.append(record.employee_code)
        return f"%PDF-stub {record.employee_code}".encode()


class InstrumentedBlobStore(MemoryBlobStore):
    """MemoryBlobStore that sleeps, counts in-flight uploads and fails on demand."""

    def __init__(self, delay: float = 0.0, fail_for: set[str] | None = None) -> None:
        super().__init__()
        self.delay = delay
        self.fail_for = fail_for or set()
        self.in_flight = 0
        self.peak = 0
        self._counter = threading.Lock()

    def upload(self, data: bytes, file_name: str, folder: str) -> UploadResult:
        with self._counter:
            self.in_flight += 1
            self.peak = max(self.peak, self.in_flight)
        try:
            if self.delay:
                time.sleep(self.delay)
            if any(file_name.startswith(f"{code}_") for code in self.fail_for):
                raise BlobStoreError(f"upload rejected for {file_name}")
            return super().upload(data, file_name, folder)
        finally:
            with self._counter:
                self.in_flight -= 1


class CountingStatusWriter(StatusWriter):
    """StatusWriter that remembers every write_status call."""

    def __init__(self, *args, **kwargs) -> None:
        super().__init__(*args, **kwargs)
        self.calls: list[tuple[str, dict[str, StatusUpdate]]] = []

    def write_status(self, period: str, updates) -> int:
        self.calls.append((period, dict(updates)))
        return super().write_status(period, updates)
