"""Protocol interfaces for all Slipstream collaborators.

The pipeline talks to its datastore, blob storage, mail transport and renderer
only through these Protocols: structural typing, no inheritance required, easy
to swap for the in-memory backends in tests.
"""

from __future__ import annotations

from typing import Any, Protocol, runtime_checkable

from slipstream.models.delivery import CellUpdate, EmailMessageSpec, UploadResult
from slipstream.models.payslip import MergedPayrollRecord


# ---------------------------------------------------------------------------
# Tabular Data Access
# ---------------------------------------------------------------------------

@runtime_checkable
class ITabularStore(Protocol):
    """Spreadsheet-style datastore bound to one dataset (spreadsheet)."""

    def read_range(self, range_name: str) -> list[list[str]]: ...

    def update_range(self, range_name: str, values: list[list[Any]]) -> None: ...

    def batch_update(self, updates: list[CellUpdate]) -> None: ...


# ---------------------------------------------------------------------------
# Blob Storage
# ---------------------------------------------------------------------------

@runtime_checkable
class IBlobStore(Protocol):
    """Binary document storage that hands back a public URL."""

    def upload(self, data: bytes, file_name: str, folder: str) -> UploadResult: ...

    def download(self, url: str) -> bytes: ...


# ---------------------------------------------------------------------------
# Notifier
# ---------------------------------------------------------------------------

@runtime_checkable
class INotifier(Protocol):
    """Outbound email transport. Raises NotificationError on failure."""

    def send(self, message: EmailMessageSpec) -> str: ...


# ---------------------------------------------------------------------------
# Document Renderer
# ---------------------------------------------------------------------------

@runtime_checkable
class IDocumentRenderer(Protocol):
    """Turns one merged payroll record into document bytes."""

    def render(self, record: MergedPayrollRecord) -> bytes: ...
