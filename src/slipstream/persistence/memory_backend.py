"""In-memory backends for unit tests and local runs."""

from __future__ import annotations

import copy
import threading
from typing import Any

from slipstream.core.exceptions import BlobStoreError, DatastoreError, NotificationError
from slipstream.models.delivery import CellUpdate, EmailMessageSpec, UploadResult
from slipstream.persistence.a1 import parse_cell, split_range


class MemoryTabularStore:
    """Dict-of-grids ITabularStore. Rows are lists of strings; row 0 is the header."""

    def __init__(self, sheets: dict[str, list[list[Any]]] | None = None) -> None:
        self._sheets: dict[str, list[list[str]]] = {
            name: [[str(c) for c in row] for row in rows] for name, rows in (sheets or {}).items()
        }
        self._lock = threading.Lock()
        self.read_calls: list[str] = []
        self.batch_calls: list[list[CellUpdate]] = []

    def read_range(self, range_name: str) -> list[list[str]]:
        sheet, _ = split_range(range_name)
        with self._lock:
            self.read_calls.append(range_name)
            if sheet not in self._sheets:
                raise DatastoreError(f"Unknown range {range_name!r}")
            return copy.deepcopy(self._sheets[sheet])

    def update_range(self, range_name: str, values: list[list[Any]]) -> None:
        sheet, cell = split_range(range_name)
        col0, row0 = parse_cell(cell or "A1")
        with self._lock:
            grid = self._sheets.setdefault(sheet, [])
            for r, row_values in enumerate(values):
                for c, value in enumerate(row_values):
                    self._set(grid, row0 + r, col0 + c, value)

    def batch_update(self, updates: list[CellUpdate]) -> None:
        with self._lock:
            self.batch_calls.append(list(updates))
            for update in updates:
                sheet, cell = split_range(update.range)
                col, row = parse_cell(cell)
                self._set(self._sheets.setdefault(sheet, []), row, col, update.value)

    @staticmethod
    def _set(grid: list[list[str]], row: int, col: int, value: Any) -> None:
        while len(grid) <= row:
            grid.append([])
        line = grid[row]
        while len(line) <= col:
            line.append("")
        line[col] = "" if value is None else str(value)

    def cell(self, sheet: str, row: int, column: str) -> str:
        """Test helper: value under header ``column`` in data row ``row`` (1-based, header excluded)."""
        grid = self._sheets[sheet]
        idx = grid[0].index(column)
        line = grid[row]
        return line[idx] if idx < len(line) else ""


class MemoryBlobStore:
    """Dict-backed IBlobStore for unit tests."""

    BASE_URL = "memory://payslips"

    def __init__(self) -> None:
        self._files: dict[str, bytes] = {}
        self._lock = threading.Lock()

    def upload(self, data: bytes, file_name: str, folder: str) -> UploadResult:
        key = f"{folder.strip('/')}/{file_name}"
        with self._lock:
            self._files[key] = data
        return UploadResult(public_url=f"{self.BASE_URL}/{key}", key=key)

    def download(self, url: str) -> bytes:
        prefix = f"{self.BASE_URL}/"
        if not url.startswith(prefix):
            raise BlobStoreError(f"URL {url!r} is not served by this store")
        try:
            return self._files[url[len(prefix):]]
        except KeyError as exc:
            raise BlobStoreError(f"No document at {url!r}") from exc

    def keys(self) -> list[str]:
        return sorted(self._files)


class MemoryNotifier:
    """Records outbound messages instead of sending them."""

    def __init__(self, fail_for: set[str] | None = None) -> None:
        self.sent: list[EmailMessageSpec] = []
        self._fail_for = fail_for or set()
        self._lock = threading.Lock()

    def send(self, message: EmailMessageSpec) -> str:
        if message.to in self._fail_for:
            raise NotificationError(f"Delivery to {message.to} refused")
        with self._lock:
            self.sent.append(message)
            return f"memory-{len(self.sent)}"
