"""Google Sheets backend implementing ITabularStore."""

from __future__ import annotations

import base64
import json
import logging
from typing import Any

from google.oauth2 import service_account
from googleapiclient.discovery import build
from googleapiclient.errors import HttpError

from slipstream.core.exceptions import DatastoreError
from slipstream.models.delivery import CellUpdate

logger = logging.getLogger(__name__)

SCOPES = ["https://www.googleapis.com/auth/spreadsheets"]


def load_credentials(credentials_b64: str = "", credentials_file: str | None = None):
    """Service-account credentials from a base64 JSON blob or a key file."""
    try:
        if credentials_b64:
            info = json.loads(base64.b64decode(credentials_b64).decode("utf-8"))
            return service_account.Credentials.from_service_account_info(info, scopes=SCOPES)
        if credentials_file:
            return service_account.Credentials.from_service_account_file(
                credentials_file, scopes=SCOPES,
            )
    except (ValueError, OSError) as exc:
        raise DatastoreError(f"Invalid Google service account credentials: {exc}") from exc
    raise DatastoreError("No Google service account credentials configured")


class GoogleSheetsStore:
    """Production ITabularStore bound to one spreadsheet.

    The API client is built on first use and reused for the life of the store.
    """

    def __init__(self, spreadsheet_id: str, credentials_b64: str = "",
                 credentials_file: str | None = None, service: Any = None) -> None:
        if not spreadsheet_id:
            raise DatastoreError("spreadsheet_id is required")
        self._spreadsheet_id = spreadsheet_id
        self._credentials_b64 = credentials_b64
        self._credentials_file = credentials_file
        self._service = service

    def _values(self):
        if self._service is None:
            creds = load_credentials(self._credentials_b64, self._credentials_file)
            self._service = build("sheets", "v4", credentials=creds, cache_discovery=False)
            logger.info("Authorized Google Sheets client for %s", self._spreadsheet_id)
        return self._service.spreadsheets().values()

    def read_range(self, range_name: str) -> list[list[str]]:
        try:
            resp = self._values().get(
                spreadsheetId=self._spreadsheet_id, range=range_name,
            ).execute()
        except HttpError as exc:
            raise DatastoreError(f"Sheets read failed for {range_name!r}: {exc}") from exc
        return [[str(cell) for cell in row] for row in resp.get("values", [])]

    def update_range(self, range_name: str, values: list[list[Any]]) -> None:
        try:
            self._values().update(
                spreadsheetId=self._spreadsheet_id,
                range=range_name,
                valueInputOption="RAW",
                body={"values": values},
            ).execute()
        except HttpError as exc:
            raise DatastoreError(f"Sheets update failed for {range_name!r}: {exc}") from exc

    def batch_update(self, updates: list[CellUpdate]) -> None:
        if not updates:
            return
        data = [{"range": u.range, "values": [[u.value]]} for u in updates]
        try:
            self._values().batchUpdate(
                spreadsheetId=self._spreadsheet_id,
                body={"valueInputOption": "RAW", "data": data},
            ).execute()
        except HttpError as exc:
            raise DatastoreError(f"Sheets batch update of {len(updates)} cells failed: {exc}") from exc
