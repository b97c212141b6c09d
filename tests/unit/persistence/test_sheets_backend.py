"""Unit tests for GoogleSheetsStore against a mocked API client."""

from __future__ import annotations

import base64
import json
from unittest.mock import MagicMock, patch

import pytest
from googleapiclient.errors import HttpError
from httplib2 import Response

from slipstream.core.exceptions import DatastoreError
from slipstream.models.delivery import CellUpdate
from slipstream.persistence.sheets_backend import GoogleSheetsStore, load_credentials

SHEET_ID = "sheet-123"


def _http_error(status: int = 403) -> HttpError:
    return HttpError(Response({"status": status}), b'{"error": {"message": "denied"}}')


@pytest.fixture
def service() -> MagicMock:
    return MagicMock()


@pytest.fixture
def values(service) -> MagicMock:
    return service.spreadsheets.return_value.values.return_value


@pytest.fixture
def store(service) -> GoogleSheetsStore:
    return GoogleSheetsStore(SHEET_ID, service=service)


class TestRead:
    def test_read_stringifies_cells(self, store, values):
        values.get.return_value.execute.return_value = {"values": [["Month", "Leaves"], ["6/2025", 3]]}
        assert store.read_range("Monthly_Attendance") == [["Month", "Leaves"], ["6/2025", "3"]]
        values.get.assert_called_once_with(spreadsheetId=SHEET_ID, range="Monthly_Attendance")

    def test_read_empty_range(self, store, values):
        values.get.return_value.execute.return_value = {}
        assert store.read_range("Employee_Details") == []

    def test_read_http_error(self, store, values):
        values.get.return_value.execute.side_effect = _http_error()
        with pytest.raises(DatastoreError, match="Sheets read failed"):
            store.read_range("Employee_Details")


class TestWrite:
    def test_update_range_raw(self, store, values):
        store.update_range("Monthly_Attendance!A1", [["Employee Code", "Month"]])
        values.update.assert_called_once_with(
            spreadsheetId=SHEET_ID,
            range="Monthly_Attendance!A1",
            valueInputOption="RAW",
            body={"values": [["Employee Code", "Month"]]},
        )

    def test_batch_update_single_call(self, store, values):
        store.batch_update([
            CellUpdate(range="Monthly_Attendance!D2", value="u1"),
            CellUpdate(range="Monthly_Attendance!F2", value="Yes"),
        ])
        values.batchUpdate.assert_called_once_with(
            spreadsheetId=SHEET_ID,
            body={
                "valueInputOption": "RAW",
                "data": [
                    {"range": "Monthly_Attendance!D2", "values": [["u1"]]},
                    {"range": "Monthly_Attendance!F2", "values": [["Yes"]]},
                ],
            },
        )

    def test_empty_batch_is_skipped(self, store, values):
        store.batch_update([])
        values.batchUpdate.assert_not_called()

    def test_batch_http_error(self, store, values):
        values.batchUpdate.return_value.execute.side_effect = _http_error(500)
        with pytest.raises(DatastoreError):
            store.batch_update([CellUpdate(range="S!A1", value="x")])


class TestCredentials:
    def test_spreadsheet_id_required(self):
        with pytest.raises(DatastoreError):
            GoogleSheetsStore("")

    def test_nothing_configured(self):
        with pytest.raises(DatastoreError, match="No Google service account"):
            load_credentials()

    def test_bad_base64_json(self):
        blob = base64.b64encode(b"not json").decode()
        with pytest.raises(DatastoreError, match="Invalid"):
            load_credentials(blob)

    def test_base64_info(self):
        info = {"type": "service_account", "client_email": "svc@example.iam.gserviceaccount.com"}
        blob = base64.b64encode(json.dumps(info).encode()).decode()
        with patch(
            "slipstream.persistence.sheets_backend.service_account.Credentials.from_service_account_info"
        ) as from_info:
            load_credentials(blob)
        assert from_info.call_args.args[0] == info

    def test_client_built_lazily(self):
        with patch("slipstream.persistence.sheets_backend.load_credentials") as creds, \
                patch("slipstream.persistence.sheets_backend.build") as build:
            store = GoogleSheetsStore(SHEET_ID, credentials_b64="abc")
            build.assert_not_called()
            build.return_value.spreadsheets.return_value.values.return_value \
                .get.return_value.execute.return_value = {"values": []}
            store.read_range("A")
            store.read_range("B")
        build.assert_called_once_with("sheets", "v4", credentials=creds.return_value,
                                      cache_discovery=False)
