"""Pluggable datastore and blob backends behind Protocol interfaces."""

from __future__ import annotations

from slipstream.core.config import AppSettings
from slipstream.core.protocols import IBlobStore, ITabularStore
from slipstream.persistence.memory_backend import MemoryBlobStore, MemoryTabularStore


def create_tabular_store(settings: AppSettings) -> ITabularStore:
    if settings.pipeline.store_backend == "memory":
        return MemoryTabularStore({
            settings.sheets.employee_range: [],
            settings.sheets.attendance_range: [],
        })

    from slipstream.persistence.sheets_backend import GoogleSheetsStore

    return GoogleSheetsStore(
        spreadsheet_id=settings.sheets.spreadsheet_id,
        credentials_b64=settings.sheets.credentials_b64,
        credentials_file=settings.sheets.credentials_file,
    )


def create_blob_store(settings: AppSettings) -> IBlobStore:
    if settings.pipeline.blob_backend == "memory":
        return MemoryBlobStore()

    from slipstream.persistence.s3_backend import S3BlobStore

    return S3BlobStore(
        bucket=settings.s3.bucket,
        region=settings.s3.region,
        endpoint_url=settings.s3.endpoint_url,
        public_base_url=settings.s3.public_base_url,
    )


def create_persistence(settings: AppSettings | None = None):
    """Create wired-up persistence backends from application settings.

    Returns:
        Tuple of (tabular_store, blob_store).
    """
    if settings is None:
        settings = AppSettings()
    return create_tabular_store(settings), create_blob_store(settings)
