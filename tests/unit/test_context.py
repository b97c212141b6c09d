"""Tests for lazy client wiring in AppContext."""

from __future__ import annotations

import asyncio
from io import BytesIO

from pypdf import PdfReader

from slipstream.context import AppContext
from slipstream.core.config import AppSettings, EmailConfig, PipelineConfig
from slipstream.persistence import create_persistence
from tests.fakes import MemoryBlobStore, MemoryNotifier, MemoryTabularStore


def _memory_settings() -> AppSettings:
    return AppSettings(
        pipeline=PipelineConfig(store_backend="memory", blob_backend="memory"),
        email=EmailConfig(backend="memory"),
    )


def test_clients_are_created_once():
    ctx = AppContext(_memory_settings())
    assert isinstance(ctx.store, MemoryTabularStore)
    assert ctx.store is ctx.store
    assert isinstance(ctx.blob_store, MemoryBlobStore)
    assert isinstance(ctx.notifier, MemoryNotifier)
    assert ctx.templates is ctx.templates


def test_close_releases_clients():
    ctx = AppContext(_memory_settings())
    store = ctx.store
    ctx.close()
    assert ctx.store is not store


def test_memory_store_has_configured_ranges():
    store, blobs = create_persistence(_memory_settings())
    assert store.read_range("Employee_Details") == []
    assert store.read_range("Monthly_Attendance") == []
    assert isinstance(blobs, MemoryBlobStore)


def test_injected_collaborators_are_used(context, store):
    assert context.store is store
    assert context.payslips() is not context.payslips()


def test_rendered_payslip_carries_context_day(context, blob_store):
    outcome = asyncio.run(context.payslips().generate_for_employee("FINZ001", "2025-06"))
    text = PdfReader(BytesIO(blob_store.download(outcome.url))).pages[0].extract_text()
    assert "1 Jul 2025" in text
