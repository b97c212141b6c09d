"""Tests for the template build script."""

from __future__ import annotations

from io import BytesIO

from pypdf import PdfReader

from build_template import build_template


def test_writes_single_a4_page(tmp_path):
    out = tmp_path / "templates" / "payslip_template.pdf"
    data = build_template(out)
    assert out.read_bytes() == data
    page = PdfReader(BytesIO(data)).pages[0]
    assert round(float(page.mediabox.width)) == 595
    assert "Net Pay" in page.extract_text()


def test_build_is_deterministic():
    assert build_template() == build_template()
