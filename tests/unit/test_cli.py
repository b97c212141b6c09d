"""Tests for the command-line entry point."""

from __future__ import annotations

import json

import pytest

from slipstream.cli import main


def test_generate_batch(context, capsys, notifier):
    assert main(["generate", "--month", "2025-06", "--limit", "2"], context=context) == 0
    summary = json.loads(capsys.readouterr().out)
    assert summary["total"] == 3
    assert len(notifier.sent) == 2


def test_generate_single(context, capsys):
    assert main(["generate", "--month", "2025-06", "--employee", "FINZ002"], context=context) == 0
    summary = json.loads(capsys.readouterr().out)
    assert summary["employeeCode"] == "FINZ002"
    assert summary["url"].endswith("FINZ002_Payslip.pdf")


def test_invalid_month_exit_code(context, capsys):
    assert main(["generate", "--month", "June"], context=context) == 2
    assert "YYYY-MM" in capsys.readouterr().err


def test_nothing_to_resend(context):
    assert main(["resend", "--month", "2025-06"], context=context) == 3


def test_resend_after_generate(context, capsys):
    main(["generate", "--month", "2025-06"], context=context)
    capsys.readouterr()
    assert main(["resend", "--month", "2025-06", "--employee", "FINZ001"], context=context) == 0
    assert json.loads(capsys.readouterr().out)["notification"] == "sent"


def test_month_is_required():
    with pytest.raises(SystemExit):
        main(["generate"])
