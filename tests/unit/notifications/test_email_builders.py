"""Tests for payslip email construction and MIME conversion."""

from __future__ import annotations

from slipstream.core.config import AppSettings, EmailConfig
from slipstream.models.employee import EmployeeRecord
from slipstream.models.payslip import MergedPayrollRecord
from slipstream.notifications import create_notifier, payslip_email, to_mime
from slipstream.notifications.smtp_notifier import SMTPNotifier
from tests.fakes import MemoryNotifier


def _record() -> MergedPayrollRecord:
    return MergedPayrollRecord(
        employee=EmployeeRecord(employee_code="FINZ001", name="Asha Rao", email="asha@example.com"),
        period="6/2025",
        month="June - 2025",
    )


def test_payslip_email():
    message = payslip_email(_record(), b"%PDF")
    assert message.to == "asha@example.com"
    assert message.subject == "Payslip for June - 2025"
    assert message.body.startswith("Dear Asha Rao,")
    assert message.body.endswith("Regards,\nHR Department")
    assert message.attachments[0].filename == "FINZ001_Payslip.pdf"
    assert message.attachments[0].content_type == "application/pdf"


def test_to_mime_attaches_pdf():
    mime = to_mime(payslip_email(_record(), b"%PDF-data"), "hr@example.com", "HR Department")
    assert mime["From"] == "HR Department <hr@example.com>"
    assert mime["Message-ID"]
    attachments = list(mime.iter_attachments())
    assert len(attachments) == 1
    assert attachments[0].get_filename() == "FINZ001_Payslip.pdf"
    assert attachments[0].get_content_type() == "application/pdf"
    assert attachments[0].get_content() == b"%PDF-data"


def test_create_notifier_backends():
    memory = AppSettings(email=EmailConfig(backend="memory"))
    smtp = AppSettings(email=EmailConfig(backend="smtp", smtp_host="mail.example.com"))
    assert isinstance(create_notifier(memory), MemoryNotifier)
    assert isinstance(create_notifier(smtp), SMTPNotifier)
