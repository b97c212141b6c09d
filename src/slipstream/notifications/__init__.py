"""Outbound payslip email transports."""

from __future__ import annotations

from email.message import EmailMessage
from email.utils import formataddr, make_msgid

from slipstream.models.delivery import Attachment, EmailMessageSpec
from slipstream.models.payslip import MergedPayrollRecord


def payslip_email(record: MergedPayrollRecord, document: bytes) -> EmailMessageSpec:
    """The standard payslip email with the PDF attached."""
    return EmailMessageSpec(
        to=record.email,
        subject=f"Payslip for {record.month}",
        body=(
            f"Dear {record.employee.name},\n\n"
            f"Please find attached your payslip for {record.month}.\n\n"
            "Regards,\nHR Department"
        ),
        attachments=[Attachment(filename=record.file_name, content=document)],
    )


def to_mime(message: EmailMessageSpec, sender: str, sender_name: str = "") -> EmailMessage:
    mime = EmailMessage()
    mime["From"] = formataddr((sender_name, sender)) if sender_name else sender
    mime["To"] = message.to
    mime["Subject"] = message.subject
    mime["Message-ID"] = make_msgid()
    mime.set_content(message.body)
    for att in message.attachments:
        maintype, _, subtype = att.content_type.partition("/")
        mime.add_attachment(att.content, maintype=maintype, subtype=subtype or "octet-stream",
                            filename=att.filename)
    return mime


def create_notifier(settings):
    """Build the configured INotifier from ``AppSettings``."""
    email = settings.email
    if email.backend == "memory":
        from slipstream.persistence.memory_backend import MemoryNotifier

        return MemoryNotifier()
    if email.backend == "smtp":
        from slipstream.notifications.smtp_notifier import SMTPNotifier

        return SMTPNotifier(
            host=email.smtp_host,
            port=email.smtp_port,
            user=email.smtp_user,
            password=email.smtp_password,
            sender=email.sender,
            sender_name=email.sender_name,
            use_tls=email.smtp_use_tls,
            timeout=email.smtp_timeout,
        )

    from slipstream.notifications.ses_notifier import SESNotifier

    return SESNotifier(
        sender=email.sender,
        sender_name=email.sender_name,
        region=email.ses_region,
        endpoint_url=email.ses_endpoint_url,
    )
