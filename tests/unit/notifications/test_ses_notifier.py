"""Unit tests for SESNotifier using moto."""

from __future__ import annotations

import boto3
import pytest
from moto import mock_aws

from slipstream.core.exceptions import NotificationError
from slipstream.models.delivery import Attachment, EmailMessageSpec
from slipstream.notifications.ses_notifier import SESNotifier

SENDER = "hr@example.com"
MESSAGE = EmailMessageSpec(
    to="asha@example.com",
    subject="Payslip for June - 2025",
    body="Dear Asha Rao,",
    attachments=[Attachment(filename="FINZ001_Payslip.pdf", content=b"%PDF")],
)


@pytest.fixture
def ses():
    with mock_aws():
        client = boto3.client("ses", region_name="us-east-1")
        yield client


def test_send_raw_email(ses):
    ses.verify_email_identity(EmailAddress=SENDER)
    message_id = SESNotifier(SENDER, "HR Department").send(MESSAGE)
    assert message_id
    assert ses.get_send_quota()["SentLast24Hours"] == 1


def test_unverified_sender_raises(ses):
    with pytest.raises(NotificationError, match="SES send"):
        SESNotifier("nobody@example.com").send(MESSAGE)
