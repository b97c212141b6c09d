"""Delivery-side models: outcomes, status patches and adapter payloads."""

from __future__ import annotations

from enum import StrEnum
from typing import Any, Optional

from pydantic import BaseModel, Field


class NotificationStatus(StrEnum):
    SENT = "sent"
    SKIPPED = "skipped"  # employee has no email address
    FAILED = "failed"
    NOT_ATTEMPTED = "not_attempted"


class DeliveryOutcome(BaseModel):
    """Per-employee result of one delivery task."""

    employee_code: str
    success: bool
    url: Optional[str] = None
    error: Optional[str] = None
    slip_generated: bool = False
    notification: NotificationStatus = NotificationStatus.NOT_ATTEMPTED
    notification_error: Optional[str] = None

    @property
    def email_sent(self) -> bool:
        return self.notification == NotificationStatus.SENT

    def to_summary(self) -> dict[str, Any]:
        out: dict[str, Any] = {
            "employeeCode": self.employee_code,
            "success": self.success,
            "slipGenerated": self.slip_generated,
            "notification": self.notification.value,
        }
        if self.url is not None:
            out["url"] = self.url
        if self.error is not None:
            out["error"] = self.error
        if self.notification_error is not None:
            out["notificationError"] = self.notification_error
        return out


class BatchResult(BaseModel):
    """Aggregate outcome of one fan-out run."""

    outcomes: list[DeliveryOutcome] = Field(default_factory=list)

    @property
    def total(self) -> int:
        return len(self.outcomes)

    @property
    def succeeded(self) -> int:
        return sum(1 for o in self.outcomes if o.success)

    @property
    def failed(self) -> int:
        return self.total - self.succeeded

    def to_summary(self) -> dict[str, Any]:
        return {
            "total": self.total,
            "succeeded": self.succeeded,
            "failed": self.failed,
            "results": [o.to_summary() for o in self.outcomes],
        }


class StatusUpdate(BaseModel):
    """Field-level patch for one employee's attendance row. None means leave as is."""

    link: Optional[str] = None
    generated_date: Optional[str] = None
    email_sent: Optional[bool] = None

    def is_empty(self) -> bool:
        return self.link is None and self.generated_date is None and self.email_sent is None


class CellUpdate(BaseModel):
    """A single A1-addressed cell write, e.g. ``Monthly_Attendance!H3``."""

    range: str
    value: Any


class UploadResult(BaseModel):
    public_url: str
    key: str


class Attachment(BaseModel):
    filename: str
    content: bytes
    content_type: str = "application/pdf"


class EmailMessageSpec(BaseModel):
    """Transport-neutral outbound email."""

    to: str
    subject: str
    body: str
    attachments: list[Attachment] = Field(default_factory=list)
