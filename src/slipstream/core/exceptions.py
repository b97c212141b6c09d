"""Slipstream exception hierarchy."""

from __future__ import annotations


class SlipstreamError(Exception):
    """Base exception for all Slipstream errors."""


class ValidationError(SlipstreamError):
    """Caller input (month, employee code) is malformed."""


class NotFoundError(SlipstreamError):
    """Nothing to do: the requested data does not exist."""


class NoAttendanceDataError(NotFoundError):
    """No attendance rows exist for the requested month."""

    def __init__(self, period: str) -> None:
        self.period = period
        super().__init__(f"No attendance data found for {period}")


class EmployeeNotFoundError(NotFoundError):
    """Employee code is not present in the employee master."""

    def __init__(self, employee_code: str) -> None:
        self.employee_code = employee_code
        super().__init__(f"Employee {employee_code} not found")


class PayslipNotFoundError(NotFoundError):
    """No generated payslip exists for the employee and month."""

    def __init__(self, employee_code: str, period: str) -> None:
        self.employee_code = employee_code
        self.period = period
        super().__init__(f"No payslip found for {employee_code} in {period}")


class SchemaError(SlipstreamError):
    """An expected column is missing from the datastore."""

    def __init__(self, column: str, range_name: str = "") -> None:
        self.column = column
        self.range_name = range_name
        where = f" in {range_name}" if range_name else ""
        super().__init__(f"Required column {column!r} is missing{where}")


class DatastoreError(SlipstreamError):
    """Tabular datastore read or write failed."""


class DeliveryError(SlipstreamError):
    """A per-record delivery step failed."""


class RenderError(DeliveryError):
    """Payslip document could not be rendered."""


class BlobStoreError(DeliveryError):
    """Payslip upload or download failed."""


class NotificationError(DeliveryError):
    """Payslip email could not be sent."""
