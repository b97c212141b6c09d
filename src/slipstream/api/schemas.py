"""Request bodies. Field names follow the camelCase the dashboard sends."""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, Field


class MonthRequest(BaseModel):
    month: str = ""
    concurrency_limit: Optional[int] = Field(None, alias="concurrencyLimit", ge=1)

    model_config = {"populate_by_name": True}


class EmployeeMonthRequest(BaseModel):
    emp_id: str = Field("", alias="empId")
    month: str = ""

    model_config = {"populate_by_name": True}
