"""Application configuration using pydantic-settings with grouped env prefixes."""

from __future__ import annotations

from typing import Literal

from pydantic_settings import BaseSettings


class SheetsConfig(BaseSettings):
    """Google Sheets datastore configuration."""

    model_config = {"env_prefix": "SLIPSTREAM_SHEETS_"}

    spreadsheet_id: str = ""
    credentials_b64: str = ""  # base64-encoded service account JSON
    credentials_file: str | None = None
    employee_range: str = "Employee_Details"
    attendance_range: str = "Monthly_Attendance"


class S3Config(BaseSettings):
    """S3 payslip storage configuration."""

    model_config = {"env_prefix": "SLIPSTREAM_S3_"}

    bucket: str = "slipstream-payslips"
    region: str = "us-east-1"
    endpoint_url: str | None = None  # LocalStack override
    public_base_url: str | None = None  # CDN or website endpoint in front of the bucket
    folder_prefix: str = "Payslips"


class EmailConfig(BaseSettings):
    """Outbound email configuration."""

    model_config = {"env_prefix": "SLIPSTREAM_EMAIL_"}

    backend: Literal["ses", "smtp", "memory"] = "ses"
    sender: str = "hr@example.com"
    sender_name: str = "HR Department"
    ses_region: str = "us-east-1"
    ses_endpoint_url: str | None = None
    smtp_host: str = "localhost"
    smtp_port: int = 587
    smtp_user: str = ""
    smtp_password: str = ""
    smtp_use_tls: bool = True
    smtp_timeout: int = 30


class PipelineConfig(BaseSettings):
    """Batch pipeline tuning."""

    model_config = {"env_prefix": "SLIPSTREAM_PIPELINE_"}

    concurrency_limit: int = 5
    template_path: str = "templates/payslip_template.pdf"
    store_backend: Literal["sheets", "memory"] = "sheets"
    blob_backend: Literal["s3", "memory"] = "s3"


class AppSettings(BaseSettings):
    """Root application settings aggregating all sub-configs."""

    model_config = {"env_prefix": "SLIPSTREAM_"}

    environment: Literal["dev", "uat", "prod"] = "dev"
    log_level: str = "INFO"

    sheets: SheetsConfig = SheetsConfig()
    s3: S3Config = S3Config()
    email: EmailConfig = EmailConfig()
    pipeline: PipelineConfig = PipelineConfig()
