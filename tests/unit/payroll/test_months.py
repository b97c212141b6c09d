"""Tests for month parsing and normalization."""

from __future__ import annotations

from datetime import date

import pytest

from slipstream.core.exceptions import ValidationError
from slipstream.payroll.months import (
    days_in_label_month,
    display_label,
    end_of_month,
    format_generated_date,
    history_label,
    normalize_period,
    parse_sheet_date,
    to_period,
    validate_employee_code,
    validate_month,
)


class TestValidateMonth:
    def test_accepts_external_format(self):
        assert validate_month(" 2025-07 ") == "2025-07"

    @pytest.mark.parametrize("value", ["", None, "2025-13", "2025-7", "07/2025", "July 2025"])
    def test_rejects_everything_else(self, value):
        with pytest.raises(ValidationError, match="YYYY-MM"):
            validate_month(value)


class TestEmployeeCode:
    def test_blank_is_required_error(self):
        with pytest.raises(ValidationError, match="empId is required"):
            validate_employee_code("  ")

    @pytest.mark.parametrize("code", ["EMP.001", "ACME/7", "J. Doe"])
    def test_accepts_any_non_blank_code(self, code):
        assert validate_employee_code(code) == code

    def test_strips(self):
        assert validate_employee_code(" FINZ001 ") == "FINZ001"


class TestPeriods:
    def test_to_period_drops_leading_zero(self):
        assert to_period("2025-07") == "7/2025"
        assert to_period("2025-11") == "11/2025"

    def test_normalize_accepts_both_stored_forms(self):
        assert normalize_period("07/2025") == "7/2025"
        assert normalize_period("7/2025") == "7/2025"

    def test_normalize_leaves_garbage_alone(self):
        assert normalize_period(" July ") == "July"

    def test_labels(self):
        assert display_label("6/2025") == "June - 2025"
        assert history_label("06/2025") == "June 2025"

    def test_end_of_month(self):
        assert end_of_month("2024-02") == date(2024, 2, 29)


class TestLabelDays:
    def test_display_label(self):
        assert days_in_label_month("February - 2024") == 29

    def test_unparseable_label(self):
        assert days_in_label_month("Smarch - 2025") is None


class TestDates:
    @pytest.mark.parametrize("value", ["15-Jan-2024", "2024-01-15", "15/01/2024", "15-01-2024"])
    def test_sheet_date_formats(self, value):
        assert parse_sheet_date(value) == date(2024, 1, 15)

    def test_sheet_date_garbage(self):
        assert parse_sheet_date("soon") is None

    def test_generated_date_format(self):
        assert format_generated_date(date(2025, 7, 1)) == "01/07/2025"
