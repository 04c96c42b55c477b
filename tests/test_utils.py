"""
Tests for utility functions.
"""

import logging
from datetime import date, datetime
from decimal import Decimal

import pytest

from event_booking.utils import DateUtils, ValidationUtils, format_price, round_money, to_decimal
from event_booking.utils.logging import ContextFormatter, get_logger


class TestValidationUtils:
    """Test validation utilities."""

    @pytest.mark.parametrize("email", ["ada@example.com", "a.b+c@sub.domain.org"])
    def test_valid_emails(self, email):
        assert ValidationUtils.validate_email(email) == (True, None)

    @pytest.mark.parametrize("email", ["", "ada@", "ada@example", "ada example@x.com", "@x.com"])
    def test_invalid_emails(self, email):
        is_valid, message = ValidationUtils.validate_email(email)
        assert not is_valid
        assert message

    @pytest.mark.parametrize("phone", ["5551234567", "+1 (555) 123-4567", "555-123-4567"])
    def test_valid_phones(self, phone):
        assert ValidationUtils.validate_phone(phone)[0]

    @pytest.mark.parametrize("phone", ["", "555 123 45", "555-CALL-NOW", "12345"])
    def test_invalid_phones(self, phone):
        assert not ValidationUtils.validate_phone(phone)[0]

    def test_whitespace_does_not_count_toward_phone_length(self):
        """Nine digits padded with spaces stay invalid."""
        assert not ValidationUtils.validate_phone("555 555 555 ")[0]

    def test_required(self):
        assert ValidationUtils.validate_required("   ", "First name") == (False, "First name is required")
        assert ValidationUtils.validate_required("Ada", "First name") == (True, None)

    def test_sanitize_text(self):
        assert ValidationUtils.sanitize_text(" hi\x00there\n ") == "hithere"
        assert ValidationUtils.sanitize_text(None) == ""


class TestDateUtils:
    """Test calendar helpers."""

    def test_parse_iso_date(self):
        assert DateUtils.parse_iso_date("2025-12-05") == date(2025, 12, 5)
        assert DateUtils.parse_iso_date(datetime(2025, 12, 5, 13, 0)) == date(2025, 12, 5)
        with pytest.raises(ValueError):
            DateUtils.parse_iso_date("2025-02-30")

    def test_is_valid_iso_date(self):
        assert DateUtils.is_valid_iso_date("2025-12-31")
        assert not DateUtils.is_valid_iso_date("12/31/2025")

    @pytest.mark.parametrize(
        "year,month,delta,expected",
        [
            (2025, 12, 1, (2026, 1)),
            (2026, 1, -1, (2025, 12)),
            (2025, 6, 0, (2025, 6)),
            (2025, 3, -15, (2023, 12)),
        ],
    )
    def test_shift_month(self, year, month, delta, expected):
        assert DateUtils.shift_month(year, month, delta) == expected

    def test_days_in_month(self):
        days = DateUtils.days_in_month(2024, 2)
        assert len(days) == 29
        assert days[0] == date(2024, 2, 1)

    def test_is_past_compares_calendar_days(self):
        utils = DateUtils("UTC")
        today = date(2025, 12, 1)
        assert utils.is_past(date(2025, 11, 30), today)
        assert not utils.is_past(today, today)

    def test_format_for_display(self):
        assert DateUtils.format_for_display(date(2025, 12, 5)) == "Friday, December 5, 2025"


class TestMoney:
    """Test currency helpers."""

    def test_round_half_up(self):
        assert round_money(Decimal("2.675")) == Decimal("2.68")
        assert round_money(Decimal("2.665")) == Decimal("2.67")

    def test_to_decimal_avoids_float_artifacts(self):
        assert to_decimal(0.1) == Decimal("0.1")

    def test_format_price(self):
        assert format_price(Decimal("1250"), "USD") == "$1,250.00"
        assert format_price(Decimal("9.5"), "CHF") == "9.50 CHF"


class TestLogging:
    """Test logger naming and formatting."""

    def test_get_logger_namespace(self):
        assert get_logger("pricing").name == "booking.pricing"
        assert get_logger("booking.catalog").name == "booking.catalog"

    def test_context_formatter_appends_extras(self):
        formatter = ContextFormatter("%(message)s")
        record = logging.LogRecord("booking.test", logging.INFO, __file__, 1, "step changed", None, None)
        record.session_id = "abc"
        record.step = "customization"
        assert formatter.format(record) == "step changed | session_id=abc step=customization"
