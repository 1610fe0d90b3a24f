"""Tests for amount and date parsing."""

import pytest
from datetime import date, timedelta
from decimal import Decimal

from troopfund.domain.errors import ValidationError
from troopfund.utils.amount_parser import parse_amount
from troopfund.utils.date_parser import parse_date


class TestParseAmount:
    """Tests for parse_amount."""

    @pytest.mark.parametrize(
        "text,expected",
        [
            ("25", Decimal("25")),
            ("25.00", Decimal("25.00")),
            ("-12.50", Decimal("-12.50")),
            ("$1,234.56", Decimal("1234.56")),
            ("-$5.00", Decimal("-5.00")),
            ("(7.25)", Decimal("-7.25")),
            ("  3.10  ", Decimal("3.10")),
        ],
    )
    def test_valid(self, text, expected):
        assert parse_amount(text) == expected

    @pytest.mark.parametrize("text", ["", "   ", "abc", "1.2.3", "NaN", "Infinity"])
    def test_invalid(self, text):
        with pytest.raises(ValidationError):
            parse_amount(text)


class TestParseDate:
    """Tests for parse_date."""

    def test_iso_date(self):
        assert parse_date("2024-01-15") == date(2024, 1, 15)

    def test_long_form(self):
        assert parse_date("January 15, 2024") == date(2024, 1, 15)

    def test_relative(self):
        today = date.today()
        assert parse_date("today") == today
        assert parse_date("Yesterday") == today - timedelta(days=1)
        assert parse_date("tomorrow") == today + timedelta(days=1)

    def test_last_weekday(self):
        result = parse_date("last monday")
        assert result.weekday() == 0
        assert 1 <= (date.today() - result).days <= 7

    @pytest.mark.parametrize("text", ["", "not a date", "2024-13-45"])
    def test_invalid(self, text):
        with pytest.raises(ValidationError):
            parse_date(text)
