"""Tests for date and amount parsing."""

from datetime import date, datetime, timedelta
from decimal import Decimal
import pytest

from fintrxn.utils.amount_parser import coerce_amount, parse_amount
from fintrxn.utils.date_parser import coerce_date, parse_date


class TestParseDate:
    def test_iso(self):
        assert parse_date("2024-01-15") == date(2024, 1, 15)

    def test_written_out(self):
        assert parse_date("January 15, 2024") == date(2024, 1, 15)

    @pytest.mark.parametrize("value", ["20240115", "20240115093000"])
    def test_compact_timestamps(self, value):
        assert parse_date(value) == date(2024, 1, 15)

    def test_relative(self):
        assert parse_date("today") == date.today()
        assert parse_date(" Yesterday ") == date.today() - timedelta(days=1)

    def test_invalid(self):
        with pytest.raises(ValueError, match="Could not parse date"):
            parse_date("not a date")

    def test_invalid_compact(self):
        with pytest.raises(ValueError):
            parse_date("20241345")


def test_coerce_date():
    assert coerce_date(None) is None
    assert coerce_date("") is None
    assert coerce_date(datetime(2020, 3, 1, 14, 30)) == date(2020, 3, 1)
    assert coerce_date(date(2020, 3, 1)) == date(2020, 3, 1)
    assert coerce_date("2020-03-01 14:30:00") == date(2020, 3, 1)


class TestParseAmount:
    @pytest.mark.parametrize(
        "value,expected",
        [
            ("123.45", Decimal("123.45")),
            ("€123.45", Decimal("123.45")),
            ("-123.45", Decimal("-123.45")),
            ("1,234.56", Decimal("1234.56")),
            ("(123.45)", Decimal("-123.45")),
        ],
    )
    def test_formats(self, value, expected):
        assert parse_amount(value) == expected

    def test_empty(self):
        with pytest.raises(ValueError, match="Empty amount"):
            parse_amount("  ")

    def test_invalid(self):
        with pytest.raises(ValueError, match="Could not parse amount"):
            parse_amount("twelve")


def test_coerce_amount():
    assert coerce_amount(None) is None
    assert coerce_amount("") is None
    assert coerce_amount(Decimal("1.10")) == Decimal("1.10")
    assert coerce_amount(10) == Decimal("10")
    assert coerce_amount(0.1) == Decimal("0.1")
    assert coerce_amount("100.00") == Decimal("100")
