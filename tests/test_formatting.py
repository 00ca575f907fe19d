from decimal import Decimal

import pytest

from portfolio_tracker.formatting import format_currency, format_percent, gain_class


class TestFormatCurrency:
    def test_thousands_and_two_decimals(self):
        assert format_currency(Decimal("1234.5")) == "£1,234.50"

    def test_negative(self):
        assert format_currency(Decimal("-12")) == "-£12.00"

    def test_rounds(self):
        assert format_currency(Decimal("2.346")) == "£2.35"

    def test_other_symbol(self):
        assert format_currency(Decimal("99.9"), "$") == "$99.90"

    def test_plain_float(self):
        assert format_currency(1500.0) == "£1,500.00"


class TestFormatPercent:
    def test_positive_has_plus_sign(self):
        assert format_percent(Decimal("9.0909")) == "+9.09%"

    def test_negative(self):
        assert format_percent(Decimal("-4.5")) == "-4.50%"

    def test_zero(self):
        assert format_percent(Decimal("0")) == "+0.00%"


class TestGainClass:
    @pytest.mark.parametrize(
        "value, expected",
        [
            (Decimal("0.01"), "positive"),
            (Decimal("-0.01"), "negative"),
            (Decimal("0"), "neutral"),
            (3, "positive"),
        ],
    )
    def test_classification(self, value, expected):
        assert gain_class(value) == expected
