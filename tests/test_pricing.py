"""
Pytest tests for the pricing calculator.
Run with: pytest tests/test_pricing.py -v
"""

from decimal import Decimal

import pytest

from marquee.services.pricing import compute_total, format_amount


class TestComputeTotal:
    def test_whole_unit_price(self):
        assert compute_total(250, 3) == 750
        assert compute_total(Decimal("250"), 3) == Decimal("750.00")

    @pytest.mark.parametrize(
        "unit_price, seat_count, expected",
        [
            ("149.50", 1, "149.50"),
            ("149.50", 3, "448.50"),
            ("149.50", 6, "897.00"),
            ("0.10", 3, "0.30"),
            ("199.99", 5, "999.95"),
        ],
    )
    def test_fractional_prices_are_exact(self, unit_price, seat_count, expected):
        assert compute_total(Decimal(unit_price), seat_count) == Decimal(expected)

    def test_float_input_does_not_drift(self):
        # 0.1 * 3 in binary floating point is 0.30000000000000004
        assert compute_total(0.1, 3) == Decimal("0.30")
        assert compute_total(149.5, 3) == Decimal("448.50")

    def test_string_input(self):
        assert compute_total("200", 2) == Decimal("400.00")

    @pytest.mark.parametrize("seat_count", [0, -1, -5])
    def test_rejects_non_positive_seat_count(self, seat_count):
        with pytest.raises(ValueError):
            compute_total(Decimal("200"), seat_count)

    def test_rejects_bool_seat_count(self):
        with pytest.raises(ValueError):
            compute_total(Decimal("200"), True)


class TestFormatAmount:
    def test_display_total(self):
        assert format_amount(Decimal("400")) == "₹400.00"
        assert format_amount(Decimal("1250.5")) == "₹1,250.50"
