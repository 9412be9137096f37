"""Tests for pm_common.units: nano integer arithmetic."""

import pytest

from src.pm_common.units import (
    NANO_PER_UNIT,
    apply_bps_discount,
    ceil_div,
    nano_to_display,
    to_nano,
)


class TestToNano:
    def test_whole_units(self) -> None:
        assert to_nano(5) == 5 * NANO_PER_UNIT

    def test_decimal_string(self) -> None:
        assert to_nano("0.1") == 100_000_000
        assert to_nano("0.09") == 90_000_000

    def test_smallest_unit(self) -> None:
        assert to_nano("0.000000001") == 1

    def test_negative(self) -> None:
        assert to_nano("-1.5") == -1_500_000_000

    def test_too_many_decimals(self) -> None:
        with pytest.raises(ValueError):
            to_nano("0.0000000001")

    @pytest.mark.parametrize("text", ["", "abc", "1.2.3", "."])
    def test_garbage(self, text: str) -> None:
        with pytest.raises(ValueError):
            to_nano(text)


class TestNanoToDisplay:
    def test_whole(self) -> None:
        assert nano_to_display(to_nano(1000)) == "1,000"

    def test_fraction(self) -> None:
        assert nano_to_display(1_500_000_000) == "1.5"

    def test_negative(self) -> None:
        assert nano_to_display(-100_000_000) == "-0.1"

    def test_zero(self) -> None:
        assert nano_to_display(0) == "0"


class TestBpsDiscount:
    def test_two_percent(self) -> None:
        assert apply_bps_discount(100, 200) == 98

    def test_floors(self) -> None:
        assert apply_bps_discount(1, 200) == 0

    def test_zero_fee(self) -> None:
        assert apply_bps_discount(12345, 0) == 12345


class TestCeilDiv:
    def test_exact(self) -> None:
        assert ceil_div(10, 5) == 2

    def test_rounds_up(self) -> None:
        assert ceil_div(1_000_000, 1100) == 910

    def test_zero_numerator(self) -> None:
        assert ceil_div(0, 7) == 0
