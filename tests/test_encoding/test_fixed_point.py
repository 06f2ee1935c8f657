"""Tests for decimal string to fixed-point conversion."""

from decimal import Decimal

import pytest

from pricefeed.encoding.fixed_point import FixedPointValue, to_fixed_point
from pricefeed.exceptions import InvalidNumericFormat


class TestToFixedPoint:
    """Tests for to_fixed_point."""

    def test_eth_price_at_18_decimals(self) -> None:
        assert to_fixed_point("3421.57", 18) == "3421570000000000000000"

    def test_integer_input(self) -> None:
        assert to_fixed_point("42", 2) == "4200"

    def test_zero_decimals_rounds_to_integer(self) -> None:
        assert to_fixed_point("3421.57", 0) == "3422"

    def test_round_half_up_on_tie(self) -> None:
        assert to_fixed_point("1.005", 2) == "101"
        assert to_fixed_point("0.5", 0) == "1"
        assert to_fixed_point("2.5", 0) == "3"

    def test_rounds_down_below_half(self) -> None:
        assert to_fixed_point("1.0049999", 2) == "100"

    def test_value_that_float_cannot_represent(self) -> None:
        # 0.1 + 0.2 style binary error must not leak into the result.
        assert to_fixed_point("0.3", 18) == "300000000000000000"
        assert to_fixed_point("1234567.123456789012345678", 18) == "1234567123456789012345678"

    def test_large_scale_never_uses_exponent(self) -> None:
        result = to_fixed_point("99999999999.99", 30)
        assert result == "99999999999990000000000000000000000000000"
        assert "e" not in result.lower()

    def test_tiny_value_rounds_to_zero(self) -> None:
        assert to_fixed_point("0.0000000000000000001", 18) == "0"

    def test_leading_zeros_stripped(self) -> None:
        assert to_fixed_point("000.25", 2) == "25"

    def test_fraction_only_and_trailing_point(self) -> None:
        assert to_fixed_point(".5", 1) == "5"
        assert to_fixed_point("5.", 1) == "50"

    def test_surrounding_whitespace_ignored(self) -> None:
        assert to_fixed_point(" 12.5\n", 1) == "125"

    @pytest.mark.parametrize(
        "raw",
        [
            "", "abc", "1e5", "1E-3", "-1.5", "+1.5", "NaN", "Infinity", "1.2.3", "1,000", ".", "0x10",
            # Non-ASCII digits
            "３４２１.57", "٣٤", "1.５",
        ],
    )
    def test_rejects_malformed_numerals(self, raw: str) -> None:
        with pytest.raises(InvalidNumericFormat):
            to_fixed_point(raw, 18)

    def test_rejects_non_string(self) -> None:
        with pytest.raises(InvalidNumericFormat):
            to_fixed_point(3421.57, 18)  # type: ignore[arg-type]

    def test_negative_decimals_raise_value_error(self) -> None:
        with pytest.raises(ValueError):
            to_fixed_point("1", -1)

    @pytest.mark.parametrize(
        ("raw", "decimals"),
        [("3421.57", 18), ("0.000123", 8), ("1.23456789", 4), ("7", 0), ("12.345", 2)],
    )
    def test_round_trip_matches_decimal_quantize(self, raw: str, decimals: int) -> None:
        value = FixedPointValue.from_raw(raw, decimals)
        expected = Decimal(raw).quantize(Decimal(1).scaleb(-decimals), rounding="ROUND_HALF_UP")
        assert value.to_decimal() == expected


class TestFixedPointValue:
    """Tests for the FixedPointValue model."""

    def test_from_raw(self) -> None:
        value = FixedPointValue.from_raw("3421.57", 18)
        assert value.integer_value == "3421570000000000000000"
        assert value.decimals == 18
        assert str(value) == "3421570000000000000000"

    def test_to_decimal_is_exact_for_wide_values(self) -> None:
        value = FixedPointValue("1234567890123456789012345678901234567890", 18)
        assert value.to_decimal() == Decimal("1234567890123456789012.345678901234567890")

    def test_rejects_non_digit_integer_value(self) -> None:
        with pytest.raises(InvalidNumericFormat):
            FixedPointValue("1.5", 18)
        with pytest.raises(InvalidNumericFormat):
            FixedPointValue("-15", 18)

    def test_is_immutable(self) -> None:
        value = FixedPointValue("1", 0)
        with pytest.raises(AttributeError):
            value.decimals = 2  # type: ignore[misc]
