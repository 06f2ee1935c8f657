"""Decimal string to fixed-point integer conversion.

Prices arrive from upstream sources as decimal strings and leave as the
integer an on-chain consumer stores (value * 10**decimals). The conversion is
done entirely in arbitrary-precision Decimal arithmetic: a float round trip
can shift the last digits or produce exponent notation for large scales.
"""

import re
from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal, localcontext

from pricefeed.exceptions import InvalidNumericFormat

_NUMERAL = re.compile(r"^(?:[0-9]+(?:\.[0-9]*)?|\.[0-9]+)$")


def _check_decimals(decimals: int) -> None:
    if isinstance(decimals, bool) or not isinstance(decimals, int) or decimals < 0:
        raise ValueError(f"decimals must be a non-negative int, got {decimals!r}")


def to_fixed_point(raw: str, decimals: int) -> str:
    """Scale a decimal numeral by 10**decimals and round to an integer string.

    Ties round half away from zero (ROUND_HALF_UP on non-negative input).

    Args:
        raw: Base-10 numeral, e.g. "3421.57". Surrounding whitespace is ignored.
            Signs, exponents, NaN and Infinity are rejected.
        decimals: Number of implied fractional digits.

    Returns:
        Digits-only string, e.g. "3421570000000000000000" for ("3421.57", 18).

    Raises:
        InvalidNumericFormat: If raw is not a well-formed numeral.
        ValueError: If decimals is negative.
    """
    _check_decimals(decimals)
    if not isinstance(raw, str):
        raise InvalidNumericFormat(repr(raw))
    text = raw.strip()
    if not _NUMERAL.match(text):
        raise InvalidNumericFormat(raw)

    # Enough precision that neither scaleb nor quantize ever rounds implicitly.
    with localcontext() as ctx:
        ctx.prec = len(text) + decimals + 2
        scaled = Decimal(text).scaleb(decimals)
        integral = scaled.quantize(Decimal(1), rounding=ROUND_HALF_UP)
    return str(int(integral))


@dataclass(frozen=True)
class FixedPointValue:
    """A decimal quantity stored as an integer string plus implied decimals."""

    integer_value: str
    decimals: int

    def __post_init__(self) -> None:
        _check_decimals(self.decimals)
        if not self.integer_value.isascii() or not self.integer_value.isdigit():
            raise InvalidNumericFormat(self.integer_value)

    @classmethod
    def from_raw(cls, raw: str, decimals: int) -> "FixedPointValue":
        """Build from an upstream decimal string."""
        return cls(integer_value=to_fixed_point(raw, decimals), decimals=decimals)

    def to_decimal(self) -> Decimal:
        """Return the exact decimal value this fixed-point integer represents."""
        digits = tuple(int(c) for c in self.integer_value.lstrip("0") or "0")
        return Decimal((0, digits, -self.decimals))

    def __str__(self) -> str:
        return self.integer_value
