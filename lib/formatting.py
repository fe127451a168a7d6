"""Number formatting for messages and display (es-DO grouping: 1,234,567.89)."""

from decimal import Decimal, ROUND_HALF_UP
from typing import Union

Number = Union[Decimal, int, float]


def _quantize(value: Number, decimals: int) -> Decimal:
    exponent = Decimal(1).scaleb(-decimals)
    return Decimal(str(value)).quantize(exponent, rounding=ROUND_HALF_UP)


def format_amount(value: Number, decimals: int = 0) -> str:
    """Format a number with thousands separators, e.g. 10190833 -> '10,190,833'."""
    return f"{_quantize(value, decimals):,.{decimals}f}"


def format_currency(value: Number, symbol: str = "RD$", decimals: int = 2) -> str:
    """Format a monetary amount, e.g. 1180 -> 'RD$1,180.00'."""
    quantized = _quantize(value, decimals)
    sign = "-" if quantized < 0 else ""
    return f"{sign}{symbol}{abs(quantized):,.{decimals}f}"


def format_rate(rate: Number) -> str:
    """
    Format a fractional rate as a percentage without trailing zeros.

    0.18 -> '18%', 0.0015 -> '0.15%', 0.055 -> '5.5%'
    """
    percent = (Decimal(str(rate)) * 100).normalize()
    # normalize() turns 100 into 1E+2
    if percent == percent.to_integral_value():
        return f"{int(percent)}%"
    return f"{percent:f}%"
