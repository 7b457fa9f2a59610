"""Decimal utilities for financial calculations.

All monetary calculations must use Decimal to avoid floating-point precision issues.
"""

from decimal import Decimal, InvalidOperation, ROUND_HALF_UP
from typing import Iterable, Optional

ZERO = Decimal("0")
HUNDRED = Decimal("100")


def parse_amount(value: Optional[object], default: Decimal = ZERO) -> Decimal:
    """Parse a money value strictly.

    A missing value takes the default; a present value that is not a finite
    number is an error. Thousands separators are accepted.

    Args:
        value: Raw amount (Decimal, int, float or string), or None.
        default: Value returned when the amount is missing.

    Returns:
        Parsed Decimal, or default for None.

    Raises:
        ValueError: If the value cannot be parsed or is NaN or infinite.
    """
    if value is None:
        return default
    if isinstance(value, bool):
        raise ValueError(f"Invalid amount: {value!r}")

    try:
        if isinstance(value, Decimal):
            amount = value
        elif isinstance(value, (int, float, str)):
            amount = Decimal(str(value).strip().replace(",", ""))
        else:
            raise ValueError(f"Invalid amount: {value!r}")
    except InvalidOperation as e:
        raise ValueError(f"Invalid amount: {value!r}") from e

    if not amount.is_finite():
        raise ValueError(f"Amount must be finite: {value!r}")
    return amount


def sum_amounts(amounts: Iterable[Decimal]) -> Decimal:
    """Sum Decimal amounts, starting from an exact zero.

    Args:
        amounts: Iterable of Decimal amounts.

    Returns:
        Sum as Decimal.
    """
    total = ZERO
    for amount in amounts:
        total += amount
    return total


def safe_divide(numerator: Decimal, denominator: Decimal, default: Decimal = ZERO) -> Decimal:
    """Divide two Decimals, returning default when the denominator is zero.

    Args:
        numerator: Dividend.
        denominator: Divisor.
        default: Value returned for a zero divisor.

    Returns:
        Quotient, or default.
    """
    if denominator == 0:
        return default
    return numerator / denominator


def format_currency(
    amount: Decimal,
    decimal_places: int = 2,
    symbol: str = "",
) -> str:
    """Format a Decimal amount for display with thousands separators.

    Args:
        amount: The amount to format.
        decimal_places: Number of decimal places (default 2).
        symbol: Optional currency symbol prefix.

    Returns:
        Formatted string like "-$1,234.56" or "1,234.56".
    """
    quantize_str = "1" if decimal_places == 0 else "0." + "0" * decimal_places
    rounded = amount.quantize(Decimal(quantize_str), rounding=ROUND_HALF_UP)
    sign = "-" if rounded < 0 else ""
    return f"{sign}{symbol}{abs(rounded):,.{decimal_places}f}"


def format_percentage(value: Decimal, decimal_places: int = 1) -> str:
    """Format a percentage value, e.g. Decimal("66.666") -> "66.7%"."""
    rounded = value.quantize(Decimal(1).scaleb(-decimal_places), rounding=ROUND_HALF_UP)
    return f"{rounded}%"
