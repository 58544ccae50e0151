"""Monetary helpers.

Amounts are held as floats on aggregates; arithmetic that feeds a price goes
through ``Decimal`` so sums and percentages stay exact, and rounding only
happens when an amount is rendered.
"""

from decimal import ROUND_HALF_UP, Decimal

CENTS = Decimal("0.01")
HUNDRED = Decimal("100")


def to_decimal(value) -> Decimal:
    """Convert a float, int, str or Decimal into an exact ``Decimal``.

    Floats go through ``str`` so ``120.5`` becomes ``Decimal("120.5")`` rather
    than its binary expansion.
    """
    if value is None:
        return Decimal("0")
    if isinstance(value, Decimal):
        return value
    return Decimal(str(value))


def format_amount(value) -> str:
    """Fixed two-decimal rendering, rounding half up: ``280.575`` -> ``"280.58"``."""
    return str(to_decimal(value).quantize(CENTS, rounding=ROUND_HALF_UP))


def format_currency(value, symbol: str = "R$") -> str:
    """Brazilian currency rendering: ``1234.5`` -> ``"R$ 1.234,50"``."""
    amount = to_decimal(value).quantize(CENTS, rounding=ROUND_HALF_UP)
    sign = "-" if amount < 0 else ""
    integer_part, fraction = f"{abs(amount):,.2f}".split(".")
    return f"{sign}{symbol} {integer_part.replace(',', '.')},{fraction}"
