"""Rounding and display helpers.

Rounding happens only at the presentation boundary; the engine carries full
Decimal precision between steps.
"""

from decimal import Decimal, ROUND_HALF_UP

from subsidy_calc.config import settings

TWO_PLACES = Decimal("0.01")

# ru-RU groups thousands with a no-break space and uses a decimal comma
_GROUP_SEPARATOR = "\u00a0"
_DECIMAL_SEPARATOR = ","


def to_decimal(value) -> Decimal:
    """Coerce int/float/str input to Decimal without binary float artifacts."""
    if isinstance(value, Decimal):
        return value
    return Decimal(str(value))


def round_money(value: Decimal) -> Decimal:
    rounded = value.quantize(TWO_PLACES, ROUND_HALF_UP)
    # No "-0.00" from sub-cent negative residue
    return rounded.copy_abs() if rounded.is_zero() else rounded


def format_currency(amount) -> str:
    """Format an amount the way the portal shows it: ``1 000 000,5 ₸``.

    Between zero and two fraction digits are shown; trailing zeros are dropped.
    """
    text = f"{round_money(to_decimal(amount)):,.2f}"
    whole, _, fraction = text.partition(".")
    whole = whole.replace(",", _GROUP_SEPARATOR)
    fraction = fraction.rstrip("0")
    if fraction:
        whole = f"{whole}{_DECIMAL_SEPARATOR}{fraction}"
    return f"{whole} {settings.currency_symbol}"


def format_percentage(rate) -> str:
    return f"{round_money(to_decimal(rate))}%"
