"""
Display formatting for calculator figures.

Figures are rendered the way a US-locale browser renders them: currency with
two decimals and a leading dollar sign, plain numbers with at most two
decimals and no trailing zeros. Halves round away from zero.
"""

from decimal import ROUND_HALF_UP, Decimal

CENTS = Decimal("0.01")


def _round_cents(value: float) -> Decimal:
    return Decimal(value).quantize(CENTS, rounding=ROUND_HALF_UP)


def format_currency(value: float) -> str:
    """
    Format a currency amount in US dollars.

    Args:
        value: Amount in dollars

    Returns:
        String such as ``$1,234.50`` or ``-$5.00``
    """
    amount = _round_cents(value)
    sign = "-" if amount < 0 else ""
    return f"{sign}${abs(amount):,.2f}"


def format_number(value: float) -> str:
    """
    Format a number with thousands separators and up to two decimals.

    Args:
        value: Number to format

    Returns:
        String such as ``20``, ``1,234.5`` or ``0.33``
    """
    text = f"{_round_cents(value):,.2f}"
    if "." in text:
        text = text.rstrip("0").rstrip(".")
    if text == "-0":
        return "0"
    return text
