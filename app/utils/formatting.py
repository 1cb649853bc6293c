"""
Presentation helpers.
Rounding and display strings for money and percentages.

Only used at the API boundary; the valuation engine never rounds.
"""

from decimal import Decimal, ROUND_HALF_UP

CENT = Decimal("0.01")


def round_money(value: Decimal) -> Decimal:
    return Decimal(value).quantize(CENT, rounding=ROUND_HALF_UP)


def round_percent(value: Decimal) -> Decimal:
    return Decimal(value).quantize(CENT, rounding=ROUND_HALF_UP)


def format_currency(value: Decimal, symbol: str = "$") -> str:
    """
    Fixed 2 decimals with thousands separators.

    >>> format_currency(Decimal("-1234.5"))
    '-$1,234.50'
    """
    amount = round_money(value)
    sign = "-" if amount < 0 else ""
    return f"{sign}{symbol}{abs(amount):,.2f}"


def format_gain_loss(value: Decimal, symbol: str = "$") -> str:
    """Currency with a leading + for gains"""
    text = format_currency(value, symbol)
    if round_money(value) > 0:
        return "+" + text
    return text


def format_percent(value: Decimal) -> str:
    pct = round_percent(value)
    if pct == 0:
        # -0.00
        pct = abs(pct)
    sign = "+" if pct > 0 else ""
    return f"{sign}{pct:.2f}%"
