"""Fixed-point money helpers.

All monetary amounts are ``Decimal`` values with two places. Amounts coming
from JSON or commands may arrive as ``str``, ``int`` or ``float``; they are
normalized through ``str`` so binary float noise never reaches a total.
"""

from decimal import ROUND_HALF_UP, Decimal

CENT = Decimal("0.01")
ZERO = Decimal("0.00")


def to_money(value) -> Decimal:
    """Quantize ``value`` to two decimal places (half-up)."""
    if value is None:
        return ZERO
    if not isinstance(value, Decimal):
        value = Decimal(str(value))
    return value.quantize(CENT, rounding=ROUND_HALF_UP)


def money_str(value) -> str:
    """Render an amount the way the API serializes money, e.g. ``"120.00"``."""
    return str(to_money(value))
