"""Normalization of monetary input.

Amounts reach the backend as numbers, as text typed on a phone keyboard
("12,50", "30", "") or not at all. Keep a single, testable place that turns
all of them into the Decimal stored on an appointment, so nothing downstream
ever has to re-parse an amount.
"""

from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from typing import Any

ZERO = Decimal("0")
CENTS = Decimal("0.01")
# Largest value the Numeric(10, 2) amount column can hold
MAX_AMOUNT = Decimal("99999999.99")


def normalize_amount(value: Any) -> Decimal:
    """Coerce heterogeneous monetary input into a non-negative Decimal.

    - None, empty and other falsy values become 0
    - int, float and Decimal keep their value
    - strings accept a decimal comma ("12,50" -> 12.50)
    - anything unparseable, non-finite or of another type becomes 0
    - negative amounts become 0
    - the result is rounded half-up to cents, the precision it is stored at;
      values above MAX_AMOUNT are left unrounded for the caller to reject

    Never raises: a malformed amount degrades to zero instead of failing
    the booking.

    Args:
        value: raw amount from a request payload

    Returns:
        Decimal amount (Decimal("0") when absent or invalid)
    """
    if not value or isinstance(value, bool):
        return ZERO

    if isinstance(value, Decimal):
        amount = value
    elif isinstance(value, (int, float)):
        amount = Decimal(str(value))
    elif isinstance(value, str):
        text = value.strip().replace(",", ".", 1)
        try:
            amount = Decimal(text)
        except InvalidOperation:
            return ZERO
    else:
        return ZERO

    if not amount.is_finite() or amount <= 0:
        return ZERO
    if amount > MAX_AMOUNT:
        return amount
    return amount.quantize(CENTS, rounding=ROUND_HALF_UP)


def format_amount(amount: Decimal) -> str:
    """Render an amount with two decimal places ("12.5" -> "12.50")."""
    return str(amount.quantize(CENTS))
