"""
Fixed-point money helpers

Amounts are stored and added as integer cents; the 2-decimal string form
("30.00") only exists at the API edge.
"""
from decimal import Decimal, InvalidOperation, ROUND_HALF_UP
from typing import Union

Amount = Union[str, int, float, Decimal]

CENT = Decimal("0.01")


def to_cents(value: Amount | None) -> int:
    """
    Parse an amount ("30", "30.5", 12, 8.25) into integer cents.

    None counts as zero, matching a split payment whose half was left blank.
    Floats go through str() first so 0.1 becomes 10 cents, not 10.000000000000000555.

    Raises:
        ValueError: If the value is not a number
    """
    if value is None:
        return 0
    if isinstance(value, float):
        value = str(value)
    try:
        amount = Decimal(value).quantize(CENT, rounding=ROUND_HALF_UP)
    except (InvalidOperation, TypeError) as e:
        raise ValueError(f"Invalid amount: {value!r}") from e
    if not amount.is_finite():
        raise ValueError(f"Invalid amount: {value!r}")
    return int(amount * 100)


def format_cents(cents: int) -> str:
    """Render integer cents as a 2-decimal string, e.g. -1250 -> "-12.50" """
    return str((Decimal(cents) / 100).quantize(CENT))
