"""Helpers turning parsed spreadsheet amounts into Decimal."""

from collections.abc import Iterable
from decimal import Decimal, InvalidOperation
import math

ZERO = Decimal("0")


def coerce_decimal(value) -> Decimal:
    """Normalize a parsed amount to Decimal.

    Floats go through ``str`` so ``0.1`` stays ``Decimal("0.1")``. Blank,
    non-finite, and unparseable values map to zero.

    Args:
        value: Amount returned by the number parser or read from a cache.

    Returns:
        Decimal: Normalized amount.
    """
    if value is None:
        return ZERO
    if isinstance(value, Decimal):
        return value if value.is_finite() else ZERO
    if isinstance(value, float) and not math.isfinite(value):
        return ZERO
    try:
        return Decimal(str(value).strip())
    except InvalidOperation:
        return ZERO


def sum_decimals(values: Iterable) -> Decimal:
    """Sum amounts after coercing each of them."""
    return sum((coerce_decimal(value) for value in values), ZERO)


__all__ = ["coerce_decimal", "sum_decimals"]
