"""
Exact decimal helpers for monetary figures.

Volumes are summed and divided as ``Decimal`` so currency totals are
reproducible to the last digit; only the success-rate percentage is a float.
"""
from decimal import ROUND_HALF_UP, Context, Decimal, InvalidOperation

from core.exceptions import RowParseError

ZERO = Decimal("0")

# 16 significant digits, ties rounded away from zero
RATIO_CONTEXT = Context(prec=16, rounding=ROUND_HALF_UP)


def to_decimal(value, field: str = "amount") -> Decimal:
    """
    Normalize a collaborator value to ``Decimal``.

    ``None`` becomes zero. Floats go through ``str`` so ``0.1`` stays ``0.1``
    instead of its binary expansion.
    """
    if value is None:
        return ZERO
    if isinstance(value, Decimal):
        if not value.is_finite():
            raise RowParseError(field, value)
        return value
    if isinstance(value, bool):
        raise RowParseError(field, value)
    if isinstance(value, int):
        return Decimal(value)
    if isinstance(value, float):
        value = str(value)
    if isinstance(value, str):
        try:
            parsed = Decimal(value.strip())
        except InvalidOperation:
            raise RowParseError(field, value) from None
        if not parsed.is_finite():
            raise RowParseError(field, value)
        return parsed
    raise RowParseError(field, value)


def divide(numerator: Decimal, denominator) -> Decimal:
    """Exact-context division; a zero denominator yields zero."""
    if not denominator:
        return ZERO
    return RATIO_CONTEXT.divide(numerator, Decimal(denominator))


def percentage(part: int, whole: int) -> float:
    if whole == 0:
        return 0.0
    return (part * 100.0) / whole
