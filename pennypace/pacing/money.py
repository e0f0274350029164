"""Decimal money helpers shared by the pacing engine."""

from decimal import ROUND_HALF_UP, Decimal, InvalidOperation

from pennypace.pacing.errors import InvalidInputError

ZERO = Decimal("0")
HUNDRED = Decimal("100")

_CENT = Decimal("0.01")
_TENTH = Decimal("0.1")


def to_money(value, field: str = "amount") -> Decimal:
    """Coerce an int, float, str or Decimal into a non-negative finite Decimal.

    Floats go through ``str`` so that ``12.1`` becomes ``Decimal("12.1")``
    rather than its binary expansion.
    """
    if isinstance(value, bool) or value is None:
        raise InvalidInputError(f"{field} must be a number, got {value!r}")
    if isinstance(value, Decimal):
        amount = value
    elif isinstance(value, (int, float, str)):
        try:
            amount = Decimal(str(value))
        except InvalidOperation:
            raise InvalidInputError(f"{field} is not a number: {value!r}")
    else:
        raise InvalidInputError(f"{field} must be a number, got {type(value).__name__}")

    if not amount.is_finite():
        raise InvalidInputError(f"{field} must be finite, got {value!r}")
    if amount < 0:
        raise InvalidInputError(f"{field} must be non-negative, got {value!r}")
    return amount


def round1(value: Decimal) -> Decimal:
    """Round half-up to one decimal place (percentages, pacing)."""
    return value.quantize(_TENTH, rounding=ROUND_HALF_UP)


def round2(value: Decimal) -> Decimal:
    """Round half-up to cents."""
    return value.quantize(_CENT, rounding=ROUND_HALF_UP)


def clamp_zero(value: Decimal) -> Decimal:
    return value if value > 0 else ZERO


def percentage_of(part: Decimal, whole: Decimal) -> Decimal:
    """``part / whole * 100`` rounded to one place; 0 when ``whole`` is 0."""
    if whole <= 0:
        return round1(ZERO)
    return round1(part / whole * HUNDRED)
