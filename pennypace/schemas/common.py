"""Shared schema types: money and percentages serialized as JSON numbers."""

from decimal import Decimal
from typing import Annotated

from pydantic import PlainSerializer

from pennypace.pacing.money import round1, round2


def _money_to_float(value: Decimal) -> float:
    return float(round2(Decimal(value)))


def _percent_to_float(value: Decimal) -> float:
    return float(round1(Decimal(value)))


# Kept as Decimal in Python; rounded half-up and emitted as a number in JSON.
Money = Annotated[Decimal, PlainSerializer(_money_to_float, return_type=float, when_used="json")]
Percent = Annotated[
    Decimal, PlainSerializer(_percent_to_float, return_type=float, when_used="json")
]
