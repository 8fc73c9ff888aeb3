"""
Currency quantities in satoshis.

Quantity holds an integer satoshi count; float/Decimal conversions go
through Decimal(str(x)) so 0.1 BTC is exactly 10_000_000 satoshis.
"""

from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal
from functools import total_ordering
from typing import Any

SATOSHIS_PER_UNIT = Decimal(10 ** 8)


@total_ordering
class Quantity:
    """An amount of a divisible asset, stored as integer satoshis."""

    __slots__ = ("_satoshis",)

    def __init__(self, satoshis: int | str | Decimal = 0) -> None:
        if isinstance(satoshis, bool):
            raise TypeError("satoshis must be an integer amount, not bool")
        value = Decimal(str(satoshis))
        if value != value.to_integral_value():
            raise ValueError(f"satoshis must be integral, got {satoshis!r}")
        self._satoshis = int(value)

    @classmethod
    def from_float(cls, amount: float | str | Decimal) -> "Quantity":
        """Build from a unit amount (e.g. 0.5 BTC)."""
        sats = (Decimal(str(amount)) * SATOSHIS_PER_UNIT).to_integral_value(ROUND_HALF_UP)
        return cls(sats)

    @property
    def satoshis(self) -> int:
        return self._satoshis

    def to_decimal(self) -> Decimal:
        return Decimal(self._satoshis) / SATOSHIS_PER_UNIT

    def to_float(self) -> float:
        return float(self.to_decimal())

    def __add__(self, other: Any) -> "Quantity":
        if not isinstance(other, Quantity):
            return NotImplemented
        return Quantity(self._satoshis + other._satoshis)

    def __sub__(self, other: Any) -> "Quantity":
        if not isinstance(other, Quantity):
            return NotImplemented
        return Quantity(self._satoshis - other._satoshis)

    def __eq__(self, other: Any) -> bool:
        if not isinstance(other, Quantity):
            return NotImplemented
        return self._satoshis == other._satoshis

    def __lt__(self, other: Any) -> bool:
        if not isinstance(other, Quantity):
            return NotImplemented
        return self._satoshis < other._satoshis

    def __hash__(self) -> int:
        return hash(self._satoshis)

    def __repr__(self) -> str:
        return f"Quantity(satoshis={self._satoshis})"
