from __future__ import annotations

from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation

_CENT = Decimal("0.01")


@dataclass(frozen=True, order=True)
class Money:
    amount_cents: int

    def __post_init__(self) -> None:
        if self.amount_cents < 0:
            raise ValueError("amount_cents must be >= 0")

    @classmethod
    def zero(cls) -> Money:
        return cls(amount_cents=0)

    @classmethod
    def from_decimal(cls, value: Decimal | int | str) -> Money:
        try:
            amount = Decimal(str(value)).quantize(_CENT, rounding=ROUND_HALF_UP)
        except InvalidOperation as exc:
            raise ValueError(f"amount out of range: {value}") from exc
        return cls(amount_cents=int(amount * 100))

    def to_decimal(self) -> Decimal:
        return (Decimal(self.amount_cents) / 100).quantize(_CENT)

    def __add__(self, other: Money) -> Money:
        return Money(amount_cents=self.amount_cents + other.amount_cents)

    def __sub__(self, other: Money) -> Money:
        return Money(amount_cents=self.amount_cents - other.amount_cents)

    def times(self, quantity: int) -> Money:
        return Money(amount_cents=self.amount_cents * quantity)
