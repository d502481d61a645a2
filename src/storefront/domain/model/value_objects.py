"""Value Objects shared across the domain.

Immutable, compared by value, and self-validating: an invalid Money or
Quantity can never be constructed.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal, InvalidOperation

from storefront.domain.exceptions import InvalidRequestError

_CENT = Decimal("0.01")


@dataclass(frozen=True)
class Money:
    """A non-negative amount in the store currency.

    Decimal keeps order totals exact; amounts are rounded to cents on the
    way in.
    """

    amount: Decimal

    def __post_init__(self) -> None:
        if not isinstance(self.amount, Decimal):
            raise InvalidRequestError(
                f"Money amount must be a Decimal, got {type(self.amount).__name__}"
            )
        if not self.amount.is_finite():
            raise InvalidRequestError(f"Money amount must be finite, got {self.amount}")
        if self.amount < 0:
            raise InvalidRequestError(
                f"Money amount cannot be negative, got {self.amount}"
            )
        object.__setattr__(self, "amount", self.amount.quantize(_CENT))

    def __add__(self, other: Money) -> Money:
        return Money(self.amount + other.amount)

    def __mul__(self, factor: int) -> Money:
        if not isinstance(factor, int):
            raise TypeError(f"Can only multiply Money by int, got {type(factor).__name__}")
        return Money(self.amount * factor)

    def __lt__(self, other: Money) -> bool:
        return self.amount < other.amount

    def __le__(self, other: Money) -> bool:
        return self.amount <= other.amount

    def __str__(self) -> str:
        return f"${self.amount:.2f}"

    @staticmethod
    def zero() -> Money:
        return Money(Decimal("0"))

    @staticmethod
    def of(amount: str | float | int | Decimal) -> Money:
        """Coerce user input to Money, reporting bad input as a request error.

        Input finer than a cent is refused rather than rounded.
        """
        try:
            value = Decimal(str(amount).strip())
            exact = value.is_finite() and value == value.quantize(_CENT)
        except (InvalidOperation, ValueError) as exc:
            raise InvalidRequestError(f"Invalid money amount: {amount!r}") from exc
        if value.is_finite() and not exact:
            raise InvalidRequestError(
                f"Money amount cannot have more than two decimal places, got {amount!r}"
            )
        return Money(value)


@dataclass(frozen=True)
class Quantity:
    """A unit count of at least one."""

    value: int

    def __post_init__(self) -> None:
        if isinstance(self.value, bool) or not isinstance(self.value, int):
            raise InvalidRequestError(
                f"Quantity must be an integer, got {type(self.value).__name__}"
            )
        if self.value < 1:
            raise InvalidRequestError(f"Quantity must be at least 1, got {self.value}")

    def __add__(self, other: Quantity) -> Quantity:
        return Quantity(self.value + other.value)

    def __str__(self) -> str:
        return str(self.value)
