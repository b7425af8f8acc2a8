from __future__ import annotations

import re
from dataclasses import dataclass
from decimal import ROUND_HALF_EVEN, Decimal, InvalidOperation

from finance_api.domain.errors import invariant_error, validation_error

DEFAULT_CURRENCY = "BRL"

_CENT = Decimal("0.01")

# Largest value of a decimal(18,2) column; transaction amounts are capped here.
MAX_AMOUNT = Decimal("9999999999999999.99")
_CURRENCY_RE = re.compile(r"^[A-Za-z]{3}$")


def _to_decimal(value) -> Decimal:
    if isinstance(value, Decimal):
        return value
    if isinstance(value, float):
        # str() keeps the literal the caller wrote (10.005 -> "10.005").
        value = str(value)
    try:
        return Decimal(value)
    except (InvalidOperation, TypeError, ValueError):
        raise validation_error("InvalidAmount", f"Invalid amount: {value!r}", "amount")


@dataclass(frozen=True)
class Money:
    """Non-negative amount with a 3-letter currency code.

    Amounts are rounded half-to-even to 2 decimal places and currency codes
    are upper-cased. Arithmetic is only defined between equal currencies.
    """

    amount: Decimal
    currency: str

    def __post_init__(self) -> None:
        amount = _to_decimal(self.amount)
        if not amount.is_finite() or amount < 0:
            raise validation_error("InvalidAmount", "Amount cannot be negative.", "amount")
        if not self.currency or not str(self.currency).strip():
            raise validation_error("InvalidAmount", "Currency code cannot be empty.", "currency")
        currency = str(self.currency).strip()
        if not _CURRENCY_RE.match(currency):
            raise validation_error("InvalidAmount", "Currency must be a 3-letter code.", "currency")

        try:
            amount = amount.quantize(_CENT, rounding=ROUND_HALF_EVEN)
        except InvalidOperation:
            # More digits than the decimal context can hold.
            raise validation_error("InvalidAmount", "Amount is too large.", "amount")

        object.__setattr__(self, "amount", amount)
        object.__setattr__(self, "currency", currency.upper())

    @classmethod
    def create(cls, amount, currency: str = DEFAULT_CURRENCY) -> Money:
        return cls(amount, currency)

    @classmethod
    def zero(cls, currency: str = DEFAULT_CURRENCY) -> Money:
        return cls(Decimal("0"), currency)

    @classmethod
    def from_cents(cls, cents: int, currency: str) -> Money:
        return cls(Decimal(int(cents)) / 100, currency)

    @property
    def cents(self) -> int:
        return int(self.amount * 100)

    def _ensure_same_currency(self, other: Money, operation: str) -> None:
        if self.currency != other.currency:
            raise invariant_error(
                "CurrencyMismatch",
                f"Cannot {operation} amounts in different currencies: {self.currency} and {other.currency}.",
            )

    def add(self, other: Money) -> Money:
        self._ensure_same_currency(other, "add")
        return Money(self.amount + other.amount, self.currency)

    def subtract(self, other: Money) -> Money:
        self._ensure_same_currency(other, "subtract")
        result = self.amount - other.amount
        if result < 0:
            raise invariant_error("NegativeResult", "Result cannot be negative.")
        return Money(result, self.currency)

    def __str__(self) -> str:
        return f"{self.amount:.2f} {self.currency}"
