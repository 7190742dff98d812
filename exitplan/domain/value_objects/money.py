"""Money value object for representing monetary values with currency."""

from __future__ import annotations

# Standard library imports
from decimal import ROUND_HALF_UP, Decimal
from typing import Self

from ..constants import CURRENCY_CODE_LENGTH, DEFAULT_CURRENCY
from .arithmetic_mixin import ArithmeticMixin
from .base import ValueObject, to_decimal


class Money(ArithmeticMixin, ValueObject):
    """Immutable value object representing money with currency.

    Amounts keep full Decimal precision; rounding is only applied for display.
    Negative amounts are allowed so that losses can be represented.
    """

    def __init__(self, amount: Decimal | float | int | str, currency: str = DEFAULT_CURRENCY) -> None:
        """Initialize Money with amount and currency.

        Args:
            amount: The monetary amount (converted to Decimal)
            currency: ISO 4217 currency code (default: USD)

        Raises:
            ValueError: If currency is invalid
        """
        self._amount = to_decimal(amount)
        self._currency = currency.upper()

        if len(self._currency) != CURRENCY_CODE_LENGTH:
            raise ValueError(f"Invalid currency code: {currency}")

    @classmethod
    def zero(cls, currency: str = DEFAULT_CURRENCY) -> Self:
        return cls(Decimal("0"), currency)

    @property
    def amount(self) -> Decimal:
        """Get the decimal amount."""
        return self._amount

    @property
    def currency(self) -> str:
        """Get the currency code."""
        return self._currency

    def _create_new(self, amount: Decimal) -> Self:
        return type(self)(amount, self._currency)

    def _coerce(self, other: object, operation: str) -> Decimal:
        if isinstance(other, Money) and other._currency != self._currency:
            raise ValueError(f"Cannot {operation} {self._currency} and {other._currency}")
        return super()._coerce(other, operation)

    def round(self, decimal_places: int = 2) -> Self:
        """Round to specified decimal places.

        Args:
            decimal_places: Number of decimal places

        Returns:
            New Money instance with rounded amount
        """
        quantizer = Decimal(10) ** -decimal_places
        rounded = self._amount.quantize(quantizer, rounding=ROUND_HALF_UP)
        return type(self)(rounded, self._currency)

    def is_positive(self) -> bool:
        """Check if amount is positive."""
        return self._amount > 0

    def is_negative(self) -> bool:
        """Check if amount is negative."""
        return self._amount < 0

    def is_zero(self) -> bool:
        """Check if amount is zero."""
        return self._amount == 0

    def format(self, include_currency: bool = True, decimal_places: int = 2) -> str:
        """Format money for display.

        Args:
            include_currency: Whether to include currency symbol
            decimal_places: Number of decimal places to show

        Returns:
            Formatted string representation
        """
        display_amount = self.round(decimal_places)._amount
        formatted = f"{display_amount:,.{decimal_places}f}"

        if include_currency:
            if self._currency == "USD":
                return f"${formatted}"
            return f"{formatted} {self._currency}"

        return formatted

    def __eq__(self, other: object) -> bool:
        """Check equality with another Money instance."""
        if not isinstance(other, Money):
            return False
        return self._amount == other._amount and self._currency == other._currency

    def __hash__(self) -> int:
        """Get hash for use in sets/dicts."""
        return hash((self._amount, self._currency))

    def __neg__(self) -> Self:
        return type(self)(-self._amount, self._currency)

    def __repr__(self) -> str:
        """Get string representation for debugging."""
        return f"Money({self._amount}, '{self._currency}')"

    def __str__(self) -> str:
        """Get string representation for display."""
        return self.format()
