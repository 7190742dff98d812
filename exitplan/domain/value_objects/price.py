"""Price value object for representing asset unit prices."""

from __future__ import annotations

# Standard library imports
from decimal import Decimal
from typing import Self

from ..constants import HUNDRED
from .arithmetic_mixin import ArithmeticMixin
from .base import ValueObject, to_decimal


class Price(ArithmeticMixin, ValueObject):
    """Immutable value object representing a strictly positive unit price."""

    def __init__(self, value: Decimal | float | int | str) -> None:
        """Initialize Price with validation.

        Args:
            value: The price value

        Raises:
            ValueError: If price is zero, negative, or invalid
        """
        value = to_decimal(value)
        if value <= 0:
            raise ValueError(f"Price must be positive: {value}")
        self._value = value

    @property
    def value(self) -> Decimal:
        """Get the decimal value."""
        return self._value

    @property
    def amount(self) -> Decimal:
        """Get the decimal value (alias for ArithmeticMixin compatibility)."""
        return self._value

    def _create_new(self, amount: Decimal) -> Self:
        return type(self)(amount)

    def with_gain(self, percentage: Decimal | int | str) -> Self:
        """Price reached after a percentage gain over this price.

        Args:
            percentage: Gain in percent (20 means +20%)

        Returns:
            New Price equal to ``value * (1 + percentage / 100)``
        """
        return type(self)(self._value * (1 + to_decimal(percentage) / HUNDRED))

    def gain_percentage_from(self, base: Price) -> Decimal:
        """Percentage change from ``base`` to this price."""
        return (self._value - base.value) / base.value * HUNDRED

    def __mul__(self, other: object) -> object:
        """Multiply by a scalar (returns Price) or a Quantity (returns Money)."""
        from .money import Money
        from .quantity import Quantity

        if isinstance(other, Quantity):
            return Money(self._value * other.value)
        return super().__mul__(other)

    def __rmul__(self, other: object) -> object:
        return self.__mul__(other)

    def __repr__(self) -> str:
        return f"Price({self._value})"

    def __str__(self) -> str:
        return str(self._value)
