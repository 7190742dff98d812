"""Quantity value object for representing held or sold asset amounts."""

from __future__ import annotations

# Standard library imports
from decimal import ROUND_DOWN, Decimal
from typing import Self

from ..constants import DEFAULT_DECIMAL_PLACES, quantity_epsilon
from .arithmetic_mixin import ArithmeticMixin
from .base import ValueObject, to_decimal


class Quantity(ArithmeticMixin, ValueObject):
    """Immutable value object representing a non-negative amount of an asset."""

    def __init__(self, value: Decimal | float | int | str) -> None:
        """Initialize Quantity with validation.

        Args:
            value: The amount of the asset

        Raises:
            ValueError: If the quantity is negative or not a number
        """
        value = to_decimal(value)
        if value < 0:
            raise ValueError(f"Quantity cannot be negative: {value}")
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

    def truncate(self, decimal_places: int = DEFAULT_DECIMAL_PLACES) -> Self:
        """Truncate toward zero at the given precision.

        Truncation never rounds up, so splitting a quantity can not
        produce more units than were held.
        """
        quantizer = quantity_epsilon(decimal_places)
        return type(self)(self._value.quantize(quantizer, rounding=ROUND_DOWN))

    def is_zero(self, decimal_places: int = DEFAULT_DECIMAL_PLACES) -> bool:
        """Check if the quantity is below the smallest step of the given precision."""
        return self._value < quantity_epsilon(decimal_places)

    def __mul__(self, other: object) -> object:
        """Multiply by a scalar (returns Quantity) or a Price (returns Money)."""
        from .money import Money
        from .price import Price

        if isinstance(other, Price):
            return Money(self._value * other.value)
        return super().__mul__(other)

    def __rmul__(self, other: object) -> object:
        return self.__mul__(other)

    def __repr__(self) -> str:
        return f"Quantity({self._value})"

    def __str__(self) -> str:
        return str(self._value)
