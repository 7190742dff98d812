"""
ArithmeticMixin for value objects to support mathematical operations.

This mixin provides common arithmetic operations for value objects like
Money, Price, and Quantity, ensuring type safety and proper decimal handling.
"""

from abc import ABC, abstractmethod
from decimal import Decimal
from typing import TypeVar

T = TypeVar("T", bound="ArithmeticMixin")


class ArithmeticMixin(ABC):
    """
    Mixin class that provides arithmetic operations for value objects.

    Classes using this mixin must have an 'amount' property that returns a Decimal.
    Operands of a different value object type are rejected with TypeError.
    """

    @property
    @abstractmethod
    def amount(self) -> Decimal:
        """Get the numeric amount of this value object."""
        pass

    @abstractmethod
    def _create_new(self: T, amount: Decimal) -> T:
        """Create a new instance of the same type with the given amount."""
        pass

    def _coerce(self, other: object, operation: str) -> Decimal:
        if isinstance(other, ArithmeticMixin):
            if type(other) is not type(self):
                raise TypeError(
                    f"Cannot {operation} {type(self).__name__} and {type(other).__name__}"
                )
            return other.amount
        if isinstance(other, (Decimal, int, float)) and not isinstance(other, bool):
            return Decimal(str(other))
        raise TypeError(f"Cannot {operation} {type(self).__name__} and {type(other).__name__}")

    def __add__(self: T, other: T | Decimal | int | float) -> T:
        """Add two values."""
        return self._create_new(self.amount + self._coerce(other, "add"))

    def __sub__(self: T, other: T | Decimal | int | float) -> T:
        """Subtract two values."""
        return self._create_new(self.amount - self._coerce(other, "subtract"))

    def __mul__(self: T, other: object) -> object:
        """Multiply by a scalar."""
        if isinstance(other, (Decimal, int, float)) and not isinstance(other, bool):
            return self._create_new(self.amount * Decimal(str(other)))
        return NotImplemented

    def __truediv__(self: T, other: object) -> object:
        """Divide by a scalar, or by the same type to get a ratio."""
        divisor = self._coerce(other, "divide")
        if divisor == 0:
            raise ValueError("Cannot divide by zero")
        if isinstance(other, ArithmeticMixin):
            return self.amount / divisor
        return self._create_new(self.amount / divisor)

    def __eq__(self, other: object) -> bool:
        """Check equality."""
        if type(other) is not type(self):
            return False
        return self.amount == other.amount  # type: ignore[attr-defined]

    def __lt__(self, other: object) -> bool:
        """Less than comparison."""
        return self.amount < self._coerce(other, "compare")

    def __le__(self, other: object) -> bool:
        """Less than or equal comparison."""
        return self.amount <= self._coerce(other, "compare")

    def __gt__(self, other: object) -> bool:
        """Greater than comparison."""
        return self.amount > self._coerce(other, "compare")

    def __ge__(self, other: object) -> bool:
        """Greater than or equal comparison."""
        return self.amount >= self._coerce(other, "compare")

    def __hash__(self) -> int:
        """Get hash for use in sets and dicts."""
        return hash((type(self).__name__, self.amount))
