"""Base class for value objects."""

# Standard library imports
from abc import ABC, abstractmethod
from decimal import Decimal, InvalidOperation
from typing import Any


class ValueObject(ABC):
    """Abstract base class for all value objects.

    Provides common functionality for value objects including:
    - Immutability enforcement
    - Equality comparison
    - Hashability
    """

    @abstractmethod
    def __eq__(self, other: object) -> bool:
        """Check equality with another value object."""
        pass

    @abstractmethod
    def __hash__(self) -> int:
        """Get hash for use in sets/dicts."""
        pass

    @abstractmethod
    def __repr__(self) -> str:
        """Get string representation for debugging."""
        pass

    def __setattr__(self, name: str, value: Any) -> None:
        """Prevent modification after initialization."""
        if hasattr(self, name):
            raise AttributeError(f"Cannot modify immutable value object attribute '{name}'")
        super().__setattr__(name, value)


def to_decimal(value: Decimal | float | int | str) -> Decimal:
    """Coerce a numeric input to Decimal, going through str for floats.

    Raises:
        ValueError: If the value is not a finite number
    """
    if isinstance(value, bool):
        raise ValueError(f"Invalid numeric value: {value!r}")
    if not isinstance(value, Decimal):
        try:
            value = Decimal(str(value))
        except InvalidOperation:
            raise ValueError(f"Invalid numeric value: {value!r}") from None
    if not value.is_finite():
        raise ValueError(f"Numeric value must be finite: {value}")
    return value
