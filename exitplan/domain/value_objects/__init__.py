"""Immutable value objects for type safety."""

from .money import Money
from .price import Price
from .quantity import Quantity

__all__ = ["Money", "Price", "Quantity"]
