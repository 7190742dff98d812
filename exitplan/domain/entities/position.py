"""
Position Entity - The holding a strategy liquidates
"""

from __future__ import annotations

# Standard library imports
from dataclasses import dataclass
from decimal import Decimal
from typing import TYPE_CHECKING, Self

from ..constants import DEFAULT_DECIMAL_PLACES
from ..value_objects import Money, Price, Quantity

if TYPE_CHECKING:
    from ..services.liquidation_planner import LiquidationEvent


@dataclass(frozen=True)
class Position:
    """
    Position entity: held quantity and its average cost basis per unit.

    Positions are immutable; liquidations produce a new Position. The average
    price never changes on a sale, since the average cost of the remaining
    units is invariant under pro-rata partial liquidation.
    """

    quantity: Quantity
    average_price: Price

    def __post_init__(self) -> None:
        """Validate position after initialization"""
        if not isinstance(self.quantity, Quantity):
            raise TypeError(f"Position quantity must be a Quantity, got {type(self.quantity).__name__}")
        if not isinstance(self.average_price, Price):
            raise TypeError(
                f"Position average price must be a Price, got {type(self.average_price).__name__}"
            )

    @classmethod
    def open(
        cls,
        quantity: Quantity | Decimal | float | int | str,
        average_price: Price | Decimal | float | int | str,
    ) -> Self:
        """Factory method accepting raw numbers or value objects.

        Raises:
            ValueError: If quantity is not positive or the price is invalid
        """
        if not isinstance(quantity, Quantity):
            quantity = Quantity(quantity)
        if not isinstance(average_price, Price):
            average_price = Price(average_price)
        if quantity.value == 0:
            raise ValueError("Cannot open position with zero quantity")
        return cls(quantity=quantity, average_price=average_price)

    @property
    def invested(self) -> Money:
        """Capital committed to the position (quantity x average price)."""
        return Money(self.quantity.value * self.average_price.value)

    def is_empty(self, decimal_places: int = DEFAULT_DECIMAL_PLACES) -> bool:
        return self.quantity.is_zero(decimal_places)

    def market_value(self, price: Price) -> Money:
        return Money(self.quantity.value * price.value)

    def unrealized_pnl(self, price: Price) -> Money:
        return Money(self.quantity.value * (price.value - self.average_price.value))

    def apply_liquidation(self, event: LiquidationEvent) -> Self:
        """Return the position left after a liquidation event.

        Raises:
            ValueError: If the event sells more than is held
        """
        if event.quantity_sold > self.quantity:
            raise ValueError(
                f"Cannot sell {event.quantity_sold} from a position of {self.quantity}"
            )
        return type(self)(quantity=self.quantity - event.quantity_sold, average_price=self.average_price)

    def __str__(self) -> str:
        return f"Position({self.quantity} @ {self.average_price})"
