"""
Profit Target Entities - Exit rules evaluated against a position

A profit target is either a percentage gain over the cost basis or an absolute
unit price. Both variants share the evaluation order and the share of the
remaining quantity to sell when the target triggers.
"""

from __future__ import annotations

# Standard library imports
from abc import ABC, abstractmethod
from collections.abc import Iterator
from dataclasses import dataclass
from decimal import Decimal
from enum import Enum
from typing import Self

from ..value_objects.base import to_decimal


class TargetType(Enum):
    """Target type enumeration"""

    PERCENTAGE = "percentage"
    PRICE = "price"

    @classmethod
    def parse(cls, value: TargetType | str) -> TargetType:
        """Parse a target type, accepting the legacy step type names.

        Raises:
            ValueError: If the value names no known target type
        """
        if isinstance(value, cls):
            return value
        normalized = str(value).strip().lower()
        aliases = {
            "percentage_of_average": cls.PERCENTAGE,
            "exact_price": cls.PRICE,
        }
        if normalized in aliases:
            return aliases[normalized]
        try:
            return cls(normalized)
        except ValueError:
            raise ValueError(f"Unknown target type: {value!r}") from None


@dataclass(frozen=True)
class ProfitTarget(ABC):
    """
    Base exit rule.

    Instances are built as one of the concrete variants below. Values are not
    range-checked here; TargetValidator owns the structural rules so that
    editing forms can report every violation at once.
    """

    order: int
    target_value: Decimal
    sell_percentage: Decimal
    notes: str | None = None

    def __post_init__(self) -> None:
        if isinstance(self.order, bool) or not isinstance(self.order, int):
            raise TypeError(f"Target order must be an integer, got {self.order!r}")
        object.__setattr__(self, "target_value", to_decimal(self.target_value))
        object.__setattr__(self, "sell_percentage", to_decimal(self.sell_percentage))

    @property
    @abstractmethod
    def target_type(self) -> TargetType:
        """Variant tag of this target."""
        pass

    @classmethod
    def create(
        cls,
        target_type: TargetType | str,
        order: int,
        target_value: Decimal | float | int | str,
        sell_percentage: Decimal | float | int | str,
        notes: str | None = None,
    ) -> ProfitTarget:
        """Factory method building the variant matching ``target_type``."""
        match TargetType.parse(target_type):
            case TargetType.PERCENTAGE:
                return PercentageTarget(order, to_decimal(target_value), to_decimal(sell_percentage), notes)
            case TargetType.PRICE:
                return PriceTarget(order, to_decimal(target_value), to_decimal(sell_percentage), notes)


@dataclass(frozen=True)
class PercentageTarget(ProfitTarget):
    """Triggers once price gains ``target_value`` percent over the average price."""

    @property
    def target_type(self) -> TargetType:
        return TargetType.PERCENTAGE


@dataclass(frozen=True)
class PriceTarget(ProfitTarget):
    """Triggers once price reaches the absolute unit price ``target_value``."""

    @property
    def target_type(self) -> TargetType:
        return TargetType.PRICE


@dataclass(frozen=True)
class OrderedTargets:
    """Validated targets sorted ascending by order.

    This sequence is the canonical evaluation order for planning,
    forecasting and monitoring.
    """

    targets: tuple[ProfitTarget, ...] = ()

    def __post_init__(self) -> None:
        object.__setattr__(self, "targets", tuple(self.targets))

    @classmethod
    def empty(cls) -> Self:
        return cls(())

    def __iter__(self) -> Iterator[ProfitTarget]:
        return iter(self.targets)

    def __len__(self) -> int:
        return len(self.targets)

    def __getitem__(self, index: int) -> ProfitTarget:
        return self.targets[index]

    @property
    def orders(self) -> tuple[int, ...]:
        return tuple(target.order for target in self.targets)

    def find(self, order: int) -> ProfitTarget | None:
        """Get the target with the given order, if any."""
        return next((t for t in self.targets if t.order == order), None)

    def as_list(self) -> list[ProfitTarget]:
        return list(self.targets)
