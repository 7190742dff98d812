"""Liquidation Planner domain service.

This module walks a strategy's validated profit targets in order against a
position and produces the projected liquidation schedule.

Each target sells a percentage of the quantity *remaining when it is
evaluated*, not of the original position, so targets of 50%, 50% and 100%
sell 50%, 25% and 25% of the original amount and exhaust the position on the
third target. Percentage targets are always anchored to the original average
price: average cost is invariant under pro-rata partial sales.

Quantities are truncated toward the configured precision (default 8 decimal
places) and never rounded up, so the schedule can not sell more than is held.
Once the remaining quantity falls below the smallest step of that precision,
later targets are reported as unreachable instead of being dropped.

The planner never raises for validated input; configuration concerns such as
targets priced below an earlier target are attached as warnings.

Example:
    >>> from exitplan.domain.entities import Position, ProfitTarget
    >>> from exitplan.domain.services import LiquidationPlanner, TargetValidator
    >>> position = Position.open("100", "10")
    >>> targets = TargetValidator().validate([
    ...     ProfitTarget.create("percentage", 1, "100", "50"),
    ...     ProfitTarget.create("price", 2, "30", "100"),
    ... ])
    >>> schedule = LiquidationPlanner().plan(position, targets)
    >>> [str(event.quantity_sold) for event in schedule]
    ['50.00000000', '50.00000000']
"""

from __future__ import annotations

# Standard library imports
import logging
from collections.abc import Iterator
from dataclasses import dataclass
from enum import Enum

from ..constants import DEFAULT_DECIMAL_PLACES, HUNDRED
from ..entities.position import Position
from ..entities.profit_target import OrderedTargets, PercentageTarget, PriceTarget, ProfitTarget
from ..value_objects import Money, Price, Quantity

logger = logging.getLogger(__name__)


class ScheduleWarning(Enum):
    """Informational flags attached to schedule entries"""

    UNREACHABLE = "unreachable"
    BELOW_PRIOR_TRIGGER = "below_prior_trigger"
    BELOW_COST_BASIS = "below_cost_basis"


@dataclass(frozen=True)
class LiquidationEvent:
    """One simulated sale, produced for each target in evaluation order."""

    target: ProfitTarget
    trigger_price: Price
    quantity_sold: Quantity
    quantity_remaining: Quantity
    proceeds: Money
    realized_profit: Money
    unreachable: bool = False
    warnings: tuple[ScheduleWarning, ...] = ()

    @property
    def order(self) -> int:
        return self.target.order

    @property
    def is_reachable(self) -> bool:
        return not self.unreachable

    def has_warning(self, warning: ScheduleWarning) -> bool:
        return warning in self.warnings


@dataclass(frozen=True)
class LiquidationSchedule:
    """Ordered liquidation events for one position."""

    position: Position
    events: tuple[LiquidationEvent, ...] = ()
    decimal_places: int = DEFAULT_DECIMAL_PLACES

    def __iter__(self) -> Iterator[LiquidationEvent]:
        return iter(self.events)

    def __len__(self) -> int:
        return len(self.events)

    def __getitem__(self, index: int) -> LiquidationEvent:
        return self.events[index]

    @property
    def reachable_events(self) -> tuple[LiquidationEvent, ...]:
        return tuple(event for event in self.events if event.is_reachable)

    @property
    def unreachable_events(self) -> tuple[LiquidationEvent, ...]:
        return tuple(event for event in self.events if event.unreachable)

    @property
    def total_quantity_sold(self) -> Quantity:
        total = Quantity(0)
        for event in self.events:
            total = total + event.quantity_sold
        return total

    @property
    def remaining_quantity(self) -> Quantity:
        """Quantity still held once every reachable target has fired."""
        return self.position.quantity - self.total_quantity_sold

    @property
    def total_proceeds(self) -> Money:
        total = Money.zero()
        for event in self.events:
            total = total + event.proceeds
        return total

    @property
    def total_realized_profit(self) -> Money:
        total = Money.zero()
        for event in self.events:
            total = total + event.realized_profit
        return total

    @property
    def is_exhaustive(self) -> bool:
        """True when the plan sells the whole position."""
        return self.remaining_quantity.is_zero(self.decimal_places)

    @property
    def warnings(self) -> list[tuple[int, ScheduleWarning]]:
        return [(event.order, warning) for event in self.events for warning in event.warnings]

    def event_for(self, order: int) -> LiquidationEvent | None:
        return next((event for event in self.events if event.order == order), None)


class LiquidationPlanner:
    """Domain service turning a position and ordered targets into a schedule.

    The planner is stateless apart from its precision setting and is safe to
    share between threads.

    Attributes:
        decimal_places: Precision quantities are truncated to
    """

    def __init__(self, decimal_places: int = DEFAULT_DECIMAL_PLACES) -> None:
        if decimal_places < 0:
            raise ValueError(f"Decimal places cannot be negative: {decimal_places}")
        self.decimal_places = decimal_places

    def plan(self, position: Position, ordered_targets: OrderedTargets) -> LiquidationSchedule:
        """Simulate every target in order against the position.

        Args:
            position: Held quantity and average price
            ordered_targets: Targets as returned by TargetValidator.validate

        Returns:
            LiquidationSchedule: One event per target, unreachable ones flagged
        """
        average_price = position.average_price
        remaining = position.quantity
        highest_trigger: Price | None = None
        events: list[LiquidationEvent] = []

        for target in ordered_targets:
            trigger_price = self.resolve_trigger_price(target, average_price)
            warnings: list[ScheduleWarning] = []

            if remaining.is_zero(self.decimal_places):
                warnings.append(ScheduleWarning.UNREACHABLE)
                events.append(
                    LiquidationEvent(
                        target=target,
                        trigger_price=trigger_price,
                        quantity_sold=Quantity(0),
                        quantity_remaining=remaining,
                        proceeds=Money.zero(),
                        realized_profit=Money.zero(),
                        unreachable=True,
                        warnings=tuple(warnings),
                    )
                )
                logger.debug("Target %s unreachable: position exhausted", target.order)
                continue

            if highest_trigger is not None and trigger_price < highest_trigger:
                warnings.append(ScheduleWarning.BELOW_PRIOR_TRIGGER)
            if trigger_price < average_price:
                warnings.append(ScheduleWarning.BELOW_COST_BASIS)

            quantity_sold = self.quantity_to_sell(remaining, target)
            remaining = remaining - quantity_sold

            events.append(
                LiquidationEvent(
                    target=target,
                    trigger_price=trigger_price,
                    quantity_sold=quantity_sold,
                    quantity_remaining=remaining,
                    proceeds=Money(quantity_sold.value * trigger_price.value),
                    realized_profit=Money(
                        quantity_sold.value * (trigger_price.value - average_price.value)
                    ),
                    warnings=tuple(warnings),
                )
            )
            if warnings:
                logger.debug(
                    "Target %s planned with warnings: %s",
                    target.order,
                    ", ".join(w.value for w in warnings),
                )

            if highest_trigger is None or trigger_price > highest_trigger:
                highest_trigger = trigger_price

        return LiquidationSchedule(
            position=position, events=tuple(events), decimal_places=self.decimal_places
        )

    @staticmethod
    def resolve_trigger_price(target: ProfitTarget, average_price: Price) -> Price:
        """Resolve the unit price at which a target fires.

        Percentage targets resolve against the original average price no
        matter how many earlier targets already fired.
        """
        match target:
            case PercentageTarget(target_value=gain):
                return average_price.with_gain(gain)
            case PriceTarget(target_value=value):
                return Price(value)
            case _:
                raise TypeError(f"Unknown profit target variant: {type(target).__name__}")

    def quantity_to_sell(self, remaining: Quantity, target: ProfitTarget) -> Quantity:
        """Share of the remaining quantity sold by a target, truncated.

        A 100% target sells exactly what is left so the position is exhausted
        regardless of precision.
        """
        if target.sell_percentage >= HUNDRED:
            return remaining
        return Quantity(remaining.value * target.sell_percentage / HUNDRED).truncate(
            self.decimal_places
        )
