"""Forecast Evaluator domain service.

Evaluates a liquidation schedule against the current market price and splits
it into what would already have executed and what is still pending.

A missing price is a first-class state: every market-dependent field of the
resulting Forecast is None rather than zero, so callers can tell "we don't
know" from "nothing was made". Fields that depend only on the schedule
(projected totals) are always present.
"""

from __future__ import annotations

# Standard library imports
from collections.abc import Iterable
from dataclasses import dataclass
from decimal import Decimal

from ..value_objects import Money, Price, Quantity
from .liquidation_planner import LiquidationEvent, LiquidationSchedule


@dataclass(frozen=True)
class Forecast:
    """Result of evaluating one schedule at one price.

    Attributes:
        current_price: Price the forecast was evaluated at, None if unknown
        realized_profit: Profit of executed targets, None if price unknown
        realized_proceeds: Amount collected by executed targets, None if price unknown
        remaining_quantity: Quantity still held after executed targets
        unrealized_value: Remaining quantity at the current price
        unrealized_profit: Remaining quantity's gain over the average price
        total_projected_profit: Profit if every reachable target fires
        total_projected_proceeds: Proceeds if every reachable target fires
        projected_profit: Profit of targets that have not fired yet
        executed_orders: Orders of targets whose trigger price was reached
        pending_orders: Orders of reachable targets not yet reached
    """

    current_price: Price | None
    realized_profit: Money | None
    realized_proceeds: Money | None
    remaining_quantity: Quantity | None
    unrealized_value: Money | None
    unrealized_profit: Money | None
    total_projected_profit: Money
    total_projected_proceeds: Money
    projected_profit: Money
    executed_orders: tuple[int, ...] = ()
    pending_orders: tuple[int, ...] = ()

    @property
    def is_price_known(self) -> bool:
        return self.current_price is not None

    @property
    def executed_count(self) -> int:
        return len(self.executed_orders)

    @property
    def pending_count(self) -> int:
        return len(self.pending_orders)


class ForecastEvaluator:
    """
    Domain service computing realized and unrealized figures for a schedule.

    A target counts as executed when it is reachable and its trigger price is
    at or below the current price. Each target is checked on its own, so with
    targets configured out of price order a later target may be executed
    while an earlier one is still pending.

    The evaluator is pure: the same schedule and price always produce an
    equal Forecast.
    """

    def evaluate(self, schedule: LiquidationSchedule, current_price: Price | None) -> Forecast:
        """Evaluate a schedule at the given price.

        Args:
            schedule: Schedule produced by LiquidationPlanner.plan
            current_price: Latest market price, or None when no quote exists

        Returns:
            Forecast: Realized, unrealized and projected figures
        """
        reachable = schedule.reachable_events
        total_projected_profit = self._sum(event.realized_profit for event in schedule)
        total_projected_proceeds = self._sum(event.proceeds for event in schedule)

        if current_price is None:
            return Forecast(
                current_price=None,
                realized_profit=None,
                realized_proceeds=None,
                remaining_quantity=None,
                unrealized_value=None,
                unrealized_profit=None,
                total_projected_profit=total_projected_profit,
                total_projected_proceeds=total_projected_proceeds,
                projected_profit=self._sum(event.realized_profit for event in reachable),
                executed_orders=(),
                pending_orders=tuple(event.order for event in reachable),
            )

        executed = [event for event in reachable if self.is_executed(event, current_price)]
        pending = [event for event in reachable if not self.is_executed(event, current_price)]

        sold = Decimal("0")
        for event in executed:
            sold += event.quantity_sold.value
        remaining = schedule.position.quantity - Quantity(sold)
        average_price = schedule.position.average_price

        return Forecast(
            current_price=current_price,
            realized_profit=self._sum(event.realized_profit for event in executed),
            realized_proceeds=self._sum(event.proceeds for event in executed),
            remaining_quantity=remaining,
            unrealized_value=Money(remaining.value * current_price.value),
            unrealized_profit=Money(remaining.value * (current_price.value - average_price.value)),
            total_projected_profit=total_projected_profit,
            total_projected_proceeds=total_projected_proceeds,
            projected_profit=self._sum(event.realized_profit for event in pending),
            executed_orders=tuple(event.order for event in executed),
            pending_orders=tuple(event.order for event in pending),
        )

    @staticmethod
    def is_executed(event: LiquidationEvent, current_price: Price) -> bool:
        return event.is_reachable and event.trigger_price <= current_price

    @staticmethod
    def _sum(amounts: Iterable[Money]) -> Money:
        total = Money.zero()
        for amount in amounts:
            total = total + amount
        return total


@dataclass(frozen=True)
class StrategySummary:
    """Headline numbers for a strategy's exit plan."""

    total_steps: int
    reachable_steps: int
    unreachable_steps: int
    triggered_steps: int
    pending_steps: int
    total_quantity_to_sell: Quantity
    remaining_quantity: Quantity
    estimated_total_profit: Money

    @classmethod
    def from_forecast(cls, schedule: LiquidationSchedule, forecast: Forecast) -> StrategySummary:
        """Build the summary from a schedule and its forecast.

        ``remaining_quantity`` is what is left after the whole plan, not
        after the currently executed targets.
        """
        return cls(
            total_steps=len(schedule),
            reachable_steps=len(schedule.reachable_events),
            unreachable_steps=len(schedule.unreachable_events),
            triggered_steps=forecast.executed_count,
            pending_steps=forecast.pending_count,
            total_quantity_to_sell=schedule.total_quantity_sold,
            remaining_quantity=schedule.remaining_quantity,
            estimated_total_profit=forecast.total_projected_profit,
        )
