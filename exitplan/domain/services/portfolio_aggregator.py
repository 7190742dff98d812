"""
Portfolio Aggregator - Combines per-holding forecasts into portfolio totals

Null handling follows one rule per field: realized figures are summed over
the holdings whose price is known and are None only if no price is known at
all; unrealized value and total profit/loss are None as soon as any holding
is unknown, because a partial market value would understate the portfolio.
"""

from __future__ import annotations

# Standard library imports
from collections.abc import Iterable
from dataclasses import dataclass
from decimal import Decimal

from ..constants import HUNDRED
from ..entities.holding import Holding
from ..value_objects import Money
from .forecast_evaluator import Forecast


@dataclass(frozen=True)
class PortfolioForecast:
    """Aggregated forecast across holdings."""

    total_invested: Money
    realized_profit: Money | None
    realized_proceeds: Money | None
    unrealized_value: Money | None
    total_projected_profit: Money
    total_projected_proceeds: Money
    total_profit_loss: Money | None
    total_profit_loss_percentage: Decimal | None
    excluded_symbols: tuple[str, ...] = ()
    holding_count: int = 0

    @property
    def is_partial(self) -> bool:
        """True when at least one holding had no market price."""
        return bool(self.excluded_symbols)

    @property
    def priced_count(self) -> int:
        return self.holding_count - len(self.excluded_symbols)


class PortfolioAggregator:
    """Domain service reducing holding forecasts to a PortfolioForecast."""

    def aggregate(self, entries: Iterable[tuple[Holding, Forecast]]) -> PortfolioForecast:
        """Aggregate forecasts for a set of holdings.

        Args:
            entries: Pairs of holding and the forecast evaluated for it

        Returns:
            PortfolioForecast with null-aware totals
        """
        total_invested = Money.zero()
        total_projected_profit = Money.zero()
        total_projected_proceeds = Money.zero()
        realized_profit: Money | None = None
        realized_proceeds: Money | None = None
        unrealized_value = Money.zero()
        excluded: list[str] = []
        count = 0

        for holding, forecast in entries:
            count += 1
            total_invested = total_invested + holding.position.invested
            total_projected_profit = total_projected_profit + forecast.total_projected_profit
            total_projected_proceeds = total_projected_proceeds + forecast.total_projected_proceeds

            if not forecast.is_price_known:
                excluded.append(holding.token_symbol)
                continue

            realized_profit = self._add(realized_profit, forecast.realized_profit)
            realized_proceeds = self._add(realized_proceeds, forecast.realized_proceeds)
            unrealized_value = unrealized_value + forecast.unrealized_value

        if excluded:
            portfolio_unrealized: Money | None = None
            total_profit_loss: Money | None = None
        else:
            portfolio_unrealized = unrealized_value
            total_profit_loss = (realized_proceeds or Money.zero()) + unrealized_value - total_invested

        return PortfolioForecast(
            total_invested=total_invested,
            realized_profit=realized_profit,
            realized_proceeds=realized_proceeds,
            unrealized_value=portfolio_unrealized,
            total_projected_profit=total_projected_profit,
            total_projected_proceeds=total_projected_proceeds,
            total_profit_loss=total_profit_loss,
            total_profit_loss_percentage=self.profit_loss_percentage(total_profit_loss, total_invested),
            excluded_symbols=tuple(excluded),
            holding_count=count,
        )

    @staticmethod
    def profit_loss_percentage(profit_loss: Money | None, invested: Money) -> Decimal | None:
        """Return profit/loss as a percentage of invested capital.

        None when the profit/loss is unknown or nothing was invested.
        """
        if profit_loss is None or not invested.is_positive():
            return None
        return profit_loss.amount / invested.amount * HUNDRED

    @staticmethod
    def _add(total: Money | None, amount: Money | None) -> Money | None:
        if amount is None:
            return total
        if total is None:
            return amount
        return total + amount
