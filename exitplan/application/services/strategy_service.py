"""Strategy Service - Application layer orchestration for exit strategies."""

import logging
from collections.abc import Iterable
from dataclasses import dataclass, field

from ...domain.entities import (
    Holding,
    OrderedTargets,
    Position,
    ProfitTarget,
    Strategy,
    StrategyStatus,
    TemplateCatalog,
)
from ...domain.services import (
    Forecast,
    ForecastEvaluator,
    LiquidationPlanner,
    LiquidationSchedule,
    PortfolioAggregator,
    PortfolioForecast,
    ProximityThreshold,
    StrategySummary,
    TargetMonitor,
    TargetSignal,
    TargetValidator,
)
from ...domain.value_objects import Price
from ..config import EngineConfig

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class StrategyPreview:
    """Schedule, forecast and summary for one position and target set."""

    schedule: LiquidationSchedule
    forecast: Forecast
    summary: StrategySummary


@dataclass(frozen=True)
class PortfolioReport:
    """Per-holding previews together with the aggregated portfolio forecast."""

    portfolio: PortfolioForecast
    holdings: list[tuple[Holding, StrategyPreview]] = field(default_factory=list)


class StrategyService:
    """Application layer service for orchestrating strategy operations.

    This service coordinates between:
    - Domain entities (Strategy, Position, Holding)
    - Domain services (validator, planner, evaluator, aggregator, monitor)
    - Engine configuration and logging
    """

    def __init__(self, config: EngineConfig | None = None) -> None:
        """Initialize the strategy service."""
        self.config = config or EngineConfig()
        self.validator = TargetValidator()
        self.planner = LiquidationPlanner(self.config.decimal_places)
        self.evaluator = ForecastEvaluator()
        self.aggregator = PortfolioAggregator()
        self.monitor = TargetMonitor(ProximityThreshold(self.config.default_proximity_pct))
        self.templates = TemplateCatalog()

    # --- Targets & Strategies ---

    def validate_targets(self, targets: Iterable[ProfitTarget]) -> OrderedTargets:
        """Validate and order targets, raising the first violation."""
        return self.validator.validate(targets)

    def targets_from_template(self, key: str) -> OrderedTargets:
        """Validated targets of a preset profit-taking template.

        Raises:
            KeyError: If no template has that key
        """
        template = self.templates.get(key)
        logger.debug("Expanding template %s into %d targets", template.key, len(template.levels))
        return self.validator.validate(template.build_targets())

    def create_strategy(
        self,
        token_symbol: str,
        position: Position,
        targets: Iterable[ProfitTarget] = (),
        name: str = "",
        notes: str | None = None,
    ) -> Strategy:
        """Create a draft strategy with validated targets."""
        strategy = Strategy(
            position=position,
            token_symbol=token_symbol,
            name=name,
            targets=self.validator.validate(targets),
            notes=notes,
        )
        logger.info(
            "Created draft strategy %s for %s with %d targets",
            strategy.id,
            strategy.token_symbol,
            len(strategy.targets),
        )
        return strategy

    # --- Planning & Forecasting ---

    def plan(self, position: Position, targets: OrderedTargets, token_symbol: str = "") -> LiquidationSchedule:
        """Build the liquidation schedule and report its warnings."""
        schedule = self.planner.plan(position, targets)
        logger.debug(
            "Planned %d events for %s: sold=%s remaining=%s",
            len(schedule),
            token_symbol or "position",
            schedule.total_quantity_sold,
            schedule.remaining_quantity,
        )
        for order, warning in schedule.warnings:
            logger.warning(
                "Target %s of %s: %s",
                order,
                token_symbol or "position",
                warning.value,
                extra={"token_symbol": token_symbol or None, "operation": "plan"},
            )
        return schedule

    def preview(
        self,
        position: Position,
        targets: Iterable[ProfitTarget],
        current_price: Price | None = None,
        token_symbol: str = "",
    ) -> StrategyPreview:
        """What-if preview for a position and raw targets, no strategy required."""
        ordered = targets if isinstance(targets, OrderedTargets) else self.validator.validate(targets)
        schedule = self.plan(position, ordered, token_symbol)
        forecast = self.evaluator.evaluate(schedule, current_price)
        logger.debug(
            "Forecast for %s at %s: executed=%s pending=%s",
            token_symbol or "position",
            current_price,
            forecast.executed_orders,
            forecast.pending_orders,
        )
        return StrategyPreview(
            schedule=schedule,
            forecast=forecast,
            summary=StrategySummary.from_forecast(schedule, forecast),
        )

    def preview_strategy(self, strategy: Strategy, current_price: Price | None = None) -> StrategyPreview:
        return self.preview(strategy.position, strategy.targets, current_price, strategy.token_symbol)

    def scan_targets(
        self,
        strategy: Strategy,
        current_price: Price | None,
        proximity: ProximityThreshold | None = None,
    ) -> list[TargetSignal]:
        """Reached and approaching targets of a live strategy."""
        schedule = self.plan(strategy.position, strategy.targets, strategy.token_symbol)
        signals = self.monitor.scan(strategy.status, schedule, current_price, proximity)
        if signals:
            logger.info(
                "%s: %d target signals at %s",
                strategy.token_symbol,
                len(signals),
                current_price,
                extra={"strategy_id": strategy.id, "operation": "scan"},
            )
        return signals

    # --- Lifecycle ---

    def activate(self, strategy: Strategy) -> None:
        previous = strategy.status
        strategy.activate(self.config.decimal_places)
        self._log_transition(strategy, previous)

    def pause(self, strategy: Strategy) -> None:
        previous = strategy.status
        strategy.pause()
        self._log_transition(strategy, previous)

    def resume(self, strategy: Strategy) -> None:
        previous = strategy.status
        strategy.resume()
        self._log_transition(strategy, previous)

    def complete(self, strategy: Strategy) -> None:
        previous = strategy.status
        strategy.complete()
        self._log_transition(strategy, previous)

    def sync_completion(self, strategy: Strategy, current_price: Price | None) -> bool:
        """Complete the strategy once every unit would have been sold.

        Returns:
            True if the strategy moved to completed
        """
        previous = strategy.status
        forecast = self.preview_strategy(strategy, current_price).forecast
        if strategy.complete_if_exhausted(forecast, self.config.decimal_places):
            self._log_transition(strategy, previous)
            return True
        return False

    def _log_transition(self, strategy: Strategy, previous: StrategyStatus) -> None:
        logger.info(
            "Strategy %s (%s) moved from %s to %s",
            strategy.id,
            strategy.token_symbol,
            previous.value,
            strategy.status.value,
            extra={"strategy_id": strategy.id, "status": strategy.status, "operation": "transition"},
        )

    # --- Portfolio ---

    def forecast_portfolio(
        self, entries: Iterable[tuple[Holding, Iterable[ProfitTarget]]]
    ) -> PortfolioReport:
        """Preview every holding and aggregate the results.

        Args:
            entries: Pairs of holding and its profit targets

        Returns:
            PortfolioReport with per-holding previews and portfolio totals
        """
        holdings: list[tuple[Holding, StrategyPreview]] = []
        for holding, targets in entries:
            preview = self.preview(holding.position, targets, holding.current_price, holding.token_symbol)
            holdings.append((holding, preview))

        portfolio = self.aggregator.aggregate(
            (holding, preview.forecast) for holding, preview in holdings
        )
        logger.info(
            "Aggregated %d holdings: invested=%s projected_profit=%s",
            portfolio.holding_count,
            portfolio.total_invested,
            portfolio.total_projected_profit,
            extra={"operation": "aggregate"},
        )
        if portfolio.is_partial:
            logger.warning(
                "Portfolio totals are partial; no price for %s",
                ", ".join(portfolio.excluded_symbols),
                extra={"operation": "aggregate"},
            )
        return PortfolioReport(portfolio=portfolio, holdings=holdings)
