"""
Domain Services - Business logic that doesn't belong to a single entity.

Every service here is pure and synchronous: it reads immutable inputs and
returns new values, so instances can be shared freely.
"""

from .forecast_evaluator import Forecast, ForecastEvaluator, StrategySummary
from .liquidation_planner import (
    LiquidationEvent,
    LiquidationPlanner,
    LiquidationSchedule,
    ScheduleWarning,
)
from .portfolio_aggregator import PortfolioAggregator, PortfolioForecast
from .strategy_state_machine import StrategyStateMachine
from .target_monitor import (
    ProximityKind,
    ProximityThreshold,
    SignalType,
    StepState,
    TargetMonitor,
    TargetSignal,
)
from .target_validator import TargetValidator

__all__ = [
    "Forecast",
    "ForecastEvaluator",
    "LiquidationEvent",
    "LiquidationPlanner",
    "LiquidationSchedule",
    "PortfolioAggregator",
    "PortfolioForecast",
    "ProximityKind",
    "ProximityThreshold",
    "ScheduleWarning",
    "SignalType",
    "StepState",
    "StrategyStateMachine",
    "StrategySummary",
    "TargetMonitor",
    "TargetSignal",
    "TargetValidator",
]
