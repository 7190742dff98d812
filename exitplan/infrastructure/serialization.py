"""
Serialization - Maps engine objects to and from JSON-ready dictionaries.

Decimals are written as strings so no precision is lost in transit, None
stays None (an unknown value is never turned into zero) and enums are written
as their values.
"""

from datetime import datetime
from decimal import Decimal
from typing import Any
from uuid import UUID

from exitplan.domain.entities import (
    Holding,
    Position,
    ProfitTakingTemplate,
    ProfitTarget,
    Strategy,
    StrategyStatus,
)
from exitplan.domain.services import (
    Forecast,
    LiquidationEvent,
    LiquidationSchedule,
    PortfolioForecast,
    StrategySummary,
    TargetSignal,
)
from exitplan.domain.value_objects import Money, Price, Quantity


def _decimal(value: Decimal | None) -> str | None:
    return None if value is None else str(value)


def _money(value: Money | None) -> str | None:
    return None if value is None else str(value.amount)


def _quantity(value: Quantity | None) -> str | None:
    return None if value is None else str(value.value)


def _price(value: Price | None) -> str | None:
    return None if value is None else str(value.value)


def _datetime(value: datetime | None) -> str | None:
    return None if value is None else value.isoformat()


# --- Entities ---


def target_to_dict(target: ProfitTarget) -> dict[str, Any]:
    return {
        "order": target.order,
        "target_type": target.target_type.value,
        "target_value": str(target.target_value),
        "sell_percentage": str(target.sell_percentage),
        "notes": target.notes,
    }


def target_from_dict(data: dict[str, Any]) -> ProfitTarget:
    """
    Map a dictionary to a ProfitTarget.

    Raises:
        KeyError: If a required key is missing
        ValueError: If the type or a numeric value is invalid
    """
    return ProfitTarget.create(
        target_type=data["target_type"],
        order=int(data["order"]),
        target_value=data["target_value"],
        sell_percentage=data["sell_percentage"],
        notes=data.get("notes"),
    )


def targets_from_list(items: list[dict[str, Any]]) -> list[ProfitTarget]:
    return [target_from_dict(item) for item in items]


def position_to_dict(position: Position) -> dict[str, Any]:
    return {
        "quantity": _quantity(position.quantity),
        "average_price": _price(position.average_price),
        "invested": _money(position.invested),
    }


def position_from_dict(data: dict[str, Any]) -> Position:
    return Position.open(data["quantity"], data["average_price"])


def holding_from_dict(data: dict[str, Any]) -> Holding:
    current_price = data.get("current_price")
    return Holding(
        token_symbol=data["token_symbol"],
        position=position_from_dict(data),
        current_price=Price(current_price) if current_price is not None else None,
    )


def strategy_to_dict(strategy: Strategy) -> dict[str, Any]:
    return {
        "id": str(strategy.id),
        "name": strategy.name,
        "token_symbol": strategy.token_symbol,
        "status": strategy.status.value,
        "position": position_to_dict(strategy.position),
        "targets": [target_to_dict(target) for target in strategy.targets],
        "created_at": _datetime(strategy.created_at),
        "updated_at": _datetime(strategy.updated_at),
        "completed_at": _datetime(strategy.completed_at),
        "notes": strategy.notes,
        "tags": strategy.tags,
    }


def strategy_from_dict(data: dict[str, Any]) -> Strategy:
    """
    Map a dictionary produced by strategy_to_dict back to a Strategy.

    Targets are re-validated on construction.
    """
    kwargs: dict[str, Any] = {
        "position": position_from_dict(data["position"]),
        "name": data.get("name", ""),
        "token_symbol": data["token_symbol"],
        "targets": targets_from_list(data.get("targets") or []),
        "status": StrategyStatus(data.get("status", StrategyStatus.DRAFT.value)),
        "notes": data.get("notes"),
        "tags": data.get("tags") or {},
    }
    if data.get("id"):
        kwargs["id"] = UUID(data["id"])
    if data.get("created_at"):
        kwargs["created_at"] = datetime.fromisoformat(data["created_at"])
    if data.get("updated_at"):
        kwargs["updated_at"] = datetime.fromisoformat(data["updated_at"])
    if data.get("completed_at"):
        kwargs["completed_at"] = datetime.fromisoformat(data["completed_at"])
    return Strategy(**kwargs)


# --- Results ---


def event_to_dict(event: LiquidationEvent) -> dict[str, Any]:
    return {
        "order": event.order,
        "target_type": event.target.target_type.value,
        "trigger_price": _price(event.trigger_price),
        "quantity_sold": _quantity(event.quantity_sold),
        "quantity_remaining": _quantity(event.quantity_remaining),
        "proceeds": _money(event.proceeds),
        "realized_profit": _money(event.realized_profit),
        "unreachable": event.unreachable,
        "warnings": [warning.value for warning in event.warnings],
    }


def schedule_to_dict(schedule: LiquidationSchedule) -> dict[str, Any]:
    return {
        "position": position_to_dict(schedule.position),
        "events": [event_to_dict(event) for event in schedule],
        "total_quantity_sold": _quantity(schedule.total_quantity_sold),
        "remaining_quantity": _quantity(schedule.remaining_quantity),
        "total_proceeds": _money(schedule.total_proceeds),
        "total_realized_profit": _money(schedule.total_realized_profit),
    }


def forecast_to_dict(forecast: Forecast) -> dict[str, Any]:
    return {
        "current_price": _price(forecast.current_price),
        "is_price_known": forecast.is_price_known,
        "realized_profit": _money(forecast.realized_profit),
        "realized_proceeds": _money(forecast.realized_proceeds),
        "remaining_quantity": _quantity(forecast.remaining_quantity),
        "unrealized_value": _money(forecast.unrealized_value),
        "unrealized_profit": _money(forecast.unrealized_profit),
        "total_projected_profit": _money(forecast.total_projected_profit),
        "total_projected_proceeds": _money(forecast.total_projected_proceeds),
        "projected_profit": _money(forecast.projected_profit),
        "executed_orders": list(forecast.executed_orders),
        "pending_orders": list(forecast.pending_orders),
    }


def summary_to_dict(summary: StrategySummary) -> dict[str, Any]:
    return {
        "total_steps": summary.total_steps,
        "reachable_steps": summary.reachable_steps,
        "unreachable_steps": summary.unreachable_steps,
        "triggered_steps": summary.triggered_steps,
        "pending_steps": summary.pending_steps,
        "total_quantity_to_sell": _quantity(summary.total_quantity_to_sell),
        "remaining_quantity": _quantity(summary.remaining_quantity),
        "estimated_total_profit": _money(summary.estimated_total_profit),
    }


def portfolio_forecast_to_dict(portfolio: PortfolioForecast) -> dict[str, Any]:
    return {
        "total_invested": _money(portfolio.total_invested),
        "realized_profit": _money(portfolio.realized_profit),
        "realized_proceeds": _money(portfolio.realized_proceeds),
        "unrealized_value": _money(portfolio.unrealized_value),
        "total_projected_profit": _money(portfolio.total_projected_profit),
        "total_projected_proceeds": _money(portfolio.total_projected_proceeds),
        "total_profit_loss": _money(portfolio.total_profit_loss),
        "total_profit_loss_percentage": _decimal(portfolio.total_profit_loss_percentage),
        "excluded_symbols": list(portfolio.excluded_symbols),
        "is_partial": portfolio.is_partial,
        "holding_count": portfolio.holding_count,
    }


def signal_to_dict(signal: TargetSignal) -> dict[str, Any]:
    return {
        "order": signal.order,
        "signal_type": signal.signal_type.value,
        "trigger_price": _price(signal.trigger_price),
        "current_price": _price(signal.current_price),
        "distance": _decimal(signal.distance),
    }


def template_to_dict(template: ProfitTakingTemplate) -> dict[str, Any]:
    return {
        "key": template.key,
        "name": template.name,
        "description": template.description,
        "kind": template.kind.value,
        "is_default": template.is_default,
        "levels": [
            {
                "sell_percentage": _decimal(level.sell_percentage),
                "gain_percentage": _decimal(level.gain_percentage),
                "description": level.description,
            }
            for level in template.levels
        ],
        "targets": [target_to_dict(target) for target in template.build_targets()],
    }
