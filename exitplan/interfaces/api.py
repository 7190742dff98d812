"""
Strategy preview API endpoints.

This module provides stateless FastAPI endpoints for validating profit
targets, previewing liquidation schedules and forecasts, aggregating a
portfolio and moving a strategy through its lifecycle. Nothing is stored;
every request carries the data it operates on.
"""

import logging
from decimal import Decimal
from typing import Any

from fastapi import APIRouter, Depends, FastAPI, HTTPException, Request, status
from fastapi.responses import JSONResponse
from pydantic import BaseModel, ConfigDict, Field

from exitplan import __version__
from exitplan.application.config import get_config
from exitplan.application.services import StrategyPreview, StrategyService
from exitplan.domain.entities import Holding, OrderedTargets, Position, ProfitTarget
from exitplan.domain.exceptions import StrategyStateException, TargetValidationException
from exitplan.domain.value_objects import Price
from exitplan.infrastructure.logging import correlation_context
from exitplan.infrastructure.serialization import (
    forecast_to_dict,
    portfolio_forecast_to_dict,
    schedule_to_dict,
    signal_to_dict,
    strategy_from_dict,
    strategy_to_dict,
    summary_to_dict,
    target_to_dict,
    template_to_dict,
)

logger = logging.getLogger(__name__)

# Create router
router = APIRouter(prefix="/strategies", tags=["Strategies"])

HTTP_UNPROCESSABLE = 422


# Request models
class TargetModel(BaseModel):
    """Profit target as submitted by the editing form."""

    model_config = ConfigDict(str_strip_whitespace=True)

    order: int
    target_type: str
    target_value: Decimal
    sell_percentage: Decimal
    notes: str | None = None


class PositionModel(BaseModel):
    """Held quantity and average price."""

    quantity: Decimal = Field(..., gt=0)
    average_price: Decimal = Field(..., gt=0)


class PreviewRequest(BaseModel):
    """Preview request for one position."""

    token_symbol: str = ""
    position: PositionModel
    targets: list[TargetModel] = Field(default_factory=list)
    template: str | None = None
    current_price: Decimal | None = Field(None, gt=0)


class ValidateRequest(BaseModel):
    """Target validation request."""

    targets: list[TargetModel]


class HoldingModel(BaseModel):
    """Holding with its exit targets."""

    model_config = ConfigDict(str_strip_whitespace=True)

    token_symbol: str = Field(..., min_length=1)
    quantity: Decimal = Field(..., gt=0)
    average_price: Decimal = Field(..., gt=0)
    current_price: Decimal | None = Field(None, gt=0)
    targets: list[TargetModel] = Field(default_factory=list)


class PortfolioRequest(BaseModel):
    """Portfolio forecast request."""

    holdings: list[HoldingModel]


class TransitionRequest(BaseModel):
    """Lifecycle action applied to a serialized strategy."""

    strategy: dict[str, Any]
    action: str = Field(..., pattern="^(activate|pause|resume|complete)$")
    current_price: Decimal | None = Field(None, gt=0)


# Dependency injection functions


def get_strategy_service() -> StrategyService:
    """Get strategy service instance."""
    return StrategyService(get_config().engine)


def _unprocessable(message: str) -> HTTPException:
    return HTTPException(
        status_code=HTTP_UNPROCESSABLE,
        detail={"code": "INVALID_REQUEST", "message": message},
    )


def _parse_targets(models: list[TargetModel]) -> list[ProfitTarget]:
    try:
        return [
            ProfitTarget.create(m.target_type, m.order, m.target_value, m.sell_percentage, m.notes)
            for m in models
        ]
    except ValueError as e:
        raise _unprocessable(str(e))


def _template_not_found(key: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_404_NOT_FOUND,
        detail={"code": "TEMPLATE_NOT_FOUND", "message": f"Unknown template: {key}"},
    )


def _template_targets(service: StrategyService, key: str) -> OrderedTargets:
    try:
        return service.targets_from_template(key)
    except KeyError:
        raise _template_not_found(key)


def _price(value: Decimal | None) -> Price | None:
    return Price(value) if value is not None else None


def _preview_to_dict(preview: StrategyPreview) -> dict[str, Any]:
    return {
        "schedule": schedule_to_dict(preview.schedule),
        "forecast": forecast_to_dict(preview.forecast),
        "summary": summary_to_dict(preview.summary),
    }


@router.get("/templates")
async def list_templates(
    service: StrategyService = Depends(get_strategy_service),
) -> list[dict[str, Any]]:
    """List the preset profit-taking templates with their expanded targets."""
    return [template_to_dict(template) for template in service.templates.all()]


@router.get("/templates/{key}")
async def get_template(
    key: str,
    service: StrategyService = Depends(get_strategy_service),
) -> dict[str, Any]:
    """Get one preset profit-taking template."""
    try:
        template = service.templates.get(key)
    except KeyError:
        raise _template_not_found(key)
    return template_to_dict(template)


@router.post("/validate")
async def validate_targets(
    request: ValidateRequest,
    service: StrategyService = Depends(get_strategy_service),
) -> dict[str, Any]:
    """
    Validate profit targets.

    Returns the targets in evaluation order when valid, otherwise every
    violation with its code so the form can flag each field.
    """
    targets = _parse_targets(request.targets)
    violations = service.validator.collect_violations(targets)
    if violations:
        return {
            "valid": False,
            "violations": [
                {"code": v.code, "message": str(v), **v.details} for v in violations
            ],
        }
    ordered = service.validate_targets(targets)
    return {"valid": True, "targets": [target_to_dict(t) for t in ordered]}


@router.post("/preview")
async def preview_strategy(
    request: PreviewRequest,
    service: StrategyService = Depends(get_strategy_service),
) -> dict[str, Any]:
    """
    Preview the liquidation schedule and forecast for a position.

    The current price is optional; without it every market-dependent figure
    is returned as null.
    """
    position = Position.open(request.position.quantity, request.position.average_price)
    if request.template is not None:
        if request.targets:
            raise _unprocessable("Send either targets or a template, not both")
        targets = _template_targets(service, request.template)
    else:
        targets = _parse_targets(request.targets)
    preview = service.preview(
        position,
        targets,
        _price(request.current_price),
        request.token_symbol,
    )
    return _preview_to_dict(preview)


@router.post("/portfolio")
async def forecast_portfolio(
    request: PortfolioRequest,
    service: StrategyService = Depends(get_strategy_service),
) -> dict[str, Any]:
    """Forecast every holding and aggregate the portfolio totals."""
    try:
        holdings = [
            Holding(
                token_symbol=h.token_symbol,
                position=Position.open(h.quantity, h.average_price),
                current_price=_price(h.current_price),
            )
            for h in request.holdings
        ]
    except ValueError as e:
        raise _unprocessable(str(e))
    entries = [(holding, _parse_targets(h.targets)) for holding, h in zip(holdings, request.holdings)]
    report = service.forecast_portfolio(entries)
    return {
        "portfolio": portfolio_forecast_to_dict(report.portfolio),
        "holdings": [
            {"token_symbol": holding.token_symbol, **_preview_to_dict(preview)}
            for holding, preview in report.holdings
        ],
    }


@router.post("/transition")
async def transition_strategy(
    request: TransitionRequest,
    service: StrategyService = Depends(get_strategy_service),
) -> dict[str, Any]:
    """
    Apply a lifecycle action to a strategy and return it.

    Active strategies also report reached and approaching targets at the
    given price.
    """
    try:
        strategy = strategy_from_dict(request.strategy)
    except (KeyError, TypeError, ValueError) as e:
        raise _unprocessable(f"Invalid strategy: {e}")

    getattr(service, request.action)(strategy)
    current_price = _price(request.current_price)
    signals = service.scan_targets(strategy, current_price)
    return {
        "strategy": strategy_to_dict(strategy),
        "signals": [signal_to_dict(signal) for signal in signals],
    }


# Exception handlers


async def target_validation_handler(request: Request, exc: TargetValidationException) -> JSONResponse:
    return JSONResponse(
        status_code=HTTP_UNPROCESSABLE,
        content={"code": exc.code, "message": str(exc), "details": exc.details},
    )


async def strategy_state_handler(request: Request, exc: StrategyStateException) -> JSONResponse:
    logger.info("Rejected lifecycle request: %s", exc)
    return JSONResponse(
        status_code=status.HTTP_409_CONFLICT,
        content={"code": type(exc).__name__, "message": str(exc), "details": exc.details},
    )


def create_app() -> FastAPI:
    """Create the FastAPI application serving the strategy endpoints."""
    app = FastAPI(
        title="Exit Plan Strategy Engine",
        description="Profit-target liquidation planning and forecasting",
        version=__version__,
    )

    @app.middleware("http")
    async def correlation_middleware(request: Request, call_next: Any) -> Any:
        with correlation_context(request.headers.get("X-Request-ID")) as correlation_id:
            response = await call_next(request)
            response.headers["X-Request-ID"] = correlation_id
            return response

    app.add_exception_handler(TargetValidationException, target_validation_handler)
    app.add_exception_handler(StrategyStateException, strategy_state_handler)
    app.include_router(router)
    return app
