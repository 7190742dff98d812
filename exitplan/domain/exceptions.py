"""
Domain-level exceptions for the strategy engine.

This module defines exceptions that are specific to domain logic and business rules.
These exceptions are raised within domain entities and services.
"""

from decimal import Decimal
from typing import Any
from uuid import UUID


class DomainException(Exception):
    """Base exception for all domain-level errors."""

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        super().__init__(message)
        self.details = details or {}


# ============================================================================
# Target Validation Exceptions
# ============================================================================


class TargetValidationException(DomainException):
    """
    Base exception for structurally invalid profit targets.

    Always recoverable: surfaced to the editing form, never fatal.
    Subclasses carry a stable ``code`` that callers can map to field errors.
    """

    code = "INVALID_TARGET"

    def __init__(
        self,
        message: str,
        order: int | None = None,
        field: str | None = None,
        value: Any = None,
    ) -> None:
        details: dict[str, Any] = {"code": self.code}
        if order is not None:
            details["order"] = order
        if field is not None:
            details["field"] = field
        if value is not None:
            details["value"] = str(value)
        super().__init__(message, details)
        self.order = order
        self.field = field
        self.value = value


class DuplicateOrderException(TargetValidationException):
    """Raised when two targets share the same evaluation order."""

    code = "DUPLICATE_ORDER"

    def __init__(self, order: int, count: int = 2) -> None:
        super().__init__(
            f"Order {order} is used by {count} targets; target orders must be unique",
            order=order,
            field="order",
            value=order,
        )
        self.count = count


class InvalidSellPercentageException(TargetValidationException):
    """Raised when a sell percentage lies outside (0, 100]."""

    code = "INVALID_SELL_PERCENTAGE"

    def __init__(self, order: int, sell_percentage: Decimal) -> None:
        super().__init__(
            f"Target {order}: sell percentage must be in (0, 100], got {sell_percentage}",
            order=order,
            field="sell_percentage",
            value=sell_percentage,
        )


class InvalidTargetValueException(TargetValidationException):
    """Raised when a target value is zero or negative."""

    code = "INVALID_TARGET_VALUE"

    def __init__(self, order: int, target_value: Decimal, target_type: str) -> None:
        super().__init__(
            f"Target {order}: {target_type} target value must be positive, got {target_value}",
            order=order,
            field="target_value",
            value=target_value,
        )
        self.target_type = target_type


# ============================================================================
# Strategy Lifecycle Exceptions
# ============================================================================


class StrategyStateException(DomainException):
    """Base exception for strategy lifecycle violations."""

    def __init__(
        self,
        message: str,
        strategy_id: UUID | str | None = None,
        status: str | None = None,
        **kwargs: Any,
    ) -> None:
        details: dict[str, Any] = {"strategy_id": str(strategy_id)} if strategy_id else {}
        if status:
            details["status"] = status
        details.update(kwargs)
        super().__init__(message, details)
        self.strategy_id = strategy_id
        self.status = status


class InvalidStatusTransitionException(StrategyStateException):
    """Raised when a status change is not allowed by the lifecycle."""

    def __init__(
        self, current: str, target: str, strategy_id: UUID | str | None = None
    ) -> None:
        super().__init__(
            f"Cannot transition strategy from {current} to {target}",
            strategy_id=strategy_id,
            status=current,
            target_status=target,
        )
        self.current = current
        self.target = target


class StrategyFrozenException(StrategyStateException):
    """Raised when targets are edited on a strategy that already left draft."""

    def __init__(self, status: str, strategy_id: UUID | str | None = None) -> None:
        super().__init__(
            f"Targets can only be edited in draft; strategy is {status}",
            strategy_id=strategy_id,
            status=status,
        )


class StrategyActivationException(StrategyStateException):
    """Raised when a draft strategy does not meet activation requirements."""

    pass
