"""
Strategy State Machine - Lifecycle rules for strategies

The full transition table lives here; the Strategy entity delegates to it
instead of checking statuses itself.

    DRAFT -> ACTIVE
    ACTIVE -> PAUSED | COMPLETED
    PAUSED -> ACTIVE | COMPLETED
    COMPLETED is terminal
"""

from __future__ import annotations

# Standard library imports
from typing import ClassVar
from uuid import UUID

from ..constants import DEFAULT_DECIMAL_PLACES
from ..entities.strategy import StrategyStatus
from ..exceptions import InvalidStatusTransitionException
from ..value_objects import Quantity


class StrategyStateMachine:
    """Domain service holding the strategy lifecycle transition table."""

    TRANSITIONS: ClassVar[dict[StrategyStatus, frozenset[StrategyStatus]]] = {
        StrategyStatus.DRAFT: frozenset({StrategyStatus.ACTIVE}),
        StrategyStatus.ACTIVE: frozenset({StrategyStatus.PAUSED, StrategyStatus.COMPLETED}),
        StrategyStatus.PAUSED: frozenset({StrategyStatus.ACTIVE, StrategyStatus.COMPLETED}),
        StrategyStatus.COMPLETED: frozenset(),
    }

    @classmethod
    def allowed_transitions(cls, current: StrategyStatus) -> frozenset[StrategyStatus]:
        return cls.TRANSITIONS[current]

    @classmethod
    def can_transition(cls, current: StrategyStatus, target: StrategyStatus) -> bool:
        return target in cls.TRANSITIONS[current]

    @classmethod
    def validate_transition(
        cls,
        current: StrategyStatus,
        target: StrategyStatus,
        strategy_id: UUID | str | None = None,
    ) -> None:
        """Check a status change against the transition table.

        Raises:
            InvalidStatusTransitionException: If the move is not allowed
        """
        if not cls.can_transition(current, target):
            raise InvalidStatusTransitionException(
                current.value, target.value, strategy_id=strategy_id
            )

    @staticmethod
    def is_live(status: StrategyStatus) -> bool:
        """Only active strategies feed alerting."""
        return status == StrategyStatus.ACTIVE

    @staticmethod
    def is_editable(status: StrategyStatus) -> bool:
        return status == StrategyStatus.DRAFT

    @classmethod
    def should_auto_complete(
        cls,
        status: StrategyStatus,
        remaining_quantity: Quantity | None,
        decimal_places: int = DEFAULT_DECIMAL_PLACES,
    ) -> bool:
        """True when an active or paused strategy has nothing left to sell.

        An unknown remaining quantity (no market price) never completes a
        strategy.
        """
        if remaining_quantity is None:
            return False
        if not cls.can_transition(status, StrategyStatus.COMPLETED):
            return False
        return remaining_quantity.is_zero(decimal_places)
