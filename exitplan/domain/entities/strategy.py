"""
Strategy Entity - Aggregate root tying a position to its exit plan
"""

from __future__ import annotations

# Standard library imports
from collections.abc import Iterable
from dataclasses import dataclass, field
from datetime import UTC, datetime
from enum import Enum
from typing import TYPE_CHECKING, Any
from uuid import UUID, uuid4

from ..constants import DEFAULT_DECIMAL_PLACES
from ..exceptions import StrategyActivationException, StrategyFrozenException
from .position import Position
from .profit_target import OrderedTargets, ProfitTarget

if TYPE_CHECKING:
    from ..services.forecast_evaluator import Forecast


class StrategyStatus(Enum):
    """Strategy lifecycle status"""

    DRAFT = "draft"
    ACTIVE = "active"
    PAUSED = "paused"
    COMPLETED = "completed"


@dataclass
class Strategy:
    """
    Strategy aggregate.

    Targets are editable only while the strategy is a draft; every edit
    re-validates the full target set. Activation freezes the targets and
    makes them live for forecasting and alerting.
    """

    # Required fields (must come first for dataclass)
    position: Position

    # Identity
    id: UUID = field(default_factory=uuid4)
    name: str = ""
    token_symbol: str = ""

    # Exit plan
    targets: OrderedTargets = field(default_factory=OrderedTargets.empty)
    status: StrategyStatus = StrategyStatus.DRAFT

    # Timestamps
    created_at: datetime = field(default_factory=lambda: datetime.now(UTC))
    updated_at: datetime | None = None
    completed_at: datetime | None = None

    # Metadata
    notes: str | None = None
    tags: dict[str, Any] = field(default_factory=dict)

    def __post_init__(self) -> None:
        """Validate strategy after initialization"""
        self._validate()

    def _validate(self) -> None:
        from ..services.target_validator import TargetValidator

        self.token_symbol = (self.token_symbol or "").strip().upper()
        if not self.token_symbol:
            raise ValueError("Strategy token symbol cannot be empty")
        if not self.name:
            self.name = f"{self.token_symbol} exit plan"
        if not isinstance(self.targets, OrderedTargets):
            self.targets = TargetValidator().validate(self.targets)

    # --- Target editing (draft only) ---

    def add_target(self, target: ProfitTarget) -> None:
        """Add a target and re-validate the whole set."""
        self.replace_targets([*self.targets, target])

    def remove_target(self, order: int) -> ProfitTarget:
        """Remove the target with the given order.

        Raises:
            KeyError: If no target has that order
        """
        target = self.targets.find(order)
        if target is None:
            raise KeyError(f"No target with order {order}")
        self.replace_targets(t for t in self.targets if t.order != order)
        return target

    def replace_targets(self, targets: Iterable[ProfitTarget]) -> None:
        """Replace all targets at once."""
        from ..services.target_validator import TargetValidator

        self._ensure_editable()
        self.targets = TargetValidator().validate(list(targets))
        self._touch()

    def _ensure_editable(self) -> None:
        from ..services.strategy_state_machine import StrategyStateMachine

        if not StrategyStateMachine.is_editable(self.status):
            raise StrategyFrozenException(self.status.value, strategy_id=self.id)

    # --- Lifecycle ---

    def activate(self, decimal_places: int = DEFAULT_DECIMAL_PLACES) -> None:
        """Move a draft to active, freezing its targets.

        A position smaller than one step at ``decimal_places`` counts as empty.

        Raises:
            InvalidStatusTransitionException: If the strategy is not a draft
            StrategyActivationException: If there are no targets or no position
            TargetValidationException: If the targets are not valid
        """
        from ..services.target_validator import TargetValidator

        self._transition(StrategyStatus.ACTIVE, apply=False)
        if len(self.targets) == 0:
            raise StrategyActivationException(
                "Cannot activate a strategy without profit targets",
                strategy_id=self.id,
                status=self.status.value,
            )
        if self.position.is_empty(decimal_places):
            raise StrategyActivationException(
                "Cannot activate a strategy on an empty position",
                strategy_id=self.id,
                status=self.status.value,
            )
        self.targets = TargetValidator().validate(list(self.targets))
        self._transition(StrategyStatus.ACTIVE)

    def pause(self) -> None:
        self._transition(StrategyStatus.PAUSED)

    def resume(self) -> None:
        self._transition(StrategyStatus.ACTIVE)

    def complete(self) -> None:
        """Close the strategy manually."""
        self._transition(StrategyStatus.COMPLETED)
        self.completed_at = self.updated_at

    def complete_if_exhausted(
        self, forecast: Forecast, decimal_places: int = DEFAULT_DECIMAL_PLACES
    ) -> bool:
        """Complete automatically once the forecast shows nothing left to sell.

        Returns:
            True if the strategy moved to completed
        """
        from ..services.strategy_state_machine import StrategyStateMachine

        if not StrategyStateMachine.should_auto_complete(
            self.status, forecast.remaining_quantity, decimal_places
        ):
            return False
        self.complete()
        return True

    def _transition(self, target: StrategyStatus, apply: bool = True) -> None:
        from ..services.strategy_state_machine import StrategyStateMachine

        StrategyStateMachine.validate_transition(self.status, target, strategy_id=self.id)
        if apply:
            self.status = target
            self._touch()

    def _touch(self) -> None:
        self.updated_at = datetime.now(UTC)

    # --- Queries ---

    @property
    def is_live(self) -> bool:
        from ..services.strategy_state_machine import StrategyStateMachine

        return StrategyStateMachine.is_live(self.status)

    def is_draft(self) -> bool:
        return self.status == StrategyStatus.DRAFT

    def is_completed(self) -> bool:
        return self.status == StrategyStatus.COMPLETED

    def __str__(self) -> str:
        return (
            f"Strategy({self.name}: {self.token_symbol} {self.position.quantity} @ "
            f"{self.position.average_price}, {len(self.targets)} targets - {self.status.value.upper()})"
        )
