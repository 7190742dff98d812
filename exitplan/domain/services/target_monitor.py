"""
Target Monitor - Decides which targets an alerting collaborator should act on

Two kinds of signal are produced for a live strategy at the current price:
REACHED once the price is at or above a target's trigger, and APPROACHING
while the price sits within a proximity distance below it. Delivery of the
alerts (email, push, ...) is left to the caller.
"""

from __future__ import annotations

# Standard library imports
from dataclasses import dataclass
from decimal import Decimal
from enum import Enum

from ..constants import DEFAULT_PROXIMITY_PCT, HUNDRED
from ..entities.strategy import StrategyStatus
from ..value_objects import Price
from ..value_objects.base import to_decimal
from .liquidation_planner import LiquidationEvent, LiquidationSchedule
from .strategy_state_machine import StrategyStateMachine


class ProximityKind(Enum):
    """How a proximity distance is measured"""

    PERCENTAGE = "percentage"
    ABSOLUTE = "absolute"


class SignalType(Enum):
    """Alert signal type"""

    REACHED = "reached"
    APPROACHING = "approaching"


class StepState(Enum):
    """Per-target execution state at a given price"""

    PENDING = "pending"
    TRIGGERED = "triggered"


@dataclass(frozen=True)
class ProximityThreshold:
    """Distance below a trigger price at which a target counts as approaching."""

    value: Decimal
    kind: ProximityKind = ProximityKind.PERCENTAGE

    def __post_init__(self) -> None:
        value = to_decimal(self.value)
        if value <= 0:
            raise ValueError(f"Proximity threshold must be positive: {value}")
        object.__setattr__(self, "value", value)
        object.__setattr__(self, "kind", ProximityKind(self.kind))

    @classmethod
    def default(cls) -> ProximityThreshold:
        return cls(DEFAULT_PROXIMITY_PCT, ProximityKind.PERCENTAGE)

    def distance(self, trigger_price: Price) -> Decimal:
        """Absolute price distance for a trigger."""
        if self.kind == ProximityKind.PERCENTAGE:
            return trigger_price.value * self.value / HUNDRED
        return self.value


@dataclass(frozen=True)
class TargetSignal:
    """One alert-worthy condition for one target."""

    order: int
    signal_type: SignalType
    trigger_price: Price
    current_price: Price

    @property
    def distance(self) -> Decimal:
        """Price distance to the trigger; zero or negative once reached."""
        return self.trigger_price.value - self.current_price.value

    @property
    def distance_percentage(self) -> Decimal:
        return self.distance / self.trigger_price.value * HUNDRED


class TargetMonitor:
    """Domain service scanning a schedule for reached and approaching targets."""

    def __init__(self, proximity: ProximityThreshold | None = None) -> None:
        self.proximity = proximity or ProximityThreshold.default()

    def scan(
        self,
        status: StrategyStatus,
        schedule: LiquidationSchedule,
        current_price: Price | None,
        proximity: ProximityThreshold | None = None,
    ) -> list[TargetSignal]:
        """Signals for every reachable target, in evaluation order.

        Draft, paused and completed strategies never signal, and neither does
        a strategy whose price is unknown.

        Args:
            status: Current strategy status
            schedule: The strategy's liquidation schedule
            current_price: Latest market price, or None
            proximity: Override for the monitor's default threshold

        Returns:
            List of signals, empty when nothing applies
        """
        if current_price is None or not StrategyStateMachine.is_live(status):
            return []

        threshold = proximity or self.proximity
        signals: list[TargetSignal] = []
        for event in schedule.reachable_events:
            signal_type = self._classify(event, current_price, threshold)
            if signal_type is not None:
                signals.append(
                    TargetSignal(
                        order=event.order,
                        signal_type=signal_type,
                        trigger_price=event.trigger_price,
                        current_price=current_price,
                    )
                )
        return signals

    @staticmethod
    def step_states(
        schedule: LiquidationSchedule, current_price: Price | None
    ) -> dict[int, StepState]:
        """Map each target order to triggered or pending.

        Unreachable targets and every target under an unknown price stay pending.
        """
        states: dict[int, StepState] = {}
        for event in schedule:
            triggered = (
                current_price is not None
                and event.is_reachable
                and event.trigger_price <= current_price
            )
            states[event.order] = StepState.TRIGGERED if triggered else StepState.PENDING
        return states

    @staticmethod
    def _classify(
        event: LiquidationEvent, current_price: Price, threshold: ProximityThreshold
    ) -> SignalType | None:
        if event.trigger_price <= current_price:
            return SignalType.REACHED
        if event.trigger_price.value - current_price.value <= threshold.distance(event.trigger_price):
            return SignalType.APPROACHING
        return None
