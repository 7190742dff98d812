"""
Holding Entity - A position in one token together with its latest market price
"""

from __future__ import annotations

# Standard library imports
from dataclasses import dataclass

from ..value_objects import Price
from .position import Position


@dataclass(frozen=True)
class Holding:
    """
    Holding supplied by the portfolio collaborator.

    ``current_price`` is None whenever the price feed had no quote; the engine
    propagates that as "unknown" rather than substituting a value.
    """

    token_symbol: str
    position: Position
    current_price: Price | None = None

    def __post_init__(self) -> None:
        symbol = (self.token_symbol or "").strip().upper()
        if not symbol:
            raise ValueError("Holding token symbol cannot be empty")
        object.__setattr__(self, "token_symbol", symbol)

    @property
    def has_price(self) -> bool:
        return self.current_price is not None
