"""
Profit-Taking Templates - Preset exit plans a user can start from

Each template is a named list of levels. A level sells a share of the
remaining position once the price gains a percentage over the average
price, so every template expands to percentage targets.
"""

from __future__ import annotations

# Standard library imports
from dataclasses import dataclass
from decimal import Decimal
from enum import Enum

from .profit_target import PercentageTarget, ProfitTarget


class TemplateKind(Enum):
    """How a template sells"""

    CUSTOM = "custom"
    PERCENTAGE = "percentage"
    HODL = "hodl"


@dataclass(frozen=True)
class TemplateLevel:
    """One level of a template: sell ``sell_percentage`` at +``gain_percentage``."""

    sell_percentage: Decimal
    gain_percentage: Decimal
    description: str = ""

    def __post_init__(self) -> None:
        object.__setattr__(self, "sell_percentage", Decimal(str(self.sell_percentage)))
        object.__setattr__(self, "gain_percentage", Decimal(str(self.gain_percentage)))


@dataclass(frozen=True)
class ProfitTakingTemplate:
    """Named preset of profit-taking levels."""

    key: str
    name: str
    description: str
    kind: TemplateKind
    levels: tuple[TemplateLevel, ...] = ()
    is_default: bool = False

    def build_targets(self) -> list[ProfitTarget]:
        """Expand the levels into percentage targets numbered from 1."""
        return [
            PercentageTarget(
                order=index,
                target_value=level.gain_percentage,
                sell_percentage=level.sell_percentage,
                notes=level.description or None,
            )
            for index, level in enumerate(self.levels, start=1)
        ]

    @property
    def is_empty(self) -> bool:
        return not self.levels


PROFIT_TAKING_TEMPLATES: tuple[ProfitTakingTemplate, ...] = (
    ProfitTakingTemplate(
        key="custom",
        name="Custom",
        description="Configure every profit-taking level by hand",
        kind=TemplateKind.CUSTOM,
        is_default=True,
    ),
    ProfitTakingTemplate(
        key="25-50-75",
        name="Profit taking 25/50/75",
        description="Sell 25% at +50%, 50% at +100%, 75% at +200%",
        kind=TemplateKind.PERCENTAGE,
        levels=(
            TemplateLevel(25, 50, "Sell 25% at +50%"),
            TemplateLevel(50, 100, "Sell 50% at +100%"),
            TemplateLevel(75, 200, "Sell 75% at +200%"),
        ),
    ),
    ProfitTakingTemplate(
        key="10-20-30",
        name="Profit taking 10/20/30",
        description="Sell 10% at +25%, 20% at +50%, 30% at +100%",
        kind=TemplateKind.PERCENTAGE,
        levels=(
            TemplateLevel(10, 25, "Sell 10% at +25%"),
            TemplateLevel(20, 50, "Sell 20% at +50%"),
            TemplateLevel(30, 100, "Sell 30% at +100%"),
        ),
    ),
    ProfitTakingTemplate(
        key="hodl",
        name="HODL",
        description="Never sell, keep every token",
        kind=TemplateKind.HODL,
    ),
)


class TemplateCatalog:
    """Lookup over the preset profit-taking templates."""

    def __init__(self, templates: tuple[ProfitTakingTemplate, ...] = PROFIT_TAKING_TEMPLATES) -> None:
        self._templates = {template.key: template for template in templates}

    def all(self) -> list[ProfitTakingTemplate]:
        return list(self._templates.values())

    def get(self, key: str) -> ProfitTakingTemplate:
        """Get a template by key.

        Raises:
            KeyError: If no template has that key
        """
        normalized = key.strip().lower()
        if normalized not in self._templates:
            raise KeyError(f"Unknown profit-taking template: {key!r}")
        return self._templates[normalized]

    def default(self) -> ProfitTakingTemplate:
        return next(t for t in self._templates.values() if t.is_default)
