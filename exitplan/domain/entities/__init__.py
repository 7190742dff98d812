"""Domain entities with business logic."""

from .holding import Holding
from .position import Position
from .profit_taking_template import (
    PROFIT_TAKING_TEMPLATES,
    ProfitTakingTemplate,
    TemplateCatalog,
    TemplateKind,
    TemplateLevel,
)
from .profit_target import OrderedTargets, PercentageTarget, PriceTarget, ProfitTarget, TargetType
from .strategy import Strategy, StrategyStatus

__all__ = [
    "PROFIT_TAKING_TEMPLATES",
    "Holding",
    "OrderedTargets",
    "PercentageTarget",
    "Position",
    "PriceTarget",
    "ProfitTakingTemplate",
    "ProfitTarget",
    "Strategy",
    "StrategyStatus",
    "TargetType",
    "TemplateCatalog",
    "TemplateKind",
    "TemplateLevel",
]
