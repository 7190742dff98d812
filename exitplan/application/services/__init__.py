"""Application services."""

from .strategy_service import PortfolioReport, StrategyPreview, StrategyService

__all__ = ["PortfolioReport", "StrategyPreview", "StrategyService"]
