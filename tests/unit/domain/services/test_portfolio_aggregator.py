"""
Unit tests for the PortfolioAggregator domain service.

Focuses on null propagation: realized figures tolerate unknown prices,
unrealized value and total profit/loss do not.
"""

# Standard library imports
from decimal import Decimal

# Local imports
from exitplan.domain.entities import Holding, Position, ProfitTarget
from exitplan.domain.services import (
    ForecastEvaluator,
    LiquidationPlanner,
    PortfolioAggregator,
    TargetValidator,
)
from exitplan.domain.value_objects import Money, Price, Quantity


def _entry(symbol, quantity, average_price, price, targets):
    holding = Holding(symbol, Position.open(quantity, average_price), price)
    schedule = LiquidationPlanner().plan(holding.position, TargetValidator().validate(targets))
    return holding, ForecastEvaluator().evaluate(schedule, price)


class TestPortfolioAggregator:
    """Test portfolio aggregation."""

    def setup_method(self):
        """Set up test fixtures."""
        self.aggregator = PortfolioAggregator()
        self.eth_targets = [
            ProfitTarget.create("percentage", 1, "20", "50"),
            ProfitTarget.create("percentage", 2, "50", "50"),
            ProfitTarget.create("price", 3, "200", "100"),
        ]
        self.sol_targets = [ProfitTarget.create("price", 1, "60", "100")]

    def test_all_prices_known(self):
        """Test every total is computed when every price is known."""
        result = self.aggregator.aggregate(
            [
                _entry("ETH", "100", "100", Price(130), self.eth_targets),
                _entry("SOL", "10", "50", Price(55), self.sol_targets),
            ]
        )
        assert result.holding_count == 2
        assert result.total_invested == Money(10500)
        assert result.realized_profit == Money(1000)
        assert result.realized_proceeds == Money(6000)
        assert result.unrealized_value == Money(7050)
        assert result.total_projected_profit == Money(4850)
        assert result.total_projected_proceeds == Money(15350)
        assert result.total_profit_loss == Money(2550)
        assert result.total_profit_loss_percentage == Decimal(2550) / Decimal(10500) * 100
        assert not result.is_partial
        assert result.excluded_symbols == ()

    def test_one_price_unknown(self):
        """Test a missing price nulls unrealized value and total profit/loss."""
        result = self.aggregator.aggregate(
            [
                _entry("ETH", "100", "100", Price(130), self.eth_targets),
                _entry("SOL", "10", "50", None, self.sol_targets),
            ]
        )
        assert result.realized_profit == Money(1000)
        assert result.realized_proceeds == Money(6000)
        assert result.unrealized_value is None
        assert result.total_profit_loss is None
        assert result.total_profit_loss_percentage is None
        assert result.total_invested == Money(10500)
        assert result.total_projected_profit == Money(4850)
        assert result.is_partial
        assert result.excluded_symbols == ("SOL",)
        assert result.priced_count == 1

    def test_no_price_known(self):
        """Test realized figures are None only when no price is known."""
        result = self.aggregator.aggregate(
            [
                _entry("ETH", "100", "100", None, self.eth_targets),
                _entry("SOL", "10", "50", None, self.sol_targets),
            ]
        )
        assert result.realized_profit is None
        assert result.realized_proceeds is None
        assert result.excluded_symbols == ("ETH", "SOL")

    def test_zero_invested_has_no_percentage(self):
        """Test the percentage is withheld when nothing was invested."""
        holding = Holding("DUST", Position(Quantity(0), Price(1)), Price(2))
        schedule = LiquidationPlanner().plan(holding.position, TargetValidator().validate([]))
        forecast = ForecastEvaluator().evaluate(schedule, holding.current_price)
        result = self.aggregator.aggregate([(holding, forecast)])
        assert result.total_invested == Money(0)
        assert result.total_profit_loss == Money(0)
        assert result.total_profit_loss_percentage is None

    def test_empty_portfolio(self):
        """Test aggregating nothing."""
        result = self.aggregator.aggregate([])
        assert result.holding_count == 0
        assert result.total_invested == Money(0)
        assert result.realized_profit is None
        assert result.total_profit_loss_percentage is None

    def test_profit_loss_percentage_helper(self):
        """Test the percentage helper guards."""
        assert PortfolioAggregator.profit_loss_percentage(Money(50), Money(200)) == Decimal(25)
        assert PortfolioAggregator.profit_loss_percentage(None, Money(200)) is None
        assert PortfolioAggregator.profit_loss_percentage(Money(50), Money(0)) is None
