"""Global pytest configuration and fixtures."""

# Standard library imports
from decimal import Decimal
from pathlib import Path

# Load test environment variables
from dotenv import load_dotenv

test_env_path = Path(__file__).parent.parent / ".env.test"
if test_env_path.exists():
    load_dotenv(test_env_path, override=True)

# Third-party imports
import pytest

# Local imports
from exitplan.application.config import reset_config
from exitplan.domain.entities import Position, ProfitTarget, Strategy
from exitplan.domain.services import (
    ForecastEvaluator,
    LiquidationPlanner,
    TargetValidator,
)
from exitplan.domain.value_objects import Price


@pytest.fixture(autouse=True)
def _fresh_config():
    """Every test starts without a cached configuration."""
    reset_config()
    yield
    reset_config()


@pytest.fixture
def position() -> Position:
    """100 units bought at an average price of 100."""
    return Position.open(Decimal("100"), Decimal("100"))


@pytest.fixture
def cascading_targets() -> list[ProfitTarget]:
    """Three targets selling 50%, 50% and 100% of what remains."""
    return [
        ProfitTarget.create("percentage", 1, "20", "50"),
        ProfitTarget.create("percentage", 2, "50", "50"),
        ProfitTarget.create("price", 3, "200", "100"),
    ]


@pytest.fixture
def validator() -> TargetValidator:
    return TargetValidator()


@pytest.fixture
def planner() -> LiquidationPlanner:
    return LiquidationPlanner()


@pytest.fixture
def evaluator() -> ForecastEvaluator:
    return ForecastEvaluator()


@pytest.fixture
def cascading_schedule(planner, validator, position, cascading_targets):
    """Schedule for the cascading targets on the default position."""
    return planner.plan(position, validator.validate(cascading_targets))


@pytest.fixture
def draft_strategy(position, cascading_targets) -> Strategy:
    return Strategy(position=position, token_symbol="eth", targets=cascading_targets)


@pytest.fixture
def price():
    """Build a Price from any numeric input."""

    def _price(value) -> Price:
        return Price(value)

    return _price
