"""Shared numeric constants for the strategy engine."""

from decimal import Decimal

# Quantities are truncated to this many decimal places unless configured otherwise
DEFAULT_DECIMAL_PLACES = 8

HUNDRED = Decimal("100")
ZERO = Decimal("0")

CURRENCY_CODE_LENGTH = 3
DEFAULT_CURRENCY = "USD"

# Default "before target" alert distance, in percent of the trigger price
DEFAULT_PROXIMITY_PCT = Decimal("5")


def quantity_epsilon(decimal_places: int = DEFAULT_DECIMAL_PLACES) -> Decimal:
    """Smallest representable quantity step for the given precision."""
    return Decimal(1).scaleb(-decimal_places)
