"""
Unit tests for Money value object.
"""

# Standard library imports
from decimal import Decimal

# Third-party imports
import pytest

# Local imports
from exitplan.domain.value_objects import Money


class TestMoneyCreation:
    """Test Money creation."""

    def test_default_currency(self):
        """Test USD is the default currency."""
        money = Money("10")
        assert money.amount == Decimal("10")
        assert money.currency == "USD"

    def test_negative_amount_allowed(self):
        """Test losses can be represented."""
        assert Money("-5").is_negative()

    def test_invalid_currency_rejected(self):
        """Test currency codes must have three letters."""
        with pytest.raises(ValueError, match="Invalid currency code"):
            Money(1, "US")

    def test_zero(self):
        """Test the zero factory."""
        assert Money.zero().is_zero()


class TestMoneyArithmetic:
    """Test Money operators."""

    def test_add_and_subtract(self):
        """Test adding and subtracting money."""
        assert Money(10) + Money("2.5") == Money("12.5")
        assert Money(10) - Money(15) == Money(-5)

    def test_currency_mismatch_rejected(self):
        """Test mixing currencies raises."""
        with pytest.raises(ValueError, match="Cannot add"):
            Money(1, "EUR") + Money(1)

    def test_divide_by_zero_rejected(self):
        """Test dividing by zero raises."""
        with pytest.raises(ValueError, match="divide by zero"):
            Money(10) / 0

    def test_negate(self):
        """Test unary minus."""
        assert -Money(3) == Money(-3)

    def test_equality_includes_currency(self):
        """Test equal amounts in different currencies differ."""
        assert Money(1, "EUR") != Money(1, "USD")


class TestMoneyFormatting:
    """Test Money display helpers."""

    def test_round_half_up(self):
        """Test rounding uses ROUND_HALF_UP."""
        assert Money("2.345").round(2).amount == Decimal("2.35")

    def test_format_usd(self):
        """Test USD formatting with thousands separator."""
        assert Money("1234.567").format() == "$1,234.57"

    def test_format_other_currency(self):
        """Test non-USD currencies are suffixed."""
        assert Money("10", "EUR").format() == "10.00 EUR"

    def test_format_without_currency(self):
        """Test formatting without the currency symbol."""
        assert Money("5").format(include_currency=False) == "5.00"
