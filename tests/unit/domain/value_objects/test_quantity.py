"""
Unit tests for Quantity value object.

Tests creation, validation, truncation, zero detection, arithmetic and
immutability.
"""

# Standard library imports
from decimal import Decimal

# Third-party imports
import pytest

# Local imports
from exitplan.domain.value_objects import Money, Price, Quantity


class TestQuantityCreation:
    """Test Quantity creation and initialization."""

    def test_create_quantity_with_string(self):
        """Test creating quantity with string value."""
        quantity = Quantity("100.50")
        assert quantity.value == Decimal("100.50")

    def test_create_quantity_with_float(self):
        """Test floats go through str so no binary noise is kept."""
        quantity = Quantity(0.1)
        assert quantity.value == Decimal("0.1")

    def test_create_zero_quantity(self):
        """Test zero is a valid quantity (exhausted position)."""
        assert Quantity(0).value == Decimal("0")

    def test_negative_quantity_rejected(self):
        """Test negative quantities are rejected."""
        with pytest.raises(ValueError, match="cannot be negative"):
            Quantity("-1")

    @pytest.mark.parametrize("value", ["abc", "NaN", float("inf"), True])
    def test_invalid_values_rejected(self, value):
        """Test non-numeric and non-finite values are rejected."""
        with pytest.raises(ValueError):
            Quantity(value)


class TestQuantityPrecision:
    """Test truncation and zero detection."""

    def test_truncate_rounds_down(self):
        """Test truncation never rounds up."""
        assert Quantity("1.999999999").truncate(8).value == Decimal("1.99999999")

    def test_truncate_custom_precision(self):
        """Test truncation at two decimal places."""
        assert Quantity("33.339").truncate(2).value == Decimal("33.33")

    def test_below_epsilon_is_zero(self):
        """Test a dust amount below the smallest step counts as zero."""
        assert Quantity("0.000000009").is_zero()
        assert not Quantity("0.00000001").is_zero()

    def test_is_zero_respects_precision(self):
        """Test zero detection with a coarser precision."""
        assert Quantity("0.009").is_zero(2)
        assert not Quantity("0.01").is_zero(2)


class TestQuantityArithmetic:
    """Test arithmetic operators."""

    def test_add_and_subtract(self):
        """Test adding and subtracting quantities."""
        assert Quantity(10) + Quantity(5) == Quantity(15)
        assert Quantity(10) - Quantity(4) == Quantity(6)

    def test_subtract_below_zero_rejected(self):
        """Test a subtraction that would go negative raises."""
        with pytest.raises(ValueError):
            Quantity(1) - Quantity(2)

    def test_scalar_multiplication(self):
        """Test multiplying by a scalar on either side."""
        assert Quantity(10) * 2 == Quantity(20)
        assert 2 * Quantity(10) == Quantity(20)

    def test_multiply_by_price_gives_money(self):
        """Test quantity times price is money."""
        result = Quantity(10) * Price("2.5")
        assert isinstance(result, Money)
        assert result == Money("25")

    def test_ratio_of_quantities(self):
        """Test dividing quantities returns a plain Decimal."""
        assert Quantity(10) / Quantity(4) == Decimal("2.5")

    def test_mixed_types_rejected(self):
        """Test adding a price to a quantity raises TypeError."""
        with pytest.raises(TypeError):
            Quantity(1) + Price(1)

    def test_comparison(self):
        """Test ordering comparisons."""
        assert Quantity(1) < Quantity(2)
        assert Quantity(2) >= Quantity("2.0")
        assert Quantity(1) == Quantity("1.00")


class TestQuantityImmutability:
    """Test Quantity cannot be modified."""

    def test_cannot_modify_value(self):
        """Test assigning to an attribute raises."""
        quantity = Quantity(1)
        with pytest.raises(AttributeError):
            quantity._value = Decimal("2")

    def test_hashable(self):
        """Test equal quantities hash the same."""
        assert len({Quantity(1), Quantity("1.0")}) == 1

    def test_repr_and_str(self):
        """Test string representations."""
        assert repr(Quantity("1.5")) == "Quantity(1.5)"
        assert str(Quantity("1.5")) == "1.5"
