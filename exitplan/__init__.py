"""Profit-target strategy engine: exit plans, liquidation schedules and forecasts."""

__version__ = "0.1.0"
