"""
Domain Layer - Pure Business Logic

This layer contains:
- Entities: Strategy aggregate, Position, profit targets, holdings
- Value Objects: Immutable Money, Price and Quantity
- Services: Validation, planning, forecasting and aggregation logic

No external dependencies allowed in this layer.
"""
