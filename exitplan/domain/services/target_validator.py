"""Target Validator domain service.

Normalizes a raw list of profit targets into the canonical evaluation order
and enforces the structural rules every downstream component relies on:

    - ``order`` values are unique (ties are never broken silently, because the
      order decides how the remaining quantity is consumed)
    - ``sell_percentage`` lies in (0, 100]
    - ``target_value`` is positive for both price and percentage targets

Price feasibility against the current market is deliberately not checked here;
a target far above the market is still a valid target.

Example:
    >>> from exitplan.domain.entities import ProfitTarget
    >>> validator = TargetValidator()
    >>> ordered = validator.validate([
    ...     ProfitTarget.create("price", 2, "300", "100"),
    ...     ProfitTarget.create("percentage", 1, "50", "50"),
    ... ])
    >>> ordered.orders
    (1, 2)
"""

# Standard library imports
from collections import Counter
from collections.abc import Iterable

from ..constants import HUNDRED
from ..entities.profit_target import OrderedTargets, ProfitTarget
from ..exceptions import (
    DuplicateOrderException,
    InvalidSellPercentageException,
    InvalidTargetValueException,
    TargetValidationException,
)


class TargetValidator:
    """Domain service validating and ordering profit targets.

    This service is stateless; validation happens when a draft is edited and
    at the draft to active boundary. Active strategies are not re-validated.
    """

    def validate(self, targets: Iterable[ProfitTarget]) -> OrderedTargets:
        """Validate targets and sort them by order.

        Args:
            targets: Raw profit targets in any order

        Returns:
            OrderedTargets: The targets sorted ascending by ``order``

        Raises:
            DuplicateOrderException: If two targets share an order
            InvalidSellPercentageException: If a sell percentage is outside (0, 100]
            InvalidTargetValueException: If a target value is zero or negative
        """
        ordered = sorted(targets, key=lambda target: target.order)
        violations = self._find_violations(ordered)
        if violations:
            raise violations[0]
        return OrderedTargets(tuple(ordered))

    def collect_violations(self, targets: Iterable[ProfitTarget]) -> list[TargetValidationException]:
        """Report every violation at once, for form-level feedback.

        Returns:
            Violations in evaluation order; empty when the targets are valid
        """
        return self._find_violations(sorted(targets, key=lambda target: target.order))

    def is_valid(self, targets: Iterable[ProfitTarget]) -> bool:
        return not self.collect_violations(targets)

    def _find_violations(self, ordered: list[ProfitTarget]) -> list[TargetValidationException]:
        violations: list[TargetValidationException] = []

        counts = Counter(target.order for target in ordered)
        reported_duplicates: set[int] = set()

        for target in ordered:
            if counts[target.order] > 1 and target.order not in reported_duplicates:
                reported_duplicates.add(target.order)
                violations.append(DuplicateOrderException(target.order, counts[target.order]))

            if not 0 < target.sell_percentage <= HUNDRED:
                violations.append(
                    InvalidSellPercentageException(target.order, target.sell_percentage)
                )

            if target.target_value <= 0:
                violations.append(
                    InvalidTargetValueException(
                        target.order, target.target_value, target.target_type.value
                    )
                )

        return violations
