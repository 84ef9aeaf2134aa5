"""Goal tracking derived from the swipe ledger."""

from dataclasses import dataclass

from meal_swipe.domain.errors import InvalidTargetError
from meal_swipe.services.ledger import SwipeLedger

MAX_WEEKLY_MEALS = 21


@dataclass
class GoalTracker:
    """Derives remaining accepts from a ledger and a target count.

    The baseline is the accepted count at the moment the target was set for a
    scoped re-swipe; only accepts beyond it count toward the target.
    """

    target: int = 0
    maximum: int = MAX_WEEKLY_MEALS
    baseline: int = 0

    def __post_init__(self) -> None:
        self.set_target(self.target, baseline=self.baseline)

    def set_target(self, target: int, baseline: int = 0) -> None:
        """Configure the target without touching ledger state."""
        if isinstance(target, bool) or not isinstance(target, int):
            raise InvalidTargetError(target, self.maximum)
        if target < 0 or target > self.maximum:
            raise InvalidTargetError(target, self.maximum)
        self.target = target
        self.baseline = max(0, baseline)

    def counted(self, ledger: SwipeLedger) -> int:
        """Accepted decisions that count toward the current target."""
        return max(0, ledger.accepted_count() - self.baseline)

    def remaining(self, ledger: SwipeLedger) -> int:
        return max(0, self.target - self.counted(ledger))

    def is_satisfied(self, ledger: SwipeLedger) -> bool:
        # A zero target has nothing to satisfy.
        return self.target > 0 and self.remaining(ledger) == 0
