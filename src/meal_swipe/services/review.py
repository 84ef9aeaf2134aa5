"""Review phase: retract accepted meals and produce the final plan."""

import logging
from collections import Counter
from dataclasses import dataclass, field

from meal_swipe.domain.errors import (
    MealPlanError,
    NotAcceptedError,
    PlanNotReadyError,
    ReconciliationFailedError,
)
from meal_swipe.domain.plans import FinalPlan, PlanEntry
from meal_swipe.domain.swipes import SwipeDecision
from meal_swipe.services.goals import GoalTracker
from meal_swipe.services.ledger import SwipeLedger

_logger = logging.getLogger(__name__)


@dataclass
class PlanReconciler:
    """Tracks meals marked for removal and tallies the confirmed plan."""

    ledger: SwipeLedger
    goal: GoalTracker
    _marked: dict[str, None] = field(default_factory=dict, init=False)

    @property
    def marked(self) -> list[str]:
        return list(self._marked)

    def enter_review(self) -> list[SwipeDecision]:
        """Snapshot accepted decisions for display and selection."""
        return self.ledger.accepted()

    def mark_for_retraction(self, meal_id: str) -> None:
        if not _is_accepted(self.ledger, meal_id):
            raise NotAcceptedError(meal_id)
        self._marked[meal_id] = None

    def unmark_for_retraction(self, meal_id: str) -> None:
        self._marked.pop(meal_id, None)

    def cancel_review(self) -> None:
        self._marked.clear()

    def confirm_retractions(self) -> int:
        """Retract every marked meal as one batch and return the count."""
        marked = list(self._marked)
        stale = [meal_id for meal_id in marked if not _is_accepted(self.ledger, meal_id)]
        if stale:
            raise ReconciliationFailedError(
                f"Marked meals are no longer accepted: {', '.join(stale)}"
            )

        retracted: list[SwipeDecision] = []
        try:
            for meal_id in marked:
                decision = self.ledger.get(meal_id)
                self.ledger.retract(meal_id)
                if decision is not None:
                    retracted.append(decision)
        except MealPlanError as exc:
            for decision in reversed(retracted):
                self.ledger.reinstate(decision)
            raise ReconciliationFailedError(
                f"Retraction batch aborted: {exc.message}"
            ) from exc

        self._marked.clear()
        _logger.info("Retracted %s accepted meals", len(retracted))
        return len(retracted)

    def finalize(self, *, allow_partial: bool = False) -> FinalPlan:
        """Tally accepted decisions into a plan.

        ``allow_partial`` accepts an unmet goal, for a deck that ran out or a
        week with nothing to cook.
        """
        if self._marked:
            raise PlanNotReadyError(
                f"{len(self._marked)} meals are still marked for removal"
            )
        if not allow_partial and not self.goal.is_satisfied(self.ledger):
            raise PlanNotReadyError(
                f"{self.goal.remaining(self.ledger)} more meals are needed"
            )
        accepted = self.ledger.accepted()
        counts = Counter(decision.meal_id for decision in accepted)
        categories = {decision.meal_id: decision.category for decision in accepted}
        entries = tuple(
            PlanEntry(meal_id=meal_id, category=categories[meal_id], repeat_count=count)
            for meal_id, count in counts.items()
        )
        return FinalPlan(entries=entries)


def _is_accepted(ledger: SwipeLedger, meal_id: str) -> bool:
    decision = ledger.get(meal_id)
    return decision is not None and decision.is_accept
