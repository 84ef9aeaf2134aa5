"""Tests for goal tracking."""

import pytest

from meal_swipe.domain.errors import InvalidTargetError
from meal_swipe.domain.swipes import SwipeDirection
from meal_swipe.services.goals import GoalTracker
from meal_swipe.services.ledger import SwipeLedger


def test_remaining_counts_only_accepts(catalog) -> None:
    ledger = SwipeLedger.for_meals(catalog)
    goal = GoalTracker(target=2)

    ledger.record("meal_1", SwipeDirection.REJECT)
    ledger.record("meal_2", SwipeDirection.DEFER)
    assert goal.remaining(ledger) == 2

    ledger.record("meal_3", SwipeDirection.ACCEPT)
    ledger.record("meal_4", SwipeDirection.ACCEPT)
    assert goal.remaining(ledger) == 0
    assert goal.is_satisfied(ledger)


def test_remaining_never_negative(catalog) -> None:
    ledger = SwipeLedger.for_meals(catalog)
    goal = GoalTracker(target=1)
    for meal in catalog[:3]:
        ledger.record(meal.meal_id, SwipeDirection.ACCEPT)

    assert goal.remaining(ledger) == 0


def test_zero_target_is_never_satisfied(catalog) -> None:
    ledger = SwipeLedger.for_meals(catalog)
    goal = GoalTracker(target=0)

    assert goal.remaining(ledger) == 0
    assert not goal.is_satisfied(ledger)


@pytest.mark.parametrize("target", [-1, 22, True, 2.0])
def test_invalid_target_rejected(target) -> None:
    goal = GoalTracker(target=3)

    with pytest.raises(InvalidTargetError):
        goal.set_target(target)

    assert goal.target == 3


def test_invalid_target_rejected_on_construction() -> None:
    with pytest.raises(InvalidTargetError):
        GoalTracker(target=30)


def test_baseline_scopes_counting(catalog) -> None:
    ledger = SwipeLedger.for_meals(catalog)
    ledger.record("meal_1", SwipeDirection.ACCEPT)
    ledger.record("meal_2", SwipeDirection.ACCEPT)
    goal = GoalTracker(target=1)

    goal.set_target(1, baseline=ledger.accepted_count())
    assert goal.remaining(ledger) == 1

    ledger.record("meal_3", SwipeDirection.ACCEPT)
    assert goal.is_satisfied(ledger)
