"""Tests for the review phase and plan finalization."""

import pytest

from meal_swipe.domain.errors import (
    DuplicateDecisionError,
    NotAcceptedError,
    NotFoundError,
    PlanNotReadyError,
    ReconciliationFailedError,
)
from meal_swipe.domain.meals import MealCategory
from meal_swipe.domain.swipes import SwipeDirection
from meal_swipe.services.goals import GoalTracker
from meal_swipe.services.ledger import SwipeLedger
from meal_swipe.services.review import PlanReconciler


def _reconciler(catalog, accepted: int, target: int | None = None) -> PlanReconciler:
    ledger = SwipeLedger.for_meals(catalog)
    for meal in catalog[:accepted]:
        ledger.record(meal.meal_id, SwipeDirection.ACCEPT)
    goal = GoalTracker(target=accepted if target is None else target)
    return PlanReconciler(ledger=ledger, goal=goal)


def test_confirm_retractions_frees_slots(catalog) -> None:
    reconciler = _reconciler(catalog, accepted=4)
    assert len(reconciler.enter_review()) == 4

    reconciler.mark_for_retraction("meal_1")
    reconciler.mark_for_retraction("meal_3")
    count = reconciler.confirm_retractions()

    assert count == 2
    assert reconciler.goal.remaining(reconciler.ledger) == 2
    assert "meal_1" not in reconciler.ledger.decided_ids()
    assert "meal_3" not in reconciler.ledger.decided_ids()
    assert reconciler.marked == []


def test_mark_requires_accepted(catalog) -> None:
    reconciler = _reconciler(catalog, accepted=1)
    reconciler.ledger.record("meal_2", SwipeDirection.REJECT)

    with pytest.raises(NotAcceptedError):
        reconciler.mark_for_retraction("meal_2")
    with pytest.raises(NotAcceptedError):
        reconciler.mark_for_retraction("meal_5")


def test_unmark_is_idempotent(catalog) -> None:
    reconciler = _reconciler(catalog, accepted=2)
    reconciler.mark_for_retraction("meal_1")
    reconciler.mark_for_retraction("meal_2")

    reconciler.unmark_for_retraction("meal_1")
    once = reconciler.marked
    reconciler.unmark_for_retraction("meal_1")

    assert reconciler.marked == once == ["meal_2"]


def test_cancel_review_clears_marks(catalog) -> None:
    reconciler = _reconciler(catalog, accepted=2)
    reconciler.mark_for_retraction("meal_1")

    reconciler.cancel_review()

    assert reconciler.marked == []
    assert reconciler.ledger.accepted_count() == 2


def test_stale_mark_fails_without_changes(catalog) -> None:
    reconciler = _reconciler(catalog, accepted=3)
    reconciler.mark_for_retraction("meal_1")
    reconciler.mark_for_retraction("meal_2")
    reconciler.ledger.retract("meal_2")

    with pytest.raises(ReconciliationFailedError):
        reconciler.confirm_retractions()

    assert reconciler.ledger.get("meal_1") is not None
    assert reconciler.marked == ["meal_1", "meal_2"]


def test_failed_batch_rolls_back(catalog, monkeypatch) -> None:
    reconciler = _reconciler(catalog, accepted=3)
    reconciler.mark_for_retraction("meal_1")
    reconciler.mark_for_retraction("meal_2")
    original_retract = reconciler.ledger.retract

    def flaky_retract(meal_id: str) -> None:
        if meal_id == "meal_2":
            raise NotFoundError("lost")
        original_retract(meal_id)

    monkeypatch.setattr(reconciler.ledger, "retract", flaky_retract)

    with pytest.raises(ReconciliationFailedError):
        reconciler.confirm_retractions()

    assert reconciler.ledger.accepted_count() == 3
    assert reconciler.ledger.get("meal_1") is not None


def test_finalize_blocked_until_marks_resolved(catalog) -> None:
    reconciler = _reconciler(catalog, accepted=3)
    reconciler.mark_for_retraction("meal_2")

    with pytest.raises(PlanNotReadyError):
        reconciler.finalize()

    reconciler.confirm_retractions()
    reconciler.goal.set_target(1, baseline=reconciler.ledger.accepted_count())
    reconciler.ledger.record("meal_4", SwipeDirection.ACCEPT)
    plan = reconciler.finalize()

    assert plan.total == reconciler.ledger.accepted_count() == 3
    assert set(plan.counts) == {"meal_1", "meal_3", "meal_4"}


def test_finalize_requires_satisfied_goal(catalog) -> None:
    reconciler = _reconciler(catalog, accepted=2, target=4)

    with pytest.raises(PlanNotReadyError):
        reconciler.finalize()

    plan = reconciler.finalize(allow_partial=True)
    assert plan.total == 2


def test_finalize_groups_by_category(catalog) -> None:
    reconciler = _reconciler(catalog, accepted=4)

    plan = reconciler.finalize()
    grouped = plan.by_category()

    assert set(grouped) == set(MealCategory)
    assert sum(len(entries) for entries in grouped.values()) == 4
    assert all(entry.repeat_count == 1 for entry in plan.entries)


def test_duplicate_record_leaves_ledger_unchanged(catalog) -> None:
    reconciler = _reconciler(catalog, accepted=1)
    before = reconciler.ledger.decisions()

    with pytest.raises(DuplicateDecisionError):
        reconciler.ledger.record("meal_1", SwipeDirection.ACCEPT)

    assert reconciler.ledger.decisions() == before


def test_retract_and_reaccept_round_trip(catalog) -> None:
    reconciler = _reconciler(catalog, accepted=2)

    reconciler.ledger.retract("meal_1")
    reconciler.ledger.record("meal_1", SwipeDirection.ACCEPT)

    assert reconciler.ledger.accepted_count() == 2
    assert "meal_1" in reconciler.ledger.decided_ids()
