"""Repositories used in demo mode, when no backend is configured."""

import logging
from dataclasses import dataclass

from meal_swipe.domain.plans import PlanEntry, PlanGoal
from meal_swipe.domain.swipes import SwipeRecord
from meal_swipe.services.planning import PlanRepository, SwipeRepository

_logger = logging.getLogger(__name__)


@dataclass
class DemoSwipeRepository(SwipeRepository):
    """Logs swipe writes instead of persisting them."""

    def save_swipe(self, record: SwipeRecord) -> None:
        _logger.info(
            "Demo mode: would save swipe %s on %s for %s",
            record.direction.value,
            record.meal_id,
            record.user_id,
        )

    def delete_swipe(self, user_id: str, meal_id: str) -> None:
        _logger.info("Demo mode: would delete swipe on %s for %s", meal_id, user_id)

    def list_swipes(self, user_id: str) -> list[SwipeRecord]:
        return []


@dataclass
class DemoPlanRepository(PlanRepository):
    """Logs goal and plan writes instead of persisting them."""

    def save_goal(self, goal: PlanGoal) -> None:
        _logger.info(
            "Demo mode: would save goal of %s meals for %s",
            goal.meals_per_week,
            goal.user_id,
        )

    def save_plan(
        self, user_id: str, week_start: str, entries: list[PlanEntry]
    ) -> None:
        _logger.info(
            "Demo mode: would save %s plan entries for %s (week %s)",
            len(entries),
            user_id,
            week_start,
        )
