"""Supabase repository for weekly goals and meal plans."""

from dataclasses import dataclass
from datetime import UTC, datetime

from supabase import Client

from meal_swipe.domain.plans import PlanEntry, PlanGoal
from meal_swipe.services.planning import PlanRepository


@dataclass
class SupabasePlanRepository(PlanRepository):
    """Supabase implementation for goals and confirmed plans."""

    client: Client

    def save_goal(self, goal: PlanGoal) -> None:
        """Upsert the weekly goal row for a user."""
        self.client.table("meal_plan_goals").upsert(
            {
                "user_id": goal.user_id,
                "meals_per_week": goal.meals_per_week,
                "max_cook_time_minutes": goal.max_cook_time_minutes,
                "updated_at": datetime.now(tz=UTC).isoformat(),
            },
            on_conflict="user_id",
        ).execute()

    def save_plan(
        self, user_id: str, week_start: str, entries: list[PlanEntry]
    ) -> None:
        """Replace the user's plan rows for the week."""
        self.client.table("user_meal_plans").delete().eq("user_id", user_id).eq(
            "week_start_date", week_start
        ).execute()
        if not entries:
            return
        payload = [
            {
                "user_id": user_id,
                "meal_id": entry.meal_id,
                "quantity": entry.repeat_count,
                "week_start_date": week_start,
                "status": "active",
            }
            for entry in entries
        ]
        response = self.client.table("user_meal_plans").insert(payload).execute()
        if not response.data:
            raise RuntimeError("Failed to save meal plan")
