"""Supabase-backed swipe repository."""

from dataclasses import dataclass
from datetime import datetime

from supabase import Client

from meal_swipe.domain.meals import MealCategory
from meal_swipe.domain.swipes import SwipeDirection, SwipeRecord
from meal_swipe.services.planning import SwipeRepository


@dataclass
class SupabaseSwipeRepository(SwipeRepository):
    """Supabase implementation for food swipes."""

    client: Client

    def save_swipe(self, record: SwipeRecord) -> None:
        """Insert a swipe row."""
        response = (
            self.client.table("food_swipes")
            .insert(
                {
                    "user_id": record.user_id,
                    "meal_id": record.meal_id,
                    "meal_type": record.category.value,
                    "swipe": record.direction.value,
                    "confidence": record.strength,
                    "timestamp": record.timestamp.isoformat(),
                }
            )
            .execute()
        )
        if not response.data:
            raise RuntimeError("Failed to save food swipe")

    def delete_swipe(self, user_id: str, meal_id: str) -> None:
        """Delete swipe rows for a retracted meal."""
        self.client.table("food_swipes").delete().eq("user_id", user_id).eq(
            "meal_id", meal_id
        ).execute()

    def list_swipes(self, user_id: str) -> list[SwipeRecord]:
        """Return stored swipes for a user, newest first."""
        response = (
            self.client.table("food_swipes")
            .select("user_id, meal_id, meal_type, swipe, confidence, timestamp")
            .eq("user_id", user_id)
            .order("timestamp", desc=True)
            .execute()
        )
        return [_parse_swipe(row) for row in response.data or []]


def _parse_swipe(row: dict[str, object]) -> SwipeRecord:
    return SwipeRecord(
        user_id=str(row["user_id"]),
        meal_id=str(row["meal_id"]),
        category=MealCategory(row["meal_type"]),
        direction=SwipeDirection(row["swipe"]),
        strength=int(row.get("confidence") or 3),
        timestamp=datetime.fromisoformat(str(row["timestamp"])),
    )
