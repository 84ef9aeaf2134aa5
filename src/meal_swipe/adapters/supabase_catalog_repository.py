"""Supabase repository for the meal catalog."""

from dataclasses import dataclass

from supabase import Client

from meal_swipe.domain.meals import Meal, MealCategory
from meal_swipe.services.catalog import MealCatalogRepository


@dataclass
class SupabaseMealCatalogRepository(MealCatalogRepository):
    """Supabase implementation for catalog meals."""

    client: Client

    def list_meals(self) -> list[Meal]:
        """Return all catalog meals ordered by id."""
        response = (
            self.client.table("meals")
            .select(
                "meal_id, name, meal_type, cuisine, description, image_url, "
                "calories, cook_time_minutes, ingredients, instructions"
            )
            .order("meal_id", desc=False)
            .execute()
        )
        return [_parse_meal(row) for row in response.data or []]


def _parse_meal(row: dict[str, object]) -> Meal:
    calories = row.get("calories")
    cook_time = row.get("cook_time_minutes")
    return Meal(
        meal_id=str(row["meal_id"]),
        name=str(row.get("name", "")),
        category=MealCategory(row["meal_type"]),
        cuisine=str(row.get("cuisine") or ""),
        description=str(row.get("description") or ""),
        image_url=row.get("image_url"),
        calories=int(calories) if isinstance(calories, int | float) else None,
        cook_time_minutes=int(cook_time) if isinstance(cook_time, int | float) else None,
        ingredients=tuple(row.get("ingredients") or ()),
        instructions=tuple(row.get("instructions") or ()),
    )
