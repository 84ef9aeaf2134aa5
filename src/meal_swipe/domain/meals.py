"""Domain models for the meal catalog."""

from dataclasses import dataclass, field
from enum import Enum


class MealCategory(str, Enum):
    """Meal slot a catalog entry belongs to."""

    BREAKFAST = "breakfast"
    LUNCH = "lunch"
    DINNER = "dinner"


@dataclass(frozen=True)
class Meal:
    """Candidate meal shown on a swipe card."""

    meal_id: str
    name: str
    category: MealCategory
    cuisine: str = ""
    description: str = ""
    image_url: str | None = None
    calories: int | None = None
    cook_time_minutes: int | None = None
    ingredients: tuple[str, ...] = field(default_factory=tuple)
    instructions: tuple[str, ...] = field(default_factory=tuple)
