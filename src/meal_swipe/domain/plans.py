"""Domain models for weekly goals and confirmed plans."""

from dataclasses import dataclass, field

from meal_swipe.domain.meals import MealCategory


@dataclass(frozen=True)
class PlanGoal:
    """Weekly goal chosen before swiping starts."""

    user_id: str
    meals_per_week: int
    max_cook_time_minutes: int | None = None


@dataclass(frozen=True)
class PlanEntry:
    """A meal in the final plan with how often to cook it."""

    meal_id: str
    category: MealCategory
    repeat_count: int


@dataclass(frozen=True)
class FinalPlan:
    """Confirmed mapping of meals to repeat counts."""

    entries: tuple[PlanEntry, ...] = field(default_factory=tuple)

    @property
    def counts(self) -> dict[str, int]:
        return {entry.meal_id: entry.repeat_count for entry in self.entries}

    @property
    def total(self) -> int:
        return sum(entry.repeat_count for entry in self.entries)

    def by_category(self) -> dict[MealCategory, list[PlanEntry]]:
        """Group plan entries by meal slot, keeping every category present."""
        grouped: dict[MealCategory, list[PlanEntry]] = {
            category: [] for category in MealCategory
        }
        for entry in self.entries:
            grouped[entry.category].append(entry)
        return grouped
