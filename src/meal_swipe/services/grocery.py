"""Grocery list generation for a confirmed plan using LLMs."""

from collections.abc import Iterable
from dataclasses import dataclass
from typing import Protocol

from meal_swipe.domain.grocery import GroceryList
from meal_swipe.domain.meals import Meal
from meal_swipe.domain.plans import FinalPlan

GROCERY_SCHEMA: dict[str, object] = {
    "type": "object",
    "properties": {
        "items": {
            "type": "array",
            "items": {
                "type": "object",
                "properties": {
                    "name": {"type": "string"},
                    "quantity": {"type": "string"},
                    "aisle": {"type": "string"},
                    "meal_ids": {"type": "array", "items": {"type": "string"}},
                },
                "required": ["name", "quantity", "aisle", "meal_ids"],
                "additionalProperties": False,
            },
        },
        "notes": {"anyOf": [{"type": "string"}, {"type": "null"}]},
    },
    "required": ["items", "notes"],
    "additionalProperties": False,
}


class GroceryClient(Protocol):
    """Interface for LLM structured generation."""

    async def generate(
        self,
        *,
        model: str,
        reasoning_effort: str | None,
        store: bool,
        schema: dict[str, object],
        prompt: str,
    ) -> dict[str, object]:
        """Return structured grocery list data."""


@dataclass
class GroceryListService:
    """Builds grocery prompts from a plan and validates the result."""

    client: GroceryClient
    model: str
    reasoning_effort: str | None
    store: bool

    async def generate(self, plan: FinalPlan, catalog: Iterable[Meal]) -> GroceryList:
        """Generate a consolidated grocery list for the planned meals."""
        prompt = build_grocery_prompt(plan, catalog)
        raw = await self.client.generate(
            model=self.model,
            reasoning_effort=self.reasoning_effort,
            store=self.store,
            schema=GROCERY_SCHEMA,
            prompt=prompt,
        )
        return GroceryList.model_validate(raw)


def build_grocery_prompt(plan: FinalPlan, catalog: Iterable[Meal]) -> str:
    """List each planned meal with its ingredients and repeat count."""
    meals = {meal.meal_id: meal for meal in catalog}
    lines = []
    for entry in plan.entries:
        meal = meals.get(entry.meal_id)
        if meal is None:
            continue
        ingredients = ", ".join(meal.ingredients) or "ingredients not listed"
        lines.append(
            f"- {meal.name} [{meal.meal_id}] x{entry.repeat_count}: {ingredients}"
        )
    formatted = "\n".join(lines) if lines else "- (no meals)"
    return (
        "Build one consolidated grocery list for this week's meal plan. "
        "Scale quantities by how many times each meal is cooked, merge "
        "duplicate ingredients, group items by store aisle, and list the "
        "meal ids each item is used for.\n"
        f"{formatted}"
    )
