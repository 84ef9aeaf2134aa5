"""Tests for grocery list generation."""

import asyncio

import pytest
from pydantic import ValidationError

from meal_swipe.domain.plans import FinalPlan, PlanEntry
from meal_swipe.services.grocery import (
    GROCERY_SCHEMA,
    GroceryListService,
    build_grocery_prompt,
)
from tests.conftest import FakeGroceryClient


def _plan(catalog) -> FinalPlan:
    return FinalPlan(
        entries=(
            PlanEntry(catalog[0].meal_id, catalog[0].category, 2),
            PlanEntry(catalog[1].meal_id, catalog[1].category, 1),
        )
    )


def test_prompt_lists_meals_with_repeat_counts(catalog) -> None:
    prompt = build_grocery_prompt(_plan(catalog), catalog)

    assert "- Meal 1 [meal_1] x2: meal_1 ingredient" in prompt
    assert "- Meal 2 [meal_2] x1: meal_2 ingredient" in prompt


def test_prompt_for_empty_plan(catalog) -> None:
    prompt = build_grocery_prompt(FinalPlan(), catalog)

    assert "- (no meals)" in prompt


def test_generate_validates_payload(catalog) -> None:
    client = FakeGroceryClient()
    service = GroceryListService(
        client=client, model="gpt-5.2", reasoning_effort="low", store=False
    )

    grocery = asyncio.run(service.generate(_plan(catalog), catalog))

    assert grocery.items[0].name == "Eggs"
    assert grocery.items[0].meal_ids == ["meal_1"]
    assert len(client.prompts) == 1
    assert GROCERY_SCHEMA["required"] == ["items", "notes"]


def test_generate_rejects_malformed_payload(catalog) -> None:
    client = FakeGroceryClient(payload={"items": [{"name": "Eggs"}]})
    service = GroceryListService(
        client=client, model="gpt-5.2", reasoning_effort=None, store=False
    )

    with pytest.raises(ValidationError):
        asyncio.run(service.generate(_plan(catalog), catalog))
