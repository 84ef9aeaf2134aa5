"""Meal catalog access."""

import logging
from dataclasses import dataclass
from typing import Protocol

from meal_swipe.domain.meals import Meal

_logger = logging.getLogger(__name__)


class MealCatalogRepository(Protocol):
    """Source of candidate meals."""

    def list_meals(self) -> list[Meal]:
        """Return every meal that can be offered on a card."""


@dataclass
class CatalogService:
    """Fetches the catalog once per plan session."""

    repository: MealCatalogRepository

    def fetch_catalog(self) -> list[Meal]:
        """Return catalog meals, rejecting duplicate identifiers."""
        meals = self.repository.list_meals()
        seen: set[str] = set()
        for meal in meals:
            if meal.meal_id in seen:
                raise RuntimeError(f"Duplicate meal id in catalog: {meal.meal_id}")
            seen.add(meal.meal_id)
        _logger.info("Fetched catalog with %s meals", len(meals))
        return meals
