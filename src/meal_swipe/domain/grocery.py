"""Models for generated grocery lists."""

from pydantic import BaseModel, Field


class GroceryItem(BaseModel):
    """Single line on a grocery list."""

    name: str
    quantity: str
    aisle: str
    meal_ids: list[str] = Field(default_factory=list)


class GroceryList(BaseModel):
    """Structured output for grocery list generation."""

    items: list[GroceryItem]
    notes: str | None = None
