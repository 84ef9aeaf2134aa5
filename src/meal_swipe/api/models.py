"""Request models for the plan API."""

from pydantic import BaseModel, Field


class StartPlanRequest(BaseModel):
    """Weekly goal chosen on the goal screen."""

    user_id: str | None = None
    meals_per_week: int
    max_cook_time_minutes: int | None = Field(default=None, ge=0)
    resume: bool = False


class DecisionRequest(BaseModel):
    """Swipe on the current card."""

    meal_id: str
    direction: str
    strength: int | None = None


class FinalizeRequest(BaseModel):
    """Plan confirmation for a week."""

    week_start: str | None = None
    allow_partial: bool = False
