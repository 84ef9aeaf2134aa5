"""Domain models for swipe decisions."""

from dataclasses import dataclass
from datetime import datetime
from enum import Enum

from meal_swipe.domain.meals import MealCategory


class SwipeDirection(str, Enum):
    """Decision made on a card, stored with the swipe gesture it came from."""

    ACCEPT = "right"
    REJECT = "left"
    DEFER = "maybe"


@dataclass(frozen=True)
class SwipeDecision:
    """Active decision on a single meal."""

    meal_id: str
    category: MealCategory
    direction: SwipeDirection
    strength: int
    timestamp: datetime

    @property
    def is_accept(self) -> bool:
        return self.direction is SwipeDirection.ACCEPT


@dataclass(frozen=True)
class SwipeRecord:
    """Decision stamped with a user id for persistence."""

    user_id: str
    meal_id: str
    category: MealCategory
    direction: SwipeDirection
    strength: int
    timestamp: datetime

    @classmethod
    def from_decision(cls, user_id: str, decision: SwipeDecision) -> "SwipeRecord":
        return cls(
            user_id=user_id,
            meal_id=decision.meal_id,
            category=decision.category,
            direction=decision.direction,
            strength=decision.strength,
            timestamp=decision.timestamp,
        )

    def to_decision(self) -> SwipeDecision:
        return SwipeDecision(
            meal_id=self.meal_id,
            category=self.category,
            direction=self.direction,
            strength=self.strength,
            timestamp=self.timestamp,
        )
