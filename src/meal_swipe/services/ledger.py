"""Swipe ledger holding the active decision per meal."""

import logging
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from datetime import UTC, datetime

from meal_swipe.domain.errors import (
    DuplicateDecisionError,
    InvalidDirectionError,
    InvalidStrengthError,
    NotFoundError,
)
from meal_swipe.domain.meals import Meal
from meal_swipe.domain.swipes import SwipeDecision, SwipeDirection

DEFAULT_STRENGTH = 3
MIN_STRENGTH = 1
MAX_STRENGTH = 5

_logger = logging.getLogger(__name__)


@dataclass
class SwipeLedger:
    """Authoritative record of decisions, one active decision per meal.

    Decisions are kept in insertion order. Retracting and re-deciding a meal
    moves it to the end rather than duplicating it.
    """

    catalog: Mapping[str, Meal]
    _decisions: dict[str, SwipeDecision] = field(default_factory=dict, init=False)

    @classmethod
    def for_meals(cls, meals: Iterable[Meal]) -> "SwipeLedger":
        """Create a ledger that validates ids against the given meals."""
        return cls(catalog={meal.meal_id: meal for meal in meals})

    def record(
        self,
        meal_id: str,
        direction: SwipeDirection | str,
        strength: int | None = None,
        timestamp: datetime | None = None,
    ) -> SwipeDecision:
        """Append a decision for a meal that has no active decision."""
        meal = self.catalog.get(meal_id)
        if meal is None:
            raise NotFoundError(f"Meal '{meal_id}' is not in the catalog")
        if meal_id in self._decisions:
            raise DuplicateDecisionError(meal_id)
        resolved_direction = _parse_direction(direction)
        resolved_strength = _validate_strength(strength)
        decision = SwipeDecision(
            meal_id=meal_id,
            category=meal.category,
            direction=resolved_direction,
            strength=resolved_strength,
            timestamp=timestamp or datetime.now(tz=UTC),
        )
        self._decisions[meal_id] = decision
        return decision

    def retract(self, meal_id: str) -> None:
        """Remove the active decision for a meal."""
        if meal_id not in self._decisions:
            raise NotFoundError(f"Meal '{meal_id}' has no active decision")
        del self._decisions[meal_id]

    def reinstate(self, decision: SwipeDecision) -> None:
        """Put back a previously retracted decision unchanged."""
        if decision.meal_id in self._decisions:
            raise DuplicateDecisionError(decision.meal_id)
        self._decisions[decision.meal_id] = decision

    def restore(self, decisions: Iterable[SwipeDecision]) -> int:
        """Re-hydrate from persisted decisions; later entries win per meal.

        Decisions for meals no longer in the catalog are skipped.
        """
        restored = 0
        for decision in sorted(decisions, key=lambda item: item.timestamp):
            if decision.meal_id not in self.catalog:
                _logger.info(
                    "Skipping stored decision for unknown meal %s", decision.meal_id
                )
                continue
            self._decisions.pop(decision.meal_id, None)
            self._decisions[decision.meal_id] = decision
            restored += 1
        return restored

    def get(self, meal_id: str) -> SwipeDecision | None:
        return self._decisions.get(meal_id)

    def decisions(self) -> list[SwipeDecision]:
        return list(self._decisions.values())

    def accepted(self) -> list[SwipeDecision]:
        """Return accepted decisions in insertion order."""
        return [decision for decision in self._decisions.values() if decision.is_accept]

    def accepted_count(self) -> int:
        return sum(1 for decision in self._decisions.values() if decision.is_accept)

    def decided_ids(self) -> set[str]:
        return set(self._decisions)

    def __len__(self) -> int:
        return len(self._decisions)


def _validate_strength(strength: object) -> int:
    if strength is None:
        return DEFAULT_STRENGTH
    if isinstance(strength, bool) or not isinstance(strength, int):
        raise InvalidStrengthError(strength)
    if not MIN_STRENGTH <= strength <= MAX_STRENGTH:
        raise InvalidStrengthError(strength)
    return strength


def _parse_direction(direction: object) -> SwipeDirection:
    """Accept a member, its wire value (``right``) or its name (``accept``)."""
    if isinstance(direction, SwipeDirection):
        return direction
    if isinstance(direction, str):
        normalized = direction.strip().lower()
        for member in SwipeDirection:
            if normalized in (member.value, member.name.lower()):
                return member
    raise InvalidDirectionError(direction)
