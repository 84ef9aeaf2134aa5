"""Swipe session state machine."""

import logging
import random
from collections.abc import Sequence
from dataclasses import dataclass, field
from enum import Enum

from meal_swipe.domain.errors import StaleDecisionError
from meal_swipe.domain.meals import Meal
from meal_swipe.domain.swipes import SwipeDecision, SwipeDirection
from meal_swipe.services.goals import GoalTracker
from meal_swipe.services.ledger import SwipeLedger

_logger = logging.getLogger(__name__)


class SessionState(str, Enum):
    """Lifecycle states of a swipe session."""

    IDLE = "IDLE"
    SWIPING = "SWIPING"
    SATISFIED = "SATISFIED"
    CLOSED = "CLOSED"


@dataclass(frozen=True)
class DecisionResult:
    """Outcome of a decision, polled by the caller to pick the next phase."""

    decision: SwipeDecision
    state: SessionState
    remaining: int

    @property
    def satisfied(self) -> bool:
        return self.state is SessionState.SATISFIED


@dataclass
class SessionController:
    """Draws candidates from the deck and applies decisions toward the goal."""

    catalog: Sequence[Meal]
    ledger: SwipeLedger
    goal: GoalTracker
    rng: random.Random = field(default_factory=random.Random)
    state: SessionState = field(default=SessionState.IDLE, init=False)
    _deck: list[str] = field(default_factory=list, init=False)
    _deck_basis: int | None = field(default=None, init=False)
    _meals: dict[str, Meal] = field(default_factory=dict, init=False)

    def __post_init__(self) -> None:
        self.catalog = tuple(self.catalog)
        self._meals = {meal.meal_id: meal for meal in self.catalog}

    @property
    def is_exhausted(self) -> bool:
        """True while swiping with no undecided meals left."""
        if self.state is not SessionState.SWIPING:
            return False
        self._sync_deck()
        return not self._deck

    @property
    def deck_size(self) -> int:
        if self.state is not SessionState.SWIPING:
            return 0
        self._sync_deck()
        return len(self._deck)

    def meal(self, meal_id: str) -> Meal | None:
        return self._meals.get(meal_id)

    def current_candidate(self) -> Meal | None:
        """Return the next undecided meal, starting the session if idle."""
        if self.state is SessionState.IDLE:
            if self.goal.target == 0:
                return None
            self._begin_swiping()
        if self.state is not SessionState.SWIPING:
            return None
        self._sync_deck()
        decided = self.ledger.decided_ids()
        while self._deck and self._deck[0] in decided:
            self._deck.pop(0)
        if not self._deck:
            return None
        return self._meals[self._deck[0]]

    def decide(
        self,
        meal_id: str,
        direction: SwipeDirection | str,
        strength: int | None = None,
    ) -> DecisionResult:
        """Record a decision on the current candidate and advance the deck."""
        candidate = self.current_candidate()
        if self.state is not SessionState.SWIPING:
            raise StaleDecisionError(
                f"Session is {self.state.value}, not accepting decisions"
            )
        if candidate is None or candidate.meal_id != meal_id:
            raise StaleDecisionError(f"Meal '{meal_id}' is not the current candidate")

        decision = self.ledger.record(meal_id, direction, strength)
        self._deck.pop(0)
        self._deck_basis = len(self.ledger)

        remaining = self.goal.remaining(self.ledger)
        if self.goal.is_satisfied(self.ledger):
            self.state = SessionState.SATISFIED
            _logger.info("Swipe goal satisfied after %s decisions", len(self.ledger))
        return DecisionResult(decision=decision, state=self.state, remaining=remaining)

    def rebuild_deck(self) -> None:
        """Reshuffle every undecided catalog meal into a fresh deck."""
        decided = self.ledger.decided_ids()
        deck = [meal.meal_id for meal in self.catalog if meal.meal_id not in decided]
        self.rng.shuffle(deck)
        self._deck = deck
        self._deck_basis = len(decided)

    def rescope(self, target: int) -> None:
        """Re-enter swiping until ``target`` more meals are accepted.

        Only accepts made after this call count toward the scoped target.
        """
        if self.state is SessionState.CLOSED:
            raise StaleDecisionError("Session is closed")
        self.goal.set_target(target, baseline=self.ledger.accepted_count())
        if target == 0:
            return
        self.rebuild_deck()
        self.state = SessionState.SWIPING
        _logger.info("Scoped re-swipe started for %s meals", target)

    def close(self) -> None:
        self.state = SessionState.CLOSED
        self._deck = []
        self._deck_basis = None

    def _begin_swiping(self) -> None:
        self.rebuild_deck()
        # A re-hydrated ledger can already meet the goal.
        if self.goal.is_satisfied(self.ledger):
            self.state = SessionState.SATISFIED
            return
        self.state = SessionState.SWIPING
        _logger.info(
            "Swiping started: target=%s deck=%s", self.goal.target, len(self._deck)
        )

    def _sync_deck(self) -> None:
        # Decisions made outside decide() change the exclusion set size.
        if self._deck_basis != len(self.ledger):
            self.rebuild_deck()
