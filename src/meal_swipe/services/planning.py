"""Plan sessions tying the swipe core to persistence."""

import logging
import random
from collections.abc import Callable
from dataclasses import dataclass, field
from datetime import UTC, datetime, timedelta
from functools import partial
from typing import Protocol
from uuid import UUID, uuid4

from meal_swipe.domain.errors import NotFoundError, PlanNotReadyError
from meal_swipe.domain.meals import Meal
from meal_swipe.domain.plans import FinalPlan, PlanEntry, PlanGoal
from meal_swipe.domain.swipes import SwipeDecision, SwipeDirection, SwipeRecord
from meal_swipe.services.catalog import CatalogService
from meal_swipe.services.goals import MAX_WEEKLY_MEALS, GoalTracker
from meal_swipe.services.ledger import SwipeLedger
from meal_swipe.services.outbox import PersistenceOutbox
from meal_swipe.services.review import PlanReconciler
from meal_swipe.services.swiping import DecisionResult, SessionController, SessionState

DEMO_USER_ID = "demo-user"
SESSION_TTL_SECONDS = 6 * 60 * 60

_logger = logging.getLogger(__name__)


class SwipeRepository(Protocol):
    """Persistence interface for swipe decisions."""

    def save_swipe(self, record: SwipeRecord) -> None:
        """Insert a swipe decision row."""

    def delete_swipe(self, user_id: str, meal_id: str) -> None:
        """Delete stored decisions for a retracted meal."""

    def list_swipes(self, user_id: str) -> list[SwipeRecord]:
        """Return stored decisions for a user, newest first."""


class PlanRepository(Protocol):
    """Persistence interface for weekly goals and confirmed plans."""

    def save_goal(self, goal: PlanGoal) -> None:
        """Upsert the weekly goal for a user."""

    def save_plan(
        self, user_id: str, week_start: str, entries: list[PlanEntry]
    ) -> None:
        """Store the confirmed plan for the given week."""


@dataclass(frozen=True)
class SessionSummary:
    """Progress snapshot for the UI."""

    session_id: UUID
    user_id: str
    state: SessionState
    weekly_target: int
    target: int
    remaining: int
    accepted_count: int
    meals_out: int
    exhausted: bool
    marked: list[str]


@dataclass
class PlanSession:
    """One user's swipe session for one week.

    In-memory transitions always complete before any write is queued, so a
    slow or failing backend never changes what the user sees.
    """

    user_id: str
    weekly_target: int
    max_weekly_meals: int
    catalog: list[Meal]
    ledger: SwipeLedger
    goal: GoalTracker
    controller: SessionController
    reconciler: PlanReconciler
    outbox: PersistenceOutbox
    swipe_repository: SwipeRepository
    plan_repository: PlanRepository
    session_id: UUID = field(default_factory=uuid4)
    final_plan: FinalPlan | None = None

    @property
    def state(self) -> SessionState:
        return self.controller.state

    def meal(self, meal_id: str) -> Meal | None:
        return self.controller.meal(meal_id)

    def current_candidate(self) -> Meal | None:
        return self.controller.current_candidate()

    def decide(
        self,
        meal_id: str,
        direction: SwipeDirection | str,
        strength: int | None = None,
    ) -> DecisionResult:
        """Apply a decision, then queue its write."""
        result = self.controller.decide(meal_id, direction, strength)
        record = SwipeRecord.from_decision(self.user_id, result.decision)
        self.outbox.enqueue(
            f"save_swipe:{meal_id}", partial(self.swipe_repository.save_swipe, record)
        )
        _logger.info(
            "Decision %s on %s (remaining=%s)",
            result.decision.direction.value,
            meal_id,
            result.remaining,
        )
        return result

    def enter_review(self) -> list[SwipeDecision]:
        self._ensure_open()
        return self.reconciler.enter_review()

    def mark_for_retraction(self, meal_id: str) -> None:
        self._ensure_open()
        self.reconciler.mark_for_retraction(meal_id)

    def unmark_for_retraction(self, meal_id: str) -> None:
        self.reconciler.unmark_for_retraction(meal_id)

    def cancel_review(self) -> None:
        self.reconciler.cancel_review()

    def confirm_retractions(self) -> int:
        """Retract marked meals and re-enter swiping scoped to the count."""
        self._ensure_open()
        meal_ids = self.reconciler.marked
        missing = self.goal.remaining(self.ledger)
        count = self.reconciler.confirm_retractions()
        if count == 0:
            return 0
        # Retracted slots add to whatever the current scope still lacks.
        self.controller.rescope(count + missing)
        for meal_id in meal_ids:
            self.outbox.enqueue(
                f"delete_swipe:{meal_id}",
                partial(self.swipe_repository.delete_swipe, self.user_id, meal_id),
            )
        return count

    def finalize(self, week_start: str, *, allow_partial: bool = False) -> FinalPlan:
        """Close the session and queue the plan write for the week."""
        self._ensure_open()
        plan = self.reconciler.finalize(allow_partial=allow_partial)
        self.controller.close()
        self.final_plan = plan
        self.outbox.enqueue(
            f"save_plan:{week_start}",
            partial(
                self.plan_repository.save_plan,
                self.user_id,
                week_start,
                list(plan.entries),
            ),
        )
        _logger.info(
            "Plan finalized for week %s with %s meals", week_start, plan.total
        )
        return plan

    def close(self) -> None:
        self.controller.close()

    def summary(self) -> SessionSummary:
        return SessionSummary(
            session_id=self.session_id,
            user_id=self.user_id,
            state=self.state,
            weekly_target=self.weekly_target,
            target=self.goal.target,
            remaining=self.goal.remaining(self.ledger),
            accepted_count=self.ledger.accepted_count(),
            meals_out=self.max_weekly_meals - self.weekly_target,
            exhausted=self.controller.is_exhausted,
            marked=self.reconciler.marked,
        )

    def _ensure_open(self) -> None:
        if self.state is SessionState.CLOSED:
            raise PlanNotReadyError("Plan session is already closed")


@dataclass
class MealPlanService:
    """Builds plan sessions with their collaborators."""

    catalog_service: CatalogService
    swipe_repository: SwipeRepository
    plan_repository: PlanRepository
    outbox: PersistenceOutbox
    demo_user_id: str = DEMO_USER_ID
    max_weekly_meals: int = MAX_WEEKLY_MEALS
    rng_factory: Callable[[], random.Random] = random.Random

    def start_session(
        self,
        user_id: str | None,
        meals_per_week: int,
        max_cook_time_minutes: int | None = None,
    ) -> PlanSession:
        """Start a fresh session for the weekly goal."""
        session = self._build_session(user_id, meals_per_week)
        self._save_goal(session, max_cook_time_minutes)
        _logger.info(
            "Plan session %s started: target=%s", session.session_id, meals_per_week
        )
        return session

    def resume_session(
        self,
        user_id: str | None,
        meals_per_week: int,
        max_cook_time_minutes: int | None = None,
    ) -> PlanSession:
        """Start a session re-hydrated from the user's stored swipes."""
        session = self._build_session(user_id, meals_per_week)
        records = self.swipe_repository.list_swipes(session.user_id)
        restored = session.ledger.restore(record.to_decision() for record in records)
        self._save_goal(session, max_cook_time_minutes)
        _logger.info(
            "Plan session %s resumed with %s stored decisions",
            session.session_id,
            restored,
        )
        return session

    def _save_goal(
        self, session: PlanSession, max_cook_time_minutes: int | None
    ) -> None:
        goal = PlanGoal(
            user_id=session.user_id,
            meals_per_week=session.weekly_target,
            max_cook_time_minutes=max_cook_time_minutes,
        )
        self.outbox.enqueue(
            f"save_goal:{session.user_id}", partial(self.plan_repository.save_goal, goal)
        )

    def _build_session(self, user_id: str | None, meals_per_week: int) -> PlanSession:
        goal = GoalTracker(target=meals_per_week, maximum=self.max_weekly_meals)
        catalog = self.catalog_service.fetch_catalog()
        ledger = SwipeLedger.for_meals(catalog)
        controller = SessionController(
            catalog=catalog, ledger=ledger, goal=goal, rng=self.rng_factory()
        )
        return PlanSession(
            user_id=user_id or self.demo_user_id,
            weekly_target=meals_per_week,
            max_weekly_meals=self.max_weekly_meals,
            catalog=catalog,
            ledger=ledger,
            goal=goal,
            controller=controller,
            reconciler=PlanReconciler(ledger=ledger, goal=goal),
            outbox=self.outbox,
            swipe_repository=self.swipe_repository,
            plan_repository=self.plan_repository,
        )


def _utcnow() -> datetime:
    return datetime.now(tz=UTC)


@dataclass
class _StoredSession:
    session: PlanSession
    expires_at: datetime


@dataclass
class InMemorySessionStore:
    """Plan sessions keyed by id, dropped after ``ttl_seconds`` without use."""

    ttl_seconds: int = SESSION_TTL_SECONDS
    clock: Callable[[], datetime] = _utcnow
    _sessions: dict[UUID, _StoredSession] = field(default_factory=dict, init=False)

    def add(self, session: PlanSession) -> None:
        self.evict_expired()
        self._sessions[session.session_id] = _StoredSession(
            session=session, expires_at=self._expiry()
        )

    def get(self, session_id: UUID) -> PlanSession:
        """Return a live session and extend its expiry."""
        entry = self._sessions.get(session_id)
        if entry is None or self.clock() >= entry.expires_at:
            self._drop(session_id)
            raise NotFoundError(f"Plan session '{session_id}' does not exist")
        entry.expires_at = self._expiry()
        return entry.session

    def remove(self, session_id: UUID) -> None:
        self._drop(session_id)

    def evict_expired(self) -> int:
        """Close and drop every expired session; return how many went."""
        now = self.clock()
        expired = [
            session_id
            for session_id, entry in self._sessions.items()
            if now >= entry.expires_at
        ]
        for session_id in expired:
            self._drop(session_id)
        if expired:
            _logger.info("Evicted %s expired plan sessions", len(expired))
        return len(expired)

    def _drop(self, session_id: UUID) -> None:
        entry = self._sessions.pop(session_id, None)
        if entry is not None:
            entry.session.close()

    def _expiry(self) -> datetime:
        return self.clock() + timedelta(seconds=self.ttl_seconds)

    def __len__(self) -> int:
        return len(self._sessions)
