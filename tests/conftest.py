"""Shared test fixtures."""

import random
from dataclasses import dataclass, field

import pytest

from meal_swipe.config import Settings
from meal_swipe.containers import AppContainer
from meal_swipe.domain.meals import Meal, MealCategory
from meal_swipe.domain.plans import PlanEntry, PlanGoal
from meal_swipe.domain.swipes import SwipeRecord
from meal_swipe.services.catalog import CatalogService, MealCatalogRepository
from meal_swipe.services.grocery import GroceryClient, GroceryListService
from meal_swipe.services.outbox import PersistenceOutbox
from meal_swipe.services.planning import (
    InMemorySessionStore,
    MealPlanService,
    PlanRepository,
    SwipeRepository,
)


def make_meal(meal_id: str, category: MealCategory = MealCategory.DINNER) -> Meal:
    return Meal(
        meal_id=meal_id,
        name=meal_id.replace("_", " ").title(),
        category=category,
        ingredients=(f"{meal_id} ingredient",),
    )


def make_catalog(size: int = 6) -> list[Meal]:
    categories = list(MealCategory)
    return [
        make_meal(f"meal_{index}", categories[index % len(categories)])
        for index in range(1, size + 1)
    ]


@dataclass
class InMemoryCatalogRepository(MealCatalogRepository):
    """In-memory catalog repository for tests."""

    meals: list[Meal] = field(default_factory=make_catalog)

    def list_meals(self) -> list[Meal]:
        return list(self.meals)


@dataclass
class InMemorySwipeRepository(SwipeRepository):
    """In-memory swipe repository for tests."""

    records: list[SwipeRecord] = field(default_factory=list)
    deleted: list[tuple[str, str]] = field(default_factory=list)

    def save_swipe(self, record: SwipeRecord) -> None:
        self.records.append(record)

    def delete_swipe(self, user_id: str, meal_id: str) -> None:
        self.deleted.append((user_id, meal_id))
        self.records = [
            record
            for record in self.records
            if not (record.user_id == user_id and record.meal_id == meal_id)
        ]

    def list_swipes(self, user_id: str) -> list[SwipeRecord]:
        return sorted(
            (record for record in self.records if record.user_id == user_id),
            key=lambda record: record.timestamp,
            reverse=True,
        )


@dataclass
class FailingSwipeRepository(SwipeRepository):
    """Swipe repository whose writes always fail."""

    attempts: int = 0

    def save_swipe(self, record: SwipeRecord) -> None:
        self.attempts += 1
        raise RuntimeError("database unavailable")

    def delete_swipe(self, user_id: str, meal_id: str) -> None:
        self.attempts += 1
        raise RuntimeError("database unavailable")

    def list_swipes(self, user_id: str) -> list[SwipeRecord]:
        return []


@dataclass
class InMemoryPlanRepository(PlanRepository):
    """In-memory plan repository for tests."""

    goals: dict[str, PlanGoal] = field(default_factory=dict)
    plans: dict[tuple[str, str], list[PlanEntry]] = field(default_factory=dict)

    def save_goal(self, goal: PlanGoal) -> None:
        self.goals[goal.user_id] = goal

    def save_plan(
        self, user_id: str, week_start: str, entries: list[PlanEntry]
    ) -> None:
        self.plans[(user_id, week_start)] = list(entries)


@dataclass
class FakeGroceryClient(GroceryClient):
    """Fake grocery client returning a fixed payload."""

    payload: dict[str, object] = field(
        default_factory=lambda: {
            "items": [
                {
                    "name": "Eggs",
                    "quantity": "6",
                    "aisle": "Dairy",
                    "meal_ids": ["meal_1"],
                }
            ],
            "notes": None,
        }
    )
    prompts: list[str] = field(default_factory=list)

    async def generate(  # noqa: PLR0913
        self,
        *,
        model: str,
        reasoning_effort: str | None,
        store: bool,
        schema: dict[str, object],
        prompt: str,
    ) -> dict[str, object]:
        self.prompts.append(prompt)
        return self.payload


def build_plan_service(
    swipe_repository: SwipeRepository | None = None,
    plan_repository: PlanRepository | None = None,
    outbox: PersistenceOutbox | None = None,
    meals: list[Meal] | None = None,
) -> MealPlanService:
    return MealPlanService(
        catalog_service=CatalogService(
            InMemoryCatalogRepository(meals if meals is not None else make_catalog())
        ),
        swipe_repository=swipe_repository or InMemorySwipeRepository(),
        plan_repository=plan_repository or InMemoryPlanRepository(),
        outbox=outbox or PersistenceOutbox(retry_delay_seconds=0),
        rng_factory=lambda: random.Random(7),
    )


@pytest.fixture
def catalog() -> list[Meal]:
    return make_catalog()


@pytest.fixture
def settings() -> Settings:
    return Settings(
        supabase_url=None,
        supabase_service_key=None,
        openai_api_key="openai-key",
        outbox_retry_delay_seconds=0,
    )


@pytest.fixture
def swipe_repository() -> InMemorySwipeRepository:
    return InMemorySwipeRepository()


@pytest.fixture
def plan_repository() -> InMemoryPlanRepository:
    return InMemoryPlanRepository()


@pytest.fixture
def grocery_client() -> FakeGroceryClient:
    return FakeGroceryClient()


@pytest.fixture
def container(
    settings: Settings,
    swipe_repository: InMemorySwipeRepository,
    plan_repository: InMemoryPlanRepository,
    grocery_client: FakeGroceryClient,
) -> AppContainer:
    outbox = PersistenceOutbox(
        retry_attempts=settings.outbox_retry_attempts,
        retry_delay_seconds=settings.outbox_retry_delay_seconds,
    )
    plan_service = build_plan_service(
        swipe_repository=swipe_repository,
        plan_repository=plan_repository,
        outbox=outbox,
    )
    grocery_service = GroceryListService(
        client=grocery_client,
        model=settings.openai_model,
        reasoning_effort=settings.openai_reasoning_effort,
        store=settings.openai_store,
    )

    async def close_resources() -> None:
        await outbox.stop()

    return AppContainer(
        settings=settings,
        outbox=outbox,
        plan_service=plan_service,
        session_store=InMemorySessionStore(),
        grocery_service=grocery_service,
        close_resources=close_resources,
    )
