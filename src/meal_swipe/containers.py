"""Dependency container wiring for the application."""

import logging
from collections.abc import Awaitable, Callable
from dataclasses import dataclass

from supabase import create_client

from meal_swipe.adapters.demo_repositories import DemoPlanRepository, DemoSwipeRepository
from meal_swipe.adapters.openai_grocery_client import OpenAIGroceryClient
from meal_swipe.adapters.static_catalog import StaticMealCatalogRepository
from meal_swipe.adapters.supabase_catalog_repository import (
    SupabaseMealCatalogRepository,
)
from meal_swipe.adapters.supabase_plan_repository import SupabasePlanRepository
from meal_swipe.adapters.supabase_swipe_repository import SupabaseSwipeRepository
from meal_swipe.config import Settings
from meal_swipe.services.catalog import CatalogService, MealCatalogRepository
from meal_swipe.services.grocery import GroceryListService
from meal_swipe.services.outbox import PersistenceOutbox
from meal_swipe.services.planning import (
    InMemorySessionStore,
    MealPlanService,
    PlanRepository,
    SwipeRepository,
)

_logger = logging.getLogger(__name__)


@dataclass
class AppContainer:
    """Holds application-wide dependencies."""

    settings: Settings
    outbox: PersistenceOutbox
    plan_service: MealPlanService
    session_store: InMemorySessionStore
    grocery_service: GroceryListService | None
    close_resources: Callable[[], Awaitable[None]]


def build_container(settings: Settings | None = None) -> AppContainer:
    """Create the default dependency container."""
    resolved_settings = settings or Settings()
    catalog_repository: MealCatalogRepository
    swipe_repository: SwipeRepository
    plan_repository: PlanRepository
    if resolved_settings.supabase_configured:
        supabase_client = create_client(
            resolved_settings.supabase_url, resolved_settings.supabase_service_key
        )
        catalog_repository = SupabaseMealCatalogRepository(supabase_client)
        swipe_repository = SupabaseSwipeRepository(supabase_client)
        plan_repository = SupabasePlanRepository(supabase_client)
    else:
        _logger.warning("Supabase is not configured; running in demo mode")
        catalog_repository = StaticMealCatalogRepository()
        swipe_repository = DemoSwipeRepository()
        plan_repository = DemoPlanRepository()

    outbox = PersistenceOutbox(
        retry_attempts=resolved_settings.outbox_retry_attempts,
        retry_delay_seconds=resolved_settings.outbox_retry_delay_seconds,
    )
    plan_service = MealPlanService(
        catalog_service=CatalogService(catalog_repository),
        swipe_repository=swipe_repository,
        plan_repository=plan_repository,
        outbox=outbox,
        demo_user_id=resolved_settings.demo_user_id,
        max_weekly_meals=resolved_settings.max_weekly_meals,
    )

    grocery_client: OpenAIGroceryClient | None = None
    grocery_service: GroceryListService | None = None
    if resolved_settings.openai_api_key:
        grocery_client = OpenAIGroceryClient.create(resolved_settings.openai_api_key)
        grocery_service = GroceryListService(
            client=grocery_client,
            model=resolved_settings.openai_model,
            reasoning_effort=resolved_settings.openai_reasoning_effort,
            store=resolved_settings.openai_store,
        )

    async def close_resources() -> None:
        await outbox.stop()
        if grocery_client is not None:
            await grocery_client.close()

    return AppContainer(
        settings=resolved_settings,
        outbox=outbox,
        plan_service=plan_service,
        session_store=InMemorySessionStore(
            ttl_seconds=resolved_settings.session_ttl_seconds
        ),
        grocery_service=grocery_service,
        close_resources=close_resources,
    )
