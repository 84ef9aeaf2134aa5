"""FastAPI application factory."""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from datetime import UTC, date, datetime, timedelta
from uuid import UUID

from fastapi import FastAPI, HTTPException, Request, status
from fastapi.responses import JSONResponse

from meal_swipe.api.models import DecisionRequest, FinalizeRequest, StartPlanRequest
from meal_swipe.app_logging import configure_logging
from meal_swipe.containers import AppContainer
from meal_swipe.domain.errors import (
    InvalidDirectionError,
    InvalidStrengthError,
    InvalidTargetError,
    MealPlanError,
    NotFoundError,
)
from meal_swipe.domain.meals import Meal
from meal_swipe.domain.plans import FinalPlan
from meal_swipe.domain.swipes import SwipeDecision
from meal_swipe.services.planning import PlanSession, SessionSummary

_INPUT_ERRORS = (InvalidDirectionError, InvalidStrengthError, InvalidTargetError)


def create_app(container: AppContainer) -> FastAPI:  # noqa: PLR0915
    """Create a FastAPI app configured with dependencies."""
    configure_logging(container.settings.log_level)
    logger = logging.getLogger(__name__)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        app.state.container.outbox.start()
        yield
        try:
            await app.state.container.close_resources()
        except Exception:
            logger.exception("Failed to close resources")

    app = FastAPI(lifespan=lifespan)
    app.state.container = container

    @app.exception_handler(MealPlanError)
    async def meal_plan_error_handler(
        request: Request, exc: MealPlanError
    ) -> JSONResponse:
        return JSONResponse(
            status_code=_status_for(exc),
            content={"error": exc.code, "message": exc.message},
        )

    @app.get("/health")
    async def health() -> dict[str, str]:
        """Simple health check endpoint."""
        return {"status": "ok"}

    @app.post("/plans", status_code=status.HTTP_201_CREATED)
    async def start_plan(body: StartPlanRequest, request: Request) -> dict[str, object]:
        """Start a swipe session for the weekly goal."""
        state_container: AppContainer = request.app.state.container
        plan_service = state_container.plan_service
        start = plan_service.resume_session if body.resume else plan_service.start_session
        session = start(body.user_id, body.meals_per_week, body.max_cook_time_minutes)
        state_container.session_store.add(session)
        return _serialize_summary(session.summary())

    @app.get("/plans/{session_id}")
    async def plan_status(session_id: UUID, request: Request) -> dict[str, object]:
        """Return progress toward the goal."""
        session = _get_session(request, session_id)
        return _serialize_summary(session.summary())

    @app.get("/plans/{session_id}/candidate")
    async def current_candidate(
        session_id: UUID, request: Request
    ) -> dict[str, object]:
        """Return the card to show next, if any."""
        session = _get_session(request, session_id)
        meal = session.current_candidate()
        summary = session.summary()
        return {
            "meal": _serialize_meal(meal) if meal else None,
            "state": summary.state.value,
            "remaining": summary.remaining,
            "exhausted": summary.exhausted,
        }

    @app.post("/plans/{session_id}/decisions")
    async def decide(
        session_id: UUID, body: DecisionRequest, request: Request
    ) -> dict[str, object]:
        """Record a swipe on the current card."""
        session = _get_session(request, session_id)
        result = session.decide(body.meal_id, body.direction, body.strength)
        return {
            "decision": _serialize_decision(result.decision),
            "state": result.state.value,
            "remaining": result.remaining,
            "satisfied": result.satisfied,
        }

    @app.get("/plans/{session_id}/review")
    async def review(session_id: UUID, request: Request) -> dict[str, object]:
        """Return accepted meals and those marked for removal."""
        session = _get_session(request, session_id)
        accepted = session.enter_review()
        return {
            "accepted": [_serialize_decision(decision) for decision in accepted],
            "marked": session.reconciler.marked,
        }

    @app.post("/plans/{session_id}/retractions/confirm")
    async def confirm_retractions(
        session_id: UUID, request: Request
    ) -> dict[str, object]:
        """Remove marked meals and go back to swiping for that many."""
        session = _get_session(request, session_id)
        count = session.confirm_retractions()
        summary = _serialize_summary(session.summary())
        summary["retracted"] = count
        return summary

    @app.post("/plans/{session_id}/retractions/{meal_id}")
    async def mark_retraction(
        session_id: UUID, meal_id: str, request: Request
    ) -> dict[str, object]:
        """Mark an accepted meal for removal."""
        session = _get_session(request, session_id)
        session.mark_for_retraction(meal_id)
        return {"marked": session.reconciler.marked}

    @app.delete("/plans/{session_id}/retractions/{meal_id}")
    async def unmark_retraction(
        session_id: UUID, meal_id: str, request: Request
    ) -> dict[str, object]:
        """Keep a meal that was marked for removal."""
        session = _get_session(request, session_id)
        session.unmark_for_retraction(meal_id)
        return {"marked": session.reconciler.marked}

    @app.delete("/plans/{session_id}/retractions")
    async def cancel_review(session_id: UUID, request: Request) -> dict[str, object]:
        """Clear every removal mark."""
        session = _get_session(request, session_id)
        session.cancel_review()
        return {"marked": session.reconciler.marked}

    @app.post("/plans/{session_id}/finalize")
    async def finalize(
        session_id: UUID, request: Request, body: FinalizeRequest | None = None
    ) -> dict[str, object]:
        """Confirm the plan for the week."""
        session = _get_session(request, session_id)
        options = body or FinalizeRequest()
        week_start = options.week_start or current_week_start()
        plan = session.finalize(week_start, allow_partial=options.allow_partial)
        return {"week_start": week_start, **_serialize_plan(plan, session)}

    @app.post("/plans/{session_id}/grocery-list")
    async def grocery_list(session_id: UUID, request: Request) -> dict[str, object]:
        """Generate a grocery list for a finalized plan."""
        state_container: AppContainer = request.app.state.container
        session = _get_session(request, session_id)
        if state_container.grocery_service is None:
            raise HTTPException(
                status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
                detail="Grocery lists are not configured",
            )
        if session.final_plan is None:
            raise HTTPException(
                status_code=status.HTTP_409_CONFLICT,
                detail="Finalize the plan first",
            )
        grocery = await state_container.grocery_service.generate(
            session.final_plan, session.catalog
        )
        return grocery.model_dump()

    @app.delete("/plans/{session_id}")
    async def discard_plan(session_id: UUID, request: Request) -> dict[str, str]:
        """Drop a session from memory."""
        state_container: AppContainer = request.app.state.container
        state_container.session_store.remove(session_id)
        return {"status": "ok"}

    return app


def current_week_start(today: date | None = None) -> str:
    """Return the ISO date of the Monday starting the current week."""
    resolved = today or datetime.now(tz=UTC).date()
    return (resolved - timedelta(days=resolved.weekday())).isoformat()


def _get_session(request: Request, session_id: UUID) -> PlanSession:
    container: AppContainer = request.app.state.container
    return container.session_store.get(session_id)


def _status_for(exc: MealPlanError) -> int:
    if isinstance(exc, NotFoundError):
        return status.HTTP_404_NOT_FOUND
    if isinstance(exc, _INPUT_ERRORS):
        return status.HTTP_422_UNPROCESSABLE_ENTITY
    return status.HTTP_409_CONFLICT


def _serialize_meal(meal: Meal) -> dict[str, object]:
    return {
        "meal_id": meal.meal_id,
        "name": meal.name,
        "category": meal.category.value,
        "cuisine": meal.cuisine,
        "description": meal.description,
        "image_url": meal.image_url,
        "calories": meal.calories,
        "cook_time_minutes": meal.cook_time_minutes,
        "ingredients": list(meal.ingredients),
        "instructions": list(meal.instructions),
    }


def _serialize_decision(decision: SwipeDecision) -> dict[str, object]:
    return {
        "meal_id": decision.meal_id,
        "category": decision.category.value,
        "direction": decision.direction.value,
        "strength": decision.strength,
        "timestamp": decision.timestamp.isoformat(),
    }


def _serialize_summary(summary: SessionSummary) -> dict[str, object]:
    return {
        "session_id": str(summary.session_id),
        "user_id": summary.user_id,
        "state": summary.state.value,
        "weekly_target": summary.weekly_target,
        "target": summary.target,
        "remaining": summary.remaining,
        "accepted_count": summary.accepted_count,
        "meals_out": summary.meals_out,
        "exhausted": summary.exhausted,
        "marked": summary.marked,
    }


def _serialize_plan(plan: FinalPlan, session: PlanSession) -> dict[str, object]:
    sections: dict[str, list[dict[str, object]]] = {}
    for category, entries in plan.by_category().items():
        sections[category.value] = [
            {
                "meal_id": entry.meal_id,
                "name": meal.name if (meal := session.meal(entry.meal_id)) else None,
                "repeat_count": entry.repeat_count,
            }
            for entry in entries
        ]
    return {"total": plan.total, "meals": sections}
