"""User, target and cycle plan endpoints."""

from dataclasses import asdict
from datetime import date
from uuid import UUID

from fastapi import APIRouter, Depends, Request, status

from carb_cycle.api.auth import (
    get_container,
    local_today,
    require_api_token,
    resolve_day,
)
from carb_cycle.api.models import (
    CreateUserRequest,
    StartPlanRequest,
    UpdateProfileRequest,
)
from carb_cycle.planning.exercise import generate_exercise_plan

router = APIRouter(
    prefix="/users", tags=["users"], dependencies=[Depends(require_api_token)]
)


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_user(
    payload: CreateUserRequest, request: Request
) -> dict[str, object]:
    """Create a user and record their starting body metrics."""
    container = get_container(request)
    user = container.user_service.create_user(
        payload.model_dump(), day=local_today(container)
    )
    return asdict(user)


@router.get("/{user_id}")
async def get_user(user_id: UUID, request: Request) -> dict[str, object]:
    """Return a user profile."""
    return asdict(get_container(request).user_service.get_user(user_id))


@router.patch("/{user_id}")
async def update_user(
    user_id: UUID, payload: UpdateProfileRequest, request: Request
) -> dict[str, object]:
    """Update body data; weight or body-fat changes are logged for today."""
    container = get_container(request)
    user = container.user_service.update_profile(
        user_id, payload.model_dump(exclude_unset=True), day=local_today(container)
    )
    return asdict(user)


@router.get("/{user_id}/targets")
async def get_targets(
    user_id: UUID, request: Request, day: date | None = None
) -> dict[str, object]:
    """Return the day's macro targets and suggested portions."""
    container = get_container(request)
    resolved = resolve_day(container, day)
    day_targets = container.plan_service.targets_for_day(user_id, resolved)
    return {"day": resolved, **asdict(day_targets)}


@router.post("/{user_id}/plans", status_code=status.HTTP_201_CREATED)
async def start_plan(
    user_id: UUID, request: Request, payload: StartPlanRequest | None = None
) -> dict[str, object]:
    """Start a new plan, cancelling the active one."""
    container = get_container(request)
    today = local_today(container)
    body = payload or StartPlanRequest()
    plan, meal_plans = container.plan_service.start_plan(
        user_id,
        start_date=body.start_date or today,
        today=today,
        cycle_days=body.cycle_days,
    )
    return {
        "plan": asdict(plan),
        "daily_meal_plans": [asdict(meal_plan) for meal_plan in meal_plans],
    }


@router.get("/{user_id}/plans")
async def list_plans(user_id: UUID, request: Request) -> dict[str, object]:
    """Return all plans for a user, newest first."""
    plans = get_container(request).plan_service.list_plans(user_id)
    return {"plans": [asdict(plan) for plan in plans]}


@router.get("/{user_id}/plans/current")
async def current_plan(
    user_id: UUID, request: Request, day: date | None = None
) -> dict[str, object]:
    """Return the active plan with progress as of day."""
    container = get_container(request)
    progress = container.plan_service.get_progress(
        user_id, resolve_day(container, day)
    )
    return asdict(progress)


@router.get("/{user_id}/daily-plan/{day}")
async def daily_plan(user_id: UUID, day: date, request: Request) -> dict[str, object]:
    """Return the stored meal plan and the exercise guidance for a date."""
    plan, meal_plan = get_container(request).plan_service.get_daily_meal_plan(
        user_id, day
    )
    return {
        "plan_id": plan.id,
        "meal_plan": asdict(meal_plan),
        "exercise": asdict(generate_exercise_plan(meal_plan.carb_day_type)),
    }


@router.get("/{user_id}/summaries")
async def summary_history(user_id: UUID, request: Request) -> dict[str, object]:
    """Return the user's summarized plans, newest first."""
    entries = get_container(request).summary_service.history(user_id)
    return {"summaries": [asdict(entry) for entry in entries]}
