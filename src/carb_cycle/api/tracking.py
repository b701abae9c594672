"""Daily tracking endpoints: intake check-offs, exercise and restrictions."""

from dataclasses import asdict
from datetime import date
from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException, Request, status

from carb_cycle.api.auth import get_container, require_api_token, resolve_day
from carb_cycle.api.models import (
    CompleteDayRequest,
    ExerciseUpdateRequest,
    IntakeItemRequest,
    RestrictionCheckInRequest,
)

router = APIRouter(
    prefix="/users", tags=["tracking"], dependencies=[Depends(require_api_token)]
)


@router.get("/{user_id}/intake/{day}")
async def get_intake(user_id: UUID, day: date, request: Request) -> dict[str, object]:
    """Return the day's prescription with its check-off state."""
    return asdict(get_container(request).intake_service.get_day(user_id, day))


@router.put("/{user_id}/intake/{day}/items")
async def set_intake_item(
    user_id: UUID, day: date, payload: IntakeItemRequest, request: Request
) -> dict[str, object]:
    """Check or uncheck one item."""
    try:
        day_intake = get_container(request).intake_service.set_item(
            user_id, day, payload.item, payload.completed
        )
    except ValueError as exc:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)
        ) from exc
    return asdict(day_intake)


@router.put("/{user_id}/intake/{day}/complete")
async def complete_day(
    user_id: UUID, day: date, payload: CompleteDayRequest, request: Request
) -> dict[str, object]:
    """Record whether the day's plan was followed."""
    record = get_container(request).intake_service.complete_day(
        user_id, day, payload.followed_plan, payload.notes
    )
    return asdict(record)


@router.get("/{user_id}/exercise/{day}")
async def get_exercise(
    user_id: UUID, day: date, request: Request
) -> dict[str, object]:
    """Return the exercise recommendation, log and status for a date."""
    return asdict(get_container(request).exercise_service.get_day(user_id, day))


@router.put("/{user_id}/exercise/{day}")
async def update_exercise(
    user_id: UUID, day: date, payload: ExerciseUpdateRequest, request: Request
) -> dict[str, object]:
    """Partially update the exercise log for a date."""
    record, completion = get_container(request).exercise_service.update_day(
        user_id, day, payload.model_dump(exclude_unset=True)
    )
    return {
        "record": asdict(record),
        "status": asdict(completion) if completion else None,
    }


@router.get("/{user_id}/diet-restrictions")
async def get_restrictions(
    user_id: UUID, request: Request, day: date | None = None
) -> dict[str, object]:
    """Return the first-month restriction state and streak."""
    container = get_container(request)
    restriction_status = container.restriction_service.get_status(
        user_id, resolve_day(container, day)
    )
    return asdict(restriction_status)


@router.put("/{user_id}/diet-restrictions")
async def check_in_restrictions(
    user_id: UUID,
    payload: RestrictionCheckInRequest,
    request: Request,
    day: date | None = None,
) -> dict[str, object]:
    """Record the day's restriction confirmations."""
    container = get_container(request)
    compliance = container.restriction_service.check_in(
        user_id,
        resolve_day(container, day),
        no_fruit=payload.no_fruit,
        no_sugar=payload.no_sugar,
        no_white_flour=payload.no_white_flour,
    )
    return {**asdict(compliance), "is_compliant": compliance.is_compliant}
