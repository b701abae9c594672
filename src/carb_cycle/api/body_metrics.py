"""Body measurement history endpoints."""

from dataclasses import asdict
from datetime import date
from uuid import UUID

from fastapi import APIRouter, Depends, Query, Request, status

from carb_cycle.api.auth import (
    get_container,
    local_today,
    require_api_token,
    resolve_day,
)
from carb_cycle.api.models import LogBodyMetricsRequest, UpdateBodyMetricsRequest
from carb_cycle.domain.metrics import TrendPeriod

router = APIRouter(
    prefix="/users", tags=["body-metrics"], dependencies=[Depends(require_api_token)]
)


@router.get("/{user_id}/body-metrics")
async def list_body_metrics(
    user_id: UUID,
    request: Request,
    start_date: date | None = None,
    end_date: date | None = None,
    limit: int | None = Query(default=None, ge=1, le=365),
) -> dict[str, object]:
    """Return measurements oldest first with the change across them."""
    history = get_container(request).body_metrics_service.history(
        user_id, start_date, end_date, limit
    )
    return asdict(history)


@router.post("/{user_id}/body-metrics", status_code=status.HTTP_201_CREATED)
async def log_body_metrics(
    user_id: UUID, payload: LogBodyMetricsRequest, request: Request
) -> dict[str, object]:
    """Record a measurement and update the profile with it."""
    container = get_container(request)
    metrics = container.body_metrics_service.log(
        user_id,
        payload.day or local_today(container),
        payload.weight_kg,
        payload.body_fat_fraction,
    )
    return asdict(metrics)


@router.get("/{user_id}/body-metrics/latest")
async def latest_body_metrics(
    user_id: UUID, request: Request, day: date | None = None
) -> dict[str, object]:
    container = get_container(request)
    metrics = container.body_metrics_service.latest(
        user_id, resolve_day(container, day)
    )
    return asdict(metrics)


@router.get("/{user_id}/body-metrics/trends")
async def body_metrics_trends(
    user_id: UUID,
    request: Request,
    period: TrendPeriod = TrendPeriod.MONTH,
    day: date | None = None,
) -> dict[str, object]:
    """Return trend points, weekly averages and weekly rates of change."""
    container = get_container(request)
    trends = container.body_metrics_service.trends(
        user_id, resolve_day(container, day), period
    )
    return {"period": period, **asdict(trends)}


@router.get("/{user_id}/body-metrics/{day}")
async def get_body_metrics(
    user_id: UUID, day: date, request: Request
) -> dict[str, object]:
    return asdict(get_container(request).body_metrics_service.get(user_id, day))


@router.patch("/{user_id}/body-metrics/{day}")
async def update_body_metrics(
    user_id: UUID, day: date, payload: UpdateBodyMetricsRequest, request: Request
) -> dict[str, object]:
    """Correct a logged measurement."""
    metrics = get_container(request).body_metrics_service.update(
        user_id, day, payload.model_dump(exclude_unset=True)
    )
    return asdict(metrics)


@router.delete("/{user_id}/body-metrics/{day}")
async def delete_body_metrics(
    user_id: UUID, day: date, request: Request
) -> dict[str, object]:
    get_container(request).body_metrics_service.delete(user_id, day)
    return {"success": True}
