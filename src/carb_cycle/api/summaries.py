"""Cycle plan and summary endpoints."""

from dataclasses import asdict
from uuid import UUID

from fastapi import APIRouter, Depends, Request, status

from carb_cycle.api.auth import get_container, local_today, require_api_token
from carb_cycle.api.models import SummaryRequest, UpdatePlanRequest

router = APIRouter(
    prefix="/plans", tags=["summaries"], dependencies=[Depends(require_api_token)]
)


@router.get("/{plan_id}")
async def get_plan(plan_id: UUID, request: Request) -> dict[str, object]:
    """Return a plan with every day's meal plan, intake and any summary."""
    container = get_container(request)
    detail = container.plan_service.get_plan_detail(plan_id)
    summary = container.summary_service.find(plan_id)
    return {**asdict(detail), "summary": asdict(summary) if summary else None}


@router.put("/{plan_id}")
async def update_plan(
    plan_id: UUID, payload: UpdatePlanRequest, request: Request
) -> dict[str, object]:
    """Change a plan's status or end date, e.g. mark it completed."""
    container = get_container(request)
    plan = container.plan_service.update_plan(
        plan_id,
        local_today(container),
        status=payload.status,
        end_date=payload.end_date,
    )
    return asdict(plan)


@router.delete("/{plan_id}")
async def cancel_plan(plan_id: UUID, request: Request) -> dict[str, object]:
    """Cancel a plan; its days and history are kept."""
    container = get_container(request)
    plan = container.plan_service.cancel_plan(plan_id, local_today(container))
    return asdict(plan)


@router.post("/{plan_id}/summary", status_code=status.HTTP_201_CREATED)
async def generate_summary(
    plan_id: UUID, request: Request, payload: SummaryRequest | None = None
) -> dict[str, object]:
    """Compute and store the plan's summary."""
    notes = payload.notes if payload else None
    summary = get_container(request).summary_service.generate(plan_id, notes)
    return asdict(summary)


@router.get("/{plan_id}/summary")
async def get_summary(plan_id: UUID, request: Request) -> dict[str, object]:
    """Return the stored summary."""
    return asdict(get_container(request).summary_service.get(plan_id))
