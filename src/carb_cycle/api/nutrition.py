"""Food search endpoint backed by USDA FoodData Central."""

import logging
from dataclasses import asdict

import httpx
from fastapi import APIRouter, Depends, HTTPException, Query, Request, status

from carb_cycle.api.auth import get_container, require_api_token
from carb_cycle.services.nutrition import (
    RATE_LIMITED_STATUS,
    status_code_from_exception,
)

router = APIRouter(
    prefix="/nutrition", tags=["nutrition"], dependencies=[Depends(require_api_token)]
)

_logger = logging.getLogger(__name__)


@router.get("/search")
async def search_foods(
    request: Request,
    q: str = Query(min_length=1),
    page_size: int = Query(default=10, ge=1, le=50),
) -> dict[str, object]:
    """Search foods and return macros per 100 g."""
    if not q.strip():
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Search query is required",
        )
    try:
        page = await get_container(request).nutrition_service.search(q, page_size)
    except httpx.HTTPError as exc:
        if status_code_from_exception(exc) == RATE_LIMITED_STATUS:
            raise HTTPException(
                status_code=status.HTTP_429_TOO_MANY_REQUESTS,
                detail="Food database rate limit exceeded, try again later",
            ) from exc
        _logger.exception("Food search failed", extra={"query": q})
        raise HTTPException(
            status_code=status.HTTP_502_BAD_GATEWAY,
            detail="Failed to search nutrition data",
        ) from exc
    return asdict(page)
