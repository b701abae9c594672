"""Shared request dependencies: token auth, container and local date."""

from __future__ import annotations

from datetime import date, datetime
from typing import TYPE_CHECKING
from zoneinfo import ZoneInfo

from fastapi import Depends, Header, HTTPException, Request, status

if TYPE_CHECKING:
    from carb_cycle.containers import AppContainer


def get_container(request: Request) -> AppContainer:
    """Return the dependency container attached to the app."""
    return request.app.state.container


def _get_api_token(request: Request) -> str:
    return get_container(request).settings.api_token


async def require_api_token(
    x_api_token: str | None = Header(default=None),
    api_token: str = Depends(_get_api_token),
) -> None:
    """Ensure requests include a valid API token."""
    if not x_api_token or x_api_token != api_token:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED)


def local_today(container: AppContainer) -> date:
    """Return the current date in the configured timezone."""
    return datetime.now(tz=ZoneInfo(container.settings.timezone)).date()


def resolve_day(container: AppContainer, day: date | None) -> date:
    """Return day, defaulting to today in the configured timezone."""
    return day if day is not None else local_today(container)
