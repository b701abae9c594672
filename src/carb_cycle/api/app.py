"""FastAPI application factory."""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse

from carb_cycle.api.body_metrics import router as body_metrics_router
from carb_cycle.api.nutrition import router as nutrition_router
from carb_cycle.api.summaries import router as summaries_router
from carb_cycle.api.tracking import router as tracking_router
from carb_cycle.api.users import router as users_router
from carb_cycle.app_logging import configure_logging
from carb_cycle.containers import AppContainer
from carb_cycle.domain.errors import NotFoundError, RestrictionWindowClosedError


def create_app(container: AppContainer) -> FastAPI:
    """Create a FastAPI app configured with dependencies."""
    configure_logging()
    logger = logging.getLogger(__name__)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        yield
        await app.state.container.close_resources()

    app = FastAPI(title="Carb Cycle", lifespan=lifespan)
    app.state.container = container

    app.include_router(users_router)
    app.include_router(body_metrics_router)
    app.include_router(tracking_router)
    app.include_router(summaries_router)
    app.include_router(nutrition_router)

    @app.exception_handler(NotFoundError)
    async def not_found(request: Request, exc: NotFoundError) -> JSONResponse:
        logger.info("Not found on %s: %s", request.url.path, exc)
        return JSONResponse(
            status_code=status.HTTP_404_NOT_FOUND, content={"detail": str(exc)}
        )

    @app.exception_handler(RestrictionWindowClosedError)
    async def restriction_closed(
        request: Request, exc: RestrictionWindowClosedError
    ) -> JSONResponse:
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST, content={"detail": str(exc)}
        )

    @app.get("/health")
    async def health() -> dict[str, str]:
        """Simple health check endpoint."""
        return {"status": "ok"}

    return app
