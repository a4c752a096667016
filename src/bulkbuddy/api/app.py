"""FastAPI application factory."""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from bulkbuddy.api.calculator import router as calculator_router
from bulkbuddy.api.foods import router as foods_router
from bulkbuddy.api.meal_plans import router as meal_plans_router
from bulkbuddy.api.recipes import admin_router as admin_recipes_router
from bulkbuddy.api.recipes import router as recipes_router
from bulkbuddy.api.recipes import user_router as user_recipes_router
from bulkbuddy.app_logging import configure_logging
from bulkbuddy.config import parse_allowed_origins
from bulkbuddy.containers import AppContainer
from bulkbuddy.errors import (
    BulkBuddyError,
    InvalidInput,
    InvalidMealPlanRequest,
    MealPlanEntryNotFound,
    MealPlanNotFound,
    RecipeForbidden,
    RecipeNotFound,
    UpstreamError,
)

_STATUS_BY_ERROR: dict[type[BulkBuddyError], int] = {
    InvalidMealPlanRequest: status.HTTP_400_BAD_REQUEST,
    MealPlanNotFound: status.HTTP_400_BAD_REQUEST,
    InvalidInput: status.HTTP_400_BAD_REQUEST,
    RecipeNotFound: status.HTTP_404_NOT_FOUND,
    RecipeForbidden: status.HTTP_403_FORBIDDEN,
    MealPlanEntryNotFound: status.HTTP_404_NOT_FOUND,
    UpstreamError: status.HTTP_502_BAD_GATEWAY,
}


def _status_for(exc: BulkBuddyError) -> int:
    for error_type in type(exc).__mro__:
        if error_type in _STATUS_BY_ERROR:
            return _STATUS_BY_ERROR[error_type]
    return status.HTTP_500_INTERNAL_SERVER_ERROR


def create_app(container: AppContainer) -> FastAPI:
    """Create a FastAPI app configured with dependencies."""
    configure_logging(
        logging.DEBUG if container.settings.debug else logging.INFO
    )
    logger = logging.getLogger(__name__)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        yield
        try:
            await app.state.container.close_resources()
        except Exception:
            logger.exception("Failed to close HTTP clients")

    app = FastAPI(title="BulkBuddy", lifespan=lifespan)
    app.state.container = container
    app.add_middleware(
        CORSMiddleware,
        allow_origins=parse_allowed_origins(container.settings.cors_allowed_origins),
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(calculator_router)
    app.include_router(foods_router)
    app.include_router(meal_plans_router)
    app.include_router(recipes_router)
    app.include_router(user_recipes_router)
    app.include_router(admin_recipes_router)

    @app.exception_handler(BulkBuddyError)
    async def handle_service_error(
        request: Request, exc: BulkBuddyError
    ) -> JSONResponse:
        status_code = _status_for(exc)
        body: dict[str, object] = {"detail": exc.message}
        if isinstance(exc, UpstreamError) and exc.details is not None:
            body["details"] = exc.details
        if status_code >= status.HTTP_500_INTERNAL_SERVER_ERROR:
            logger.warning(
                "Request failed",
                extra={"path": request.url.path, "error": exc.message},
            )
        return JSONResponse(status_code=status_code, content=body)

    @app.get("/health")
    async def health() -> dict[str, str]:
        """Simple health check endpoint."""
        return {"status": "ok"}

    return app
