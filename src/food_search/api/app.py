"""FastAPI application factory."""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI, HTTPException, Query, Request, status
from fastapi.responses import JSONResponse

from food_search.app_logging import configure_logging
from food_search.containers import AppContainer
from food_search.domain.errors import ProviderError
from food_search.domain.nutrition import NormalizedFoodItem, PortionResult


def create_app(container: AppContainer) -> FastAPI:
    """Create a FastAPI app configured with dependencies."""
    configure_logging(logging.DEBUG if container.settings.debug else logging.INFO)
    logger = logging.getLogger(__name__)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        yield
        await app.state.container.close_resources()

    app = FastAPI(lifespan=lifespan)
    app.state.container = container

    @app.exception_handler(ProviderError)
    async def provider_error_handler(
        request: Request, exc: ProviderError
    ) -> JSONResponse:
        logger.warning("Food provider unavailable for %s: %s", request.url.path, exc)
        return JSONResponse(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            content={"detail": "search temporarily unavailable"},
        )

    @app.get("/health")
    async def health() -> dict[str, str]:
        """Simple health check endpoint."""
        return {"status": "ok"}

    @app.get("/foods/search")
    async def search_foods(
        request: Request,
        q: str = Query(min_length=1),
        limit: int = Query(default=50, ge=1, le=200),
    ) -> dict[str, object]:
        """Return ranked foods for a free-text query."""
        state_container: AppContainer = request.app.state.container
        results = await state_container.nutrition_service.search_and_rank(q, limit)
        return {"query": q, "results": [item.to_public_dict() for item in results]}

    @app.get("/foods/{fdc_id}")
    async def food_detail(fdc_id: int, request: Request) -> dict[str, object]:
        """Return a single normalized food."""
        item = await _require_food(request, fdc_id)
        return item.to_public_dict()

    @app.get("/foods/{fdc_id}/portion")
    async def food_portion(
        fdc_id: int, request: Request, grams: float | None = Query(default=None)
    ) -> dict[str, object]:
        """Return nutrition for a portion, defaulting to the food's serving."""
        state_container: AppContainer = request.app.state.container
        found = await state_container.nutrition_service.food_portion(fdc_id, grams)
        if found is None:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND)
        item, portion = found
        return {"food": item.to_public_dict(), "portion": _portion_dict(portion)}

    return app


async def _require_food(request: Request, fdc_id: int) -> NormalizedFoodItem:
    container: AppContainer = request.app.state.container
    item = await container.nutrition_service.get_food(fdc_id)
    if item is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND)
    return item


def _portion_dict(portion: PortionResult) -> dict[str, object]:
    return {
        "grams": portion.grams,
        "calories": portion.calories,
        "protein": portion.protein_g,
        "carbs": portion.carbs_g,
        "fat": portion.fat_g,
        "fiber": portion.fiber_g,
        "sugar": portion.sugar_g,
        "sodium": portion.sodium_mg,
    }
