"""Dependency container wiring for the application."""

from collections.abc import Awaitable, Callable
from dataclasses import dataclass

from food_search.adapters.fdc_client import HttpxFdcClient
from food_search.config import Settings, resolve_api_key
from food_search.services.nutrition import NutritionService
from food_search.services.search import ComprehensiveSearch


@dataclass
class AppContainer:
    """Holds application-wide dependencies."""

    settings: Settings
    fdc_client: HttpxFdcClient
    nutrition_service: NutritionService
    close_resources: Callable[[], Awaitable[None]]


def build_container(settings: Settings | None = None) -> AppContainer:
    """Create the default dependency container."""
    resolved_settings = settings or Settings()
    fdc_client = HttpxFdcClient.create(
        api_key=resolve_api_key(resolved_settings),
        base_url=resolved_settings.fdc_base_url,
        timeout_seconds=resolved_settings.fdc_timeout_seconds,
    )
    search = ComprehensiveSearch(
        fdc_client=fdc_client,
        page_size=resolved_settings.search_page_size,
        batch_size=resolved_settings.search_batch_size,
        max_pages=resolved_settings.search_max_pages,
        retry_attempts=resolved_settings.search_retry_attempts,
        retry_delay_seconds=resolved_settings.search_retry_delay_seconds,
        debug=resolved_settings.debug,
    )
    nutrition_service = NutritionService(
        fdc_client=fdc_client,
        search=search,
        debug=resolved_settings.debug,
    )

    async def close_resources() -> None:
        await fdc_client.close()

    return AppContainer(
        settings=resolved_settings,
        fdc_client=fdc_client,
        nutrition_service=nutrition_service,
        close_resources=close_resources,
    )
