"""Shared test fixtures."""

import asyncio
import logging
from dataclasses import dataclass, field

import pytest

from food_search.adapters.fdc_client import FdcClient
from food_search.config import Settings
from food_search.containers import AppContainer
from food_search.domain.errors import ProviderError
from food_search.domain.nutrition import RawCandidate, RawNutrient, SearchPage
from food_search.services.nutrition import NutritionService
from food_search.services.search import ComprehensiveSearch


def make_candidate(  # noqa: PLR0913
    fdc_id: int,
    description: str,
    data_type: str | None = "Foundation",
    calories: float = 100.0,
    protein: float = 0.0,
    brand_name: str | None = None,
    brand_owner: str | None = None,
    extra_nutrients: tuple[RawNutrient, ...] = (),
) -> RawCandidate:
    """Build a raw candidate with calorie and protein entries."""
    nutrients = (
        RawNutrient(number="208", value=calories, unit="KCAL", name="Energy"),
        RawNutrient(number="203", value=protein, unit="G", name="Protein"),
        *extra_nutrients,
    )
    return RawCandidate(
        fdc_id=fdc_id,
        description=description,
        data_type=data_type,
        nutrients=nutrients,
        brand_name=brand_name,
        brand_owner=brand_owner,
    )


@dataclass
class FakeFdcClient(FdcClient):
    """Fake FDC client serving generated or explicit pages."""

    total_hits: int = 0
    pages: dict[int, list[RawCandidate]] = field(default_factory=dict)
    foods: dict[int, RawCandidate] = field(default_factory=dict)
    failing_pages: set[int] = field(default_factory=set)
    flaky_pages: dict[int, int] = field(default_factory=dict)
    requested_pages: list[int] = field(default_factory=list)
    completed_pages: list[int] = field(default_factory=list)
    completed_at_start: dict[int, list[int]] = field(default_factory=dict)
    in_flight: int = 0
    max_in_flight: int = 0

    async def search_foods(
        self, query: str, page_number: int = 1, page_size: int = 25
    ) -> SearchPage:
        self.requested_pages.append(page_number)
        self.completed_at_start[page_number] = list(self.completed_pages)
        self.in_flight += 1
        self.max_in_flight = max(self.max_in_flight, self.in_flight)
        try:
            await asyncio.sleep(0)
            if page_number in self.failing_pages:
                raise ProviderError("boom", status=500, body="server error")
            if self.flaky_pages.get(page_number, 0) > 0:
                self.flaky_pages[page_number] -= 1
                raise ProviderError("flaky", status=503, body="try again")
            foods = self.pages.get(page_number)
            if foods is None:
                foods = _generated_page(page_number, page_size, self.total_hits)
            return SearchPage(
                foods=tuple(foods),
                total_hits=self.total_hits,
                current_page=page_number,
                total_pages=-(-self.total_hits // page_size),
            )
        finally:
            self.in_flight -= 1
            self.completed_pages.append(page_number)

    async def get_food(self, fdc_id: int) -> RawCandidate | None:
        return self.foods.get(fdc_id)

    async def close(self) -> None:
        return None


def _generated_page(
    page_number: int, page_size: int, total_hits: int
) -> list[RawCandidate]:
    start = (page_number - 1) * page_size
    count = max(0, min(page_size, total_hits - start))
    return [
        make_candidate(start + index + 1, f"Food item {start + index + 1}")
        for index in range(count)
    ]


@pytest.fixture(autouse=True)
def _reset_app_logger():
    yield
    logger = logging.getLogger("food_search")
    logger.handlers.clear()
    logger.propagate = True
    logger.setLevel(logging.NOTSET)


@pytest.fixture
def settings(monkeypatch) -> Settings:
    monkeypatch.delenv("FDC_API_KEY", raising=False)
    return Settings(_env_file=None, fdc_api_key="test-key")


@pytest.fixture
def fdc_client() -> FakeFdcClient:
    return FakeFdcClient()


@pytest.fixture
def nutrition_service(fdc_client: FakeFdcClient) -> NutritionService:
    return NutritionService(
        fdc_client=fdc_client,
        search=ComprehensiveSearch(fdc_client, retry_delay_seconds=0),
    )


@pytest.fixture
def container(
    settings: Settings,
    fdc_client: FakeFdcClient,
    nutrition_service: NutritionService,
) -> AppContainer:
    async def close_resources() -> None:
        await fdc_client.close()

    return AppContainer(
        settings=settings,
        fdc_client=fdc_client,  # type: ignore[arg-type]
        nutrition_service=nutrition_service,
        close_resources=close_resources,
    )
