"""USDA FoodData Central API client."""

from dataclasses import dataclass
from typing import Protocol

import httpx
from pydantic import ValidationError

from food_search.adapters.fdc_models import FdcFood, FdcSearchResponse
from food_search.domain.errors import ProviderError
from food_search.domain.nutrition import DataType, RawCandidate, SearchPage

MAX_PAGE_SIZE = 25
SEARCH_DATA_TYPES: tuple[str, ...] = tuple(data_type.value for data_type in DataType)


class FdcClient(Protocol):
    """Interface for FoodData Central API interactions."""

    async def search_foods(
        self, query: str, page_number: int = 1, page_size: int = MAX_PAGE_SIZE
    ) -> SearchPage:
        """Fetch one page of search results."""

    async def get_food(self, fdc_id: int) -> RawCandidate | None:
        """Fetch a food by FDC id, or None when it does not exist."""


@dataclass
class HttpxFdcClient(FdcClient):
    """HTTPX-backed FDC client."""

    api_key: str
    base_url: str
    http_client: httpx.AsyncClient
    timeout_seconds: float = 15

    @classmethod
    def create(
        cls, api_key: str, base_url: str, timeout_seconds: float = 15
    ) -> "HttpxFdcClient":
        """Create an FDC client with a managed httpx session."""
        return cls(
            api_key=api_key,
            base_url=base_url,
            http_client=httpx.AsyncClient(),
            timeout_seconds=timeout_seconds,
        )

    async def search_foods(
        self, query: str, page_number: int = 1, page_size: int = MAX_PAGE_SIZE
    ) -> SearchPage:
        """Search foods by query across all supported data types."""
        url = f"{self.base_url}/foods/search"
        body = {
            "query": query,
            "dataType": list(SEARCH_DATA_TYPES),
            "pageSize": min(page_size, MAX_PAGE_SIZE),
            "pageNumber": page_number,
            "sortBy": "fdcId",
            "sortOrder": "desc",
        }
        try:
            response = await self.http_client.post(
                url,
                params={"api_key": self.api_key},
                json=body,
                timeout=self.timeout_seconds,
            )
        except httpx.HTTPError as exc:
            raise ProviderError(f"FDC search request failed: {exc}") from exc
        _raise_for_status(response, action="search")
        try:
            payload = FdcSearchResponse.model_validate(response.json())
        except (ValueError, ValidationError) as exc:
            raise ProviderError(
                "FDC search returned an unreadable payload",
                status=response.status_code,
                body=response.text,
            ) from exc
        return payload.to_domain()

    async def get_food(self, fdc_id: int) -> RawCandidate | None:
        """Fetch a food by FDC id."""
        url = f"{self.base_url}/food/{fdc_id}"
        try:
            response = await self.http_client.get(
                url,
                params={"api_key": self.api_key},
                timeout=self.timeout_seconds,
            )
        except httpx.HTTPError as exc:
            raise ProviderError(f"FDC food request failed: {exc}") from exc
        if response.status_code == httpx.codes.NOT_FOUND:
            return None
        _raise_for_status(response, action=f"food {fdc_id}")
        try:
            food = FdcFood.model_validate(response.json())
        except (ValueError, ValidationError) as exc:
            raise ProviderError(
                f"FDC food {fdc_id} returned an unreadable payload",
                status=response.status_code,
                body=response.text,
            ) from exc
        return food.to_domain()

    async def close(self) -> None:
        """Close the underlying HTTP session."""
        await self.http_client.aclose()


def _raise_for_status(response: httpx.Response, *, action: str) -> None:
    """Translate non-success responses into provider errors."""
    if response.is_success:
        return
    raise ProviderError(
        f"FDC {action} failed: {response.status_code} {response.reason_phrase}",
        status=response.status_code,
        body=response.text,
    )
