"""Multi-page comprehensive search against the food provider."""

import asyncio
import logging
import math
from dataclasses import dataclass

from food_search.adapters.fdc_client import MAX_PAGE_SIZE, FdcClient
from food_search.domain.errors import ProviderError
from food_search.domain.nutrition import RawCandidate, SearchPage, SearchResult

DEFAULT_BATCH_SIZE = 5
DEFAULT_MAX_PAGES = 20

_logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PageOutcome:
    """Result of fetching one page: either foods or the error that occurred."""

    page_number: int
    foods: tuple[RawCandidate, ...] = ()
    error: ProviderError | None = None

    @property
    def ok(self) -> bool:
        """Whether the page was fetched successfully."""
        return self.error is None


@dataclass
class ComprehensiveSearch:
    """Fetch several result pages in bounded concurrent batches."""

    fdc_client: FdcClient
    page_size: int = MAX_PAGE_SIZE
    batch_size: int = DEFAULT_BATCH_SIZE
    max_pages: int = DEFAULT_MAX_PAGES
    retry_attempts: int = 0
    retry_delay_seconds: float = 0.3
    debug: bool = False

    def __post_init__(self) -> None:
        self.page_size = max(1, min(self.page_size, MAX_PAGE_SIZE))

    async def search(self, query: str, max_results: int) -> SearchResult:
        """Collect up to ``max_results`` candidates for a query.

        Page 1 is fetched first to learn the total hit count and any failure
        there is raised. Later pages are fetched ``batch_size`` at a time; a
        failed later page is logged and skipped.
        """
        first_page = await self._fetch_with_retry(query, 1)
        total_hits = first_page.total_hits
        foods: list[RawCandidate] = list(first_page.foods)
        pages_fetched = [1]
        failed_pages: list[int] = []

        pages_needed = self.pages_needed(max_results, total_hits)
        for batch in _batches(range(2, pages_needed + 1), self.batch_size):
            if len(foods) >= max_results:
                break
            outcomes = await asyncio.gather(
                *(self._fetch_outcome(query, page_number) for page_number in batch)
            )
            for outcome in outcomes:
                if outcome.ok:
                    foods.extend(outcome.foods)
                    pages_fetched.append(outcome.page_number)
                else:
                    failed_pages.append(outcome.page_number)
                    _logger.warning(
                        "Food search page %s failed for query=%r: %s",
                        outcome.page_number,
                        query,
                        outcome.error,
                    )

        if self.debug:
            _logger.info(
                "Food search: query=%r total_hits=%s pages=%s failed=%s results=%s",
                query,
                total_hits,
                pages_fetched,
                failed_pages,
                min(len(foods), max_results),
            )
        return SearchResult(
            foods=tuple(foods[: max(max_results, 0)]),
            total_hits=total_hits,
            pages_fetched=tuple(pages_fetched),
            failed_pages=tuple(failed_pages),
        )

    def pages_needed(self, max_results: int, total_hits: int) -> int:
        """Return how many pages to request, page 1 included."""
        if max_results <= 0 or total_hits <= 0:
            return 1
        return max(
            1,
            min(
                math.ceil(max_results / self.page_size),
                math.ceil(total_hits / self.page_size),
                self.max_pages,
            ),
        )

    async def _fetch_outcome(self, query: str, page_number: int) -> PageOutcome:
        """Fetch a page, capturing provider failures instead of raising."""
        try:
            page = await self._fetch_with_retry(query, page_number)
        except ProviderError as exc:
            return PageOutcome(page_number=page_number, error=exc)
        return PageOutcome(page_number=page_number, foods=page.foods)

    async def _fetch_with_retry(self, query: str, page_number: int) -> SearchPage:
        """Fetch a page with a short retry."""
        attempt = 0
        while True:
            try:
                return await self.fdc_client.search_foods(
                    query, page_number=page_number, page_size=self.page_size
                )
            except ProviderError as exc:
                attempt += 1
                if self.debug:
                    _logger.warning(
                        "Food search page %s failed (attempt %s/%s, status=%s): %s",
                        page_number,
                        attempt,
                        self.retry_attempts + 1,
                        exc.status if exc.status is not None else "n/a",
                        exc,
                    )
                if attempt > self.retry_attempts:
                    raise
                await asyncio.sleep(self.retry_delay_seconds)


def _batches(pages: range, size: int) -> list[list[int]]:
    """Split page numbers into consecutive batches of at most ``size``."""
    step = max(size, 1)
    return [list(pages[start : start + step]) for start in range(0, len(pages), step)]
