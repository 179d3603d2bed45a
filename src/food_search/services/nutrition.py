"""Nutrition service exposing food search and portion scaling."""

import logging
from dataclasses import dataclass

from food_search.adapters.fdc_client import FdcClient
from food_search.domain.nutrition import NormalizedFoodItem, PortionResult
from food_search.services.normalizer import normalize_candidate
from food_search.services.portions import default_portion_grams, scale_portion
from food_search.services.ranking import rank_candidates
from food_search.services.relevance import DEFAULT_RULES, RelevanceRules
from food_search.services.search import ComprehensiveSearch

CANDIDATES_PER_RESULT = 4
MAX_CANDIDATES = 200

_logger = logging.getLogger(__name__)


@dataclass
class NutritionService:
    """Entry point for searching, ranking and portioning foods."""

    fdc_client: FdcClient
    search: ComprehensiveSearch
    rules: RelevanceRules = DEFAULT_RULES
    debug: bool = False

    async def search_and_rank(
        self, query: str, limit: int = 50
    ) -> list[NormalizedFoodItem]:
        """Search the provider and return the best ``limit`` matches."""
        cleaned = query.strip()
        if not cleaned or limit <= 0:
            return []
        max_results = min(limit * CANDIDATES_PER_RESULT, MAX_CANDIDATES)
        result = await self.search.search(cleaned, max_results)
        ranked = rank_candidates(result.foods, cleaned, limit, self.rules)
        if self.debug:
            _logger.info(
                "Nutrition search: query=%s candidates=%s results=%s",
                cleaned,
                len(result.foods),
                len(ranked),
            )
        return ranked

    def scale_portion(self, item: NormalizedFoodItem, grams: float) -> PortionResult:
        """Scale a food record to a portion size in grams."""
        return scale_portion(item, grams)

    async def get_food(self, fdc_id: int) -> NormalizedFoodItem | None:
        """Look up a single food by provider id."""
        candidate = await self.fdc_client.get_food(fdc_id)
        if candidate is None:
            if self.debug:
                _logger.info("Nutrition food FDC: fdc_id=%s not found", fdc_id)
            return None
        return normalize_candidate(candidate)

    async def food_portion(
        self, fdc_id: int, grams: float | None = None
    ) -> tuple[NormalizedFoodItem, PortionResult] | None:
        """Look up a food and scale it, defaulting to its serving size."""
        candidate = await self.fdc_client.get_food(fdc_id)
        if candidate is None:
            return None
        item = normalize_candidate(candidate)
        if grams is None:
            grams = default_portion_grams(candidate)
        return item, scale_portion(item, grams)
