"""Filtering, ordering and truncation of scored search candidates."""

import logging
from collections.abc import Iterable

from food_search.domain.nutrition import (
    NormalizedFoodItem,
    RawCandidate,
    ScoredFoodItem,
)
from food_search.services.normalizer import normalize_candidate
from food_search.services.relevance import (
    DEFAULT_RULES,
    RelevanceRules,
    score_relevance,
)

_logger = logging.getLogger(__name__)


def score_candidates(
    candidates: Iterable[RawCandidate],
    query: str,
    rules: RelevanceRules = DEFAULT_RULES,
) -> list[ScoredFoodItem]:
    """Normalize and score candidates, dropping records without calories."""
    scored: list[ScoredFoodItem] = []
    for candidate in candidates:
        item = normalize_candidate(candidate)
        if item.calories <= 0:
            continue
        scored.append(
            ScoredFoodItem(
                item=item,
                relevance_score=score_relevance(candidate, query, rules),
            )
        )
    scored.sort(key=_ranking_key)
    return scored


def rank_candidates(
    candidates: Iterable[RawCandidate],
    query: str,
    limit: int,
    rules: RelevanceRules = DEFAULT_RULES,
) -> list[NormalizedFoodItem]:
    """Return the ``limit`` most relevant usable food records."""
    if limit <= 0:
        return []
    scored = score_candidates(candidates, query, rules)
    if _logger.isEnabledFor(logging.DEBUG):
        for index, entry in enumerate(scored[:10], start=1):
            _logger.debug(
                "%s. [%.3f] [%s] %s",
                index,
                entry.relevance_score,
                entry.item.data_type,
                entry.item.name,
            )
        _logger.debug("Ranked %s results for query=%r", len(scored), query)
    return [entry.item for entry in scored[:limit]]


def _ranking_key(entry: ScoredFoodItem) -> tuple[float, int, int, str, str]:
    """Score first, then basic sources, then shorter names.

    The provider id and name close out the key so equal entries never depend
    on sort stability.
    """
    item = entry.item
    return (
        -entry.relevance_score,
        0 if item.is_basic else 1,
        len(item.name),
        item.fdc_id,
        item.name,
    )
