"""Portion scaling and portion size estimation."""

import math
import re
from collections.abc import Mapping
from types import MappingProxyType

from food_search.domain.nutrition import (
    NormalizedFoodItem,
    PortionResult,
    RawCandidate,
)

DEFAULT_PORTION_GRAMS = 100
GRAMS_PER_OUNCE = 28.35

# Checked in order; the first keyword found in a description wins.
PORTION_KEYWORDS: Mapping[str, int] = MappingProxyType(
    {
        "small": 80,
        "medium": 120,
        "large": 180,
        "cup": 240,
        "tablespoon": 15,
        "teaspoon": 5,
        "slice": 30,
        "piece": 100,
        "serving": 100,
        "portion": 100,
        "banana": 120,
        "apple": 180,
        "orange": 150,
        "egg": 50,
        "chicken breast": 150,
        "chicken thigh": 120,
    }
)

_AMOUNT_PATTERN = re.compile(r"(\d+)\s*(g|gram|grams|oz|ounce|ounces)", re.IGNORECASE)


def scale_portion(item: NormalizedFoodItem, grams: float) -> PortionResult:
    """Scale per-100 g nutrition to ``grams``.

    Zero and negative amounts are scaled like any other value.
    """
    multiplier = grams / 100
    return PortionResult(
        grams=grams,
        calories=_round_half_up(item.calories * multiplier),
        protein_g=_round_tenth(item.protein_g * multiplier),
        carbs_g=_round_tenth(item.carbs_g * multiplier),
        fat_g=_round_tenth(item.fat_g * multiplier),
        fiber_g=_round_tenth(item.fiber_g * multiplier),
        sugar_g=_round_tenth(item.sugar_g * multiplier),
        sodium_mg=_round_tenth(item.sodium_mg * multiplier),
    )


def estimate_portion_grams(description: str) -> int:
    """Estimate a portion in grams from a free-text serving description."""
    text = description.lower()
    for keyword, grams in PORTION_KEYWORDS.items():
        if keyword in text:
            return grams

    match = _AMOUNT_PATTERN.search(text)
    if match:
        value = int(match.group(1))
        unit = match.group(2)
        if unit.startswith("g"):
            return value
        return _round_half_up(value * GRAMS_PER_OUNCE)

    return DEFAULT_PORTION_GRAMS


def default_portion_grams(candidate: RawCandidate) -> float:
    """Pick a starting portion for a provider record."""
    unit = (candidate.serving_size_unit or "").lower()
    if candidate.serving_size and unit in {"g", "grm", "gram", "grams"}:
        return candidate.serving_size
    if candidate.household_serving_text:
        return estimate_portion_grams(candidate.household_serving_text)
    return DEFAULT_PORTION_GRAMS


def _round_half_up(value: float) -> int:
    return math.floor(value + 0.5)


def _round_tenth(value: float) -> float:
    return math.floor(value * 10 + 0.5) / 10
