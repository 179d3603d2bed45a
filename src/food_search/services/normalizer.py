"""Mapping of provider nutrients onto the tracked nutrient set."""

from collections.abc import Iterable, Mapping
from types import MappingProxyType

from food_search.domain.nutrition import (
    DataType,
    NormalizedFoodItem,
    RawCandidate,
    RawNutrient,
)

NUTRIENT_FIELDS: tuple[str, ...] = (
    "calories",
    "protein_g",
    "carbs_g",
    "fat_g",
    "fiber_g",
    "sugar_g",
    "sodium_mg",
)

# Legacy nutrient numbers, as reported by the search endpoint.
NUTRIENT_NUMBER_MAP: Mapping[str, str] = MappingProxyType(
    {
        "208": "calories",  # Energy (kcal)
        "203": "protein_g",  # Protein
        "205": "carbs_g",  # Carbohydrate, by difference
        "204": "fat_g",  # Total lipid (fat)
        "291": "fiber_g",  # Fiber, total dietary
        "269": "sugar_g",  # Sugars, total including NLEA
        "307": "sodium_mg",  # Sodium, Na
    }
)

# Nutrient ids, used only when an entry carries no nutrient number.
NUTRIENT_ID_MAP: Mapping[int, str] = MappingProxyType(
    {
        1008: "calories",
        1003: "protein_g",
        1005: "carbs_g",
        1004: "fat_g",
        1079: "fiber_g",
        2000: "sugar_g",
        1093: "sodium_mg",
    }
)

DATA_SOURCE_CONFIDENCE: Mapping[str, float] = MappingProxyType(
    {
        DataType.FOUNDATION.value: 1.0,
        DataType.SR_LEGACY.value: 1.0,
        DataType.SURVEY.value: 0.9,
        DataType.BRANDED.value: 0.8,
    }
)
UNKNOWN_SOURCE_CONFIDENCE = 0.7


def normalize_nutrients(nutrients: Iterable[RawNutrient]) -> dict[str, float]:
    """Return tracked nutrient values, zero for anything not reported."""
    values = dict.fromkeys(NUTRIENT_FIELDS, 0.0)
    for nutrient in nutrients:
        field_name = _field_for(nutrient)
        if field_name is None:
            continue
        values[field_name] = max(float(nutrient.value), 0.0)
    return values


def normalize_candidate(candidate: RawCandidate) -> NormalizedFoodItem:
    """Convert a provider record into an application food item."""
    values = normalize_nutrients(candidate.nutrients)
    return NormalizedFoodItem(
        name=candidate.description,
        brand=candidate.brand,
        fdc_id=str(candidate.fdc_id),
        confidence_score=source_confidence(candidate.data_type),
        data_type=candidate.data_type,
        **values,
    )


def source_confidence(data_type: str | None) -> float:
    """Return the trust score for a provider data source."""
    if data_type is None:
        return UNKNOWN_SOURCE_CONFIDENCE
    return DATA_SOURCE_CONFIDENCE.get(data_type, UNKNOWN_SOURCE_CONFIDENCE)


def _field_for(nutrient: RawNutrient) -> str | None:
    if nutrient.number:
        return NUTRIENT_NUMBER_MAP.get(nutrient.number)
    if nutrient.nutrient_id is not None:
        return NUTRIENT_ID_MAP.get(nutrient.nutrient_id)
    return None
