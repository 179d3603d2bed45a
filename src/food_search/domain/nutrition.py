"""Nutrition domain models for food search."""

from dataclasses import dataclass
from enum import StrEnum


class DataType(StrEnum):
    """FoodData Central data source categories, most trusted first."""

    FOUNDATION = "Foundation"
    SR_LEGACY = "SR Legacy"
    SURVEY = "Survey (FNDDS)"
    BRANDED = "Branded"


BASIC_DATA_TYPES: frozenset[str] = frozenset(
    {DataType.FOUNDATION.value, DataType.SR_LEGACY.value}
)


@dataclass(frozen=True)
class RawNutrient:
    """Single nutrient entry as reported by the provider."""

    number: str | None
    value: float
    unit: str | None = None
    name: str | None = None
    nutrient_id: int | None = None


@dataclass(frozen=True)
class RawCandidate:
    """Provider-native food record prior to normalization."""

    fdc_id: int
    description: str
    data_type: str | None
    nutrients: tuple[RawNutrient, ...] = ()
    brand_name: str | None = None
    brand_owner: str | None = None
    serving_size: float | None = None
    serving_size_unit: str | None = None
    household_serving_text: str | None = None

    @property
    def brand(self) -> str | None:
        """Brand name, falling back to the brand owner."""
        return self.brand_name or self.brand_owner or None


@dataclass(frozen=True)
class NormalizedFoodItem:
    """Application-native food record with per-100 g nutrition."""

    name: str
    brand: str | None
    calories: float
    protein_g: float
    carbs_g: float
    fat_g: float
    fiber_g: float
    sugar_g: float
    sodium_mg: float
    fdc_id: str
    confidence_score: float
    data_type: str | None = None
    source: str = "usda"

    @property
    def is_basic(self) -> bool:
        """Whether the record comes from a lab-measured reference dataset."""
        return self.data_type in BASIC_DATA_TYPES

    def to_public_dict(self) -> dict[str, object]:
        """Serialize the record for callers, without ranking-only fields."""
        return {
            "name": self.name,
            "brand": self.brand,
            "calories_per_100g": self.calories,
            "protein_per_100g": self.protein_g,
            "carbs_per_100g": self.carbs_g,
            "fat_per_100g": self.fat_g,
            "fiber_per_100g": self.fiber_g,
            "sugar_per_100g": self.sugar_g,
            "sodium_per_100g": self.sodium_mg,
            "source": self.source,
            "usda_food_id": self.fdc_id,
            "confidence_score": self.confidence_score,
        }


@dataclass(frozen=True)
class ScoredFoodItem:
    """Normalized food record paired with its relevance score."""

    item: NormalizedFoodItem
    relevance_score: float


@dataclass(frozen=True)
class PortionResult:
    """Nutrition for a specific portion of a food."""

    grams: float
    calories: int
    protein_g: float
    carbs_g: float
    fat_g: float
    fiber_g: float
    sugar_g: float
    sodium_mg: float


@dataclass(frozen=True)
class SearchPage:
    """One page of provider search results."""

    foods: tuple[RawCandidate, ...]
    total_hits: int
    current_page: int
    total_pages: int


@dataclass(frozen=True)
class SearchResult:
    """Merged result of a multi-page search."""

    foods: tuple[RawCandidate, ...]
    total_hits: int
    pages_fetched: tuple[int, ...] = ()
    failed_pages: tuple[int, ...] = ()
