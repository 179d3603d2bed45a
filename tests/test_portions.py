"""Tests for portion scaling and estimation."""

import pytest

from food_search.domain.nutrition import NormalizedFoodItem, RawCandidate
from food_search.services.portions import (
    default_portion_grams,
    estimate_portion_grams,
    scale_portion,
)


def _item(**overrides: float) -> NormalizedFoodItem:
    values: dict[str, float] = {
        "calories": 165.0,
        "protein_g": 31.0,
        "carbs_g": 0.0,
        "fat_g": 3.6,
        "fiber_g": 0.0,
        "sugar_g": 0.0,
        "sodium_mg": 74.0,
    }
    values.update(overrides)
    return NormalizedFoodItem(
        name="Chicken breast",
        brand=None,
        fdc_id="171077",
        confidence_score=1.0,
        data_type="Foundation",
        **values,
    )


def test_scales_per_100g_values() -> None:
    portion = scale_portion(_item(), 150)

    assert portion.grams == 150
    assert portion.calories == 248
    assert isinstance(portion.calories, int)
    assert portion.protein_g == 46.5
    assert portion.fat_g == 5.4
    assert portion.sodium_mg == 111.0


def test_rounds_to_one_decimal() -> None:
    portion = scale_portion(_item(protein_g=1.09, calories=89), 118)

    assert portion.protein_g == 1.3
    assert portion.calories == 105


def test_zero_grams_is_accepted() -> None:
    portion = scale_portion(_item(), 0)

    assert portion.calories == 0
    assert portion.protein_g == 0.0


def test_negative_grams_are_scaled_not_rejected() -> None:
    portion = scale_portion(_item(), -100)

    assert portion.calories == -165
    assert portion.protein_g == -31.0


@pytest.mark.parametrize(
    ("description", "grams"),
    [
        ("1 medium banana", 120),
        ("2 tablespoons", 15),
        ("1 cup, chopped", 240),
        ("a large apple", 180),
        ("250 g", 250),
        ("100 grams", 100),
        ("8 oz", 227),
        ("12 gallons", 12),
        ("2 grapes", 2),
        ("3 ounces", 85),
        ("handful", 100),
        ("", 100),
    ],
)
def test_estimate_portion_grams(description: str, grams: int) -> None:
    assert estimate_portion_grams(description) == grams


def test_default_portion_uses_gram_serving_size() -> None:
    candidate = RawCandidate(
        fdc_id=1,
        description="Granola bar",
        data_type="Branded",
        serving_size=42,
        serving_size_unit="g",
    )

    assert default_portion_grams(candidate) == 42


def test_default_portion_falls_back_to_household_text() -> None:
    candidate = RawCandidate(
        fdc_id=1,
        description="Orange juice",
        data_type="Branded",
        serving_size=240,
        serving_size_unit="ml",
        household_serving_text="1 cup",
    )

    assert default_portion_grams(candidate) == 240


def test_default_portion_without_hints() -> None:
    candidate = RawCandidate(fdc_id=1, description="Lentils", data_type="SR Legacy")

    assert default_portion_grams(candidate) == 100
