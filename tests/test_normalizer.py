"""Tests for nutrient normalization."""

from food_search.domain.nutrition import RawCandidate, RawNutrient
from food_search.services.normalizer import (
    normalize_candidate,
    normalize_nutrients,
    source_confidence,
)


def test_maps_tracked_nutrient_numbers() -> None:
    nutrients = [
        RawNutrient(number="208", value=89),
        RawNutrient(number="203", value=1.1),
        RawNutrient(number="205", value=22.8),
        RawNutrient(number="204", value=0.3),
        RawNutrient(number="291", value=2.6),
        RawNutrient(number="269", value=12.2),
        RawNutrient(number="307", value=1),
    ]

    values = normalize_nutrients(nutrients)

    assert values == {
        "calories": 89.0,
        "protein_g": 1.1,
        "carbs_g": 22.8,
        "fat_g": 0.3,
        "fiber_g": 2.6,
        "sugar_g": 12.2,
        "sodium_mg": 1.0,
    }


def test_unknown_codes_are_ignored_and_missing_default_to_zero() -> None:
    values = normalize_nutrients(
        [RawNutrient(number="301", value=5), RawNutrient(number="208", value=52)]
    )

    assert values["calories"] == 52.0
    assert values["protein_g"] == 0.0
    assert values["sodium_mg"] == 0.0
    assert "301" not in values


def test_nutrient_id_used_when_number_missing() -> None:
    values = normalize_nutrients(
        [
            RawNutrient(number=None, value=165, nutrient_id=1008),
            RawNutrient(number=None, value=31, nutrient_id=1003),
            RawNutrient(number=None, value=7, nutrient_id=9999),
        ]
    )

    assert values["calories"] == 165.0
    assert values["protein_g"] == 31.0


def test_negative_values_are_clamped() -> None:
    values = normalize_nutrients([RawNutrient(number="204", value=-0.4)])

    assert values["fat_g"] == 0.0


def test_all_zero_candidate_is_valid_output() -> None:
    candidate = RawCandidate(fdc_id=7, description="Water", data_type="SR Legacy")

    item = normalize_candidate(candidate)

    assert item.calories == 0.0
    assert item.name == "Water"
    assert item.fdc_id == "7"


def test_normalize_candidate_keeps_brand_and_source() -> None:
    candidate = RawCandidate(
        fdc_id=2345,
        description="Greek yogurt, plain",
        data_type="Branded",
        nutrients=(RawNutrient(number="208", value=59),),
        brand_owner="Chobani",
    )

    item = normalize_candidate(candidate)

    assert item.brand == "Chobani"
    assert item.source == "usda"
    assert item.data_type == "Branded"
    assert item.confidence_score == 0.8
    assert "data_type" not in item.to_public_dict()
    assert item.to_public_dict()["usda_food_id"] == "2345"


def test_source_confidence() -> None:
    assert source_confidence("Foundation") == 1.0
    assert source_confidence("SR Legacy") == 1.0
    assert source_confidence("Survey (FNDDS)") == 0.9
    assert source_confidence("Branded") == 0.8
    assert source_confidence("Experimental") == 0.7
    assert source_confidence(None) == 0.7
