"""Pydantic models for FoodData Central response payloads."""

from pydantic import BaseModel, ConfigDict, Field

from food_search.domain.nutrition import RawCandidate, RawNutrient, SearchPage


class _FdcModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="ignore")


class FdcNutrientInfo(_FdcModel):
    """Nested nutrient descriptor used by the detail endpoint."""

    id: int | None = None
    number: str | None = None
    name: str | None = None
    unit_name: str | None = Field(default=None, alias="unitName")


class FdcFoodNutrient(_FdcModel):
    """Nutrient entry in either the search or the detail shape."""

    nutrient_id: int | None = Field(default=None, alias="nutrientId")
    nutrient_number: str | None = Field(default=None, alias="nutrientNumber")
    nutrient_name: str | None = Field(default=None, alias="nutrientName")
    unit_name: str | None = Field(default=None, alias="unitName")
    value: float | None = None
    amount: float | None = None
    nutrient: FdcNutrientInfo | None = None

    def to_domain(self) -> RawNutrient | None:
        """Convert to a domain nutrient, or None when no value is reported."""
        info = self.nutrient or FdcNutrientInfo()
        value = self.value if self.value is not None else self.amount
        if value is None:
            return None
        return RawNutrient(
            number=self.nutrient_number or info.number,
            value=value,
            unit=self.unit_name or info.unit_name,
            name=self.nutrient_name or info.name,
            nutrient_id=self.nutrient_id or info.id,
        )


class FdcFood(_FdcModel):
    """Food record returned by the search and detail endpoints."""

    fdc_id: int = Field(alias="fdcId")
    description: str = ""
    data_type: str | None = Field(default=None, alias="dataType")
    brand_name: str | None = Field(default=None, alias="brandName")
    brand_owner: str | None = Field(default=None, alias="brandOwner")
    food_nutrients: list[FdcFoodNutrient] = Field(
        default_factory=list, alias="foodNutrients"
    )
    serving_size: float | None = Field(default=None, alias="servingSize")
    serving_size_unit: str | None = Field(default=None, alias="servingSizeUnit")
    household_serving_full_text: str | None = Field(
        default=None, alias="householdServingFullText"
    )

    def to_domain(self) -> RawCandidate:
        """Convert to an immutable raw candidate."""
        nutrients = tuple(
            nutrient
            for nutrient in (entry.to_domain() for entry in self.food_nutrients)
            if nutrient is not None
        )
        return RawCandidate(
            fdc_id=self.fdc_id,
            description=self.description,
            data_type=self.data_type,
            nutrients=nutrients,
            brand_name=self.brand_name,
            brand_owner=self.brand_owner,
            serving_size=self.serving_size,
            serving_size_unit=self.serving_size_unit,
            household_serving_text=self.household_serving_full_text,
        )


class FdcSearchResponse(_FdcModel):
    """Paginated response of the foods search endpoint."""

    foods: list[FdcFood] = Field(default_factory=list)
    total_hits: int = Field(default=0, alias="totalHits")
    current_page: int = Field(default=1, alias="currentPage")
    total_pages: int = Field(default=0, alias="totalPages")

    def to_domain(self) -> SearchPage:
        """Convert to a search page of raw candidates."""
        return SearchPage(
            foods=tuple(food.to_domain() for food in self.foods),
            total_hits=self.total_hits,
            current_page=self.current_page,
            total_pages=self.total_pages,
        )
