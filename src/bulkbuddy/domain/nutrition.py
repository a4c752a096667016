"""Nutrition domain models."""

from dataclasses import dataclass, field


@dataclass(frozen=True)
class NutritionItem:
    """Nutrient values for a food or recipe, per 100 g unless noted."""

    calories: float = 0.0
    protein_g: float = 0.0
    fat_g: float = 0.0
    carbs_g: float = 0.0
    sugar_g: float = 0.0
    fiber_g: float = 0.0
    sodium_mg: float = 0.0
    micronutrients: dict[str, float] = field(default_factory=dict)


@dataclass(frozen=True)
class MacroPercentages:
    """Share of macro calories contributed by each macronutrient."""

    protein: float
    carbs: float
    fat: float


@dataclass(frozen=True)
class NutritionSummary:
    """Summed nutrients with their macro calorie breakdown."""

    totals: NutritionItem
    percentages: MacroPercentages


@dataclass(frozen=True)
class FoodSummary:
    """Summary information about a food from FDC."""

    fdc_id: int
    description: str
    brand_owner: str | None
    brand_name: str | None
    data_type: str | None


@dataclass(frozen=True)
class FoodNutrition:
    """Food with nutrients normalized to 100 g."""

    summary: FoodSummary
    per_100g: NutritionItem
    serving_size_g: float | None
