"""Nutrition totals and macro calorie breakdowns."""

from collections.abc import Sequence

from bulkbuddy.domain.calories import DEFAULT_CONSTANTS, CalorieConstants
from bulkbuddy.domain.nutrition import (
    MacroPercentages,
    NutritionItem,
    NutritionSummary,
)

PER_100G = 100.0


def scale_item(item: NutritionItem, grams: float) -> NutritionItem:
    """Scale per-100 g nutrient values to a serving in grams."""
    factor = grams / PER_100G
    return NutritionItem(
        calories=item.calories * factor,
        protein_g=item.protein_g * factor,
        fat_g=item.fat_g * factor,
        carbs_g=item.carbs_g * factor,
        sugar_g=item.sugar_g * factor,
        fiber_g=item.fiber_g * factor,
        sodium_mg=item.sodium_mg * factor,
        micronutrients={
            name: amount * factor for name, amount in item.micronutrients.items()
        },
    )


def sum_items(items: Sequence[NutritionItem]) -> NutritionItem:
    """Add nutrient values across items."""
    totals: dict[str, float] = {
        "calories": 0.0,
        "protein_g": 0.0,
        "fat_g": 0.0,
        "carbs_g": 0.0,
        "sugar_g": 0.0,
        "fiber_g": 0.0,
        "sodium_mg": 0.0,
    }
    micronutrients: dict[str, float] = {}
    for item in items:
        totals["calories"] += item.calories
        totals["protein_g"] += item.protein_g
        totals["fat_g"] += item.fat_g
        totals["carbs_g"] += item.carbs_g
        totals["sugar_g"] += item.sugar_g
        totals["fiber_g"] += item.fiber_g
        totals["sodium_mg"] += item.sodium_mg
        for name, amount in item.micronutrients.items():
            micronutrients[name] = micronutrients.get(name, 0.0) + amount
    return NutritionItem(**totals, micronutrients=micronutrients)


def macro_percentages(
    protein_g: float,
    carbs_g: float,
    fat_g: float,
    constants: CalorieConstants = DEFAULT_CONSTANTS,
) -> MacroPercentages:
    """Return each macro's share of macro calories, or zeros if there are none."""
    protein_kcal = protein_g * constants.kcal_per_g_protein
    carbs_kcal = carbs_g * constants.kcal_per_g_carbs
    fat_kcal = fat_g * constants.kcal_per_g_fat
    total_kcal = protein_kcal + carbs_kcal + fat_kcal
    if total_kcal <= 0:
        return MacroPercentages(protein=0.0, carbs=0.0, fat=0.0)
    return MacroPercentages(
        protein=protein_kcal / total_kcal * 100,
        carbs=carbs_kcal / total_kcal * 100,
        fat=fat_kcal / total_kcal * 100,
    )


def aggregate_nutrition(
    items: Sequence[NutritionItem],
    servings_g: Sequence[float],
    constants: CalorieConstants = DEFAULT_CONSTANTS,
) -> NutritionSummary:
    """Scale each item by its serving and summarize the result.

    Raises:
        ValueError: if items and servings differ in length.
    """
    if len(items) != len(servings_g):
        raise ValueError("Each nutrition item needs exactly one serving size")
    totals = sum_items(
        [scale_item(item, grams) for item, grams in zip(items, servings_g, strict=True)]
    )
    return NutritionSummary(
        totals=totals,
        percentages=macro_percentages(
            totals.protein_g, totals.carbs_g, totals.fat_g, constants
        ),
    )
