"""Row parsing shared by the Supabase repositories."""

from bulkbuddy.domain.nutrition import NutritionItem
from bulkbuddy.domain.recipes import MICRONUTRIENT_COLUMNS

NUTRITION_COLUMNS = (
    "calories",
    "protein",
    "carbs",
    "fat",
    "sugar",
    "fiber",
    "sodium",
) + MICRONUTRIENT_COLUMNS


def as_float(value: object) -> float:
    """Coerce a numeric column to float; NULL and junk become 0."""
    try:
        return float(value)  # type: ignore[arg-type]
    except (TypeError, ValueError):
        return 0.0


def nutrition_from_row(row: dict[str, object]) -> NutritionItem:
    """Build a NutritionItem from a recipes row."""
    return NutritionItem(
        calories=as_float(row.get("calories")),
        protein_g=as_float(row.get("protein")),
        fat_g=as_float(row.get("fat")),
        carbs_g=as_float(row.get("carbs")),
        sugar_g=as_float(row.get("sugar")),
        fiber_g=as_float(row.get("fiber")),
        sodium_mg=as_float(row.get("sodium")),
        micronutrients={
            column: as_float(row.get(column))
            for column in MICRONUTRIENT_COLUMNS
            if row.get(column) is not None
        },
    )


def nutrition_to_row(nutrition: NutritionItem) -> dict[str, float]:
    """Return recipes columns for a NutritionItem."""
    row = {
        "calories": nutrition.calories,
        "protein": nutrition.protein_g,
        "fat": nutrition.fat_g,
        "carbs": nutrition.carbs_g,
        "sugar": nutrition.sugar_g,
        "fiber": nutrition.fiber_g,
        "sodium": nutrition.sodium_mg,
    }
    for column in MICRONUTRIENT_COLUMNS:
        if column in nutrition.micronutrients:
            row[column] = nutrition.micronutrients[column]
    return row
