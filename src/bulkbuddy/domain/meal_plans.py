"""Domain models for custom and generated meal plans."""

from dataclasses import dataclass, field
from datetime import date
from uuid import UUID

from bulkbuddy.domain.meal_slots import MealSlotTargets

RECIPE_SOURCES = frozenset({"spoonacular", "user"})
MEAL_TYPES = frozenset({"breakfast", "lunch", "dinner", "snack"})


@dataclass(frozen=True)
class MealPlanEntry:
    """A recipe scheduled for a user on a date."""

    id: UUID
    user_id: UUID
    recipe_id: str
    source: str
    date: date
    meal_type: str


@dataclass(frozen=True)
class PlannedRecipe:
    """Recipe details shown alongside a meal plan entry."""

    id: str
    title: str
    image: str | None
    source: str
    calories: float = 0.0
    protein_g: float = 0.0
    carbs_g: float = 0.0
    fat_g: float = 0.0


@dataclass(frozen=True)
class PlannedMeal:
    """A meal plan entry with its recipe, when the lookup succeeded."""

    entry: MealPlanEntry
    recipe: PlannedRecipe | None = None


@dataclass(frozen=True)
class GeneratedMeal:
    """A meal suggested by the meal plan generator."""

    id: int
    title: str
    image: str | None
    ready_in_minutes: int | None
    servings: int | None
    health_score: float
    calories: float
    slot: str | None = None
    slot_target: int | None = None
    within_slot_band: bool | None = None
    source_url: str | None = None


@dataclass(frozen=True)
class GeneratedMealPlan:
    """Meal plan produced for a calorie target."""

    time_frame: str
    target_calories: int
    filters: dict[str, str]
    meals: list[GeneratedMeal] = field(default_factory=list)
    nutrients: dict[str, float] = field(default_factory=dict)
    week: dict[str, object] | None = None
    slot_targets: MealSlotTargets | None = None


@dataclass(frozen=True)
class DailyNutrition:
    """Nutrition totals for the recipes planned on one day."""

    date: date
    total_calories: float
    protein_g: float
    carbs_g: float
    fat_g: float
    protein_percentage: float
    carbs_percentage: float
    fat_percentage: float
    recommended_calories: float
    protein_goal_g: float
    entry_count: int
