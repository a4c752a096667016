"""Calorie planning domain models."""

from dataclasses import dataclass


@dataclass(frozen=True)
class CalorieConstants:
    """Tunable constants for BMR, goal and macro calculations."""

    kcal_per_kg: float = 7700.0
    lean_mass_bmr_base: float = 370.0
    lean_mass_bmr_factor: float = 21.6
    max_deficit_fraction: float = 0.25
    min_calories_male: float = 1500.0
    min_calories_female: float = 1200.0
    protein_g_per_kg: float = 2.2
    fat_calorie_share: float = 0.25
    kcal_per_g_protein: float = 4.0
    kcal_per_g_carbs: float = 4.0
    kcal_per_g_fat: float = 9.0
    quick_surplus_kcal: float = 500.0

    def min_calories(self, sex: str) -> float:
        """Return the absolute calorie floor for a sex."""
        if sex == "male":
            return self.min_calories_male
        return self.min_calories_female


DEFAULT_CONSTANTS = CalorieConstants()


@dataclass(frozen=True)
class MacroTargets:
    """Daily macronutrient targets in grams."""

    protein_g: float
    fat_g: float
    carbs_g: float


@dataclass(frozen=True)
class CalorieGoal:
    """Target calories after applying goal pace and safety clamps."""

    target_calories: float
    actual_weekly_change_kg: float
    was_clamped: bool
    weeks_to_goal: float | None
    goal_conflict: bool = False
    conflict_message: str | None = None


@dataclass(frozen=True)
class CalorieResult:
    """Full calorie plan for a person and goal."""

    maintenance_calories: float
    target_calories: float
    actual_weekly_change_kg: float
    was_clamped: bool
    weeks_to_goal: float | None
    protein_g: float
    fat_g: float
    carbs_g: float
    goal_conflict: bool = False
    conflict_message: str | None = None
