"""Energy expenditure, goal adjustment and macro allocation."""

import math

from bulkbuddy.domain.calories import (
    DEFAULT_CONSTANTS,
    CalorieConstants,
    CalorieGoal,
    CalorieResult,
    MacroTargets,
)
from bulkbuddy.domain.profile import GoalSpec, PersonProfile

DAYS_PER_WEEK = 7


def estimate_bmr(
    profile: PersonProfile, constants: CalorieConstants = DEFAULT_CONSTANTS
) -> float:
    """Return basal metabolic rate in kcal/day.

    Uses the lean-mass formula when body fat is known and the revised
    Harris-Benedict equation otherwise.
    """
    if profile.body_fat_percent is not None:
        lean_mass = profile.weight_kg * (1 - profile.body_fat_percent / 100)
        return constants.lean_mass_bmr_base + constants.lean_mass_bmr_factor * lean_mass
    if profile.sex == "male":
        return (
            88.362
            + 13.397 * profile.weight_kg
            + 4.799 * profile.height_cm
            - 5.677 * profile.age
        )
    return (
        447.593
        + 9.247 * profile.weight_kg
        + 3.098 * profile.height_cm
        - 4.330 * profile.age
    )


def estimate_maintenance_calories(
    profile: PersonProfile, constants: CalorieConstants = DEFAULT_CONSTANTS
) -> float:
    """Return maintenance calories (BMR times activity factor)."""
    return estimate_bmr(profile, constants) * profile.activity_factor


def simple_surplus_calories(
    profile: PersonProfile, constants: CalorieConstants = DEFAULT_CONSTANTS
) -> float:
    """Return maintenance plus a fixed surplus for quick bulking estimates."""
    return estimate_maintenance_calories(profile, constants) + constants.quick_surplus_kcal


def compute_calorie_goal(
    maintenance: float,
    goal: GoalSpec,
    sex: str,
    weight_kg: float,
    constants: CalorieConstants = DEFAULT_CONSTANTS,
) -> CalorieGoal:
    """Apply the goal pace to maintenance and clamp unsafe targets."""
    requested_delta = goal.weekly_change_kg * constants.kcal_per_kg / DAYS_PER_WEEK
    if goal.goal_type == "deficit":
        target = maintenance - requested_delta
    else:
        target = maintenance + requested_delta
    actual_weekly_change = goal.weekly_change_kg
    was_clamped = False
    min_calories = constants.min_calories(sex)

    deficit_limit = maintenance - maintenance * constants.max_deficit_fraction
    if goal.goal_type == "deficit" and target < deficit_limit:
        target = max(maintenance * (1 - constants.max_deficit_fraction), min_calories)
        actual_weekly_change = _weekly_change(goal, maintenance, target, constants)
        was_clamped = True

    if target < min_calories:
        target = min_calories
        actual_weekly_change = _weekly_change(goal, maintenance, target, constants)
        was_clamped = True

    conflict_message = _goal_conflict(goal, weight_kg)
    return CalorieGoal(
        target_calories=target,
        actual_weekly_change_kg=actual_weekly_change,
        was_clamped=was_clamped,
        weeks_to_goal=weeks_to_goal(weight_kg, goal.goal_weight_kg, actual_weekly_change),
        goal_conflict=conflict_message is not None,
        conflict_message=conflict_message,
    )


def weeks_to_goal(
    weight_kg: float, goal_weight_kg: float, weekly_change_kg: float
) -> float | None:
    """Return weeks needed to reach the goal weight, or None if unreachable.

    A zero or negative weekly change means the target never moves weight
    toward the goal.
    """
    if weekly_change_kg <= 0 or math.isclose(weekly_change_kg, 0.0, abs_tol=1e-9):
        return None
    return abs(goal_weight_kg - weight_kg) / weekly_change_kg


def allocate_macros(
    weight_kg: float,
    target_calories: float,
    constants: CalorieConstants = DEFAULT_CONSTANTS,
) -> MacroTargets:
    """Split target calories into protein, fat and carb grams.

    Protein is fixed per kilogram, fat takes a fixed share of calories and
    carbs absorb the remainder.
    """
    protein_g = max(0.0, weight_kg * constants.protein_g_per_kg)
    fat_g = max(
        0.0, target_calories * constants.fat_calorie_share / constants.kcal_per_g_fat
    )
    remaining = (
        target_calories
        - protein_g * constants.kcal_per_g_protein
        - fat_g * constants.kcal_per_g_fat
    )
    carbs_g = max(0.0, remaining / constants.kcal_per_g_carbs)
    return MacroTargets(protein_g=protein_g, fat_g=fat_g, carbs_g=carbs_g)


def calculate_calorie_plan(
    profile: PersonProfile,
    goal: GoalSpec,
    constants: CalorieConstants = DEFAULT_CONSTANTS,
) -> CalorieResult:
    """Run maintenance, goal and macro calculations for a profile."""
    maintenance = estimate_maintenance_calories(profile, constants)
    calorie_goal = compute_calorie_goal(
        maintenance, goal, profile.sex, profile.weight_kg, constants
    )
    macros = allocate_macros(profile.weight_kg, calorie_goal.target_calories, constants)
    return CalorieResult(
        maintenance_calories=maintenance,
        target_calories=calorie_goal.target_calories,
        actual_weekly_change_kg=calorie_goal.actual_weekly_change_kg,
        was_clamped=calorie_goal.was_clamped,
        weeks_to_goal=calorie_goal.weeks_to_goal,
        protein_g=macros.protein_g,
        fat_g=macros.fat_g,
        carbs_g=macros.carbs_g,
        goal_conflict=calorie_goal.goal_conflict,
        conflict_message=calorie_goal.conflict_message,
    )


def _weekly_change(
    goal: GoalSpec, maintenance: float, target: float, constants: CalorieConstants
) -> float:
    # positive in the goal direction: loss for a deficit, gain for a surplus
    delta = maintenance - target if goal.goal_type == "deficit" else target - maintenance
    return delta * DAYS_PER_WEEK / constants.kcal_per_kg


def _goal_conflict(goal: GoalSpec, weight_kg: float) -> str | None:
    if goal.goal_type == "surplus" and goal.goal_weight_kg < weight_kg:
        return "Goal weight is below current weight but a surplus was selected."
    if goal.goal_type == "deficit" and goal.goal_weight_kg > weight_kg:
        return "Goal weight is above current weight but a deficit was selected."
    return None
