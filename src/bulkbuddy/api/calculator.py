"""Calorie, macro and nutrition calculator endpoints."""

from __future__ import annotations

from dataclasses import asdict

from fastapi import APIRouter, HTTPException, Query, status

from bulkbuddy.api.models import AggregateRequest, CalorieGoalRequest, ProfileIn
from bulkbuddy.services.aggregation import aggregate_nutrition
from bulkbuddy.services.calories import (
    allocate_macros,
    calculate_calorie_plan,
    estimate_bmr,
    estimate_maintenance_calories,
    simple_surplus_calories,
)
from bulkbuddy.services.meal_slots import partition_meal_slots

router = APIRouter(prefix="/api", tags=["calculator"])


@router.post("/calculator/maintenance")
async def maintenance(profile: ProfileIn) -> dict[str, float]:
    """Return BMR and maintenance calories."""
    person = profile.to_domain()
    return {
        "bmr": estimate_bmr(person),
        "maintenance_calories": estimate_maintenance_calories(person),
    }


@router.post("/calculator/surplus")
async def surplus(profile: ProfileIn) -> dict[str, float]:
    """Return maintenance calories with a fixed bulking surplus."""
    person = profile.to_domain()
    return {
        "maintenance_calories": estimate_maintenance_calories(person),
        "surplus_calories": round(simple_surplus_calories(person), 2),
    }


@router.post("/calculator/goal")
async def calorie_goal(payload: CalorieGoalRequest) -> dict[str, object]:
    """Return a full calorie and macro plan for a goal."""
    result = calculate_calorie_plan(payload.profile.to_domain(), payload.goal.to_domain())
    return asdict(result)


@router.get("/calculator/macros")
async def macros(
    weight_kg: float = Query(gt=0, allow_inf_nan=False),
    target_calories: float = Query(gt=0, allow_inf_nan=False),
) -> dict[str, float]:
    """Return protein, fat and carb grams for a calorie target."""
    return asdict(allocate_macros(weight_kg, target_calories))


@router.get("/calculator/meal-slots")
async def meal_slots(
    total_calories: float = Query(allow_inf_nan=False),
) -> dict[str, object]:
    """Return breakfast, lunch and dinner calorie targets."""
    if total_calories <= 0:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST, detail="Invalid calorie input"
        )
    return asdict(partition_meal_slots(total_calories))


@router.post("/nutrition/aggregate")
async def aggregate(payload: AggregateRequest) -> dict[str, object]:
    """Return nutrient totals and macro percentages for servings of items."""
    try:
        summary = aggregate_nutrition(
            [item.to_domain() for item in payload.items], payload.servings_g
        )
    except ValueError as exc:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)
        ) from exc
    return asdict(summary)
