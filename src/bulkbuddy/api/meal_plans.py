"""Meal plan generation and custom meal plan endpoints."""

from __future__ import annotations

from dataclasses import asdict
from typing import TYPE_CHECKING
from uuid import UUID  # noqa: TC003

from fastapi import APIRouter, Depends, Query, status

from bulkbuddy.api.dependencies import get_container, require_user_id
from bulkbuddy.api.models import MealPlanEntryIn
from bulkbuddy.containers import AppContainer  # noqa: TC001

if TYPE_CHECKING:
    from bulkbuddy.domain.meal_plans import MealPlanEntry, PlannedMeal

router = APIRouter(prefix="/api", tags=["meal-plans"])


@router.get("/mealplan")
async def generate_meal_plan(  # noqa: PLR0913
    target_calories: str | None = Query(default=None, alias="targetCalories"),
    diet: str | None = None,
    exclude: str | None = None,
    time_frame: str = Query(default="day", alias="timeFrame"),
    container: AppContainer = Depends(get_container),
) -> dict[str, object]:
    """Generate a Spoonacular meal plan for a calorie target."""
    plan = await container.meal_generator_service.generate(
        target_calories=target_calories,
        time_frame=time_frame,
        diet=diet,
        exclude=exclude,
    )
    return asdict(plan)


@router.post("/meal-plans", status_code=status.HTTP_201_CREATED)
async def add_to_meal_plan(
    payload: MealPlanEntryIn,
    user_id: UUID = Depends(require_user_id),
    container: AppContainer = Depends(get_container),
) -> dict[str, object]:
    """Schedule a recipe for a day and meal."""
    entry = container.meal_plan_service.add_entry(
        user_id=user_id,
        recipe_id=str(payload.recipe_id) if payload.recipe_id is not None else None,
        source=payload.source,
        entry_date=payload.date,
        meal_type=payload.meal_type,
    )
    return {"id": str(entry.id)}


@router.get("/meal-plans")
async def list_meal_plans(
    start_date: str | None = Query(default=None, alias="startDate"),
    end_date: str | None = Query(default=None, alias="endDate"),
    user_id: UUID = Depends(require_user_id),
    container: AppContainer = Depends(get_container),
) -> list[dict[str, object]]:
    """Return a user's planned meals."""
    plans = await container.meal_plan_service.list_plans(user_id, start_date, end_date)
    return [_serialize_plan(plan) for plan in plans]


@router.get("/meal-plans/nutrition")
async def meal_plan_nutrition(
    date: str | None = None,
    user_id: UUID = Depends(require_user_id),
    container: AppContainer = Depends(get_container),
) -> dict[str, object]:
    """Return nutrition totals for a planned day."""
    daily = await container.meal_plan_service.daily_nutrition(user_id, date)
    return {
        "date": daily.date.isoformat(),
        "total_calories": daily.total_calories,
        "protein": daily.protein_g,
        "carbs": daily.carbs_g,
        "fat": daily.fat_g,
        "protein_percentage": daily.protein_percentage,
        "carbs_percentage": daily.carbs_percentage,
        "fats_percentage": daily.fat_percentage,
        "recommended_calories": daily.recommended_calories,
        "protein_goal": daily.protein_goal_g,
    }


@router.delete("/meal-plans/{entry_id}")
async def delete_meal_plan(
    entry_id: UUID,
    user_id: UUID = Depends(require_user_id),
    container: AppContainer = Depends(get_container),
) -> dict[str, bool]:
    """Remove an entry from the user's plan."""
    container.meal_plan_service.delete_entry(user_id, entry_id)
    return {"success": True}


def _serialize_entry(entry: MealPlanEntry) -> dict[str, object]:
    return {
        "id": str(entry.id),
        "user_id": str(entry.user_id),
        "recipe_id": entry.recipe_id,
        "source": entry.source,
        "date": entry.date.isoformat(),
        "meal_type": entry.meal_type,
    }


def _serialize_plan(plan: PlannedMeal) -> dict[str, object]:
    body = _serialize_entry(plan.entry)
    if plan.recipe is not None:
        recipe = plan.recipe
        body["recipe"] = {
            "id": recipe.id,
            "title": recipe.title,
            "image": recipe.image,
            "source": recipe.source,
            "calories": recipe.calories,
            "protein": recipe.protein_g,
            "carbs": recipe.carbs_g,
            "fat": recipe.fat_g,
        }
    return body
