"""Food search endpoints."""

from __future__ import annotations

from dataclasses import asdict
from typing import TYPE_CHECKING

from fastapi import APIRouter, Depends, HTTPException, Query, status

from bulkbuddy.api.dependencies import get_container
from bulkbuddy.containers import AppContainer  # noqa: TC001

if TYPE_CHECKING:
    from bulkbuddy.domain.nutrition import FoodNutrition

router = APIRouter(prefix="/api/food", tags=["food"])


@router.get("")
async def search_food(
    q: str | None = None,
    limit: int = Query(default=3, ge=1, le=25),
    container: AppContainer = Depends(get_container),
) -> list[dict[str, object]]:
    """Search foods and return nutrients per 100 g."""
    if not q or not q.strip():
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Search query is required",
        )
    foods = await container.food_service.search(q, limit=limit)
    return [_serialize_food(food) for food in foods]


@router.get("/suggestions")
async def food_suggestions(
    q: str | None = None,
    container: AppContainer = Depends(get_container),
) -> list[dict[str, object]]:
    """Return ingredient names for autocomplete."""
    if not q or not q.strip():
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST, detail="Query is required"
        )
    return await container.meal_generator_service.suggest(q)


@router.get("/{fdc_id}")
async def get_food(
    fdc_id: int, container: AppContainer = Depends(get_container)
) -> dict[str, object]:
    """Return nutrients for one food."""
    food = await container.food_service.get_food(fdc_id)
    return _serialize_food(food)


def _serialize_food(food: FoodNutrition) -> dict[str, object]:
    nutrients = asdict(food.per_100g)
    return {
        "fdcId": food.summary.fdc_id,
        "description": food.summary.description,
        "brandOwner": food.summary.brand_owner,
        "brandName": food.summary.brand_name,
        "servingSize": food.serving_size_g,
        **nutrients,
    }
