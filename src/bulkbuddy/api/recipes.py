"""Recipe search, user recipe and moderation endpoints."""

from __future__ import annotations

from typing import TYPE_CHECKING
from uuid import UUID  # noqa: TC003

from fastapi import APIRouter, Depends, Query, Request

from bulkbuddy.api.dependencies import get_container, require_admin, require_user_id
from bulkbuddy.api.models import RecipeSubmissionIn
from bulkbuddy.containers import AppContainer  # noqa: TC001
from bulkbuddy.domain.recipes import DEFAULT_RECIPE_IMAGE
from bulkbuddy.services.recipes import caloric_breakdown, recipe_nutrients

if TYPE_CHECKING:
    from bulkbuddy.domain.recipes import UserRecipe

router = APIRouter(prefix="/api/recipes", tags=["recipes"])
user_router = APIRouter(prefix="/api/user/recipes", tags=["user-recipes"])
admin_router = APIRouter(
    prefix="/api/admin", tags=["admin"], dependencies=[Depends(require_admin)]
)


@router.get("/search")
async def search_recipes(
    request: Request,
    query: str | None = None,
    include_user: bool = Query(default=False, alias="includeUser"),
    container: AppContainer = Depends(get_container),
) -> list[dict[str, object]]:
    """Search Spoonacular, optionally followed by approved user recipes."""
    result = await container.recipe_service.search(
        query, dict(request.query_params), include_user=include_user
    )
    return [*result.spoonacular, *(_serialize_summary(recipe) for recipe in result.user)]


@user_router.post("/submit")
async def submit_recipe(
    payload: RecipeSubmissionIn,
    user_id: UUID = Depends(require_user_id),
    container: AppContainer = Depends(get_container),
) -> dict[str, object]:
    """Submit a recipe for moderation."""
    recipe = container.recipe_service.submit(user_id, payload.to_domain())
    return {"success": True, "recipeId": recipe.id}


@user_router.get("/user-specific")
async def list_own_recipes(
    user_id: UUID = Depends(require_user_id),
    container: AppContainer = Depends(get_container),
) -> list[dict[str, object]]:
    """Return the caller's submissions, newest first."""
    return [
        _serialize_summary(recipe)
        for recipe in container.recipe_service.list_own(user_id)
    ]


@user_router.get("/all")
async def list_all_recipes(
    container: AppContainer = Depends(get_container),
) -> list[dict[str, object]]:
    return [_serialize_summary(recipe) for recipe in container.recipe_service.list_all()]


@user_router.delete("/delete/{recipe_id}")
async def delete_own_recipe(
    recipe_id: str,
    user_id: UUID = Depends(require_user_id),
    container: AppContainer = Depends(get_container),
) -> dict[str, bool]:
    container.recipe_service.delete_own(user_id, recipe_id)
    return {"success": True}


@user_router.get("/{recipe_id}")
async def get_user_recipe(
    recipe_id: str,
    container: AppContainer = Depends(get_container),
) -> dict[str, object]:
    """Return one user recipe with Spoonacular-shaped nutrition."""
    recipe = container.recipe_service.get(recipe_id)
    return {
        **_serialize_summary(recipe),
        "sourceText": f"User Submitted Recipe • {recipe.status}",
        "instructions": recipe.instructions or "No instructions provided",
        "nutrition": {
            "nutrients": recipe_nutrients(recipe),
            "caloricBreakdown": caloric_breakdown(recipe),
        },
    }


@admin_router.get("/pending")
async def pending_recipes(
    container: AppContainer = Depends(get_container),
) -> list[dict[str, object]]:
    """Return submissions awaiting moderation."""
    return [_serialize_summary(recipe) for recipe in container.recipe_service.pending()]


@admin_router.put("/approve/{recipe_id}")
async def approve_recipe(
    recipe_id: str,
    container: AppContainer = Depends(get_container),
) -> dict[str, bool]:
    container.recipe_service.approve(recipe_id)
    return {"success": True}


@admin_router.delete("/reject/{recipe_id}")
async def reject_recipe(
    recipe_id: str,
    container: AppContainer = Depends(get_container),
) -> dict[str, bool]:
    container.recipe_service.reject(recipe_id)
    return {"success": True}


@admin_router.delete("/recipes/{recipe_id}")
async def admin_delete_recipe(
    recipe_id: str,
    container: AppContainer = Depends(get_container),
) -> dict[str, object]:
    """Delete any user-submitted recipe."""
    container.recipe_service.admin_delete(recipe_id)
    return {
        "success": True,
        "message": f"Admin successfully deleted recipe {recipe_id}",
    }


def _serialize_summary(recipe: UserRecipe) -> dict[str, object]:
    nutrition = recipe.nutrition
    return {
        "id": recipe.id,
        "user_id": str(recipe.user_id) if recipe.user_id else None,
        "title": recipe.title,
        "image": recipe.image or DEFAULT_RECIPE_IMAGE,
        "source": "user",
        "status": recipe.status,
        "calories": nutrition.calories,
        "protein": nutrition.protein_g,
        "carbs": nutrition.carbs_g,
        "fat": nutrition.fat_g,
        "servings": recipe.servings,
        "healthScore": recipe.health_score,
        "readyInMinutes": recipe.max_prep_time,
        "dietType": recipe.diet_type,
        "cuisine": recipe.cuisine,
        "mealType": recipe.meal_type,
        "flags": sorted(recipe.flags),
        "extendedIngredients": [{"original": line} for line in recipe.ingredients],
        "created_at": recipe.created_at.isoformat() if recipe.created_at else None,
    }
