"""Supabase repository for user-submitted recipes."""

from dataclasses import dataclass
from datetime import datetime
from uuid import UUID

from supabase import Client

from bulkbuddy.adapters.supabase_rows import nutrition_from_row, nutrition_to_row
from bulkbuddy.domain.recipes import (
    APPROVED,
    DIETARY_FLAGS,
    PENDING,
    RecipeSubmission,
    UserRecipe,
    UserRecipeCriteria,
)
from bulkbuddy.services.recipes import RecipeRepository


@dataclass
class SupabaseRecipeRepository(RecipeRepository):
    """Supabase implementation for the recipes table."""

    client: Client

    def create_recipe(self, user_id: UUID, submission: RecipeSubmission) -> UserRecipe:
        payload: dict[str, object] = {
            "user_id": str(user_id),
            "title": submission.title,
            "instructions": submission.instructions,
            "ingredients": "\n".join(item.line() for item in submission.ingredients),
            "servings": submission.servings,
            "health_score": submission.health_score,
            "diet_type": submission.diet_type,
            "cuisine": submission.cuisine,
            "meal_type": submission.meal_type,
            "max_prep_time": submission.max_prep_time,
            "image": submission.image,
            "source": "user",
            "status": PENDING,
            **nutrition_to_row(submission.nutrition),
        }
        payload.update({flag: flag in submission.flags for flag in DIETARY_FLAGS})
        response = self.client.table("recipes").insert(payload).execute()
        if not response.data:
            raise RuntimeError("Failed to create recipe")
        return _parse_recipe(response.data[0])

    def get_recipe(self, recipe_id: str) -> UserRecipe | None:
        response = (
            self.client.table("recipes").select("*").eq("id", recipe_id).limit(1).execute()
        )
        if not response.data:
            return None
        return _parse_recipe(response.data[0])

    def list_recipes(
        self, user_id: UUID | None = None, status: str | None = None
    ) -> list[UserRecipe]:
        query = self.client.table("recipes").select("*").eq("source", "user")
        if user_id is not None:
            query = query.eq("user_id", str(user_id))
        if status is not None:
            query = query.eq("status", status)
        response = query.order("created_at", desc=True).execute()
        return [_parse_recipe(row) for row in response.data or []]

    def search_approved(self, criteria: UserRecipeCriteria) -> list[UserRecipe]:
        query = (
            self.client.table("recipes")
            .select("*")
            .eq("source", "user")
            .eq("status", APPROVED)
        )
        if criteria.title_query:
            query = query.ilike("title", f"%{criteria.title_query}%")
        for flag in criteria.required_flags:
            query = query.eq(flag, True)
        if criteria.meal_type:
            query = query.eq("meal_type", criteria.meal_type)
        for column, value in criteria.minimums.items():
            query = query.gte(column, value)
        for column, value in criteria.maximums.items():
            query = query.lte(column, value)
        response = query.execute()
        return [_parse_recipe(row) for row in response.data or []]

    def set_status(self, recipe_id: str, status: str) -> bool:
        response = (
            self.client.table("recipes")
            .update({"status": status})
            .eq("id", recipe_id)
            .execute()
        )
        return bool(response.data)

    def delete_recipe(self, recipe_id: str) -> bool:
        response = self.client.table("recipes").delete().eq("id", recipe_id).execute()
        return bool(response.data)


def _parse_recipe(row: dict[str, object]) -> UserRecipe:
    user_id = row.get("user_id")
    created_at = row.get("created_at")
    max_prep_time = row.get("max_prep_time")
    return UserRecipe(
        id=str(row["id"]),
        user_id=UUID(str(user_id)) if user_id else None,
        title=str(row.get("title") or ""),
        instructions=str(row.get("instructions") or ""),
        ingredients=[
            line for line in str(row.get("ingredients") or "").split("\n") if line
        ],
        nutrition=nutrition_from_row(row),
        source=str(row.get("source") or "user"),
        status=str(row.get("status") or PENDING),
        image=row.get("image"),
        servings=int(row.get("servings") or 1),
        health_score=int(row.get("health_score") or 0),
        diet_type=str(row.get("diet_type") or "all"),
        cuisine=row.get("cuisine"),
        meal_type=row.get("meal_type"),
        max_prep_time=int(max_prep_time) if max_prep_time is not None else None,
        flags=frozenset(flag for flag in DIETARY_FLAGS if row.get(flag)),
        created_at=datetime.fromisoformat(str(created_at)) if created_at else None,
    )
