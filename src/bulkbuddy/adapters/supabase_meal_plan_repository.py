"""Supabase repository for meal plan entries and user recipes."""

from dataclasses import dataclass
from datetime import date
from uuid import UUID

from supabase import Client

from bulkbuddy.adapters.supabase_rows import (
    NUTRITION_COLUMNS,
    as_float,
    nutrition_from_row,
)
from bulkbuddy.domain.meal_plans import MealPlanEntry, PlannedRecipe
from bulkbuddy.domain.nutrition import NutritionItem
from bulkbuddy.domain.recipes import DEFAULT_RECIPE_IMAGE
from bulkbuddy.services.meal_plans import MealPlanRepository

_ENTRY_COLUMNS = "id, user_id, recipe_id, source, date, meal_type"


@dataclass
class SupabaseMealPlanRepository(MealPlanRepository):
    """Supabase implementation for meal plans."""

    client: Client

    def create_entry(  # noqa: PLR0913
        self,
        user_id: UUID,
        recipe_id: str,
        source: str,
        entry_date: date,
        meal_type: str,
    ) -> MealPlanEntry:
        """Insert a meal plan row and return it."""
        response = (
            self.client.table("meal_plans")
            .insert(
                {
                    "user_id": str(user_id),
                    "recipe_id": recipe_id,
                    "source": source,
                    "date": entry_date.isoformat(),
                    "meal_type": meal_type,
                }
            )
            .execute()
        )
        if not response.data:
            raise RuntimeError("Failed to create meal plan entry")
        return _parse_entry(response.data[0])

    def list_entries(
        self, user_id: UUID, start: date | None = None, end: date | None = None
    ) -> list[MealPlanEntry]:
        """Return a user's entries, optionally within an inclusive date range."""
        query = (
            self.client.table("meal_plans")
            .select(_ENTRY_COLUMNS)
            .eq("user_id", str(user_id))
        )
        if start is not None and end is not None:
            query = query.gte("date", start.isoformat()).lte("date", end.isoformat())
        response = query.order("date", desc=False).execute()
        return [_parse_entry(row) for row in response.data or []]

    def delete_entry(self, user_id: UUID, entry_id: UUID) -> bool:
        """Delete an entry owned by the user; return False if none matched."""
        response = (
            self.client.table("meal_plans")
            .delete()
            .eq("id", str(entry_id))
            .eq("user_id", str(user_id))
            .execute()
        )
        return bool(response.data)

    def user_recipe_exists(self, recipe_id: str) -> bool:
        """Return True if a user-submitted recipe exists."""
        response = (
            self.client.table("recipes")
            .select("id")
            .eq("id", recipe_id)
            .eq("source", "user")
            .limit(1)
            .execute()
        )
        return bool(response.data)

    def get_recipe_nutrition(self, recipe_id: str) -> NutritionItem | None:
        """Return stored per-serving nutrition for a user recipe."""
        response = (
            self.client.table("recipes")
            .select(", ".join(NUTRITION_COLUMNS))
            .eq("id", recipe_id)
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        return nutrition_from_row(response.data[0])

    def get_user_recipe(self, recipe_id: str) -> PlannedRecipe | None:
        """Return title, image and macros for a user recipe."""
        response = (
            self.client.table("recipes")
            .select("id, title, image, calories, protein, carbs, fat")
            .eq("id", recipe_id)
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        row = response.data[0]
        return PlannedRecipe(
            id=str(row["id"]),
            title=str(row.get("title") or ""),
            image=row.get("image") or DEFAULT_RECIPE_IMAGE,
            source="user",
            calories=as_float(row.get("calories")),
            protein_g=as_float(row.get("protein")),
            carbs_g=as_float(row.get("carbs")),
            fat_g=as_float(row.get("fat")),
        )


def _parse_entry(row: dict[str, object]) -> MealPlanEntry:
    return MealPlanEntry(
        id=UUID(str(row["id"])),
        user_id=UUID(str(row["user_id"])),
        recipe_id=str(row["recipe_id"]),
        source=str(row["source"]),
        date=date.fromisoformat(str(row["date"])[:10]),
        meal_type=str(row["meal_type"]),
    )

