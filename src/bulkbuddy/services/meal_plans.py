"""Custom meal plan management and daily nutrition summaries."""

import asyncio
import logging
import re
from dataclasses import dataclass
from datetime import date
from typing import Protocol
from uuid import UUID

import httpx

from bulkbuddy.adapters.spoonacular_client import SpoonacularClient
from bulkbuddy.domain.meal_plans import (
    MEAL_TYPES,
    RECIPE_SOURCES,
    DailyNutrition,
    MealPlanEntry,
    PlannedMeal,
    PlannedRecipe,
)
from bulkbuddy.domain.nutrition import NutritionItem
from bulkbuddy.errors import (
    MealPlanEntryNotFound,
    MealPlanValidationError,
    RecipeNotFound,
)
from bulkbuddy.services.aggregation import aggregate_nutrition

_DATE_PATTERN = re.compile(r"^\d{4}-\d{2}-\d{2}$")
_NUMBER_PATTERN = re.compile(r"[^\d.]")
_ONE_SERVING_G = 100.0
SPOONACULAR_IMAGE_URL = "https://spoonacular.com/recipeImages/{recipe_id}-312x231.jpg"

_logger = logging.getLogger(__name__)


class MealPlanRepository(Protocol):
    """Persistence interface for meal plans and user recipes."""

    def create_entry(  # noqa: PLR0913
        self,
        user_id: UUID,
        recipe_id: str,
        source: str,
        entry_date: date,
        meal_type: str,
    ) -> MealPlanEntry:
        """Create a meal plan entry."""

    def list_entries(
        self, user_id: UUID, start: date | None = None, end: date | None = None
    ) -> list[MealPlanEntry]:
        """Return entries for a user, optionally within a date range."""

    def delete_entry(self, user_id: UUID, entry_id: UUID) -> bool:
        """Delete an entry; return False if it did not exist."""

    def user_recipe_exists(self, recipe_id: str) -> bool:
        """Return True if a user-submitted recipe exists."""

    def get_recipe_nutrition(self, recipe_id: str) -> NutritionItem | None:
        """Return per-serving nutrition for a user recipe."""

    def get_user_recipe(self, recipe_id: str) -> PlannedRecipe | None:
        """Return title, image and macros for a user recipe."""


@dataclass
class MealPlanService:
    """Service for scheduling recipes and summarizing a day's nutrition."""

    repository: MealPlanRepository
    spoonacular_client: SpoonacularClient
    recommended_calories: float = 2000
    protein_goal_g: float = 56

    def add_entry(  # noqa: PLR0913
        self,
        user_id: UUID,
        recipe_id: str | None,
        source: str | None,
        entry_date: str | None,
        meal_type: str | None,
    ) -> MealPlanEntry:
        """Validate and store a meal plan entry.

        Raises:
            MealPlanValidationError: with every failed check joined together.
            RecipeNotFound: if a user recipe does not exist.
        """
        errors: list[str] = []
        if not recipe_id:
            errors.append("Recipe ID is required")
        if source not in RECIPE_SOURCES:
            errors.append("Invalid source")
        parsed_date = parse_plan_date(entry_date)
        if parsed_date is None:
            errors.append("Invalid date format (YYYY-MM-DD)")
        if meal_type not in MEAL_TYPES:
            errors.append("Invalid meal type")
        if errors:
            raise MealPlanValidationError(errors)

        if source == "user" and not self.repository.user_recipe_exists(str(recipe_id)):
            raise RecipeNotFound("Recipe not found")

        entry = self.repository.create_entry(
            user_id=user_id,
            recipe_id=str(recipe_id),
            source=str(source),
            entry_date=parsed_date,
            meal_type=str(meal_type),
        )
        _logger.info(
            "Meal plan entry added",
            extra={"user_id": str(user_id), "entry_id": str(entry.id)},
        )
        return entry

    def list_entries(
        self,
        user_id: UUID,
        start_date: str | None = None,
        end_date: str | None = None,
    ) -> list[MealPlanEntry]:
        """Return entries; the range applies only when both ends are given."""
        if start_date and end_date:
            start = parse_plan_date(start_date)
            end = parse_plan_date(end_date)
            if start is None or end is None:
                raise MealPlanValidationError(["Invalid date format (YYYY-MM-DD)"])
            return self.repository.list_entries(user_id, start, end)
        return self.repository.list_entries(user_id)

    async def list_plans(
        self,
        user_id: UUID,
        start_date: str | None = None,
        end_date: str | None = None,
    ) -> list[PlannedMeal]:
        """Return entries with recipe details attached.

        Recipes are looked up concurrently. An entry whose lookup fails is
        returned without a recipe.
        """
        entries = self.list_entries(user_id, start_date, end_date)
        recipes = await asyncio.gather(
            *(self._planned_recipe(entry) for entry in entries)
        )
        return [
            PlannedMeal(entry=entry, recipe=recipe)
            for entry, recipe in zip(entries, recipes, strict=True)
        ]

    def delete_entry(self, user_id: UUID, entry_id: UUID) -> None:
        """Delete a user's entry."""
        if not self.repository.delete_entry(user_id, entry_id):
            raise MealPlanEntryNotFound("Entry not found")

    async def daily_nutrition(self, user_id: UUID, day: str | None) -> DailyNutrition:
        """Sum the nutrition of every recipe planned on a day."""
        parsed_day = parse_plan_date(day)
        if parsed_day is None:
            raise MealPlanValidationError(["Invalid date format (YYYY-MM-DD)"])

        entries = self.repository.list_entries(user_id, parsed_day, parsed_day)
        items: list[NutritionItem] = []
        for entry in entries:
            item = await self._entry_nutrition(entry)
            if item is not None:
                items.append(item)

        summary = aggregate_nutrition(items, [_ONE_SERVING_G] * len(items))
        return DailyNutrition(
            date=parsed_day,
            total_calories=summary.totals.calories,
            protein_g=summary.totals.protein_g,
            carbs_g=summary.totals.carbs_g,
            fat_g=summary.totals.fat_g,
            protein_percentage=summary.percentages.protein,
            carbs_percentage=summary.percentages.carbs,
            fat_percentage=summary.percentages.fat,
            recommended_calories=self.recommended_calories,
            protein_goal_g=self.protein_goal_g,
            entry_count=len(items),
        )

    async def _entry_nutrition(self, entry: MealPlanEntry) -> NutritionItem | None:
        if entry.source == "user":
            return self.repository.get_recipe_nutrition(entry.recipe_id)
        try:
            widget = await self.spoonacular_client.get_recipe_nutrition(entry.recipe_id)
        except httpx.HTTPError:
            _logger.exception(
                "Failed to fetch recipe nutrition",
                extra={"recipe_id": entry.recipe_id},
            )
            return None
        return nutrition_from_widget(widget)

    async def _planned_recipe(self, entry: MealPlanEntry) -> PlannedRecipe | None:
        if entry.source == "user":
            return self.repository.get_user_recipe(entry.recipe_id)
        try:
            info, widget = await asyncio.gather(
                self.spoonacular_client.get_recipe_information(entry.recipe_id),
                self._nutrition_widget_or_empty(entry.recipe_id),
            )
        except httpx.HTTPError:
            _logger.exception(
                "Failed to fetch recipe details",
                extra={"recipe_id": entry.recipe_id},
            )
            return None
        nutrition = nutrition_from_widget(widget)
        return PlannedRecipe(
            id=entry.recipe_id,
            title=str(info.get("title") or ""),
            image=info.get("image")
            or SPOONACULAR_IMAGE_URL.format(recipe_id=entry.recipe_id),
            source="spoonacular",
            calories=nutrition.calories,
            protein_g=nutrition.protein_g,
            carbs_g=nutrition.carbs_g,
            fat_g=nutrition.fat_g,
        )

    async def _nutrition_widget_or_empty(self, recipe_id: str) -> dict[str, object]:
        try:
            return await self.spoonacular_client.get_recipe_nutrition(recipe_id)
        except httpx.HTTPError:
            _logger.warning(
                "Recipe nutrition unavailable", extra={"recipe_id": recipe_id}
            )
            return {}


def parse_plan_date(raw: str | None) -> date | None:
    """Parse a strict YYYY-MM-DD date, or return None."""
    if not raw or not _DATE_PATTERN.match(raw):
        return None
    try:
        return date.fromisoformat(raw)
    except ValueError:
        return None


def parse_nutrition_value(value: object) -> float:
    """Parse values like "25g" into floats; unparseable values are 0."""
    if isinstance(value, bool) or value is None:
        return 0.0
    if isinstance(value, int | float):
        return float(value)
    cleaned = _NUMBER_PATTERN.sub("", str(value))
    try:
        return float(cleaned)
    except ValueError:
        return 0.0


def nutrition_from_widget(widget: dict[str, object]) -> NutritionItem:
    """Map a Spoonacular nutrition widget to a NutritionItem."""
    return NutritionItem(
        calories=parse_nutrition_value(widget.get("calories")),
        protein_g=parse_nutrition_value(widget.get("protein")),
        fat_g=parse_nutrition_value(widget.get("fat")),
        carbs_g=parse_nutrition_value(widget.get("carbs")),
    )
