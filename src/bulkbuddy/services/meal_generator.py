"""Meal plan generation through Spoonacular."""

import asyncio
import logging
import re
from dataclasses import dataclass

import httpx

from bulkbuddy.adapters.spoonacular_client import SpoonacularClient
from bulkbuddy.domain.meal_plans import GeneratedMeal, GeneratedMealPlan
from bulkbuddy.domain.meal_slots import SLOT_NAMES, MealSlotTargets
from bulkbuddy.errors import (
    InvalidMealPlanRequest,
    MealPlanNotFound,
    UpstreamError,
)
from bulkbuddy.services.meal_slots import partition_meal_slots

TIME_FRAMES = frozenset({"day", "week"})
_LEADING_INT = re.compile(r"^\s*([+-]?\d+)")
_HTTP_BAD_REQUEST = 400

_logger = logging.getLogger(__name__)


@dataclass
class MealGeneratorService:
    """Generate meal plans for a calorie target and annotate meal slots."""

    client: SpoonacularClient

    async def generate(
        self,
        target_calories: int | str | None,
        time_frame: str = "day",
        diet: str | None = None,
        exclude: str | None = None,
    ) -> GeneratedMealPlan:
        """Generate a plan.

        Raises:
            InvalidMealPlanRequest: if calories or time frame are invalid.
            MealPlanNotFound: if no plan matches the filters.
            UpstreamError: for any other Spoonacular failure.
        """
        calories = parse_target_calories(target_calories)
        if calories is None or calories <= 0:
            raise InvalidMealPlanRequest("Invalid calorie input")
        if time_frame not in TIME_FRAMES:
            raise InvalidMealPlanRequest("Invalid time frame")

        slot_targets = partition_meal_slots(calories)
        try:
            payload = await self.client.generate_meal_plan(
                target_calories=calories,
                time_frame=time_frame,
                diet=diet or None,
                exclude=exclude or None,
            )
            meals: list[GeneratedMeal] = []
            if time_frame == "day":
                meals = list(
                    await asyncio.gather(
                        *(
                            self._enrich_meal(meal, index, slot_targets)
                            for index, meal in enumerate(payload.get("meals", []))
                        )
                    )
                )
        except httpx.HTTPStatusError as exc:
            _logger.warning(
                "Meal plan generation failed",
                extra={"status_code": exc.response.status_code},
            )
            if exc.response.status_code == _HTTP_BAD_REQUEST:
                raise MealPlanNotFound(
                    "No meal plan found. "
                    "Please adjust your filters or excluded ingredients."
                ) from exc
            raise UpstreamError(
                "Error fetching meal plan", details=_error_details(exc)
            ) from exc
        except httpx.HTTPError as exc:
            _logger.exception("Meal plan generation failed")
            raise UpstreamError("Error fetching meal plan", details=str(exc)) from exc

        return GeneratedMealPlan(
            time_frame=time_frame,
            target_calories=calories,
            filters={
                "diet": diet or "none",
                "exclude": exclude or "none",
                "timeFrame": time_frame,
            },
            meals=meals,
            nutrients=dict(payload.get("nutrients") or {}),
            week=payload.get("week") if time_frame == "week" else None,
            slot_targets=slot_targets if time_frame == "day" else None,
        )

    async def suggest(self, query: str) -> list[dict[str, object]]:
        """Return ingredient suggestions for autocomplete."""
        cleaned = query.strip()
        if not cleaned:
            raise ValueError("Query is required")
        try:
            results = await self.client.autocomplete_ingredients(cleaned, number=8)
        except httpx.HTTPError as exc:
            _logger.exception("Ingredient suggestions failed")
            raise UpstreamError(
                "Error fetching suggestions", details=str(exc)
            ) from exc
        return [{"id": item.get("id"), "name": item.get("name")} for item in results]

    async def _enrich_meal(
        self, meal: dict[str, object], index: int, slot_targets: MealSlotTargets
    ) -> GeneratedMeal:
        info = await self.client.get_recipe_information(
            meal["id"], include_nutrition=True
        )
        calories = recipe_calories(info)
        slot_name = SLOT_NAMES[index] if index < len(SLOT_NAMES) else None
        slot = slot_targets.slot(slot_name) if slot_name else None
        return GeneratedMeal(
            id=int(meal["id"]),
            title=str(info.get("title") or meal.get("title", "")),
            image=info.get("image"),
            ready_in_minutes=info.get("readyInMinutes", meal.get("readyInMinutes")),
            servings=info.get("servings", meal.get("servings")),
            health_score=float(info.get("healthScore") or 0),
            calories=calories,
            slot=slot_name,
            slot_target=slot.target if slot else None,
            within_slot_band=slot.contains(calories) if slot else None,
            source_url=meal.get("sourceUrl"),
        )


def parse_target_calories(raw: int | str | None) -> int | None:
    """Parse a leading integer from user input, like the web form sends it."""
    if raw is None or isinstance(raw, bool):
        return None
    if isinstance(raw, int):
        return raw
    match = _LEADING_INT.match(str(raw))
    if match is None:
        return None
    return int(match.group(1))


def recipe_calories(info: dict[str, object]) -> float:
    """Return the Calories nutrient amount from recipe information, or 0."""
    nutrition = info.get("nutrition") or {}
    for nutrient in nutrition.get("nutrients", []):
        if nutrient.get("name") == "Calories":
            return float(nutrient.get("amount") or 0)
    return 0.0


def _error_details(exc: httpx.HTTPStatusError) -> object:
    try:
        return exc.response.json()
    except ValueError:
        return exc.response.text
