"""Spoonacular recipe and meal planner API client."""

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any, Protocol

import httpx


class SpoonacularClient(Protocol):
    """Interface for Spoonacular interactions."""

    async def generate_meal_plan(
        self,
        target_calories: int,
        time_frame: str,
        diet: str | None = None,
        exclude: str | None = None,
    ) -> dict[str, object]:
        """Generate a day or week meal plan."""

    async def get_recipe_information(
        self, recipe_id: int | str, include_nutrition: bool = False
    ) -> dict[str, object]:
        """Return recipe information, optionally with nutrition."""

    async def get_recipe_nutrition(self, recipe_id: int | str) -> dict[str, object]:
        """Return the nutrition widget summary for a recipe."""

    async def autocomplete_ingredients(
        self, query: str, number: int = 8
    ) -> list[dict[str, object]]:
        """Return ingredient name suggestions."""

    async def search_recipes(
        self, query: str, filters: Mapping[str, str], number: int = 8
    ) -> dict[str, object]:
        """Search recipes with nutrition and recipe information attached."""

    async def random_recipes(self, number: int = 8) -> dict[str, object]:
        """Return random recipes."""


@dataclass
class HttpxSpoonacularClient(SpoonacularClient):
    """HTTPX-backed Spoonacular client."""

    api_key: str
    base_url: str
    http_client: httpx.AsyncClient
    timeout_seconds: float = 15

    @classmethod
    def create(cls, api_key: str, base_url: str) -> "HttpxSpoonacularClient":
        """Create a client that owns its httpx session."""
        return cls(
            api_key=api_key,
            base_url=base_url.rstrip("/"),
            http_client=httpx.AsyncClient(),
        )

    async def generate_meal_plan(
        self,
        target_calories: int,
        time_frame: str,
        diet: str | None = None,
        exclude: str | None = None,
    ) -> dict[str, object]:
        """Call /mealplanner/generate, omitting unset filters."""
        params: dict[str, object] = {
            "timeFrame": time_frame,
            "targetCalories": target_calories,
        }
        if diet:
            params["diet"] = diet
        if exclude:
            params["exclude"] = exclude
        return await self._get("/mealplanner/generate", params)

    async def get_recipe_information(
        self, recipe_id: int | str, include_nutrition: bool = False
    ) -> dict[str, object]:
        """Call /recipes/{id}/information."""
        params = {"includeNutrition": "true"} if include_nutrition else {}
        return await self._get(f"/recipes/{recipe_id}/information", params)

    async def get_recipe_nutrition(self, recipe_id: int | str) -> dict[str, object]:
        """Call /recipes/{id}/nutritionWidget.json."""
        return await self._get(f"/recipes/{recipe_id}/nutritionWidget.json", {})

    async def autocomplete_ingredients(
        self, query: str, number: int = 8
    ) -> list[dict[str, object]]:
        """Call /food/ingredients/autocomplete."""
        return await self._get(
            "/food/ingredients/autocomplete", {"query": query, "number": number}
        )

    async def search_recipes(
        self, query: str, filters: Mapping[str, str], number: int = 8
    ) -> dict[str, object]:
        """Call /recipes/complexSearch; filters may override the defaults."""
        params: dict[str, object] = {
            "query": query,
            "number": number,
            "addRecipeInformation": "true",
            "instructionsRequired": "true",
            "addRecipeNutrition": "true",
            **filters,
        }
        return await self._get("/recipes/complexSearch", params)

    async def random_recipes(self, number: int = 8) -> dict[str, object]:
        """Call /recipes/random."""
        return await self._get("/recipes/random", {"number": number})

    async def close(self) -> None:
        """Close the underlying HTTP session."""
        await self.http_client.aclose()

    async def _get(self, path: str, params: dict[str, object]) -> Any:
        response = await self.http_client.get(
            f"{self.base_url}{path}",
            params={**params, "apiKey": self.api_key},
            timeout=self.timeout_seconds,
        )
        response.raise_for_status()
        return response.json()
