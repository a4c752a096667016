"""Recipe search, user submissions and moderation."""

import logging
from collections.abc import Mapping
from dataclasses import dataclass, replace
from typing import Protocol
from uuid import UUID

import httpx

from bulkbuddy.adapters.spoonacular_client import SpoonacularClient
from bulkbuddy.domain.recipes import (
    APPROVED,
    DIET_FLAGS,
    INTOLERANCE_FLAGS,
    NUTRIENT_LABELS,
    PENDING,
    RecipeSearchResult,
    RecipeSubmission,
    UserRecipe,
    UserRecipeCriteria,
)
from bulkbuddy.errors import (
    RecipeForbidden,
    RecipeNotFound,
    RecipeValidationError,
    UpstreamError,
)
from bulkbuddy.services.aggregation import macro_percentages

SPOONACULAR_FILTERS = (
    "diet",
    "cuisine",
    "intolerances",
    "excludeIngredients",
    "type",
    "maxReadyTime",
    "minCalories",
    "maxCalories",
    "includeIngredients",
    "fillIngredients",
    "sort",
    "sortDirection",
    "offset",
    "number",
    "minProtein",
    "maxProtein",
    "minCarbs",
    "maxCarbs",
    "minFat",
    "maxFat",
)
# search bound suffix -> recipes column
_BOUND_COLUMNS = {
    "Calories": "calories",
    "Protein": "protein",
    "Carbs": "carbs",
    "Fat": "fat",
}
RESULTS_PER_SEARCH = 8

_logger = logging.getLogger(__name__)


class RecipeRepository(Protocol):
    """Persistence interface for user-submitted recipes."""

    def create_recipe(self, user_id: UUID, submission: RecipeSubmission) -> UserRecipe:
        """Store a submission as a pending recipe."""

    def get_recipe(self, recipe_id: str) -> UserRecipe | None:
        """Return a recipe by id, if present."""

    def list_recipes(
        self, user_id: UUID | None = None, status: str | None = None
    ) -> list[UserRecipe]:
        """Return user recipes, newest first, optionally filtered."""

    def search_approved(self, criteria: UserRecipeCriteria) -> list[UserRecipe]:
        """Return approved user recipes matching the criteria."""

    def set_status(self, recipe_id: str, status: str) -> bool:
        """Update a recipe's moderation status; return False if missing."""

    def delete_recipe(self, recipe_id: str) -> bool:
        """Delete a recipe; return False if missing."""


@dataclass
class RecipeService:
    """Search Spoonacular and community recipes, and moderate submissions."""

    repository: RecipeRepository
    spoonacular_client: SpoonacularClient

    async def search(
        self,
        query: str | None,
        filters: Mapping[str, str],
        include_user: bool = False,
    ) -> RecipeSearchResult:
        """Search Spoonacular, then append matching approved user recipes.

        With no query and no recognised filter, random recipes are returned.

        Raises:
            RecipeValidationError: if a calorie or macro bound is not a number.
            UpstreamError: if Spoonacular fails.
        """
        criteria = user_recipe_criteria(query, filters)
        spoonacular_filters = {
            name: filters[name] for name in SPOONACULAR_FILTERS if filters.get(name)
        }
        try:
            if not query and not spoonacular_filters:
                payload = await self.spoonacular_client.random_recipes(
                    number=RESULTS_PER_SEARCH
                )
                hits = payload.get("recipes") or []
            else:
                payload = await self.spoonacular_client.search_recipes(
                    query or "", spoonacular_filters, number=RESULTS_PER_SEARCH
                )
                hits = payload.get("results") or []
        except httpx.HTTPError as exc:
            _logger.exception("Recipe search failed")
            raise UpstreamError("Error searching recipes", details=str(exc)) from exc

        spoonacular = [{**hit, "source": "spoonacular"} for hit in hits]
        user = self.repository.search_approved(criteria) if include_user else []
        return RecipeSearchResult(spoonacular=spoonacular, user=user)

    def submit(self, user_id: UUID, submission: RecipeSubmission) -> UserRecipe:
        """Store a recipe for moderation."""
        if (
            not submission.title.strip()
            or not submission.instructions.strip()
            or not submission.ingredients
        ):
            raise RecipeValidationError(["All fields are required"])
        flags = set(submission.flags)
        if submission.diet_type in ("vegetarian", "vegan"):
            flags.add(submission.diet_type)
        recipe = self.repository.create_recipe(
            user_id, replace(submission, flags=frozenset(flags))
        )
        _logger.info(
            "Recipe submitted",
            extra={"user_id": str(user_id), "recipe_id": recipe.id},
        )
        return recipe

    def get(self, recipe_id: str) -> UserRecipe:
        """Return a stored recipe or raise RecipeNotFound."""
        recipe = self.repository.get_recipe(recipe_id)
        if recipe is None:
            raise RecipeNotFound("Recipe not found")
        return recipe

    def list_own(self, user_id: UUID) -> list[UserRecipe]:
        return self.repository.list_recipes(user_id=user_id)

    def list_all(self) -> list[UserRecipe]:
        return self.repository.list_recipes()

    def delete_own(self, user_id: UUID, recipe_id: str) -> None:
        """Delete a recipe the caller submitted."""
        recipe = self._deletable(recipe_id)
        if recipe.user_id != user_id:
            raise RecipeForbidden("Unauthorized to delete this recipe")
        self.repository.delete_recipe(recipe_id)

    def pending(self) -> list[UserRecipe]:
        return self.repository.list_recipes(status=PENDING)

    def approve(self, recipe_id: str) -> None:
        if not self.repository.set_status(recipe_id, APPROVED):
            raise RecipeNotFound("Recipe not found")
        _logger.info("Recipe approved", extra={"recipe_id": recipe_id})

    def reject(self, recipe_id: str) -> None:
        """Reject a submission by deleting it."""
        self.get(recipe_id)
        self.repository.delete_recipe(recipe_id)
        _logger.info("Recipe rejected", extra={"recipe_id": recipe_id})

    def admin_delete(self, recipe_id: str) -> None:
        """Delete any user-submitted recipe."""
        self._deletable(recipe_id)
        self.repository.delete_recipe(recipe_id)
        _logger.info("Recipe deleted by admin", extra={"recipe_id": recipe_id})

    def _deletable(self, recipe_id: str) -> UserRecipe:
        recipe = self.get(recipe_id)
        if recipe.source != "user":
            raise RecipeForbidden("Cannot delete Spoonacular recipes")
        return recipe


def user_recipe_criteria(
    query: str | None, filters: Mapping[str, str]
) -> UserRecipeCriteria:
    """Translate Spoonacular-style search filters to user recipe criteria.

    Unknown diets and intolerances are ignored.
    """
    required: list[str] = []
    diet_flag = DIET_FLAGS.get(filters.get("diet") or "")
    if diet_flag:
        required.append(diet_flag)
    for intolerance in (filters.get("intolerances") or "").split(","):
        flag = INTOLERANCE_FLAGS.get(intolerance.strip())
        if flag and flag not in required:
            required.append(flag)

    minimums: dict[str, float] = {}
    maximums: dict[str, float] = {}
    errors: list[str] = []
    for suffix, column in _BOUND_COLUMNS.items():
        for prefix, bounds in (("min", minimums), ("max", maximums)):
            raw = filters.get(f"{prefix}{suffix}")
            if not raw:
                continue
            try:
                bounds[column] = float(raw)
            except ValueError:
                errors.append(f"Invalid {prefix}{suffix}")
    if errors:
        raise RecipeValidationError(errors)

    return UserRecipeCriteria(
        title_query=query.strip() if query and query.strip() else None,
        required_flags=tuple(required),
        meal_type=filters.get("type") or None,
        minimums=minimums,
        maximums=maximums,
    )


def recipe_nutrients(recipe: UserRecipe) -> list[dict[str, object]]:
    """List a recipe's nutrients in Spoonacular's {name, amount, unit} shape."""
    nutrition = recipe.nutrition
    nutrients = []
    for label, key, unit in NUTRIENT_LABELS:
        if hasattr(nutrition, key):
            amount = getattr(nutrition, key)
        else:
            amount = nutrition.micronutrients.get(key)
        nutrients.append({"name": label, "amount": amount, "unit": unit})
    return nutrients


def caloric_breakdown(recipe: UserRecipe) -> dict[str, float]:
    """Return macro calorie percentages in Spoonacular's naming."""
    percentages = macro_percentages(
        recipe.nutrition.protein_g, recipe.nutrition.carbs_g, recipe.nutrition.fat_g
    )
    return {
        "percentProtein": percentages.protein,
        "percentFat": percentages.fat,
        "percentCarbs": percentages.carbs,
    }
