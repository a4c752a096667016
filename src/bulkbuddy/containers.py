"""Dependency container wiring for the application."""

from collections.abc import Awaitable, Callable
from dataclasses import dataclass

from supabase import create_client

from bulkbuddy.adapters.fdc_client import HttpxFdcClient
from bulkbuddy.adapters.spoonacular_client import HttpxSpoonacularClient
from bulkbuddy.adapters.supabase_meal_plan_repository import (
    SupabaseMealPlanRepository,
)
from bulkbuddy.adapters.supabase_recipe_repository import SupabaseRecipeRepository
from bulkbuddy.config import Settings
from bulkbuddy.services.cache import InMemoryCache
from bulkbuddy.services.foods import FoodService
from bulkbuddy.services.meal_generator import MealGeneratorService
from bulkbuddy.services.meal_plans import MealPlanService
from bulkbuddy.services.recipes import RecipeService


@dataclass
class AppContainer:
    """Holds application-wide dependencies."""

    settings: Settings
    food_service: FoodService
    meal_generator_service: MealGeneratorService
    meal_plan_service: MealPlanService
    recipe_service: RecipeService
    close_resources: Callable[[], Awaitable[None]]


def build_container(settings: Settings | None = None) -> AppContainer:
    """Create the default dependency container."""
    resolved_settings = settings or Settings()
    supabase_client = create_client(
        resolved_settings.supabase_url, resolved_settings.supabase_service_key
    )
    fdc_client = HttpxFdcClient.create(
        api_key=resolved_settings.fdc_api_key,
        base_url=resolved_settings.fdc_base_url,
    )
    spoonacular_client = HttpxSpoonacularClient.create(
        api_key=resolved_settings.spoonacular_api_key,
        base_url=resolved_settings.spoonacular_base_url,
    )
    food_service = FoodService(
        fdc_client=fdc_client,
        cache=InMemoryCache(),
        debug=resolved_settings.debug,
    )
    meal_generator_service = MealGeneratorService(client=spoonacular_client)
    meal_plan_service = MealPlanService(
        repository=SupabaseMealPlanRepository(supabase_client),
        spoonacular_client=spoonacular_client,
    )
    recipe_service = RecipeService(
        repository=SupabaseRecipeRepository(supabase_client),
        spoonacular_client=spoonacular_client,
    )

    async def close_resources() -> None:
        await fdc_client.close()
        await spoonacular_client.close()

    return AppContainer(
        settings=resolved_settings,
        food_service=food_service,
        meal_generator_service=meal_generator_service,
        meal_plan_service=meal_plan_service,
        recipe_service=recipe_service,
        close_resources=close_resources,
    )
