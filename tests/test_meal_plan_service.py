"""Tests for custom meal plans."""

import asyncio
from datetime import date
from uuid import uuid4

import pytest

from bulkbuddy.domain.nutrition import NutritionItem
from bulkbuddy.errors import (
    MealPlanEntryNotFound,
    MealPlanValidationError,
    RecipeNotFound,
)
from bulkbuddy.services.meal_plans import (
    MealPlanService,
    nutrition_from_widget,
    parse_nutrition_value,
    parse_plan_date,
)
from tests.conftest import FakeSpoonacularClient, InMemoryMealPlanRepository


def _service(
    repository: InMemoryMealPlanRepository | None = None,
    client: FakeSpoonacularClient | None = None,
) -> MealPlanService:
    return MealPlanService(
        repository=repository or InMemoryMealPlanRepository(),
        spoonacular_client=client or FakeSpoonacularClient(),
    )


def test_add_entry_collects_all_errors() -> None:
    service = _service()

    with pytest.raises(MealPlanValidationError) as excinfo:
        service.add_entry(uuid4(), None, "blog", "05/01/2025", "brunch")

    assert str(excinfo.value) == (
        "Recipe ID is required, Invalid source, "
        "Invalid date format (YYYY-MM-DD), Invalid meal type"
    )


def test_add_entry_rejects_impossible_date() -> None:
    service = _service()

    with pytest.raises(MealPlanValidationError, match="Invalid date format"):
        service.add_entry(uuid4(), "1", "spoonacular", "2025-02-30", "lunch")


def test_add_user_recipe_requires_existing_recipe() -> None:
    service = _service()

    with pytest.raises(RecipeNotFound):
        service.add_entry(uuid4(), "42", "user", "2025-05-01", "dinner")


def test_add_and_list_entries_with_range() -> None:
    repository = InMemoryMealPlanRepository()
    service = _service(repository)
    user_id = uuid4()
    service.add_entry(user_id, "1", "spoonacular", "2025-05-01", "breakfast")
    service.add_entry(user_id, "2", "spoonacular", "2025-05-03", "lunch")
    service.add_entry(uuid4(), "3", "spoonacular", "2025-05-01", "lunch")

    assert len(service.list_entries(user_id)) == 2
    ranged = service.list_entries(user_id, "2025-05-01", "2025-05-02")
    assert [entry.recipe_id for entry in ranged] == ["1"]
    # a single bound is ignored
    assert len(service.list_entries(user_id, start_date="2025-05-02")) == 2


def test_delete_entry_only_for_owner() -> None:
    repository = InMemoryMealPlanRepository()
    service = _service(repository)
    owner = uuid4()
    entry = service.add_entry(owner, "1", "spoonacular", "2025-05-01", "snack")

    with pytest.raises(MealPlanEntryNotFound):
        service.delete_entry(uuid4(), entry.id)

    service.delete_entry(owner, entry.id)
    assert repository.entries == {}


def test_daily_nutrition_combines_sources() -> None:
    repository = InMemoryMealPlanRepository(
        recipes={"user-1": NutritionItem(calories=600, protein_g=40, carbs_g=50, fat_g=20)}
    )
    client = FakeSpoonacularClient(
        widgets={
            "101": {
                "calories": "500",
                "protein": "30g",
                "carbs": "60g",
                "fat": "10g",
            }
        },
        failing_recipes={"102"},
    )
    service = _service(repository, client)
    user_id = uuid4()
    service.add_entry(user_id, "user-1", "user", "2025-05-01", "dinner")
    service.add_entry(user_id, "101", "spoonacular", "2025-05-01", "lunch")
    service.add_entry(user_id, "102", "spoonacular", "2025-05-01", "breakfast")
    service.add_entry(user_id, "101", "spoonacular", "2025-05-02", "lunch")

    daily = asyncio.run(service.daily_nutrition(user_id, "2025-05-01"))

    assert daily.date == date(2025, 5, 1)
    assert daily.entry_count == 2
    assert daily.total_calories == pytest.approx(1100)
    assert daily.protein_g == pytest.approx(70)
    assert daily.carbs_g == pytest.approx(110)
    assert daily.fat_g == pytest.approx(30)
    macro_kcal = 70 * 4 + 110 * 4 + 30 * 9
    assert daily.protein_percentage == pytest.approx(280 / macro_kcal * 100)
    assert daily.recommended_calories == 2000
    assert daily.protein_goal_g == 56


def test_daily_nutrition_empty_day() -> None:
    daily = asyncio.run(_service().daily_nutrition(uuid4(), "2025-05-01"))

    assert daily.total_calories == 0
    assert daily.protein_percentage == 0


def test_daily_nutrition_requires_date() -> None:
    with pytest.raises(MealPlanValidationError):
        asyncio.run(_service().daily_nutrition(uuid4(), None))


def test_parse_helpers() -> None:
    assert parse_plan_date("2025-01-31") == date(2025, 1, 31)
    assert parse_plan_date("2025-1-31") is None
    assert parse_nutrition_value("25g") == 25
    assert parse_nutrition_value("1.5 mg") == 1.5
    assert parse_nutrition_value("n/a") == 0
    assert parse_nutrition_value(None) == 0
    assert parse_nutrition_value(12) == 12
    assert nutrition_from_widget({"fat": "7g"}).fat_g == 7


def test_list_plans_attaches_recipe_details() -> None:
    repository = InMemoryMealPlanRepository()
    repository.recipes["7"] = NutritionItem(
        calories=600, protein_g=40, carbs_g=50, fat_g=20
    )
    repository.recipe_titles["7"] = "Protein pancakes"
    client = FakeSpoonacularClient()
    client.widgets["101"] = {
        "calories": "500",
        "protein": "30g",
        "carbs": "60g",
        "fat": "10g",
    }
    service = _service(repository, client)
    user_id = uuid4()
    service.add_entry(user_id, "7", "user", "2025-05-01", "breakfast")
    service.add_entry(user_id, "101", "spoonacular", "2025-05-01", "dinner")

    plans = asyncio.run(service.list_plans(user_id))

    by_id = {plan.entry.recipe_id: plan.recipe for plan in plans}
    assert by_id["7"].title == "Protein pancakes"
    assert by_id["7"].source == "user"
    assert by_id["7"].calories == 600
    assert by_id["101"].title == "Recipe 101"
    assert by_id["101"].image == "https://img.test/101.jpg"
    assert by_id["101"].source == "spoonacular"
    assert (by_id["101"].calories, by_id["101"].protein_g) == (500, 30)
    assert (by_id["101"].carbs_g, by_id["101"].fat_g) == (60, 10)


def test_list_plans_falls_back_when_lookups_fail() -> None:
    client = FakeSpoonacularClient(failing_info={"202"}, failing_recipes={"303"})
    service = _service(client=client)
    user_id = uuid4()
    service.add_entry(user_id, "202", "spoonacular", "2025-05-01", "lunch")
    service.add_entry(user_id, "303", "spoonacular", "2025-05-01", "dinner")

    plans = asyncio.run(service.list_plans(user_id))

    by_id = {plan.entry.recipe_id: plan.recipe for plan in plans}
    assert by_id["202"] is None
    assert by_id["303"].title == "Recipe 303"
    assert by_id["303"].calories == 0.0


def test_list_plans_uses_default_spoonacular_image() -> None:
    class NoImageClient(FakeSpoonacularClient):
        async def get_recipe_information(
            self, recipe_id: int | str, include_nutrition: bool = False
        ) -> dict[str, object]:
            return {"id": recipe_id, "title": "Plain"}

    service = _service(client=NoImageClient())
    user_id = uuid4()
    service.add_entry(user_id, "55", "spoonacular", "2025-05-01", "lunch")

    (plan,) = asyncio.run(service.list_plans(user_id))

    assert plan.recipe.image == "https://spoonacular.com/recipeImages/55-312x231.jpg"
