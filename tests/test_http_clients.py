"""Tests for HTTP-based adapters."""

import asyncio
import json

import httpx
import pytest

from bulkbuddy.adapters.fdc_client import HttpxFdcClient
from bulkbuddy.adapters.spoonacular_client import HttpxSpoonacularClient


def test_fdc_client_search_and_get() -> None:
    seen: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        if request.url.path.endswith("/foods/search"):
            return httpx.Response(200, json={"foods": []})
        return httpx.Response(200, json={"fdcId": 1, "foodNutrients": []})

    async_client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
    client = HttpxFdcClient(
        api_key="key", base_url="https://api.test", http_client=async_client
    )

    search = asyncio.run(client.search_foods("rice", page_size=3))
    food = asyncio.run(client.get_food(1))

    assert search == {"foods": []}
    assert food["fdcId"] == 1
    assert seen[0].method == "POST"
    assert seen[0].url.params["api_key"] == "key"
    body = json.loads(seen[0].content.decode())
    assert body["query"] == "rice"
    assert body["pageSize"] == 3
    assert seen[1].url.path == "/food/1"


def test_fdc_client_raises_on_error_status() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(403, json={"error": "bad key"})

    async_client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
    client = HttpxFdcClient(
        api_key="key", base_url="https://api.test", http_client=async_client
    )

    with pytest.raises(httpx.HTTPStatusError):
        asyncio.run(client.get_food(1))


def test_spoonacular_generate_omits_unset_filters() -> None:
    seen: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(200, json={"meals": [], "nutrients": {}})

    async_client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
    client = HttpxSpoonacularClient(
        api_key="spoon", base_url="https://api.test", http_client=async_client
    )

    asyncio.run(client.generate_meal_plan(2000, "day", exclude="nuts,dairy"))

    params = seen[0].url.params
    assert seen[0].url.path == "/mealplanner/generate"
    assert params["targetCalories"] == "2000"
    assert params["timeFrame"] == "day"
    assert params["exclude"] == "nuts,dairy"
    assert params["apiKey"] == "spoon"
    assert "diet" not in params


def test_spoonacular_recipe_endpoints() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        path = request.url.path
        if path.endswith("/information"):
            assert request.url.params["includeNutrition"] == "true"
            return httpx.Response(200, json={"id": 5, "title": "Soup"})
        if path.endswith("/nutritionWidget.json"):
            return httpx.Response(200, json={"calories": "300", "protein": "20g"})
        return httpx.Response(200, json=[{"id": 9040, "name": "banana"}])

    async_client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
    client = HttpxSpoonacularClient(
        api_key="spoon", base_url="https://api.test", http_client=async_client
    )

    info = asyncio.run(client.get_recipe_information(5, include_nutrition=True))
    widget = asyncio.run(client.get_recipe_nutrition(5))
    suggestions = asyncio.run(client.autocomplete_ingredients("ban"))

    assert info["title"] == "Soup"
    assert widget["protein"] == "20g"
    assert suggestions == [{"id": 9040, "name": "banana"}]


def test_spoonacular_recipe_search_and_random() -> None:
    requests: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        requests.append(request)
        if request.url.path.endswith("/complexSearch"):
            return httpx.Response(200, json={"results": [{"id": 1}]})
        return httpx.Response(200, json={"recipes": [{"id": 2}]})

    async_client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
    client = HttpxSpoonacularClient(
        api_key="spoon", base_url="https://api.test", http_client=async_client
    )

    found = asyncio.run(
        client.search_recipes("curry", {"diet": "vegan", "maxCalories": "600"}, number=4)
    )
    random = asyncio.run(client.random_recipes(number=3))

    search_params = requests[0].url.params
    assert requests[0].url.path == "/recipes/complexSearch"
    assert search_params["query"] == "curry"
    assert search_params["number"] == "4"
    assert search_params["addRecipeNutrition"] == "true"
    assert search_params["diet"] == "vegan"
    assert search_params["maxCalories"] == "600"
    assert requests[1].url.path == "/recipes/random"
    assert requests[1].url.params["number"] == "3"
    assert found == {"results": [{"id": 1}]}
    assert random == {"recipes": [{"id": 2}]}
