"""Food nutrition lookups backed by USDA FDC."""

import asyncio
import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING

from bulkbuddy.adapters.fdc_client import FdcClient
from bulkbuddy.domain.nutrition import FoodNutrition, FoodSummary, NutritionItem
from bulkbuddy.errors import UpstreamError
from bulkbuddy.services.cache import Cache

if TYPE_CHECKING:
    from collections.abc import Awaitable, Callable

# FDC nutrient ids mapped to NutritionItem fields, in priority order
_NUTRIENT_IDS: dict[str, tuple[int, ...]] = {
    "calories": (1008, 2047, 2048),
    "protein_g": (1003,),
    "fat_g": (1004,),
    "carbs_g": (1005,),
    "sugar_g": (2000, 1063),
    "fiber_g": (1079,),
    "sodium_mg": (1093,),
}

_logger = logging.getLogger(__name__)


@dataclass
class FoodService:
    """Search foods and return nutrients per 100 g, with caching."""

    fdc_client: FdcClient
    cache: Cache
    search_ttl_seconds: int = 3600
    food_ttl_seconds: int = 86400
    debug: bool = False
    retry_attempts: int = 1
    retry_delay_seconds: float = 0.3

    async def search(self, query: str, limit: int = 3) -> list[FoodNutrition]:
        """Search FDC foods; raises ValueError for a blank query."""
        cleaned = query.strip()
        if not cleaned:
            raise ValueError("Search query is required")
        cache_key = f"fdc:search:{cleaned.lower()}:{limit}"
        cached = self.cache.get(cache_key)
        if isinstance(cached, list):
            return cached

        payload = await self._call_with_retry(
            lambda: self.fdc_client.search_foods(cleaned, page_size=limit),
            action="search",
        )
        foods = [_parse_food(food) for food in payload.get("foods", [])][:limit]
        self.cache.set(cache_key, foods, ttl_seconds=self.search_ttl_seconds)
        if self.debug:
            _logger.info("Food search: query=%s results=%s", cleaned, len(foods))
        return foods

    async def get_food(self, fdc_id: int) -> FoodNutrition:
        """Return nutrients for one FDC food."""
        cache_key = f"fdc:food:{fdc_id}"
        cached = self.cache.get(cache_key)
        if isinstance(cached, FoodNutrition):
            return cached

        payload = await self._call_with_retry(
            lambda: self.fdc_client.get_food(fdc_id),
            action=f"get_food:{fdc_id}",
        )
        food = _parse_food(payload)
        self.cache.set(cache_key, food, ttl_seconds=self.food_ttl_seconds)
        return food

    async def _call_with_retry(
        self, func: "Callable[[], Awaitable[dict[str, object]]]", *, action: str
    ) -> dict[str, object]:
        attempt = 0
        while True:
            try:
                return await func()
            except Exception as exc:
                attempt += 1
                status_code = _status_code_from_exception(exc)
                _logger.warning(
                    "FDC %s failed (attempt %s/%s, status=%s): %s",
                    action,
                    attempt,
                    self.retry_attempts + 1,
                    status_code,
                    exc,
                )
                if attempt > self.retry_attempts:
                    raise UpstreamError(
                        "Error fetching food data", details=str(exc)
                    ) from exc
                await asyncio.sleep(self.retry_delay_seconds)


def _status_code_from_exception(exc: Exception) -> str:
    response = getattr(exc, "response", None)
    status_code = getattr(response, "status_code", None)
    if isinstance(status_code, int):
        return str(status_code)
    return "n/a"


def _parse_food(payload: dict[str, object]) -> FoodNutrition:
    summary = FoodSummary(
        fdc_id=int(payload["fdcId"]),
        description=str(payload.get("description", "")),
        brand_owner=payload.get("brandOwner"),
        brand_name=payload.get("brandName"),
        data_type=payload.get("dataType"),
    )
    serving_size = payload.get("servingSize")
    return FoodNutrition(
        summary=summary,
        per_100g=extract_nutrients(payload.get("foodNutrients", [])),
        serving_size_g=float(serving_size) if serving_size is not None else None,
    )


def extract_nutrients(food_nutrients: list[dict[str, object]]) -> NutritionItem:
    """Map FDC nutrient rows to a NutritionItem; missing values are 0."""
    amounts: dict[int, float] = {}
    for nutrient in food_nutrients:
        nutrient_info = nutrient.get("nutrient") or {}
        nutrient_id = nutrient_info.get("id") or nutrient.get("nutrientId")
        # detail payloads use "amount", search payloads use "value"
        amount = nutrient.get("amount", nutrient.get("value"))
        if nutrient_id is None or amount is None:
            continue
        amounts.setdefault(int(nutrient_id), float(amount))

    values: dict[str, float] = {}
    for field_name, ids in _NUTRIENT_IDS.items():
        values[field_name] = next(
            (amounts[nutrient_id] for nutrient_id in ids if nutrient_id in amounts),
            0.0,
        )
    return NutritionItem(**values)
