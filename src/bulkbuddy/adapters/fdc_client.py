"""USDA FoodData Central API client."""

from dataclasses import dataclass
from typing import Protocol

import httpx

DEFAULT_DATA_TYPES = ("Foundation", "SR Legacy", "Branded")


class FdcClient(Protocol):
    """Interface for FoodData Central lookups."""

    async def search_foods(
        self, query: str, page_size: int = 10
    ) -> dict[str, object]:
        """Search foods by query and return raw API data."""

    async def get_food(self, fdc_id: int) -> dict[str, object]:
        """Fetch a food by FDC id and return raw API data."""


@dataclass
class HttpxFdcClient(FdcClient):
    """HTTPX-backed FDC client."""

    api_key: str
    base_url: str
    http_client: httpx.AsyncClient
    timeout_seconds: float = 15
    data_types: tuple[str, ...] = DEFAULT_DATA_TYPES

    @classmethod
    def create(cls, api_key: str, base_url: str) -> "HttpxFdcClient":
        """Create a client that owns its httpx session."""
        return cls(
            api_key=api_key,
            base_url=base_url.rstrip("/"),
            http_client=httpx.AsyncClient(),
        )

    async def search_foods(
        self, query: str, page_size: int = 10
    ) -> dict[str, object]:
        """Search foods; the query is sent in the JSON body."""
        return await self._request(
            "POST",
            "/foods/search",
            json={
                "query": query,
                "pageSize": page_size,
                "dataType": list(self.data_types),
            },
        )

    async def get_food(self, fdc_id: int) -> dict[str, object]:
        """Fetch full details for one food."""
        return await self._request("GET", f"/food/{fdc_id}")

    async def close(self) -> None:
        """Close the underlying HTTP session."""
        await self.http_client.aclose()

    async def _request(
        self, method: str, path: str, json: dict[str, object] | None = None
    ) -> dict[str, object]:
        response = await self.http_client.request(
            method,
            f"{self.base_url}{path}",
            params={"api_key": self.api_key},
            json=json,
            timeout=self.timeout_seconds,
        )
        response.raise_for_status()
        return response.json()
