"""USDA FoodData Central food source."""

import logging
from collections.abc import Sequence
from dataclasses import dataclass, field

import httpx

from diet_assistant.domain.foods import Food
from diet_assistant.services.catalog import FoodSource

_ENERGY_KCAL_NUTRIENT_ID = 1008

_logger = logging.getLogger(__name__)


@dataclass
class HttpxFdcFoodSource(FoodSource):
    """HTTPX-backed source turning FDC search hits into basic foods."""

    api_key: str
    base_url: str
    http_client: httpx.Client
    queries: Sequence[str] = field(default_factory=tuple)
    page_size: int = 10

    @classmethod
    def create(
        cls, api_key: str, base_url: str, queries: Sequence[str]
    ) -> "HttpxFdcFoodSource":
        """Create an FDC source with a managed httpx session."""
        return cls(
            api_key=api_key,
            base_url=base_url,
            http_client=httpx.Client(),
            queries=tuple(queries),
        )

    def search_foods(self, query: str) -> dict[str, object]:
        """Search foods by query and return raw API data."""
        response = self.http_client.post(
            f"{self.base_url}/foods/search",
            params={"api_key": self.api_key},
            json={"query": query, "pageSize": self.page_size},
            timeout=15,
        )
        response.raise_for_status()
        return response.json()

    def fetch_food_data(self) -> list[Food]:
        """Run every configured query and map the hits to foods."""
        foods: dict[str, Food] = {}
        for query in self.queries:
            payload = self.search_foods(query)
            hits = payload.get("foods") or []
            for hit in hits:
                food = _to_food(hit, query)
                if food is not None:
                    foods.setdefault(food.id, food)
            _logger.info("FDC search: query=%s results=%s", query, len(hits))
        return list(foods.values())

    def close(self) -> None:
        """Close the underlying HTTP session."""
        self.http_client.close()


def _to_food(hit: dict[str, object], query: str) -> Food | None:
    fdc_id = hit.get("fdcId")
    if fdc_id is None:
        return None
    description = str(hit.get("description") or query)
    # Commas are field separators in the flat-file catalog.
    name = " ".join(description.replace(",", " ").split())
    keywords = [query, *name.lower().split()]
    return Food.basic(
        f"fdc_{fdc_id}",
        name,
        dict.fromkeys(keywords),
        _extract_calories(hit.get("foodNutrients") or []),
    )


def _extract_calories(food_nutrients: list[dict[str, object]]) -> int:
    """Return energy in kcal from FDC nutrients, 0 when absent."""
    for nutrient in food_nutrients:
        nutrient_info = nutrient.get("nutrient") or {}
        nutrient_id = nutrient_info.get("id") or nutrient.get("nutrientId")
        amount = nutrient.get("value", nutrient.get("amount"))
        if nutrient_id == _ENERGY_KCAL_NUTRIENT_ID and amount is not None:
            return round(float(amount))
    return 0
