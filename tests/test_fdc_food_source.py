"""Tests for the FoodData Central food source."""

import json

import httpx
import pytest

from diet_assistant.adapters.fdc_food_source import HttpxFdcFoodSource
from diet_assistant.services.catalog import FoodCatalog

_SEARCH_PAYLOAD = {
    "foods": [
        {
            "fdcId": 171287,
            "description": "Egg, whole, raw, fresh",
            "foodNutrients": [
                {"nutrientId": 1003, "value": 12.6},
                {"nutrientId": 1008, "value": 143.4},
            ],
        },
        {"description": "No id"},
        {
            "fdcId": 999,
            "description": "Mystery egg dish",
            "foodNutrients": [{"nutrient": {"id": 1008}, "amount": 210}],
        },
    ]
}


def _source(handler) -> HttpxFdcFoodSource:  # type: ignore[no-untyped-def]
    return HttpxFdcFoodSource(
        api_key="key",
        base_url="https://api.test",
        http_client=httpx.Client(transport=httpx.MockTransport(handler)),
        queries=("egg",),
    )


def test_fetch_food_data_maps_hits_to_basic_foods() -> None:
    seen: list[dict[str, object]] = []

    def handler(request: httpx.Request) -> httpx.Response:
        assert request.url.path.endswith("/foods/search")
        assert request.url.params["api_key"] == "key"
        seen.append(json.loads(request.content.decode()))
        return httpx.Response(200, json=_SEARCH_PAYLOAD)

    foods = _source(handler).fetch_food_data()

    assert seen == [{"query": "egg", "pageSize": 10}]
    assert [food.id for food in foods] == ["fdc_171287", "fdc_999"]
    egg = foods[0]
    assert egg.name == "Egg whole raw fresh"
    assert egg.calories_per_serving == 143
    assert egg.keywords[0] == "egg"
    assert "raw" in egg.keywords
    assert not egg.is_composite
    assert foods[1].calories_per_serving == 210


def test_fetch_food_data_feeds_catalog() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, json=_SEARCH_PAYLOAD)

    catalog = FoodCatalog()
    count = catalog.ingest_from(_source(handler))

    assert count == 2
    assert [food.id for food in catalog.search(["fresh"], match_all=False)] == [
        "fdc_171287"
    ]


def test_http_errors_propagate() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(503, json={"error": "unavailable"})

    source = _source(handler)

    with pytest.raises(httpx.HTTPStatusError):
        source.fetch_food_data()
    source.close()
