"""Domain models for the food catalog."""

from collections.abc import Iterable, Sequence
from dataclasses import dataclass, field, replace


@dataclass(frozen=True)
class FoodComponent:
    """A weighted reference from a composite food to another food."""

    food_id: str
    servings: int


@dataclass(frozen=True)
class Food:
    """Represents a basic or composite food in the catalog."""

    id: str
    name: str
    keywords: tuple[str, ...] = ()
    calories_per_serving: int = 0
    is_composite: bool = False
    components: tuple[FoodComponent, ...] = field(default_factory=tuple)

    @classmethod
    def basic(
        cls, food_id: str, name: str, keywords: Iterable[str], calories: int
    ) -> "Food":
        """Create a food with a fixed calorie value."""
        return cls(
            id=food_id,
            name=name,
            keywords=_normalize_keywords(keywords),
            calories_per_serving=calories,
        )

    @classmethod
    def composite(
        cls,
        food_id: str,
        name: str,
        keywords: Iterable[str],
        components: Iterable[FoodComponent | tuple[str, int]],
    ) -> "Food":
        """Create a food whose calories are derived from its components."""
        return cls(
            id=food_id,
            name=name,
            keywords=_normalize_keywords(keywords),
            calories_per_serving=0,
            is_composite=True,
            components=tuple(_to_component(item) for item in components),
        )

    def with_calories(self, calories: int) -> "Food":
        """Return a copy carrying a recomputed calorie value."""
        return replace(self, calories_per_serving=calories)

    def matches_keywords(self, query: Sequence[str], match_all: bool) -> bool:
        """Return True when the query keywords match this food's keywords."""
        if not query:
            return True
        lowered = [keyword.lower() for keyword in query]
        check = all if match_all else any
        return check(
            any(needle in keyword for keyword in self.keywords) for needle in lowered
        )


def _normalize_keywords(keywords: Iterable[str]) -> tuple[str, ...]:
    return tuple(keyword.strip().lower() for keyword in keywords if keyword.strip())


def _to_component(item: FoodComponent | tuple[str, int]) -> FoodComponent:
    if isinstance(item, FoodComponent):
        return item
    food_id, servings = item
    return FoodComponent(food_id=food_id, servings=servings)
