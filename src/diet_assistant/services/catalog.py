"""Food catalog with composite calorie resolution."""

import logging
from collections.abc import Iterable, Sequence
from dataclasses import dataclass, field
from enum import Enum
from typing import Protocol

from diet_assistant.domain.foods import Food

_logger = logging.getLogger(__name__)


class FoodSource(Protocol):
    """Any producer of fully formed foods (file, remote API, fixture)."""

    def fetch_food_data(self) -> list[Food]:
        """Return a batch of foods to ingest."""


class ResolutionMode(str, Enum):
    """How composite calorie values are recomputed."""

    SINGLE_PASS = "single-pass"
    RECURSIVE = "recursive"


@dataclass(frozen=True)
class ResolutionReport:
    """Outcome of a resolution pass."""

    resolved: int
    unresolvable: frozenset[str] = frozenset()


@dataclass
class FoodCatalog:
    """Owns the foods of a session and keeps composite values derived."""

    mode: ResolutionMode = ResolutionMode.SINGLE_PASS
    _foods: dict[str, Food] = field(default_factory=dict, init=False, repr=False)

    def add(self, food: Food) -> None:
        """Insert a food, silently replacing any food with the same id."""
        self._foods[food.id] = food

    def get(self, food_id: str) -> Food | None:
        """Return a food by id, if present."""
        return self._foods.get(food_id)

    def all(self) -> list[Food]:
        """Return every food in insertion order."""
        return list(self._foods.values())

    def search(self, keywords: Sequence[str], match_all: bool) -> list[Food]:
        """Return foods whose keywords contain the query keywords as substrings."""
        return [
            food
            for food in self._foods.values()
            if food.matches_keywords(keywords, match_all)
        ]

    def load(self, foods: Iterable[Food]) -> ResolutionReport:
        """Add a batch of foods and resolve the catalog."""
        for food in foods:
            self.add(food)
        return self.resolve_all()

    def ingest_from(self, source: FoodSource) -> int:
        """Pull foods from a source, add them and resolve; return the count."""
        foods = source.fetch_food_data()
        self.load(foods)
        _logger.info("Ingested %s foods from %s", len(foods), type(source).__name__)
        return len(foods)

    def resolve_all(self) -> ResolutionReport:
        """Recompute calories for every composite food."""
        if self.mode is ResolutionMode.RECURSIVE:
            return self._resolve_recursive()
        return self._resolve_single_pass()

    def _resolve_single_pass(self) -> ResolutionReport:
        # Components are read as stored before the pass, so a composite built on
        # a composite resolved in this same pass keeps the previous value.
        updates: dict[str, int] = {}
        for food in self._foods.values():
            if not food.is_composite:
                continue
            total = 0
            for component in food.components:
                stored = self._foods.get(component.food_id)
                if stored is not None:
                    total += stored.calories_per_serving * component.servings
            updates[food.id] = total
        for food_id, calories in updates.items():
            self._foods[food_id] = self._foods[food_id].with_calories(calories)
        return ResolutionReport(resolved=len(updates))

    def _resolve_recursive(self) -> ResolutionReport:
        resolved: dict[str, int] = {}
        unresolvable: set[str] = set()
        visiting: set[str] = set()

        def visit(food_id: str) -> int | None:
            if food_id in resolved:
                return resolved[food_id]
            if food_id in unresolvable:
                return None
            food = self._foods.get(food_id)
            if food is None:
                return 0
            if not food.is_composite:
                return food.calories_per_serving
            if food_id in visiting:
                unresolvable.add(food_id)
                return None
            visiting.add(food_id)
            total = 0
            complete = True
            for component in food.components:
                value = visit(component.food_id)
                if value is None:
                    complete = False
                    continue
                total += value * component.servings
            visiting.discard(food_id)
            if not complete:
                unresolvable.add(food_id)
                return None
            resolved[food_id] = total
            return total

        composites = [food.id for food in self._foods.values() if food.is_composite]
        for food_id in composites:
            visit(food_id)
        for food_id in composites:
            calories = 0 if food_id in unresolvable else resolved[food_id]
            self._foods[food_id] = self._foods[food_id].with_calories(calories)
        if unresolvable:
            _logger.warning(
                "Composite foods with cyclic components: %s",
                ", ".join(sorted(unresolvable)),
            )
        return ResolutionReport(
            resolved=len(composites) - len(unresolvable),
            unresolvable=frozenset(unresolvable),
        )

    def __len__(self) -> int:
        return len(self._foods)

    def __contains__(self, food_id: object) -> bool:
        return food_id in self._foods
