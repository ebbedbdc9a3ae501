"""Shared test fixtures."""

from collections.abc import Iterable
from dataclasses import dataclass, field
from datetime import UTC, datetime, timedelta
from pathlib import Path

import pytest

from diet_assistant.config import Settings
from diet_assistant.domain.foods import Food
from diet_assistant.domain.ledger import FoodEntry
from diet_assistant.domain.body import ActivityLevel, Gender
from diet_assistant.domain.profiles import UserProfile
from diet_assistant.services.catalog import FoodCatalog
from diet_assistant.services.session import TrackerStore


@dataclass
class InMemoryTrackerStore(TrackerStore):
    """In-memory store for tests."""

    foods: list[Food] = field(default_factory=list)
    entries: dict[str, list[tuple[str, FoodEntry]]] = field(default_factory=dict)
    profiles: dict[str, UserProfile] = field(default_factory=dict)

    def load_foods(self) -> list[Food]:
        return list(self.foods)

    def save_foods(self, foods: Iterable[Food]) -> None:
        self.foods = list(foods)

    def load_entries(self, username: str) -> list[tuple[str, FoodEntry]]:
        return list(self.entries.get(username, []))

    def save_entries(
        self, username: str, entries: Iterable[tuple[str, FoodEntry]]
    ) -> None:
        self.entries[username] = list(entries)

    def load_profile(self, username: str) -> UserProfile | None:
        return self.profiles.get(username)

    def save_profile(self, profile: UserProfile) -> None:
        self.profiles[profile.username] = profile


@dataclass
class StepClock:
    """Clock advancing one second per call."""

    current: datetime = datetime(2025, 3, 1, 12, 0, tzinfo=UTC)

    def __call__(self) -> datetime:
        value = self.current
        self.current += timedelta(seconds=1)
        return value


@pytest.fixture
def settings(tmp_path: Path) -> Settings:
    return Settings(data_dir=tmp_path / "data")


@pytest.fixture
def clock() -> StepClock:
    return StepClock()


@pytest.fixture
def sandwich_catalog() -> FoodCatalog:
    catalog = FoodCatalog()
    catalog.add(Food.basic("bread", "Bread Slice", ["bread", "grain"], 80))
    catalog.add(Food.basic("pb", "Peanut Butter", ["peanut", "butter"], 190))
    catalog.add(
        Food.composite(
            "sandwich", "PB Sandwich", ["sandwich"], [("bread", 2), ("pb", 1)]
        )
    )
    catalog.resolve_all()
    return catalog


@pytest.fixture
def profile() -> UserProfile:
    return UserProfile(
        username="alice",
        gender=Gender.FEMALE,
        height_cm=165.0,
        age=30,
        weight_kg=60.0,
        activity_level=ActivityLevel.MODERATELY_ACTIVE,
    )
