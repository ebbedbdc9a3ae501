"""Flat-file persistence for the catalog, ledgers and profiles."""

import logging
from collections.abc import Callable, Iterable, Iterator
from dataclasses import dataclass
from pathlib import Path
from typing import TypeVar

from pydantic import ValidationError

from diet_assistant.adapters.records import (
    ComponentRecord,
    EntryRecord,
    FoodRecord,
    ProfileRecord,
)
from diet_assistant.domain.foods import Food
from diet_assistant.domain.ledger import FoodEntry
from diet_assistant.domain.profiles import UserProfile
from diet_assistant.services.session import TrackerStore

FOODS_FILE = "foods.txt"
LOG_FILE = "log.txt"
PROFILE_FILE = "profile.txt"

_MIN_FOOD_FIELDS = 5
_MIN_ENTRY_FIELDS = 4
_MIN_PROFILE_FIELDS = 7

_logger = logging.getLogger(__name__)

T = TypeVar("T")


@dataclass
class FlatFileStore(TrackerStore):
    """Comma-separated line files under a data directory.

    The catalog is shared by every user; ledgers and profiles live in one
    directory per username.
    """

    data_dir: Path

    def user_dir(self, username: str) -> Path:
        """Return the directory holding a user's files."""
        return self.data_dir / username

    def load_foods(self) -> list[Food]:
        """Read the shared catalog; a missing file yields no foods."""
        return list(self._read(self.data_dir / FOODS_FILE, _parse_food))

    def save_foods(self, foods: Iterable[Food]) -> None:
        """Rewrite the shared catalog."""
        self._write(self.data_dir / FOODS_FILE, (_format_food(food) for food in foods))

    def load_entries(self, username: str) -> list[tuple[str, FoodEntry]]:
        """Read a user's ledger as (date key, entry) pairs."""
        path = self.user_dir(username) / LOG_FILE
        return list(self._read(path, _parse_entry))

    def save_entries(
        self, username: str, entries: Iterable[tuple[str, FoodEntry]]
    ) -> None:
        """Rewrite a user's ledger."""
        lines = (
            f"{key},{entry.food_id},{entry.servings},{int(entry.timestamp.timestamp())}"
            for key, entry in entries
        )
        self._write(self.user_dir(username) / LOG_FILE, lines)

    def load_profile(self, username: str) -> UserProfile | None:
        """Read a user's profile from the first non-empty line, if valid."""
        path = self.user_dir(username) / PROFILE_FILE
        profiles = list(self._read(path, _parse_profile))
        return profiles[0] if profiles else None

    def save_profile(self, profile: UserProfile) -> None:
        """Rewrite a user's profile."""
        line = ",".join(
            [
                profile.username,
                profile.gender.value,
                _format_number(profile.height_cm),
                str(profile.age),
                _format_number(profile.weight_kg),
                profile.activity_level.label,
                profile.calculation_method,
            ]
        )
        self._write(self.user_dir(profile.username) / PROFILE_FILE, [line])

    def _read(self, path: Path, parse: Callable[[list[str]], T | None]) -> Iterator[T]:
        if not path.exists():
            return
        with path.open("rb") as handle:
            for number, raw in enumerate(handle, start=1):
                try:
                    line = raw.decode("utf-8").rstrip("\r\n")
                except UnicodeDecodeError:
                    _logger.warning(
                        "Skipping undecodable line %s:%s", path.name, number
                    )
                    continue
                if not line.strip():
                    continue
                try:
                    parsed = parse(line.split(","))
                except ValidationError as exc:
                    _logger.warning(
                        "Skipping invalid line %s:%s (%s errors)",
                        path.name,
                        number,
                        exc.error_count(),
                    )
                    continue
                if parsed is None:
                    _logger.warning("Skipping malformed line %s:%s", path.name, number)
                    continue
                yield parsed

    @staticmethod
    def _write(path: Path, lines: Iterable[str]) -> None:
        path.parent.mkdir(parents=True, exist_ok=True)
        with path.open("w", encoding="utf-8") as handle:
            for line in lines:
                handle.write(f"{line}\n")


def _parse_food(parts: list[str]) -> Food | None:
    if len(parts) < _MIN_FOOD_FIELDS:
        return None
    kind, food_id, name, keywords, payload = parts[:_MIN_FOOD_FIELDS]
    record = FoodRecord(
        kind=kind,
        id=food_id,
        name=name,
        keywords=keywords.split("|"),
        calories=payload if kind == "basic" else None,
        components=_parse_components(payload) if kind == "composite" else [],
    )
    return record.to_food()


def _parse_components(raw: str) -> list[ComponentRecord]:
    # Unreadable pairs are dropped individually, the rest of the food is kept.
    components: list[ComponentRecord] = []
    for chunk in raw.split("|"):
        food_id, _, servings = chunk.partition(":")
        try:
            components.append(ComponentRecord(food_id=food_id, servings=servings))
        except ValidationError:
            continue
    return components


def _parse_entry(parts: list[str]) -> tuple[str, FoodEntry] | None:
    if len(parts) < _MIN_ENTRY_FIELDS:
        return None
    day, food_id, servings, timestamp = parts[:_MIN_ENTRY_FIELDS]
    record = EntryRecord(
        date=day, food_id=food_id, servings=servings, timestamp=timestamp
    )
    return record.date, record.to_entry()


def _parse_profile(parts: list[str]) -> UserProfile | None:
    if len(parts) < _MIN_PROFILE_FIELDS:
        return None
    username, gender, height, age, weight, activity, method = parts[
        :_MIN_PROFILE_FIELDS
    ]
    record = ProfileRecord(
        username=username,
        gender=gender,
        height=height,
        age=age,
        weight=weight,
        activity_level=activity,
        calculation_method=method,
    )
    return record.to_profile()


def _format_food(food: Food) -> str:
    keywords = "|".join(food.keywords)
    if not food.is_composite:
        return f"basic,{food.id},{food.name},{keywords},{food.calories_per_serving}"
    components = "|".join(
        f"{component.food_id}:{component.servings}" for component in food.components
    )
    return f"composite,{food.id},{food.name},{keywords},{components}"


def _format_number(value: float) -> str:
    return str(int(value)) if float(value).is_integer() else str(value)
