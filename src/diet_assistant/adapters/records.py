"""Validated record models for persisted lines."""

from datetime import UTC, datetime
from typing import Literal

from pydantic import BaseModel, Field, field_validator

from diet_assistant.domain.foods import Food, FoodComponent
from diet_assistant.domain.ledger import FoodEntry
from diet_assistant.domain.body import ActivityLevel, Gender
from diet_assistant.domain.profiles import UserProfile


class ComponentRecord(BaseModel):
    """A `food_id:servings` pair of a composite food."""

    food_id: str = Field(min_length=1)
    servings: int = Field(ge=0)


class FoodRecord(BaseModel):
    """Catalog line for a basic or composite food."""

    kind: Literal["basic", "composite"]
    id: str = Field(min_length=1)
    name: str
    keywords: list[str]
    calories: int | None = Field(default=None, ge=0)
    components: list[ComponentRecord] = Field(default_factory=list)

    def to_food(self) -> Food:
        if self.kind == "basic":
            return Food.basic(self.id, self.name, self.keywords, self.calories or 0)
        return Food.composite(
            self.id,
            self.name,
            self.keywords,
            [FoodComponent(item.food_id, item.servings) for item in self.components],
        )


class EntryRecord(BaseModel):
    """Ledger line: one entry on one date."""

    date: str = Field(min_length=1)
    food_id: str = Field(min_length=1)
    servings: int = Field(ge=0)
    timestamp: datetime

    @field_validator("timestamp", mode="before")
    @classmethod
    def _parse_timestamp(cls, value: object) -> object:
        if isinstance(value, datetime):
            return value
        seconds = int(str(value).strip())
        if seconds < 0:
            raise ValueError("timestamp must not be negative")
        try:
            return datetime.fromtimestamp(seconds, tz=UTC)
        except (OverflowError, OSError) as exc:
            raise ValueError(f"timestamp out of range: {seconds}") from exc

    def to_entry(self) -> FoodEntry:
        return FoodEntry(
            food_id=self.food_id,
            servings=self.servings,
            timestamp=self.timestamp,
        )


class ProfileRecord(BaseModel):
    """Profile line with body measurements and calculation method."""

    username: str = Field(min_length=1)
    gender: Gender
    height: float
    age: int = Field(ge=0)
    weight: float
    activity_level: ActivityLevel
    calculation_method: str

    @field_validator("gender", mode="before")
    @classmethod
    def _parse_gender(cls, value: object) -> object:
        return Gender.parse(value) if isinstance(value, str) else value

    @field_validator("activity_level", mode="before")
    @classmethod
    def _parse_activity_level(cls, value: object) -> object:
        if not isinstance(value, str):
            return value
        level = ActivityLevel.parse(value)
        if level is None:
            raise ValueError(f"unknown activity level: {value}")
        return level

    def to_profile(self) -> UserProfile:
        return UserProfile(
            username=self.username,
            gender=self.gender,
            height_cm=self.height,
            age=self.age,
            weight_kg=self.weight,
            activity_level=self.activity_level,
            calculation_method=self.calculation_method.strip(),
        )
