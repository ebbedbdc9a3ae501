"""Domain models for the daily consumption ledger."""

from dataclasses import dataclass
from datetime import date, datetime


@dataclass(frozen=True)
class FoodEntry:
    """One logged line item of consumption."""

    food_id: str
    servings: int
    timestamp: datetime


@dataclass(frozen=True)
class FoodAdded:
    """An entry was appended to a date."""

    date_key: str
    entry: FoodEntry


@dataclass(frozen=True)
class FoodRemoved:
    """An entry was removed from a date."""

    date_key: str
    entry: FoodEntry


LedgerCommand = FoodAdded | FoodRemoved


def normalize_date_key(value: date | datetime | str) -> str:
    """Return the ledger key for a calendar date."""
    if isinstance(value, datetime):
        return value.date().isoformat()
    if isinstance(value, date):
        return value.isoformat()
    cleaned = value.strip()
    try:
        return date.fromisoformat(cleaned).isoformat()
    except ValueError:
        return cleaned
