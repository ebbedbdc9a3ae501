"""Daily consumption ledger with command-based undo."""

import logging
from collections.abc import Callable, Iterator
from dataclasses import dataclass, field
from datetime import UTC, date, datetime

from diet_assistant.domain.ledger import (
    FoodAdded,
    FoodEntry,
    FoodRemoved,
    LedgerCommand,
    normalize_date_key,
)
from diet_assistant.services.catalog import FoodCatalog

_logger = logging.getLogger(__name__)

DateLike = date | datetime | str


def _utc_now() -> datetime:
    return datetime.now(tz=UTC)


@dataclass
class DailyLedger:
    """Per-date food entries plus a single undo stack shared by all dates."""

    clock: Callable[[], datetime] = _utc_now
    _entries: dict[str, list[FoodEntry]] = field(
        default_factory=dict, init=False, repr=False
    )
    _history: list[LedgerCommand] = field(default_factory=list, init=False, repr=False)

    def log_food(self, day: DateLike, food_id: str, servings: int) -> FoodEntry:
        """Append an entry for the date and record it for undo."""
        key = normalize_date_key(day)
        entry = FoodEntry(food_id=food_id, servings=servings, timestamp=self.clock())
        self._entries.setdefault(key, []).append(entry)
        self._history.append(FoodAdded(date_key=key, entry=entry))
        return entry

    def delete_food(self, day: DateLike, index: int) -> bool:
        """Remove the entry at a 0-based index; False when out of range."""
        key = normalize_date_key(day)
        entries = self._entries.get(key)
        if not entries or not 0 <= index < len(entries):
            return False
        entry = entries.pop(index)
        self._history.append(FoodRemoved(date_key=key, entry=entry))
        return True

    def undo(self) -> bool:
        """Revert the most recent command across all dates."""
        if not self._history:
            return False
        command = self._history.pop()
        match command:
            case FoodAdded(date_key=key):
                # Reverts by position: the last entry of the date goes, whatever it is.
                entries = self._entries.get(key)
                if not entries:
                    return False
                entries.pop()
            case FoodRemoved(date_key=key, entry=entry):
                self._entries.setdefault(key, []).append(entry)
        _logger.debug("Undid %s on %s", type(command).__name__, command.date_key)
        return True

    def entries_for(self, day: DateLike) -> list[FoodEntry]:
        """Return the entries of a date in display order."""
        return list(self._entries.get(normalize_date_key(day), []))

    def total_calories(self, day: DateLike, catalog: FoodCatalog) -> int:
        """Sum calories for a date; entries for unknown foods count as zero."""
        total = 0
        for entry in self._entries.get(normalize_date_key(day), []):
            food = catalog.get(entry.food_id)
            if food is not None:
                total += food.calories_per_serving * entry.servings
        return total

    def all_entries(self) -> Iterator[tuple[str, FoodEntry]]:
        """Yield every (date key, entry) pair for persistence."""
        for key, entries in self._entries.items():
            for entry in entries:
                yield key, entry

    def restore(self, day: DateLike, entry: FoodEntry) -> None:
        """Append a previously persisted entry without recording a command."""
        self._entries.setdefault(normalize_date_key(day), []).append(entry)

    @property
    def can_undo(self) -> bool:
        return bool(self._history)

    @property
    def history_size(self) -> int:
        return len(self._history)
