"""Tracker session tying the catalog, ledger and profile to a current date."""

import logging
from collections.abc import Iterable
from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Protocol

from diet_assistant.domain.foods import Food
from diet_assistant.domain.ledger import FoodEntry, normalize_date_key
from diet_assistant.domain.profiles import UserProfile
from diet_assistant.domain.summary import DailySummary
from diet_assistant.services.catalog import FoodCatalog
from diet_assistant.services.ledger import DailyLedger
from diet_assistant.services.profiles import ProfileHistory, ProfileService

_logger = logging.getLogger(__name__)


class TrackerStore(Protocol):
    """Persistence interface for catalogs, ledgers and profiles."""

    def load_foods(self) -> list[Food]:
        """Return every persisted food."""

    def save_foods(self, foods: Iterable[Food]) -> None:
        """Replace the persisted catalog."""

    def load_entries(self, username: str) -> list[tuple[str, FoodEntry]]:
        """Return a user's ledger as (date key, entry) pairs."""

    def save_entries(
        self, username: str, entries: Iterable[tuple[str, FoodEntry]]
    ) -> None:
        """Replace a user's persisted ledger."""

    def load_profile(self, username: str) -> UserProfile | None:
        """Return a user's profile, if one is stored."""

    def save_profile(self, profile: UserProfile) -> None:
        """Persist a user's profile."""


def _today() -> str:
    return datetime.now().date().isoformat()


@dataclass
class TrackerSession:
    """In-process session state for one user."""

    username: str
    catalog: FoodCatalog
    ledger: DailyLedger
    profiles: ProfileService
    store: TrackerStore | None = None
    current_date: str = field(default_factory=_today)

    def change_date(self, value: str) -> bool:
        """Switch the working date; only YYYY-MM-DD is accepted."""
        try:
            parsed = datetime.strptime(value.strip(), "%Y-%m-%d").date()
        except ValueError:
            return False
        self.current_date = parsed.isoformat()
        _logger.debug("Working date changed to %s", self.current_date)
        return True

    def add_food(self, food: Food) -> bool:
        """Add a new food to the catalog; False when the id is taken."""
        if food.id in self.catalog:
            return False
        self.catalog.add(food)
        self.catalog.resolve_all()
        return True

    def log_food(self, food_id: str, servings: int) -> FoodEntry:
        """Log servings of a food on the current date."""
        return self.ledger.log_food(self.current_date, food_id, servings)

    def delete_food(self, index: int) -> bool:
        """Delete an entry of the current date by position."""
        return self.ledger.delete_food(self.current_date, index)

    def undo_log(self) -> bool:
        """Undo the most recent ledger change, on any date."""
        return self.ledger.undo()

    def undo_profile(self) -> bool:
        """Restore the profile as it was before the last edit."""
        return self.profiles.undo()

    def entries(self) -> list[FoodEntry]:
        """Return the entries of the current date."""
        return self.ledger.entries_for(self.current_date)

    def summary(self, day: date | str | None = None) -> DailySummary | None:
        """Compare consumed calories with the profile target."""
        profile = self.profiles.profile
        if profile is None:
            return None
        key = self.current_date if day is None else normalize_date_key(day)
        return DailySummary(
            date_key=key,
            target_calories=profile.daily_target_calories(),
            consumed_calories=self.ledger.total_calories(key, self.catalog),
        )

    def save(self) -> bool:
        """Persist the catalog, the user's ledger and profile."""
        if self.store is None:
            return False
        self.store.save_foods(self.catalog.all())
        self.store.save_entries(self.username, self.ledger.all_entries())
        if self.profiles.profile is not None:
            self.store.save_profile(self.profiles.profile)
        _logger.info("Saved session data for %s", self.username)
        return True


def open_session(
    store: TrackerStore,
    catalog: FoodCatalog,
    username: str,
    history_limit: int = 20,
) -> TrackerSession:
    """Load a user's ledger and profile into a new session."""
    ledger = DailyLedger()
    for key, entry in store.load_entries(username):
        ledger.restore(key, entry)
    profile = store.load_profile(username)
    if profile is None:
        _logger.info("No stored profile for %s", username)
    profiles = ProfileService(ProfileHistory(max_depth=history_limit), profile)
    return TrackerSession(
        username=username,
        catalog=catalog,
        ledger=ledger,
        profiles=profiles,
        store=store,
    )
