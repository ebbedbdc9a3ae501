"""Tests for the tracker session."""

from datetime import date

from diet_assistant.domain.foods import Food
from diet_assistant.domain.profiles import UserProfile
from diet_assistant.services.catalog import FoodCatalog
from diet_assistant.services.ledger import DailyLedger
from diet_assistant.services.profiles import ProfileHistory, ProfileService
from diet_assistant.services.session import TrackerSession, open_session
from tests.conftest import InMemoryTrackerStore, StepClock


def _session(
    catalog: FoodCatalog,
    profile: UserProfile | None,
    clock: StepClock,
    store: InMemoryTrackerStore | None = None,
) -> TrackerSession:
    return TrackerSession(
        username="alice",
        catalog=catalog,
        ledger=DailyLedger(clock=clock),
        profiles=ProfileService(ProfileHistory(), profile),
        store=store,
        current_date="2025-03-01",
    )


def test_summary_compares_consumed_with_target(
    sandwich_catalog: FoodCatalog, profile: UserProfile, clock: StepClock
) -> None:
    session = _session(sandwich_catalog, profile, clock)
    session.log_food("sandwich", 2)

    summary = session.summary()

    assert summary is not None
    assert summary.date_key == "2025-03-01"
    assert summary.consumed_calories == 700
    assert summary.target_calories == 2144
    assert summary.difference == -1444
    assert summary.status == "under"


def test_summary_for_other_day_and_over_target(
    sandwich_catalog: FoodCatalog, profile: UserProfile, clock: StepClock
) -> None:
    session = _session(sandwich_catalog, profile, clock)
    session.profiles.set_calculation_method("unknown")
    session.ledger.log_food("2025-02-28", "sandwich", 6)

    summary = session.summary(date(2025, 2, 28))

    assert summary is not None
    assert summary.target_calories == 2000
    assert summary.difference == 100
    assert summary.status == "over"


def test_summary_without_profile(
    sandwich_catalog: FoodCatalog, clock: StepClock
) -> None:
    assert _session(sandwich_catalog, None, clock).summary() is None


def test_change_date_accepts_iso_dates_only(
    sandwich_catalog: FoodCatalog, clock: StepClock
) -> None:
    session = _session(sandwich_catalog, None, clock)

    assert session.change_date("2025-13-01") is False
    assert session.change_date("yesterday") is False
    assert session.current_date == "2025-03-01"
    assert session.change_date("2025-04-02") is True
    assert session.current_date == "2025-04-02"


def test_log_delete_and_undo_follow_current_date(
    sandwich_catalog: FoodCatalog, clock: StepClock
) -> None:
    session = _session(sandwich_catalog, None, clock)
    session.log_food("bread", 1)
    session.change_date("2025-03-02")
    session.log_food("pb", 1)

    assert session.delete_food(5) is False
    assert session.undo_log() is True
    assert session.entries() == []
    session.change_date("2025-03-01")
    assert [entry.food_id for entry in session.entries()] == ["bread"]


def test_add_food_rejects_duplicates_and_resolves(
    sandwich_catalog: FoodCatalog, clock: StepClock
) -> None:
    session = _session(sandwich_catalog, None, clock)

    assert session.add_food(Food.basic("bread", "Other", ["x"], 1)) is False
    assert session.add_food(
        Food.composite("lunch", "Lunch", ["lunch"], [("bread", 1), ("pb", 2)])
    )
    lunch = sandwich_catalog.get("lunch")
    assert lunch is not None and lunch.calories_per_serving == 460


def test_undo_profile(
    sandwich_catalog: FoodCatalog, profile: UserProfile, clock: StepClock
) -> None:
    session = _session(sandwich_catalog, profile, clock)
    session.profiles.update(age=31)

    assert session.undo_profile() is True
    assert session.profiles.profile == profile
    assert session.undo_profile() is False


def test_save_and_reopen(
    sandwich_catalog: FoodCatalog, profile: UserProfile, clock: StepClock
) -> None:
    store = InMemoryTrackerStore()
    session = _session(sandwich_catalog, profile, clock, store)
    session.log_food("sandwich", 1)
    session.log_food("bread", 2)

    assert session.save() is True
    reopened = open_session(store, sandwich_catalog, "alice", history_limit=5)

    assert [food.id for food in store.foods] == ["bread", "pb", "sandwich"]
    assert reopened.profiles.profile == profile
    assert reopened.profiles.history.max_depth == 5
    assert reopened.ledger.entries_for("2025-03-01") == session.entries()
    assert reopened.ledger.can_undo is False


def test_save_without_store(sandwich_catalog: FoodCatalog, clock: StepClock) -> None:
    assert _session(sandwich_catalog, None, clock).save() is False
