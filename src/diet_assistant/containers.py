"""Dependency container wiring for the application."""

import logging
from collections.abc import Callable
from dataclasses import dataclass, field
from functools import partial

from diet_assistant.adapters.fdc_food_source import HttpxFdcFoodSource
from diet_assistant.adapters.flat_file_store import FlatFileStore
from diet_assistant.adapters.static_food_source import StaticFoodSource, sample_foods
from diet_assistant.config import Settings, parse_queries
from diet_assistant.services.catalog import FoodCatalog, FoodSource
from diet_assistant.services.session import TrackerSession, open_session

_logger = logging.getLogger(__name__)


@dataclass
class AppContainer:
    """Holds application-wide dependencies."""

    settings: Settings
    store: FlatFileStore
    catalog: FoodCatalog
    open_session: Callable[[str], TrackerSession]
    close_resources: Callable[[], None]
    refresh_catalog: Callable[[], int]
    food_sources: list[FoodSource] = field(default_factory=list)


def build_container(settings: Settings | None = None) -> AppContainer:
    """Create the default dependency container."""
    resolved_settings = settings or Settings()
    store = FlatFileStore(resolved_settings.data_dir)
    catalog = FoodCatalog(mode=resolved_settings.resolution_mode)
    catalog.load(store.load_foods())
    if len(catalog) == 0 and resolved_settings.seed_sample_foods:
        catalog.ingest_from(StaticFoodSource(sample_foods()))
        store.save_foods(catalog.all())
        _logger.info("Seeded catalog in %s", resolved_settings.data_dir)

    food_sources: list[FoodSource] = []
    fdc_source: HttpxFdcFoodSource | None = None
    if resolved_settings.fdc_api_key:
        fdc_source = HttpxFdcFoodSource.create(
            api_key=resolved_settings.fdc_api_key,
            base_url=resolved_settings.fdc_base_url,
            queries=parse_queries(resolved_settings.fdc_queries),
        )
        food_sources.append(fdc_source)

    def refresh_catalog() -> int:
        count = sum(catalog.ingest_from(source) for source in food_sources)
        if count:
            store.save_foods(catalog.all())
        _logger.info(
            "Refreshed catalog: sources=%s foods=%s", len(food_sources), count
        )
        return count

    def close_resources() -> None:
        if fdc_source is not None:
            fdc_source.close()

    if resolved_settings.refresh_catalog_on_start:
        refresh_catalog()

    return AppContainer(
        settings=resolved_settings,
        store=store,
        catalog=catalog,
        open_session=partial(
            open_session,
            store,
            catalog,
            history_limit=resolved_settings.profile_history_limit,
        ),
        close_resources=close_resources,
        refresh_catalog=refresh_catalog,
        food_sources=food_sources,
    )
