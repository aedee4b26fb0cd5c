"""Dependency container wiring for the library."""

import random
from collections.abc import Awaitable, Callable
from dataclasses import dataclass

from fitplan.adapters.image_client import HttpxImageClient
from fitplan.adapters.json_meal_catalog import load_meal_catalog
from fitplan.app_logging import configure_logging
from fitplan.config import Settings
from fitplan.services.cache import LruCache
from fitplan.services.catalog import MealCatalog
from fitplan.services.images import ImageCache
from fitplan.services.meal_plans import MealPlanService
from fitplan.services.personalization import MealPersonalizer


@dataclass
class AppContainer:
    """Holds application-wide dependencies."""

    settings: Settings
    catalog: MealCatalog
    meal_plan_service: MealPlanService
    image_cache: ImageCache
    close_resources: Callable[[], Awaitable[None]]


def build_container(
    settings: Settings | None = None, rng: random.Random | None = None
) -> AppContainer:
    """Create the default dependency container."""
    resolved_settings = settings or Settings()
    configure_logging(resolved_settings.log_level)
    catalog = load_meal_catalog(resolved_settings.catalog_path)
    image_client = HttpxImageClient.create(
        timeout_seconds=resolved_settings.image_fetch_timeout_seconds
    )
    image_cache = ImageCache(
        client=image_client,
        memory=LruCache(
            count_limit=resolved_settings.image_cache_count_limit,
            total_cost_limit=resolved_settings.image_cache_total_cost_limit,
        ),
        cache_dir=resolved_settings.image_cache_dir,
        fetch_timeout_seconds=resolved_settings.image_fetch_timeout_seconds,
    )
    personalizer = MealPersonalizer(catalog=catalog, rng=rng or random.Random())
    meal_plan_service = MealPlanService(
        personalizer=personalizer,
        image_evictor=image_cache,
    )

    async def close_resources() -> None:
        await image_client.close()

    return AppContainer(
        settings=resolved_settings,
        catalog=catalog,
        meal_plan_service=meal_plan_service,
        image_cache=image_cache,
        close_resources=close_resources,
    )
