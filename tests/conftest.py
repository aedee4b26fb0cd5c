"""Shared test fixtures."""

import random
from dataclasses import dataclass, field
from datetime import date
from pathlib import Path

import pytest

from fitplan.adapters.image_client import ImageClient
from fitplan.adapters.json_meal_catalog import load_meal_catalog
from fitplan.config import Settings
from fitplan.domain.meals import (
    DietaryRestriction,
    Meal,
    MealSlot,
    Micronutrients,
    RecipeDifficulty,
)
from fitplan.domain.profile import (
    ActivityLevel,
    FitnessGoal,
    Gender,
    UserProfile,
)
from fitplan.services.cache import LruCache
from fitplan.services.catalog import MealCatalog
from fitplan.services.images import ImageCache
from fitplan.services.meal_plans import MealPlanService
from fitplan.services.personalization import MealPersonalizer

PNG_BYTES = b"\x89PNG\r\n\x1a\n" + b"\x00" * 24
JPEG_BYTES = b"\xff\xd8\xff\xe0" + b"\x00" * 24
FIXED_DAY = date(2024, 3, 18)


def make_meal(  # noqa: PLR0913
    name: str,
    slot: MealSlot = MealSlot.LUNCH,
    calories: int = 500,
    protein: float = 20.0,
    carbs: float = 50.0,
    fats: float = 20.0,
    dietary_info: set[DietaryRestriction] | None = None,
    image_url: str | None = None,
    micronutrients: Micronutrients | None = None,
) -> Meal:
    return Meal(
        id=name.lower().replace(" ", "-"),
        name=name,
        calories=calories,
        protein=protein,
        carbs=carbs,
        fats=fats,
        slot=slot,
        difficulty=RecipeDifficulty.EASY,
        image_url=image_url,
        dietary_info=frozenset(dietary_info) if dietary_info is not None else None,
        micronutrients=micronutrients,
    )


def make_profile(  # noqa: PLR0913
    goals: tuple[FitnessGoal, ...] = (FitnessGoal.MAINTENANCE,),
    activity_level: ActivityLevel = ActivityLevel.MODERATELY_ACTIVE,
    restrictions: set[DietaryRestriction] | None = None,
    daily_calorie_needs: int = 2000,
    height_cm: float = 170.0,
    weight_kg: float = 70.0,
) -> UserProfile:
    return UserProfile(
        name="Sam",
        age=30,
        gender=Gender.MALE,
        height_cm=height_cm,
        weight_kg=weight_kg,
        activity_level=activity_level,
        fitness_goals=goals,
        dietary_restrictions=(
            frozenset(restrictions) if restrictions is not None else None
        ),
        daily_calorie_needs=daily_calorie_needs,
    )


def single_meal_catalog(meal: Meal) -> MealCatalog:
    """Catalog with the same meal in every slot."""
    return MealCatalog({slot: (meal,) for slot in MealSlot})


@dataclass
class CountingImageClient(ImageClient):
    """Fake image client that counts downloads."""

    payloads: dict[str, bytes] = field(default_factory=dict)
    default: bytes = PNG_BYTES
    error: Exception | None = None
    calls: list[str] = field(default_factory=list)

    async def download_image(self, url: str) -> bytes:
        self.calls.append(url)
        if self.error is not None:
            raise self.error
        return self.payloads.get(url, self.default)


@dataclass
class RecordingEvictor:
    """Image evictor that records removed URLs."""

    removed: list[str] = field(default_factory=list)

    async def remove(self, url: str) -> None:
        self.removed.append(url)


@pytest.fixture
def settings(tmp_path: Path) -> Settings:
    return Settings(image_cache_dir=tmp_path / "images")


@pytest.fixture
def rng() -> random.Random:
    return random.Random(42)


@pytest.fixture
def image_client() -> CountingImageClient:
    return CountingImageClient()


@pytest.fixture
def image_cache(tmp_path: Path, image_client: CountingImageClient) -> ImageCache:
    return ImageCache(
        client=image_client,
        memory=LruCache(count_limit=10, total_cost_limit=10_000),
        cache_dir=tmp_path / "images",
        fetch_timeout_seconds=1.0,
    )


@pytest.fixture
def meal_plan_service(rng: random.Random) -> MealPlanService:
    personalizer = MealPersonalizer(catalog=load_meal_catalog(), rng=rng)
    return MealPlanService(personalizer=personalizer, today=lambda: FIXED_DAY)
