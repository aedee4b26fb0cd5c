"""JSON-backed meal catalog loader."""

import json
import logging
from pathlib import Path

from pydantic import BaseModel, Field

from fitplan.domain.meals import (
    CuisineType,
    DietaryRestriction,
    Meal,
    MealSlot,
    MealTag,
    Micronutrients,
    RecipeDifficulty,
)
from fitplan.services.catalog import MealCatalog

BUNDLED_CATALOG_PATH = Path(__file__).resolve().parents[1] / "data" / "meal_catalog.json"

_logger = logging.getLogger(__name__)


class MicronutrientsRecord(BaseModel):
    """Micronutrient payload of a catalog entry."""

    fiber: float = Field(ge=0.0)
    sugar: float = Field(ge=0.0)
    sodium: float = Field(ge=0.0)
    potassium: float = Field(ge=0.0)
    calcium: float = Field(ge=0.0)
    iron: float = Field(ge=0.0)
    vitamin_a: float = Field(ge=0.0)
    vitamin_c: float = Field(ge=0.0)
    vitamin_d: float = Field(ge=0.0)


class MealRecord(BaseModel):
    """Catalog entry as stored in JSON."""

    id: str
    name: str
    slot: MealSlot
    calories: int = Field(ge=0)
    protein: float = Field(ge=0.0)
    carbs: float = Field(ge=0.0)
    fats: float = Field(ge=0.0)
    ingredients: list[str] = Field(default_factory=list)
    instructions: list[str] = Field(default_factory=list)
    image_url: str | None = None
    dietary_info: list[DietaryRestriction] | None = None
    preparation_time: int | None = Field(default=None, ge=0)
    serving_size: str | None = None
    micronutrients: MicronutrientsRecord | None = None
    cuisine: CuisineType | None = None
    difficulty: RecipeDifficulty = RecipeDifficulty.EASY
    tags: list[MealTag] = Field(default_factory=list)

    def to_meal(self) -> Meal:
        """Convert the record into an immutable domain meal."""
        micros = (
            Micronutrients(**self.micronutrients.model_dump())
            if self.micronutrients
            else None
        )
        return Meal(
            id=self.id,
            name=self.name,
            calories=self.calories,
            protein=self.protein,
            carbs=self.carbs,
            fats=self.fats,
            slot=self.slot,
            difficulty=self.difficulty,
            ingredients=tuple(self.ingredients),
            instructions=tuple(self.instructions),
            image_url=self.image_url,
            dietary_info=(
                frozenset(self.dietary_info) if self.dietary_info is not None else None
            ),
            preparation_time=self.preparation_time,
            serving_size=self.serving_size,
            micronutrients=micros,
            cuisine=self.cuisine,
            tags=frozenset(self.tags),
        )


class CatalogDocument(BaseModel):
    """Top-level JSON catalog document."""

    meals: list[MealRecord]


def parse_meal_catalog(payload: dict[str, object]) -> MealCatalog:
    """Validate a decoded JSON payload and build a catalog."""
    document = CatalogDocument.model_validate(payload)
    return MealCatalog.from_meals(record.to_meal() for record in document.meals)


def load_meal_catalog(path: Path | None = None) -> MealCatalog:
    """Load a catalog from disk, defaulting to the bundled catalog."""
    resolved = path or BUNDLED_CATALOG_PATH
    with resolved.open(encoding="utf-8") as handle:
        payload = json.load(handle)
    catalog = parse_meal_catalog(payload)
    _logger.info("Loaded meal catalog: path=%s meals=%s", resolved, len(catalog))
    return catalog
