"""Nutrition summary models."""

from dataclasses import dataclass, fields
from enum import StrEnum
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from fitplan.domain.meals import Micronutrients

_PROTEIN_KCAL_PER_G = 4.0
_CARBS_KCAL_PER_G = 4.0
_FATS_KCAL_PER_G = 9.0


class Micronutrient(StrEnum):
    FIBER = "fiber"
    SUGAR = "sugar"
    SODIUM = "sodium"
    POTASSIUM = "potassium"
    CALCIUM = "calcium"
    IRON = "iron"
    VITAMIN_A = "vitamin_a"
    VITAMIN_C = "vitamin_c"
    VITAMIN_D = "vitamin_d"


# Reference daily values (g for fiber/sugar, mg or mcg for the rest).
DAILY_VALUES: dict[Micronutrient, float] = {
    Micronutrient.FIBER: 25.0,
    Micronutrient.SUGAR: 25.0,
    Micronutrient.SODIUM: 2300.0,
    Micronutrient.POTASSIUM: 3500.0,
    Micronutrient.CALCIUM: 1000.0,
    Micronutrient.IRON: 18.0,
    Micronutrient.VITAMIN_A: 900.0,
    Micronutrient.VITAMIN_C: 90.0,
    Micronutrient.VITAMIN_D: 20.0,
}


@dataclass(frozen=True)
class MacroSummary:
    """Macronutrient totals in grams."""

    protein: float
    carbs: float
    fats: float

    @property
    def total_energy(self) -> float:
        """Energy from macros in kcal."""
        return (
            self.protein * _PROTEIN_KCAL_PER_G
            + self.carbs * _CARBS_KCAL_PER_G
            + self.fats * _FATS_KCAL_PER_G
        )

    @property
    def protein_percentage(self) -> float:
        return self._share(self.protein * _PROTEIN_KCAL_PER_G)

    @property
    def carbs_percentage(self) -> float:
        return self._share(self.carbs * _CARBS_KCAL_PER_G)

    @property
    def fats_percentage(self) -> float:
        return self._share(self.fats * _FATS_KCAL_PER_G)

    def _share(self, energy: float) -> float:
        total = self.total_energy
        if total <= 0:
            return 0.0
        return energy / total * 100


@dataclass(frozen=True)
class MicronutrientSummary:
    """Field-wise micronutrient totals across meals."""

    fiber: float = 0.0
    sugar: float = 0.0
    sodium: float = 0.0
    potassium: float = 0.0
    calcium: float = 0.0
    iron: float = 0.0
    vitamin_a: float = 0.0
    vitamin_c: float = 0.0
    vitamin_d: float = 0.0

    def add(self, micros: "Micronutrients") -> "MicronutrientSummary":
        """Return a new summary with a meal's micronutrients added."""
        return MicronutrientSummary(
            **{
                item.name: getattr(self, item.name) + getattr(micros, item.name)
                for item in fields(self)
            }
        )

    def value_of(self, nutrient: Micronutrient) -> float:
        return float(getattr(self, nutrient.value))

    def percentage_of_daily_value(self, nutrient: Micronutrient) -> float:
        """Return the total as a percentage of the reference daily value."""
        return self.value_of(nutrient) / DAILY_VALUES[nutrient] * 100


@dataclass(frozen=True)
class NutritionSummary:
    """Nutrition totals for a day."""

    calories: int
    macros: MacroSummary
    micros: MicronutrientSummary
