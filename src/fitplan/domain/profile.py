"""User profile domain model and derived energy values."""

import math
from dataclasses import dataclass, field, replace
from enum import StrEnum

from fitplan.domain.meals import DietaryRestriction


class InvalidProfileError(ValueError):
    """Raised when a profile carries values that break derived calculations."""


class Gender(StrEnum):
    MALE = "male"
    FEMALE = "female"
    OTHER = "other"


class ActivityLevel(StrEnum):
    """Activity level with its TDEE multiplier."""

    SEDENTARY = "sedentary"
    LIGHTLY_ACTIVE = "lightly_active"
    MODERATELY_ACTIVE = "moderately_active"
    VERY_ACTIVE = "very_active"
    EXTRA_ACTIVE = "extra_active"

    @property
    def multiplier(self) -> float:
        return _ACTIVITY_MULTIPLIERS[self]


_ACTIVITY_MULTIPLIERS: dict[ActivityLevel, float] = {
    ActivityLevel.SEDENTARY: 1.2,
    ActivityLevel.LIGHTLY_ACTIVE: 1.375,
    ActivityLevel.MODERATELY_ACTIVE: 1.55,
    ActivityLevel.VERY_ACTIVE: 1.725,
    ActivityLevel.EXTRA_ACTIVE: 1.9,
}


class FitnessGoal(StrEnum):
    WEIGHT_LOSS = "weight_loss"
    MUSCLE_GAIN = "muscle_gain"
    MAINTENANCE = "maintenance"
    ENDURANCE = "endurance"
    FLEXIBILITY = "flexibility"
    STRENGTH = "strength"
    STRESS_REDUCTION = "stress_reduction"
    BETTER_SLEEP = "better_sleep"


@dataclass(frozen=True)
class MacroTargets:
    """Macro split as percentages of daily energy."""

    protein: float = 30.0
    carbs: float = 40.0
    fats: float = 30.0


# (weight, height, age, base) coefficients per gender.
_BMR_CONSTANTS: dict[Gender, tuple[float, float, float, float]] = {
    Gender.MALE: (10.0, 6.25, 5.0, 5.0),
    Gender.FEMALE: (9.2, 3.1, 5.4, 161.0),
    Gender.OTHER: (9.6, 4.7, 5.2, 83.0),
}

_PROTEIN_G_PER_KG: dict[FitnessGoal, float] = {
    FitnessGoal.MUSCLE_GAIN: 2.0,
    FitnessGoal.WEIGHT_LOSS: 2.2,
}
_DEFAULT_PROTEIN_G_PER_KG = 1.6


@dataclass(frozen=True)
class UserProfile:
    """Profile data that drives meal personalization."""

    name: str
    age: int
    gender: Gender
    height_cm: float
    weight_kg: float
    activity_level: ActivityLevel = ActivityLevel.MODERATELY_ACTIVE
    fitness_goals: tuple[FitnessGoal, ...] = (FitnessGoal.MAINTENANCE,)
    dietary_restrictions: frozenset[DietaryRestriction] | None = None
    daily_calorie_needs: int = 2000
    macro_targets: MacroTargets = field(default_factory=MacroTargets)

    def __post_init__(self) -> None:
        _require_positive("height_cm", self.height_cm)
        _require_positive("weight_kg", self.weight_kg)
        _require_positive("daily_calorie_needs", self.daily_calorie_needs)
        if self.age < 0:
            raise InvalidProfileError(f"age must be non-negative, got {self.age}")

    @classmethod
    def create(
        cls,
        name: str,
        age: int,
        gender: Gender,
        height_cm: float,
        weight_kg: float,
    ) -> "UserProfile":
        """Create a profile with defaults and a maintenance calorie target."""
        draft = cls(
            name=name,
            age=age,
            gender=gender,
            height_cm=height_cm,
            weight_kg=weight_kg,
            dietary_restrictions=frozenset(),
        )
        target = draft.calculate_calorie_target(FitnessGoal.MAINTENANCE)
        if target <= 0:
            return draft
        return replace(draft, daily_calorie_needs=target)

    @property
    def primary_goal(self) -> FitnessGoal | None:
        return self.fitness_goals[0] if self.fitness_goals else None

    @property
    def bmi(self) -> float:
        height_m = self.height_cm / 100
        return self.weight_kg / (height_m * height_m)

    @property
    def bmr(self) -> float:
        """Basal metabolic rate in kcal/day."""
        weight_k, height_k, age_k, base = _BMR_CONSTANTS[self.gender]
        return (
            weight_k * self.weight_kg
            + height_k * self.height_cm
            - age_k * self.age
            + base
        )

    @property
    def tdee(self) -> float:
        """Total daily energy expenditure in kcal/day."""
        return self.bmr * self.activity_level.multiplier

    def calculate_calorie_target(self, goal: FitnessGoal) -> int:
        """Return a daily calorie target for a goal."""
        if goal is FitnessGoal.WEIGHT_LOSS:
            return int(self.tdee * 0.8)
        if goal is FitnessGoal.MUSCLE_GAIN:
            return int(self.tdee * 1.1)
        return int(self.tdee)

    def calculate_protein_target(self) -> float:
        """Return daily protein in grams based on the primary goal."""
        per_kg = _DEFAULT_PROTEIN_G_PER_KG
        if self.primary_goal is not None:
            per_kg = _PROTEIN_G_PER_KG.get(self.primary_goal, per_kg)
        return self.weight_kg * per_kg


def _require_positive(name: str, value: float) -> None:
    if not math.isfinite(value) or value <= 0:
        raise InvalidProfileError(f"{name} must be a positive number, got {value}")
