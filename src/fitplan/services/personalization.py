"""Rule-based meal selection and nutritional adjustment."""

import math
import random
from dataclasses import dataclass, field, replace

from fitplan.domain.meals import DietaryRestriction, Meal, MealSlot
from fitplan.domain.profile import ActivityLevel, FitnessGoal, UserProfile
from fitplan.services.catalog import MealCatalog

REFERENCE_DAILY_CALORIES = 2000.0

# nut_free and none are not enforced; see DESIGN.md.
ENFORCED_RESTRICTIONS: frozenset[DietaryRestriction] = frozenset(
    {
        DietaryRestriction.VEGETARIAN,
        DietaryRestriction.VEGAN,
        DietaryRestriction.GLUTEN_FREE,
        DietaryRestriction.DAIRY_FREE,
    }
)


@dataclass(frozen=True)
class GoalMultipliers:
    """Scaling applied to a meal for a primary fitness goal."""

    calories: float = 1.0
    protein: float = 1.0
    carbs: float = 1.0
    fats: float = 1.0


_MAINTENANCE = GoalMultipliers()

GOAL_MULTIPLIERS: dict[FitnessGoal, GoalMultipliers] = {
    FitnessGoal.WEIGHT_LOSS: GoalMultipliers(
        calories=0.85, protein=1.2, carbs=0.8, fats=0.8
    ),
    FitnessGoal.MUSCLE_GAIN: GoalMultipliers(
        calories=1.2, protein=1.5, carbs=1.3, fats=1.1
    ),
    FitnessGoal.MAINTENANCE: _MAINTENANCE,
    FitnessGoal.ENDURANCE: GoalMultipliers(calories=1.1, protein=1.2, carbs=1.4),
}

# Applied to calories only.
ACTIVITY_CALORIE_MULTIPLIERS: dict[ActivityLevel, float] = {
    ActivityLevel.SEDENTARY: 0.9,
    ActivityLevel.VERY_ACTIVE: 1.1,
    ActivityLevel.EXTRA_ACTIVE: 1.1,
}


def active_restrictions(profile: UserProfile) -> frozenset[DietaryRestriction]:
    """Return the profile restrictions that the selection filter enforces."""
    if not profile.dietary_restrictions:
        return frozenset()
    return frozenset(profile.dietary_restrictions) & ENFORCED_RESTRICTIONS


def eligible_meals(meals: list[Meal], profile: UserProfile) -> list[Meal]:
    """Filter meals to those tagged with every enforced restriction.

    Meals without dietary info are dropped whenever a restriction is active.
    Falls back to the unfiltered list when nothing matches.
    """
    required = active_restrictions(profile)
    if not required:
        return list(meals)
    filtered = [
        meal
        for meal in meals
        if meal.dietary_info is not None and required <= meal.dietary_info
    ]
    return filtered or list(meals)


def calorie_adjustment_factor(profile: UserProfile) -> float:
    """Ratio of the user's calorie target to the 2000 kcal reference diet."""
    return profile.daily_calorie_needs / REFERENCE_DAILY_CALORIES


def goal_multipliers(goal: FitnessGoal | None) -> GoalMultipliers:
    if goal is None:
        return _MAINTENANCE
    return GOAL_MULTIPLIERS.get(goal, _MAINTENANCE)


def adjust_for_profile(meal: Meal, profile: UserProfile) -> Meal:
    """Return a copy of the meal rescaled for the profile's goal and activity."""
    factor = calorie_adjustment_factor(profile)
    multipliers = goal_multipliers(profile.primary_goal)
    calories = _round_half_up(meal.calories * multipliers.calories * factor)
    activity = ACTIVITY_CALORIE_MULTIPLIERS.get(profile.activity_level, 1.0)
    if activity != 1.0:
        calories = _round_half_up(calories * activity)
    return replace(
        meal,
        calories=calories,
        protein=meal.protein * multipliers.protein,
        carbs=meal.carbs * multipliers.carbs,
        fats=meal.fats * multipliers.fats,
    )


@dataclass
class MealPersonalizer:
    """Picks and adjusts catalog meals for a user."""

    catalog: MealCatalog
    rng: random.Random = field(default_factory=random.Random)

    def pick_random(self, slot: MealSlot) -> Meal:
        """Return an unadjusted random meal for the slot."""
        return self.rng.choice(self.catalog.meals_for(slot))

    def select_meal(self, slot: MealSlot, profile: UserProfile | None) -> Meal:
        """Select a meal for the slot, personalized when a profile is given."""
        candidates = self.catalog.meals_for(slot)
        if profile is None:
            return self.rng.choice(candidates)
        meal = self.rng.choice(eligible_meals(candidates, profile))
        return adjust_for_profile(meal, profile)


def _round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))
