"""Read-only meal catalog grouped by slot."""

from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field

from fitplan.domain.meals import Meal, MealSlot, MealTag, RecipeDifficulty


def default_meal(slot: MealSlot) -> Meal:
    """Return the placeholder meal used when a slot has no catalog entries."""
    return Meal(
        id=f"default-{slot.value}",
        name="Default Meal",
        calories=300,
        protein=15.0,
        carbs=30.0,
        fats=10.0,
        slot=slot,
        difficulty=RecipeDifficulty.EASY,
        ingredients=("Ingredient 1", "Ingredient 2"),
        instructions=("Step 1", "Step 2"),
        preparation_time=15,
        serving_size="1 serving",
        tags=frozenset({MealTag.QUICK_AND_EASY}),
    )


@dataclass(frozen=True)
class MealCatalog:
    """Static collection of candidate meals keyed by slot."""

    meals_by_slot: Mapping[MealSlot, tuple[Meal, ...]] = field(default_factory=dict)

    @classmethod
    def from_meals(cls, meals: Iterable[Meal]) -> "MealCatalog":
        """Group meals by their slot, preserving input order."""
        grouped: dict[MealSlot, list[Meal]] = {slot: [] for slot in MealSlot}
        for meal in meals:
            grouped[meal.slot].append(meal)
        return cls({slot: tuple(items) for slot, items in grouped.items()})

    def meals_for(self, slot: MealSlot) -> list[Meal]:
        """Return the slot's meals, or the default meal when the slot is empty."""
        meals = self.meals_by_slot.get(slot, ())
        if not meals:
            return [default_meal(slot)]
        return list(meals)

    def __len__(self) -> int:
        return sum(len(meals) for meals in self.meals_by_slot.values())
