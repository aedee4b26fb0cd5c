"""Domain models for meals and daily meal plans."""

from dataclasses import dataclass, field
from datetime import date
from enum import StrEnum

from fitplan.domain.nutrition import MacroSummary, MicronutrientSummary, NutritionSummary


class MealSlot(StrEnum):
    """Meal slot within a day, in generation order."""

    BREAKFAST = "breakfast"
    LUNCH = "lunch"
    DINNER = "dinner"
    SNACK = "snack"


class DietaryRestriction(StrEnum):
    """Dietary restriction tags shared by meals and user profiles."""

    VEGAN = "vegan"
    VEGETARIAN = "vegetarian"
    GLUTEN_FREE = "gluten_free"
    DAIRY_FREE = "dairy_free"
    NUT_FREE = "nut_free"
    NONE = "none"


class CuisineType(StrEnum):
    MEDITERRANEAN = "mediterranean"
    ASIAN = "asian"
    INDIAN = "indian"
    MEXICAN = "mexican"
    ITALIAN = "italian"
    AMERICAN = "american"
    MIDDLE_EASTERN = "middle_eastern"
    JAPANESE = "japanese"
    THAI = "thai"
    FRENCH = "french"
    GREEK = "greek"
    BRITISH = "british"


class RecipeDifficulty(StrEnum):
    EASY = "easy"
    MEDIUM = "medium"
    HARD = "hard"


class MealTag(StrEnum):
    """Descriptive tags used for browsing the catalog."""

    QUICK_AND_EASY = "quick_and_easy"
    MEAL_PREP = "meal_prep"
    HIGH_PROTEIN = "high_protein"
    LOW_CARB = "low_carb"
    KETO = "keto"
    PALEO = "paleo"
    WHOLE30 = "whole30"
    BUDGET_FRIENDLY = "budget_friendly"
    KID_FRIENDLY = "kid_friendly"
    HEART_HEALTHY = "heart_healthy"
    DIABETES_FRIENDLY = "diabetes_friendly"
    VEGAN = "vegan"
    VEGETARIAN = "vegetarian"
    COMFORT_FOOD = "comfort_food"


@dataclass(frozen=True)
class Micronutrients:
    """Micronutrient content of a single meal."""

    fiber: float
    sugar: float
    sodium: float
    potassium: float
    calcium: float
    iron: float
    vitamin_a: float
    vitamin_c: float
    vitamin_d: float


@dataclass(frozen=True)
class Meal:
    """Catalog meal, or a personalized copy of one."""

    id: str
    name: str
    calories: int
    protein: float
    carbs: float
    fats: float
    slot: MealSlot
    difficulty: RecipeDifficulty
    ingredients: tuple[str, ...] = ()
    instructions: tuple[str, ...] = ()
    image_url: str | None = None
    dietary_info: frozenset[DietaryRestriction] | None = None
    preparation_time: int | None = None
    serving_size: str | None = None
    micronutrients: Micronutrients | None = None
    cuisine: CuisineType | None = None
    tags: frozenset[MealTag] = frozenset()


@dataclass
class DailyMealPlan:
    """Meals planned for one calendar day."""

    day: date
    breakfast: Meal | None = None
    lunch: Meal | None = None
    dinner: Meal | None = None
    snacks: list[Meal] = field(default_factory=list)

    def meal_for(self, slot: MealSlot) -> Meal | None:
        """Return the meal planned for a slot, if any."""
        if slot is MealSlot.BREAKFAST:
            return self.breakfast
        if slot is MealSlot.LUNCH:
            return self.lunch
        if slot is MealSlot.DINNER:
            return self.dinner
        return self.snacks[0] if self.snacks else None

    def set_meal(self, slot: MealSlot, meal: Meal) -> None:
        """Replace the meal in a slot; the snack slot is always index 0."""
        if slot is MealSlot.BREAKFAST:
            self.breakfast = meal
        elif slot is MealSlot.LUNCH:
            self.lunch = meal
        elif slot is MealSlot.DINNER:
            self.dinner = meal
        elif self.snacks:
            self.snacks[0] = meal
        else:
            self.snacks.append(meal)

    def meals(self) -> list[Meal]:
        """Return every populated meal, main meals first."""
        main = [meal for meal in (self.breakfast, self.lunch, self.dinner) if meal]
        return main + list(self.snacks)

    @property
    def total_calories(self) -> int:
        return sum(meal.calories for meal in self.meals())

    @property
    def total_protein(self) -> float:
        return sum(meal.protein for meal in self.meals())

    @property
    def total_carbs(self) -> float:
        return sum(meal.carbs for meal in self.meals())

    @property
    def total_fats(self) -> float:
        return sum(meal.fats for meal in self.meals())

    def nutrition_summary(self) -> NutritionSummary:
        """Aggregate calories, macros and micronutrients for the day."""
        micros = MicronutrientSummary()
        for meal in self.meals():
            if meal.micronutrients is not None:
                micros = micros.add(meal.micronutrients)
        return NutritionSummary(
            calories=self.total_calories,
            macros=MacroSummary(
                protein=self.total_protein,
                carbs=self.total_carbs,
                fats=self.total_fats,
            ),
            micros=micros,
        )
