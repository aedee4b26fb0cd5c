"""Per-day meal plans built from the personalization engine."""

import asyncio
import logging
from collections.abc import Callable
from dataclasses import dataclass, field
from datetime import date
from typing import Protocol

from fitplan.domain.meals import DailyMealPlan, Meal, MealSlot
from fitplan.domain.profile import UserProfile
from fitplan.services.personalization import MealPersonalizer

_logger = logging.getLogger(__name__)

Listener = Callable[["MealPlanStore"], None]


class ImageEvictor(Protocol):
    """Interface for dropping cached images of superseded meals."""

    async def remove(self, url: str) -> None:
        """Remove a cached image by URL."""


@dataclass
class MealPlanStore:
    """Observable in-memory state of generated meal plans."""

    plans: dict[date, DailyMealPlan] = field(default_factory=dict)
    _listeners: list[Listener] = field(default_factory=list, init=False, repr=False)
    _generating: int = field(default=0, init=False)

    @property
    def is_generating(self) -> bool:
        return self._generating > 0

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Register a change listener and return a function that removes it."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def get(self, day: date) -> DailyMealPlan | None:
        return self.plans.get(day)

    def get_or_create(self, day: date) -> DailyMealPlan:
        plan = self.plans.get(day)
        if plan is None:
            plan = DailyMealPlan(day=day)
            self.plans[day] = plan
        return plan

    def put(self, plan: DailyMealPlan) -> None:
        self.plans[plan.day] = plan
        self._notify()

    def set_meal(self, day: date, slot: MealSlot, meal: Meal) -> None:
        self.get_or_create(day).set_meal(slot, meal)
        self._notify()

    def begin_generating(self) -> None:
        self._generating += 1
        if self._generating == 1:
            self._notify()

    def end_generating(self) -> None:
        self._generating = max(self._generating - 1, 0)
        if self._generating == 0:
            self._notify()

    def _notify(self) -> None:
        for listener in list(self._listeners):
            try:
                listener(self)
            except Exception:
                _logger.exception("Meal plan listener failed")


@dataclass
class MealPlanService:
    """Generates and serves meal plans keyed by date."""

    personalizer: MealPersonalizer
    store: MealPlanStore = field(default_factory=MealPlanStore)
    image_evictor: ImageEvictor | None = None
    today: Callable[[], date] = date.today
    _locks: dict[date, asyncio.Lock] = field(
        default_factory=dict, init=False, repr=False
    )

    def __post_init__(self) -> None:
        self._bootstrap()

    def get_meal(self, slot: MealSlot, day: date) -> Meal | None:
        """Return the meal planned for a slot on a day."""
        plan = self.store.get(day)
        if plan is None:
            return None
        return plan.meal_for(slot)

    def get_daily_plan(self, day: date) -> DailyMealPlan | None:
        """Return the plan for a day, if one exists."""
        return self.store.get(day)

    async def generate_for_slot(
        self, slot: MealSlot, day: date, profile: UserProfile | None = None
    ) -> Meal:
        """Select a meal for one slot and write it into the day's plan."""
        self.store.begin_generating()
        try:
            async with self._lock_for(day):
                previous = self.get_meal(slot, day)
                meal = self.personalizer.select_meal(slot, profile)
                if previous and previous.image_url and self.image_evictor:
                    await self.image_evictor.remove(previous.image_url)
                self.store.set_meal(day, slot, meal)
                _logger.debug(
                    "Generated meal: day=%s slot=%s meal=%s calories=%s",
                    day,
                    slot,
                    meal.name,
                    meal.calories,
                )
                return meal
        finally:
            self.store.end_generating()

    async def generate_for_day(
        self, day: date, profile: UserProfile | None = None
    ) -> DailyMealPlan:
        """Regenerate every slot of a day in slot order."""
        for slot in MealSlot:
            await self.generate_for_slot(slot, day, profile)
        return self.store.get_or_create(day)

    def _lock_for(self, day: date) -> asyncio.Lock:
        lock = self._locks.get(day)
        if lock is None:
            lock = asyncio.Lock()
            self._locks[day] = lock
        return lock

    def _bootstrap(self) -> None:
        day = self.today()
        if self.store.get(day) is not None:
            return
        plan = DailyMealPlan(day=day)
        for slot in MealSlot:
            plan.set_meal(slot, self.personalizer.pick_random(slot))
        self.store.put(plan)
