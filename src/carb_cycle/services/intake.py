"""Daily intake check-off service."""

from dataclasses import dataclass
from datetime import date
from typing import Protocol
from uuid import UUID

from carb_cycle.domain.nutrition import MacroProfile
from carb_cycle.domain.plans import (
    INTAKE_ITEM_KEYS,
    DailyCompletionStatus,
    DailyMealPlanRecord,
    IntakeItemStatus,
    IntakeRecord,
)
from carb_cycle.planning.allocation import round_half_up
from carb_cycle.planning.portions import daily_nutrition, logged_intake
from carb_cycle.services.plans import PlanService


class IntakeRepository(Protocol):
    """Persistence interface for intake records."""

    def get_intake(self, daily_meal_plan_id: UUID) -> IntakeRecord | None:
        """Return the intake record for a daily meal plan."""

    def list_intake_for_plan(self, plan_id: UUID) -> list[IntakeRecord]:
        """Return all intake records under a cycle plan."""

    def upsert_intake(
        self, daily_meal_plan_id: UUID, updates: dict[str, object]
    ) -> IntakeRecord:
        """Create or partially update the intake record and return it."""


def daily_completion_status(record: IntakeRecord | None) -> DailyCompletionStatus:
    """Return how many of the day's check-off items are done."""
    done = record.items if record else {}
    items = [
        IntakeItemStatus(key=key, completed=bool(done.get(key, False)))
        for key in INTAKE_ITEM_KEYS
    ]
    completed = sum(1 for item in items if item.completed)
    total = len(items)
    return DailyCompletionStatus(
        total_items=total,
        completed_items=completed,
        percentage=round_half_up(completed / total * 100),
        is_complete=completed == total,
        items=items,
    )


@dataclass(frozen=True)
class DayIntake:
    """A day's prescription with what has been checked off."""

    meal_plan: DailyMealPlanRecord
    intake: IntakeRecord | None
    status: DailyCompletionStatus
    eaten: MacroProfile


def day_intake(
    meal_plan: DailyMealPlanRecord, intake: IntakeRecord | None
) -> DayIntake:
    """Combine a meal plan with its check-offs and the estimated macros eaten."""
    items = intake.items if intake else {}
    return DayIntake(
        meal_plan=meal_plan,
        intake=intake,
        status=daily_completion_status(intake),
        eaten=daily_nutrition(logged_intake(meal_plan, items)),
    )


@dataclass
class IntakeService:
    """Service for checking off the day's prescribed items."""

    plan_service: PlanService
    repository: IntakeRepository

    def get_day(self, user_id: UUID, day: date) -> DayIntake:
        """Return the meal plan and check-off state for day."""
        _, meal_plan = self.plan_service.get_daily_meal_plan(user_id, day)
        intake = self.repository.get_intake(meal_plan.id)
        return day_intake(meal_plan, intake)

    def set_item(
        self, user_id: UUID, day: date, item_key: str, completed: bool
    ) -> DayIntake:
        """Check or uncheck a single item."""
        if item_key not in INTAKE_ITEM_KEYS:
            raise ValueError(f"Unknown intake item: {item_key}")
        _, meal_plan = self.plan_service.get_daily_meal_plan(user_id, day)
        intake = self.repository.upsert_intake(
            meal_plan.id, {"items": {item_key: completed}}
        )
        return day_intake(meal_plan, intake)

    def complete_day(
        self, user_id: UUID, day: date, followed_plan: bool, notes: str | None = None
    ) -> IntakeRecord:
        """Mark whether the user followed the plan on day."""
        _, meal_plan = self.plan_service.get_daily_meal_plan(user_id, day)
        updates: dict[str, object] = {"followed_plan": followed_plan}
        if notes is not None:
            updates["notes"] = notes
        return self.repository.upsert_intake(meal_plan.id, updates)
