"""Exercise guidance and logging for the active plan."""

from dataclasses import dataclass
from datetime import date
from typing import Protocol
from uuid import UUID

from carb_cycle.domain.cycle import CarbDayType
from carb_cycle.domain.errors import MealPlanNotFoundError, PlanNotFoundError
from carb_cycle.domain.exercise import (
    ExerciseCompletionStatus,
    ExercisePlan,
    ExerciseRecord,
)
from carb_cycle.planning.exercise import completion_status, generate_exercise_plan
from carb_cycle.services.plans import PlanService

_RECORD_FIELDS = {
    "strength_completed",
    "cardio_session_1",
    "cardio_session_2",
    "cardio_minutes",
    "notes",
}


class ExerciseRepository(Protocol):
    """Persistence interface for exercise records."""

    def get_record(self, user_id: UUID, day: date) -> ExerciseRecord | None:
        """Return the record for a user and day, if present."""

    def upsert_record(
        self, user_id: UUID, day: date, updates: dict[str, object]
    ) -> ExerciseRecord:
        """Create or partially update the record and return it."""


@dataclass(frozen=True)
class DayExercise:
    """Exercise plan, log and status for one day."""

    day: date
    carb_day_type: CarbDayType
    plan: ExercisePlan
    record: ExerciseRecord | None
    status: ExerciseCompletionStatus


@dataclass
class ExerciseService:
    """Service for the day's training guidance and log."""

    plan_service: PlanService
    repository: ExerciseRepository

    def get_day(self, user_id: UUID, day: date) -> DayExercise:
        """Return the recommendation and completion status for day."""
        _, meal_plan = self.plan_service.get_daily_meal_plan(user_id, day)
        plan = generate_exercise_plan(meal_plan.carb_day_type)
        record = self.repository.get_record(user_id, day)
        return DayExercise(
            day=day,
            carb_day_type=meal_plan.carb_day_type,
            plan=plan,
            record=record,
            status=completion_status(record, plan),
        )

    def update_day(
        self, user_id: UUID, day: date, updates: dict[str, object]
    ) -> tuple[ExerciseRecord, ExerciseCompletionStatus | None]:
        """Apply a partial update to the day's log.

        The status is None when the day has no meal plan to compare against.
        """
        changes = {
            key: value
            for key, value in updates.items()
            if key in _RECORD_FIELDS and value is not None
        }
        record = self.repository.upsert_record(user_id, day, changes)
        try:
            _, meal_plan = self.plan_service.get_daily_meal_plan(user_id, day)
        except (PlanNotFoundError, MealPlanNotFoundError):
            return record, None
        plan = generate_exercise_plan(meal_plan.carb_day_type)
        return record, completion_status(record, plan)
