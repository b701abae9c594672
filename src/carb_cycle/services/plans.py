"""Cycle plan lifecycle and daily meal plan generation."""

import logging
import random
from collections.abc import Callable
from dataclasses import dataclass
from datetime import date
from typing import Protocol
from uuid import UUID, uuid4

from carb_cycle.domain.cycle import CycleDayPosition, PlanStatus
from carb_cycle.domain.errors import MealPlanNotFoundError, PlanNotFoundError
from carb_cycle.domain.models import BodyMetrics, UserBodyProfile
from carb_cycle.domain.nutrition import (
    DailyNutritionPlan,
    NutritionTargets,
    ReferencePortions,
)
from carb_cycle.domain.plans import (
    CyclePlanRecord,
    DailyMealPlanRecord,
    IntakeRecord,
    PlanDay,
    PlanDetail,
    PlanProgress,
)
from carb_cycle.planning.allocation import round_half_up
from carb_cycle.planning.cycle_calendar import (
    CYCLE_LENGTH,
    carb_day_type,
    cycle_day_position,
    date_range,
    day_number_in_cycle,
    position_in_cycle,
)
from carb_cycle.planning.portions import generate_daily_plan, reference_portions
from carb_cycle.planning.targets import compute_targets
from carb_cycle.services.users import BodyMetricsRepository, UserService

_logger = logging.getLogger(__name__)

_FINISHED = {PlanStatus.COMPLETED, PlanStatus.CANCELLED}


class PlanRepository(Protocol):
    """Persistence interface for cycle plans and their daily meal plans."""

    def create_plan(self, user_id: UUID, start_date: date) -> CyclePlanRecord:
        """Create an active plan and return it."""

    def get_plan(self, plan_id: UUID) -> CyclePlanRecord | None:
        """Return a plan by id, if present."""

    def get_active_plan(self, user_id: UUID) -> CyclePlanRecord | None:
        """Return the user's active plan, if any."""

    def list_plans(self, user_id: UUID) -> list[CyclePlanRecord]:
        """Return all plans for a user, newest first."""

    def cancel_active_plans(self, user_id: UUID, end_date: date) -> int:
        """Mark active plans cancelled and return how many changed."""

    def update_plan(self, plan_id: UUID, changes: dict[str, object]) -> CyclePlanRecord:
        """Update a plan's status or end date and return it."""

    def create_daily_meal_plans(self, meal_plans: list[DailyMealPlanRecord]) -> None:
        """Insert a batch of daily meal plans."""

    def list_daily_meal_plans(self, plan_id: UUID) -> list[DailyMealPlanRecord]:
        """Return a plan's daily meal plans ordered by date."""

    def get_daily_meal_plan(
        self, plan_id: UUID, day: date
    ) -> DailyMealPlanRecord | None:
        """Return the meal plan for a date, if present."""


class IntakeLookup(Protocol):
    """Read access to intake records, keyed by daily meal plan."""

    def get_intake(self, daily_meal_plan_id: UUID) -> IntakeRecord | None:
        """Return the intake record for a daily meal plan."""

    def list_intake_for_plan(self, plan_id: UUID) -> list[IntakeRecord]:
        """Return all intake records under a cycle plan."""


@dataclass(frozen=True)
class DayTargets:
    """Targets and suggested portions for a date within the active plan."""

    position: CycleDayPosition
    targets: NutritionTargets
    reference: ReferencePortions


def normalize_cycle_days(requested: int | None, default: int = CYCLE_LENGTH) -> int:
    """Round a requested plan length down to whole cycles, at least one."""
    days = requested if requested is not None else default
    if days < CYCLE_LENGTH:
        days = default
    return days // CYCLE_LENGTH * CYCLE_LENGTH


def to_meal_plan_record(
    plan_id: UUID, day: date, day_number: int, plan: DailyNutritionPlan
) -> DailyMealPlanRecord:
    """Flatten a generated plan into its stored form."""
    breakfast, lunch, snack, dinner = plan.meals
    return DailyMealPlanRecord(
        id=uuid4(),
        cycle_plan_id=plan_id,
        day=day,
        day_number=day_number,
        carb_day_type=plan.carb_day_type,
        oatmeal_grams=breakfast.carb_food_grams,
        rice_grams_lunch=lunch.carb_food_grams,
        rice_grams_dinner=dinner.carb_food_grams,
        protein_grams_meal_1=breakfast.protein_food_grams,
        protein_source_meal_1=breakfast.protein_source,
        protein_grams_meal_2=lunch.protein_food_grams,
        protein_source_meal_2=lunch.protein_source,
        protein_grams_meal_3=snack.protein_food_grams,
        protein_source_meal_3=snack.protein_source,
        protein_grams_meal_4=dinner.protein_food_grams,
        protein_source_meal_4=dinner.protein_source,
        olive_oil_ml=plan.olive_oil_ml,
        allow_whole_egg=not plan.restrictions.no_egg_yolk,
        water_ml=plan.water_target_ml,
    )


@dataclass
class PlanService:
    """Service for starting plans and reading their daily prescriptions."""

    repository: PlanRepository
    intake_repository: IntakeLookup
    user_service: UserService
    metrics_repository: BodyMetricsRepository
    default_cycle_days: int = CYCLE_LENGTH
    rng_factory: Callable[[], random.Random] = random.Random

    def start_plan(
        self,
        user_id: UUID,
        start_date: date,
        today: date,
        cycle_days: int | None = None,
    ) -> tuple[CyclePlanRecord, list[DailyMealPlanRecord]]:
        """Cancel the active plan and generate every day of a new one."""
        user = self.user_service.get_user(user_id)
        cancelled = self.repository.cancel_active_plans(user_id, end_date=today)
        if cancelled:
            _logger.info("Cancelled %s active plan(s) for user %s", cancelled, user_id)

        days = normalize_cycle_days(cycle_days, self.default_cycle_days)
        plan = self.repository.create_plan(user_id, start_date)
        meal_plans = self.generate_meal_plans(plan.id, start_date, days, user.profile)
        self.repository.create_daily_meal_plans(meal_plans)
        self.metrics_repository.upsert_metrics(
            BodyMetrics(
                user_id=user_id,
                day=start_date,
                weight_kg=user.weight_kg,
                body_fat_fraction=user.body_fat_fraction,
            )
        )
        _logger.info(
            "Started plan %s for user %s: %s days from %s",
            plan.id,
            user_id,
            days,
            start_date,
        )
        return plan, meal_plans

    def generate_meal_plans(
        self,
        plan_id: UUID,
        start_date: date,
        days: int,
        profile: UserBodyProfile,
    ) -> list[DailyMealPlanRecord]:
        """Generate one meal plan per day from a fresh random source."""
        rng = self.rng_factory()
        records = []
        for day_number, day in enumerate(date_range(start_date, days), start=1):
            generated = generate_daily_plan(profile, carb_day_type(day_number), rng)
            records.append(to_meal_plan_record(plan_id, day, day_number, generated))
        return records

    def list_plans(self, user_id: UUID) -> list[CyclePlanRecord]:
        """Return the user's plans, newest first."""
        return self.repository.list_plans(user_id)

    def get_plan(self, plan_id: UUID) -> CyclePlanRecord:
        """Return a plan by id or raise PlanNotFoundError."""
        plan = self.repository.get_plan(plan_id)
        if plan is None:
            raise PlanNotFoundError(str(plan_id))
        return plan

    def get_plan_detail(self, plan_id: UUID) -> PlanDetail:
        """Return a plan with every day's meal plan and intake."""
        plan = self.get_plan(plan_id)
        intake_by_plan = {
            record.daily_meal_plan_id: record
            for record in self.intake_repository.list_intake_for_plan(plan_id)
        }
        days = [
            PlanDay(meal_plan=meal_plan, intake=intake_by_plan.get(meal_plan.id))
            for meal_plan in self.repository.list_daily_meal_plans(plan_id)
        ]
        return PlanDetail(plan=plan, days=days)

    def update_plan(
        self,
        plan_id: UUID,
        today: date,
        status: PlanStatus | None = None,
        end_date: date | None = None,
    ) -> CyclePlanRecord:
        """Change a plan's status or end date.

        Finishing a plan without an end date closes it today.
        """
        plan = self.get_plan(plan_id)
        changes: dict[str, object] = {}
        if status is not None:
            changes["status"] = status
        if end_date is not None:
            changes["end_date"] = end_date
        elif status in _FINISHED and plan.end_date is None:
            changes["end_date"] = today
        if not changes:
            return plan
        updated = self.repository.update_plan(plan_id, changes)
        _logger.info("Updated plan %s: %s", plan_id, updated.status.value)
        return updated

    def cancel_plan(self, plan_id: UUID, today: date) -> CyclePlanRecord:
        """Cancel a plan, ending it today."""
        return self.update_plan(
            plan_id, today, status=PlanStatus.CANCELLED, end_date=today
        )

    def get_active_plan(self, user_id: UUID) -> CyclePlanRecord:
        """Return the active plan or raise PlanNotFoundError."""
        plan = self.repository.get_active_plan(user_id)
        if plan is None:
            raise PlanNotFoundError(f"No active plan for user {user_id}")
        return plan

    def get_daily_meal_plan(
        self, user_id: UUID, day: date
    ) -> tuple[CyclePlanRecord, DailyMealPlanRecord]:
        """Return the active plan and its meal plan for day."""
        plan = self.get_active_plan(user_id)
        meal_plan = self.repository.get_daily_meal_plan(plan.id, day)
        if meal_plan is None:
            raise MealPlanNotFoundError(f"No meal plan for {day}")
        return plan, meal_plan

    def get_progress(self, user_id: UUID, today: date) -> PlanProgress:
        """Return the active plan with progress as of today."""
        plan = self.get_active_plan(user_id)
        meal_plans = self.repository.list_daily_meal_plans(plan.id)
        elapsed = day_number_in_cycle(plan.start_date, today)
        todays_plan = next((mp for mp in meal_plans if mp.day == today), None)
        todays_intake = (
            self.intake_repository.get_intake(todays_plan.id) if todays_plan else None
        )
        followed = sum(
            1
            for record in self.intake_repository.list_intake_for_plan(plan.id)
            if record.followed_plan
        )
        started = elapsed >= 1
        return PlanProgress(
            plan=plan,
            total_days_elapsed=max(elapsed, 0),
            current_day=position_in_cycle(elapsed) if started else 0,
            total_days=len(meal_plans),
            completion_percentage=completion_percentage(
                followed, elapsed, len(meal_plans)
            ),
            todays_meal_plan=todays_plan,
            todays_intake=todays_intake,
        )

    def targets_for_day(self, user_id: UUID, day: date) -> DayTargets:
        """Return today's targets for the user's current body profile."""
        user = self.user_service.get_user(user_id)
        plan = self.get_active_plan(user_id)
        if day < plan.start_date:
            raise MealPlanNotFoundError(f"{day} is before the plan starts")
        position = cycle_day_position(plan.start_date, day)
        return DayTargets(
            position=position,
            targets=compute_targets(user.profile, position.carb_day_type),
            reference=reference_portions(position.carb_day_type),
        )


def completion_percentage(
    followed_days: int, elapsed_days: int, total_days: int
) -> int:
    """Return followed days as a percentage of the days that have passed."""
    denominator = min(elapsed_days, total_days)
    if elapsed_days <= 0 or denominator <= 0:
        return 0
    return round_half_up(followed_days / denominator * 100)
