"""First-month diet restriction check-ins."""

from dataclasses import dataclass
from datetime import date
from uuid import UUID

from carb_cycle.domain.compliance import ComplianceRecord, RestrictionStatus
from carb_cycle.domain.errors import RestrictionWindowClosedError
from carb_cycle.planning.compliance import is_first_month, restriction_status
from carb_cycle.services.intake import IntakeRepository
from carb_cycle.services.plans import PlanService


@dataclass
class DietRestrictionService:
    """Service for no-fruit / no-sugar / no-white-flour confirmations."""

    plan_service: PlanService
    repository: IntakeRepository

    def get_status(self, user_id: UUID, today: date) -> RestrictionStatus:
        """Return today's confirmations and the current streak."""
        plan, todays_plan = self.plan_service.get_daily_meal_plan(user_id, today)
        current_day = todays_plan.day_number
        meal_plans = self.plan_service.repository.list_daily_meal_plans(plan.id)
        intake_by_plan = {
            record.daily_meal_plan_id: record
            for record in self.repository.list_intake_for_plan(plan.id)
        }
        history: list[ComplianceRecord | None] = []
        for meal_plan in sorted(
            meal_plans, key=lambda mp: mp.day_number, reverse=True
        ):
            if not 1 <= meal_plan.day_number <= current_day:
                continue
            record = intake_by_plan.get(meal_plan.id)
            history.append(record.compliance if record else None)

        todays_record = intake_by_plan.get(todays_plan.id)
        return restriction_status(
            current_day,
            todays_record.compliance if todays_record else None,
            history,
        )

    def check_in(
        self,
        user_id: UUID,
        today: date,
        no_fruit: bool | None = None,
        no_sugar: bool | None = None,
        no_white_flour: bool | None = None,
    ) -> ComplianceRecord:
        """Record today's confirmations; only allowed in the first month."""
        _, todays_plan = self.plan_service.get_daily_meal_plan(user_id, today)
        if not is_first_month(todays_plan.day_number):
            raise RestrictionWindowClosedError(
                "Diet restrictions only apply to the first 30 days"
            )
        updates = {
            key: value
            for key, value in (
                ("no_fruit", no_fruit),
                ("no_sugar", no_sugar),
                ("no_white_flour", no_white_flour),
            )
            if value is not None
        }
        record = self.repository.upsert_intake(todays_plan.id, updates)
        return record.compliance
