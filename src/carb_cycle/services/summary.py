"""End-of-cycle summaries."""

import logging
from dataclasses import dataclass
from typing import Protocol
from uuid import UUID

from carb_cycle.domain.errors import PlanNotFoundError, SummaryNotFoundError
from carb_cycle.domain.plans import CycleSummary, SummaryHistoryEntry
from carb_cycle.services.plans import IntakeLookup, PlanRepository
from carb_cycle.services.users import BodyMetricsRepository, UserService

_logger = logging.getLogger(__name__)


class SummaryRepository(Protocol):
    """Persistence interface for cycle summaries."""

    def get_summary(self, plan_id: UUID) -> CycleSummary | None:
        """Return the stored summary for a plan, if present."""

    def upsert_summary(self, summary: CycleSummary) -> CycleSummary:
        """Create or replace the summary for its plan."""

    def list_summaries(self, plan_ids: list[UUID]) -> list[CycleSummary]:
        """Return the stored summaries for any of the given plans."""


@dataclass
class CycleSummaryService:
    """Service for generating and reading cycle summaries."""

    repository: SummaryRepository
    plan_repository: PlanRepository
    intake_repository: IntakeLookup
    metrics_repository: BodyMetricsRepository
    user_service: UserService

    def generate(self, plan_id: UUID, notes: str | None = None) -> CycleSummary:
        """Compute adherence and body changes for a plan and store them.

        Only days with an intake record count as followed or not followed.
        """
        plan = self.plan_repository.get_plan(plan_id)
        if plan is None:
            raise PlanNotFoundError(str(plan_id))
        meal_plans = self.plan_repository.list_daily_meal_plans(plan_id)
        intake_by_plan = {
            record.daily_meal_plan_id: record
            for record in self.intake_repository.list_intake_for_plan(plan_id)
        }

        followed = 0
        not_followed_dates = []
        for meal_plan in sorted(meal_plans, key=lambda mp: mp.day):
            record = intake_by_plan.get(meal_plan.id)
            if record is None:
                continue
            if record.followed_plan:
                followed += 1
            else:
                not_followed_dates.append(meal_plan.day)

        start = self.metrics_repository.first_metrics_since(
            plan.user_id, plan.start_date
        )
        end = self.metrics_repository.latest_metrics(plan.user_id)
        if start is not None:
            start_weight = start.weight_kg
        else:
            start_weight = self.user_service.get_user(plan.user_id).weight_kg

        summary = CycleSummary(
            cycle_plan_id=plan_id,
            total_days=len(meal_plans),
            days_followed=followed,
            days_not_followed=len(not_followed_dates),
            not_followed_dates=not_followed_dates,
            start_weight_kg=start_weight,
            end_weight_kg=end.weight_kg if end else None,
            start_body_fat=start.body_fat_fraction if start else None,
            end_body_fat=end.body_fat_fraction if end else None,
            notes=notes,
        )
        stored = self.repository.upsert_summary(summary)
        _logger.info(
            "Generated summary for plan %s: %s/%s days followed",
            plan_id,
            followed,
            len(meal_plans),
        )
        return stored

    def find(self, plan_id: UUID) -> CycleSummary | None:
        return self.repository.get_summary(plan_id)

    def get(self, plan_id: UUID) -> CycleSummary:
        """Return the stored summary or raise SummaryNotFoundError."""
        summary = self.find(plan_id)
        if summary is None:
            raise SummaryNotFoundError(str(plan_id))
        return summary

    def history(self, user_id: UUID) -> list[SummaryHistoryEntry]:
        """Return the user's summarized plans, newest plan first."""
        self.user_service.get_user(user_id)
        plans = self.plan_repository.list_plans(user_id)
        summaries = {
            summary.cycle_plan_id: summary
            for summary in self.repository.list_summaries([plan.id for plan in plans])
        }
        return [
            SummaryHistoryEntry(plan=plan, summary=summaries[plan.id])
            for plan in plans
            if plan.id in summaries
        ]
