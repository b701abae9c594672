"""Domain models for persisted cycle plans and intake."""

from dataclasses import dataclass, field
from datetime import date
from uuid import UUID

from carb_cycle.domain.compliance import ComplianceRecord
from carb_cycle.domain.cycle import CarbDayType, PlanStatus
from carb_cycle.domain.nutrition import ProteinSource

INTAKE_ITEM_KEYS = (
    "oatmeal_completed",
    "rice_lunch_completed",
    "rice_dinner_completed",
    "protein_1_completed",
    "protein_2_completed",
    "protein_3_completed",
    "protein_4_completed",
    "water_completed",
)


@dataclass(frozen=True)
class CyclePlanRecord:
    """A user's cycle plan."""

    id: UUID
    user_id: UUID
    start_date: date
    status: PlanStatus
    end_date: date | None = None


@dataclass(frozen=True)
class DailyMealPlanRecord:
    """Stored prescription for one day of a cycle plan."""

    id: UUID
    cycle_plan_id: UUID
    day: date
    day_number: int
    carb_day_type: CarbDayType
    oatmeal_grams: int
    rice_grams_lunch: int
    rice_grams_dinner: int
    protein_grams_meal_1: int
    protein_source_meal_1: ProteinSource
    protein_grams_meal_2: int
    protein_source_meal_2: ProteinSource
    protein_grams_meal_3: int
    protein_source_meal_3: ProteinSource
    protein_grams_meal_4: int
    protein_source_meal_4: ProteinSource
    olive_oil_ml: int
    allow_whole_egg: bool
    water_ml: int


@dataclass(frozen=True)
class IntakeRecord:
    """Logged check-offs for one daily meal plan."""

    daily_meal_plan_id: UUID
    items: dict[str, bool] = field(default_factory=dict)
    followed_plan: bool = False
    notes: str | None = None
    compliance: ComplianceRecord = field(default_factory=ComplianceRecord)


@dataclass(frozen=True)
class IntakeItemStatus:
    """One check-off item and whether it is done."""

    key: str
    completed: bool


@dataclass(frozen=True)
class DailyCompletionStatus:
    """Share of check-off items done for a day."""

    total_items: int
    completed_items: int
    percentage: int
    is_complete: bool
    items: list[IntakeItemStatus]


@dataclass(frozen=True)
class PlanProgress:
    """Active plan with progress against a reference date."""

    plan: CyclePlanRecord
    total_days_elapsed: int
    current_day: int
    total_days: int
    completion_percentage: int
    todays_meal_plan: DailyMealPlanRecord | None
    todays_intake: IntakeRecord | None


@dataclass(frozen=True)
class CycleSummary:
    """End-of-cycle adherence and body composition summary."""

    cycle_plan_id: UUID
    total_days: int
    days_followed: int
    days_not_followed: int
    not_followed_dates: list[date]
    start_weight_kg: float
    end_weight_kg: float | None = None
    start_body_fat: float | None = None
    end_body_fat: float | None = None
    notes: str | None = None


@dataclass(frozen=True)
class PlanDay:
    """A stored day of a plan with whatever intake was logged for it."""

    meal_plan: DailyMealPlanRecord
    intake: IntakeRecord | None


@dataclass(frozen=True)
class PlanDetail:
    plan: CyclePlanRecord
    days: list[PlanDay]


@dataclass(frozen=True)
class SummaryHistoryEntry:
    """A stored summary alongside the plan it describes."""

    plan: CyclePlanRecord
    summary: CycleSummary
