"""Shared test fixtures."""

import random
from dataclasses import dataclass, field, replace
from datetime import date
from uuid import UUID, uuid4

import pytest

from carb_cycle.adapters.fdc_client import FdcClient
from carb_cycle.config import Settings
from carb_cycle.containers import AppContainer
from carb_cycle.domain.compliance import ComplianceRecord
from carb_cycle.domain.cycle import PlanStatus
from carb_cycle.domain.exercise import ExerciseRecord
from carb_cycle.domain.models import BodyMetrics, Gender, UserRecord
from carb_cycle.domain.plans import (
    CyclePlanRecord,
    CycleSummary,
    DailyMealPlanRecord,
    IntakeRecord,
)
from carb_cycle.services.body_metrics import BodyMetricsService
from carb_cycle.services.cache import InMemoryCache
from carb_cycle.services.exercise import ExerciseRepository, ExerciseService
from carb_cycle.services.intake import IntakeRepository, IntakeService
from carb_cycle.services.nutrition import NutritionService
from carb_cycle.services.plans import PlanRepository, PlanService
from carb_cycle.services.restrictions import DietRestrictionService
from carb_cycle.services.summary import CycleSummaryService, SummaryRepository
from carb_cycle.services.users import (
    BodyMetricsRepository,
    UserRepository,
    UserService,
)

API_HEADERS = {"X-Api-Token": "api-token"}
PLAN_START = date(2024, 1, 1)


@dataclass
class InMemoryUserRepository(UserRepository):
    """In-memory user repository for tests."""

    users: dict[UUID, UserRecord] = field(default_factory=dict)

    def get_user(self, user_id: UUID) -> UserRecord | None:
        return self.users.get(user_id)

    def create_user(self, payload: dict[str, object]) -> UserRecord:
        user = UserRecord(id=uuid4(), **payload)
        self.users[user.id] = user
        return user

    def update_user(self, user_id: UUID, payload: dict[str, object]) -> UserRecord:
        user = replace(self.users[user_id], **payload)
        self.users[user_id] = user
        return user


@dataclass
class InMemoryBodyMetricsRepository(BodyMetricsRepository):
    """In-memory body metrics keyed by user and day."""

    metrics: dict[tuple[UUID, date], BodyMetrics] = field(default_factory=dict)

    def upsert_metrics(self, metrics: BodyMetrics) -> None:
        self.metrics[(metrics.user_id, metrics.day)] = metrics

    def _for_user(self, user_id: UUID) -> list[BodyMetrics]:
        return sorted(
            (m for m in self.metrics.values() if m.user_id == user_id),
            key=lambda m: m.day,
        )

    def first_metrics_since(self, user_id: UUID, day: date) -> BodyMetrics | None:
        return next((m for m in self._for_user(user_id) if m.day >= day), None)

    def latest_metrics(self, user_id: UUID) -> BodyMetrics | None:
        rows = self._for_user(user_id)
        return rows[-1] if rows else None

    def get_metrics(self, user_id: UUID, day: date) -> BodyMetrics | None:
        return self.metrics.get((user_id, day))

    def list_metrics(
        self,
        user_id: UUID,
        start: date | None = None,
        end: date | None = None,
        limit: int | None = None,
    ) -> list[BodyMetrics]:
        rows = [
            m
            for m in self._for_user(user_id)
            if (start is None or m.day >= start) and (end is None or m.day <= end)
        ]
        return rows[-limit:] if limit else rows

    def update_metrics(
        self, user_id: UUID, day: date, changes: dict[str, object]
    ) -> BodyMetrics:
        metrics = replace(self.metrics[(user_id, day)], **changes)
        self.metrics[(user_id, day)] = metrics
        return metrics

    def delete_metrics(self, user_id: UUID, day: date) -> None:
        self.metrics.pop((user_id, day), None)


@dataclass
class InMemoryPlanRepository(PlanRepository):
    """In-memory cycle plans and daily meal plans."""

    plans: list[CyclePlanRecord] = field(default_factory=list)
    meal_plans: list[DailyMealPlanRecord] = field(default_factory=list)

    def create_plan(self, user_id: UUID, start_date: date) -> CyclePlanRecord:
        plan = CyclePlanRecord(
            id=uuid4(),
            user_id=user_id,
            start_date=start_date,
            status=PlanStatus.ACTIVE,
        )
        self.plans.append(plan)
        return plan

    def get_plan(self, plan_id: UUID) -> CyclePlanRecord | None:
        return next((plan for plan in self.plans if plan.id == plan_id), None)

    def get_active_plan(self, user_id: UUID) -> CyclePlanRecord | None:
        active = [
            plan
            for plan in self.plans
            if plan.user_id == user_id and plan.status == PlanStatus.ACTIVE
        ]
        return active[-1] if active else None

    def list_plans(self, user_id: UUID) -> list[CyclePlanRecord]:
        return [plan for plan in reversed(self.plans) if plan.user_id == user_id]

    def cancel_active_plans(self, user_id: UUID, end_date: date) -> int:
        cancelled = 0
        for index, plan in enumerate(self.plans):
            if plan.user_id == user_id and plan.status == PlanStatus.ACTIVE:
                self.plans[index] = replace(
                    plan, status=PlanStatus.CANCELLED, end_date=end_date
                )
                cancelled += 1
        return cancelled

    def update_plan(self, plan_id: UUID, changes: dict[str, object]) -> CyclePlanRecord:
        index = next(i for i, plan in enumerate(self.plans) if plan.id == plan_id)
        self.plans[index] = replace(self.plans[index], **changes)
        return self.plans[index]

    def create_daily_meal_plans(self, meal_plans: list[DailyMealPlanRecord]) -> None:
        self.meal_plans.extend(meal_plans)

    def list_daily_meal_plans(self, plan_id: UUID) -> list[DailyMealPlanRecord]:
        return sorted(
            (mp for mp in self.meal_plans if mp.cycle_plan_id == plan_id),
            key=lambda mp: mp.day,
        )

    def get_daily_meal_plan(
        self, plan_id: UUID, day: date
    ) -> DailyMealPlanRecord | None:
        return next(
            (
                mp
                for mp in self.meal_plans
                if mp.cycle_plan_id == plan_id and mp.day == day
            ),
            None,
        )


@dataclass
class InMemoryIntakeRepository(IntakeRepository):
    """In-memory intake records; resolves plans through the plan repository."""

    plan_repository: InMemoryPlanRepository
    records: dict[UUID, IntakeRecord] = field(default_factory=dict)

    def get_intake(self, daily_meal_plan_id: UUID) -> IntakeRecord | None:
        return self.records.get(daily_meal_plan_id)

    def list_intake_for_plan(self, plan_id: UUID) -> list[IntakeRecord]:
        ids = {mp.id for mp in self.plan_repository.list_daily_meal_plans(plan_id)}
        return [record for key, record in self.records.items() if key in ids]

    def upsert_intake(
        self, daily_meal_plan_id: UUID, updates: dict[str, object]
    ) -> IntakeRecord:
        current = self.records.get(
            daily_meal_plan_id, IntakeRecord(daily_meal_plan_id=daily_meal_plan_id)
        )
        compliance_changes = {
            key: updates[key]
            for key in ("no_fruit", "no_sugar", "no_white_flour")
            if key in updates
        }
        record = replace(
            current,
            items={**current.items, **updates.get("items", {})},
            followed_plan=updates.get("followed_plan", current.followed_plan),
            notes=updates.get("notes", current.notes),
            compliance=replace(current.compliance, **compliance_changes),
        )
        self.records[daily_meal_plan_id] = record
        return record

    def set_compliance(
        self, daily_meal_plan_id: UUID, compliance: ComplianceRecord
    ) -> None:
        self.upsert_intake(
            daily_meal_plan_id,
            {
                "no_fruit": compliance.no_fruit,
                "no_sugar": compliance.no_sugar,
                "no_white_flour": compliance.no_white_flour,
            },
        )


@dataclass
class InMemoryExerciseRepository(ExerciseRepository):
    """In-memory exercise records keyed by user and day."""

    records: dict[tuple[UUID, date], ExerciseRecord] = field(default_factory=dict)

    def get_record(self, user_id: UUID, day: date) -> ExerciseRecord | None:
        return self.records.get((user_id, day))

    def upsert_record(
        self, user_id: UUID, day: date, updates: dict[str, object]
    ) -> ExerciseRecord:
        current = self.records.get(
            (user_id, day), ExerciseRecord(user_id=user_id, day=day)
        )
        record = replace(current, **updates)
        self.records[(user_id, day)] = record
        return record


@dataclass
class InMemorySummaryRepository(SummaryRepository):
    """In-memory cycle summaries keyed by plan."""

    summaries: dict[UUID, CycleSummary] = field(default_factory=dict)

    def get_summary(self, plan_id: UUID) -> CycleSummary | None:
        return self.summaries.get(plan_id)

    def upsert_summary(self, summary: CycleSummary) -> CycleSummary:
        self.summaries[summary.cycle_plan_id] = summary
        return summary

    def list_summaries(self, plan_ids: list[UUID]) -> list[CycleSummary]:
        return [self.summaries[key] for key in plan_ids if key in self.summaries]


@dataclass
class FakeFdcClient(FdcClient):
    """Fake FDC client returning a canned search payload."""

    payload: dict[str, object] = field(
        default_factory=lambda: {
            "totalHits": 2,
            "foods": [
                {
                    "fdcId": 1,
                    "description": "Chicken breast, raw",
                    "dataType": "Foundation",
                    "foodNutrients": [
                        {"nutrientId": 1003, "value": 22.53},
                        {"nutrientId": 1004, "value": 1.93},
                        {"nutrientId": 1005, "value": 0},
                        {"nutrientId": 1008, "value": 106},
                    ],
                },
                {
                    "fdcId": 2,
                    "description": "Water, tap",
                    "dataType": "SR Legacy",
                    "foodNutrients": [],
                },
            ],
        }
    )
    calls: list[tuple[str, int]] = field(default_factory=list)
    errors: list[Exception] = field(default_factory=list)

    async def search_foods(self, query: str, page_size: int = 10) -> dict[str, object]:
        self.calls.append((query, page_size))
        if self.errors:
            raise self.errors.pop(0)
        return self.payload


def seeded_rng() -> random.Random:
    return random.Random(112113)


def create_user(
    user_service: UserService,
    weight_kg: float = 70,
    body_fat_fraction: float = 0.25,
    gender: Gender = Gender.MALE,
    day: date = PLAN_START,
) -> UserRecord:
    return user_service.create_user(
        {
            "username": "alex",
            "birth_year": 1990,
            "gender": gender,
            "weight_kg": weight_kg,
            "body_fat_fraction": body_fat_fraction,
        },
        day=day,
    )


@pytest.fixture
def settings() -> Settings:
    return Settings(
        supabase_url="https://example.supabase.co",
        supabase_service_key="service.role.key",
        api_token="api-token",
        fdc_api_key="fdc-key",
    )


@pytest.fixture
def user_repository() -> InMemoryUserRepository:
    return InMemoryUserRepository()


@pytest.fixture
def metrics_repository() -> InMemoryBodyMetricsRepository:
    return InMemoryBodyMetricsRepository()


@pytest.fixture
def plan_repository() -> InMemoryPlanRepository:
    return InMemoryPlanRepository()


@pytest.fixture
def intake_repository(
    plan_repository: InMemoryPlanRepository,
) -> InMemoryIntakeRepository:
    return InMemoryIntakeRepository(plan_repository)


@pytest.fixture
def user_service(
    user_repository: InMemoryUserRepository,
    metrics_repository: InMemoryBodyMetricsRepository,
) -> UserService:
    return UserService(user_repository, metrics_repository)


@pytest.fixture
def plan_service(
    plan_repository: InMemoryPlanRepository,
    intake_repository: InMemoryIntakeRepository,
    user_service: UserService,
    metrics_repository: InMemoryBodyMetricsRepository,
) -> PlanService:
    return PlanService(
        repository=plan_repository,
        intake_repository=intake_repository,
        user_service=user_service,
        metrics_repository=metrics_repository,
        rng_factory=seeded_rng,
    )


@pytest.fixture
def body_metrics_service(
    metrics_repository: InMemoryBodyMetricsRepository,
    user_service: UserService,
) -> BodyMetricsService:
    return BodyMetricsService(metrics_repository, user_service)


@pytest.fixture
def fdc_client() -> FakeFdcClient:
    return FakeFdcClient()


@pytest.fixture
def container(
    settings: Settings,
    user_service: UserService,
    plan_service: PlanService,
    plan_repository: InMemoryPlanRepository,
    intake_repository: InMemoryIntakeRepository,
    metrics_repository: InMemoryBodyMetricsRepository,
    body_metrics_service: BodyMetricsService,
    fdc_client: FakeFdcClient,
) -> AppContainer:
    nutrition_service = NutritionService(
        fdc_client=fdc_client,
        cache=InMemoryCache(),
        retry_delay_seconds=0,
    )

    async def close_resources() -> None:
        return None

    return AppContainer(
        settings=settings,
        user_service=user_service,
        plan_service=plan_service,
        body_metrics_service=body_metrics_service,
        intake_service=IntakeService(plan_service, intake_repository),
        restriction_service=DietRestrictionService(plan_service, intake_repository),
        exercise_service=ExerciseService(plan_service, InMemoryExerciseRepository()),
        summary_service=CycleSummaryService(
            repository=InMemorySummaryRepository(),
            plan_repository=plan_repository,
            intake_repository=intake_repository,
            metrics_repository=metrics_repository,
            user_service=user_service,
        ),
        nutrition_service=nutrition_service,
        close_resources=close_resources,
    )
