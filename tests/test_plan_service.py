"""Tests for plan creation, progress and day targets."""

from dataclasses import replace
from datetime import date
from uuid import uuid4

import pytest

from carb_cycle.domain.cycle import CarbDayType, PlanStatus
from carb_cycle.domain.errors import (
    MealPlanNotFoundError,
    PlanNotFoundError,
    UserNotFoundError,
)
from carb_cycle.planning.cycle_calendar import CYCLE_PATTERN
from carb_cycle.services.plans import completion_percentage, normalize_cycle_days
from tests.conftest import PLAN_START, create_user


def test_normalize_cycle_days_rounds_down_to_whole_cycles() -> None:
    assert normalize_cycle_days(None) == 6
    assert normalize_cycle_days(3) == 6
    assert normalize_cycle_days(13) == 12
    assert normalize_cycle_days(30) == 30
    assert normalize_cycle_days(None, default=12) == 12


def test_start_plan_generates_every_day(plan_service, user_service) -> None:
    user = create_user(user_service)

    plan, meal_plans = plan_service.start_plan(
        user.id, PLAN_START, today=PLAN_START, cycle_days=14
    )

    assert plan.status == PlanStatus.ACTIVE
    assert len(meal_plans) == 12
    assert [mp.day_number for mp in meal_plans] == list(range(1, 13))
    assert meal_plans[0].day == PLAN_START
    assert meal_plans[-1].day == date(2024, 1, 12)
    assert [mp.carb_day_type for mp in meal_plans] == list(CYCLE_PATTERN) * 2

    first = meal_plans[0]
    assert first.oatmeal_grams == 27
    assert first.rice_grams_lunch == 64
    assert first.rice_grams_dinner == 61
    assert first.olive_oil_ml == 42
    assert first.water_ml == 4000
    assert first.allow_whole_egg
    assert not meal_plans[5].allow_whole_egg


def test_start_plan_records_starting_metrics(
    plan_service, user_service, metrics_repository
) -> None:
    user = create_user(user_service, day=date(2023, 12, 20))

    plan_service.start_plan(user.id, PLAN_START, today=PLAN_START)

    metrics = metrics_repository.first_metrics_since(user.id, PLAN_START)
    assert metrics is not None
    assert metrics.day == PLAN_START
    assert metrics.weight_kg == 70


def test_starting_new_plan_cancels_active_one(
    plan_service, user_service, plan_repository
) -> None:
    user = create_user(user_service)
    first, _ = plan_service.start_plan(user.id, PLAN_START, today=PLAN_START)

    second, _ = plan_service.start_plan(
        user.id, date(2024, 1, 4), today=date(2024, 1, 4)
    )

    stored_first = plan_repository.get_plan(first.id)
    assert stored_first.status == PlanStatus.CANCELLED
    assert stored_first.end_date == date(2024, 1, 4)
    assert plan_service.get_active_plan(user.id).id == second.id
    assert [plan.id for plan in plan_service.list_plans(user.id)] == [
        second.id,
        first.id,
    ]


def test_start_plan_for_unknown_user(plan_service) -> None:
    with pytest.raises(UserNotFoundError):
        plan_service.start_plan(uuid4(), PLAN_START, today=PLAN_START)


def test_active_plan_required(plan_service, user_service) -> None:
    user = create_user(user_service)

    with pytest.raises(PlanNotFoundError):
        plan_service.get_active_plan(user.id)


def test_daily_meal_plan_lookup(plan_service, user_service) -> None:
    user = create_user(user_service)
    plan_service.start_plan(user.id, PLAN_START, today=PLAN_START)

    _, meal_plan = plan_service.get_daily_meal_plan(user.id, date(2024, 1, 3))

    assert meal_plan.carb_day_type == CarbDayType.MEDIUM
    with pytest.raises(MealPlanNotFoundError):
        plan_service.get_daily_meal_plan(user.id, date(2024, 2, 1))


def test_progress_counts_followed_days(
    plan_service, user_service, intake_repository
) -> None:
    user = create_user(user_service)
    _, meal_plans = plan_service.start_plan(
        user.id, PLAN_START, today=PLAN_START, cycle_days=12
    )
    for meal_plan in meal_plans[:3]:
        intake_repository.upsert_intake(meal_plan.id, {"followed_plan": True})
    intake_repository.upsert_intake(meal_plans[3].id, {"followed_plan": False})

    progress = plan_service.get_progress(user.id, today=date(2024, 1, 4))

    assert progress.total_days_elapsed == 4
    assert progress.current_day == 4
    assert progress.total_days == 12
    assert progress.completion_percentage == 75
    assert progress.todays_meal_plan == meal_plans[3]
    assert progress.todays_intake is not None
    assert not progress.todays_intake.followed_plan


def test_progress_before_plan_starts(plan_service, user_service) -> None:
    user = create_user(user_service)
    plan_service.start_plan(user.id, PLAN_START, today=date(2023, 12, 30))

    for today in (date(2023, 12, 31), date(2023, 12, 30)):
        progress = plan_service.get_progress(user.id, today=today)

        assert progress.total_days_elapsed == 0
        assert progress.current_day == 0
        assert progress.completion_percentage == 0
        assert progress.todays_meal_plan is None


def test_completion_percentage_caps_elapsed_at_plan_length() -> None:
    assert completion_percentage(5, 20, 12) == 42
    assert completion_percentage(6, 6, 6) == 100
    assert completion_percentage(0, 0, 6) == 0


def test_targets_for_day_use_current_profile(plan_service, user_service) -> None:
    user = create_user(user_service)
    plan_service.start_plan(user.id, PLAN_START, today=PLAN_START)

    day_targets = plan_service.targets_for_day(user.id, date(2024, 1, 6))

    assert day_targets.position.carb_day_type == CarbDayType.HIGH
    assert day_targets.position.day_number == 6
    assert day_targets.targets.carbs_grams == 158
    assert day_targets.targets.fat_grams == 16
    assert day_targets.reference.lunch_rice_grams == 220


def test_targets_before_plan_start(plan_service, user_service) -> None:
    user = create_user(user_service)
    plan_service.start_plan(user.id, PLAN_START, today=PLAN_START)

    with pytest.raises(MealPlanNotFoundError):
        plan_service.targets_for_day(user.id, date(2023, 12, 31))


def test_generation_uses_injected_rng(plan_service, user_service) -> None:
    user = create_user(user_service)
    profile = user.profile

    first = plan_service.generate_meal_plans(user.id, PLAN_START, 6, profile)
    second = plan_service.generate_meal_plans(user.id, PLAN_START, 6, profile)

    assert [replace(r, id=None) for r in first] == [
        replace(r, id=None) for r in second
    ]


def test_get_plan_detail_includes_intake(
    plan_service, user_service, intake_repository
) -> None:
    user = create_user(user_service)
    plan, meal_plans = plan_service.start_plan(user.id, PLAN_START, today=PLAN_START)
    intake_repository.upsert_intake(meal_plans[1].id, {"followed_plan": True})

    detail = plan_service.get_plan_detail(plan.id)

    assert detail.plan == plan
    assert [day.meal_plan for day in detail.days] == meal_plans
    assert detail.days[0].intake is None
    assert detail.days[1].intake.followed_plan
    with pytest.raises(PlanNotFoundError):
        plan_service.get_plan_detail(uuid4())


def test_complete_plan_closes_it_today(plan_service, user_service) -> None:
    user = create_user(user_service)
    plan, _ = plan_service.start_plan(user.id, PLAN_START, today=PLAN_START)

    completed = plan_service.update_plan(
        plan.id, today=date(2024, 1, 7), status=PlanStatus.COMPLETED
    )

    assert completed.status == PlanStatus.COMPLETED
    assert completed.end_date == date(2024, 1, 7)
    assert plan_service.get_plan(plan.id) == completed
    with pytest.raises(PlanNotFoundError):
        plan_service.get_active_plan(user.id)


def test_update_plan_end_date_only(plan_service, user_service) -> None:
    user = create_user(user_service)
    plan, _ = plan_service.start_plan(user.id, PLAN_START, today=PLAN_START)

    updated = plan_service.update_plan(
        plan.id, today=PLAN_START, end_date=date(2024, 1, 12)
    )
    unchanged = plan_service.update_plan(plan.id, today=PLAN_START)

    assert updated.status == PlanStatus.ACTIVE
    assert updated.end_date == date(2024, 1, 12)
    assert unchanged == updated


def test_cancel_plan(plan_service, user_service) -> None:
    user = create_user(user_service)
    plan, _ = plan_service.start_plan(user.id, PLAN_START, today=PLAN_START)

    cancelled = plan_service.cancel_plan(plan.id, today=date(2024, 1, 3))

    assert cancelled.status == PlanStatus.CANCELLED
    assert cancelled.end_date == date(2024, 1, 3)
    with pytest.raises(PlanNotFoundError):
        plan_service.cancel_plan(uuid4(), today=date(2024, 1, 3))
