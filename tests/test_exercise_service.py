"""Tests for exercise guidance and logging."""

from datetime import date
from uuid import uuid4

import pytest

from carb_cycle.domain.cycle import CarbDayType
from carb_cycle.domain.errors import PlanNotFoundError
from carb_cycle.services.exercise import ExerciseService
from tests.conftest import PLAN_START, InMemoryExerciseRepository, create_user

HIGH_DAY = date(2024, 1, 6)


@pytest.fixture
def exercise_service(plan_service) -> ExerciseService:
    return ExerciseService(plan_service, InMemoryExerciseRepository())


def test_high_day_guidance(exercise_service, plan_service, user_service) -> None:
    user = create_user(user_service)
    plan_service.start_plan(user.id, PLAN_START, today=PLAN_START)

    day = exercise_service.get_day(user.id, HIGH_DAY)

    assert day.carb_day_type == CarbDayType.HIGH
    assert day.plan.max_cardio_sessions == 1
    assert day.record is None
    assert not day.status.is_complete


def test_partial_updates_merge(exercise_service, plan_service, user_service) -> None:
    user = create_user(user_service)
    plan_service.start_plan(user.id, PLAN_START, today=PLAN_START)

    exercise_service.update_day(user.id, HIGH_DAY, {"strength_completed": True})
    record, status = exercise_service.update_day(
        user.id,
        HIGH_DAY,
        {"cardio_session_1": True, "cardio_minutes": 20, "unknown": 1},
    )

    assert record.strength_completed
    assert record.cardio_session_1
    assert record.cardio_minutes == 20
    assert status is not None
    assert status.is_complete
    assert status.cardio_sessions_completed == 1
    assert status.total_cardio_minutes == 20


def test_update_without_plan_has_no_status(exercise_service, user_service) -> None:
    user = create_user(user_service)

    record, status = exercise_service.update_day(
        user.id, HIGH_DAY, {"strength_completed": True}
    )

    assert record.strength_completed
    assert status is None


def test_get_day_requires_plan(exercise_service) -> None:
    with pytest.raises(PlanNotFoundError):
        exercise_service.get_day(uuid4(), HIGH_DAY)
