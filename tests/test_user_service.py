"""Tests for user profiles and body metrics."""

from datetime import date
from uuid import uuid4

import pytest

from carb_cycle.domain.errors import UserNotFoundError
from carb_cycle.domain.models import Gender
from tests.conftest import PLAN_START, create_user


def test_create_user_records_metrics(user_service, metrics_repository) -> None:
    user = create_user(user_service, weight_kg=82, body_fat_fraction=0.28)

    assert user.profile.weight_kg == 82
    latest = metrics_repository.latest_metrics(user.id)
    assert latest is not None
    assert latest.day == PLAN_START
    assert latest.body_fat_fraction == 0.28


def test_get_unknown_user(user_service) -> None:
    with pytest.raises(UserNotFoundError):
        user_service.get_user(uuid4())


def test_weight_change_is_logged(user_service, metrics_repository) -> None:
    user = create_user(user_service)

    updated = user_service.update_profile(
        user.id, {"weight_kg": 68.5}, day=date(2024, 1, 10)
    )

    assert updated.weight_kg == 68.5
    latest = metrics_repository.latest_metrics(user.id)
    assert latest.day == date(2024, 1, 10)
    assert latest.weight_kg == 68.5


def test_other_profile_changes_do_not_log_metrics(
    user_service, metrics_repository
) -> None:
    user = create_user(user_service)

    updated = user_service.update_profile(
        user.id,
        {"height_cm": 180, "gender": Gender.FEMALE, "username": "ignored"},
        day=date(2024, 1, 10),
    )

    assert updated.height_cm == 180
    assert updated.gender == Gender.FEMALE
    assert updated.username == "alex"
    assert metrics_repository.latest_metrics(user.id).day == PLAN_START


def test_empty_update_returns_current_user(user_service) -> None:
    user = create_user(user_service)

    assert user_service.update_profile(user.id, {"weight_kg": None}, PLAN_START) == user
