"""Tests for the body measurement log."""

from datetime import date
from uuid import uuid4

import pytest

from carb_cycle.domain.errors import BodyMetricsNotFoundError, UserNotFoundError
from carb_cycle.domain.metrics import TrendDirection, TrendPeriod
from tests.conftest import PLAN_START, create_user


def test_log_updates_profile(body_metrics_service, user_service) -> None:
    user = create_user(user_service)

    metrics = body_metrics_service.log(user.id, date(2024, 1, 8), 68.9, 0.24)

    assert metrics.day == date(2024, 1, 8)
    refreshed = user_service.get_user(user.id)
    assert refreshed.weight_kg == 68.9
    assert refreshed.body_fat_fraction == 0.24


def test_log_keeps_existing_body_fat_for_the_day(
    body_metrics_service, user_service
) -> None:
    user = create_user(user_service)

    metrics = body_metrics_service.log(user.id, PLAN_START, 69.5)

    assert metrics.weight_kg == 69.5
    assert metrics.body_fat_fraction == 0.25
    assert user_service.get_user(user.id).body_fat_fraction == 0.25


def test_log_for_unknown_user(body_metrics_service) -> None:
    with pytest.raises(UserNotFoundError):
        body_metrics_service.log(uuid4(), PLAN_START, 70)


def test_history_is_oldest_first_with_summary(
    body_metrics_service, user_service
) -> None:
    user = create_user(user_service)
    body_metrics_service.log(user.id, date(2024, 1, 8), 69.0, 0.245)
    body_metrics_service.log(user.id, date(2024, 1, 15), 68.2, 0.24)

    history = body_metrics_service.history(user.id)

    assert [m.day for m in history.metrics] == [
        PLAN_START,
        date(2024, 1, 8),
        date(2024, 1, 15),
    ]
    assert history.summary.total_records == 3
    assert history.summary.weight_change_kg == -1.8
    assert history.summary.body_fat_change == pytest.approx(-0.01)

    bounded = body_metrics_service.history(user.id, start=date(2024, 1, 2))
    assert [m.day for m in bounded.metrics] == [date(2024, 1, 8), date(2024, 1, 15)]
    newest = body_metrics_service.history(user.id, limit=1)
    assert [m.day for m in newest.metrics] == [date(2024, 1, 15)]


def test_get_missing_day(body_metrics_service, user_service) -> None:
    user = create_user(user_service)

    with pytest.raises(BodyMetricsNotFoundError):
        body_metrics_service.get(user.id, date(2024, 1, 2))


def test_latest_falls_back_to_profile(
    body_metrics_service, user_service, metrics_repository
) -> None:
    user = create_user(user_service)
    metrics_repository.delete_metrics(user.id, PLAN_START)

    latest = body_metrics_service.latest(user.id, today=date(2024, 2, 1))

    assert latest.day == date(2024, 2, 1)
    assert latest.weight_kg == 70
    assert latest.body_fat_fraction == 0.25


def test_update_latest_measurement_syncs_profile(
    body_metrics_service, user_service
) -> None:
    user = create_user(user_service)
    body_metrics_service.log(user.id, date(2024, 1, 8), 69.0, 0.245)

    updated = body_metrics_service.update(
        user.id, date(2024, 1, 8), {"weight_kg": 69.4, "day": date(2024, 1, 9)}
    )

    assert updated.day == date(2024, 1, 8)
    assert updated.weight_kg == 69.4
    assert user_service.get_user(user.id).weight_kg == 69.4


def test_update_older_measurement_leaves_profile(
    body_metrics_service, user_service
) -> None:
    user = create_user(user_service)
    body_metrics_service.log(user.id, date(2024, 1, 8), 69.0, 0.245)

    updated = body_metrics_service.update(
        user.id, PLAN_START, {"weight_kg": 70.2, "body_fat_fraction": None}
    )

    assert updated.weight_kg == 70.2
    assert updated.body_fat_fraction is None
    profile = user_service.get_user(user.id)
    assert profile.weight_kg == 69.0
    assert profile.body_fat_fraction == 0.245


def test_update_ignores_missing_weight(body_metrics_service, user_service) -> None:
    user = create_user(user_service)

    unchanged = body_metrics_service.update(user.id, PLAN_START, {"weight_kg": None})

    assert unchanged.weight_kg == 70


def test_delete_measurement(body_metrics_service, user_service) -> None:
    user = create_user(user_service)
    body_metrics_service.log(user.id, date(2024, 1, 8), 69.0)

    body_metrics_service.delete(user.id, date(2024, 1, 8))

    assert [m.day for m in body_metrics_service.history(user.id).metrics] == [
        PLAN_START
    ]
    with pytest.raises(BodyMetricsNotFoundError):
        body_metrics_service.delete(user.id, date(2024, 1, 8))


def test_trends_for_month(body_metrics_service, user_service) -> None:
    user = create_user(user_service, day=date(2023, 11, 1))
    for day, weight in [
        (date(2024, 1, 1), 70.0),
        (date(2024, 1, 8), 69.4),
        (date(2024, 1, 15), 68.8),
    ]:
        body_metrics_service.log(user.id, day, weight)

    trends = body_metrics_service.trends(
        user.id, today=date(2024, 1, 20), period=TrendPeriod.MONTH
    )

    assert [point.day for point in trends.points] == [
        date(2024, 1, 1),
        date(2024, 1, 8),
        date(2024, 1, 15),
    ]
    assert trends.rates.weight_per_week == -0.6
    assert trends.rates.weight_direction == TrendDirection.DECREASING
    everything = body_metrics_service.trends(
        user.id, today=date(2024, 1, 20), period=TrendPeriod.ALL
    )
    assert everything.points[0].day == date(2023, 11, 1)


def test_backfilled_measurement_leaves_profile(
    body_metrics_service, user_service
) -> None:
    user = create_user(user_service, day=date(2024, 1, 15))

    body_metrics_service.log(user.id, date(2024, 1, 8), 72.0, 0.27)

    profile = user_service.get_user(user.id)
    assert profile.weight_kg == 70
    assert profile.body_fat_fraction == 0.25
