"""Body measurement history, corrections and trends."""

import logging
from dataclasses import dataclass
from datetime import date
from uuid import UUID

from carb_cycle.domain.errors import BodyMetricsNotFoundError
from carb_cycle.domain.metrics import BodyMetricsHistory, BodyMetricsTrends, TrendPeriod
from carb_cycle.domain.models import BodyMetrics
from carb_cycle.planning.trends import (
    body_metrics_trends,
    metrics_summary,
    period_start,
)
from carb_cycle.services.users import BodyMetricsRepository, UserService

_logger = logging.getLogger(__name__)

_EDITABLE_FIELDS = {"weight_kg", "body_fat_fraction"}


@dataclass
class BodyMetricsService:
    """Service for a user's dated weight and body-fat log."""

    repository: BodyMetricsRepository
    user_service: UserService

    def history(
        self,
        user_id: UUID,
        start: date | None = None,
        end: date | None = None,
        limit: int | None = None,
    ) -> BodyMetricsHistory:
        """Return measurements in date order with first-to-last change."""
        self.user_service.get_user(user_id)
        metrics = self.repository.list_metrics(user_id, start, end, limit)
        return BodyMetricsHistory(metrics=metrics, summary=metrics_summary(metrics))

    def get(self, user_id: UUID, day: date) -> BodyMetrics:
        """Return the measurement for day or raise BodyMetricsNotFoundError."""
        metrics = self.repository.get_metrics(user_id, day)
        if metrics is None:
            raise BodyMetricsNotFoundError(f"No body metrics for {day}")
        return metrics

    def latest(self, user_id: UUID, today: date) -> BodyMetrics:
        """Return the newest measurement, or the profile values dated today."""
        user = self.user_service.get_user(user_id)
        metrics = self.repository.latest_metrics(user_id)
        if metrics is not None:
            return metrics
        return BodyMetrics(
            user_id=user.id,
            day=today,
            weight_kg=user.weight_kg,
            body_fat_fraction=user.body_fat_fraction,
        )

    def log(
        self,
        user_id: UUID,
        day: date,
        weight_kg: float,
        body_fat_fraction: float | None = None,
    ) -> BodyMetrics:
        """Record the day's measurement.

        An omitted body fat keeps whatever the day already had. The profile
        follows the newest measurement only.
        """
        self.user_service.get_user(user_id)
        existing = self.repository.get_metrics(user_id, day)
        if body_fat_fraction is None and existing is not None:
            body_fat_fraction = existing.body_fat_fraction
        metrics = BodyMetrics(
            user_id=user_id,
            day=day,
            weight_kg=weight_kg,
            body_fat_fraction=body_fat_fraction,
        )
        self.repository.upsert_metrics(metrics)
        self._sync_profile(
            user_id,
            day,
            {"weight_kg": weight_kg, "body_fat_fraction": body_fat_fraction},
        )
        _logger.info("Logged body metrics for user %s on %s", user_id, day)
        return metrics

    def update(
        self, user_id: UUID, day: date, changes: dict[str, object]
    ) -> BodyMetrics:
        """Correct a stored measurement.

        Editing the newest measurement also updates the profile.
        """
        existing = self.get(user_id, day)
        # body fat may be cleared, weight may not
        updates = {
            key: value
            for key, value in changes.items()
            if key in _EDITABLE_FIELDS
            and (value is not None or key == "body_fat_fraction")
        }
        if not updates:
            return existing
        updated = self.repository.update_metrics(user_id, day, updates)
        self._sync_profile(user_id, day, updates)
        return updated

    def delete(self, user_id: UUID, day: date) -> None:
        """Remove the measurement for day."""
        self.get(user_id, day)
        self.repository.delete_metrics(user_id, day)
        _logger.info("Deleted body metrics for user %s on %s", user_id, day)

    def trends(
        self, user_id: UUID, today: date, period: TrendPeriod = TrendPeriod.MONTH
    ) -> BodyMetricsTrends:
        """Return trend points, weekly averages and weekly rates for a period."""
        self.user_service.get_user(user_id)
        start = period_start(today, period)
        metrics = self.repository.list_metrics(user_id, start=start, end=today)
        return body_metrics_trends(metrics)

    def _sync_profile(
        self, user_id: UUID, day: date, changes: dict[str, object]
    ) -> None:
        latest = self.repository.latest_metrics(user_id)
        if latest is not None and latest.day == day:
            self.user_service.apply_measurement(user_id, changes)
