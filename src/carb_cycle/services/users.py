"""User and body-metric business logic."""

import logging
from dataclasses import dataclass
from datetime import date
from typing import Protocol
from uuid import UUID

from carb_cycle.domain.errors import UserNotFoundError
from carb_cycle.domain.models import BodyMetrics, UserRecord

_logger = logging.getLogger(__name__)

_PROFILE_FIELDS = {"gender", "height_cm", "weight_kg", "body_fat_fraction"}


class UserRepository(Protocol):
    """Persistence interface for user data."""

    def get_user(self, user_id: UUID) -> UserRecord | None:
        """Return a user by id, if present."""

    def create_user(self, payload: dict[str, object]) -> UserRecord:
        """Create and return a new user record."""

    def update_user(self, user_id: UUID, payload: dict[str, object]) -> UserRecord:
        """Update profile fields and return the user."""


class BodyMetricsRepository(Protocol):
    """Persistence interface for dated body measurements."""

    def upsert_metrics(self, metrics: BodyMetrics) -> None:
        """Store the measurement for a user and day, replacing any existing one."""

    def first_metrics_since(self, user_id: UUID, day: date) -> BodyMetrics | None:
        """Return the earliest measurement on or after day."""

    def latest_metrics(self, user_id: UUID) -> BodyMetrics | None:
        """Return the most recent measurement."""

    def get_metrics(self, user_id: UUID, day: date) -> BodyMetrics | None:
        """Return the measurement for a user and day, if present."""

    def list_metrics(
        self,
        user_id: UUID,
        start: date | None = None,
        end: date | None = None,
        limit: int | None = None,
    ) -> list[BodyMetrics]:
        """Return measurements oldest first; a limit keeps the newest rows."""

    def update_metrics(
        self, user_id: UUID, day: date, changes: dict[str, object]
    ) -> BodyMetrics:
        """Update columns of an existing measurement and return it."""

    def delete_metrics(self, user_id: UUID, day: date) -> None:
        """Remove the measurement for a user and day."""


@dataclass
class UserService:
    """Application service for user profiles."""

    repository: UserRepository
    metrics_repository: BodyMetricsRepository

    def get_user(self, user_id: UUID) -> UserRecord:
        """Return the user or raise UserNotFoundError."""
        user = self.repository.get_user(user_id)
        if user is None:
            raise UserNotFoundError(str(user_id))
        return user

    def create_user(self, payload: dict[str, object], day: date) -> UserRecord:
        """Create a user and record their starting body metrics."""
        user = self.repository.create_user(payload)
        self._record_metrics(user, day)
        _logger.info("Created user %s", user.id)
        return user

    def update_profile(
        self, user_id: UUID, payload: dict[str, object], day: date
    ) -> UserRecord:
        """Update body data; a weight or body-fat change is logged for day."""
        current = self.get_user(user_id)
        changes = {
            key: value
            for key, value in payload.items()
            if key in _PROFILE_FIELDS and value is not None
        }
        if not changes:
            return current
        updated = self.repository.update_user(user_id, changes)
        if "weight_kg" in changes or "body_fat_fraction" in changes:
            self._record_metrics(updated, day)
        return updated

    def apply_measurement(
        self, user_id: UUID, changes: dict[str, object]
    ) -> UserRecord:
        """Copy a logged weight or body fat onto the profile without logging it."""
        current = {
            key: value
            for key, value in changes.items()
            if key in {"weight_kg", "body_fat_fraction"} and value is not None
        }
        if not current:
            return self.get_user(user_id)
        return self.repository.update_user(user_id, current)

    def _record_metrics(self, user: UserRecord, day: date) -> None:
        self.metrics_repository.upsert_metrics(
            BodyMetrics(
                user_id=user.id,
                day=day,
                weight_kg=user.weight_kg,
                body_fat_fraction=user.body_fat_fraction,
            )
        )
