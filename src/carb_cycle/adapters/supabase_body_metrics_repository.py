"""Supabase repository for dated body measurements."""

from dataclasses import dataclass
from datetime import date
from uuid import UUID

from supabase import Client

from carb_cycle.domain.models import BodyMetrics
from carb_cycle.services.users import BodyMetricsRepository

_COLUMNS = "user_id, date, weight_kg, body_fat_fraction"


def _to_metrics(row: dict[str, object]) -> BodyMetrics:
    body_fat = row.get("body_fat_fraction")
    return BodyMetrics(
        user_id=UUID(row["user_id"]),
        day=date.fromisoformat(row["date"]),
        weight_kg=float(row["weight_kg"]),
        body_fat_fraction=float(body_fat) if body_fat is not None else None,
    )


@dataclass
class SupabaseBodyMetricsRepository(BodyMetricsRepository):
    """Supabase implementation for body metrics, one row per user and day."""

    client: Client

    def upsert_metrics(self, metrics: BodyMetrics) -> None:
        """Store the measurement, replacing the same day's row."""
        self.client.table("body_metrics").upsert(
            {
                "user_id": str(metrics.user_id),
                "date": metrics.day.isoformat(),
                "weight_kg": metrics.weight_kg,
                "body_fat_fraction": metrics.body_fat_fraction,
            },
            on_conflict="user_id,date",
        ).execute()

    def first_metrics_since(self, user_id: UUID, day: date) -> BodyMetrics | None:
        """Return the earliest measurement on or after day."""
        response = (
            self.client.table("body_metrics")
            .select(_COLUMNS)
            .eq("user_id", str(user_id))
            .gte("date", day.isoformat())
            .order("date")
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        return _to_metrics(response.data[0])

    def latest_metrics(self, user_id: UUID) -> BodyMetrics | None:
        """Return the most recent measurement."""
        response = (
            self.client.table("body_metrics")
            .select(_COLUMNS)
            .eq("user_id", str(user_id))
            .order("date", desc=True)
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        return _to_metrics(response.data[0])

    def get_metrics(self, user_id: UUID, day: date) -> BodyMetrics | None:
        """Return the measurement for a user and day, if present."""
        response = (
            self.client.table("body_metrics")
            .select(_COLUMNS)
            .eq("user_id", str(user_id))
            .eq("date", day.isoformat())
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        return _to_metrics(response.data[0])

    def list_metrics(
        self,
        user_id: UUID,
        start: date | None = None,
        end: date | None = None,
        limit: int | None = None,
    ) -> list[BodyMetrics]:
        """Return measurements oldest first; a limit keeps the newest rows."""
        query = (
            self.client.table("body_metrics")
            .select(_COLUMNS)
            .eq("user_id", str(user_id))
        )
        if start is not None:
            query = query.gte("date", start.isoformat())
        if end is not None:
            query = query.lte("date", end.isoformat())
        query = query.order("date", desc=True)
        if limit is not None:
            query = query.limit(limit)
        response = query.execute()
        return [_to_metrics(row) for row in reversed(response.data or [])]

    def update_metrics(
        self, user_id: UUID, day: date, changes: dict[str, object]
    ) -> BodyMetrics:
        """Update the day's row and return it."""
        response = (
            self.client.table("body_metrics")
            .update(changes)
            .eq("user_id", str(user_id))
            .eq("date", day.isoformat())
            .execute()
        )
        if not response.data:
            raise RuntimeError("Failed to update body metrics")
        return _to_metrics(response.data[0])

    def delete_metrics(self, user_id: UUID, day: date) -> None:
        """Remove the day's row."""
        self.client.table("body_metrics").delete().eq("user_id", str(user_id)).eq(
            "date", day.isoformat()
        ).execute()
