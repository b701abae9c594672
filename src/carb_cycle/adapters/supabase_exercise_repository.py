"""Supabase repository for exercise records."""

from dataclasses import dataclass
from datetime import UTC, date, datetime
from uuid import UUID

from supabase import Client

from carb_cycle.domain.exercise import ExerciseRecord
from carb_cycle.services.exercise import ExerciseRepository

_COLUMNS = (
    "user_id, date, strength_completed, cardio_session_1, cardio_session_2, "
    "cardio_minutes, notes"
)


def _to_record(row: dict[str, object]) -> ExerciseRecord:
    minutes = row.get("cardio_minutes")
    return ExerciseRecord(
        user_id=UUID(row["user_id"]),
        day=date.fromisoformat(row["date"]),
        strength_completed=bool(row.get("strength_completed")),
        cardio_session_1=bool(row.get("cardio_session_1")),
        cardio_session_2=bool(row.get("cardio_session_2")),
        cardio_minutes=int(minutes) if minutes is not None else None,
        notes=row.get("notes"),
    )


@dataclass
class SupabaseExerciseRepository(ExerciseRepository):
    """Supabase implementation for exercise logs, one per user and day."""

    client: Client

    def get_record(self, user_id: UUID, day: date) -> ExerciseRecord | None:
        """Return the record for a user and day, if present."""
        response = (
            self.client.table("exercise_records")
            .select(_COLUMNS)
            .eq("user_id", str(user_id))
            .eq("date", day.isoformat())
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        return _to_record(response.data[0])

    def upsert_record(
        self, user_id: UUID, day: date, updates: dict[str, object]
    ) -> ExerciseRecord:
        """Write only the given columns for the user's day."""
        response = (
            self.client.table("exercise_records")
            .upsert(
                {
                    "user_id": str(user_id),
                    "date": day.isoformat(),
                    **updates,
                    "updated_at": datetime.now(tz=UTC).isoformat(),
                },
                on_conflict="user_id,date",
            )
            .execute()
        )
        if not response.data:
            raise RuntimeError("Failed to save exercise record")
        return _to_record(response.data[0])
