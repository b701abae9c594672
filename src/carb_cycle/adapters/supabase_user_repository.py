"""Supabase-backed user repository."""

from dataclasses import dataclass
from datetime import UTC, datetime
from uuid import UUID

from supabase import Client

from carb_cycle.domain.models import Gender, UserRecord
from carb_cycle.services.users import UserRepository

_COLUMNS = "id, username, birth_year, gender, weight_kg, body_fat_fraction, height_cm"


def _to_user(row: dict[str, object]) -> UserRecord:
    height = row.get("height_cm")
    return UserRecord(
        id=UUID(row["id"]),
        username=row["username"],
        birth_year=int(row["birth_year"]),
        gender=Gender(row["gender"]),
        weight_kg=float(row["weight_kg"]),
        body_fat_fraction=float(row["body_fat_fraction"]),
        height_cm=float(height) if height is not None else None,
    )


def _serialize(payload: dict[str, object]) -> dict[str, object]:
    return {
        key: value.value if isinstance(value, Gender) else value
        for key, value in payload.items()
    }


@dataclass
class SupabaseUserRepository(UserRepository):
    """Supabase implementation for user persistence."""

    client: Client

    def get_user(self, user_id: UUID) -> UserRecord | None:
        """Return a user by id, if present."""
        response = (
            self.client.table("users")
            .select(_COLUMNS)
            .eq("id", str(user_id))
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        return _to_user(response.data[0])

    def create_user(self, payload: dict[str, object]) -> UserRecord:
        """Create a new user row and return it."""
        response = self.client.table("users").insert(_serialize(payload)).execute()
        if not response.data:
            raise RuntimeError("Failed to create user in Supabase")
        return _to_user(response.data[0])

    def update_user(self, user_id: UUID, payload: dict[str, object]) -> UserRecord:
        """Update profile columns and return the stored row."""
        response = (
            self.client.table("users")
            .update(
                {
                    **_serialize(payload),
                    "updated_at": datetime.now(tz=UTC).isoformat(),
                }
            )
            .eq("id", str(user_id))
            .execute()
        )
        if not response.data:
            raise RuntimeError("Failed to update user in Supabase")
        return _to_user(response.data[0])
