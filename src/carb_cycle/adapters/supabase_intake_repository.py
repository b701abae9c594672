"""Supabase repository for daily intake records."""

from dataclasses import dataclass
from datetime import UTC, datetime
from uuid import UUID

from supabase import Client

from carb_cycle.domain.compliance import ComplianceRecord
from carb_cycle.domain.plans import INTAKE_ITEM_KEYS, IntakeRecord
from carb_cycle.services.intake import IntakeRepository

_RESTRICTION_KEYS = ("no_fruit", "no_sugar", "no_white_flour")
_COLUMNS = ", ".join(
    (
        "daily_meal_plan_id",
        *INTAKE_ITEM_KEYS,
        "followed_plan",
        "notes",
        *_RESTRICTION_KEYS,
    )
)


def _to_intake(row: dict[str, object]) -> IntakeRecord:
    return IntakeRecord(
        daily_meal_plan_id=UUID(row["daily_meal_plan_id"]),
        items={key: bool(row.get(key)) for key in INTAKE_ITEM_KEYS},
        followed_plan=bool(row.get("followed_plan")),
        notes=row.get("notes"),
        compliance=ComplianceRecord(
            no_fruit=bool(row.get("no_fruit")),
            no_sugar=bool(row.get("no_sugar")),
            no_white_flour=bool(row.get("no_white_flour")),
        ),
    )


@dataclass
class SupabaseIntakeRepository(IntakeRepository):
    """Supabase implementation for intake records, one per daily meal plan."""

    client: Client

    def get_intake(self, daily_meal_plan_id: UUID) -> IntakeRecord | None:
        """Return the intake record for a daily meal plan."""
        response = (
            self.client.table("intake_records")
            .select(_COLUMNS)
            .eq("daily_meal_plan_id", str(daily_meal_plan_id))
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        return _to_intake(response.data[0])

    def list_intake_for_plan(self, plan_id: UUID) -> list[IntakeRecord]:
        """Return all intake records under a cycle plan."""
        meal_plans = (
            self.client.table("daily_meal_plans")
            .select("id")
            .eq("cycle_plan_id", str(plan_id))
            .execute()
        )
        ids = [row["id"] for row in meal_plans.data or []]
        if not ids:
            return []
        response = (
            self.client.table("intake_records")
            .select(_COLUMNS)
            .in_("daily_meal_plan_id", ids)
            .execute()
        )
        return [_to_intake(row) for row in response.data or []]

    def upsert_intake(
        self, daily_meal_plan_id: UUID, updates: dict[str, object]
    ) -> IntakeRecord:
        """Write only the given columns; item flags are flattened to columns."""
        row: dict[str, object] = {"daily_meal_plan_id": str(daily_meal_plan_id)}
        for key, value in updates.items():
            if key == "items":
                row.update(value)
            else:
                row[key] = value
        row["updated_at"] = datetime.now(tz=UTC).isoformat()
        response = (
            self.client.table("intake_records")
            .upsert(row, on_conflict="daily_meal_plan_id")
            .execute()
        )
        if not response.data:
            raise RuntimeError("Failed to save intake record")
        return _to_intake(response.data[0])
