"""Supabase repository for cycle plans and daily meal plans."""

from dataclasses import dataclass
from datetime import UTC, date, datetime
from uuid import UUID

from supabase import Client

from carb_cycle.domain.cycle import CarbDayType, PlanStatus
from carb_cycle.domain.nutrition import ProteinSource
from carb_cycle.domain.plans import CyclePlanRecord, DailyMealPlanRecord
from carb_cycle.services.plans import PlanRepository

_PLAN_COLUMNS = "id, user_id, start_date, end_date, status"
_MEAL_PLAN_COLUMNS = (
    "id, cycle_plan_id, date, day_number, carb_day_type, oatmeal_grams, "
    "rice_grams_lunch, rice_grams_dinner, "
    "protein_grams_meal_1, protein_source_meal_1, "
    "protein_grams_meal_2, protein_source_meal_2, "
    "protein_grams_meal_3, protein_source_meal_3, "
    "protein_grams_meal_4, protein_source_meal_4, "
    "olive_oil_ml, allow_whole_egg, water_ml"
)
_MEALS = (1, 2, 3, 4)


def _to_plan(row: dict[str, object]) -> CyclePlanRecord:
    end_date = row.get("end_date")
    return CyclePlanRecord(
        id=UUID(row["id"]),
        user_id=UUID(row["user_id"]),
        start_date=date.fromisoformat(row["start_date"]),
        status=PlanStatus(row["status"]),
        end_date=date.fromisoformat(end_date) if end_date else None,
    )


def _to_meal_plan(row: dict[str, object]) -> DailyMealPlanRecord:
    proteins: dict[str, object] = {}
    for meal in _MEALS:
        proteins[f"protein_grams_meal_{meal}"] = int(row[f"protein_grams_meal_{meal}"])
        proteins[f"protein_source_meal_{meal}"] = ProteinSource(
            row[f"protein_source_meal_{meal}"]
        )
    return DailyMealPlanRecord(
        id=UUID(row["id"]),
        cycle_plan_id=UUID(row["cycle_plan_id"]),
        day=date.fromisoformat(row["date"]),
        day_number=int(row["day_number"]),
        carb_day_type=CarbDayType(row["carb_day_type"]),
        oatmeal_grams=int(row["oatmeal_grams"]),
        rice_grams_lunch=int(row["rice_grams_lunch"]),
        rice_grams_dinner=int(row["rice_grams_dinner"]),
        olive_oil_ml=int(row["olive_oil_ml"]),
        allow_whole_egg=bool(row["allow_whole_egg"]),
        water_ml=int(row["water_ml"]),
        **proteins,
    )


def _meal_plan_row(record: DailyMealPlanRecord) -> dict[str, object]:
    row: dict[str, object] = {
        "id": str(record.id),
        "cycle_plan_id": str(record.cycle_plan_id),
        "date": record.day.isoformat(),
        "day_number": record.day_number,
        "carb_day_type": record.carb_day_type.value,
        "oatmeal_grams": record.oatmeal_grams,
        "rice_grams_lunch": record.rice_grams_lunch,
        "rice_grams_dinner": record.rice_grams_dinner,
        "olive_oil_ml": record.olive_oil_ml,
        "allow_whole_egg": record.allow_whole_egg,
        "water_ml": record.water_ml,
    }
    for meal in _MEALS:
        row[f"protein_grams_meal_{meal}"] = getattr(
            record, f"protein_grams_meal_{meal}"
        )
        row[f"protein_source_meal_{meal}"] = getattr(
            record, f"protein_source_meal_{meal}"
        ).value
    return row


@dataclass
class SupabasePlanRepository(PlanRepository):
    """Supabase implementation for cycle plans."""

    client: Client

    def create_plan(self, user_id: UUID, start_date: date) -> CyclePlanRecord:
        """Create an active plan row and return it."""
        response = (
            self.client.table("cycle_plans")
            .insert(
                {
                    "user_id": str(user_id),
                    "start_date": start_date.isoformat(),
                    "status": PlanStatus.ACTIVE.value,
                }
            )
            .execute()
        )
        if not response.data:
            raise RuntimeError("Failed to create cycle plan")
        return _to_plan(response.data[0])

    def get_plan(self, plan_id: UUID) -> CyclePlanRecord | None:
        """Return a plan by id, if present."""
        response = (
            self.client.table("cycle_plans")
            .select(_PLAN_COLUMNS)
            .eq("id", str(plan_id))
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        return _to_plan(response.data[0])

    def get_active_plan(self, user_id: UUID) -> CyclePlanRecord | None:
        """Return the most recent active plan for a user."""
        response = (
            self.client.table("cycle_plans")
            .select(_PLAN_COLUMNS)
            .eq("user_id", str(user_id))
            .eq("status", PlanStatus.ACTIVE.value)
            .order("created_at", desc=True)
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        return _to_plan(response.data[0])

    def list_plans(self, user_id: UUID) -> list[CyclePlanRecord]:
        """Return all plans for a user, newest first."""
        response = (
            self.client.table("cycle_plans")
            .select(_PLAN_COLUMNS)
            .eq("user_id", str(user_id))
            .order("created_at", desc=True)
            .execute()
        )
        return [_to_plan(row) for row in response.data or []]

    def cancel_active_plans(self, user_id: UUID, end_date: date) -> int:
        """Cancel every active plan for a user and return how many changed."""
        response = (
            self.client.table("cycle_plans")
            .update(
                {
                    "status": PlanStatus.CANCELLED.value,
                    "end_date": end_date.isoformat(),
                    "updated_at": datetime.now(tz=UTC).isoformat(),
                }
            )
            .eq("user_id", str(user_id))
            .eq("status", PlanStatus.ACTIVE.value)
            .execute()
        )
        return len(response.data or [])

    def create_daily_meal_plans(self, meal_plans: list[DailyMealPlanRecord]) -> None:
        """Insert a plan's daily meal plans in one request."""
        if not meal_plans:
            return
        response = (
            self.client.table("daily_meal_plans")
            .insert([_meal_plan_row(record) for record in meal_plans])
            .execute()
        )
        if not response.data:
            raise RuntimeError("Failed to create daily meal plans")

    def list_daily_meal_plans(self, plan_id: UUID) -> list[DailyMealPlanRecord]:
        """Return a plan's meal plans ordered by date."""
        response = (
            self.client.table("daily_meal_plans")
            .select(_MEAL_PLAN_COLUMNS)
            .eq("cycle_plan_id", str(plan_id))
            .order("date")
            .execute()
        )
        return [_to_meal_plan(row) for row in response.data or []]

    def get_daily_meal_plan(
        self, plan_id: UUID, day: date
    ) -> DailyMealPlanRecord | None:
        """Return the meal plan for a date, if present."""
        response = (
            self.client.table("daily_meal_plans")
            .select(_MEAL_PLAN_COLUMNS)
            .eq("cycle_plan_id", str(plan_id))
            .eq("date", day.isoformat())
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        return _to_meal_plan(response.data[0])

    def update_plan(self, plan_id: UUID, changes: dict[str, object]) -> CyclePlanRecord:
        """Update a plan's status or end date and return it."""
        payload: dict[str, object] = {"updated_at": datetime.now(tz=UTC).isoformat()}
        if "status" in changes:
            payload["status"] = PlanStatus(changes["status"]).value
        if "end_date" in changes:
            end_date = changes["end_date"]
            payload["end_date"] = end_date.isoformat() if end_date else None
        response = (
            self.client.table("cycle_plans")
            .update(payload)
            .eq("id", str(plan_id))
            .execute()
        )
        if not response.data:
            raise RuntimeError("Failed to update cycle plan")
        return _to_plan(response.data[0])
