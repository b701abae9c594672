"""Supabase repository for cycle summaries."""

from dataclasses import dataclass
from datetime import date
from uuid import UUID

from supabase import Client

from carb_cycle.domain.plans import CycleSummary
from carb_cycle.services.summary import SummaryRepository

_COLUMNS = (
    "cycle_plan_id, total_days, days_followed, days_not_followed, "
    "not_followed_dates, start_weight_kg, end_weight_kg, start_body_fat, "
    "end_body_fat, notes"
)


def _optional_float(value: object) -> float | None:
    return float(value) if value is not None else None


def _to_summary(row: dict[str, object]) -> CycleSummary:
    return CycleSummary(
        cycle_plan_id=UUID(row["cycle_plan_id"]),
        total_days=int(row["total_days"]),
        days_followed=int(row["days_followed"]),
        days_not_followed=int(row["days_not_followed"]),
        not_followed_dates=[
            date.fromisoformat(value) for value in row.get("not_followed_dates") or []
        ],
        start_weight_kg=float(row["start_weight_kg"]),
        end_weight_kg=_optional_float(row.get("end_weight_kg")),
        start_body_fat=_optional_float(row.get("start_body_fat")),
        end_body_fat=_optional_float(row.get("end_body_fat")),
        notes=row.get("notes"),
    )


@dataclass
class SupabaseSummaryRepository(SummaryRepository):
    """Supabase implementation for cycle summaries, one per plan."""

    client: Client

    def get_summary(self, plan_id: UUID) -> CycleSummary | None:
        """Return the stored summary for a plan, if present."""
        response = (
            self.client.table("cycle_summaries")
            .select(_COLUMNS)
            .eq("cycle_plan_id", str(plan_id))
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        return _to_summary(response.data[0])

    def upsert_summary(self, summary: CycleSummary) -> CycleSummary:
        """Create or replace the summary row for its plan."""
        response = (
            self.client.table("cycle_summaries")
            .upsert(
                {
                    "cycle_plan_id": str(summary.cycle_plan_id),
                    "total_days": summary.total_days,
                    "days_followed": summary.days_followed,
                    "days_not_followed": summary.days_not_followed,
                    "not_followed_dates": [
                        value.isoformat() for value in summary.not_followed_dates
                    ],
                    "start_weight_kg": summary.start_weight_kg,
                    "end_weight_kg": summary.end_weight_kg,
                    "start_body_fat": summary.start_body_fat,
                    "end_body_fat": summary.end_body_fat,
                    "notes": summary.notes,
                },
                on_conflict="cycle_plan_id",
            )
            .execute()
        )
        if not response.data:
            raise RuntimeError("Failed to save cycle summary")
        return _to_summary(response.data[0])

    def list_summaries(self, plan_ids: list[UUID]) -> list[CycleSummary]:
        """Return the stored summaries for any of the given plans."""
        if not plan_ids:
            return []
        response = (
            self.client.table("cycle_summaries")
            .select(_COLUMNS)
            .in_("cycle_plan_id", [str(plan_id) for plan_id in plan_ids])
            .execute()
        )
        return [_to_summary(row) for row in response.data or []]
