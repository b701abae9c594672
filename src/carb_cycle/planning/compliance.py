"""First-month diet restriction streaks."""

from collections.abc import Iterable

from carb_cycle.domain.compliance import ComplianceRecord, RestrictionStatus

FIRST_MONTH_DAYS = 30


def is_first_month(day_number: int) -> bool:
    """Return True while restrictions are tracked."""
    return day_number <= FIRST_MONTH_DAYS


def compliance_streak(records: Iterable[ComplianceRecord | None]) -> int:
    """Count consecutive compliant days, most recent first.

    ``records`` runs from today backward; ``None`` marks a day without a
    record. Counting stops at the first missing or non-compliant day.
    """
    streak = 0
    for record in records:
        if record is None or not record.is_compliant:
            break
        streak += 1
    return streak


def restriction_status(
    current_day: int,
    today: ComplianceRecord | None,
    records: Iterable[ComplianceRecord | None],
) -> RestrictionStatus:
    """Summarize check-ins for the current day of a plan.

    The streak is only evaluated inside the first month.
    """
    first_month = is_first_month(current_day)
    return RestrictionStatus(
        current_day=current_day,
        remaining_days=max(0, FIRST_MONTH_DAYS - current_day),
        is_first_month=first_month,
        today=today or ComplianceRecord(),
        streak_days=compliance_streak(records) if first_month else 0,
    )
