"""Tests for first-month restriction streaks."""

from carb_cycle.domain.compliance import ComplianceRecord
from carb_cycle.planning.compliance import (
    compliance_streak,
    is_first_month,
    restriction_status,
)

COMPLIANT = ComplianceRecord(no_fruit=True, no_sugar=True, no_white_flour=True)
SLIPPED = ComplianceRecord(no_fruit=True, no_sugar=False, no_white_flour=True)


def test_streak_counts_until_first_non_compliant_day() -> None:
    assert compliance_streak([COMPLIANT, COMPLIANT, SLIPPED, COMPLIANT]) == 2


def test_missing_day_breaks_streak() -> None:
    assert compliance_streak([COMPLIANT, None, COMPLIANT]) == 1
    assert compliance_streak([None, COMPLIANT]) == 0
    assert compliance_streak([]) == 0


def test_first_month_boundary() -> None:
    assert is_first_month(1)
    assert is_first_month(30)
    assert not is_first_month(31)


def test_restriction_status_inside_first_month() -> None:
    status = restriction_status(10, COMPLIANT, [COMPLIANT, COMPLIANT, SLIPPED])

    assert status.current_day == 10
    assert status.remaining_days == 20
    assert status.is_first_month
    assert status.today == COMPLIANT
    assert status.streak_days == 2


def test_restriction_status_after_first_month() -> None:
    status = restriction_status(35, None, [COMPLIANT] * 35)

    assert status.remaining_days == 0
    assert not status.is_first_month
    assert status.streak_days == 0
    assert status.today == ComplianceRecord()
    assert not status.today.is_compliant
