"""Domain models for the 112113 carb cycle."""

from dataclasses import dataclass
from enum import StrEnum


class CarbDayType(StrEnum):
    """Carbohydrate level of a day in the cycle."""

    LOW = "LOW"
    MEDIUM = "MEDIUM"
    HIGH = "HIGH"


class PlanStatus(StrEnum):
    """Lifecycle state of a cycle plan."""

    ACTIVE = "ACTIVE"
    COMPLETED = "COMPLETED"
    CANCELLED = "CANCELLED"


@dataclass(frozen=True)
class CycleDayPosition:
    """Where a calendar date falls relative to a cycle start."""

    day_number: int
    cycle_number: int
    position_in_cycle: int
    carb_day_type: CarbDayType
