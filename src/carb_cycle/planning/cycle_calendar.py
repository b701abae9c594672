"""Calendar arithmetic for the fixed 112113 carb cycle.

Days are counted on calendar-date granularity: datetimes are reduced to their
date before any arithmetic, so two moments on the same day always map to the
same day number.
"""

from datetime import date, datetime, timedelta

from carb_cycle.domain.cycle import CarbDayType, CycleDayPosition

CYCLE_PATTERN: tuple[CarbDayType, ...] = (
    CarbDayType.LOW,
    CarbDayType.LOW,
    CarbDayType.MEDIUM,
    CarbDayType.LOW,
    CarbDayType.LOW,
    CarbDayType.HIGH,
)
CYCLE_LENGTH = len(CYCLE_PATTERN)


def _as_date(value: date | datetime) -> date:
    if isinstance(value, datetime):
        return value.date()
    return value


def day_number_in_cycle(cycle_start: date | datetime, target: date | datetime) -> int:
    """Return the 1-based day number of target counted from cycle_start.

    Callers must not pass a target before cycle_start.
    """
    return (_as_date(target) - _as_date(cycle_start)).days + 1


def carb_day_type(day_number: int) -> CarbDayType:
    """Return the carb day type for a 1-based day number."""
    return CYCLE_PATTERN[(day_number - 1) % CYCLE_LENGTH]


def position_in_cycle(day_number: int) -> int:
    """Return the 1..6 position of a day number within its cycle."""
    return (day_number - 1) % CYCLE_LENGTH + 1


def cycle_number(cycle_start: date | datetime, target: date | datetime) -> int:
    """Return the 1-based cycle that target falls in."""
    return (day_number_in_cycle(cycle_start, target) - 1) // CYCLE_LENGTH + 1


def cycle_start_date_for_cycle(plan_start: date | datetime, number: int) -> date:
    """Return the first date of the given 1-based cycle."""
    return _as_date(plan_start) + timedelta(days=(number - 1) * CYCLE_LENGTH)


def carb_day_type_for_date(
    cycle_start: date | datetime, target: date | datetime
) -> CarbDayType:
    """Return the carb day type of target within a plan."""
    return carb_day_type(day_number_in_cycle(cycle_start, target))


def cycle_day_position(
    cycle_start: date | datetime, target: date | datetime
) -> CycleDayPosition:
    """Bundle day number, cycle, position and carb type for a date."""
    day_number = day_number_in_cycle(cycle_start, target)
    return CycleDayPosition(
        day_number=day_number,
        cycle_number=(day_number - 1) // CYCLE_LENGTH + 1,
        position_in_cycle=position_in_cycle(day_number),
        carb_day_type=carb_day_type(day_number),
    )


def date_range(start: date | datetime, days: int) -> list[date]:
    """Return `days` consecutive dates beginning at start."""
    first = _as_date(start)
    return [first + timedelta(days=offset) for offset in range(days)]
