"""Exercise domain models."""

from dataclasses import dataclass
from datetime import date
from uuid import UUID

from carb_cycle.domain.cycle import CarbDayType


@dataclass(frozen=True)
class ExercisePlan:
    """Training guidance for a carb day."""

    carb_day_type: CarbDayType
    strength_training_recommended: bool
    max_cardio_sessions: int
    cardio_notes: str
    tips: tuple[str, ...]


@dataclass(frozen=True)
class ExerciseRecord:
    """Exercise the user logged for a day."""

    user_id: UUID
    day: date
    strength_completed: bool = False
    cardio_session_1: bool = False
    cardio_session_2: bool = False
    cardio_minutes: int | None = None
    notes: str | None = None


@dataclass(frozen=True)
class ExerciseCompletionStatus:
    """Progress of a logged record against the day's plan."""

    strength_completed: bool
    cardio_sessions_completed: int
    max_cardio_sessions: int
    total_cardio_minutes: int
    is_complete: bool
