"""Exercise guidance per carb day and completion against a logged record."""

from carb_cycle.domain.cycle import CarbDayType
from carb_cycle.domain.exercise import (
    ExerciseCompletionStatus,
    ExercisePlan,
    ExerciseRecord,
)

EXERCISE_TIPS: dict[CarbDayType, tuple[str, ...]] = {
    CarbDayType.LOW: (
        "Low carb days suit cardio work.",
        "Up to 2 cardio sessions are allowed.",
        "Keep rest between strength sets short.",
    ),
    CarbDayType.MEDIUM: (
        "Medium carb days suit strength training.",
        "Up to 2 cardio sessions are allowed.",
        "Drink enough water.",
    ),
    CarbDayType.HIGH: (
        "High carb days center on strength training.",
        "Optionally finish with 20 minutes of cardio, or skip it.",
        "Use the extra carbs to push training intensity.",
    ),
}

_CARDIO_NOTES: dict[CarbDayType, str] = {
    CarbDayType.LOW: "Low carb day: up to 2 cardio sessions, good for fat burning.",
    CarbDayType.MEDIUM: "Medium carb day: up to 2 cardio sessions.",
    CarbDayType.HIGH: (
        "High carb day: do strength training; optionally up to 20 minutes of "
        "cardio afterward, or skip cardio entirely."
    ),
}


def generate_exercise_plan(carb_day_type: CarbDayType) -> ExercisePlan:
    """Return the training structure recommended for a carb day."""
    return ExercisePlan(
        carb_day_type=carb_day_type,
        strength_training_recommended=True,
        max_cardio_sessions=1 if carb_day_type == CarbDayType.HIGH else 2,
        cardio_notes=_CARDIO_NOTES[carb_day_type],
        tips=EXERCISE_TIPS[carb_day_type],
    )


def completion_status(
    record: ExerciseRecord | None, plan: ExercisePlan
) -> ExerciseCompletionStatus:
    """Compare a logged record with the plan.

    A day is complete once strength training is done; cardio never affects it.
    """
    if record is None:
        return ExerciseCompletionStatus(
            strength_completed=False,
            cardio_sessions_completed=0,
            max_cardio_sessions=plan.max_cardio_sessions,
            total_cardio_minutes=0,
            is_complete=False,
        )
    sessions = int(record.cardio_session_1) + int(record.cardio_session_2)
    return ExerciseCompletionStatus(
        strength_completed=record.strength_completed,
        cardio_sessions_completed=sessions,
        max_cardio_sessions=plan.max_cardio_sessions,
        total_cardio_minutes=record.cardio_minutes or 0,
        is_complete=record.strength_completed,
    )


def can_add_more_cardio(current_sessions: int, max_sessions: int) -> bool:
    """Return True while another cardio session fits the plan."""
    return current_sessions < max_sessions
