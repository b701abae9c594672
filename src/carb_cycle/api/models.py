"""Pydantic models for API request bodies."""

from datetime import date

from pydantic import BaseModel, Field

from carb_cycle.domain.cycle import PlanStatus
from carb_cycle.domain.models import Gender


class CreateUserRequest(BaseModel):
    """New user with starting body data."""

    username: str = Field(min_length=1)
    birth_year: int = Field(ge=1900, le=2100)
    gender: Gender
    weight_kg: float = Field(gt=0)
    body_fat_fraction: float = Field(ge=0, lt=1)
    height_cm: float | None = Field(default=None, gt=0)


class UpdateProfileRequest(BaseModel):
    """Partial update of body data."""

    gender: Gender | None = None
    weight_kg: float | None = Field(default=None, gt=0)
    body_fat_fraction: float | None = Field(default=None, ge=0, lt=1)
    height_cm: float | None = Field(default=None, gt=0)


class StartPlanRequest(BaseModel):
    """Start a new cycle plan; omitted values use today and the default length."""

    start_date: date | None = None
    cycle_days: int | None = Field(default=None, ge=1)


class IntakeItemRequest(BaseModel):
    """Check or uncheck one prescribed item."""

    item: str
    completed: bool


class CompleteDayRequest(BaseModel):
    """Whether the day's plan was followed."""

    followed_plan: bool
    notes: str | None = None


class ExerciseUpdateRequest(BaseModel):
    """Partial update of the day's exercise log."""

    strength_completed: bool | None = None
    cardio_session_1: bool | None = None
    cardio_session_2: bool | None = None
    cardio_minutes: int | None = Field(default=None, ge=0)
    notes: str | None = None


class RestrictionCheckInRequest(BaseModel):
    """Confirmations for the first-month restrictions."""

    no_fruit: bool | None = None
    no_sugar: bool | None = None
    no_white_flour: bool | None = None


class SummaryRequest(BaseModel):
    """Optional notes stored with a cycle summary."""

    notes: str | None = None


class LogBodyMetricsRequest(BaseModel):
    """A day's weight and optional body fat; the day defaults to today."""

    day: date | None = None
    weight_kg: float = Field(gt=0, le=300)
    body_fat_fraction: float | None = Field(default=None, ge=0, lt=1)


class UpdateBodyMetricsRequest(BaseModel):
    """Correction to a logged measurement."""

    weight_kg: float | None = Field(default=None, gt=0, le=300)
    body_fat_fraction: float | None = Field(default=None, ge=0, lt=1)


class UpdatePlanRequest(BaseModel):
    """Status or end-date change for a plan."""

    status: PlanStatus | None = None
    end_date: date | None = None
