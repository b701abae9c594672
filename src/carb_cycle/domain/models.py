"""Domain models for users and body composition."""

from dataclasses import dataclass
from datetime import date
from enum import StrEnum
from uuid import UUID


class Gender(StrEnum):
    """Biological sex used by the protein brackets."""

    MALE = "MALE"
    FEMALE = "FEMALE"


@dataclass(frozen=True)
class UserBodyProfile:
    """Snapshot of body data used for a single calculation."""

    weight_kg: float
    body_fat_fraction: float
    gender: Gender


@dataclass(frozen=True)
class UserRecord:
    """Represents a user stored in the database."""

    id: UUID
    username: str
    birth_year: int
    gender: Gender
    weight_kg: float
    body_fat_fraction: float
    height_cm: float | None = None

    @property
    def profile(self) -> UserBodyProfile:
        return UserBodyProfile(
            weight_kg=self.weight_kg,
            body_fat_fraction=self.body_fat_fraction,
            gender=self.gender,
        )


@dataclass(frozen=True)
class BodyMetrics:
    """A dated body measurement."""

    user_id: UUID
    day: date
    weight_kg: float
    body_fat_fraction: float | None = None
