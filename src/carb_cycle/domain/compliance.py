"""Diet-restriction compliance models."""

from dataclasses import dataclass


@dataclass(frozen=True)
class ComplianceRecord:
    """The three daily restriction confirmations."""

    no_fruit: bool = False
    no_sugar: bool = False
    no_white_flour: bool = False

    @property
    def is_compliant(self) -> bool:
        return self.no_fruit and self.no_sugar and self.no_white_flour


@dataclass(frozen=True)
class RestrictionStatus:
    """Check-in state of the first-month restrictions."""

    current_day: int
    remaining_days: int
    is_first_month: bool
    today: ComplianceRecord
    streak_days: int
