"""Body-metric history and trend models."""

from dataclasses import dataclass
from datetime import date
from enum import StrEnum

from carb_cycle.domain.models import BodyMetrics


class TrendPeriod(StrEnum):
    """How far back a trend looks."""

    WEEK = "week"
    MONTH = "month"
    ALL = "all"


class TrendDirection(StrEnum):
    DECREASING = "decreasing"
    STABLE = "stable"
    INCREASING = "increasing"


@dataclass(frozen=True)
class MetricsSummary:
    """First-to-last change across a run of measurements."""

    total_records: int
    start_weight_kg: float
    current_weight_kg: float
    weight_change_kg: float
    start_body_fat: float | None
    current_body_fat: float | None
    body_fat_change: float | None


@dataclass(frozen=True)
class BodyMetricsHistory:
    """Measurements in date order with their summary."""

    metrics: list[BodyMetrics]
    summary: MetricsSummary | None


@dataclass(frozen=True)
class WeeklyAverage:
    """Mean measurements for a Monday-based week."""

    week_start: date
    avg_weight_kg: float
    avg_body_fat: float | None


@dataclass(frozen=True)
class TrendRates:
    """Average change per week between the first and last weeks."""

    weight_per_week: float
    weight_direction: TrendDirection
    body_fat_per_week: float | None
    body_fat_direction: TrendDirection | None


@dataclass(frozen=True)
class BodyMetricsTrends:
    points: list[BodyMetrics]
    weekly_averages: list[WeeklyAverage]
    summary: MetricsSummary | None
    days_covered: int
    rates: TrendRates | None
