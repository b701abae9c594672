"""Summaries, weekly averages and rates of change for body measurements."""

from collections.abc import Sequence
from datetime import date, timedelta
from statistics import fmean

from carb_cycle.domain.metrics import (
    BodyMetricsTrends,
    MetricsSummary,
    TrendDirection,
    TrendPeriod,
    TrendRates,
    WeeklyAverage,
)
from carb_cycle.domain.models import BodyMetrics
from carb_cycle.planning.allocation import round_to_places

PERIOD_DAYS = {TrendPeriod.WEEK: 7, TrendPeriod.MONTH: 30}

# per-week change below these counts as stable
WEIGHT_STABLE_KG = 0.1
BODY_FAT_STABLE = 0.001

MIN_TREND_DAYS = 7


def period_start(today: date, period: TrendPeriod) -> date | None:
    """Return the first date a period covers; None means no lower bound."""
    days = PERIOD_DAYS.get(period)
    if days is None:
        return None
    return today - timedelta(days=days)


def week_start(day: date) -> date:
    """Return the Monday of day's week."""
    return day - timedelta(days=day.weekday())


def metrics_summary(metrics: Sequence[BodyMetrics]) -> MetricsSummary | None:
    """Summarize change from the first to the last measurement."""
    if not metrics:
        return None
    first, last = metrics[0], metrics[-1]
    body_fat_change = None
    if first.body_fat_fraction is not None and last.body_fat_fraction is not None:
        body_fat_change = round_to_places(
            last.body_fat_fraction - first.body_fat_fraction, 3
        )
    return MetricsSummary(
        total_records=len(metrics),
        start_weight_kg=first.weight_kg,
        current_weight_kg=last.weight_kg,
        weight_change_kg=round_to_places(last.weight_kg - first.weight_kg, 1),
        start_body_fat=first.body_fat_fraction,
        current_body_fat=last.body_fat_fraction,
        body_fat_change=body_fat_change,
    )


def weekly_averages(metrics: Sequence[BodyMetrics]) -> list[WeeklyAverage]:
    """Average measurements per Monday-based week, oldest week first."""
    weeks: dict[date, list[BodyMetrics]] = {}
    for measurement in metrics:
        weeks.setdefault(week_start(measurement.day), []).append(measurement)

    averages = []
    for start in sorted(weeks):
        rows = weeks[start]
        body_fats = [
            row.body_fat_fraction for row in rows if row.body_fat_fraction is not None
        ]
        averages.append(
            WeeklyAverage(
                week_start=start,
                avg_weight_kg=round_to_places(fmean(row.weight_kg for row in rows), 1),
                avg_body_fat=(
                    round_to_places(fmean(body_fats), 3) if body_fats else None
                ),
            )
        )
    return averages


def trend_direction(rate: float, stable_within: float) -> TrendDirection:
    if rate < -stable_within:
        return TrendDirection.DECREASING
    if rate > stable_within:
        return TrendDirection.INCREASING
    return TrendDirection.STABLE


def trend_rates(
    days_between: int, averages: Sequence[WeeklyAverage]
) -> TrendRates | None:
    """Return per-week change across the weekly averages.

    Needs at least a week between the first and last measurement and two
    distinct weeks.
    """
    if days_between < MIN_TREND_DAYS or len(averages) < 2:
        return None
    first, last = averages[0], averages[-1]
    intervals = len(averages) - 1
    weight_rate = (last.avg_weight_kg - first.avg_weight_kg) / intervals
    body_fat_rate = None
    if first.avg_body_fat is not None and last.avg_body_fat is not None:
        body_fat_rate = (last.avg_body_fat - first.avg_body_fat) / intervals
    return TrendRates(
        weight_per_week=round_to_places(weight_rate, 2),
        weight_direction=trend_direction(weight_rate, WEIGHT_STABLE_KG),
        body_fat_per_week=(
            round_to_places(body_fat_rate, 4) if body_fat_rate is not None else None
        ),
        body_fat_direction=(
            trend_direction(body_fat_rate, BODY_FAT_STABLE)
            if body_fat_rate is not None
            else None
        ),
    )


def body_metrics_trends(metrics: Sequence[BodyMetrics]) -> BodyMetricsTrends:
    """Build the trend view for measurements given in date order."""
    if not metrics:
        return BodyMetricsTrends(
            points=[], weekly_averages=[], summary=None, days_covered=0, rates=None
        )
    days_between = (metrics[-1].day - metrics[0].day).days
    averages = weekly_averages(metrics)
    return BodyMetricsTrends(
        points=list(metrics),
        weekly_averages=averages,
        summary=metrics_summary(metrics),
        days_covered=days_between + 1,
        rates=trend_rates(days_between, averages),
    )
