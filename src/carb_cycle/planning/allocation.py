"""Rounding and allocation helpers shared by the planners."""

import math


def round_half_up(value: float) -> int:
    """Round to the nearest integer, halves away from zero."""
    rounded = math.floor(abs(value) + 0.5)
    return int(rounded if value >= 0 else -rounded)


def round_to_places(value: float, places: int) -> float:
    """Round to a number of decimal places, halves away from zero."""
    scale = 10**places
    return round_half_up(value * scale) / scale


def round_to_tenth(value: float) -> float:
    return round_to_places(value, 1)


def distribute_evenly(total: int, buckets: int) -> list[int]:
    """Split total into buckets whose sum is exactly total.

    The first ``buckets - 1`` entries each get ``total / buckets`` rounded;
    the last entry takes whatever is left.
    """
    if buckets < 1:
        raise ValueError("buckets must be at least 1")
    share = round_half_up(total / buckets)
    return [share] * (buckets - 1) + [total - share * (buckets - 1)]
