"""Statistics and formatting helpers for community health reporting.

This module provides utilities for:
- Computing linear-interpolation percentiles from pre-sorted samples.
- Reducing response latencies to a median or a diluted average.
- Computing percentages with an explicit ``None`` result for empty totals.
- Formatting second-based durations as ``HH:MM:SS``.
"""

from __future__ import annotations

import math
from typing import Iterable, List, Optional


def calculate_percentile(sorted_values: List[float], p: float) -> Optional[float]:
    """Calculate a percentile using linear interpolation.

    The input sequence is expected to already be sorted in ascending order.
    - Empty input returns ``None``.
    - ``p <= 0`` returns the first value.
    - ``p >= 100`` returns the last value.
    - Otherwise, percentile is linearly interpolated between adjacent ranks.

    Args:
        sorted_values: Sorted numeric samples.
        p: Percentile in the inclusive range ``[0, 100]``.

    Returns:
        Percentile value as ``float`` or ``None`` when input is empty.

    Raises:
        ValueError: If ``p`` is outside ``[0, 100]``.
    """
    if not 0 <= p <= 100:
        raise ValueError("Percentile 'p' must be in the range [0, 100].")

    if not sorted_values:
        return None

    if p <= 0:
        return sorted_values[0]

    if p >= 100:
        return sorted_values[-1]

    position = (len(sorted_values) - 1) * (p / 100.0)
    lower_index = math.floor(position)
    upper_index = math.ceil(position)

    if lower_index == upper_index:
        return sorted_values[int(position)]

    lower_value = sorted_values[lower_index]
    upper_value = sorted_values[upper_index]
    return lower_value + (upper_value - lower_value) * (position - lower_index)


def _legacy_median(sorted_values: List[float]) -> float:
    # Returns the middle element only when half the length is odd; otherwise
    # averages the two elements around it, whatever the length parity.
    middle = len(sorted_values) // 2
    if middle % 2 != 0:
        return sorted_values[middle]
    return (sorted_values[middle - 1] + sorted_values[middle]) / 2


def median(*sample_sets: Iterable[float], legacy: bool = False) -> Optional[float]:
    """Return the median of all samples across ``sample_sets``.

    The conventional median is used by default: the middle element for an odd
    number of samples, the mean of the two central elements otherwise. Pass
    ``legacy=True`` to reproduce the historical report rule.

    Returns ``None`` when there are no samples.
    """
    values = sorted(value for samples in sample_sets for value in samples)
    if not values:
        return None

    if legacy:
        return _legacy_median(values)

    return calculate_percentile(values, 50)


def average(samples: Iterable[float], item_count: int) -> Optional[float]:
    """Average latency over ``item_count`` items.

    ``item_count`` is the number of items presented to the reducer, including
    items that produced no sample, so missing responses pull the average
    towards zero.

    Returns ``None`` when ``item_count`` is ``0``.
    """
    if item_count == 0:
        return None
    return sum(samples) / item_count


def percentage(part: int, total: int) -> Optional[float]:
    """Return ``part / total * 100``, or ``None`` when ``total`` is ``0``."""
    if total == 0:
        return None
    return (part / total) * 100


def format_duration(seconds: Optional[float]) -> str:
    """Format seconds as ``HH:MM:SS``.

    Hours are not wrapped at 24, and negative durations keep a leading ``-``.

    Returns:
        ``"n/a"`` when ``seconds`` is ``None``; otherwise a rounded
        ``HH:MM:SS`` string.
    """
    if seconds is None:
        return "n/a"

    total_seconds = int(round(seconds))
    sign = "-" if total_seconds < 0 else ""
    total_seconds = abs(total_seconds)
    hours = total_seconds // 3600
    minutes = (total_seconds % 3600) // 60
    remaining_seconds = total_seconds % 60
    return f"{sign}{hours:02d}:{minutes:02d}:{remaining_seconds:02d}"


def format_percentage(value: Optional[float]) -> str:
    if value is None:
        return "n/a"
    return f"{value:.2f}%"
