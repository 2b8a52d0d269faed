"""
Rounding, tie-break and bucketing policies.

These rules are part of the observable output of statistics and insights
and are kept here, named, so every caller applies the same one:

- percentages round half up (2.5 -> 3), never banker's rounding;
- the median of an even-sized list is the lower of the two middle values;
- the mode is the first label holding the maximum count;
- the minority share of a two-way split is the complement of the rounded
  majority share, so the pair always sums to 100.
"""

import math
import re
from typing import Optional, Sequence


# =============================================================================
# Rounding
# =============================================================================


def round_half_up(value: float) -> int:
    """Round to the nearest integer, halves towards +infinity."""
    return math.floor(value + 0.5)


def round_to_tenth(value: float) -> float:
    """Round half up to one decimal place."""
    return round_half_up(value * 10) / 10


def percentage_of(part: int, total: int) -> int:
    """Integer percentage of ``part`` in ``total`` (0 when total is 0)."""
    if total <= 0:
        return 0
    return round_half_up(part / total * 100)


def complement_percentage(percentage: int) -> int:
    """The other side of a two-way split."""
    return 100 - percentage


# =============================================================================
# Central tendency and tie-breaks
# =============================================================================


def lower_median(sorted_values: Sequence[float]) -> float:
    """Middle element of an ascending list, lower-middle for even sizes."""
    if not sorted_values:
        raise ValueError("median of an empty sequence")
    return sorted_values[(len(sorted_values) - 1) // 2]


def first_max_index(values: Sequence[int]) -> int:
    """Index of the first occurrence of the maximum."""
    best = 0
    for index, value in enumerate(values):
        if value > values[best]:
            best = index
    return best


def first_min_index(values: Sequence[int]) -> int:
    """Index of the first occurrence of the minimum."""
    best = 0
    for index, value in enumerate(values):
        if value < values[best]:
            best = index
    return best


# =============================================================================
# Numeric buckets
# =============================================================================

_BUCKET_LABEL = re.compile(r"^\s*(-?\d+(?:\.\d+)?)-(-?\d+(?:\.\d+)?)\s*$")


def bucket_count_for(sample_size: int, min_buckets: int = 5, max_buckets: int = 10) -> int:
    """Square-root rule, clamped to ``[min_buckets, max_buckets]``."""
    return min(max_buckets, max(min_buckets, math.ceil(math.sqrt(sample_size))))


def bucket_width_for(low: float, high: float, bucket_count: int) -> float:
    """Width of each bucket; 1 when the range is empty."""
    width = (high - low) / bucket_count
    return width or 1.0


def bucket_index_for(value: float, low: float, width: float, bucket_count: int) -> int:
    """
    Bucket holding ``value``.

    Buckets are half-open except the last, which also takes ``high``.
    Values outside the configured range are clamped to the edge buckets.
    """
    index = math.floor((value - low) / width)
    return min(max(index, 0), bucket_count - 1)


def format_bucket_label(start: float, end: float) -> str:
    return f"{start:.1f}-{end:.1f}"


def parse_bucket_label(label: object) -> Optional[tuple[float, float]]:
    """Recover ``(start, end)`` from a ``"start-end"`` label."""
    match = _BUCKET_LABEL.match(str(label))
    if not match:
        return None
    return float(match.group(1)), float(match.group(2))


# =============================================================================
# Display
# =============================================================================


def format_number(value: float) -> str:
    """Render a number without a trailing ``.0`` (5.0 -> "5", 5.5 -> "5.5")."""
    if float(value).is_integer():
        return str(int(value))
    return str(value)


def format_count(value: int) -> str:
    """Thousands-separated integer (1800 -> "1,800")."""
    return f"{value:,}"
