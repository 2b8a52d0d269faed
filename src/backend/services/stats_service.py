"""
Poll statistics aggregation.

Turns the raw answers of one poll into a ``PollStats`` summary: response
count, a presentation-ordered distribution, and the central-tendency
measures that make sense for the poll type. Everything here is pure and
deterministic; callers fetch the responses and decide what to cache.
"""

from collections.abc import Iterable, Mapping, Sequence
from typing import Any, Optional

import structlog

from core.config import settings
from schemas.demographics import DemographicFilters
from schemas.poll import NUMERIC_POLL_TYPES, Poll, PollTypeEnum
from schemas.response import PollResponseRecord
from schemas.stats import Distribution, PollStats
from services.coercion import coerce_boolean, coerce_number, normalize_choice
from services.policies import (
    bucket_count_for,
    bucket_index_for,
    bucket_width_for,
    first_max_index,
    format_bucket_label,
    lower_median,
)

logger = structlog.get_logger(__name__)

BOOLEAN_LABELS = ("Yes", "No")


def response_value(response: Any) -> Any:
    """The answer carried by a record, a row mapping, or a bare value."""
    if isinstance(response, PollResponseRecord):
        return response.value
    if isinstance(response, Mapping):
        return response.get("value")
    return response


def _snapshot_field(response: Any, field: str) -> Any:
    if isinstance(response, Mapping):
        return response.get(field)
    return getattr(response, field, None)


def apply_demographic_filters(
    responses: Iterable[Any],
    filters: Optional[DemographicFilters],
) -> list[Any]:
    """
    Keep the responses whose demographic snapshot matches every set filter.

    Bare values carry no snapshot and never match a non-empty filter.
    """
    records = list(responses)
    if filters is None or filters.is_empty():
        return records
    wanted = filters.as_dict()
    return [
        record
        for record in records
        if all(_snapshot_field(record, field) == value for field, value in wanted.items())
    ]


def compute_stats(
    poll: Poll,
    responses: Sequence[Any],
    filters: Optional[DemographicFilters] = None,
) -> PollStats:
    """
    Aggregate a poll's responses.

    Args:
        poll: Poll configuration (type, range, options)
        responses: Response records, row mappings or bare values
        filters: Optional demographic filter, applied to records that carry
            a demographic snapshot

    Returns:
        PollStats; ``count == 0`` with an empty distribution when there is
        nothing to aggregate
    """
    responses = apply_demographic_filters(responses, filters)

    count = len(responses)
    if count == 0:
        return PollStats.empty()

    values = [response_value(r) for r in responses]
    poll_type = poll.poll_type

    if poll_type is PollTypeEnum.BOOLEAN:
        stats = _boolean_stats(values, count)
    elif poll_type in NUMERIC_POLL_TYPES:
        stats = _numeric_stats(values, count, poll.min_value, poll.max_value)
    elif poll_type is PollTypeEnum.CHOICE:
        stats = _choice_stats(values, count, poll.option_labels())
    else:
        logger.warning("unknown_poll_type", poll_id=poll.id, poll_type=poll.type)
        stats = PollStats.empty(count)

    logger.debug(
        "stats_computed",
        poll_id=poll.id,
        poll_type=poll.type,
        count=stats.count,
        buckets=len(stats.distribution.labels),
    )
    return stats


def _boolean_stats(values: list[Any], count: int) -> PollStats:
    yes = no = 0
    for value in values:
        answer = coerce_boolean(value)
        if answer is True:
            yes += 1
        elif answer is False:
            no += 1

    return PollStats(
        count=count,
        distribution=Distribution(labels=list(BOOLEAN_LABELS), values=[yes, no]),
    )


def _numeric_stats(
    values: list[Any],
    count: int,
    min_value: Optional[float],
    max_value: Optional[float],
) -> PollStats:
    numbers = [n for n in (coerce_number(v) for v in values) if n is not None]
    if not numbers:
        return PollStats.empty()

    dropped = count - len(numbers)
    if dropped:
        logger.debug("non_numeric_responses_dropped", dropped=dropped)

    ordered = sorted(numbers)
    mean = sum(numbers) / len(numbers)
    median = lower_median(ordered)

    low = min_value if min_value is not None else ordered[0]
    high = max_value if max_value is not None else ordered[-1]

    bucket_count = bucket_count_for(len(numbers), settings.MIN_BUCKETS, settings.MAX_BUCKETS)
    width = bucket_width_for(low, high, bucket_count)

    buckets = [0] * bucket_count
    for number in numbers:
        buckets[bucket_index_for(number, low, width, bucket_count)] += 1

    labels = [
        format_bucket_label(low + i * width, low + (i + 1) * width)
        for i in range(bucket_count)
    ]

    return PollStats(
        count=count,
        distribution=Distribution(labels=labels, values=buckets),
        mean=mean,
        median=median,
    )


def _choice_stats(values: list[Any], count: int, option_labels: dict[str, str]) -> PollStats:
    # dict preserves first-occurrence order
    counts: dict[str, int] = {}
    for value in values:
        key = normalize_choice(value)
        counts[key] = counts.get(key, 0) + 1

    if not counts:
        return PollStats.empty(count)

    labels = [option_labels.get(key, key) for key in counts]
    tallies = list(counts.values())

    return PollStats(
        count=count,
        distribution=Distribution(labels=labels, values=tallies),
        mode=labels[first_max_index(tallies)],
    )
