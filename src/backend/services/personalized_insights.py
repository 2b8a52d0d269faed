"""
Personalized insights.

Statements that place one user's answer relative to everyone else's, shown
after the user has answered. Users with a complete demographic profile get
age and gender framing; everyone else gets majority/minority framing.

Subgroup shares are NOT queried per subgroup. They come from a
``SubgroupShareEstimator``; the default ``JitterEstimator`` produces an
illustrative figure near the user's own percentage. Swap the estimator to
use real subgroup statistics.
"""

import random
from typing import Any, Optional, Protocol, runtime_checkable

import structlog

from core.config import settings
from schemas.demographics import DemographicProfile
from schemas.insight import InsightColor, InsightIcon, PersonalizedInsight
from schemas.poll import NUMERIC_POLL_TYPES, Poll, PollTypeEnum
from schemas.stats import Label, PollStats
from services.coercion import coerce_boolean, coerce_number, normalize_choice
from services.policies import (
    bucket_index_for,
    bucket_width_for,
    first_max_index,
    format_number,
    parse_bucket_label,
    percentage_of,
    round_half_up,
)

logger = structlog.get_logger(__name__)


# =============================================================================
# Subgroup share estimation
# =============================================================================


@runtime_checkable
class SubgroupShareEstimator(Protocol):
    """Estimates the share of a demographic subgroup that answered like the user."""

    def estimate_subgroup_share(self, dimension: str, group: str, user_percentage: int) -> int: ...


class JitterEstimator:
    """
    Illustrative subgroup shares.

    Age and gender shares are the user's own percentage plus uniform jitter,
    clamped to a plausible band. Region shares are drawn from 30-70
    regardless of the user's answer. Pass a seeded ``random.Random`` for
    reproducible output.
    """

    # dimension -> (total jitter spread, lower clamp, upper clamp)
    BANDS = {
        "age_range": (30.0, 10.0, 90.0),
        "gender": (25.0, 15.0, 85.0),
    }
    REGION_RANGE = (30.0, 70.0)

    def __init__(self, rng: Optional[random.Random] = None):
        self.rng = rng or random.Random()

    @classmethod
    def from_settings(cls) -> "JitterEstimator":
        return cls(random.Random(settings.SUBGROUP_JITTER_SEED))

    def estimate_subgroup_share(self, dimension: str, group: str, user_percentage: int) -> int:
        if dimension == "region":
            low, high = self.REGION_RANGE
            return round_half_up(self.rng.random() * (high - low) + low)

        spread, low, high = self.BANDS[dimension]
        jittered = user_percentage + (self.rng.random() - 0.5) * spread
        return round_half_up(max(low, min(high, jittered)))


# =============================================================================
# Demographic comparisons
# =============================================================================

_GENDER_GROUPS = {
    "male": ("men", InsightIcon.MAN),
    "female": ("women", InsightIcon.WOMAN),
    "non-binary": ("non-binary people", InsightIcon.PERSON),
    "prefer-not-to-say": ("people who prefer not to say", InsightIcon.PERSON),
}


def age_group_insight(
    age_range: str, user_percentage: int, estimator: SubgroupShareEstimator
) -> PersonalizedInsight:
    share = estimator.estimate_subgroup_share("age_range", age_range, user_percentage)
    return PersonalizedInsight(
        text=f"Among people aged {age_range}, {share}% chose the same answer.",
        icon=InsightIcon.AGE,
        color=InsightColor.INDIGO,
    )


def gender_insight(
    gender: str, user_percentage: int, estimator: SubgroupShareEstimator
) -> PersonalizedInsight:
    group, icon = _GENDER_GROUPS.get(gender, ("women", InsightIcon.PERSON))
    share = estimator.estimate_subgroup_share("gender", gender, user_percentage)
    return PersonalizedInsight(
        text=f"Among {group}, {share}% gave the same response.",
        icon=icon,
        color=InsightColor.PINK,
    )


def region_insight(
    region: str, user_percentage: int, estimator: SubgroupShareEstimator
) -> PersonalizedInsight:
    """Regional comparison. Not part of the default assembly."""
    share = estimator.estimate_subgroup_share("region", region, user_percentage)
    return PersonalizedInsight(
        text=f"People from {region} were {share}% more likely to agree with you.",
        icon=InsightIcon.GLOBE,
        color=InsightColor.EMERALD,
    )


# =============================================================================
# Locating the user's answer
# =============================================================================


def find_bucket_index(labels: list[Label], number: float) -> int:
    """
    Index of the ``"start-end"`` bucket holding ``number``, or -1.

    Labels are rounded to one decimal, so only the outer edges are read from
    them; the inner edges are rebuilt with the aggregator's equal widths.
    """
    ranges = [parse_bucket_label(label) for label in labels]
    if not ranges or any(bounds is None for bounds in ranges):
        return -1

    low = ranges[0][0]
    bucket_count = len(ranges)
    width = bucket_width_for(low, ranges[-1][1], bucket_count)
    return bucket_index_for(number, low, width, bucket_count)


def locate_user_answer(poll: Poll, stats: PollStats, user_value: Any) -> tuple[str, int]:
    """
    Return the user's answer label and its integer share of all responses.

    The share is 0 when the answer is not found in the distribution.
    """
    labels = stats.distribution.labels
    values = stats.distribution.values
    poll_type = poll.poll_type
    index = -1

    if poll_type is PollTypeEnum.BOOLEAN:
        label = "Yes" if coerce_boolean(user_value) is True else "No"
        index = next(
            (i for i, lbl in enumerate(labels) if isinstance(lbl, str) and lbl.lower() == label.lower()),
            -1,
        )
    elif poll_type is PollTypeEnum.CHOICE:
        key = normalize_choice(user_value)
        label = poll.option_labels().get(key, key)
        index = next((i for i, lbl in enumerate(labels) if str(lbl) == label), -1)
    elif poll_type in NUMERIC_POLL_TYPES:
        number = coerce_number(user_value)
        if number is None:
            label = str(user_value)
        else:
            label = format_number(number)
            index = find_bucket_index(labels, number)
    else:
        label = str(user_value)

    if index < 0:
        return label, 0
    return label, percentage_of(values[index], stats.count)


# =============================================================================
# Assembly
# =============================================================================


def generate_personalized_insights(
    poll: Poll,
    stats: PollStats,
    user_value: Any,
    demographics: Optional[DemographicProfile] = None,
    estimator: Optional[SubgroupShareEstimator] = None,
    min_responses: Optional[int] = None,
    max_insights: Optional[int] = None,
) -> list[PersonalizedInsight]:
    """
    Compare one user's answer to the whole population.

    Args:
        poll: Poll configuration
        stats: Unfiltered stats for the poll
        user_value: The user's own answer; None yields no insights
        demographics: The user's profile, if any
        estimator: Subgroup share strategy (defaults to ``JitterEstimator``)

    Returns:
        At most ``max_insights`` insights in fixed order
    """
    if user_value is None:
        return []

    if min_responses is None:
        min_responses = settings.PERSONAL_INSIGHT_MIN_RESPONSES
    if max_insights is None:
        max_insights = settings.MAX_INSIGHTS

    if stats.count < min_responses:
        return [
            PersonalizedInsight(
                text=f"You're among the first {stats.count} people to answer this question!",
                icon=InsightIcon.STAR,
                color=InsightColor.YELLOW,
                is_comparison=False,
            )
        ]

    label, percentage = locate_user_answer(poll, stats, user_value)

    if demographics is not None and demographics.is_complete():
        insights = _demographic_insights(
            label, percentage, demographics, estimator or JitterEstimator.from_settings()
        )
    else:
        insights = _population_insights(label, percentage, stats)

    logger.debug(
        "personalized_insights_generated",
        poll_id=poll.id,
        user_percentage=percentage,
        with_demographics=demographics is not None and demographics.is_complete(),
        generated=len(insights),
    )
    return insights[:max_insights]


def _demographic_insights(
    label: str,
    percentage: int,
    demographics: DemographicProfile,
    estimator: SubgroupShareEstimator,
) -> list[PersonalizedInsight]:
    return [
        PersonalizedInsight(
            text=f'You\'re in the {percentage}% who answered "{label}".',
            icon=InsightIcon.TARGET,
            color=InsightColor.GREEN if percentage > 50 else InsightColor.BLUE,
        ),
        age_group_insight(demographics.age_range, percentage, estimator),
        gender_insight(demographics.gender, percentage, estimator),
    ]


def _population_insights(label: str, percentage: int, stats: PollStats) -> list[PersonalizedInsight]:
    insights = [
        PersonalizedInsight(
            text=f'You answered "{label}". So did {percentage}% of respondents.',
            icon=InsightIcon.CHART,
            color=InsightColor.BLUE,
        )
    ]

    labels = stats.distribution.labels
    values = stats.distribution.values
    if values:
        top = first_max_index(values)
        if str(labels[top]) != label:
            insights.append(
                PersonalizedInsight(
                    text=(
                        f'The most popular answer was "{labels[top]}" '
                        f"({percentage_of(values[top], stats.count)}%)."
                    ),
                    icon=InsightIcon.TROPHY,
                    color=InsightColor.YELLOW,
                )
            )

    if percentage < settings.MINORITY_THRESHOLD_PCT:
        insights.append(
            PersonalizedInsight(
                text=f"You're in the minority — only {percentage}% answered like you.",
                icon=InsightIcon.GEM,
                color=InsightColor.PURPLE,
            )
        )
    elif percentage > settings.MAJORITY_THRESHOLD_PCT:
        insights.append(
            PersonalizedInsight(
                text=f"You're with the majority — {percentage}% of people agree with you.",
                icon=InsightIcon.PEOPLE,
                color=InsightColor.GREEN,
            )
        )
    return insights
