"""
Global insights.

Short statements about how the whole community answered a poll, shown in
discovery views before the user has answered.
"""

from typing import Optional

import structlog

from core.config import settings
from schemas.insight import GlobalInsight, InsightColor, InsightIcon
from schemas.poll import NUMERIC_POLL_TYPES, Poll, PollTypeEnum
from schemas.stats import PollStats
from services.policies import (
    complement_percentage,
    first_max_index,
    first_min_index,
    format_count,
    format_number,
    percentage_of,
    round_to_tenth,
)

logger = structlog.get_logger(__name__)


def generate_global_insights(
    poll: Poll,
    stats: PollStats,
    min_responses: Optional[int] = None,
    max_insights: Optional[int] = None,
) -> list[GlobalInsight]:
    """
    Generate up to ``max_insights`` statements about the poll's responses.

    Below ``min_responses`` a single participation prompt is returned
    instead; small samples are not reported as facts.
    """
    if min_responses is None:
        min_responses = settings.GLOBAL_INSIGHT_MIN_RESPONSES
    if max_insights is None:
        max_insights = settings.MAX_INSIGHTS

    if stats.count < min_responses:
        return [
            GlobalInsight(
                text=f"Only {stats.count} responses so far — be among the first to answer!",
                icon=InsightIcon.ROCKET,
                color=InsightColor.BLUE,
            )
        ]

    poll_type = poll.poll_type
    if poll_type is PollTypeEnum.BOOLEAN:
        insights = _boolean_insights(stats)
    elif poll_type is PollTypeEnum.CHOICE:
        insights = _choice_insights(stats)
    elif poll_type in NUMERIC_POLL_TYPES:
        insights = _numeric_insights(stats)
    else:
        insights = []

    if stats.count >= settings.RESPONSE_VOLUME_THRESHOLD:
        insights.append(_volume_insight(stats.count))

    logger.debug("global_insights_generated", poll_id=poll.id, generated=len(insights))
    return insights[:max_insights]


def _label_index(labels: list, wanted: str) -> int:
    for index, label in enumerate(labels):
        if isinstance(label, str) and label.lower() == wanted.lower():
            return index
    return -1


def _boolean_insights(stats: PollStats) -> list[GlobalInsight]:
    labels = stats.distribution.labels
    values = stats.distribution.values
    yes_index = _label_index(labels, "Yes")
    no_index = _label_index(labels, "No")
    if yes_index < 0 or no_index < 0:
        return []

    total = values[yes_index] + values[no_index]
    if total == 0:
        return []

    yes_pct = percentage_of(values[yes_index], total)
    no_pct = complement_percentage(yes_pct)
    # An exact 50/50 split reports "Yes" as the majority
    if yes_pct >= 50:
        majority, majority_pct, minority, minority_pct = "Yes", yes_pct, "No", no_pct
    else:
        majority, majority_pct, minority, minority_pct = "No", no_pct, "Yes", yes_pct

    insights = [
        GlobalInsight(
            text=f'{majority_pct}% of all respondents said "{majority}".',
            icon=InsightIcon.YES if majority == "Yes" else InsightIcon.NO,
            color=InsightColor.GREEN if majority == "Yes" else InsightColor.RED,
        )
    ]
    if minority_pct > 0:
        insights.append(
            GlobalInsight(
                text=f'"{minority}" was chosen by {minority_pct}% of respondents.',
                icon=InsightIcon.CHART,
                color=InsightColor.GRAY,
            )
        )
    return insights


def _choice_insights(stats: PollStats) -> list[GlobalInsight]:
    labels = stats.distribution.labels
    values = stats.distribution.values
    if not labels:
        return []

    top = first_max_index(values)
    insights = [
        GlobalInsight(
            text=f'"{labels[top]}" was the most popular choice ({percentage_of(values[top], stats.count)}%).',
            icon=InsightIcon.TROPHY,
            color=InsightColor.YELLOW,
        )
    ]

    if len(values) > 2:
        least = first_min_index(values)
        if values[least] > 0:
            insights.append(
                GlobalInsight(
                    text=(
                        f'"{labels[least]}" was the least selected option '
                        f"({percentage_of(values[least], stats.count)}%)."
                    ),
                    icon=InsightIcon.TREND_DOWN,
                    color=InsightColor.GRAY,
                )
            )
    return insights


def _numeric_insights(stats: PollStats) -> list[GlobalInsight]:
    insights = []
    if stats.mean is not None:
        insights.append(
            GlobalInsight(
                text=f"The average response was {format_number(round_to_tenth(stats.mean))}.",
                icon=InsightIcon.CHART,
                color=InsightColor.BLUE,
            )
        )
    if stats.median is not None:
        insights.append(
            GlobalInsight(
                text=f"Half of respondents answered {format_number(round_to_tenth(stats.median))} or lower.",
                icon=InsightIcon.TREND_UP,
                color=InsightColor.PURPLE,
            )
        )
    return insights


def _volume_insight(count: int) -> GlobalInsight:
    floored = count // 100 * 100
    return GlobalInsight(
        text=f"Over {format_count(floored)} people have shared their thoughts.",
        icon=InsightIcon.PEOPLE,
        color=InsightColor.INDIGO,
    )
