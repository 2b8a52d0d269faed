"""Schemas module initialization."""

from schemas.demographics import DemographicFilters, DemographicProfile
from schemas.insight import GlobalInsight, PersonalizedInsight
from schemas.poll import Poll, PollOption, PollTypeEnum
from schemas.response import PollResponseRecord, ResponseCreate
from schemas.stats import Distribution, PollStats

__all__ = [
    "DemographicFilters",
    "DemographicProfile",
    "Distribution",
    "GlobalInsight",
    "PersonalizedInsight",
    "Poll",
    "PollOption",
    "PollResponseRecord",
    "PollStats",
    "PollTypeEnum",
    "ResponseCreate",
]
