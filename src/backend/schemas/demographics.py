"""
Demographic profile schemas.

All fields are optional - users choose what to share. Profiles are only
used to filter responses and to frame personalized comparisons.
"""

from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field


class AgeRangeEnum(str, Enum):
    """Fixed age brackets."""

    AGE_18_24 = "18-24"
    AGE_25_34 = "25-34"
    AGE_35_44 = "35-44"
    AGE_45_54 = "45-54"
    AGE_55_64 = "55-64"
    AGE_65_PLUS = "65+"


class GenderEnum(str, Enum):
    """Fixed gender categories."""

    MALE = "male"
    FEMALE = "female"
    NON_BINARY = "non-binary"
    PREFER_NOT_TO_SAY = "prefer-not-to-say"


class RegionEnum(str, Enum):
    """Fixed world regions."""

    NORTH_AMERICA = "North America"
    EUROPE = "Europe"
    ASIA = "Asia"
    SOUTH_AMERICA = "South America"
    AFRICA = "Africa"
    AUSTRALIA = "Australia"


class OccupationEnum(str, Enum):
    """Fixed occupation groups."""

    TECHNOLOGY = "Technology"
    EDUCATION = "Education"
    HEALTHCARE = "Healthcare"
    FINANCE = "Finance"
    RETAIL = "Retail"
    OTHER = "Other"


class DemographicProfile(BaseModel):
    """A user's self-reported demographics."""

    age_range: Optional[AgeRangeEnum] = Field(None, description="Age bracket, e.g. '25-34'")
    gender: Optional[GenderEnum] = None
    region: Optional[RegionEnum] = None
    occupation: Optional[OccupationEnum] = None

    model_config = {"use_enum_values": True}

    def is_complete(self) -> bool:
        """Age range, gender and region are required for demographic framing."""
        return bool(self.age_range and self.gender and self.region)


class DemographicFilters(DemographicProfile):
    """Response filter; every field that is set must match."""

    def is_empty(self) -> bool:
        return not any((self.age_range, self.gender, self.region, self.occupation))

    def as_dict(self) -> dict[str, str]:
        """Only the fields that are set."""
        return self.model_dump(exclude_none=True)
