"""
Insight schemas.

Insights are short generated statements. Icon and color are semantic tags;
presentation decides how to render them.
"""

from enum import Enum
from typing import Any, Optional

from pydantic import BaseModel


class InsightIcon(str, Enum):
    """Semantic icon tag, valued with the emoji the web client shows."""

    ROCKET = "🚀"
    YES = "✅"
    NO = "❌"
    CHART = "📊"
    TROPHY = "🏆"
    TREND_DOWN = "📉"
    TREND_UP = "📈"
    PEOPLE = "👥"
    STAR = "🌟"
    TARGET = "🎯"
    GEM = "💎"
    AGE = "👶"
    MAN = "👨"
    WOMAN = "👩"
    PERSON = "👤"
    GLOBE = "🌍"


class InsightColor(str, Enum):
    """Semantic color tag."""

    BLUE = "blue"
    GREEN = "green"
    RED = "red"
    GRAY = "gray"
    YELLOW = "yellow"
    PURPLE = "purple"
    INDIGO = "indigo"
    PINK = "pink"
    EMERALD = "emerald"


class GlobalInsight(BaseModel):
    """A statement about the whole response population."""

    text: str
    icon: InsightIcon
    color: InsightColor


class PersonalizedInsight(GlobalInsight):
    """A statement relating one user's answer to the population."""

    is_comparison: bool = True


class PersonalizedInsightRequest(BaseModel):
    """Request body for personalized insights."""

    value: Any = None
    user_id: Optional[str] = None
