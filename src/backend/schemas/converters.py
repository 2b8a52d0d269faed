"""
Schema converter functions.

Centralized helpers for converting raw store rows (snake_case dicts) into
Pydantic schemas. These are the single source of truth for row-to-schema
conversion.
"""

from collections.abc import Iterable, Mapping
from typing import Any, Optional

from schemas.demographics import DemographicProfile
from schemas.poll import Poll, PollOption
from schemas.response import PollResponseRecord

_DEMOGRAPHIC_FIELDS = ("age_range", "gender", "region", "occupation")


def _options_from_row(row: Mapping[str, Any]) -> Optional[list[PollOption]]:
    # Joined selects return "poll_options"; denormalized rows use "options"
    raw_options = row.get("poll_options") or row.get("options")
    if not raw_options:
        return None
    return [PollOption(id=str(opt["id"]), text=opt["text"]) for opt in raw_options]


def poll_row_to_schema(row: Mapping[str, Any]) -> Poll:
    """
    Convert a stored poll row to a Poll schema.

    A stored ``min_value``/``max_value`` of 0 is kept; only missing or null
    bounds become None.
    """
    return Poll(
        id=str(row["id"]),
        type=row["type"],
        question=row.get("question") or "",
        description=row.get("description") or None,
        category=row.get("category") or None,
        creator_id=row.get("creator_id"),
        created_at=row.get("created_at"),
        upvotes=row.get("upvotes") or 0,
        response_count=row.get("response_count") or 0,
        is_active=row.get("is_active", True),
        options=_options_from_row(row),
        min_value=row.get("min_value"),
        max_value=row.get("max_value"),
        demographic_filters=row.get("demographic_filters") or [],
    )


def poll_rows_to_schemas(rows: Iterable[Mapping[str, Any]]) -> list[Poll]:
    return [poll_row_to_schema(row) for row in rows]


def response_row_to_schema(row: Mapping[str, Any]) -> PollResponseRecord:
    """Convert a stored response row, keeping only the anonymous fields."""
    return PollResponseRecord(
        value=row.get("value"),
        created_at=row.get("created_at"),
        **{field: row.get(field) or None for field in _DEMOGRAPHIC_FIELDS},
    )


def profile_row_to_demographics(row: Optional[Mapping[str, Any]]) -> Optional[DemographicProfile]:
    """
    Convert a profile row to a DemographicProfile.

    Returns None when there is no row. Empty strings count as unset.
    """
    if row is None:
        return None
    return DemographicProfile(**{field: row.get(field) or None for field in _DEMOGRAPHIC_FIELDS})
