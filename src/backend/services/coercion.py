"""
Response value coercion.

Stored answers are loosely typed: boolean polls may hold ``True`` or the
string ``"TRUE"``, numeric polls may hold numbers or numeric strings, and
choice answers may have been stored as quoted literals. Each poll kind gets
one explicit coercion function; the boolean and numeric ones return ``None``
for unusable input, so a bad record is skipped instead of failing the
whole aggregation.
"""

import math
from typing import Any, Optional

_QUOTES = "\"'"


def coerce_boolean(value: Any) -> Optional[bool]:
    """
    Interpret a boolean-poll answer.

    Accepts native booleans and the strings "true"/"false" in any case.
    """
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        lowered = value.lower()
        if lowered == "true":
            return True
        if lowered == "false":
            return False
    return None


def coerce_number(value: Any) -> Optional[float]:
    """
    Interpret a slider/numeric answer as a finite float.

    Booleans, None, empty strings, unparsable strings, NaN and infinities
    are rejected.
    """
    if isinstance(value, bool) or value is None:
        return None
    if isinstance(value, (int, float)):
        number = float(value)
    elif isinstance(value, str):
        text = value.strip()
        if not text:
            return None
        try:
            number = float(text)
        except ValueError:
            return None
    else:
        return None
    if not math.isfinite(number):
        return None
    return number


def normalize_choice(value: Any) -> str:
    """
    Reduce a choice answer to a bare option key.

    Non-string answers take their display form: ``None`` becomes "null",
    booleans are lowercase, integral floats drop ".0". One leading and one
    trailing quote character are then removed, which undoes values stored
    as quoted JSON literals.
    """
    if value is None:
        text = "null"
    elif isinstance(value, bool):
        text = "true" if value else "false"
    elif isinstance(value, float) and value.is_integer():
        text = str(int(value))
    else:
        text = value if isinstance(value, str) else str(value)
    if text[:1] in _QUOTES:
        text = text[1:]
    if text[-1:] in _QUOTES:
        text = text[:-1]
    return text
