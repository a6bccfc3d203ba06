# core/utils.py

"""
Repository for program-wide utilities.
"""

import math
import uuid


def generate_uuid() -> str:
    return str(uuid.uuid4())


def parse_number(raw: str) -> float | None:
    """
    Parses a numeric form string, returning None when it is blank, malformed, or not finite.
    """
    raw = raw.strip()
    if not raw:
        return None

    try:
        value = float(raw)
    except ValueError:
        return None

    return value if math.isfinite(value) else None


def narrow_number(value: float) -> int | float:
    # 90.0 -> 90, 87.5 stays
    return int(value) if value.is_integer() else value
