"""Strip missing-data markers from raw observation lists."""

import math
import re
from datetime import date

from econdash.models.observation import Observation, RawObservation

MISSING_SENTINEL = "."

# ASCII decimals only; float() alone also takes "1_000", padding and non-ASCII digits.
DECIMAL = re.compile(r"[+-]?(\d+(\.\d*)?|\.\d+)([eE][+-]?\d+)?", re.ASCII)


def parse_value(value: str | None) -> float | None:
    """Parse an upstream decimal string, or None if it isn't a finite number."""
    if not isinstance(value, str) or not DECIMAL.fullmatch(value):
        return None
    parsed = float(value)
    if not math.isfinite(parsed):
        return None
    return parsed


def filter_observations(raw: list[RawObservation]) -> list[Observation]:
    """Keep only entries with a well-formed date and numeric value, preserving order.

    Must run before any index-based lookup: upstream lists interleave "."
    placeholders with real values, so position k of the raw list is not the
    k-th real observation.
    """
    valid = []
    for obs in raw:
        value = parse_value(obs.value)
        if value is None:
            continue
        try:
            obs_date = date.fromisoformat(obs.date)
        except (TypeError, ValueError):
            continue
        valid.append(Observation(date=obs_date, value=value))
    return valid
