"""Time-series observation types."""

from dataclasses import dataclass
from datetime import date


@dataclass(frozen=True)
class RawObservation:
    """One observation exactly as an upstream source reported it."""
    date: str
    value: str  # decimal string, or "." for missing


@dataclass(frozen=True)
class Observation:
    date: date
    value: float
