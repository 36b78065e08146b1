"""Helpers that turn filtered series into response-model pieces."""

from datetime import date
from typing import Callable

from econdash.engine.formatting import month_label
from econdash.engine.metrics import oldest_first
from econdash.models.observation import Observation
from econdash.models.summary import HistoryPoint


def history_points(
    seq: list[Observation],
    limit: int | None = 12,
    label: Callable[[date], str] = month_label,
    divisor: float = 1.0,
) -> list[HistoryPoint]:
    """The newest `limit` observations as chart points, oldest first."""
    recent = seq[:limit] if limit is not None else seq
    return oldest_first([
        HistoryPoint(date=obs.date, label=label(obs.date), value=obs.value / divisor)
        for obs in recent
    ])


def latest_date(seq: list[Observation]) -> date | None:
    return seq[0].date if seq else None


def period_caption(seq: list[Observation], label: Callable[[date], str]) -> str | None:
    d = latest_date(seq)
    return label(d) if d is not None else None
