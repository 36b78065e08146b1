"""Derived-metric calculators over filtered observation series.

Every function takes a series ordered newest-first (as returned by
filter_observations) and returns None for "unavailable" when the input is
empty or too short. None of them raise on short input.
"""

from datetime import timedelta
from statistics import fmean
from typing import Iterable, TypeVar

from econdash.models.observation import Observation

T = TypeVar("T")

MONTHS_PER_YEAR = 12
QUARTERS_PER_YEAR = 4

SAHM_SHORT_WINDOW = 3
SAHM_LONG_WINDOW = 12


def latest(seq: list[Observation]) -> float | None:
    return seq[0].value if seq else None


def at_offset(seq: list[Observation], k: int) -> float | None:
    """Value k positions back from the newest (k=0 is latest)."""
    if k < 0 or len(seq) <= k:
        return None
    return seq[k].value


def percent_change(current: float | None, prior: float | None) -> float | None:
    if current is None or prior is None or prior == 0:
        return None
    return (current - prior) / prior * 100


def period_change(seq: list[Observation], k: int = 1) -> float | None:
    """Latest value minus the value k periods back."""
    return difference(latest(seq), at_offset(seq, k))


def year_over_year_change(
    seq: list[Observation], offset: int = 0, periods: int = MONTHS_PER_YEAR
) -> float | None:
    """Percent change from `periods` observations back, measured at `offset`.

    Monthly default needs 13 points: (seq[0] - seq[12]) / seq[12] * 100.
    offset=1 gives the prior month's YoY reading.
    """
    if len(seq) < offset + periods + 1:
        return None
    return percent_change(seq[offset].value, seq[offset + periods].value)


def annualized_quarterly_growth(seq: list[Observation]) -> float | None:
    """Quarter-over-quarter percent change times 4.

    Linear annualization, not the compounded ((1 + r)^4 - 1) SAAR. Kept
    linear so headline GDP growth matches the published dashboard figures.
    """
    change = percent_change(latest(seq), at_offset(seq, 1))
    if change is None:
        return None
    return change * QUARTERS_PER_YEAR


def nearest_date_join(
    series_a: list[Observation],
    series_b: list[Observation],
    tolerance: timedelta,
) -> list[tuple[Observation, Observation]]:
    """Pair each entry of series_a with the closest-dated entry of series_b.

    Only candidates within `tolerance` (inclusive) qualify; entries of
    series_a with no candidate are dropped. Ties go to the earlier entry in
    series_b (the newer date for newest-first input). tolerance=timedelta(0)
    is an exact-date join. Output preserves series_a's order.
    """
    pairs = []
    for a in series_a:
        best = None
        best_gap = None
        for b in series_b:
            gap = abs(b.date - a.date)
            if gap > tolerance:
                continue
            if best_gap is None or gap < best_gap:
                best, best_gap = b, gap
        if best is not None:
            pairs.append((a, best))
    return pairs


def sahm_rule_delta(unemployment: list[Observation]) -> float | None:
    """3-month average unemployment minus the 12-month minimum.

    Returns the raw delta only; readings of 0.5 or more are the conventional
    recession signal. Unavailable with fewer than 12 monthly observations.
    """
    if len(unemployment) < SAHM_LONG_WINDOW:
        return None
    recent = [obs.value for obs in unemployment[:SAHM_SHORT_WINDOW]]
    trailing_year = [obs.value for obs in unemployment[:SAHM_LONG_WINDOW]]
    return fmean(recent) - min(trailing_year)


def unemployment_trend(unemployment: list[Observation]) -> str | None:
    """Direction of the latest reading versus two months earlier."""
    current, earlier = latest(unemployment), at_offset(unemployment, 2)
    if current is None or earlier is None:
        return None
    if current > earlier:
        return "rising"
    if current < earlier:
        return "falling"
    return "stable"


def difference(a: float | None, b: float | None) -> float | None:
    if a is None or b is None:
        return None
    return a - b


def yield_spread(long_rate: float | None, short_rate: float | None) -> float | None:
    return difference(long_rate, short_rate)


def yield_inversion(spread: float | None) -> bool | None:
    """True iff the long-minus-short spread is strictly negative."""
    if spread is None:
        return None
    return spread < 0


def mean(values: Iterable[float | None]) -> float | None:
    present = [v for v in values if v is not None]
    return fmean(present) if present else None


def oldest_first(items: list[T]) -> list[T]:
    """Reverse a newest-first list for chronological history output."""
    return list(reversed(items))
