"""Shared test fixtures.

Series fixtures are newest-first, matching what FRED returns with
sort_order=desc.
"""

from datetime import date, datetime, timezone

import pytest

from econdash.data.cache import InMemoryCache
from econdash.models.observation import RawObservation
from econdash.models.summary import (
    ConsumerSentiment,
    EconomicHeadlines,
    EconomicSummary,
    Headline,
    HousingPoint,
    LaborMarket,
    RecessionIndicators,
    YieldPoint,
)


def _months_back(d: date, n: int) -> date:
    months = d.year * 12 + (d.month - 1) - n
    return date(months // 12, months % 12 + 1, 1)


class FakeSource:
    """In-memory SeriesSource keyed by series ID.

    Series IDs listed in `failing` raise instead of returning data.
    """

    def __init__(self, series: dict | None = None, failing=()):
        self.series = series or {}
        self.failing = set(failing)
        self.requests = []

    async def fetch(self, request):
        self.requests.append(request)
        if request.series_id in self.failing:
            raise RuntimeError(f"{request.series_id} unavailable")
        return list(self.series.get(request.series_id, []))


@pytest.fixture
def fake_source():
    return FakeSource


@pytest.fixture
def monthly():
    """Build a newest-first monthly raw series ending at `newest`."""
    def build(values, newest: date = date(2025, 6, 1)) -> list[RawObservation]:
        return [
            RawObservation(date=_months_back(newest, i).isoformat(), value=str(v))
            for i, v in enumerate(values)
        ]
    return build


@pytest.fixture
def memory_cache():
    return InMemoryCache()


@pytest.fixture
def economy_series(monthly):
    """Raw FRED data for every series on the economy dashboard, latest month Jun 2025."""
    series = {
        "GDPC1": monthly([23500, 23300] + [23000] * 10),
        "UNRATE": monthly([4.2, 4.1, 4.0, 4.0, 3.9, 3.9, 3.8, 3.8, 3.7, 3.7, 3.8, 3.9] + [3.9] * 12),
        "CPIAUCSL": monthly([320.0] + [315.0] * 11 + [310.0] + [305.0] * 11),
        "PCEPI": monthly([125.0] * 24),
        "FEDFUNDS": monthly([4.33] * 3 + [4.58] * 21),
        "DGS10": monthly([4.35] * 30),
        "DGS2": monthly([4.18] * 30),
        "MORTGAGE30US": monthly([6.85] * 52),
        "HOUST": monthly([1350] * 24),
        "JTSJOL": monthly([7400] * 3),
        "JTSQUR": monthly([2.0] * 3),
        "JTSHIR": monthly([5500] * 3),
        "CIVPART": monthly([62.5] * 3),
        "UMCSENT": monthly([52.2, 50.8] + [55.0] * 22),
    }
    for series_id in ("DGS1MO", "DGS3MO", "DGS6MO", "DGS1", "DGS3", "DGS5", "DGS7", "DGS20", "DGS30"):
        series[series_id] = monthly([4.0] * 5)
    return series


@pytest.fixture
def economic_summary():
    """A small, hand-built EconomicSummary for narrative and briefing tests."""
    return EconomicSummary(
        timestamp=datetime(2025, 6, 10, 6, 0, tzinfo=timezone.utc),
        summary=EconomicHeadlines(
            gdp=Headline(value=23.5, change=3.4, unit="T", label="Real GDP (2025-Q1)"),
            unemployment=Headline(value=4.2, change=0.1, unit="%", label="Unemployment Rate"),
            inflation=Headline(value=2.4, change=-0.1, unit="%", label="CPI (YoY)"),
            fed_funds=Headline(value=4.33, change=0.0, unit="%", label="Fed Funds Rate"),
        ),
        yield_curve=[YieldPoint(maturity="2Y", rate=4.18), YieldPoint(maturity="10Y", rate=4.35)],
        housing_data=[HousingPoint(date=date(2025, 5, 1), label="May 25", starts=1.256, mortgage=6.85)],
        labor_market=LaborMarket(jolts=7.39, quits=2.0, hires=5.5, participation=62.4),
        recession_indicators=RecessionIndicators(
            sahm_rule=0.27, yield_inversion=False, current_spread=0.17, unemployment_trend="rising",
        ),
        mortgage30=6.85,
        cpi_current=320.58,
        cpi_jan2020=257.971,
        consumer_sentiment=ConsumerSentiment(current=52.2),
    )
