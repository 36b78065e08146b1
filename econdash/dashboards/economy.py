"""Economic summary dashboard: headline indicators, yield curve, recession signals."""

from datetime import datetime, timedelta, timezone

from econdash.dashboards.pipeline import Dashboard, SeriesBundle, run_dashboard
from econdash.dashboards.shaping import history_points, latest_date
from econdash.data.base import SeriesRequest, SeriesSource
from econdash.engine import metrics
from econdash.engine.formatting import month_label, quarter_label, round_or_none, scale
from econdash.models.summary import (
    ConsumerSentiment,
    EconomicHeadlines,
    EconomicSummary,
    Headline,
    HousingPoint,
    InflationPoint,
    LaborMarket,
    RecessionIndicators,
    SpreadPoint,
    YieldPoint,
)

# name -> (FRED series ID, observations to fetch)
SERIES: dict[str, tuple[str, int]] = {
    "gdp": ("GDPC1", 12),  # Real GDP, quarterly, billions
    "unemployment": ("UNRATE", 24),
    "cpi": ("CPIAUCSL", 24),
    "pce": ("PCEPI", 24),
    "fed_funds": ("FEDFUNDS", 24),
    "dgs10": ("DGS10", 30),
    "dgs2": ("DGS2", 30),
    "dgs1mo": ("DGS1MO", 5),
    "dgs3mo": ("DGS3MO", 5),
    "dgs6mo": ("DGS6MO", 5),
    "dgs1": ("DGS1", 5),
    "dgs3": ("DGS3", 5),
    "dgs5": ("DGS5", 5),
    "dgs7": ("DGS7", 5),
    "dgs20": ("DGS20", 5),
    "dgs30": ("DGS30", 5),
    "mortgage30": ("MORTGAGE30US", 52),  # weekly
    "housing_starts": ("HOUST", 24),  # monthly, thousands
    "jolts": ("JTSJOL", 3),  # thousands
    "quits": ("JTSQUR", 3),
    "hires": ("JTSHIR", 3),  # thousands
    "participation": ("CIVPART", 3),
    "consumer_sentiment": ("UMCSENT", 24),
}

YIELD_CURVE_MATURITIES = [
    ("1M", "dgs1mo"),
    ("3M", "dgs3mo"),
    ("6M", "dgs6mo"),
    ("1Y", "dgs1"),
    ("2Y", "dgs2"),
    ("3Y", "dgs3"),
    ("5Y", "dgs5"),
    ("7Y", "dgs7"),
    ("10Y", "dgs10"),
    ("20Y", "dgs20"),
    ("30Y", "dgs30"),
]

CPI_JAN_2020 = 257.971  # CPIAUCSL, Jan 2020: baseline for the inflation wallet
HISTORY_POINTS = 12
FED_FUNDS_CHANGE_LAG = 3  # policy moves persist across several monthly readings
HOUSING_MATCH_TOLERANCE = timedelta(days=45)


# ---- Headlines ----

def gdp_headline(bundle: SeriesBundle) -> Headline:
    gdp = bundle["gdp"]
    as_of = latest_date(gdp)
    return Headline(
        value=round_or_none(scale(metrics.latest(gdp), 1000), 2),
        change=round_or_none(metrics.annualized_quarterly_growth(gdp), 1),
        unit="T",
        label=f"Real GDP ({quarter_label(as_of) if as_of else 'Latest'})",
        period=quarter_label(as_of, year_first=False) if as_of else None,
    )


def unemployment_headline(bundle: SeriesBundle) -> Headline:
    unrate = bundle["unemployment"]
    as_of = latest_date(unrate)
    return Headline(
        value=metrics.latest(unrate),
        change=round_or_none(metrics.period_change(unrate), 1),
        unit="%",
        label="Unemployment Rate",
        period=month_label(as_of, short_year=False) if as_of else None,
    )


def inflation_headline(bundle: SeriesBundle) -> Headline:
    cpi = bundle["cpi"]
    as_of = latest_date(cpi)
    current = metrics.year_over_year_change(cpi)
    prior = metrics.year_over_year_change(cpi, offset=1)
    return Headline(
        value=round_or_none(current, 1),
        change=round_or_none(metrics.difference(current, prior), 1),
        unit="%",
        label="CPI (YoY)",
        period=month_label(as_of, short_year=False) if as_of else None,
    )


def fed_funds_headline(bundle: SeriesBundle) -> Headline:
    fed_funds = bundle["fed_funds"]
    as_of = latest_date(fed_funds)
    return Headline(
        value=metrics.latest(fed_funds),
        change=round_or_none(metrics.period_change(fed_funds, FED_FUNDS_CHANGE_LAG), 2),
        unit="%",
        label="Fed Funds Rate",
        period=month_label(as_of, short_year=False) if as_of else None,
    )


# ---- Histories ----

def gdp_history(bundle: SeriesBundle):
    return history_points(bundle["gdp"], limit=None, label=quarter_label, divisor=1000)


def unemployment_history(bundle: SeriesBundle):
    return history_points(bundle["unemployment"], limit=HISTORY_POINTS)


def inflation_history(bundle: SeriesBundle) -> list[InflationPoint]:
    """Monthly CPI and PCE YoY, joined on observation date."""
    cpi, pce = bundle["cpi"], bundle["pce"]
    pce_yoy = {
        obs.date: metrics.year_over_year_change(pce, offset=i)
        for i, obs in enumerate(pce)
    }
    points = []
    for i, obs in enumerate(cpi[:HISTORY_POINTS]):
        cpi_change = metrics.year_over_year_change(cpi, offset=i)
        pce_change = pce_yoy.get(obs.date)
        if cpi_change is None or pce_change is None:
            continue
        points.append(InflationPoint(
            date=obs.date, label=month_label(obs.date), cpi=cpi_change, pce=pce_change,
        ))
    return metrics.oldest_first(points)


def yield_curve(bundle: SeriesBundle) -> list[YieldPoint]:
    """Latest yield per maturity; maturities with no data are omitted."""
    points = []
    for maturity, name in YIELD_CURVE_MATURITIES:
        rate = metrics.latest(bundle[name])
        if rate is not None:
            points.append(YieldPoint(maturity=maturity, rate=rate))
    return points


def yield_spread_history(bundle: SeriesBundle) -> list[SpreadPoint]:
    """10Y minus 2Y on days both were published."""
    pairs = metrics.nearest_date_join(
        bundle["dgs10"][:HISTORY_POINTS], bundle["dgs2"], tolerance=timedelta(0)
    )
    return metrics.oldest_first([
        SpreadPoint(
            date=ten.date,
            label=month_label(ten.date),
            spread=round(ten.value - two.value, 2),
        )
        for ten, two in pairs
    ])


def housing_data(bundle: SeriesBundle) -> list[HousingPoint]:
    """Monthly starts paired with the nearest weekly 30Y mortgage rate."""
    pairs = metrics.nearest_date_join(
        bundle["housing_starts"][:HISTORY_POINTS],
        bundle["mortgage30"],
        tolerance=HOUSING_MATCH_TOLERANCE,
    )
    return metrics.oldest_first([
        HousingPoint(
            date=starts.date,
            label=month_label(starts.date),
            starts=starts.value / 1000,
            mortgage=mortgage.value,
        )
        for starts, mortgage in pairs
    ])


# ---- Composite indicators ----

def labor_market(bundle: SeriesBundle) -> LaborMarket:
    return LaborMarket(
        jolts=round_or_none(scale(metrics.latest(bundle["jolts"]), 1000), 2),
        quits=metrics.latest(bundle["quits"]),
        hires=round_or_none(scale(metrics.latest(bundle["hires"]), 1000), 1),
        participation=metrics.latest(bundle["participation"]),
    )


def recession_indicators(bundle: SeriesBundle) -> RecessionIndicators:
    spread = metrics.yield_spread(metrics.latest(bundle["dgs10"]), metrics.latest(bundle["dgs2"]))
    return RecessionIndicators(
        sahm_rule=round_or_none(metrics.sahm_rule_delta(bundle["unemployment"]), 2),
        yield_inversion=metrics.yield_inversion(spread),
        current_spread=round_or_none(spread, 2),
        unemployment_trend=metrics.unemployment_trend(bundle["unemployment"]),
    )


def consumer_sentiment(bundle: SeriesBundle) -> ConsumerSentiment:
    sentiment = bundle["consumer_sentiment"]
    return ConsumerSentiment(
        current=metrics.latest(sentiment),
        prior=metrics.at_offset(sentiment, 1),
        change=round_or_none(metrics.period_change(sentiment), 1),
        history=history_points(sentiment, limit=HISTORY_POINTS),
    )


DERIVATIONS = {
    "gdp": gdp_headline,
    "unemployment": unemployment_headline,
    "inflation": inflation_headline,
    "fed_funds": fed_funds_headline,
    "gdp_history": gdp_history,
    "unemployment_history": unemployment_history,
    "inflation_history": inflation_history,
    "yield_curve": yield_curve,
    "yield_spread_history": yield_spread_history,
    "housing_data": housing_data,
    "labor_market": labor_market,
    "recession_indicators": recession_indicators,
    "mortgage30": lambda b: metrics.latest(b["mortgage30"]),
    "cpi_current": lambda b: metrics.latest(b["cpi"]),
    "consumer_sentiment": consumer_sentiment,
}


def build_summary(derived: dict) -> EconomicSummary:
    return EconomicSummary(
        timestamp=datetime.now(timezone.utc),
        summary=EconomicHeadlines(
            gdp=derived["gdp"],
            unemployment=derived["unemployment"],
            inflation=derived["inflation"],
            fed_funds=derived["fed_funds"],
        ),
        gdp_history=derived["gdp_history"],
        unemployment_history=derived["unemployment_history"],
        inflation_history=derived["inflation_history"],
        yield_curve=derived["yield_curve"],
        yield_spread_history=derived["yield_spread_history"],
        housing_data=derived["housing_data"],
        labor_market=derived["labor_market"],
        recession_indicators=derived["recession_indicators"],
        mortgage30=derived["mortgage30"],
        cpi_current=derived["cpi_current"],
        cpi_jan2020=CPI_JAN_2020,
        consumer_sentiment=derived["consumer_sentiment"],
    )


ECONOMY = Dashboard(
    name="economy",
    requests=tuple(
        SeriesRequest(name=name, series_id=series_id, limit=limit)
        for name, (series_id, limit) in SERIES.items()
    ),
    derivations=DERIVATIONS,
    build=build_summary,
)


async def fetch_economic_summary(sources: dict[str, SeriesSource]) -> EconomicSummary:
    return await run_dashboard(ECONOMY, sources)
