"""Homepage "at a glance" dashboard: a short headline per indicator."""

from datetime import datetime, timezone

from econdash.dashboards.pipeline import Dashboard, SeriesBundle, run_dashboard
from econdash.dashboards.shaping import latest_date, period_caption
from econdash.data.base import SeriesRequest, SeriesSource
from econdash.data.eia import REGULAR_GASOLINE
from econdash.engine import metrics
from econdash.engine.formatting import month_label, quarter_label, round_or_none, scale
from econdash.models.summary import GlanceConsumer, GlanceEconomy, GlanceSummary, Headline

WEEKS_BACK_FOR_YOY = 51  # oldest point of a 52-week window

REQUESTS = (
    SeriesRequest(name="gdp", series_id="GDPC1", limit=5),
    SeriesRequest(name="unemployment", series_id="UNRATE", limit=3),
    SeriesRequest(name="cpi", series_id="CPIAUCSL", limit=13),
    SeriesRequest(name="fed_funds", series_id="FEDFUNDS", limit=3),
    SeriesRequest(name="sentiment", series_id="UMCSENT", limit=3),
    SeriesRequest(name="food_cpi", series_id="CPIUFDNS", limit=13),
    SeriesRequest(name="mortgage30", series_id="MORTGAGE30US", limit=5),
    SeriesRequest(name="gas", series_id=REGULAR_GASOLINE, limit=52, source="eia"),
)


def _month(seq) -> str | None:
    return period_caption(seq, lambda d: month_label(d, short_year=False))


def gdp(bundle: SeriesBundle) -> Headline:
    seq = bundle["gdp"]
    return Headline(
        value=round_or_none(scale(metrics.latest(seq), 1000), 2),
        change=round_or_none(metrics.annualized_quarterly_growth(seq), 1),
        unit="T",
        label="Real GDP",
        period=period_caption(seq, lambda d: quarter_label(d, year_first=False)),
    )


def unemployment(bundle: SeriesBundle) -> Headline:
    seq = bundle["unemployment"]
    return Headline(
        value=metrics.latest(seq),
        change=round_or_none(metrics.period_change(seq), 1),
        unit="%",
        label="Unemployment",
        period=_month(seq),
    )


def inflation(bundle: SeriesBundle) -> Headline:
    seq = bundle["cpi"]
    return Headline(
        value=round_or_none(metrics.year_over_year_change(seq), 1),
        unit="%",
        label="YoY",
        period=_month(seq),
    )


def fed_rate(bundle: SeriesBundle) -> Headline:
    seq = bundle["fed_funds"]
    return Headline(value=metrics.latest(seq), unit="%", label="Fed Funds", period=_month(seq))


def sentiment(bundle: SeriesBundle) -> Headline:
    seq = bundle["sentiment"]
    return Headline(
        value=round_or_none(metrics.latest(seq), 1),
        change=round_or_none(metrics.period_change(seq), 1),
        label="Consumer Sentiment",
        period=_month(seq),
    )


def gas(bundle: SeriesBundle) -> Headline | None:
    """Regular gasoline, or None when EIA returned nothing (e.g. no key)."""
    seq = bundle["gas"]
    if not seq:
        return None
    as_of = latest_date(seq)
    return Headline(
        value=round_or_none(metrics.latest(seq), 2),
        change=round_or_none(metrics.year_over_year_change(seq, periods=WEEKS_BACK_FOR_YOY), 1),
        unit="/gal",
        label="Regular Gas",
        period=as_of.isoformat(),
    )


def food(bundle: SeriesBundle) -> Headline:
    seq = bundle["food_cpi"]
    return Headline(
        value=round_or_none(metrics.year_over_year_change(seq), 1),
        unit="%",
        label="YoY",
        period=_month(seq),
    )


def mortgage(bundle: SeriesBundle) -> Headline:
    seq = bundle["mortgage30"]
    return Headline(
        value=round_or_none(metrics.latest(seq), 2),
        change=round_or_none(metrics.period_change(seq), 2),
        unit="%",
        label="30Y Mortgage",
        period=_month(seq),
    )


def build_glance(derived: dict) -> GlanceSummary:
    return GlanceSummary(
        timestamp=datetime.now(timezone.utc),
        economy=GlanceEconomy(
            gdp=derived["gdp"],
            unemployment=derived["unemployment"],
            inflation=derived["inflation"],
            fed_rate=derived["fed_rate"],
        ),
        consumer=GlanceConsumer(
            sentiment=derived["sentiment"],
            gas=derived["gas"],
            food=derived["food"],
            mortgage=derived["mortgage"],
        ),
    )


GLANCE = Dashboard(
    name="glance",
    requests=REQUESTS,
    derivations={
        "gdp": gdp,
        "unemployment": unemployment,
        "inflation": inflation,
        "fed_rate": fed_rate,
        "sentiment": sentiment,
        "gas": gas,
        "food": food,
        "mortgage": mortgage,
    },
    build=build_glance,
)


async def fetch_glance(sources: dict[str, SeriesSource]) -> GlanceSummary:
    return await run_dashboard(GLANCE, sources)
