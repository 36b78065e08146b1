"""Grocery and fuel prices dashboard.

Food prices are BLS average-price series (actual dollars, not index levels)
republished by FRED; fuel prices come from EIA's weekly retail survey.
"""

from datetime import date, datetime, timezone

from econdash.dashboards.pipeline import Dashboard, SeriesBundle, run_dashboard
from econdash.dashboards.shaping import history_points, latest_date
from econdash.data.base import SeriesRequest, SeriesSource
from econdash.data.eia import DIESEL, REGULAR_GASOLINE
from econdash.engine import metrics
from econdash.engine.formatting import month_label
from econdash.models.observation import Observation
from econdash.models.summary import FuelPrices, PriceSeries, PricesStats, PricesSummary

# key -> (FRED series ID, display name, unit)
FOOD_SERIES: dict[str, tuple[str, str, str]] = {
    "eggs": ("APU0000708111", "Eggs (Grade A, dozen)", "dozen"),
    "milk": ("APU0000709112", "Milk (whole, gallon)", "gallon"),
    "bread": ("APU0000702111", "Bread (white, lb)", "lb"),
    "chicken": ("APU0000706111", "Chicken (whole, lb)", "lb"),
    "ground_beef": ("APU0000703112", "Ground Beef (lb)", "lb"),
    "bacon": ("APU0000704111", "Bacon (lb)", "lb"),
    "orange_juice": ("APU0000713111", "Orange Juice (12oz frozen)", "12oz"),
    "coffee": ("APU0000717311", "Coffee (lb)", "lb"),
    "butter": ("APU0000FS1101", "Butter (lb)", "lb"),
    "cheese": ("APU0000710211", "Cheese (American, lb)", "lb"),
}

FUEL_SERIES: dict[str, tuple[str, str]] = {
    "regular": (REGULAR_GASOLINE, "Regular Gas (gallon)"),
    "diesel": (DIESEL, "Diesel (gallon)"),
}

MONTHS_BACK_FOR_YOY = 12
WEEKS_BACK_FOR_YOY = 51  # oldest point of a 52-week window

REQUESTS = tuple(
    SeriesRequest(name=key, series_id=series_id, limit=24)
    for key, (series_id, _, _) in FOOD_SERIES.items()
) + tuple(
    SeriesRequest(name=f"fuel_{key}", series_id=product, limit=52, source="eia")
    for key, (product, _) in FUEL_SERIES.items()
)


def _iso(d: date) -> str:
    return d.isoformat()


def price_series(
    seq: list[Observation], series_id: str, name: str, unit: str, periods: int, weekly: bool = False
) -> PriceSeries:
    label = _iso if weekly else month_label
    return PriceSeries(
        name=name,
        unit=unit,
        series_id=series_id,
        current=metrics.latest(seq),
        date=latest_date(seq),
        year_ago=metrics.at_offset(seq, periods),
        yoy_change=metrics.year_over_year_change(seq, periods=periods),
        history=history_points(seq, limit=12, label=label),
    )


def food_prices(bundle: SeriesBundle) -> dict[str, PriceSeries]:
    return {
        key: price_series(bundle[key], series_id, name, unit, MONTHS_BACK_FOR_YOY)
        for key, (series_id, name, unit) in FOOD_SERIES.items()
    }


def fuel_prices(bundle: SeriesBundle) -> FuelPrices | None:
    """Regular and diesel prices; None when EIA returned nothing for either."""
    if not any(bundle[f"fuel_{key}"] for key in FUEL_SERIES):
        return None
    series = {
        key: price_series(
            bundle[f"fuel_{key}"], product, name, "gallon", WEEKS_BACK_FOR_YOY, weekly=True
        )
        for key, (product, name) in FUEL_SERIES.items()
    }
    return FuelPrices(**series)


def build_prices(derived: dict) -> PricesSummary:
    food = derived["food"]
    gas = derived["gas"]
    return PricesSummary(
        timestamp=datetime.now(timezone.utc),
        food=food,
        gas=gas,
        summary=PricesStats(
            avg_food_change=metrics.mean(item.yoy_change for item in food.values()),
            gas_available=gas is not None,
        ),
    )


PRICES = Dashboard(
    name="prices",
    requests=REQUESTS,
    derivations={"food": food_prices, "gas": fuel_prices},
    build=build_prices,
)


async def fetch_prices(sources: dict[str, SeriesSource]) -> PricesSummary:
    return await run_dashboard(PRICES, sources)
