"""Housing dashboard: mortgage rates plus, for a ZIP code, HUD rents and affordability."""

import re
from datetime import datetime, timezone

from econdash.dashboards.pipeline import Dashboard, SeriesBundle, run_dashboard
from econdash.dashboards.shaping import latest_date
from econdash.data.base import SeriesRequest, SeriesSource
from econdash.data.hud import HUD_FMR_DATASET, HUD_IL_DATASET
from econdash.engine import affordability, metrics
from econdash.engine.formatting import round_or_none
from econdash.models.housing import BEDROOM_LABELS, FairMarketRent, IncomeLimits
from econdash.models.summary import Affordability, BedroomRent, HousingSummary, OwnershipCost

ZIP_CODE = re.compile(r"^\d{5}$")
DEFAULT_BEDROOMS = 2
DEFAULT_DOWN_PAYMENT_SHARE = 0.20

MORTGAGE_REQUESTS = (
    SeriesRequest(name="mortgage30", series_id="MORTGAGE30US", limit=5),
    SeriesRequest(name="mortgage15", series_id="MORTGAGE15US", limit=5),
)


def _fmr(bundle: SeriesBundle) -> FairMarketRent | None:
    rows = bundle.get("fmr") or []
    return rows[0] if rows else None


def _income_limits(bundle: SeriesBundle) -> IncomeLimits | None:
    rows = bundle.get("income_limits") or []
    return rows[0] if rows else None


def _household_income(bundle: SeriesBundle, income: float | None) -> tuple[float | None, str | None]:
    """The caller's income if given, else the HUD area median."""
    if income is not None and income > 0:
        return income, "user"
    limits = _income_limits(bundle)
    if limits is not None and limits.median_income:
        return limits.median_income, "hud_median"
    return None, None


def fmr_comparison(bundle: SeriesBundle, income: float | None) -> list[BedroomRent]:
    fmr = _fmr(bundle)
    if fmr is None:
        return []
    annual_income, _ = _household_income(bundle, income)
    return [
        BedroomRent(
            bedrooms=beds,
            label=BEDROOM_LABELS[beds],
            rent=rent,
            ratio=round_or_none(affordability.rent_to_income_ratio(rent, annual_income), 1),
        )
        for beds, rent in enumerate(fmr.rents())
    ]


def ownership_cost(
    home_price: float | None,
    down_payment: float | None,
    mortgage_rate: float | None,
    monthly_rent: float | None,
) -> OwnershipCost | None:
    """Monthly cost of buying, or None without a home price or a current rate."""
    if home_price is None or home_price <= 0 or mortgage_rate is None:
        return None
    if down_payment is None:
        down_payment = home_price * DEFAULT_DOWN_PAYMENT_SHARE
    costs = affordability.monthly_ownership_cost(home_price, down_payment, mortgage_rate)
    return OwnershipCost(
        home_price=home_price,
        down_payment=down_payment,
        mortgage_rate=mortgage_rate,
        **{name: round(value, 2) for name, value in costs.items()},
        buying_cheaper=costs["total"] < monthly_rent if monthly_rent is not None else None,
    )


def housing_affordability(
    bundle: SeriesBundle,
    bedrooms: int,
    income: float | None,
    home_price: float | None,
    down_payment: float | None,
) -> Affordability | None:
    fmr = _fmr(bundle)
    if fmr is None:
        return None
    beds = max(0, min(bedrooms, len(BEDROOM_LABELS) - 1))
    rent = fmr.fmr_for_beds(beds)
    annual_income, source = _household_income(bundle, income)
    ratio = affordability.rent_to_income_ratio(rent, annual_income)
    return Affordability(
        bedrooms=beds,
        bedroom_label=BEDROOM_LABELS[beds],
        monthly_rent=rent,
        annual_income=annual_income,
        income_source=source,
        rent_to_income_ratio=round_or_none(ratio, 1),
        verdict=affordability.affordability_verdict(ratio),
        income_for_30pct=round_or_none(affordability.income_required(rent), 0),
        income_for_25pct=round_or_none(
            affordability.income_required(rent, affordability.COMFORTABLE_SHARE), 0
        ),
        ownership=ownership_cost(home_price, down_payment, metrics.latest(bundle["mortgage30"]), rent),
    )


def validate_zip(zip_code: str) -> None:
    if not ZIP_CODE.match(zip_code):
        raise ValueError(f"Invalid ZIP code: {zip_code!r}")


def build_housing(derived: dict) -> HousingSummary:
    return HousingSummary(timestamp=datetime.now(timezone.utc), **derived)


def housing_dashboard(
    zip_code: str | None = None,
    bedrooms: int = DEFAULT_BEDROOMS,
    income: float | None = None,
    home_price: float | None = None,
    down_payment: float | None = None,
) -> Dashboard:
    """Build the housing table for one query.

    Raises ValueError for a ZIP that is not five digits.
    """
    requests = MORTGAGE_REQUESTS
    if zip_code is not None:
        validate_zip(zip_code)
        requests += (
            SeriesRequest(name="fmr", series_id=HUD_FMR_DATASET, source="hud", raw=True,
                          params={"zip": zip_code}),
            SeriesRequest(name="income_limits", series_id=HUD_IL_DATASET, source="hud", raw=True,
                          params={"zip": zip_code}),
        )

    return Dashboard(
        name="housing",
        requests=requests,
        derivations={
            "mortgage30": lambda b: metrics.latest(b["mortgage30"]),
            "mortgage15": lambda b: metrics.latest(b["mortgage15"]),
            "mortgage_date": lambda b: latest_date(b["mortgage30"]),
            "fmr": _fmr,
            "income_limit": _income_limits,
            "fmr_comparison": lambda b: fmr_comparison(b, income),
            "affordability": lambda b: housing_affordability(
                b, bedrooms, income, home_price, down_payment
            ),
        },
        build=build_housing,
    )


async def fetch_housing(
    sources: dict[str, SeriesSource],
    zip_code: str | None = None,
    bedrooms: int = DEFAULT_BEDROOMS,
    income: float | None = None,
    home_price: float | None = None,
    down_payment: float | None = None,
) -> HousingSummary:
    dashboard = housing_dashboard(zip_code, bedrooms, income, home_price, down_payment)
    return await run_dashboard(dashboard, sources)
