"""Pydantic response models for the dashboards.

Every numeric leaf is either a finite float or None ("unavailable").
History arrays are oldest-first.
"""

import datetime as dt

from pydantic import Field

from econdash.models.housing import FairMarketRent, IncomeLimits
from econdash.models.schema import CamelModel


# ---- Shared shapes ----

class Headline(CamelModel):
    value: float | None = None
    change: float | None = None
    unit: str = ""
    label: str = ""
    period: str | None = None


class HistoryPoint(CamelModel):
    date: dt.date
    label: str
    value: float


class FormattedValue(CamelModel):
    value: float | None = None
    formatted: str | None = None


# ---- Economy ----

class YieldPoint(CamelModel):
    maturity: str
    rate: float = Field(alias="yield")


class SpreadPoint(CamelModel):
    date: dt.date
    label: str
    spread: float


class InflationPoint(CamelModel):
    date: dt.date
    label: str
    cpi: float
    pce: float


class HousingPoint(CamelModel):
    date: dt.date
    label: str
    starts: float  # millions, annualized
    mortgage: float


class LaborMarket(CamelModel):
    jolts: float | None = None  # millions
    quits: float | None = None
    hires: float | None = None  # millions
    participation: float | None = None


class RecessionIndicators(CamelModel):
    sahm_rule: float | None = None
    yield_inversion: bool | None = None
    current_spread: float | None = None
    unemployment_trend: str | None = None  # "rising" | "falling" | "stable"


class ConsumerSentiment(CamelModel):
    current: float | None = None
    prior: float | None = None
    change: float | None = None
    history: list[HistoryPoint] = []


class EconomicHeadlines(CamelModel):
    gdp: Headline
    unemployment: Headline
    inflation: Headline
    fed_funds: Headline


class EconomicSummary(CamelModel):
    timestamp: dt.datetime
    summary: EconomicHeadlines
    gdp_history: list[HistoryPoint] = []
    unemployment_history: list[HistoryPoint] = []
    inflation_history: list[InflationPoint] = []
    yield_curve: list[YieldPoint] = []
    yield_spread_history: list[SpreadPoint] = []
    housing_data: list[HousingPoint] = []
    labor_market: LaborMarket
    recession_indicators: RecessionIndicators
    mortgage30: float | None = None
    cpi_current: float | None = None
    cpi_jan2020: float
    consumer_sentiment: ConsumerSentiment


# ---- At-a-glance ----

class GlanceEconomy(CamelModel):
    gdp: Headline
    unemployment: Headline
    inflation: Headline
    fed_rate: Headline


class GlanceConsumer(CamelModel):
    sentiment: Headline
    gas: Headline | None = None
    food: Headline
    mortgage: Headline


class GlanceSummary(CamelModel):
    timestamp: dt.datetime
    economy: GlanceEconomy
    consumer: GlanceConsumer


# ---- Housing ----

class BedroomRent(CamelModel):
    bedrooms: int
    label: str
    rent: float | None = None
    ratio: float | None = None  # % of monthly income


class OwnershipCost(CamelModel):
    home_price: float
    down_payment: float
    mortgage_rate: float
    principal_and_interest: float
    property_tax: float
    insurance: float
    pmi: float
    total: float
    buying_cheaper: bool | None = None


class Affordability(CamelModel):
    bedrooms: int
    bedroom_label: str
    monthly_rent: float | None = None
    annual_income: float | None = None
    income_source: str | None = None  # "user" | "hud_median"
    rent_to_income_ratio: float | None = None
    verdict: str | None = None
    income_for_30pct: float | None = None
    income_for_25pct: float | None = None
    ownership: OwnershipCost | None = None


class HousingSummary(CamelModel):
    timestamp: dt.datetime
    mortgage30: float | None = None
    mortgage15: float | None = None
    mortgage_date: dt.date | None = None
    fmr: FairMarketRent | None = None
    income_limit: IncomeLimits | None = None
    fmr_comparison: list[BedroomRent] = []
    affordability: Affordability | None = None


# ---- Treasury ----

class DebtFigure(CamelModel):
    value: float | None = None
    formatted: str | None = None
    change: float | None = None
    change_formatted: str | None = None
    date: dt.date | None = None


class TreasuryHeadlines(CamelModel):
    total_debt: DebtFigure
    debt_to_gdp: FormattedValue
    annual_interest: FormattedValue
    avg_interest_rate: FormattedValue


class DebtComponent(CamelModel):
    type: str
    amount: float
    formatted: str


class InterestRate(CamelModel):
    type: str
    rate: float


class Auction(CamelModel):
    date: dt.date
    type: str | None = None
    term: str | None = None
    amount: str  # formatted, or "TBD"
    raw_amount: float = 0.0


class TreasurySummary(CamelModel):
    timestamp: dt.datetime
    summary: TreasuryHeadlines
    debt_history: list[HistoryPoint] = []
    debt_by_type: list[DebtComponent] = []
    debt_outstanding_history: list[HistoryPoint] = []
    interest_rates: list[InterestRate] = []
    upcoming_auctions: list[Auction] = []


# ---- Prices ----

class PriceSeries(CamelModel):
    name: str
    unit: str
    series_id: str
    current: float | None = None
    date: dt.date | None = None
    year_ago: float | None = None
    yoy_change: float | None = None
    history: list[HistoryPoint] = []


class FuelPrices(CamelModel):
    regular: PriceSeries
    diesel: PriceSeries


class PricesStats(CamelModel):
    avg_food_change: float | None = None
    gas_available: bool = False


class PricesSummary(CamelModel):
    timestamp: dt.datetime
    food: dict[str, PriceSeries]
    gas: FuelPrices | None = None
    summary: PricesStats


# ---- Briefing ----

class Briefing(CamelModel):
    briefing: str
    date: dt.date
    cached: bool = False
    generated_at: dt.datetime
