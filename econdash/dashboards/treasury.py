"""Federal debt dashboard from Treasury FiscalData, with FRED GDP for scale."""

from datetime import date, datetime, timezone

from econdash.dashboards.pipeline import Dashboard, SeriesBundle, run_dashboard
from econdash.data.base import SeriesRequest, SeriesSource
from econdash.data.fiscal import (
    AVG_INTEREST_RATES,
    DEBT_OUTSTANDING,
    DEBT_TO_PENNY,
    UPCOMING_AUCTIONS,
)
from econdash.data.observations import parse_value
from econdash.engine import metrics
from econdash.engine.formatting import format_currency, round_or_none
from econdash.models.summary import (
    Auction,
    DebtComponent,
    DebtFigure,
    FormattedValue,
    HistoryPoint,
    InterestRate,
    TreasuryHeadlines,
    TreasurySummary,
)

TOP_INTEREST_RATES = 10
TRILLION = 1e12
BILLION = 1e9

REQUESTS = (
    SeriesRequest(
        name="debt_to_penny", series_id=DEBT_TO_PENNY, limit=30, source="fiscal", raw=True,
        params={"fields": ["record_date", "tot_pub_debt_out_amt", "debt_held_public_amt", "intragov_hold_amt"]},
    ),
    SeriesRequest(
        name="debt_outstanding", series_id=DEBT_OUTSTANDING, limit=12, source="fiscal", raw=True,
        params={"fields": ["record_date", "debt_outstanding_amt"]},
    ),
    SeriesRequest(
        name="avg_interest_rates", series_id=AVG_INTEREST_RATES, limit=50, source="fiscal", raw=True,
        params={"fields": ["record_date", "security_desc", "avg_interest_rate_amt"]},
    ),
    SeriesRequest(
        name="auctions", series_id=UPCOMING_AUCTIONS, limit=10, source="fiscal", raw=True,
        params={
            "fields": ["auction_date", "security_type", "security_term", "offering_amt"],
            "sort": "-auction_date",
        },
    ),
    # Nominal GDP, quarterly, billions (SAAR)
    SeriesRequest(name="gdp", series_id="GDP", limit=5),
)


def _amount(row: dict, field: str) -> float | None:
    """Parse a FiscalData amount; the API sends numbers as strings and "null" for blanks."""
    value = row.get(field)
    if value is None:
        return None
    return parse_value(str(value))


def _text(row: dict, field: str) -> str | None:
    value = row.get(field)
    return value.strip() if isinstance(value, str) and value.strip() else None


def _date(row: dict, field: str) -> date | None:
    try:
        return date.fromisoformat(str(row.get(field)))
    except ValueError:
        return None


def _total_debt_rows(bundle: SeriesBundle) -> list[tuple[date, float]]:
    rows = []
    for row in bundle["debt_to_penny"]:
        record_date, total = _date(row, "record_date"), _amount(row, "tot_pub_debt_out_amt")
        if record_date is not None and total is not None:
            rows.append((record_date, total))
    return rows


def _latest_total_debt(bundle: SeriesBundle) -> float | None:
    rows = _total_debt_rows(bundle)
    return rows[0][1] if rows else None


def _rates_on_latest_date(bundle: SeriesBundle) -> list[InterestRate]:
    """Positive average rates from the newest record date, highest first."""
    rows = bundle["avg_interest_rates"]
    if not rows:
        return []
    latest_record = rows[0].get("record_date")
    rates = []
    for row in rows:
        rate = _amount(row, "avg_interest_rate_amt")
        if row.get("record_date") != latest_record or rate is None or rate <= 0:
            continue
        rates.append(InterestRate(type=str(row.get("security_desc") or "Unknown"), rate=rate))
    return sorted(rates, key=lambda r: r.rate, reverse=True)


def _average_rate(bundle: SeriesBundle) -> float | None:
    """Unweighted mean across security types."""
    return metrics.mean(r.rate for r in _rates_on_latest_date(bundle))


def total_debt(bundle: SeriesBundle) -> DebtFigure:
    rows = _total_debt_rows(bundle)
    if not rows:
        return DebtFigure()
    latest_date, latest = rows[0]
    change = rows[0][1] - rows[1][1] if len(rows) > 1 else None
    return DebtFigure(
        value=latest,
        formatted=format_currency(latest, 2),
        change=change,
        change_formatted=format_currency(abs(change), 1) if change is not None else None,
        date=latest_date,
    )


def debt_history(bundle: SeriesBundle) -> list[HistoryPoint]:
    return metrics.oldest_first([
        HistoryPoint(date=d, label=d.isoformat(), value=total / TRILLION)
        for d, total in _total_debt_rows(bundle)
    ])


def debt_by_type(bundle: SeriesBundle) -> list[DebtComponent]:
    rows = bundle["debt_to_penny"]
    if not rows:
        return []
    public = _amount(rows[0], "debt_held_public_amt")
    intragov = _amount(rows[0], "intragov_hold_amt")
    if public is None or intragov is None:
        return []
    return [
        DebtComponent(type="Debt Held by Public", amount=public, formatted=format_currency(public, 2)),
        DebtComponent(type="Intragovernmental", amount=intragov, formatted=format_currency(intragov, 2)),
    ]


def debt_outstanding_history(bundle: SeriesBundle) -> list[HistoryPoint]:
    """Fiscal year-end totals, in trillions."""
    points = []
    for row in bundle["debt_outstanding"]:
        record_date, amount = _date(row, "record_date"), _amount(row, "debt_outstanding_amt")
        if record_date is not None and amount is not None:
            points.append(HistoryPoint(date=record_date, label=str(record_date.year), value=amount / TRILLION))
    return metrics.oldest_first(points)


def interest_rates(bundle: SeriesBundle) -> list[InterestRate]:
    return _rates_on_latest_date(bundle)[:TOP_INTEREST_RATES]


def avg_interest_rate(bundle: SeriesBundle) -> FormattedValue:
    avg = _average_rate(bundle)
    return FormattedValue(value=avg, formatted=f"{avg:.2f}%" if avg is not None else None)


def annual_interest(bundle: SeriesBundle) -> FormattedValue:
    """Rough annual interest cost: total debt times the average rate."""
    debt, avg = _latest_total_debt(bundle), _average_rate(bundle)
    if debt is None or avg is None:
        return FormattedValue()
    value = debt * avg / 100
    return FormattedValue(value=value, formatted=format_currency(value, 2))


def debt_to_gdp(bundle: SeriesBundle) -> FormattedValue:
    debt, gdp = _latest_total_debt(bundle), metrics.latest(bundle["gdp"])
    if debt is None or not gdp:
        return FormattedValue()
    ratio = debt / (gdp * BILLION) * 100
    return FormattedValue(value=round_or_none(ratio, 2), formatted=f"{ratio:.1f}%")


def auctions(bundle: SeriesBundle) -> list[Auction]:
    results = []
    for row in bundle["auctions"]:
        auction_date = _date(row, "auction_date")
        if auction_date is None:
            continue
        amount = _amount(row, "offering_amt")
        results.append(Auction(
            date=auction_date,
            type=_text(row, "security_type"),
            term=_text(row, "security_term"),
            amount=format_currency(amount, 1) if amount else "TBD",
            raw_amount=amount or 0.0,
        ))
    return results


def build_treasury(derived: dict) -> TreasurySummary:
    return TreasurySummary(
        timestamp=datetime.now(timezone.utc),
        summary=TreasuryHeadlines(
            total_debt=derived["total_debt"],
            debt_to_gdp=derived["debt_to_gdp"],
            annual_interest=derived["annual_interest"],
            avg_interest_rate=derived["avg_interest_rate"],
        ),
        debt_history=derived["debt_history"],
        debt_by_type=derived["debt_by_type"],
        debt_outstanding_history=derived["debt_outstanding_history"],
        interest_rates=derived["interest_rates"],
        upcoming_auctions=derived["auctions"],
    )


TREASURY = Dashboard(
    name="treasury",
    requests=REQUESTS,
    derivations={
        "total_debt": total_debt,
        "debt_to_gdp": debt_to_gdp,
        "annual_interest": annual_interest,
        "avg_interest_rate": avg_interest_rate,
        "debt_history": debt_history,
        "debt_by_type": debt_by_type,
        "debt_outstanding_history": debt_outstanding_history,
        "interest_rates": interest_rates,
        "auctions": auctions,
    },
    build=build_treasury,
)


async def fetch_treasury(sources: dict[str, SeriesSource]) -> TreasurySummary:
    return await run_dashboard(TREASURY, sources)
