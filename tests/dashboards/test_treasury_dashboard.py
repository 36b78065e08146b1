"""Tests for the federal debt dashboard."""

from datetime import date

import pytest

from econdash.dashboards.treasury import fetch_treasury
from econdash.data.fiscal import AVG_INTEREST_RATES, DEBT_OUTSTANDING, DEBT_TO_PENNY, UPCOMING_AUCTIONS
from econdash.models.observation import RawObservation

DEBT_TO_PENNY_ROWS = [
    {"record_date": "2025-06-03", "tot_pub_debt_out_amt": "36214000000000.00",
     "debt_held_public_amt": "28900000000000.00", "intragov_hold_amt": "7314000000000.00"},
    {"record_date": "2025-06-02", "tot_pub_debt_out_amt": "36200000000000.00",
     "debt_held_public_amt": "28890000000000.00", "intragov_hold_amt": "7310000000000.00"},
]

AVG_RATE_ROWS = [
    {"record_date": "2025-05-31", "security_desc": "Treasury Notes", "avg_interest_rate_amt": "3.000"},
    {"record_date": "2025-05-31", "security_desc": "Treasury Bills", "avg_interest_rate_amt": "4.500"},
    {"record_date": "2025-05-31", "security_desc": "Treasury Bonds", "avg_interest_rate_amt": "3.500"},
    {"record_date": "2025-05-31", "security_desc": "Federal Financing Bank", "avg_interest_rate_amt": "0.000"},
    {"record_date": "2025-05-31", "security_desc": "Domestic Series", "avg_interest_rate_amt": "null"},
    {"record_date": "2025-04-30", "security_desc": "Treasury Bills", "avg_interest_rate_amt": "9.900"},
]

DEBT_OUTSTANDING_ROWS = [
    {"record_date": "2024-09-30", "debt_outstanding_amt": "35464000000000"},
    {"record_date": "2023-09-30", "debt_outstanding_amt": "33167000000000"},
]

AUCTION_ROWS = [
    {"auction_date": "2025-06-12", "security_type": "Note", "security_term": "10-Year", "offering_amt": "null"},
    {"auction_date": "2025-06-10", "security_type": "Bill", "security_term": "13-Week", "offering_amt": "76000000000"},
]


@pytest.fixture
def sources(fake_source):
    fiscal = fake_source({
        DEBT_TO_PENNY: DEBT_TO_PENNY_ROWS,
        AVG_INTEREST_RATES: AVG_RATE_ROWS,
        DEBT_OUTSTANDING: DEBT_OUTSTANDING_ROWS,
        UPCOMING_AUCTIONS: AUCTION_ROWS,
    })
    fred = fake_source({"GDP": [RawObservation(date="2025-01-01", value="29977.6")]})
    return {"fiscal": fiscal, "fred": fred}


class TestHeadlines:
    async def test_total_debt(self, sources):
        debt = (await fetch_treasury(sources)).summary.total_debt
        assert debt.value == 36214e9
        assert debt.formatted == "36.21T"
        assert debt.change == pytest.approx(14e9)
        assert debt.change_formatted == "14.0B"
        assert debt.date == date(2025, 6, 3)

    async def test_average_rate_and_interest(self, sources):
        summary = (await fetch_treasury(sources)).summary
        assert summary.avg_interest_rate.value == pytest.approx(11.0 / 3)
        assert summary.avg_interest_rate.formatted == "3.67%"
        assert summary.annual_interest.value == pytest.approx(36214e9 * (11.0 / 3) / 100)
        assert summary.annual_interest.formatted == "1.33T"

    async def test_debt_to_gdp(self, sources):
        ratio = (await fetch_treasury(sources)).summary.debt_to_gdp
        assert ratio.value == pytest.approx(120.80, abs=0.01)
        assert ratio.formatted == "120.8%"


class TestDetail:
    async def test_interest_rates_latest_positive_descending(self, sources):
        rates = (await fetch_treasury(sources)).interest_rates
        assert [(r.type, r.rate) for r in rates] == [
            ("Treasury Bills", 4.5),
            ("Treasury Bonds", 3.5),
            ("Treasury Notes", 3.0),
        ]

    async def test_composition(self, sources):
        parts = (await fetch_treasury(sources)).debt_by_type
        assert [(p.type, p.formatted) for p in parts] == [
            ("Debt Held by Public", "28.90T"),
            ("Intragovernmental", "7.31T"),
        ]

    async def test_histories_oldest_first(self, sources):
        summary = await fetch_treasury(sources)
        assert [p.date for p in summary.debt_history] == [date(2025, 6, 2), date(2025, 6, 3)]
        assert summary.debt_history[-1].value == pytest.approx(36.214)
        assert [p.label for p in summary.debt_outstanding_history] == ["2023", "2024"]

    async def test_auctions(self, sources):
        auctions = (await fetch_treasury(sources)).upcoming_auctions
        assert [(a.term, a.amount) for a in auctions] == [("10-Year", "TBD"), ("13-Week", "76.0B")]
        assert auctions[1].raw_amount == 76e9


class TestDegraded:
    async def test_no_gdp(self, sources, fake_source):
        sources["fred"] = fake_source()
        summary = (await fetch_treasury(sources)).summary
        assert summary.debt_to_gdp.value is None
        assert summary.total_debt.value == 36214e9

    async def test_malformed_auction_fields_are_unavailable(self, sources, fake_source):
        rows = [{"auction_date": "2025-06-12", "security_type": 13, "security_term": ["10-Year"],
                 "offering_amt": "42000000000"}]
        sources["fiscal"] = fake_source({
            DEBT_TO_PENNY: DEBT_TO_PENNY_ROWS,
            AVG_INTEREST_RATES: AVG_RATE_ROWS,
            UPCOMING_AUCTIONS: rows,
        })
        summary = await fetch_treasury(sources)
        (auction,) = summary.upcoming_auctions
        assert auction.type is None
        assert auction.term is None
        assert auction.amount == "42.0B"
        assert summary.summary.total_debt.value == 36214e9

    async def test_fiscal_down(self, fake_source):
        summary = await fetch_treasury({"fiscal": fake_source(), "fred": fake_source()})
        assert summary.summary.total_debt.value is None
        assert summary.summary.annual_interest.value is None
        assert summary.interest_rates == []
        assert summary.debt_by_type == []
