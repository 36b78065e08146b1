"""Tests for the at-a-glance dashboard."""

from datetime import date, timedelta

import pytest

from econdash.dashboards.glance import fetch_glance
from econdash.models.observation import RawObservation


def weekly(values, newest=date(2025, 6, 2)):
    return [
        RawObservation(date=(newest - timedelta(weeks=i)).isoformat(), value=str(v))
        for i, v in enumerate(values)
    ]


@pytest.fixture
def sources(fake_source, monthly):
    fred = fake_source({
        "GDPC1": monthly([23500, 23300, 23200, 23100, 23000], newest=date(2025, 4, 1)),
        "UNRATE": monthly([4.2, 4.1, 4.1]),
        "CPIAUCSL": monthly([320.0] + [315.0] * 11 + [310.0]),
        "FEDFUNDS": monthly([4.33, 4.33, 4.33]),
        "UMCSENT": monthly([52.2, 50.8, 57.0]),
        "CPIUFDNS": monthly([330.0] + [325.0] * 11 + [320.0]),
        "MORTGAGE30US": monthly([6.85, 6.89, 6.81, 6.76, 6.86]),
    })
    eia = fake_source({"EPMR": weekly([3.3] + [3.0] * 51)})
    return {"fred": fred, "eia": eia}


class TestGlance:
    async def test_economy_block(self, sources):
        glance = await fetch_glance(sources)
        economy = glance.economy
        assert economy.gdp.value == 23.5
        assert economy.gdp.period == "Q2 2025"
        assert economy.unemployment.value == 4.2
        assert economy.unemployment.change == 0.1
        assert economy.unemployment.period == "Jun 2025"
        assert economy.inflation.value == 3.2
        assert economy.fed_rate.value == 4.33

    async def test_consumer_block(self, sources):
        consumer = (await fetch_glance(sources)).consumer
        assert consumer.sentiment.value == 52.2
        assert consumer.sentiment.change == 1.4
        assert consumer.food.value == 3.1  # (330 - 320) / 320
        assert consumer.mortgage.value == 6.85
        assert consumer.mortgage.change == -0.04

    async def test_gas_price_year_over_year(self, sources):
        gas = (await fetch_glance(sources)).consumer.gas
        assert gas.value == 3.3
        assert gas.change == 10.0
        assert gas.period == "2025-06-02"

    async def test_gas_unavailable_without_eia(self, sources):
        del sources["eia"]
        glance = await fetch_glance(sources)
        assert glance.consumer.gas is None
        assert glance.economy.unemployment.value == 4.2

    async def test_short_history_leaves_yoy_unavailable(self, fake_source, monthly):
        glance = await fetch_glance({"fred": fake_source({"CPIAUCSL": monthly([320.0] * 12)})})
        assert glance.economy.inflation.value is None
        assert glance.economy.inflation.period == "Jun 2025"
