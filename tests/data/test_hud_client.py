"""Tests for HUD FMR / Income Limits decoding and the HUD client."""

import httpx
import pytest

from econdash.data.base import SeriesRequest
from econdash.data.hud import HUDClient, decode_fmr, decode_income_limits

SMALL_AREA_FMR = {
    "data": {
        "county_name": "Franklin County",
        "metro_name": "Columbus, OH HUD Metro FMR Area",
        "year": "2025",
        "smallarea_status": "1",
        "basicdata": [
            {"zip_code": "MSA level", "Efficiency": 980, "One-Bedroom": 1090, "Two-Bedroom": 1320,
             "Three-Bedroom": 1700, "Four-Bedroom": 1980},
            {"zip_code": "43215", "Efficiency": 1210, "One-Bedroom": 1350, "Two-Bedroom": 1630,
             "Three-Bedroom": 2100, "Four-Bedroom": 2450},
        ],
    }
}

COUNTY_FMR = {
    "data": {
        "areaname": "Coffee County, AL",
        "year": 2025,
        "smallarea_status": "0",
        "Efficiency": "$712",
        "One-Bedroom": "$735",
        "Two-Bedroom": "$945",
        "Three-Bedroom": "$1,226",
        "Four-Bedroom": "$1,354",
    }
}

INCOME_LIMITS = {
    "data": {
        "area_name": "Columbus, OH MSA",
        "median_income": 104200,
        "very_low": {"il50_p1": 36500, "il50_p2": 41700, "il50_p4": 52100},
        "extremely_low": {"il30_p1": 21900, "il30_p4": 31200},
        "low": {"il80_p1": 58350, "il80_p4": 83350},
    }
}


# ── FMR decode ───────────────────────────────────────────────────

class TestDecodeFMR:
    def test_small_area_list_matches_zip(self):
        fmr = decode_fmr(SMALL_AREA_FMR, "43215")
        assert fmr.rents() == [1210.0, 1350.0, 1630.0, 2100.0, 2450.0]
        assert fmr.small_area is True
        assert fmr.year == 2025
        assert fmr.metro_name == "Columbus, OH HUD Metro FMR Area"

    def test_small_area_list_falls_back_to_first_row(self):
        fmr = decode_fmr(SMALL_AREA_FMR, "43004")
        assert fmr.fmr_2br == 1320.0

    def test_basicdata_dict_with_legacy_keys(self):
        payload = {"data": {"county_name": "Travis County", "basicdata": {
            "fmr_0": 1300, "fmr_1": 1450, "fmr_2": 1700, "fmr_3": 2200, "fmr_4": 2700,
        }}}
        fmr = decode_fmr(payload, "78701")
        assert fmr.fmr_for_beds(3) == 2200.0
        assert fmr.county_name == "Travis County"
        assert fmr.small_area is False

    def test_top_level_rents_with_currency_strings(self):
        fmr = decode_fmr(COUNTY_FMR, "36330")
        assert fmr.rents() == [712.0, 735.0, 945.0, 1226.0, 1354.0]
        assert fmr.county_name == "Coffee County, AL"

    def test_beds_capped(self):
        fmr = decode_fmr(COUNTY_FMR, "36330")
        assert fmr.fmr_for_beds(6) == fmr.fmr_4br
        assert fmr.fmr_for_beds(-1) == fmr.fmr_0br

    @pytest.mark.parametrize("payload", [
        {},
        {"data": {}},
        {"data": []},
        {"data": {"county_name": "Nowhere", "basicdata": {"Efficiency": "n/a"}}},
        "not json object",
    ])
    def test_unusable_payloads(self, payload):
        assert decode_fmr(payload, "00000") is None


# ── Income limits decode ─────────────────────────────────────────

class TestDecodeIncomeLimits:
    def test_household_tables(self):
        limits = decode_income_limits(INCOME_LIMITS, "43215")
        assert limits.median_income == 104200.0
        assert limits.very_low == {1: 36500.0, 2: 41700.0, 4: 52100.0}
        assert limits.extremely_low[4] == 31200.0
        assert limits.low[1] == 58350.0

    def test_scalar_limits_map_to_reference_household(self):
        payload = {"data": {"median": "85,000", "very_low": 42500, "low": "68000"}}
        limits = decode_income_limits(payload, "36330")
        assert limits.median_income == 85000.0
        assert limits.very_low == {4: 42500.0}
        assert limits.low == {4: 68000.0}
        assert limits.extremely_low == {}

    def test_no_figures(self):
        assert decode_income_limits({"data": {"area_name": "X"}}, "00000") is None


# ── Client ───────────────────────────────────────────────────────

def client_for(handler) -> HUDClient:
    return HUDClient(api_key="test-token", timeout=1.0, transport=httpx.MockTransport(handler))


class TestHUDClient:
    async def test_get_fmr_uses_bearer_auth(self):
        seen = {}

        def handler(request):
            seen["auth"] = request.headers.get("Authorization")
            seen["path"] = request.url.path
            return httpx.Response(200, json=SMALL_AREA_FMR)

        fmr = await client_for(handler).get_fmr("43215")

        assert seen["auth"] == "Bearer test-token"
        assert seen["path"] == "/hudapi/public/fmr/data/43215"
        assert fmr.fmr_0br == 1210.0

    async def test_get_income_limits(self):
        limits = await client_for(lambda r: httpx.Response(200, json=INCOME_LIMITS)).get_income_limits("43215")
        assert limits.median_income == 104200.0

    async def test_no_api_key(self):
        def handler(request):
            raise AssertionError("should not be called")

        client = client_for(handler)
        client.api_key = ""
        assert await client.get_fmr("43215") is None

    async def test_http_error(self):
        client = client_for(lambda r: httpx.Response(404, json={"error": "not found"}))
        assert await client.get_fmr("43215") is None

    async def test_undecodable_response(self):
        client = client_for(lambda r: httpx.Response(200, json={"data": {}}))
        assert await client.get_fmr("43215") is None

    async def test_fetch_dispatches_on_dataset(self):
        def handler(request):
            if "/il/" in request.url.path:
                return httpx.Response(200, json=INCOME_LIMITS)
            return httpx.Response(200, json=SMALL_AREA_FMR)

        client = client_for(handler)
        fmr_rows = await client.fetch(SeriesRequest(name="fmr", series_id="fmr", source="hud",
                                                    raw=True, params={"zip": "43215"}))
        il_rows = await client.fetch(SeriesRequest(name="income_limits", series_id="il", source="hud",
                                                   raw=True, params={"zip": "43215"}))
        assert fmr_rows[0].fmr_2br == 1630.0
        assert il_rows[0].median_income == 104200.0

    async def test_fetch_empty_when_unavailable(self):
        client = client_for(lambda r: httpx.Response(500))
        request = SeriesRequest(name="fmr", series_id="fmr", source="hud", raw=True, params={"zip": "43215"})
        assert await client.fetch(request) == []

    async def test_fetch_unknown_dataset(self):
        client = client_for(lambda r: httpx.Response(200, json={}))
        request = SeriesRequest(name="x", series_id="chas", source="hud", raw=True, params={"zip": "43215"})
        assert await client.fetch(request) == []
