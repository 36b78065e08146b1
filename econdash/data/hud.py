"""HUD Fair Market Rent (FMR) and Income Limits (IL) API client.

HUD's payload shape depends on the dataset edition and on whether the area
uses Small Area FMRs, so responses are decoded once here into FairMarketRent /
IncomeLimits and nothing downstream touches raw HUD JSON.
"""

import logging
import math
import re
from typing import Any

import httpx

from econdash.config import settings
from econdash.data.base import SeriesRequest
from econdash.models.housing import FairMarketRent, IncomeLimits

logger = logging.getLogger(__name__)

HUD_BASE_URL = "https://www.huduser.gov/hudapi/public"
HUD_FMR_PATH = "/fmr/data"
HUD_IL_PATH = "/il/data"

# Dataset names used as series IDs in dashboard requests
HUD_FMR_DATASET = "fmr"
HUD_IL_DATASET = "il"

# Candidate key names per bedroom count, newest edition first
FMR_KEYS: dict[int, tuple[str, ...]] = {
    0: ("Efficiency", "fmr_0"),
    1: ("One-Bedroom", "fmr_1"),
    2: ("Two-Bedroom", "fmr_2"),
    3: ("Three-Bedroom", "fmr_3"),
    4: ("Four-Bedroom", "fmr_4"),
}
COUNTY_NAME_KEYS = ("county_name", "areaname", "area_name")
METRO_NAME_KEYS = ("metro_name", "areaname", "area_name")
MEDIAN_INCOME_KEYS = ("median_income", "median")
INCOME_TABLES = ("very_low", "extremely_low", "low")

# Scalar income limits are quoted for HUD's reference family size
REFERENCE_HOUSEHOLD_SIZE = 4

_HOUSEHOLD_KEY = re.compile(r"_p(\d+)$")


def _to_float(value: Any) -> float | None:
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        return float(value) if math.isfinite(value) else None
    if isinstance(value, str):
        try:
            parsed = float(value.replace(",", "").replace("$", "").strip())
        except ValueError:
            return None
        return parsed if math.isfinite(parsed) else None
    return None


def _first_number(row: dict, keys: tuple[str, ...]) -> float | None:
    for key in keys:
        value = _to_float(row.get(key))
        if value is not None:
            return value
    return None


def _first_text(row: dict, keys: tuple[str, ...]) -> str | None:
    for key in keys:
        value = row.get(key)
        if isinstance(value, str) and value.strip():
            return value.strip()
    return None


def _select_fmr_row(top: dict, zip_code: str) -> dict:
    """Pick the dict holding bedroom rents.

    basicdata is a list for Small Area FMR areas (one row per ZIP, first row
    MSA-level), a dict for ZIP-keyed lookups, and absent for county-level data
    where rents sit on the top-level object.
    """
    basicdata = top.get("basicdata")
    if isinstance(basicdata, list):
        rows = [row for row in basicdata if isinstance(row, dict)]
        for row in rows:
            if str(row.get("zip_code", "")) == zip_code:
                return row
        if rows:
            return rows[0]
        return top
    if isinstance(basicdata, dict):
        return basicdata
    return top


def decode_fmr(payload: Any, zip_code: str) -> FairMarketRent | None:
    """Decode an FMR response into a FairMarketRent, or None if no rents found."""
    top = payload.get("data") if isinstance(payload, dict) else None
    if not isinstance(top, dict) or not top:
        return None

    row = _select_fmr_row(top, zip_code)
    rents = {beds: _first_number(row, keys) for beds, keys in FMR_KEYS.items()}
    if all(rent is None for rent in rents.values()):
        return None

    year = _to_float(top.get("year"))
    return FairMarketRent(
        zip_code=zip_code,
        county_name=_first_text(top, COUNTY_NAME_KEYS),
        metro_name=_first_text(top, METRO_NAME_KEYS),
        year=int(year) if year is not None else None,
        fmr_0br=rents[0],
        fmr_1br=rents[1],
        fmr_2br=rents[2],
        fmr_3br=rents[3],
        fmr_4br=rents[4],
        small_area=str(top.get("smallarea_status", "")) == "1",
    )


def _decode_income_table(value: Any) -> dict[int, float]:
    if isinstance(value, dict):
        table = {}
        for key, amount in value.items():
            match = _HOUSEHOLD_KEY.search(str(key))
            parsed = _to_float(amount)
            if match and parsed is not None:
                table[int(match.group(1))] = parsed
        return table
    scalar = _to_float(value)
    if scalar is not None:
        return {REFERENCE_HOUSEHOLD_SIZE: scalar}
    return {}


def decode_income_limits(payload: Any, zip_code: str) -> IncomeLimits | None:
    """Decode an Income Limits response, or None if it carries no figures."""
    top = payload.get("data") if isinstance(payload, dict) else None
    if not isinstance(top, dict) or not top:
        return None

    tables = {name: _decode_income_table(top.get(name)) for name in INCOME_TABLES}
    median = _first_number(top, MEDIAN_INCOME_KEYS)
    if median is None and not any(tables.values()):
        return None

    return IncomeLimits(zip_code=zip_code, median_income=median, **tables)


class HUDClient:
    def __init__(
        self,
        api_key: str | None = None,
        timeout: float | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.api_key = api_key or settings.hud_api_key
        self.timeout = timeout or settings.http_timeout_seconds
        self._transport = transport

    async def _get(self, path: str, entity_id: str) -> Any | None:
        if not self.api_key:
            logger.debug("HUD API key not configured, skipping %s lookup", path)
            return None

        headers = {"Authorization": f"Bearer {self.api_key}"}
        try:
            async with httpx.AsyncClient(timeout=self.timeout, transport=self._transport) as client:
                resp = await client.get(f"{HUD_BASE_URL}{path}/{entity_id}", headers=headers)
                resp.raise_for_status()
                return resp.json()
        except (httpx.HTTPError, ValueError) as e:
            logger.warning("HUD %s lookup failed for %s: %s", path, entity_id, e)
            return None

    async def get_fmr(self, zip_code: str) -> FairMarketRent | None:
        """Fetch Fair Market Rents for a 5-digit ZIP code."""
        payload = await self._get(HUD_FMR_PATH, zip_code)
        if payload is None:
            return None
        fmr = decode_fmr(payload, zip_code)
        if fmr is None:
            logger.warning("HUD FMR response for %s had no usable rents", zip_code)
        return fmr

    async def get_income_limits(self, zip_code: str) -> IncomeLimits | None:
        """Fetch area median income and income limits for a ZIP code."""
        payload = await self._get(HUD_IL_PATH, zip_code)
        if payload is None:
            return None
        limits = decode_income_limits(payload, zip_code)
        if limits is None:
            logger.warning("HUD IL response for %s had no usable figures", zip_code)
        return limits

    async def fetch(self, request: SeriesRequest) -> list:
        """Pipeline entry point: series_id names the dataset, params["zip"] the ZIP."""
        lookup = {HUD_FMR_DATASET: self.get_fmr, HUD_IL_DATASET: self.get_income_limits}.get(request.series_id)
        if lookup is None:
            logger.warning("Unknown HUD dataset %r", request.series_id)
            return []
        result = await lookup(request.params["zip"])
        return [result] if result is not None else []
