"""EIA API v2 client for weekly retail fuel prices."""

import logging

import httpx

from econdash.config import settings
from econdash.data.base import SeriesRequest
from econdash.data.observations import MISSING_SENTINEL
from econdash.models.observation import RawObservation

logger = logging.getLogger(__name__)

EIA_BASE_URL = "https://api.eia.gov/v2"
FUEL_PRICES_ROUTE = "/petroleum/pri/gnd/data/"

# Product codes
REGULAR_GASOLINE = "EPMR"
DIESEL = "EPD2D"

# Area codes
US_NATIONAL = "NUS"


def _value_text(value) -> str:
    """EIA sends numbers, and null for unpublished weeks."""
    return MISSING_SENTINEL if value is None else str(value)


class EIAClient:
    def __init__(
        self,
        api_key: str | None = None,
        timeout: float | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.api_key = api_key or settings.eia_api_key
        self.timeout = timeout or settings.http_timeout_seconds
        self._transport = transport

    async def fetch_fuel_prices(
        self, product: str, region: str = US_NATIONAL, length: int = 52
    ) -> list[RawObservation]:
        """Fetch weekly retail prices for one product/region, newest first."""
        if not self.api_key:
            logger.debug("EIA API key not configured, skipping %s prices", product)
            return []

        params = {
            "api_key": self.api_key,
            "frequency": "weekly",
            "data[0]": "value",
            "facets[product][]": product,
            "facets[duoarea][]": region,
            "sort[0][column]": "period",
            "sort[0][direction]": "desc",
            "length": length,
        }
        try:
            async with httpx.AsyncClient(timeout=self.timeout, transport=self._transport) as client:
                resp = await client.get(f"{EIA_BASE_URL}{FUEL_PRICES_ROUTE}", params=params)
                resp.raise_for_status()
                data = resp.json()
        except (httpx.HTTPError, ValueError) as e:
            logger.warning("EIA request failed for %s/%s: %s", product, region, e)
            return []

        response = data.get("response") if isinstance(data, dict) else None
        rows = response.get("data") if isinstance(response, dict) else None
        if not isinstance(rows, list):
            logger.warning("Unexpected EIA payload for %s/%s", product, region)
            return []

        return [
            RawObservation(date=str(row.get("period", "")), value=_value_text(row.get("value")))
            for row in rows
            if isinstance(row, dict)
        ]

    async def fetch(self, request: SeriesRequest) -> list[RawObservation]:
        return await self.fetch_fuel_prices(
            request.series_id,
            region=request.params.get("region", US_NATIONAL),
            length=request.limit,
        )
