"""FRED API client for economic time series."""

import logging

import httpx

from econdash.config import settings
from econdash.data.base import SeriesRequest
from econdash.models.observation import RawObservation

logger = logging.getLogger(__name__)

FRED_BASE_URL = "https://api.stlouisfed.org/fred"

# Open-ended real-time window: always returns the current data vintage
# rather than whatever revision was live on the server's "today".
REALTIME_START = "1776-07-04"
REALTIME_END = "9999-12-31"


class FREDClient:
    def __init__(
        self,
        api_key: str | None = None,
        timeout: float | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.api_key = api_key or settings.fred_api_key
        self.timeout = timeout or settings.http_timeout_seconds
        self._transport = transport

    async def fetch_series(self, series_id: str, limit: int = 24) -> list[RawObservation]:
        """Fetch up to `limit` most recent observations, newest first.

        Returns [] on any transport error, timeout, non-2xx status or
        malformed body. Callers treat [] as "temporarily unavailable".
        """
        params = {
            "series_id": series_id,
            "api_key": self.api_key,
            "file_type": "json",
            "sort_order": "desc",
            "limit": limit,
            "realtime_start": REALTIME_START,
            "realtime_end": REALTIME_END,
        }
        try:
            async with httpx.AsyncClient(timeout=self.timeout, transport=self._transport) as client:
                resp = await client.get(f"{FRED_BASE_URL}/series/observations", params=params)
                resp.raise_for_status()
                data = resp.json()
        except (httpx.HTTPError, ValueError) as e:
            logger.warning("FRED request failed for %s: %s", series_id, e)
            return []

        if not isinstance(data, dict):
            logger.warning("Unexpected FRED payload for %s", series_id)
            return []

        return [
            RawObservation(date=str(obs.get("date", "")), value=str(obs.get("value", ".")))
            for obs in data.get("observations") or []
            if isinstance(obs, dict)
        ]

    async def fetch(self, request: SeriesRequest) -> list[RawObservation]:
        """SeriesSource entry point for the dashboard pipeline."""
        return await self.fetch_series(request.series_id, request.limit)
