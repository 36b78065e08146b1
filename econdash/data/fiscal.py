"""U.S. Treasury FiscalData API client (no key required)."""

import logging

import httpx

from econdash.config import settings
from econdash.data.base import SeriesRequest

logger = logging.getLogger(__name__)

FISCAL_BASE_URL = "https://api.fiscaldata.treasury.gov/services/api/fiscal_service"

# Accounting endpoints
DEBT_TO_PENNY = "/v2/accounting/od/debt_to_penny"
DEBT_OUTSTANDING = "/v2/accounting/od/debt_outstanding"
AVG_INTEREST_RATES = "/v2/accounting/od/avg_interest_rates"
UPCOMING_AUCTIONS = "/v1/accounting/od/upcoming_auctions"


class FiscalDataClient:
    def __init__(
        self,
        timeout: float | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.timeout = timeout or settings.http_timeout_seconds
        self._transport = transport

    async def fetch_records(
        self,
        endpoint: str,
        fields: list[str],
        sort: str = "-record_date",
        limit: int = 30,
    ) -> list[dict]:
        """Fetch the flat `data` array for an endpoint.

        Numeric fields come back as strings; parsing is the caller's job.
        """
        params = {
            "fields": ",".join(fields),
            "sort": sort,
            "page[size]": limit,  # FiscalData's result limit
        }
        try:
            async with httpx.AsyncClient(timeout=self.timeout, transport=self._transport) as client:
                resp = await client.get(f"{FISCAL_BASE_URL}{endpoint}", params=params)
                resp.raise_for_status()
                data = resp.json()
        except (httpx.HTTPError, ValueError) as e:
            logger.warning("FiscalData request failed for %s: %s", endpoint, e)
            return []

        rows = data.get("data") if isinstance(data, dict) else None
        if not isinstance(rows, list):
            logger.warning("Unexpected FiscalData payload for %s", endpoint)
            return []
        return [row for row in rows if isinstance(row, dict)]

    async def fetch(self, request: SeriesRequest) -> list[dict]:
        return await self.fetch_records(
            request.series_id,
            fields=request.params.get("fields", []),
            sort=request.params.get("sort", "-record_date"),
            limit=request.limit,
        )
