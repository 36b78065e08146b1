"""Grocery and fuel price routes."""

from fastapi import APIRouter, Depends, Response

from econdash.api.deps import get_cache, get_sources, set_cache_headers
from econdash.config import settings
from econdash.dashboards.prices import fetch_prices
from econdash.data.base import SeriesSource
from econdash.data.cache import ResponseCache, cache_key, read_through
from econdash.models.summary import PricesSummary

router = APIRouter(prefix="/api/v1", tags=["prices"])


@router.get("/prices", response_model=PricesSummary)
async def get_prices(
    response: Response,
    cache: ResponseCache = Depends(get_cache),
    sources: dict[str, SeriesSource] = Depends(get_sources),
):
    """BLS average food prices and EIA weekly fuel prices."""
    ttl = settings.prices_cache_ttl_seconds
    summary = await read_through(
        cache, cache_key("prices"), ttl, PricesSummary, lambda: fetch_prices(sources)
    )
    set_cache_headers(response, ttl)
    return summary
