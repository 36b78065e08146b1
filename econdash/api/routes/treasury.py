"""Federal debt routes."""

from fastapi import APIRouter, Depends, Response

from econdash.api.deps import get_cache, get_sources, set_cache_headers
from econdash.config import settings
from econdash.dashboards.treasury import fetch_treasury
from econdash.data.base import SeriesSource
from econdash.data.cache import ResponseCache, cache_key, read_through
from econdash.models.summary import TreasurySummary

router = APIRouter(prefix="/api/v1", tags=["treasury"])


@router.get("/treasury", response_model=TreasurySummary)
async def get_treasury(
    response: Response,
    cache: ResponseCache = Depends(get_cache),
    sources: dict[str, SeriesSource] = Depends(get_sources),
):
    """Total debt, composition, interest costs and upcoming auctions."""
    ttl = settings.prices_cache_ttl_seconds
    summary = await read_through(
        cache, cache_key("treasury"), ttl, TreasurySummary, lambda: fetch_treasury(sources)
    )
    set_cache_headers(response, ttl)
    return summary
