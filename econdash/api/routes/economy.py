"""Economic summary and at-a-glance routes."""

from fastapi import APIRouter, Depends, Response

from econdash.api.deps import cached_economic_summary, get_cache, get_sources, set_cache_headers
from econdash.config import settings
from econdash.dashboards.glance import fetch_glance
from econdash.data.base import SeriesSource
from econdash.data.cache import ResponseCache, cache_key, read_through
from econdash.models.summary import EconomicSummary, GlanceSummary

router = APIRouter(prefix="/api/v1", tags=["economy"])


@router.get("/economy", response_model=EconomicSummary)
async def get_economy(
    response: Response,
    cache: ResponseCache = Depends(get_cache),
    sources: dict[str, SeriesSource] = Depends(get_sources),
):
    """Headline indicators, yield curve, recession signals and history charts."""
    summary = await cached_economic_summary(cache, sources)
    set_cache_headers(response, settings.dashboard_cache_ttl_seconds)
    return summary


@router.get("/glance", response_model=GlanceSummary)
async def get_glance(
    response: Response,
    cache: ResponseCache = Depends(get_cache),
    sources: dict[str, SeriesSource] = Depends(get_sources),
):
    """Compact headline figures for the homepage."""
    ttl = settings.dashboard_cache_ttl_seconds
    summary = await read_through(
        cache, cache_key("glance"), ttl, GlanceSummary, lambda: fetch_glance(sources)
    )
    set_cache_headers(response, ttl)
    return summary
