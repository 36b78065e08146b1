"""FastAPI dependency injection."""

from fastapi import Depends, Request, Response

from econdash.config import settings
from econdash.dashboards.briefing import BriefingService
from econdash.dashboards.economy import fetch_economic_summary
from econdash.data.base import SeriesSource
from econdash.data.cache import ResponseCache, cache_key, read_through
from econdash.data.eia import EIAClient
from econdash.data.fiscal import FiscalDataClient
from econdash.data.fred import FREDClient
from econdash.data.hud import HUDClient
from econdash.models.summary import EconomicSummary

ECONOMY_KEY = cache_key("economy")


def get_cache(request: Request) -> ResponseCache:
    return request.app.state.cache


def get_sources() -> dict[str, SeriesSource]:
    return {
        "fred": FREDClient(),
        "eia": EIAClient(),
        "fiscal": FiscalDataClient(),
        "hud": HUDClient(),
    }


async def cached_economic_summary(
    cache: ResponseCache, sources: dict[str, SeriesSource]
) -> EconomicSummary:
    return await read_through(
        cache,
        ECONOMY_KEY,
        settings.dashboard_cache_ttl_seconds,
        EconomicSummary,
        lambda: fetch_economic_summary(sources),
    )


def get_briefing_service(
    cache: ResponseCache = Depends(get_cache),
    sources: dict[str, SeriesSource] = Depends(get_sources),
) -> BriefingService:
    return BriefingService(cache, lambda: cached_economic_summary(cache, sources))


def set_cache_headers(response: Response, ttl_seconds: int) -> None:
    """Let CDNs serve the response for the TTL, and stale for twice as long."""
    response.headers["Cache-Control"] = (
        f"s-maxage={ttl_seconds}, stale-while-revalidate={ttl_seconds * 2}"
    )
