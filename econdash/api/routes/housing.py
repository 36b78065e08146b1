"""Housing and rent affordability routes."""

from fastapi import APIRouter, Depends, HTTPException, Query, Response

from econdash.api.deps import get_cache, get_sources, set_cache_headers
from econdash.config import settings
from econdash.dashboards.housing import DEFAULT_BEDROOMS, fetch_housing, validate_zip
from econdash.data.base import SeriesSource
from econdash.data.cache import ResponseCache, cache_key, read_through
from econdash.models.summary import HousingSummary

router = APIRouter(prefix="/api/v1", tags=["housing"])


@router.get("/housing", response_model=HousingSummary)
async def get_housing(
    response: Response,
    zip: str | None = Query(default=None, description="5-digit ZIP code"),
    bedrooms: int = Query(default=DEFAULT_BEDROOMS, ge=0, le=4),
    income: float | None = Query(default=None, gt=0, description="Annual household income"),
    home_price: float | None = Query(default=None, gt=0),
    down_payment: float | None = Query(default=None, ge=0),
    cache: ResponseCache = Depends(get_cache),
    sources: dict[str, SeriesSource] = Depends(get_sources),
):
    """Mortgage rates, plus HUD Fair Market Rents and affordability for a ZIP."""
    if zip is not None:
        try:
            validate_zip(zip)
        except ValueError as e:
            raise HTTPException(status_code=400, detail=str(e))

    key = cache_key(
        "housing", zip or "national", str(bedrooms),
        str(income or ""), str(home_price or ""), str(down_payment or ""),
    )
    ttl = settings.dashboard_cache_ttl_seconds
    summary = await read_through(
        cache, key, ttl, HousingSummary,
        lambda: fetch_housing(sources, zip, bedrooms, income, home_price, down_payment),
    )
    set_cache_headers(response, ttl)
    return summary
