"""Daily AI briefing routes."""

import logging

from fastapi import APIRouter, Depends, Header, HTTPException, Response

from econdash.api.deps import get_briefing_service, set_cache_headers
from econdash.config import settings
from econdash.dashboards.briefing import BriefingService
from econdash.models.summary import Briefing

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/v1", tags=["briefing"])

# Shorter than the cache TTL so browsers pick up the cron-generated copy
BRIEFING_EDGE_TTL_SECONDS = 3600


@router.get("/briefing", response_model=Briefing)
async def get_briefing(
    response: Response,
    service: BriefingService = Depends(get_briefing_service),
):
    """Today's briefing, generated on first request of the day."""
    briefing = await service.get()
    set_cache_headers(response, BRIEFING_EDGE_TTL_SECONDS)
    return briefing


@router.post("/cron/generate-briefing")
async def generate_daily_briefing(
    authorization: str | None = Header(default=None),
    service: BriefingService = Depends(get_briefing_service),
):
    """Regenerate today's briefing. Requires the cron secret when one is configured."""
    if settings.cron_secret and authorization != f"Bearer {settings.cron_secret}":
        raise HTTPException(status_code=401, detail="Unauthorized")

    logger.info("Starting daily briefing generation")
    briefing = await service.regenerate()
    return {
        "success": True,
        "message": "Daily briefing generated and stored",
        "date": briefing.date.isoformat(),
    }
