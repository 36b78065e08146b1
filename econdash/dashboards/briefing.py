"""Daily AI briefing, cached once per UTC day."""

import logging
from datetime import date, datetime, timezone
from typing import Awaitable, Callable

from pydantic import ValidationError

from econdash.config import settings
from econdash.data.cache import ResponseCache, cache_key
from econdash.data.narrative import generate_briefing
from econdash.models.summary import Briefing, EconomicSummary

logger = logging.getLogger(__name__)

FALLBACK_BRIEFING = (
    "Economic briefing temporarily unavailable. "
    "Please check the dashboard charts for current data."
)


class BriefingUnavailable(Exception):
    """The narrative could not be generated (no API key, or the call failed)."""


def utc_today() -> date:
    return datetime.now(timezone.utc).date()


class BriefingService:
    def __init__(
        self,
        cache: ResponseCache,
        economy_builder: Callable[[], Awaitable[EconomicSummary]],
        ttl_seconds: int | None = None,
        today: Callable[[], date] = utc_today,
    ):
        self.cache = cache
        self.economy_builder = economy_builder
        self.ttl_seconds = ttl_seconds or settings.briefing_cache_ttl_seconds
        self._today = today

    def key_for(self, day: date) -> str:
        return cache_key("briefing", day.isoformat())

    async def get(self) -> Briefing:
        """Today's briefing from the cache, generating it on a miss."""
        day = self._today()
        cached = await self.cache.get(self.key_for(day))
        if cached is not None:
            try:
                return Briefing.model_validate_json(cached).model_copy(update={"cached": True})
            except ValidationError:
                logger.warning("Discarding unreadable cached briefing for %s", day)
        return await self.regenerate()

    async def regenerate(self) -> Briefing:
        """Rebuild today's briefing and overwrite the cached copy.

        Raises BriefingUnavailable when no narrative was produced; nothing is
        cached in that case. AssemblyError from the economy build propagates.
        """
        day = self._today()
        summary = await self.economy_builder()
        text = await generate_briefing(summary, day)
        if text is None:
            raise BriefingUnavailable(f"No briefing generated for {day}")

        briefing = Briefing(
            briefing=text,
            date=day,
            cached=False,
            generated_at=datetime.now(timezone.utc),
        )
        await self.cache.set(self.key_for(day), briefing.to_json(), self.ttl_seconds)
        logger.info("Generated briefing for %s (%d chars)", day, len(text))
        return briefing
