"""Tests for the cached daily briefing service."""

from datetime import date
from unittest.mock import AsyncMock, patch

import pytest

from econdash.dashboards.briefing import BriefingService, BriefingUnavailable
from econdash.dashboards.pipeline import AssemblyError

TODAY = date(2025, 6, 10)
KEY = "econdash:briefing:2025-06-10"


@pytest.fixture
def economy_builder(economic_summary):
    return AsyncMock(return_value=economic_summary)


@pytest.fixture
def service(memory_cache, economy_builder):
    return BriefingService(memory_cache, economy_builder, ttl_seconds=86400, today=lambda: TODAY)


class TestGet:
    async def test_miss_generates_and_caches(self, service, memory_cache):
        with patch("econdash.dashboards.briefing.generate_briefing",
                   new_callable=AsyncMock, return_value="Steady growth.") as generate:
            briefing = await service.get()

        assert briefing.briefing == "Steady growth."
        assert briefing.date == TODAY
        assert briefing.cached is False
        generate.assert_awaited_once()
        assert await memory_cache.get(KEY) is not None

    async def test_hit_skips_generation(self, service, economy_builder):
        with patch("econdash.dashboards.briefing.generate_briefing",
                   new_callable=AsyncMock, return_value="Steady growth.") as generate:
            first = await service.get()
            second = await service.get()

        assert second.cached is True
        assert second.briefing == first.briefing
        assert second.generated_at == first.generated_at
        generate.assert_awaited_once()
        economy_builder.assert_awaited_once()

    async def test_new_day_new_key(self, memory_cache, economy_builder):
        days = iter([date(2025, 6, 10), date(2025, 6, 11)])
        service = BriefingService(memory_cache, economy_builder, today=lambda: next(days))
        with patch("econdash.dashboards.briefing.generate_briefing",
                   new_callable=AsyncMock, side_effect=["Monday.", "Tuesday."]):
            await service.get()
            briefing = await service.get()

        assert briefing.briefing == "Tuesday."
        assert briefing.cached is False

    async def test_unreadable_cache_entry_regenerates(self, service, memory_cache):
        await memory_cache.set(KEY, "garbage", 60)
        with patch("econdash.dashboards.briefing.generate_briefing",
                   new_callable=AsyncMock, return_value="Fresh."):
            assert (await service.get()).briefing == "Fresh."


class TestRegenerate:
    async def test_overwrites_cached_copy(self, service):
        with patch("econdash.dashboards.briefing.generate_briefing",
                   new_callable=AsyncMock, side_effect=["Old.", "New."]):
            await service.get()
            regenerated = await service.regenerate()
            cached = await service.get()

        assert regenerated.briefing == "New."
        assert cached.briefing == "New."
        assert cached.cached is True

    async def test_no_narrative_is_not_cached(self, service, memory_cache):
        with patch("econdash.dashboards.briefing.generate_briefing",
                   new_callable=AsyncMock, return_value=None):
            with pytest.raises(BriefingUnavailable):
                await service.regenerate()
        assert await memory_cache.get(KEY) is None

    async def test_assembly_error_propagates(self, memory_cache):
        builder = AsyncMock(side_effect=AssemblyError("economy", ValueError("boom")))
        service = BriefingService(memory_cache, builder, today=lambda: TODAY)
        with pytest.raises(AssemblyError):
            await service.get()
        assert await memory_cache.get(KEY) is None
