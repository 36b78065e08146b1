"""Generic fetch -> derive -> assemble pipeline shared by all dashboards.

A Dashboard is a configuration table: which series to fetch (and from which
source), which named derivations to compute from them, and how to shape the
derived values into a response model. run_dashboard issues every fetch
concurrently, waits for all of them, and tolerates individual failures:
a failed series simply arrives as an empty list.
"""

import asyncio
import logging
from dataclasses import dataclass
from typing import Any, Callable, Mapping

from pydantic import BaseModel

from econdash.data.base import SeriesRequest, SeriesSource
from econdash.data.observations import filter_observations

logger = logging.getLogger(__name__)

SeriesBundle = dict[str, list]
Derivation = Callable[[SeriesBundle], Any]


class AssemblyError(Exception):
    """A dashboard could not be derived or shaped from its fetched series."""

    def __init__(self, dashboard: str, cause: Exception):
        super().__init__(f"Failed to assemble {dashboard} dashboard: {cause}")
        self.dashboard = dashboard
        self.cause = cause


@dataclass(frozen=True)
class Dashboard:
    name: str
    requests: tuple[SeriesRequest, ...]
    derivations: Mapping[str, Derivation]
    build: Callable[[dict[str, Any]], BaseModel]


async def _fetch_one(sources: Mapping[str, SeriesSource], request: SeriesRequest) -> list:
    source = sources.get(request.source)
    if source is None:
        logger.warning("No source %r configured for series %s", request.source, request.name)
        return []
    rows = await source.fetch(request)
    return rows if request.raw else filter_observations(rows)


async def fetch_all(
    sources: Mapping[str, SeriesSource], requests: tuple[SeriesRequest, ...]
) -> SeriesBundle:
    """Fetch every request concurrently; a request that raises yields []."""
    results = await asyncio.gather(
        *(_fetch_one(sources, request) for request in requests),
        return_exceptions=True,
    )
    bundle: SeriesBundle = {}
    for request, result in zip(requests, results):
        if isinstance(result, BaseException):
            if not isinstance(result, Exception):
                raise result
            logger.warning("Series %s (%s) failed: %s", request.name, request.series_id, result)
            result = []
        bundle[request.name] = result
    return bundle


def derive(dashboard: Dashboard, bundle: SeriesBundle) -> dict[str, Any]:
    """Apply each named derivation to the fetched series."""
    return {name: fn(bundle) for name, fn in dashboard.derivations.items()}


async def run_dashboard(dashboard: Dashboard, sources: Mapping[str, SeriesSource]) -> BaseModel:
    bundle = await fetch_all(sources, dashboard.requests)
    try:
        derived = derive(dashboard, bundle)
        return dashboard.build(derived)
    except Exception as e:
        raise AssemblyError(dashboard.name, e) from e
