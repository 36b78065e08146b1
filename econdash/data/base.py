"""Protocol definitions for data sources.

Every upstream client that feeds the dashboard pipeline satisfies SeriesSource.
"""

from dataclasses import dataclass, field
from typing import Any, Protocol, runtime_checkable


@dataclass(frozen=True)
class SeriesRequest:
    """One named fetch in a dashboard's series table."""
    name: str
    series_id: str
    limit: int = 24
    source: str = "fred"
    params: dict[str, Any] = field(default_factory=dict)
    raw: bool = False  # True: skip observation filtering (record-style sources)


@runtime_checkable
class SeriesSource(Protocol):
    async def fetch(self, request: SeriesRequest) -> list:
        """Fetch rows for a request, newest first. Returns [] on failure."""
        ...
