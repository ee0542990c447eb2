"""Time-windowed trending items."""

import logging
from dataclasses import dataclass, field
from datetime import UTC, datetime, timedelta
from typing import Any, Literal

from hermes_ai.data import MisinformationItem
from hermes_ai.errors import StoreUnavailable
from hermes_ai.store import DESCENDING, SortSpec, StoreHandle

logger = logging.getLogger(__name__)

Period = Literal["24h", "7d", "30d", "all"]
SortBy = Literal["upvotes", "recent", "confidence"]

WINDOWS: dict[str, timedelta | None] = {
    "24h": timedelta(hours=24),
    "7d": timedelta(days=7),
    "30d": timedelta(days=30),
    "all": None,
}

SORTS: dict[str, SortSpec] = {
    "upvotes": [("upvotes", DESCENDING), ("timestamp", DESCENDING)],
    "recent": [("timestamp", DESCENDING)],
    "confidence": [("confidence", DESCENDING), ("timestamp", DESCENDING)],
}


@dataclass(frozen=True)
class TrendingPreset:
    """Defaults for one trending call site."""

    default_period: Period = "24h"
    limit: int = 20


APP_PRESET = TrendingPreset(default_period="24h", limit=20)
STANDALONE_PRESET = TrendingPreset(default_period="7d", limit=50)


@dataclass(frozen=True)
class TrendingView:
    """Trending items and the effective query parameters."""

    items: list[MisinformationItem]
    period: str
    sort_by: str
    timestamp: datetime = field(default_factory=lambda: datetime.now(tz=UTC))

    @property
    def count(self) -> int:
        return len(self.items)

    def to_dict(self) -> dict[str, Any]:
        return {
            "items": [item.to_dict() for item in self.items],
            "period": self.period,
            "sort_by": self.sort_by,
            "count": self.count,
            "timestamp": self.timestamp.isoformat(),
        }


def resolve_period(period: str | None, default: Period) -> str:
    """Map a requested period to a known window, falling back to ``default``."""
    if period in WINDOWS:
        return period  # type: ignore[return-value]
    return default


def resolve_sort(sort_by: str | None) -> str:
    """Map a requested sort key to a known one; unknown keys sort by upvotes."""
    if sort_by in SORTS:
        return sort_by  # type: ignore[return-value]
    return "upvotes"


def window_start(period: str, now: datetime) -> datetime | None:
    """Earliest timestamp inside the window, or None for "all"."""
    window = WINDOWS[period]
    return now - window if window is not None else None


async def trending(
    store: StoreHandle,
    *,
    period: str | None = None,
    sort_by: str | None = None,
    limit: int | None = None,
    preset: TrendingPreset = APP_PRESET,
    now: datetime | None = None,
) -> TrendingView:
    """Items created inside a time window, sorted by the chosen key.

    Upvote and confidence sorts break ties by newest first. Never raises on
    store failure; returns an empty item list instead.

    Args:
        store: Store handle.
        period: One of 24h, 7d, 30d, all; anything else uses the preset default.
        sort_by: One of upvotes, recent, confidence; anything else uses upvotes.
        limit: Max items (defaults to the preset limit).
        preset: Call-site defaults.
        now: Reference time (defaults to the current UTC time).
    """
    effective_period = resolve_period(period, preset.default_period)
    effective_sort = resolve_sort(sort_by)
    since = window_start(effective_period, now or datetime.now(tz=UTC))

    items: list[MisinformationItem] = []
    try:
        opened = await store.get()
        items = await opened.find(
            since=since,
            sort=SORTS[effective_sort],
            limit=limit if limit is not None else preset.limit,
        )
    except StoreUnavailable as e:
        logger.warning("Trending query failed, returning no items: %s", e)

    return TrendingView(items=items, period=effective_period, sort_by=effective_sort)
