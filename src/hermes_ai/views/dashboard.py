"""Dashboard totals and recent items."""

import logging
from dataclasses import dataclass, field
from datetime import UTC, datetime
from typing import Any

from hermes_ai.data import MisinformationItem
from hermes_ai.errors import StoreUnavailable
from hermes_ai.store import DESCENDING, StoreHandle

logger = logging.getLogger(__name__)

DEFAULT_DASHBOARD_LIMIT = 50


@dataclass(frozen=True)
class DashboardView:
    """Most recent items plus global totals."""

    items: list[MisinformationItem] = field(default_factory=list)
    total_detections: int = 0
    total_upvotes: int = 0
    timestamp: datetime = field(default_factory=lambda: datetime.now(tz=UTC))

    def to_dict(self) -> dict[str, Any]:
        return {
            "items": [item.to_dict() for item in self.items],
            "total_detections": self.total_detections,
            "total_upvotes": self.total_upvotes,
            "stats": {"total": self.total_detections, "total_upvotes": self.total_upvotes},
            "timestamp": self.timestamp.isoformat(),
        }


async def dashboard(
    store: StoreHandle,
    *,
    limit: int = DEFAULT_DASHBOARD_LIMIT,
    category: str | None = None,
) -> DashboardView:
    """Newest items (optionally one category) with global count and upvote sum.

    Never raises on store failure: an unreachable store gives an empty view,
    and a failing items query or totals query zeroes only its own part.

    Args:
        store: Store handle.
        limit: Page size.
        category: Category filter; None or "all" disables it. Totals are
            always global.
    """
    try:
        opened = await store.get()
    except StoreUnavailable:
        logger.warning("Store not available, returning empty dashboard")
        return DashboardView()

    category_filter = category if category and category != "all" else None

    items: list[MisinformationItem] = []
    try:
        items = await opened.find(
            category=category_filter,
            sort=[("timestamp", DESCENDING)],
            limit=limit,
        )
    except StoreUnavailable as e:
        logger.error("Dashboard query error: %s", e)

    total, upvotes = 0, 0
    try:
        total, upvotes = await opened.aggregate()
    except StoreUnavailable as e:
        logger.error("Dashboard stats error: %s", e)

    return DashboardView(items=items, total_detections=total, total_upvotes=upvotes)
