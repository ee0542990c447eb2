"""CSV report export."""

import logging
import math
from datetime import UTC, datetime, timedelta
from typing import Literal

from hermes_ai.data import DEFAULT_CATEGORY, MisinformationItem
from hermes_ai.errors import StoreUnavailable
from hermes_ai.store import DESCENDING, StoreHandle

logger = logging.getLogger(__name__)

ExportVariant = Literal["report", "legacy"]

HEADER = (
    "ID,Timestamp,Category,Content,Verdict,Confidence,"
    "Explanation,Upvotes,Cluster ID,Variations,Type"
)
TRENDING_WINDOW = timedelta(days=7)
TRENDING_LIMIT = 5
RECENT_LIMIT = 25


def quote(value: str) -> str:
    """Wrap in double quotes, doubling any internal quotes."""
    return '"' + value.replace('"', '""') + '"'


def format_timestamp(value: datetime) -> str:
    """ISO-8601 in UTC with milliseconds and a ``Z`` suffix."""
    if value.tzinfo is None:
        value = value.replace(tzinfo=UTC)
    return value.astimezone(UTC).isoformat(timespec="milliseconds").replace("+00:00", "Z")


def _format_number(value: float) -> str:
    if float(value).is_integer():
        return str(int(value))
    return repr(float(value))


def format_confidence(confidence: float, variant: ExportVariant) -> str:
    """Report variant: rounded 0-100 percentage. Legacy variant: raw fraction."""
    if variant == "report":
        return str(math.floor((confidence or 0) * 100 + 0.5))
    return _format_number(confidence or 0)


def format_row(item: MisinformationItem, row_type: str, variant: ExportVariant) -> str:
    verdict = item.verdict.value if variant == "report" else "misinformation"
    return ",".join(
        [
            item.id or "",
            format_timestamp(item.timestamp),
            item.category or DEFAULT_CATEGORY,
            quote(item.text or ""),
            verdict or "unknown",
            format_confidence(item.confidence, variant),
            quote(item.explanation or ""),
            str(item.upvotes or 0),
            item.cluster_id or "",
            str(item.variations or 0),
            row_type,
        ]
    )


def merge_trending_and_recent(
    trending_items: list[MisinformationItem],
    recent_items: list[MisinformationItem],
) -> list[MisinformationItem]:
    """Trending first, then recent items not already present (by id)."""
    merged = list(trending_items)
    seen = {item.id for item in trending_items}
    for item in recent_items:
        if item.id not in seen:
            seen.add(item.id)
            merged.append(item)
    return merged


def render_csv(items: list[MisinformationItem], variant: ExportVariant = "report") -> str:
    """Header plus one row per item; the first five rows are typed Trending."""
    rows = [HEADER]
    for index, item in enumerate(items):
        row_type = "Trending" if index < TRENDING_LIMIT else "Recent"
        rows.append(format_row(item, row_type, variant))
    return "\n".join(rows)


def export_filename(now: datetime | None = None) -> str:
    moment = now or datetime.now(tz=UTC)
    return f"hermes-report-{int(moment.timestamp() * 1000)}.csv"


async def export_csv(
    store: StoreHandle,
    *,
    variant: ExportVariant = "report",
    now: datetime | None = None,
) -> str:
    """Top five most upvoted items of the last seven days plus the 25 newest, as CSV.

    Never raises on store failure: an unreachable store yields the header
    row only, and a failing sub-query contributes no rows.

    Args:
        store: Store handle.
        variant: "report" (percent confidence, stored verdict) or "legacy"
            (raw confidence, verdict column always "misinformation").
        now: Reference time for the seven-day window.
    """
    try:
        opened = await store.get()
    except StoreUnavailable:
        logger.warning("Store not available, exporting header only")
        return HEADER

    since = (now or datetime.now(tz=UTC)) - TRENDING_WINDOW

    trending_items: list[MisinformationItem] = []
    try:
        trending_items = await opened.find(
            since=since,
            sort=[("upvotes", DESCENDING), ("timestamp", DESCENDING)],
            limit=TRENDING_LIMIT,
        )
    except StoreUnavailable as e:
        logger.error("Export trending query error: %s", e)

    recent_items: list[MisinformationItem] = []
    try:
        recent_items = await opened.find(sort=[("timestamp", DESCENDING)], limit=RECENT_LIMIT)
    except StoreUnavailable as e:
        logger.error("Export recent query error: %s", e)

    return render_csv(merge_trending_and_recent(trending_items, recent_items), variant)
