"""Service facade exposed to the CLI and any route layer."""

from datetime import UTC, datetime
from typing import Any

from hermes_ai.data import MisinformationItem
from hermes_ai.pipeline import SubmissionPipeline, upvote
from hermes_ai.store import StoreHandle
from hermes_ai.views import (
    APP_PRESET,
    DEFAULT_DASHBOARD_LIMIT,
    STANDALONE_PRESET,
    DashboardView,
    TrendingPreset,
    TrendingView,
    dashboard,
    export_csv,
    trending,
)
from hermes_ai.views.export import ExportVariant

SERVICE_NAME = "Hermes"
VERSION = "1.0.0"


class HermesService:
    """Owns the store handle and exposes submit, upvote and the read views.

    Write paths raise on failure; read paths degrade to empty results.

    Args:
        pipeline: Submission pipeline sharing ``store``.
        store: Store handle.
        dashboard_limit: Dashboard page size.
        presets: Trending presets by name.
        store_timeout: Timeout in seconds for upvote writes.
    """

    def __init__(
        self,
        pipeline: SubmissionPipeline,
        store: StoreHandle,
        *,
        dashboard_limit: int = DEFAULT_DASHBOARD_LIMIT,
        presets: dict[str, TrendingPreset] | None = None,
        store_timeout: float | None = None,
    ) -> None:
        self._pipeline = pipeline
        self._store = store
        self._dashboard_limit = dashboard_limit
        self._presets = presets or {"app": APP_PRESET, "standalone": STANDALONE_PRESET}
        self._store_timeout = store_timeout

    async def submit(self, text: object) -> MisinformationItem:
        return await self._pipeline.submit(text)

    async def upvote(self, item_id: str) -> int:
        return await upvote(self._store, item_id, timeout=self._store_timeout)

    async def dashboard(
        self, *, category: str | None = None, limit: int | None = None
    ) -> DashboardView:
        return await dashboard(
            self._store,
            limit=limit if limit is not None else self._dashboard_limit,
            category=category,
        )

    async def trending(
        self,
        *,
        period: str | None = None,
        sort_by: str | None = None,
        limit: int | None = None,
        preset: str = "app",
    ) -> TrendingView:
        if preset not in self._presets:
            raise ValueError(f"Unknown trending preset: {preset}")
        return await trending(
            self._store,
            period=period,
            sort_by=sort_by,
            limit=limit,
            preset=self._presets[preset],
        )

    async def export(self, *, variant: ExportVariant = "report") -> str:
        return await export_csv(self._store, variant=variant)

    def health(self) -> dict[str, Any]:
        return {
            "status": "healthy",
            "service": SERVICE_NAME,
            "version": VERSION,
            "timestamp": datetime.now(tz=UTC).isoformat(),
        }

    async def close(self) -> None:
        """Tear down the store connection."""
        await self._store.close()
