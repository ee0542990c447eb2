"""SQLAlchemy-backed item store (async engine)."""

import logging
import uuid
from datetime import UTC, datetime

from sqlalchemy import DateTime, Float, Integer, String, Text, case, func, select, update
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncEngine, async_sessionmaker, create_async_engine
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column
from sqlalchemy.pool import StaticPool

from hermes_ai.data import MisinformationItem, Verdict
from hermes_ai.errors import StoreUnavailable
from hermes_ai.store.base import (
    DESCENDING,
    BatchUpdateResult,
    ClusterPatch,
    SortSpec,
    check_increment_field,
    check_sort,
)

logger = logging.getLogger(__name__)

DEFAULT_DATABASE_URL = "sqlite+aiosqlite:///hermes.db"


class Base(DeclarativeBase):
    pass


class ItemRow(Base):
    __tablename__ = "misinformation"

    id: Mapped[str] = mapped_column(String(32), primary_key=True)
    text: Mapped[str] = mapped_column(Text)
    verdict: Mapped[str] = mapped_column(String(32))
    confidence: Mapped[float] = mapped_column(Float, default=0.0)
    category: Mapped[str] = mapped_column(String(128), default="general", index=True)
    explanation: Mapped[str] = mapped_column(Text, default="")
    timestamp: Mapped[datetime] = mapped_column(DateTime(timezone=True), index=True)
    upvotes: Mapped[int] = mapped_column(Integer, default=0)
    cluster_id: Mapped[str] = mapped_column(String(64), index=True)
    is_cluster_head: Mapped[bool] = mapped_column(default=False)
    message_template: Mapped[str] = mapped_column(Text)
    variations: Mapped[int] = mapped_column(Integer, default=0)


def _as_utc(value: datetime) -> datetime:
    # SQLite drops tzinfo on the way back
    if value.tzinfo is None:
        return value.replace(tzinfo=UTC)
    return value.astimezone(UTC)


def _to_item(row: ItemRow) -> MisinformationItem:
    return MisinformationItem(
        id=row.id,
        text=row.text,
        verdict=Verdict(row.verdict),
        confidence=row.confidence,
        category=row.category,
        explanation=row.explanation,
        timestamp=_as_utc(row.timestamp),
        upvotes=row.upvotes,
        cluster_id=row.cluster_id,
        is_cluster_head=row.is_cluster_head,
        message_template=row.message_template,
        variations=row.variations,
    )


def _to_row(item: MisinformationItem, item_id: str) -> ItemRow:
    return ItemRow(
        id=item_id,
        text=item.text,
        verdict=item.verdict.value,
        confidence=item.confidence,
        category=item.category,
        explanation=item.explanation,
        timestamp=_as_utc(item.timestamp),
        upvotes=item.upvotes,
        cluster_id=item.cluster_id,
        is_cluster_head=item.is_cluster_head,
        message_template=item.message_template,
        variations=item.variations,
    )


class SqlStore:
    """Item store on a relational database through SQLAlchemy's async API.

    Use ``SqlStore.connect(url)`` to build one; it creates the table if
    needed. Every database error surfaces as ``StoreUnavailable``.

    Args:
        engine: Async engine bound to the target database.
    """

    def __init__(self, engine: AsyncEngine) -> None:
        self._engine = engine
        self._sessions = async_sessionmaker(engine, expire_on_commit=False)

    @classmethod
    async def connect(cls, url: str = DEFAULT_DATABASE_URL, *, echo: bool = False) -> "SqlStore":
        """Create the engine, make sure the schema exists and return a ready store.

        Raises:
            StoreUnavailable: If the database cannot be reached.
        """
        kwargs: dict[str, object] = {"echo": echo}
        if ":memory:" in url:
            # One shared connection, otherwise each pooled connection sees its own database
            kwargs["poolclass"] = StaticPool
            kwargs["connect_args"] = {"check_same_thread": False}
        engine = create_async_engine(url, **kwargs)
        try:
            async with engine.begin() as conn:
                await conn.run_sync(Base.metadata.create_all)
        except (SQLAlchemyError, OSError) as e:
            await engine.dispose()
            raise StoreUnavailable("Could not initialise database") from e
        return cls(engine)

    async def create(self, item: MisinformationItem) -> MisinformationItem:
        item_id = uuid.uuid4().hex
        try:
            async with self._sessions.begin() as session:
                session.add(_to_row(item, item_id))
        except SQLAlchemyError as e:
            raise StoreUnavailable("Create failed") from e
        return item.with_id(item_id)

    async def get(self, item_id: str) -> MisinformationItem | None:
        try:
            async with self._sessions() as session:
                row = await session.get(ItemRow, item_id)
        except SQLAlchemyError as e:
            raise StoreUnavailable("Lookup failed") from e
        return _to_item(row) if row is not None else None

    async def batch_update(self, ids: list[str], patch: ClusterPatch) -> BatchUpdateResult:
        updated: list[str] = []
        failed: list[str] = []
        if patch.head_id is not None:
            head = case((ItemRow.id == patch.head_id, True), else_=False)
        else:
            head = case(
                (ItemRow.cluster_id == patch.cluster_id, ItemRow.is_cluster_head), else_=False
            )
        # One transaction per document; a failure leaves earlier updates in place
        for item_id in ids:
            stmt = (
                update(ItemRow)
                .where(ItemRow.id == item_id)
                .values(
                    cluster_id=patch.cluster_id,
                    message_template=patch.message_template,
                    variations=ItemRow.variations + patch.variations_delta,
                    is_cluster_head=head,
                )
            )
            try:
                async with self._sessions.begin() as session:
                    result = await session.execute(stmt)
            except SQLAlchemyError:
                logger.warning("Cluster relabel failed for item %s", item_id, exc_info=True)
                failed.append(item_id)
                continue
            if result.rowcount == 0:  # type: ignore[attr-defined]
                failed.append(item_id)
            else:
                updated.append(item_id)
        return BatchUpdateResult(updated=tuple(updated), failed=tuple(failed))

    async def increment_field(self, item_id: str, field_name: str, delta: int) -> int | None:
        check_increment_field(field_name)
        column = getattr(ItemRow, field_name)
        try:
            async with self._sessions.begin() as session:
                result = await session.execute(
                    update(ItemRow).where(ItemRow.id == item_id).values({column: column + delta})
                )
                if result.rowcount == 0:  # type: ignore[attr-defined]
                    return None
                value = await session.scalar(select(column).where(ItemRow.id == item_id))
        except SQLAlchemyError as e:
            raise StoreUnavailable("Increment failed") from e
        return int(value)

    async def find(
        self,
        *,
        since: datetime | None = None,
        category: str | None = None,
        sort: SortSpec | None = None,
        limit: int | None = None,
    ) -> list[MisinformationItem]:
        stmt = select(ItemRow)
        if since is not None:
            stmt = stmt.where(ItemRow.timestamp >= _as_utc(since))
        if category is not None:
            stmt = stmt.where(ItemRow.category == category)
        if sort:
            check_sort(sort)
            for field_name, direction in sort:
                column = getattr(ItemRow, field_name)
                stmt = stmt.order_by(column.desc() if direction == DESCENDING else column.asc())
        if limit is not None:
            stmt = stmt.limit(limit)

        try:
            async with self._sessions() as session:
                rows = (await session.scalars(stmt)).all()
        except SQLAlchemyError as e:
            raise StoreUnavailable("Query failed") from e
        return [_to_item(row) for row in rows]

    async def aggregate(self) -> tuple[int, int]:
        stmt = select(func.count(ItemRow.id), func.coalesce(func.sum(ItemRow.upvotes), 0))
        try:
            async with self._sessions() as session:
                total, upvotes = (await session.execute(stmt)).one()
        except SQLAlchemyError as e:
            raise StoreUnavailable("Aggregate failed") from e
        return (int(total), int(upvotes))

    async def close(self) -> None:
        await self._engine.dispose()
