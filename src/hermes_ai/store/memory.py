"""In-process item store."""

import uuid
from dataclasses import replace
from datetime import datetime

from hermes_ai.data import MisinformationItem
from hermes_ai.errors import StoreUnavailable
from hermes_ai.store.base import (
    DESCENDING,
    BatchUpdateResult,
    ClusterPatch,
    SortSpec,
    check_increment_field,
    check_sort,
)


class InMemoryStore:
    """Dict-backed store with the same semantics as the SQL store.

    Each method body runs without awaiting, so every single-document
    operation is atomic with respect to other coroutines.

    Setting ``available`` to False makes every call raise
    ``StoreUnavailable``; ids in ``failing_ids`` fail individually inside
    ``batch_update``.
    """

    def __init__(self) -> None:
        self._items: dict[str, MisinformationItem] = {}
        self.available = True
        self.failing_ids: set[str] = set()

    def _check_available(self) -> None:
        if not self.available:
            raise StoreUnavailable("In-memory store is marked unavailable")

    async def create(self, item: MisinformationItem) -> MisinformationItem:
        self._check_available()
        created = item.with_id(uuid.uuid4().hex)
        self._items[created.id] = created  # type: ignore[index]
        return created

    async def get(self, item_id: str) -> MisinformationItem | None:
        self._check_available()
        return self._items.get(item_id)

    async def batch_update(self, ids: list[str], patch: ClusterPatch) -> BatchUpdateResult:
        self._check_available()
        updated: list[str] = []
        failed: list[str] = []
        for item_id in ids:
            current = self._items.get(item_id)
            if current is None or item_id in self.failing_ids:
                failed.append(item_id)
                continue
            self._items[item_id] = replace(
                current,
                cluster_id=patch.cluster_id,
                message_template=patch.message_template,
                variations=current.variations + patch.variations_delta,
                is_cluster_head=patch.head_flag(
                    item_id, current.cluster_id, current.is_cluster_head
                ),
            )
            updated.append(item_id)
        return BatchUpdateResult(updated=tuple(updated), failed=tuple(failed))

    async def increment_field(self, item_id: str, field_name: str, delta: int) -> int | None:
        check_increment_field(field_name)
        self._check_available()
        current = self._items.get(item_id)
        if current is None:
            return None
        new_value: int = getattr(current, field_name) + delta
        self._items[item_id] = replace(current, **{field_name: new_value})
        return new_value

    async def find(
        self,
        *,
        since: datetime | None = None,
        category: str | None = None,
        sort: SortSpec | None = None,
        limit: int | None = None,
    ) -> list[MisinformationItem]:
        self._check_available()
        items = [
            item
            for item in self._items.values()
            if (since is None or item.timestamp >= since)
            and (category is None or item.category == category)
        ]
        if sort:
            check_sort(sort)
            # Stable sorts applied from the least significant key up
            for field_name, direction in reversed(sort):
                items.sort(key=lambda i: getattr(i, field_name), reverse=direction == DESCENDING)
        if limit is not None:
            items = items[:limit]
        return items

    async def aggregate(self) -> tuple[int, int]:
        self._check_available()
        return (len(self._items), sum(item.upvotes for item in self._items.values()))

    async def close(self) -> None:
        return None
