"""Protocol and shared types for item persistence."""

from dataclasses import dataclass
from datetime import datetime
from typing import Literal, Protocol

from hermes_ai.data import MisinformationItem

ASCENDING = 1
DESCENDING = -1

SortField = Literal["timestamp", "upvotes", "confidence"]
SortSpec = list[tuple[SortField, int]]

SORTABLE_FIELDS: frozenset[str] = frozenset({"timestamp", "upvotes", "confidence"})
INCREMENTABLE_FIELDS: frozenset[str] = frozenset({"upvotes", "variations"})


@dataclass(frozen=True)
class ClusterPatch:
    """Cluster metadata written onto peers when a new submission joins them.

    Head flags: with ``head_id`` set, that peer becomes the head and every
    other patched peer is cleared. Without it, peers pulled in from another
    cluster lose their head flag and peers already in the cluster keep theirs.
    """

    cluster_id: str
    message_template: str
    variations_delta: int = 1
    head_id: str | None = None

    def head_flag(self, item_id: str, cluster_id: str, is_cluster_head: bool) -> bool:
        """Head flag for a peer currently in ``cluster_id`` after patching."""
        if self.head_id is not None:
            return item_id == self.head_id
        return is_cluster_head and cluster_id == self.cluster_id


@dataclass(frozen=True)
class BatchUpdateResult:
    """Per-document outcome of a batch update."""

    updated: tuple[str, ...] = ()
    failed: tuple[str, ...] = ()

    @property
    def complete(self) -> bool:
        return not self.failed


def check_sort(sort: SortSpec) -> None:
    for field_name, direction in sort:
        if field_name not in SORTABLE_FIELDS:
            raise ValueError(f"Cannot sort by {field_name!r}")
        if direction not in (ASCENDING, DESCENDING):
            raise ValueError(f"Invalid sort direction: {direction}")


def check_increment_field(field_name: str) -> None:
    if field_name not in INCREMENTABLE_FIELDS:
        raise ValueError(f"Cannot increment {field_name!r}")


class ItemStore(Protocol):
    """Interface for the keyed collection of misinformation items.

    Every method may raise ``StoreUnavailable``.
    """

    async def create(self, item: MisinformationItem) -> MisinformationItem:
        """Persist a new item and return it with its assigned id."""
        ...

    async def get(self, item_id: str) -> MisinformationItem | None:
        """Fetch one item, or None if the id is unknown."""
        ...

    async def batch_update(self, ids: list[str], patch: ClusterPatch) -> BatchUpdateResult:
        """Apply a cluster patch to each id independently.

        Not atomic across documents: ids that are missing or fail to update
        are reported in ``failed`` rather than aborting the others.
        """
        ...

    async def increment_field(self, item_id: str, field_name: str, delta: int) -> int | None:
        """Atomically add ``delta`` to a counter and return the new value.

        Returns None if the id is unknown.
        """
        ...

    async def find(
        self,
        *,
        since: datetime | None = None,
        category: str | None = None,
        sort: SortSpec | None = None,
        limit: int | None = None,
    ) -> list[MisinformationItem]:
        """Return items matching the filters, sorted and limited."""
        ...

    async def aggregate(self) -> tuple[int, int]:
        """Return (item count, sum of upvotes) in one pass."""
        ...

    async def close(self) -> None:
        """Release connections."""
        ...
