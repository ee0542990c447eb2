from hermes_ai.store.base import (
    ASCENDING,
    DESCENDING,
    BatchUpdateResult,
    ClusterPatch,
    ItemStore,
    SortSpec,
)
from hermes_ai.store.handle import StoreHandle
from hermes_ai.store.memory import InMemoryStore
from hermes_ai.store.sql import DEFAULT_DATABASE_URL, SqlStore

__all__ = [
    "ASCENDING",
    "BatchUpdateResult",
    "ClusterPatch",
    "DEFAULT_DATABASE_URL",
    "DESCENDING",
    "InMemoryStore",
    "ItemStore",
    "SortSpec",
    "SqlStore",
    "StoreHandle",
]
