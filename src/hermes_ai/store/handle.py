"""Owned, lazily opened store connection."""

import asyncio
import logging
from collections.abc import Awaitable, Callable

from hermes_ai.errors import StoreUnavailable
from hermes_ai.store.base import ItemStore

logger = logging.getLogger(__name__)

StoreOpener = Callable[[], Awaitable[ItemStore]]


class StoreHandle:
    """Opens the store once per process and hands the same instance to every caller.

    The first ``get()`` runs ``opener`` under a lock; concurrent callers wait
    for that attempt instead of opening their own connection. A failed attempt
    raises ``StoreUnavailable`` and leaves the handle closed so a later call
    can retry.

    Args:
        opener: Coroutine factory that connects and returns a ready store.
    """

    def __init__(self, opener: StoreOpener) -> None:
        self._opener = opener
        self._store: ItemStore | None = None
        self._lock = asyncio.Lock()

    @property
    def is_open(self) -> bool:
        return self._store is not None

    async def get(self) -> ItemStore:
        """Return the open store, connecting on first use.

        Raises:
            StoreUnavailable: If connecting fails.
        """
        if self._store is not None:
            return self._store

        async with self._lock:
            if self._store is None:
                try:
                    self._store = await self._opener()
                except StoreUnavailable:
                    logger.error("Store connection failed", exc_info=True)
                    raise
                except Exception as e:
                    logger.error("Store connection failed", exc_info=True)
                    raise StoreUnavailable("Could not connect to store") from e
                logger.info("Connected to store %s", type(self._store).__name__)
        return self._store

    async def close(self) -> None:
        """Close the store if it was opened."""
        async with self._lock:
            if self._store is not None:
                await self._store.close()
                self._store = None
