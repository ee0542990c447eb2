"""Upvote write path."""

import asyncio

from hermes_ai.errors import NotFound, StoreUnavailable, ValidationError
from hermes_ai.store import StoreHandle


async def upvote(store: StoreHandle, item_id: str, *, timeout: float | None = None) -> int:
    """Add one upvote to an item and return its new count.

    Votes are not deduplicated per caller.

    Raises:
        ValidationError: If ``item_id`` is empty.
        NotFound: If no item has this id; nothing changes.
        StoreUnavailable: If the store cannot be reached.
    """
    if not item_id or not item_id.strip():
        raise ValidationError("Item ID is required")

    opened = await store.get()
    try:
        new_count = await asyncio.wait_for(
            opened.increment_field(item_id, "upvotes", 1), timeout
        )
    except TimeoutError as e:
        raise StoreUnavailable("Upvote timed out") from e

    if new_count is None:
        raise NotFound(item_id)
    return new_count
