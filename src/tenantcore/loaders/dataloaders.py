"""Per-request loader set.

``create_loaders()`` wraps each batch function in an
:class:`aiodataloader.DataLoader`. Loads issued before the event loop
yields are coalesced into one batch; a load issued after that batch was
dispatched starts the next one. Values are cached for the lifetime of the
loader set, so build a fresh set for every request.

Each batch opens its own session from the given session factory, which
keeps concurrent batches of different loaders off a shared session.
"""

from __future__ import annotations

import logging
from collections.abc import Awaitable, Callable, Sequence
from dataclasses import dataclass
from typing import Any, Optional, TypeVar

from aiodataloader import DataLoader
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from .batch import (
    batch_order_items_by_order_ids,
    batch_posts_by_blog_ids,
    batch_sections_by_page_ids,
    batch_users_by_ids,
)

logger = logging.getLogger(__name__)

_V = TypeVar("_V")

BatchFn = Callable[[Sequence[str], AsyncSession], Awaitable[list[_V]]]


@dataclass(frozen=True)
class Loaders:
    """Loaders available to resolvers of one request.

    Attributes:
        user_by_id: id → ``PublicUser | None``
        sections_by_page_id: page id → ``list[CMSSectionData]``
        order_items_by_order_id: order id → ``list[EnrichedOrderItem]``
        posts_by_blog_id: blog id → ``list[EnrichedPost]``
    """

    user_by_id: DataLoader
    sections_by_page_id: DataLoader
    order_items_by_order_id: DataLoader
    posts_by_blog_id: DataLoader

    def clear_all(self) -> None:
        """Drop cached values, e.g. after a mutation in the same request."""
        for loader in (
            self.user_by_id,
            self.sections_by_page_id,
            self.order_items_by_order_id,
            self.posts_by_blog_id,
        ):
            loader.clear_all()


def bind_batch(
    batch_fn: BatchFn[Any],
    sessionmaker: async_sessionmaker[AsyncSession],
) -> Callable[[list[str]], Awaitable[list[Any]]]:
    """Turn ``batch_fn(keys, db)`` into a ``DataLoader`` batch function."""

    async def load(keys: list[str]) -> list[Any]:
        logger.debug("Dispatching %s for %d keys", batch_fn.__name__, len(keys))
        async with sessionmaker() as db:
            return await batch_fn(keys, db)

    load.__name__ = batch_fn.__name__
    return load


def create_loaders(
    sessionmaker: async_sessionmaker[AsyncSession],
    *,
    max_batch_size: Optional[int] = None,
) -> Loaders:
    """Build a fresh loader set for one request.

    Must be called from a coroutine (the loaders attach to the running loop).

    Args:
        sessionmaker: Session factory; each batch gets its own session.
        max_batch_size: Split batches larger than this (None = unbounded).
    """

    def _loader(batch_fn: BatchFn[Any]) -> DataLoader:
        return DataLoader(
            batch_load_fn=bind_batch(batch_fn, sessionmaker),
            max_batch_size=max_batch_size,
        )

    return Loaders(
        user_by_id=_loader(batch_users_by_ids),
        sections_by_page_id=_loader(batch_sections_by_page_ids),
        order_items_by_order_id=_loader(batch_order_items_by_order_ids),
        posts_by_blog_id=_loader(batch_posts_by_blog_ids),
    )


__all__ = [
    "Loaders",
    "bind_batch",
    "create_loaders",
]
