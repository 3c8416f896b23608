"""Batch functions behind the per-request loaders.

Every function follows the same contract:

1. De-duplicate the incoming keys.
2. Issue exactly one SELECT (``key IN (...)``, related rows joined eagerly).
3. Pre-seed an index with the empty value for every key, fill it from the
   rows, and answer ``[index[key] for key in keys]``.

So the result always has ``len(keys)`` entries, entry *i* depends only on
key *i*, and keys without rows get ``None`` (one-to-one) or ``[]``
(one-to-many). A storage error is logged and re-raised unchanged; there
is no partial result.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from typing import Optional

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import joinedload

from ..db.models import CMSSection, OrderItem, Post, User
from ..logging import safe_preview
from .schemas import (
    CMSSectionData,
    EnrichedOrderItem,
    EnrichedPost,
    PublicUser,
    SectionComponentData,
)

logger = logging.getLogger(__name__)


def _unique_keys(keys: Sequence[str]) -> list[str]:
    return list(dict.fromkeys(keys))


async def batch_users_by_ids(keys: Sequence[str], db: AsyncSession) -> list[Optional[PublicUser]]:
    """Users by id; ``None`` where no user exists."""
    if not keys:
        return []
    unique = _unique_keys(keys)
    try:
        result = await db.execute(select(User).where(User.id.in_(unique)))
    except SQLAlchemyError:
        logger.error("User batch failed for %d ids: %s", len(unique), safe_preview(unique))
        raise

    index: dict[str, Optional[PublicUser]] = dict.fromkeys(unique)
    for user in result.scalars():
        index[user.id] = PublicUser.model_validate(user)
    return [index[key] for key in keys]


async def batch_sections_by_page_ids(keys: Sequence[str], db: AsyncSession) -> list[list[CMSSectionData]]:
    """Sections of each page ordered by ``order``, each with its components ordered by ``order``."""
    if not keys:
        return []
    unique = _unique_keys(keys)
    stmt = (
        select(CMSSection)
        .where(CMSSection.page_id.in_(unique))
        .options(joinedload(CMSSection.components))
        .order_by(CMSSection.page_id, CMSSection.order, CMSSection.id)
    )
    try:
        result = await db.execute(stmt)
    except SQLAlchemyError:
        logger.error("Section batch failed for %d pages: %s", len(unique), safe_preview(unique))
        raise

    index: dict[str, list[CMSSectionData]] = {key: [] for key in unique}
    for section in result.unique().scalars():
        components = sorted(section.components, key=lambda c: (c.order, c.id))
        index[section.page_id].append(
            CMSSectionData(
                id=section.id,
                page_id=section.page_id,
                section_id=section.section_id,
                name=section.name,
                order=section.order,
                components=[SectionComponentData.model_validate(c) for c in components],
            )
        )
    for sections in index.values():
        sections.sort(key=lambda s: (s.order, s.id))
    return [list(index[key]) for key in keys]


async def batch_order_items_by_order_ids(
    keys: Sequence[str], db: AsyncSession
) -> list[list[EnrichedOrderItem]]:
    """Items of each order with their product summary, oldest first."""
    if not keys:
        return []
    unique = _unique_keys(keys)
    stmt = (
        select(OrderItem)
        .where(OrderItem.order_id.in_(unique))
        .options(joinedload(OrderItem.product))
        .order_by(OrderItem.order_id, OrderItem.created_at, OrderItem.id)
    )
    try:
        result = await db.execute(stmt)
    except SQLAlchemyError:
        logger.error("Order item batch failed for %d orders: %s", len(unique), safe_preview(unique))
        raise

    index: dict[str, list[EnrichedOrderItem]] = {key: [] for key in unique}
    for item in result.unique().scalars():
        index[item.order_id].append(EnrichedOrderItem.model_validate(item))
    return [list(index[key]) for key in keys]


async def batch_posts_by_blog_ids(keys: Sequence[str], db: AsyncSession) -> list[list[EnrichedPost]]:
    """Posts of each blog with their author summary, newest first."""
    if not keys:
        return []
    unique = _unique_keys(keys)
    stmt = (
        select(Post)
        .where(Post.blog_id.in_(unique))
        .options(joinedload(Post.author))
        .order_by(Post.blog_id, Post.created_at.desc(), Post.id)
    )
    try:
        result = await db.execute(stmt)
    except SQLAlchemyError:
        logger.error("Post batch failed for %d blogs: %s", len(unique), safe_preview(unique))
        raise

    index: dict[str, list[EnrichedPost]] = {key: [] for key in unique}
    for post in result.unique().scalars():
        index[post.blog_id].append(EnrichedPost.model_validate(post))
    return [list(index[key]) for key in keys]


__all__ = [
    "batch_order_items_by_order_ids",
    "batch_posts_by_blog_ids",
    "batch_sections_by_page_ids",
    "batch_users_by_ids",
]
