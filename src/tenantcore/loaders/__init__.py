"""Batch loaders for N+1-free resolution of related entities.

Defines:
- batch_*(): One-query batch functions with positional results
- Loaders / create_loaders(): Per-request DataLoader set
- PublicUser, CMSSectionData, EnrichedOrderItem, EnrichedPost: Loaded values
"""

from .batch import (
    batch_order_items_by_order_ids,
    batch_posts_by_blog_ids,
    batch_sections_by_page_ids,
    batch_users_by_ids,
)
from .dataloaders import Loaders, bind_batch, create_loaders
from .schemas import (
    AuthorSummary,
    CMSSectionData,
    EnrichedOrderItem,
    EnrichedPost,
    ProductSummary,
    PublicUser,
    SectionComponentData,
)

__all__ = [
    "AuthorSummary",
    "CMSSectionData",
    "EnrichedOrderItem",
    "EnrichedPost",
    "Loaders",
    "ProductSummary",
    "PublicUser",
    "SectionComponentData",
    "batch_order_items_by_order_ids",
    "batch_posts_by_blog_ids",
    "batch_sections_by_page_ids",
    "batch_users_by_ids",
    "bind_batch",
    "create_loaders",
]
