"""Values returned by the batch loaders.

These are Pydantic models built from ORM rows, so resolvers never hold
on to session-bound objects after the batch session closes.
"""

from __future__ import annotations

from datetime import datetime
from typing import Any, Optional

from pydantic import BaseModel, Field


class PublicUser(BaseModel):
    """A user as exposed to other users (no credentials)."""

    id: str
    email: str
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    image: Optional[str] = None
    role: Optional[str] = None
    tenant_id: Optional[str] = None

    model_config = {"from_attributes": True}


class SectionComponentData(BaseModel):
    """One component placed inside a CMS section."""

    id: str
    component_type: str
    order: int = 0
    data: dict[str, Any] = Field(default_factory=dict)

    model_config = {"from_attributes": True}


class CMSSectionData(BaseModel):
    """A CMS section of a page with its ordered components."""

    id: str
    page_id: str
    section_id: str
    name: Optional[str] = None
    order: int = 0
    components: list[SectionComponentData] = Field(default_factory=list)

    model_config = {"from_attributes": True}


class ProductSummary(BaseModel):
    id: str
    name: str
    sku: Optional[str] = None
    price: float = 0.0

    model_config = {"from_attributes": True}


class EnrichedOrderItem(BaseModel):
    """Order line with the ordered product inlined."""

    id: str
    order_id: str
    product_id: Optional[str] = None
    quantity: int = 1
    unit_price: float = 0.0
    product: Optional[ProductSummary] = None

    model_config = {"from_attributes": True}

    @property
    def line_total(self) -> float:
        return self.quantity * self.unit_price


class AuthorSummary(BaseModel):
    id: str
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    image: Optional[str] = None

    model_config = {"from_attributes": True}


class EnrichedPost(BaseModel):
    """Blog post with its author inlined."""

    id: str
    blog_id: str
    title: str
    slug: str
    status: str
    published_at: Optional[datetime] = None
    created_at: Optional[datetime] = None
    author: Optional[AuthorSummary] = None

    model_config = {"from_attributes": True}


__all__ = [
    "AuthorSummary",
    "CMSSectionData",
    "EnrichedOrderItem",
    "EnrichedPost",
    "ProductSummary",
    "PublicUser",
    "SectionComponentData",
]
