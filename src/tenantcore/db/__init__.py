"""Relational storage: models and async session management."""

from .engine import (
    create_engine,
    get_engine,
    get_sessionmaker,
    init_db,
    reset_database_state,
    session_scope,
)
from .models import (
    Base,
    Blog,
    CMSSection,
    Order,
    OrderItem,
    Page,
    Post,
    Product,
    SectionComponent,
    Tenant,
    User,
)

__all__ = [
    "Base",
    "Blog",
    "CMSSection",
    "Order",
    "OrderItem",
    "Page",
    "Post",
    "Product",
    "SectionComponent",
    "Tenant",
    "User",
    "create_engine",
    "get_engine",
    "get_sessionmaker",
    "init_db",
    "reset_database_state",
    "session_scope",
]
