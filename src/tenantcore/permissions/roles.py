"""Role → permission table.

Provides:
- ``compose_permissions()`` — ordered, de-duplicated union of groups.
- ``ROLE_PERMISSIONS`` — read-only role → permissions mapping, built once.
- ``get_permissions_for_role()`` — plain lookup; unknown roles get ``[]``.
"""

from __future__ import annotations

from collections.abc import Iterable
from types import MappingProxyType
from typing import Mapping

from . import groups
from .constants import Roles


def compose_permissions(*parts: Iterable[str]) -> tuple[str, ...]:
    """Union of permission groups, first occurrence wins the position.

    Example::

        >>> compose_permissions(("read:post", "create:post"), ("read:post", "publish:post"))
        ('read:post', 'create:post', 'publish:post')
    """
    seen: dict[str, None] = {}
    for part in parts:
        for permission in part:
            seen.setdefault(permission, None)
    return tuple(seen)


# ── Role table ──────────────────────────────────────────

_ROLE_GROUPS: dict[str, tuple[Iterable[str], ...]] = {
    # Core roles
    Roles.ADMIN: (groups.ADMIN_BASE, groups.ADMIN_CMS, groups.ADMIN_BLOG_POST),
    Roles.MANAGER: (groups.MANAGER_BASE, groups.MANAGER_CMS, groups.MANAGER_BLOG_POST),
    Roles.USER: (groups.USER_BASE,),
    Roles.SUPER_ADMIN: (
        groups.ADMIN_BASE,
        groups.ADMIN_CMS,
        groups.ADMIN_BLOG_POST,
        groups.ADMIN_ECOMMERCE,
        groups.HR_ADMIN,
        groups.BOOKING_ADMIN,
        groups.FINANCE_MANAGER,
        groups.PLATFORM_ADMIN,
    ),
    # Platform roles
    Roles.SUPER_ADMIN_PLATFORM: (
        groups.ADMIN_BASE,
        groups.ADMIN_CMS,
        groups.ADMIN_BLOG_POST,
        groups.ADMIN_ECOMMERCE,
        groups.HR_ADMIN,
        groups.BOOKING_ADMIN,
        groups.FINANCE_MANAGER,
        groups.PLATFORM_ADMIN,
        ("manage:all_tenants", "access:all_databases", "manage:platform_configuration"),
    ),
    Roles.PLATFORM_ADMIN: (
        groups.PLATFORM_ADMIN,
        ("view:tenant_details", "manage:pricing", "view:usage_analytics"),
    ),
    Roles.SUPPORT_AGENT: (
        groups.SUPPORT_AGENT,
        ("read:user", "view:basic_tenant_info"),
    ),
    # Tenant roles
    Roles.TENANT_ADMIN: (
        groups.ADMIN_BASE,
        groups.ADMIN_CMS,
        groups.ADMIN_BLOG_POST,
        groups.ADMIN_ECOMMERCE,
        groups.HR_ADMIN,
        groups.BOOKING_ADMIN,
        groups.FINANCE_MANAGER,
        ("manage:tenant_settings", "manage:tenant_users", "activate:tenant_modules"),
    ),
    Roles.TENANT_MANAGER: (
        groups.MANAGER_BASE,
        groups.MANAGER_CMS,
        groups.MANAGER_BLOG_POST,
        groups.MANAGER_ECOMMERCE,
        groups.HR_MANAGER,
        ("view:reports", "approve:actions"),
    ),
    Roles.TENANT_USER: (groups.USER_BASE, ("access:tenant_dashboard",)),
    # Module roles
    Roles.CONTENT_MANAGER: (groups.ADMIN_CMS, groups.ADMIN_BLOG_POST, ("manage:media",)),
    Roles.CONTENT_EDITOR: (groups.EDITOR_CMS, groups.EDITOR_BLOG_POST),
    Roles.HR_ADMIN: (groups.HR_ADMIN,),
    Roles.HR_MANAGER: (groups.HR_MANAGER,),
    Roles.EMPLOYEE: (groups.EMPLOYEE,),
    Roles.BOOKING_ADMIN: (groups.BOOKING_ADMIN,),
    Roles.AGENT: (groups.AGENT,),
    Roles.CUSTOMER: (groups.CUSTOMER_BOOKING, groups.CUSTOMER_ECOMMERCE),
    Roles.STORE_ADMIN: (groups.ADMIN_ECOMMERCE,),
    Roles.STORE_MANAGER: (groups.MANAGER_ECOMMERCE,),
    # Complementary roles
    Roles.FINANCE_MANAGER: (groups.FINANCE_MANAGER,),
    Roles.SALES_REP: (groups.SALES_REP,),
    Roles.INSTRUCTOR: (groups.INSTRUCTOR,),
    Roles.PROJECT_LEAD: (groups.PROJECT_LEAD,),
}

ROLE_PERMISSIONS: Mapping[str, tuple[str, ...]] = MappingProxyType(
    {role: compose_permissions(*parts) for role, parts in _ROLE_GROUPS.items()}
)


def get_permissions_for_role(role: str | None) -> list[str]:
    """Permissions granted to ``role``.

    Unknown (or missing) roles resolve to an empty list so every
    permission check for them fails closed. A fresh list is returned;
    callers may mutate it freely.
    """
    if not isinstance(role, str):
        return []
    return list(ROLE_PERMISSIONS.get(role, ()))


def get_known_roles() -> tuple[str, ...]:
    return tuple(ROLE_PERMISSIONS)


__all__ = [
    "ROLE_PERMISSIONS",
    "compose_permissions",
    "get_known_roles",
    "get_permissions_for_role",
]
