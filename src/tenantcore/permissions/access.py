"""Permission checks over a request session.

Provides runtime predicates used by resolvers and route handlers to
decide whether the current user may perform an action. Every function
is total: a missing session, a missing user, or an unknown role simply
yields ``False``. The ``require_*`` guards raise
:class:`~tenantcore.exceptions.AuthorizationError` instead of answering False.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from typing import Optional

from ..exceptions import AuthorizationError
from .constants import ADMINISTRATOR_ROLES, PLATFORM_SUPER_ADMIN_ROLES, Permissions, Roles
from .session import Session, SessionUser

logger = logging.getLogger(__name__)


def _user(session: Optional[Session]) -> Optional[SessionUser]:
    if session is None:
        return None
    return getattr(session, "user", None)


def is_administrator(session: Optional[Session]) -> bool:
    """True when the session user holds an administrator role.

    Administrator roles pass every permission check, including checks for
    permission strings no role was ever granted.
    """
    user = _user(session)
    return user is not None and user.role in ADMINISTRATOR_ROLES


def has_permission(session: Optional[Session], permission: str) -> bool:
    """Check if the session user holds ``permission``.

    Checks in order:
    1. No session or no user → False
    2. Administrator role → True
    3. Exact membership in the user's resolved permissions

    Example::

        session = Session(user=SessionUser.for_role("u1", Roles.USER))
        has_permission(session, "read:post")     # True
        has_permission(session, "delete:post")   # False
    """
    user = _user(session)
    if user is None:
        return False
    if user.role in ADMINISTRATOR_ROLES:
        return True
    return permission in user.permissions


def has_all_permissions(session: Optional[Session], permissions: Iterable[str]) -> bool:
    """Check that the user holds every permission (vacuously True when empty)."""
    user = _user(session)
    if user is None:
        return False
    if user.role in ADMINISTRATOR_ROLES:
        return True
    granted = set(user.permissions)
    return all(p in granted for p in permissions)


def has_any_permission(session: Optional[Session], permissions: Iterable[str]) -> bool:
    """Check that the user holds at least one permission (False when empty)."""
    user = _user(session)
    if user is None:
        return False
    if user.role in ADMINISTRATOR_ROLES:
        return True
    granted = set(user.permissions)
    return any(p in granted for p in permissions)


# ── Ownership ───────────────────────────────────────────


def has_ownership_permission(
    session: Optional[Session],
    verb: str,
    resource: str,
    owner_id: Optional[str],
) -> bool:
    """Check an ownership-qualified permission against a concrete owner.

    ``{verb}:any_{resource}`` grants regardless of owner;
    ``{verb}:own_{resource}`` grants only when the user owns the resource.

    Example::

        # ContentEditor holds update:own_post only
        has_ownership_permission(session, "update", "post", owner_id=session.user.id)  # True
        has_ownership_permission(session, "update", "post", owner_id="someone-else")   # False
    """
    user = _user(session)
    if user is None:
        return False
    if has_permission(session, Permissions.any(verb, resource)):
        return True
    if owner_id is None or owner_id != user.id:
        return False
    return Permissions.own(verb, resource) in user.permissions


# ── Tenant rules ────────────────────────────────────────


def is_authenticated(session: Optional[Session]) -> bool:
    return _user(session) is not None


def is_platform_super_admin(session: Optional[Session]) -> bool:
    user = _user(session)
    return user is not None and user.role in PLATFORM_SUPER_ADMIN_ROLES


def is_tenant_member(session: Optional[Session], tenant_id: Optional[str]) -> bool:
    """User belongs to ``tenant_id`` (platform super admins belong everywhere).

    A request without a resolved tenant has no members.
    """
    user = _user(session)
    if user is None or not tenant_id:
        return False
    if user.role in PLATFORM_SUPER_ADMIN_ROLES:
        return True
    return user.tenant_id == tenant_id


def is_tenant_admin(session: Optional[Session], tenant_id: Optional[str]) -> bool:
    """User administers ``tenant_id``: ADMIN/MANAGER of that tenant, or a platform super admin."""
    user = _user(session)
    if user is None or not tenant_id:
        return False
    if user.tenant_id == tenant_id and user.role in Roles.TENANT_ADMINISTRATORS:
        return True
    if user.role in PLATFORM_SUPER_ADMIN_ROLES:
        return True
    logger.debug("User %s is not an admin of tenant %s", user.id, tenant_id)
    return False


def is_self(session: Optional[Session], target_user_id: Optional[str]) -> bool:
    """User is acting on their own record."""
    user = _user(session)
    return user is not None and target_user_id is not None and user.id == target_user_id


# ── Guards ──────────────────────────────────────────────


def require_permission(session: Optional[Session], permission: str) -> None:
    """Raise AuthorizationError unless the session user holds ``permission``."""
    if has_permission(session, permission):
        return
    user = _user(session)
    raise AuthorizationError(
        f"Missing permission: {permission}",
        permission=permission,
        user_id=user.id if user is not None else None,
    )


def require_tenant_member(session: Optional[Session], tenant_id: Optional[str]) -> None:
    """Raise AuthorizationError unless the user belongs to ``tenant_id``."""
    if is_tenant_member(session, tenant_id):
        return
    user = _user(session)
    raise AuthorizationError(
        "Not a member of this tenant",
        tenant_id=tenant_id,
        user_id=user.id if user is not None else None,
    )


__all__ = [
    "has_all_permissions",
    "has_any_permission",
    "has_ownership_permission",
    "has_permission",
    "is_administrator",
    "is_authenticated",
    "is_platform_super_admin",
    "is_self",
    "is_tenant_admin",
    "is_tenant_member",
    "require_permission",
    "require_tenant_member",
]
