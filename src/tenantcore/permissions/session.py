"""Authenticated session seen by the permission predicates."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional

from .roles import get_permissions_for_role


@dataclass(frozen=True)
class SessionUser:
    """The signed-in user.

    Attributes:
        id: User id.
        role: Role name; any string is accepted.
        tenant_id: Tenant the user signed into (from the session token).
        permissions: Resolved permission strings for ``role``.
    """

    id: str
    role: Optional[str] = None
    tenant_id: Optional[str] = None
    permissions: tuple[str, ...] = field(default_factory=tuple)

    @classmethod
    def for_role(
        cls,
        user_id: str,
        role: Optional[str],
        *,
        tenant_id: Optional[str] = None,
    ) -> "SessionUser":
        """Build a user whose permissions come from the role table."""
        return cls(
            id=user_id,
            role=role,
            tenant_id=tenant_id,
            permissions=tuple(get_permissions_for_role(role)),
        )


@dataclass(frozen=True)
class Session:
    """A request session; ``user`` is None for anonymous requests."""

    user: Optional[SessionUser] = None

    @property
    def is_authenticated(self) -> bool:
        return self.user is not None


__all__ = ["Session", "SessionUser"]
