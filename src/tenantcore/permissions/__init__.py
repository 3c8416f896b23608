"""Role-permission table and session permission checks.

Defines:
- Roles: Every role name known to the table
- ADMINISTRATOR_ROLES: Roles that pass every permission check
- ROLE_PERMISSIONS: Role → de-duplicated permission tuple (read-only)
- get_permissions_for_role(): Table lookup, unknown role → []
- Session / SessionUser: The signed-in user seen by the predicates
- has_permission() / has_all_permissions() / has_any_permission()
- Ownership and tenant-membership rules
- require_permission() / require_tenant_member(): Guards raising AuthorizationError
"""

from .access import (
    has_all_permissions,
    has_any_permission,
    has_ownership_permission,
    has_permission,
    is_administrator,
    is_authenticated,
    is_platform_super_admin,
    is_self,
    is_tenant_admin,
    is_tenant_member,
    require_permission,
    require_tenant_member,
)
from .constants import ADMINISTRATOR_ROLES, PLATFORM_SUPER_ADMIN_ROLES, Permissions, Roles
from .roles import (
    ROLE_PERMISSIONS,
    compose_permissions,
    get_known_roles,
    get_permissions_for_role,
)
from .session import Session, SessionUser

__all__ = [
    "ADMINISTRATOR_ROLES",
    "PLATFORM_SUPER_ADMIN_ROLES",
    "Permissions",
    "ROLE_PERMISSIONS",
    "Roles",
    "Session",
    "SessionUser",
    "compose_permissions",
    "get_known_roles",
    "get_permissions_for_role",
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
