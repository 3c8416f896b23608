"""Role names and permission string builders.

Provides:
- ``Roles`` — every role name the role-permission table knows.
- ``ADMINISTRATOR_ROLES`` — roles treated as wildcard-all by the predicates.
- ``Permissions`` — builders for ``verb:resource`` strings.
"""

from __future__ import annotations


class Roles:
    """Canonical role names.

    Role names are plain strings; a user may carry any string as a role,
    in which case it simply resolves to no permissions.
    """

    # ── Core roles ──────────────────────────────────────
    ADMIN = "ADMIN"
    MANAGER = "MANAGER"
    USER = "USER"
    SUPER_ADMIN = "SUPER_ADMIN"

    # ── Platform roles ──────────────────────────────────
    SUPER_ADMIN_PLATFORM = "SuperAdmin"
    PLATFORM_ADMIN = "PlatformAdmin"
    SUPPORT_AGENT = "SupportAgent"

    # ── Tenant roles ────────────────────────────────────
    TENANT_ADMIN = "TenantAdmin"
    TENANT_MANAGER = "TenantManager"
    TENANT_USER = "TenantUser"

    # ── Module roles ────────────────────────────────────
    CONTENT_MANAGER = "ContentManager"
    CONTENT_EDITOR = "ContentEditor"
    HR_ADMIN = "HRAdmin"
    HR_MANAGER = "HRManager"
    EMPLOYEE = "Employee"
    BOOKING_ADMIN = "BookingAdmin"
    AGENT = "Agent"
    CUSTOMER = "Customer"
    STORE_ADMIN = "StoreAdmin"
    STORE_MANAGER = "StoreManager"

    # ── Complementary roles ─────────────────────────────
    FINANCE_MANAGER = "FinanceManager"
    SALES_REP = "SalesRep"
    INSTRUCTOR = "Instructor"
    PROJECT_LEAD = "ProjectLead"

    # Roles allowed to administer a tenant they belong to
    TENANT_ADMINISTRATORS = frozenset({"ADMIN", "MANAGER"})


# Wildcard-all in has_permission / has_all_permissions / has_any_permission.
ADMINISTRATOR_ROLES = frozenset({Roles.ADMIN, Roles.SUPER_ADMIN, Roles.SUPER_ADMIN_PLATFORM})

# Roles that pass the platform-wide super admin rule.
PLATFORM_SUPER_ADMIN_ROLES = frozenset({Roles.SUPER_ADMIN, Roles.SUPER_ADMIN_PLATFORM})


class Permissions:
    """Builders for permission strings.

    Format: ``{verb}:{resource}``, with ownership-qualified resources
    ``own_{resource}`` and ``any_{resource}``::

        Permissions.build("read", "post")       → "read:post"
        Permissions.own("update", "post")       → "update:own_post"
        Permissions.any("update", "post")       → "update:any_post"
    """

    SEPARATOR = ":"
    OWN_PREFIX = "own_"
    ANY_PREFIX = "any_"

    @staticmethod
    def build(verb: str, resource: str) -> str:
        return f"{verb}:{resource}"

    @staticmethod
    def own(verb: str, resource: str) -> str:
        """Permission limited to resources the user owns."""
        return f"{verb}:own_{resource}"

    @staticmethod
    def any(verb: str, resource: str) -> str:
        """Permission over every resource of a kind in the tenant."""
        return f"{verb}:any_{resource}"

    @staticmethod
    def split(permission: str) -> tuple[str, str]:
        """Split ``"verb:resource"`` into its parts (resource may be empty)."""
        verb, _, resource = permission.partition(":")
        return verb, resource


__all__ = [
    "ADMINISTRATOR_ROLES",
    "PLATFORM_SUPER_ADMIN_ROLES",
    "Permissions",
    "Roles",
]
