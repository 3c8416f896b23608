"""Tests for the role-permission table and session permission checks."""

from __future__ import annotations

import pytest

from tenantcore.exceptions import AuthorizationError
from tenantcore.permissions import (
    ADMINISTRATOR_ROLES,
    ROLE_PERMISSIONS,
    Permissions,
    Roles,
    Session,
    SessionUser,
    compose_permissions,
    get_known_roles,
    get_permissions_for_role,
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
from tenantcore.permissions import groups


def session_for(role: str | None, user_id: str = "u-1", tenant_id: str | None = "t-1") -> Session:
    return Session(user=SessionUser.for_role(user_id, role, tenant_id=tenant_id))


class TestPermissionBuilders:
    """Tests for Permissions string builders."""

    def test_build(self) -> None:
        assert Permissions.build("read", "post") == "read:post"

    def test_ownership_forms(self) -> None:
        assert Permissions.own("update", "post") == "update:own_post"
        assert Permissions.any("update", "post") == "update:any_post"

    def test_split(self) -> None:
        assert Permissions.split("edit:cms_content") == ("edit", "cms_content")
        assert Permissions.split("weird") == ("weird", "")


class TestGroups:
    """Tests for permission group tables."""

    @pytest.mark.parametrize(
        "group",
        [
            groups.ADMIN_BASE,
            groups.ADMIN_CMS,
            groups.ADMIN_BLOG_POST,
            groups.ADMIN_ECOMMERCE,
            groups.HR_ADMIN,
            groups.BOOKING_ADMIN,
            groups.PLATFORM_ADMIN,
        ],
    )
    def test_permission_format(self, group: tuple[str, ...]) -> None:
        """Every permission is verb:resource with both parts present."""
        for permission in group:
            verb, _, resource = permission.partition(":")
            assert verb and resource, permission


class TestRoleTable:
    """Tests for ROLE_PERMISSIONS and get_permissions_for_role."""

    def test_admin_is_union_of_groups(self) -> None:
        expected = set(groups.ADMIN_BASE) | set(groups.ADMIN_CMS) | set(groups.ADMIN_BLOG_POST)
        assert set(get_permissions_for_role(Roles.ADMIN)) == expected

    def test_manager_is_union_of_groups(self) -> None:
        expected = set(groups.MANAGER_BASE) | set(groups.MANAGER_CMS) | set(groups.MANAGER_BLOG_POST)
        assert set(get_permissions_for_role(Roles.MANAGER)) == expected

    def test_user_role(self) -> None:
        assert get_permissions_for_role(Roles.USER) == ["read:post", "update:own_post", "update:own_profile"]

    def test_no_duplicates(self) -> None:
        for role, permissions in ROLE_PERMISSIONS.items():
            assert len(permissions) == len(set(permissions)), role

    def test_first_seen_order(self) -> None:
        """Composition keeps the position of the first occurrence."""
        admin = get_permissions_for_role(Roles.ADMIN)
        assert admin[: len(groups.ADMIN_BASE)] == list(groups.ADMIN_BASE)

    def test_unknown_role_is_empty(self) -> None:
        assert get_permissions_for_role("Astronaut") == []
        assert get_permissions_for_role("") == []
        assert get_permissions_for_role(None) == []

    def test_role_names_are_case_sensitive(self) -> None:
        assert get_permissions_for_role("admin") == []

    def test_lookup_returns_copy(self) -> None:
        permissions = get_permissions_for_role(Roles.USER)
        permissions.append("delete:everything")
        assert "delete:everything" not in get_permissions_for_role(Roles.USER)

    def test_table_is_read_only(self) -> None:
        with pytest.raises(TypeError):
            ROLE_PERMISSIONS["Hacker"] = ("delete:user",)  # type: ignore[index]

    def test_every_known_role_listed(self) -> None:
        roles = set(get_known_roles())
        assert {
            "ADMIN", "MANAGER", "USER", "SUPER_ADMIN",
            "SuperAdmin", "PlatformAdmin", "SupportAgent",
            "TenantAdmin", "TenantManager", "TenantUser",
            "ContentManager", "ContentEditor",
            "HRAdmin", "HRManager", "Employee",
            "BookingAdmin", "Agent", "Customer",
            "StoreAdmin", "StoreManager",
            "FinanceManager", "SalesRep", "Instructor", "ProjectLead",
        } <= roles

    def test_customer_combines_booking_and_commerce(self) -> None:
        customer = set(get_permissions_for_role(Roles.CUSTOMER))
        assert set(groups.CUSTOMER_BOOKING) <= customer
        assert set(groups.CUSTOMER_ECOMMERCE) <= customer

    def test_super_admin_platform_extras(self) -> None:
        permissions = get_permissions_for_role(Roles.SUPER_ADMIN_PLATFORM)
        assert "manage:all_tenants" in permissions
        assert "manage:tenants" in permissions

    def test_compose_permissions(self) -> None:
        assert compose_permissions(("a:b", "c:d"), ("c:d", "e:f")) == ("a:b", "c:d", "e:f")
        assert compose_permissions() == ()


class TestHasPermission:
    """Tests for has_permission and friends."""

    def test_no_session(self) -> None:
        assert has_permission(None, "read:post") is False
        assert has_permission(Session(), "read:post") is False

    def test_granted_permission(self) -> None:
        session = session_for(Roles.USER)
        assert has_permission(session, "read:post") is True
        assert has_permission(session, "delete:post") is False

    @pytest.mark.parametrize("role", sorted(ADMINISTRATOR_ROLES))
    def test_administrators_pass_everything(self, role: str) -> None:
        session = session_for(role)
        assert has_permission(session, "never:granted_anywhere") is True
        assert has_all_permissions(session, ["x:y", "z:w"]) is True
        assert has_any_permission(session, ["x:y"]) is True

    def test_unknown_role_fails_closed(self) -> None:
        session = session_for("Astronaut")
        assert has_permission(session, "read:post") is False
        assert has_any_permission(session, ["read:post", "read:user"]) is False

    def test_permissions_on_session_are_authoritative(self) -> None:
        """Explicit permissions are used as given, not re-derived from the role."""
        session = Session(user=SessionUser(id="u-1", role="Custom", permissions=("publish:post",)))
        assert has_permission(session, "publish:post") is True

    def test_has_all_permissions(self) -> None:
        session = session_for(Roles.USER)
        assert has_all_permissions(session, ["read:post", "update:own_post"]) is True
        assert has_all_permissions(session, ["read:post", "delete:post"]) is False

    def test_has_all_permissions_empty(self) -> None:
        assert has_all_permissions(session_for(Roles.USER), []) is True
        assert has_all_permissions(None, []) is False

    def test_has_any_permission(self) -> None:
        session = session_for(Roles.USER)
        assert has_any_permission(session, ["delete:post", "read:post"]) is True
        assert has_any_permission(session, ["delete:post"]) is False

    def test_has_any_permission_empty(self) -> None:
        assert has_any_permission(session_for(Roles.USER), []) is False

    def test_is_administrator(self) -> None:
        assert is_administrator(session_for(Roles.ADMIN)) is True
        assert is_administrator(session_for(Roles.MANAGER)) is False
        assert is_administrator(None) is False


class TestOwnership:
    """Tests for has_ownership_permission."""

    def test_own_permission_requires_ownership(self) -> None:
        session = session_for(Roles.CONTENT_EDITOR, user_id="u-1")
        assert has_ownership_permission(session, "update", "post", owner_id="u-1") is True
        assert has_ownership_permission(session, "update", "post", owner_id="u-2") is False
        assert has_ownership_permission(session, "update", "post", owner_id=None) is False

    def test_any_permission_ignores_owner(self) -> None:
        session = session_for(Roles.MANAGER, user_id="u-1")
        assert has_ownership_permission(session, "update", "post", owner_id="u-2") is True

    def test_no_user(self) -> None:
        assert has_ownership_permission(Session(), "update", "post", owner_id="u-1") is False


class TestTenantRules:
    """Tests for tenant membership and administration rules."""

    def test_is_authenticated(self) -> None:
        assert is_authenticated(session_for(Roles.USER)) is True
        assert is_authenticated(Session()) is False
        assert is_authenticated(None) is False

    def test_platform_super_admin(self) -> None:
        assert is_platform_super_admin(session_for(Roles.SUPER_ADMIN)) is True
        assert is_platform_super_admin(session_for(Roles.ADMIN)) is False

    def test_member_of_own_tenant_only(self) -> None:
        session = session_for(Roles.USER, tenant_id="t-1")
        assert is_tenant_member(session, "t-1") is True
        assert is_tenant_member(session, "t-2") is False

    def test_no_resolved_tenant(self) -> None:
        assert is_tenant_member(session_for(Roles.USER), None) is False
        assert is_tenant_admin(session_for(Roles.ADMIN), None) is False

    def test_super_admin_is_member_and_admin_everywhere(self) -> None:
        session = session_for(Roles.SUPER_ADMIN, tenant_id=None)
        assert is_tenant_member(session, "t-9") is True
        assert is_tenant_admin(session, "t-9") is True

    def test_tenant_admin_roles(self) -> None:
        assert is_tenant_admin(session_for(Roles.ADMIN, tenant_id="t-1"), "t-1") is True
        assert is_tenant_admin(session_for(Roles.MANAGER, tenant_id="t-1"), "t-1") is True
        assert is_tenant_admin(session_for(Roles.USER, tenant_id="t-1"), "t-1") is False

    def test_admin_of_other_tenant(self) -> None:
        assert is_tenant_admin(session_for(Roles.ADMIN, tenant_id="t-1"), "t-2") is False

    def test_is_self(self) -> None:
        session = session_for(Roles.USER, user_id="u-1")
        assert is_self(session, "u-1") is True
        assert is_self(session, "u-2") is False
        assert is_self(session, None) is False
        assert is_self(None, "u-1") is False


class TestGuards:
    """Tests for require_permission and require_tenant_member."""

    def test_granted_permission_passes(self) -> None:
        require_permission(session_for(Roles.USER), "read:post")

    def test_missing_permission_raises(self) -> None:
        with pytest.raises(AuthorizationError) as exc_info:
            require_permission(session_for(Roles.USER, user_id="u-7"), "delete:user")

        error = exc_info.value
        assert error.code == "FORBIDDEN"
        assert error.message == "Missing permission: delete:user"
        assert error.details == {"permission": "delete:user", "user_id": "u-7"}

    def test_anonymous_session_raises(self) -> None:
        with pytest.raises(AuthorizationError) as exc_info:
            require_permission(Session(), "read:post")
        assert exc_info.value.details["user_id"] is None

        with pytest.raises(AuthorizationError):
            require_permission(None, "read:post")

    def test_administrator_passes(self) -> None:
        require_permission(session_for(Roles.ADMIN), "delete:user")

    def test_tenant_member(self) -> None:
        session = session_for(Roles.USER, tenant_id="t-1")
        require_tenant_member(session, "t-1")

        with pytest.raises(AuthorizationError) as exc_info:
            require_tenant_member(session, "t-2")
        assert exc_info.value.details == {"tenant_id": "t-2", "user_id": "u-1"}

    def test_no_resolved_tenant_raises(self) -> None:
        with pytest.raises(AuthorizationError):
            require_tenant_member(session_for(Roles.USER), None)
