"""Permission groups composed into role permission sets.

Each group is an immutable tuple of ``verb:resource`` strings. Roles in
:mod:`tenantcore.permissions.roles` are unions of these groups.
"""

from __future__ import annotations

# ── Base user/post ──────────────────────────────────────

ADMIN_BASE = (
    "read:user", "create:user", "update:user", "delete:user",
    "read:post",
    "manage:settings",
    "access:adminDashboard",
    "update:site_settings",
)

MANAGER_BASE = (
    "read:user",
    "read:post",
    "access:managerDashboard",
)

USER_BASE = (
    "read:post",
    "update:own_post",
    "update:own_profile",
)

# ── CMS ─────────────────────────────────────────────────

ADMIN_CMS = (
    "read:cms_section_definitions", "read:any_page", "browse:cms_components",
    "read:cms_component_definition", "list:all_pages", "find:pages_by_section",
    "delete:cms_section", "create:cms_component_definition",
    "update:cms_component_definition", "delete:cms_component_definition",
    "update:cms_section_metadata", "edit:cms_content",
    "create:page", "edit:page", "delete:page", "edit:page_structure",
)

MANAGER_CMS = (
    "read:cms_section_definitions", "read:any_page", "browse:cms_components",
    "read:cms_component_definition", "list:all_pages", "find:pages_by_section",
    "delete:cms_section", "update:cms_section_metadata", "edit:cms_content",
    "create:page", "edit:page", "edit:page_structure",
    "manage:cms_components",
)

EDITOR_CMS = (
    "read:cms_section_definitions", "browse:cms_components",
    "read:cms_component_definition", "update:cms_section_metadata",
    "edit:cms_content", "read:any_page",
)

# ── Blog/post ───────────────────────────────────────────

ADMIN_BLOG_POST = (
    "create:blog", "update:blog", "delete:blog",
    "create:post", "update:any_post", "delete:post", "publish:post",
)

MANAGER_BLOG_POST = (
    "create:blog", "update:blog",
    "create:post", "update:any_post", "delete:post", "publish:post",
)

EDITOR_BLOG_POST = (
    "create:post", "update:own_post", "read:any_post",
)

# ── E-commerce ──────────────────────────────────────────

ADMIN_ECOMMERCE = (
    "list:shops", "view:shop_details", "create:shop", "update:shop", "delete:shop",
    "list:products", "view:any_product", "create:product", "update:any_product", "delete:any_product",
    "manage:product_categories", "create:product_category", "update:product_category",
    "delete:product_category",
    "view:taxes", "manage:taxes",
    "list:orders", "view:any_order", "update:any_order", "delete:order",
    "manage:payment_settings", "view:payments", "manage:payments",
    "manage:customers", "view:customer_details",
    "manage:discounts", "create:discount", "update:discount", "delete:discount",
    "manage:currencies",
    "view:shipping_zones", "manage:shipping_zones",
)

MANAGER_ECOMMERCE = (
    "list:shops", "view:shop_details",
    "list:products", "view:any_product", "create:product", "update:any_product",
    "manage:product_categories",
    "list:orders", "view:any_order", "update:any_order",
    "view:payments",
    "manage:customers",
    "manage:discounts",
)

CUSTOMER_ECOMMERCE = (
    "view:own_orders", "create:order", "view:cart", "update:cart",
    "view:public_products", "view:product_details",
)

# ── HR ──────────────────────────────────────────────────

HR_ADMIN = (
    "list:employees", "view:any_employee_profile", "create:employee", "update:employee",
    "delete:employee",
    "manage:departments", "create:department", "update:department", "delete:department",
    "manage:positions", "create:position", "update:position", "delete:position",
    "view:all_attendance", "manage:attendance", "generate:hr_reports",
    "manage:leaves", "approve:leave", "reject:leave",
    "manage:benefits", "assign:benefits",
    "manage:payroll", "process:payroll",
    "manage:performance_reviews", "create:performance_review",
    "manage:trainings", "assign:training",
)

HR_MANAGER = (
    "list:employees", "view:any_employee_profile", "update:employee",
    "view:departments", "view:positions",
    "view:all_attendance", "manage:attendance",
    "approve:leave", "reject:leave", "view:leaves",
    "view:benefits",
    "view:payroll",
    "create:performance_review", "view:performance_reviews",
    "assign:training", "view:trainings",
)

EMPLOYEE = (
    "view:own_employee_profile", "update:own_profile",
    "view:own_attendance", "clock:in_out",
    "request:leave", "view:own_leaves",
    "view:own_benefits",
    "view:own_payroll",
    "view:own_performance_reviews",
    "view:assigned_trainings",
)

# ── Booking/calendar ────────────────────────────────────

BOOKING_ADMIN = (
    "manage:locations", "create:location", "update:location", "delete:location",
    "manage:service_categories", "create:service_category", "update:service_category",
    "delete:service_category",
    "manage:services", "create:service", "update:service", "delete:service",
    "manage:staff_profiles", "create:staff_profile", "update:staff_profile", "delete:staff_profile",
    "manage:booking_rules", "update:booking_rules",
    "view:all_bookings", "create:booking_for_others", "update:any_booking", "cancel:any_booking",
    "assign:staff_to_service", "assign:staff_to_location",
    "update:any_staff_schedule",
)

AGENT = (
    "view:own_staff_profile", "update:own_staff_schedule",
    "view:assigned_bookings", "update:assigned_bookings",
    "create:booking_for_others",
)

CUSTOMER_BOOKING = (
    "create:own_booking", "view:own_bookings", "update:own_booking", "cancel:own_booking",
    "view:available_services", "view:available_slots",
)

# ── Complementary ───────────────────────────────────────

FINANCE_MANAGER = (
    "view:financial_reports", "generate:financial_reports",
    "manage:billing", "create:invoice", "update:invoice",
    "view:payments", "manage:payments",
    "manage:taxes", "view:tax_reports",
    "manage:currencies", "view:revenue_analytics",
)

SALES_REP = (
    "view:customers", "create:customer", "update:customer",
    "view:leads", "create:lead", "update:lead",
    "view:opportunities", "create:opportunity", "update:opportunity",
    "view:sales_reports", "track:sales_performance",
)

INSTRUCTOR = (
    "view:courses", "create:course", "update:own_course",
    "view:students", "manage:course_enrollment",
    "create:lesson", "update:lesson", "delete:own_lesson",
    "grade:assignments", "view:student_progress",
)

PROJECT_LEAD = (
    "view:projects", "create:project", "update:project",
    "view:tasks", "create:task", "update:task", "assign:task",
    "view:team_members", "assign:team_members",
    "view:project_reports", "track:project_progress",
)

# ── Platform ────────────────────────────────────────────

PLATFORM_ADMIN = (
    "manage:tenants", "view:tenant_analytics",
    "manage:modules", "activate:modules", "deactivate:modules",
    "manage:plans", "create:plan", "update:plan",
    "view:platform_analytics", "generate:usage_reports",
)

SUPPORT_AGENT = (
    "view:support_dashboard", "view:tickets", "update:ticket",
    "view:user_issues", "assist:users",
    "view:system_status",
)


__all__ = [
    "ADMIN_BASE",
    "ADMIN_BLOG_POST",
    "ADMIN_CMS",
    "ADMIN_ECOMMERCE",
    "AGENT",
    "BOOKING_ADMIN",
    "CUSTOMER_BOOKING",
    "CUSTOMER_ECOMMERCE",
    "EDITOR_BLOG_POST",
    "EDITOR_CMS",
    "EMPLOYEE",
    "FINANCE_MANAGER",
    "HR_ADMIN",
    "HR_MANAGER",
    "INSTRUCTOR",
    "MANAGER_BASE",
    "MANAGER_BLOG_POST",
    "MANAGER_CMS",
    "MANAGER_ECOMMERCE",
    "PLATFORM_ADMIN",
    "PROJECT_LEAD",
    "SALES_REP",
    "SUPPORT_AGENT",
    "USER_BASE",
]
