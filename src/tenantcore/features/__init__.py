"""Tenant features: catalog, route gates, access evaluator and storage service.

Defines:
- Features / FeatureCategory: Feature id constants and catalog grouping
- FEATURE_CATALOG / FEATURE_PRICES: The static, validated catalog
- ROUTE_GATES / find_route_gate(): Route prefix → required features
- has_feature_access() and friends: Pure checks over a feature list
- get_tenant_features() and friends: Tenant record read/write
"""

from .access import (
    FeatureCheck,
    calculate_monthly_cost,
    check_feature_requirements,
    get_available_features,
    get_missing_features,
    has_all_features,
    has_any_feature,
    has_feature_access,
    is_gate_satisfied,
    is_route_allowed,
)
from .catalog import (
    FEATURE_CATALOG,
    FEATURE_PRICES,
    REQUIRED_FEATURES,
    DependencyCheck,
    FeatureDefinition,
    RemovalResult,
    add_feature_with_dependencies,
    get_available_upgrades,
    get_feature_by_id,
    get_features_by_category,
    get_required_features,
    remove_feature_with_dependents,
    validate_catalog,
    validate_dependencies,
)
from .constants import FeatureCategory, Features
from .routes import ROUTE_GATES, SUPPORTED_LOCALES, GateScope, RouteGate, find_route_gate, normalize_route
from .tenant import (
    TenantFeatureData,
    TenantFeatureSummary,
    get_tenant_feature_summary,
    get_tenant_features,
    normalize_tenant_features,
    sync_tenant_features_after_registration,
    update_tenant_features,
)

__all__ = [
    "DependencyCheck",
    "FEATURE_CATALOG",
    "FEATURE_PRICES",
    "FeatureCategory",
    "FeatureCheck",
    "FeatureDefinition",
    "Features",
    "GateScope",
    "REQUIRED_FEATURES",
    "ROUTE_GATES",
    "RemovalResult",
    "RouteGate",
    "SUPPORTED_LOCALES",
    "TenantFeatureData",
    "TenantFeatureSummary",
    "add_feature_with_dependencies",
    "calculate_monthly_cost",
    "check_feature_requirements",
    "find_route_gate",
    "get_available_features",
    "get_available_upgrades",
    "get_feature_by_id",
    "get_features_by_category",
    "get_missing_features",
    "get_required_features",
    "get_tenant_feature_summary",
    "get_tenant_features",
    "has_all_features",
    "has_any_feature",
    "has_feature_access",
    "is_gate_satisfied",
    "is_route_allowed",
    "normalize_route",
    "normalize_tenant_features",
    "remove_feature_with_dependents",
    "sync_tenant_features_after_registration",
    "update_tenant_features",
    "validate_catalog",
    "validate_dependencies",
]
