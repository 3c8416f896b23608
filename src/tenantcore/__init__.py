from .config import TenantCoreConfig, LogLevel, load_config_from_env
from .logging import (
    safe_preview,
    redact_secrets,
    safe_log_value,
    TenantFormatter,
    TenantLoggerAdapter,
    setup_logging,
    get_tenant_logger,
)
from .exceptions import (
    TenantCoreError,
    ConfigurationError,
    CatalogError,
    AuthorizationError,
    TenantNotFoundError,
    StorageError,
    get_graphql_code,
    to_graphql_error,
)
from .features import (
    FEATURE_CATALOG,
    Features,
    FeatureDefinition,
    calculate_monthly_cost,
    get_available_features,
    get_feature_by_id,
    get_features_by_category,
    get_missing_features,
    has_all_features,
    has_any_feature,
    has_feature_access,
    is_route_allowed,
)
from .permissions import (
    Roles,
    Session,
    SessionUser,
    get_permissions_for_role,
    has_all_permissions,
    has_any_permission,
    has_permission,
    require_permission,
    require_tenant_member,
)
from .loaders import Loaders, create_loaders
from .context import AccessContext, RequestContext, build_request_context, load_access_context
from .http import build_auth_headers, create_api_client

__all__ = [
    'TenantCoreConfig',
    'LogLevel',
    'load_config_from_env',
    'safe_preview',
    'redact_secrets',
    'safe_log_value',
    'TenantFormatter',
    'TenantLoggerAdapter',
    'setup_logging',
    'get_tenant_logger',
    'TenantCoreError',
    'ConfigurationError',
    'CatalogError',
    'AuthorizationError',
    'TenantNotFoundError',
    'StorageError',
    'get_graphql_code',
    'to_graphql_error',
    'FEATURE_CATALOG',
    'Features',
    'FeatureDefinition',
    'calculate_monthly_cost',
    'get_available_features',
    'get_feature_by_id',
    'get_features_by_category',
    'get_missing_features',
    'has_all_features',
    'has_any_feature',
    'has_feature_access',
    'is_route_allowed',
    'Roles',
    'Session',
    'SessionUser',
    'get_permissions_for_role',
    'has_all_permissions',
    'has_any_permission',
    'has_permission',
    'require_permission',
    'require_tenant_member',
    'Loaders',
    'create_loaders',
    'AccessContext',
    'RequestContext',
    'build_request_context',
    'load_access_context',
    'build_auth_headers',
    'create_api_client',
]
