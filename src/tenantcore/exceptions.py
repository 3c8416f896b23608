"""Unified exception hierarchy for tenantcore.

All errors raised by tenantcore inherit from TenantCoreError. This module provides:
- Base exception hierarchy with stable error codes
- ErrorRegistry for protocol mapping
- GraphQL error formatting helper

The feature evaluator and the permission predicates never raise. Errors come
from catalog validation at import time, configuration loading, storage calls
made by batch loaders and the tenant feature service, and the ``require_*``
guards (AuthorizationError).

Usage:
    from tenantcore.exceptions import (
        TenantCoreError,
        CatalogError,
        StorageError,
        to_graphql_error,
    )
"""

from __future__ import annotations

import logging
from typing import Any, Callable, TypeVar, cast

__all__ = [
    # Base hierarchy
    "TenantCoreError",
    "ConfigurationError",
    "CatalogError",
    "AuthorizationError",
    "TenantNotFoundError",
    "ProviderError",
    "StorageError",
    "DatabaseConnectionError",
    # Registry
    "ErrorRegistry",
    "error_registry",
    "register_error",
    # GraphQL helpers
    "get_graphql_code",
    "to_graphql_error",
]

logger = logging.getLogger(__name__)


# ---- Exception Hierarchy ----------------------------------------------------


class TenantCoreError(Exception):
    """Base exception for tenantcore.

    Attributes:
        code: Stable error code string for protocol mapping (e.g. "CATALOG_ERROR").
        graphql_code: GraphQL ``extensions.code`` of errors registered under ``code``.
        message: Human-readable error description.
        details: Additional context as keyword arguments.
    """

    code: str = "INTERNAL_ERROR"
    graphql_code: str = "INTERNAL_SERVER_ERROR"
    message: str = "An internal error occurred"

    def __init__(self, message: str | None = None, code: str | None = None, **kwargs: Any) -> None:
        self.message = message or self.message
        self.code = code or self.code
        self.details = kwargs
        super().__init__(self.message)


class ConfigurationError(TenantCoreError):
    """Invalid or missing configuration."""

    code: str = "CONFIGURATION_ERROR"


class CatalogError(ConfigurationError):
    """Feature catalog is inconsistent (duplicate id, dangling or cyclic dependency)."""

    code: str = "CATALOG_ERROR"


class AuthorizationError(TenantCoreError):
    """Caller lacks a permission or feature required by the operation."""

    code: str = "FORBIDDEN"
    graphql_code: str = "FORBIDDEN"


class TenantNotFoundError(TenantCoreError):
    """Tenant id does not resolve to a tenant record."""

    code: str = "TENANT_NOT_FOUND"
    graphql_code: str = "NOT_FOUND"


class ProviderError(TenantCoreError):
    """Storage/Provider layer failure."""

    code: str = "PROVIDER_ERROR"
    graphql_code: str = "SERVICE_UNAVAILABLE"


class StorageError(ProviderError):
    """Specific error for database or storage operations."""

    code: str = "STORAGE_ERROR"


class DatabaseConnectionError(StorageError):
    """Failed to connect to the database."""

    code: str = "DB_CONNECTION_ERROR"


# ---- Error Registry for Protocol Mapping ------------------------------------

_E = TypeVar("_E", bound=type[TenantCoreError])


class ErrorRegistry:
    """Registry for mapping internal errors to external protocol codes."""

    def __init__(self) -> None:
        self._errors: dict[str, type[TenantCoreError]] = {}

    def register(self, code: str, error_cls: type[TenantCoreError]) -> None:
        self._errors[code] = error_cls

    def get(self, code: str) -> type[TenantCoreError] | None:
        return self._errors.get(code)

    def all(self) -> dict[str, type[TenantCoreError]]:
        return dict(self._errors)


error_registry = ErrorRegistry()


def register_error(code: str) -> Callable[[_E], _E]:
    """Decorator to register a custom error type.

    Usage:
        @register_error("PLAN_LIMIT_REACHED")
        class PlanLimitError(TenantCoreError):
            code = "PLAN_LIMIT_REACHED"
    """

    def decorator(cls: _E) -> _E:
        error_registry.register(code, cls)
        return cls

    return cast(Callable[[_E], _E], decorator)


# Register base errors
error_registry.register("INTERNAL_ERROR", TenantCoreError)
error_registry.register("CONFIGURATION_ERROR", ConfigurationError)
error_registry.register("CATALOG_ERROR", CatalogError)
error_registry.register("FORBIDDEN", AuthorizationError)
error_registry.register("TENANT_NOT_FOUND", TenantNotFoundError)
error_registry.register("PROVIDER_ERROR", ProviderError)
error_registry.register("STORAGE_ERROR", StorageError)
error_registry.register("DB_CONNECTION_ERROR", DatabaseConnectionError)


# ---- GraphQL Error Formatting -----------------------------------------------

def get_graphql_code(error: TenantCoreError) -> str:
    """GraphQL extension code for ``error``.

    The class registered under ``error.code`` decides, so an error raised
    with an overridden code maps like the registered error. Unregistered
    codes fall back to the error's own class.
    """
    error_cls = error_registry.get(error.code) or type(error)
    return error_cls.graphql_code


def to_graphql_error(error: BaseException, *, path: list[str | int] | None = None) -> dict[str, Any]:
    """Format an exception as a GraphQL error entry.

    TenantCoreError subclasses keep their message and map their code onto a
    GraphQL extension code via :func:`get_graphql_code`. Anything else is
    reported as an internal error without leaking the original message.

    Returns:
        Dict with ``message``, ``extensions`` and, if given, ``path``.
    """
    if isinstance(error, TenantCoreError):
        payload: dict[str, Any] = {
            "message": error.message,
            "extensions": {
                "code": get_graphql_code(error),
                "errorCode": error.code,
            },
        }
    else:
        logger.error("Unexpected %s surfaced to GraphQL: %s", type(error).__name__, error)
        payload = {
            "message": "Internal server error",
            "extensions": {"code": "INTERNAL_SERVER_ERROR", "errorCode": "INTERNAL_ERROR"},
        }
    if path is not None:
        payload["path"] = list(path)
    return payload
