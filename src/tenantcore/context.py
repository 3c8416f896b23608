"""Request-scoped access state.

Provides:
- ``AccessContext`` — a tenant's resolved feature list bound to the
  feature evaluator, with an explicit loading state.
- ``load_access_context()`` — resolve it with one storage call.
- ``RequestContext`` — everything a resolver needs for one request
  (session, access, loaders), passed explicitly as a parameter.
- ``build_request_context()`` — construct it once per request.

Contexts are immutable. A new feature list means a new context.
"""

from __future__ import annotations

import logging
import uuid
from dataclasses import dataclass, field, replace
from typing import TYPE_CHECKING, Iterable, Optional

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from .exceptions import AuthorizationError
from .features.access import (
    calculate_monthly_cost,
    get_available_features,
    get_missing_features,
    has_all_features,
    has_any_feature,
    has_feature_access,
    is_route_allowed,
)
from .features.catalog import REQUIRED_FEATURES, FeatureDefinition
from .features.tenant import get_tenant_features
from .loaders import Loaders, create_loaders
from .logging import TenantLoggerAdapter, get_tenant_logger
from .permissions import Session, has_permission, require_permission

if TYPE_CHECKING:
    from .config import TenantCoreConfig

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AccessContext:
    """Feature evaluator bound to one tenant's feature list.

    While ``loading`` is True the access state is unknown: every predicate
    answers False and consumers must not redirect or hide anything yet.

    Attributes:
        tenant_id: Tenant the features belong to (None for platform pages).
        features: Enabled feature ids, de-duplicated, in stored order.
        loading: Feature list not resolved yet.
        active: Tenant is active; inactive tenants carry no features.
    """

    tenant_id: Optional[str] = None
    features: tuple[str, ...] = ()
    loading: bool = False
    active: bool = True

    def __post_init__(self) -> None:
        object.__setattr__(self, "features", tuple(dict.fromkeys(self.features)))

    # ── Constructors ────────────────────────────────────

    @classmethod
    def pending(cls, tenant_id: Optional[str] = None) -> "AccessContext":
        return cls(tenant_id=tenant_id, loading=True)

    @classmethod
    def for_features(
        cls,
        features: Iterable[str],
        tenant_id: Optional[str] = None,
        *,
        active: bool = True,
    ) -> "AccessContext":
        return cls(tenant_id=tenant_id, features=tuple(features), active=active)

    def with_features(self, features: Iterable[str]) -> "AccessContext":
        """New resolved context for the same tenant."""
        return replace(self, features=tuple(features), loading=False)

    # ── Evaluator ───────────────────────────────────────

    def has_feature(self, feature_id: str) -> bool:
        return not self.loading and has_feature_access(self.features, feature_id)

    def has_all_features(self, required: Iterable[str]) -> bool:
        return not self.loading and has_all_features(self.features, required)

    def has_any_feature(self, required: Iterable[str]) -> bool:
        return not self.loading and has_any_feature(self.features, required)

    def is_route_allowed(self, route: str, *, tenant_slug: Optional[str] = None) -> bool:
        return not self.loading and is_route_allowed(self.features, route, tenant_slug=tenant_slug)

    def get_missing_features(self, required: Iterable[str]) -> list[str]:
        """Missing ids in the order of ``required``; everything while loading."""
        if self.loading:
            return list(required)
        return get_missing_features(self.features, required)

    def get_available_features(self) -> list[FeatureDefinition]:
        if self.loading:
            return []
        return get_available_features(self.features)

    def calculate_cost(self) -> int:
        if self.loading:
            return 0
        return calculate_monthly_cost(self.features)


async def load_access_context(
    db: AsyncSession,
    tenant_id: Optional[str],
    *,
    config: Optional[TenantCoreConfig] = None,
) -> AccessContext:
    """Resolve the access context of ``tenant_id`` (one storage call).

    - No tenant id or unknown tenant → the configured default features.
    - Inactive tenant → no features, ``active=False``.
    - Active tenant → its stored features, required features included.

    Raises:
        StorageError: the tenant query failed.
    """
    default_features = tuple(config.default_features) if config is not None else REQUIRED_FEATURES

    if not tenant_id:
        return AccessContext.for_features(default_features)

    data = await get_tenant_features(db, tenant_id)
    if data is None:
        logger.warning("Tenant %s not found; using default features", tenant_id)
        return AccessContext.for_features(default_features, tenant_id)
    if not data.is_active:
        logger.debug("Tenant %s is not active; no features granted", tenant_id)
        return AccessContext.for_features((), tenant_id, active=False)
    return AccessContext.for_features(data.features, tenant_id)


@dataclass(frozen=True)
class RequestContext:
    """Per-request container handed to every resolver.

    Attributes:
        db: Request session (owned by the caller's ``session_scope``).
        tenant_id: Resolved tenant, if any.
        session: Authenticated session (anonymous when ``session.user`` is None).
        access: Tenant feature access.
        loaders: Request-scoped batch loaders.
        request_id: Correlation id for logs.
    """

    db: AsyncSession
    tenant_id: Optional[str]
    session: Session
    access: AccessContext
    loaders: Loaders
    request_id: str = field(default_factory=lambda: uuid.uuid4().hex)

    @property
    def logger(self) -> TenantLoggerAdapter:
        user_id = self.session.user.id if self.session.user is not None else None
        return get_tenant_logger(
            "tenantcore.request",
            tenant_id=self.tenant_id,
            request_id=self.request_id,
            user_id=user_id,
        )

    def has_permission(self, permission: str) -> bool:
        return has_permission(self.session, permission)

    def has_feature(self, feature_id: str) -> bool:
        return self.access.has_feature(feature_id)

    def require_permission(self, permission: str) -> None:
        """Raise AuthorizationError unless the session user holds ``permission``."""
        require_permission(self.session, permission)

    def require_feature(self, feature_id: str) -> None:
        """Raise AuthorizationError unless the tenant has ``feature_id`` enabled.

        A context still loading its features is denied.
        """
        if self.access.has_feature(feature_id):
            return
        raise AuthorizationError(
            f"Feature not enabled: {feature_id}",
            feature_id=feature_id,
            tenant_id=self.tenant_id,
        )


async def build_request_context(
    db: AsyncSession,
    sessionmaker: async_sessionmaker[AsyncSession],
    *,
    tenant_id: Optional[str] = None,
    session: Optional[Session] = None,
    config: Optional[TenantCoreConfig] = None,
    request_id: Optional[str] = None,
) -> RequestContext:
    """Resolve access and build fresh loaders for one request."""
    access = await load_access_context(db, tenant_id, config=config)
    loaders = create_loaders(
        sessionmaker,
        max_batch_size=config.loader_max_batch_size if config is not None else None,
    )
    ctx = RequestContext(
        db=db,
        tenant_id=tenant_id,
        session=session or Session(),
        access=access,
        loaders=loaders,
        **({"request_id": request_id} if request_id else {}),
    )
    ctx.logger.debug("Request context ready", extra={"features": access.features})
    return ctx


__all__ = [
    "AccessContext",
    "RequestContext",
    "build_request_context",
    "load_access_context",
]
