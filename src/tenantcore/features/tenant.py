"""Tenant feature service.

Reads and writes the enabled-feature list stored on a tenant record.
Writes are flushed, not committed: the caller owns the transaction
(see :func:`tenantcore.db.session_scope`).
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Iterable, Optional

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from ..db.models import Tenant
from ..exceptions import StorageError, TenantNotFoundError
from .access import calculate_monthly_cost
from .catalog import REQUIRED_FEATURES, FeatureDefinition, get_available_upgrades, get_feature_by_id

logger = logging.getLogger(__name__)

TENANT_STATUS_ACTIVE = "ACTIVE"


@dataclass(frozen=True)
class TenantFeatureData:
    """Feature state of one tenant as stored."""

    tenant_id: str
    features: tuple[str, ...]
    plan: Optional[str] = None
    is_active: bool = False


@dataclass(frozen=True)
class TenantFeatureSummary:
    """Billing/upgrade view of a tenant, for settings pages."""

    features: tuple[str, ...]
    is_active: bool
    monthly_cost: int
    available_upgrades: tuple[FeatureDefinition, ...] = field(default_factory=tuple)


def normalize_tenant_features(features: Iterable[str] | None) -> tuple[str, ...]:
    """Clean a feature list before it is stored or served.

    Drops ids without a catalog entry, removes duplicates (first wins) and
    puts the required features in front when they are missing.

    Example::

        >>> normalize_tenant_features(["BLOG_MODULE", "NOPE", "BLOG_MODULE"])
        ('CMS_ENGINE', 'BLOG_MODULE')
    """
    cleaned: dict[str, None] = {}
    for feature_id in features or ():
        if not isinstance(feature_id, str) or get_feature_by_id(feature_id) is None:
            logger.warning("Dropping unknown feature id %r", feature_id)
            continue
        cleaned.setdefault(feature_id, None)
    missing_required = [fid for fid in REQUIRED_FEATURES if fid not in cleaned]
    return tuple(missing_required) + tuple(cleaned)


def _stored_features(tenant: Tenant) -> tuple[str, ...]:
    raw = tenant.features if isinstance(tenant.features, list) else []
    features = tuple(dict.fromkeys(fid for fid in raw if isinstance(fid, str)))
    missing_required = tuple(fid for fid in REQUIRED_FEATURES if fid not in features)
    return missing_required + features


async def _get_tenant(db: AsyncSession, tenant_id: str) -> Optional[Tenant]:
    try:
        result = await db.execute(select(Tenant).where(Tenant.id == tenant_id))
    except SQLAlchemyError as exc:
        raise StorageError(f"Failed to load tenant {tenant_id}: {exc}", tenant_id=tenant_id) from exc
    return result.scalar_one_or_none()


async def get_tenant_features(db: AsyncSession, tenant_id: str) -> Optional[TenantFeatureData]:
    """Feature state of ``tenant_id``, or None if the tenant does not exist.

    Stored ids are returned as-is (stale ids included) with the required
    features prepended when absent.

    Raises:
        StorageError: the query failed.
    """
    tenant = await _get_tenant(db, tenant_id)
    if tenant is None:
        return None
    return TenantFeatureData(
        tenant_id=tenant.id,
        features=_stored_features(tenant),
        plan=tenant.plan_id or None,
        is_active=tenant.status == TENANT_STATUS_ACTIVE,
    )


async def _write_features(
    db: AsyncSession,
    tenant_id: str,
    features: Iterable[str],
    *,
    activate: bool,
) -> tuple[str, ...]:
    tenant = await _get_tenant(db, tenant_id)
    if tenant is None:
        raise TenantNotFoundError(f"Tenant {tenant_id} not found", tenant_id=tenant_id)

    normalized = normalize_tenant_features(features)
    tenant.features = list(normalized)
    if activate:
        tenant.status = TENANT_STATUS_ACTIVE
    try:
        await db.flush()
    except SQLAlchemyError as exc:
        raise StorageError(f"Failed to update features of tenant {tenant_id}: {exc}", tenant_id=tenant_id) from exc
    return normalized


async def update_tenant_features(
    db: AsyncSession,
    tenant_id: str,
    features: Iterable[str],
) -> tuple[str, ...]:
    """Replace the tenant's feature list with its normalized form.

    Returns:
        The feature ids actually stored.

    Raises:
        TenantNotFoundError: no tenant with that id.
        StorageError: the query or flush failed.
    """
    stored = await _write_features(db, tenant_id, features, activate=False)
    logger.info("Tenant %s features updated: %s", tenant_id, ", ".join(stored))
    return stored


async def sync_tenant_features_after_registration(
    db: AsyncSession,
    tenant_id: str,
    selected_features: Iterable[str],
) -> tuple[str, ...]:
    """Store the features picked at sign-up and activate the tenant."""
    stored = await _write_features(db, tenant_id, selected_features, activate=True)
    logger.info("Tenant %s activated with features: %s", tenant_id, ", ".join(stored))
    return stored


async def get_tenant_feature_summary(db: AsyncSession, tenant_id: str) -> TenantFeatureSummary:
    """Features, activity, monthly cost and upgrades of a tenant.

    A missing tenant is summarized as an inactive tenant on the default plan.
    """
    data = await get_tenant_features(db, tenant_id)
    if data is None:
        features: tuple[str, ...] = REQUIRED_FEATURES
        return TenantFeatureSummary(
            features=features,
            is_active=False,
            monthly_cost=0,
            available_upgrades=(),
        )
    return TenantFeatureSummary(
        features=data.features,
        is_active=data.is_active,
        monthly_cost=calculate_monthly_cost(data.features),
        available_upgrades=tuple(get_available_upgrades(data.features)),
    )


__all__ = [
    "TENANT_STATUS_ACTIVE",
    "TenantFeatureData",
    "TenantFeatureSummary",
    "get_tenant_feature_summary",
    "get_tenant_features",
    "normalize_tenant_features",
    "sync_tenant_features_after_registration",
    "update_tenant_features",
]
