"""Feature access evaluator.

Pure, synchronous checks over a tenant's enabled feature list. Used by
route guards, navigation builders and the billing preview.

Every function is total: unknown feature ids count as "not enabled" and
cost nothing, so a stale id on a tenant record never breaks a render.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Iterable

from .catalog import FEATURE_PRICES, REQUIRED_FEATURES, FeatureDefinition, get_feature_by_id
from .routes import ROUTE_GATES, RouteGate, find_route_gate

logger = logging.getLogger(__name__)

FeatureList = tuple[str, ...] | list[str]


@dataclass(frozen=True)
class FeatureCheck:
    """Outcome of :func:`check_feature_requirements`."""

    has_access: bool
    missing_features: tuple[str, ...] = ()


def has_feature_access(features: FeatureList, feature_id: str) -> bool:
    """Check if a tenant feature list contains ``feature_id``.

    Example::

        has_feature_access(["CMS_ENGINE"], "CMS_ENGINE")      # True
        has_feature_access(["CMS_ENGINE"], "BOOKING_ENGINE")  # False
    """
    return feature_id in features


def has_all_features(features: FeatureList, required: Iterable[str]) -> bool:
    """True if every required id is enabled. Nothing required → True."""
    enabled = set(features)
    return all(feature_id in enabled for feature_id in required)


def has_any_feature(features: FeatureList, required: Iterable[str]) -> bool:
    """True if at least one required id is enabled. Nothing required → False."""
    enabled = set(features)
    return any(feature_id in enabled for feature_id in required)


def get_missing_features(features: FeatureList, required: Iterable[str]) -> list[str]:
    """Required ids that are not enabled, in the order of ``required``."""
    enabled = set(features)
    return [feature_id for feature_id in required if feature_id not in enabled]


def get_available_features(features: FeatureList) -> list[FeatureDefinition]:
    """Catalog entries for the enabled ids.

    Ids without a catalog entry are dropped from the listing.
    """
    available: list[FeatureDefinition] = []
    for feature_id in dict.fromkeys(features):
        definition = get_feature_by_id(feature_id)
        if definition is None:
            logger.debug("Enabled feature %s has no catalog entry; not listed", feature_id)
            continue
        available.append(definition)
    return available


def is_gate_satisfied(features: FeatureList, gate: RouteGate) -> bool:
    if gate.mode == "any":
        return has_any_feature(features, gate.features)
    return has_all_features(features, gate.features)


def is_route_allowed(
    features: FeatureList,
    route: str,
    gates: tuple[RouteGate, ...] = ROUTE_GATES,
    *,
    tenant_slug: str | None = None,
) -> bool:
    """Check if the tenant may open ``route``.

    Routes without a gate are allowed; gated routes apply the gate's
    all-of / any-of rule. ``tenant_slug`` is passed to :func:`find_route_gate`.

    Example::

        is_route_allowed([], "/en/acme/dashboard/booking")  # False
        is_route_allowed([], "/en/acme/dashboard")          # True (ungated)
    """
    if not route:
        return True
    gate = find_route_gate(route, gates, tenant_slug=tenant_slug)
    if gate is None:
        return True
    allowed = is_gate_satisfied(features, gate)
    if not allowed:
        logger.debug("Route %s denied: gate %s requires %s (%s)", route, gate.prefix, gate.features, gate.mode)
    return allowed


def calculate_monthly_cost(features: FeatureList | None = None) -> int:
    """Sum of monthly prices for a feature list.

    ``None`` prices the default plan (:data:`REQUIRED_FEATURES`). Unknown
    ids and repeated ids add nothing.
    """
    selected = REQUIRED_FEATURES if features is None else features
    return sum(FEATURE_PRICES.get(feature_id, 0) for feature_id in dict.fromkeys(selected))


def check_feature_requirements(
    features: FeatureList,
    required: Iterable[str],
    *,
    active: bool = True,
) -> FeatureCheck:
    """Combined check used by API handlers that need several features.

    An inactive tenant is treated as missing every required feature.
    """
    required = list(required)
    if not active:
        return FeatureCheck(has_access=False, missing_features=tuple(required))
    missing = get_missing_features(features, required)
    return FeatureCheck(has_access=not missing, missing_features=tuple(missing))


__all__ = [
    "FeatureCheck",
    "calculate_monthly_cost",
    "check_feature_requirements",
    "get_available_features",
    "get_missing_features",
    "has_all_features",
    "has_any_feature",
    "has_feature_access",
    "is_gate_satisfied",
    "is_route_allowed",
]
