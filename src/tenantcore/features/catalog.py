"""Static feature catalog.

Provides:
- ``FeatureDefinition`` — immutable description of one tenant feature.
- ``FEATURE_CATALOG`` — every feature the platform sells, in display order.
- ``FEATURE_PRICES`` — feature id → monthly price.
- Lookup helpers and dependency-aware selection helpers used by the
  tenant administration screens.

The catalog is validated once at import time. A broken catalog is a
deployment error and raises :class:`~tenantcore.exceptions.CatalogError`
before any request is served.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from types import MappingProxyType
from typing import Iterable, Mapping, Sequence

from ..exceptions import CatalogError
from .constants import FeatureCategory, Features

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class FeatureDefinition:
    """One entry of the feature catalog.

    Attributes:
        id: Unique feature id (see :class:`Features`).
        label: Display name.
        description: Short marketing description.
        category: Engine, Module or Integration.
        dependencies: Feature ids that must be enabled alongside this one.
        price: Monthly price in whole currency units.
    """

    id: str
    label: str
    description: str | None = None
    category: FeatureCategory | None = None
    dependencies: tuple[str, ...] = ()
    price: int = 0


@dataclass(frozen=True)
class DependencyCheck:
    """Result of :func:`validate_dependencies`."""

    valid: bool
    missing: tuple[str, ...] = ()


@dataclass(frozen=True)
class RemovalResult:
    """Result of :func:`remove_feature_with_dependents`.

    ``blocked_by`` lists the labels of enabled features that still depend on
    the feature; when it is non-empty ``features`` is the unchanged input.
    """

    features: tuple[str, ...]
    blocked_by: tuple[str, ...] = ()

    @property
    def removed(self) -> bool:
        return not self.blocked_by


# ── Catalog ─────────────────────────────────────────────

FEATURE_CATALOG: tuple[FeatureDefinition, ...] = (
    FeatureDefinition(
        id=Features.CMS_ENGINE,
        label="CMS Engine",
        description="Core content management system",
        category=FeatureCategory.ENGINE,
        price=0,
    ),
    FeatureDefinition(
        id=Features.BOOKING_ENGINE,
        label="Booking Engine",
        description="Appointment and booking system",
        category=FeatureCategory.ENGINE,
        dependencies=(Features.CMS_ENGINE,),
        price=25,
    ),
    FeatureDefinition(
        id=Features.ECOMMERCE_ENGINE,
        label="E-commerce Engine",
        description="Online store and payments",
        category=FeatureCategory.ENGINE,
        dependencies=(Features.CMS_ENGINE,),
        price=35,
    ),
    FeatureDefinition(
        id=Features.LEGAL_ENGINE,
        label="Legal Engine",
        description="Company incorporation and legal services",
        category=FeatureCategory.ENGINE,
        dependencies=(Features.CMS_ENGINE,),
        price=30,
    ),
    FeatureDefinition(
        id=Features.BLOG_MODULE,
        label="Blog Module",
        description="Blog and article management",
        category=FeatureCategory.MODULE,
        dependencies=(Features.CMS_ENGINE,),
        price=10,
    ),
    FeatureDefinition(
        id=Features.FORMS_MODULE,
        label="Forms Module",
        description="Form builder and submissions",
        category=FeatureCategory.MODULE,
        dependencies=(Features.CMS_ENGINE,),
        price=15,
    ),
)

# Always enabled for every active tenant.
REQUIRED_FEATURES: tuple[str, ...] = (Features.CMS_ENGINE,)


def validate_catalog(definitions: Sequence[FeatureDefinition]) -> None:
    """Check catalog invariants.

    Raises:
        CatalogError: on a duplicate id, a dependency on an unknown id, or a
            dependency cycle (including a feature depending on itself).
    """
    by_id: dict[str, FeatureDefinition] = {}
    for definition in definitions:
        if definition.id in by_id:
            raise CatalogError(f"Duplicate feature id: {definition.id}", feature_id=definition.id)
        by_id[definition.id] = definition

    for definition in definitions:
        for dep in definition.dependencies:
            if dep not in by_id:
                raise CatalogError(
                    f"Feature {definition.id} depends on unknown feature {dep}",
                    feature_id=definition.id,
                    dependency=dep,
                )

    # Iterative DFS with three colours; grey on the stack means a back edge.
    white, grey, black = 0, 1, 2
    colour = dict.fromkeys(by_id, white)
    for root in by_id:
        if colour[root] != white:
            continue
        stack: list[tuple[str, int]] = [(root, 0)]
        colour[root] = grey
        while stack:
            node, idx = stack[-1]
            deps = by_id[node].dependencies
            if idx < len(deps):
                stack[-1] = (node, idx + 1)
                child = deps[idx]
                if colour[child] == grey:
                    cycle = [n for n, _ in stack] + [child]
                    raise CatalogError(
                        f"Feature dependency cycle: {' -> '.join(cycle)}",
                        cycle=cycle,
                    )
                if colour[child] == white:
                    colour[child] = grey
                    stack.append((child, 0))
            else:
                colour[node] = black
                stack.pop()


validate_catalog(FEATURE_CATALOG)

_BY_ID: Mapping[str, FeatureDefinition] = MappingProxyType({f.id: f for f in FEATURE_CATALOG})

FEATURE_PRICES: Mapping[str, int] = MappingProxyType({f.id: f.price for f in FEATURE_CATALOG})


# ── Lookups ─────────────────────────────────────────────


def get_feature_by_id(feature_id: str) -> FeatureDefinition | None:
    """Return the catalog entry for ``feature_id`` or None."""
    return _BY_ID.get(feature_id)


def get_features_by_category(category: FeatureCategory | str) -> list[FeatureDefinition]:
    """Return catalog entries of a category in catalog order.

    Accepts the enum or its string value; anything else yields ``[]``.
    """
    try:
        wanted = FeatureCategory(category)
    except ValueError:
        return []
    return [f for f in FEATURE_CATALOG if f.category == wanted]


def get_required_features() -> list[str]:
    return list(REQUIRED_FEATURES)


# ── Dependency-aware selection ──────────────────────────


def validate_dependencies(features: Iterable[str]) -> DependencyCheck:
    """Report direct dependencies of enabled features that are not enabled.

    Unknown feature ids have no dependencies. ``missing`` is de-duplicated
    and keeps first-seen order.
    """
    enabled = list(features)
    enabled_set = set(enabled)
    missing: dict[str, None] = {}
    for feature_id in enabled:
        definition = _BY_ID.get(feature_id)
        if definition is None:
            continue
        for dep in definition.dependencies:
            if dep not in enabled_set:
                missing[dep] = None
    return DependencyCheck(valid=not missing, missing=tuple(missing))


def add_feature_with_dependencies(current: Iterable[str], feature_id: str) -> tuple[str, ...]:
    """Enable ``feature_id`` together with its transitive dependencies.

    Dependencies are appended before the feature itself; ids already present
    keep their position.
    """
    result = list(dict.fromkeys(current))
    present = set(result)

    def _visit(fid: str) -> None:
        definition = _BY_ID.get(fid)
        if definition is not None:
            for dep in definition.dependencies:
                _visit(dep)
        if fid not in present:
            present.add(fid)
            result.append(fid)

    _visit(feature_id)
    return tuple(result)


def remove_feature_with_dependents(current: Iterable[str], feature_id: str) -> RemovalResult:
    """Disable ``feature_id`` unless an enabled feature depends on it."""
    enabled = tuple(current)
    dependents = [
        f for f in FEATURE_CATALOG if feature_id in f.dependencies and f.id in enabled
    ]
    if dependents:
        logger.debug(
            "Refusing to remove %s: required by %s", feature_id, [f.id for f in dependents]
        )
        return RemovalResult(features=enabled, blocked_by=tuple(f.label for f in dependents))
    return RemovalResult(features=tuple(fid for fid in enabled if fid != feature_id))


def get_available_upgrades(features: Iterable[str]) -> list[FeatureDefinition]:
    """Catalog entries a tenant could still buy (required features excluded)."""
    enabled = set(features)
    return [
        f for f in FEATURE_CATALOG if f.id not in enabled and f.id not in REQUIRED_FEATURES
    ]


__all__ = [
    "FEATURE_CATALOG",
    "FEATURE_PRICES",
    "REQUIRED_FEATURES",
    "DependencyCheck",
    "FeatureDefinition",
    "RemovalResult",
    "add_feature_with_dependencies",
    "get_available_upgrades",
    "get_feature_by_id",
    "get_features_by_category",
    "get_required_features",
    "remove_feature_with_dependents",
    "validate_catalog",
    "validate_dependencies",
]
