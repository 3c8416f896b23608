"""Feature identifiers and categories.

Provides:
- ``Features`` — all tenant feature id constants.
- ``FeatureCategory`` — catalog grouping (Engine, Module, Integration).
"""

from __future__ import annotations

from enum import Enum


class FeatureCategory(str, Enum):
    """Catalog grouping for a feature."""

    ENGINE = "Engine"
    MODULE = "Module"
    INTEGRATION = "Integration"


class Features:
    """Canonical feature ids.

    Feature ids are opaque strings stored on the tenant record. Unknown ids
    are tolerated everywhere: they are simply never surfaced or priced.
    """

    # ── Engines ─────────────────────────────────────────
    CMS_ENGINE = "CMS_ENGINE"
    BOOKING_ENGINE = "BOOKING_ENGINE"
    ECOMMERCE_ENGINE = "ECOMMERCE_ENGINE"
    LEGAL_ENGINE = "LEGAL_ENGINE"

    # ── Modules ─────────────────────────────────────────
    BLOG_MODULE = "BLOG_MODULE"
    FORMS_MODULE = "FORMS_MODULE"


__all__ = [
    "FeatureCategory",
    "Features",
]
