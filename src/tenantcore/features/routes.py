"""Route → feature gating table.

Tenant dashboard URLs look like
``/{locale}/{tenantSlug}/dashboard/(engines)/booking/staff``; platform pages
have no slug (``/{locale}/cms/pages``). :func:`normalize_route` drops the
locale and route groups, giving ``/{tenantSlug}/dashboard/booking/staff``.
:func:`find_route_gate` then matches tenant gates after the slug and platform
gates at the root, on segment boundaries, and picks the most specific one.

Routes without a gate are not protected by feature checks.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Literal

from .constants import Features

GateMode = Literal["all", "any"]
GateScope = Literal["tenant", "platform"]

SUPPORTED_LOCALES = frozenset({"en", "es", "de"})

_ROUTE_GROUP = re.compile(r"^\(.*\)$")
# "fr", "pt-br": stripped like a supported locale so gates still apply.
_LOCALE_SHAPED = re.compile(r"^[a-z]{2}(?:-[a-z]{2})?$")

# Segments before the gate prefix, per scope.
_SCOPE_OFFSETS: dict[str, int] = {"platform": 0, "tenant": 1}


@dataclass(frozen=True)
class RouteGate:
    """Feature requirement attached to a route prefix.

    Attributes:
        prefix: Normalized path prefix (``/dashboard/booking``).
        features: Feature ids the prefix requires.
        mode: ``"all"`` — every feature must be enabled;
              ``"any"`` — one enabled feature is enough.
        scope: ``"tenant"`` — prefix follows the tenant slug;
               ``"platform"`` — prefix starts the route.
    """

    prefix: str
    features: tuple[str, ...]
    mode: GateMode = "all"
    scope: GateScope = "tenant"

    @property
    def segments(self) -> tuple[str, ...]:
        return tuple(s for s in self.prefix.split("/") if s)

    @property
    def offset(self) -> int:
        return _SCOPE_OFFSETS[self.scope]


ROUTE_GATES: tuple[RouteGate, ...] = (
    # Tenant dashboard: engines
    RouteGate("/dashboard/cms", (Features.CMS_ENGINE,)),
    RouteGate("/dashboard/cms/forms", (Features.CMS_ENGINE, Features.FORMS_MODULE)),
    RouteGate("/dashboard/cms/blog", (Features.CMS_ENGINE, Features.BLOG_MODULE)),
    RouteGate("/dashboard/booking", (Features.BOOKING_ENGINE,)),
    RouteGate("/dashboard/bookings", (Features.BOOKING_ENGINE,)),
    RouteGate("/dashboard/ecommerce", (Features.ECOMMERCE_ENGINE,)),
    RouteGate("/dashboard/commerce", (Features.ECOMMERCE_ENGINE,)),
    RouteGate("/dashboard/legal", (Features.LEGAL_ENGINE,)),
    # Tenant dashboard: modules
    RouteGate("/dashboard/blog", (Features.BLOG_MODULE,)),
    RouteGate("/dashboard/forms", (Features.FORMS_MODULE,)),
    # Tenant dashboard: shared screens
    RouteGate("/dashboard/calendar", (Features.BOOKING_ENGINE, Features.LEGAL_ENGINE), mode="any"),
    # Tenant engine pages, /{tenantSlug}/(engines)/...
    RouteGate("/cms", (Features.CMS_ENGINE,)),
    RouteGate("/cms/forms", (Features.CMS_ENGINE, Features.FORMS_MODULE)),
    RouteGate("/booking", (Features.BOOKING_ENGINE,)),
    RouteGate("/commerce", (Features.ECOMMERCE_ENGINE,)),
    RouteGate("/legal", (Features.LEGAL_ENGINE,)),
    # Platform pages of the resolved tenant
    RouteGate("/cms", (Features.CMS_ENGINE,), scope="platform"),
    RouteGate("/cms/forms", (Features.CMS_ENGINE, Features.FORMS_MODULE), scope="platform"),
    RouteGate("/commerce", (Features.ECOMMERCE_ENGINE,), scope="platform"),
    RouteGate("/bookings", (Features.BOOKING_ENGINE,), scope="platform"),
    RouteGate("/dashboard/bookings", (Features.BOOKING_ENGINE,), scope="platform"),
)


def normalize_route(route: str) -> str:
    """Canonical form of a route for gate matching.

    Drops the query string and fragment, route groups such as ``(engines)``,
    empty segments and a leading locale, and lower-cases the result. Any
    locale-shaped first segment (``fr``, ``pt-br``) counts as a locale, so
    routes are expected to carry one.

    Example::

        normalize_route("/en/acme/dashboard/(engines)/Booking/?tab=1")
        # "/acme/dashboard/booking"
    """
    path = route.split("?", 1)[0].split("#", 1)[0]
    segments = [s.lower() for s in path.split("/") if s and not _ROUTE_GROUP.match(s)]
    if segments and (segments[0] in SUPPORTED_LOCALES or _LOCALE_SHAPED.match(segments[0])):
        segments = segments[1:]
    return "/" + "/".join(segments)


def _matches_at(segments: list[str], gate: tuple[str, ...], offset: int) -> bool:
    end = offset + len(gate)
    return end <= len(segments) and tuple(segments[offset:end]) == gate


def find_route_gate(
    route: str,
    gates: tuple[RouteGate, ...] = ROUTE_GATES,
    *,
    tenant_slug: str | None = None,
) -> RouteGate | None:
    """Return the most specific gate for ``route`` or None when ungated.

    Tenant gates match right after the tenant slug, platform gates at the
    start of the normalized route. A slug that happens to equal a tenant
    gate segment (``/en/legal/dashboard``) is therefore never read as that
    gate. Platform page names (``cms``, ``commerce``, ``bookings``) are
    ambiguous as slugs: pass ``tenant_slug`` when it is known, and a route
    starting with it is matched against tenant gates only.
    """
    segments = [s for s in normalize_route(route).split("/") if s]
    if tenant_slug and segments and segments[0] == tenant_slug.lower():
        gates = tuple(g for g in gates if g.scope == "tenant")
    best: RouteGate | None = None
    for gate in gates:
        gate_segments = gate.segments
        if not _matches_at(segments, gate_segments, gate.offset):
            continue
        if best is None or len(gate_segments) > len(best.segments):
            best = gate
    return best


__all__ = [
    "ROUTE_GATES",
    "SUPPORTED_LOCALES",
    "GateMode",
    "GateScope",
    "RouteGate",
    "find_route_gate",
    "normalize_route",
]
