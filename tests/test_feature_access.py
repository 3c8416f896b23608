"""Tests for the feature access evaluator and the route gate table."""

from __future__ import annotations

import pytest

from tenantcore.features import (
    FEATURE_CATALOG,
    ROUTE_GATES,
    RouteGate,
    calculate_monthly_cost,
    check_feature_requirements,
    find_route_gate,
    get_available_features,
    get_missing_features,
    has_all_features,
    has_any_feature,
    has_feature_access,
    is_route_allowed,
    normalize_route,
)


class TestFeaturePredicates:
    """Tests for has_feature_access / has_all_features / has_any_feature."""

    def test_has_feature_access(self) -> None:
        features = ["CMS_ENGINE", "BLOG_MODULE"]
        assert has_feature_access(features, "BLOG_MODULE") is True
        assert has_feature_access(features, "BOOKING_ENGINE") is False

    def test_unknown_id_is_just_absent(self) -> None:
        """Stale ids on a tenant record behave like any other string."""
        assert has_feature_access(["OLD_FEATURE"], "OLD_FEATURE") is True
        assert has_feature_access(["CMS_ENGINE"], "OLD_FEATURE") is False

    def test_has_all_features(self) -> None:
        features = ("CMS_ENGINE", "BLOG_MODULE")
        assert has_all_features(features, ["CMS_ENGINE", "BLOG_MODULE"]) is True
        assert has_all_features(features, ["CMS_ENGINE", "FORMS_MODULE"]) is False

    def test_has_all_features_empty_is_true(self) -> None:
        assert has_all_features([], []) is True
        assert has_all_features(["CMS_ENGINE"], []) is True

    def test_has_any_feature(self) -> None:
        features = ["CMS_ENGINE"]
        assert has_any_feature(features, ["BOOKING_ENGINE", "CMS_ENGINE"]) is True
        assert has_any_feature(features, ["BOOKING_ENGINE", "LEGAL_ENGINE"]) is False

    def test_has_any_feature_empty_is_false(self) -> None:
        assert has_any_feature(["CMS_ENGINE"], []) is False

    def test_all_and_any_agree_on_singletons(self) -> None:
        for features in ([], ["CMS_ENGINE"], ["BLOG_MODULE", "CMS_ENGINE"]):
            for feature in ("CMS_ENGINE", "BLOG_MODULE", "NOPE"):
                expected = has_feature_access(features, feature)
                assert has_all_features(features, [feature]) is expected
                assert has_any_feature(features, [feature]) is expected


class TestMissingAndAvailable:
    """Tests for get_missing_features and get_available_features."""

    def test_missing_keeps_required_order(self) -> None:
        missing = get_missing_features(["CMS_ENGINE"], ["FORMS_MODULE", "CMS_ENGINE", "BLOG_MODULE"])
        assert missing == ["FORMS_MODULE", "BLOG_MODULE"]

    def test_nothing_missing(self) -> None:
        assert get_missing_features(["CMS_ENGINE", "BLOG_MODULE"], ["BLOG_MODULE"]) == []

    def test_missing_matches_has_all(self) -> None:
        features = ["CMS_ENGINE", "BOOKING_ENGINE"]
        for required in (["CMS_ENGINE"], ["CMS_ENGINE", "LEGAL_ENGINE"], []):
            assert (get_missing_features(features, required) == []) is has_all_features(features, required)

    def test_available_drops_unknown_ids(self) -> None:
        available = get_available_features(["CMS_ENGINE", "GHOST", "BLOG_MODULE"])
        assert [f.id for f in available] == ["CMS_ENGINE", "BLOG_MODULE"]

    def test_available_collapses_duplicates(self) -> None:
        available = get_available_features(["CMS_ENGINE", "CMS_ENGINE"])
        assert [f.id for f in available] == ["CMS_ENGINE"]


class TestMonthlyCost:
    """Tests for calculate_monthly_cost."""

    def test_default_plan_costs_nothing(self) -> None:
        assert calculate_monthly_cost() == 0
        assert calculate_monthly_cost(None) == 0

    def test_sum_of_prices(self) -> None:
        assert calculate_monthly_cost(["CMS_ENGINE", "BOOKING_ENGINE", "BLOG_MODULE"]) == 35

    def test_full_catalog(self) -> None:
        assert calculate_monthly_cost([f.id for f in FEATURE_CATALOG]) == 115

    def test_unknown_ids_cost_nothing(self) -> None:
        assert calculate_monthly_cost(["CMS_ENGINE", "GHOST"]) == 0

    def test_duplicates_counted_once(self) -> None:
        assert calculate_monthly_cost(["BLOG_MODULE", "BLOG_MODULE"]) == 10

    def test_empty_list(self) -> None:
        assert calculate_monthly_cost([]) == 0


class TestRouteNormalization:
    """Tests for normalize_route."""

    def test_strips_locale_group_query_and_case(self) -> None:
        assert normalize_route("/en/acme/dashboard/(engines)/Booking/?tab=1") == "/acme/dashboard/booking"

    def test_fragment_and_trailing_slash(self) -> None:
        assert normalize_route("/dashboard/cms/#top") == "/dashboard/cms"

    def test_root(self) -> None:
        assert normalize_route("/") == "/"
        assert normalize_route("/es") == "/"

    def test_unlisted_locale_stripped(self) -> None:
        assert normalize_route("/fr/acme/dashboard/booking") == "/acme/dashboard/booking"
        assert normalize_route("/pt-BR/acme/dashboard") == "/acme/dashboard"

    def test_only_first_segment_is_a_locale(self) -> None:
        assert normalize_route("/en/ab/dashboard") == "/ab/dashboard"


class TestRouteGates:
    """Tests for find_route_gate."""

    def test_gate_prefixes_are_normalized(self) -> None:
        for gate in ROUTE_GATES:
            assert normalize_route(gate.prefix) == gate.prefix

    def test_most_specific_gate_wins(self) -> None:
        gate = find_route_gate("/en/acme/dashboard/cms/blog/new")
        assert gate is not None
        assert gate.prefix == "/dashboard/cms/blog"

    def test_tenant_slug_is_skipped(self) -> None:
        gate = find_route_gate("/de/acme/dashboard/booking/staff")
        assert gate is not None
        assert gate.prefix == "/dashboard/booking"

    def test_segment_boundaries(self) -> None:
        """'/dashboard/bookingsettings' does not match '/dashboard/booking'."""
        assert find_route_gate("/dashboard/bookingsettings") is None

    def test_ungated(self) -> None:
        assert find_route_gate("/en/acme/dashboard") is None
        assert find_route_gate("/en/acme/profile") is None

    def test_custom_gates(self) -> None:
        gates = (RouteGate("/reports", ("LEGAL_ENGINE",)),)
        assert find_route_gate("/en/acme/reports/2024", gates) == gates[0]

    @pytest.mark.parametrize("slug", ["legal", "booking"])
    def test_slug_named_like_a_gate_is_not_a_gate(self, slug: str) -> None:
        assert find_route_gate(f"/en/{slug}/dashboard") is None
        assert find_route_gate(f"/en/{slug}/dashboard/users") is None

    @pytest.mark.parametrize("slug", ["cms", "commerce", "bookings"])
    def test_slug_named_like_a_platform_page(self, slug: str) -> None:
        """Without the slug the route reads as the platform page."""
        assert find_route_gate(f"/en/{slug}/dashboard/users") is not None
        assert find_route_gate(f"/en/{slug}/dashboard/users", tenant_slug=slug) is None

    def test_tenant_slug_keeps_tenant_gates(self) -> None:
        gate = find_route_gate("/en/cms/dashboard/legal", tenant_slug="CMS")
        assert gate is not None
        assert gate.prefix == "/dashboard/legal"

    def test_slug_named_like_a_gate_still_gated_below(self) -> None:
        gate = find_route_gate("/en/legal/dashboard/booking/staff")
        assert gate is not None
        assert gate.prefix == "/dashboard/booking"

    def test_tenant_engine_page(self) -> None:
        gate = find_route_gate("/en/acme/(engines)/legal/cases")
        assert gate is not None
        assert gate.prefix == "/legal"
        assert gate.scope == "tenant"

    def test_platform_gate_at_root(self) -> None:
        gate = find_route_gate("/en/cms/pages")
        assert gate is not None
        assert gate.scope == "platform"
        bookings = find_route_gate("/en/dashboard/bookings/calendar")
        assert bookings is not None
        assert bookings.scope == "platform"

    def test_tenant_gate_not_matched_at_root(self) -> None:
        """A lone first segment is the slug, not the tenant engine page."""
        assert find_route_gate("/en/booking") is None
        assert find_route_gate("/en/legal") is None

    def test_platform_custom_gate(self) -> None:
        gates = (RouteGate("/reports", ("LEGAL_ENGINE",), scope="platform"),)
        assert find_route_gate("/en/reports/2024", gates) == gates[0]
        assert find_route_gate("/en/acme/reports/2024", gates) is None

    def test_unlisted_locale_still_gated(self) -> None:
        gate = find_route_gate("/fr/acme/dashboard/booking")
        assert gate is not None
        assert gate.prefix == "/dashboard/booking"


class TestIsRouteAllowed:
    """Tests for is_route_allowed."""

    def test_gated_route_requires_feature(self) -> None:
        route = "/en/acme/dashboard/booking"
        assert is_route_allowed(["CMS_ENGINE"], route) is False
        assert is_route_allowed(["CMS_ENGINE", "BOOKING_ENGINE"], route) is True

    def test_ungated_routes_are_allowed(self) -> None:
        """Ungated routes stay open even with no features at all."""
        assert is_route_allowed([], "/en/acme/dashboard") is True
        assert is_route_allowed([], "/en/acme/settings/profile") is True

    def test_empty_route_is_allowed(self) -> None:
        assert is_route_allowed([], "") is True

    def test_tenant_slug_equal_to_gate_segment(self) -> None:
        """A tenant called "booking" or "legal" still reaches its ungated pages."""
        assert is_route_allowed(["CMS_ENGINE"], "/en/booking/dashboard/users") is True
        assert is_route_allowed(["CMS_ENGINE"], "/en/legal/dashboard") is True
        assert is_route_allowed(["CMS_ENGINE"], "/en/legal/dashboard/legal") is False
        assert is_route_allowed([], "/en/commerce/dashboard", tenant_slug="commerce") is True

    def test_unlisted_locale_does_not_bypass_gate(self) -> None:
        assert is_route_allowed(["CMS_ENGINE"], "/fr/acme/dashboard/booking") is False

    def test_all_mode(self) -> None:
        route = "/en/acme/dashboard/cms/forms"
        assert is_route_allowed(["CMS_ENGINE"], route) is False
        assert is_route_allowed(["FORMS_MODULE"], route) is False
        assert is_route_allowed(["CMS_ENGINE", "FORMS_MODULE"], route) is True

    def test_any_mode(self) -> None:
        route = "/en/acme/dashboard/calendar"
        assert is_route_allowed(["LEGAL_ENGINE"], route) is True
        assert is_route_allowed(["BOOKING_ENGINE"], route) is True
        assert is_route_allowed(["CMS_ENGINE"], route) is False

    def test_route_groups_do_not_hide_gates(self) -> None:
        assert is_route_allowed(["CMS_ENGINE"], "/es/acme/dashboard/(engines)/commerce/orders") is False


class TestCheckFeatureRequirements:
    """Tests for check_feature_requirements."""

    def test_all_present(self) -> None:
        result = check_feature_requirements(["CMS_ENGINE", "BLOG_MODULE"], ["BLOG_MODULE"])
        assert result.has_access is True
        assert result.missing_features == ()

    def test_missing(self) -> None:
        result = check_feature_requirements(["CMS_ENGINE"], ["BLOG_MODULE", "FORMS_MODULE"])
        assert result.has_access is False
        assert result.missing_features == ("BLOG_MODULE", "FORMS_MODULE")

    def test_inactive_tenant_misses_everything(self) -> None:
        result = check_feature_requirements(["CMS_ENGINE", "BLOG_MODULE"], ["BLOG_MODULE"], active=False)
        assert result.has_access is False
        assert result.missing_features == ("BLOG_MODULE",)
