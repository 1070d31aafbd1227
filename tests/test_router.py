"""Tests for paydesk.routing.router: registration and exact-match dispatch."""

import pytest

from paydesk.errors import ConfigurationError, DuplicateRoute
from paydesk.routing.route import MissReason, RouteMatch, RouteMiss
from paydesk.routing.router import Router, RouteTable, normalize_path


def welcome() -> str:
    return "welcome"


def index() -> str:
    return "index"


def charge() -> str:
    return "charge"


def success() -> str:
    return "success"


def error() -> str:
    return "error"


def _payment_router() -> Router:
    r = Router()
    r.register("GET", "/", welcome)
    r.register("GET", "payment", index)
    r.register("POST", "charge", charge)
    r.register("GET", "success", success)
    r.register("GET", "error", error)
    return r


@pytest.fixture
def table() -> RouteTable:
    return _payment_router().compile()


class TestNormalizePath:
    def test_root(self) -> None:
        assert normalize_path("/") == "/"
        assert normalize_path("") == "/"

    def test_adds_leading_slash(self) -> None:
        assert normalize_path("payment") == "/payment"

    def test_strips_trailing_slash(self) -> None:
        assert normalize_path("/payment/") == "/payment"

    def test_collapses_empty_segments(self) -> None:
        assert normalize_path("//api//v1/") == "/api/v1"

    def test_case_preserved(self) -> None:
        assert normalize_path("/Payment") == "/Payment"


class TestRegister:
    def test_returns_rule(self) -> None:
        r = Router()
        rule = r.register("get", "payment", index, name="payment")
        assert rule.method == "GET"
        assert rule.path == "/payment"
        assert rule.handler is index
        assert rule.name == "payment"

    def test_duplicate_pair_fails(self) -> None:
        r = Router()
        r.register("POST", "charge", charge)
        with pytest.raises(DuplicateRoute) as exc_info:
            r.register("POST", "charge", charge)
        assert exc_info.value.method == "POST"
        assert exc_info.value.path == "/charge"

    def test_duplicate_after_normalization_fails(self) -> None:
        r = Router()
        r.register("POST", "charge", charge)
        with pytest.raises(DuplicateRoute):
            r.register("post", "/charge/", charge)

    def test_duplicate_is_configuration_error(self) -> None:
        r = Router()
        r.register("POST", "charge", charge)
        with pytest.raises(ConfigurationError):
            r.register("POST", "charge", index)

    def test_same_path_other_method_allowed(self) -> None:
        r = Router()
        r.register("GET", "charge", index)
        r.register("POST", "charge", charge)
        assert len(r.rules) == 2

    def test_duplicate_name_fails(self) -> None:
        r = Router()
        r.register("GET", "payment", index, name="pay")
        with pytest.raises(DuplicateRoute, match="name 'pay'"):
            r.register("POST", "charge", charge, name="pay")

    def test_failed_registration_leaves_router_unchanged(self) -> None:
        r = Router()
        r.register("POST", "charge", charge)
        with pytest.raises(DuplicateRoute):
            r.register("POST", "charge", charge)
        assert len(r.rules) == 1

    def test_register_methods_adds_one_rule_per_method(self) -> None:
        r = Router()
        rules = r.register_methods(["GET", "POST"], "charge", charge, name="charge")
        assert [rule.method for rule in rules] == ["GET", "POST"]
        assert [rule.name for rule in rules] == ["charge", None]
        assert r.rules == rules

    def test_register_methods_is_all_or_nothing(self) -> None:
        r = Router()
        r.register("POST", "charge", charge)
        with pytest.raises(DuplicateRoute):
            r.register_methods(["GET", "POST"], "charge", index, name="pay")
        assert [(rule.method, rule.path) for rule in r.rules] == [("POST", "/charge")]
        # Neither the GET pair nor the name was claimed by the failed call
        r.register("GET", "charge", index, name="pay")

    def test_register_methods_rejects_repeat_within_call(self) -> None:
        r = Router()
        with pytest.raises(DuplicateRoute):
            r.register_methods(["GET", "get"], "payment", index)
        assert r.rules == ()

    def test_register_methods_bad_method_adds_nothing(self) -> None:
        r = Router()
        with pytest.raises(ConfigurationError, match="Unsupported HTTP method"):
            r.register_methods(["GET", "FETCH"], "payment", index)
        assert r.rules == ()

    def test_unsupported_method(self) -> None:
        r = Router()
        with pytest.raises(ConfigurationError, match="Unsupported HTTP method"):
            r.register("FETCH", "payment", index)

    @pytest.mark.parametrize("path", ["/users/{id}", "/share/<slug>"])
    def test_rejects_parameter_syntax(self, path: str) -> None:
        r = Router()
        with pytest.raises(ConfigurationError, match="parameter syntax"):
            r.register("GET", path, index)

    def test_rejects_query_string(self) -> None:
        r = Router()
        with pytest.raises(ConfigurationError, match="unsupported characters"):
            r.register("GET", "payment?x=1", index)

    def test_register_after_compile_fails(self) -> None:
        r = Router()
        r.compile()
        with pytest.raises(RuntimeError, match="after compilation"):
            r.register("GET", "/", welcome)


class TestDispatchPaymentRoutes:
    @pytest.mark.parametrize(
        ("method", "path", "handler"),
        [
            ("GET", "/", welcome),
            ("GET", "payment", index),
            ("POST", "charge", charge),
            ("GET", "success", success),
            ("GET", "error", error),
        ],
    )
    def test_each_route_resolves_to_its_handler(self, table, method, path, handler) -> None:
        result = table.dispatch(method, path)
        assert isinstance(result, RouteMatch)
        assert result.handler is handler

    def test_every_registered_pair_dispatches_to_itself(self, table) -> None:
        for rule in table:
            result = table.dispatch(rule.method, rule.path)
            assert isinstance(result, RouteMatch)
            assert result.rule is rule

    def test_request_path_with_leading_slash(self, table) -> None:
        result = table.dispatch("GET", "/payment")
        assert isinstance(result, RouteMatch)
        assert result.handler is index

    def test_trailing_slash_ignored(self, table) -> None:
        result = table.dispatch("GET", "/payment/")
        assert isinstance(result, RouteMatch)

    def test_method_is_case_insensitive(self, table) -> None:
        result = table.dispatch("post", "/charge")
        assert isinstance(result, RouteMatch)
        assert result.handler is charge

    def test_path_is_case_sensitive(self, table) -> None:
        result = table.dispatch("GET", "/Payment")
        assert isinstance(result, RouteMiss)
        assert result.reason is MissReason.NOT_FOUND

    def test_wrong_method_known_path(self, table) -> None:
        result = table.dispatch("GET", "charge")
        assert isinstance(result, RouteMiss)
        assert result.reason is MissReason.METHOD_NOT_ALLOWED
        assert result.allowed == ("POST",)
        assert result.status == 405

    def test_unknown_path(self, table) -> None:
        result = table.dispatch("GET", "unknown")
        assert isinstance(result, RouteMiss)
        assert result.reason is MissReason.NOT_FOUND
        assert result.allowed == ()
        assert result.status == 404

    def test_unknown_path_and_method(self, table) -> None:
        result = table.dispatch("DELETE", "/nowhere")
        assert isinstance(result, RouteMiss)
        assert result.reason is MissReason.NOT_FOUND

    def test_no_prefix_matching(self, table) -> None:
        result = table.dispatch("GET", "/payment/extra")
        assert isinstance(result, RouteMiss)
        assert result.reason is MissReason.NOT_FOUND


class TestDispatchOrdering:
    def test_allowed_methods_in_registration_order(self) -> None:
        r = Router()
        r.register("POST", "/items", charge)
        r.register("GET", "/items", index)
        r.register("DELETE", "/items", error)
        table = r.compile()

        result = table.dispatch("PUT", "/items")
        assert isinstance(result, RouteMiss)
        assert result.allowed == ("POST", "GET", "DELETE")

    def test_method_match_found_after_other_methods(self) -> None:
        r = Router()
        r.register("GET", "/items", index)
        r.register("POST", "/items", charge)
        table = r.compile()

        result = table.dispatch("POST", "/items")
        assert isinstance(result, RouteMatch)
        assert result.handler is charge

    def test_empty_table(self) -> None:
        table = Router().compile()
        result = table.dispatch("GET", "/")
        assert isinstance(result, RouteMiss)
        assert result.reason is MissReason.NOT_FOUND


class TestRouteTable:
    def test_construction_is_idempotent(self) -> None:
        assert _payment_router().compile() == _payment_router().compile()

    def test_rules_in_registration_order(self, table) -> None:
        assert [(r.method, r.path) for r in table] == [
            ("GET", "/"),
            ("GET", "/payment"),
            ("POST", "/charge"),
            ("GET", "/success"),
            ("GET", "/error"),
        ]

    def test_len(self, table) -> None:
        assert len(table) == 5

    def test_immutable(self, table) -> None:
        with pytest.raises(AttributeError):
            table.rules = ()  # type: ignore[misc]

    def test_allowed_methods(self, table) -> None:
        assert table.allowed_methods("charge") == ("POST",)
        assert table.allowed_methods("/nowhere") == ()

    def test_path_for(self) -> None:
        r = Router()
        r.register("POST", "charge", charge, name="charge")
        table = r.compile()
        assert table.path_for("charge") == "/charge"

    def test_path_for_unknown(self, table) -> None:
        with pytest.raises(KeyError):
            table.path_for("missing")

    def test_dispatch_does_not_mutate(self, table) -> None:
        before = table.rules
        table.dispatch("GET", "charge")
        table.dispatch("GET", "unknown")
        assert table.rules is before
