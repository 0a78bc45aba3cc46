"""Tests for autoview.routing — routes looked up by link field names."""

import pytest

from autoview.errors import ConfigurationError, MethodNotAllowed, NotFound
from autoview.routing.router import Route, Router, split_path


def _handler(request):
    return request


def _router(*fields: tuple[str, ...]) -> Router:
    router = Router()
    for names in fields:
        path = "/" + "/".join(f"{name}/{{{name}}}" for name in names) if names else "/"
        router.add(Route(path, names, _handler, name=path))
    router.freeze()
    return router


class TestSplitPath:
    def test_root(self) -> None:
        assert split_path("/") == ((), ())

    def test_pairs(self) -> None:
        assert split_path("/shop/Kiwi/aisle/7") == (("shop", "aisle"), ("Kiwi", "7"))

    def test_segments_decoded_separately(self) -> None:
        assert split_path("/product/My%20List%2F2") == (("product",), ("My List/2",))

    def test_odd_segment_count(self) -> None:
        assert split_path("/product") is None
        assert split_path("/product/Jarlsberg/") is None

    def test_empty_value(self) -> None:
        assert split_path("/product/") == (("product",), ("",))

    def test_relative_path(self) -> None:
        assert split_path("product/x") is None


class TestMatch:
    def test_root(self) -> None:
        match = _router(()).match("GET", "/")
        assert match.route.path == "/"
        assert match.path_params == {}

    def test_params_decoded_per_segment(self) -> None:
        match = _router(("product",)).match("GET", "/product/My%20List%2F2")
        assert match.path_params == {"product": "My List/2"}

    def test_multiple_params(self) -> None:
        match = _router(("shop", "aisle")).match("GET", "/shop/Kiwi/aisle/7")
        assert match.path_params == {"shop": "Kiwi", "aisle": "7"}

    def test_empty_value(self) -> None:
        match = _router(("product",)).match("GET", "/product/")
        assert match.path_params == {"product": ""}

    def test_all_values_empty(self) -> None:
        match = _router(("shop", "aisle")).match("GET", "/shop//aisle/")
        assert match.path_params == {"shop": "", "aisle": ""}

    def test_field_order_matters(self) -> None:
        with pytest.raises(NotFound):
            _router(("shop", "aisle")).match("GET", "/aisle/7/shop/Kiwi")

    def test_head(self) -> None:
        assert _router(()).match("HEAD", "/").route.path == "/"


class TestNoMatch:
    def test_unknown_path(self) -> None:
        with pytest.raises(NotFound):
            _router(("product",)).match("GET", "/shopping_list/x")

    def test_trailing_slash(self) -> None:
        with pytest.raises(NotFound):
            _router(("product",)).match("GET", "/product/Jarlsberg/")

    def test_too_many_segments(self) -> None:
        with pytest.raises(NotFound):
            _router(("product",)).match("GET", "/product/a/b")

    def test_encoded_slash_is_not_a_separator(self) -> None:
        with pytest.raises(NotFound):
            _router(("a", "b")).match("GET", "/a/x%2Fb/y")

    def test_unknown_path_wins_over_method(self) -> None:
        with pytest.raises(NotFound):
            _router(()).match("POST", "/nowhere/x")

    def test_method_not_allowed(self) -> None:
        with pytest.raises(MethodNotAllowed) as exc_info:
            _router(()).match("POST", "/")
        assert exc_info.value.status == 405
        assert exc_info.value.headers == (("Allow", "GET, HEAD"),)


class TestRegistration:
    def test_duplicate_fields(self) -> None:
        router = Router()
        router.add(Route("/product/{product}", ("product",), _handler, name="product"))
        with pytest.raises(ConfigurationError) as exc_info:
            router.add(Route("/product/{product}", ("product",), _handler))
        assert "product" in str(exc_info.value)

    def test_add_after_freeze(self) -> None:
        router = _router(())
        with pytest.raises(RuntimeError):
            router.add(Route("/x/{x}", ("x",), _handler))

    def test_routes_listed(self) -> None:
        router = _router((), ("product",))
        assert len(router) == 2
        assert {route.path for route in router} == {"/", "/product/{product}"}
