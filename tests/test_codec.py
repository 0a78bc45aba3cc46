"""Tests for autoview.codec — link records to paths and back."""

from dataclasses import dataclass
from datetime import date

import pytest

from autoview.codec import check_link_shape, decode, encode, link_href, route_pattern
from autoview.errors import DecodeFailure, InvalidLinkShape, RenderFailure
from autoview.routing.router import Route, Router
from autoview.schema import shape_of


@dataclass(frozen=True)
class Empty:
    pass


@dataclass(frozen=True)
class ProductLink:
    product: str


@dataclass(frozen=True)
class PairLink:
    shop: str
    aisle: str


@dataclass(frozen=True)
class TypedLink:
    id: int
    price: float
    active: bool


@dataclass(frozen=True)
class DateLink:
    day: date


@dataclass
class Bookmark:
    title: str
    link: str


class Product:
    def __init__(self, name: str) -> None:
        self.name = name

    def link(self) -> ProductLink:
        return ProductLink(self.name)


class TestEncode:
    def test_empty_record(self) -> None:
        assert encode(Empty()) == "/"

    def test_single_field(self) -> None:
        assert encode(ProductLink("Jarlsberg")) == "/product/Jarlsberg"

    def test_declaration_order(self) -> None:
        assert encode(PairLink(shop="Kiwi", aisle="7")) == "/shop/Kiwi/aisle/7"

    def test_escapes_values(self) -> None:
        assert encode(ProductLink("My List/2")) == "/product/My%20List%2F2"

    def test_typed_values(self) -> None:
        assert encode(TypedLink(3, 1.5, True)) == "/id/3/price/1.5/active/true"

    def test_rejects_non_records(self) -> None:
        with pytest.raises(RenderFailure):
            encode("Jarlsberg")


class TestRoutePattern:
    def test_empty_shape_is_root(self) -> None:
        assert route_pattern(shape_of(Empty)) == "/"

    def test_pattern_per_field(self) -> None:
        assert route_pattern(shape_of(PairLink)) == "/shop/{shop}/aisle/{aisle}"


class TestDecode:
    def test_string_fields(self) -> None:
        assert decode({"shop": "Kiwi", "aisle": "7"}, PairLink) == PairLink("Kiwi", "7")

    def test_typed_fields(self) -> None:
        link = decode({"id": "3", "price": "1.5", "active": "false"}, TypedLink)
        assert link == TypedLink(3, 1.5, False)

    def test_bad_int(self) -> None:
        with pytest.raises(DecodeFailure) as exc_info:
            decode({"id": "three", "price": "1", "active": "true"}, TypedLink)
        assert "TypedLink.id" in str(exc_info.value)

    def test_bad_bool(self) -> None:
        with pytest.raises(DecodeFailure):
            decode({"id": "3", "price": "1", "active": "maybe"}, TypedLink)

    def test_missing_param(self) -> None:
        with pytest.raises(DecodeFailure):
            decode({"shop": "Kiwi"}, PairLink)

    def test_empty_shape(self) -> None:
        assert decode({}, Empty) == Empty()


def _router_for(link_type: type) -> Router:
    shape = check_link_shape(link_type)
    router = Router()
    router.add(
        Route(route_pattern(shape), tuple(spec.name for spec in shape.fields), lambda r: r)
    )
    router.freeze()
    return router


class TestRoundTrip:
    @pytest.mark.parametrize(
        "link",
        [
            ProductLink("Jarlsberg"),
            ProductLink("My Shopping List"),
            ProductLink("a/b?c#d%e"),
            ProductLink("blåbær"),
            ProductLink(""),
            PairLink("Kiwi", "7 & 8"),
            PairLink("", ""),
        ],
    )
    def test_string_links_survive_router(self, link: object) -> None:
        """encode -> router match -> decode gives the same link back."""
        match = _router_for(type(link)).match("GET", encode(link))
        assert decode(match.path_params, type(link)) == link

    def test_typed_link(self) -> None:
        link = TypedLink(42, 0.25, True)
        match = _router_for(TypedLink).match("GET", encode(link))
        assert decode(match.path_params, TypedLink) == link

    def test_empty_record(self) -> None:
        match = _router_for(Empty).match("GET", encode(Empty()))
        assert decode(match.path_params, Empty) == Empty()


class TestLinkHref:
    def test_linkable(self) -> None:
        assert link_href(Product("Jarlsberg")) == "/product/Jarlsberg"

    def test_not_linkable(self) -> None:
        assert link_href("Jarlsberg") is None
        assert link_href(None) is None

    def test_link_data_field_is_not_linkable(self) -> None:
        assert link_href(Bookmark("Docs", "https://example.com")) is None


class TestCheckLinkShape:
    def test_accepts_supported_types(self) -> None:
        assert check_link_shape(TypedLink).name == "TypedLink"

    def test_rejects_non_dataclass(self) -> None:
        with pytest.raises(InvalidLinkShape):
            check_link_shape(str)

    def test_rejects_unsupported_field_type(self) -> None:
        with pytest.raises(InvalidLinkShape) as exc_info:
            check_link_shape(DateLink)
        assert "DateLink.day" in str(exc_info.value)

