"""Tests for autoview.capabilities — method-based capability checks."""

from dataclasses import dataclass

from kida.template import Markup

from autoview.capabilities import (
    SearchLink,
    holds_search_criteria,
    is_linkable,
    renders_itself,
)


@dataclass(frozen=True)
class ProductSearch:
    name: str = ""


class Badge:
    def __html__(self) -> str:
        return "<span>badge</span>"


class Product:
    def link(self) -> object:
        return None


class Custom:
    def search_criteria(self) -> ProductSearch:
        return ProductSearch("ja")


@dataclass
class Bookmark:
    title: str
    link: str


@dataclass
class SavedQuery:
    label: str
    search_criteria: str


class Snippet:
    __html__ = "<b>x</b>"


class TestIsLinkable:
    def test_any_class_with_link_method(self) -> None:
        assert is_linkable(Product())

    def test_plain_values(self) -> None:
        assert not is_linkable("Product")
        assert not is_linkable(None)

    def test_link_data_field(self) -> None:
        assert not is_linkable(Bookmark("Docs", "https://example.com"))

    def test_callable_set_on_instance_only(self) -> None:
        bookmark = Bookmark("Docs", "https://example.com")
        bookmark.link = lambda: None  # type: ignore[assignment]
        assert not is_linkable(bookmark)


class TestRendersItself:
    def test_html_method(self) -> None:
        assert renders_itself(Badge())

    def test_markup(self) -> None:
        assert renders_itself(Markup("<b>x</b>"))

    def test_plain_string(self) -> None:
        assert not renders_itself("<b>x</b>")

    def test_html_data_field(self) -> None:
        assert not renders_itself(Snippet())


class TestHoldsSearchCriteria:
    def test_custom_holder(self) -> None:
        assert holds_search_criteria(Custom())
        assert Custom().search_criteria() == ProductSearch("ja")

    def test_search_criteria_data_field(self) -> None:
        assert not holds_search_criteria(SavedQuery("cheese", "name=ja"))

    def test_criteria_record_itself(self) -> None:
        assert not holds_search_criteria(ProductSearch())


class TestSearchLink:
    def test_holds_criteria(self) -> None:
        link = SearchLink(ProductSearch("kv"))
        assert holds_search_criteria(link)
        assert link.search_criteria() == ProductSearch("kv")

    def test_equality(self) -> None:
        assert SearchLink(ProductSearch()) == SearchLink(ProductSearch())
