"""Tests for autoview.schema — record shapes and field tags."""

from collections.abc import Sequence
from dataclasses import dataclass, field

import pytest

from autoview.schema import (
    element_type_of,
    is_record,
    is_record_type,
    parse_tags,
    shape_of,
    unwrap_optional,
    view_field,
)


@dataclass
class Nutrient:
    name: str
    amount: float


@dataclass
class Product:
    name: str
    notes: str = field(default="", metadata={"autoview": "table-hide"})
    nutrients: list[Nutrient] = field(default_factory=list)
    _cache: dict = field(default_factory=dict)


@dataclass(frozen=True)
class ProductSearch:
    name: str = view_field("search", default="")
    limit: int = view_field("search, table-hide", default=10)
    internal: str = ""


class TestParseTags:
    def test_comma_separated(self) -> None:
        assert parse_tags("search,table-hide") == frozenset({"search", "table-hide"})

    def test_whitespace_and_blanks(self) -> None:
        assert parse_tags(" search , ,table-hide ") == frozenset({"search", "table-hide"})

    def test_empty(self) -> None:
        assert parse_tags("") == frozenset()


class TestViewField:
    def test_attaches_metadata(self) -> None:
        spec = shape_of(ProductSearch).field("name")
        assert spec is not None
        assert spec.has_tag("search")

    def test_keeps_existing_metadata(self) -> None:
        f = view_field("search", default="", metadata={"other": 1})
        assert f.metadata["other"] == 1
        assert f.metadata["autoview"] == "search"

    def test_default_still_applies(self) -> None:
        assert ProductSearch().limit == 10


class TestShape:
    def test_declaration_order(self) -> None:
        shape = shape_of(Product)
        assert [f.name for f in shape.fields] == ["name", "notes", "nutrients"]

    def test_underscore_fields_hidden(self) -> None:
        assert shape_of(Product).field("_cache") is None

    def test_table_fields_skip_table_hide(self) -> None:
        assert [f.name for f in shape_of(Product).table_fields] == ["name", "nutrients"]

    def test_search_fields(self) -> None:
        assert [f.name for f in shape_of(ProductSearch).search_fields] == ["name", "limit"]

    def test_element_type_resolved(self) -> None:
        spec = shape_of(Product).field("nutrients")
        assert spec is not None
        assert spec.element_type is Nutrient

    def test_cached(self) -> None:
        assert shape_of(Product) is shape_of(Product)

    def test_rejects_non_dataclass(self) -> None:
        with pytest.raises(TypeError):
            shape_of(str)


class TestRecordChecks:
    def test_instance_is_record(self) -> None:
        assert is_record(Nutrient("Cheese", 50))

    def test_type_is_not_record(self) -> None:
        assert not is_record(Nutrient)
        assert is_record_type(Nutrient)

    def test_plain_values(self) -> None:
        assert not is_record("Cheese")
        assert not is_record_type(str)


class TestElementType:
    @pytest.mark.parametrize(
        ("annotation", "expected"),
        [
            (list[Nutrient], Nutrient),
            (tuple[Nutrient, ...], Nutrient),
            (Sequence[Nutrient], Nutrient),
            (list[Nutrient] | None, Nutrient),
            (list[Nutrient | None], Nutrient),
            (tuple[Nutrient, Product], None),
            (list, None),
            (str, None),
            (Nutrient, None),
            (None, None),
        ],
    )
    def test_element_type_of(self, annotation: object, expected: object) -> None:
        assert element_type_of(annotation) is expected

    def test_unwrap_optional(self) -> None:
        assert unwrap_optional(int | None) is int
        assert unwrap_optional(int) is int
        assert unwrap_optional(int | str) == int | str
