"""Declarative record schema.

Each dataclass used as a record, link or search criteria is described once:
field names in declaration order, resolved annotations, and the tags declared
in field metadata. The description is cached per type so rendering never
re-walks ``dataclasses.fields`` or re-resolves annotations.

Tags are declared with field metadata under the ``"autoview"`` key, as a
comma-separated string::

    @dataclass
    class ShoppingListSearch:
        name: str = view_field("search", default="")

    @dataclass
    class ShoppingList:
        name: str
        notes: str = field(default="", metadata={"autoview": "table-hide"})
"""

import dataclasses
import functools
import types
import typing
from collections.abc import Sequence
from dataclasses import dataclass
from typing import Any

METADATA_KEY = "autoview"

TABLE_HIDE = "table-hide"
SEARCH = "search"


@dataclass(frozen=True, slots=True)
class FieldSpec:
    """One externally visible field of a record shape."""

    name: str
    type: Any
    tags: frozenset[str] = frozenset()
    element_type: type | None = None

    def has_tag(self, tag: str) -> bool:
        return tag in self.tags


@dataclass(frozen=True, slots=True)
class Shape:
    """The declared shape of a record type."""

    cls: type
    name: str
    fields: tuple[FieldSpec, ...]

    def field(self, name: str) -> FieldSpec | None:
        for spec in self.fields:
            if spec.name == name:
                return spec
        return None

    @property
    def table_fields(self) -> tuple[FieldSpec, ...]:
        return tuple(f for f in self.fields if not f.has_tag(TABLE_HIDE))

    @property
    def search_fields(self) -> tuple[FieldSpec, ...]:
        return tuple(f for f in self.fields if f.has_tag(SEARCH))


def view_field(*tags: str, **kwargs: Any) -> Any:
    """``dataclasses.field`` with autoview tags attached.

    Accepts every ``dataclasses.field`` keyword::

        name: str = view_field("search", default="")
    """
    metadata = dict(kwargs.pop("metadata", None) or {})
    metadata[METADATA_KEY] = ",".join(tags)
    return dataclasses.field(metadata=metadata, **kwargs)


def parse_tags(value: str) -> frozenset[str]:
    """Split a comma-separated tag string, ignoring blanks and whitespace."""
    return frozenset(part.strip() for part in value.split(",") if part.strip())


def is_record(value: Any) -> bool:
    """True for dataclass *instances* (not dataclass types)."""
    return dataclasses.is_dataclass(value) and not isinstance(value, type)


def is_record_type(annotation: Any) -> bool:
    return isinstance(annotation, type) and dataclasses.is_dataclass(annotation)


@functools.cache
def shape_of(cls: type) -> Shape:
    """Return the cached shape of dataclass *cls*.

    Fields whose names start with an underscore are not externally visible
    and are left out.

    Raises:
        TypeError: If *cls* is not a dataclass type.
    """
    if not is_record_type(cls):
        msg = f"{cls!r} is not a dataclass"
        raise TypeError(msg)

    try:
        hints = typing.get_type_hints(cls)
    except NameError:
        # Unresolvable forward references; fall back to the raw annotations.
        hints = {}

    specs: list[FieldSpec] = []
    for f in dataclasses.fields(cls):
        if f.name.startswith("_"):
            continue
        annotation = hints.get(f.name, f.type)
        specs.append(
            FieldSpec(
                name=f.name,
                type=annotation,
                tags=parse_tags(f.metadata.get(METADATA_KEY, "")),
                element_type=element_type_of(annotation),
            )
        )
    return Shape(cls=cls, name=cls.__name__, fields=tuple(specs))


def element_type_of(annotation: Any) -> type | None:
    """Return ``X`` for ``list[X]``, ``tuple[X, ...]`` or ``Sequence[X]``.

    ``X | None`` is unwrapped first. Anything else yields ``None``.
    """
    annotation = unwrap_optional(annotation)
    origin = typing.get_origin(annotation)
    if origin is None or not isinstance(origin, type) or not issubclass(origin, Sequence):
        return None
    if issubclass(origin, str | bytes):
        return None
    args = typing.get_args(annotation)
    if not args:
        return None
    if origin is tuple and not (len(args) == 2 and args[1] is Ellipsis):
        return None
    element = unwrap_optional(args[0])
    return element if isinstance(element, type) else None


def unwrap_optional(annotation: Any) -> Any:
    """Return ``X`` for ``X | None`` / ``Optional[X]``; otherwise unchanged."""
    origin = typing.get_origin(annotation)
    if origin is typing.Union or origin is types.UnionType:
        args = [a for a in typing.get_args(annotation) if a is not type(None)]
        if len(args) == 1:
            return args[0]
    return annotation
