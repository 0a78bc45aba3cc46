"""Capability contracts a rendered value may satisfy.

Dispatch never looks at class hierarchies. A value qualifies when its class
defines the capability as a method:

- ``SearchCriteriaHolder`` — ``search_criteria()``, renders as a search widget.
- ``SelfRendering`` — ``__html__()``, renders its own HTML (the same protocol
  kida's ``Markup`` implements, so markup passes straight through).
- ``Linkable`` — ``link()``, a canonical identity record used for anchors.

The protocols describe the contracts for annotations. Rendering checks values
with ``is_linkable``, ``renders_itself`` and ``holds_search_criteria``, which
look for a callable on the class: a dataclass with a plain ``link: str`` field
is not ``Linkable``.
"""

from dataclasses import dataclass
from typing import Any, Protocol


class Linkable(Protocol):
    """Produces the link record that addresses this value."""

    def link(self) -> Any: ...


class SelfRendering(Protocol):
    """Produces its own HTML."""

    def __html__(self) -> str: ...


class SearchCriteriaHolder(Protocol):
    """Exposes a nested search criteria record."""

    def search_criteria(self) -> Any: ...


def _has_method(value: Any, name: str) -> bool:
    return callable(getattr(type(value), name, None))


def is_linkable(value: Any) -> bool:
    return _has_method(value, "link")


def renders_itself(value: Any) -> bool:
    return _has_method(value, "__html__")


def holds_search_criteria(value: Any) -> bool:
    return _has_method(value, "search_criteria")


@dataclass(frozen=True, slots=True)
class SearchLink[T]:
    """Embeds a search widget in a record.

    Holds the default criteria; the registered search function for
    ``type(criteria)`` supplies the results::

        @dataclass
        class Index:
            shopping_lists: SearchLink[ShoppingListSearch]

        Index(shopping_lists=SearchLink(ShoppingListSearch()))
    """

    criteria: T

    def search_criteria(self) -> T:
        return self.criteria
