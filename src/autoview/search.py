"""Search registry — criteria type to search function.

Search functions are registered during app setup. ``freeze()`` swaps the
table for a read-only mapping; after that the registry is only read, so
concurrent requests need no locking.
"""

import dataclasses
import inspect
import logging
import types
from collections.abc import Callable, Iterator, Mapping, Sequence
from dataclasses import dataclass
from typing import Any

from autoview.codec import parse_value
from autoview.errors import (
    ConfigurationError,
    DuplicateRegistration,
    InvalidCriteriaShape,
    UnregisteredCriteria,
)
from autoview.schema import is_record, is_record_type, shape_of

logger = logging.getLogger("autoview.search")

SearchFunction = Callable[[Any], Sequence[Any]]


@dataclass(frozen=True, slots=True)
class SearchRegistration:
    """A search function bound to a criteria type."""

    criteria_type: type
    search: SearchFunction
    # Declared result element type, used for table headers of empty results
    element_type: type | None = None


@dataclass(frozen=True, slots=True)
class SearchOutcome:
    """Results of one search, with the criteria they were found for."""

    criteria: Any
    results: Sequence[Any]
    element_type: type | None = None


def query_key(criteria_type: type, field_name: str) -> str:
    """Query-string key for a criteria field: ``TypeName.FieldName``."""
    return f"{criteria_type.__name__}.{field_name}"


def apply_overrides(criteria: Any, query: Mapping[str, str]) -> Any:
    """Return a copy of *criteria* with query-string overrides applied.

    Only fields tagged ``search`` are read from *query*. Missing keys keep
    the current value. *criteria* itself is never modified.

    Raises:
        DecodeFailure: If an override does not parse as its field's type.
    """
    cls = type(criteria)
    changes: dict[str, Any] = {}
    for spec in shape_of(cls).search_fields:
        key = query_key(cls, spec.name)
        if key in query:
            changes[spec.name] = parse_value(query[key], spec.type, what=key)
    return dataclasses.replace(criteria, **changes)


class SearchRegistry:
    """Binds each criteria type to exactly one search function."""

    __slots__ = ("_frozen", "_registrations")

    def __init__(self) -> None:
        self._registrations: dict[type, SearchRegistration] | Mapping[type, SearchRegistration] = {}
        self._frozen = False

    def register(
        self,
        criteria_type: Any,
        search: SearchFunction,
        *,
        element_type: type | None = None,
    ) -> SearchRegistration:
        """Bind *search* to *criteria_type*.

        Raises:
            InvalidCriteriaShape: If *criteria_type* is not a dataclass, or
                *search* is a coroutine function.
            DuplicateRegistration: If *criteria_type* is already bound. The
                existing binding stays in place.
            ConfigurationError: If the registry is frozen.
        """
        if self._frozen:
            msg = "Cannot register searches after the app has started serving."
            raise ConfigurationError(msg)
        if not is_record_type(criteria_type):
            msg = f"search criteria must be dataclasses, got: {criteria_type!r}"
            raise InvalidCriteriaShape(msg)
        if inspect.iscoroutinefunction(search):
            msg = f"search function {search.__name__!r} must be synchronous"
            raise InvalidCriteriaShape(msg)
        if criteria_type in self._registrations:
            msg = f"search already registered for type {criteria_type.__name__}"
            raise DuplicateRegistration(msg)

        registration = SearchRegistration(criteria_type, search, element_type)
        self._registrations[criteria_type] = registration  # type: ignore[index]
        logger.debug("registered search %s for %s", search.__name__, criteria_type.__name__)
        return registration

    def freeze(self) -> None:
        """Make the registry read-only."""
        if not self._frozen:
            self._registrations = types.MappingProxyType(dict(self._registrations))
            self._frozen = True

    def lookup(self, criteria_type: type) -> SearchRegistration:
        """Return the registration for *criteria_type*.

        Raises:
            UnregisteredCriteria: If nothing is bound to *criteria_type*.
        """
        registration = self._registrations.get(criteria_type)
        if registration is None:
            msg = f"failed to find search function for type {criteria_type.__name__}"
            raise UnregisteredCriteria(msg)
        return registration

    def resolve_and_run(self, criteria: Any, overrides: Mapping[str, str]) -> SearchOutcome:
        """Apply *overrides* to *criteria* and run the search bound to its type.

        Raises:
            UnregisteredCriteria: If *criteria* is not a dataclass instance or
                nothing is bound to its type.
            DecodeFailure: If an override does not parse.
        """
        if not is_record(criteria):
            msg = f"search criteria must be dataclass instances, got {type(criteria).__name__}"
            raise UnregisteredCriteria(msg)
        registration = self.lookup(type(criteria))
        resolved = apply_overrides(criteria, overrides)
        return SearchOutcome(
            criteria=resolved,
            results=registration.search(resolved),
            element_type=registration.element_type,
        )

    def __contains__(self, criteria_type: object) -> bool:
        return criteria_type in self._registrations

    def __iter__(self) -> Iterator[type]:
        return iter(self._registrations)

    def __len__(self) -> int:
        return len(self._registrations)
