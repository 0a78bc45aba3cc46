"""Route table keyed by link field names.

Every route is derived from a link dataclass, so a path always alternates
field names and values: ``/f1/<v1>/.../fN/<vN>``, or ``/`` for a link
without fields. The router pairs up the segments of the raw request path,
decodes each one separately, and looks the route up by its names.

Splitting the raw path keeps an encoded ``/`` inside a value, and empty
values (``/product/``) are segments like any other.
"""

from collections.abc import Callable, Iterator
from dataclasses import dataclass
from typing import Any
from urllib.parse import unquote

from autoview.errors import ConfigurationError, MethodNotAllowed, NotFound

# Views are read-only; HEAD is answered by the GET handler without a body.
METHODS = frozenset({"GET", "HEAD"})


@dataclass(frozen=True, slots=True)
class Route:
    """A getter served at the path derived from its link fields."""

    path: str
    fields: tuple[str, ...]
    handler: Callable[..., Any]
    name: str | None = None


@dataclass(frozen=True, slots=True)
class RouteMatch:
    route: Route
    path_params: dict[str, str]


def split_path(raw_path: str) -> tuple[tuple[str, ...], tuple[str, ...]] | None:
    """Split a raw path into decoded ``(names, values)``, or ``None``.

    ``None`` means the path cannot address a link: an odd number of
    segments, or no leading ``/``.
    """
    if not raw_path.startswith("/"):
        return None
    if raw_path == "/":
        return (), ()
    segments = [unquote(part) for part in raw_path[1:].split("/")]
    if len(segments) % 2:
        return None
    return tuple(segments[0::2]), tuple(segments[1::2])


class Router:
    """Maps link field names to routes. Read-only once frozen."""

    __slots__ = ("_frozen", "_routes")

    def __init__(self) -> None:
        self._routes: dict[tuple[str, ...], Route] = {}
        self._frozen = False

    def add(self, route: Route) -> None:
        """Register *route*.

        Raises:
            ConfigurationError: If a route with the same field names exists.
        """
        if self._frozen:
            msg = "Cannot add routes after the app has started serving."
            raise RuntimeError(msg)
        existing = self._routes.get(route.fields)
        if existing is not None:
            msg = f"{route.path!r} is already served by {existing.name or 'another getter'}"
            raise ConfigurationError(msg)
        self._routes[route.fields] = route

    def freeze(self) -> None:
        self._frozen = True

    def __iter__(self) -> Iterator[Route]:
        return iter(self._routes.values())

    def __len__(self) -> int:
        return len(self._routes)

    def match(self, method: str, raw_path: str) -> RouteMatch:
        """Find the route for *raw_path* and decode its parameters.

        Raises:
            NotFound: If no link shape addresses *raw_path*.
            MethodNotAllowed: If the path matches but *method* is not GET/HEAD.
        """
        split = split_path(raw_path)
        route = self._routes.get(split[0]) if split is not None else None
        if route is None:
            raise NotFound(f"No route matches {method} {raw_path!r}")
        if method not in METHODS:
            raise MethodNotAllowed(METHODS)
        names, values = split
        return RouteMatch(route=route, path_params=dict(zip(names, values, strict=True)))
