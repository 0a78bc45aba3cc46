"""The request as autoview sees it.

Views are only ever fetched, so a request carries no body: the method, the
path in both decoded and raw form, lowercased headers, the query overrides
and whatever the router captured from the path.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field, replace
from types import MappingProxyType
from typing import Any
from urllib.parse import parse_qsl, quote, unquote


def parse_query(query_string: str) -> Mapping[str, str]:
    """First value per key; blank values count as overrides."""
    values: dict[str, str] = {}
    for key, value in parse_qsl(query_string, keep_blank_values=True):
        values.setdefault(key, value)
    return MappingProxyType(values)


def _header_map(pairs: Any) -> Mapping[str, str]:
    headers: dict[str, str] = {}
    for name, value in pairs:
        headers.setdefault(name.decode("latin-1").lower(), value.decode("latin-1"))
    return MappingProxyType(headers)


@dataclass(frozen=True, slots=True)
class Request:
    """One GET (or HEAD) of a derived view."""

    method: str
    path: str
    raw_path: str
    query_string: str = ""
    query: Mapping[str, str] = field(default_factory=dict)
    headers: Mapping[str, str] = field(default_factory=dict)
    path_params: Mapping[str, str] = field(default_factory=dict)

    @property
    def htmx_target(self) -> str | None:
        """Element id named by the ``HX-Target`` header, if any."""
        return self.headers.get("hx-target")

    @property
    def url(self) -> str:
        """Path and query as the client sent them, for ``HX-Push-Url``."""
        if self.query_string:
            return f"{self.raw_path}?{self.query_string}"
        return self.raw_path

    def with_path_params(self, path_params: Mapping[str, str]) -> Request:
        return replace(self, path_params=path_params)

    @classmethod
    def from_asgi(cls, scope: Mapping[str, Any]) -> Request:
        path = scope["path"]
        raw_path = scope.get("raw_path")
        query_string = scope.get("query_string", b"").decode("latin-1")
        return cls(
            method=scope["method"],
            path=path,
            # Without raw_path an encoded "/" inside a link value is lost.
            raw_path=raw_path.decode("latin-1") if raw_path else quote(path, safe="/"),
            query_string=query_string,
            query=parse_query(query_string),
            headers=_header_map(scope.get("headers", ())),
        )

    @classmethod
    def build(
        cls,
        url: str,
        *,
        headers: Mapping[str, str] | None = None,
        method: str = "GET",
    ) -> Request:
        """Build a request for *url* outside any server::

            renderer.render(index, "", Request.build("/?ProductSearch.name=ja"))
        """
        raw_path, _, query_string = url.partition("?")
        return cls(
            method=method,
            path=unquote(raw_path),
            raw_path=raw_path,
            query_string=query_string,
            query=parse_query(query_string),
            headers=MappingProxyType({k.lower(): v for k, v in (headers or {}).items()}),
        )
