"""The response a view or an error turns into."""

from __future__ import annotations

from dataclasses import dataclass, replace

HTML = "text/html; charset=utf-8"
PLAIN_TEXT = "text/plain; charset=utf-8"


@dataclass(frozen=True, slots=True)
class Response:
    """Rendered page, search fragment or error text."""

    body: str = ""
    status: int = 200
    content_type: str = HTML
    headers: tuple[tuple[str, str], ...] = ()

    def with_header(self, name: str, value: str) -> Response:
        return replace(self, headers=(*self.headers, (name, value)))

    def with_hx_push_url(self, url: str) -> Response:
        """Have htmx record *url* in the browser history."""
        return self.with_header("HX-Push-Url", url)

    def header(self, name: str) -> str | None:
        """First value of header *name*, compared case-insensitively."""
        wanted = name.lower()
        return next((value for key, value in self.headers if key.lower() == wanted), None)

    @property
    def text(self) -> str:
        return self.body
