"""Autoview exception hierarchy.

Shared across the registrar, renderer, codec and transport so every module
raises and catches the same types.

Configuration errors are raised while the app is being set up and should
abort startup. Everything else is request-fatal and is converted to a
response by ``autoview.server.errors.error_response``.
"""


class AutoviewError(Exception):
    """Base for all autoview-specific errors."""


class ConfigurationError(AutoviewError):
    """Raised when the app is set up incorrectly."""


class InvalidLinkShape(ConfigurationError):  # noqa: N818
    """A getter's link parameter is not a dataclass of path-safe fields."""


class InvalidCriteriaShape(ConfigurationError):  # noqa: N818
    """A searcher's criteria parameter is not a dataclass."""


class DuplicateRegistration(ConfigurationError):  # noqa: N818
    """A search function is already bound to this criteria type."""


class UnregisteredCriteria(AutoviewError):  # noqa: N818
    """No search function is bound to the criteria type being rendered."""


class InvalidRowShape(AutoviewError):  # noqa: N818
    """A table row is not a record."""


class ResourceNotFound(AutoviewError):  # noqa: N818
    """A getter could not find the record addressed by its link."""


class DecodeFailure(AutoviewError):  # noqa: N818
    """A path parameter or query override could not be parsed."""


class RenderFailure(AutoviewError):  # noqa: N818
    """A value could not be rendered."""


class TemplateFailure(AutoviewError):  # noqa: N818
    """A named template could not be loaded or rendered."""


class HTTPError(AutoviewError):
    """A request the router cannot hand to any getter.

    Raised by the router only. Errors raised by getters, searchers and the
    renderer are never HTTP errors; they all answer 500.
    """

    status = 500

    def __init__(self, detail: str = "", headers: tuple[tuple[str, str], ...] = ()) -> None:
        super().__init__(detail)
        self.detail = detail
        self.headers = headers

    def __str__(self) -> str:
        return f"{self.status}: {self.detail}" if self.detail else str(self.status)


class NotFound(HTTPError):  # noqa: N818
    """404: the path addresses no link shape."""

    status = 404


class MethodNotAllowed(HTTPError):  # noqa: N818
    """405: the path matches but views only answer the *allowed* methods."""

    status = 405

    def __init__(self, allowed: frozenset[str]) -> None:
        allow = ", ".join(sorted(allowed))
        super().__init__(f"views only answer {allow}", headers=(("Allow", allow),))
