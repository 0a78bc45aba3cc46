"""Autoview — browsable HTML views generated from plain data records.

Register typed getters and searches; autoview derives the routes, renders
any dataclass graph as HTML, builds tables for lists, and re-renders
embedded searches in place with htmx.

Basic usage::

    from dataclasses import dataclass

    from autoview import App, SearchLink, view_field

    app = App()

    @dataclass
    class ProductLink:
        product: str

    @app.get
    def product(link: ProductLink) -> Product:
        return PRODUCTS[link.product]

    @dataclass
    class ProductSearch:
        name: str = view_field("search", default="")

    @app.search
    def find_products(criteria: ProductSearch) -> list[Product]:
        return [p for p in PRODUCTS.values() if criteria.name.lower() in p.name.lower()]

    app.run()
"""

__version__ = "0.1.0"
__all__ = [
    "App",
    "AppConfig",
    "AutoviewError",
    "ConfigurationError",
    "DecodeFailure",
    "DuplicateRegistration",
    "InvalidCriteriaShape",
    "InvalidLinkShape",
    "InvalidRowShape",
    "Linkable",
    "RenderFailure",
    "Request",
    "ResourceNotFound",
    "Response",
    "SearchCriteriaHolder",
    "SearchLink",
    "SelfRendering",
    "TemplateFailure",
    "UnregisteredCriteria",
    "view_field",
]

_ERRORS = (
    "AutoviewError",
    "ConfigurationError",
    "DecodeFailure",
    "DuplicateRegistration",
    "InvalidCriteriaShape",
    "InvalidLinkShape",
    "InvalidRowShape",
    "RenderFailure",
    "ResourceNotFound",
    "TemplateFailure",
    "UnregisteredCriteria",
)


def __getattr__(name: str) -> object:
    """Lazy imports for public API.

    Keeps ``import autoview`` fast while providing a clean top-level API.
    """
    if name == "App":
        from autoview.app import App

        return App

    if name == "AppConfig":
        from autoview.config import AppConfig

        return AppConfig

    if name == "Request":
        from autoview.http.request import Request

        return Request

    if name == "Response":
        from autoview.http.response import Response

        return Response

    if name in ("Linkable", "SearchCriteriaHolder", "SearchLink", "SelfRendering"):
        from autoview import capabilities as _caps

        return getattr(_caps, name)

    if name == "view_field":
        from autoview.schema import view_field

        return view_field

    if name in _ERRORS:
        from autoview import errors as _errors

        return getattr(_errors, name)

    msg = f"module {__name__!r} has no attribute {name!r}"
    raise AttributeError(msg)
