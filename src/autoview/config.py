"""Application configuration.

AppConfig is a frozen dataclass — immutable after creation, IDE-autocompletable,
no string-key dict lookups.
"""

from dataclasses import dataclass
from pathlib import Path


@dataclass(frozen=True, slots=True)
class AppConfig:
    """Application configuration. Immutable after creation.

    All fields have sensible defaults. Override what you need::

        config = AppConfig(debug=True, port=3000, title="Groceries")
    """

    # Server
    host: str = "127.0.0.1"
    port: int = 8000
    debug: bool = False
    log_level: str = "info"

    # Templates
    # Templates found here shadow the built-in body/table/input/search templates.
    template_dir: str | Path | None = None
    autoescape: bool = True

    # Page chrome
    title: str = "autoview"
    htmx_url: str = "https://unpkg.com/htmx.org@2.0.4"

    # Rendering
    placeholder: str = "N/A"

    # Partial updates: HX-Target values starting with this prefix address
    # an embedded search field, e.g. ``search-ShoppingLists``.
    search_prefix: str = "search-"
