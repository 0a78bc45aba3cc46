"""Rendering engine — arbitrary values to hypertext.

``Renderer.render`` walks a value recursively. Dispatch order:

1. ``None``                 -> placeholder text
2. ``SearchCriteriaHolder`` -> search widget (form + results container)
3. ``SelfRendering``        -> ``__html__()`` verbatim
4. dataclass instance       -> ``<h1>`` type name, ``<h2>`` + value per field
5. ``list`` / ``tuple``     -> table (``table.html``)
6. ``str``                  -> escaped ``<p>`` paragraph
7. anything else            -> escaped ``str(value)``

The renderer is constructed once per app from the frozen search registry
and the template store, and is shared by all requests. It holds no
per-request state.
"""

import html
from collections.abc import Sequence
from typing import Any

from kida.template import Markup

from autoview.capabilities import holds_search_criteria, renders_itself
from autoview.codec import format_value
from autoview.config import AppConfig
from autoview.errors import AutoviewError, RenderFailure
from autoview.http.request import Request
from autoview.rendering.table import build_table
from autoview.schema import is_record, shape_of, unwrap_optional
from autoview.search import SearchRegistry, query_key
from autoview.templating.integration import TemplateStore

# Search forms submit to the root route; htmx keeps the current page.
SEARCH_ACTION = "/"

# Search field type -> <input type=...>
INPUT_TYPES: dict[type, str] = {
    str: "search",
    int: "number",
    float: "number",
}


class Renderer:
    """Renders values, search widgets and pages."""

    __slots__ = ("config", "registry", "templates")

    def __init__(
        self,
        registry: SearchRegistry,
        templates: TemplateStore,
        config: AppConfig | None = None,
    ) -> None:
        self.registry = registry
        self.templates = templates
        self.config = config or AppConfig()

    def render(
        self,
        value: Any,
        field_name: str,
        request: Request,
        element_type: type | None = None,
    ) -> Markup:
        """Render *value*, found under *field_name* of its parent record.

        *element_type* is the declared element type when *value* is a
        sequence field, so empty tables still get headers.

        Raises:
            RenderFailure: If a nested value cannot be rendered, wrapping
                anything raised by user code (``__html__``, ``link()``,
                search functions).
        """
        try:
            return self._render(value, field_name, request, element_type)
        except AutoviewError:
            raise
        except Exception as exc:
            msg = f"failed to render {type(value).__name__} at {field_name or '<root>'!r}: {exc}"
            raise RenderFailure(msg) from exc

    def _render(
        self,
        value: Any,
        field_name: str,
        request: Request,
        element_type: type | None,
    ) -> Markup:
        if value is None:
            return Markup(html.escape(self.config.placeholder))

        if holds_search_criteria(value):
            return self.render_search_widget(field_name, value.search_criteria(), request)

        if renders_itself(value):
            return Markup(value.__html__())

        if is_record(value):
            return self.render_record(value, request)

        if isinstance(value, list | tuple):
            return self.render_table(value, element_type)

        if isinstance(value, str):
            return Markup(f"<p>{html.escape(value)}</p>")

        return Markup(html.escape(str(value)))

    def render_record(self, record: Any, request: Request) -> Markup:
        shape = shape_of(type(record))
        parts = [f"<h1>{html.escape(shape.name)}</h1>"]
        for spec in shape.fields:
            parts.append(f"<h2>{html.escape(spec.name)}</h2>")
            parts.append(
                self.render(getattr(record, spec.name), spec.name, request, spec.element_type)
            )
        return Markup("".join(parts))

    def render_table(self, sequence: Sequence[Any], element_type: type | None = None) -> Markup:
        data = build_table(sequence, element_type, placeholder=self.config.placeholder)
        return self.templates.render(
            "table.html",
            headers=data.headers,
            rows=data.rows,
            has_row_links=data.has_row_links,
        )

    # -- Search widgets --

    def search_target(self, field_name: str) -> str:
        """Element id of the results container for search field *field_name*."""
        return self.config.search_prefix + field_name

    def render_search_widget(self, field_name: str, criteria: Any, request: Request) -> Markup:
        """Render the form and results container for an embedded search.

        Query-string overrides from *request* are applied to a copy of
        *criteria* first; the form shows the overridden values and the
        results reflect them. The form always submits to the root route.

        Raises:
            RenderFailure: If *field_name* is empty.
            UnregisteredCriteria: If no search is bound to the criteria type.
        """
        if not field_name:
            msg = f"search received empty field name for type {type(criteria).__name__}"
            raise RenderFailure(msg)
        if not is_record(criteria):
            msg = f"search criteria must be a dataclass instance, got {type(criteria).__name__}"
            raise RenderFailure(msg)

        outcome = self.registry.resolve_and_run(criteria, request.query)
        return self.templates.render(
            "search.html",
            action=SEARCH_ACTION,
            target=self.search_target(field_name),
            inputs=self.render_search_inputs(outcome.criteria),
            results=self.render(outcome.results, "", request, outcome.element_type),
        )

    def render_search_inputs(self, criteria: Any) -> list[Markup]:
        """One ``input.html`` per ``search``-tagged field of *criteria*."""
        cls = type(criteria)
        inputs: list[Markup] = []
        for spec in shape_of(cls).search_fields:
            input_type = INPUT_TYPES.get(unwrap_optional(spec.type))
            if input_type is None:
                msg = f"no search input for field {cls.__name__}.{spec.name} of type {spec.type!r}"
                raise RenderFailure(msg)
            value = getattr(criteria, spec.name)
            inputs.append(
                self.templates.render(
                    "input.html",
                    type=input_type,
                    name=query_key(cls, spec.name),
                    value="" if value is None else format_value(value),
                    placeholder=spec.name,
                )
            )
        return inputs

    def render_search_field(self, record: Any, field_name: str, request: Request) -> Markup:
        """Re-render only the search widget held by *record*.*field_name*.

        Raises:
            RenderFailure: If *record* has no such field or the field does
                not hold search criteria.
        """
        spec = shape_of(type(record)).field(field_name) if is_record(record) else None
        if spec is None:
            msg = f"failed to find search field {field_name!r} in type {type(record).__name__}"
            raise RenderFailure(msg)
        holder = getattr(record, spec.name)
        if not holds_search_criteria(holder):
            msg = (
                f"field {field_name!r} of {type(record).__name__} does not hold search "
                f"criteria (type {type(holder).__name__})"
            )
            raise RenderFailure(msg)
        return self.render(holder, spec.name, request)

    # -- Pages --

    def render_page(self, value: Any, request: Request) -> Markup:
        """Render *value* inside the ``body.html`` page chrome."""
        return self.templates.render(
            "body.html",
            title=self.config.title,
            htmx_url=self.config.htmx_url,
            main=self.render(value, "", request),
        )
