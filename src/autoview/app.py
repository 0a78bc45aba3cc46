"""Autoview application class.

Mutable during setup (getter and search registration).
Frozen at runtime when app.run() or __call__() is first invoked.
"""

import inspect
import logging
import threading
import typing
from collections.abc import Callable
from typing import Any

from autoview._internal.asgi import Receive, Scope, Send
from autoview._internal.invoke import invoke
from autoview.codec import check_link_shape, decode, route_pattern
from autoview.config import AppConfig
from autoview.errors import ConfigurationError, InvalidCriteriaShape, InvalidLinkShape
from autoview.http.request import Request
from autoview.http.response import Response
from autoview.rendering.engine import Renderer
from autoview.routing.router import Route, Router
from autoview.schema import element_type_of
from autoview.search import SearchRegistry
from autoview.server.handler import handle_request
from autoview.templating.integration import TemplateStore

logger = logging.getLogger("autoview.app")

Getter = Callable[[Any], Any]
Searcher = Callable[[Any], Any]


def _parameter_type(
    func: Callable[..., Any],
    error: type[ConfigurationError],
    role: str,
) -> tuple[Any, dict[str, Any]]:
    """Return the annotation of *func*'s single parameter, plus all hints.

    Raises *error* when *func* does not take exactly one annotated
    positional parameter.
    """
    name = getattr(func, "__name__", repr(func))
    params = [
        p
        for p in inspect.signature(func).parameters.values()
        if p.kind in (p.POSITIONAL_ONLY, p.POSITIONAL_OR_KEYWORD)
    ]
    if len(params) != 1:
        msg = f"{role} {name!r} must take exactly one positional parameter"
        raise error(msg)

    try:
        hints = typing.get_type_hints(func)
    except NameError as exc:
        msg = f"cannot resolve annotations of {role} {name!r}: {exc}"
        raise error(msg) from exc

    annotation = hints.get(params[0].name)
    if annotation is None:
        msg = f"{role} {name!r} must annotate its parameter {params[0].name!r}"
        raise error(msg)
    return annotation, hints


class App:
    """The autoview application.

    Register getters and searchers during setup, then serve::

        app = App()

        @app.get
        def product(link: ProductLink) -> Product: ...

        @app.search
        def find_lists(criteria: ShoppingListSearch) -> list[ShoppingList]: ...

        app.run()

    Thread safety:
        The setup phase is single-threaded (decorators at import time).
        The freeze transition uses a Lock + double-check to ensure exactly
        one thread compiles the app, even when several ASGI workers call
        ``__call__()`` concurrently on first request. After freezing, the
        router and search registry are read-only.
    """

    __slots__ = (
        "_freeze_lock",
        "_frozen",
        "_renderer",
        "_router",
        "_search_registry",
        "_templates",
        "config",
    )

    def __init__(self, config: AppConfig | None = None) -> None:
        self.config: AppConfig = config or AppConfig()
        self._router = Router()
        self._search_registry = SearchRegistry()
        self._templates = TemplateStore(self.config)
        self._frozen: bool = False
        self._freeze_lock: threading.Lock = threading.Lock()

        # Compiled state, set during _freeze()
        self._renderer: Renderer | None = None

    # -- Registration --

    def get(self, getter: Getter) -> Getter:
        """Serve *getter*'s result at the route derived from its link type.

        The getter takes one parameter annotated with a link dataclass; a
        link with fields ``a`` and ``b`` is served at ``/a/{a}/b/{b}``, a
        field-less link at ``/``. Sync and async getters both work. Usable
        as a decorator.

        Raises:
            InvalidLinkShape: If the link type is not a dataclass of
                ``str``/``int``/``float``/``bool`` fields.
            ConfigurationError: If another getter already serves that route.
        """
        self._check_not_frozen()
        link_type, _ = _parameter_type(getter, InvalidLinkShape, "getter")
        shape = check_link_shape(link_type)
        path = route_pattern(shape)

        self._router.add(
            Route(
                path=path,
                fields=tuple(spec.name for spec in shape.fields),
                handler=self._make_handler(getter, link_type),
                name=getattr(getter, "__name__", None),
            )
        )
        logger.debug("registered getter %s at %s", getattr(getter, "__name__", getter), path)
        return getter

    def search(self, searcher: Searcher) -> Searcher:
        """Bind *searcher* to the criteria type of its parameter.

        The return annotation (``list[X]``) supplies the element type for
        the results table. Usable as a decorator.

        Raises:
            InvalidCriteriaShape: If the criteria type is not a dataclass or
                *searcher* is a coroutine function.
            DuplicateRegistration: If the criteria type is already bound.
        """
        self._check_not_frozen()
        criteria_type, hints = _parameter_type(searcher, InvalidCriteriaShape, "searcher")
        self._search_registry.register(
            criteria_type,
            searcher,
            element_type=element_type_of(hints.get("return")),
        )
        return searcher

    def _make_handler(self, getter: Getter, link_type: type) -> Callable[[Request], Any]:
        async def handler(request: Request) -> Response:
            link = decode(request.path_params, link_type)
            result = await invoke(getter, link)
            renderer = self.renderer

            target = request.htmx_target
            prefix = self.config.search_prefix
            if target and target.startswith(prefix):
                html = renderer.render_search_field(result, target[len(prefix) :], request)
                return Response(body=html).with_hx_push_url(request.url)

            return Response(body=renderer.render_page(result, request))

        handler.__name__ = getattr(getter, "__name__", "handler")
        return handler

    # -- Compiled state --

    @property
    def renderer(self) -> Renderer:
        """The shared renderer. Freezes the app on first access."""
        self._ensure_frozen()
        assert self._renderer is not None
        return self._renderer

    @property
    def routes(self) -> list[Route]:
        """All registered routes. Freezes the app on first access."""
        self._ensure_frozen()
        return list(self._router)

    @property
    def search_registry(self) -> SearchRegistry:
        return self._search_registry

    # -- Server --

    def run(self, host: str | None = None, port: int | None = None) -> None:
        """Start the development server.

        Compiles the app (freezing routes and searches) and starts serving
        requests. Requires ``pip install autoview[server]``.
        """
        from autoview.server.dev import run_dev_server

        self._ensure_frozen()
        run_dev_server(
            self,
            host or self.config.host,
            port or self.config.port,
            reload=self.config.debug,
        )

    # -- ASGI interface --

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        """ASGI 3.0 entry point."""
        if scope["type"] == "lifespan":
            await self._handle_lifespan(receive, send)
            return

        if scope["type"] != "http":
            return

        self._ensure_frozen()
        await handle_request(scope, send, router=self._router)

    async def _handle_lifespan(self, receive: Receive, send: Send) -> None:
        """Run the ASGI lifespan protocol.

        Freezes the app at startup, before the first HTTP request, so
        configuration errors fail the server start instead of a request.
        """
        while True:
            message = await receive()
            msg_type = message["type"]

            if msg_type == "lifespan.startup":
                try:
                    self._ensure_frozen()
                except Exception as exc:
                    await send({"type": "lifespan.startup.failed", "message": str(exc)})
                    return
                await send({"type": "lifespan.startup.complete"})

            elif msg_type == "lifespan.shutdown":
                await send({"type": "lifespan.shutdown.complete"})
                return

    # -- Internal --

    def _check_not_frozen(self) -> None:
        if self._frozen:
            msg = (
                "Cannot modify the app after it has started serving requests. "
                "Register all getters and searches before calling app.run()."
            )
            raise RuntimeError(msg)

    def _ensure_frozen(self) -> None:
        """Compile the app exactly once (Lock + double-check)."""
        if self._frozen:
            return
        with self._freeze_lock:
            if self._frozen:
                return
            self._freeze()

    def _freeze(self) -> None:
        self._router.freeze()
        self._search_registry.freeze()
        self._renderer = Renderer(self._search_registry, self._templates, self.config)
        self._frozen = True
        logger.debug(
            "app frozen with %d routes and %d searches",
            len(self._router),
            len(self._search_registry),
        )
