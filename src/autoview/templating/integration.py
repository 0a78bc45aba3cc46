"""Template store — the named kida templates autoview renders into.

Four templates make up the page: ``body.html`` (page chrome), ``table.html``
(sequence views), ``input.html`` (one search input) and ``search.html``
(search widget). The built-ins ship with the package; a ``template_dir`` in
``AppConfig`` can shadow any of them by name.

The kida Environment is built lazily on first render. Concurrent first
renders are serialized by a lock with a double check, so exactly one
Environment is ever created per store.
"""

import logging
import threading
from typing import Any

from kida import ChoiceLoader, Environment, FileSystemLoader, PackageLoader
from kida.template import Markup

from autoview.config import AppConfig
from autoview.errors import TemplateFailure

logger = logging.getLogger("autoview.templating")


def create_environment(config: AppConfig) -> Environment:
    """Create a kida Environment from app configuration."""
    loaders = []
    if config.template_dir is not None:
        loaders.append(FileSystemLoader(str(config.template_dir)))
    loaders.append(PackageLoader("autoview.templating", "templates"))

    return Environment(
        loader=ChoiceLoader(loaders),
        autoescape=config.autoescape,
        auto_reload=config.debug,
        trim_blocks=True,
        lstrip_blocks=True,
    )


class TemplateStore:
    """Lazily materialized, thread-safe access to named templates."""

    __slots__ = ("_config", "_env", "_lock")

    def __init__(self, config: AppConfig, env: Environment | None = None) -> None:
        self._config = config
        self._env: Environment | None = env
        self._lock = threading.Lock()

    @property
    def environment(self) -> Environment:
        env = self._env
        if env is not None:
            return env
        with self._lock:
            if self._env is None:
                logger.debug("creating template environment")
                self._env = create_environment(self._config)
            return self._env

    def render(self, name: str, **context: Any) -> Markup:
        """Render template *name* with *context*.

        Raises:
            TemplateFailure: If the template cannot be loaded or rendered.
        """
        try:
            template = self.environment.get_template(name)
            html = template.render(context)
        except Exception as exc:
            detail = exc.format_compact() if hasattr(exc, "format_compact") else str(exc)
            msg = f"failed to render template {name!r}: {detail}"
            raise TemplateFailure(msg) from exc
        return Markup(html)
