"""Find the App named on the command line."""

import importlib

from autoview.app import App


def resolve_app(target: str) -> App:
    """Import ``"module:attribute"`` and return the App it names.

    The attribute defaults to ``app``, so ``"shop"`` means ``shop:app``.

    Raises:
        ModuleNotFoundError: If the module cannot be imported.
        AttributeError: If the module has no such attribute.
        TypeError: If the attribute is not an autoview App.
    """
    module_name, _, attribute = target.partition(":")
    found = getattr(importlib.import_module(module_name), attribute or "app")
    if not isinstance(found, App):
        msg = f"{target!r} is a {type(found).__name__}, not an autoview App"
        raise TypeError(msg)
    return found
