"""``autoview routes`` — list derived routes.

Resolves an import string to an autoview App and prints every route with
the getter that serves it, plus the registered searches.
"""

import argparse
import sys

from autoview.cli._resolve import resolve_app


def run_routes(args: argparse.Namespace) -> None:
    """Print a table of PATH and GETTER, then the search bindings."""
    try:
        app = resolve_app(args.app)
    except (ModuleNotFoundError, AttributeError, TypeError) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        raise SystemExit(1) from exc

    routes = app.routes
    if not routes:
        print("No routes registered.")
    else:
        rows = [(route.path, route.name or "") for route in routes]
        max_path = max(max(len(path) for path, _ in rows), 4)  # "PATH" header
        fmt = f"{{:<{max_path}}}  {{}}"
        print(fmt.format("PATH", "GETTER"))
        print("-" * min(max_path + 2 + max(len(name) for _, name in rows), 80))
        for path, name in rows:
            print(fmt.format(path, name))

    registry = app.search_registry
    if len(registry):
        print()
        for criteria_type in registry:
            registration = registry.lookup(criteria_type)
            print(f"search {criteria_type.__name__} -> {registration.search.__name__}")
