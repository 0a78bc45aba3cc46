"""Autoview CLI — dev server and route listing.

Entry point registered as ``autoview`` in ``pyproject.toml``::

    [project.scripts]
    autoview = "autoview.cli:main"
"""

import argparse
import sys


def main(argv: list[str] | None = None) -> None:
    """CLI entry point for the ``autoview`` command."""
    parser = argparse.ArgumentParser(
        prog="autoview",
        description="Autoview — browsable HTML views generated from plain data records.",
    )
    subparsers = parser.add_subparsers(dest="command")

    # -- autoview run -----------------------------------------------------
    run_parser = subparsers.add_parser("run", help="Start the dev server")
    run_parser.add_argument("app", help="Import string (e.g. shop:app)")
    run_parser.add_argument("--host", default=None, help="Bind host address")
    run_parser.add_argument("--port", type=int, default=None, help="Bind port number")
    run_parser.add_argument("--reload", action="store_true", help="Reload on file changes")

    # -- autoview routes --------------------------------------------------
    routes_parser = subparsers.add_parser("routes", help="List derived routes")
    routes_parser.add_argument("app", help="Import string (e.g. shop:app)")

    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        sys.exit(0)

    if args.command == "run":
        from autoview.cli._run import run_server

        run_server(args)
    elif args.command == "routes":
        from autoview.cli._routes import run_routes

        run_routes(args)
