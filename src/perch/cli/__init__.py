"""Perch CLI: resolve frontend URLs and classify mime types from the shell.

Entry point registered as ``perch`` in ``pyproject.toml``::

    [project.scripts]
    perch = "perch.cli:main"
"""

import argparse
import sys


def main(argv: list[str] | None = None) -> None:
    """CLI entry point for the ``perch`` command."""
    parser = argparse.ArgumentParser(
        prog="perch",
        description="Perch: resolve developer-tools frontend resources.",
    )
    subparsers = parser.add_subparsers(dest="command")

    # -- perch resolve ----------------------------------------------------
    resolve_parser = subparsers.add_parser("resolve", help="Resolve a frontend URL to bytes")
    resolve_parser.add_argument("url", help="Request URL (e.g. devtools://devtools/bundled/inspector.html)")
    resolve_parser.add_argument(
        "--bundle",
        default=None,
        help="Directory loaded as the bundled resource set",
    )
    resolve_parser.add_argument(
        "--custom-devtools-frontend",
        dest="custom_frontend",
        default=None,
        help="Override URL (file:///path/to/frontend)",
    )
    resolve_parser.add_argument(
        "--bundled-path",
        default="bundled",
        help="Mount segment handled by the router",
    )
    resolve_parser.add_argument(
        "-o",
        "--output",
        default=None,
        help="Write the body to this file instead of stdout",
    )
    resolve_parser.add_argument(
        "--log-level",
        default="warning",
        choices=("debug", "info", "warning", "error"),
        help="Diagnostic verbosity",
    )

    # -- perch mime -------------------------------------------------------
    mime_parser = subparsers.add_parser("mime", help="Print the mime type for file names or URLs")
    mime_parser.add_argument("names", nargs="+", help="File names or URLs")

    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        sys.exit(0)

    if args.command == "resolve":
        from perch.cli._resolve import run_resolve

        run_resolve(args)
    elif args.command == "mime":
        from perch.mime import mime_type_for_url

        for name in args.names:
            print(mime_type_for_url(name))
