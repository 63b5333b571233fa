"""Preen CLI — compile and resolve assets from the command line.

Entry point registered as ``preen`` in ``pyproject.toml``::

    [project.scripts]
    preen = "preen.cli:main"
"""

import argparse
import sys


def main(argv: list[str] | None = None) -> None:
    """CLI entry point for the ``preen`` command."""
    parser = argparse.ArgumentParser(
        prog="preen",
        description="Preen — asset resolution and dependency tracking.",
    )
    subparsers = parser.add_subparsers(dest="command")

    # -- preen compile ----------------------------------------------------
    compile_parser = subparsers.add_parser("compile", help="Compile an asset")
    compile_parser.add_argument("logical_path", help="Asset to compile (e.g. application.js)")
    _add_common_arguments(compile_parser)
    compile_parser.add_argument(
        "--deps",
        action="store_true",
        help="Print the dependency set instead of the output",
    )
    compile_parser.add_argument(
        "--required",
        action="store_true",
        help="Print the required paths instead of the output",
    )

    # -- preen resolve ----------------------------------------------------
    resolve_parser = subparsers.add_parser("resolve", help="Resolve a reference to a file")
    resolve_parser.add_argument("reference", help="Reference to resolve (e.g. foo.js)")
    _add_common_arguments(resolve_parser)
    resolve_parser.add_argument(
        "--content-type",
        default=None,
        help="Only accept files of this content type",
    )

    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        sys.exit(0)

    if args.command == "compile":
        from preen.cli._compile import run_compile

        run_compile(args)
    elif args.command == "resolve":
        from preen.cli._resolve import run_resolve

        run_resolve(args)


def _add_common_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "-I",
        "--path",
        dest="paths",
        action="append",
        default=[],
        help="Search root (repeatable, searched in order)",
    )
    parser.add_argument(
        "--markdown",
        action="store_true",
        help="Enable .md / .markdown assets (requires patitas)",
    )
    parser.add_argument(
        "--no-directives",
        action="store_true",
        help="Do not process //= require headers",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Log compilation details to stderr",
    )
