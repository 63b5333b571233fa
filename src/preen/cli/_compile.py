"""``preen compile`` — compile one asset and print the result.

Prints the processed source by default, or the dependency set / required
paths with ``--deps`` / ``--required``. Exits with code 1 on failure.
"""

import argparse

from preen.cli._setup import build_registry, fail
from preen.compiler import Compiler


def run_compile(args: argparse.Namespace) -> None:
    """Compile ``args.logical_path`` against the configured search roots.

    Processing-step failures are reported like preen's own errors: the
    annotated file and line are printed beneath the message.
    """
    registry = build_registry(args)
    try:
        asset = Compiler(registry).compile(args.logical_path)
    except Exception as exc:
        fail(exc)

    if args.deps:
        for path in sorted(asset.dependency_paths):
            print(path)
    if args.required:
        for path in asset.required_paths:
            print(path)
    if not (args.deps or args.required):
        print(asset.source, end="")
