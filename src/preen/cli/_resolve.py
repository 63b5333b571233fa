"""``preen resolve`` — print the file a reference resolves to.

Relative references are anchored at the current working directory.
Exits with code 1 if nothing matches.
"""

import argparse
from pathlib import Path

from preen.cli._setup import build_registry, fail
from preen.errors import PreenError
from preen.resolver import PathResolver


def run_resolve(args: argparse.Namespace) -> None:
    """Resolve ``args.reference``, optionally restricted to a content type."""
    registry = build_registry(args)
    resolver = PathResolver(registry, Path.cwd(), None)
    try:
        path = resolver.resolve(args.reference, args.content_type)
    except PreenError as exc:
        fail(exc)
    print(path)
