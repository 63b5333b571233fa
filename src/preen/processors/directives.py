"""Header directives for JavaScript and CSS assets.

Directives live in the comment block at the very top of a file::

    //= require jquery
    //= require_tree ./components
    //= depend_on config/settings.json

    /*
     *= require reset
     *= require_directory .
     */

Supported directives:

- ``require PATH`` — include PATH once, before this file.
- ``require_directory [DIR]`` — require every requirable file directly
  in DIR (default ``.``), in name order.
- ``require_tree [DIR]`` — like ``require_directory`` but recursive;
  every directory visited becomes a dependency.
- ``depend_on PATH`` — invalidate on PATH changes without including it.

Directive lines are removed from the output. Unknown directives and
other comment lines are kept.
"""

from __future__ import annotations

import inspect
import logging
import re
import shlex
from collections.abc import Callable
from pathlib import Path
from typing import TYPE_CHECKING

from preen.errors import DirectiveError

if TYPE_CHECKING:
    from preen.context import Context

logger = logging.getLogger("preen.directives")

# Leading run of //, #, and /* */ comments, with blank lines between them
_HEADER_RE = re.compile(r"\A(?:\s*(?:(?://.*\n?)+|(?s:/\*.*?\*/)|(?:#.*\n?)+))+")

# "//= require foo", " *= require foo", "#= require foo"
_DIRECTIVE_RE = re.compile(r"^\W*=\s*(\w+.*?)(\*/)?$")


def parse_directives(data: str) -> list[tuple[int, str, list[str]]]:
    """Return ``(line_number, name, args)`` for each directive in the header."""
    directives = []
    for lineno, line in enumerate(_split_header(data)[0].splitlines(), start=1):
        parsed = _parse_line(line)
        if parsed is not None:
            directives.append((lineno, *parsed))
    return directives


class DirectiveProcessor:
    """Processing step that executes header directives."""

    __slots__ = ("_handlers",)

    def __init__(self) -> None:
        self._handlers: dict[str, Callable[..., None]] = {
            "require": _require,
            "require_directory": _require_directory,
            "require_tree": _require_tree,
            "depend_on": _depend_on,
        }

    def __call__(self, context: Context, data: str) -> str:
        header, body = _split_header(data)
        kept: list[str] = []

        for lineno, line in enumerate(header.splitlines(keepends=True), start=1):
            parsed = _parse_line(line)
            if parsed is None or parsed[0] not in self._handlers:
                kept.append(line)
                continue

            name, args = parsed
            context.set_line(lineno)
            logger.debug("%s:%d %s %s", context.pathname, lineno, name, " ".join(args))
            handler = self._handlers[name]
            try:
                inspect.signature(handler).bind(context, *args)
            except TypeError as exc:
                msg = f"invalid arguments for '{name}' directive: {args}"
                raise DirectiveError(msg) from exc
            handler(context, *args)
            context.set_line(None)

        return "".join(kept) + body


def _split_header(data: str) -> tuple[str, str]:
    match = _HEADER_RE.match(data)
    header = match.group(0) if match else ""
    return header, data[len(header) :]


def _parse_line(line: str) -> tuple[str, list[str]] | None:
    match = _DIRECTIVE_RE.match(line.rstrip("\r\n"))
    if match is None:
        return None
    try:
        words = shlex.split(match.group(1))
    except ValueError as exc:
        msg = f"malformed directive: {line.strip()}"
        raise DirectiveError(msg) from exc
    return words[0], words[1:]


# ----------------------------------------------------------------------
# Handlers
# ----------------------------------------------------------------------


def _require(context: Context, path: str) -> None:
    context.require_asset(path)


def _depend_on(context: Context, path: str) -> None:
    context.depend_on(path)


def _require_directory(context: Context, path: str = ".") -> None:
    root = _directory_argument(context, path, "require_directory")
    context.depend_on(root)
    for entry in sorted(root.iterdir()):
        if entry == context.pathname:
            continue
        if context.asset_requirable(entry):
            context.require_asset(entry)


def _require_tree(context: Context, path: str = ".") -> None:
    root = _directory_argument(context, path, "require_tree")
    context.depend_on(root)
    for entry in sorted(root.rglob("*")):
        if entry == context.pathname:
            continue
        if entry.is_dir():
            context.depend_on(entry)
        elif context.asset_requirable(entry):
            context.require_asset(entry)


def _directory_argument(context: Context, path: str, name: str) -> Path:
    if not path.startswith("."):
        msg = f"{name} argument must be a relative path"
        raise DirectiveError(msg)
    root = (context.pathname.parent / path).resolve()
    if not root.is_dir():
        msg = f"{name} argument must be a directory"
        raise DirectiveError(msg)
    return root
