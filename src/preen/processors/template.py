"""Kida template engine for ``.kida`` assets.

Renders the file content as a kida template with the execution
context's helpers available as globals::

    {{ require_asset("jquery.js") }}
    var settings = {{ evaluate("settings.json") }};
    // built from {{ logical_path }}

``require_asset`` and ``depend_on`` render as empty strings; they are
called for their effect on the context's bookkeeping. ``evaluate``
also records the inlined file and its dependencies, so editing it
invalidates the asset.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import TYPE_CHECKING, Any

from kida import Environment, TemplateError
from kida.lexer import LexerError

from preen.errors import PreenError, location_of

if TYPE_CHECKING:
    from preen.context import Context


class KidaProcessor:
    """Processing step that renders content through kida.

    Args:
        globals_: Extra template globals, available in every asset.
        filters: Extra template filters.
        trim_blocks: Forwarded to ``kida.Environment``.
        lstrip_blocks: Forwarded to ``kida.Environment``.
    """

    __slots__ = ("_env",)

    def __init__(
        self,
        *,
        globals_: dict[str, Any] | None = None,
        filters: dict[str, Callable[..., Any]] | None = None,
        trim_blocks: bool = False,
        lstrip_blocks: bool = False,
    ) -> None:
        # Assets are JavaScript, CSS, or HTML source, never HTML-escaped
        self._env = Environment(
            autoescape=False,
            trim_blocks=trim_blocks,
            lstrip_blocks=lstrip_blocks,
        )
        if filters:
            self._env.update_filters(filters)
        for name, value in (globals_ or {}).items():
            self._env.add_global(name, value)

    @property
    def environment(self) -> Environment:
        return self._env

    def __call__(self, context: Context, data: str) -> str:
        try:
            template = self._env.from_string(data)
            return template.render(_template_helpers(context))
        except (LexerError, TemplateError) as exc:
            # Syntax and runtime errors carry the failing line
            lineno = getattr(exc, "lineno", None)
            if isinstance(lineno, int):
                context.set_line(lineno)
            cause = exc.__cause__
            # Render wraps failures raised by the context helpers
            if isinstance(cause, PreenError) or (cause is not None and location_of(cause) is not None):
                raise cause
            raise


def _template_helpers(context: Context) -> dict[str, Any]:
    """Bind the context operations a template may call."""

    def require_asset(reference: str) -> str:
        context.require_asset(reference)
        return ""

    def depend_on(reference: str) -> str:
        context.depend_on(reference)
        return ""

    def resolve(reference: str, content_type: str | None = None) -> str:
        return str(context.resolve(reference, content_type=content_type))

    def evaluate(reference: str, data: str | None = None) -> str:
        # The inlined file and everything it touched invalidate this one
        evaluation = context.runner.evaluate(context, reference, data=data)
        for path in sorted(evaluation.context.dependency_paths):
            context.depend_on(path)
        return evaluation.content

    return {
        "context": context,
        "logical_path": context.logical_path,
        "content_type": context.content_type,
        "root_path": context.root_path,
        "resolve": resolve,
        "depend_on": depend_on,
        "require_asset": require_asset,
        "asset_requirable": context.asset_requirable,
        "evaluate": evaluate,
    }
