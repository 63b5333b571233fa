"""Markdown engine for ``.md`` and ``.markdown`` assets, via patitas.

``readme.md`` compiles to ``text/html``; ``page.html.md`` does too,
through its format extension.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from preen.errors import MarkdownNotInstalledError

if TYPE_CHECKING:
    from preen.context import Context


class MarkdownProcessor:
    """Processing step that renders Markdown to HTML.

    patitas is an optional extra; constructing the processor without it
    raises ``MarkdownNotInstalledError``.

    Args:
        plugins: Patitas plugins to enable. ``None`` enables all of them.
        highlight: Highlight fenced code blocks.
    """

    __slots__ = ("_render",)

    default_mime_type = "text/html"

    def __init__(self, *, plugins: list[str] | None = None, highlight: bool = False) -> None:
        try:
            import patitas
        except ImportError as exc:
            msg = "Markdown assets need patitas: pip install preen[markdown]"
            raise MarkdownNotInstalledError(msg) from exc

        self._render = patitas.Markdown(plugins=plugins or ["all"], highlight=highlight)

    def __call__(self, context: Context, data: str) -> str:
        # Blank sources stay blank instead of becoming an empty paragraph
        if not data.strip():
            return ""
        return self._render(data)
