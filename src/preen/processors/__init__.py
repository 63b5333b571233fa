"""Built-in processing steps.

- :class:`KidaProcessor` — ``.kida`` template engine.
- :class:`MarkdownProcessor` — ``.md`` / ``.markdown`` engine (requires patitas).
- :class:`DirectiveProcessor` — ``//= require`` headers for JavaScript and CSS.
"""

from preen.processors.directives import DirectiveProcessor, parse_directives
from preen.processors.markdown import MarkdownProcessor
from preen.processors.template import KidaProcessor

__all__ = [
    "DirectiveProcessor",
    "KidaProcessor",
    "MarkdownProcessor",
    "parse_directives",
]
