"""Preen exception hierarchy.

Shared across the registry, resolver, context, and processors so every
module raises and catches the same types.

Failures that cross a file-processing boundary are annotated in place
with the file (and line, when known) they were raised from. The
original exception type is preserved; the location travels as a PEP 678
note, and on ``PreenError`` instances also as ``.location``.
"""

from dataclasses import dataclass

_NOTE_PREFIX = "  (in "


class PreenError(Exception):
    """Base for all preen-specific errors."""

    location: "SourceLocation | None" = None


class ConfigurationError(PreenError):
    """Raised when pipeline configuration is invalid."""


class NotFoundError(PreenError):
    """No candidate file matched a reference."""


class NotRequirableError(PreenError):
    """The target exists but cannot be required into the current asset."""


class ContentTypeMismatchError(NotRequirableError):
    """The target's content type conflicts with the requested one.

    Raised before any filesystem search when the reference's own
    extension already decides the type.
    """


class EncodingError(PreenError):
    """A source file is not valid text in the configured encoding."""


class DirectiveError(PreenError):
    """A header directive has an invalid argument."""


class MarkdownNotInstalledError(PreenError):
    """Raised when patitas is not installed."""


@dataclass(frozen=True, slots=True)
class SourceLocation:
    """File and optional line a failure is attributed to."""

    path: str
    line: int | None = None

    def __str__(self) -> str:
        if self.line is None:
            return self.path
        return f"{self.path}:{self.line}"


def location_of(exc: BaseException) -> str | None:
    """Return the annotated location of *exc*, or ``None``."""
    for note in getattr(exc, "__notes__", ()):
        if note.startswith(_NOTE_PREFIX) and note.endswith(")"):
            return note[len(_NOTE_PREFIX) : -1]
    return None


def annotate_exception(exc: BaseException, location: SourceLocation) -> bool:
    """Attach *location* to *exc* unless an inner boundary already did.

    Returns ``True`` if the annotation was added.
    """
    if location_of(exc) is not None:
        return False
    exc.add_note(f"{_NOTE_PREFIX}{location})")
    if isinstance(exc, PreenError):
        exc.location = location
    return True
