"""Reference → concrete path resolution.

A reference is absolute (returned as-is), relative (``./bar.js``,
resolved next to the file being compiled), or logical (``foo.js``,
searched across the registry's roots). An optional content-type
constraint restricts which candidates are accepted.
"""

from __future__ import annotations

import logging
from enum import Enum
from pathlib import Path, PurePath
from typing import TYPE_CHECKING

from preen.errors import ContentTypeMismatchError, NotFoundError

if TYPE_CHECKING:
    from preen.registry import Registry

logger = logging.getLogger("preen.resolver")


class ContentTypeConstraint(Enum):
    """Symbolic content-type requests."""

    SELF = "self"
    """Same type as the asset currently being compiled."""


# A concrete MIME type, a symbolic constraint, or no constraint
type ContentTypeRequest = str | ContentTypeConstraint | None


class PathResolver:
    """Resolves references on behalf of one file.

    Args:
        registry: The search-path registry.
        base_path: Directory relative references are anchored at,
            normally the directory of the file being compiled.
        content_type: Content type of that file, used for
            ``ContentTypeConstraint.SELF``.
    """

    __slots__ = ("_base_path", "_content_type", "_registry")

    def __init__(self, registry: Registry, base_path: Path, content_type: str | None) -> None:
        self._registry = registry
        self._base_path = base_path
        self._content_type = content_type

    def resolve(self, reference: str | PurePath, content_type: ContentTypeRequest = None) -> Path:
        """Resolve *reference* to a concrete path.

        Raises:
            ContentTypeMismatchError: *reference*'s own format extension
                maps to a type other than the requested one. Raised
                before any search.
            NotFoundError: No candidate matched.
        """
        path = PurePath(reference)
        if path.is_absolute():
            return Path(path)

        if content_type is ContentTypeConstraint.SELF:
            content_type = self._content_type

        if content_type is None:
            return self._registry.resolve(reference, base_path=self._base_path)

        attributes = self._registry.attributes_for(path)
        if attributes.has_format_extension and attributes.content_type != content_type:
            msg = f"{reference} is '{attributes.content_type}', not '{content_type}'"
            raise ContentTypeMismatchError(msg)

        for candidate in self._registry.resolve_search(reference, base_path=self._base_path):
            if self._registry.content_type_of(candidate) == content_type:
                logger.debug("Resolved %s (%s) -> %s", reference, content_type, candidate)
                return candidate

        msg = f"couldn't find file '{reference}'"
        raise NotFoundError(msg)
