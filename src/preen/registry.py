"""Search-path registry.

Owns the configured search roots, the extension → content-type table,
and the engine / pre- / postprocessor registrations. Enumerates
candidate files for a reference and computes :class:`AssetAttributes`.

The registry is mutated only during setup. Once compilations start it
is read-only and may be queried from several threads at once.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Iterator
from pathlib import Path, PurePath, PurePosixPath
from typing import TYPE_CHECKING

from preen.attributes import AssetAttributes, split_extensions
from preen.errors import ConfigurationError, NotFoundError
from preen.paths import is_relative_reference, read_unicode

if TYPE_CHECKING:
    from preen.config import PipelineConfig
    from preen.processing import Processor

logger = logging.getLogger("preen.registry")

DEFAULT_MIME_TYPES: dict[str, str] = {
    ".css": "text/css",
    ".html": "text/html",
    ".js": "application/javascript",
    ".json": "application/json",
    ".svg": "image/svg+xml",
    ".txt": "text/plain",
    ".xml": "application/xml",
}


class Registry:
    """Search roots plus extension and processor registrations.

    Usage::

        registry = Registry(["app/javascripts", "vendor/javascripts"])
        registry.register_engine(".kida", KidaProcessor())

        path = registry.resolve("application.js")
        registry.content_type_of(path)  # "application/javascript"
    """

    __slots__ = (
        "_encoding",
        "_engine_mime_types",
        "_engines",
        "_mime_types",
        "_paths",
        "_postprocessors",
        "_preprocessors",
    )

    def __init__(self, paths: tuple[str | Path, ...] | list[str | Path] = (), *, encoding: str = "utf-8") -> None:
        self._paths: list[Path] = []
        self._encoding = encoding
        self._mime_types: dict[str, str] = dict(DEFAULT_MIME_TYPES)
        self._engines: dict[str, Processor] = {}
        self._engine_mime_types: dict[str, str] = {}
        self._preprocessors: dict[str, list[Processor]] = {}
        self._postprocessors: dict[str, list[Processor]] = {}
        for path in paths:
            self.append_path(path)

    @classmethod
    def from_config(cls, config: PipelineConfig) -> Registry:
        """Build a registry with the default engines and preprocessors."""
        from preen.processors.directives import DirectiveProcessor
        from preen.processors.template import KidaProcessor

        registry = cls(config.paths, encoding=config.encoding)
        registry.register_engine(
            ".kida",
            KidaProcessor(
                trim_blocks=config.kida_trim_blocks,
                lstrip_blocks=config.kida_lstrip_blocks,
            ),
        )

        if config.markdown:
            from preen.processors.markdown import MarkdownProcessor

            markdown = MarkdownProcessor(plugins=list(config.markdown_plugins) or None)
            registry.register_engine(".md", markdown)
            registry.register_engine(".markdown", markdown)

        if config.directives:
            directives = DirectiveProcessor()
            registry.register_preprocessor("application/javascript", directives)
            registry.register_preprocessor("text/css", directives)

        return registry

    # ------------------------------------------------------------------
    # Registration
    # ------------------------------------------------------------------

    @property
    def paths(self) -> tuple[str, ...]:
        """Search roots in priority order, as absolute path strings."""
        return tuple(str(p) for p in self._paths)

    @property
    def encoding(self) -> str:
        return self._encoding

    def append_path(self, path: str | Path) -> None:
        self._paths.append(self._check_root(path))

    def prepend_path(self, path: str | Path) -> None:
        self._paths.insert(0, self._check_root(path))

    def register_mime_type(self, mime_type: str, extension: str) -> None:
        self._mime_types[_normalize_extension(extension)] = mime_type

    def register_engine(
        self,
        extension: str,
        processor: Processor,
        *,
        mime_type: str | None = None,
    ) -> None:
        """Select *processor* for files ending in *extension*.

        *mime_type* overrides the processor's ``default_mime_type``: the
        content type of files that carry no format extension of their own.
        """
        extension = _normalize_extension(extension)
        self._engines[extension] = processor
        mime_type = mime_type or getattr(processor, "default_mime_type", None)
        if mime_type:
            self._engine_mime_types[extension] = mime_type
        else:
            self._engine_mime_types.pop(extension, None)

    def register_preprocessor(self, mime_type: str, processor: Processor) -> None:
        self._preprocessors.setdefault(mime_type, []).append(processor)

    def register_postprocessor(self, mime_type: str, processor: Processor) -> None:
        self._postprocessors.setdefault(mime_type, []).append(processor)

    def mime_type_for(self, extension: str) -> str | None:
        return self._mime_types.get(_normalize_extension(extension))

    def engine_for(self, extension: str) -> Processor | None:
        return self._engines.get(_normalize_extension(extension))

    # ------------------------------------------------------------------
    # Attributes
    # ------------------------------------------------------------------

    def attributes_for(self, path: str | PurePath) -> AssetAttributes:
        """Compute the attributes implied by *path*'s file name."""
        pure = PurePath(path)
        extensions = split_extensions(pure.name)

        format_extension = None
        format_index = -1
        for index in range(len(extensions) - 1, -1, -1):
            ext = extensions[index]
            if ext in self._mime_types and ext not in self._engines:
                format_extension = ext
                format_index = index
                break

        engine_extensions = tuple(ext for ext in extensions[format_index + 1 :] if ext in self._engines)
        engines = [self._engines[ext] for ext in engine_extensions]

        content_type = self._mime_types.get(format_extension) if format_extension else None
        if content_type is None:
            # Outermost engine that declares a default wins
            content_type = next(
                (self._engine_mime_types[ext] for ext in reversed(engine_extensions) if ext in self._engine_mime_types),
                None,
            )

        processors: list[Processor] = []
        if content_type is not None:
            processors.extend(self._preprocessors.get(content_type, ()))
        # Outermost extension runs first: foo.js.kida renders kida first
        processors.extend(reversed(engines))
        if content_type is not None:
            processors.extend(self._postprocessors.get(content_type, ()))

        return AssetAttributes(
            path=pure,
            extensions=extensions,
            format_extension=format_extension,
            engine_extensions=engine_extensions,
            content_type=content_type,
            processors=tuple(processors),
        )

    def content_type_of(self, path: str | PurePath) -> str | None:
        return self.attributes_for(path).content_type

    # ------------------------------------------------------------------
    # Search
    # ------------------------------------------------------------------

    def resolve_search(self, reference: str | PurePath, base_path: str | Path | None = None) -> Iterator[Path]:
        """Lazily yield candidate files for *reference*.

        Relative references (``./bar.js``) are searched in *base_path*
        only. Logical references are searched in each root in order.
        ``foo.js`` matches ``foo.js``, ``foo.js.kida`` and
        ``foo/index.js``.
        """
        ref = PurePosixPath(reference)
        if ref.is_absolute():
            candidate = Path(ref)
            if candidate.is_file():
                yield candidate
            return

        if is_relative_reference(str(reference)):
            if base_path is None:
                return
            roots = [Path(base_path)]
        else:
            roots = self._paths

        attributes = self.attributes_for(ref)
        patterns = [ref]
        if attributes.basename_without_extensions != "index":
            index_name = "index" + "".join(attributes.extensions)
            patterns.append(ref.parent / attributes.basename_without_extensions / index_name)

        for root in roots:
            for pattern in patterns:
                directory = (root / pattern.parent).resolve()
                yield from self._match(directory, pattern.name)

    def resolve(self, reference: str | PurePath, base_path: str | Path | None = None) -> Path:
        """Return the first candidate for *reference*.

        Raises ``NotFoundError`` when there is none.
        """
        for candidate in self.resolve_search(reference, base_path):
            logger.debug("Resolved %s -> %s", reference, candidate)
            return candidate
        msg = f"couldn't find file '{reference}'"
        raise NotFoundError(msg)

    def logical_path_for(self, path: str | Path) -> str:
        """Return *path* relative to the search root that contains it.

        Falls back to the file name for paths outside every root.
        """
        pure = Path(path)
        for root in self._paths:
            if pure.is_relative_to(root):
                return pure.relative_to(root).as_posix()
        return pure.name

    def read_unicode(self, path: str | Path) -> str:
        return read_unicode(path, self._encoding)

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _match(self, directory: Path, name: str) -> Iterator[Path]:
        """Yield files in *directory* named *name* plus registered extensions."""
        if not directory.is_dir():
            return
        pattern = self._name_pattern(name)
        entries = sorted(
            (entry for entry in directory.iterdir() if pattern.match(entry.name)),
            key=lambda entry: (entry.name != name, entry.name),
        )
        for entry in entries:
            if entry.is_file():
                yield entry

    def _name_pattern(self, name: str) -> re.Pattern[str]:
        extensions = sorted({*self._mime_types, *self._engines}, key=len, reverse=True)
        alternatives = "|".join(re.escape(ext) for ext in extensions)
        return re.compile(rf"^{re.escape(name)}(?:{alternatives})*$")

    def _check_root(self, path: str | Path) -> Path:
        root = Path(path).resolve()
        if not root.is_dir():
            msg = f"Search path is not a directory: {root}"
            raise ConfigurationError(msg)
        return root


def _normalize_extension(extension: str) -> str:
    return extension if extension.startswith(".") else f".{extension}"
