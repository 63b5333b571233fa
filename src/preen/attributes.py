"""Immutable facts about a candidate asset path.

Built by :meth:`preen.registry.Registry.attributes_for` from the file
name alone, so they can be computed for references that do not exist
on disk yet.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import PurePath
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from preen.processing import Processor


@dataclass(frozen=True, slots=True)
class AssetAttributes:
    """What the registry knows about a path.

    Attributes:
        path: The path the attributes were computed for.
        extensions: Every extension in the file name, in order
            (``application.js.kida`` yields ``(".js", ".kida")``).
        format_extension: The last extension that maps to a content type
            and is not an engine, or ``None``.
        engine_extensions: Extensions after the format extension that
            select engines, in file-name order.
        content_type: Type from the format extension, else from the
            outermost engine's default, else ``None``.
        processors: Preprocessors, engines (outermost extension first),
            then postprocessors.
    """

    path: PurePath
    extensions: tuple[str, ...]
    format_extension: str | None
    engine_extensions: tuple[str, ...]
    content_type: str | None
    processors: tuple[Processor, ...] = ()

    @property
    def has_format_extension(self) -> bool:
        return self.format_extension is not None

    @property
    def basename_without_extensions(self) -> str:
        name = self.path.name
        return name[: len(name) - len("".join(self.extensions))]


def split_extensions(name: str) -> tuple[str, ...]:
    """Split the extensions off a file name.

    ::

        split_extensions("application.js.kida")  # (".js", ".kida")
        split_extensions("README")               # ()
    """
    parts = name.split(".")
    if parts[0] == "":
        # Dotfile: the leading segment is the name, not an extension
        parts = [f".{parts[1]}", *parts[2:]] if len(parts) > 1 else parts
    return tuple(f".{part}" for part in parts[1:] if part)
