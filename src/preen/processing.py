"""Processing chain runner.

A processor is any callable matching::

    def my_step(context: Context, data: str) -> str: ...

No base class required. Processors may optionally expose a
``default_mime_type`` attribute, used by the registry for engine-only
file names such as ``readme.md``.

The runner threads content through the steps in order, inside the
execution context of the file being transformed. A step failure is
annotated with that file's path and current line, then re-raised with
its original type.
"""

from __future__ import annotations

import logging
import os
import time
from collections.abc import Sequence
from dataclasses import dataclass
from pathlib import PurePath
from typing import TYPE_CHECKING, Protocol

from preen.errors import annotate_exception

if TYPE_CHECKING:
    from preen.context import Context
    from preen.registry import Registry

logger = logging.getLogger("preen.processing")


class Processor(Protocol):
    """Protocol for processing steps.

    Accepts both functions and callable objects::

        # Function step
        def banner(context: Context, data: str) -> str:
            return f"/* {context.logical_path} */\\n{data}"

        # Class step
        class Minifier:
            def __call__(self, context: Context, data: str) -> str:
                ...
    """

    def __call__(self, context: Context, data: str, /) -> str: ...


@dataclass(frozen=True, slots=True)
class Evaluation:
    """Result of evaluating one file in a nested context.

    ``context`` holds the nested file's own bookkeeping; callers report
    it to that file's cache entry or drop it.
    """

    content: str
    context: Context


class ProcessingChainRunner:
    """Runs processing steps over file content."""

    __slots__ = ("_registry",)

    def __init__(self, registry: Registry) -> None:
        self._registry = registry

    def run(
        self,
        context: Context,
        *,
        data: str | None = None,
        processors: Sequence[Processor] | None = None,
    ) -> str:
        """Process the file *context* was created for.

        Args:
            context: Execution context of the file being transformed.
            data: Initial content. Read from the file when ``None``.
            processors: Explicit steps. Defaults to the steps the
                registry derives from the file name.

        Returns:
            The output of the last step (or the initial content when
            there are no steps).
        """
        start = time.perf_counter()
        pathname = context.pathname
        if processors is None:
            processors = self._registry.attributes_for(pathname).processors

        result = data if data is not None else self._registry.read_unicode(pathname)

        for processor in processors:
            try:
                result = processor(context, result)
            except Exception as exc:
                annotate_exception(exc, context.location)
                raise

        elapsed_ms = int((time.perf_counter() - start) * 1000)
        logger.info(
            "Compiled %s  (%dms)  (pid %d)",
            self._registry.logical_path_for(pathname),
            elapsed_ms,
            os.getpid(),
        )
        return result

    def evaluate(
        self,
        parent: Context,
        reference: str | PurePath,
        *,
        data: str | None = None,
        processors: Sequence[Processor] | None = None,
    ) -> Evaluation:
        """Resolve *reference* from *parent* and process it in a child context.

        The parent's dependency set is not touched.
        """
        pathname = parent.resolve(reference)
        child = parent.nested(pathname)
        content = self.run(child, data=data, processors=processors)
        return Evaluation(content, child)
