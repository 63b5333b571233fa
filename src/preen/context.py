"""Execution context handed to every processing step.

One ``Context`` exists per file being compiled. It owns that file's
dependency bookkeeping and current-line marker, and delegates
resolution to :class:`PathResolver` and nested evaluation to
:class:`ProcessingChainRunner`.

Nested evaluations get their own child context, built by explicit
parameter passing. Nothing is shared between the contexts of two
top-level compilations, so they can run concurrently without locks.
"""

from __future__ import annotations

from collections.abc import Sequence
from pathlib import Path, PurePath
from typing import TYPE_CHECKING

from preen.dependencies import DependencyRecorder
from preen.errors import ContentTypeMismatchError, NotFoundError, NotRequirableError, SourceLocation
from preen.paths import strip_extensions
from preen.processing import ProcessingChainRunner
from preen.resolver import ContentTypeConstraint, ContentTypeRequest, PathResolver

if TYPE_CHECKING:
    from preen.processing import Processor
    from preen.registry import Registry


class Context:
    """The facade processing steps operate against.

    Usage inside a step::

        def step(context: Context, data: str) -> str:
            context.require_asset("jquery.js")
            context.depend_on("config/settings.json")
            return data + context.evaluate("footer.js")

    Args:
        registry: The search-path registry.
        logical_path: The reference the file was requested by
            (``"application.js"``).
        pathname: Absolute path of the file.
        runner: Runner used by :meth:`evaluate`. A new one is created
            when omitted.
        parent: The context that spawned this one via :meth:`evaluate`.
    """

    __slots__ = (
        "_content_type",
        "_line",
        "_logical_path",
        "_parent",
        "_pathname",
        "_recorder",
        "_registry",
        "_resolver",
        "_runner",
    )

    def __init__(
        self,
        registry: Registry,
        logical_path: str,
        pathname: str | Path,
        *,
        runner: ProcessingChainRunner | None = None,
        parent: Context | None = None,
    ) -> None:
        self._registry = registry
        self._logical_path = logical_path
        self._pathname = Path(pathname)
        self._parent = parent
        self._runner = runner or ProcessingChainRunner(registry)
        self._content_type = registry.content_type_of(self._pathname)
        self._resolver = PathResolver(registry, self._pathname.parent, self._content_type)
        self._recorder = DependencyRecorder(str(self._pathname))
        self._line: int | None = None

    def __repr__(self) -> str:
        return f"<Context {self._logical_path!r} {str(self._pathname)!r}>"

    # ------------------------------------------------------------------
    # Accessors
    # ------------------------------------------------------------------

    @property
    def registry(self) -> Registry:
        return self._registry

    @property
    def pathname(self) -> Path:
        return self._pathname

    @property
    def parent(self) -> Context | None:
        return self._parent

    @property
    def logical_path(self) -> str:
        """Logical path without any file extensions.

        ``"application.js.kida"`` becomes ``"application"``.
        """
        return strip_extensions(self._logical_path)

    @property
    def content_type(self) -> str | None:
        """Content type of the file, e.g. ``"application/javascript"``."""
        return self._content_type

    @property
    def root_path(self) -> str | None:
        """The search root that contains the file.

        With ``app/javascripts`` and ``app/stylesheets`` on the path and
        the file at ``app/javascripts/foo/bar.js``, this is
        ``app/javascripts``.
        """
        for root in self._registry.paths:
            if self._pathname.is_relative_to(root):
                return root
        return None

    @property
    def dependency_paths(self) -> frozenset[str]:
        return self._recorder.dependency_paths

    @property
    def required_paths(self) -> tuple[str, ...]:
        return self._recorder.required_paths

    @property
    def recorder(self) -> DependencyRecorder:
        return self._recorder

    @property
    def runner(self) -> ProcessingChainRunner:
        return self._runner

    # ------------------------------------------------------------------
    # Line tracking
    # ------------------------------------------------------------------

    @property
    def line(self) -> int | None:
        """Best-effort source line the current step is processing."""
        return self._line

    def set_line(self, line: int | None) -> None:
        """Record the line being processed; ``None`` clears it."""
        self._line = line

    @property
    def location(self) -> SourceLocation:
        return SourceLocation(str(self._pathname), self._line)

    # ------------------------------------------------------------------
    # Operations
    # ------------------------------------------------------------------

    def resolve(self, reference: str | PurePath, *, content_type: ContentTypeRequest = None) -> Path:
        """Find the concrete path for *reference*.

        ::

            context.resolve("foo.js")   # /path/to/app/javascripts/foo.js
            context.resolve("./bar.js") # next to the current file

        ``content_type`` restricts the search to one type;
        ``ContentTypeConstraint.SELF`` means this file's type.
        """
        return self._resolver.resolve(reference, content_type)

    def depend_on(self, reference: str | PurePath) -> Path:
        """Declare a dependency on a file without including it.

        Any change to the file invalidates the cached output of this
        one.
        """
        pathname = self.resolve(reference)
        self._recorder.add_dependency(str(pathname))
        return pathname

    def require_asset(self, reference: str | PurePath) -> Path:
        """Require *reference* to be included once, before this file.

        Returns the resolved path whether or not it was already required.

        Raises:
            NotFoundError: No candidate of this file's type exists.
            ContentTypeMismatchError: The target is of another type.
            NotRequirableError: The target is not a regular file.
        """
        pathname = self.resolve(reference, content_type=ContentTypeConstraint.SELF)

        if not pathname.is_file():
            msg = f"{reference} is not a file and cannot be required"
            raise NotRequirableError(msg)

        target_type = self._registry.content_type_of(pathname)
        if self._content_type is not None and target_type != self._content_type:
            msg = f"{reference} is '{target_type}', not '{self._content_type}'"
            raise ContentTypeMismatchError(msg)

        self._recorder.add_required(str(pathname))
        return pathname

    def asset_requirable(self, reference: str | PurePath) -> bool:
        """True if *reference* could be required into this file.

        Never changes the dependency set or required paths.
        """
        try:
            pathname = self.resolve(reference)
        except NotFoundError:
            return False
        if not pathname.is_file():
            return False
        return self._content_type is None or self._content_type == self._registry.content_type_of(pathname)

    def evaluate(
        self,
        reference: str | PurePath,
        *,
        data: str | None = None,
        processors: Sequence[Processor] | None = None,
    ) -> str:
        """Process *reference* and return its output.

        Lets a step inline another asset's result::

            data + context.evaluate("bar.js")

        The file is processed in its own nested context; its
        dependencies are not added to this one. Call :meth:`depend_on`
        as well when they should be.
        """
        return self._runner.evaluate(self, reference, data=data, processors=processors).content

    def nested(self, pathname: str | Path) -> Context:
        """Create the child context used to process *pathname*."""
        return Context(
            self._registry,
            self._registry.logical_path_for(pathname),
            pathname,
            runner=self._runner,
            parent=self,
        )
