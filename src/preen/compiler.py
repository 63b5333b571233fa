"""Top-level asset compilation.

Creates the root execution context for one asset, runs its processing
chain, and packages the output together with the dependency bookkeeping
a cache needs. A failed compilation raises; nothing partial is
returned and the bookkeeping gathered so far is dropped.
"""

import hashlib
import logging
import os
from dataclasses import dataclass, field
from pathlib import Path

from preen.context import Context
from preen.processing import ProcessingChainRunner
from preen.registry import Registry

logger = logging.getLogger("preen.compiler")


@dataclass(frozen=True, slots=True)
class CompiledAsset:
    """A successfully compiled asset.

    Attributes:
        logical_path: The reference the asset was compiled for.
        pathname: Absolute path of the source file.
        content_type: Content type of the output.
        source: Processed output.
        digest: SHA-256 hex digest of ``source``.
        dependency_paths: Every file that influenced ``source``.
        required_paths: Assets to include once, before this one.
        mtimes: Modification time of each dependency at compile time.
            Dependencies missing at compile time have no entry.
    """

    logical_path: str
    pathname: Path
    content_type: str | None
    source: str
    digest: str
    dependency_paths: frozenset[str]
    required_paths: tuple[str, ...] = ()
    mtimes: dict[str, float] = field(default_factory=dict)

    @property
    def length(self) -> int:
        return len(self.source.encode("utf-8"))

    def stale_paths(self) -> list[str]:
        """Dependencies that changed or vanished since compilation."""
        stale = []
        for path in sorted(self.dependency_paths):
            try:
                mtime = os.stat(path).st_mtime
            except FileNotFoundError:
                stale.append(path)
                continue
            if mtime != self.mtimes.get(path):
                stale.append(path)
        return stale

    def is_fresh(self) -> bool:
        """True while no dependency has changed since compilation."""
        return not self.stale_paths()


class Compiler:
    """Compiles assets found through a registry.

    Usage::

        registry = Registry.from_config(PipelineConfig(paths=("app/assets",)))
        compiler = Compiler(registry)

        asset = compiler.compile("application.js")
        asset.required_paths    # files to bundle before it
        asset.dependency_paths  # files that invalidate it
    """

    __slots__ = ("_registry", "_runner")

    def __init__(self, registry: Registry, runner: ProcessingChainRunner | None = None) -> None:
        self._registry = registry
        self._runner = runner or ProcessingChainRunner(registry)

    @property
    def registry(self) -> Registry:
        return self._registry

    def compile(self, logical_path: str) -> CompiledAsset:
        """Compile *logical_path*.

        Raises ``NotFoundError`` if it cannot be resolved, and whatever a
        processing step raised, annotated with the failing file.
        """
        pathname = self._registry.resolve(logical_path)
        context = Context(self._registry, logical_path, pathname, runner=self._runner)
        source = self._runner.run(context)
        return self._package(logical_path, context, source)

    def _package(self, logical_path: str, context: Context, source: str) -> CompiledAsset:
        dependency_paths = context.dependency_paths
        mtimes: dict[str, float] = {}
        for path in dependency_paths:
            try:
                mtimes[path] = os.stat(path).st_mtime
            except FileNotFoundError:
                # Absolute references are never checked; no mtime reads as stale
                logger.debug("%s: dependency %s does not exist", logical_path, path)
        asset = CompiledAsset(
            logical_path=logical_path,
            pathname=context.pathname,
            content_type=context.content_type,
            source=source,
            digest=hashlib.sha256(source.encode("utf-8")).hexdigest(),
            dependency_paths=dependency_paths,
            required_paths=context.required_paths,
            mtimes=mtimes,
        )
        logger.debug(
            "%s: %d dependencies, %d required",
            logical_path,
            len(dependency_paths),
            len(asset.required_paths),
        )
        return asset
