"""Preen — asset resolution and dependency tracking for build pipelines.

Finds source files on a search path, runs them through processing
steps, and records every file that influenced the output so a cache can
tell when it goes stale.

Basic usage::

    from preen import Compiler, PipelineConfig, Registry

    registry = Registry.from_config(PipelineConfig(paths=("app/assets",)))
    asset = Compiler(registry).compile("application.js")

    asset.source            # processed output
    asset.required_paths    # files to include once, before it
    asset.dependency_paths  # files that invalidate it

Processing steps receive a :class:`Context`::

    def banner(context, data):
        context.depend_on("LICENSE.txt")
        return f"/* {context.logical_path} */\\n{data}"
"""

__version__ = "0.1.0"
__all__ = [
    "CompiledAsset",
    "Compiler",
    "ContentTypeConstraint",
    "ContentTypeMismatchError",
    "Context",
    "NotFoundError",
    "NotRequirableError",
    "PipelineConfig",
    "PreenError",
    "ProcessingChainRunner",
    "Processor",
    "Registry",
]


def __getattr__(name: str) -> object:
    """Lazy imports for public API.

    Keeps ``import preen`` fast while providing a clean top-level API.
    """
    if name in ("Compiler", "CompiledAsset"):
        from preen import compiler as _compiler

        return getattr(_compiler, name)

    if name == "Context":
        from preen.context import Context

        return Context

    if name == "ContentTypeConstraint":
        from preen.resolver import ContentTypeConstraint

        return ContentTypeConstraint

    if name == "PipelineConfig":
        from preen.config import PipelineConfig

        return PipelineConfig

    if name in ("ProcessingChainRunner", "Processor"):
        from preen import processing as _processing

        return getattr(_processing, name)

    if name == "Registry":
        from preen.registry import Registry

        return Registry

    if name in ("ContentTypeMismatchError", "NotFoundError", "NotRequirableError", "PreenError"):
        from preen import errors as _errors

        return getattr(_errors, name)

    msg = f"module {__name__!r} has no attribute {name!r}"
    raise AttributeError(msg)
