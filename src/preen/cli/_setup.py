"""Shared setup for CLI commands: config, logging, registry, errors."""

import argparse
import logging
import sys
from typing import NoReturn

from preen.config import PipelineConfig
from preen.errors import ConfigurationError
from preen.registry import Registry


def build_config(args: argparse.Namespace) -> PipelineConfig:
    """Translate parsed arguments into a ``PipelineConfig``."""
    return PipelineConfig(
        paths=tuple(args.paths),
        directives=not args.no_directives,
        markdown=args.markdown,
        log_level="info" if args.verbose else "warning",
    )


def configure_logging(config: PipelineConfig) -> None:
    logging.basicConfig(
        level=config.log_level.upper(),
        format="%(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )


def build_registry(args: argparse.Namespace) -> Registry:
    """Configure logging and build the registry, exiting on bad config."""
    config = build_config(args)
    configure_logging(config)
    if not config.paths:
        fail(ConfigurationError("at least one search path is required (-I PATH)"))
    try:
        return Registry.from_config(config)
    except ConfigurationError as exc:
        fail(exc)


def fail(exc: BaseException) -> NoReturn:
    """Print *exc* and its location notes to stderr and exit 1."""
    print(f"Error: {exc}", file=sys.stderr)
    for note in getattr(exc, "__notes__", ()):
        print(note, file=sys.stderr)
    raise SystemExit(1) from exc
