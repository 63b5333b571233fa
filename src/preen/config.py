"""Pipeline configuration.

PipelineConfig is a frozen dataclass — immutable after creation, no
string-key dict lookups.
"""

from dataclasses import dataclass
from pathlib import Path


@dataclass(frozen=True, slots=True)
class PipelineConfig:
    """Pipeline configuration. Immutable after creation.

    Override what you need::

        config = PipelineConfig(paths=("app/javascripts", "vendor/assets"))
    """

    # Search roots, in priority order
    paths: tuple[str | Path, ...] = ()

    # Source files
    encoding: str = "utf-8"

    # Processors
    directives: bool = True  # //= require headers in JavaScript and CSS
    markdown: bool = False  # .md / .markdown engines (pip install preen[markdown])
    markdown_plugins: tuple[str, ...] = ()  # Empty = all patitas plugins
    kida_trim_blocks: bool = False
    kida_lstrip_blocks: bool = False

    # Logging (applied by the CLI only; the library never configures handlers)
    log_level: str = "warning"
