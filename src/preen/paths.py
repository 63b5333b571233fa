"""Path helpers shared by the registry and the context."""

import re
from pathlib import Path

from preen.errors import EncodingError

# Everything up to the first extension-marking dot
_LOGICAL_RE = re.compile(r"^([^.]+)")

_UTF8_BOM = b"\xef\xbb\xbf"


def strip_extensions(path: str) -> str:
    """Return *path* without any file extensions.

    ::

        strip_extensions("application.js.kida")  # "application"
        strip_extensions("lib/jquery.min.js")    # "lib/jquery"

    A path with no leading name segment (``".hidden"``) is returned
    unchanged.
    """
    match = _LOGICAL_RE.match(path)
    return match.group(1) if match else path


def is_relative_reference(reference: str) -> bool:
    """True for ``./foo`` and ``../foo`` style references."""
    return reference in (".", "..") or reference.startswith(("./", "../"))


def read_unicode(path: str | Path, encoding: str = "utf-8") -> str:
    """Read *path* as text, stripping a UTF-8 byte order mark.

    Raises ``EncodingError`` when the bytes are not valid in *encoding*.
    """
    data = Path(path).read_bytes()
    if data.startswith(_UTF8_BOM):
        data = data[len(_UTF8_BOM) :]
    try:
        return data.decode(encoding)
    except UnicodeDecodeError as exc:
        msg = f"{path} has an invalid {encoding} byte sequence"
        raise EncodingError(msg) from exc
