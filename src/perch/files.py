"""Filesystem side of the custom-frontend override.

``read_file`` blocks. The router runs it in a worker thread, never on the
event loop.
"""

import logging
import os
from pathlib import Path
from urllib.parse import urlsplit
from urllib.request import url2pathname

logger = logging.getLogger("perch.files")

# Payload served when an override file cannot be produced.
NOT_FOUND_RESPONSE = b"HTTP/1.1 404 Not Found\n\n"

_LOCAL_HOSTS = frozenset({"", "localhost"})


def file_url_to_path(url: str) -> Path:
    """Convert a ``file:`` URL to a local path.

    Raises:
        ValueError: If *url* is not a ``file:`` URL, names a remote host,
            or has no path.
    """
    parts = urlsplit(url)
    if parts.scheme.lower() != "file":
        raise ValueError(f"Not a file URL: {url!r}")
    if parts.netloc.lower() not in _LOCAL_HOSTS:
        raise ValueError(f"File URL names a remote host: {url!r}")
    if not parts.path:
        raise ValueError(f"File URL has no path: {url!r}")
    return Path(url2pathname(parts.path))


def is_parent(parent: Path, child: Path) -> bool:
    """True if *parent* is a strict ancestor of *child*.

    Purely lexical: ``..`` segments are collapsed, symlinks are not
    followed, and a path is not its own parent.
    """
    parent_norm = Path(os.path.normpath(parent))
    child_norm = Path(os.path.normpath(child))
    return child_norm != parent_norm and child_norm.is_relative_to(parent_norm)


def read_file(path: Path) -> bytes | None:
    """Read *path* fully. Returns ``None`` if it is missing or unreadable."""
    try:
        return path.read_bytes()
    except (OSError, ValueError) as exc:
        # ValueError: embedded NUL in the path
        logger.error("Failed to read %s: %s", path, exc)
        return None
