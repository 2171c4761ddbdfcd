"""Request path handling: request-path extraction, normalization, serve-mode prefixes.

Every function here is pure apart from diagnostics on the ``perch.paths``
logger. The router composes them; nothing here touches the filesystem.
"""

import logging
import posixpath
from urllib.parse import unquote, urljoin, urlsplit

logger = logging.getLogger("perch.paths")

# urljoin() only removes dot segments for schemes it knows, so the virtual
# origin borrows http's resolution rules.
_RESOLVE_BASE = "http://devtools/"

SERVE_REV_PREFIX = "serve_rev/"
SERVE_FILE_PREFIX = "serve_file/"
SERVE_INTERNAL_FILE_PREFIX = "serve_internal_file/"

SERVE_MARKERS: tuple[str, ...] = (
    SERVE_REV_PREFIX,
    SERVE_FILE_PREFIX,
    SERVE_INTERNAL_FILE_PREFIX,
)


def starts_with_ci(value: str, prefix: str) -> bool:
    """Case-insensitive ``str.startswith``."""
    return value[: len(prefix)].lower() == prefix.lower()


def request_path(url: str) -> str:
    """Return the request path of *url*: path without leading ``/``, plus query.

    Accepts absolute URLs (``devtools://devtools/bundled/a.js?x``) and
    relative references (``bundled/a.js``). Malformed URLs yield ``""``.
    """
    try:
        parts = urlsplit(url)
    except ValueError:
        logger.debug("Malformed request URL %r", url)
        return ""
    path = parts.path.removeprefix("/")
    if parts.query:
        return f"{path}?{parts.query}"
    return path


def path_without_params(path: str) -> str:
    """Resolve *path* against the virtual origin and return a clean relative path.

    Query and fragment are dropped and dot segments removed. Percent escapes
    and backslashes are decoded first, so ``%2e%2e`` and ``..\\`` count as
    parent references. Escapes are decoded exactly once: ``%252e`` comes out
    as the literal text ``%2e``. The result never has a leading ``/`` and
    never contains a ``..`` segment::

        >>> path_without_params("bundled/../inspector.html?ws=1")
        'inspector.html'
        >>> path_without_params("/a/%2e%2e/%2e%2e/etc/passwd")
        'etc/passwd'

    The output is already decoded, so it must not be passed through here a
    second time. Use :func:`remove_dot_segments` to clean up a decoded path.
    """
    try:
        resolved = urlsplit(urljoin(_RESOLVE_BASE, path.replace("\\", "/"))).path
    except ValueError:
        logger.debug("Malformed request path %r", path)
        return ""
    return remove_dot_segments(unquote(resolved))


def remove_dot_segments(path: str) -> str:
    """Collapse ``.`` and ``..`` segments of a decoded path, clamped at the root.

    No percent decoding happens here. Backslashes count as separators and
    the result has no leading ``/``.
    """
    # normpath keeps a leading "//", so collapse it before normalizing.
    return posixpath.normpath("/" + path.replace("\\", "/").lstrip("/"))[1:]


def strip_serve_prefix(path: str, prefix: str) -> str:
    """Drop *prefix* and the segment that follows it from *path*.

    ``strip_serve_prefix("serve_rev/@abc/main.js", "serve_rev/")`` returns
    ``"main.js"``. The discarded segment must be non-empty; when no ``/``
    follows it the path is returned unchanged. Paths that do not start with
    *prefix* (case-insensitive) pass through untouched.
    """
    if not starts_with_ci(path, prefix):
        return path
    found = path.find("/", len(prefix) + 1)
    if found == -1:
        logger.warning("Unexpected URL format %r, falling back to the original URL", path)
        return path
    return path[found + 1 :]


def strip_serve_markers(path: str) -> str:
    """Apply :func:`strip_serve_prefix` for every serve-mode marker, in order."""
    for prefix in SERVE_MARKERS:
        path = strip_serve_prefix(path, prefix)
    return path
