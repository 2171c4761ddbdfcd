"""Content-type classification by file extension.

The frontend only ships a handful of file types, so a fixed table is used
instead of ``mimetypes``: the platform registry varies between machines
(``.ts`` is MPEG transport stream on many of them).
"""

import posixpath
from urllib.parse import urlsplit

DEFAULT_MIME_TYPE = "text/html"

# Checked in order; first matching suffix wins.
_MIME_TABLE: tuple[tuple[tuple[str, ...], str], ...] = (
    ((".html",), "text/html"),
    ((".css",), "text/css"),
    ((".js", ".mjs"), "application/javascript"),
    ((".png",), "image/png"),
    ((".map",), "application/json"),
    ((".ts",), "application/x-typescript"),
    ((".gif",), "image/gif"),
    ((".svg",), "image/svg+xml"),
    ((".manifest",), "text/cache-manifest"),
)


def mime_type_for_filename(filename: str) -> str:
    """Classify *filename* by its case-insensitive extension."""
    lowered = filename.lower()
    for suffixes, mime_type in _MIME_TABLE:
        if lowered.endswith(suffixes):
            return mime_type
    return DEFAULT_MIME_TYPE


def mime_type_for_url(url: str) -> str:
    """Classify the last path segment of *url*. Query and fragment are ignored."""
    try:
        path = urlsplit(url).path
    except ValueError:
        return DEFAULT_MIME_TYPE
    return mime_type_for_filename(posixpath.basename(path))
