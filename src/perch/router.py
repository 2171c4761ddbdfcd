"""Resource router: maps a request URL to frontend bytes.

Exactly one strategy runs per request:

    1. Path outside ``<bundled_path>/``  -> unhandled, nothing is consulted
    2. No override                       -> in-memory bundle lookup
    3. ``file:`` override                -> file read in a worker thread
    4. Any other override                -> recognized, not fetched

A bundle miss yields no body while a failed file read yields
``NOT_FOUND_RESPONSE``. Callers tell the two apart, so the asymmetry stays.
"""

import logging
from dataclasses import dataclass
from enum import Enum
from pathlib import Path

import anyio
import anyio.to_thread

from perch.bundle import Bundle
from perch.config import FileOverride, FrontendConfig, NoOverride, RemoteOverride
from perch.errors import PathTraversalError
from perch.files import NOT_FOUND_RESPONSE, file_url_to_path, is_parent, read_file
from perch.mime import DEFAULT_MIME_TYPE, mime_type_for_url
from perch.paths import (
    path_without_params,
    remove_dot_segments,
    request_path,
    starts_with_ci,
    strip_serve_markers,
)

logger = logging.getLogger("perch.router")


class Outcome(Enum):
    """How a request was resolved."""

    UNHANDLED = "unhandled"
    BUNDLED = "bundled"
    BUNDLE_MISS = "bundle_miss"
    FILE = "file"
    FILE_NOT_FOUND = "file_not_found"
    REMOTE_UNSUPPORTED = "remote_unsupported"


@dataclass(frozen=True, slots=True)
class Resolution:
    """Result of resolving one request.

    ``body`` is ``None`` for the empty result (unhandled, bundle miss,
    remote override) and bytes otherwise, including the not-found payload.
    ``path`` is the canonical path the strategy looked up.
    """

    outcome: Outcome
    body: bytes | None = None
    mime_type: str = DEFAULT_MIME_TYPE
    path: str = ""

    @property
    def handled(self) -> bool:
        """False when the URL is not a frontend resource at all."""
        return self.outcome is not Outcome.UNHANDLED


class ResourceRouter:
    """Resolves frontend resource URLs against a bundle or an override root.

    Usage::

        router = ResourceRouter(MemoryBundle.from_directory("out/frontend"))
        resolution = await router.resolve("devtools://devtools/bundled/inspector.html")
        if resolution.body is not None:
            ...

    The router holds no per-request state; one instance serves concurrent
    requests.
    """

    __slots__ = ("_bundle", "_config", "_limiter")

    def __init__(
        self,
        bundle: Bundle,
        config: FrontendConfig | None = None,
        *,
        limiter: anyio.CapacityLimiter | None = None,
    ) -> None:
        self._bundle = bundle
        self._config = config or FrontendConfig()
        self._limiter = limiter  # Created lazily on first file read

    @property
    def config(self) -> FrontendConfig:
        return self._config

    async def resolve(self, url: str) -> Resolution:
        """Resolve *url* to a :class:`Resolution`.

        Raises:
            PathTraversalError: If a file path escapes the override root.
        """
        path = request_path(url)
        mime_type = mime_type_for_url(url)
        prefix = self._config.bundled_prefix

        if not starts_with_ci(path, prefix):
            return Resolution(Outcome.UNHANDLED, mime_type=mime_type)

        normalized = path_without_params(path)
        if not starts_with_ci(normalized, prefix):
            # "bundled/../x" passes the raw check but not this one
            logger.warning("Request path %r leaves %r after normalization", path, prefix)
            return Resolution(Outcome.UNHANDLED, mime_type=mime_type)
        path_under_bundled = normalized[len(prefix) :]

        match self._config.override:
            case NoOverride():
                return self._resolve_bundled(path_under_bundled, mime_type)
            case FileOverride() as override:
                # Already decoded: only the segments exposed by marker stripping are cleaned.
                relative = remove_dot_segments(strip_serve_markers(path_under_bundled))
                return await self._resolve_file(override, relative, mime_type)
            case RemoteOverride(url=remote_url):
                stripped = strip_serve_markers(path_under_bundled)
                logger.warning(
                    "Remote custom frontends are not supported: %s (requested %r)",
                    remote_url,
                    stripped,
                )
                return Resolution(Outcome.REMOTE_UNSUPPORTED, mime_type=mime_type, path=stripped)

    # ------------------------------------------------------------------
    # Strategies
    # ------------------------------------------------------------------

    def _resolve_bundled(self, filename: str, mime_type: str) -> Resolution:
        data = self._bundle.lookup(filename)
        if data is None:
            logger.warning(
                "Unable to find dev tool resource: %s. If the frontend was built "
                "separately, pass --custom-devtools-frontend=file:///path/to/out.",
                filename,
            )
            return Resolution(Outcome.BUNDLE_MISS, mime_type=mime_type, path=filename)
        return Resolution(Outcome.BUNDLED, data, mime_type, filename)

    async def _resolve_file(
        self, override: FileOverride, relative: str, mime_type: str
    ) -> Resolution:
        assert isinstance(override, FileOverride), override
        try:
            base_path = file_url_to_path(override.url)
        except ValueError as exc:
            logger.warning("Unable to find DevTools resource %r: %s", relative, exc)
            return self._file_not_found(relative, mime_type)

        if not relative:
            # Names the override root itself, which is never a readable file
            logger.warning("Unable to find DevTools resource: empty path under %s", base_path)
            return self._file_not_found(relative, mime_type)

        full_path = base_path / relative
        if not is_parent(base_path, full_path):
            raise PathTraversalError(base_path, full_path)

        data = await self._read(full_path)
        if data is None:
            return self._file_not_found(relative, mime_type)
        return Resolution(Outcome.FILE, data, mime_type, relative)

    async def _read(self, path: Path) -> bytes | None:
        if self._limiter is None:
            self._limiter = anyio.CapacityLimiter(self._config.max_file_readers)
        return await anyio.to_thread.run_sync(read_file, path, limiter=self._limiter)

    @staticmethod
    def _file_not_found(path: str, mime_type: str) -> Resolution:
        return Resolution(Outcome.FILE_NOT_FOUND, NOT_FOUND_RESPONSE, mime_type, path)
