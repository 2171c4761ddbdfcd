"""Bundled frontend resources.

A bundle maps canonical filenames (``inspector.html``,
``panels/timeline/timeline.js``) to immutable bytes. The router only needs
``lookup()``; anything with that method can stand in for the packaged set.
"""

import logging
from collections.abc import Iterator, Mapping
from pathlib import Path
from types import MappingProxyType
from typing import Protocol, runtime_checkable

logger = logging.getLogger("perch.bundle")


@runtime_checkable
class Bundle(Protocol):
    """Read-only lookup of bundled resources. Safe for concurrent reads."""

    def lookup(self, name: str) -> bytes | None: ...


class MemoryBundle:
    """A bundle held entirely in memory.

    Usage::

        bundle = MemoryBundle({"inspector.html": b"<!doctype html>"})
        bundle.lookup("inspector.html")

        # Or snapshot a build output directory at startup
        bundle = MemoryBundle.from_directory("out/devtools_frontend")
    """

    __slots__ = ("_resources",)

    def __init__(self, resources: Mapping[str, bytes] | None = None) -> None:
        self._resources: Mapping[str, bytes] = MappingProxyType(
            {name: bytes(data) for name, data in (resources or {}).items()}
        )

    @classmethod
    def from_directory(cls, directory: str | Path) -> "MemoryBundle":
        """Load every regular file under *directory*, keyed by POSIX relative path."""
        root = Path(directory)
        if not root.is_dir():
            raise NotADirectoryError(f"Bundle directory not found: {root}")
        resources = {
            path.relative_to(root).as_posix(): path.read_bytes()
            for path in sorted(root.rglob("*"))
            if path.is_file()
        }
        logger.debug("Loaded %d bundled resources from %s", len(resources), root)
        return cls(resources)

    def lookup(self, name: str) -> bytes | None:
        return self._resources.get(name)

    def __contains__(self, name: object) -> bool:
        return name in self._resources

    def __iter__(self) -> Iterator[str]:
        return iter(self._resources)

    def __len__(self) -> int:
        return len(self._resources)
