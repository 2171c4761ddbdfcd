"""Typed ASGI definitions.

Replaces the standard Scope = MutableMapping[str, Any] with a typed
dataclass for internal use. Users never see these.
"""

from collections.abc import Awaitable, Callable, MutableMapping
from dataclasses import dataclass
from typing import Any, TypeAlias
from urllib.parse import quote

# Raw ASGI types (matching the spec)
Scope: TypeAlias = MutableMapping[str, Any]
Receive: TypeAlias = Callable[[], Awaitable[MutableMapping[str, Any]]]
Send: TypeAlias = Callable[[MutableMapping[str, Any]], Awaitable[None]]
ASGIApp: TypeAlias = Callable[[Scope, Receive, Send], Awaitable[None]]


@dataclass(frozen=True, slots=True)
class HTTPScope:
    """Typed HTTP scope parsed from raw ASGI scope dict.

    Internal only -- the frontend app reads the request URL from this.
    """

    type: str
    method: str
    path: str
    raw_path: bytes | None
    query_string: bytes
    root_path: str

    @classmethod
    def from_scope(cls, scope: Scope) -> "HTTPScope":
        """Parse raw ASGI scope into typed object."""
        return cls(
            type=scope["type"],
            method=scope["method"],
            path=scope["path"],
            raw_path=scope.get("raw_path"),
            query_string=scope.get("query_string", b""),
            root_path=scope.get("root_path", ""),
        )

    @property
    def request_url(self) -> str:
        """Still-encoded path relative to ``root_path`` plus query string.

        Built from ``raw_path`` when the server provides it, so escapes such
        as ``%3F`` reach the router intact. Without it the decoded ``path``
        is re-quoted.
        """
        if self.raw_path is not None:
            path = self.raw_path.decode("latin-1")
        else:
            path = quote(self.path, safe="/:@!$&'()*+,;=~")
        root_path = quote(self.root_path)
        if root_path and path.startswith(root_path):
            path = path[len(root_path) :] or "/"
        if self.query_string:
            return f"{path}?{self.query_string.decode('latin-1')}"
        return path
