"""ASGI adapter for the resource router.

Mount ``FrontendApp`` under any ASGI server, or put it in front of an
existing application: requests the router does not handle fall through to
``fallback``, the same way static-file middleware falls through to the
next handler.
"""

import logging

from perch._internal.asgi import ASGIApp, HTTPScope, Receive, Scope, Send
from perch.http.response import Response
from perch.router import Outcome, Resolution, ResourceRouter
from perch.server.sender import send_response

logger = logging.getLogger("perch.server")

# Frontend resources change on every rebuild of an override directory.
CACHE_CONTROL = "no-cache"


class FrontendApp:
    """ASGI application serving frontend resources.

    Usage::

        router = ResourceRouter(bundle, FrontendConfig.from_command_line())
        app = FrontendApp(router)

        # In front of another ASGI app
        app = FrontendApp(router, fallback=other_app)

    Responses carry the resource's mime type as ``Content-Type`` and no
    ``Content-Security-Policy`` or ``X-Frame-Options`` header, so the
    frontend can be framed by its host page.
    """

    __slots__ = ("_fallback", "_router")

    def __init__(self, router: ResourceRouter, *, fallback: ASGIApp | None = None) -> None:
        self._router = router
        self._fallback = fallback

    @property
    def router(self) -> ResourceRouter:
        return self._router

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] != "http":
            await self._handle_other(scope, receive, send)
            return

        http_scope = HTTPScope.from_scope(scope)
        if http_scope.method not in ("GET", "HEAD"):
            await self._fall_through(scope, receive, send)
            return

        resolution = await self._router.resolve(http_scope.request_url)
        if not resolution.handled:
            await self._fall_through(scope, receive, send)
            return

        response = build_response(resolution)
        logger.debug(
            "%s %s -> %s (%s)",
            http_scope.method,
            http_scope.request_url,
            resolution.outcome.value,
            response.status,
        )
        await send_response(response, send, head=http_scope.method == "HEAD")

    async def _fall_through(self, scope: Scope, receive: Receive, send: Send) -> None:
        if self._fallback is not None:
            await self._fallback(scope, receive, send)
            return
        await send_response(Response(b"Not Found", status=404, content_type="text/plain"), send)

    async def _handle_other(self, scope: Scope, receive: Receive, send: Send) -> None:
        if self._fallback is not None:
            await self._fallback(scope, receive, send)
            return
        if scope["type"] != "lifespan":
            return
        while True:
            message = await receive()
            if message["type"] == "lifespan.startup":
                await send({"type": "lifespan.startup.complete"})
            elif message["type"] == "lifespan.shutdown":
                await send({"type": "lifespan.shutdown.complete"})
                return


def build_response(resolution: Resolution) -> Response:
    """Map a handled resolution onto an HTTP response.

    Found resources are served with status 200. A failed override read
    keeps its not-found payload as the body of a 404; an empty result is
    an empty 404.
    """
    response = Response(
        resolution.body or b"",
        content_type=resolution.mime_type,
    ).with_header("Cache-Control", CACHE_CONTROL)
    if resolution.outcome in (Outcome.BUNDLED, Outcome.FILE):
        return response
    return response.with_status(404)
