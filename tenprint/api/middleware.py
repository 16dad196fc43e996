"""Middleware for the ``/svg`` route: CORS headers and a method guard."""

from collections.abc import Awaitable, Callable

from fastapi import Request, Response, status
from fastapi.responses import PlainTextResponse

from tenprint.config.models import CORSConfig

Middleware = Callable[
    [Request, Callable[[Request], Awaitable[Response]]], Awaitable[Response]
]


def cors_headers_middleware(path: str, cors: CORSConfig) -> Middleware:
    """Add permissive CORS headers to every response under ``path``.

    Headers are set whether or not the request carries an Origin, so cached
    responses are usable cross-origin.
    """
    headers = {
        "Access-Control-Allow-Origin": cors.allow_origin,
        "Access-Control-Allow-Methods": ", ".join(cors.allow_methods),
        "Access-Control-Expose-Headers": ", ".join(cors.expose_headers),
        "Access-Control-Max-Age": str(cors.max_age),
    }

    async def middleware(
        request: Request, call_next: Callable[[Request], Awaitable[Response]]
    ) -> Response:
        response = await call_next(request)
        if request.url.path == path:
            response.headers.update(headers)
        return response

    return middleware


def method_guard_middleware(path: str, methods: list[str]) -> Middleware:
    """Answer 405 with an Allow header for methods ``path`` doesn't support."""
    allowed = [method.upper() for method in methods]
    allow_header = ", ".join(allowed)

    async def middleware(
        request: Request, call_next: Callable[[Request], Awaitable[Response]]
    ) -> Response:
        if request.url.path == path and request.method.upper() not in allowed:
            return PlainTextResponse(
                "Method Not Allowed",
                status_code=status.HTTP_405_METHOD_NOT_ALLOWED,
                headers={"Allow": allow_header},
            )
        return await call_next(request)

    return middleware
