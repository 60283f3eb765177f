# roombook/core/cors.py

from typing import Iterable, Optional

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response
from starlette.types import ASGIApp


CORS_HEADERS = {
    "Access-Control-Allow-Methods": "GET, POST, PUT, DELETE, OPTIONS",
    "Access-Control-Allow-Headers": "Content-Type, Authorization",
    "Access-Control-Allow-Credentials": "true",
}


class AllowListCORSMiddleware(BaseHTTPMiddleware):
    """
    Reflects the request origin back only for origins in the allow-list.

    Preflight (OPTIONS) requests are answered here: 204 for an allowed
    origin, 403 otherwise. Other requests always reach the app; responses
    to foreign origins simply carry no CORS headers.
    """

    def __init__(self, app: ASGIApp, allowed_origins: Iterable[str] = ()):
        super().__init__(app)
        self.allowed_origins = frozenset(allowed_origins)

    def is_allowed(self, origin: Optional[str]) -> bool:
        return bool(origin) and origin in self.allowed_origins

    def cors_headers(self, origin: str) -> dict:
        return {**CORS_HEADERS, "Access-Control-Allow-Origin": origin}

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        origin = request.headers.get("origin")

        if request.method == "OPTIONS":
            if self.is_allowed(origin):
                return Response(status_code=204, headers=self.cors_headers(origin))
            return Response(status_code=403)

        response = await call_next(request)
        if self.is_allowed(origin):
            response.headers.update(self.cors_headers(origin))
        return response
