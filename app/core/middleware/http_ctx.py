import uuid
from fastapi import Request
from starlette.middleware.base import BaseHTTPMiddleware
from app.core.ctx import RequestContext, bind_request, unbind_request


def client_ip(request: Request) -> str | None:
    forwarded = request.headers.get("x-forwarded-for")
    if forwarded:
        return forwarded.split(",")[0].strip()
    return request.client.host if request.client else None


def http_route(request: Request) -> str:
    return f"{request.method} {request.url.path}"


class HttpContextMiddleware(BaseHTTPMiddleware):
    """Binds the request id, route, client address and the app's Redis client for the duration of a request."""

    def __init__(self, app, request_id_header: str = "X-Request-ID"):
        super().__init__(app)
        self.request_id_header = request_id_header

    async def dispatch(self, request: Request, call_next):
        request_id = request.headers.get(self.request_id_header) or uuid.uuid4().hex
        context = RequestContext(request_id=request_id, route=http_route(request), client_ip=client_ip(request))
        tokens = bind_request(context, getattr(request.app.state, "redis", None))
        try:
            response = await call_next(request)
        finally:
            unbind_request(tokens)
        response.headers.setdefault(self.request_id_header, request_id)
        return response
