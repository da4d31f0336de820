from contextvars import ContextVar, Token
from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class RequestContext:
    request_id: str | None = None
    route: str | None = None
    client_ip: str | None = None


_REQUEST: ContextVar[RequestContext] = ContextVar("request", default=RequestContext())
_REDIS: ContextVar[Any] = ContextVar("redis", default=None)


def bind_request(context: RequestContext, redis_client: Any = None) -> tuple[Token, Token]:
    return _REQUEST.set(context), _REDIS.set(redis_client)


def unbind_request(tokens: tuple[Token, Token]) -> None:
    request_token, redis_token = tokens
    _REDIS.reset(redis_token)
    _REQUEST.reset(request_token)


def current_request() -> RequestContext:
    return _REQUEST.get()


def get_request_id() -> str | None:
    return _REQUEST.get().request_id


def get_redis() -> Any:
    return _REDIS.get()
